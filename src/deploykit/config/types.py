# topmark:header:start
#
#   project      : DeployKit
#   file         : types.py
#   file_relpath : src/deploykit/config/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Lightweight config types and enumerations.

This module hosts stable, import-friendly definitions that other config modules
can depend on without risk of circular imports. Keep it free of side effects.

Enumerations whose member *names* are the tokens users write (``jib``,
``yaml``) keep lower-case member names on purpose: property overrides are
parsed by exact member name.
"""

from __future__ import annotations

from enum import Enum


class BuildStrategy(str, Enum):
    """Strategy used to build container images."""

    docker = "Docker daemon build"
    s2i = "OpenShift source-to-image build"
    jib = "Daemonless Jib build"
    buildpacks = "Cloud Native Buildpacks build"

    @classmethod
    def from_name(cls, key_name: str | None) -> BuildStrategy | None:
        """Return the member with exactly this name, or None if unmatched.

        Args:
            key_name (str | None): Member name (e.g. ``"jib"``) or None.

        Returns:
            BuildStrategy | None: The matching member or None.
        """
        if key_name is None:
            return None
        return cls.__members__.get(key_name)


class ResourceFileType(str, Enum):
    """Serialization format of generated resource descriptors."""

    yaml = "yml"
    json = "json"

    @classmethod
    def from_name(cls, key_name: str | None) -> ResourceFileType | None:
        """Return the member with exactly this name, or None if unmatched."""
        if key_name is None:
            return None
        return cls.__members__.get(key_name)


class RuntimeMode(str, Enum):
    """Cluster flavour the deployment targets."""

    KUBERNETES = "kubernetes"
    OPENSHIFT = "openshift"


class PlatformMode(str, Enum):
    """Platform used for resource generation."""

    kubernetes = "kubernetes"
    openshift = "openshift"


class ResourceClassifier(str, Enum):
    """Classifier of the resource manifests produced by the extension."""

    KUBERNETES = "kubernetes"
    OPENSHIFT = "openshift"
    KUBERNETES_TEMPLATE = "k8s-template"
