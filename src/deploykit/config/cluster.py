# topmark:header:start
#
#   project      : DeployKit
#   file         : cluster.py
#   file_relpath : src/deploykit/config/cluster.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Cluster-type probing used by manifest selection.

The extension never talks to a cluster itself. It receives a client object and
a `ClusterProbe` deciding whether that client points at a cluster flavour the
Kubernetes manifests were not generated for.
"""

from __future__ import annotations

from typing import Final, Protocol, runtime_checkable

OPENSHIFT_PROJECT_API_GROUP: Final[str] = "project.openshift.io"


@runtime_checkable
class ClusterClient(Protocol):
    """Minimal view of a cluster client: API group discovery."""

    def supports_api_group(self, group: str) -> bool:
        """Return True if the cluster serves the given API group."""
        ...


class ClusterProbe(Protocol):
    """Decides whether a client targets an incompatible cluster type."""

    def is_incompatible_cluster_type(self, client: object) -> bool:
        """Return True if ``client`` talks to a cluster the manifests do not target."""
        ...


class OpenShiftProbe:
    """Flags OpenShift clusters, detected through the ``project.openshift.io`` API group.

    Clients that do not implement `ClusterClient` are treated as plain Kubernetes.
    """

    def is_incompatible_cluster_type(self, client: object) -> bool:
        """Return True when the client serves the OpenShift project API group."""
        if isinstance(client, ClusterClient):
            return client.supports_api_group(OPENSHIFT_PROJECT_API_GROUP)
        return False


class StaticProbe:
    """Probe returning a fixed answer (offline use and ``--openshift`` in the CLI)."""

    def __init__(self, incompatible: bool) -> None:
        self.incompatible = incompatible

    def is_incompatible_cluster_type(self, client: object) -> bool:
        """Return the configured answer, ignoring ``client``."""
        return self.incompatible
