# topmark:header:start
#
#   project      : DeployKit
#   file         : model.py
#   file_relpath : src/deploykit/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed sub-configuration objects bound from the extension block.

Every class here is an immutable dataclass with a ``BLOCK_FIELDS`` table that
drives [`deploykit.config.binding.bind_block`][deploykit.config.binding.bind_block].
Block keys are snake_case; a key may bind to a differently named attribute
(``from`` -> ``from_``) when the key is a Python keyword.

The extension core does not interpret these objects: it only decides when they
are built and when they replace one another. Consumers (build and deploy
orchestration) read their fields.

Example block (``deploykit.toml``):

```toml
[kubernetes.access]
namespace = "default"

[kubernetes.enricher]
excludes = ["deploykit-expose"]

[kubernetes.images.app]
name = "registry/image:tag"

[kubernetes.images.app.build]
from = "busybox"
ports = ["8080"]
```
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from deploykit.config.binding import (
    BlockField,
    as_bool,
    as_int,
    as_nested_str_map,
    as_path,
    as_str,
    as_str_list,
    as_str_map,
    nested,
    nested_list,
)

if TYPE_CHECKING:
    from pathlib import Path


# ------------------ Cluster access ------------------


@dataclass(frozen=True)
class ClusterConfiguration:
    """Connection settings for the target cluster (``[kubernetes.access]``)."""

    username: str | None = None
    password: str | None = None
    master_url: str | None = None
    api_version: str | None = None
    namespace: str | None = None
    ca_cert_file: str | None = None
    ca_cert_data: str | None = None
    client_cert_file: str | None = None
    client_cert_data: str | None = None
    client_key_file: str | None = None
    client_key_data: str | None = None
    client_key_algo: str | None = None
    client_key_passphrase: str | None = None
    trust_certs: bool | None = None
    http_proxy: str | None = None
    https_proxy: str | None = None
    no_proxy: tuple[str, ...] = ()
    request_timeout: int | None = None
    connection_timeout: int | None = None

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "username": BlockField("username", as_str),
        "password": BlockField("password", as_str),
        "master_url": BlockField("master_url", as_str),
        "api_version": BlockField("api_version", as_str),
        "namespace": BlockField("namespace", as_str),
        "ca_cert_file": BlockField("ca_cert_file", as_str),
        "ca_cert_data": BlockField("ca_cert_data", as_str),
        "client_cert_file": BlockField("client_cert_file", as_str),
        "client_cert_data": BlockField("client_cert_data", as_str),
        "client_key_file": BlockField("client_key_file", as_str),
        "client_key_data": BlockField("client_key_data", as_str),
        "client_key_algo": BlockField("client_key_algo", as_str),
        "client_key_passphrase": BlockField("client_key_passphrase", as_str),
        "trust_certs": BlockField("trust_certs", as_bool),
        "http_proxy": BlockField("http_proxy", as_str),
        "https_proxy": BlockField("https_proxy", as_str),
        "no_proxy": BlockField("no_proxy", as_str_list),
        "request_timeout": BlockField("request_timeout", as_int),
        "connection_timeout": BlockField("connection_timeout", as_int),
    }


# ------------------ Resources ------------------


@dataclass(frozen=True)
class ConfigMapEntry:
    """One entry of a generated ConfigMap: inline ``value`` or content of ``file``."""

    name: str | None = None
    value: str | None = None
    file: str | None = None

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "name": BlockField("name", as_str),
        "value": BlockField("value", as_str),
        "file": BlockField("file", as_str),
    }


@dataclass(frozen=True)
class ConfigMap:
    """ConfigMap generated alongside the application resources."""

    name: str | None = None
    entries: tuple[ConfigMapEntry, ...] = ()

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "name": BlockField("name", as_str),
        "entries": BlockField("entries", nested_list(ConfigMapEntry)),
    }


@dataclass(frozen=True)
class ResourceConfig:
    """Resource generation settings (``[kubernetes.resources]``)."""

    controller_name: str | None = None
    replicas: int | None = None
    service_account: str | None = None
    image_pull_policy: str | None = None
    namespace: str | None = None
    env: Mapping[str, str] = field(default_factory=dict)
    labels: Mapping[str, str] = field(default_factory=dict)
    annotations: Mapping[str, str] = field(default_factory=dict)
    config_map: ConfigMap | None = None
    remotes: tuple[str, ...] = ()

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "controller_name": BlockField("controller_name", as_str),
        "replicas": BlockField("replicas", as_int),
        "service_account": BlockField("service_account", as_str),
        "image_pull_policy": BlockField("image_pull_policy", as_str),
        "namespace": BlockField("namespace", as_str),
        "env": BlockField("env", as_str_map),
        "labels": BlockField("labels", as_str_map),
        "annotations": BlockField("annotations", as_str_map),
        "config_map": BlockField("config_map", nested(ConfigMap)),
        "remotes": BlockField("remotes", as_str_list),
    }


# ------------------ Enricher / generator rules ------------------


@dataclass(frozen=True)
class ProcessorConfig:
    """Include/exclude rules and options for enrichers or generators.

    Attributes:
        includes (tuple[str, ...]): Processors to run, in order. Empty means all.
        excludes (tuple[str, ...]): Processors to skip.
        config (Mapping[str, Mapping[str, str]]): Per-processor options.
    """

    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    config: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "includes": BlockField("includes", as_str_list),
        "excludes": BlockField("excludes", as_str_list),
        "config": BlockField("config", as_nested_str_map),
    }


# ------------------ Images ------------------


@dataclass(frozen=True)
class AssemblyFile:
    """A file or directory copied into an assembly layer."""

    source: Path | None = None
    output_directory: Path | None = None

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "source": BlockField("source", as_path),
        "output_directory": BlockField("output_directory", as_path),
    }


@dataclass(frozen=True)
class AssemblyLayer:
    """One image layer of an assembly."""

    id: str | None = None
    files: tuple[AssemblyFile, ...] = ()

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "id": BlockField("id", as_str),
        "files": BlockField("files", nested_list(AssemblyFile)),
    }


@dataclass(frozen=True)
class AssemblyConfiguration:
    """Files added to the image on top of its base."""

    name: str | None = None
    target_dir: str | None = None
    layers: tuple[AssemblyLayer, ...] = ()

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "name": BlockField("name", as_str),
        "target_dir": BlockField("target_dir", as_str),
        "layers": BlockField("layers", nested_list(AssemblyLayer)),
    }


@dataclass(frozen=True)
class BuildConfiguration:
    """How an image is built."""

    from_: str | None = None
    tags: tuple[str, ...] = ()
    ports: tuple[str, ...] = ()
    env: Mapping[str, str] = field(default_factory=dict)
    labels: Mapping[str, str] = field(default_factory=dict)
    cmd: str | None = None
    workdir: str | None = None
    user: str | None = None
    assembly: AssemblyConfiguration | None = None

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "from": BlockField("from_", as_str),
        "tags": BlockField("tags", as_str_list),
        "ports": BlockField("ports", as_str_list),
        "env": BlockField("env", as_str_map),
        "labels": BlockField("labels", as_str_map),
        "cmd": BlockField("cmd", as_str),
        "workdir": BlockField("workdir", as_str),
        "user": BlockField("user", as_str),
        "assembly": BlockField("assembly", nested(AssemblyConfiguration)),
    }


@dataclass(frozen=True)
class ImageConfiguration:
    """One image to build and push."""

    name: str | None = None
    alias: str | None = None
    registry: str | None = None
    build: BuildConfiguration | None = None

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "name": BlockField("name", as_str),
        "alias": BlockField("alias", as_str),
        "registry": BlockField("registry", as_str),
        "build": BlockField("build", nested(BuildConfiguration)),
    }


# ------------------ Image build backend ------------------


@dataclass(frozen=True)
class MachineConfiguration:
    """Docker machine used when no local daemon is reachable."""

    name: str | None = None
    auto_create: bool | None = None
    regenerate_cert_after_upgrade: bool | None = None
    create_options: Mapping[str, str] = field(default_factory=dict)

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "name": BlockField("name", as_str),
        "auto_create": BlockField("auto_create", as_bool),
        "regenerate_cert_after_upgrade": BlockField("regenerate_cert_after_upgrade", as_bool),
        "create_options": BlockField("create_options", as_str_map),
    }


@dataclass(frozen=True)
class RegistryAuthConfiguration:
    """Credentials for pulling from and pushing to registries."""

    username: str | None = None
    password: str | None = None
    email: str | None = None
    auth_token: str | None = None
    push: Mapping[str, str] = field(default_factory=dict)
    pull: Mapping[str, str] = field(default_factory=dict)

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "username": BlockField("username", as_str),
        "password": BlockField("password", as_str),
        "email": BlockField("email", as_str),
        "auth_token": BlockField("auth_token", as_str),
        "push": BlockField("push", as_str_map),
        "pull": BlockField("pull", as_str_map),
    }


# ------------------ Resource fragment mappings ------------------


@dataclass(frozen=True)
class MappingConfig:
    """Maps resource fragment file names to a resource kind.

    Attributes:
        kind (str | None): Resource kind, e.g. ``"ConfigMap"``.
        filename_types (str | None): Comma-separated file name stems, e.g. ``"cm, configmap"``.
        api_version (str | None): API version of the kind.
    """

    kind: str | None = None
    filename_types: str | None = None
    api_version: str | None = None

    BLOCK_FIELDS: ClassVar[Mapping[str, BlockField]] = {
        "kind": BlockField("kind", as_str),
        "filename_types": BlockField("filename_types", as_str),
        "api_version": BlockField("api_version", as_str),
    }

    @property
    def filenames(self) -> tuple[str, ...]:
        """File name stems parsed from ``filename_types`` (blank entries dropped)."""
        if not self.filename_types:
            return ()
        return tuple(s.strip() for s in self.filename_types.split(",") if s.strip())
