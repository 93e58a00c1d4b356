# topmark:header:start
#
#   project      : DeployKit
#   file         : test_extension_blocks.py
#   file_relpath : tests/config/test_extension_blocks.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the structured-block mutators and manifest selection."""

from __future__ import annotations

import logging

import pytest

from deploykit.config import BindingError
from deploykit.config.cluster import OPENSHIFT_PROJECT_API_GROUP, OpenShiftProbe, StaticProbe
from deploykit.config.model import ImageConfiguration, MappingConfig
from tests.conftest import BASE_DIR, make_extension, mark_config

OPENSHIFT_WARNINGS = [
    "OpenShift cluster detected, using Kubernetes manifests",
    "Switch to the openshift extension in case there are any problems",
]


class FakeClient:
    """Cluster client stub answering API group discovery."""

    def __init__(self, *groups: str) -> None:
        self.groups = set(groups)

    def supports_api_group(self, group: str) -> bool:
        return group in self.groups


@mark_config
def test_single_blocks_replace_previous_values() -> None:
    """A second `configure_access` replaces the first one wholesale."""
    ext = make_extension()
    assert ext.access is None
    ext.configure_access({"namespace": "a", "username": "u"})
    ext.configure_access({"namespace": "b"})
    assert ext.access is not None
    assert ext.access.namespace == "b"
    assert ext.access.username is None


@mark_config
def test_each_single_block_lands_in_its_field() -> None:
    """Every single-block mutator fills its own field."""
    ext = make_extension()
    ext.configure_resources({"replicas": 3})
    ext.configure_enricher({"excludes": ["deploykit-expose"]})
    ext.configure_generator({"includes": ["spring-boot"]})
    ext.configure_machine({"name": "default", "auto_create": True})
    ext.configure_auth_config({"username": "bot", "push": {"username": "pusher"}})

    assert ext.resources is not None and ext.resources.replicas == 3
    assert ext.enricher is not None and ext.enricher.excludes == ("deploykit-expose",)
    assert ext.generator is not None and ext.generator.includes == ("spring-boot",)
    assert ext.machine is not None and ext.machine.auto_create is True
    assert ext.auth_config is not None and ext.auth_config.push == {"username": "pusher"}


@mark_config
def test_failed_binding_keeps_previous_value() -> None:
    """A block that does not bind leaves the field untouched."""
    ext = make_extension()
    ext.configure_enricher({"includes": ["a"]})
    with pytest.raises(BindingError) as excinfo:
        ext.configure_enricher({"includes": ["b"], "excluded": ["typo"]})
    assert excinfo.value.path == "kubernetes.enricher"
    assert ext.enricher is not None and ext.enricher.includes == ("a",)


@mark_config
def test_add_image_creates_list_lazily() -> None:
    """Images are None until declared; `add_image` creates the list."""
    ext = make_extension()
    assert ext.images is None
    ext.add_image({"name": "first"})
    ext.add_image({"name": "second"})
    assert ext.images == [ImageConfiguration(name="first"), ImageConfiguration(name="second")]


@mark_config
def test_configure_images_replaces_appended_entries() -> None:
    """The plural form discards everything appended before it."""
    ext = make_extension()
    ext.add_image({"name": "first"})
    ext.configure_images({"only": {"name": "only"}})
    ext.add_image({"name": "after"})
    assert ext.images is not None
    assert [i.name for i in ext.images] == ["only", "after"]


@mark_config
def test_configure_images_map_and_list_agree() -> None:
    """Named-table and array forms produce equal image lists."""
    by_map = make_extension()
    by_map.configure_images({"a": {"name": "a", "alias": "x"}, "b": {"name": "b"}})
    by_list = make_extension()
    by_list.configure_images([{"name": "a", "alias": "x"}, {"name": "b"}])
    assert by_map.images == by_list.images


@mark_config
def test_configure_images_empty_table_means_no_images() -> None:
    """An empty plural block yields an empty (not None) list."""
    ext = make_extension()
    ext.configure_images({})
    assert ext.images == []


@mark_config
def test_mappings_follow_the_same_policy() -> None:
    """Mappings append lazily and the plural form replaces."""
    ext = make_extension()
    assert ext.mappings is None
    ext.add_mapping({"kind": "ConfigMap", "filename_types": "cm"})
    ext.configure_mappings([{"kind": "Secret", "filename_types": "secret, sec"}])
    ext.add_mapping({"kind": "Route"})
    assert ext.mappings == [
        MappingConfig(kind="Secret", filename_types="secret, sec"),
        MappingConfig(kind="Route"),
    ]


@mark_config
def test_add_image_error_path() -> None:
    """Errors from the singular form point at ``kubernetes.image``."""
    ext = make_extension()
    with pytest.raises(BindingError) as excinfo:
        ext.add_image({"nam": "typo"})
    assert excinfo.value.path == "kubernetes.image"
    assert ext.images is None


# ------------------ Manifest selection ------------------


@mark_config
def test_manifest_on_kubernetes_cluster_logs_nothing(caplog: pytest.LogCaptureFixture) -> None:
    """A plain Kubernetes cluster selects the manifest silently."""
    ext = make_extension()
    log = logging.getLogger("test.manifest")
    with caplog.at_level(logging.WARNING, logger="test.manifest"):
        manifest = ext.get_manifest(FakeClient("apps"), log=log)
    assert manifest == ext.kubernetes_manifest_or_default()
    assert caplog.records == []


@mark_config
def test_manifest_on_openshift_cluster_warns_twice(caplog: pytest.LogCaptureFixture) -> None:
    """An OpenShift cluster yields two warnings and the same manifest path."""
    ext = make_extension()
    log = logging.getLogger("test.manifest")
    with caplog.at_level(logging.WARNING, logger="test.manifest"):
        manifest = ext.get_manifest(FakeClient(OPENSHIFT_PROJECT_API_GROUP), log=log)
    assert manifest == ext.kubernetes_manifest_or_default()
    assert [r.getMessage() for r in caplog.records] == OPENSHIFT_WARNINGS
    assert all(r.levelno == logging.WARNING for r in caplog.records)


@mark_config
def test_manifest_honours_property_override(caplog: pytest.LogCaptureFixture) -> None:
    """The advisory does not change which manifest is selected."""
    ext = make_extension({"deploykit.kubernetesManifest": "deploy/k.yml"})
    log = logging.getLogger("test.manifest")
    with caplog.at_level(logging.WARNING, logger="test.manifest"):
        manifest = ext.get_manifest(None, StaticProbe(True), log)
    assert manifest == BASE_DIR / "deploy" / "k.yml"
    assert len(caplog.records) == 2


@mark_config
def test_openshift_probe_ignores_unknown_clients() -> None:
    """Clients without API discovery are treated as Kubernetes."""
    probe = OpenShiftProbe()
    assert probe.is_incompatible_cluster_type(object()) is False
    assert probe.is_incompatible_cluster_type(FakeClient(OPENSHIFT_PROJECT_API_GROUP)) is True


@mark_config
def test_manifest_advisory_defaults_to_module_logger(caplog: pytest.LogCaptureFixture) -> None:
    """Without an injected logger the advisory goes to the extension's own logger."""
    ext = make_extension()
    with caplog.at_level(logging.WARNING, logger="deploykit.config.extension"):
        manifest = ext.get_manifest(FakeClient(OPENSHIFT_PROJECT_API_GROUP))
    assert manifest == ext.kubernetes_manifest_or_default()
    assert [r.name for r in caplog.records] == ["deploykit.config.extension"] * 2
    assert [r.getMessage() for r in caplog.records] == OPENSHIFT_WARNINGS
