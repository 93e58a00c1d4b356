# topmark:header:start
#
#   project      : DeployKit
#   file         : test_dsl_evaluation.py
#   file_relpath : tests/config/test_dsl_evaluation.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `evaluate_block`, the ``[kubernetes]`` block evaluator."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import tomlkit

from deploykit.config import (
    BindingError,
    BuildStrategy,
    KubernetesExtension,
    ResourceFileType,
    evaluate_block,
)
from deploykit.config.dsl import allowed_keys
from tests.conftest import make_extension, make_project, mark_config


def _block(text: str) -> dict[str, Any]:
    """Parse a TOML snippet and return its ``[kubernetes]`` table as plain dicts."""
    data: Any = tomlkit.parse(text).unwrap()
    return data["kubernetes"]


@mark_config
def test_scalars_enums_and_blocks() -> None:
    """A mixed block fills declared values, enum fields and structured blocks."""
    block = _block(
        """
[kubernetes]
offline = true
namespace = "staging"
push_retries = 2
build_strategy = "jib"
resource_file_type = "json"

[kubernetes.access]
namespace = "cluster-ns"
trust_certs = true

[kubernetes.enricher]
excludes = ["deploykit-expose"]
"""
    )
    ext = evaluate_block(make_extension(), block)

    assert ext.offline_or_default() is True
    assert ext.namespace_or_default() == "staging"
    assert ext.push_retries_or_default() == 2
    assert ext.build_strategy is BuildStrategy.jib
    assert ext.resource_file_type is ResourceFileType.json
    assert ext.is_docker_access_required() is False
    assert ext.access is not None and ext.access.namespace == "cluster-ns"
    assert ext.enricher is not None and ext.enricher.excludes == ("deploykit-expose",)


@mark_config
def test_properties_still_win_over_block() -> None:
    """Evaluating a block never hides a property override."""
    ext = KubernetesExtension(make_project({"deploykit.namespace": "from-prop"}))
    evaluate_block(ext, {"namespace": "from-block"})
    assert ext.namespace_or_default() == "from-prop"


@mark_config
def test_document_order_append_then_replace() -> None:
    """Appends before a plural table are discarded; appends after it survive."""
    block = _block(
        """
[kubernetes]
[[kubernetes.image]]
name = "first"

[[kubernetes.image]]
name = "second"

[kubernetes.images.only]
name = "only"
"""
    )
    ext = evaluate_block(make_extension(), block)
    assert ext.images is not None
    assert [i.name for i in ext.images] == ["only"]


@mark_config
def test_document_order_replace_then_append() -> None:
    """Entries appended after the plural form are kept in order."""
    block: dict[str, Any] = {
        "images": [{"name": "a"}, {"name": "b"}],
        "image": [{"name": "c"}],
    }
    ext = evaluate_block(make_extension(), block)
    assert ext.images is not None
    assert [i.name for i in ext.images] == ["a", "b", "c"]


@mark_config
def test_singular_entries_group_at_first_position() -> None:
    """A later ``[[kubernetes.image]]`` joins the first one and is replaced with it."""
    block = _block(
        """
[kubernetes]
[[kubernetes.image]]
name = "a"

[kubernetes.images.x]
name = "x"

[[kubernetes.image]]
name = "b"
"""
    )
    assert list(block) == ["image", "images"]
    ext = evaluate_block(make_extension(), block)
    assert ext.images is not None
    assert [i.name for i in ext.images] == ["x"]


@mark_config
def test_singular_entries_after_plural_table_are_appended() -> None:
    """Writing every singular entry below the plural table appends them."""
    block = _block(
        """
[kubernetes]
[kubernetes.images.x]
name = "x"

[[kubernetes.image]]
name = "b"
"""
    )
    ext = evaluate_block(make_extension(), block)
    assert ext.images is not None
    assert [i.name for i in ext.images] == ["x", "b"]


@mark_config
def test_singular_form_accepts_a_lone_table() -> None:
    """``mapping = {...}`` appends exactly one entry."""
    ext = evaluate_block(make_extension(), {"mapping": {"kind": "ConfigMap"}})
    assert ext.mappings is not None
    assert [m.kind for m in ext.mappings] == ["ConfigMap"]


@mark_config
def test_unknown_keys_reported_before_applying() -> None:
    """All unknown top-level keys are listed and nothing is applied."""
    ext = make_extension()
    with pytest.raises(BindingError) as excinfo:
        evaluate_block(ext, {"namespace": "x", "imagess": {}, "acess": {}})
    assert excinfo.value.path == "kubernetes"
    assert excinfo.value.unknown_fields == ("acess", "imagess")
    assert ext.namespace_or_default() is None


@mark_config
def test_evaluation_stops_at_first_binding_failure() -> None:
    """Keys before the failing one stay applied; later keys are not."""
    ext = make_extension()
    with pytest.raises(BindingError) as excinfo:
        evaluate_block(
            ext,
            {"namespace": "x", "access": {"bogus": 1}, "offline": True},
        )
    assert excinfo.value.path == "kubernetes.access"
    assert ext.namespace_or_default() == "x"
    assert ext.offline_or_default() is False


@mark_config
def test_unknown_enum_token() -> None:
    """Enum fields accept member names only."""
    with pytest.raises(BindingError, match="expected one of"):
        evaluate_block(make_extension(), {"build_strategy": "Docker"})
    with pytest.raises(BindingError, match="expected a string"):
        evaluate_block(make_extension(), {"resource_file_type": 1})


@mark_config
def test_relative_paths_anchor_on_config_dir() -> None:
    """Relative path settings in a file are anchored on the file's directory."""
    ext = evaluate_block(
        make_extension(),
        {"kubernetes_manifest": "deploy/k8s.yml", "json_log_dir": "/var/log/dk"},
        config_dir=Path("/repo/app"),
    )
    assert ext.kubernetes_manifest_or_default() == Path("/repo/app/deploy/k8s.yml")
    assert ext.json_log_dir_or_default() == Path("/var/log/dk")


@mark_config
def test_non_table_block_is_rejected() -> None:
    """The ``kubernetes`` value itself must be a table."""
    with pytest.raises(BindingError, match="expected a table"):
        evaluate_block(make_extension(), ["not", "a", "table"])  # type: ignore[arg-type]


@mark_config
def test_allowed_keys_cover_settings_and_blocks() -> None:
    """The accepted key set includes settings, enum fields and blocks."""
    keys = allowed_keys()
    assert {"offline", "kubernetes_manifest", "build_strategy", "images", "image"} <= keys
    assert "kubernetes" not in keys
