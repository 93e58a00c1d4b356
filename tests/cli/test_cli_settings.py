# topmark:header:start
#
#   project      : DeployKit
#   file         : test_cli_settings.py
#   file_relpath : tests/cli/test_cli_settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `settings` command output and error mapping."""

from __future__ import annotations

import json
import re
from typing import TYPE_CHECKING, Any

import tomlkit

from deploykit.constants import TOML_BLOCK_END, TOML_BLOCK_START, VALUE_NOT_SET
from tests.cli.conftest import (
    assert_CONFIG_ERROR,
    assert_SUCCESS,
    assert_USAGE_ERROR,
    run_cli_in,
)
from tests.conftest import mark_cli, write_text

if TYPE_CHECKING:
    from pathlib import Path


def _json_settings(tmp_path: Path, *extra: str) -> dict[str, Any]:
    result = run_cli_in(tmp_path, ["--no-color", "settings", "--format", "json", *extra])
    assert_SUCCESS(result)
    return json.loads(result.stdout)


@mark_cli
def test_settings_defaults_as_json(tmp_path: Path) -> None:
    """Without configuration the JSON dump shows the defaults."""
    data = _json_settings(tmp_path)
    assert data["offline"] is False
    assert data["registry"] == "docker.io"
    assert data["namespace"] is None
    assert data["build_strategy"] == "docker"
    assert data["resource_file_type"] == "yaml"
    assert data["kubernetes_manifest"] == str(
        tmp_path / "build" / "lib" / "META-INF" / "deploykit" / "kubernetes.yml"
    )


@mark_cli
def test_settings_reads_deploykit_toml(tmp_path: Path) -> None:
    """Values from ``deploykit.toml`` show up in the dump."""
    write_text(
        tmp_path / "deploykit.toml",
        """
        [kubernetes]
        namespace = "staging"
        build_strategy = "jib"
        """,
    )
    data = _json_settings(tmp_path)
    assert data["namespace"] == "staging"
    assert data["build_strategy"] == "jib"


@mark_cli
def test_property_definitions_override_file(tmp_path: Path) -> None:
    """``-D`` properties take precedence over the file."""
    write_text(tmp_path / "deploykit.toml", "[kubernetes]\nnamespace = \"staging\"\n")
    data = _json_settings(
        tmp_path,
        "-D",
        "deploykit.namespace=prod",
        "--property",
        "deploykit.kubernetesManifest=out/m.yml",
    )
    assert data["namespace"] == "prod"
    assert data["kubernetes_manifest"] == str(tmp_path / "out" / "m.yml")


@mark_cli
def test_project_dir_option(tmp_path: Path) -> None:
    """``--project-dir`` selects where the config is discovered."""
    project = tmp_path / "svc"
    write_text(project / "deploykit.toml", "[kubernetes]\npush_retries = 4\n")
    data = _json_settings(tmp_path, "--project-dir", "svc")
    assert data["push_retries"] == 4


@mark_cli
def test_text_output_lists_every_setting(tmp_path: Path) -> None:
    """Text output prints ``name = value`` lines, marking unset values."""
    result = run_cli_in(tmp_path, ["--no-color", "settings"])
    assert_SUCCESS(result)
    lines = result.stdout.splitlines()
    assert any(re.fullmatch(r"offline\s+= false", line) for line in lines)
    assert any(line.split("=")[0].strip() == "registry" for line in lines)
    assert any(line.endswith(f"= {VALUE_NOT_SET}") for line in lines)


@mark_cli
def test_verbose_text_output_shows_property_keys(tmp_path: Path) -> None:
    """With ``-v`` each line mentions the property key of the setting."""
    result = run_cli_in(tmp_path, ["-v", "--no-color", "settings"])
    assert_SUCCESS(result)
    assert "(deploykit.docker.push.retries)" in result.stdout


@mark_cli
def test_toml_output_parses(tmp_path: Path) -> None:
    """TOML output is a valid document without None values."""
    result = run_cli_in(tmp_path, ["settings", "--format", "toml"])
    assert_SUCCESS(result)
    parsed: Any = tomlkit.parse(result.stdout).unwrap()
    assert parsed["max_connections"] == 100
    assert "namespace" not in parsed
    assert TOML_BLOCK_START not in result.stdout


@mark_cli
def test_verbose_toml_output_is_fenced(tmp_path: Path) -> None:
    """With ``-v`` the TOML dump is wrapped in block markers."""
    result = run_cli_in(tmp_path, ["-v", "settings", "--format", "toml"])
    assert_SUCCESS(result)
    assert result.stdout.splitlines()[0] == TOML_BLOCK_START
    assert result.stdout.splitlines()[-1] == TOML_BLOCK_END


@mark_cli
def test_bad_property_value_is_a_config_error(tmp_path: Path) -> None:
    """An unparseable property maps to the CONFIG_ERROR exit code."""
    result = run_cli_in(tmp_path, ["settings", "-D", "deploykit.docker.push.retries=abc"])
    assert_CONFIG_ERROR(result)
    assert "deploykit.docker.push.retries" in result.output


@mark_cli
def test_unknown_block_key_is_a_config_error(tmp_path: Path) -> None:
    """Unknown keys in the block are reported by name."""
    write_text(tmp_path / "deploykit.toml", "[kubernetes]\nnamespce = \"x\"\n")
    result = run_cli_in(tmp_path, ["settings"])
    assert_CONFIG_ERROR(result)
    assert "namespce" in result.output


@mark_cli
def test_duplicate_block_key_is_a_config_error(tmp_path: Path) -> None:
    """A duplicated key in deploykit.toml maps to CONFIG_ERROR, not a traceback."""
    write_text(
        tmp_path / "deploykit.toml",
        "[kubernetes]\nnamespace = \"a\"\nnamespace = \"b\"\n",
    )
    result = run_cli_in(tmp_path, ["settings"])
    assert_CONFIG_ERROR(result)
    assert "namespace" in result.output


@mark_cli
def test_malformed_definition_is_a_usage_error(tmp_path: Path) -> None:
    """A ``-D`` value without ``=`` is rejected."""
    result = run_cli_in(tmp_path, ["settings", "-D", "deploykit.offline"])
    assert_USAGE_ERROR(result)
    assert "KEY=VALUE" in result.output
