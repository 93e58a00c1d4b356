# topmark:header:start
#
#   project      : DeployKit
#   file         : test_cli_images.py
#   file_relpath : tests/cli/test_cli_images.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `images` command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from tests.cli.conftest import assert_CONFIG_ERROR, assert_SUCCESS, run_cli_in
from tests.conftest import mark_cli, write_text

if TYPE_CHECKING:
    from pathlib import Path

IMAGES_TOML = """
[kubernetes.images.app]
name = "registry.example.com/app:1.0"
alias = "app"
registry = "registry.example.com"

[kubernetes.images.app.build]
from = "busybox"
tags = ["latest", "1.0"]

[[kubernetes.image]]
name = "sidecar:2"
"""


@mark_cli
def test_images_text_output(tmp_path: Path) -> None:
    """Images are listed in declaration order after the merge policy is applied."""
    write_text(tmp_path / "deploykit.toml", IMAGES_TOML)
    result = run_cli_in(tmp_path, ["--no-color", "images"])
    assert_SUCCESS(result)
    lines = result.stdout.splitlines()
    assert lines == [
        "registry.example.com/app:1.0 (alias: app) registry=registry.example.com",
        "sidecar:2",
    ]


@mark_cli
def test_images_verbose_shows_build_details(tmp_path: Path) -> None:
    """``-v`` adds the base image and tags."""
    write_text(tmp_path / "deploykit.toml", IMAGES_TOML)
    result = run_cli_in(tmp_path, ["-v", "--no-color", "images"])
    assert_SUCCESS(result)
    assert "    from: busybox" in result.stdout
    assert "    tags: latest, 1.0" in result.stdout


@mark_cli
def test_images_json_output(tmp_path: Path) -> None:
    """JSON output is a list of image summaries."""
    write_text(tmp_path / "deploykit.toml", IMAGES_TOML)
    result = run_cli_in(tmp_path, ["images", "--format", "json"])
    assert_SUCCESS(result)
    data = json.loads(result.stdout)
    assert [d["name"] for d in data] == ["registry.example.com/app:1.0", "sidecar:2"]
    assert data[0]["tags"] == ["latest", "1.0"]
    assert data[1]["alias"] is None


@mark_cli
def test_no_images_prints_nothing(tmp_path: Path) -> None:
    """Without images the text output is empty."""
    result = run_cli_in(tmp_path, ["images"])
    assert_SUCCESS(result)
    assert result.stdout == ""


@mark_cli
def test_image_type_mismatch(tmp_path: Path) -> None:
    """A wrongly typed image field is reported with its path."""
    write_text(tmp_path / "deploykit.toml", "[[kubernetes.image]]\nname = 3\n")
    result = run_cli_in(tmp_path, ["images"])
    assert_CONFIG_ERROR(result)
    assert "kubernetes.image.name" in result.output
