# topmark:header:start
#
#   project      : DeployKit
#   file         : project.py
#   file_relpath : src/deploykit/config/project.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Project metadata consumed by the extension.

`ProjectContext` carries the absolute base, build and output directories used
to compute path defaults and to anchor path-valued property overrides, together
with the project's `PropertySource`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from deploykit.config.properties import PropertySource

DEFAULT_BUILD_DIR_NAME: str = "build"
DEFAULT_OUTPUT_DIR_NAME: str = "lib"


@dataclass(frozen=True)
class ProjectContext:
    """Immutable view of the project the extension is configured for.

    Attributes:
        base_directory (Path): Absolute project root.
        build_directory (Path): Absolute build directory (``<base>/build`` by default).
        output_directory (Path): Absolute compiled-output directory
            (``<build>/lib`` by default).
        properties (PropertySource): Ambient property overrides.
    """

    base_directory: Path
    build_directory: Path
    output_directory: Path
    properties: PropertySource = field(default_factory=PropertySource)

    @classmethod
    def from_base(
        cls,
        base_directory: Path,
        properties: PropertySource | None = None,
    ) -> ProjectContext:
        """Create a context with conventional build/output directories under ``base_directory``.

        Relative bases are anchored on the current working directory; no
        filesystem access beyond that takes place.
        """
        base: Path = base_directory if base_directory.is_absolute() else Path.cwd() / base_directory
        build: Path = base / DEFAULT_BUILD_DIR_NAME
        return cls(
            base_directory=base,
            build_directory=build,
            output_directory=build / DEFAULT_OUTPUT_DIR_NAME,
            properties=properties or PropertySource(),
        )
