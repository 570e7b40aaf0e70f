"""Shared plumbing for command handlers.

Every handler has the signature `cmd_x(ctx: CommandContext, args) -> int`.
The context knows where the pack lives and where edits are written.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from resourcepack_cli.config import DEFAULT_CONFIG, ToolConfig
from resourcepack_cli.errors import InvalidInputError, InvalidValueError
from resourcepack_cli.models.pack import Package
from resourcepack_cli.persistence.container import load_pack, save_directory, save_pack


@dataclass(frozen=True)
class CommandContext:
    """Resolved global options.

    Attributes:
        pack_path: --pack (zip file or directory), None when not given
        output_path: --output; edits are written back to pack_path when None
        config: Namespaces and format boundary for this run
    """
    pack_path: Path | None
    output_path: Path | None = None
    config: ToolConfig = DEFAULT_CONFIG

    def require_pack_path(self) -> Path:
        if self.pack_path is None:
            raise InvalidInputError("--pack is required for this command")
        return self.pack_path

    def load(self) -> Package:
        """Load the pack named by --pack.

        Raises:
            InvalidInputError: If --pack was not given
            ContainerError: If the pack cannot be read
        """
        return load_pack(self.require_pack_path())

    def save(self, package: Package) -> Path:
        """Write package to --output, or back to --pack.

        Directories are mirrored in place; any other target is written as a
        zip archive.
        """
        target = self.output_path or self.require_pack_path()
        if target.is_dir():
            save_directory(package, target)
        else:
            save_pack(package, target)
        return target


def _parse_cli_value(raw: str) -> Any:
    """Parse a CLI value string into a typed Python value."""
    value = raw.strip()
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    if value.lower() == "null":
        return None
    if re.fullmatch(r"-?\d+", value):
        return int(value)
    if re.fullmatch(r"-?\d+\.\d+", value):
        return float(value)
    if value.startswith("{") or value.startswith("[") or value.startswith('"'):
        try:
            return json.loads(value)
        except json.JSONDecodeError as exc:
            raise InvalidValueError(value, f"Invalid JSON: {exc}") from exc
    return raw


def print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))
