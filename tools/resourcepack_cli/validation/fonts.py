"""Font document validation.

Each validator returns a list of issue strings prefixed with a JSON path.
"""

from __future__ import annotations

from typing import Any


def _is_int(value: Any, *, min_value: int | None = None) -> bool:
    """Check if value is an integer within optional bounds."""
    if not isinstance(value, int) or isinstance(value, bool):
        return False
    return min_value is None or value >= min_value


def _validate_bitmap_provider(provider: dict[str, Any], path: str, issues: list[str]) -> None:
    file = provider.get("file")
    if not isinstance(file, str) or not file.strip():
        issues.append(f"{path}.file: required non-empty string")

    height = provider.get("height", 8)
    ascent = provider.get("ascent", 7)
    if not _is_int(height, min_value=1):
        issues.append(f"{path}.height: expected integer >= 1")
    if not _is_int(ascent):
        issues.append(f"{path}.ascent: expected integer")
    elif _is_int(height, min_value=1) and ascent > height:
        issues.append(f"{path}.ascent: must be <= height ({height})")

    chars = provider.get("chars")
    if not isinstance(chars, list) or not chars:
        issues.append(f"{path}.chars: expected a non-empty array")
        return
    for index, row in enumerate(chars):
        if not isinstance(row, str):
            issues.append(f"{path}.chars[{index}]: expected string")


def validate_font_definition(document: Any, path: str = "$font") -> list[str]:
    """Validate a font document.

    Checks:
        - providers is an array of objects with a type
        - bitmap providers have a file, positive height, ascent <= height and
          string chars rows
        - no character is declared by two bitmap providers (U+0000 padding
          is exempt)

    Args:
        document: Parsed font document
        path: Prefix for issue messages

    Returns:
        List of validation issue strings
    """
    if not isinstance(document, dict):
        return [f"{path}: root must be an object"]
    providers = document.get("providers")
    if not isinstance(providers, list):
        return [f"{path}.providers: expected an array"]

    issues: list[str] = []
    owners: dict[int, int] = {}
    for index, provider in enumerate(providers):
        provider_path = f"{path}.providers[{index}]"
        if not isinstance(provider, dict):
            issues.append(f"{provider_path}: expected object")
            continue
        if not isinstance(provider.get("type"), str):
            issues.append(f"{provider_path}.type: required string")
            continue
        if provider["type"] != "bitmap":
            continue

        _validate_bitmap_provider(provider, provider_path, issues)
        for row in provider.get("chars") or []:
            if not isinstance(row, str):
                continue
            for char in row:
                codepoint = ord(char)
                if codepoint == 0:
                    continue
                first = owners.setdefault(codepoint, index)
                if first != index:
                    issues.append(
                        f"{provider_path}.chars: U+{codepoint:04X} already declared by providers[{first}]"
                    )
    return issues
