"""Domain models for font definitions.

A font document is {"providers": [...]}. Only bitmap providers are modelled;
every other provider type is kept verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BitmapProvider:
    """Bitmap glyph provider.

    Invariants:
        - chars rows are strings; each character maps one cell of the texture
        - height > 0 and ascent <= height
    """
    file: str
    chars: list[str]
    height: int = 8
    ascent: int = 7
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def codepoints(self) -> list[int]:
        """Code points of every character, left-to-right, top-to-bottom."""
        return [ord(char) for row in self.chars for char in row]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BitmapProvider":
        raw_chars = data.get("chars")
        extra = {
            k: v for k, v in data.items()
            if k not in ("type", "file", "height", "ascent", "chars")
        }
        return cls(
            file=str(data.get("file", "")),
            chars=[row for row in raw_chars if isinstance(row, str)] if isinstance(raw_chars, list) else [],
            height=data.get("height", 8),
            ascent=data.get("ascent", 7),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "type": "bitmap",
            "file": self.file,
            "ascent": self.ascent,
            "height": self.height,
            "chars": list(self.chars),
        }
        result.update(self.extra)
        return result


@dataclass
class FontDefinition:
    """Font document with an ordered provider list.

    `providers` holds BitmapProvider instances and raw dicts for other types.
    """
    providers: list[BitmapProvider | dict[str, Any]] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def bitmap_providers(self) -> list[BitmapProvider]:
        return [p for p in self.providers if isinstance(p, BitmapProvider)]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FontDefinition":
        raw = data.get("providers")
        providers: list[BitmapProvider | dict[str, Any]] = []
        for item in raw if isinstance(raw, list) else []:
            if isinstance(item, dict) and item.get("type") == "bitmap":
                providers.append(BitmapProvider.from_dict(item))
            else:
                providers.append(item)
        return cls(providers=providers, extra={k: v for k, v in data.items() if k != "providers"})

    def to_dict(self) -> dict[str, Any]:
        return {
            "providers": [
                p.to_dict() if isinstance(p, BitmapProvider) else p
                for p in self.providers
            ],
            **self.extra,
        }
