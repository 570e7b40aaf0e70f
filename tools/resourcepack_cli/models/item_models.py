"""Domain models for item appearance overrides.

Two schema generations exist:
- Legacy: assets/<ns>/models/item/<item>.json carries an `overrides` list of
  {"predicate": {"custom_model_data": N}, "model": "<id>"}
- Modern: assets/<ns>/items/<item>.json carries a `model` that is a
  ModelRef. ModelRef is a discriminated union on the `type` field:
  ModelLeaf (minecraft:model), RangeDispatch (minecraft:range_dispatch), or
  OpaqueModel for every other node type, carried through untouched.

All models support round-trip serialization (from_dict/to_dict) and keep
unknown keys in `extra` so rewriting a document never drops fields.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from resourcepack_cli.config import (
    CUSTOM_MODEL_DATA_FIELD,
    CUSTOM_MODEL_DATA_PROPERTY,
    MODEL_TYPE,
    MODEL_TYPES,
    RANGE_DISPATCH_TYPE,
    RANGE_DISPATCH_TYPES,
)


class Generation(str, Enum):
    """Discriminator for the override storage schema.

    - LEGACY: predicate overrides in models/item/<item>.json
    - MODERN: range dispatch in items/<item>.json
    """
    LEGACY = "legacy"
    MODERN = "modern"


def is_number(value: Any) -> bool:
    """True for finite int/float values (booleans excluded)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _sort_key(value: Any) -> float:
    # Records without a numeric key sort first, in their original order.
    return float(value) if is_number(value) else 0.0


# -----------------------------------------------------------------------------
# Modern ModelRef Union
# -----------------------------------------------------------------------------

@dataclass
class ModelLeaf:
    """Leaf node rendering a single model.

    Invariants:
        - type is "minecraft:model" or "model"
    """
    model: str
    type: str = MODEL_TYPE
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "model": self.model, **self.extra}


@dataclass
class DispatchEntry:
    """One threshold of a range dispatch.

    `threshold` keeps the raw document value; it is not guaranteed numeric.
    """
    threshold: Any
    model: "ModelRef | None"
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DispatchEntry":
        extra = {k: v for k, v in data.items() if k not in ("threshold", "model")}
        return cls(
            threshold=data.get("threshold"),
            model=model_ref_from_dict(data.get("model")),
            extra=extra,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"threshold": self.threshold}
        if self.model is not None:
            result["model"] = model_ref_to_dict(self.model)
        result.update(self.extra)
        return result


@dataclass
class RangeDispatch:
    """Numeric threshold dispatch node.

    Invariants:
        - entries are sorted ascending by threshold after every upsert/remove
        - thresholds are unique among numeric entries
    """
    property: str
    entries: list[DispatchEntry] = field(default_factory=list)
    fallback: "ModelRef | None" = None
    type: str = RANGE_DISPATCH_TYPE
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_custom_model_data(self) -> bool:
        """True when this node dispatches on the custom model data property."""
        return self.property == CUSTOM_MODEL_DATA_PROPERTY

    def find_entry(self, threshold: float) -> DispatchEntry | None:
        for entry in self.entries:
            if is_number(entry.threshold) and entry.threshold == threshold:
                return entry
        return None

    def upsert_entry(self, threshold: int, model: "ModelRef") -> None:
        """Replace every entry with threshold by a single one, then re-sort.

        Extra keys of the first matching entry are kept.
        """
        existing = self.find_entry(threshold)
        replacement = DispatchEntry(
            threshold=threshold,
            model=model,
            extra=dict(existing.extra) if existing is not None else {},
        )
        self.remove_entry(threshold)
        self.entries.append(replacement)
        self.sort_entries()

    def remove_entry(self, threshold: float) -> bool:
        """Drop every entry with threshold. Returns True if any was removed."""
        kept = [
            entry for entry in self.entries
            if not (is_number(entry.threshold) and entry.threshold == threshold)
        ]
        removed = len(kept) != len(self.entries)
        self.entries = kept
        self.sort_entries()
        return removed

    def sort_entries(self) -> None:
        self.entries.sort(key=lambda entry: _sort_key(entry.threshold))

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "property": self.property}
        result.update(self.extra)
        result["entries"] = [entry.to_dict() for entry in self.entries]
        if self.fallback is not None:
            result["fallback"] = model_ref_to_dict(self.fallback)
        return result


@dataclass
class OpaqueModel:
    """Any other node type (select, condition, composite, ...), kept verbatim."""
    data: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return dict(self.data)


ModelRef = Union[ModelLeaf, RangeDispatch, OpaqueModel]
"""Recursive union of modern item model nodes."""


def model_ref_from_dict(data: Any) -> ModelRef | None:
    """Decode a ModelRef node.

    Returns:
        The matching variant, or None when data is not an object

    Note:
        A leaf without a string `model`, or a dispatch without a string
        `property`, is carried as OpaqueModel rather than guessed at.
    """
    if not isinstance(data, dict):
        return None
    node_type = data.get("type")
    if node_type in MODEL_TYPES and isinstance(data.get("model"), str):
        extra = {k: v for k, v in data.items() if k not in ("type", "model")}
        return ModelLeaf(model=data["model"], type=node_type, extra=extra)
    if node_type in RANGE_DISPATCH_TYPES and isinstance(data.get("property"), str):
        raw_entries = data.get("entries")
        entries = [
            DispatchEntry.from_dict(entry)
            for entry in (raw_entries if isinstance(raw_entries, list) else [])
            if isinstance(entry, dict)
        ]
        extra = {
            k: v for k, v in data.items()
            if k not in ("type", "property", "entries", "fallback")
        }
        return RangeDispatch(
            property=data["property"],
            entries=entries,
            fallback=model_ref_from_dict(data.get("fallback")),
            type=node_type,
            extra=extra,
        )
    return OpaqueModel(data=dict(data))


def model_ref_to_dict(ref: ModelRef) -> dict[str, Any]:
    """Encode a ModelRef node."""
    return ref.to_dict()


def new_custom_model_data_dispatch(fallback: ModelRef | None) -> RangeDispatch:
    """Create an empty dispatch on custom model data (first float, index 0)."""
    return RangeDispatch(
        property=CUSTOM_MODEL_DATA_PROPERTY,
        entries=[],
        fallback=fallback,
        extra={"index": 0},
    )


@dataclass
class ItemDefinition:
    """Modern per-item document (assets/<ns>/items/<item>.json).

    Invariants:
        - extra keeps document keys other than `model` (e.g. hand_animation_on_swap)
    """
    model: ModelRef | None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def custom_model_data_dispatch(self) -> RangeDispatch | None:
        """Root dispatch on custom model data, if that is what the root is."""
        if isinstance(self.model, RangeDispatch) and self.model.is_custom_model_data:
            return self.model
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ItemDefinition":
        return cls(
            model=model_ref_from_dict(data.get("model")),
            extra={k: v for k, v in data.items() if k != "model"},
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.model is not None:
            result["model"] = model_ref_to_dict(self.model)
        result.update(self.extra)
        return result


# -----------------------------------------------------------------------------
# Legacy Overrides
# -----------------------------------------------------------------------------

@dataclass
class LegacyOverride:
    """One predicate override of a legacy item model.

    `predicate` and `model` keep raw document values.
    """
    predicate: dict[str, Any]
    model: Any
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def tag(self) -> Any:
        """Raw custom_model_data predicate value (may be missing or non-numeric)."""
        return self.predicate.get(CUSTOM_MODEL_DATA_FIELD)

    @property
    def has_numeric_tag(self) -> bool:
        return is_number(self.tag)

    @property
    def other_predicates(self) -> list[str]:
        """Predicate keys besides custom_model_data (e.g. pulling, damage)."""
        return sorted(k for k in self.predicate if k != CUSTOM_MODEL_DATA_FIELD)

    @classmethod
    def create(cls, tag: int, model_id: str) -> "LegacyOverride":
        return cls(predicate={CUSTOM_MODEL_DATA_FIELD: tag}, model=model_id)

    @classmethod
    def from_dict(cls, data: Any) -> "LegacyOverride":
        if not isinstance(data, dict):
            return cls(predicate={}, model=None, extra={"__raw__": data})
        predicate = data.get("predicate")
        return cls(
            predicate=dict(predicate) if isinstance(predicate, dict) else {},
            model=data.get("model"),
            extra={k: v for k, v in data.items() if k not in ("predicate", "model")},
        )

    def to_dict(self) -> Any:
        if "__raw__" in self.extra:
            return self.extra["__raw__"]
        result: dict[str, Any] = {"predicate": dict(self.predicate)}
        if self.model is not None:
            result["model"] = self.model
        result.update(self.extra)
        return result


@dataclass
class ItemModel:
    """Legacy per-item model document (assets/<ns>/models/item/<item>.json).

    Invariants:
        - overrides with a numeric tag are unique by tag and sorted ascending
          after every upsert/remove
        - extra keeps every other document key (parent, textures, display, ...)
    """
    overrides: list[LegacyOverride] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ItemModel":
        raw_overrides = data.get("overrides")
        overrides = (
            [LegacyOverride.from_dict(item) for item in raw_overrides]
            if isinstance(raw_overrides, list)
            else []
        )
        return cls(
            overrides=overrides,
            extra={k: v for k, v in data.items() if k != "overrides"},
        )

    @classmethod
    def create(cls, parent: str, layer0: str) -> "ItemModel":
        """Baseline model that renders the item's own texture."""
        return cls(overrides=[], extra={"parent": parent, "textures": {"layer0": layer0}})

    def find_override(self, tag: float) -> LegacyOverride | None:
        for override in self.overrides:
            if override.has_numeric_tag and override.tag == tag:
                return override
        return None

    def upsert_override(self, tag: int, model_id: str) -> None:
        """Replace every override with tag by a single one, then re-sort.

        Extra keys of the first matching override are kept.
        """
        existing = self.find_override(tag)
        replacement = LegacyOverride.create(tag, model_id)
        if existing is not None:
            replacement.extra = dict(existing.extra)
        self.remove_override(tag)
        self.overrides.append(replacement)
        self.sort_overrides()

    def remove_override(self, tag: float) -> bool:
        """Drop every override with tag. Returns True if any was removed."""
        kept = [o for o in self.overrides if not (o.has_numeric_tag and o.tag == tag)]
        removed = len(kept) != len(self.overrides)
        self.overrides = kept
        self.sort_overrides()
        return removed

    def sort_overrides(self) -> None:
        self.overrides.sort(key=lambda override: _sort_key(override.tag))

    def to_dict(self, *, include_empty_overrides: bool = False) -> dict[str, Any]:
        result: dict[str, Any] = dict(self.extra)
        if self.overrides or include_empty_overrides:
            result["overrides"] = [override.to_dict() for override in self.overrides]
        return result
