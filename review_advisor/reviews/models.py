"""Typed-value document models for reviews read from the document store."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

import orjson


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str

    @property
    def text(self) -> Optional[str]:
        return self.value


@dataclass(frozen=True, slots=True)
class ArrayValue:
    values: Tuple["TypedValue", ...] = ()

    @property
    def text(self) -> Optional[str]:
        return None


@dataclass(frozen=True, slots=True)
class UnknownValue:
    """Any wrapper the extractor does not understand, kept as raw JSON text."""

    raw: str

    @property
    def text(self) -> Optional[str]:
        return self.raw


TypedValue = Union[StringValue, ArrayValue, UnknownValue]


def _raw_text(node: Any) -> str:
    try:
        return orjson.dumps(node).decode()
    except (orjson.JSONEncodeError, TypeError):
        return str(node)


def parse_typed_value(node: Any) -> Optional[TypedValue]:
    """
    Decode one store field into a TypedValue.

    Returns None for an absent (null) field. Shapes other than
    ``{"stringValue": ...}`` and ``{"arrayValue": {"values": [...]}}`` become
    UnknownValue rather than failing.
    """
    if node is None:
        return None
    if isinstance(node, dict):
        if isinstance(node.get("stringValue"), str):
            return StringValue(node["stringValue"])
        if "arrayValue" in node and isinstance(node["arrayValue"], dict):
            # Firestore encodes an empty array as {"arrayValue": {}}
            items = node["arrayValue"].get("values")
            if not isinstance(items, list):
                return ArrayValue()
            # null elements stay in place so the element count matches the source
            return ArrayValue(
                tuple(
                    UnknownValue("null") if item is None else parse_typed_value(item)
                    for item in items
                )
            )
    return UnknownValue(_raw_text(node))


@dataclass(frozen=True, slots=True)
class ReviewDocument:
    review_id: str
    fields: Mapping[str, TypedValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    @classmethod
    def from_json(cls, node: Mapping[str, Any]) -> "ReviewDocument":
        name = node.get("name") or ""
        review_id = str(name).rstrip("/").split("/")[-1]
        raw_fields = node.get("fields")
        fields = {}
        if isinstance(raw_fields, dict):
            for key, raw in raw_fields.items():
                value = parse_typed_value(raw)
                if value is not None:
                    fields[key] = value
        return cls(review_id=review_id, fields=fields)


@dataclass(frozen=True, slots=True)
class Corpus:
    fragments: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(self.fragments).strip()

    @property
    def is_empty(self) -> bool:
        return not self.text

    def __len__(self) -> int:
        return len(self.fragments)
