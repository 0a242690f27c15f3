"""Text extraction from typed review fields."""

from __future__ import annotations

import logging
from typing import List, Optional

from review_advisor.reviews.models import (
    ArrayValue,
    StringValue,
    TypedValue,
    UnknownValue,
)

logger = logging.getLogger(__name__)

DEFAULT_SYNTHETIC_PREFIX = "GUIDED_DINING_"


def is_synthetic_tag(value: ArrayValue, synthetic_prefix: str) -> bool:
    """
    Check whether an array is a lone machine-generated category label.

    Only single-element arrays qualify; an element without a scalar string
    never matches.
    """
    if len(value.values) != 1 or not synthetic_prefix:
        return False
    only = value.values[0]
    return isinstance(only, StringValue) and only.value.startswith(synthetic_prefix)


def extract_fragments(
    value: Optional[TypedValue],
    synthetic_prefix: str = DEFAULT_SYNTHETIC_PREFIX,
) -> List[str]:
    """
    Produce the free-text fragments carried by one field value.

    Args:
        value: Parsed field value, or None when the field is absent
        synthetic_prefix: Prefix marking synthetic category tags

    Returns:
        Fragments in original order; empty for absent or unrecognized values
    """
    if value is None:
        return []

    if isinstance(value, StringValue):
        return [value.value]

    if isinstance(value, ArrayValue):
        if is_synthetic_tag(value, synthetic_prefix):
            logger.debug(f"Skipping synthetic tag array: {value.values[0].text}")
            return []
        return [item.value for item in value.values if isinstance(item, StringValue)]

    if isinstance(value, UnknownValue):
        logger.debug(f"Ignoring unrecognized field shape: {value.raw[:80]}")
    return []
