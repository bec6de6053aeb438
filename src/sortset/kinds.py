from __future__ import annotations

from enum import Enum
from typing import List


class Datatype(str, Enum):
    RANDOM = "random"
    SORTED = "sorted"
    REVERSE_SORTED = "reverse_sorted"
    NEARLY_SORTED = "nearly_sorted"
    FEW_UNIQUE = "few_unique"


def parse_kind(value: str | Datatype) -> Datatype:
    """Accept a Datatype, its value (``"few_unique"``) or its name (``"FEW_UNIQUE"``)."""
    if isinstance(value, Datatype):
        return value
    key = str(value).strip()
    for kind in Datatype:
        if key.lower() == kind.value or key.upper() == kind.name:
            return kind
    raise ValueError(f"unknown dataset kind {value!r}. Supported: {kind_names()}")


def kind_names() -> List[str]:
    return [k.value for k in Datatype]
