"""
This file mainly defines the kinds of values accepted by tabulon metadata stores and the torch data types accepted for table elements, together with their conversions.

"""

import enum
import numbers
from typing import Any, Dict

import torch

from tabulon.errors import TypeMismatch


class ValueKind(enum.Enum):
    STRING = "string"
    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "float"


CVT_PYTHON_TO_KIND: Dict[type, ValueKind] = {
    str: ValueKind.STRING,
    int: ValueKind.SIGNED,
    float: ValueKind.FLOAT,
}

CVT_KIND_TO_PYTHON: Dict[ValueKind, type] = {
    ValueKind.STRING: str,
    ValueKind.UNSIGNED: int,
    ValueKind.SIGNED: int,
    ValueKind.FLOAT: float,
}

"""
    Complex, boolean and half types are not supported as table elements
"""
CVT_DTYPES_TORCH_TO_KIND: Dict[torch.dtype, ValueKind] = {
    torch.uint8: ValueKind.UNSIGNED,
    torch.int8: ValueKind.SIGNED,
    torch.int16: ValueKind.SIGNED,
    torch.int32: ValueKind.SIGNED,
    torch.int64: ValueKind.SIGNED,
    torch.float32: ValueKind.FLOAT,
    torch.float64: ValueKind.FLOAT,
}


def as_kind(kind_or_type) -> ValueKind:
    """Accept either a :py:class:`ValueKind` or one of the python types ``str``, ``int``, ``float``."""
    if isinstance(kind_or_type, ValueKind):
        return kind_or_type
    try:
        return CVT_PYTHON_TO_KIND[kind_or_type]
    except (KeyError, TypeError):
        raise TypeMismatch(f"No metadata value kind for {kind_or_type!r}") from None


def readable_as(kind: ValueKind, kind_or_type) -> bool:
    """Whether a value of ``kind`` may be read as ``kind_or_type``. The python type ``int`` reads both integer kinds."""
    if kind_or_type is int:
        return kind in (ValueKind.SIGNED, ValueKind.UNSIGNED)
    return as_kind(kind_or_type) is kind


def infer_kind(value: Any) -> ValueKind:
    # bool is an Integral, but not a supported metadata kind
    if isinstance(value, bool):
        raise TypeMismatch("Boolean metadata values are not supported")
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, numbers.Integral):
        return ValueKind.SIGNED
    if isinstance(value, numbers.Real):
        return ValueKind.FLOAT
    raise TypeMismatch(
        f"Unsupported metadata value of type {type(value).__name__}: {value!r}"
    )


def coerce(value: Any, kind: ValueKind) -> Any:
    """Convert ``value`` to the python type backing ``kind``, failing on lossy or cross-kind conversions."""
    inferred = infer_kind(value)
    if kind is ValueKind.FLOAT and inferred is ValueKind.SIGNED:
        return float(value)
    if kind is ValueKind.UNSIGNED and inferred is ValueKind.SIGNED:
        if value < 0:
            raise TypeMismatch(f"Unsigned metadata value cannot be negative: {value}")
        return int(value)
    if inferred is not kind:
        raise TypeMismatch(f"Expected a {kind.value} value, got {inferred.value}: {value!r}")
    return CVT_KIND_TO_PYTHON[kind](value)
