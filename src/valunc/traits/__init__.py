"""
Capability traits для неопределённостей.

Протоколы операций (opt-in) и нулевой элемент.
"""

from src.valunc.traits.num import UncZero, has_zero, is_zero, zero_of
from src.valunc.traits.ops import (
    OPERATIONS,
    ArityMismatchError,
    MissingCapabilityError,
    UncAdd,
    UncDiv,
    UncMul,
    UncNeg,
    UncSub,
    capabilities,
    supports,
    unc_add,
    unc_div,
    unc_mul,
    unc_neg,
    unc_sub,
)

__all__ = [
    # Протоколы операций
    "UncAdd",
    "UncSub",
    "UncMul",
    "UncDiv",
    "UncNeg",
    "OPERATIONS",
    # Dispatch
    "unc_add",
    "unc_sub",
    "unc_mul",
    "unc_div",
    "unc_neg",
    # Introspection
    "supports",
    "capabilities",
    # Нулевой элемент
    "UncZero",
    "zero_of",
    "is_zero",
    "has_zero",
    # Exceptions
    "MissingCapabilityError",
    "ArityMismatchError",
]
