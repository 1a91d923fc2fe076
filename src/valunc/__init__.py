"""
valunc — значения с неопределённостями и расширяемое распространение ошибок

Контейнер ValUnc хранит значение и одну или несколько независимых
неопределённостей. Правила распространения неопределённостей через
арифметику задаются capability-протоколами, которые типы
неопределённостей реализуют по выбору (opt-in).
"""

# Capability traits
from src.valunc.traits import (
    OPERATIONS,
    ArityMismatchError,
    MissingCapabilityError,
    UncAdd,
    UncDiv,
    UncMul,
    UncNeg,
    UncSub,
    UncZero,
    capabilities,
    has_zero,
    is_zero,
    supports,
    unc_add,
    unc_div,
    unc_mul,
    unc_neg,
    unc_sub,
    zero_of,
)

# Serialization
from src.valunc.serde import VAL_UNC_SCHEMA, ValUncDecodeError

# Types
from src.valunc.unc import Unc
from src.valunc.val_unc import ValUnc

__all__ = [
    # Types
    "ValUnc",
    "Unc",
    # Capability traits — протоколы
    "UncAdd",
    "UncSub",
    "UncMul",
    "UncDiv",
    "UncNeg",
    "UncZero",
    "OPERATIONS",
    # Capability traits — dispatch
    "unc_add",
    "unc_sub",
    "unc_mul",
    "unc_div",
    "unc_neg",
    # Capability traits — introspection
    "supports",
    "capabilities",
    "zero_of",
    "is_zero",
    "has_zero",
    # Serialization
    "VAL_UNC_SCHEMA",
    # Exceptions
    "MissingCapabilityError",
    "ArityMismatchError",
    "ValUncDecodeError",
]
