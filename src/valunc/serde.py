"""
Serialization adapter для ValUnc

Формат (pair-or-bare-value):
- (val, unc): общий случай, JSON-массив из двух элементов
- val: если неопределённость равна нулевому элементу и val не массив
  и не объект

Декодирование принимает обе формы. Голое значение восстанавливается
с нулевой неопределённостью типа U. Форма входных данных проверяется
JSON Schema (draft 2020-12) через jsonschema.

Неопределённость без UncZero всегда кодируется парой.
"""

import logging
from typing import Any, Final

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from src.valunc.traits.num import has_zero, is_zero, zero_of
from src.valunc.traits.ops import MissingCapabilityError

logger = logging.getLogger(__name__)


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Длина парной формы (val, unc)
PAIR_LEN: Final[int] = 2

# Допустимые формы закодированного ValUnc: массив [val, unc] или не-массив
VAL_UNC_SCHEMA: Final[dict[str, Any]] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "ValUnc",
    "oneOf": [
        {
            "type": "array",
            "minItems": PAIR_LEN,
            "maxItems": PAIR_LEN,
        },
        {"not": {"type": "array"}},
    ],
}

Draft202012Validator.check_schema(VAL_UNC_SCHEMA)
_VALIDATOR: Final[Draft202012Validator] = Draft202012Validator(VAL_UNC_SCHEMA)

# Значения, которые в голом виде неотличимы от пары или словаря полей
STRUCTURED_TYPES: Final[tuple[type, ...]] = (list, tuple, dict)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class ValUncDecodeError(ValueError):
    """Данные не являются ни голым значением, ни парой (val, unc)."""


# =============================================================================
# ENCODE
# =============================================================================


def collapses(unc: Any) -> bool:
    """
    Нужно ли сворачивать ValUnc в голое значение.

    Args:
        unc: Неопределённость контейнера

    Returns:
        True если unc поддерживает UncZero и равна нулю
    """
    return has_zero(unc) and is_zero(unc)


def encode(val: Any, unc: Any, *, collapse: bool) -> Any:
    """
    Кодирование уже сериализованных полей.

    Args:
        val: Сериализованное значение
        unc: Сериализованная неопределённость
        collapse: Результат collapses() для исходной неопределённости

    Returns:
        val при collapse, иначе (val, unc). Массив или объект
        в val всегда кодируется парой
    """
    if collapse and not isinstance(val, STRUCTURED_TYPES):
        return val
    return (val, unc)


# =============================================================================
# DECODE
# =============================================================================


def check_shape(data: Any) -> None:
    """
    Проверка формы данных по VAL_UNC_SCHEMA.

    Raises:
        ValUncDecodeError: Если массив не из двух элементов
    """
    if isinstance(data, tuple):
        data = list(data)
    error = best_match(_VALIDATOR.iter_errors(data))
    if error is not None:
        raise ValUncDecodeError(
            f"Expected a bare value or a [val, unc] pair, got {data!r}: "
            f"{error.message}"
        )


def decode(data: Any, unc_kind: Any = None) -> dict[str, Any]:
    """
    Декодирование голого значения или пары в поля ValUnc.

    Args:
        data: Голое значение или пара [val, unc]
        unc_kind: Тип неопределённости для нулевого элемента
            (None: тип неизвестен)

    Returns:
        {"val": ..., "unc": ...}

    Raises:
        ValUncDecodeError: Если форма неверна, или голое значение пришло
            без известного типа неопределённости
    """
    check_shape(data)

    if isinstance(data, (list, tuple)):
        val, unc = data
        return {"val": val, "unc": unc}

    if unc_kind is None:
        raise ValUncDecodeError(
            f"Bare value {data!r} needs a known uncertainty type; "
            f"parametrize the container as ValUnc[V, U]"
        )

    try:
        unc = zero_of(unc_kind)
    except MissingCapabilityError as e:
        raise ValUncDecodeError(f"Bare value {data!r}: {e}") from e

    logger.debug("Bare value decoded, uncertainty defaults to zero of %r", unc_kind)
    return {"val": data, "unc": unc}
