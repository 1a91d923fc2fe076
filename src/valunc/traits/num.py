"""
UncZero — нулевая неопределённость (additive identity)

Используется сериализацией (свёртка в голое значение) и конструктором
ValUnc.from_val (значение без погрешности).

Поддерживаемые виды неопределённостей:
- числа (int, float, Decimal, Fraction, numpy-скаляры): ноль = kind(0)
- типы, реализующие протокол UncZero: ноль = kind.zero()
- кортежи (tuple[A, B], кортеж типов, NamedTuple): поэлементно
- пустой кортеж: всегда ноль
"""

import numbers
from functools import singledispatch
from typing import Any, Protocol, get_args, get_origin, get_type_hints, runtime_checkable

from src.valunc.traits.ops import MissingCapabilityError


@runtime_checkable
class UncZero(Protocol):
    """Тип неопределённости с нулевым элементом."""

    @classmethod
    def zero(cls) -> Any: ...

    def is_zero(self) -> bool: ...


# =============================================================================
# ZERO ПО ТИПУ
# =============================================================================


def zero_of(kind: Any) -> Any:
    """
    Нулевая неопределённость для типа неопределённости.

    Args:
        kind: Тип (float, UncZero-класс, NamedTuple-класс), аннотация
            tuple[A, B] или обычный кортеж типов (A, B)

    Returns:
        Нулевой элемент

    Raises:
        MissingCapabilityError: Если ноль для типа не определён
            (в том числе для tuple[X, ...], длина неизвестна)

    Examples:
        >>> zero_of(float)
        0.0
        >>> zero_of((int, float))
        (0, 0.0)
        >>> zero_of(tuple[()])
        ()
    """
    if isinstance(kind, tuple):
        return tuple(zero_of(component) for component in kind)

    if get_origin(kind) is tuple:
        args = get_args(kind)
        if args in ((), ((),)):
            return ()
        if Ellipsis in args:
            raise MissingCapabilityError(
                f"Cannot build zero for variadic tuple annotation {kind!r}"
            )
        return tuple(zero_of(component) for component in args)

    if isinstance(kind, type):
        if issubclass(kind, tuple) and hasattr(kind, "_fields"):
            hints = get_type_hints(kind)
            return kind(*(zero_of(hints[name]) for name in kind._fields))
        if issubclass(kind, numbers.Number):
            return kind(0)
        if issubclass(kind, UncZero):
            return kind.zero()

    raise MissingCapabilityError(f"No zero identity for uncertainty kind {kind!r}")


# =============================================================================
# ZERO ПО ЗНАЧЕНИЮ
# =============================================================================


@singledispatch
def is_zero(unc: Any) -> bool:
    """
    Проверка, является ли неопределённость нулевой.

    Raises:
        MissingCapabilityError: Если тип не поддерживает UncZero
    """
    if isinstance(unc, UncZero):
        return unc.is_zero()
    raise MissingCapabilityError(f"{type(unc).__name__} does not implement UncZero")


@is_zero.register
def _(unc: numbers.Number) -> bool:
    return unc == 0


@is_zero.register
def _(unc: tuple) -> bool:
    return all(is_zero(component) for component in unc)


@singledispatch
def has_zero(unc: Any) -> bool:
    """True если is_zero(unc) определено."""
    return isinstance(unc, UncZero)


@has_zero.register
def _(unc: numbers.Number) -> bool:
    return True


@has_zero.register
def _(unc: tuple) -> bool:
    return all(has_zero(component) for component in unc)
