"""
Capability traits — протоколы распространения неопределённостей

Каждая арифметическая операция контейнера ValUnc описывается отдельным
протоколом с единственным методом. Тип неопределённости реализует только
те протоколы, которые ему нужны (opt-in): операции без реализации у
контейнера просто отсутствуют.

Протоколы:
- UncAdd.unc_add(self_val, other, other_val): сумма
- UncSub.unc_sub(self_val, other, other_val): разность
- UncMul.unc_mul(self_val, other, other_val): произведение
- UncDiv.unc_div(self_val, other, other_val): частное
- UncNeg.unc_neg(): смена знака

Значения операндов передаются в бинарные методы, потому что правило
комбинирования может зависеть от них (относительная погрешность при
умножении). Правила, которым значения не нужны, их игнорируют.

Tuple payload: кортеж неопределённостей поддерживает операцию, если её
поддерживает каждая компонента. Комбинирование выполняется поэлементно
и независимо: позиция i результата зависит только от позиций i операндов.

ИНВАРИАНТЫ:
1. Реализаций по умолчанию нет: отсутствие метода означает отсутствие операции
2. Вычитание никогда не выводится из сложения (отдельный протокол)
3. Кортеж сохраняет свой тип (NamedTuple остаётся NamedTuple)
4. Никакой численной политики (ноль, деление на ноль) на этом уровне нет
"""

from functools import singledispatch
from typing import Any, Callable, Final, Protocol, TypeVar, runtime_checkable

V_contra = TypeVar("V_contra", contravariant=True)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class MissingCapabilityError(TypeError):
    """
    Неопределённость не реализует запрошенный протокол.

    Поднимается только функциями прямого вызова (unc_add и т.д.).
    Операторы ValUnc вместо этого возвращают NotImplemented.
    """


class ArityMismatchError(TypeError):
    """Кортежи неопределённостей разной длины (или кортеж и не-кортеж)."""


# =============================================================================
# ПРОТОКОЛЫ
# =============================================================================


@runtime_checkable
class UncAdd(Protocol[V_contra]):
    """Неопределённость суммы."""

    def unc_add(self, self_val: V_contra, other: Any, other_val: V_contra) -> Any: ...


@runtime_checkable
class UncSub(Protocol[V_contra]):
    """
    Неопределённость разности.

    Не обязана совпадать с UncAdd: это решение реализации, не протокола.
    """

    def unc_sub(self, self_val: V_contra, other: Any, other_val: V_contra) -> Any: ...


@runtime_checkable
class UncMul(Protocol[V_contra]):
    """Неопределённость произведения (обычно зависит от значений операндов)."""

    def unc_mul(self, self_val: V_contra, other: Any, other_val: V_contra) -> Any: ...


@runtime_checkable
class UncDiv(Protocol[V_contra]):
    """Неопределённость частного."""

    def unc_div(self, self_val: V_contra, other: Any, other_val: V_contra) -> Any: ...


@runtime_checkable
class UncNeg(Protocol):
    """Неопределённость при смене знака значения (часто возвращает self)."""

    def unc_neg(self) -> Any: ...


# Имя операции → (протокол, имя метода)
OPERATIONS: Final[dict[str, tuple[type, str]]] = {
    "add": (UncAdd, "unc_add"),
    "sub": (UncSub, "unc_sub"),
    "mul": (UncMul, "unc_mul"),
    "div": (UncDiv, "unc_div"),
    "neg": (UncNeg, "unc_neg"),
}


# =============================================================================
# INTROSPECTION
# =============================================================================


@singledispatch
def supports(unc: Any, op: str) -> bool:
    """
    Проверка, поддерживает ли неопределённость операцию.

    Args:
        unc: Неопределённость или кортеж неопределённостей
        op: Имя операции ("add", "sub", "mul", "div", "neg")

    Returns:
        True если реализован соответствующий протокол

    Raises:
        ValueError: Если имя операции неизвестно

    Examples:
        >>> supports((), "add")
        True
        >>> supports(1.0, "add")
        False
    """
    protocol, _ = _operation(op)
    return isinstance(unc, protocol)


@supports.register
def _(unc: tuple, op: str) -> bool:
    _operation(op)
    return all(supports(component, op) for component in unc)


def capabilities(unc: Any) -> frozenset[str]:
    """Множество операций, доступных для неопределённости."""
    return frozenset(op for op in OPERATIONS if supports(unc, op))


def _operation(op: str) -> tuple[type, str]:
    try:
        return OPERATIONS[op]
    except KeyError:
        raise ValueError(
            f"Unknown operation '{op}'. Choose from: {sorted(OPERATIONS)}"
        ) from None


# =============================================================================
# DISPATCH
# =============================================================================


def _require(unc: Any, op: str) -> Callable[..., Any]:
    """Метод протокола или MissingCapabilityError."""
    protocol, method = OPERATIONS[op]
    if not isinstance(unc, protocol):
        raise MissingCapabilityError(
            f"{type(unc).__name__} does not implement {protocol.__name__}.{method}"
        )
    return getattr(unc, method)


def _check_arity(unc: tuple, other: Any) -> None:
    if not isinstance(other, tuple) or len(other) != len(unc):
        other_len = len(other) if isinstance(other, tuple) else "non-tuple"
        raise ArityMismatchError(
            f"Uncertainty arity mismatch: {len(unc)} vs {other_len}"
        )


def _rebuild(template: tuple, items: list[Any]) -> tuple:
    """Собрать кортеж того же типа, что и template."""
    if hasattr(template, "_make"):
        return template._make(items)
    return tuple(items)


def _binary(op: str) -> Callable[..., Any]:
    """
    Dispatch-функция бинарной операции.

    Для произвольного типа вызывает метод протокола, для кортежа
    комбинирует компоненты поэлементно.
    """

    @singledispatch
    def dispatch(unc: Any, self_val: Any, other: Any, other_val: Any) -> Any:
        return _require(unc, op)(self_val, other, other_val)

    @dispatch.register
    def _(unc: tuple, self_val: Any, other: Any, other_val: Any) -> tuple:
        _check_arity(unc, other)
        return _rebuild(
            unc,
            [
                dispatch(mine, self_val, theirs, other_val)
                for mine, theirs in zip(unc, other)
            ],
        )

    dispatch.__name__ = OPERATIONS[op][1]
    dispatch.__qualname__ = OPERATIONS[op][1]
    dispatch.__doc__ = (
        f"Неопределённость результата операции '{op}'.\n\n"
        f"Args:\n"
        f"    unc: Неопределённость левого операнда\n"
        f"    self_val: Значение левого операнда\n"
        f"    other: Неопределённость правого операнда\n"
        f"    other_val: Значение правого операнда\n\n"
        f"Raises:\n"
        f"    MissingCapabilityError: Если протокол не реализован\n"
        f"    ArityMismatchError: Если кортежи разной длины\n"
    )
    return dispatch


unc_add = _binary("add")
unc_sub = _binary("sub")
unc_mul = _binary("mul")
unc_div = _binary("div")


@singledispatch
def unc_neg(unc: Any) -> Any:
    """
    Неопределённость значения с противоположным знаком.

    Raises:
        MissingCapabilityError: Если UncNeg не реализован
    """
    return _require(unc, "neg")()


@unc_neg.register
def _(unc: tuple) -> tuple:
    return _rebuild(unc, [unc_neg(component) for component in unc])
