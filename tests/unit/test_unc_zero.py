"""
Тесты для нулевого элемента (UncZero) и обёртки Unc

Проверяет:
1. zero_of для чисел, Unc-типов, кортежей, NamedTuple
2. is_zero / has_zero по значению
3. Unc: прозрачная сериализация, порядок, immutability
"""

from decimal import Decimal
from fractions import Fraction

import pytest
from pydantic import ValidationError

from src.valunc import Unc
from src.valunc.traits import MissingCapabilityError, UncZero, has_zero, is_zero, zero_of
from tests.unit.uncertainty_types import ArgsUnc, Budget, StatUnc, SysUnc


# =============================================================================
# ZERO_OF
# =============================================================================


class TestZeroOf:
    """Тесты zero_of"""

    def test_numbers(self) -> None:
        """Числовые типы: kind(0)"""
        assert zero_of(float) == 0.0
        assert isinstance(zero_of(float), float)
        assert zero_of(int) == 0
        assert zero_of(Decimal) == Decimal(0)
        assert zero_of(Fraction) == Fraction(0)

    def test_unc_subclass(self) -> None:
        """Unc-типы: kind.zero()"""
        assert zero_of(StatUnc) == StatUnc(0.0)
        assert isinstance(zero_of(SysUnc), SysUnc)

    def test_tuple_of_types(self) -> None:
        """Обычный кортеж типов"""
        assert zero_of((StatUnc, SysUnc)) == (StatUnc(0.0), SysUnc(0.0))

    def test_tuple_annotation(self) -> None:
        """Аннотация tuple[A, B]"""
        assert zero_of(tuple[StatUnc, float]) == (StatUnc(0.0), 0.0)

    def test_empty_tuple(self) -> None:
        """Пустой кортеж"""
        assert zero_of(()) == ()
        assert zero_of(tuple[()]) == ()

    def test_namedtuple(self) -> None:
        """NamedTuple-класс: поэлементно по аннотациям полей"""
        zero = zero_of(Budget)
        assert isinstance(zero, Budget)
        assert zero == Budget(StatUnc(0.0), SysUnc(0.0))

    def test_variadic_tuple_rejected(self) -> None:
        """tuple[X, ...] — длина неизвестна"""
        with pytest.raises(MissingCapabilityError, match="variadic"):
            zero_of(tuple[float, ...])

    def test_unsupported_kind(self) -> None:
        """Тип без нулевого элемента"""
        with pytest.raises(MissingCapabilityError, match="No zero identity"):
            zero_of(str)
        with pytest.raises(MissingCapabilityError):
            zero_of(ArgsUnc)


# =============================================================================
# IS_ZERO / HAS_ZERO
# =============================================================================


class TestIsZero:
    """Тесты is_zero / has_zero"""

    def test_numbers(self) -> None:
        """Числа сравниваются с 0"""
        assert is_zero(0.0)
        assert is_zero(0)
        assert not is_zero(1e-300)
        assert not is_zero(-0.5)

    def test_unc(self) -> None:
        """Unc-типы используют is_zero()"""
        assert is_zero(StatUnc(0.0))
        assert not is_zero(StatUnc(0.1))

    def test_tuple_all_components(self) -> None:
        """Кортеж нулевой, если нулевые все компоненты"""
        assert is_zero((StatUnc(0.0), SysUnc(0.0)))
        assert not is_zero((StatUnc(0.0), SysUnc(0.1)))
        assert is_zero(())

    def test_missing(self) -> None:
        """Тип без UncZero — MissingCapabilityError"""
        with pytest.raises(MissingCapabilityError, match="UncZero"):
            is_zero(ArgsUnc())

    def test_has_zero(self) -> None:
        """Introspection без исключений"""
        assert has_zero(0.5)
        assert has_zero(StatUnc(0.5))
        assert has_zero((StatUnc(0.5), 0.1))
        assert not has_zero(ArgsUnc())
        assert not has_zero((StatUnc(0.5), ArgsUnc()))

    def test_protocol(self) -> None:
        """Unc реализует протокол UncZero"""
        assert isinstance(StatUnc(1.0), UncZero)
        assert not isinstance(ArgsUnc(), UncZero)


# =============================================================================
# UNC
# =============================================================================


class TestUnc:
    """Тесты обёртки Unc"""

    def test_transparent_serialization(self) -> None:
        """Unc сериализуется как внутреннее значение"""
        assert StatUnc(0.5).model_dump() == 0.5
        assert StatUnc(0.5).model_dump_json() == "0.5"
        assert StatUnc.model_validate(0.5) == StatUnc(0.5)
        assert StatUnc.model_validate_json("0.5") == StatUnc(0.5)

    def test_root_coerced(self) -> None:
        """Unc[float] приводит int к float"""
        assert isinstance(StatUnc(2).root, float)

    def test_zero(self) -> None:
        """zero() возвращает экземпляр того же типа"""
        zero = SysUnc.zero()
        assert isinstance(zero, SysUnc)
        assert zero.is_zero()

    def test_ordering(self) -> None:
        """Порядок по внутреннему значению"""
        assert StatUnc(0.1) < StatUnc(0.2)
        assert StatUnc(0.2) >= StatUnc(0.2)
        assert sorted([StatUnc(3.0), StatUnc(1.0), StatUnc(2.0)]) == [
            StatUnc(1.0),
            StatUnc(2.0),
            StatUnc(3.0),
        ]

    def test_ordering_against_other_types(self) -> None:
        """Сравнение с не-Unc не определено"""
        with pytest.raises(TypeError):
            StatUnc(0.1) < 0.2  # noqa: B015

    def test_equality_is_typed(self) -> None:
        """Разные типы с одинаковым значением не равны"""
        assert StatUnc(1.0) != SysUnc(1.0)

    def test_ordering_is_typed(self) -> None:
        """Разные подклассы Unc не упорядочиваются"""
        with pytest.raises(TypeError):
            StatUnc(0.1) < SysUnc(0.2)  # noqa: B015
        with pytest.raises(TypeError):
            SysUnc(0.2) >= StatUnc(0.1)  # noqa: B015

    def test_immutable(self) -> None:
        """Unc immutable (frozen=True)"""
        unc = StatUnc(1.0)
        with pytest.raises(ValidationError):
            unc.root = 2.0  # type: ignore[misc]

    def test_hashable(self) -> None:
        """Frozen Unc хэшируется"""
        assert len({StatUnc(1.0), StatUnc(1.0), StatUnc(2.0)}) == 2

    def test_generic_unc(self) -> None:
        """Параметризованный Unc без подкласса"""
        assert Unc[int](3).root == 3
        assert Unc[int].zero() == Unc[int](0)
