"""
ValUnc — значение с неопределённостями

Immutable Pydantic модель: пара (val, unc), где unc это одна неопределённость
или кортеж независимых неопределённостей (по одной на источник ошибки).

Арифметика:
- Значение результата вычисляется оператором самого типа значения
- Неопределённость результата вычисляется capability-протоколом
  (UncAdd, UncSub, UncMul, UncDiv, UncNeg), которому передаются обе
  неопределённости и оба исходных значения

Оператор существует только если неопределённость реализует нужный протокол.
Иначе оператор возвращает NotImplemented и Python поднимает стандартный
TypeError ("unsupported operand type(s)").

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Операции никогда не изменяют операнды (frozen=True), результат всегда новый экземпляр
2. val и unc независимы: знак и величина unc не валидируются
3. Численные ошибки (ZeroDivisionError, NaN, overflow) идут от типа значения как есть
4. Равенство и порядок по полям (val, затем unc)

Пример:
    >>> a = ValUnc(10.2, (StatUnc(4.0), SysUnc(1.25)))
    >>> b = ValUnc(8.5, (StatUnc(3.0), SysUnc(1.25)))
    >>> a + b  # ValUnc(18.7, (StatUnc(5.0), SysUnc(2.5)))
"""

import logging
import numbers
import operator
from functools import total_ordering
from typing import Any, Callable, Generic, Optional, TypeVar

import numpy as np
from pydantic import (
    BaseModel,
    ConfigDict,
    SerializerFunctionWrapHandler,
    model_serializer,
    model_validator,
)
from pydantic_core import PydanticUndefined

from src.valunc import serde
from src.valunc.traits.num import zero_of
from src.valunc.traits.ops import (
    MissingCapabilityError,
    unc_add,
    unc_div,
    unc_mul,
    unc_neg,
    unc_sub,
)
from src.valunc.traits.ops import supports as unc_supports
from src.valunc.unc import Unc

logger = logging.getLogger(__name__)

V = TypeVar("V")
U = TypeVar("U")


@total_ordering
class ValUnc(BaseModel, Generic[V, U]):
    """
    Значение с неопределённостями.

    Immutable модель (frozen=True). Прозрачный контейнер: оба поля
    доступны напрямую, валидации связи между ними нет.

    Параметризация ValUnc[V, U] нужна только для сериализации
    (нулевой элемент U при декодировании голого значения) и from_val.
    """

    val: V
    unc: U

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __init__(
        self, val: Any = PydanticUndefined, unc: Any = PydanticUndefined, /, **data: Any
    ) -> None:
        # Пропущенные поля оставляем pydantic: он поднимет ValidationError
        if val is not PydanticUndefined:
            data["val"] = val
        if unc is not PydanticUndefined:
            data["unc"] = unc
        super().__init__(**data)

    # =========================================================================
    # КОНСТРУКТОРЫ
    # =========================================================================

    @classmethod
    def new(cls, val: V, unc: U) -> "ValUnc[V, U]":
        return cls(val, unc)

    @classmethod
    def from_val(cls, val: V, unc_kind: Any = None) -> "ValUnc[V, U]":
        """
        Значение с нулевой неопределённостью.

        Args:
            val: Значение
            unc_kind: Тип неопределённости; по умолчанию берётся U
                из параметризации ValUnc[V, U]

        Raises:
            MissingCapabilityError: Если нулевой элемент для типа не определён
        """
        kind = unc_kind if unc_kind is not None else cls._unc_kind()
        if kind is None:
            raise MissingCapabilityError(
                "Uncertainty type unknown: pass unc_kind or parametrize ValUnc[V, U]"
            )
        return cls(val, zero_of(kind))

    def as_tuple(self) -> tuple[V, U]:
        return (self.val, self.unc)

    @classmethod
    def _unc_kind(cls) -> Any:
        """Аннотация U, если класс параметризован, иначе None."""
        annotation = cls.model_fields["unc"].annotation
        if isinstance(annotation, TypeVar):
            return None
        return annotation

    def _assemble(self, val: Any, unc: Any) -> "ValUnc[V, U]":
        # Без повторной валидации: int / int -> float для ValUnc[int, ...] допустимо
        return type(self).model_construct(val=val, unc=unc)

    # =========================================================================
    # АРИФМЕТИКА
    # =========================================================================

    def supports(self, op: str) -> bool:
        """
        Доступна ли операция для этого контейнера.

        Args:
            op: "add", "sub", "mul", "div" или "neg"
        """
        return unc_supports(self.unc, op)

    def _binary(
        self,
        other: Any,
        op: str,
        value_op: Callable[[Any, Any], Any],
        unc_op: Callable[[Any, Any, Any, Any], Any],
    ) -> Any:
        if not isinstance(other, ValUnc):
            return NotImplemented
        if not (unc_supports(self.unc, op) and unc_supports(other.unc, op)):
            logger.debug(
                "ValUnc %s unavailable for %s and %s",
                op,
                type(self.unc).__name__,
                type(other.unc).__name__,
            )
            return NotImplemented
        return self._assemble(
            value_op(self.val, other.val),
            unc_op(self.unc, self.val, other.unc, other.val),
        )

    def __add__(self, other: Any) -> "ValUnc[V, U]":
        return self._binary(other, "add", operator.add, unc_add)

    def __sub__(self, other: Any) -> "ValUnc[V, U]":
        return self._binary(other, "sub", operator.sub, unc_sub)

    def __mul__(self, other: Any) -> "ValUnc[V, U]":
        return self._binary(other, "mul", operator.mul, unc_mul)

    def __truediv__(self, other: Any) -> "ValUnc[V, U]":
        return self._binary(other, "div", operator.truediv, unc_div)

    def __neg__(self) -> "ValUnc[V, U]":
        # Для унарных операторов Python не превращает NotImplemented в TypeError
        if not unc_supports(self.unc, "neg"):
            raise TypeError(f"bad operand type for unary -: '{type(self).__name__}'")
        return self._assemble(-self.val, unc_neg(self.unc))

    # =========================================================================
    # ПОРЯДОК
    # =========================================================================

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, ValUnc):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    # =========================================================================
    # SAMPLING
    # =========================================================================

    def sample(self, rng: Optional[np.random.Generator] = None) -> "ValUnc[V, U]":
        """
        Случайное значение из Normal(val, |unc|) с той же неопределённостью.

        Только для скалярной неопределённости (число или Unc с числом).

        Args:
            rng: Генератор numpy; по умолчанию np.random.default_rng()

        Returns:
            self при нулевой неопределённости, иначе новый ValUnc

        Raises:
            MissingCapabilityError: Если неопределённость не скалярная
        """
        scale = _scalar_scale(self.unc)
        if scale == 0:
            return self
        if rng is None:
            rng = np.random.default_rng()
        return self._assemble(float(rng.normal(self.val, scale)), self.unc)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    @model_serializer(mode="wrap")
    def _encode(self, handler: SerializerFunctionWrapHandler) -> Any:
        fields = handler(self)
        if not {"val", "unc"} <= fields.keys():
            # include/exclude: отдаём отфильтрованный словарь полей
            return fields
        collapse = serde.collapses(self.unc)
        encoded = serde.encode(fields["val"], fields["unc"], collapse=collapse)
        logger.debug(
            "Encoding ValUnc as %s", "pair" if isinstance(encoded, tuple) else "bare value"
        )
        return encoded

    @model_validator(mode="before")
    @classmethod
    def _decode(cls, data: Any) -> Any:
        if isinstance(data, (dict, ValUnc)):
            return data
        return serde.decode(data, cls._unc_kind())


def _scalar_scale(unc: Any) -> float:
    if isinstance(unc, Unc):
        unc = unc.root
    if isinstance(unc, numbers.Real):
        return abs(float(unc))
    raise MissingCapabilityError(
        f"Sampling needs a scalar uncertainty, got {type(unc).__name__}"
    )
