"""
Unc — прозрачная обёртка одной неопределённости

Immutable Pydantic RootModel: сериализуется как само внутреннее значение
(Unc(0.5) → 0.5), сравнивается и упорядочивается по нему же.

Unc реализует только нулевой элемент (UncZero). Правила распространения
(UncAdd, UncSub, ...) добавляют подклассы, например:

    class StatUnc(Unc[float]):
        def unc_add(self, self_val, other, other_val):
            return StatUnc(math.hypot(self.root, other.root))
"""

from functools import total_ordering
from typing import Any, Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")


@total_ordering
class Unc(RootModel[T], Generic[T]):
    """
    Неопределённость с одним значением.

    Immutable модель (frozen=True). Базовый класс для конкретных
    типов неопределённостей: Type A (статистическая), Type B
    (систематическая) и т.д.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def zero(cls) -> "Unc[T]":
        """Нулевая неопределённость данного типа."""
        return cls(0)

    def is_zero(self) -> bool:
        return self.root == 0

    def __lt__(self, other: Any) -> bool:
        # Порядок только внутри одного типа, как и равенство
        if type(other) is not type(self):
            return NotImplemented
        return self.root < other.root
