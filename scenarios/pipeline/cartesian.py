# scenarios/pipeline/cartesian.py
from __future__ import annotations

from typing import Generic, Iterator, List, Sequence, Tuple, TypeVar

T = TypeVar("T")

_EMPTY = object()


class CartesianProduct(Generic[T]):
    """
    Lazy cartesian product of several groups (odometer / mixed-radix counter).

    Equivalent to nested for-loops with the LAST group varying fastest::

        list(CartesianProduct([[1, 2], [11, 22]]))
        # [(1, 11), (1, 22), (2, 11), (2, 22)]

    - any group empty  -> no tuples at all
    - zero groups      -> exactly one empty tuple
    - groups are only referenced (``iter(group)`` per cursor), so a new
      product over the same groups yields the same order again
    - a product is not restartable once exhausted
    """

    def __init__(self, groups: Sequence[Sequence[T]]):
        self.groups = groups
        self._cursors: List[Iterator[T]] = [iter(g) for g in groups]
        # staged tuple; _EMPTY marks a gap that still has to be filled
        self._current: List[object] = [_EMPTY] * len(groups)
        self._exhausted = False
        self._fill_gaps()

    def __iter__(self) -> "CartesianProduct[T]":
        return self

    def __next__(self) -> Tuple[T, ...]:
        if self._exhausted:
            raise StopIteration
        item = tuple(self._current)
        self._advance()
        return item  # type: ignore[return-value]

    # ---------------- internal ----------------

    def _advance(self) -> None:
        if not self.groups:
            # 零个分组：只产出一次空 tuple
            self._exhausted = True
            return

        # 从最后一组开始进位
        for i in reversed(range(len(self.groups))):
            value = next(self._cursors[i], _EMPTY)
            self._current[i] = value
            if value is not _EMPTY:
                break
            self._cursors[i] = iter(self.groups[i])

        if self._current[0] is _EMPTY:
            # 最左边一组也用完了
            self._exhausted = True
            return
        self._fill_gaps()

    def _fill_gaps(self) -> None:
        for i, value in enumerate(self._current):
            if value is not _EMPTY:
                continue
            value = next(self._cursors[i], _EMPTY)
            if value is _EMPTY:
                # 空分组，整个乘积为空
                self._exhausted = True
                return
            self._current[i] = value


def product(groups: Sequence[Sequence[T]]) -> CartesianProduct[T]:
    return CartesianProduct(groups)


def product_size(groups: Sequence[Sequence[object]]) -> int:
    size = 1
    for g in groups:
        size *= len(g)
    return size
