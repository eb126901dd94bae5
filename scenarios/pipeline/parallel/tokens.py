# scenarios/pipeline/parallel/tokens.py
from __future__ import annotations

from typing import Optional, Set


class PoolToken:
    """
    Opaque permit for one running child.
    Only the ``TokenStock`` that issued it may take it back.
    """

    __slots__ = ("_stock", "_serial")

    def __init__(self, stock: "TokenStock", serial: int):
        self._stock = stock
        self._serial = serial

    def __repr__(self) -> str:
        return f"PoolToken(#{self._serial})"


class TokenStock:
    """
    Fixed-capacity counting pool.

    - ``acquire()`` never blocks; ``None`` means "no token left"
      (the caller decides whether to wait for a child)
    - ``release()`` rejects foreign tokens and double returns
    """

    def __init__(self, max_tokens: int):
        if max_tokens < 1:
            raise ValueError(f"invalid maximum number of tokens: {max_tokens}")
        self.capacity = max_tokens
        self._serial = 0
        self._checked_out: Set[int] = set()

    @property
    def num_remaining(self) -> int:
        return self.capacity - len(self._checked_out)

    @property
    def num_checked_out(self) -> int:
        return len(self._checked_out)

    def acquire(self) -> Optional[PoolToken]:
        if not self.num_remaining:
            return None
        self._serial += 1
        self._checked_out.add(self._serial)
        return PoolToken(self, self._serial)

    def release(self, token: PoolToken) -> None:
        if token._stock is not self:
            raise ValueError(f"{token!r} belongs to a different token stock")
        if token._serial not in self._checked_out:
            raise ValueError(f"{token!r} has already been returned")
        self._checked_out.remove(token._serial)
