"""Single-row lookup semantics shared by the estimate components."""

from __future__ import annotations

from typing import Any, Optional, Sequence, TypeVar

from ...models.errors import IncorrectResultSize

T = TypeVar("T")


def expect_single(rows: Sequence[T], *, table: str, key: Any) -> Optional[T]:
    """Return the only row, None when there is none.

    More than one row means the reference data is corrupt; that is never
    resolved by picking one of them.
    """
    if not rows:
        return None
    if len(rows) > 1:
        raise IncorrectResultSize(table, key, actual=len(rows))
    return rows[0]
