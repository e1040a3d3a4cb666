"""List reordering helpers shared by column and card moves."""
from __future__ import annotations
from typing import Sequence, Tuple, TypeVar

T = TypeVar('T')


def move_element(items: Sequence[T], from_index: int, to_index: int) -> Tuple[T, ...]:
    """Return a copy of ``items`` with the element at ``from_index`` moved to ``to_index``.

    Elements between the two positions shift by one slot; everything else keeps
    its place. ``from_index == to_index`` returns an equal (but new) tuple.
    Raises IndexError when either index is outside ``0 <= i < len(items)``.
    """
    size = len(items)
    if not 0 <= from_index < size:
        raise IndexError(f'from_index {from_index} out of range for {size} items')
    if not 0 <= to_index < size:
        raise IndexError(f'to_index {to_index} out of range for {size} items')
    moved = list(items)
    moved.insert(to_index, moved.pop(from_index))
    return tuple(moved)
