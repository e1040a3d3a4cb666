"""Data models for the drag-and-drop board.

Columns and cards are frozen values; every mutation in the store replaces
them instead of editing in place, so a snapshot handed to the view never
changes underneath it. A card's column membership is its ``column_id``;
its position inside that column is its rank among same-column cards in the
single global card sequence.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Id = str


class BoardError(Exception):
    """Base error for board mutations that cannot be applied."""


class UnknownColumnError(BoardError, KeyError):
    """A card was attached to a column id that is not on the board."""

    def __init__(self, column_id: Id):
        super().__init__(column_id)
        self.column_id = column_id

    def __str__(self) -> str:
        return f'Column {self.column_id!r} not found.'


@dataclass(frozen=True)
class Column:
    """An ordered container of cards.

    Fields:
        id: Unique among columns.
        title: Header text, editable by rename.
    """
    id: Id
    title: str


@dataclass(frozen=True)
class Card:
    """A content-bearing unit owned by exactly one column.

    Fields:
        id: Unique among cards.
        column_id: Id of the owning column (must exist on the board).
        content: Free text shown in the card body.
    """
    id: Id
    column_id: Id
    content: str


Entity = Union[Column, Card]


class ItemKind(Enum):
    COLUMN = 'column'
    CARD = 'card'


@dataclass(frozen=True)
class DragItem:
    """The ``{id, kind}`` pair a drag provider reports for active/over items."""
    kind: ItemKind
    id: Id

    @classmethod
    def of(cls, entity: Entity) -> 'DragItem':
        if isinstance(entity, Column):
            return cls(ItemKind.COLUMN, entity.id)
        return cls(ItemKind.CARD, entity.id)

    @property
    def is_column(self) -> bool:
        return self.kind is ItemKind.COLUMN

    @property
    def is_card(self) -> bool:
        return self.kind is ItemKind.CARD


@dataclass(frozen=True)
class DragSession:
    """What is currently being dragged; at most one field is set."""
    active_column: Optional[Column] = None
    active_card: Optional[Card] = None

    def __post_init__(self) -> None:
        if self.active_column is not None and self.active_card is not None:
            raise ValueError('A drag session holds either a column or a card, not both.')

    @property
    def is_idle(self) -> bool:
        return self.active_column is None and self.active_card is None

    @property
    def active(self) -> Optional[Entity]:
        return self.active_column if self.active_column is not None else self.active_card


IDLE = DragSession()


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable view of the board handed to the presentation layer."""
    columns: Tuple[Column, ...]
    cards: Tuple[Card, ...]
    revision: int = 0

    def cards_in(self, column_id: Id) -> Tuple[Card, ...]:
        return tuple(c for c in self.cards if c.column_id == column_id)
