"""Board state: ordered columns, the global card sequence, id allocation.

Every mutation builds new tuples and swaps them in as one transition, so
readers holding an earlier snapshot never see a half-applied change.
Lookups are linear scans; boards are small.
"""
import logging
from typing import Callable, Iterable, List, Optional, Tuple
from models import BoardSnapshot, Card, Column, Id, UnknownColumnError

logger = logging.getLogger(__name__)

Listener = Callable[[BoardSnapshot], None]

DEFAULT_COLUMNS: Tuple[Tuple[str, str], ...] = (
    ('todo', 'Todo'),
    ('doing', 'Work in progress'),
    ('done', 'Done'),
)
DEFAULT_CARDS: Tuple[Tuple[str, str, str], ...] = (
    ('1', 'todo', 'List admin APIs for dashboard'),
    ('2', 'todo', 'Develop user registration functionality with OTP delivered on SMS '
                  'after email confirmation and phone number confirmation'),
    ('3', 'doing', 'Conduct security testing'),
    ('4', 'doing', 'Analyze competitors'),
    ('5', 'done', 'Create UI mockups'),
    ('6', 'done', 'Prepare documentation'),
    ('7', 'done', 'Release new version'),
    ('8', 'todo', 'Choose technology stack'),
    ('9', 'todo', 'Implement authentication'),
    ('10', 'todo', 'Set up project structure'),
    ('11', 'doing', 'Design database schema'),
    ('12', 'doing', 'Develop API for user management'),
)


class BoardState:
    def __init__(self, columns: Optional[Iterable[Column]] = None, cards: Optional[Iterable[Card]] = None):
        self._columns: Tuple[Column, ...] = tuple(columns or ())
        self._cards: Tuple[Card, ...] = tuple(cards or ())
        self._revision: int = 0
        self._next_column_id: int = 1
        self._next_card_id: int = 1
        self._listeners: List[Listener] = []

    @classmethod
    def default(cls) -> 'BoardState':
        """The three-column demo board with twelve cards."""
        return cls(
            columns=[Column(id=cid, title=title) for cid, title in DEFAULT_COLUMNS],
            cards=[Card(id=kid, column_id=cid, content=text) for kid, cid, text in DEFAULT_CARDS],
        )

    # -------------------- id management --------------------
    def _allocate_column_id(self) -> Id:
        live = {c.id for c in self._columns}
        while str(self._next_column_id) in live:
            self._next_column_id += 1
        nid = str(self._next_column_id)
        self._next_column_id += 1
        return nid

    def _allocate_card_id(self) -> Id:
        live = {c.id for c in self._cards}
        while str(self._next_card_id) in live:
            self._next_card_id += 1
        nid = str(self._next_card_id)
        self._next_card_id += 1
        return nid

    # -------------------- queries --------------------
    @property
    def columns(self) -> Tuple[Column, ...]:
        return self._columns

    @property
    def cards(self) -> Tuple[Card, ...]:
        return self._cards

    @property
    def revision(self) -> int:
        return self._revision

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(columns=self._columns, cards=self._cards, revision=self._revision)

    def column(self, column_id: Id) -> Optional[Column]:
        for col in self._columns:
            if col.id == column_id:
                return col
        return None

    def card(self, card_id: Id) -> Optional[Card]:
        for card in self._cards:
            if card.id == card_id:
                return card
        return None

    def column_index(self, column_id: Id) -> int:
        """Position of the column, or -1."""
        for idx, col in enumerate(self._columns):
            if col.id == column_id:
                return idx
        return -1

    def card_index(self, card_id: Id) -> int:
        """Position of the card in the global sequence, or -1."""
        for idx, card in enumerate(self._cards):
            if card.id == card_id:
                return idx
        return -1

    def cards_in(self, column_id: Id) -> Tuple[Card, ...]:
        return tuple(c for c in self._cards if c.column_id == column_id)

    def card_count(self, column_id: Id) -> int:
        return sum(1 for c in self._cards if c.column_id == column_id)

    # -------------------- listeners --------------------
    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def commit(self, columns: Optional[Iterable[Column]] = None, cards: Optional[Iterable[Card]] = None) -> BoardSnapshot:
        """Swap in new sequences as a single transition and notify listeners.

        Either argument may be omitted to keep the current sequence.
        """
        if columns is not None:
            self._columns = tuple(columns)
        if cards is not None:
            self._cards = tuple(cards)
        self._revision += 1
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)
        return snap

    # -------------------- column operations --------------------
    def create_column(self, title: Optional[str] = None) -> Column:
        """Append a column; without a title it is named 'Column N'."""
        column = Column(id=self._allocate_column_id(), title=title or f'Column {len(self._columns) + 1}')
        self.commit(columns=self._columns + (column,))
        logger.debug('created column %s', column.id)
        return column

    def rename_column(self, column_id: Id, title: str) -> None:
        self.commit(columns=[
            Column(id=col.id, title=title) if col.id == column_id else col
            for col in self._columns
        ])

    def delete_column(self, column_id: Id) -> None:
        """Remove the column and every card it owns in one transition."""
        remaining_cards = [c for c in self._cards if c.column_id != column_id]
        dropped = len(self._cards) - len(remaining_cards)
        self.commit(
            columns=[col for col in self._columns if col.id != column_id],
            cards=remaining_cards,
        )
        logger.debug('deleted column %s with %d card(s)', column_id, dropped)

    # -------------------- card operations --------------------
    def create_card(self, column_id: Id) -> Card:
        if self.column(column_id) is None:
            logger.warning('refusing to create card in unknown column %s', column_id)
            raise UnknownColumnError(column_id)
        card = Card(id=self._allocate_card_id(), column_id=column_id, content=f'Card {len(self._cards) + 1}')
        self.commit(cards=self._cards + (card,))
        logger.debug('created card %s in column %s', card.id, column_id)
        return card

    def edit_card(self, card_id: Id, content: str) -> None:
        self.commit(cards=[
            Card(id=c.id, column_id=c.column_id, content=content) if c.id == card_id else c
            for c in self._cards
        ])

    def delete_card(self, card_id: Id) -> None:
        self.commit(cards=[c for c in self._cards if c.id != card_id])

    def __str__(self) -> str:
        return ', '.join(f'{col.title}: {self.card_count(col.id)} cards' for col in self._columns) or 'Empty board'
