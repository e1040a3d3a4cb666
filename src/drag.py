"""Drag session controller.

Interprets the three drag lifecycle events against a BoardState:

- drag start records what is being dragged (a column or a card);
- drag over moves cards live, including across columns;
- drag end clears the session and commits column reorders.

The session is an immutable DragSession value; every handler returns the
session it leaves behind so callers (and tests) can inspect it directly.
"""
import logging
from typing import Optional
from board import BoardState
from models import IDLE, Card, Column, DragItem, DragSession, Entity
from ordering import move_element

logger = logging.getLogger(__name__)


class DragController:
    def __init__(self, board: BoardState, session: DragSession = IDLE):
        self.board: BoardState = board
        self.session: DragSession = session

    # -------------------- lifecycle events --------------------
    def drag_start(self, entity: Optional[Entity]) -> DragSession:
        """Record the dragged column or card; anything else leaves the session idle."""
        if isinstance(entity, Column):
            self.session = DragSession(active_column=entity)
        elif isinstance(entity, Card):
            self.session = DragSession(active_card=entity)
        else:
            logger.debug('drag start ignored for %r', entity)
        return self.session

    def drag_over(self, active: DragItem, over: Optional[DragItem]) -> DragSession:
        """Reflow cards while the pointer moves; columns wait for drag end."""
        if over is None or active.id == over.id:
            return self.session
        if not active.is_card:
            return self.session
        if over.is_card:
            self._card_over_card(active, over)
        else:
            self._card_over_column(active, over)
        return self.session

    def drag_end(self, active: DragItem, over: Optional[DragItem]) -> DragSession:
        self.session = IDLE
        if over is None or active.id == over.id:
            return self.session
        if not active.is_column:
            return self.session
        if not over.is_column:
            logger.debug('column %s dropped on non-column %s; ignored', active.id, over.id)
            return self.session
        columns = self.board.columns
        active_index = self.board.column_index(active.id)
        over_index = self.board.column_index(over.id)
        if active_index < 0 or over_index < 0:
            return self.session
        logger.debug('drag end: column %s %d -> %d', active.id, active_index, over_index)
        self.board.commit(columns=move_element(columns, active_index, over_index))
        return self.session

    def move(self, active: DragItem, over: Optional[DragItem]) -> DragSession:
        """One full start/over/end gesture for ``active`` released on ``over``."""
        entity = self.board.column(active.id) if active.is_column else self.board.card(active.id)
        self.drag_start(entity)
        self.drag_over(active, over)
        return self.drag_end(active, over)

    # -------------------- card reflow --------------------
    def _card_over_card(self, active: DragItem, over: DragItem) -> None:
        cards = self.board.cards
        active_index = self.board.card_index(active.id)
        over_index = self.board.card_index(over.id)
        if active_index < 0 or over_index < 0:
            return
        dragged, target = cards[active_index], cards[over_index]
        if dragged.column_id != target.column_id:
            # insert just before the target, compensating for the removal shift
            moved = list(cards)
            rehomed = Card(id=dragged.id, column_id=target.column_id, content=dragged.content)
            moved[active_index] = rehomed
            self._follow(rehomed)
            to_index = max(over_index - 1, 0)
            logger.debug('drag over: card %s -> column %s at %d', dragged.id, target.column_id, to_index)
            self.board.commit(cards=move_element(moved, active_index, to_index))
            return
        self.board.commit(cards=move_element(cards, active_index, over_index))

    def _card_over_column(self, active: DragItem, over: DragItem) -> None:
        active_index = self.board.card_index(active.id)
        if active_index < 0 or self.board.column(over.id) is None:
            return
        dragged = self.board.cards[active_index]
        moved = list(self.board.cards)
        rehomed = Card(id=dragged.id, column_id=over.id, content=dragged.content)
        moved[active_index] = rehomed
        self._follow(rehomed)
        logger.debug('drag over: card %s dropped over column %s at %d', dragged.id, over.id, active_index)
        self.board.commit(cards=move_element(moved, active_index, active_index))

    def _follow(self, card: Card) -> None:
        """Keep the session's active card in step with its re-homed copy."""
        if self.session.active_card is not None and self.session.active_card.id == card.id:
            self.session = DragSession(active_card=card)
