"""Tests for the board state store."""

import pytest

from board import BoardState
from models import BoardError, Card, Column, UnknownColumnError


def ids(entities):
    return [e.id for e in entities]


class TestDefaultBoard:
    def test_columns_and_cards(self, board):
        assert ids(board.columns) == ["todo", "doing", "done"]
        assert ids(board.cards) == [str(n) for n in range(1, 13)]

    def test_cards_in_is_stable_filter(self, board):
        assert ids(board.cards_in("todo")) == ["1", "2", "8", "9", "10"]
        assert ids(board.cards_in("doing")) == ["3", "4", "11", "12"]
        assert ids(board.cards_in("done")) == ["5", "6", "7"]

    def test_card_count(self, board):
        assert board.card_count("todo") == 5
        assert board.card_count("missing") == 0

    def test_str(self, board):
        assert str(board) == "Todo: 5 cards, Work in progress: 4 cards, Done: 3 cards"
        assert str(BoardState()) == "Empty board"


class TestColumns:
    def test_create_column_appends(self, board):
        column = board.create_column()
        assert len(board.columns) == 4
        assert board.columns[-1] == column
        assert column.title == "Column 4"

    def test_create_column_with_title(self, board):
        revision = board.revision
        column = board.create_column("Backlog")
        assert column.title == "Backlog"
        assert board.revision == revision + 1

    def test_created_ids_are_unique(self):
        board = BoardState()
        created = [board.create_column() for _ in range(5)]
        assert len(set(ids(created))) == 5

    def test_allocation_skips_live_ids(self):
        board = BoardState(columns=[Column("1", "One"), Column("2", "Two")])
        assert board.create_column().id == "3"

    def test_rename_column(self, board):
        board.rename_column("doing", "In progress")
        assert board.column("doing").title == "In progress"
        assert board.column("todo").title == "Todo"

    def test_rename_missing_column_is_noop(self, board):
        before = board.columns
        board.rename_column("nope", "x")
        assert board.columns == before
        assert board.columns is not before

    def test_delete_column_cascades(self, board):
        board.delete_column("todo")
        assert ids(board.columns) == ["doing", "done"]
        assert ids(board.cards) == ["3", "4", "5", "6", "7", "11", "12"]
        live = {c.id for c in board.columns}
        assert all(card.column_id in live for card in board.cards)

    def test_delete_column_is_single_transition(self, board):
        seen = []
        board.subscribe(seen.append)
        board.delete_column("todo")
        assert len(seen) == 1
        assert ids(seen[0].columns) == ["doing", "done"]
        assert "1" not in ids(seen[0].cards)

    def test_delete_missing_column_is_noop(self, board):
        board.delete_column("nope")
        assert len(board.columns) == 3
        assert len(board.cards) == 12


class TestCards:
    def test_create_card(self, board):
        card = board.create_card("doing")
        assert card.id == "13"
        assert card.column_id == "doing"
        assert card.content == "Card 13"
        assert board.cards[-1] == card
        assert len(board.cards) == 13

    def test_create_then_edit(self, board):
        before = {c.id: c for c in board.cards}
        card = board.create_card("doing")
        board.edit_card(card.id, "x")
        assert board.card(card.id).content == "x"
        for other in board.cards[:-1]:
            assert other == before[other.id]

    def test_create_card_in_unknown_column_rejected(self, board):
        revision = board.revision
        with pytest.raises(UnknownColumnError) as excinfo:
            board.create_card("nowhere")
        assert isinstance(excinfo.value, BoardError)
        assert isinstance(excinfo.value, KeyError)
        assert str(excinfo.value) == "Column 'nowhere' not found."
        assert len(board.cards) == 12
        assert board.revision == revision

    def test_edit_missing_card_is_noop(self, board):
        before = board.cards
        board.edit_card("nope", "x")
        assert board.cards == before

    def test_delete_card(self, board):
        board.delete_card("5")
        assert board.card("5") is None
        assert ids(board.cards_in("done")) == ["6", "7"]

    def test_delete_missing_card_is_noop(self, board):
        board.delete_card("nope")
        assert len(board.cards) == 12

    def test_card_index(self, board):
        assert board.card_index("1") == 0
        assert board.card_index("12") == 11
        assert board.card_index("nope") == -1


class TestSnapshots:
    def test_snapshot_not_affected_by_later_mutation(self, board):
        snap = board.snapshot()
        board.edit_card("1", "changed")
        board.delete_column("done")
        assert snap.cards[0].content == "List admin APIs for dashboard"
        assert ids(snap.columns) == ["todo", "doing", "done"]

    def test_revision_increments(self, board):
        start = board.revision
        board.create_column()
        board.rename_column("todo", "T")
        assert board.revision == start + 2

    def test_listeners(self, board):
        seen = []
        board.subscribe(seen.append)
        board.create_card("todo")
        board.unsubscribe(seen.append)
        board.create_card("todo")
        assert len(seen) == 1
        assert seen[0].revision == 1

    def test_commit_keeps_omitted_sequence(self, board):
        cards = board.cards
        board.commit(columns=board.columns[::-1])
        assert board.cards is cards
        assert ids(board.columns) == ["done", "doing", "todo"]

    def test_snapshot_cards_in(self, board):
        assert [c.id for c in board.snapshot().cards_in("done")] == ["5", "6", "7"]

    def test_cards_are_frozen(self, board):
        with pytest.raises(AttributeError):
            board.cards[0].content = "x"  # type: ignore[misc]

    def test_construct_from_entities(self):
        board = BoardState(columns=[Column("a", "A")], cards=[Card("1", "a", "hi")])
        assert board.create_card("a").id == "2"

    def test_card_repr_is_dataclass_repr(self):
        assert repr(Card("1", "a", "hi")) == "Card(id='1', column_id='a', content='hi')"
