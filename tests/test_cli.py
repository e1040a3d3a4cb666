"""Tests for the interactive command loop."""

import pytest

from cli import CLI, parse_item
from models import DragItem, ItemKind


def ids(entities):
    return [e.id for e in entities]


@pytest.fixture
def cli(board):
    return CLI(board, alt_screen=False)


class TestParseItem:
    @pytest.mark.parametrize("token,kind", [
        ("col", ItemKind.COLUMN), ("c", ItemKind.COLUMN), ("Column", ItemKind.COLUMN),
        ("card", ItemKind.CARD), ("k", ItemKind.CARD),
    ])
    def test_aliases(self, token, kind):
        assert parse_item(token, "7") == DragItem(kind, "7")

    def test_unknown_kind(self):
        assert parse_item("row", "7") is None


class TestIntents:
    def test_addcol(self, cli, board):
        assert cli.handle_command("addcol") is None
        assert board.columns[-1].title == "Column 4"

    def test_addcol_with_title(self, cli, board):
        cli.handle_command("addcol Backlog items")
        assert board.columns[-1].title == "Backlog items"

    def test_addcol_with_title_is_one_transition(self, cli, board):
        seen = []
        board.subscribe(seen.append)
        cli.handle_command("addcol Backlog")
        assert len(seen) == 1
        assert seen[0].columns[-1].title == "Backlog"

    def test_rencol(self, cli, board):
        cli.handle_command("rencol done Shipped")
        assert board.column("done").title == "Shipped"

    def test_rencol_missing(self, cli):
        assert cli.handle_command("rencol nope X") == "Column nope not found."

    def test_rmcol(self, cli, board):
        cli.handle_command("rmcol todo")
        assert ids(board.columns) == ["doing", "done"]
        assert board.card("1") is None

    def test_add_with_content(self, cli, board):
        cli.handle_command("add doing write tests")
        assert board.cards[-1].content == "write tests"
        assert board.cards[-1].column_id == "doing"

    def test_add_to_unknown_column(self, cli, board):
        assert cli.handle_command("add nowhere") == "Column 'nowhere' not found."
        assert len(board.cards) == 12

    def test_edit_and_rm(self, cli, board):
        cli.handle_command("edit 4 Compare pricing")
        assert board.card("4").content == "Compare pricing"
        cli.handle_command("rm 4.")
        assert board.card("4") is None

    def test_usage_messages(self, cli):
        assert cli.handle_command("rm").startswith("Usage")
        assert cli.handle_command("edit 4").startswith("Usage")

    def test_unknown_command(self, cli):
        assert "Unknown command" in cli.handle_command("frobnicate")


class TestDragCommands:
    def test_drag_over_drop_card(self, cli, board):
        assert cli.handle_command("drag card 1") is None
        assert cli.controller.session.active_card.id == "1"
        cli.handle_command("over col doing")
        cli.handle_command("drop")
        assert board.card("1").column_id == "doing"
        assert cli.controller.session.is_idle

    def test_drop_column(self, cli, board):
        cli.handle_command("drag col todo")
        cli.handle_command("drop col done")
        assert ids(board.columns) == ["doing", "done", "todo"]

    def test_mv_card(self, cli, board):
        cli.handle_command("mv card 1 card 5")
        assert ids(board.cards_in("done")) == ["1", "5", "6", "7"]

    def test_drag_missing(self, cli):
        assert cli.handle_command("drag card 99") == "Card 99 not found."

    def test_drag_twice(self, cli):
        cli.handle_command("drag card 1")
        assert cli.handle_command("drag card 2") == "Already dragging; drop first."

    def test_over_and_drop_when_idle(self, cli):
        assert cli.handle_command("over card 1") == "Nothing is being dragged."
        assert cli.handle_command("drop") == "Nothing is being dragged."

    def test_invalid_kind(self, cli):
        assert cli.handle_command("drag row 1") == "Invalid kind; use col or card."


class TestRun:
    def test_run_until_exit(self, cli, board, monkeypatch, capsys):
        lines = iter(["addcol", "", "mv col todo col done", "exit"])
        monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
        cli.run()
        out = capsys.readouterr().out
        assert "Goodbye." in out
        assert ids(board.columns) == ["doing", "done", "todo", "1"]

    def test_show_mentions_active_drag(self, cli, capsys):
        cli.handle_command("drag card 3")
        cli.show()
        assert "Dragging card 3" in capsys.readouterr().out

    def test_interrupt(self, cli, monkeypatch, capsys):
        def boom(prompt=""):
            raise EOFError
        monkeypatch.setattr("builtins.input", boom)
        cli.run()
        assert "Interrupted. Goodbye." in capsys.readouterr().out
