"""Interactive command loop for the drag-and-drop board.

Each typed command becomes either a user intent on the BoardState or a
drag lifecycle event on the DragController, and the board is redrawn.
"""
import logging
import os
from typing import List, Optional
from board import BoardState
from drag import DragController
from models import BoardError, DragItem, ItemKind
import view

logger = logging.getLogger(__name__)

# ESC[3J (scrollback), ESC[H (home), ESC[2J (screen), ESC[H (home); 3J first for reliability.
def _clear_screen() -> None:
    print("\033[3J\033[H\033[2J\033[H", end="", flush=True)


def _truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _enter_alt_screen() -> None:
    print("\033[?1049h", end="", flush=True)


def _leave_alt_screen() -> None:
    print("\033[?1049l", end="", flush=True)


KIND_ALIASES = {
    'c': ItemKind.COLUMN,
    'col': ItemKind.COLUMN,
    'column': ItemKind.COLUMN,
    'k': ItemKind.CARD,
    'card': ItemKind.CARD,
}


def parse_item(kind_token: str, id_token: str) -> Optional[DragItem]:
    kind = KIND_ALIASES.get(kind_token.lower())
    if kind is None:
        return None
    return DragItem(kind, id_token)


class CLI:
    def __init__(self, board: BoardState, alt_screen: Optional[bool] = None):
        self.board: BoardState = board
        self.controller: DragController = DragController(board)
        # Alt screen default ON; disable with DRAGBOARD_ALT_SCREEN=0 (or false/no/off)
        if alt_screen is None:
            alt_screen = _truthy_env(os.getenv("DRAGBOARD_ALT_SCREEN"), True)
        self.alt_screen: bool = alt_screen

    def run(self) -> None:
        """Main REPL loop; the board is cleared and redrawn each cycle."""
        exit_message: Optional[str] = None
        if self.alt_screen:
            _enter_alt_screen()
        try:
            while True:
                _clear_screen()
                self.show()
                line = input("\n: ").strip()
                if not line:
                    continue
                lower = line.lower()
                if lower == 'help':
                    _clear_screen()
                    self._help()
                    input("\nPress Enter to return to the board...")
                    continue
                if lower == 'exit':
                    exit_message = "Goodbye."
                    break
                message = self.handle_command(line)
                if message:
                    print(message)
                    input("\nPress Enter to continue...")
        except (KeyboardInterrupt, EOFError):
            exit_message = "Interrupted. Goodbye."
        finally:
            if self.alt_screen:
                _leave_alt_screen()
            if exit_message:
                print(exit_message)

    def show(self) -> None:
        print("Board:")
        view.display(self.board.snapshot(), self.controller.session)
        active = self.controller.session.active
        if active is not None:
            item = DragItem.of(active)
            print(f"\nDragging {item.kind.value} {item.id}; 'over <kind> <id>' to move, 'drop' to release.")

    # -------------------- command dispatch --------------------
    def handle_command(self, line: str) -> Optional[str]:
        """Apply one command; returns a message for the user, if any."""
        tokens = line.split()
        if not tokens:
            return None
        cmd = tokens[0].lower()
        handler = getattr(self, f'_cmd_{cmd}', None)
        if handler is None:
            return "Unknown command. Type 'help' for instructions."
        try:
            return handler(tokens)
        except BoardError as exc:
            logger.debug('command %r rejected: %s', line, exc)
            return str(exc)

    # ---- user intents ----
    def _cmd_addcol(self, tokens: List[str]) -> Optional[str]:
        self.board.create_column(' '.join(tokens[1:]) or None)
        return None

    def _cmd_rencol(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) < 3:
            return "Usage: rencol <column id> <title...>"
        if self.board.column(tokens[1]) is None:
            return f'Column {tokens[1]} not found.'
        self.board.rename_column(tokens[1], ' '.join(tokens[2:]))
        return None

    def _cmd_rmcol(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 2:
            return "Usage: rmcol <column id>"
        if self.board.column(tokens[1]) is None:
            return f'Column {tokens[1]} not found.'
        self.board.delete_column(tokens[1])
        return None

    def _cmd_add(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) < 2:
            return "Usage: add <column id> [content...]"
        card = self.board.create_card(tokens[1])
        content = ' '.join(tokens[2:]).strip()
        if content:
            self.board.edit_card(card.id, content)
        return None

    def _cmd_edit(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) < 3:
            return "Usage: edit <card id> <content...>"
        if self.board.card(tokens[1]) is None:
            return f'Card {tokens[1]} not found.'
        self.board.edit_card(tokens[1], ' '.join(tokens[2:]))
        return None

    def _cmd_rm(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 2:
            return "Usage: rm <card id>"
        raw_id = tokens[1].rstrip('.')
        if self.board.card(raw_id) is None:
            return f'Card {raw_id} not found.'
        self.board.delete_card(raw_id)
        return None

    # ---- drag lifecycle ----
    def _cmd_drag(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 3:
            return "Usage: drag col|card <id>"
        if not self.controller.session.is_idle:
            return "Already dragging; drop first."
        item = parse_item(tokens[1], tokens[2])
        if item is None:
            return "Invalid kind; use col or card."
        entity = self.board.column(item.id) if item.is_column else self.board.card(item.id)
        if entity is None:
            return f'{item.kind.value.capitalize()} {item.id} not found.'
        self.controller.drag_start(entity)
        return None

    def _cmd_over(self, tokens: List[str]) -> Optional[str]:
        active = self.controller.session.active
        if active is None:
            return "Nothing is being dragged."
        if len(tokens) != 3:
            return "Usage: over col|card <id>"
        target = parse_item(tokens[1], tokens[2])
        if target is None:
            return "Invalid kind; use col or card."
        self.controller.drag_over(DragItem.of(active), target)
        return None

    def _cmd_drop(self, tokens: List[str]) -> Optional[str]:
        active = self.controller.session.active
        if active is None:
            return "Nothing is being dragged."
        target: Optional[DragItem] = None
        if len(tokens) == 3:
            target = parse_item(tokens[1], tokens[2])
            if target is None:
                return "Invalid kind; use col or card."
        elif len(tokens) != 1:
            return "Usage: drop [col|card <id>]"
        self.controller.drag_end(DragItem.of(active), target)
        return None

    def _cmd_mv(self, tokens: List[str]) -> Optional[str]:
        if len(tokens) != 5:
            return "Usage: mv col|card <id> col|card <target id>"
        if not self.controller.session.is_idle:
            return "Already dragging; drop first."
        active = parse_item(tokens[1], tokens[2])
        target = parse_item(tokens[3], tokens[4])
        if active is None or target is None:
            return "Invalid kind; use col or card."
        entity = self.board.column(active.id) if active.is_column else self.board.card(active.id)
        if entity is None:
            return f'{active.kind.value.capitalize()} {active.id} not found.'
        self.controller.move(active, target)
        return None

    # -------------------- help --------------------
    def _help(self) -> None:
        print("Commands:")
        print("  addcol [title...]           Add a column (default title 'Column N')")
        print("  rencol <col> <title...>     Rename a column")
        print("  rmcol <col>                 Delete a column and all of its cards")
        print("  add <col> [content...]      Add a card to a column")
        print("  edit <card> <content...>    Replace a card's content")
        print("  rm <card>                   Delete a card")
        print("  drag col|card <id>          Pick up a column or card")
        print("  over col|card <id>          Move the dragged card over a card or column")
        print("  drop [col|card <id>]        Release; dropping a column on a column reorders")
        print("  mv col|card <id> col|card <id>  Whole drag gesture in one step")
        print("  help                        Show this help (press Enter to return)")
        print("  exit                        Exit")
