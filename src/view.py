"""Terminal rendering of a board snapshot.

Columns are drawn side by side in board order, each card wrapped to its
column width. The entity held by the drag session is flagged with a '*'
so the floating preview of a GUI has a textual counterpart.
"""
from typing import List, Optional, Sequence
from models import IDLE, BoardSnapshot, Card, Column, DragSession
from theme import color, column_color, BOLD, DRAG_COLOR, EMPTY_COLOR, HEADER_COLOR, ID_COLOR
import re, shutil

MIN_COL_WIDTH = 18
SEP = " | "
DRAG_MARK = '*'
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def visible_len(s: str) -> int:
    return len(ANSI_RE.sub('', s))


def render(snapshot: BoardSnapshot, session: DragSession = IDLE, term_width: Optional[int] = None) -> List[str]:
    """Return the board as printable lines (header, rule, rows)."""
    if not snapshot.columns:
        return [color('(no columns; type addcol)', EMPTY_COLOR)]
    if term_width is None:
        term_width = shutil.get_terminal_size((120, 30)).columns
    headers = [_header_text(col, len(snapshot.cards_in(col.id)), session) for col in snapshot.columns]
    widths = compute_column_widths(snapshot, headers, term_width)
    lines = [
        SEP.join(_pad(_header_cell(col, pos, text, session), widths[pos])
                 for pos, (col, text) in enumerate(zip(snapshot.columns, headers))),
        SEP.join(color('-' * w, HEADER_COLOR) for w in widths),
    ]
    wrapped = [_wrap_column(snapshot.cards_in(col.id), widths[pos], session)
               for pos, col in enumerate(snapshot.columns)]
    rows = max(len(cells) for cells in wrapped)
    for r in range(rows):
        lines.append(SEP.join(
            _pad(cells[r], widths[pos]) if r < len(cells) else ' ' * widths[pos]
            for pos, cells in enumerate(wrapped)
        ))
    return lines


def display(snapshot: BoardSnapshot, session: DragSession = IDLE) -> None:
    for line in render(snapshot, session):
        print(line)


# ---- width calculation ----
def compute_column_widths(snapshot: BoardSnapshot, headers: Sequence[str], term_width: int) -> List[int]:
    count = len(snapshot.columns)
    sep_total = len(SEP) * (count - 1)
    widths: List[int] = []
    for col, header in zip(snapshot.columns, headers):
        longest = len(header)
        for card in snapshot.cards_in(col.id):
            longest = max(longest, len(_card_prefix(card, IDLE)) + 1 + len(card.content))
        widths.append(max(MIN_COL_WIDTH, longest))
    total = sum(widths) + sep_total
    if total > term_width:
        target_space = max(term_width - sep_total, count * MIN_COL_WIDTH)
        while sum(widths) > target_space:
            widest = max(range(count), key=lambda i: widths[i])
            if widths[widest] <= MIN_COL_WIDTH:
                break
            widths[widest] -= 1
    else:
        extra = term_width - total
        i = 0
        while extra > 0:
            widths[i % count] += 1
            extra -= 1
            i += 1
    return widths


# ---- headers ----
def _header_text(col: Column, count: int, session: DragSession) -> str:
    mark = DRAG_MARK if _is_dragged_column(col, session) else ''
    return f"{mark}{col.title} [{col.id}] ({count})"


def _header_cell(col: Column, position: int, text: str, session: DragSession) -> str:
    if _is_dragged_column(col, session):
        return color(text, DRAG_COLOR)
    return color(text, column_color(position), BOLD)


def _is_dragged_column(col: Column, session: DragSession) -> bool:
    return session.active_column is not None and session.active_column.id == col.id


def _is_dragged_card(card: Card, session: DragSession) -> bool:
    return session.active_card is not None and session.active_card.id == card.id


# ---- wrapping ----
def _card_prefix(card: Card, session: DragSession) -> str:
    mark = DRAG_MARK if _is_dragged_card(card, session) else ''
    return f"{mark}{card.id}."


def _wrap_column(cards: Sequence[Card], width: int, session: DragSession) -> List[str]:
    if not cards:
        return [color('(empty)', EMPTY_COLOR)]
    acc: List[str] = []
    for card in cards:
        acc.extend(wrap_card(card, width, session))
    return acc


def wrap_card(card: Card, col_width: int, session: DragSession = IDLE) -> List[str]:
    prefix = _card_prefix(card, session)
    limit = max(1, col_width - len(prefix) - 1)
    lines_raw: List[str] = []
    current = ''
    for w in (card.content or '<empty>').split():
        while len(w) > limit:  # hard-break words wider than the column
            if current:
                lines_raw.append(current)
                current = ''
            lines_raw.append(w[:limit])
            w = w[limit:]
        candidate = w if not current else current + ' ' + w
        if len(candidate) <= limit:
            current = candidate
        else:
            lines_raw.append(current)
            current = w
    if current or not lines_raw:
        lines_raw.append(current)
    style = DRAG_COLOR if _is_dragged_card(card, session) else ''
    head = color(prefix, DRAG_COLOR if style else ID_COLOR) + ' '
    indent = ' ' * (len(prefix) + 1)
    out: List[str] = []
    for idx, raw_line in enumerate(lines_raw):
        body = color(raw_line, style) if style else raw_line
        out.append((head if idx == 0 else indent) + body)
    return out


def _pad(cell: str, width: int) -> str:
    pad = width - visible_len(cell)
    return cell + ' ' * pad if pad > 0 else cell
