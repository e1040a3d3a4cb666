"""Color & style helpers for the board view.

Decisions:
- Truecolor preferred; falls back to the 256-color cube if unsupported.
- Disabled when not a TTY unless FORCE_COLOR=1; NO_COLOR disables outright.
- Palette overrides come from the environment first, then a project .env file.
- Columns have no fixed status, so headers cycle through a small palette.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = _ENABLE and any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

PALETTE_KEYS = ('DRAGBOARD_PRIMARY', 'DRAGBOARD_ACCENT', 'DRAGBOARD_MUTED')


def _code(part: str) -> str:
    return f"\033[{part}m" if _ENABLE else ''


def _is_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)


def _hex_to_rgb(hex_code: str) -> tuple[int, int, int]:
    h = hex_code.lstrip('#')
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    return f"\033[38;5;{16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)}m"


def _from_hex(hex_code: str) -> str:
    if not _ENABLE:
        return ''
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)


def load_env_overrides(env_path: Path) -> dict[str, str]:
    """Read palette keys from a dotenv-style file; malformed lines are skipped."""
    overrides: dict[str, str] = {}
    try:
        text = env_path.read_text()
    except OSError as exc:
        logger.debug('palette overrides unavailable from %s: %s', env_path, exc)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = (part.strip() for part in line.split('=', 1))
        if k in PALETTE_KEYS and _is_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides


def _resolve(key: str, default: str, overrides: dict[str, str]) -> str:
    value = os.environ.get(key)
    if value and _is_hex(value):
        return '#' + value.lstrip('#')
    return overrides.get(key, default)


RESET = _code('0')
BOLD = _code('1')
DIM = _code('2')

HEX_PRIMARY_DEFAULT = '#476EAE'
HEX_ACCENT_DEFAULT = '#F43F5E'
HEX_MUTED_DEFAULT = '#8A8F98'
HEX_COLUMN_CYCLE = ('#48B3AF', '#F6FF99', '#A7E399', '#C9A7EB')

_env_path = Path(__file__).resolve().parent.parent / '.env'
_ENV_OVERRIDES = load_env_overrides(_env_path) if _env_path.exists() else {}

HEX_PRIMARY = _resolve('DRAGBOARD_PRIMARY', HEX_PRIMARY_DEFAULT, _ENV_OVERRIDES)
HEX_ACCENT = _resolve('DRAGBOARD_ACCENT', HEX_ACCENT_DEFAULT, _ENV_OVERRIDES)
HEX_MUTED = _resolve('DRAGBOARD_MUTED', HEX_MUTED_DEFAULT, _ENV_OVERRIDES)

PRIMARY = _from_hex(HEX_PRIMARY)
HEADER_COLOR = PRIMARY
ID_COLOR = PRIMARY + BOLD
DRAG_COLOR = _from_hex(HEX_ACCENT) + BOLD
EMPTY_COLOR = DIM + _from_hex(HEX_MUTED)
COLUMN_COLORS = tuple(_from_hex(h) for h in HEX_COLUMN_CYCLE)


def column_color(position: int) -> str:
    """Header color for the column at ``position`` (left to right)."""
    return COLUMN_COLORS[position % len(COLUMN_COLORS)]


def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET


__all__ = [
    'color', 'column_color', 'load_env_overrides', 'RESET', 'BOLD', 'DIM',
    'HEADER_COLOR', 'ID_COLOR', 'DRAG_COLOR', 'EMPTY_COLOR', 'COLUMN_COLORS',
    'HEX_PRIMARY', 'HEX_ACCENT', 'HEX_MUTED', '_ENABLE', '_USE_TRUECOLOR', '_FORCE',
]
