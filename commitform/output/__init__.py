"""Terminal Output Formatting Package"""

import re
import sys
import os

from wcwidth import wcwidth


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    INVERT = '\033[7m'
    RED = '\033[31m'
    YELLOW = '\033[33m'


ANSI_RE = re.compile(r'\033\[[0-9;]*[a-zA-Z]')


def supports_color(stream=None) -> bool:
    stream = stream or sys.stdout
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except Exception:
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = supports_color()
UNICODE_ENABLED = _supports_unicode()

CROSS = '✗' if UNICODE_ENABLED else '[X]'


def hex_color(value: str, bg: bool = False) -> str:
    """Convert a #RRGGBB (or #RGB) string to a 24-bit ANSI escape sequence."""
    value = value.lstrip('#')
    if len(value) == 3:
        value = ''.join(c * 2 for c in value)
    try:
        r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        return ''
    layer = 48 if bg else 38
    return f'\033[{layer};2;{r};{g};{b}m'


def color256(index: int) -> str:
    """Foreground escape for the xterm 256-color palette."""
    return f'\033[38;5;{index}m'


def _colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def error(text: str) -> str:
    return _colorize(text, Colors.RED)


def warning(text: str) -> str:
    return _colorize(text, Colors.YELLOW)


def dim(text: str) -> str:
    return _colorize(text, Colors.DIM)


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    text = f"{warning('⚠')} {warning(message)}" if UNICODE_ENABLED else f"[!] {message}"
    print(text, file=sys.stderr)


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub('', text)


def cell_width(char: str) -> int:
    """Terminal columns taken by one character; control characters take none."""
    return max(0, wcwidth(char))


def visible_len(text: str) -> int:
    """Terminal columns taken by text, excluding ANSI control codes.

    East Asian wide characters and most emoji count as two columns.
    """
    return sum(cell_width(char) for char in strip_ansi(text))


def truncate(text: str, width: int) -> str:
    """Cut a styled string to `width` columns without breaking escapes."""
    if width <= 0:
        return ''
    if visible_len(text) <= width:
        return text

    result = []
    seen = 0
    full = False
    pos = 0
    # Plain runs between escapes, then the tail after the last escape
    runs = [(m.start(), m.end(), m.group()) for m in ANSI_RE.finditer(text)]
    runs.append((len(text), len(text), ''))
    for start, end, escape in runs:
        for char in text[pos:start]:
            cells = cell_width(char)
            if full or seen + cells > width:
                # A wide character that doesn't fit is dropped whole
                full = True
                break
            result.append(char)
            seen += cells
        result.append(escape)
        pos = end

    out = ''.join(result)
    # Close any style left open by the cut
    if ANSI_RE.search(out) and not out.endswith(Colors.RESET):
        out += Colors.RESET
    return out


def pad(text: str, width: int) -> str:
    """Truncate or right-pad a styled string to exactly `width` visible columns."""
    text = truncate(text, width)
    return text + ' ' * max(0, width - visible_len(text))


__all__ = [
    "Colors", "ANSI_RE", "supports_color", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CROSS",
    "hex_color", "color256",
    "error", "warning", "dim",
    "print_error", "print_warning",
    "strip_ansi", "cell_width", "visible_len", "truncate", "pad",
]
