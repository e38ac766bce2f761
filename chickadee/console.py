"""An in-memory CGA text console with ANSI color escape support."""

from __future__ import annotations

from typing import Any, Union

from chickadee.printf import COLOR_GRAY, Printer
from chickadee.text import isdigit

CONSOLE_COLUMNS = 80
CONSOLE_ROWS = 25
END_CPOS = CONSOLE_ROWS * CONSOLE_COLUMNS

CONSOLE_NORMAL = 0
CONSOLE_MEMVIEWER = 1

COLOR_WHITE = 0x0F00
COLOR_ERROR = 0xCF00
COLOR_SUCCESS = 0x0A00

CS_NORMAL = "\x1b[m"
CS_WHITE = "\x1b[1m"
CS_GREEN = "\x1b[32m"
CS_ERROR = "\x1b[41;1m"
CS_SUCCESS = "\x1b[32;1m"
CS_ECHO = "\x1b[36m"

_ESC = 0x1B
_ESCAPE_BUFFER_SIZE = 12
_COLORMAP = (0, 4, 2, 6, 1, 5, 3, 7)
_BLANK = ord(" ") | COLOR_GRAY


def cpos(row: int, col: int) -> int:
    """Return the cell index of row `row`, column `col`."""
    return row * CONSOLE_COLUMNS + col


class AnsiEscapeBuffer:
    """Collects `ESC [ ... m` sequences and turns them into color changes."""

    def __init__(self) -> None:
        self._chars: list[int] = []
        self._flushing = False

    def __len__(self) -> int:
        return len(self._chars)

    def putc(self, c: int, printer: Printer) -> bool:
        """Offer `c` to the buffer; return True if the buffer consumed it."""
        if self._flushing or (not self._chars and c != _ESC):
            return False
        self._putc_impl(c, printer)
        return True

    def flush(self, printer: Printer) -> None:
        """Emit any collected characters to `printer` unchanged."""
        if not self._chars:
            return
        pending = list(self._chars)
        self._flushing = True
        try:
            for c in pending:
                printer.putc(c)
        finally:
            self._chars.clear()
            self._flushing = False

    def _putc_impl(self, c: int, printer: Printer) -> None:
        self._chars.append(c)
        n = len(self._chars)
        if (
            n == 1
            or (n == 2 and c == ord("["))
            or (2 < n < _ESCAPE_BUFFER_SIZE and (isdigit(c) or c == ord(";")))
        ):
            return
        if c != ord("m"):
            self.flush(printer)
            return

        x = 0
        color = COLOR_GRAY
        for b in self._chars[2:]:
            if isdigit(b):
                x = x * 10 + b - ord("0")
                continue
            if x == 0:
                color = COLOR_GRAY
            elif x == 1:
                color |= 0x0800
            elif x == 2:
                color &= ~0x0800
            elif x == 7:
                color = ((color >> 4) | (color << 4)) & 0xFF00
            elif 30 <= x <= 37:
                color = (color & 0xF000) | (_COLORMAP[x - 30] << 8)
            elif 40 <= x <= 47:
                color = (color & 0x0F00) | (_COLORMAP[x - 40] << 12)
            elif 90 <= x <= 97:
                color = (color & 0xF000) | (_COLORMAP[x - 90] << 8) | 0x0800
            elif 100 <= x <= 107:
                color = (color & 0x0F00) | (_COLORMAP[x - 100] << 12) | 0x8000
            x = 0
        printer.color = color
        self._chars.clear()


class Console:
    """A grid of 16-bit cells: character in the low byte, color above it."""

    def __init__(self) -> None:
        self.cells: list[int] = [_BLANK] * END_CPOS
        self.cursorpos = 0

    def clear(self) -> None:
        """Blank every cell and move the cursor to the top left."""
        self.cells[:] = [_BLANK] * END_CPOS
        self.cursorpos = 0

    def puts(self, cpos: int, color: int, s: Union[str, bytes]) -> int:
        """Write every character of `s` starting at `cpos` in `color`.

        A negative `cpos` writes at the cursor, scrolls when needed and
        moves the cursor. Returns the final position.
        """
        printer = ConsolePrinter(self, cpos, cpos < 0)
        printer.color = color
        codes = s if isinstance(s, (bytes, bytearray)) else [ord(ch) for ch in s]
        for c in codes:
            printer.putc(c)
        if cpos < 0:
            printer.move_cursor()
        return printer.cell

    def printf(self, cpos: int, format: str, *args: Any) -> int:
        """Print formatted text starting at `cpos` (the cursor if negative).

        Returns the final position.
        """
        printer = ConsolePrinter(self, cpos, cpos < 0)
        printer.printf(format, *args)
        if cpos < 0:
            printer.move_cursor()
        return printer.cell

    def row_text(self, row: int) -> str:
        """Return the characters of one row, without colors."""
        if not 0 <= row < CONSOLE_ROWS:
            raise IndexError(f"row {row} out of range")
        start = cpos(row, 0)
        return "".join(
            chr(cell & 0xFF) for cell in self.cells[start : start + CONSOLE_COLUMNS]
        )


class ConsolePrinter(Printer):
    """A printer that writes into a `Console`."""

    def __init__(self, console: Console, cpos: int, scroll: bool) -> None:
        super().__init__()
        self.console = console
        self.scrolling = scroll
        self.ebuf = AnsiEscapeBuffer()
        if cpos < 0:
            self.cell = console.cursorpos
        elif cpos <= END_CPOS:
            self.cell = cpos
        else:
            self.cell = 0

    def putc(self, c: int) -> None:
        if self.ebuf.putc(c, self):
            return
        while self.cell >= END_CPOS:
            self.scroll()
        cells = self.console.cells
        if c == ord("\n"):
            for _ in range(self.cell % CONSOLE_COLUMNS, CONSOLE_COLUMNS):
                cells[self.cell] = ord(" ") | self.color
                self.cell += 1
        else:
            cells[self.cell] = (c & 0xFF) | self.color
            self.cell += 1

    def scroll(self) -> None:
        """Make room past the last cell: scroll up a row, or wrap to the top."""
        if self.cell < END_CPOS:
            raise RuntimeError("scroll called before reaching the end of the console")
        if self.scrolling:
            cells = self.console.cells
            cells[: END_CPOS - CONSOLE_COLUMNS] = cells[CONSOLE_COLUMNS:END_CPOS]
            cells[END_CPOS - CONSOLE_COLUMNS : END_CPOS] = [0] * CONSOLE_COLUMNS
            self.cell -= CONSOLE_COLUMNS
        else:
            self.cell = 0

    def move_cursor(self) -> None:
        """Flush pending escape characters and put the cursor at this position."""
        self.ebuf.flush(self)
        self.console.cursorpos = self.cell