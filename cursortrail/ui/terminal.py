"""Minimal terminal pane: a text grid with a cursor cell."""
from __future__ import annotations
from dataclasses import dataclass, field

from ..animation.geometry import Rect
from ..config import CELL_WIDTH, CELL_HEIGHT


@dataclass
class TerminalPane:
    """Line buffer plus cursor position, laid out at a pixel origin.

    Editing operations keep the cursor inside the grid; the cursor rect is
    what gets fed to the trail.
    """
    x: int = 0
    y: int = 0
    columns: int = 60
    rows: int = 30
    cell_width: int = CELL_WIDTH
    cell_height: int = CELL_HEIGHT
    lines: list[str] = field(default_factory=lambda: [""])
    row: int = 0
    col: int = 0

    @property
    def pixel_width(self) -> int:
        return self.columns * self.cell_width

    @property
    def pixel_height(self) -> int:
        return self.rows * self.cell_height

    def bounds(self) -> Rect:
        return Rect(self.x, self.y, self.pixel_width, self.pixel_height)

    def cursor_rect(self) -> Rect:
        """Pixel bounds of the cursor cell."""
        return Rect(
            self.x + self.col * self.cell_width,
            self.y + self.row * self.cell_height,
            self.cell_width,
            self.cell_height,
        )

    @property
    def current_line(self) -> str:
        return self.lines[self.row]

    def insert_text(self, text: str) -> None:
        """Type characters at the cursor, wrapping at the right edge."""
        for ch in text:
            if ch == "\n":
                self.newline()
                continue
            if self.col >= self.columns:
                self.newline()
            line = self.current_line
            self.lines[self.row] = line[:self.col] + ch + line[self.col:]
            self.col += 1

    def newline(self) -> None:
        """Split the line at the cursor and move to the next row."""
        line = self.current_line
        self.lines[self.row] = line[:self.col]
        self.lines.insert(self.row + 1, line[self.col:])
        self.row += 1
        self.col = 0
        if len(self.lines) > self.rows:
            # Scroll: drop the oldest line
            del self.lines[0]
            self.row -= 1

    def backspace(self) -> None:
        if self.col > 0:
            line = self.current_line
            self.lines[self.row] = line[:self.col - 1] + line[self.col:]
            self.col -= 1
        elif self.row > 0:
            prev = self.lines[self.row - 1]
            self.lines[self.row - 1] = prev + self.lines.pop(self.row)
            self.row -= 1
            self.col = len(prev)

    def delete_word(self) -> None:
        """Delete back to the start of the previous word (Ctrl+W)."""
        line = self.current_line
        start = self.col
        while start > 0 and line[start - 1] == " ":
            start -= 1
        while start > 0 and line[start - 1] != " ":
            start -= 1
        self.lines[self.row] = line[:start] + line[self.col:]
        self.col = start

    def move(self, d_col: int, d_row: int) -> None:
        """Move the cursor, clamped to existing text."""
        self.row = max(0, min(len(self.lines) - 1, self.row + d_row))
        self.col = max(0, min(len(self.current_line), self.col + d_col))

    def home(self) -> None:
        self.col = 0

    def end(self) -> None:
        self.col = len(self.current_line)
