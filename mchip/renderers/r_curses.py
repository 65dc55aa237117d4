#!/usr/bin/env python3

"""
Curses Renderer Plugin

Draws the frame in a TTY Terminal, the Windows Command Prompt, or PowerShell.

Every pixel is 'scale' spaces wide, shown inverted when set.  Line 0 of the
terminal holds the title bar, and the frame starts on line 1.  Only rows that
changed are redrawn, unless the terminal has been resized, in which case the
whole frame is.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
from .r_null import Renderer as RendererBase

TITLE_LINES = 1


class Renderer(RendererBase):
    def __init__(self, scale=None, **kwargs):
        if scale is None:
            scale = 2  # Terminal characters are roughly twice as tall as they are wide

        self.pad = None
        self.terminal_size = None
        self.screen = curses.initscr()
        curses.noecho()
        curses.cbreak()
        self.cursor_hidden = self._set_cursor(0)
        super().__init__(scale)

    def set_resolution(self, width, height):
        # One spare column, or curses refuses to write the bottom-right character
        self.pad = curses.newpad(height + TITLE_LINES, width * self.scale + 1)
        super().set_resolution(width, height)

    def draw_rows(self, rows):
        terminal_size = self.screen.getmaxyx()

        if terminal_size != self.terminal_size:
            self.terminal_size = terminal_size
            self.screen.clear()

            if hasattr(curses, "resizeterm"):  # Missing on Windows
                curses.resizeterm(*terminal_size)

            self.screen.refresh()
            self._draw_title()
            rows = range(self.height)

        for y in rows:
            for x, colour in enumerate(self.get_row(y)):
                self.pad.addstr(
                    y + TITLE_LINES, x * self.scale, " " * self.scale, curses.A_REVERSE if colour else curses.A_NORMAL
                )

        self.pad.refresh(0, 0, 0, 0, terminal_size[0] - 1, terminal_size[1] - 1)

    def set_title(self, title):
        super().set_title(title)
        self._draw_title()

    def _draw_title(self):
        title_width = self.width * self.scale

        if self.pad is not None and title_width > len(self.title):
            self.pad.addstr(0, 0, self.title.ljust(title_width), curses.A_REVERSE)
            self.dirty_rows.add(0)  # Forces a pad refresh

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_hidden:
            self._set_cursor(1)

        curses.endwin()
        super().shutdown()

    @staticmethod
    def _set_cursor(visibility):
        # Not every terminal can hide the cursor
        try:
            curses.curs_set(visibility)
        except curses.error:
            return False

        return True

    # No Superclass for this Curses-specific method

    def get_curses_screen(self):
        return self.screen
