#!/usr/bin/env python3

"""
Null Renderer Plugin

Base class for the other rendering plugins, and usable by itself when only
debug output is wanted.  Without a real renderer there is no title bar, so
performance figures aren't visible either.

The base class keeps its own copy of the displayed frame, one byte per pixel,
and the set of rows touched since the last refresh.  Subclasses only need to
override 'draw_rows' to put those rows on screen.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class RendererError(Exception):
    pass


class Renderer:
    def __init__(self, scale=None, **kwargs):  # pylint: disable=unused-argument
        self.scale = 1 if scale is None else scale
        self.title = ""
        self.frame = bytearray()
        self.dirty_rows = set()
        self.set_resolution(0, 0)

    def set_resolution(self, width, height):
        self.width = width
        self.height = height
        self.frame = bytearray(width * height)
        self.dirty_rows = set(range(height))

    def set_pixel(self, x, y, colour):
        self.frame[y * self.width + x] = colour
        self.dirty_rows.add(y)

    def get_row(self, y):
        start = y * self.width
        return self.frame[start:start + self.width]

    def refresh_display(self, content_changed=False):
        if content_changed or self.dirty_rows:
            self.draw_rows(sorted(self.dirty_rows))
            self.dirty_rows.clear()

    def draw_rows(self, rows):
        pass

    def set_title(self, title):
        self.title = title

    def shutdown(self):
        pass
