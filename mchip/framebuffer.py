#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here, and are usually only drawn to the actual display (the
host rendering system) at 60Hz.  The host reads the framebuffer; it never
writes to it.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen using an XOR method.  A sprite is a run of
bytes, one byte per row, with the most significant bit as the leftmost pixel.

Collisions (where any pixel was set, but was unset by an XOR), are reported as
a single flag for the whole sprite.

Pixels which land beyond the right or bottom edge are clipped, unless wrapping
has been enabled, in which case they reappear on the opposite edge.  Sprite
positions are never adjusted before drawing.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import APP_NAME, VID_WIDTH, VID_HEIGHT
from .ram import RAM


class FramebufferError(Exception):
    pass


class Framebuffer():
    def __init__(self, renderer, allow_wrapping=False):
        self.renderer = renderer
        self.allow_wrapping = allow_wrapping
        self.vid_width = 0
        self.vid_height = 0
        self.vid_size = 0
        self.plane = RAM()
        self.content_changed = False
        self.report_perf()
        self.resize_vid(VID_WIDTH, VID_HEIGHT)

    def resize_vid(self, vid_width, vid_height):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = self.vid_width * self.vid_height
        self.plane.resize(self.vid_size)  # Update RAM size
        self.renderer.set_resolution(vid_width, vid_height)  # Update screen resolution
        self.content_changed = True

    def clear(self):
        self.plane.clear()

        for y in range(self.vid_height):
            for x in range(self.vid_width):
                self.renderer.set_pixel(x, y, 0)

        self.content_changed = True

    def get_pixel(self, x, y):
        if not (0 <= x < self.vid_width and 0 <= y < self.vid_height):
            raise FramebufferError("Pixel ({}, {}) is off screen".format(x, y))

        return int(self.plane.read(y * self.vid_width + x) != 0)

    def xor_pixel(self, x, y):
        # Returns flagging any collision, or None if the pixel was clipped

        if self.allow_wrapping:
            x %= self.vid_width
            y %= self.vid_height
        elif x >= self.vid_width or y >= self.vid_height:
            return None

        vram_loc = y * self.vid_width + x
        pixel = self.plane.read(vram_loc)
        collision = (pixel != 0)
        new_pixel = pixel ^ 0xFF
        self.plane.write(vram_loc, new_pixel)
        self.renderer.set_pixel(x, y, int(new_pixel != 0))
        self.content_changed = True

        return collision

    def draw_sprite(self, sprite, x0, y0):
        # Draws each row of the sprite below the previous one.  Returns 1 if any pixel collided, otherwise 0.
        collided = False

        for y, spr_data in enumerate(sprite):
            for x in range(8):
                if spr_data & (0x80 >> x):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    if self.xor_pixel(x0 + x, y0 + y):
                        collided = True

        return int(collided)

    def refresh_display(self):
        self.renderer.refresh_display(self.content_changed)
        self.content_changed = False

    def get_vid_size(self):
        return self.vid_width, self.vid_height

    def report_perf(self, fps=0, ops=0):
        title = "{} - {} FPS, {} OPS".format(APP_NAME, fps, ops)
        self.renderer.set_title(title)
