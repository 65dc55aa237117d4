#!/usr/bin/env python3

"""
PyGame Renderer Plugin

Draws the frame onto an SDL window via PyGame.  An offscreen 24-bit buffer the
size of the emulated display is kept up to date pixel by pixel, then stretched
('Nearest Neighbour') to fill the window on refresh, so no pixel is ever drawn
more than once.

The display is monochrome.  A palette gives the background colour for unset
pixels and the foreground colour for set ones.  Optional Scale2x passes smooth
the edges before stretching.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .r_null import RendererError, Renderer as RendererBase
from ..constants import APP_NAME, DEFAULT_PALETTE


def parse_palette(palette):
    # "RRGGBB,RRGGBB" to a list of RGB byte triples.  One colour only replaces the background.
    colours = palette.split(",")

    if len(colours) > 2:
        raise RendererError("Palette defines {} colours, but at most 2 are allowed".format(len(colours)))

    rgb_list = []

    for colour in colours:
        colour = colour.strip()

        if len(colour) != 6:
            raise RendererError("Palette colour '{}' is not 6 hex digits long".format(colour))

        try:
            rgb_list.append(bytes.fromhex(colour))
        except ValueError:
            raise RendererError("Palette colour '{}' is not hexadecimal".format(colour)) from None

    return rgb_list


class Renderer(RendererBase):
    def __init__(self, scale=None, palette=None, smoothing=0, **kwargs):
        if scale is None:
            scale = 640  # Window width

        self.rgb_map = parse_palette(DEFAULT_PALETTE)

        if palette is not None:
            for colour_num, rgb in enumerate(parse_palette(palette)):
                self.rgb_map[colour_num] = rgb

        self.smoothing = smoothing
        self.rgb_buffer = bytearray()
        self.window_size = (scale, scale // 2)
        pygame.display.init()
        self.window = pygame.display.set_mode(self.window_size)
        super().__init__(scale)
        self.set_title(APP_NAME)

    def set_resolution(self, width, height):
        super().set_resolution(width, height)
        self.rgb_buffer = bytearray(self.rgb_map[0] * (width * height))

    def set_pixel(self, x, y, colour):
        super().set_pixel(x, y, colour)
        rgb_loc = (y * self.width + x) * 3
        self.rgb_buffer[rgb_loc:rgb_loc + 3] = self.rgb_map[colour]

    def draw_rows(self, rows):
        # The whole surface is stretched, so the row list only says whether anything changed
        if not self.width:
            return

        surface = pygame.image.frombuffer(self.rgb_buffer, (self.width, self.height), "RGB")

        for _ in range(self.smoothing):
            surface = pygame.transform.scale2x(surface)

        self.window.blit(pygame.transform.scale(surface, self.window_size), (0, 0))
        pygame.display.flip()

    def set_title(self, title):
        pygame.display.set_caption(title)
        super().set_title(title)

    def shutdown(self):
        # Must be called explicitly.  PyGame can segfault if the display is quit from __del__
        pygame.display.quit()
        super().shutdown()
