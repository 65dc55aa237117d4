#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.audio.a_null import Audio, square_wave
from mchip.constants import BUZZER_TONE, DEFAULT_KEYMAP
from mchip.inputs.i_null import Inputs, InputsError, parse_keymap
from mchip.keypad import Keypad
from mchip.renderers.r_null import Renderer


class DrawingRenderer(Renderer):
    def __init__(self):
        self.drawn = []
        super().__init__()

    def draw_rows(self, rows):
        self.drawn.append(list(rows))


class TestInputs(unittest.TestCase):
    def test_parse_keymap(self):
        keymap_dict = parse_keymap(DEFAULT_KEYMAP)
        self.assertEqual(16, len(keymap_dict))
        self.assertEqual(list(range(16)), sorted(keymap_dict.values()))

    def test_parse_keymap_lowercase(self):
        keymap = ",".join(str(code) for code in range(ord("A"), ord("A") + 16))
        self.assertEqual(0, parse_keymap(keymap, force_lowercase=True)[ord("a")])
        self.assertEqual(0, parse_keymap(keymap)[ord("A")])

    def test_parse_keymap_errors(self):
        self.assertRaises(InputsError, parse_keymap, "1,2,3")
        self.assertRaises(InputsError, parse_keymap, ",".join(["x"] * 16))
        self.assertRaises(InputsError, parse_keymap, ",".join(["5"] * 16))

    def test_inputs_host_key_changed(self):
        keypad = Keypad()
        inputs = Inputs(",".join(str(code) for code in range(100, 116)), Renderer(), keypad)
        inputs.host_key_changed(103, True)
        self.assertTrue(keypad.is_key_down(3))
        inputs.host_key_changed(999, True)  # Not mapped
        self.assertEqual(1, sum(keypad.is_key_down(key) for key in range(16)))
        inputs.host_key_changed(103, False)
        self.assertFalse(keypad.is_key_down(3))
        self.assertFalse(inputs.process_messages())


class TestRenderer(unittest.TestCase):
    def test_renderer_frame(self):
        renderer = DrawingRenderer()
        renderer.set_resolution(4, 3)
        self.assertEqual(bytearray(12), renderer.frame)
        renderer.set_pixel(1, 2, 1)
        self.assertEqual(bytearray((0, 1, 0, 0)), renderer.get_row(2))

    def test_renderer_draws_dirty_rows_once(self):
        renderer = DrawingRenderer()
        renderer.set_resolution(4, 3)
        renderer.refresh_display(True)
        self.assertEqual([[0, 1, 2]], renderer.drawn)
        renderer.set_pixel(0, 2, 1)
        renderer.set_pixel(3, 1, 1)
        renderer.refresh_display(True)
        self.assertEqual([1, 2], renderer.drawn[-1])
        renderer.refresh_display(False)
        self.assertEqual(2, len(renderer.drawn))

    def test_renderer_title(self):
        renderer = Renderer()
        renderer.set_title("Test")
        self.assertEqual("Test", renderer.title)


class TestAudio(unittest.TestCase):
    def test_square_wave(self):
        wave = square_wave(1000.0, 8000)
        self.assertEqual(b"\xff\xff\xff\xff\x00\x00\x00\x00", wave)
        self.assertEqual(b"\xff\x00", square_wave(20000.0, 8000))

    def test_audio_buzzer(self):
        audio = Audio()
        self.assertEqual(BUZZER_TONE, audio.tone)
        self.assertFalse(audio.buzzer_enabled)
        audio.enable_buzzer(True)
        self.assertTrue(audio.buzzer_enabled)
        audio.set_tone(880.0)
        self.assertEqual(880.0, audio.tone)
