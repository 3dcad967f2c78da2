# pyglet window around the virtual machine: keyboard in, pixels out.
# Instead of pyglet.app.run() the window is driven by the cadence controller,
# which calls dispatch_events() for input and our render() once per frame.
#
# Layout (in emulated pixels, each `scale` screen pixels wide):
#   top_border rows on top for the "Chip8Emu" title and the FPS / cycles HUD,
#   side_border on the left, right and bottom, the 64x32 screen in the middle.
import pyglet
from pyglet.window import key

from . import log as chip8_log
from .cadence import CadenceController
from .constants import (scale, width, height, window_width, window_height, cpu_hz,
                        top_border, side_border, pixel_outlines, fg_color, bg_color)
from .cpu import CPU
from .display import unpack_color
from .machine import Chip8

# Chip8 Keypad:
# 123C     1234
# 456D     QWER
# 789E     ASDF
# A0BF     ZXCV
keymap = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}

TITLE = "Chip8Emu"
frame_width = (width + 2 * side_border) * scale
frame_height = (height + top_border + side_border) * scale


class Chip8Window(pyglet.window.Window):

    def __init__(self, vm=None, instructions_per_second=cpu_hz, shift_quirk=False,
                 fg=fg_color, bg=bg_color, outlines=pixel_outlines):
        # machine first: pyglet may fire window events while the window is being created
        self.vm = vm if vm is not None else Chip8()
        self.cpu = CPU(shift_quirk=shift_quirk)
        self.cadence = CadenceController(
            self.vm, self.cpu,
            renderer=self.render,
            poll_input=self.dispatch_events,
            instructions_per_second=instructions_per_second,
        )
        self.fg = unpack_color(fg)
        self.bg = unpack_color(bg)
        self.outlines = outlines
        self.image = None

        super().__init__(
            width=frame_width,
            height=frame_height,
            caption="CHIP-8 Emulator - %s" % (self.vm.rom_name or "no ROM"),
            vsync=False
        )
        pyglet.gl.glClearColor(*(c / 255.0 for c in self.bg[:3]), 1.0)

        # Labels for title and HUD, all inside the top border
        top = frame_height - 20
        self.title_label = pyglet.text.Label(
            TITLE,
            font_size=24,
            x=side_border * scale,
            y=top - 10,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.fps_label = pyglet.text.Label(
            "FPS: 0",
            font_size=12,
            x=frame_width - side_border * scale,
            y=top,
            anchor_x='right',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=frame_width - side_border * scale,
            y=top - 20,
            anchor_x='right',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        #creating ImageData once, set_data() updates it every frame
        self.image = pyglet.image.ImageData(
            window_width,
            window_height,
            'RGBA',
            self.frame_pixels().tobytes()
        )

    def frame_pixels(self):
        return self.vm.display.as_rgba(scale, self.fg, self.bg, outline=self.outlines)

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.cadence.quit()
        elif symbol == key.SPACE:
            self.cadence.toggle_pause()
        elif symbol == key.F1:
            chip8_log.set_logs(not chip8_log.logs_on())
            chip8_log.log("logsOn:", chip8_log.logs_on())
        elif symbol in keymap:
            self.vm.set_key(keymap[symbol], True)

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.vm.set_key(keymap[symbol], False)

    def on_close(self):
        self.cadence.quit()

    # ---- Drawing ----
    def on_draw(self):
        self.clear()
        if self.image is None:
            return

        display = self.vm.display
        if display.should_draw:
            self.image.set_data('RGBA', window_width * 4, self.frame_pixels().tobytes())
            display.should_draw = False
        self.image.blit(side_border * scale, side_border * scale)

        self.fps_label.text = f"FPS: {self.cadence.fps:.1f}"
        self.cps_label.text = f"Cycles/s: {self.cadence.cycles_per_second}"
        self.title_label.draw()
        self.fps_label.draw()
        self.cps_label.draw()

    def render(self, display):
        self.switch_to()
        self.on_draw()
        self.flip()

    def run(self):
        try:
            self.cadence.run()
        finally:
            self.close()
