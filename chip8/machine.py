# CHIP8 Virtual Machine state:
# Memory - 4096 bytes, fonts at 0x000 and the ROM at 0x200.
# Registers - 16 8-bit registers (V0..VF), the I register and the program counter.
# Stack - return addresses for subroutine calls (see stack.py).
# Timers - delay and sound, both counted down at 60Hz by the cadence controller.
# Display - 64x32 framebuffer (see display.py).
# Input - 16 key states written by whoever owns the keyboard.
#----------------------------------------------------------------------------------------------
# Everything lives on one Chip8 object that gets passed to the CPU, so several
# machines can run side by side (and tests can build as many as they like).
import enum

import numpy as np

from .constants import (MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE, ADDRESS_MASK,
                        REGISTER_COUNT, KEY_COUNT, FONTSET, width, height)
from .display import Display
from .errors import LoadError
from .log import logger
from .stack import CallStack


class State(enum.Enum):
    QUIT = 0
    RUNNING = 1
    PAUSED = 2


class Chip8:

    def __init__(self, w=width, h=height):
        # ---- CPU state ----
        self.memory = bytearray(MEMORY_SIZE)
        self.V = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = CallStack()
        self.delay = 0
        self.sound = 0
        self.display = Display(w, h)
        self.keys = np.zeros(KEY_COUNT, dtype=bool)

        self.state = State.RUNNING
        self.fault = None
        self.rom_name = None
        self.rom_size = 0

        self.load_fonts()

    def load_fonts(self):
        self.memory[:len(FONTSET)] = bytes(FONTSET)

    def reset(self):
        # Power-on state, but keep whatever ROM is in memory
        self.V = [0] * REGISTER_COUNT
        self.I = 0
        self.pc = PROGRAM_START
        self.stack.reset()
        self.delay = 0
        self.sound = 0
        self.display.clear()
        self.keys[:] = False
        self.state = State.RUNNING
        self.fault = None
        self.load_fonts()

    # ---- Load ROM ----
    def load_program(self, data):
        # bytes() would treat an int as a length, so only take real byte buffers
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise LoadError("ROM image must be bytes, got %s" % type(data).__name__)
        data = bytes(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise LoadError("ROM size %d ... max allowed size %d" % (len(data), MAX_PROGRAM_SIZE))

        self.memory[:] = bytes(MEMORY_SIZE)
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
        self.rom_size = len(data)
        self.reset()
        return True

    def load_rom(self, path):
        logger.info("Loading ROM: %s", path)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise LoadError("chip8 ROM file %s cannot be read: %s" % (path, e)) from e
        self.load_program(data)
        self.rom_name = str(path)
        return True

    # ---- Memory ----
    def read_byte(self, addr):
        return self.memory[addr & ADDRESS_MASK]

    def write_byte(self, addr, value):
        self.memory[addr & ADDRESS_MASK] = value & 0xFF

    def read_block(self, addr, n):
        # n bytes from addr, wrapping past the top of memory
        return [self.memory[(addr + i) & ADDRESS_MASK] for i in range(n)]

    # ---- Input ----
    def set_key(self, index, pressed):
        if not 0 <= index < KEY_COUNT:
            raise ValueError("key index out of range: %r" % (index,))
        self.keys[index] = bool(pressed)

    def is_pressed(self, index):
        return bool(self.keys[index & 0xF])

    # ---- Output ----
    def get_display(self):
        return self.display.snapshot()

    def get_timer_values(self):
        return self.delay, self.sound

    @property
    def sound_active(self):
        return self.sound > 0

    # ---- timers ----
    def tick_timers(self):
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
