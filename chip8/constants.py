# CHIP8 Virtual Machine constants
# Memory - 4096 bytes which includes: the fonts (0x000) and the inputted ROM (0x200).
# Output - 64x32 display (array of pixels that are either on or off).
# CPU - Cowgod's CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM

# ---- Machine ----
MEMORY_SIZE = 4096
PROGRAM_START = 0x200
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START
ADDRESS_MASK = 0xFFF      # 12 bit address space
INDEX_MASK = 0xFFFF       # I is a 16 bit register
REGISTER_COUNT = 16
STACK_SIZE = 16
KEY_COUNT = 16

# ---- Display ----
width, height = 64, 32

# ---- Configuration ----
scale = 10
window_width, window_height = width * scale, height * scale
top_border = 8           # rows above the screen, holds the title and HUD
side_border = 2          # frame on the left, right and bottom
pixel_outlines = True
fg_color = 0x33FF33FF    # 0xRRGGBBAA
bg_color = 0x00000000
cpu_hz = 500              # default instructions per second
timer_HZ = 60             # timers and redraw both run at this rate
FRAME_TIME = 1.0 / timer_HZ

# set fonts (binary pixel patterns)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
] #notice 80 bytes
GLYPH_SIZE = 5
