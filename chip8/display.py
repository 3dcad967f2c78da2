# 64x32 monochrome framebuffer.
# Pixels are only changed by CLS (clear) and DRW (draw_sprite).
import numpy as np

from .constants import width, height


class Display:

    def __init__(self, w=width, h=height):
        self.width = w
        self.height = h
        self.vram = np.zeros((h, w), dtype=bool)   # row-major, vram[y, x]
        self.should_draw = True

    def clear(self):
        self.vram[:] = False
        self.should_draw = True

    def draw_sprite(self, sprite, x, y):
        """XOR a sprite onto the screen and return True if a lit pixel was turned off.

        ``sprite`` is a sequence of row bytes, most significant bit leftmost.
        The start position wraps around the screen once; the sprite itself is
        clipped at the right and bottom edges instead of wrapping.
        """
        x %= self.width
        y %= self.height
        collision = False

        for row, bits in enumerate(sprite):
            py = y + row
            if py >= self.height:
                break
            for bit in range(8):
                px = x + bit
                if px >= self.width:
                    break
                if bits & (0x80 >> bit):
                    if self.vram[py, px]:
                        collision = True
                    self.vram[py, px] = not self.vram[py, px]

        self.should_draw = True
        return collision

    def snapshot(self):
        return self.vram.copy()

    def as_rgba(self, scale=1, fg=(255, 255, 255), bg=(0, 0, 0), flip=True, outline=False):
        # RGBA pixels for the renderer, upscaled on CPU using numpy.repeat.
        # pyglet images start at the bottom row, hence the flip.
        # outline paints the edge of every scaled pixel in bg so the grid shows.
        rows = self.vram[::-1] if flip else self.vram
        framebuf = np.empty((self.height, self.width, 4), dtype=np.uint8)
        framebuf[...] = tuple(bg[:3]) + (255,)
        framebuf[rows] = tuple(fg[:3]) + (255,)
        if scale != 1:
            framebuf = np.repeat(np.repeat(framebuf, scale, axis=0), scale, axis=1)
        if outline and scale > 2:
            ys = np.arange(self.height * scale) % scale
            xs = np.arange(self.width * scale) % scale
            framebuf[(ys == 0) | (ys == scale - 1), :] = tuple(bg[:3]) + (255,)
            framebuf[:, (xs == 0) | (xs == scale - 1)] = tuple(bg[:3]) + (255,)
        return framebuf


def unpack_color(color):
    # 0xRRGGBBAA -> (r, g, b, a)
    return ((color >> 24) & 0xFF, (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)
