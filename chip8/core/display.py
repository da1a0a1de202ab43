"""Monochrome bitmap display with a dirty flag.

The engine only flips pixels and raises the dirty flag. Rendering and
clearing the flag belong to whatever host adapter consumes frames.
"""

from __future__ import annotations

from chip8.utils.consts import ConstUtils


class Display:
    """Fixed width x height grid of booleans, row-major."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError("Display dimensions must be positive")
        self.width = width
        self.height = height
        self._pixels = [False] * (width * height)
        self.dirty = False

    def _index(self, x: int, y: int) -> int:
        return (y % self.height) * self.width + (x % self.width)

    def get_pixel(self, x: int, y: int) -> bool:
        """Pixel at (x, y); coordinates wrap."""
        return self._pixels[self._index(x, y)]

    def toggle(self, x: int, y: int) -> bool:
        """XOR a set bit onto (x, y).

        Returns:
            True if the pixel was set and is now cleared (collision)
        """
        idx = self._index(x, y)
        was_set = self._pixels[idx]
        self._pixels[idx] = not was_set
        self.dirty = True
        return was_set

    def draw_sprite(self, x: int, y: int, rows: bytes) -> bool:
        """XOR 8-pixel-wide sprite rows onto the screen at wrapped coordinates.

        Returns:
            True if any pixel transitioned from set to unset
        """
        collision = False
        for row, bits in enumerate(rows):
            for col in range(ConstUtils.SPRITE_WIDTH):
                if bits & (1 << (ConstUtils.SPRITE_WIDTH - 1 - col)):
                    collision |= self.toggle(x + col, y + row)
        return collision

    def clear(self) -> None:
        self._pixels = [False] * (self.width * self.height)
        self.dirty = True

    def acknowledge(self) -> None:
        """Renderer side: mark the current frame as consumed."""
        self.dirty = False

    @property
    def pixels(self) -> tuple[bool, ...]:
        """Flat read-only copy of the framebuffer."""
        return tuple(self._pixels)

    def export(self) -> tuple[tuple[bool, ...], ...]:
        """Read-only copy of the framebuffer as rows."""
        w = self.width
        return tuple(
            tuple(self._pixels[y * w:(y + 1) * w]) for y in range(self.height)
        )

    def to_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join(
            "".join(on if px else off for px in row) for row in self.export()
        )

    def reset(self) -> None:
        self._pixels = [False] * (self.width * self.height)
        self.dirty = False
