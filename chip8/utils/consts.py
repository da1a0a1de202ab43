"""Constants and utility values for the virtual machine."""


class ConstUtils:
    """Bitwise masks and architecture constants."""

    # Bitwise masks for different data widths
    MASK_4_BITS = 0xF
    """4-bit mask: 0xF"""

    MASK_8_BITS = 0xFF
    """8-bit mask: 0xFF"""

    MASK_12_BITS = 0xFFF
    """12-bit mask: 0xFFF (addressable range of a 12-bit operand)"""

    MASK_16_BITS = 0xFFFF
    """16-bit mask: 0xFFFF"""

    INSTRUCTION_WIDTH = 2
    """Every instruction is two bytes, high byte first."""

    REGISTER_COUNT = 16
    """General purpose registers V0..VF."""

    FLAG_REGISTER = 0xF
    """VF doubles as carry/borrow/collision flag."""

    KEY_COUNT = 16
    """Hexadecimal keypad 0..F."""

    SPRITE_WIDTH = 8
    """Sprites are always one byte (8 pixels) wide."""

    FONT_GLYPH_SIZE = 5
    """Each hexadecimal font glyph is 5 rows tall."""


# Built-in hexadecimal font, glyphs 0..F, 5 bytes each
FONT_SET = bytes(
    [
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
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)

# Default machine layout
DEFAULT_MEMORY_SIZE = 4096
DEFAULT_PROGRAM_START = 0x200
DEFAULT_FONT_BASE = 0x000
DEFAULT_DISPLAY_WIDTH = 64
DEFAULT_DISPLAY_HEIGHT = 32
DEFAULT_STACK_DEPTH = 16


def wrap_byte(value: int) -> int:
    """Truncate value to an unsigned 8-bit quantity (wraparound arithmetic)."""
    return value & ConstUtils.MASK_8_BITS
