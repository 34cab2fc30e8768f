# Upper half block: foreground paints the top pixel, background the bottom one
UPPER_HALF_BLOCK = "▀"

# First codepoint of the Braille Patterns block; the dot bits are added to it
BRAILLE_BASE = 0x2800

# Dot offsets (column, row) within a 2x4 block, in bit order
BRAILLE_OFFSETS = (
    (0, 0),
    (0, 1),
    (0, 2),
    (1, 0),
    (1, 1),
    (1, 2),
    (0, 3),
    (1, 3),
)
BRAILLE_CELL_WIDTH = 2
BRAILLE_CELL_HEIGHT = 4
