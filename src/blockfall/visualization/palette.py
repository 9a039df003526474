from __future__ import annotations

from typing import Tuple

Color = Tuple[int, int, int]

BACKGROUND: Color = (20, 20, 26)

# Indexed by tetromino kind value (I, O, T, J, L, S, Z)
PALETTE = {
    0: BACKGROUND,
    1: (0, 240, 240),  # I
    2: (240, 240, 0),  # O
    3: (160, 0, 240),  # T
    4: (0, 0, 240),    # J
    5: (240, 160, 0),  # L
    6: (0, 240, 0),    # S
    7: (240, 0, 0),    # Z
}


def color_for_value(v: int) -> Color:
    # falling piece cells are stored negated
    return PALETTE.get(abs(v), (200, 200, 200))
