from __future__ import annotations

from typing import List, Sequence, Tuple

from ..utils.image_ops import lerp_color, rgb_to_hex

# deep water -> teal -> sand -> pale
DEFAULT_STOPS: Tuple[Tuple[int, int, int], ...] = (
    (12, 20, 48),
    (24, 88, 120),
    (64, 160, 150),
    (214, 196, 140),
    (245, 240, 225),
)
DEFAULT_PALETTE_SIZE = 32


def build_palette(stops: Sequence[Tuple[int, int, int]] = DEFAULT_STOPS, size: int = DEFAULT_PALETTE_SIZE) -> List[str]:
    if size < 1:
        raise ValueError(f"Palette size must be positive, got {size}")
    if size == 1:
        return [rgb_to_hex(stops[0])]
    return [rgb_to_hex(lerp_color(i / (size - 1), stops)) for i in range(size)]


class Palette:
    """Colour lookup table; out-of-range indices clamp to the nearest end."""

    def __init__(self, colors: Sequence[str]):
        if not colors:
            raise ValueError("Palette needs at least one colour")
        self.colors = list(colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> str:
        i = min(max(int(index), 0), len(self.colors) - 1)
        return self.colors[i]

    def __iter__(self):
        return iter(self.colors)
