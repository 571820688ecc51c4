from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw

from ..core.animator import DrawCommand, Frame, LineCommand, PolygonCommand

TRANSPARENT = (0, 0, 0, 0)


def new_surface(size: Tuple[int, int]) -> Image.Image:
    return Image.new("RGBA", (int(size[0]), int(size[1])), TRANSPARENT)


def clear_surface(image: Image.Image) -> None:
    image.paste(TRANSPARENT, (0, 0, image.width, image.height))


def draw_line(draw: ImageDraw.ImageDraw, p0: Sequence[float], p1: Sequence[float], color: str) -> None:
    draw.line([(p0[0], p0[1]), (p1[0], p1[1])], fill=color, width=1)


def draw_polygon(draw: ImageDraw.ImageDraw, points: Sequence[Sequence[float]], fill: str, stroke: str) -> None:
    draw.polygon([(p[0], p[1]) for p in points], fill=fill, outline=stroke)


def compose(base: Image.Image, layer: Image.Image, alpha: float = 1.0) -> None:
    """Source-over blend of an RGBA ``layer``, its alpha scaled by ``alpha``, onto ``base`` in place.

    Both images hold straight (non-premultiplied) alpha, which is what the
    viewer hands to Qt.
    """
    if alpha < 1.0:
        arr = np.array(layer, dtype=np.uint8)
        arr[..., 3] = np.clip(arr[..., 3] * float(alpha), 0, 255).astype(np.uint8)
        layer = Image.fromarray(arr)
    base.alpha_composite(layer)


def render_frame(image: Image.Image, frame: Frame) -> Image.Image:
    """Clear ``image`` and draw the frame's commands.

    Commands are grouped by alpha, keeping their order inside each group, and
    each group is drawn onto one transparent layer that is composed onto the
    surface with that alpha. Groups are composed in order of first appearance,
    so fully opaque edges land first and the faded edges and faces, which
    share the pulsing opacity, follow in one layer with the faces on top.
    """
    clear_surface(image)
    groups: Dict[float, List[DrawCommand]] = {}
    for command in frame.commands:
        groups.setdefault(command.alpha, []).append(command)
    for alpha, batch in groups.items():
        layer = new_surface(image.size)
        draw = ImageDraw.Draw(layer)
        for command in batch:
            if isinstance(command, LineCommand):
                draw_line(draw, command.start, command.end, command.color)
            elif isinstance(command, PolygonCommand):
                draw_polygon(draw, command.points, command.fill, command.stroke)
        compose(image, layer, alpha)
    return image
