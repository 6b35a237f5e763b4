from __future__ import annotations

from dataclasses import dataclass

from webhandle.protocol.dom.types import BoxModel
from webhandle.protocol.page.types import Viewport


@dataclass(frozen=True)
class Box:
    """Bounding rectangle of an element in CSS pixels."""

    top: float
    left: float
    width: float
    height: float


def box_from_model(model: BoxModel) -> Box:
    """
    Build a Box from a DOM.getBoxModel result.

    The content quad lists corners clockwise from the top-left as
    ``[x1, y1, x2, y2, x3, y3, x4, y4]``.
    """
    quad = model['content']
    return Box(
        top=quad[1],
        left=quad[0],
        width=quad[2] - quad[0],
        height=quad[7] - quad[1],
    )


def click_point(box: Box) -> tuple[float, float]:
    """Center of the box; edge pixels may belong to an overlapping sibling."""
    return box.left + box.width / 2, box.top + box.height / 2


def clip_from_box(box: Box) -> Viewport:
    """Screenshot clip covering the box at device scale 1."""
    return Viewport(x=box.left, y=box.top, width=box.width, height=box.height, scale=1)
