"""
Bounding box data transfer object.

This module defines the BoundingBox dataclass: one face candidate as
reported by the detection graph. It is intentionally minimal, a frozen
container plus the single conversion from the graph's raw row/column
layout.

Non-goals:
    - No rendering logic.
    - No cropping or bounds checking (that belongs in compositor).
"""

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """A single face candidate with corner coordinates and confidence.

    Attributes:
        x1: Left edge (column), in source pixels.
        y1: Top edge (row), in source pixels.
        x2: Right edge (column), in source pixels.
        y2: Bottom edge (row), in source pixels.
        prob: Detection confidence in [0.0, 1.0].

    Coordinates are kept as floats exactly as the graph emits them; they
    are truncated to integers only when cropping.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    prob: float

    @classmethod
    def from_raw(cls, raw: Sequence[float], prob: float) -> "BoundingBox":
        """Build a box from one group of four raw graph values.

        The graph emits ``(row_top, col_left, row_bottom, col_right)``,
        i.e. ``(y1, x1, y2, x2)``. Rows are y and columns are x.
        """
        if len(raw) != 4:
            raise ValueError(f"Expected 4 raw box values, got {len(raw)}.")
        row_top, col_left, row_bottom, col_right = (float(v) for v in raw)
        return cls(
            x1=col_left,
            y1=row_top,
            x2=col_right,
            y2=row_bottom,
            prob=float(prob),
        )

    def to_dict(self) -> dict:
        """Return a plain dict suitable for logging or JSON."""
        return {
            "x1": round(self.x1, 2),
            "y1": round(self.y1, 2),
            "x2": round(self.x2, 2),
            "y2": round(self.y2, 2),
            "prob": round(self.prob, 4),
        }

    @property
    def width(self) -> float:
        """Box width in pixels."""
        return self.x2 - self.x1

    @property
    def height(self) -> float:
        """Box height in pixels."""
        return self.y2 - self.y1
