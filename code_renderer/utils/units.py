"""Paper sizes for page geometry, in points."""
from __future__ import annotations

from typing import Dict, Tuple

POINTS_PER_INCH = 72

PAPER_SIZES: Dict[str, Tuple[float, float]] = {
    "A4": (595.28, 841.89),
    "LETTER": (8.5 * POINTS_PER_INCH, 11 * POINTS_PER_INCH),
}


def parse_paper_size(value: str) -> Tuple[float, float]:
    """Resolve ``A4``, ``Letter`` or ``"width,height"`` (points) into a page size."""
    text = (value or "").strip()
    if "," in text:
        parts = [part.strip() for part in text.split(",")]
        if len(parts) != 2:
            raise ValueError(f'Invalid custom paper size "{value}". Use "width,height" in points.')
        try:
            width, height = float(parts[0]), float(parts[1])
        except ValueError:
            raise ValueError(f'Invalid custom paper size "{value}". Use "width,height" in points.') from None
        if width <= 0 or height <= 0:
            raise ValueError(f'Invalid custom paper size "{value}". Dimensions must be positive.')
        return width, height

    size = PAPER_SIZES.get(text.upper())
    if size is None:
        raise ValueError(f'Invalid paper size name "{value}". Use "A4", "Letter", or "width,height".')
    return size
