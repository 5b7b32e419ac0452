# app/ocr/boundaries.py
"""
Landmark-anchored vertical crop.

Given the OCR lines of a screenshot of a known report template, find the
line that opens the region of interest (an "upper" phrase) and the footer
line that closes it (a "lower" phrase, searched only near the bottom of the
page). Whatever is not found falls back to fixed fractions of the image
height, so `resolve` always returns a region.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple, Union

from app.core.logger import get_logger
from app.models.constants import (
    DEFAULT_LOWER_RATIO,
    DEFAULT_UPPER_RATIO,
    LOWER_OFFSET_PX,
    LOWER_PHRASES,
    LOWER_SEARCH_RATIO,
    UPPER_PHRASES,
)

logger = get_logger("boundaries")


@dataclass(frozen=True)
class TextLine:
    text: str
    y: float  # top edge, px
    height: float


@dataclass(frozen=True)
class CropRegion:
    top: int
    height: int

    @property
    def bottom(self) -> int:
        return self.top + self.height


@dataclass(frozen=True)
class Found:
    y: float
    phrase: str


@dataclass(frozen=True)
class NotFound:
    pass


NOT_FOUND = NotFound()

Bound = Union[Found, NotFound]


@dataclass(frozen=True)
class LandmarkPhrases:
    upper: Tuple[str, ...] = field(default=UPPER_PHRASES)
    lower: Tuple[str, ...] = field(default=LOWER_PHRASES)

    def __post_init__(self):
        # accept lists but store tuples, the object stays hashable/immutable
        object.__setattr__(self, "upper", tuple(self.upper))
        object.__setattr__(self, "lower", tuple(self.lower))


DEFAULT_PHRASES = LandmarkPhrases()


@dataclass(frozen=True)
class BoundaryResolution:
    region: CropRegion
    upper_bound: int
    lower_bound: int
    upper_match: Bound
    lower_match: Bound
    repaired: bool = False

    @property
    def degenerate(self) -> bool:
        return self.region.height <= 0


def round_half_up(value: float) -> int:
    """Nearest integer, .5 going up (Python's round() would go to even)."""
    return int(math.floor(value + 0.5))


def find_landmark(lines: Sequence[TextLine], phrases: Iterable[str]) -> Bound:
    """
    First phrase (priority order) that any line contains wins; among lines,
    the first one in reading order is taken.
    """
    for phrase in phrases:
        for line in lines:
            if phrase in line.text:
                return Found(y=line.y, phrase=phrase)
    return NOT_FOUND


def resolve(
    text_lines: Sequence[TextLine],
    image_height: float,
    phrases: LandmarkPhrases = DEFAULT_PHRASES,
    *,
    lower_search_ratio: float = LOWER_SEARCH_RATIO,
    lower_offset: float = LOWER_OFFSET_PX,
    default_upper_ratio: float = DEFAULT_UPPER_RATIO,
    default_lower_ratio: float = DEFAULT_LOWER_RATIO,
) -> BoundaryResolution:
    upper_match = find_landmark(text_lines, phrases.upper)

    cutoff = image_height * lower_search_ratio
    footer_lines: List[TextLine] = [ln for ln in text_lines if ln.y > cutoff]
    lower_match = find_landmark(footer_lines, phrases.lower)

    if isinstance(upper_match, Found):
        upper = float(upper_match.y)
    else:
        upper = image_height * default_upper_ratio

    if isinstance(lower_match, Found):
        lower = lower_match.y + lower_offset
    else:
        lower = image_height * default_lower_ratio

    # Only the lower bound is repaired; an oversized upper bound is kept.
    repaired = False
    if lower <= upper:
        repaired = True
        raw_lower, lower = lower, image_height * default_lower_ratio
        logger.info(
            "Lower bound %.1f not below upper bound %.1f, reset to %.1f",
            raw_lower,
            upper,
            lower,
        )

    top = round_half_up(upper)
    bottom = round_half_up(lower)
    resolution = BoundaryResolution(
        region=CropRegion(top=top, height=bottom - top),
        upper_bound=top,
        lower_bound=bottom,
        upper_match=upper_match,
        lower_match=lower_match,
        repaired=repaired,
    )

    if resolution.degenerate:
        logger.warning(
            "Degenerate crop region top=%d height=%d (upper landmark %r below the lower default)",
            top,
            resolution.region.height,
            upper_match.phrase if isinstance(upper_match, Found) else None,
        )
    return resolution


def resolve_region(
    text_lines: Sequence[TextLine],
    image_height: float,
    phrases: LandmarkPhrases = DEFAULT_PHRASES,
) -> CropRegion:
    """Convenience wrapper for callers that only need the rectangle."""
    return resolve(text_lines, image_height, phrases).region
