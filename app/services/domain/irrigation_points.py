"""
Domain service: emitter type normalization and per-zone tallies.
"""
import logging
from typing import Iterable, Optional

from app.domain.models import (
    EMITTER_BUCKETS,
    Coordinate,
    EmitterCounts,
    IrrigationLine,
    IrrigationPoint,
    Zone,
)
from app.utils.geometry import point_in_polygon

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"

# Spelling and format variants seen in saved projects
TYPE_ALIASES = {
    "sprinkler": "sprinkler",
    "sprinkler-system": "sprinkler",
    "sprinkler_system": "sprinkler",
    "mini-sprinkler": "mini_sprinkler",
    "mini_sprinkler": "mini_sprinkler",
    "minisprinkler": "mini_sprinkler",
    "mini sprinkler": "mini_sprinkler",
    "micro-spray": "micro_spray",
    "micro_spray": "micro_spray",
    "microspray": "micro_spray",
    "micro": "micro_spray",
    "microsprinkler": "micro_spray",
    "drip": "drip_tape",
    "drip-tape": "drip_tape",
    "drip_tape": "drip_tape",
    "drip-irrigation": "drip_tape",
}


def normalize_type(raw: Optional[str]) -> str:
    """
    Map a raw emitter type string to its canonical bucket.

    Args:
        raw: Type string as stored by the editor

    Returns:
        One of the four canonical buckets, the cleaned string itself when it
        is not a known variant, or "unknown" when empty
    """
    if not raw:
        return UNKNOWN_TYPE
    cleaned = raw.strip().lower()
    return TYPE_ALIASES.get(cleaned, cleaned)


def count_bucket(raw: Optional[str]) -> str:
    """
    Bucket an emitter is tallied into.

    Types outside the four canonical buckets are counted as sprinklers.
    """
    normalized = normalize_type(raw)
    return normalized if normalized in EMITTER_BUCKETS else "sprinkler"


def is_point_emitter(raw: Optional[str]) -> bool:
    """True for emitters placed at a point, i.e. anything but drip tape."""
    return count_bucket(raw) != "drip_tape"


def tally(points: Iterable[IrrigationPoint]) -> EmitterCounts:
    """Tally emitters into the canonical buckets."""
    counts = dict.fromkeys(EMITTER_BUCKETS, 0)
    for point in points:
        counts[count_bucket(point.type)] += 1
    return EmitterCounts(**counts, total=sum(counts.values()))


def points_in_zone(zone: Zone, points: Iterable[IrrigationPoint]) -> list[IrrigationPoint]:
    """Emitters with a valid position inside the zone ring."""
    if len(zone.coordinates) < 3:
        return []
    return [
        point for point in points
        if point.has_position
        and point_in_polygon(Coordinate(lat=point.lat, lng=point.lng), zone.coordinates)
    ]


def counts_for_zone(zone: Zone, points: Iterable[IrrigationPoint]) -> EmitterCounts:
    """
    Count the emitters inside a zone per canonical bucket.

    Args:
        zone: Zone whose ring is tested
        points: All project emitters

    Returns:
        EmitterCounts with the four buckets and their sum
    """
    inside = points_in_zone(zone, points)
    counts = tally(inside)
    logger.debug(f"Zone {zone.id}: {counts.total} emitters inside")
    return counts


def unique_by_id(points: Iterable) -> list:
    """Drop records whose id was already seen; first occurrence wins."""
    seen = set()
    unique = []
    for point in points:
        if point.id in seen:
            continue
        seen.add(point.id)
        unique.append(point)
    return unique


def count_drip_lines(lines: Iterable[IrrigationLine]) -> int:
    """Number of unique (by id) lines whose type normalizes to drip tape."""
    return sum(1 for line in unique_by_id(lines) if normalize_type(line.type) == "drip_tape")
