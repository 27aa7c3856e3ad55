"""
Domain service: pipe network statistics per tier and per zone.
"""
import logging
from typing import Callable, Iterable, Optional, Sequence

from app.domain.models import (
    PIPE_TIERS,
    Coordinate,
    IrrigationPoint,
    PipeSegment,
    PipeTierStats,
    Zone,
    ZonePipeStats,
)
from app.services.domain.pipe_classifier import PipeClassifier, default_classifier
from app.utils.geometry import path_touches_polygon, polyline_length, segment_distance

logger = logging.getLogger(__name__)


def is_pipe_in_zone(pipe: PipeSegment, zone: Zone) -> bool:
    """
    Zone membership predicate used by every per-zone pipe statistic.

    A pipe belongs to a zone when its zoneId matches, or when any of its
    vertices lies inside the zone ring. Both are checked.

    Args:
        pipe: Pipe to test
        zone: Candidate zone

    Returns:
        True if the pipe belongs to the zone
    """
    if len(pipe.coordinates) < 2:
        return False
    has_zone_id = pipe.zone_id is not None and pipe.zone_id == zone.id
    touches = path_touches_polygon(pipe.coordinates, zone.coordinates)
    return has_zone_id or touches


def stats_for_tier(
    pipes: Iterable[PipeSegment],
    tier: str,
    classifier: PipeClassifier = default_classifier,
) -> PipeTierStats:
    """
    Count and measure the pipes of one tier.

    Args:
        pipes: Pipes to consider
        tier: "main", "submain" or "lateral"
        classifier: Tier resolver

    Returns:
        PipeTierStats; all zero when no pipe of the tier has >= 2 vertices
    """
    lengths = [
        polyline_length(pipe.coordinates)
        for pipe in pipes
        if len(pipe.coordinates) >= 2 and classifier.classify(pipe) == tier
    ]
    if not lengths:
        return PipeTierStats()

    return PipeTierStats(
        count=len(lengths),
        total_length=sum(lengths),
        longest_length=max(lengths),
    )


def combine_tier_stats(tiers: dict[str, PipeTierStats]) -> ZonePipeStats:
    """
    Assemble per-tier stats into a ZonePipeStats.

    total_longest_length is the sum of each tier's longest pipe, not the
    longest path through the network.
    """
    return ZonePipeStats(
        **tiers,
        total=sum(s.count for s in tiers.values()),
        total_length=sum(s.total_length for s in tiers.values()),
        total_longest_length=sum(s.longest_length for s in tiers.values()),
    )


def network_stats(
    pipes: Sequence[PipeSegment],
    classifier: PipeClassifier = default_classifier,
) -> ZonePipeStats:
    """Whole-project per-tier statistics, without zone filtering."""
    return combine_tier_stats(
        {tier: stats_for_tier(pipes, tier, classifier) for tier in PIPE_TIERS}
    )


def pipes_in_zone(pipes: Iterable[PipeSegment], zone: Zone) -> list[PipeSegment]:
    return [pipe for pipe in pipes if is_pipe_in_zone(pipe, zone)]


def stats_for_zone(
    pipes: Sequence[PipeSegment],
    zone_id: str,
    zones: Sequence[Zone],
    classifier: PipeClassifier = default_classifier,
) -> ZonePipeStats:
    """
    Per-tier pipe statistics for the pipes belonging to one zone.

    Args:
        pipes: All project pipes
        zone_id: Zone to report on
        zones: All project zones
        classifier: Tier resolver

    Returns:
        ZonePipeStats; all zero when the zone id is unknown
    """
    zone = next((z for z in zones if z.id == str(zone_id)), None)
    if zone is None:
        logger.warning(f"Zone {zone_id} not found, returning empty pipe stats")
        return ZonePipeStats()

    zone_pipes = pipes_in_zone(pipes, zone)
    logger.debug(f"Zone {zone.id}: {len(zone_pipes)}/{len(pipes)} pipes in zone")
    return network_stats(zone_pipes, classifier)


def emitters_along_pipe(
    pipe: PipeSegment,
    points: Iterable[IrrigationPoint],
    tolerance_m: float,
    accept_type: Optional[Callable[[Optional[str]], bool]] = None,
) -> int:
    """
    Count emitters lying within a tolerance of any segment of a pipe.

    Args:
        pipe: Pipe polyline
        points: Candidate emitters
        tolerance_m: Maximum distance from the pipe in meters
        accept_type: Optional predicate on the emitter's raw type

    Returns:
        Number of attached emitters
    """
    segments = list(zip(pipe.coordinates, pipe.coordinates[1:]))
    if not segments:
        return 0

    count = 0
    for point in points:
        if not point.has_position:
            continue
        if accept_type is not None and not accept_type(point.type):
            continue
        position = Coordinate(lat=point.lat, lng=point.lng)
        if any(segment_distance(position, a, b) <= tolerance_m for a, b in segments):
            count += 1
    return count


def longest_pipe(pipes: Iterable[PipeSegment]) -> Optional[PipeSegment]:
    """Return the longest pipe (first one wins on ties), or None."""
    best = None
    best_length = -1
    for pipe in pipes:
        length = polyline_length(pipe.coordinates)
        if length > best_length:
            best, best_length = pipe, length
    return best
