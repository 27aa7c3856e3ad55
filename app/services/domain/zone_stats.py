"""
Domain service: per-zone summaries and project totals.

This module orchestrates the statistics engine:
- Zone area from the geometry kernel
- Planting points (area or pipe traversal strategy)
- Yield, income and water demand from crop parameters
- Per-tier pipe statistics for the zone
- Emitter tallies per canonical type

Every call recomputes everything from the snapshot; nothing is cached.
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from app.config import settings
from app.domain.models import (
    Crop,
    EmitterCounts,
    EquipmentCounts,
    PipeSegment,
    ProjectSnapshot,
    ProjectSummary,
    ProjectTotals,
    Zone,
    ZoneCropAssignment,
    ZoneSummary,
)
from app.services.domain.irrigation_points import (
    count_drip_lines,
    counts_for_zone,
    is_point_emitter,
    tally,
    unique_by_id,
)
from app.services.domain.network_aggregator import (
    emitters_along_pipe,
    longest_pipe,
    network_stats,
    pipes_in_zone,
)
from app.services.domain.pipe_classifier import PipeClassifier, default_classifier
from app.services.domain.planting_density import (
    PIPE_STRATEGY,
    area_density,
    choose_strategy,
    effective_spacing_m,
    pipe_traversal_density,
)
from app.services.domain.water_demand import (
    liters_to_m3,
    project_water_demand,
    zone_water_demand,
)
from app.services.domain.yield_estimator import to_rai, zone_yield
from app.utils.geometry import polygon_area
from app.utils.rounding import round_half_up, round_to

logger = logging.getLogger(__name__)

EQUIPMENT_TYPES = {
    "pump": "pumps",
    "ballvalve": "valves",
    "solenoid": "solenoids",
}


@dataclass
class SummaryConfig:
    """Configuration for zone statistics aggregation."""

    planting_strategy: str = "auto"
    """auto picks pipe traversal whenever the project has any pipe"""

    unassigned_label: str = "not defined"
    """Crop name / irrigation type reported for zones without a value"""

    lateral_emitter_tolerance_m: float = 1.5
    """Maximum emitter distance from a lateral to count as mounted on it"""

    @classmethod
    def from_settings(cls) -> "SummaryConfig":
        return cls(
            planting_strategy=settings.planting_strategy,
            unassigned_label=settings.unassigned_label,
            lateral_emitter_tolerance_m=settings.lateral_emitter_tolerance_m,
        )


class ZoneStatsAggregator:
    """
    Domain service assembling zone summaries and project totals.

    Stateless apart from its configuration: zones never share mutable
    state, so summaries are independent of evaluation order.
    """

    def __init__(
        self,
        config: Optional[SummaryConfig] = None,
        classifier: PipeClassifier = default_classifier,
    ):
        """
        Initialize the aggregator.

        Args:
            config: Aggregation parameters (defaults come from settings)
            classifier: Pipe tier resolver
        """
        self.config = config or SummaryConfig.from_settings()
        self.classifier = classifier

    def summarize(
        self,
        snapshot: ProjectSnapshot,
        crops: Mapping[str, Crop],
    ) -> ProjectSummary:
        """
        Compute every zone summary and the project totals.

        Args:
            snapshot: Zones, pipes, emitters and crop assignments
            crops: Crop definitions keyed by crop value

        Returns:
            ProjectSummary
        """
        strategy = choose_strategy(self.config.planting_strategy, bool(snapshot.pipes))
        assignments = {a.zone_id: a for a in snapshot.assignments}

        summaries = []
        for zone in snapshot.zones:
            assignment = assignments.get(zone.id)
            crop = None
            if assignment is not None:
                crop = crops.get(assignment.crop_value)
                if crop is None:
                    logger.warning(
                        f"Zone {zone.id} assigned unknown crop '{assignment.crop_value}', "
                        f"treating as unassigned"
                    )
            summaries.append(
                self.summarize_zone(zone, snapshot, crop, assignment, strategy)
            )

        totals = self.project_totals(summaries, snapshot)
        logger.info(
            f"Summarized {totals.zone_count} zones: {totals.total_area_m2} m², "
            f"{totals.total_planting_points} planting points, "
            f"{totals.water.per_irrigation_liters} L per irrigation ({strategy} strategy)"
        )
        return ProjectSummary(zones=summaries, totals=totals)

    def summarize_zone(
        self,
        zone: Zone,
        snapshot: ProjectSnapshot,
        crop: Optional[Crop],
        assignment: Optional[ZoneCropAssignment],
        strategy: str,
    ) -> ZoneSummary:
        """
        Build the summary of one zone.

        Zones without a (known) crop still report area, pipes and emitters;
        all crop-derived fields are zero.
        """
        area = polygon_area(zone.coordinates)
        emitters = counts_for_zone(zone, snapshot.irrigation_points)
        zone_pipes = pipes_in_zone(snapshot.pipes, zone)
        laterals = [p for p in zone_pipes if self.classifier.classify(p) == "lateral"]
        longest_lateral, lateral_emitters = self._longest_lateral(laterals, snapshot)

        summary = ZoneSummary(
            zone_id=zone.id,
            zone_name=zone.name,
            zone_color=zone.color,
            crop_name=self.config.unassigned_label,
            irrigation_type=(
                snapshot.irrigation_assignments.get(zone.id) or self.config.unassigned_label
            ),
            area_m2=round_half_up(area),
            area_rai=to_rai(area),
            pipe_stats=network_stats(zone_pipes, self.classifier),
            emitters=emitters,
            longest_lateral_id=longest_lateral.id if longest_lateral else None,
            longest_lateral_emitters=lateral_emitters,
        )
        if crop is None:
            return summary

        row_override = assignment.row_spacing if assignment else None
        plant_override = assignment.plant_spacing if assignment else None

        if strategy == PIPE_STRATEGY:
            planting_points = pipe_traversal_density(laterals, crop, plant_override)
        else:
            planting_points = area_density(area, crop, row_override, plant_override)

        estimate = zone_yield(area, crop)
        water = zone_water_demand(planting_points, crop)
        logger.debug(
            f"Zone {zone.id} ({crop.value}): area={area:.1f} m², "
            f"points={planting_points}, water={water} L"
        )

        return summary.model_copy(update={
            "crop_value": crop.value,
            "crop_name": crop.name,
            "crop_category": crop.category,
            "row_spacing_m": effective_spacing_m(crop.row_spacing, row_override),
            "plant_spacing_m": effective_spacing_m(crop.plant_spacing, plant_override),
            "planting_strategy": strategy,
            "planting_points": planting_points,
            "estimated_yield": estimate.estimated_yield,
            "estimated_price": estimate.estimated_price,
            "water_per_irrigation_liters": water,
            "water_per_irrigation_m3": liters_to_m3(water),
            "crop_yield_per_rai": crop.yield_per_rai,
            "crop_price_per_kg": crop.price_per_kg,
            "crop_water_per_plant": crop.water_requirement,
            "growth_period": crop.growth_period,
        })

    def _longest_lateral(
        self,
        laterals: list[PipeSegment],
        snapshot: ProjectSnapshot,
    ) -> tuple[Optional[PipeSegment], int]:
        pipe = longest_pipe(laterals)
        if pipe is None:
            return None, 0
        attached = emitters_along_pipe(
            pipe,
            unique_by_id(snapshot.irrigation_points),
            self.config.lateral_emitter_tolerance_m,
            accept_type=is_point_emitter,
        )
        return pipe, attached

    def project_totals(
        self,
        summaries: list[ZoneSummary],
        snapshot: ProjectSnapshot,
    ) -> ProjectTotals:
        """
        Sum zone summaries and add zone-agnostic network statistics.

        Args:
            summaries: Zone summaries from summarize_zone
            snapshot: Project snapshot (for whole-project pipes and emitters)

        Returns:
            ProjectTotals
        """
        zone_emitters = EmitterCounts()
        for summary in summaries:
            zone_emitters = zone_emitters + summary.emitters

        field_area = polygon_area(snapshot.main_field) if snapshot.main_field else 0.0
        project_emitters = tally(unique_by_id(snapshot.irrigation_points))
        drip_lines = count_drip_lines(snapshot.irrigation_lines)

        return ProjectTotals(
            zone_count=len(summaries),
            total_area_m2=sum(s.area_m2 for s in summaries),
            total_area_rai=round_to(sum(s.area_rai for s in summaries), 2),
            total_planting_points=sum(s.planting_points for s in summaries),
            total_estimated_yield=sum(s.estimated_yield for s in summaries),
            total_estimated_price=sum(s.estimated_price for s in summaries),
            water=project_water_demand(s.water_per_irrigation_liters for s in summaries),
            zone_emitters=zone_emitters,
            project_emitters=project_emitters,
            zone_pipe_count=sum(s.pipe_stats.total for s in summaries),
            zone_pipe_length=sum(s.pipe_stats.total_length for s in summaries),
            zone_pipe_longest_length=sum(s.pipe_stats.total_longest_length for s in summaries),
            project_pipes=network_stats(snapshot.pipes, self.classifier),
            drip_lines=drip_lines,
            drip_outlets=project_emitters.drip_tape + drip_lines,
            field_area_m2=round_half_up(field_area),
            field_area_rai=to_rai(field_area),
            equipment=count_equipment(snapshot),
        )


def count_equipment(snapshot: ProjectSnapshot) -> EquipmentCounts:
    """Tally unique pumps, ball valves and solenoids."""
    counts = dict.fromkeys(EQUIPMENT_TYPES.values(), 0)
    seen = set()
    for icon in snapshot.equipment:
        if icon.id in seen:
            continue
        seen.add(icon.id)
        field = EQUIPMENT_TYPES.get(icon.type.lower())
        if field:
            counts[field] += 1
    return EquipmentCounts(**counts)
