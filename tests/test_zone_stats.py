"""
Unit tests for zone summaries and project totals.

Tests cover:
- Crop-derived metrics for assigned zones
- Unassigned zones and unknown crops
- Pipe traversal vs area strategy
- Longest lateral and its emitters
- Project totals and equipment tallies
- Recomputation determinism
"""
import pytest

from app.domain.models import (
    EquipmentIcon,
    IrrigationLine,
    ProjectSnapshot,
    ZoneCropAssignment,
)
from app.services.domain.planting_density import area_density
from app.services.domain.zone_stats import (
    SummaryConfig,
    ZoneStatsAggregator,
    count_equipment,
)
from app.utils.geometry import polygon_area


@pytest.fixture
def aggregator() -> ZoneStatsAggregator:
    """Aggregator with default configuration."""
    return ZoneStatsAggregator(SummaryConfig())


@pytest.fixture
def crops(rice) -> dict:
    return {"rice": rice}


# ============================================================
# Zone Summary Tests
# ============================================================

class TestZoneSummary:
    """Tests for per-zone summaries."""

    def test_assigned_zone(self, aggregator, sample_snapshot, crops):
        summary = aggregator.summarize(sample_snapshot, crops)
        zone = summary.zones[0]

        assert zone.zone_id == "1"
        assert zone.crop_value == "rice"
        assert zone.crop_name == "Rice"
        assert zone.irrigation_type == "sprinkler"
        assert zone.area_m2 == pytest.approx(10000, rel=0.01)
        assert zone.area_rai == pytest.approx(6.25, abs=0.07)
        assert zone.row_spacing_m == 0.25
        assert zone.plant_spacing_m == 0.25

    def test_pipe_traversal_points(self, aggregator, sample_snapshot, crops):
        """Laterals of 50, 30 and 20 m at 25 cm hold 201 + 121 + 81 points."""
        zone = aggregator.summarize(sample_snapshot, crops).zones[0]
        assert zone.planting_strategy == "pipes"
        assert zone.planting_points == 403
        assert zone.water_per_irrigation_liters == 1693
        assert zone.water_per_irrigation_m3 == 1.693

    def test_area_strategy(self, sample_snapshot, crops, field_zone, rice):
        aggregator = ZoneStatsAggregator(SummaryConfig(planting_strategy="area"))
        zone = aggregator.summarize(sample_snapshot, crops).zones[0]
        expected = area_density(polygon_area(field_zone.coordinates), rice)
        assert zone.planting_strategy == "area"
        assert zone.planting_points == expected
        assert zone.planting_points == pytest.approx(160000, rel=0.01)

    def test_area_strategy_without_pipes(self, aggregator, sample_snapshot, crops):
        snapshot = sample_snapshot.model_copy(update={"pipes": []})
        zone = aggregator.summarize(snapshot, crops).zones[0]
        assert zone.planting_strategy == "area"
        assert zone.pipe_stats.total == 0

    def test_spacing_override(self, aggregator, sample_snapshot, crops):
        snapshot = sample_snapshot.model_copy(update={
            "assignments": [ZoneCropAssignment(zone_id="1", crop_value="rice", plant_spacing=50)],
        })
        zone = aggregator.summarize(snapshot, crops).zones[0]
        assert zone.plant_spacing_m == 0.5
        assert zone.planting_points == 101 + 61 + 41

    def test_yield_and_price(self, aggregator, sample_snapshot, crops):
        zone = aggregator.summarize(sample_snapshot, crops).zones[0]
        expected_yield = round(zone.area_m2 / 1600 * 650)
        assert zone.estimated_yield == pytest.approx(expected_yield, abs=1)
        assert zone.estimated_price == zone.estimated_yield * 12
        assert zone.crop_yield_per_rai == 650
        assert zone.growth_period == 120

    def test_zone_pipe_stats(self, aggregator, sample_snapshot, crops):
        stats = aggregator.summarize(sample_snapshot, crops).zones[0].pipe_stats
        assert stats.total == 5
        assert stats.total_length == 270
        assert stats.total_longest_length == 220

    def test_zone_emitters(self, aggregator, sample_snapshot, crops):
        emitters = aggregator.summarize(sample_snapshot, crops).zones[0].emitters
        assert emitters.sprinkler == 2
        assert emitters.total == 5

    def test_longest_lateral(self, aggregator, sample_snapshot, crops):
        zone = aggregator.summarize(sample_snapshot, crops).zones[0]
        assert zone.longest_lateral_id == "l1"
        assert zone.longest_lateral_emitters == 3


# ============================================================
# Unassigned Zone Tests
# ============================================================

class TestUnassignedZones:
    """Tests for zones without a crop."""

    def test_unassigned_zone(self, aggregator, sample_snapshot, crops):
        zone = aggregator.summarize(sample_snapshot, crops).zones[1]
        assert zone.zone_id == "2"
        assert zone.crop_value is None
        assert zone.crop_name == "not defined"
        assert zone.irrigation_type == "not defined"
        assert zone.planting_strategy is None
        assert zone.planting_points == 0
        assert zone.estimated_yield == 0
        assert zone.water_per_irrigation_liters == 0
        assert zone.area_m2 > 0
        assert zone.emitters.total == 1

    def test_custom_unassigned_label(self, sample_snapshot, crops):
        aggregator = ZoneStatsAggregator(SummaryConfig(unassigned_label="-"))
        zone = aggregator.summarize(sample_snapshot, crops).zones[1]
        assert zone.crop_name == "-"
        assert zone.irrigation_type == "-"

    def test_unknown_crop_treated_as_unassigned(self, aggregator, sample_snapshot, crops):
        snapshot = sample_snapshot.model_copy(update={
            "assignments": [ZoneCropAssignment(zone_id="1", crop_value="kiwi")],
        })
        zone = aggregator.summarize(snapshot, crops).zones[0]
        assert zone.crop_name == "not defined"
        assert zone.planting_points == 0
        assert zone.pipe_stats.total == 5

    def test_zone_without_laterals_in_piped_project(self, aggregator, sample_snapshot, crops):
        """Pipe traversal still applies; a zone with no laterals gets no points."""
        snapshot = sample_snapshot.model_copy(update={
            "assignments": [ZoneCropAssignment(zone_id="2", crop_value="rice")],
        })
        zone = aggregator.summarize(snapshot, crops).zones[1]
        assert zone.crop_value == "rice"
        assert zone.planting_strategy == "pipes"
        assert zone.planting_points == 0
        assert zone.estimated_yield > 0
        assert zone.longest_lateral_id is None
        assert zone.longest_lateral_emitters == 0


# ============================================================
# Project Totals Tests
# ============================================================

class TestProjectTotals:
    """Tests for project-wide totals."""

    def test_totals(self, aggregator, sample_snapshot, crops):
        summary = aggregator.summarize(sample_snapshot, crops)
        totals = summary.totals

        assert totals.zone_count == 2
        assert totals.total_area_m2 == sum(z.area_m2 for z in summary.zones)
        assert totals.total_planting_points == 403
        assert totals.total_estimated_yield == summary.zones[0].estimated_yield

    def test_water_totals(self, aggregator, sample_snapshot, crops):
        water = aggregator.summarize(sample_snapshot, crops).totals.water
        assert water.per_irrigation_liters == 1693
        assert water.monthly_liters == 1693 * 30
        assert water.yearly_liters == 1693 * 365

    def test_emitter_totals(self, aggregator, sample_snapshot, crops):
        totals = aggregator.summarize(sample_snapshot, crops).totals
        assert totals.zone_emitters.total == 6
        # includes the unplaced emitter
        assert totals.project_emitters.total == 7

    def test_drip_line_totals(self, aggregator, sample_snapshot, crops):
        """Drip outlets combine unique drip emitters with unique drip lines."""
        snapshot = sample_snapshot.model_copy(update={"irrigation_lines": [
            IrrigationLine(id="d1", type="drip_tape"),
            IrrigationLine(id="d1", type="drip_tape"),
            IrrigationLine(id="d2", type="drip-irrigation"),
            IrrigationLine(id="s1", type="sprinkler"),
        ]})
        totals = aggregator.summarize(snapshot, crops).totals
        assert totals.drip_lines == 2
        assert totals.project_emitters.drip_tape == 1
        assert totals.drip_outlets == 3

    def test_no_drip_lines(self, aggregator, sample_snapshot, crops):
        totals = aggregator.summarize(sample_snapshot, crops).totals
        assert totals.drip_lines == 0
        assert totals.drip_outlets == 1

    def test_pipe_totals(self, aggregator, sample_snapshot, crops):
        totals = aggregator.summarize(sample_snapshot, crops).totals
        assert totals.zone_pipe_count == 5
        assert totals.zone_pipe_length == 270
        assert totals.zone_pipe_longest_length == 220
        assert totals.project_pipes.total == 5
        assert totals.project_pipes.lateral.longest_length == 50

    def test_main_field_area(self, aggregator, sample_snapshot, crops, geo):
        snapshot = sample_snapshot.model_copy(update={"main_field": geo.square(0, 0, 300)})
        totals = aggregator.summarize(snapshot, crops).totals
        assert totals.field_area_m2 == pytest.approx(90000, rel=0.01)
        assert totals.field_area_rai == pytest.approx(56.25, rel=0.01)

    def test_no_main_field(self, aggregator, sample_snapshot, crops):
        assert aggregator.summarize(sample_snapshot, crops).totals.field_area_m2 == 0

    def test_empty_project(self, aggregator):
        summary = aggregator.summarize(ProjectSnapshot(zones=[]), {})
        assert summary.zones == []
        assert summary.totals.zone_count == 0
        assert summary.totals.water.yearly_liters == 0


class TestEquipment:
    """Tests for equipment tallies."""

    def test_count_equipment(self, sample_snapshot):
        snapshot = sample_snapshot.model_copy(update={"equipment": [
            EquipmentIcon(id="a", type="pump"),
            EquipmentIcon(id="a", type="pump"),
            EquipmentIcon(id="b", type="ballvalve"),
            EquipmentIcon(id="c", type="Solenoid"),
            EquipmentIcon(id="d", type="filter"),
        ]})
        counts = count_equipment(snapshot)
        assert counts.pumps == 1
        assert counts.valves == 1
        assert counts.solenoids == 1


# ============================================================
# Determinism Tests
# ============================================================

class TestDeterminism:
    """Summaries are pure functions of the snapshot."""

    def test_idempotent(self, aggregator, sample_snapshot, crops):
        first = aggregator.summarize(sample_snapshot, crops)
        second = aggregator.summarize(sample_snapshot, crops)
        assert first.model_dump() == second.model_dump()

    def test_zone_order_does_not_change_summaries(self, aggregator, sample_snapshot, crops):
        forward = aggregator.summarize(sample_snapshot, crops)
        reversed_snapshot = sample_snapshot.model_copy(
            update={"zones": list(reversed(sample_snapshot.zones))}
        )
        backward = aggregator.summarize(reversed_snapshot, crops)

        by_id = {z.zone_id: z.model_dump() for z in backward.zones}
        for zone in forward.zones:
            assert by_id[zone.zone_id] == zone.model_dump()
        assert backward.totals.model_dump() == forward.totals.model_dump()

    def test_snapshot_is_not_mutated(self, aggregator, sample_snapshot, crops):
        before = sample_snapshot.model_dump()
        aggregator.summarize(sample_snapshot, crops)
        assert sample_snapshot.model_dump() == before
