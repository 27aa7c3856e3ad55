"""
Domain models for irrigation project snapshots and derived statistics.

Input records mirror what the map authoring layer produces (camelCase keys
are accepted through aliases). Output records are recomputed on every call
and never persisted by the engine.
"""
import math
from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, Field, model_validator


PIPE_TIERS = ("main", "submain", "lateral")

EMITTER_BUCKETS = ("sprinkler", "mini_sprinkler", "micro_spray", "drip_tape")


# Ids arrive as numbers or strings depending on the editor
ObjectId = Annotated[str, BeforeValidator(str)]


# ============================================================
# Input records
# ============================================================

class Coordinate(BaseModel):
    """A (latitude, longitude) pair in degrees."""
    lat: float
    lng: float

    @model_validator(mode="before")
    @classmethod
    def _from_pair(cls, data):
        # [lat, lng] pairs are stored alongside {lat, lng} objects
        if isinstance(data, (list, tuple)) and len(data) == 2:
            return {"lat": data[0], "lng": data[1]}
        return data

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class Zone(BaseModel):
    """User-drawn polygonal sub-area of the field."""
    id: ObjectId
    name: str = ""
    color: Optional[str] = None
    coordinates: List[Coordinate] = Field(
        default_factory=list,
        description="Zone ring; closed implicitly when first != last",
    )


class PipeSegment(BaseModel):
    """A drawn pipe polyline."""
    id: ObjectId
    tier: Optional[str] = Field(
        default=None,
        alias="type",
        description="main, submain or lateral; inferred when absent",
    )
    coordinates: List[Coordinate] = Field(default_factory=list)
    zone_id: Optional[ObjectId] = Field(default=None, alias="zoneId")
    color: Optional[str] = None
    path_color: Optional[str] = Field(
        default=None,
        alias="pathColor",
        description="Secondary display color used when color is absent",
    )

    class Config:
        populate_by_name = True


class IrrigationPoint(BaseModel):
    """A placed emitter."""
    id: ObjectId
    lat: Optional[float] = None
    lng: Optional[float] = None
    type: Optional[str] = None
    radius: Optional[float] = Field(default=None, description="Coverage radius in m")

    @property
    def has_position(self) -> bool:
        """True when both coordinates are present and finite."""
        return (
            self.lat is not None and self.lng is not None
            and math.isfinite(self.lat) and math.isfinite(self.lng)
        )


class Crop(BaseModel):
    """Crop agronomic and economic parameters."""
    value: str
    name: str
    category: Optional[str] = None
    irrigation_needs: Optional[str] = Field(default=None, alias="irrigationNeeds")
    row_spacing: float = Field(default=0.0, alias="rowSpacing", description="cm")
    plant_spacing: float = Field(default=0.0, alias="plantSpacing", description="cm")
    water_requirement: float = Field(
        default=0.0,
        alias="waterRequirement",
        description="Liters per plant per irrigation",
    )
    yield_per_rai: float = Field(default=0.0, alias="yield", description="kg per rai")
    price_per_kg: float = Field(default=0.0, alias="price")
    growth_period: int = Field(default=0, alias="growthPeriod", description="days")

    class Config:
        populate_by_name = True


class ZoneCropAssignment(BaseModel):
    """Crop assigned to a zone, with optional spacing overrides in cm."""
    zone_id: ObjectId = Field(alias="zoneId")
    crop_value: str = Field(alias="cropValue")
    row_spacing: Optional[float] = Field(default=None, alias="rowSpacing")
    plant_spacing: Optional[float] = Field(default=None, alias="plantSpacing")

    class Config:
        populate_by_name = True


class IrrigationLine(BaseModel):
    """A drawn emitter line (drip tape and similar)."""
    id: ObjectId
    type: Optional[str] = None
    coordinates: List[Coordinate] = Field(default_factory=list)


class EquipmentIcon(BaseModel):
    """Equipment marker placed on the map (pump, valve, solenoid...)."""
    id: ObjectId
    type: str
    lat: Optional[float] = None
    lng: Optional[float] = None


class ProjectSnapshot(BaseModel):
    """Everything the engine needs for one computation."""
    zones: List[Zone]
    pipes: List[PipeSegment] = Field(default_factory=list)
    irrigation_points: List[IrrigationPoint] = Field(
        default_factory=list, alias="irrigationPoints"
    )
    assignments: List[ZoneCropAssignment] = Field(default_factory=list)
    crops: List[Crop] = Field(
        default_factory=list,
        description="Project crop definitions, taking precedence over the catalog",
    )
    irrigation_assignments: Dict[str, str] = Field(
        default_factory=dict,
        alias="irrigationAssignments",
        description="Zone id -> irrigation system label",
    )
    irrigation_lines: List[IrrigationLine] = Field(
        default_factory=list, alias="irrigationLines"
    )
    equipment: List[EquipmentIcon] = Field(default_factory=list)
    main_field: Optional[List[Coordinate]] = Field(default=None, alias="mainField")

    class Config:
        populate_by_name = True


# ============================================================
# Derived records
# ============================================================

class PipeTierStats(BaseModel):
    """Length statistics for one pipe tier."""
    count: int = 0
    total_length: int = Field(default=0, description="m")
    longest_length: int = Field(default=0, description="m")


class ZonePipeStats(BaseModel):
    """Per-tier pipe statistics plus cross-tier sums."""
    main: PipeTierStats = Field(default_factory=PipeTierStats)
    submain: PipeTierStats = Field(default_factory=PipeTierStats)
    lateral: PipeTierStats = Field(default_factory=PipeTierStats)
    total: int = 0
    total_length: int = 0
    total_longest_length: int = Field(
        default=0,
        description="Sum of the longest pipe of each tier",
    )


class EmitterCounts(BaseModel):
    """Emitter tallies per canonical bucket."""
    sprinkler: int = 0
    mini_sprinkler: int = 0
    micro_spray: int = 0
    drip_tape: int = 0
    total: int = 0

    def __add__(self, other: "EmitterCounts") -> "EmitterCounts":
        return EmitterCounts(
            **{field: getattr(self, field) + getattr(other, field)
               for field in (*EMITTER_BUCKETS, "total")}
        )


class WaterDemandSummary(BaseModel):
    """Water demand expressed per irrigation, per month and per year."""
    per_irrigation_liters: int = 0
    per_irrigation_m3: float = 0.0
    monthly_liters: int = 0
    monthly_m3: float = 0.0
    yearly_liters: int = 0
    yearly_m3: float = 0.0


class YieldEstimate(BaseModel):
    estimated_yield: int = Field(default=0, description="kg")
    estimated_price: int = Field(default=0, description="currency units")


class ZoneSummary(BaseModel):
    """Recomputed-on-demand metrics for one zone."""
    zone_id: str
    zone_name: str
    zone_color: Optional[str] = None
    crop_value: Optional[str] = None
    crop_name: str
    crop_category: Optional[str] = None
    irrigation_type: str
    area_m2: int = 0
    area_rai: float = 0.0
    row_spacing_m: float = 0.0
    plant_spacing_m: float = 0.0
    planting_strategy: Optional[str] = Field(
        default=None,
        description="'area' or 'pipes'; None when no crop is assigned",
    )
    planting_points: int = 0
    estimated_yield: int = 0
    estimated_price: int = 0
    water_per_irrigation_liters: int = 0
    water_per_irrigation_m3: float = 0.0
    crop_yield_per_rai: float = 0.0
    crop_price_per_kg: float = 0.0
    crop_water_per_plant: float = 0.0
    growth_period: int = 0
    pipe_stats: ZonePipeStats = Field(default_factory=ZonePipeStats)
    emitters: EmitterCounts = Field(default_factory=EmitterCounts)
    longest_lateral_id: Optional[str] = None
    longest_lateral_emitters: int = 0


class EquipmentCounts(BaseModel):
    pumps: int = 0
    valves: int = 0
    solenoids: int = 0


class ProjectTotals(BaseModel):
    """Sums over all zone summaries plus zone-agnostic network statistics."""
    zone_count: int = 0
    total_area_m2: int = 0
    total_area_rai: float = 0.0
    total_planting_points: int = 0
    total_estimated_yield: int = 0
    total_estimated_price: int = 0
    water: WaterDemandSummary = Field(default_factory=WaterDemandSummary)
    zone_emitters: EmitterCounts = Field(
        default_factory=EmitterCounts,
        description="Sum of per-zone emitter buckets",
    )
    project_emitters: EmitterCounts = Field(
        default_factory=EmitterCounts,
        description="All unique emitters, regardless of zone",
    )
    zone_pipe_count: int = 0
    zone_pipe_length: int = 0
    zone_pipe_longest_length: int = 0
    project_pipes: ZonePipeStats = Field(
        default_factory=ZonePipeStats,
        description="Whole-project per-tier statistics (not zone filtered)",
    )
    field_area_m2: int = 0
    drip_lines: int = Field(default=0, description="Unique drip tape lines")
    drip_outlets: int = Field(
        default=0,
        description="Unique drip tape emitters plus drip tape lines",
    )
    field_area_rai: float = 0.0
    equipment: EquipmentCounts = Field(default_factory=EquipmentCounts)


class ProjectSummary(BaseModel):
    """Engine output: one summary per zone plus project totals."""
    zones: List[ZoneSummary]
    totals: ProjectTotals
