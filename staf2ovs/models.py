from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------- Enums ----------

class BayLevelEnum(str, Enum):
    ABOVE = "ABOVE"
    BELOW = "BELOW"


class KnownEstimated(str, Enum):
    KNOWN = "KNOWN"
    ESTIMATED = "ESTIMATED"


class ValuesSource(str, Enum):
    KNOWN = "KNOWN"
    ESTIMATED = "ESTIMATED"
    BY_TIER = "BY_TIER"


class LcgReference(str, Enum):
    AFT_PERPENDICULAR = "AFT_PERPENDICULAR"
    MIDSHIPS = "MIDSHIPS"
    FWD_PERPENDICULAR = "FWD_PERPENDICULAR"


class ForeAft(str, Enum):
    FWD = "FWD"
    AFT = "AFT"


class PortStarboard(str, Enum):
    PORT = "PORT"
    STARBOARD = "STARBOARD"


class ContainerLength(IntEnum):
    L20 = 20
    L24 = 24
    L40 = 40
    L45 = 45
    L48 = 48


# ---------- CG options (pydantic) ----------

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LcgOptions(_CamelModel):
    values: KnownEstimated = KnownEstimated.ESTIMATED
    reference: LcgReference = LcgReference.AFT_PERPENDICULAR
    orientation_increase: ForeAft = ForeAft.FWD
    lpp: t.Optional[float] = None


class TcgOptions(_CamelModel):
    values: KnownEstimated = KnownEstimated.ESTIMATED
    direction: PortStarboard = PortStarboard.STARBOARD


class VcgOptions(_CamelModel):
    values: ValuesSource = ValuesSource.ESTIMATED
    height_factor: t.Optional[float] = None


class ShipData(_CamelModel):
    ship_class: t.Optional[str] = None
    lcg_options: LcgOptions
    tcg_options: TcgOptions
    vcg_options: VcgOptions
    containers_lengths: t.List[int] = []
    master_cgs: t.Dict[str, t.Dict[str, float]] = Field(default_factory=dict, alias="masterCGs")

    def to_ovs(self) -> dict:
        """Dump only the option fields the output document carries."""
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude={
                "lcg_options": {"reference", "orientation_increase"},
                "tcg_options": {"direction"},
            },
        )


# ---------- Bay-level hierarchy (mutable, owned by the pipeline) ----------

@dataclass(frozen=True)
class UsesMaster:
    """Row value equal to ``masterCGs[family][key]`` at consolidation time."""

    key: str
    value: float


CgValue = t.Union[float, UsesMaster, None]


@dataclass
class LengthInfo:
    lcg: t.Optional[float] = None
    stack_weight: t.Optional[float] = None


@dataclass
class RowLengthInfo:
    lcg: t.Optional[float] = None


@dataclass
class RowInfo:
    iso_row: str
    tcg: CgValue = None
    bottom_iso_tier: t.Optional[str] = None
    top_iso_tier: t.Optional[str] = None
    bottom_base: CgValue = None
    max_height: t.Optional[int] = None
    row_info_by_length: t.Dict[ContainerLength, RowLengthInfo] = field(default_factory=dict)


@dataclass
class TierInfo:
    iso_tier: str
    vcg: t.Optional[float] = None


@dataclass
class SlotInfo:
    sizes: t.List[ContainerLength] = field(default_factory=list)
    reefer: t.Optional[bool] = None
    restricted: t.Optional[bool] = None


@dataclass
class Bulkhead:
    fore: t.Optional[bool] = None
    fore_lcg: t.Optional[float] = None
    aft_lcg: t.Optional[float] = None


@dataclass
class BayLevel:
    iso_bay: int
    level: BayLevelEnum
    label20: t.Optional[str] = None
    label40: t.Optional[str] = None
    info_by_cont_length: t.Dict[ContainerLength, LengthInfo] = field(default_factory=dict)
    per_row_info: t.Dict[str, RowInfo] = field(default_factory=dict)
    # None once the CG remap has consumed it
    per_tier_info: t.Optional[t.Dict[str, TierInfo]] = field(default_factory=dict)
    per_slot_info: t.Dict[str, SlotInfo] = field(default_factory=dict)
    max_height: t.Optional[int] = None
    bulkhead: t.Optional[Bulkhead] = None
    paired_bay: t.Optional[ForeAft] = None
    doors: t.Optional[ForeAft] = None
    athwart_ship: t.Optional[bool] = None

    @property
    def key(self) -> str:
        return f"{self.iso_bay}-{self.level.value}"
