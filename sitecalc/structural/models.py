"""
Estimator Data Models
Inputs and results for the concrete/steel estimators. Calculation logic
lives in steel_estimator.py and quantity_engine.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from .units import parse_count, parse_number


class ElementType(Enum):
    """Structural element handled by the steel-weight calculator."""
    BEAM = "beam"
    COLUMN = "column"
    SLAB = "slab"


@dataclass(frozen=True)
class SteelBarGroup:
    """A set of identical bars in a member."""
    count: int
    diameter_mm: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SteelBarGroup":
        return cls(
            count=parse_count(data.get('count')),
            diameter_mm=parse_number(data.get('diameter_mm', data.get('diameter')))
        )


@dataclass(frozen=True)
class Member:
    """
    RCC member as entered in the quick estimator or project desk.

    Dimensions are in metres. Steel is described by one or more bar groups.
    """
    name: str = ""
    length: float = 0.0
    width: float = 0.0
    depth: float = 0.0
    quantity: float = 1  # whole count in the project desk, decimal in the quick estimator
    bar_groups: Tuple[SteelBarGroup, ...] = ()
    member_id: str = ""

    @classmethod
    def single(
        cls,
        length: float,
        width: float,
        depth: float,
        quantity: float = 1,
        number_of_bars: int = 0,
        bar_diameter_mm: float = 0.0,
        name: str = ""
    ) -> "Member":
        """Member with a single bar group."""
        return cls(
            name=name,
            length=length,
            width=width,
            depth=depth,
            quantity=quantity,
            bar_groups=(SteelBarGroup(number_of_bars, bar_diameter_mm),)
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        """
        Build a member from a project file / form mapping.

        Bars can be given as a 'bars' list of {count, diameter_mm}, or as
        the flat 'number_of_bars' / 'bar_diameter_mm' pair.
        """
        if data.get('bars'):
            groups = tuple(SteelBarGroup.from_dict(b) for b in data['bars'])
        else:
            groups = (SteelBarGroup(
                count=parse_count(data.get('number_of_bars')),
                diameter_mm=parse_number(data.get('bar_diameter_mm'))
            ),)

        return cls(
            name=str(data.get('name', '')),
            length=parse_number(data.get('length')),
            width=parse_number(data.get('width')),
            depth=parse_number(data.get('depth')),
            quantity=parse_count(data.get('quantity', 1)),
            bar_groups=groups,
            member_id=str(data.get('id', ''))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.member_id,
            'name': self.name,
            'length': self.length,
            'width': self.width,
            'depth': self.depth,
            'quantity': self.quantity,
            'bars': [{'count': g.count, 'diameter_mm': g.diameter_mm} for g in self.bar_groups]
        }


@dataclass(frozen=True)
class RateConfig:
    """Material and labour rates (INR)."""
    concrete_rate: float = 0.0        # per m³
    steel_rate: float = 0.0           # per kg
    concrete_labor_rate: float = 0.0  # per m³
    steel_labor_rate: float = 0.0     # per kg

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateConfig":
        """Parse rates from form text; invalid or empty entries read as 0."""
        return cls(
            concrete_rate=parse_number(data.get('concrete_rate')),
            steel_rate=parse_number(data.get('steel_rate')),
            concrete_labor_rate=parse_number(data.get('concrete_labor_rate')),
            steel_labor_rate=parse_number(data.get('steel_labor_rate'))
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            'concrete_rate': self.concrete_rate,
            'steel_rate': self.steel_rate,
            'concrete_labor_rate': self.concrete_labor_rate,
            'steel_labor_rate': self.steel_labor_rate
        }


@dataclass(frozen=True)
class BeamInputs:
    """Beam geometry (length in m, section in mm) and reinforcement."""
    length: float
    width: float
    depth: float
    main_bar_dia: float
    main_bar_count: float
    stirrup_dia: float
    stirrup_spacing: float
    cover: float = 25.0

    element_type = ElementType.BEAM


@dataclass(frozen=True)
class ColumnInputs:
    """Column geometry (height in m, section in mm) and reinforcement."""
    height: float
    width: float
    depth: float
    main_bar_dia: float
    main_bar_count: float
    tie_dia: float
    tie_spacing: float
    cover: float = 40.0

    element_type = ElementType.COLUMN


@dataclass(frozen=True)
class SlabInputs:
    """Slab plan size (m) and two-way reinforcement (mm)."""
    length: float
    width: float
    main_bar_dia: float
    main_bar_spacing: float
    dist_bar_dia: float
    dist_bar_spacing: float
    thickness: float = 0.0  # mm, not used by the steel take-off
    cover: float = 20.0

    element_type = ElementType.SLAB


StructuralElement = Union[BeamInputs, ColumnInputs, SlabInputs]


@dataclass(frozen=True)
class SteelLine:
    """One reinforcement line of a take-off (e.g. main bars, stirrups)."""
    description: str
    bar_dia: float
    bar_count: float  # fencepost counts are not rounded
    cutting_length_m: float
    total_length_m: float
    weight_kg: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description': self.description,
            'bar_dia_mm': self.bar_dia,
            'bar_count': round(self.bar_count, 2),
            'cutting_length_m': round(self.cutting_length_m, 3),
            'total_length_m': round(self.total_length_m, 3),
            'weight_kg': round(self.weight_kg, 2)
        }


# Name of the secondary line per element type
SECONDARY_LABELS = {
    ElementType.BEAM: 'stirrups',
    ElementType.COLUMN: 'ties',
    ElementType.SLAB: 'distribution_bars',
}


@dataclass(frozen=True)
class ElementSteelResult:
    """Steel take-off for one beam, column or slab."""
    element_type: ElementType
    main_bars: SteelLine
    secondary: SteelLine
    total_kg: float

    @property
    def lines(self) -> List[SteelLine]:
        return [self.main_bars, self.secondary]

    @property
    def stirrups(self) -> Optional[SteelLine]:
        return self.secondary if self.element_type == ElementType.BEAM else None

    @property
    def ties(self) -> Optional[SteelLine]:
        return self.secondary if self.element_type == ElementType.COLUMN else None

    @property
    def distribution_bars(self) -> Optional[SteelLine]:
        return self.secondary if self.element_type == ElementType.SLAB else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'element_type': self.element_type.value,
            'main_bars': self.main_bars.to_dict(),
            SECONDARY_LABELS[self.element_type]: self.secondary.to_dict(),
            'total_kg': round(self.total_kg, 2)
        }


class SteelMethod(Enum):
    """How member steel weight is estimated in the project desk."""
    AREA = "area"              # bar area x assumed bar length (length x quantity)
    PERCENTAGE = "percentage"  # percentage of concrete volume


@dataclass(frozen=True)
class MemberQuantity:
    """Computed quantities and costs for one member."""
    member_id: str
    name: str
    concrete_volume_m3: float = 0.0
    steel_area_mm2: float = 0.0
    steel_weight_kg: float = 0.0
    material_cost: float = 0.0
    labor_cost: float = 0.0

    @property
    def total_cost(self) -> float:
        return self.material_cost + self.labor_cost

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.member_id,
            'name': self.name,
            'concrete_m3': round(self.concrete_volume_m3, 3),
            'steel_area_mm2': round(self.steel_area_mm2, 0),
            'steel_kg': round(self.steel_weight_kg, 2),
            'material_cost': round(self.material_cost, 2),
            'labor_cost': round(self.labor_cost, 2),
            'total_cost': round(self.total_cost, 2)
        }


@dataclass
class ProjectTotals:
    """Aggregated quantities and costs for a member list."""
    concrete_volume: float = 0.0  # m³
    steel_area: float = 0.0       # mm²
    steel_weight: float = 0.0     # kg
    material_cost: float = 0.0
    labor_cost: float = 0.0
    grand_total: float = 0.0
    method: SteelMethod = SteelMethod.AREA
    members: List[MemberQuantity] = field(default_factory=list)

    @property
    def steel_tonnes(self) -> float:
        return self.steel_weight / 1000

    def to_dict(self) -> Dict[str, Any]:
        return {
            'method': self.method.value,
            'concrete_m3': round(self.concrete_volume, 3),
            'steel_area_mm2': round(self.steel_area, 0),
            'steel_kg': round(self.steel_weight, 2),
            'steel_tonnes': round(self.steel_tonnes, 3),
            'material_cost': round(self.material_cost, 2),
            'labor_cost': round(self.labor_cost, 2),
            'grand_total': round(self.grand_total, 2),
            'members': [m.to_dict() for m in self.members]
        }
