"""
Site Estimators
The three estimator workflows built on the calculation engine:

- quick_estimate: one member, one bar size, material cost only
- ProjectDesk: named project with many members and labour rates
- SteelWeightCalculator: cutting-length take-off for a beam, column or slab
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import load_defaults, load_yaml
from .models import (
    ElementSteelResult,
    ElementType,
    Member,
    ProjectTotals,
    RateConfig,
    SteelBarGroup,
    SteelLine,
    SteelMethod,
    StructuralElement,
)
from .quantity_engine import member_quantities, project_totals
from .steel_estimator import element_steel_weight
from .units import parse_count, parse_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuickEstimate:
    """Result of the quick field estimator."""
    concrete_volume: float  # m³
    steel_area: float       # mm²
    steel_weight: float     # kg
    total_cost: float       # INR

    def to_dict(self) -> Dict[str, float]:
        return {
            'concrete_m3': round(self.concrete_volume, 3),
            'steel_area_mm2': round(self.steel_area, 0),
            'steel_kg': round(self.steel_weight, 2),
            'total_cost': round(self.total_cost, 2)
        }


def quick_estimate(member: Member, concrete_rate: float, steel_rate: float) -> QuickEstimate:
    """
    Quick field estimate for a single member.

    Steel weight uses the bar-area method; no labour is included.
    """
    rates = RateConfig(concrete_rate=concrete_rate, steel_rate=steel_rate)
    qty = member_quantities(member, rates, SteelMethod.AREA)
    return QuickEstimate(
        concrete_volume=qty.concrete_volume_m3,
        steel_area=qty.steel_area_mm2,
        steel_weight=qty.steel_weight_kg,
        total_cost=qty.material_cost
    )


# Editable member fields and the form parser applied to each
_FIELD_PARSERS = {
    'name': str,
    'length': parse_number,
    'width': parse_number,
    'depth': parse_number,
    'quantity': parse_count,
}

# Shorthand for the bars of a single-group member
_BAR_FIELDS = {
    'number_of_bars': parse_count,
    'bar_diameter_mm': parse_number,
}

_EDITABLE_FIELDS = set(_FIELD_PARSERS) | set(_BAR_FIELDS) | {'bar_groups'}


class ProjectDesk:
    """
    Detailed project estimate held in memory.

    Members are immutable; edits replace the member in the list. Totals
    are recomputed from the full list on every call.
    """

    def __init__(
        self,
        name: str = "",
        rates: Optional[RateConfig] = None,
        members: Optional[List[Member]] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize desk.

        Args:
            name: Project name
            rates: Rates (default: from rules)
            members: Initial members (default: the sample member from rules)
            config: Loaded defaults (default: load_defaults())
        """
        self.config = config or load_defaults()
        self.name = name
        self.rates = rates or RateConfig.from_dict(self.config['rates'])
        self.members: List[Member] = []
        self._next_id = 1

        if members is None:
            members = [Member.from_dict(self.config['project']['sample_member'])]
        for member in members:
            self.add_member(member)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], config: Optional[Dict[str, Any]] = None) -> "ProjectDesk":
        """Build a desk from a project mapping (name, rates, members)."""
        config = config or load_defaults()
        rates = RateConfig.from_dict({**config['rates'], **(data.get('rates') or {})})
        members = [Member.from_dict(m) for m in data.get('members') or []]
        return cls(name=str(data.get('name', '')), rates=rates, members=members, config=config)

    @classmethod
    def from_file(cls, path: Path, config: Optional[Dict[str, Any]] = None) -> "ProjectDesk":
        """Load a project YAML file."""
        logger.info(f"Loading project from {path}")
        return cls.from_dict(load_yaml(Path(path)), config)

    def _get_index(self, member_id: str) -> int:
        for i, member in enumerate(self.members):
            if member.member_id == member_id:
                return i
        raise KeyError(f"No member with id {member_id!r}")

    def get_member(self, member_id: str) -> Member:
        return self.members[self._get_index(member_id)]

    def add_member(self, member: Optional[Member] = None) -> Member:
        """
        Append a member, assigning it the next id.

        Without an argument a blank member named "Member N" is added.
        """
        if member is None:
            template = dict(self.config['project']['new_member'])
            template['name'] = f"Member {len(self.members) + 1}"
            member = Member.from_dict(template)

        member = replace(member, member_id=str(self._next_id))
        self._next_id += 1
        self.members.append(member)
        logger.debug(f"Added member {member.member_id}: {member.name}")
        return member

    def remove_member(self, member_id: str) -> Member:
        """Remove a member by id and return it."""
        return self.members.pop(self._get_index(member_id))

    def update_member(self, member_id: str, /, **changes: Any) -> Member:
        """
        Replace fields of a member.

        Values go through the form parsers, so text like "0.45" is accepted
        and invalid entries read as 0. `number_of_bars` / `bar_diameter_mm`
        edit the bars of a single-group member; `bar_groups` replaces all
        groups.

        Raises:
            KeyError: Unknown member id
            ValueError: Unknown field name, or bar shorthand on a
                multi-group member
        """
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update member fields: {', '.join(sorted(unknown))}")

        index = self._get_index(member_id)
        member = self.members[index]

        values = {
            key: parser(changes[key])
            for key, parser in _FIELD_PARSERS.items()
            if key in changes
        }

        if 'bar_groups' in changes:
            values['bar_groups'] = tuple(
                g if isinstance(g, SteelBarGroup) else SteelBarGroup.from_dict(g)
                for g in changes['bar_groups']
            )

        if any(key in changes for key in _BAR_FIELDS):
            groups = values.get('bar_groups', member.bar_groups)
            if len(groups) > 1:
                raise ValueError(
                    "number_of_bars / bar_diameter_mm apply to single-group members, "
                    "use bar_groups instead"
                )
            group = groups[0] if groups else SteelBarGroup(0, 0.0)
            if 'number_of_bars' in changes:
                group = replace(group, count=parse_count(changes['number_of_bars']))
            if 'bar_diameter_mm' in changes:
                group = replace(group, diameter_mm=parse_number(changes['bar_diameter_mm']))
            values['bar_groups'] = (group,)

        updated = replace(member, **values)
        self.members[index] = updated
        return updated

    def totals(
        self,
        method: SteelMethod = SteelMethod.AREA,
        steel_percent: Optional[float] = None
    ) -> ProjectTotals:
        """Current project totals."""
        return project_totals(self.members, self.rates, method, steel_percent)

    def validate_for_save(self) -> List[str]:
        """Problems that block saving the project; empty when it can be saved."""
        problems = []
        if not self.name.strip():
            problems.append("Project name is required")
        return problems

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'rates': self.rates.to_dict(),
            'members': [m.to_dict() for m in self.members]
        }


class SteelWeightCalculator:
    """
    Holds the selected element type and the last steel take-off.

    Each calculation starts from a cleared result, so an incomplete input
    leaves no stale numbers behind.
    """

    def __init__(self):
        self.selected: Optional[ElementType] = None
        self.result: Optional[ElementSteelResult] = None

    @property
    def lines(self) -> List[SteelLine]:
        return self.result.lines if self.result else []

    @property
    def total_weight(self) -> float:
        return self.result.total_kg if self.result else 0.0

    def select(self, element_type: ElementType):
        self.selected = element_type
        self.result = None

    def calculate(self, element: StructuralElement) -> Optional[ElementSteelResult]:
        """Run the take-off for an element; None when inputs are incomplete."""
        self.result = None
        self.result = element_steel_weight(element)
        self.selected = element.element_type
        return self.result

    def reset(self):
        self.selected = None
        self.result = None
