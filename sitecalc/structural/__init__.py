"""
Structural Quantity & Cost Estimator
For Indian RCC members

Modules:
- models: Member, rate and element input/result types
- steel_estimator: Unit weights, bar areas and cutting-length take-offs
- quantity_engine: Concrete volumes, steel weights and project totals
- estimators: Quick estimator, project desk, steel-weight calculator
- units: Form/CLI input parsing and rebar callouts
- formatting: Display formatting (INR, m³, mm², kg)
- config: Defaults from rules/estimator_defaults.yaml
- export_structural: Export to JSON/CSV/Excel
"""

from .models import (
    ElementType,
    SteelBarGroup,
    Member,
    RateConfig,
    BeamInputs,
    ColumnInputs,
    SlabInputs,
    StructuralElement,
    SteelLine,
    ElementSteelResult,
    SteelMethod,
    MemberQuantity,
    ProjectTotals
)

from .steel_estimator import (
    STEEL_DENSITY_KG_M3,
    NOMINAL_DIAMETERS,
    BAR_WEIGHTS,
    unit_weight_per_meter,
    steel_bar_area,
    steel_weight_from_area,
    steel_weight_from_percentage,
    beam_steel_weight,
    column_steel_weight,
    slab_steel_weight,
    element_steel_weight
)

from .quantity_engine import (
    member_concrete_volume,
    member_steel_area,
    member_quantities,
    project_totals
)

from .estimators import (
    QuickEstimate,
    quick_estimate,
    ProjectDesk,
    SteelWeightCalculator
)

from .units import (
    parse_number,
    parse_count,
    mm_to_m,
    m_to_mm,
    parse_rebar_callout
)

from .formatting import (
    format_inr,
    format_volume,
    format_area,
    format_length,
    format_weight
)

from .config import (
    load_defaults,
    default_steel_percent
)

from .export_structural import (
    EstimateExporter,
    build_members_df,
    build_summary_df,
    build_steel_df,
    export_steel_csv
)

__all__ = [
    # Models
    'ElementType',
    'SteelBarGroup',
    'Member',
    'RateConfig',
    'BeamInputs',
    'ColumnInputs',
    'SlabInputs',
    'StructuralElement',
    'SteelLine',
    'ElementSteelResult',
    'SteelMethod',
    'MemberQuantity',
    'ProjectTotals',

    # Steel estimation
    'STEEL_DENSITY_KG_M3',
    'NOMINAL_DIAMETERS',
    'BAR_WEIGHTS',
    'unit_weight_per_meter',
    'steel_bar_area',
    'steel_weight_from_area',
    'steel_weight_from_percentage',
    'beam_steel_weight',
    'column_steel_weight',
    'slab_steel_weight',
    'element_steel_weight',

    # Quantity computation
    'member_concrete_volume',
    'member_steel_area',
    'member_quantities',
    'project_totals',

    # Estimators
    'QuickEstimate',
    'quick_estimate',
    'ProjectDesk',
    'SteelWeightCalculator',

    # Units
    'parse_number',
    'parse_count',
    'mm_to_m',
    'm_to_mm',
    'parse_rebar_callout',

    # Formatting
    'format_inr',
    'format_volume',
    'format_area',
    'format_length',
    'format_weight',

    # Config
    'load_defaults',
    'default_steel_percent',

    # Export
    'EstimateExporter',
    'build_members_df',
    'build_summary_df',
    'build_steel_df',
    'export_steel_csv'
]
