"""
RCC Site Estimator - CLI Entry Point

Commands:
    quick     - Quick field estimate for one member
    steel     - Steel take-off for a beam, column or slab
    project   - Detailed estimate from a project YAML file
    bars      - Unit weights of nominal bar sizes
"""

import argparse
import logging
import sys
from pathlib import Path

from .structural.config import default_steel_percent, load_defaults
from .structural.estimators import ProjectDesk, SteelWeightCalculator, quick_estimate
from .structural.export_structural import EXPORT_FORMATS, EstimateExporter, export_steel_csv
from .structural.formatting import (
    format_area,
    format_inr,
    format_length,
    format_volume,
    format_weight,
)
from .structural.models import BeamInputs, ColumnInputs, Member, SlabInputs, SteelMethod
from .structural.steel_estimator import unit_weight_per_meter
from .structural.units import parse_count, parse_number, parse_rebar_callout

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def _apply_callout(args, callout: str, count_attr: str, dia_attr: str, spacing_attr: str = None):
    """Fill bar count/diameter/spacing from a callout such as 4Y16 or Y8@150."""
    parsed = parse_rebar_callout(callout or "")
    if not parsed:
        return
    if count_attr and 'count' in parsed:
        setattr(args, count_attr, parsed['count'])
    if 'diameter' in parsed:
        setattr(args, dia_attr, parsed['diameter'])
    if spacing_attr and 'spacing' in parsed:
        setattr(args, spacing_attr, parsed['spacing'])


def cmd_quick(args):
    """Quick field estimate."""
    config = load_defaults(args.rules)
    quick = config['quick']
    rates = config['rates']

    member = Member.single(
        length=args.length,
        width=args.width,
        depth=args.depth,
        quantity=args.quantity if args.quantity is not None else quick['quantity'],
        number_of_bars=args.bars if args.bars is not None else quick['number_of_bars'],
        bar_diameter_mm=args.dia if args.dia is not None else quick['bar_diameter_mm']
    )
    concrete_rate = args.concrete_rate if args.concrete_rate is not None else rates['concrete_rate']
    steel_rate = args.steel_rate if args.steel_rate is not None else rates['steel_rate']

    result = quick_estimate(member, concrete_rate, steel_rate)

    print(f"\nConcrete volume: {format_volume(result.concrete_volume)}")
    print(f"Steel area:      {format_area(result.steel_area)}")
    print(f"Steel weight:    {format_weight(result.steel_weight)}")
    print(f"Total cost:      {format_inr(result.total_cost)}")
    return 0


def _build_element(args, config):
    covers = config['cover_mm']

    if args.element == 'beam':
        _apply_callout(args, args.main, 'main_count', 'main_dia')
        _apply_callout(args, args.links, None, 'link_dia', 'link_spacing')
        return BeamInputs(
            length=args.length, width=args.width, depth=args.depth,
            cover=args.cover if args.cover is not None else covers['beam'],
            main_bar_dia=args.main_dia, main_bar_count=args.main_count,
            stirrup_dia=args.link_dia, stirrup_spacing=args.link_spacing
        )

    if args.element == 'column':
        _apply_callout(args, args.main, 'main_count', 'main_dia')
        _apply_callout(args, args.links, None, 'link_dia', 'link_spacing')
        return ColumnInputs(
            height=args.height, width=args.width, depth=args.depth,
            cover=args.cover if args.cover is not None else covers['column'],
            main_bar_dia=args.main_dia, main_bar_count=args.main_count,
            tie_dia=args.link_dia, tie_spacing=args.link_spacing
        )

    _apply_callout(args, args.main, None, 'main_dia', 'main_spacing')
    _apply_callout(args, args.dist, None, 'dist_dia', 'dist_spacing')
    return SlabInputs(
        length=args.length, width=args.width, thickness=args.thickness,
        cover=args.cover if args.cover is not None else covers['slab'],
        main_bar_dia=args.main_dia, main_bar_spacing=args.main_spacing,
        dist_bar_dia=args.dist_dia, dist_bar_spacing=args.dist_spacing
    )


def cmd_steel(args):
    """Steel take-off for one element."""
    config = load_defaults(args.rules)
    element = _build_element(args, config)

    calculator = SteelWeightCalculator()
    result = calculator.calculate(element)
    if result is None:
        print("Incomplete input: all dimensions, cover, bar sizes, counts and spacings must be > 0")
        return 1

    print(f"\n{args.element.title()} steel take-off:")
    for line in calculator.lines:
        print(f"  {line.description:<28} {line.bar_count:>7.1f} nos x "
              f"{format_length(line.cutting_length_m)} = {format_length(line.total_length_m)}"
              f"  {format_weight(line.weight_kg)}")
    print(f"  {'Total':<28} {format_weight(calculator.total_weight)}")

    if args.output:
        path = export_steel_csv(result, Path(args.output) / f"{args.element}_steel.csv")
        print(f"Output: {path}")
    return 0


def cmd_project(args):
    """Detailed project estimate."""
    config = load_defaults(args.rules)
    desk = ProjectDesk.from_file(Path(args.input), config)

    method = SteelMethod(args.method)
    percent = None
    if method == SteelMethod.PERCENTAGE:
        percent = args.percent if args.percent is not None else default_steel_percent(config)
    totals = desk.totals(method, percent)

    print(f"\nProject: {desk.name or '(unnamed)'}")
    for m in totals.members:
        print(f"  {m.name:<20} {format_volume(m.concrete_volume_m3):>12} "
              f"{format_weight(m.steel_weight_kg):>12} {format_inr(m.total_cost):>14}")
    print(f"\nTotal concrete:  {format_volume(totals.concrete_volume)}")
    print(f"Total steel:     {format_weight(totals.steel_weight)} ({format_area(totals.steel_area)})")
    print(f"Material cost:   {format_inr(totals.material_cost)}")
    print(f"Labour cost:     {format_inr(totals.labor_cost)}")
    print(f"Grand total:     {format_inr(totals.grand_total)}")

    for problem in desk.validate_for_save():
        logger.warning(problem)

    if args.output:
        formats = EXPORT_FORMATS if args.format == 'all' else (args.format,)
        paths = EstimateExporter(Path(args.output)).export_all(desk, totals, formats)
        print(f"Outputs: {', '.join(str(p) for p in paths.values())}")
    return 0


def cmd_bars(args):
    """List unit weights of the nominal bar sizes in the rules."""
    config = load_defaults(args.rules)
    print("\nDia (mm)   kg/m")
    for dia in config['nominal_diameters']:
        print(f"  {dia:>4}    {unit_weight_per_meter(dia):.3f}")
    return 0


def _add_steel_parsers(steel_parser):
    elements = steel_parser.add_subparsers(dest='element', required=True)

    beam = elements.add_parser('beam', help='Beam: main bars + stirrups')
    beam.add_argument('--length', type=parse_number, required=True, help='Span (m)')
    beam.add_argument('--stirrups', dest='links', help='Stirrup callout, e.g. Y8@200')
    column = elements.add_parser('column', help='Column: main bars + lateral ties')
    column.add_argument('--height', type=parse_number, required=True, help='Height (m)')
    column.add_argument('--ties', dest='links', help='Tie callout, e.g. Y8@150')

    for p in (beam, column):
        p.add_argument('--width', type=parse_number, required=True, help='Width (mm)')
        p.add_argument('--depth', type=parse_number, required=True, help='Depth (mm)')
        p.add_argument('--main', help='Main bar callout, e.g. 4Y16')
        p.add_argument('--main-dia', type=parse_number, default=0.0)
        p.add_argument('--main-count', type=parse_count, default=0)
        p.add_argument('--link-dia', type=parse_number, default=0.0,
                       help='Stirrup/tie diameter (mm)')
        p.add_argument('--link-spacing', type=parse_number, default=0.0,
                       help='Stirrup/tie spacing (mm)')

    slab = elements.add_parser('slab', help='Slab: main + distribution bars')
    slab.add_argument('--length', type=parse_number, required=True, help='Length (m)')
    slab.add_argument('--width', type=parse_number, required=True, help='Width (m)')
    slab.add_argument('--thickness', type=parse_number, default=0.0, help='Thickness (mm)')
    slab.add_argument('--main', help='Main bar callout, e.g. Y10@150')
    slab.add_argument('--dist', help='Distribution bar callout, e.g. Y8@200')
    slab.add_argument('--main-dia', type=parse_number, default=0.0)
    slab.add_argument('--main-spacing', type=parse_number, default=0.0)
    slab.add_argument('--dist-dia', type=parse_number, default=0.0)
    slab.add_argument('--dist-spacing', type=parse_number, default=0.0)

    for p in (beam, column, slab):
        p.add_argument('--cover', type=parse_number, help='Clear cover (mm)')
        p.add_argument('--output', '-o', help='Output directory for CSV')


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RCC Site Estimator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Quick estimate for a 3m x 0.3m x 0.45m beam, 4 nos 16mm
  python -m sitecalc quick --length 3 --width 0.3 --depth 0.45 --bars 4 --dia 16

  # Beam steel take-off
  python -m sitecalc steel beam --length 6 --width 230 --depth 450 --main 4Y16 --stirrups Y8@200

  # Project estimate with exports
  python -m sitecalc project data/sample_project.yaml --output ./out
        """
    )

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--rules', type=Path,
                        help='Defaults file (default: rules/estimator_defaults.yaml)')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Quick command
    quick_parser = subparsers.add_parser('quick', help='Quick field estimate')
    quick_parser.add_argument('--length', type=parse_number, required=True, help='Length (m)')
    quick_parser.add_argument('--width', type=parse_number, required=True, help='Width (m)')
    quick_parser.add_argument('--depth', type=parse_number, required=True, help='Depth (m)')
    quick_parser.add_argument('--quantity', type=parse_number, help='Number of members')
    quick_parser.add_argument('--bars', type=parse_count, help='Number of bars')
    quick_parser.add_argument('--dia', type=parse_number, help='Bar diameter (mm)')
    quick_parser.add_argument('--concrete-rate', type=parse_number, help='INR per m³')
    quick_parser.add_argument('--steel-rate', type=parse_number, help='INR per kg')
    quick_parser.set_defaults(func=cmd_quick)

    # Steel command
    steel_parser = subparsers.add_parser('steel', help='Steel take-off for one element')
    _add_steel_parsers(steel_parser)
    steel_parser.set_defaults(func=cmd_steel)

    # Project command
    project_parser = subparsers.add_parser('project', help='Estimate a project file')
    project_parser.add_argument('input', help='Project YAML file')
    project_parser.add_argument('--method', choices=[m.value for m in SteelMethod],
                                default=SteelMethod.AREA.value,
                                help='Steel weight method (default: area)')
    project_parser.add_argument('--percent', type=parse_number,
                                help='Steel %% of concrete for the percentage method')
    project_parser.add_argument('--output', '-o', help='Output directory')
    project_parser.add_argument('--format', choices=list(EXPORT_FORMATS) + ['all'],
                                default='all', help='Export format (default: all)')
    project_parser.set_defaults(func=cmd_project)

    # Bars command
    bars_parser = subparsers.add_parser('bars', help='Unit weights of nominal bars')
    bars_parser.set_defaults(func=cmd_bars)

    args = parser.parse_args()
    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
