"""
Estimate Export Module
Exports project estimates and steel take-offs to:
- JSON (full detail)
- CSV (one file per table)
- Excel (one sheet per table)
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .estimators import ProjectDesk
from .models import ElementSteelResult, ProjectTotals

logger = logging.getLogger(__name__)

MEMBER_COLUMNS = [
    'ID', 'Member', 'Concrete (m³)', 'Steel Area (mm²)', 'Steel (kg)',
    'Material Cost', 'Labour Cost', 'Total Cost'
]

STEEL_COLUMNS = [
    'Description', 'Dia (mm)', 'Nos', 'Cutting Length (m)',
    'Total Length (m)', 'Weight (kg)'
]

EXPORT_FORMATS = ('json', 'csv', 'excel')


def build_members_df(totals: ProjectTotals) -> pd.DataFrame:
    """Build per-member quantity DataFrame with a TOTAL row."""
    if not totals.members:
        return pd.DataFrame(columns=MEMBER_COLUMNS)

    data = []
    for m in totals.members:
        data.append({
            'ID': m.member_id,
            'Member': m.name,
            'Concrete (m³)': round(m.concrete_volume_m3, 3),
            'Steel Area (mm²)': round(m.steel_area_mm2, 0),
            'Steel (kg)': round(m.steel_weight_kg, 2),
            'Material Cost': round(m.material_cost, 0),
            'Labour Cost': round(m.labor_cost, 0),
            'Total Cost': round(m.total_cost, 0)
        })

    df = pd.DataFrame(data)

    # Totals come from the engine, not from the rounded rows
    totals_row = pd.DataFrame([{
        'ID': '',
        'Member': 'TOTAL',
        'Concrete (m³)': round(totals.concrete_volume, 3),
        'Steel Area (mm²)': round(totals.steel_area, 0),
        'Steel (kg)': round(totals.steel_weight, 2),
        'Material Cost': round(totals.material_cost, 0),
        'Labour Cost': round(totals.labor_cost, 0),
        'Total Cost': round(totals.grand_total, 0)
    }])
    return pd.concat([df, totals_row], ignore_index=True)


def build_summary_df(totals: ProjectTotals) -> pd.DataFrame:
    """Build project summary DataFrame."""
    data = [
        {'Item': 'Steel Method', 'Value': totals.method.value, 'Unit': ''},
        {'Item': 'Total Concrete', 'Value': round(totals.concrete_volume, 3), 'Unit': 'm³'},
        {'Item': 'Total Steel Area', 'Value': round(totals.steel_area, 0), 'Unit': 'mm²'},
        {'Item': 'Total Steel', 'Value': round(totals.steel_weight, 2), 'Unit': 'kg'},
        {'Item': 'Material Cost', 'Value': round(totals.material_cost, 0), 'Unit': 'INR'},
        {'Item': 'Labour Cost', 'Value': round(totals.labor_cost, 0), 'Unit': 'INR'},
        {'Item': 'Grand Total', 'Value': round(totals.grand_total, 0), 'Unit': 'INR'},
    ]
    return pd.DataFrame(data)


def build_steel_df(result: Optional[ElementSteelResult]) -> pd.DataFrame:
    """Build steel take-off DataFrame with a TOTAL row."""
    if result is None:
        return pd.DataFrame(columns=STEEL_COLUMNS)

    data = []
    for line in result.lines:
        data.append({
            'Description': line.description,
            'Dia (mm)': line.bar_dia,
            'Nos': round(line.bar_count, 2),
            'Cutting Length (m)': round(line.cutting_length_m, 3),
            'Total Length (m)': round(line.total_length_m, 3),
            'Weight (kg)': round(line.weight_kg, 2)
        })

    data.append({
        'Description': 'TOTAL',
        'Dia (mm)': '',
        'Nos': '',
        'Cutting Length (m)': '',
        'Total Length (m)': round(sum(line.total_length_m for line in result.lines), 3),
        'Weight (kg)': round(result.total_kg, 2)
    })
    return pd.DataFrame(data)


class EstimateExporter:
    """
    Exports project desk estimates.
    """

    def __init__(self, output_dir: Path):
        """Initialize exporter."""
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_all(self, desk: ProjectDesk, totals: ProjectTotals, formats=EXPORT_FORMATS) -> Dict[str, Path]:
        """
        Export a project in the requested formats.

        Returns:
            Dictionary of output file paths
        """
        unknown = set(formats) - set(EXPORT_FORMATS)
        if unknown:
            raise ValueError(f"Unknown export format: {', '.join(sorted(unknown))}")

        paths = {}
        if 'json' in formats:
            paths['json'] = self.export_json(self.output_dir / "estimate.json", desk, totals)
        if 'csv' in formats:
            paths.update(self.export_csv(self.output_dir, totals))
        if 'excel' in formats:
            paths['excel'] = self.export_excel(self.output_dir / "estimate.xlsx", desk, totals)

        logger.info(f"Exported {len(paths)} files to {self.output_dir}")
        return paths

    def export_json(self, output_path: Path, desk: ProjectDesk, totals: ProjectTotals) -> Path:
        """Export project inputs and totals as JSON."""
        data = {
            'project': desk.name,
            'generated': datetime.now().isoformat(timespec='seconds'),
            'inputs': desk.to_dict(),
            'totals': totals.to_dict()
        }

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported JSON: {output_path}")
        return output_path

    def export_csv(self, output_dir: Path, totals: ProjectTotals) -> Dict[str, Path]:
        """Export member and summary tables as CSV."""
        paths = {
            'members_csv': output_dir / "members.csv",
            'summary_csv': output_dir / "summary.csv",
        }
        build_members_df(totals).to_csv(paths['members_csv'], index=False)
        build_summary_df(totals).to_csv(paths['summary_csv'], index=False)

        logger.info(f"Exported CSV: {', '.join(p.name for p in paths.values())}")
        return paths

    def export_excel(self, output_path: Path, desk: ProjectDesk, totals: ProjectTotals) -> Path:
        """Export project info, summary and members to one workbook."""
        project_df = pd.DataFrame([
            {'Field': 'Project', 'Value': desk.name or '-'},
            {'Field': 'Concrete Rate (INR/m³)', 'Value': desk.rates.concrete_rate},
            {'Field': 'Steel Rate (INR/kg)', 'Value': desk.rates.steel_rate},
            {'Field': 'Concrete Labour (INR/m³)', 'Value': desk.rates.concrete_labor_rate},
            {'Field': 'Steel Labour (INR/kg)', 'Value': desk.rates.steel_labor_rate},
        ])

        with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
            project_df.to_excel(writer, sheet_name='Project_Info', index=False)
            build_summary_df(totals).to_excel(writer, sheet_name='Summary', index=False)
            build_members_df(totals).to_excel(writer, sheet_name='Members', index=False)

            for worksheet in writer.sheets.values():
                for column in worksheet.columns:
                    max_length = max(
                        (len(str(cell.value)) for cell in column if cell.value is not None),
                        default=0
                    )
                    worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 60)

        logger.info(f"Excel exported to: {output_path}")
        return output_path


def export_steel_csv(result: Optional[ElementSteelResult], output_path: Path) -> Path:
    """Export a steel take-off as CSV."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    build_steel_df(result).to_csv(output_path, index=False)
    logger.info(f"Exported steel take-off: {output_path}")
    return output_path
