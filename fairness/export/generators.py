"""Utilities to write the fairness score artifacts."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from fairness.scoring.models import CountryCalculation

from .narrative import narrative_facts

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExportSummary:
    """Details about the generated export files."""

    countries: int
    files: List[Path]


def presentation_record(calculation: CountryCalculation) -> Dict[str, object]:
    """Reduced record consumed by the public site, keyed by ``id``."""

    profile = calculation.profile
    return {
        "id": profile.iso3,
        "name": profile.name,
        "region": profile.region,
        "subregion": profile.subregion,
        "fairnessScore": calculation.fairness_score,
        "dimensions": {
            name: dimension.score for name, dimension in calculation.dimensions.items()
        },
        "population": profile.population,
        "gdpPerCapita": profile.gdp_per_capita,
        "trend": calculation.trend.to_dict(),
        "facts": narrative_facts(calculation),
    }


class ExportGenerator:
    """Create detailed, presentation and workbook artifacts for a run."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir

    def generate(self, run_id: str, calculations: Sequence[CountryCalculation]) -> ExportSummary:
        if not calculations:
            return ExportSummary(0, [])

        self.output_dir.mkdir(parents=True, exist_ok=True)
        detailed_path = self.output_dir / f"fairness_detailed_{run_id}.json"
        presentation_path = self.output_dir / f"fairness_scores_{run_id}.json"
        workbook_path = self.output_dir / f"fairness_rankings_{run_id}.xlsx"

        self._write_json(detailed_path, [item.to_dict() for item in calculations])
        self._write_json(presentation_path, [presentation_record(item) for item in calculations])
        self._write_workbook(workbook_path, calculations)

        return ExportSummary(
            countries=len(calculations),
            files=[detailed_path, presentation_path, workbook_path],
        )

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write_json(self, path: Path, payload: object) -> None:
        with path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, ensure_ascii=False, indent=2)
            handle.write("\n")

    def _write_workbook(self, path: Path, calculations: Sequence[CountryCalculation]) -> None:
        workbook = Workbook()
        rankings = workbook.active
        rankings.title = "Rankings"
        self._write_sheet(rankings, self._ranking_rows(calculations))
        dimensions = workbook.create_sheet("Dimensions")
        self._write_sheet(dimensions, self._dimension_rows(calculations))
        workbook.save(path)

    def _ranking_rows(self, calculations: Sequence[CountryCalculation]) -> List[Dict[str, object]]:
        return [
            {
                "rank": index,
                "iso3": item.iso3,
                "name": item.name,
                "region": item.profile.region,
                "fairness_score": item.fairness_score,
                "confidence": item.metadata.confidence,
                "trend": item.trend.direction,
                "trend_change": item.trend.change,
                "sources_used": item.metadata.sources_used,
            }
            for index, item in enumerate(calculations, start=1)
        ]

    def _dimension_rows(self, calculations: Sequence[CountryCalculation]) -> List[Dict[str, object]]:
        rows: List[Dict[str, object]] = []
        for item in calculations:
            row: Dict[str, object] = {"iso3": item.iso3, "name": item.name}
            for name, dimension in item.dimensions.items():
                row[name] = dimension.score
            rows.append(row)
        return rows

    def _write_sheet(self, worksheet, rows: Sequence[Mapping[str, object]]) -> None:
        fieldnames: List[str] = []
        for row in rows:
            for key in row:
                if key not in fieldnames:
                    fieldnames.append(key)
        worksheet.append(fieldnames)
        for row in rows:
            worksheet.append([row.get(name) for name in fieldnames])
        for index, _ in enumerate(fieldnames, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = 18


def log_rankings(calculations: Sequence[CountryCalculation], *, top: int = 20, bottom: int = 10) -> None:
    """Log the head and tail of the ranking table."""

    if not calculations:
        return
    logger.info("Calculated scores (top %d):", min(top, len(calculations)))
    for index, item in enumerate(calculations[:top], start=1):
        logger.info("%2d. %-25s %d%%", index, item.name, item.fairness_score)
    if len(calculations) > top:
        start = max(top, len(calculations) - bottom)
        logger.info("Bottom %d:", len(calculations) - start)
        for index in range(start, len(calculations)):
            item = calculations[index]
            logger.info("%2d. %-25s %d%%", index + 1, item.name, item.fairness_score)


__all__ = ["ExportGenerator", "ExportSummary", "log_rankings", "presentation_record"]
