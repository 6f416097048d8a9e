"""Export module for enriched universities.

Generates CSV and Excel exports plus the Markdown quality report.
"""

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from university_enricher.models import University
from university_enricher.quality import QualityChecker

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_DIR = Path("output/exports")

EXPORT_COLUMNS = [
    "name", "domain", "city", "country", "country_code",
    "linkedin_url", "student_population", "university_type",
    "language_centre", "tech_stack",
]


class Exporter:
    """Exports universities to CSV, Excel and Markdown files."""

    def __init__(self, universities: list[University], export_dir: Optional[Path] = None):
        self.universities = universities
        self.export_dir = Path(export_dir or DEFAULT_EXPORT_DIR)
        self.export_dir.mkdir(parents=True, exist_ok=True)

    def to_dataframe(self) -> pd.DataFrame:
        """One row per university, tech stack joined into a single cell."""
        rows = []
        for u in self.universities:
            row = u.model_dump()
            if row.get("tech_stack") is not None:
                row["tech_stack"] = "; ".join(row["tech_stack"])
            rows.append(row)
        df = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
        # Keep integers integral when some populations are missing
        df["student_population"] = df["student_population"].astype("Int64")
        return df

    def export_csv(self) -> Optional[Path]:
        if not self.universities:
            logger.warning("No universities to export")
            return None
        filepath = self.export_dir / "universities.csv"
        self.to_dataframe().to_csv(filepath, index=False, encoding="utf-8")
        logger.info(f"Exported {len(self.universities)} universities to {filepath}")
        return filepath

    def export_xlsx(self) -> Optional[Path]:
        if not self.universities:
            logger.warning("No universities to export")
            return None
        filepath = self.export_dir / "universities.xlsx"
        self.to_dataframe().to_excel(
            filepath, index=False, sheet_name="Universities", engine="openpyxl"
        )
        logger.info(f"Exported {len(self.universities)} universities to {filepath}")
        return filepath

    def export_quality_report(self) -> Path:
        """Write the quality report as Markdown."""
        filepath = self.export_dir / "quality_report.md"
        filepath.write_text(QualityChecker(self.universities).generate_report(), encoding="utf-8")
        logger.info(f"Exported quality report to {filepath}")
        return filepath

    def export_all(self) -> dict[str, Optional[Path]]:
        """Run every export.

        Returns:
            Dict mapping export type to file path (None if nothing was written).
        """
        return {
            "csv": self.export_csv(),
            "xlsx": self.export_xlsx(),
            "quality_report": self.export_quality_report(),
        }
