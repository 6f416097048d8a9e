"""Tests for the export module."""

import csv

import pytest
from openpyxl import load_workbook

from university_enricher.export import EXPORT_COLUMNS, Exporter
from university_enricher.models import University


@pytest.fixture
def universities():
    return [
        University(domain="uba.ar", name="Universidad de Buenos Aires", country="Argentina",
                   student_population=150000, university_type="public",
                   tech_stack=["WordPress", "PHP"]),
        University(domain="puc.cl", name="Pontificia Universidad Católica de Chile",
                   language_centre=False),
    ]


@pytest.fixture
def exporter(universities, tmp_path):
    return Exporter(universities, export_dir=tmp_path / "exports")


class TestExporter:
    def test_export_csv(self, exporter):
        path = exporter.export_csv()
        assert path.exists()

        with open(path, "r", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            rows = list(reader)

        assert reader.fieldnames == EXPORT_COLUMNS
        assert len(rows) == 2
        assert rows[0]["student_population"] == "150000"
        assert rows[0]["tech_stack"] == "WordPress; PHP"
        assert rows[1]["student_population"] == ""
        assert rows[1]["language_centre"] == "False"

    def test_export_xlsx(self, exporter):
        path = exporter.export_xlsx()
        sheet = load_workbook(path)["Universities"]
        header = [cell.value for cell in sheet[1]]
        assert header == EXPORT_COLUMNS
        assert sheet.max_row == 3

    def test_export_quality_report(self, exporter):
        path = exporter.export_quality_report()
        assert "Enrichment Quality Report" in path.read_text(encoding="utf-8")

    def test_export_all(self, exporter):
        results = exporter.export_all()
        assert set(results) == {"csv", "xlsx", "quality_report"}
        assert all(p.exists() for p in results.values())

    def test_nothing_to_export(self, tmp_path):
        exporter = Exporter([], export_dir=tmp_path)
        assert exporter.export_csv() is None
        assert exporter.export_xlsx() is None
