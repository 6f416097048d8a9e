"""Data quality module for enriched universities.

Computes per-field completeness, per-country coverage and value sanity
flags, and renders them as a Markdown report.
"""

import logging
from datetime import datetime

from university_enricher.models import ENRICHMENT_FIELDS, University

logger = logging.getLogger(__name__)

POPULATION_MIN = 0
POPULATION_MAX = 2_000_000   # Largest open universities are around this size
LINKEDIN_PREFIXES = (
    "https://www.linkedin.com/school/",
    "https://www.linkedin.com/company/",
    "https://linkedin.com/school/",
    "https://linkedin.com/company/",
)

REPORT_FIELDS = ENRICHMENT_FIELDS + ("tech_stack",)


class QualityChecker:
    """Runs quality checks over a list of universities."""

    def __init__(self, universities: list[University]):
        self.universities = universities

    def compute_completeness(self) -> dict[str, dict]:
        """Count how many universities have each enrichment field filled.

        Returns:
            {field: {"filled": int, "total": int, "pct": float}}
        """
        total = len(self.universities)
        completeness = {}
        for field in REPORT_FIELDS:
            filled = sum(1 for u in self.universities if getattr(u, field) is not None)
            completeness[field] = {
                "filled": filled,
                "total": total,
                "pct": (filled / total * 100) if total else 0.0,
            }
        return completeness

    def per_country_stats(self) -> dict[str, dict]:
        """Universities and fully enriched universities per country."""
        stats: dict[str, dict] = {}
        for u in self.universities:
            country = u.country or "Unknown"
            entry = stats.setdefault(country, {"total": 0, "fully_enriched": 0})
            entry["total"] += 1
            if all(getattr(u, f) is not None for f in ENRICHMENT_FIELDS):
                entry["fully_enriched"] += 1
        return dict(sorted(stats.items(), key=lambda kv: (-kv[1]["total"], kv[0])))

    def check_values(self) -> list[dict]:
        """Flag values that look implausible."""
        flags = []
        for u in self.universities:
            if u.student_population is not None:
                v = u.student_population
                if v < POPULATION_MIN or v > POPULATION_MAX:
                    flags.append({
                        "domain": u.domain,
                        "flag_type": "value_range",
                        "flag_detail": f"Student population {v:,} outside range "
                                       f"[{POPULATION_MIN:,}, {POPULATION_MAX:,}] for {u.name}",
                    })

            if u.linkedin_url is not None and not u.linkedin_url.lower().startswith(LINKEDIN_PREFIXES):
                flags.append({
                    "domain": u.domain,
                    "flag_type": "linkedin_format",
                    "flag_detail": f"LinkedIn URL '{u.linkedin_url}' is not a school "
                                   f"or company page for {u.name}",
                })

        for flag in flags:
            logger.warning(flag["flag_detail"])
        return flags

    def run_all_checks(self) -> dict:
        """Run every check and return a summary dict."""
        return {
            "total_records": len(self.universities),
            "completeness": self.compute_completeness(),
            "countries": self.per_country_stats(),
            "flags": self.check_values(),
        }

    def generate_report(self) -> str:
        """Render the quality summary as Markdown."""
        summary = self.run_all_checks()
        lines = [
            "# Enrichment Quality Report",
            "",
            f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
            "",
            f"Total universities: {summary['total_records']}",
            "",
            "## Field Completeness",
            "",
            "| Field | Filled | Total | % |",
            "|---|---|---|---|",
        ]
        for field, c in summary["completeness"].items():
            lines.append(f"| {field} | {c['filled']} | {c['total']} | {c['pct']:.1f}% |")

        lines += [
            "",
            "## Coverage by Country",
            "",
            "| Country | Universities | Fully enriched |",
            "|---|---|---|",
        ]
        for country, s in summary["countries"].items():
            lines.append(f"| {country} | {s['total']} | {s['fully_enriched']} |")

        lines += ["", f"## Flags ({len(summary['flags'])})", ""]
        if summary["flags"]:
            for flag in summary["flags"]:
                lines.append(f"- [{flag['flag_type']}] {flag['domain']}: {flag['flag_detail']}")
        else:
            lines.append("No issues found.")

        return "\n".join(lines) + "\n"
