"""Loading universities from the world-universities CSV dataset and the seed file.

The CSV has no header row; its columns are country code, name and website.
Only rows from supported countries with a usable website are kept.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd
import yaml

from university_enricher.models import University
from university_enricher.utils.normalization import (
    COUNTRY_MAPPING,
    get_country_code,
    get_standard_country_name,
    normalize_domain,
)

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["country_code", "name", "website"]
DEFAULT_CSV_PATH = Path("data/world-universities.csv")
DEFAULT_SEED_PATH = Path("data/seed/universities.yaml")


def process_universities(
    csv_path: Path,
    country_codes: Optional[Iterable[str]] = None,
) -> list[University]:
    """Read the CSV dataset and return universities in the supported countries.

    Args:
        csv_path: Path to the headerless country_code,name,website CSV.
        country_codes: Restrict to these ISO codes (must be supported ones).
            Defaults to every supported country.

    Returns:
        Universities with domain, name, country and country_code set.

    Raises:
        FileNotFoundError: If the CSV file does not exist.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found at path: {csv_path}")

    allowed = set(country_codes) if country_codes else set(COUNTRY_MAPPING)

    # keep_default_na=False so "NA" (Namibia) stays a string
    df = pd.read_csv(
        csv_path,
        header=None,
        names=CSV_COLUMNS,
        usecols=range(len(CSV_COLUMNS)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        skipinitialspace=True,
    )
    # Short rows leave NaN in the trailing columns
    df = df.fillna("").apply(lambda col: col.str.strip())
    logger.info(f"Processed {len(df)} rows from CSV")

    universities = []
    for row in df.itertuples(index=False):
        code = get_country_code(row.country_code)
        if code is None or code not in allowed:
            continue

        domain = normalize_domain(row.website)
        if not domain:
            logger.debug(f"Skipping '{row.name}': no website")
            continue

        universities.append(University(
            name=row.name or "",
            domain=domain,
            country=get_standard_country_name(code),
            country_code=code,
        ))

    logger.info(f"Found {len(universities)} valid universities in target countries")
    _log_country_distribution(universities)
    return universities


def _log_country_distribution(universities: list[University]) -> None:
    if not universities:
        return
    counts = pd.Series([u.country or "Unknown" for u in universities]).value_counts()
    logger.info("Universities by country:")
    for country, count in counts.items():
        logger.info(f"  {country}: {count}")


def load_seed_universities(seed_path: Optional[Path] = None) -> list[University]:
    """Load the curated university list from a YAML seed file.

    The file holds a top-level ``universities`` list of mappings with at least
    ``domain`` and ``name``.
    """
    seed_path = Path(seed_path or DEFAULT_SEED_PATH)
    if not seed_path.exists():
        raise FileNotFoundError(f"Seed file not found: {seed_path}")

    with open(seed_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    universities = [University.model_validate(row) for row in data.get("universities", [])]
    logger.info(f"Loaded {len(universities)} universities from {seed_path}")
    return universities
