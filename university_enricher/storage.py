"""JSON persistence for university lists."""

import json
import logging
from pathlib import Path

from university_enricher.models import University

logger = logging.getLogger(__name__)


def save_universities(universities: list[University], output_path: Path) -> Path:
    """Write universities as a pretty-printed JSON array, replacing the file.

    Unknown fields are omitted. Parent directories are created as needed.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = [u.to_dict() for u in universities]
    # Write then rename so an interrupted run never leaves a truncated file
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    tmp_path.replace(output_path)

    logger.info(f"Saved {len(universities)} universities to {output_path}")
    return output_path


def load_universities(input_path: Path) -> list[University]:
    """Read a JSON array written by save_universities."""
    input_path = Path(input_path)
    if not input_path.exists():
        raise FileNotFoundError(f"Universities file not found: {input_path}")

    with open(input_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array in {input_path}")

    return [University.model_validate(row) for row in data]
