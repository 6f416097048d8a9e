"""Batched enrichment pipeline for bulk datasets.

Feeds universities to the enricher in fixed-size batches, saves the
accumulated results after every batch so a long run can be inspected or
resumed by hand, and pauses between batches to stay clear of rate limits.
"""

import logging
import math
import time
from pathlib import Path
from typing import Callable, Optional

from university_enricher.enricher import UniversityEnricher
from university_enricher.models import University
from university_enricher.storage import save_universities

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 20
DEFAULT_BATCH_DELAY = 30.0


class Pipeline:
    """Orchestrates batched enrichment with incremental persistence.

    Args:
        enricher: Enricher used for each batch.
        output_path: JSON file rewritten with all results so far after each batch.
        batch_size: Universities per batch.
        batch_delay: Seconds to wait between batches.
        save: Persistence function, called as save(universities, output_path).
        sleep: Delay function, injectable for tests.
    """

    def __init__(
        self,
        enricher: UniversityEnricher,
        output_path: Path,
        batch_size: int = DEFAULT_BATCH_SIZE,
        batch_delay: float = DEFAULT_BATCH_DELAY,
        save: Callable[[list[University], Path], object] = save_universities,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if batch_delay < 0:
            raise ValueError(f"batch_delay cannot be negative, got {batch_delay}")
        self.enricher = enricher
        self.output_path = Path(output_path)
        self.batch_size = batch_size
        self.batch_delay = batch_delay
        self.save = save
        self.sleep = sleep

    def run(
        self,
        universities: list[University],
        concurrency_limit: Optional[int] = None,
    ) -> list[University]:
        """Enrich all universities batch by batch.

        Returns:
            Enriched universities in input order.
        """
        total_batches = math.ceil(len(universities) / self.batch_size)
        enriched: list[University] = []

        for batch_number, start in enumerate(range(0, len(universities), self.batch_size), 1):
            batch = universities[start:start + self.batch_size]
            logger.info(
                f"=== Processing batch {batch_number} of {total_batches} "
                f"({len(batch)} universities) ==="
            )

            enriched.extend(self.enricher.enrich_universities(batch, concurrency_limit))

            # Only after the batch is fully joined
            self.save(enriched, self.output_path)

            if start + self.batch_size < len(universities) and self.batch_delay > 0:
                logger.info(f"Waiting {self.batch_delay:g} seconds before processing next batch...")
                self.sleep(self.batch_delay)

        logger.info(f"Enrichment complete: {len(enriched)} universities")
        return enriched
