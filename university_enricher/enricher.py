"""University enrichment.

Runs the four lookups for each university concurrently and merges the
answers that came back. Failures are contained at three levels: the
structured-query executor reports them as outcomes, each lookup call is
guarded here, and each university is guarded in ``enrich_universities``.
A failed lookup leaves its field as it was; it never aborts a university,
and a failed university never aborts the batch.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from university_enricher.backends import CompletionBackend
from university_enricher.lookups import LookupTask, get_all_lookups
from university_enricher.models import LookupOutcome, University

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY_LIMIT = 5


class UniversityEnricher:
    """Enriches universities with LinkedIn URL, population, type and language centre.

    Args:
        backend: Completion backend shared by all lookups.
        concurrency_limit: Maximum universities enriched at the same time.
        lookups: Override the lookup tasks (defaults to all registered lookups).
    """

    def __init__(
        self,
        backend: CompletionBackend,
        concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
        lookups: Optional[list[LookupTask]] = None,
    ):
        if concurrency_limit < 1:
            raise ValueError(f"concurrency_limit must be at least 1, got {concurrency_limit}")
        self.backend = backend
        self.concurrency_limit = concurrency_limit
        self.lookups = lookups if lookups is not None else get_all_lookups(backend)

    def enrich_university(self, university: University) -> University:
        """Run every lookup for one university and merge the results.

        Returns a new University; the input is not modified. A field is only
        overwritten when its lookup produced a value, so unknown answers and
        failures both keep the previous value.
        """
        with ThreadPoolExecutor(max_workers=max(len(self.lookups), 1)) as ex:
            futures = [
                ex.submit(self._safe_execute, lookup, university)
                for lookup in self.lookups
            ]
            outcomes = [f.result() for f in futures]

        updates = {}
        for lookup, outcome in zip(self.lookups, outcomes):
            if not outcome.ok:
                logger.error(
                    f"Error enriching {lookup.name} for {university.name} "
                    f"({university.domain}): {outcome.error}"
                )
                continue
            if outcome.value is not None:
                updates[lookup.field] = outcome.value

        return university.model_copy(update=updates)

    @staticmethod
    def _safe_execute(lookup: LookupTask, university: University) -> LookupOutcome:
        try:
            return lookup.run(university)
        except Exception as e:
            return LookupOutcome.failure(f"{type(e).__name__}: {e}")

    def enrich_universities(
        self,
        universities: list[University],
        concurrency_limit: Optional[int] = None,
    ) -> list[University]:
        """Enrich many universities under a concurrency cap.

        Results come back in input order regardless of completion order. If a
        university fails outright, the original record is returned in its slot.
        """
        limit = concurrency_limit or self.concurrency_limit
        if limit < 1:
            raise ValueError(f"concurrency_limit must be at least 1, got {limit}")
        if not universities:
            return []

        with ThreadPoolExecutor(max_workers=limit) as ex:
            futures = [ex.submit(self.enrich_university, u) for u in universities]
            results = []
            for university, future in zip(universities, futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"Failed to enrich university {university.name}: {e}")
                    results.append(university)

        enriched = sum(1 for before, after in zip(universities, results) if before != after)
        logger.info(
            f"Enriched {len(results)} universities "
            f"({enriched} with new data, concurrency={limit})"
        )
        return results
