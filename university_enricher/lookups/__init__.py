"""Lookup registry.

Maps lookup IDs to their descriptors for the enricher and CLI.
"""

from university_enricher.backends import CompletionBackend
from university_enricher.lookups.base import (
    LookupDescriptor,
    LookupTask,
    run_structured_query,
)
from university_enricher.lookups.language_centre import LANGUAGE_CENTRE_LOOKUP
from university_enricher.lookups.linkedin import LINKEDIN_LOOKUP
from university_enricher.lookups.student_population import STUDENT_POPULATION_LOOKUP
from university_enricher.lookups.university_type import UNIVERSITY_TYPE_LOOKUP

LOOKUP_REGISTRY: dict[str, LookupDescriptor] = {
    "linkedin": LINKEDIN_LOOKUP,
    "student_population": STUDENT_POPULATION_LOOKUP,
    "university_type": UNIVERSITY_TYPE_LOOKUP,
    "language_centre": LANGUAGE_CENTRE_LOOKUP,
}


def get_lookup(name: str, backend: CompletionBackend) -> LookupTask:
    """Get a lookup task by ID, bound to the given backend.

    Raises:
        KeyError: If the lookup ID is not registered.
    """
    if name not in LOOKUP_REGISTRY:
        available = ", ".join(sorted(LOOKUP_REGISTRY.keys()))
        raise KeyError(f"Unknown lookup '{name}'. Available: {available}")
    return LookupTask(LOOKUP_REGISTRY[name], backend)


def get_all_lookups(backend: CompletionBackend) -> list[LookupTask]:
    """Get all registered lookups bound to the given backend."""
    return [LookupTask(descriptor, backend) for descriptor in LOOKUP_REGISTRY.values()]


__all__ = [
    "LOOKUP_REGISTRY",
    "LookupDescriptor",
    "LookupTask",
    "get_all_lookups",
    "get_lookup",
    "run_structured_query",
]
