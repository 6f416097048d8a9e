"""Structured-query machinery shared by every lookup.

A lookup is described by data, not by a subclass: a prompt template, a
one-field pydantic output schema and a transform into the University field
type. ``run_structured_query`` is the single executor for all of them.
Adding a new lookup means writing a new descriptor, not touching this module.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ValidationError

from university_enricher.backends import CompletionBackend
from university_enricher.models import LookupOutcome, University

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a helpful assistant that gathers information about universities.
You have extensive knowledge about universities worldwide and can provide accurate information.
When you're not completely sure about information, return null for the requested field instead of guessing.
Format your responses as JSON objects according to the specific format requested in the prompt."""

TEMPERATURE = 0.7

PARSE_FAILURE = "parse failure"
VALIDATION_FAILURE = "schema validation failure"


@dataclass(frozen=True)
class LookupDescriptor:
    """Static configuration for one lookup.

    Attributes:
        name: Human-readable label used in logs (e.g. "LinkedIn").
        field: University attribute the result is merged into.
        prompt: Template containing {university.name} and {university.domain}.
        output_schema: Pydantic model with exactly one nullable field.
        transform: Maps the validated schema instance to the field value.
    """

    name: str
    field: str
    prompt: str
    output_schema: type[BaseModel]
    transform: Callable[[Any], Any]


def render_prompt(template: str, university: University) -> str:
    """Substitute the university placeholders in a prompt template."""
    return (
        template
        .replace("{university.name}", university.name)
        .replace("{university.domain}", university.domain)
    )


def run_structured_query(
    backend: CompletionBackend,
    descriptor: LookupDescriptor,
    university: University,
) -> LookupOutcome:
    """Ask the backend one structured question and validate the answer.

    Never raises: transport errors, unparseable replies and schema mismatches
    all come back as a failed LookupOutcome.
    """
    try:
        raw = backend.complete(
            SYSTEM_PROMPT,
            render_prompt(descriptor.prompt, university),
            temperature=TEMPERATURE,
            force_json_object=True,
        )
    except Exception as e:
        return LookupOutcome.failure(str(e) or type(e).__name__)

    try:
        data = json.loads(raw or "{}")
    except json.JSONDecodeError:
        logger.debug(f"{descriptor.name} reply for {university.domain} is not JSON: {raw[:200]!r}")
        return LookupOutcome.failure(PARSE_FAILURE)

    try:
        parsed = descriptor.output_schema.model_validate(data)
    except ValidationError as e:
        logger.debug(f"{descriptor.name} reply for {university.domain} failed validation: {e}")
        return LookupOutcome.failure(VALIDATION_FAILURE)

    try:
        value = descriptor.transform(parsed)
    except Exception as e:
        return LookupOutcome.failure(f"transform failed: {e}")

    logger.debug(f"{descriptor.name} for {university.domain}: {value!r}")
    return LookupOutcome.success(value)


class LookupTask:
    """One lookup bound to a completion backend."""

    def __init__(self, descriptor: LookupDescriptor, backend: CompletionBackend):
        self.descriptor = descriptor
        self.backend = backend

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def field(self) -> str:
        return self.descriptor.field

    def run(self, university: University) -> LookupOutcome:
        """Run the query and return the full outcome."""
        return run_structured_query(self.backend, self.descriptor, university)

    def find(self, university: University):
        """Return the looked-up value, or None if unknown or failed."""
        outcome = self.run(university)
        return outcome.value if outcome.ok else None
