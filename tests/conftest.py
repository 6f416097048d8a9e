"""Shared test fixtures: a scriptable in-memory completion backend."""

import json
import threading
import time

import pytest

from university_enricher.backends import BackendError, CompletionBackend
from university_enricher.models import University

# Phrases that identify which lookup a prompt belongs to
PROMPT_MARKERS = {
    "linkedin": "Find the LinkedIn URL",
    "student_population": "total student population",
    "university_type": "public or private",
    "language_centre": "language center/centre",
}


def reply(payload) -> str:
    return json.dumps(payload)


class FakeBackend(CompletionBackend):
    """Answers prompts from a script keyed by lookup ID.

    Script values may be a reply string, an exception instance to raise, or a
    callable taking the user prompt and returning either of those. Unscripted
    lookups answer with a JSON null for their field.
    """

    NULL_REPLIES = {
        "linkedin": reply({"url": None}),
        "student_population": reply({"population": None}),
        "university_type": reply({"type": None}),
        "language_centre": reply({"hasLanguageCentre": None}),
    }

    def __init__(self, script=None, delay=0.0, delays_by_domain=None):
        self.script = script or {}
        self.delay = delay
        self.delays_by_domain = delays_by_domain or {}
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    @staticmethod
    def lookup_for(prompt: str) -> str:
        for lookup_id, marker in PROMPT_MARKERS.items():
            if marker in prompt:
                return lookup_id
        raise AssertionError(f"Unrecognized prompt: {prompt[:80]}")

    def complete(self, system_prompt, user_prompt, temperature=0.7, force_json_object=True):
        lookup_id = self.lookup_for(user_prompt)
        with self._lock:
            self.calls.append({
                "lookup": lookup_id,
                "system_prompt": system_prompt,
                "user_prompt": user_prompt,
                "temperature": temperature,
                "force_json_object": force_json_object,
            })
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)

        try:
            delay = self.delay
            for domain, domain_delay in self.delays_by_domain.items():
                if f"Domain: {domain}" in user_prompt:
                    delay = domain_delay
            if delay:
                time.sleep(delay)

            answer = self.script.get(lookup_id, self.NULL_REPLIES[lookup_id])
            if callable(answer):
                answer = answer(user_prompt)
            if isinstance(answer, Exception):
                raise answer
            return answer
        finally:
            with self._lock:
                self.in_flight -= 1


UBA_SCRIPT = {
    "linkedin": reply({"url": "https://www.linkedin.com/school/uba/"}),
    "student_population": reply({"population": 150000}),
    "university_type": reply({"type": "public"}),
    "language_centre": reply({"hasLanguageCentre": True}),
}


@pytest.fixture
def uba():
    return University(domain="uba.ar", name="Universidad de Buenos Aires")


@pytest.fixture
def fully_enriched():
    return University(
        domain="puc.cl",
        name="Pontificia Universidad Católica de Chile",
        country="Chile",
        country_code="CL",
        linkedin_url="https://www.linkedin.com/school/pontificia-universidad-catolica-de-chile/",
        student_population=33000,
        university_type="private",
        language_centre=True,
    )


@pytest.fixture
def backend_error():
    return BackendError("Rate limit exceeded", status=429)
