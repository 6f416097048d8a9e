"""Tests for the batched enrichment pipeline."""

import json

import pytest

from conftest import FakeBackend, UBA_SCRIPT
from university_enricher.enricher import UniversityEnricher
from university_enricher.models import University
from university_enricher.pipeline import Pipeline


class RecordingEnricher(UniversityEnricher):
    """Enricher that remembers the batches it was given."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.batches = []

    def enrich_universities(self, universities, concurrency_limit=None):
        self.batches.append([u.domain for u in universities])
        return super().enrich_universities(universities, concurrency_limit)


@pytest.fixture
def universities():
    return [University(domain=f"u{i}.edu", name=f"University {i}") for i in range(7)]


@pytest.fixture
def enricher():
    return RecordingEnricher(FakeBackend(UBA_SCRIPT), concurrency_limit=3)


class TestPipeline:
    def test_splits_into_batches(self, enricher, universities, tmp_path):
        pipeline = Pipeline(enricher, tmp_path / "out.json", batch_size=3, batch_delay=0,
                            sleep=lambda s: None)
        pipeline.run(universities)

        assert enricher.batches == [
            ["u0.edu", "u1.edu", "u2.edu"],
            ["u3.edu", "u4.edu", "u5.edu"],
            ["u6.edu"],
        ]

    def test_returns_all_in_order(self, enricher, universities, tmp_path):
        pipeline = Pipeline(enricher, tmp_path / "out.json", batch_size=3, batch_delay=0)
        results = pipeline.run(universities)

        assert [u.domain for u in results] == [u.domain for u in universities]
        assert all(u.student_population == 150000 for u in results)

    def test_saves_accumulated_results_after_each_batch(self, enricher, universities, tmp_path):
        saved = []

        def save(items, path):
            saved.append([u.domain for u in items])

        pipeline = Pipeline(enricher, tmp_path / "out.json", batch_size=3, batch_delay=0, save=save)
        pipeline.run(universities)

        assert [len(s) for s in saved] == [3, 6, 7]
        assert saved[-1] == [u.domain for u in universities]

    def test_sleeps_between_batches_only(self, enricher, universities, tmp_path):
        sleeps = []
        pipeline = Pipeline(enricher, tmp_path / "out.json", batch_size=3, batch_delay=30,
                            sleep=sleeps.append)
        pipeline.run(universities)

        assert sleeps == [30, 30]

    def test_single_batch_never_sleeps(self, enricher, universities, tmp_path):
        sleeps = []
        pipeline = Pipeline(enricher, tmp_path / "out.json", batch_size=20, batch_delay=30,
                            sleep=sleeps.append)
        pipeline.run(universities)

        assert sleeps == []
        assert len(enricher.batches) == 1

    def test_writes_progress_file(self, enricher, universities, tmp_path):
        output = tmp_path / "nested" / "enriched.json"
        Pipeline(enricher, output, batch_size=4, batch_delay=0).run(universities)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data) == 7
        assert data[0]["domain"] == "u0.edu"
        assert data[0]["university_type"] == "public"

    def test_save_happens_after_batch_is_joined(self, universities, tmp_path):
        backend = FakeBackend(UBA_SCRIPT, delay=0.02)
        enricher = UniversityEnricher(backend, concurrency_limit=3)
        in_flight_at_save = []

        def save(items, path):
            in_flight_at_save.append(backend.in_flight)

        Pipeline(enricher, tmp_path / "out.json", batch_size=3, batch_delay=0, save=save).run(universities)

        assert in_flight_at_save == [0, 0, 0]

    def test_empty_input(self, enricher, tmp_path):
        saved = []
        pipeline = Pipeline(enricher, tmp_path / "out.json", save=lambda u, p: saved.append(u))
        assert pipeline.run([]) == []
        assert saved == []

    def test_invalid_batch_size(self, enricher, tmp_path):
        with pytest.raises(ValueError):
            Pipeline(enricher, tmp_path / "out.json", batch_size=0)

    def test_negative_delay(self, enricher, tmp_path):
        with pytest.raises(ValueError):
            Pipeline(enricher, tmp_path / "out.json", batch_delay=-1)
