"""Tests for the Coordinator worker pool."""

import logging

import pytest

from less_census.config import CensusConfig
from less_census.exceptions import WorkerTransportError
from less_census.scanning import coordinator as coordinator_module
from less_census.scanning.classifier import Classifier
from less_census.scanning.coordinator import Coordinator, run_census
from less_census.scanning.worker import Worker
from less_census.syntax.parser import LessParser


def thread_config(**overrides):
    overrides.setdefault("backend", "thread")
    overrides.setdefault("poll_interval_seconds", 0.05)
    return CensusConfig(**overrides)


def sequential_store(*sources):
    classifier = Classifier()
    for source in sources:
        classifier.scan(LessParser().parse(source))
    return classifier.store


class TestPoolSize:
    def test_capped_at_task_count(self):
        coordinator = Coordinator(CensusConfig(workers=8))
        assert coordinator.pool_size_for(3) == 3
        assert coordinator.pool_size_for(20) == 8

    def test_at_least_one_worker(self):
        assert Coordinator(CensusConfig(workers=4)).pool_size_for(0) == 1


class TestRun:
    """Whole runs on the thread backend."""

    def test_matches_sequential_scan(self, corpus, sources):
        result = Coordinator(thread_config(workers=2)).run(corpus)
        expected = sequential_store(sources["buttons"], sources["layout"], sources["mixins"])
        assert result.counters == expected
        assert result.files_dispatched == 3
        assert result.files_parsed == 3
        assert result.failures == []

    def test_pool_size_does_not_change_counts(self, corpus):
        one = Coordinator(thread_config(workers=1)).run(corpus)
        three = Coordinator(thread_config(workers=3)).run(corpus)
        assert one.counters == three.counters

    def test_round_robin_assignment(self, write_less):
        paths = [write_less(f"f{i}.less", f".c{i} {{ width: {i}px; }}") for i in range(7)]
        result = Coordinator(thread_config(workers=3)).run(paths)
        assert result.per_worker == {0: 3, 1: 2, 2: 2}
        assert result.pool_size == 3

    def test_empty_input(self):
        result = Coordinator(thread_config(workers=4)).run([])
        assert result.counters.is_empty()
        assert result.files_dispatched == 0
        assert result.files_parsed == 0
        assert result.pool_size == 1

    def test_skips_file_that_fails_to_parse(self, write_less, sources, caplog):
        paths = [
            write_less("one.less", sources["buttons"]),
            write_less("two.less", sources["broken"]),
            write_less("three.less", sources["mixins"]),
        ]
        with caplog.at_level(logging.WARNING, logger="less_census"):
            result = Coordinator(thread_config(workers=2)).run(paths)

        assert result.counters == sequential_store(sources["buttons"], sources["mixins"])
        assert result.files_parsed == 2
        assert [f.path for f in result.failures] == [str(paths[1])]
        assert "unexpected end of input" in result.failures[0].reason
        assert any("two.less" in record.getMessage() for record in caplog.records)

    def test_long_operator_chain_between_good_files(self, write_less, sources):
        chain = " + ".join(["1"] * 3000)
        long_source = f".a {{ width: {chain}; }}"
        paths = [
            write_less("one.less", sources["buttons"]),
            write_less("chain.less", long_source),
            write_less("three.less", sources["mixins"]),
        ]
        result = Coordinator(thread_config(workers=1)).run(paths)

        expected = sequential_store(sources["buttons"], long_source, sources["mixins"])
        assert result.counters == expected
        assert result.files_parsed == 3
        assert result.failures == []
        assert result.counters["syntax"]["operation_add"] == 2999 + 1

    def test_missing_file_is_skipped(self, corpus, tmp_path):
        result = Coordinator(thread_config(workers=2)).run([*corpus, tmp_path / "gone.less"])
        assert result.files_parsed == 3
        assert result.files_failed == 1

    def test_progress_callback_sees_every_file(self, corpus, write_less, sources):
        broken = write_less("broken.less", sources["broken"])
        notices = []
        result = Coordinator(thread_config(workers=2), on_progress=notices.append).run(
            [*corpus, broken]
        )
        assert sorted(n.path for n in notices) == sorted(str(p) for p in [*corpus, broken])
        assert sum(1 for n in notices if not n.ok) == 1
        assert result.files_failed == 1

    def test_run_census_wrapper(self, corpus):
        result = run_census(corpus, thread_config(workers=2))
        assert result.files_parsed == 3

    def test_process_backend(self, corpus, sources):
        result = Coordinator(CensusConfig(workers=2, backend="process")).run(corpus)
        expected = sequential_store(sources["buttons"], sources["layout"], sources["mixins"])
        assert result.counters == expected
        assert result.per_worker == {0: 2, 1: 1}


class TestTransportFailures:
    """A broken worker aborts the run."""

    def test_worker_failure_reply_is_fatal(self, corpus, monkeypatch):
        def explode(self, path):
            raise RuntimeError("boom")

        monkeypatch.setattr(Worker, "scan", explode)
        with pytest.raises(WorkerTransportError) as exc_info:
            Coordinator(thread_config(workers=2)).run(corpus)
        assert "boom" in exc_info.value.reason

    def test_worker_that_dies_silently_is_fatal(self, corpus, monkeypatch):
        def vanish(worker_id, inbox, outbox, config=None):
            return None

        monkeypatch.setattr(coordinator_module, "run_worker", vanish)
        with pytest.raises(WorkerTransportError) as exc_info:
            Coordinator(thread_config(workers=2)).run(corpus)
        assert exc_info.value.reason == "worker exited before reporting"
