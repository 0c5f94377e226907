from __future__ import annotations

import asyncio
from typing import List

import pytest

from duty_report.domain.models import ServiceRecord
from duty_report.import_task import (
    ImportCoordinator,
    ImportFailedError,
    ImportStatus,
    available_importers,
    resolve_importer,
)
from duty_report.importers import SimulatedFileImporter, StaticImporter

SEED_SIZE = 21


def _record(record_id: str) -> ServiceRecord:
    return ServiceRecord(
        id=record_id,
        type="SAT",
        date="01/12/2025",
        start_time="08:00",
        end_time="18:00",
        duration_hours=10,
        personnel="IMPORTADO VIA ARQUIVO 1",
    )


class _GatedProvider:
    """Returns its batch only once `gate` is set."""

    description = "test provider waiting on an event"

    def __init__(self, name: str, ids: List[str]) -> None:
        self.name = name
        self.gate = asyncio.Event()
        self._ids = ids

    async def fetch(self) -> List[ServiceRecord]:
        await self.gate.wait()
        return [_record(i) for i in self._ids]


class _FlakyProvider:
    name = "flaky"
    description = "fails with a transient error before succeeding"

    def __init__(self, failures: int, exc: Exception) -> None:
        self.failures = failures
        self.exc = exc
        self.calls = 0

    async def fetch(self) -> List[ServiceRecord]:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc
        return [_record(f"flaky-{self.calls}")]


class _SlowProvider:
    name = "slow"
    description = "sleeps past the import timeout"

    async def fetch(self) -> List[ServiceRecord]:
        await asyncio.sleep(5)
        return [_record("slow-1")]


class _RawProvider:
    name = "raw"
    description = "returns plain dicts"

    def __init__(self, rows: List[dict]) -> None:
        self.rows = rows

    async def fetch(self) -> List[dict]:
        return self.rows


@pytest.mark.asyncio
async def test_run_import_appends_batch(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    task = await coordinator.run_import(StaticImporter([_record("a"), _record("b")]))

    assert task.status is ImportStatus.SUCCEEDED
    assert task.records_added == 2
    assert task.error is None
    assert len(coordinator.store) == SEED_SIZE + 2
    assert [r.id for r in coordinator.store][-2:] == ["a", "b"]


@pytest.mark.asyncio
async def test_start_import_is_pending_until_batch_arrives(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    provider = _GatedProvider("gated", ["g-1"])

    task = coordinator.start_import(provider)
    await asyncio.sleep(0)
    assert task.status is ImportStatus.PENDING
    assert not task.done
    assert len(coordinator.store) == SEED_SIZE

    provider.gate.set()
    await task.wait()
    assert task.status is ImportStatus.SUCCEEDED
    assert len(coordinator.store) == SEED_SIZE + 1


@pytest.mark.asyncio
async def test_failed_import_leaves_store_unchanged(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    provider = _FlakyProvider(failures=10, exc=RuntimeError("corrupt file"))

    task = await coordinator.run_import(provider)

    assert task.status is ImportStatus.FAILED
    assert task.error == "corrupt file"
    assert provider.calls == 1  # not a transient error, no retry
    assert coordinator.store is seed_store


@pytest.mark.asyncio
async def test_wait_can_raise_on_failure(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    with pytest.raises(ImportFailedError, match="corrupt file"):
        await coordinator.run_import(
            _FlakyProvider(failures=1, exc=RuntimeError("corrupt file")), raise_on_failure=True
        )


@pytest.mark.asyncio
async def test_transient_errors_are_retried(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    provider = _FlakyProvider(failures=2, exc=ConnectionError("share unavailable"))

    task = await coordinator.run_import(provider)

    assert provider.calls == 3
    assert task.status is ImportStatus.SUCCEEDED
    assert [r.id for r in coordinator.store][-1] == "flaky-3"


@pytest.mark.asyncio
async def test_retries_are_bounded(seed_store, test_settings) -> None:
    settings = test_settings.model_copy(update={"import_retry_attempts": 2})
    coordinator = ImportCoordinator(seed_store, settings=settings)
    provider = _FlakyProvider(failures=10, exc=OSError("disk error"))

    task = await coordinator.run_import(provider)

    assert provider.calls == 2
    assert task.status is ImportStatus.FAILED
    assert task.error == "disk error"
    assert len(coordinator.store) == SEED_SIZE


@pytest.mark.asyncio
async def test_import_times_out(seed_store, test_settings) -> None:
    settings = test_settings.model_copy(update={"import_timeout_seconds": 0.05})
    coordinator = ImportCoordinator(seed_store, settings=settings)

    task = await coordinator.run_import(_SlowProvider())

    assert task.status is ImportStatus.FAILED
    assert "timed out" in task.error
    assert len(coordinator.store) == SEED_SIZE


@pytest.mark.asyncio
async def test_provider_timeout_error_keeps_its_message(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    provider = _FlakyProvider(failures=10, exc=TimeoutError("socket read timed out"))

    task = await coordinator.run_import(provider)

    assert task.status is ImportStatus.FAILED
    assert task.error == "socket read timed out"
    assert task.duration_seconds < test_settings.import_timeout_seconds
    assert provider.calls == test_settings.import_retry_attempts
    assert len(coordinator.store) == SEED_SIZE


@pytest.mark.asyncio
async def test_cancel_running_import(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    provider = _GatedProvider("gated", ["g-1"])

    task = coordinator.start_import(provider)
    await asyncio.sleep(0)
    assert task.cancel() is True
    await task.wait()

    assert task.status is ImportStatus.CANCELLED
    assert len(coordinator.store) == SEED_SIZE
    assert task.cancel() is False


@pytest.mark.asyncio
async def test_cancel_before_first_step(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    task = coordinator.start_import(StaticImporter([_record("never")]))
    task.cancel()
    await task.wait()

    assert task.status is ImportStatus.CANCELLED
    assert len(coordinator.store) == SEED_SIZE


@pytest.mark.asyncio
async def test_concurrent_imports_append_whole_batches(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    first = _GatedProvider("first", ["a-1", "a-2", "a-3"])
    second = _GatedProvider("second", ["b-1", "b-2"])

    task_a = coordinator.start_import(first)
    task_b = coordinator.start_import(second)
    await asyncio.sleep(0)
    second.gate.set()
    await task_b.wait()
    first.gate.set()
    await task_a.wait()

    ids = [r.id for r in coordinator.store]
    assert ids[:SEED_SIZE] == [str(i) for i in range(1, 22)]
    assert ids[SEED_SIZE:] == ["b-1", "b-2", "a-1", "a-2", "a-3"]
    assert [t.provider_name for t in coordinator.history] == ["first", "second"]


@pytest.mark.asyncio
async def test_batch_reusing_ids_fails_atomically(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    task = await coordinator.run_import(StaticImporter([_record("new-1"), _record("5")]))

    assert task.status is ImportStatus.FAILED
    assert "'5'" in task.error
    assert coordinator.store is seed_store


@pytest.mark.asyncio
async def test_plain_dict_rows_are_validated(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    good = {
        "id": "d-1",
        "type": "REDS",
        "date": "10/11/2025",
        "startTime": "17:30",
        "endTime": "00:00",
    }
    bad = {**good, "id": "d-2", "startTime": "5pm"}

    ok = await coordinator.run_import(_RawProvider([good]))
    assert ok.status is ImportStatus.SUCCEEDED
    assert coordinator.store.records[-1].duration_hours == 6.5

    failed = await coordinator.run_import(_RawProvider([bad]))
    assert failed.status is ImportStatus.FAILED
    assert len(coordinator.store) == SEED_SIZE + 1


@pytest.mark.asyncio
async def test_simulated_import_end_to_end(seed_store, test_settings) -> None:
    coordinator = ImportCoordinator(seed_store, settings=test_settings)
    task = await coordinator.run_import(resolve_importer("simulated", test_settings))

    assert task.status is ImportStatus.SUCCEEDED
    assert task.records_added == test_settings.import_batch_size
    assert task.as_dict()["status"] == "succeeded"


def test_importer_registry(test_settings) -> None:
    assert "simulated" in available_importers(test_settings)
    assert isinstance(resolve_importer("simulated", test_settings), SimulatedFileImporter)
    with pytest.raises(ValueError, match="Unknown importer"):
        resolve_importer("ftp", test_settings)
