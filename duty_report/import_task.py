"""
Background imports into the record store.

The ImportCoordinator is the single owner of the RecordStore. Each import runs
as an asyncio task: it fetches the provider's complete batch (bounded by a
timeout, retrying transient I/O errors), validates it, and only then swaps in
`merge_import(store, batch)`. A failed, timed-out or cancelled import leaves
the store exactly as it was.

Usage:
    coordinator = ImportCoordinator(RecordStore.from_records(seed_records()))
    task = coordinator.start_import(SimulatedFileImporter())
    ...
    await task.wait()
    print(task.status, len(coordinator.store))
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from duty_report.config import Settings, get_settings
from duty_report.domain.models import ServiceRecord
from duty_report.importers.abstract import ImportProvider
from duty_report.importers.simulated import SimulatedFileImporter
from duty_report.store import RecordStore, merge_import
from duty_report.utils.logging import get_logger
from duty_report.utils.profiler import profile_block

log = get_logger(__name__)


class ImportStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class ImportFailedError(RuntimeError):
    """Raised by `ImportTask.wait(raise_on_failure=True)` for unsuccessful imports."""


class ImportTimeoutError(RuntimeError):
    """The import deadline passed before the provider delivered its batch."""


@dataclass
class ImportTask:
    """
    Observable state of one import.

    `status` starts as PENDING and ends as exactly one of SUCCEEDED, FAILED
    or CANCELLED.
    """

    provider_name: str
    status: ImportStatus = ImportStatus.PENDING
    records_added: int = 0
    error: Optional[str] = None
    duration_seconds: float = 0.0
    _task: Optional["asyncio.Task[None]"] = field(default=None, repr=False, compare=False)

    @property
    def done(self) -> bool:
        return self.status is not ImportStatus.PENDING

    def cancel(self) -> bool:
        """Request cancellation; False if the import already finished."""
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()

    async def wait(self, raise_on_failure: bool = False) -> "ImportTask":
        """
        Wait for the import to finish and return this task.

        Cancelling the waiter does not cancel the import itself.
        """
        if self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        if raise_on_failure and self.status is not ImportStatus.SUCCEEDED:
            detail = f": {self.error}" if self.error else ""
            raise ImportFailedError(
                f"Import from '{self.provider_name}' {self.status.value}{detail}"
            )
        return self

    def _settle(self, future: "asyncio.Task[None]") -> None:
        # A task cancelled before its first step never reaches its own handler.
        if future.cancelled() and self.status is ImportStatus.PENDING:
            self.status = ImportStatus.CANCELLED

    def as_dict(self) -> dict:
        return {
            "provider": self.provider_name,
            "status": self.status.value,
            "records_added": self.records_added,
            "error": self.error,
            "duration_seconds": round(self.duration_seconds, 4),
        }


def _importer_factories(settings: Settings) -> Dict[str, Callable[[], ImportProvider]]:
    """Registry of available import providers."""
    return {
        "simulated": lambda: SimulatedFileImporter(
            batch_size=settings.import_batch_size,
            delay_seconds=settings.import_delay_seconds,
            seed=settings.import_seed,
        ),
    }


def available_importers(settings: Optional[Settings] = None) -> List[str]:
    """List available import provider names."""
    return sorted(_importer_factories(settings or get_settings()).keys())


def resolve_importer(name: str, settings: Optional[Settings] = None) -> ImportProvider:
    factories = _importer_factories(settings or get_settings())
    if name not in factories:
        raise ValueError(f"Unknown importer '{name}'. Available: {', '.join(factories)}")
    return factories[name]()


def _coerce_batch(raw: List) -> List[ServiceRecord]:
    return [r if isinstance(r, ServiceRecord) else ServiceRecord.model_validate(r) for r in raw]


class ImportCoordinator:
    """
    Owns the record store and applies import batches to it atomically.
    """

    def __init__(
        self, store: Optional[RecordStore] = None, settings: Optional[Settings] = None
    ) -> None:
        self._store = store if store is not None else RecordStore()
        self._settings = settings or get_settings()
        self._lock = asyncio.Lock()
        self._tasks: List[ImportTask] = []

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def history(self) -> List[ImportTask]:
        return list(self._tasks)

    def start_import(self, provider: ImportProvider) -> ImportTask:
        """
        Schedule an import in the background and return its handle.

        Must be called with a running event loop.
        """
        task = ImportTask(provider_name=provider.name)
        task._task = asyncio.get_running_loop().create_task(
            self._execute(provider, task), name=f"import-{provider.name}"
        )
        task._task.add_done_callback(task._settle)
        self._tasks.append(task)
        return task

    async def run_import(
        self, provider: ImportProvider, raise_on_failure: bool = False
    ) -> ImportTask:
        """Run one import to completion."""
        return await self.start_import(provider).wait(raise_on_failure=raise_on_failure)

    async def _fetch(self, provider: ImportProvider) -> List[ServiceRecord]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._settings.import_retry_attempts),
            wait=wait_exponential(multiplier=self._settings.import_retry_backoff_seconds, max=10),
            retry=retry_if_exception_type((OSError, ConnectionError)),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    log.warning(
                        f"[IMPORT RETRY] {provider.name}",
                        extra={
                            "provider": provider.name,
                            "attempt": attempt.retry_state.attempt_number,
                        },
                    )
                raw = await provider.fetch()
        return _coerce_batch(raw)

    async def _fetch_before_deadline(
        self, provider: ImportProvider, timeout: float
    ) -> List[ServiceRecord]:
        """
        Run `_fetch` with a deadline.

        Only the deadline raises ImportTimeoutError; a TimeoutError from the
        provider itself propagates unchanged.
        """
        fetch = asyncio.ensure_future(self._fetch(provider))
        try:
            done, _ = await asyncio.wait({fetch}, timeout=timeout)
        except asyncio.CancelledError:
            fetch.cancel()
            raise
        if not done:
            fetch.cancel()
            await asyncio.wait({fetch})
            raise ImportTimeoutError(f"Import timed out after {timeout:g}s")
        return fetch.result()

    async def _execute(self, provider: ImportProvider, task: ImportTask) -> None:
        timeout = self._settings.import_timeout_seconds
        log.info(f"[IMPORT START] {provider.name}", extra={"provider": provider.name})
        with profile_block(f"import-{provider.name}") as stats:
            try:
                batch = await self._fetch_before_deadline(provider, timeout)
                async with self._lock:
                    self._store = merge_import(self._store, batch)
            except asyncio.CancelledError:
                task.status = ImportStatus.CANCELLED
                log.warning(
                    f"[IMPORT CANCELLED] {provider.name}", extra={"provider": provider.name}
                )
                raise
            except ImportTimeoutError as exc:
                task.status = ImportStatus.FAILED
                task.error = str(exc)
                log.error(
                    f"[IMPORT FAILED] {provider.name}",
                    extra={"provider": provider.name, "error": task.error},
                )
            except Exception as exc:  # noqa: BLE001 - failure is reported on the task
                task.status = ImportStatus.FAILED
                task.error = str(exc) or type(exc).__name__
                log.exception(
                    f"[IMPORT FAILED] {provider.name}",
                    extra={"provider": provider.name, "error_type": type(exc).__name__},
                )
            else:
                task.status = ImportStatus.SUCCEEDED
                task.records_added = len(batch)
                log.info(
                    f"[IMPORT SUCCESS] {provider.name}",
                    extra={
                        "provider": provider.name,
                        "records": len(batch),
                        "store_size": len(self._store),
                    },
                )
            finally:
                task.duration_seconds = time.perf_counter() - stats.start_ts


__all__ = [
    "ImportCoordinator",
    "ImportFailedError",
    "ImportStatus",
    "ImportTask",
    "ImportTimeoutError",
    "available_importers",
    "resolve_importer",
]
