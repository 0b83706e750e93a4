"""Concurrent dSYM search across all strategies with a global timeout."""

from __future__ import annotations

import concurrent.futures
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from symbo.config.models import SearchConfig
from symbo.errors import InvalidUUIDError
from symbo.models.identifiers import BinaryUUID
from symbo.search.results import SearchOutcome, SearchResult
from symbo.search.strategies import SearchStrategy, default_strategies
from symbo.utils.logging import get_logger

log = get_logger(__name__)

LogHandler = Callable[[str], None]
ProgressHandler = Callable[[float], None]


def _noop(*_: object) -> None:
    pass


def _run_detached(
    strategy: SearchStrategy,
    uuids: list[str],
    report_directory: Path | None,
    log_handler: LogHandler,
) -> concurrent.futures.Future:
    """Run one strategy on a daemon thread and expose it as a Future.

    A strategy still running when the search times out is abandoned; being a
    daemon thread it does not hold the interpreter open at exit.
    """
    future: concurrent.futures.Future = concurrent.futures.Future()
    future.set_running_or_notify_cancel()

    def _target() -> None:
        try:
            result = strategy.run(uuids, report_directory, log_handler)
        except BaseException as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)

    threading.Thread(target=_target, name=f"dsym-search-{strategy.name}", daemon=True).start()
    return future


class DSYMSearch:
    """Fans the wanted UUIDs out to every strategy, one daemon thread each.

    The calling thread is the only one that touches the aggregated results,
    errors and the progress callback; it consumes futures in completion order
    until all are done or ``timeout`` elapses.
    """

    def __init__(
        self,
        strategies: list[SearchStrategy] | None = None,
        timeout: float | None = None,
        config: SearchConfig | None = None,
    ) -> None:
        cfg = config or SearchConfig()
        self._strategies = strategies if strategies is not None else default_strategies(cfg)
        self._timeout = timeout if timeout is not None else cfg.timeout

    @property
    def strategies(self) -> list[SearchStrategy]:
        return list(self._strategies)

    def search(
        self,
        uuids: Iterable[str | BinaryUUID],
        report_directory: Path | str | None = None,
        log_handler: LogHandler | None = None,
        progress_handler: ProgressHandler | None = None,
    ) -> SearchOutcome:
        log_handler = log_handler or _noop
        progress_handler = progress_handler or _noop

        wanted = self._normalize(uuids, log_handler)
        if not wanted or not self._strategies:
            return SearchOutcome(True, [])

        directory = Path(report_directory) if report_directory is not None else None
        total = len(self._strategies)
        results: dict[int, list[SearchResult]] = {}
        errors: dict[int, BaseException] = {}

        log.info("dsym_search_started", uuids=len(wanted), strategies=total)
        futures = {
            _run_detached(strategy, wanted, directory, log_handler): index
            for index, strategy in enumerate(self._strategies)
        }

        completed = 0
        try:
            for future in concurrent.futures.as_completed(futures, timeout=self._timeout):
                index = futures[future]
                strategy = self._strategies[index]
                try:
                    results[index] = future.result()
                except Exception as exc:
                    errors[index] = exc
                    log.warning("search_strategy_failed", strategy=strategy.name, error=str(exc))
                else:
                    log.info("search_strategy_done", strategy=strategy.name, results=len(results[index]))
                completed += 1
                progress_handler(completed / total)
        except concurrent.futures.TimeoutError:
            log_handler(f"DSYM search timed out after {self._timeout:g} seconds.")
            log.warning("dsym_search_timeout", timeout=self._timeout, completed=completed, total=total)

        if errors:
            described = ", ".join(f"{self._strategies[index].name}: {exc}" for index, exc in sorted(errors.items()))
            log_handler(f"Errors occurred during DSYM search: {described}")

        all_results = [
            result
            for index in range(total)
            for result in results.get(index, [])
        ]
        return SearchOutcome(not errors, all_results)

    @staticmethod
    def _normalize(uuids: Iterable[str | BinaryUUID], log_handler: LogHandler) -> list[str]:
        wanted: dict[str, None] = {}
        for uuid in uuids:
            if isinstance(uuid, BinaryUUID):
                wanted[uuid.pretty] = None
                continue
            try:
                wanted[BinaryUUID.parse(uuid).pretty] = None
            except InvalidUUIDError:
                log_handler(f"Ignoring malformed UUID: {uuid}")
        return list(wanted)
