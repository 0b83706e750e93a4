"""Symbolication of a parsed report against a set of dSYM bundles."""

from __future__ import annotations

import concurrent.futures
from collections.abc import Sequence
from dataclasses import dataclass, field

from symbo.config.defaults import SYMBOLICATED_MARKER
from symbo.models.dsym import DSYMFile
from symbo.models.identifiers import Architecture, BinaryUUID
from symbo.models.report import ReportProcess, StackFrame
from symbo.models.report_file import ReportFile
from symbo.symbolication.rewrite import rewrite_content
from symbo.tools.atos import AddressResolver, AtosResolver
from symbo.utils.log_sink import LogSink
from symbo.utils.logging import get_logger

log = get_logger(__name__)

SEPARATOR = "—" * 49


@dataclass
class FrameResolution:
    """Outcome of resolving one frame, applied to the frame afterwards."""

    symbol: str | None = None
    messages: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.symbol is not None


class Symbolicator:
    """Resolves every frame of ``report`` it has a matching dSYM for.

    Failures are reported through ``log_sink`` and the boolean result of
    :meth:`symbolicate`; nothing is raised for missing dSYMs or unresolved
    addresses.
    """

    def __init__(
        self,
        report: ReportFile,
        dsym_files: Sequence[DSYMFile],
        log_sink: LogSink,
        resolver: AddressResolver | None = None,
        workers: int = 1,
        marker: str = SYMBOLICATED_MARKER,
    ) -> None:
        self.report = report
        self.dsym_files = list(dsym_files)
        self.log_sink = log_sink
        self._resolver = resolver or AtosResolver()
        self._workers = max(1, workers)
        self._marker = marker

    @property
    def symbolicated_content(self) -> str | None:
        return self.report.symbolicated_content

    def symbolicate(self) -> bool:
        self.log_sink.reset()

        has_failed = False
        for process in self.report.processes:
            if not self.symbolicate_process(process):
                has_failed = True

        self.report.symbolicated_content = rewrite_content(
            self.report.content, self.report.processes, self._marker
        )
        log.info("symbolication_finished", success=not has_failed, processes=len(self.report.processes))
        return not has_failed

    def symbolicate_process(self, process: ReportProcess) -> bool:
        self.log_sink.add(f"{SEPARATOR}\n* Symbolicating process {process.display_name}")

        architecture = process.architecture
        if architecture is None or architecture.atos_arg is None:
            self.log_sink.add("Could not detect process architecture.")
            return False

        if process.stack_frames and not process.binary_images:
            self.log_sink.add(
                f"Could not detect application binary images for reported process {process.display_name}. "
                "Application might have crashed during launch."
            )
            return False

        if not process.stack_frames:
            self.log_sink.add(f"Did not find anything to symbolicate for process {process.display_name}.")
            return True

        dsyms_by_load_address = self._dsyms_by_load_address(process)
        self._log_missing_dsyms(process, dsyms_by_load_address)

        if not dsyms_by_load_address:
            self.log_sink.add(f"No matching dSYMs found for symbolicating {process.display_name}")
            return True

        return self._symbolicate_frames(process, architecture, dsyms_by_load_address)

    def _dsyms_by_uuid(self) -> dict[BinaryUUID, DSYMFile]:
        dsyms_by_uuid: dict[BinaryUUID, DSYMFile] = {}
        for dsym_file in self.dsym_files:
            for uuid in dsym_file.uuids:
                dsyms_by_uuid[uuid] = dsym_file
        return dsyms_by_uuid

    def _dsyms_by_load_address(self, process: ReportProcess) -> dict[str, DSYMFile]:
        dsyms_by_uuid = self._dsyms_by_uuid()
        return {
            image.load_address: dsyms_by_uuid[image.uuid]
            for image in process.binary_images
            if image.uuid in dsyms_by_uuid
        }

    def _log_missing_dsyms(self, process: ReportProcess, dsyms_by_load_address: dict[str, DSYMFile]) -> None:
        for image in process.binary_images:
            if image.load_address not in dsyms_by_load_address:
                self.log_sink.add(f"Missing dSYM for binary: {image.name}, {image.uuid.pretty}")

    def _symbolicate_frames(
        self,
        process: ReportProcess,
        architecture: Architecture,
        dsyms_by_load_address: dict[str, DSYMFile],
    ) -> bool:
        jobs: list[tuple[StackFrame, DSYMFile]] = [
            (frame, dsyms_by_load_address[frame.binary_image.load_address])
            for frame in process.stack_frames
            if frame.binary_image.load_address in dsyms_by_load_address
        ]

        if self._workers > 1 and len(jobs) > 1:
            with concurrent.futures.ThreadPoolExecutor(max_workers=self._workers) as pool:
                resolutions = list(
                    pool.map(lambda job: self._resolve_frame(job[0], job[1], architecture), jobs)
                )
        else:
            resolutions = [self._resolve_frame(frame, dsym, architecture) for frame, dsym in jobs]

        has_failed = False
        for (frame, _), resolution in zip(jobs, resolutions):
            self.log_sink.add_many(resolution.messages)
            if resolution.succeeded:
                frame.resolved_symbol = resolution.symbol
            else:
                has_failed = True
        return not has_failed

    def _resolve_frame(self, frame: StackFrame, dsym_file: DSYMFile, architecture: Architecture) -> FrameResolution:
        """Resolve a single frame without touching shared state."""
        resolution = FrameResolution()
        image = frame.binary_image

        binary_path = dsym_file.select_binary(image.name, image.uuid, architecture)
        if binary_path is None:
            resolution.messages.append(f"No matching DWARF binary found for process: {image.name}")
            return resolution

        result = self._resolver(binary_path, architecture.atos_arg, image.load_address, frame.cryptic_address)
        resolution.messages.extend(
            [
                f"Running command: {result.command_line}",
                f"STDOUT:\n{result.output_text}",
                f"STDERR:\n{result.error_text}",
            ]
        )

        if result.output_text:
            resolution.symbol = result.output_text
        else:
            resolution.messages.append(f"Symbolication failed for address: {frame.cryptic_address}")
        return resolution
