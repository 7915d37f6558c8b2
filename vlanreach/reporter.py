"""Console and log-file reporting on top of loguru sinks.

Every message goes to two sinks: a colourised console sink and a plain-text
log file that is truncated when the reporter is created. Records bound with
``logfile_only=True`` (raw probe output) skip the console.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

from loguru import logger
from tabulate import tabulate

from vlanreach._util import format_vlan_label
from vlanreach.exceptions import ConfigurationError
from vlanreach.models import ProbeResult

_CONSOLE_FMT = "<level>{message}</level>"
_VERBOSE_FMT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
_LOGFILE_FMT = "{message}"


def _console_filter(record: dict[str, Any]) -> bool:
    """Hide records bound with ``logfile_only`` from the console."""
    return not record.get("extra", {}).get("logfile_only", False)


def _console_level(verbose: bool) -> str | int:
    """Console level from ``-v`` or ``LOGURU_LEVEL``; unknown level names are rejected."""
    if verbose:
        return "DEBUG"
    value = os.getenv("LOGURU_LEVEL", "INFO").strip()
    if value.isdigit():
        return int(value)
    try:
        logger.level(value)
    except ValueError:
        raise ConfigurationError(f"Unknown log level in LOGURU_LEVEL: {value!r}") from None
    return value


def format_outcome(result: ProbeResult) -> str:
    """Render a probe result as a single log line."""
    return (
        f"  {result.outcome.value}: Dest: {result.destination_address} "
        f"(VLAN: {format_vlan_label(result.destination_vlan_label)}) "
        f"from Src: {result.source_address} (Int: {result.source_interface})"
    )


def _mean(values: list[float] | None, fmt: str) -> str:
    if not values:
        return "-"
    return fmt.format(sum(values) / len(values))


class Reporter:
    """Sink that every component writes progress and outcome events through."""

    def __init__(
        self,
        log_path: str | Path,
        console: TextIO | None = None,
        verbose: bool = False,
        colorize: bool | None = None,
    ):
        self.log_path = Path(log_path)
        self.verbose = verbose
        console_level = _console_level(verbose)
        # the log file records every console message and never less than INFO
        console_no = console_level if isinstance(console_level, int) else logger.level(console_level).no
        logfile_level = min(console_no, logger.level("INFO").no)

        logger.remove()
        logger.enable("vlanreach")

        self._sink_ids: list[int] = [
            logger.add(
                console if console is not None else sys.stdout,
                level=console_level,
                format=_VERBOSE_FMT if verbose else _CONSOLE_FMT,
                filter=_console_filter,  # type: ignore[arg-type]
                colorize=colorize,
            ),
            logger.add(
                self.log_path,
                level=logfile_level,
                format=_LOGFILE_FMT,
                colorize=False,
                mode="w",
                encoding="utf-8",
            ),
        ]
        self._log = logger.opt(depth=1)

    def info(self, message: str = "") -> None:
        self._log.info(message)

    def success(self, message: str) -> None:
        self._log.success(message)

    def warning(self, message: str) -> None:
        self._log.warning(message)

    def error(self, message: str) -> None:
        self._log.error(message)

    def outcome(self, result: ProbeResult) -> None:
        """Report a single probe result; failures render as errors."""
        if result.ok:
            self._log.success(format_outcome(result))
        else:
            self._log.error(format_outcome(result))

    def probe_output(self, text: str) -> None:
        """Append raw probe service output to the log file only."""
        text = text.rstrip("\n")
        if text:
            self._log.bind(logfile_only=True).info(text)

    def summary(self, results: Iterable[ProbeResult]) -> None:
        """Log a per-interface table of outcome counts, average loss and average rtt."""
        rows: dict[str, list[Any]] = {}
        losses: dict[str, list[float]] = {}
        rtts: dict[str, list[float]] = {}
        for r in results:
            row = rows.setdefault(r.source_interface, [r.source_interface, r.source_address, 0, 0])
            row[2 if r.ok else 3] += 1
            if r.stats is not None:
                losses.setdefault(r.source_interface, []).append(r.stats.loss_percent)
                if r.stats.rtt_avg_ms is not None:
                    rtts.setdefault(r.source_interface, []).append(r.stats.rtt_avg_ms)
        if not rows:
            return
        table_rows = [
            row + [_mean(losses.get(iface), "{:.1f}%"), _mean(rtts.get(iface), "{:.3f}")]
            for iface, row in rows.items()
        ]
        table = tabulate(
            table_rows,
            headers=["Interface", "Source IP", "Success", "Failed", "Avg loss", "Avg rtt (ms)"],
            tablefmt="simple",
            disable_numparse=True,
        )
        self.info("Summary:")
        for line in table.splitlines():
            self.info(f"  {line}")
        self.info()

    def close(self) -> None:
        """Remove this reporter's sinks, flushing and closing the log file."""
        for sink_id in self._sink_ids:
            logger.remove(sink_id)
        self._sink_ids = []
