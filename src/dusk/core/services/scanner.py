from __future__ import annotations

"""
Disk Usage Scanning Service.

Runs the external enumeration once for the start path and turns its
`<size>\\t<path>` lines into scan records. The process output is drained by a
single worker thread while the calling thread waits on the resulting future
in short ticks, which lets the interface animate a progress indicator.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from dusk.domain.constants import DEFAULT_DU_COMMAND, DEFAULT_SPINNER_INTERVAL
from dusk.domain.errors import FatalSetupError, ParseAnomaly
from dusk.domain.tree_models import ScanRecord, ScanReport
from dusk.infra.fs import normalize_path
from dusk.infra.processes import spawn_enumeration

logger = logging.getLogger(__name__)

TickCallback = Callable[[int], None]


# ==============================================================================
# LINE PARSING
# ==============================================================================

def parse_du_line(line: str) -> ScanRecord:
    """
    Parse one enumeration line into a record.

    The size is the first whitespace-delimited field; the path is the
    remainder of the line and may itself contain spaces.

    Args:
        line: Raw output line, with or without its terminator.

    Returns:
        ScanRecord: Size and normalized path.

    Raises:
        ParseAnomaly: If a field is missing or the size is not a valid count.
    """
    parts = line.rstrip("\r\n").split(None, 1)
    if len(parts) < 2:
        raise ParseAnomaly(line, "missing field")

    size_field, path = parts
    try:
        size = int(size_field)
    except ValueError:
        raise ParseAnomaly(line, "size is not an integer") from None
    if size < 0:
        raise ParseAnomaly(line, "negative size")

    return ScanRecord(size=size, path=normalize_path(path))


def collect_records(lines: Iterable[str]) -> Tuple[List[ScanRecord], int]:
    """
    Parse every line, skipping malformed ones.

    Args:
        lines: Enumeration output lines.

    Returns:
        Tuple[List[ScanRecord], int]: Records in emission order and the
                                      number of skipped lines.
    """
    records: List[ScanRecord] = []
    skipped = 0
    for line in lines:
        if not line.strip():
            continue
        try:
            records.append(parse_du_line(line))
        except ParseAnomaly as e:
            skipped += 1
            logger.debug(str(e))
    return records, skipped


# ==============================================================================
# PUBLIC API
# ==============================================================================

def run_scan(
        start: str,
        command: Sequence[str] = DEFAULT_DU_COMMAND,
        *,
        on_tick: Optional[TickCallback] = None,
        tick_interval: float = DEFAULT_SPINNER_INTERVAL,
) -> ScanReport:
    """
    Enumerate `start` with the external command and collect its records.

    A non-zero exit status after partial output is accepted as best effort;
    whatever was read is kept.

    Args:
        start: Normalized absolute start path.
        command: Enumeration argv prefix.
        on_tick: Called with an increasing frame number while waiting.
        tick_interval: Seconds between ticks; 0 disables ticking.

    Returns:
        ScanReport: Parsed records and run statistics.

    Raises:
        FatalSetupError: If the enumeration process cannot be started.
    """
    t0 = time.perf_counter()
    logger.info(f"Scanning {start} with {' '.join(command)}")

    try:
        proc = spawn_enumeration(start, command)
    except OSError as e:
        raise FatalSetupError(f"Cannot run {command[0]}: {e}") from e

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ScanReader")
    try:
        future = executor.submit(collect_records, proc.stdout)
        records, skipped = _await_with_ticks(future, on_tick, tick_interval)
    except BaseException:
        # Unblock the reader before joining it, then reap
        proc.kill()
        proc.wait()
        raise
    finally:
        executor.shutdown(wait=True)
        if proc.stdout:
            proc.stdout.close()

    return_code = proc.wait()
    elapsed = time.perf_counter() - t0

    if return_code != 0:
        logger.warning(
            f"Enumeration exited with status {return_code}; keeping {len(records)} partial records."
        )
    if skipped:
        logger.warning(f"Skipped {skipped} malformed enumeration lines.")
    logger.info(f"Scan finished: {len(records)} records in {elapsed:.2f}s")

    return ScanReport(
        start=start,
        records=tuple(records),
        skipped_lines=skipped,
        return_code=return_code,
        elapsed_sec=elapsed,
    )


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _await_with_ticks(future, on_tick: Optional[TickCallback], tick_interval: float):
    """Wait for the reader future, firing `on_tick` at every timeout."""
    if tick_interval <= 0:
        return future.result()

    frame = 0
    while True:
        try:
            return future.result(timeout=tick_interval)
        except FutureTimeout:
            if on_tick:
                on_tick(frame)
            frame += 1
