"""Target list loading."""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from vlanreach.exceptions import EmptyTargetListError, TargetFileNotFoundError


def check_target_file(path: str | Path) -> Path:
    """Return *path* as a Path, or raise if it is not an existing regular file."""
    p = Path(path)
    if not p.is_file():
        raise TargetFileNotFoundError(p)
    return p


def load_targets(path: str | Path) -> list[str]:
    """Read destination addresses from a target file, one per line, in file order.

    Empty lines and lines starting with ``#`` are skipped. Everything else is
    kept verbatim, so a line of only spaces is a target. Duplicates are kept.

    Raises:
        TargetFileNotFoundError: *path* is not a readable regular file.
        EmptyTargetListError: no line qualified.
    """
    p = check_target_file(path)
    try:
        with p.open(encoding="utf-8", newline=None) as fh:
            lines = [line.rstrip("\n") for line in fh]
    except (OSError, UnicodeDecodeError) as e:
        raise TargetFileNotFoundError(p, reason=f"could not be read ({e})") from e

    targets = [line for line in lines if line and not line.startswith("#")]
    if not targets:
        raise EmptyTargetListError(p)

    logger.debug(f"Loaded {len(targets)} target(s) from {p}")
    return targets
