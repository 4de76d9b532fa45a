"""Destination writer.

Writes materialized files below a base directory and never replaces a file
that is already there: existing files are reported as skipped and left
byte-for-byte untouched.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .models import MaterializedFile, WriteOutcome

logger = logging.getLogger(__name__)


def write_files(
    base_dir: str | Path,
    files: Iterable[MaterializedFile],
) -> list[WriteOutcome]:
    """Create every file in *files* that does not exist yet.

    Args:
        base_dir: Directory the relative file paths are resolved against.
        files: Generated files, written in iteration order.

    Returns:
        One ``WriteOutcome`` per input file.

    Raises:
        OSError: If a directory or file cannot be created.
    """
    base = Path(base_dir)
    outcomes: list[WriteOutcome] = []
    for generated in files:
        target = base / generated.path
        target.parent.mkdir(parents=True, exist_ok=True)
        if target.exists():
            logger.debug("Skipping existing file %s", target)
            outcomes.append(WriteOutcome.skipped(target))
            continue
        if _create(target, generated.content):
            outcomes.append(WriteOutcome.created(target))
        else:
            outcomes.append(WriteOutcome.skipped(target))
    return outcomes


def _create(path: Path, content: str) -> bool:
    """Write *content* to a new file; ``False`` if *path* appeared meanwhile."""
    try:
        with path.open("x", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except FileExistsError:
        logger.debug("File %s was created concurrently, leaving it alone", path)
        return False
    logger.debug("Created %s (%d bytes)", path, len(content))
    return True
