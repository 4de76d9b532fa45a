"""Template repository loader.

Walks a blueprint directory and returns every template file it contains as
an immutable ``{relative/posix/path: content}`` mapping.
"""

from __future__ import annotations

import logging
from pathlib import Path

from nestgen.config import GeneratorConfig

from .models import TemplateLoadError, TemplateSet, freeze_templates

logger = logging.getLogger(__name__)


def load_templates(
    root_dir: str | Path,
    config: GeneratorConfig | None = None,
    *,
    max_depth: int | None = None,
) -> TemplateSet:
    """Load every template file below *root_dir*.

    Args:
        root_dir: Directory to scan recursively.
        config: Supplies the file allow-list and default depth limit.
        max_depth: Overrides ``config.max_depth``.

    Returns:
        A read-only mapping keyed by slash-separated relative paths.

    Raises:
        TemplateLoadError: If *root_dir* is missing or unreadable, or the tree
            is deeper than the depth limit.
    """
    config = config or GeneratorConfig()
    limit = max_depth if max_depth is not None else config.max_depth
    root = Path(root_dir)
    if not root.is_dir():
        raise TemplateLoadError(f"Template directory not found: {root}")

    found: dict[str, str] = {}
    _walk(root, (), found, config, limit)
    logger.debug("Loaded %d templates from %s", len(found), root)
    return freeze_templates(found)


def _walk(
    directory: Path,
    parts: tuple[str, ...],
    found: dict[str, str],
    config: GeneratorConfig,
    limit: int,
) -> None:
    if len(parts) > limit:
        raise TemplateLoadError(
            f"Template tree deeper than {limit} levels at {directory}"
        )
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise TemplateLoadError(f"Cannot read template directory {directory}: {exc}") from exc

    for entry in entries:
        rel = (*parts, entry.name)
        if entry.is_dir():
            _walk(entry, rel, found, config, limit)
        elif entry.is_file() and config.is_template_file(entry.name):
            try:
                with entry.open(encoding="utf-8", newline="") as fh:
                    found["/".join(rel)] = fh.read()
            except OSError as exc:
                raise TemplateLoadError(f"Cannot read template {entry}: {exc}") from exc
