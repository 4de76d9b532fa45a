"""Composition-file patcher.

Registers generated modules with an existing ``app.module.ts`` by inserting
their import statements and adding them to the ``imports: [...]`` list of the
``@Module`` declaration. The file is edited as text, not parsed: only the
import block and the first registration list (or declaration) are touched,
and re-running with the same entries changes nothing.

Fallback ladder:

1. extend the first ``imports: [ ... ]`` list;
2. else inject ``imports: [...]`` into the first ``@Module({ ... })`` whose
   object literal has no ``imports`` key;
3. else leave the file alone and report it as not patchable.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Sequence

from .models import PatchNotApplicable, RegistrationEntry

logger = logging.getLogger(__name__)

DEFAULT_CANDIDATES: tuple[str, ...] = ("app.module.ts", "app.module.js")

# A top-level import statement, possibly spanning lines, ending at its module
# specifier; the semicolon is optional. Covers ``import x from '...'`` and
# side-effect ``import '...'``.
_IMPORT_STATEMENT = re.compile(
    r"""^import\b(?:[^'"`;()]*?\bfrom)?\s*(['"])[^'"\n]*\1[^\S\n]*;?[^\n]*(?:\n|\Z)""",
    re.MULTILINE,
)
_REGISTRATION_LIST = re.compile(r"\bimports\s*:\s*\[")
_MODULE_DECLARATION = re.compile(r"@Module\(\s*\{")
_IMPORTS_KEY = re.compile(r"\bimports\s*:")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def find_composition_file(
    project_source_dir: str | Path,
    candidates: Sequence[str] = DEFAULT_CANDIDATES,
) -> Path | None:
    """Return the first existing candidate file in *project_source_dir*."""
    base = Path(project_source_dir)
    for name in candidates:
        path = base / name
        if path.is_file():
            return path
    return None


def patch_composition_file(
    project_source_dir: str | Path,
    entries: Sequence[RegistrationEntry],
    *,
    candidates: Sequence[str] = DEFAULT_CANDIDATES,
) -> bool:
    """Merge *entries* into the project's composition file.

    Returns:
        ``True`` if a composition file was found and now registers every
        entry, ``False`` if there is no such file or it could not be patched.
        A missing file is not an error.

    Raises:
        OSError: If the file exists but cannot be read or written.
    """
    path = find_composition_file(project_source_dir, candidates)
    if path is None:
        logger.info("No composition file in %s", project_source_dir)
        return False

    with path.open(encoding="utf-8", newline="") as fh:
        original = fh.read()

    try:
        updated = merge_registrations(original, entries)
    except PatchNotApplicable as exc:
        logger.warning("Leaving %s unmodified: %s", path, exc)
        return False

    if updated != original:
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(updated)
        logger.debug("Patched %s", path)
    else:
        logger.debug("%s already registers every entry", path)
    return True


def merge_registrations(text: str, entries: Sequence[RegistrationEntry]) -> str:
    """Return *text* with every entry imported and registered.

    Raises:
        PatchNotApplicable: If neither a registration list nor a ``@Module``
            declaration without one can be found.
    """
    if not entries:
        return text
    newline = "\r\n" if "\r\n" in text else "\n"

    for entry in entries:
        if entry.import_line not in text:
            text = _insert_import(text, entry.import_line, newline)

    names = list(dict.fromkeys(entry.symbol_name for entry in entries))

    span = _registration_list_span(text)
    if span is not None:
        start, end = span
        inner = text[start:end]
        code = "".join(inner[i] for i, _ in _code_chars(inner))
        missing = [name for name in names if not _mentions(code, name)]
        if not missing:
            return text
        return text[:start] + _append_symbols(inner, missing, newline) + text[end:]

    return _inject_registration_list(text, names, newline)


# ---------------------------------------------------------------------------
# Import statements
# ---------------------------------------------------------------------------


def _insert_import(text: str, line: str, newline: str) -> str:
    last = None
    for last in _IMPORT_STATEMENT.finditer(text):
        pass
    if last is None:
        return line + newline + text
    pos = last.end()
    if text[pos - 1] == "\n":
        return text[:pos] + line + newline + text[pos:]
    return text[:pos] + newline + line + text[pos:]


# ---------------------------------------------------------------------------
# Registration list
# ---------------------------------------------------------------------------


def _registration_list_span(text: str) -> tuple[int, int] | None:
    """Return the slice holding the contents of the first ``imports: [...]``."""
    match = _REGISTRATION_LIST.search(text)
    if match is None:
        return None
    close = _matching_close(text, match.end() - 1, "[", "]")
    if close is None:
        raise PatchNotApplicable("unbalanced imports list")
    return match.end(), close


def _mentions(block: str, name: str) -> bool:
    return re.search(rf"(?<![\w$]){re.escape(name)}(?![\w$])", block) is not None


def _append_symbols(inner: str, names: list[str], newline: str) -> str:
    """Add *names* to the text between ``[`` and ``]``, keeping its layout."""
    body = inner.rstrip()
    tail = inner[len(body):]

    if "\n" not in inner:
        lead = body[: len(body) - len(body.lstrip())]
        items = body.strip()
        trailing_comma = items.endswith(",")
        existing = items.rstrip(",").rstrip()
        joined = ", ".join(([existing] if existing else []) + names)
        return lead + joined + ("," if trailing_comma else "") + tail

    closing_indent = tail.rsplit("\n", 1)[-1] if "\n" in tail else ""
    indent = _item_indent(body) or closing_indent + "  "

    # The separator goes after the last item, ahead of any trailing comment.
    end = _code_end(body)
    trailing_comma = body[:end].endswith(",")
    if end and not trailing_comma:
        body = body[:end] + "," + body[end:]
    for position, name in enumerate(names, start=1):
        body += f"{newline}{indent}{name}"
        if trailing_comma or position < len(names):
            body += ","
    return body + tail


def _code_end(block: str) -> int:
    """Index just past the last non-blank character outside comments."""
    end = 0
    for i, _ in _code_chars(block):
        if not block[i].isspace():
            end = i + 1
    return end


def _item_indent(body: str) -> str:
    for line in body.split("\n")[1:]:
        if line.strip():
            return line[: len(line) - len(line.lstrip())]
    return ""


# ---------------------------------------------------------------------------
# @Module fallback
# ---------------------------------------------------------------------------


def _inject_registration_list(text: str, names: list[str], newline: str) -> str:
    match = _MODULE_DECLARATION.search(text)
    if match is None:
        raise PatchNotApplicable("no imports list and no @Module declaration")
    brace = match.end() - 1
    close = _matching_close(text, brace, "{", "}")
    if close is None:
        raise PatchNotApplicable("unbalanced @Module declaration")
    if _IMPORTS_KEY.search(text, brace, close):
        raise PatchNotApplicable("@Module imports is not a literal list")
    injected = "{" + newline + "  imports: [" + ", ".join(names) + "],"
    return text[:brace] + injected + text[brace + 1:]


# ---------------------------------------------------------------------------
# Bracket matching
# ---------------------------------------------------------------------------


def _code_chars(text: str, start: int = 0) -> Iterator[tuple[int, bool]]:
    """Yield ``(index, quoted)`` for every character of *text* outside comments.

    ``quoted`` is true inside string and template literals, where comment
    markers and brackets have no meaning.
    """
    quote: str | None = None
    i = start
    length = len(text)
    while i < length:
        ch = text[i]
        if quote is not None:
            yield i, True
            if ch == "\\" and i + 1 < length:
                yield i + 1, True
                i += 2
                continue
            if ch == quote:
                quote = None
        elif text.startswith("//", i):
            newline_at = text.find("\n", i)
            i = length if newline_at == -1 else newline_at
            continue
        elif text.startswith("/*", i):
            comment_end = text.find("*/", i + 2)
            i = length if comment_end == -1 else comment_end + 2
            continue
        else:
            if ch in "'\"`":
                quote = ch
            yield i, False
        i += 1


def _matching_close(text: str, start: int, opener: str, closer: str) -> int | None:
    """Index of the bracket closing ``text[start]``, skipping strings and comments."""
    depth = 0
    for i, quoted in _code_chars(text, start):
        if quoted:
            continue
        if text[i] == opener:
            depth += 1
        elif text[i] == closer:
            depth -= 1
            if depth == 0:
                return i
    return None
