"""Identifier renaming and auth stripping for blueprint text.

Every function here is pure: same input, same output, no I/O. The rename is
a plain substring replacement (``Crud`` -> ``Widget`` first, then ``crud`` ->
``widget``), so any text containing the old token changes, identifiers or
not. Auth stripping is a fixed sequence of regex deletions; each one is a
no-op when its pattern does not occur.
"""

from __future__ import annotations

import re

from .models import MaterializedFile, RenameRequest, TemplateSet

NOOP_TOKEN = "placeholder"

# Blueprints carry this so editors don't type-check them in place.
_NOCHECK_MARKER = re.compile(r"\A// @ts-nocheck[^\S\n]*(?:\r?\n)?")

_STRIP_PATTERNS: tuple[re.Pattern[str], ...] = (
    # import { Auth } from '../common/decorators/auth.decorator';
    re.compile(r"""import\s*\{\s*Auth\s*\}\s*from\s*['"][^'"]*['"];?[^\S\n]*\n?"""),
    # @Auth() / @Auth(['Admin']) plus the line break and indent that follow
    re.compile(r"@Auth\([^)]*\)[^\S\n]*(?:\n[^\S\n]*)?"),
    # import { JwtModule } from '../jwt/jwt.module';
    re.compile(r"""import\s*\{\s*JwtModule\s*\}\s*from\s*['"][^'"]*['"];?[^\S\n]*\n?"""),
    # JwtModule as the last element of a list: [CrudService, JwtModule]
    re.compile(r",\s*\bJwtModule\b(?=\s*\])"),
    # JwtModule anywhere else, with its trailing comma
    re.compile(r"\bJwtModule\b,?\s*"),
    # imports: [] left behind by the previous steps
    re.compile(r"imports:\s*\[\s*\],?[^\S\n]*\n?[^\S\n]*"),
)


def capitalize(token: str) -> str:
    """Upper-case the first character only (``userProfile`` -> ``UserProfile``)."""
    return token[:1].upper() + token[1:]


def is_noop(request: RenameRequest) -> bool:
    """Return ``True`` when the request carries the no-rename sentinel."""
    return NOOP_TOKEN in (request.old_token, request.new_token) or not (
        request.old_token and request.new_token
    )


def rename(text: str, old: str, new: str) -> str:
    """Replace the capitalized form of *old*, then the lower-case form."""
    return text.replace(capitalize(old), capitalize(new)).replace(old, new)


def strip_auth(content: str) -> str:
    """Remove ``@Auth()`` decorators and the JWT wiring they depend on."""
    for pattern in _STRIP_PATTERNS:
        content = pattern.sub("", content)
    return content


def strip_marker(content: str) -> str:
    """Drop a leading ``// @ts-nocheck`` line."""
    return _NOCHECK_MARKER.sub("", content, count=1)


def transform_content(content: str, request: RenameRequest) -> str:
    """Apply marker removal, renaming and optional auth stripping to *content*."""
    result = strip_marker(content)
    if not is_noop(request):
        result = rename(result, request.old_token, request.new_token)
    if request.strip_feature:
        result = strip_auth(result)
    return result


def transform_path(path: str, request: RenameRequest) -> str:
    """Rename the tokens in a relative template path."""
    if is_noop(request):
        return path
    return rename(path, request.old_token, request.new_token)


def materialize(templates: TemplateSet, request: RenameRequest) -> list[MaterializedFile]:
    """Transform every entry of a template set, ordered by source path."""
    return [
        MaterializedFile(
            path=transform_path(path, request),
            content=transform_content(templates[path], request),
        )
        for path in sorted(templates)
    ]
