"""Data models and exceptions for the scaffolding engine.

All value objects are frozen Pydantic v2 models so a request or a generated
file cannot be mutated once it has been handed to the next stage.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for errors raised by the scaffolding engine."""


class TemplateLoadError(ScaffoldError, OSError):
    """Raised when a template directory cannot be read."""


class ModuleNameError(ScaffoldError, ValueError):
    """Raised when a user-supplied module name is missing or unusable."""


class PatchNotApplicable(ScaffoldError):
    """Raised when a composition file has no structure we know how to extend."""


# ---------------------------------------------------------------------------
# Template set
# ---------------------------------------------------------------------------

TemplateSet = Mapping[str, str]


def freeze_templates(templates: dict[str, str]) -> TemplateSet:
    """Wrap a path -> content dict in a read-only view."""
    return MappingProxyType(dict(templates))


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


class RenameRequest(BaseModel):
    """Old/new base identifier pair plus the auth-stripping flag."""

    model_config = ConfigDict(frozen=True)

    old_token: str = Field(..., description="Lower-case identifier used in the templates")
    new_token: str = Field(..., description="Lower-case identifier to substitute")
    strip_feature: bool = Field(default=False, description="Remove @Auth() wiring")


class MaterializedFile(BaseModel):
    """A template after renaming, ready to be written below a base directory."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        if not value or value.startswith("/"):
            raise ValueError(f"path must be relative: {value!r}")
        if ".." in value.split("/"):
            raise ValueError(f"path must not leave the base directory: {value!r}")
        return value


class RegistrationEntry(BaseModel):
    """One import statement plus the symbol it brings into the composition file."""

    model_config = ConfigDict(frozen=True)

    import_line: str
    symbol_name: str


class WriteStatus(str, Enum):
    CREATED = "created"
    SKIPPED = "skipped"


class WriteOutcome(BaseModel):
    """Per-file result reported by the destination writer."""

    model_config = ConfigDict(frozen=True)

    status: WriteStatus
    path: Path
    reason: str | None = None

    @classmethod
    def created(cls, path: Path) -> "WriteOutcome":
        return cls(status=WriteStatus.CREATED, path=path)

    @classmethod
    def skipped(cls, path: Path, reason: str = "already-exists") -> "WriteOutcome":
        return cls(status=WriteStatus.SKIPPED, path=path, reason=reason)


class GenerationReport(BaseModel):
    """Everything one generator run did to the target project."""

    mode: str
    outcomes: list[WriteOutcome] = Field(default_factory=list)
    registered: list[str] = Field(default_factory=list)
    composition_patched: bool = False

    @property
    def created(self) -> list[Path]:
        return [o.path for o in self.outcomes if o.status is WriteStatus.CREATED]

    @property
    def skipped(self) -> list[Path]:
        return [o.path for o in self.outcomes if o.status is WriteStatus.SKIPPED]
