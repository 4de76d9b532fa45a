"""Main scaffolding orchestrator.

Takes a target NestJS project and materializes the JWT authentication and/or
CRUD blueprints into it: load -> transform -> write -> register with
``app.module``. Interactive questions are the caller's job; everything here
runs without user input.
"""

from __future__ import annotations

import json
import logging
import re
import tomllib
from pathlib import Path

from nestgen.config import GeneratorConfig

from .loader import load_templates
from .models import (
    GenerationReport,
    ModuleNameError,
    RegistrationEntry,
    RenameRequest,
    TemplateSet,
    WriteOutcome,
)
from .patcher import patch_composition_file
from .transform import NOOP_TOKEN, capitalize, materialize
from .writer import write_files

logger = logging.getLogger(__name__)

AUTH_REGISTRATION = RegistrationEntry(
    import_line="import { AuthModule } from './auth/auth.module';",
    symbol_name="AuthModule",
)

_TS_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Generates NestJS modules into an existing project.

    Three entry points match the CLI modes:
    - ``generate_jwt``: the JWT authentication blueprint set, unchanged
    - ``generate_crud``: the CRUD blueprint set renamed to a module name,
      optionally without ``@Auth()`` decorators
    - ``generate_all``: both, registered with ``app.module`` in one edit
    """

    def __init__(self, target: str | Path, config: GeneratorConfig | None = None) -> None:
        self.config = config or GeneratorConfig()
        self.target = Path(target)

    @property
    def project_source_dir(self) -> Path:
        """``<target>/src`` when the project has one, else the target itself."""
        src = self.target / self.config.source_dir_name
        return src if src.is_dir() else self.target

    # -- Public API --------------------------------------------------------

    def generate_jwt(self) -> GenerationReport:
        """Write the authentication blueprints and register ``AuthModule``."""
        outcomes = self._write_auth()
        return self._register("jwt", outcomes, [AUTH_REGISTRATION])

    def generate_crud(self, module_name: str, include_auth: bool) -> GenerationReport:
        """Write the CRUD blueprints as *module_name* and register its module.

        Raises:
            ModuleNameError: If *module_name* is empty or not an identifier.
        """
        name = normalize_module_name(module_name)
        outcomes = self._write_crud(name, include_auth)
        return self._register("crud", outcomes, [registration_for(name)])

    def generate_all(self, module_name: str, include_auth: bool) -> GenerationReport:
        """Write both blueprint sets and register both modules.

        The name is validated before anything is written.
        """
        name = normalize_module_name(module_name)
        outcomes = self._write_auth()
        outcomes += self._write_crud(name, include_auth)
        return self._register("all", outcomes, [AUTH_REGISTRATION, registration_for(name)])

    # -- Stages ------------------------------------------------------------

    def load_auth_templates(self) -> TemplateSet:
        return load_templates(self.config.auth_templates_path, self.config)

    def load_crud_templates(self) -> TemplateSet:
        return load_templates(self.config.crud_templates_path, self.config)

    def _write_auth(self) -> list[WriteOutcome]:
        request = RenameRequest(old_token=NOOP_TOKEN, new_token=NOOP_TOKEN)
        files = materialize(self.load_auth_templates(), request)
        return write_files(self.project_source_dir, files)

    def _write_crud(self, name: str, include_auth: bool) -> list[WriteOutcome]:
        request = RenameRequest(
            old_token=self.config.template_token,
            new_token=name,
            strip_feature=not include_auth,
        )
        files = materialize(self.load_crud_templates(), request)
        return write_files(self.project_source_dir, files)

    def _register(
        self,
        mode: str,
        outcomes: list[WriteOutcome],
        entries: list[RegistrationEntry],
    ) -> GenerationReport:
        patched = patch_composition_file(
            self.project_source_dir,
            entries,
            candidates=self.config.composition_candidates,
        )
        report = GenerationReport(
            mode=mode,
            outcomes=outcomes,
            registered=[e.symbol_name for e in entries],
            composition_patched=patched,
        )
        logger.debug(
            "%s: %d created, %d skipped, composition patched=%s",
            mode, len(report.created), len(report.skipped), patched,
        )
        return report


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def normalize_module_name(raw: str | None) -> str:
    """Validate a module name and lower-case its first character.

    ``"Widget"`` -> ``"widget"``; ``"orderItem"`` stays ``"orderItem"``.

    Raises:
        ModuleNameError: If the name is empty, not a TypeScript identifier,
            or the reserved no-rename token.
    """
    name = (raw or "").strip()
    if not name:
        raise ModuleNameError("CRUD module name is required!")
    if not _TS_IDENTIFIER.match(name):
        raise ModuleNameError(
            f"Invalid module name {name!r}: use letters, digits, '_' or '$' "
            "and do not start with a digit"
        )
    name = name[:1].lower() + name[1:]
    if name == NOOP_TOKEN:
        raise ModuleNameError(f"{name!r} is reserved, choose another module name")
    return name


def registration_for(module_name: str) -> RegistrationEntry:
    """Build the ``app.module`` registration for a generated CRUD module."""
    symbol = f"{capitalize(module_name)}Module"
    return RegistrationEntry(
        import_line=f"import {{ {symbol} }} from './{module_name}/{module_name}.module';",
        symbol_name=symbol,
    )


def resolve_target(
    target: str | Path | None,
    cwd: str | Path | None = None,
    config: GeneratorConfig | None = None,
) -> Path:
    """Pick the project directory to generate into.

    An explicit *target* always wins. Otherwise the current directory is
    used, unless it is nestgen's own checkout, in which case
    ``./generate`` is used (and created) so the generator never writes into
    its own sources.
    """
    config = config or GeneratorConfig()
    if target:
        return Path(target)
    base = Path(cwd) if cwd is not None else Path.cwd()
    if is_generator_checkout(base, config):
        fallback = base / config.fallback_target_dir
        fallback.mkdir(parents=True, exist_ok=True)
        logger.warning(
            "No --target provided and running inside the generator repo; using %s",
            fallback,
        )
        return fallback
    return base


def is_generator_checkout(directory: Path, config: GeneratorConfig) -> bool:
    """Return ``True`` if *directory*'s package descriptor names this generator."""
    pyproject = directory / "pyproject.toml"
    if pyproject.is_file():
        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError) as exc:
            logger.debug("Ignoring unreadable %s: %s", pyproject, exc)
        else:
            name = str(data.get("project", {}).get("name", "")).lower()
            if name == config.self_package_name:
                return True

    package_json = directory / "package.json"
    if package_json.is_file():
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring unreadable %s: %s", package_json, exc)
        else:
            name = str(data.get("name", "")).lower() if isinstance(data, dict) else ""
            if config.self_marker in name:
                return True
    return False
