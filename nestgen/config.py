"""nestgen configuration.

Centralised, typed configuration for the generator. Settings use Pydantic v2
models so they are validated at construction time and can be loaded from a
JSON file or from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_DEFAULT_TEMPLATE_ROOT = Path(__file__).parent / "blueprints"


class GeneratorConfig(BaseModel):
    """Global nestgen configuration.

    Instances are created once by the CLI entry point and passed to the
    ``ModuleGenerator`` and the individual scaffolding stages.
    """

    template_root: Path = Field(default=_DEFAULT_TEMPLATE_ROOT)
    auth_template_dir: str = Field(default="auth")
    crud_template_dir: str = Field(default="crud")

    # Identifier the CRUD blueprints are written with.
    template_token: str = Field(default="crud", min_length=1)

    composition_candidates: list[str] = Field(
        default=["app.module.ts", "app.module.js"],
        min_length=1,
        description="Composition file names, in priority order",
    )
    source_dir_name: str = Field(default="src")
    fallback_target_dir: str = Field(default="generate")

    # Used to detect that nestgen is being run from inside its own checkout.
    self_package_name: str = Field(default="nestgen")
    self_marker: str = Field(default="generator")

    include_suffixes: list[str] = Field(default=[".ts", ".env.example"])
    include_names: list[str] = Field(default=[".env.example"])
    max_depth: int = Field(default=32, ge=1, description="Template tree recursion limit")

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    @property
    def auth_templates_path(self) -> Path:
        """Directory holding the JWT authentication blueprints."""
        return self.template_root / self.auth_template_dir

    @property
    def crud_templates_path(self) -> Path:
        """Directory holding the CRUD module blueprints."""
        return self.template_root / self.crud_template_dir

    def is_template_file(self, name: str) -> bool:
        """Return ``True`` if a file called *name* belongs in a template set."""
        return name in self.include_names or any(
            name.endswith(suffix) for suffix in self.include_suffixes
        )

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a configuration from a JSON file.

        Args:
            path: The JSON file to read.

        Returns:
            A validated ``GeneratorConfig`` instance.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            NESTGEN_TEMPLATE_ROOT, NESTGEN_MAX_DEPTH, NESTGEN_SOURCE_DIR.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("NESTGEN_TEMPLATE_ROOT"):
            kwargs["template_root"] = Path(os.environ["NESTGEN_TEMPLATE_ROOT"])
        if os.environ.get("NESTGEN_MAX_DEPTH"):
            kwargs["max_depth"] = int(os.environ["NESTGEN_MAX_DEPTH"])
        if os.environ.get("NESTGEN_SOURCE_DIR"):
            kwargs["source_dir_name"] = os.environ["NESTGEN_SOURCE_DIR"]
        return cls(**kwargs)
