"""Jinja2 rendering of the console guidance shown after generation.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``nestgen/scaffolder/templates/`` directory. The templates produce Rich
markup (dependency install commands, next steps) that the CLI prints as-is.
Blueprints are *not* Jinja2 templates; they are plain TypeScript handled by
:mod:`nestgen.scaffolder.transform`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

PACKAGE_MANAGERS: list[dict[str, str]] = [
    {"name": "npm", "add": "npm install", "add_dev": "npm install --save-dev"},
    {"name": "yarn", "add": "yarn add", "add_dev": "yarn add --dev"},
    {"name": "pnpm", "add": "pnpm add", "add_dev": "pnpm add --save-dev"},
    {"name": "bun", "add": "bun add", "add_dev": "bun add --dev"},
]

MODE_DEPENDENCIES: dict[str, dict[str, Any]] = {
    "jwt": {
        "title": "JWT Authentication",
        "production": ["@nestjs/jwt"],
        "dev": [],
        "needs_env": True,
    },
    "crud": {
        "title": "CRUD module",
        "production": [],
        "dev": [],
        "needs_env": False,
    },
    "all": {
        "title": "Complete NestJS Application",
        "production": ["@nestjs/jwt"],
        "dev": [],
        "needs_env": True,
    },
}


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the ``.j2`` message templates shipped with nestgen."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"dependencies.txt.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_guide(self, mode: str) -> str:
        """Render the dependency and next-steps guide for a generation mode."""
        if mode not in MODE_DEPENDENCIES:
            raise KeyError(f"Unknown generation mode: {mode}")
        context = {**MODE_DEPENDENCIES[mode], "mode": mode, "managers": PACKAGE_MANAGERS}
        return self.render("dependencies.txt.j2", context)
