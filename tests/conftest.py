"""Shared pytest fixtures for the nestgen test suite.

Provides reusable fixtures for:
- Temporary NestJS projects with and without an ``app.module.ts``
- Small in-memory template sets
- A ``GeneratorConfig`` pointing at a throw-away blueprint tree
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from nestgen.config import GeneratorConfig
from nestgen.scaffolder.models import freeze_templates


# ---------------------------------------------------------------------------
# Composition files
# ---------------------------------------------------------------------------

EMPTY_APP_MODULE = textwrap.dedent(
    """\
    import { Module } from '@nestjs/common';

    @Module({
      imports: [],
      controllers: [],
      providers: [],
    })
    export class AppModule {}
    """
)

NEST_CLI_APP_MODULE = textwrap.dedent(
    """\
    import { Module } from '@nestjs/common';
    import { AppController } from './app.controller';
    import { AppService } from './app.service';
    import { ConfigModule } from './config/config.module';

    @Module({
      imports: [ConfigModule],
      controllers: [AppController],
      providers: [AppService],
    })
    export class AppModule {}
    """
)


@pytest.fixture
def empty_app_module() -> str:
    return EMPTY_APP_MODULE


@pytest.fixture
def nest_cli_app_module() -> str:
    return NEST_CLI_APP_MODULE


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty project root (no ``src/``, no composition file)."""
    project_dir = tmp_path / "nest-app"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def nest_project(tmp_path: Path) -> Path:
    """Project root with ``src/app.module.ts`` holding an empty imports list."""
    project_dir = tmp_path / "nest-app"
    src = project_dir / "src"
    src.mkdir(parents=True)
    (src / "app.module.ts").write_text(EMPTY_APP_MODULE, encoding="utf-8")
    yield project_dir


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

SAMPLE_CONTROLLER = textwrap.dedent(
    """\
    // @ts-nocheck
    import { Controller, Get } from "@nestjs/common";
    import { CrudService } from "./crud.service";
    import { Auth } from "../common/decorators/auth.decorator";

    @Controller("crud")
    export class CrudController {
      constructor(private readonly service: CrudService) {}

      @Get()
      @Auth()
      findAll() {
        return this.service.findAll();
      }
    }
    """
)

SAMPLE_MODULE = textwrap.dedent(
    """\
    // @ts-nocheck
    import { Module } from "@nestjs/common";
    import { CrudController } from "./crud.controller";
    import { JwtModule } from "../jwt/jwt.module";

    @Module({
      imports: [JwtModule],
      controllers: [CrudController],
    })
    export class CrudModule {}
    """
)


@pytest.fixture
def sample_templates():
    """A two-file CRUD template set."""
    return freeze_templates(
        {
            "crud/crud.controller.ts": SAMPLE_CONTROLLER,
            "crud/crud.module.ts": SAMPLE_MODULE,
        }
    )


@pytest.fixture
def blueprint_root(tmp_path: Path) -> Path:
    """A minimal on-disk blueprint tree with ``auth/`` and ``crud/`` sets."""
    root = tmp_path / "blueprints"
    (root / "auth" / "auth").mkdir(parents=True)
    (root / "auth" / "auth" / "auth.module.ts").write_text(
        "// @ts-nocheck\nexport class AuthModule {}\n", encoding="utf-8"
    )
    (root / "auth" / ".env.example").write_text("JWT_SECRET=change-me\n", encoding="utf-8")
    (root / "crud" / "crud").mkdir(parents=True)
    (root / "crud" / "crud" / "crud.controller.ts").write_text(SAMPLE_CONTROLLER, encoding="utf-8")
    (root / "crud" / "crud" / "crud.module.ts").write_text(SAMPLE_MODULE, encoding="utf-8")
    return root


@pytest.fixture
def blueprint_config(blueprint_root: Path) -> GeneratorConfig:
    return GeneratorConfig(template_root=blueprint_root)
