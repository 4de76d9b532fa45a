"""nestgen command-line interface.

Usage::

    nestgen jwt  [--target PATH]
    nestgen crud [--target PATH] [--name NAME] [--auth | --no-auth]
    nestgen all  [--target PATH] [--name NAME] [--auth | --no-auth]

``generate`` is an alias of ``all``. Without ``--name`` / ``--auth`` the
CRUD commands ask interactively.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.markup import escape
from rich.prompt import Confirm, InvalidResponse, Prompt

from nestgen import __version__
from nestgen.config import GeneratorConfig
from nestgen.scaffolder.generator import ModuleGenerator, normalize_module_name, resolve_target
from nestgen.scaffolder.models import GenerationReport, ModuleNameError
from nestgen.scaffolder.templates import TemplateRenderer
from nestgen.utils import (
    configure_logging,
    console,
    print_banner,
    print_error,
    print_info,
    print_outcomes,
    print_success,
    print_summary_table,
    print_warning,
)

logger = logging.getLogger(__name__)

COMMANDS: dict[str, str] = {
    "jwt": "Generate JWT auth module",
    "crud": "Generate CRUD module (with optional auth)",
    "all": "Generate both auth and crud modules",
}

MODE_ALIASES: dict[str, str] = {"generate": "all"}

BANNERS: dict[str, str] = {
    "jwt": "Generating JWT Authentication Module",
    "crud": "Generating CRUD Module",
    "all": "Generating Complete NestJS Application",
}


# ---------------------------------------------------------------------------
# Usage
# ---------------------------------------------------------------------------


def print_usage() -> None:
    """Print the command overview."""
    console.print(f"\n[bold blue]nestgen {__version__}[/bold blue]")
    console.print("[dim]Generate NestJS JWT authentication and CRUD modules[/dim]\n")

    console.print("[bold]Usage:[/bold]")
    console.print("  nestgen <jwt|crud|all> \\[--target <path>] \\[--name <name>] \\[--auth|--no-auth]\n")

    console.print("[bold]Commands:[/bold]")
    for command, description in COMMANDS.items():
        console.print(f"  [green]{command:<6}[/green]- {description}")
    console.print()

    console.print("[bold]Options:[/bold]")
    console.print("  [yellow]--target <path>[/yellow]   Target directory (defaults to current directory)")
    console.print("  [yellow]--name <name>[/yellow]     CRUD module name (asked interactively if omitted)")
    console.print("  [yellow]--auth, --no-auth[/yellow] Keep or remove @Auth() decorators on the CRUD module")
    console.print("  [yellow]--config <file>[/yellow]   JSON configuration file")
    console.print("  [yellow]-v, --verbose[/yellow]     Show debug logging\n")

    console.print("[bold]Examples:[/bold]")
    console.print("[dim]  nestgen jwt[/dim]")
    console.print("[dim]  nestgen crud --name widget --no-auth[/dim]")
    console.print("[dim]  nestgen all[/dim]")
    console.print("[dim]  nestgen jwt --target ./my-app[/dim]\n")


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


class YesNoConfirm(Confirm):
    """Confirmation prompt that takes ``y`` / ``yes`` and ``n`` / ``no``."""

    def process_response(self, value: str) -> bool:
        answer = value.strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False
        raise InvalidResponse(self.validate_error_message)


def ask_module_name() -> str:
    """Ask for the CRUD module name; EOF counts as no answer."""
    try:
        return Prompt.ask("[cyan]Enter the CRUD module name[/cyan]", default="", show_default=False, console=console)
    except EOFError:
        return ""


def ask_include_auth() -> bool:
    """Ask whether the CRUD module keeps its ``@Auth()`` decorators."""
    try:
        return YesNoConfirm.ask(
            "[cyan]Do you want to include authentication (@Auth() decorator)?[/cyan]",
            default=False,
            console=console,
        )
    except EOFError:
        return False


# ---------------------------------------------------------------------------
# Runner
# ---------------------------------------------------------------------------


def run(
    mode: str,
    target: str | Path | None = None,
    *,
    name: str | None = None,
    include_auth: bool | None = None,
    config: GeneratorConfig | None = None,
) -> int:
    """Run one generation mode against *target* and report the result.

    Returns:
        The process exit code.

    Raises:
        ModuleNameError: If the CRUD module name is missing or invalid.
        OSError: If templates cannot be read or files cannot be written.
    """
    mode = MODE_ALIASES.get(mode, mode)
    if mode not in COMMANDS:
        print_usage()
        return 0

    config = config or GeneratorConfig()
    project = resolve_target(target, config=config)
    generator = ModuleGenerator(project, config)
    print_banner(mode, BANNERS[mode])

    if mode == "jwt":
        report = generator.generate_jwt()
    else:
        module_name = normalize_module_name(name if name is not None else ask_module_name())
        if include_auth is None:
            include_auth = ask_include_auth()
        if include_auth:
            print_success("Including authentication decorators")
        else:
            print_info("Generating without authentication")
        if mode == "crud":
            report = generator.generate_crud(module_name, include_auth)
        else:
            report = generator.generate_all(module_name, include_auth)

    _print_report(report, generator.project_source_dir)
    return 0


def _print_report(report: GenerationReport, base: Path) -> None:
    print_outcomes(report.outcomes, base)
    console.print()

    registered = " and ".join(report.registered)
    if report.composition_patched:
        print_success(f"Updated app.module to import {registered}")
    else:
        print_warning(f"No patchable app.module found - add {registered} to its imports manually")

    print_summary_table(
        {
            "Project": escape(str(base)),
            "Created": str(len(report.created)),
            "Skipped": str(len(report.skipped)),
            "Registered": registered,
        },
        title="Generation summary",
    )
    console.print(TemplateRenderer().render_guide(report.mode))
    console.print("[bold magenta]Thank you for using nestgen. Happy building with NestJS![/bold magenta]")


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nestgen", add_help=False)
    parser.add_argument("command", nargs="?", default=None)
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument("--target", "-t", default=None)
    parser.add_argument("--name", "-n", default=None)
    parser.add_argument("--auth", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--config", default=None)
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``nestgen`` and ``python -m nestgen``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if args.help or not args.command:
        print_usage()
        return 0

    try:
        config = GeneratorConfig.load(Path(args.config)) if args.config else GeneratorConfig.from_env()
        return run(
            args.command,
            args.target,
            name=args.name,
            include_auth=args.auth,
            config=config,
        )
    except ModuleNameError as exc:
        print_error(escape(str(exc)))
        return 1
    except KeyboardInterrupt:
        print_warning("Interrupted; files already written are kept.")
        return 130
    except OSError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1
    except Exception as exc:
        logger.exception("Unexpected error")
        print_error(f"Error: {escape(str(exc))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
