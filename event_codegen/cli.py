"""
Command-line interface for event-codegen.

Subcommands:
    generate  Render Events.hpp and events.ts from a schema
    check     Resolve and validate a schema and list its events
    targets   List the registered renderers
"""

import argparse
import copy
import sys
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .codegen import (
    ConfigError,
    EventGenerator,
    GeneratedArtifact,
    GeneratorError,
    RegistryError,
    SchemaError,
    TemplateError,
    __version__,
    to_pascal_case,
    to_type_name,
)
from .codegen.core.config import get_config_manager
from .codegen.registry import list_all_language_info
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

TARGETS = ("cpp", "typescript", "all")

SYNTAX_LEXERS = {"cpp": "cpp", "typescript": "typescript"}


console = Console()


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-codegen",
        description="Generate a C++ emission header and a TypeScript consumption module from an event schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  event-codegen generate events.json -o generated/
  event-codegen generate events.json --target typescript --print
  event-codegen generate https://example.com/events.json --namespace Plugin::Events
  event-codegen check events.json
  event-codegen targets
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    generate_parser = subparsers.add_parser(
        "generate", help="Render both artifacts from a schema"
    )
    generate_parser.add_argument("schema", help="Schema file path or URL")
    generate_parser.add_argument(
        "--output", "-o", default=".", metavar="DIR", help="Output directory (default: .)"
    )
    generate_parser.add_argument(
        "--target",
        "-t",
        default="all",
        choices=TARGETS,
        help="Artifact to render (default: all)",
    )
    generate_parser.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate_parser.add_argument(
        "--namespace", metavar="NAME", help="C++ namespace for the emission header"
    )
    generate_parser.add_argument(
        "--config-import",
        metavar="PATH",
        help="Module the consumption module imports getApiUrl/sdkConfig from",
    )
    generate_parser.add_argument(
        "--no-comments", action="store_true", help="Don't add doc comments"
    )
    generate_parser.add_argument(
        "--print",
        dest="print_only",
        action="store_true",
        help="Print the artifacts instead of writing them",
    )
    generate_parser.set_defaults(func=_handle_generate)

    check_parser = subparsers.add_parser(
        "check", help="Resolve and validate a schema"
    )
    check_parser.add_argument("schema", help="Schema file path or URL")
    check_parser.set_defaults(func=_handle_check)

    targets_parser = subparsers.add_parser("targets", help="List registered renderers")
    targets_parser.set_defaults(func=_handle_targets)

    return parser


def build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge the config file (if any) with command-line overrides."""
    config: Dict[str, Any] = {}

    if getattr(args, "config", None):
        config = copy.deepcopy(get_config_manager().load_config_file(args.config))

    def section(name: str) -> Dict[str, Any]:
        current = config.get(name)
        if not isinstance(current, dict):
            current = config[name] = {}
        return current

    if getattr(args, "namespace", None):
        section("cpp")["namespace"] = args.namespace

    if getattr(args, "config_import", None):
        section("typescript")["config_import"] = args.config_import

    if getattr(args, "no_comments", False):
        config["add_comments"] = False

    return config


def _select_artifacts(generator: EventGenerator, target: str) -> List[GeneratedArtifact]:
    if target == "cpp":
        return [generator.generate_emission()]
    if target == "typescript":
        return [generator.generate_consumption()]
    return generator.generate()


def _handle_generate(args: argparse.Namespace) -> int:
    config = build_config(args)
    generator = EventGenerator(args.schema, config=config)
    artifacts = _select_artifacts(generator, args.target)

    if args.print_only:
        languages = {r.output_name: r.language_name for r in generator.renderers}
        for artifact in artifacts:
            lexer = SYNTAX_LEXERS.get(languages.get(artifact.output_name, ""), "text")
            console.print(
                Panel(
                    Syntax(artifact.content, lexer, theme="monokai"),
                    title=f"📄 {artifact.output_name}",
                    border_style="green",
                )
            )
    else:
        for artifact in artifacts:
            path = artifact.write_to(args.output)
            console.print(f"[green]✓[/green] Wrote [cyan]{path}[/cyan]")

    _print_warnings(generator.warnings)
    return 0


def _handle_check(args: argparse.Namespace) -> int:
    generator = EventGenerator(args.schema)
    schema = generator.schema

    table = Table(
        title=f"📋 Events for {escape(schema.endpoint)}",
        box=box.ROUNDED,
        title_style="bold cyan",
    )
    table.add_column("Event", style="bold green", no_wrap=True)
    table.add_column("C++ function", style="cyan")
    table.add_column("TS interface", style="cyan")
    table.add_column("Fields", style="dim")

    for event in schema.events:
        fields = ", ".join(f"{f.name}: {f.type.value}" for f in event.fields)
        table.add_row(
            escape(event.name),
            f"Emit{to_pascal_case(event.name)}",
            to_type_name(event.name),
            escape(fields),
        )

    console.print()
    console.print(table)
    console.print(f"[green]✓[/green] Schema is valid ({len(schema.events)} event(s))")

    _print_warnings(generator.warnings)
    return 0


def _handle_targets(args: argparse.Namespace) -> int:
    table = Table(title="📋 Renderers", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Role", style="cyan")
    table.add_column("Output", style="cyan")
    table.add_column("Renderer Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in list_all_language_info().items():
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["role"], info["output_name"], info["class"], aliases)

    console.print()
    console.print(table)
    return 0


def _print_warnings(warnings: List[str]) -> None:
    if not warnings:
        return
    console.print("\n[yellow]⚠️  Warnings:[/yellow]")
    for warning in warnings:
        console.print(f"  [yellow]•[/yellow] {escape(warning)}")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns the process exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else args.log_level)
    logger.debug(f"Running command: {args.command}")

    try:
        return args.func(args)
    except SchemaError as e:
        console.print(f"[red]✗ Schema error:[/red] {escape(str(e))}")
    except (ConfigError, RegistryError) as e:
        console.print(f"[red]✗ Configuration error:[/red] {escape(str(e))}")
    except (GeneratorError, TemplateError) as e:
        console.print(f"[red]✗ Generation failed:[/red] {escape(str(e))}")
    except OSError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
