"""
Command-line interface for schema-codegen.

Usage:
    schema-codegen model -c codegen.yaml
    schema-codegen model -c codegen.yaml --init
    schema-codegen model -c codegen.yaml -l go,rust -t users,posts -o ./out
    schema-codegen languages
"""

import argparse
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .codegen import (
    ConfigError,
    GeneratorError,
    RegistryError,
    SchemaError,
    TemplateError,
    apply_overrides,
    get_language_info,
    list_supported_languages,
    load_config,
    run_generation,
    write_default_config,
)
from .introspect import IntrospectionError, SchemaFileConnector, create_connector
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

# Initialize rich console
console = Console()

HANDLED_ERRORS = (
    ConfigError,
    TemplateError,
    GeneratorError,
    IntrospectionError,
    SchemaError,
    RegistryError,
)


def _comma_list(value: str) -> List[str]:
    """Parse a comma-separated option value."""
    return [item.strip() for item in value.split(",") if item.strip()]


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="schema-codegen",
        description="Generate model structs/classes from a database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    model = subparsers.add_parser(
        "model",
        help="Generate model structs/classes from database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  schema-codegen model -c codegen.yaml --init
  schema-codegen model -c codegen.yaml
  schema-codegen model -c codegen.yaml --lang go,typescript --table users,posts
  schema-codegen model -c codegen.yaml --schema-file schema.yaml -o ./generated
        """.strip(),
    )
    model.add_argument(
        "--config", "-c", required=True, metavar="FILE",
        help="Path to the configuration YAML/JSON file",
    )
    model.add_argument(
        "--init", action="store_true",
        help="Initialize a new config file with default settings",
    )
    model.add_argument(
        "--db-name", "-d", metavar="NAME",
        help="Override the active database name from config",
    )
    model.add_argument(
        "--db-type", metavar="TYPE",
        help="Override database type (sqlite, file, mysql, postgres)",
    )
    model.add_argument("--dsn", help="Override database connection string")
    model.add_argument(
        "--lang", "-l", type=_comma_list, metavar="LANGS",
        help="Comma-separated target languages (overrides config)",
    )
    model.add_argument(
        "--output", "-o", metavar="DIR",
        help="Output directory for generated files (overrides config)",
    )
    model.add_argument(
        "--table", "-t", type=_comma_list, metavar="TABLES",
        help="Comma-separated table names (overrides config table patterns)",
    )
    model.add_argument(
        "--schema-file", metavar="FILE",
        help="Read the schema from a YAML/JSON document instead of the database",
    )
    model.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    model.set_defaults(func=handle_model_command)

    languages = subparsers.add_parser("languages", help="List supported languages")
    languages.set_defaults(func=handle_languages_command)

    return parser


def handle_model_command(args: argparse.Namespace) -> int:
    """
    Handle the ``model`` command.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    setup_logging(verbose=getattr(args, "verbose", False))

    try:
        if args.init:
            path = write_default_config(args.config)
            console.print(f"✅ [green]Created default configuration file:[/green] {path}")
            console.print(
                f"🚀 Run 'schema-codegen model -c {path}' to generate code after configuration."
            )
            return 0

        config, db_config = apply_overrides(
            load_config(args.config),
            db_name=args.db_name,
            db_type=args.db_type,
            dsn=args.dsn,
            languages=args.lang,
            output_dir=args.output,
            tables=args.table,
        )

        if args.table:
            console.print(f"🎯 Filtering to specific tables: {', '.join(args.table)}")

        if args.schema_file:
            connector = SchemaFileConnector(args.schema_file, dialect=db_config.db_type)
        else:
            connector = create_connector(db_config)

        console.print(f"🔍 Introspecting schema '{db_config.db_name}'...")
        with connector:
            schema = connector.get_schema(db_config.db_name)
        logger.info("Schema introspection complete for database: %s", schema.name)

        results = run_generation(schema, config, db_config)

    except HANDLED_ERRORS as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        logger.debug("Generation failed", exc_info=True)
        return 1

    _print_summary(results)
    console.print("📦 [green]Code generation complete![/green]")
    return 0


def _print_summary(results) -> None:
    """Show generated files per language."""
    table = Table(title="Generated Files", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Files", justify="right")
    table.add_column("Skipped", justify="right", style="dim")
    table.add_column("Fallback types", justify="right", style="yellow")

    for result in results:
        table.add_row(
            result.language,
            str(len(result.files)),
            str(len(result.skipped_tables)),
            str(len(result.fallback_columns)),
        )

    console.print(table)


def handle_languages_command(args: argparse.Namespace) -> int:
    """List supported languages with details."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Tag style", style="dim")
    table.add_column("Aliases", style="blue")

    for language in list_supported_languages():
        info = get_language_info(language)
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(language, info["file_extension"], info["tag_style"], aliases)

    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] schema-codegen model -c [dim]codegen.yaml[/dim] "
            "--lang [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``schema-codegen`` command."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
