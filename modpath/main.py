"""modpath CLI - resolve import specifiers the way Node.js would."""

import json
import logging
import sys

import click
from pydantic import ValidationError
from rich.table import Table

from .console import console
from .console import error_console
from .logging_setup import init_json_logging
from .paths import create_resolver
from .resolution.errors import ResolutionError
from .resolution.options import DEFAULT_LIBRARY_ENTRY
from .resolution.options import DEPENDENCY_ROOT
from .resolution.options import PACKAGE_MANIFEST
from .resolution.options import TYPES_DIRECTORY
from .resolution.options import ResolverOptions
from .settings import LIST_KEYS
from .settings import SCALAR_KEYS
from .settings import get_settings
from .utils.error_format import escape_markup
from .utils.error_format import format_error_message
from .utils.error_format import format_resolution_error
from .utils.error_format import resolution_error_fields

logger = logging.getLogger(__name__)


def _load_options(use_settings: bool) -> ResolverOptions:
    """Read options from settings files, exiting cleanly on invalid values."""
    if not use_settings:
        return ResolverOptions()
    try:
        return get_settings().to_options()
    except ValidationError as e:
        error_console.print(f"[red]Invalid resolver settings:[/red] {escape_markup(format_error_message(e))}")
        sys.exit(2)


@click.group(invoke_without_command=True)
@click.version_option(package_name="modpath")
@click.option("--log-level", envvar="MODPATH_LOG_LEVEL", default=None, help="Enable JSONL logging at this level")
@click.option("--log-file", envvar="MODPATH_LOG_PATH", default=None, help="JSONL log destination")
@click.pass_context
def cli(ctx: click.Context, log_level: str | None, log_file: str | None):
    """Resolve import specifiers to files on disk."""
    if log_level or log_file:
        init_json_logging(path=log_file, level=log_level)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


@cli.command()
@click.argument("specifiers", nargs=-1, required=True)
@click.option(
    "--from",
    "from_directory",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory the imports occur in (default: current directory)",
)
@click.option("--ext", "extensions", multiple=True, help="Extra extension to probe (repeatable)")
@click.option("--exclude-ext", "excluded", multiple=True, help="Extension never to match (repeatable)")
@click.option("--field", "fields", multiple=True, help="Extra package.json entry field (repeatable)")
@click.option("--builtin", "builtins", multiple=True, help="Extra builtin module name (repeatable)")
@click.option("--strict-manifest", is_flag=True, help="Fail immediately when a library has no package.json")
@click.option("--no-parent-retry", is_flag=True, help="Do not retry failed library lookups from the parent directory")
@click.option("--no-settings", is_flag=True, help="Ignore .modpath/settings.yaml files")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
def resolve(
    specifiers: tuple[str, ...],
    from_directory: str | None,
    extensions: tuple[str, ...],
    excluded: tuple[str, ...],
    fields: tuple[str, ...],
    builtins: tuple[str, ...],
    strict_manifest: bool,
    no_parent_retry: bool,
    no_settings: bool,
    as_json: bool,
):
    """Resolve one or more SPECIFIERS to absolute file paths."""
    base = _load_options(use_settings=not no_settings)
    update: dict = {
        "extra_extensions": [*base.extra_extensions, *extensions],
        "extra_excluded_extensions": [*base.extra_excluded_extensions, *excluded],
        "extra_package_fields": [*base.extra_package_fields, *fields],
        "extra_builtin_modules": [*base.extra_builtin_modules, *builtins],
    }
    if strict_manifest:
        update["manifest_fallback"] = "strict"
    if no_parent_retry:
        update["retry_from_parent"] = False

    resolver = create_resolver(base.model_copy(update=update))

    results = []
    failed = False
    for specifier in specifiers:
        try:
            resolved = resolver.resolve(specifier, from_directory)
        except ResolutionError as e:
            failed = True
            results.append({"specifier": specifier, "resolved": None, **resolution_error_fields(e)})
            if not as_json:
                error_console.print(f"[red]{escape_markup(format_resolution_error(e))}[/red]")
            continue

        results.append({"specifier": specifier, "resolved": resolved, "error": None})
        if not as_json:
            click.echo(resolved)

    if as_json:
        click.echo(json.dumps(results, indent=2))

    if failed:
        sys.exit(1)


@cli.group(invoke_without_command=True)
@click.pass_context
def options(ctx: click.Context):
    """Inspect and extend resolver options."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@options.command("show")
@click.option("--no-settings", is_flag=True, help="Show built-in defaults only")
def options_show(no_settings: bool):
    """Show the effective resolver options."""
    resolver = create_resolver(_load_options(use_settings=not no_settings))
    effective = resolver.options

    table = Table(title="Effective Resolver Options", show_header=True, header_style="bold cyan")
    table.add_column("Option", style="green")
    table.add_column("Value")

    table.add_row("allowed extensions", " ".join(effective.allowed_extensions))
    table.add_row("excluded extensions", " ".join(sorted(effective.excluded_extensions)) or "[dim]none[/dim]")
    table.add_row("package fields", " ".join(effective.package_fields))
    table.add_row(f"builtin modules ({len(resolver.builtins)})", ", ".join(resolver.builtins))
    table.add_row("manifest fallback", effective.manifest_fallback)
    table.add_row("retry from parent", "yes" if effective.retry_from_parent else "no")
    table.add_row("default entry", DEFAULT_LIBRARY_ENTRY)
    table.add_row("dependency root", DEPENDENCY_ROOT)
    table.add_row("manifest", PACKAGE_MANIFEST)
    table.add_row("type sidecar", TYPES_DIRECTORY)

    console.print(table)


@options.command("add")
@click.argument("key", type=click.Choice(LIST_KEYS))
@click.argument("value")
@click.option("--local", "scope_flag", flag_value="local", help="Add locally (just you)")
@click.option("--project", "scope_flag", flag_value="project", help="Add for project (team)")
@click.option("--global", "scope_flag", flag_value="global", help="Add globally (all projects)")
def options_add(key: str, value: str, scope_flag: str | None):
    """Append VALUE to the list option KEY in a settings file."""
    scope = scope_flag or "project"
    get_settings().add_to_list(key, value, scope=scope)  # type: ignore[arg-type]
    console.print(f"[green]✓ Added[/green] {escape_markup(value)} to {key} ({scope})")


@options.command("set")
@click.argument("key", type=click.Choice(SCALAR_KEYS))
@click.argument("value")
@click.option("--local", "scope_flag", flag_value="local", help="Set locally (just you)")
@click.option("--project", "scope_flag", flag_value="project", help="Set for project (team)")
@click.option("--global", "scope_flag", flag_value="global", help="Set globally (all projects)")
def options_set(key: str, value: str, scope_flag: str | None):
    """Set the scalar option KEY to VALUE in a settings file."""
    scope = scope_flag or "project"
    try:
        parsed = getattr(ResolverOptions.model_validate({key: value}), key)
    except ValidationError as e:
        error_console.print(f"[red]Invalid value for {key}:[/red] {escape_markup(format_error_message(e))}")
        sys.exit(2)

    get_settings().set_value(key, parsed, scope=scope)  # type: ignore[arg-type]
    console.print(f"[green]✓ Set[/green] {key} = {escape_markup(parsed)} ({scope})")


def main():
    cli()


if __name__ == "__main__":
    main()
