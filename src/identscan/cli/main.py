"""identscan CLI - print identifiers found in C, C++, Python and Rust sources."""

from pathlib import Path
from typing import NoReturn

import click

from identscan.config import load_config
from identscan.config.constants import EXIT_FATAL, EXIT_USAGE, PROGRAM_NAME
from identscan.core.errors import ConfigError, ErrorCode, GrammarError, UsageError
from identscan.core.logging import configure_logging, get_logger
from identscan.extraction import Driver, QueryEngine, Traverser, build_registry, resolve_mode


def usage_line(program_name: str) -> str:
    return f"usage: {program_name} [-i] [-h] [-v] [path]"


def _fail_usage(ctx: click.Context, program_name: str, err: UsageError) -> NoReturn:
    if err.code is ErrorCode.USAGE_TOO_MANY_PATHS:
        click.echo(f"{program_name}: error: {err.message}", err=True)
    click.echo(usage_line(program_name), err=True)
    ctx.exit(EXIT_USAGE)


@click.command(context_settings={"help_option_names": []})
@click.argument("paths", nargs=-1)
@click.option("-i", "use_stdin", is_flag=True, help="Read paths from stdin, one per line")
@click.option("-h", "show_help", is_flag=True, help="Print usage and exit")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context, paths: tuple[str, ...], use_stdin: bool, show_help: bool, verbose: bool
) -> None:
    """Print every identifier in the given file or directory tree, one per line."""
    program_name = ctx.find_root().info_name or PROGRAM_NAME

    try:
        if show_help:
            raise UsageError.help_requested()
        invocation = resolve_mode(paths, use_stdin)
    except UsageError as e:
        _fail_usage(ctx, program_name, e)

    try:
        config = load_config(Path.cwd())
    except ConfigError as e:
        click.echo(f"{program_name}: error: {e.message}", err=True)
        ctx.exit(EXIT_FATAL)

    logging_config = config.logging
    if verbose:
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    log = get_logger("cli")

    # Grammars and queries are compiled up front so a broken setup fails
    # before any output is produced.
    try:
        registry = build_registry()
        engine = QueryEngine(registry.specs(), decode_errors=config.scan.decode_errors)
    except GrammarError as e:
        log.debug("grammar_setup_failed", error=e.to_dict())
        click.echo(f"{program_name}: error: {e.message}", err=True)
        ctx.exit(EXIT_FATAL)

    traverser = Traverser(
        registry,
        engine,
        emit=click.echo,
        report=lambda line: click.echo(line, err=True),
        program_name=program_name,
        max_file_size_bytes=config.scan.max_file_size_bytes,
    )
    stream = click.get_text_stream("stdin") if invocation.reads_stream else None
    Driver(traverser).run(invocation, stream)


if __name__ == "__main__":
    cli()
