"""Click CLI: yarn-why PACKAGE < yarn.lock"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from click.core import ParameterSource

from yarn_why import __version__
from yarn_why.exceptions import ArgumentError, InputError
from yarn_why.formatter import format_forest
from yarn_why.graph import DEFAULT_VISIT_CAP
from yarn_why.models import OutputFormat, QueryConfig
from yarn_why.pipeline import load_entries, run_query

logger = logging.getLogger(__name__)

_DEFAULT_LOCKFILE = Path("yarn.lock")


class WhyCommand(click.Command):
    """Command that exits with status 1 on every usage or input error."""

    def main(self, *args, **kwargs):
        kwargs["standalone_mode"] = False
        try:
            rv = super().main(*args, **kwargs)
        except click.ClickException as e:
            e.show()
            sys.exit(1)
        except click.Abort:
            click.echo("Aborted!", err=True)
            sys.exit(1)
        sys.exit(rv if isinstance(rv, int) else 0)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@click.command(
    cls=WhyCommand,
    context_settings={"help_option_names": ["-h", "--help"], "auto_envvar_prefix": "YARN_WHY"},
)
@click.version_option(__version__, "-V", "--version", prog_name="yarn-why", message="%(prog)s %(version)s")
@click.argument("package", required=False)
@click.option("-f", "--lockfile", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Lockfile to read (default: standard input)")
@click.option("--filter", "version_filter", metavar="RANGE",
              help="Only consider versions of PACKAGE matching this semver range")
@click.option("-d", "--max-depth", type=click.IntRange(min=1), default=10, show_default=True,
              help="Show at most N descriptors per path")
@click.option("--no-limit", is_flag=True, help="Do not limit path depth")
@click.option("--dedup/--no-dedup", default=True, show_default=True,
              help="Collapse repeated subtrees")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of a text tree")
@click.option("--visit-cap", type=click.IntRange(min=1), default=DEFAULT_VISIT_CAP, show_default=True,
              help="Maximum visits per package while walking cyclic graphs")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(
    ctx: click.Context,
    package: str | None,
    lockfile: Path | None,
    version_filter: str | None,
    max_depth: int,
    no_limit: bool,
    dedup: bool,
    as_json: bool,
    visit_cap: int,
    verbose: bool,
):
    """Like `yarn why`, but fast: show every path that pulls in PACKAGE.

    PACKAGE is a bare name (`lodash`) or a name with a range (`lodash@^4.17.0`).
    """
    if not package:
        click.echo(ctx.get_help())
        ctx.exit(1)

    _configure_logging(verbose)

    if no_limit and ctx.get_parameter_source("max_depth") is ParameterSource.COMMANDLINE:
        raise click.UsageError("--max-depth and --no-limit are mutually exclusive", ctx=ctx)

    config = QueryConfig(
        query=package,
        version_filter=version_filter,
        max_depth=None if no_limit else max_depth,
        dedup=dedup,
        visit_cap=visit_cap,
    )
    logger.debug("query config: %s", config)

    stdin = click.get_binary_stream("stdin")
    if lockfile is None and stdin.isatty():
        if not _DEFAULT_LOCKFILE.is_file():
            raise click.UsageError("no lockfile: pass --lockfile or pipe one on stdin", ctx=ctx)
        lockfile = _DEFAULT_LOCKFILE

    try:
        entries = load_entries(lockfile, stdin)
        result = run_query(entries, config)
    except ArgumentError as e:
        raise click.UsageError(str(e), ctx=ctx) from e
    except InputError as e:
        raise click.ClickException(str(e)) from e

    if not result.found:
        click.echo(f"yarn-why: {result.message}", err=True)
        ctx.exit(1)

    fmt = OutputFormat.JSON if as_json else OutputFormat.TEXT
    color = not as_json and click.get_text_stream("stdout").isatty()
    click.echo(format_forest(result.forest, fmt, color=color), color=color)


def main() -> None:
    cli(prog_name="yarn-why")


if __name__ == "__main__":
    main()
