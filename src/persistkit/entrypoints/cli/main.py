"""PERSISTKIT CLI entry point.

Defines the top-level ``persistkit`` command (via Click-Extra), configures
logging for every subcommand and registers the subcommands.

Commands
- ``persistkit config``: show the resolved configuration, secrets redacted.
- ``persistkit check``: bootstrap the persistence stack and run a probe query.

Examples
    $ persistkit --version
    $ persistkit -p conf/application.properties check
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from persistkit import __version__
from persistkit.config import CONFIG_PATH_ENVVAR
from persistkit.logging import config_console_handler, config_flight_recorder, log_startup

from .commands import check, show_config
from .helpers.log_level_parser import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """PERSISTKIT command-line interface.

    Reads the persistence properties file, builds the connection pool, the
    session factory and the transaction manager, and reports what it built.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--properties",
    "-p",
    "properties_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar=CONFIG_PATH_ENVVAR,
    show_envvar=True,
    default=None,
    help="Properties file to read (default: ./application.properties).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (timestamps, logger names and source paths).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path the flight recorder writes to.",
    default=Path(user_log_dir("persistkit", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="PERSISTKIT_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=int,
    default=2000,
    hidden=True,
    envvar="PERSISTKIT_FLIGHT_RECORDER_CAPACITY",
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep the last N log records at DEBUG granularity and write them to "
        "--log-path when a WARNING/ERROR occurs, or on exit with --force-flush."
    ),
    default=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit.",
    default=False,
    show_default=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    envvar="PERSISTKIT_LOGGER_LEVELS",
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable, e.g. "
        "-L sqlalchemy.pool=DEBUG -L alembic=INFO."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def persistkit(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    properties_path: Path | None,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """PERSISTKIT command-line interface."""

    ctx.ensure_object(dict)["properties_path"] = properties_path

    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = []

    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(config_console_handler(level=level, debug_mode=debug, color=use_color))

    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    logging.basicConfig(
        level=logging.DEBUG,  # capture all levels; handlers filter
        handlers=handlers,
        force=True,
    )

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


persistkit.add_command(show_config)
persistkit.add_command(check)
