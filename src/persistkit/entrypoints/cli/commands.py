"""``persistkit config`` and ``persistkit check``.

Human-oriented notices go to **stderr**; the report itself goes to stdout.

Failure modes
- Non-numeric pool sizing value → ``ClickException`` naming the key.
- Malformed URL, unknown driver or unreachable database → ``ClickException``
  with guidance; the original error is chained.
- Dialect or schema-mode problems → ``ClickException`` with the reason.
- Missing DBAPI package or unimportable scanned package → ``ClickException``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, OperationalError

from persistkit import bootstrap as bootstrap_pkg
from persistkit import config
from persistkit.adapters.db.dialects import UnsupportedDialect
from persistkit.adapters.db.schema import SchemaValidationError, UnsupportedSchemaMode
from persistkit.interfaces.vendor_adapter import DialectMismatchError

from .helpers import error, sanitize_url, success, warn

if TYPE_CHECKING:
    from persistkit.bootstrap import PersistenceContainer

UNSET = "<unset>"  # pragma: no mutate
REDACTED = "***"  # pragma: no mutate

INVALID_URL_MSG = (
    "The value of db.url is not a valid SQLAlchemy database URL.\n"
    "Example: db.url=postgresql+psycopg://localhost:5432/app"
)

UNKNOWN_DRIVER_MSG = (
    "The database driver could not be loaded.\n"
    "Check db.driver.class and db.url, and that the DBAPI package is installed."
)

CANNOT_CONNECT_MSG = (
    "The database is not reachable.\n"
    "Please ensure the database is running and the db.* settings are correct."
)

MISSING_MODULE_MSG = (
    "Check that the DBAPI package is installed and that every module listed in "
    f"{config.PACKAGES_TO_SCAN} is importable."
)


def _properties_path(ctx: click.Context):
    return (ctx.obj or {}).get("properties_path")


def _display_value(key: str, value: str | None) -> str:
    if value is None:
        return UNSET
    if key == config.DB_PASSWORD:
        return REDACTED if value else ""
    if key == config.DB_URL:
        try:
            return sanitize_url(value)
        except ArgumentError:
            return value
    return value


@click.command("config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the resolved configuration (password redacted)."""
    source = config.load_configuration(_properties_path(ctx))
    click.echo(f"# source: {source.origin}")
    for key in config.RECOGNIZED_KEYS:
        click.echo(f"{key} = {_display_value(key, source.get(key))}")


def _bootstrap(ctx: click.Context) -> PersistenceContainer:
    try:
        return bootstrap_pkg.bootstrap(config_path=_properties_path(ctx))
    except config.ConfigurationParseError as e:
        raise click.ClickException(str(e)) from e
    except NoSuchModuleError as e:
        raise click.ClickException(UNKNOWN_DRIVER_MSG) from e
    except ArgumentError as e:
        raise click.ClickException(INVALID_URL_MSG) from e
    except OperationalError as e:
        raise click.ClickException(CANNOT_CONNECT_MSG) from e
    except ImportError as e:
        raise click.ClickException(f"{e}\n{MISSING_MODULE_MSG}") from e
    except (
        UnsupportedDialect,
        DialectMismatchError,
        UnsupportedSchemaMode,
        SchemaValidationError,
    ) as e:
        raise click.ClickException(str(e)) from e


@click.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Bootstrap the persistence stack and run a probe query."""
    container = _bootstrap(ctx)
    with container:
        try:
            with container.transaction_manager.transaction() as session:
                session.execute(text("SELECT 1")).scalar_one()  # pragma: no mutate
        except OperationalError as e:
            error("Probe query failed")
            raise click.ClickException(CANNOT_CONNECT_MSG) from e

        pool = container.data_source
        factory = container.persistence_factory
        success("Persistence stack ready")
        click.echo(f"Backend : {pool.engine.dialect.name}")
        click.echo(f"URL     : {sanitize_url(pool.engine.url)}")
        click.echo(
            f"Pool    : {type(pool.engine.pool).__name__} "
            f"(initial={pool.initial_size}, max_idle={pool.max_idle}, "
            f"max_total={pool.max_total}, min_idle={pool.min_idle})"
        )
        click.echo(f"Dialect : {factory.vendor_adapter.dialect}")
        click.echo(f"Schema  : {factory.schema_mode.value}")
        click.echo(f"Tables  : {len(factory.metadata.tables)}")

        if factory.schema_mode.drops_on_close:
            warn("Schema mode is create-drop; mapped tables are dropped on exit.")
