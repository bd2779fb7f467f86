"""Configuration source for PERSISTKIT.

Loads the Java-style ``.properties`` file once at startup and exposes it as a
read-only mapping. Recognized keys may be overridden from the environment: the
variable name is the key upper-cased with dots replaced by underscores
(``db.url`` -> ``DB_URL``).

A missing file is not an error; every key is optional at this layer and the
builders decide what an absent key means.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping
from pathlib import Path

import javaproperties

logger = logging.getLogger(__name__)

CONFIG_PATH_ENVVAR = "PERSISTKIT_CONFIG"  # pragma: no mutate
DEFAULT_CONFIG_FILE = "application.properties"  # pragma: no mutate

DB_DRIVER_CLASS = "db.driver.class"
DB_URL = "db.url"
DB_USERNAME = "db.username"
DB_PASSWORD = "db.password"

POOL_INITIAL_SIZE = "dbcp.initial.size"
POOL_MAX_IDLE = "dbcp.max.idle"
POOL_MAX_TOTAL = "dbcp.max.total"
POOL_MIN_IDLE = "dbcp.min.idle"

SCHEMA_GENERATION_MODE = "hibernate.hbm2ddl.auto"
DIALECT = "hibernate.dialect"
USE_SECOND_LEVEL_CACHE = "hibernate.cache.use_second_level_cache"
USE_QUERY_CACHE = "hibernate.cache.use_query_cache"

PACKAGES_TO_SCAN = "persistence.packages.scan"

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

#: Keys forwarded verbatim into the persistence factory's properties bag.
FORWARDED_PROPERTY_KEYS = (
    SCHEMA_GENERATION_MODE,
    DIALECT,
    USE_SECOND_LEVEL_CACHE,
    USE_QUERY_CACHE,
)

RECOGNIZED_KEYS = (
    DB_DRIVER_CLASS,
    DB_URL,
    DB_USERNAME,
    DB_PASSWORD,
    POOL_INITIAL_SIZE,
    POOL_MAX_IDLE,
    POOL_MAX_TOTAL,
    POOL_MIN_IDLE,
    *FORWARDED_PROPERTY_KEYS,
    PACKAGES_TO_SCAN,
)


class ConfigurationParseError(ValueError):
    """Raised when a configuration value is present but cannot be parsed."""

    def __init__(self, key: str, value: str, expected: str = "an integer") -> None:
        self.key = key
        self.value = value
        super().__init__(f"Configuration key {key!r} must be {expected}, got {value!r}")


def env_var_name(key: str) -> str:
    """Return the environment variable that overrides *key*.

    Examples:
        >>> env_var_name("dbcp.max.total")
        'DBCP_MAX_TOTAL'
    """
    return key.upper().replace(".", "_")


class ConfigurationSource(Mapping[str, str]):
    """Read-only, ordered mapping of configuration keys to string values."""

    def __init__(self, values: Mapping[str, str] | None = None, origin: str = "<memory>"):
        self._values: dict[str, str] = dict(values or {})
        self.origin = origin

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ConfigurationSource(origin={self.origin!r}, keys={list(self._values)!r})"

    def get_int(self, key: str, default: int) -> int:
        """Parse *key* as a base-10 integer, falling back to *default* when absent.

        Args:
            key: Configuration key to read.
            default: Value used when the key is not present.

        Returns:
            The parsed integer, or *default*.

        Raises:
            ConfigurationParseError: If the key is present but not an integer.
        """
        if (raw := self._values.get(key)) is None:
            return default
        digits = raw.strip()
        # Plain decimal only; Python extras such as `1_000` are not integers here.
        if not INTEGER_PATTERN.fullmatch(digits):
            raise ConfigurationParseError(key, raw)
        return int(digits, 10)


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the properties file to read.

    An explicit *path* wins, then ``PERSISTKIT_CONFIG``, then
    ``application.properties`` in the working directory.
    """
    if path is not None:
        return Path(path)
    if env_path := os.environ.get(CONFIG_PATH_ENVVAR):
        return Path(env_path)
    return Path.cwd() / DEFAULT_CONFIG_FILE


def load_configuration(
    path: str | Path | None = None, environ: Mapping[str, str] | None = None
) -> ConfigurationSource:
    """Load the configuration source once, applying environment overrides.

    Args:
        path: Properties file to read. See `resolve_config_path` for the
            fallback order when omitted.
        environ: Environment to read overrides from. Defaults to ``os.environ``.

    Returns:
        A read-only `ConfigurationSource`.
    """
    environ = os.environ if environ is None else environ
    config_path = resolve_config_path(path)

    values: dict[str, str] = {}
    if config_path.is_file():
        with config_path.open(encoding="utf-8") as fp:
            values.update(javaproperties.load(fp))
        logger.debug("Loaded %d key(s) from %s", len(values), config_path)
    else:
        logger.debug("Configuration file %s not found; continuing without it", config_path)

    for key in RECOGNIZED_KEYS:
        if (override := environ.get(env_var_name(key))) is not None:
            values[key] = override
            logger.debug("Key %s overridden from environment", key)

    return ConfigurationSource(values, origin=str(config_path))
