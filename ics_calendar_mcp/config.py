# Copyright 2025 ics-calendar-mcp Contributors. All Rights Reserved.
#
# Licensed under the MIT License.

"""Environment-driven configuration for the ICS calendar server.

Settings are read from the process environment, after loading a ``.env``
file from the working directory if one exists:

- ``ICS_URL``: calendar feed URL (required)
- ``ICS_FETCH_TIMEOUT``: HTTP timeout in seconds (default: 30)
- ``ICS_QUIET``: set to 1/true/yes to silence informational logging
"""

import locale
import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_FETCH_TIMEOUT = 30.0
TRUTHY_VALUES = ('1', 'true', 'yes')

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the process environment cannot produce valid settings."""


def is_quiet(environ: Optional[Mapping[str, str]] = None) -> bool:
    """Return True when ICS_QUIET asks for reduced log output."""
    environ = os.environ if environ is None else environ
    return environ.get('ICS_QUIET', '').lower() in TRUTHY_VALUES


@dataclass(frozen=True)
class Settings:
    """Resolved server settings"""
    ics_url: str
    fetch_timeout: float = DEFAULT_FETCH_TIMEOUT
    quiet: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from an environment mapping (defaults to os.environ)."""
        environ = os.environ if environ is None else environ

        ics_url = environ.get('ICS_URL', '').strip()
        if not ics_url:
            raise ConfigurationError("ICS_URL is not set. Please configure it in .env")

        raw_timeout = environ.get('ICS_FETCH_TIMEOUT', '').strip()
        if raw_timeout:
            try:
                fetch_timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"ICS_FETCH_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                ) from None
            if fetch_timeout <= 0:
                raise ConfigurationError(
                    f"ICS_FETCH_TIMEOUT must be positive, got {raw_timeout!r}"
                )
        else:
            fetch_timeout = DEFAULT_FETCH_TIMEOUT

        return cls(ics_url=ics_url, fetch_timeout=fetch_timeout, quiet=is_quiet(environ))


def load_settings() -> Settings:
    """Load ``.env`` into the environment and resolve settings from it."""
    load_dotenv()
    return Settings.from_env()


def apply_host_locale():
    """Use the environment's LC_TIME so weekday names follow the host locale"""
    try:
        locale.setlocale(locale.LC_TIME, '')
    except locale.Error as e:
        logger.warning("Falling back to the C locale for dates: %s", e)
