"""Process-wide logging setup."""
import logging

from core.config import Settings

VERBOSE_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
TERSE_FORMAT = "%(levelname)s %(message)s"


def configure_logging(settings: Settings) -> None:
    """
    Configure the root logger from settings.

    Production gets a terse single-line format; every other environment gets
    timestamps and logger names. Calling this more than once is harmless,
    `basicConfig` leaves an already configured root logger alone.
    """
    logging.basicConfig(
        level=settings.log_level.upper(),
        format=TERSE_FORMAT if settings.is_production else VERBOSE_FORMAT,
    )
