"""
Logging for chronoscharts.

Everything logs under the ``chronoscharts`` logger hierarchy
(``chronoscharts.analytics.periods``, ``chronoscharts.chart.scales``, ...):

- DEBUG: one line per computation pass, e.g. the number of period buckets
  built by aggregate_by_period(), the visible window and tick count chosen
  by build_x_scale(), the datasets built for a series chart, the size of a
  chart layout.
- WARNING: tolerant config loaders (ChartSettings, ChartOptions,
  SummaryConfig ``from_dict``) dropping an unknown key or replacing an
  invalid value with its default.

Nothing is logged per data point, and no log file is written. The package
installs a NullHandler, so a host application's own logging config decides
where these records go. Scripts that want console output call::

    from chronoscharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")   # or set CHRONOSCHARTS_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

LOGGER_NAME = "chronoscharts"
LOG_LEVEL_ENV_VAR = "CHRONOSCHARTS_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Configure logging for the chronoscharts logger only (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        CHRONOSCHARTS_LOG_LEVEL env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to "%Y-%m-%d %H:%M:%S".
    force:
        If True, remove existing handlers before adding a new one. If False,
        do nothing when a stderr handler is already attached.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    formatter = logging.Formatter(
        fmt=fmt if fmt is not None else DEFAULT_FMT,
        datefmt=datefmt if datefmt is not None else DEFAULT_DATEFMT,
    )

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                return

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger by name.

    If name is None, returns the 'chronoscharts' logger.
    """
    if name is None:
        name = LOGGER_NAME
    return logging.getLogger(name)
