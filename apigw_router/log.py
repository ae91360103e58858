"""Logging setup.

The package logs through loguru and is disabled on import, as libraries
using loguru should be. Lambda entry points call ``configure_logging``
once at cold start to turn it on.
"""

import sys

from loguru import logger

from apigw_router.config import Config

PACKAGE = "apigw_router"


def configure_logging(config: Config, sink=sys.stderr) -> int:
    """Replace loguru's sinks with one configured from ``config``.

    Args:
        config: The configuration to read the level and format from.
        sink: Where to write log records.

    Returns:
        The id of the added sink.
    """
    logger.remove()
    sink_id = logger.add(
        sink,
        level=config.log_level,
        serialize=config.log_serialize,
        backtrace=config.debug,
        diagnose=config.debug,
    )
    logger.enable(PACKAGE)
    return sink_id
