#!/usr/bin/env python3
"""
Service logger setup

Configures the root logger once per process from LoggingConfig and returns
the named service logger. Modules keep using logging.getLogger(__name__).
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig

_configured = False


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure logging for a service process.

    Args:
        service_name: Name of the logger returned to the caller
        config: Logging settings (defaults to LoggingConfig.from_env())

    Returns:
        Logger named after the service
    """
    global _configured
    config = config or LoggingConfig.from_env()

    if not _configured:
        handlers = []
        if config.enable_console:
            handlers.append(logging.StreamHandler(sys.stdout))
        if config.log_file:
            handlers.append(logging.FileHandler(config.log_file))

        logging.basicConfig(
            level=getattr(logging, config.log_level.upper(), logging.INFO),
            format=config.log_format,
            handlers=handlers or None,
        )
        logging.getLogger("httpx").setLevel(
            getattr(logging, config.httpx_log_level.upper(), logging.WARNING)
        )
        _configured = True

    return logging.getLogger(service_name)


__all__ = ["setup_service_logger"]
