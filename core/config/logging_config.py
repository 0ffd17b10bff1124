#!/usr/bin/env python3
"""Logging configuration

Read by core.logger.setup_service_logger at process start.
"""
import os
from dataclasses import dataclass

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class LoggingConfig:
    """Log level, format and sinks of a service process"""
    log_level: str = "INFO"
    log_format: str = DEFAULT_FORMAT
    log_file: str = ""
    enable_console: bool = True

    # httpx logs one INFO line per Target request
    httpx_log_level: str = "WARNING"

    # Elapsed time of each space request
    log_request_timing: bool = True

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
            log_format=os.getenv("LOG_FORMAT", DEFAULT_FORMAT),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=_bool(os.getenv("LOG_CONSOLE", "true")),
            httpx_log_level=os.getenv("HTTPX_LOG_LEVEL", "WARNING"),
            log_request_timing=_bool(os.getenv("LOG_REQUEST_TIMING", "true")),
        )
