#!/usr/bin/env python3
"""HTTP service identity and binding configuration"""
import os
from dataclasses import dataclass

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class ServiceConfig:
    """Where the space content service listens"""
    service_name: str = "space_content_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8260
    service_version: str = "1.0.0"

    @classmethod
    def from_env(cls) -> 'ServiceConfig':
        """Load service configuration from environment variables"""
        return cls(
            service_name=os.getenv("SERVICE_NAME", "space_content_service"),
            service_host=os.getenv("SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("SERVICE_PORT", "8260"), 8260),
            service_version=os.getenv("SERVICE_VERSION", "1.0.0"),
        )
