#!/usr/bin/env python3
"""Modular configuration system for the space content service

Configuration hierarchy:
- logging_config: Logging configuration
- service_config: HTTP service identity and binding
- target_config: Adobe Target tenant, API key and OAuth credentials
"""
import os
from dataclasses import dataclass, field
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .service_config import ServiceConfig
from .target_config import TargetConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)


@dataclass
class SpaceSettings:
    """All settings for one service process"""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    target: TargetConfig = field(default_factory=TargetConfig)

    @classmethod
    def from_env(cls) -> 'SpaceSettings':
        return cls(
            logging=LoggingConfig.from_env(),
            service=ServiceConfig.from_env(),
            target=TargetConfig.from_env(),
        )


# Create global settings instance
settings = SpaceSettings.from_env()

def get_settings() -> SpaceSettings:
    """Get global settings instance"""
    return settings


__all__ = [
    'SpaceSettings',
    'get_settings',
    'settings',
    'LoggingConfig',
    'ServiceConfig',
    'TargetConfig',
]
