#!/usr/bin/env python3
"""Adobe Target Admin API configuration

Credentials and endpoints used by the Target API gateway. Built once at
process start and handed to the gateway constructor.
"""
import os
from dataclasses import dataclass, field

def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class TargetConfig:
    """Adobe Target tenant and OAuth client-credentials settings"""

    # ===========================================
    # Admin API (https://mc.adobe.io/{tenant})
    # ===========================================
    api_key: str = ""
    tenant_id: str = ""
    api_base_url: str = "https://mc.adobe.io"

    # ===========================================
    # IMS token (client_credentials grant)
    # ===========================================
    client_id: str = ""
    client_secret: str = field(default="", repr=False)
    api_scope: str = ""
    ims_token_url: str = "https://ims-na1.adobelogin.com/ims/token/v3"

    # HTTP client timeout in seconds
    timeout: float = 30.0

    @property
    def tenant_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/{self.tenant_id}"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.tenant_id and self.client_id and self.client_secret)

    @classmethod
    def from_env(cls) -> 'TargetConfig':
        """Load Target configuration from environment variables"""
        return cls(
            api_key=os.getenv("API_KEY", ""),
            tenant_id=os.getenv("TENANT_ID", ""),
            api_base_url=os.getenv("TARGET_API_BASE_URL", "https://mc.adobe.io"),
            client_id=os.getenv("CLIENT_ID", ""),
            client_secret=os.getenv("CLIENT_SECRET", ""),
            api_scope=os.getenv("API_SCOPE", ""),
            ims_token_url=os.getenv("IMS_TOKEN_URL", "https://ims-na1.adobelogin.com/ims/token/v3"),
            timeout=_float(os.getenv("TARGET_API_TIMEOUT", "30"), 30.0),
        )
