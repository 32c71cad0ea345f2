"""
Runtime configuration for the AyuSetu service layer.

The config object is passed explicitly into ``build_services``; nothing in the
package reads a global developer-mode flag.
"""

import os
import logging
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

SANDBOX_URL = "https://healthidsbx.abdm.gov.in/api"
PRODUCTION_URL = "https://healthid.abdm.gov.in/api"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


class AyuSetuConfig(BaseModel):
    """ABDM environment, credentials and developer-mode fixtures"""

    developer_mode: bool = True
    environment: Literal["sandbox", "production"] = "sandbox"
    sandbox_url: str = SANDBOX_URL
    production_url: str = PRODUCTION_URL

    client_id: str = ""
    client_secret: str = ""

    timeout_seconds: float = Field(default=30.0, gt=0)
    # Multiplier applied to every artificial mock delay (0 disables them)
    mock_delay_scale: float = Field(default=1.0, ge=0.0)

    dev_abha_number: str = "12-3456-7890-1234"
    dev_abha_address: str = "developer@abdm"
    dev_mobile: str = "9876543210"
    dev_aadhaar: str = "123456789012"

    @property
    def base_url(self) -> str:
        if self.environment == "production":
            return self.production_url
        return self.sandbox_url

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "AyuSetuConfig":
        """
        Build a config from environment variables (and a .env file if present).

        Recognised variables:
            AYUSETU_DEVELOPER_MODE, ABDM_ENVIRONMENT, ABDM_CLIENT_ID,
            ABDM_CLIENT_SECRET, AYUSETU_HTTP_TIMEOUT, AYUSETU_MOCK_DELAY_SCALE

        Keyword overrides win over the environment.
        """
        load_dotenv(dotenv_path)

        values = {
            "developer_mode": _env_bool("AYUSETU_DEVELOPER_MODE", True),
            "environment": os.getenv("ABDM_ENVIRONMENT", "sandbox").strip().lower() or "sandbox",
            "client_id": os.getenv("ABDM_CLIENT_ID", ""),
            "client_secret": os.getenv("ABDM_CLIENT_SECRET", ""),
            "timeout_seconds": _env_float("AYUSETU_HTTP_TIMEOUT", 30.0),
            "mock_delay_scale": _env_float("AYUSETU_MOCK_DELAY_SCALE", 1.0),
        }
        values.update(overrides)
        config = cls(**values)
        logger.info(
            "AyuSetu config loaded from environment (developer_mode=%s, environment=%s)",
            config.developer_mode,
            config.environment,
        )
        return config
