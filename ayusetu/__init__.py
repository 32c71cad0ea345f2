"""
AyuSetu client service layer.

Async clients for the ABDM-backed AyuSetu health app. Every domain service
has an in-memory fake for developer mode and a live httpx client; pick one
with ``build_services(config)``.
"""

from .config import AyuSetuConfig
from .integrations import AyuSetuServices, ServiceError, build_services

__all__ = ["AyuSetuConfig", "AyuSetuServices", "ServiceError", "build_services"]
