"""
Integrations layer.

This package contains all code used to talk to the outside world:
- ABDM gateway (ABHA registration, login, account and PHR address)
- AyuSetu backend domains (appointments, emergency, insurance, records, ...)

Key rule:
- App code MUST NOT call httpx directly.
- It calls the domain services built by ``build_services``.
- We use MOCK clients in developer mode and REAL_HTTP clients against the
  sandbox or production gateway.

Switching implementations:
- The selection of mock vs real clients happens in ONE place
  (ayusetu/integrations/factory.py), driven by ``AyuSetuConfig.developer_mode``.
"""

from .errors import ServiceError
from .factory import AyuSetuServices, build_services
from .http_client import ApiClient

__all__ = ["ApiClient", "AyuSetuServices", "ServiceError", "build_services"]
