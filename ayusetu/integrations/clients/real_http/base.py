from typing import Any

from ayusetu.integrations.http_client import ApiClient


class RealHttpClientBase:
    """Live client bound to the shared ApiClient and a domain path prefix."""

    prefix = ""

    def __init__(self, api: ApiClient) -> None:
        self._api = api

    async def _call(self, method: str, path: str, error_message: str, **kwargs: Any) -> Any:
        return await self._api.request(method, f"{self.prefix}{path}", error_message=error_message, **kwargs)
