from datetime import datetime
from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.accessibility import (
    AccessibilityService,
    AccessibilitySettings,
    BandwidthUsage,
    DeleteOfflineDataResult,
    Language,
    OfflineData,
    OfflineSettings,
    RegionalSettings,
    SyncStatus,
    TranslationPack,
    VoiceCommand,
    VoiceCommandResult,
)
from ayusetu.integrations.contracts.base import SuccessResponse, wire_updates
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealAccessibilityClient(RealHttpClientBase, AccessibilityService):
    prefix = "/accessibility"

    async def get_languages(self, include_offline_status: bool = False) -> List[Language]:
        msg = "Failed to fetch languages"
        params = {"includeOfflineStatus": True} if include_offline_status else None
        data = await self._call("GET", "/languages", msg, params=params)
        return build_model_list(Language, data, msg)

    async def update_language(self, language: str, download_for_offline: bool = False) -> SuccessResponse:
        msg = "Failed to update language"
        body = {"language": language, "downloadForOffline": download_for_offline}
        data = await self._call("PUT", "/language", msg, json=body)
        return build_model(SuccessResponse, data, msg)

    async def download_translation_pack(self, language: str) -> TranslationPack:
        msg = "Failed to download translation pack"
        data = await self._call("POST", "/download-translation", msg, json={"language": language})
        return build_model(TranslationPack, data, msg)

    async def get_accessibility_settings(self, user_id: Optional[str] = None) -> AccessibilitySettings:
        msg = "Failed to fetch accessibility settings"
        data = await self._call("GET", "/settings", msg, params={"userId": user_id})
        return build_model(AccessibilitySettings, data, msg)

    async def update_accessibility_settings(self, settings: Dict[str, Any]) -> AccessibilitySettings:
        msg = "Failed to update accessibility settings"
        body = {"settings": wire_updates(AccessibilitySettings, settings)}
        data = await self._call("PUT", "/settings", msg, json=body)
        return build_model(AccessibilitySettings, data, msg)

    async def get_offline_settings(self, user_id: Optional[str] = None) -> OfflineSettings:
        msg = "Failed to fetch offline settings"
        data = await self._call("GET", "/offline-settings", msg, params={"userId": user_id})
        return build_model(OfflineSettings, data, msg)

    async def update_offline_settings(self, settings: Dict[str, Any]) -> OfflineSettings:
        msg = "Failed to update offline settings"
        body = {"settings": wire_updates(OfflineSettings, settings)}
        data = await self._call("PUT", "/offline-settings", msg, json=body)
        return build_model(OfflineSettings, data, msg)

    async def sync_offline_data(
        self, data_types: Optional[List[str]] = None, force: bool = False
    ) -> SyncStatus:
        msg = "Failed to sync offline data"
        body: Dict[str, Any] = {"force": force}
        if data_types:
            body["dataTypes"] = data_types
        data = await self._call("POST", "/sync", msg, json=body)
        return build_model(SyncStatus, data, msg)

    async def get_offline_data(
        self, data_type: Optional[str] = None, limit: Optional[int] = None
    ) -> List[OfflineData]:
        msg = "Failed to fetch offline data"
        data = await self._call("GET", "/offline-data", msg, params={"type": data_type, "limit": limit})
        return build_model_list(OfflineData, data, msg)

    async def delete_offline_data(self, data_ids: List[str]) -> DeleteOfflineDataResult:
        msg = "Failed to delete offline data"
        data = await self._call("DELETE", "/offline-data", msg, json={"dataIds": data_ids})
        return build_model(DeleteOfflineDataResult, data, msg)

    async def get_voice_commands(
        self, category: Optional[str] = None, language: Optional[str] = None
    ) -> List[VoiceCommand]:
        msg = "Failed to fetch voice commands"
        data = await self._call(
            "GET", "/voice-commands", msg, params={"category": category, "language": language}
        )
        return build_model_list(VoiceCommand, data, msg)

    async def execute_voice_command(self, command: str, language: Optional[str] = None) -> VoiceCommandResult:
        msg = "Failed to execute voice command"
        body = {"command": command}
        if language:
            body["language"] = language
        data = await self._call("POST", "/execute-voice-command", msg, json=body)
        return build_model(VoiceCommandResult, data, msg)

    async def get_bandwidth_usage(
        self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None
    ) -> List[BandwidthUsage]:
        msg = "Failed to fetch bandwidth usage"
        params = {
            "startDate": start_date.isoformat() if start_date else None,
            "endDate": end_date.isoformat() if end_date else None,
        }
        data = await self._call("GET", "/bandwidth-usage", msg, params=params)
        return build_model_list(BandwidthUsage, data, msg)

    async def get_regional_settings(self) -> RegionalSettings:
        msg = "Failed to fetch regional settings"
        data = await self._call("GET", "/regional-settings", msg)
        return build_model(RegionalSettings, data, msg)
