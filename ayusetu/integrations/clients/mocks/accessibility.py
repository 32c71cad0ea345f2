"""
Mock Accessibility Client.

In-memory fake for languages, accessibility/offline settings, offline data
and voice commands. No network calls.
"""

import logging
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
from ayusetu.integrations.contracts.base import SuccessResponse, merge_model

from .base import MockClientBase

logger = logging.getLogger(__name__)


_MOCK_LANGUAGES: List[Language] = [
    Language(code="en", name="English", native_name="English", is_rtl=False, is_enabled=True,
             downloaded_for_offline=True),
    Language(code="hi", name="Hindi", native_name="हिंदी", is_rtl=False, is_enabled=True,
             downloaded_for_offline=True, download_size="5.2 MB"),
    Language(code="ta", name="Tamil", native_name="தமிழ்", is_rtl=False, is_enabled=True,
             downloaded_for_offline=False, download_size="4.8 MB"),
    Language(code="te", name="Telugu", native_name="తెలుగు", is_rtl=False, is_enabled=True,
             downloaded_for_offline=False, download_size="4.9 MB"),
    Language(code="bn", name="Bengali", native_name="বাংলা", is_rtl=False, is_enabled=True,
             downloaded_for_offline=False, download_size="5.1 MB"),
    Language(code="mr", name="Marathi", native_name="मराठी", is_rtl=False, is_enabled=True,
             downloaded_for_offline=False, download_size="4.7 MB"),
    Language(code="gu", name="Gujarati", native_name="ગુજરાતી", is_rtl=False, is_enabled=True,
             downloaded_for_offline=False, download_size="4.6 MB"),
]

_MOCK_OFFLINE_DATA: List[OfflineData] = [
    OfflineData(id="offline-1", type="health-record", title="Blood Test Report - Dec 2025",
                synced_at=datetime(2025, 12, 15, 10, 0), size=524288, is_available=True,
                last_accessed_at=datetime(2026, 1, 14, 15, 30)),
    OfflineData(id="offline-2", type="appointment", title="Dr. Sharma - Cardiology Follow-up",
                synced_at=datetime(2026, 1, 10, 8, 0), expires_at=datetime(2026, 1, 20, 10, 0),
                size=102400, is_available=True, last_accessed_at=datetime(2026, 1, 13, 9, 0)),
    OfflineData(id="offline-3", type="medication", title="Current Medications List",
                synced_at=datetime(2026, 1, 14, 18, 0), size=51200, is_available=True,
                last_accessed_at=datetime(2026, 1, 15, 7, 0)),
    OfflineData(id="offline-4", type="prescription", title="Prescription - Dr. Patel",
                synced_at=datetime(2025, 12, 28, 14, 30), expires_at=datetime(2026, 1, 28, 14, 30),
                size=204800, is_available=True),
    OfflineData(id="offline-5", type="lab-report", title="Lipid Profile - Jan 2026",
                synced_at=datetime(2026, 1, 5, 11, 0), size=614400, is_available=True,
                last_accessed_at=datetime(2026, 1, 6, 16, 0)),
]

_MOCK_VOICE_COMMANDS: List[VoiceCommand] = [
    VoiceCommand(id="cmd-1", command="go to health records", action="navigate:HealthRecords",
                 category="navigation",
                 examples=["open health records", "show my records", "view health data"]),
    VoiceCommand(id="cmd-2", command="book appointment", action="navigate:BookAppointment",
                 category="action",
                 examples=["make appointment", "schedule doctor visit", "book consultation"]),
    VoiceCommand(id="cmd-3", command="read last report", action="read:lastReport", category="read",
                 examples=["tell me my last report", "read recent lab results", "what was my last test"]),
    VoiceCommand(id="cmd-4", command="emergency", action="navigate:SOS", category="action",
                 examples=["help", "SOS", "call emergency"]),
    VoiceCommand(id="cmd-5", command="increase text size", action="control:textSize:increase",
                 category="control", examples=["make text bigger", "larger font", "zoom in"]),
]

_MOCK_BANDWIDTH_USAGE: List[BandwidthUsage] = [
    BandwidthUsage(date=datetime(2026, 1, 15), upload_bytes=2048000, download_bytes=15360000,
                   total_bytes=17408000, is_wifi=True),
    BandwidthUsage(date=datetime(2026, 1, 14), upload_bytes=1536000, download_bytes=12288000,
                   total_bytes=13824000, is_wifi=False),
    BandwidthUsage(date=datetime(2026, 1, 13), upload_bytes=3072000, download_bytes=20480000,
                   total_bytes=23552000, is_wifi=True),
]

_MOCK_REGIONAL_SETTINGS = RegionalSettings(
    language="en",
    date_format="DD/MM/YYYY",
    time_format="12h",
    currency="INR",
    measurement_system="metric",
    phone_number_format="+91-XXXXX-XXXXX",
)

_MOCK_TRANSLATIONS: Dict[str, str] = {
    "welcome": "स्वागत है",
    "health_records": "स्वास्थ्य रिकॉर्ड",
    "appointments": "अपॉइंटमेंट",
    "emergency": "आपातकाल",
    "settings": "सेटिंग्स",
}


class MockAccessibilityClient(MockClientBase, AccessibilityService):
    label = "ACCESSIBILITY MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        self._accessibility_settings = AccessibilitySettings()
        self._offline_settings = OfflineSettings()

    async def get_languages(self, include_offline_status: bool = False) -> List[Language]:
        return self._copy(_MOCK_LANGUAGES)

    async def update_language(self, language: str, download_for_offline: bool = False) -> SuccessResponse:
        await self._delay(0.5)
        logger.info("[%s] Language set to %s", self.label, language)
        return SuccessResponse(success=True)

    async def download_translation_pack(self, language: str) -> TranslationPack:
        await self._delay(2.0)
        return TranslationPack(
            language=language,
            version="1.0.0",
            downloaded_at=datetime.now(),
            size=5.2,
            is_available=True,
            translations=dict(_MOCK_TRANSLATIONS),
        )

    async def get_accessibility_settings(self, user_id: Optional[str] = None) -> AccessibilitySettings:
        return self._copy(self._accessibility_settings)

    async def update_accessibility_settings(self, settings: Dict[str, Any]) -> AccessibilitySettings:
        await self._delay(0.5)
        return merge_model(self._accessibility_settings, settings, "Failed to update accessibility settings")

    async def get_offline_settings(self, user_id: Optional[str] = None) -> OfflineSettings:
        return self._copy(self._offline_settings)

    async def update_offline_settings(self, settings: Dict[str, Any]) -> OfflineSettings:
        await self._delay(0.5)
        return merge_model(self._offline_settings, settings, "Failed to update offline settings")

    async def sync_offline_data(
        self, data_types: Optional[List[str]] = None, force: bool = False
    ) -> SyncStatus:
        await self._delay(3.0)
        logger.info("[%s] Offline sync completed (force=%s)", self.label, force)
        return SyncStatus(
            is_syncing=False,
            last_sync_at=datetime(2026, 1, 15, 6, 0),
            next_sync_at=datetime(2026, 1, 16, 6, 0),
            sync_progress=100,
            total_items=28,
            synced_items=28,
            failed_items=0,
            errors=[],
        )

    async def get_offline_data(
        self, data_type: Optional[str] = None, limit: Optional[int] = None
    ) -> List[OfflineData]:
        data = _MOCK_OFFLINE_DATA
        if data_type:
            data = [item for item in data if item.type == data_type]
        if limit:
            data = data[:limit]
        return self._copy(data)

    async def delete_offline_data(self, data_ids: List[str]) -> DeleteOfflineDataResult:
        await self._delay(0.5)
        return DeleteOfflineDataResult(success=True, deleted_count=len(data_ids))

    async def get_voice_commands(
        self, category: Optional[str] = None, language: Optional[str] = None
    ) -> List[VoiceCommand]:
        commands = _MOCK_VOICE_COMMANDS
        if category:
            commands = [cmd for cmd in commands if cmd.category == category]
        return self._copy(commands)

    async def execute_voice_command(self, command: str, language: Optional[str] = None) -> VoiceCommandResult:
        await self._delay(0.5)
        return VoiceCommandResult(success=True, action="navigate", message=f"Executing command: {command}")

    async def get_bandwidth_usage(
        self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None
    ) -> List[BandwidthUsage]:
        return self._copy(_MOCK_BANDWIDTH_USAGE)

    async def get_regional_settings(self) -> RegionalSettings:
        return self._copy(_MOCK_REGIONAL_SETTINGS)
