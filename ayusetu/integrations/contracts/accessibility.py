"""
Contracts for localization, accessibility, offline mode and voice navigation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel, SuccessResponse

LanguageCode = Literal["en", "hi", "ta", "te", "bn", "mr", "gu", "kn", "ml", "pa", "or"]
TextSize = Literal["small", "medium", "large", "extra-large"]
ThemeMode = Literal["light", "dark", "high-contrast", "elder-friendly"]
BandwidthMode = Literal["auto", "low", "medium", "high"]
VoiceGender = Literal["male", "female"]
VoiceSpeed = Literal["slow", "normal", "fast"]
OfflineDataType = Literal["health-record", "appointment", "medication", "lab-report", "prescription", "consent"]
VoiceCommandCategory = Literal["navigation", "action", "read", "control"]


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Language(ApiModel):
    code: LanguageCode
    name: str
    native_name: str
    is_rtl: bool = Field(alias="isRTL")
    is_enabled: bool
    downloaded_for_offline: bool
    download_size: Optional[str] = None


class AccessibilitySettings(ApiModel):
    # Text & display
    text_size: TextSize = "medium"
    theme_mode: ThemeMode = "light"
    high_contrast: bool = False
    bold_text: bool = False
    reduced_motion: bool = False
    # Voice & audio
    voice_navigation_enabled: bool = False
    voice_gender: VoiceGender = "female"
    voice_speed: VoiceSpeed = "normal"
    screen_reader_enabled: bool = False
    audio_feedback_enabled: bool = True
    # Elder-friendly
    elderly_mode: bool = False
    simplified_navigation: bool = False
    larger_touch_targets: bool = False
    confirmation_dialogs: bool = True
    # Input assistance
    auto_correct_disabled: bool = False
    keyboard_prediction: bool = True
    voice_input_enabled: bool = True
    # Visual assistance
    color_blind_mode: bool = False
    reduce_transparency: bool = False
    button_shapes: bool = False
    # Regional
    preferred_language: LanguageCode = "en"
    secondary_language: Optional[LanguageCode] = None


class OfflineSettings(ApiModel):
    offline_mode_enabled: bool = True
    auto_sync_enabled: bool = True
    sync_frequency: Literal["hourly", "daily", "weekly", "manual"] = "daily"
    wifi_only_sync: bool = True
    sync_health_records: bool = True
    sync_appointments: bool = True
    sync_medications: bool = True
    sync_lab_reports: bool = True
    sync_prescriptions: bool = True
    bandwidth_mode: BandwidthMode = "auto"
    compress_images: bool = True
    download_high_quality: bool = False
    stream_videos: bool = False
    cache_size: int = 256  # MB
    max_cache_size: int = 512
    auto_delete_old_data: bool = True
    data_retention_days: int = 30


class OfflineData(ApiModel):
    id: str
    type: OfflineDataType
    title: str
    synced_at: datetime
    expires_at: Optional[datetime] = None
    size: int  # bytes
    is_available: bool
    last_accessed_at: Optional[datetime] = None


class SyncStatus(ApiModel):
    is_syncing: bool
    last_sync_at: Optional[datetime] = None
    next_sync_at: Optional[datetime] = None
    sync_progress: int = Field(ge=0, le=100)
    total_items: int
    synced_items: int
    failed_items: int
    errors: List[str] = Field(default_factory=list)


class VoiceCommand(ApiModel):
    id: str
    command: str
    action: str
    category: VoiceCommandCategory
    examples: List[str] = Field(default_factory=list)


class VoiceCommandResult(ApiModel):
    success: bool
    action: str
    message: str


class TranslationPack(ApiModel):
    language: LanguageCode
    version: str
    downloaded_at: Optional[datetime] = None
    size: float  # MB
    is_available: bool
    translations: Dict[str, str] = Field(default_factory=dict)


class BandwidthUsage(ApiModel):
    date: datetime
    upload_bytes: int
    download_bytes: int
    total_bytes: int
    is_wifi: bool


class RegionalSettings(ApiModel):
    language: LanguageCode
    date_format: Literal["DD/MM/YYYY", "MM/DD/YYYY", "YYYY-MM-DD"]
    time_format: Literal["12h", "24h"]
    currency: Literal["INR", "USD"]
    measurement_system: Literal["metric", "imperial"]
    phone_number_format: str


class DeleteOfflineDataResult(ApiModel):
    success: bool
    deleted_count: int


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class AccessibilityService(ABC):

    @abstractmethod
    async def get_languages(self, include_offline_status: bool = False) -> List[Language]:
        """List supported UI languages."""

    @abstractmethod
    async def update_language(self, language: str, download_for_offline: bool = False) -> SuccessResponse:
        """Switch the user's UI language."""

    @abstractmethod
    async def download_translation_pack(self, language: str) -> TranslationPack:
        """Fetch a language pack for offline use."""

    @abstractmethod
    async def get_accessibility_settings(self, user_id: Optional[str] = None) -> AccessibilitySettings:
        ...

    @abstractmethod
    async def update_accessibility_settings(self, settings: Dict[str, Any]) -> AccessibilitySettings:
        """Apply a partial settings update and return the merged result."""

    @abstractmethod
    async def get_offline_settings(self, user_id: Optional[str] = None) -> OfflineSettings:
        ...

    @abstractmethod
    async def update_offline_settings(self, settings: Dict[str, Any]) -> OfflineSettings:
        """Apply a partial offline settings update and return the merged result."""

    @abstractmethod
    async def sync_offline_data(
        self, data_types: Optional[List[str]] = None, force: bool = False
    ) -> SyncStatus:
        ...

    @abstractmethod
    async def get_offline_data(
        self, data_type: Optional[str] = None, limit: Optional[int] = None
    ) -> List[OfflineData]:
        """Items cached on the device, optionally filtered by type and truncated to ``limit``."""

    @abstractmethod
    async def delete_offline_data(self, data_ids: List[str]) -> DeleteOfflineDataResult:
        ...

    @abstractmethod
    async def get_voice_commands(
        self, category: Optional[str] = None, language: Optional[str] = None
    ) -> List[VoiceCommand]:
        ...

    @abstractmethod
    async def execute_voice_command(self, command: str, language: Optional[str] = None) -> VoiceCommandResult:
        ...

    @abstractmethod
    async def get_bandwidth_usage(
        self, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None
    ) -> List[BandwidthUsage]:
        ...

    @abstractmethod
    async def get_regional_settings(self) -> RegionalSettings:
        ...
