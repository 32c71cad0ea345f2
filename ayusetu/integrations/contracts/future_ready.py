"""
Contracts for the future-ready features: the AI health assistant, wearable
integration, predictive insights and telemedicine.

Every AI answer carries ``AI_HEALTH_DISCLAIMER``; insights are informational
and never a diagnosis.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

AiInsightType = Literal["general", "trend", "recommendation", "alert", "educational"]
InsightPriority = Literal["low", "medium", "high", "urgent"]
WearableDeviceType = Literal[
    "fitness_tracker",
    "smartwatch",
    "blood_pressure_monitor",
    "glucose_monitor",
    "heart_rate_monitor",
    "sleep_tracker",
    "smart_scale",
]
WearableDataType = Literal[
    "steps",
    "heart_rate",
    "blood_pressure",
    "blood_glucose",
    "sleep",
    "weight",
    "calories",
    "activity",
    "oxygen_saturation",
]
PredictionCategory = Literal["cardiovascular", "diabetes", "respiratory", "mental_health", "lifestyle", "preventive"]
PredictionRisk = Literal["low", "moderate", "high", "very_high"]
ConsultationStatus = Literal["scheduled", "in_progress", "completed", "cancelled", "no_show"]
ConsultationType = Literal["video", "audio", "chat"]
Trend = Literal["improving", "stable", "declining"]

AI_HEALTH_DISCLAIMER = """
IMPORTANT DISCLAIMER:

This AI health assistant provides informational insights only and is NOT a substitute for professional medical \
advice, diagnosis, or treatment.

- AI insights are based on patterns in your data and may not be accurate
- Always consult qualified healthcare professionals for medical decisions
- In case of emergency, call emergency services immediately
- Do not use AI insights to self-diagnose or self-treat
- The AI does not have access to your complete medical history

By using this feature, you acknowledge that this is an educational tool and not medical advice.
"""

TELEMEDICINE_DISCLAIMER = """
TELEMEDICINE DISCLAIMER:

- Telemedicine consultations are for non-emergency conditions only
- In case of emergency, call emergency services (108/112) immediately
- Video/audio quality may affect diagnosis accuracy
- Doctor's recommendations are based on information provided by you
- Follow-up in-person visits may be required
- All consultations are ABDM compliant and encrypted
"""


# AI assistant

class InsightDateRange(ApiModel):
    start: str
    end: str


class InsightData(ApiModel):
    vital_type: Optional[str] = None
    value: Optional[float] = None
    trend: Optional[Literal["increasing", "decreasing", "stable"]] = None
    date_range: Optional[InsightDateRange] = None


class AiInsight(ApiModel):
    id: str
    type: AiInsightType
    priority: InsightPriority
    title: str
    description: str
    generated_at: str
    related_data: Optional[InsightData] = None
    recommendation: Optional[str] = None
    action_items: Optional[List[str]] = None
    disclaimer_shown: bool


class AiQuery(ApiModel):
    question: str
    context: Optional[Dict[str, Any]] = None


class AiResponse(ApiModel):
    id: str
    query: str
    answer: str
    confidence: float  # 0-1
    sources: Optional[List[str]] = None
    related_insights: Optional[List[str]] = None
    disclaimer: str
    timestamp: str


class TrendPoint(ApiModel):
    date: str
    value: float


class HealthTrendAnalysis(ApiModel):
    metric: str
    current_value: float
    average_value: float
    trend: Trend
    change_percentage: float
    data_points: List[TrendPoint] = Field(default_factory=list)
    insights: List[str] = Field(default_factory=list)


# Wearables

class WearableDevice(ApiModel):
    id: str
    name: str
    type: WearableDeviceType
    manufacturer: str
    model: str
    is_connected: bool
    last_synced_at: Optional[str] = None
    battery_level: Optional[int] = None
    supported_data_types: List[WearableDataType] = Field(default_factory=list)


class SyncResult(ApiModel):
    success: bool
    data_points_synced: int


class HeartRateZones(ApiModel):
    resting: int
    fat_burn: int = Field(alias="fat_burn")
    cardio: int
    peak: int


class ActivitySummary(ApiModel):
    date: str
    steps: int
    calories_burned: int
    active_minutes: int
    distance: float  # km
    floors: Optional[int] = None
    heart_rate_zones: Optional[HeartRateZones] = None


class SleepSummary(ApiModel):
    date: str
    total_sleep_time: int  # minutes
    deep_sleep: int
    light_sleep: int
    rem_sleep: int
    awake_time: int
    sleep_quality: int  # 0-100
    bedtime: str
    wakeup_time: str


# Predictive insights

class PredictiveInsight(ApiModel):
    id: str
    category: PredictionCategory
    title: str
    description: str
    risk_level: PredictionRisk
    probability: float  # 0-1
    timeframe: str
    based_on: List[str] = Field(default_factory=list)
    preventive_actions: List[str] = Field(default_factory=list)
    generated_at: str
    confidence: float  # 0-1


class RiskContribution(ApiModel):
    name: str
    contribution: float  # percent
    value: str
    is_modifiable: bool


class RiskAssessment(ApiModel):
    category: PredictionCategory
    risk_level: PredictionRisk
    risk_score: int  # 0-100
    factors: List[RiskContribution] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    estimated_impact: Optional[str] = None


class HealthScoreCategories(ApiModel):
    cardiovascular: int
    metabolic: int
    fitness: int
    sleep: int
    stress: int
    nutrition: int


class HealthScore(ApiModel):
    overall: int  # 0-100
    categories: HealthScoreCategories
    trend: Trend
    last_calculated: str


class RecommendationResource(ApiModel):
    type: Literal["article", "video", "app", "service"]
    title: str
    url: Optional[str] = None


class PersonalizedRecommendation(ApiModel):
    id: str
    category: str
    title: str
    description: str
    priority: InsightPriority
    expected_benefit: str
    difficulty: Literal["easy", "moderate", "challenging"]
    time_commitment: str
    resources: Optional[List[RecommendationResource]] = None


# Telemedicine

class DaySlots(ApiModel):
    date: str
    slots: List[str] = Field(default_factory=list)


class TelemedicineDoctor(ApiModel):
    id: str
    name: str
    specialization: str
    qualifications: List[str] = Field(default_factory=list)
    experience: int  # years
    rating: float
    review_count: int
    languages: List[str] = Field(default_factory=list)
    consultation_fee: float
    available_slots: Optional[List[DaySlots]] = None
    is_abdm_verified: bool = Field(alias="isABDMVerified")
    profile_picture: Optional[str] = None
    hospital: Optional[str] = None


class PrescribedMedication(ApiModel):
    name: str
    dosage: str
    frequency: str
    duration: str


class TeleconsultPrescription(ApiModel):
    id: str
    medications: List[PrescribedMedication] = Field(default_factory=list)
    advice: str


class TelemedicineConsultation(ApiModel):
    id: str
    doctor_id: str
    patient_id: str
    status: ConsultationStatus
    type: ConsultationType
    scheduled_date: str
    scheduled_time: str
    duration: int  # minutes
    fee: float
    symptoms: Optional[str] = None
    notes: Optional[str] = None
    prescription: Optional[TeleconsultPrescription] = None
    follow_up_date: Optional[str] = None
    recording_url: Optional[str] = None
    meeting_link: Optional[str] = None


class ConsultationRequest(ApiModel):
    doctor_id: str
    patient_id: str
    type: ConsultationType
    scheduled_date: str
    scheduled_time: str
    symptoms: str
    urgency: Literal["routine", "urgent", "emergency"] = "routine"


class ConsultationHistory(ApiModel):
    consultations: List[TelemedicineConsultation] = Field(default_factory=list)
    total_consultations: int
    upcoming_count: int
    completed_count: int


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class FutureReadyService(ABC):

    # AI assistant
    @abstractmethod
    async def get_ai_insights(self, user_id: str) -> List[AiInsight]:
        ...

    @abstractmethod
    async def ask_ai(self, query: AiQuery) -> AiResponse:
        ...

    @abstractmethod
    async def get_health_trends(self, user_id: str, metric: str) -> HealthTrendAnalysis:
        ...

    # Wearables
    @abstractmethod
    async def get_wearable_devices(self, user_id: str) -> List[WearableDevice]:
        ...

    @abstractmethod
    async def connect_wearable_device(self, user_id: str, device_type: WearableDeviceType) -> WearableDevice:
        ...

    @abstractmethod
    async def sync_wearable_data(self, device_id: str) -> SyncResult:
        ...

    @abstractmethod
    async def get_activity_summary(self, user_id: str, day: str) -> ActivitySummary:
        ...

    @abstractmethod
    async def get_sleep_summary(self, user_id: str, day: str) -> SleepSummary:
        ...

    # Predictive insights
    @abstractmethod
    async def get_predictive_insights(self, user_id: str) -> List[PredictiveInsight]:
        ...

    @abstractmethod
    async def get_risk_assessment(self, user_id: str, category: PredictionCategory) -> RiskAssessment:
        ...

    @abstractmethod
    async def get_health_score(self, user_id: str) -> HealthScore:
        ...

    @abstractmethod
    async def get_personalized_recommendations(self, user_id: str) -> List[PersonalizedRecommendation]:
        ...

    # Telemedicine
    @abstractmethod
    async def get_doctors(self, specialization: Optional[str] = None) -> List[TelemedicineDoctor]:
        """Case-insensitive substring match on specialization."""

    @abstractmethod
    async def book_consultation(self, request: ConsultationRequest) -> TelemedicineConsultation:
        ...

    @abstractmethod
    async def get_consultation_history(self, user_id: str) -> ConsultationHistory:
        ...

    @abstractmethod
    async def cancel_consultation(self, consultation_id: str, reason: str) -> None:
        ...
