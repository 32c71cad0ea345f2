"""
Contracts for health insights: summaries, trends, lab flags, early risk
indicators, chronic disease trackers, medication adherence, lifestyle
tracking and the symptom journal.

Everything here is informational. Risk indicators carry their own
disclaimer and ``COMPLIANCE_DISCLAIMER`` applies to the whole domain.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional, Type, Union

from pydantic import Field

from ayusetu.integrations.errors import build_model

from .base import ApiModel

TrendMetric = Literal["bp_systolic", "bp_diastolic", "blood_sugar", "weight", "bmi", "heart_rate", "spo2"]
TrendDirection = Literal["improving", "stable", "declining", "fluctuating"]
DiseaseType = Literal["diabetes", "hypertension", "asthma", "arthritis", "thyroid", "cholesterol", "other"]
LifestyleCategory = Literal["diet", "exercise", "sleep", "water", "stress", "habit"]
InsightCategory = Literal["activity", "medication", "vitals", "lifestyle", "symptoms"]

COMPLIANCE_DISCLAIMER = (
    "This information is for awareness only and does not constitute medical advice. "
    "Always consult your healthcare provider for medical decisions."
)


class HealthSummary(ApiModel):
    id: str
    generated_date: str
    overall_score: int  # 0-100, informational only
    score_category: Literal["excellent", "good", "fair", "needs-attention"]
    key_insights: List[str] = Field(default_factory=list)
    recent_activity: List[str] = Field(default_factory=list)
    upcoming_reminders: List[str] = Field(default_factory=list)
    areas_of_concern: List[str] = Field(default_factory=list)
    positive_indicators: List[str] = Field(default_factory=list)


class NormalRange(ApiModel):
    min: float
    max: float


class TrendDataPoint(ApiModel):
    date: str
    value: float
    unit: str
    source: Optional[str] = None


class HealthTrend(ApiModel):
    metric: TrendMetric
    display_name: str
    unit: str
    data_points: List[TrendDataPoint] = Field(default_factory=list)
    trend: TrendDirection
    trend_percentage: float
    normal_range: Optional[NormalRange] = None
    current_value: Optional[float] = None
    insight: str


class LabResultFlag(ApiModel):
    id: str
    test_name: str
    value: float
    unit: str
    normal_range: NormalRange
    status: Literal["normal", "low", "high", "critical"]
    flag_type: Literal["info", "warning", "alert"]
    date: str
    suggestion: str


class EarlyRiskIndicator(ApiModel):
    id: str
    risk_type: Literal["diabetes", "hypertension", "cardiac", "obesity", "other"]
    risk_level: Literal["low", "moderate", "high"]
    confidence: int  # 0-100
    factors: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    data_points: List[str] = Field(default_factory=list)
    disclaimer: str


class HealthInsight(ApiModel):
    id: str
    type: Literal["positive", "neutral", "actionable", "warning"]
    category: InsightCategory
    title: str
    description: str
    actionable: bool
    suggested_action: Optional[str] = None
    priority: Literal["low", "medium", "high"]
    created_date: str
    expiry_date: Optional[str] = None
    dismissed: bool = False


# Chronic care

class HealthGoal(ApiModel):
    id: str
    description: str
    target_value: float
    current_value: float
    unit: str
    deadline: Optional[str] = None
    progress: float  # 0-100
    achieved: bool


class TrackerMetric(ApiModel):
    name: str
    value: float
    unit: str
    status: Literal["good", "fair", "poor"]
    last_recorded: str


class DiseaseTracker(ApiModel):
    id: str
    disease: DiseaseType
    display_name: str
    start_date: str
    status: Literal["active", "managed", "inactive"]
    goals: List[HealthGoal] = Field(default_factory=list)
    metrics: List[TrackerMetric] = Field(default_factory=list)
    adherence_score: int  # 0-100
    last_updated: str


# Medications

class MedicationInput(ApiModel):
    name: str
    dosage: str
    frequency: str
    start_date: str
    end_date: Optional[str] = None
    prescribed_by: str
    purpose: str
    active_ingredient: Optional[str] = None
    side_effects: Optional[List[str]] = None
    instructions: str
    reminder_times: List[str] = Field(default_factory=list)  # "HH:MM"


class Medication(MedicationInput):
    id: str


class MedicationAdherence(ApiModel):
    medication_id: str
    medication_name: str
    total_doses: int
    taken_doses: int
    missed_doses: int
    adherence_percentage: float
    last_taken: Optional[str] = None
    next_due: Optional[str] = None
    streak: int  # consecutive days of perfect adherence


class MedicationLog(ApiModel):
    id: str
    medication_id: str
    scheduled_time: str
    taken_time: Optional[str] = None
    status: Literal["taken", "missed", "skipped", "pending"]
    note: Optional[str] = None


# Lifestyle

class DietEntry(ApiModel):
    meal_type: Literal["breakfast", "lunch", "dinner", "snack"]
    foods: List[str] = Field(default_factory=list)
    calories: Optional[int] = None
    notes: Optional[str] = None


class ExerciseEntry(ApiModel):
    type: str
    duration: int  # minutes
    intensity: Literal["light", "moderate", "vigorous"]
    calories_burned: Optional[int] = None
    notes: Optional[str] = None


class SleepEntry(ApiModel):
    duration: float  # hours
    quality: Literal["excellent", "good", "fair", "poor"]
    bed_time: str
    wake_time: str
    notes: Optional[str] = None


class WaterEntry(ApiModel):
    glasses: int  # 250 ml each
    total_ml: int = Field(alias="totalML")


class StressEntry(ApiModel):
    level: int = Field(ge=1, le=10)
    triggers: Optional[List[str]] = None
    coping_mechanism: Optional[str] = None
    notes: Optional[str] = None


class HabitEntry(ApiModel):
    habit_name: str
    completed: bool
    notes: Optional[str] = None


LifestyleData = Union[DietEntry, ExerciseEntry, SleepEntry, WaterEntry, StressEntry, HabitEntry]

LIFESTYLE_MODELS: Dict[str, Type[ApiModel]] = {
    "diet": DietEntry,
    "exercise": ExerciseEntry,
    "sleep": SleepEntry,
    "water": WaterEntry,
    "stress": StressEntry,
    "habit": HabitEntry,
}


class LifestyleEntryInput(ApiModel):
    date: str
    category: LifestyleCategory
    data: Dict[str, Any] = Field(default_factory=dict)

    def parsed_data(self) -> LifestyleData:
        """The ``data`` payload validated against the model for ``category``; raises ServiceError."""
        return build_model(LIFESTYLE_MODELS[self.category], self.data, "Invalid lifestyle entry")


class LifestyleEntry(LifestyleEntryInput):
    id: str


class LifestyleSummary(ApiModel):
    date: str
    total_calories_consumed: int
    total_calories_burned: int
    water_intake: int  # ml
    sleep_duration: float  # hours
    exercise_duration: int  # minutes
    stress_level: float  # 1-10 average
    habits_completed: int
    habits_total: int


# Symptoms

class SymptomInput(ApiModel):
    date: str
    symptom: str
    severity: int = Field(ge=1, le=10)
    body_part: Optional[str] = None
    duration: Optional[float] = None
    duration_unit: Optional[Literal["minutes", "hours", "days"]] = None
    triggers: Optional[List[str]] = None
    relief: Optional[List[str]] = None
    notes: Optional[str] = None
    attachments: Optional[List[str]] = None


class SymptomEntry(SymptomInput):
    id: str


class SymptomPattern(ApiModel):
    symptom: str
    frequency: int  # occurrences in the last 30 days
    average_severity: float
    common_triggers: List[str] = Field(default_factory=list)
    trend: Literal["increasing", "stable", "decreasing"]
    insight: str


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class InsightsService(ABC):

    # Insights
    @abstractmethod
    async def get_health_summary(self) -> HealthSummary:
        ...

    @abstractmethod
    async def get_health_trends(self, metrics: Optional[List[TrendMetric]] = None) -> List[HealthTrend]:
        """All trends, or only those whose metric is listed."""

    @abstractmethod
    async def get_lab_result_flags(self) -> List[LabResultFlag]:
        ...

    @abstractmethod
    async def get_early_risk_indicators(self) -> List[EarlyRiskIndicator]:
        ...

    @abstractmethod
    async def get_health_insights(self, category: Optional[InsightCategory] = None) -> List[HealthInsight]:
        ...

    # Disease trackers
    @abstractmethod
    async def get_disease_trackers(self) -> List[DiseaseTracker]:
        ...

    @abstractmethod
    async def create_disease_tracker(self, disease: DiseaseType, display_name: str) -> DiseaseTracker:
        ...

    @abstractmethod
    async def update_tracker_metric(self, tracker_id: str, metric_name: str, value: float) -> DiseaseTracker:
        ...

    # Medications
    @abstractmethod
    async def get_medications(self) -> List[Medication]:
        ...

    @abstractmethod
    async def add_medication(self, medication: MedicationInput) -> Medication:
        ...

    @abstractmethod
    async def get_medication_adherence(self) -> List[MedicationAdherence]:
        ...

    @abstractmethod
    async def log_medication_taken(self, medication_id: str, taken_time: Optional[str] = None) -> MedicationLog:
        ...

    # Lifestyle
    @abstractmethod
    async def get_lifestyle_entries(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[LifestyleEntry]:
        ...

    @abstractmethod
    async def add_lifestyle_entry(self, entry: LifestyleEntryInput) -> LifestyleEntry:
        ...

    @abstractmethod
    async def get_lifestyle_summary(self, day: str) -> LifestyleSummary:
        ...

    # Symptoms
    @abstractmethod
    async def get_symptoms(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[SymptomEntry]:
        ...

    @abstractmethod
    async def add_symptom(self, symptom: SymptomInput) -> SymptomEntry:
        ...

    @abstractmethod
    async def get_symptom_patterns(self) -> List[SymptomPattern]:
        ...
