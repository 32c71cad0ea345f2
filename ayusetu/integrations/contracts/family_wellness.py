"""
Contracts for family health and wellness: family members, vaccinations and
the vaccine schedule, daily wellness logs, preventive care, health risk
assessments and wellness goals.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

FamilyRelation = Literal["self", "spouse", "child", "parent", "sibling", "grandparent", "guardian"]
AgeGroup = Literal["infant", "toddler", "child", "teen", "adult", "senior"]
VaccinationStatus = Literal["due", "overdue", "completed", "upcoming", "skipped"]
Gender = Literal["male", "female", "other"]
RiskLevel = Literal["low", "moderate", "high", "critical"]
Priority = Literal["low", "medium", "high", "urgent"]
GoalStatus = Literal["not-started", "in-progress", "achieved", "abandoned"]
GoalType = Literal["weight-loss", "fitness", "sleep", "nutrition", "stress-management", "custom"]


class FamilyMember(ApiModel):
    id: str
    name: str
    relation: FamilyRelation
    date_of_birth: str
    age: int
    age_group: AgeGroup
    gender: Gender
    blood_group: Optional[str] = None

    abha_number: Optional[str] = None
    profile_photo: Optional[str] = None

    chronic_conditions: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    current_medications: List[str] = Field(default_factory=list)

    height: Optional[float] = None  # cm
    weight: Optional[float] = None  # kg
    bmi: Optional[float] = None

    last_checkup_date: Optional[str] = None
    next_checkup_due: Optional[str] = None
    vaccinations_up_to_date: bool = False

    is_primary: bool = False
    has_full_access: bool = False
    linked_by: str


class AddFamilyMemberRequest(ApiModel):
    name: str
    relation: FamilyRelation
    date_of_birth: str  # YYYY-MM-DD
    gender: Gender
    blood_group: Optional[str] = None
    chronic_conditions: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)


class UpdateFamilyMemberRequest(ApiModel):
    member_id: str
    name: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    chronic_conditions: Optional[List[str]] = None
    allergies: Optional[List[str]] = None
    current_medications: Optional[List[str]] = None


class VaccinationRecord(ApiModel):
    id: str
    family_member_id: str
    vaccine_name: str
    vaccine_type: str
    dose_number: int
    total_doses: int

    status: VaccinationStatus
    scheduled_date: str
    administered_date: Optional[str] = None

    hospital_name: Optional[str] = None
    doctor_name: Optional[str] = None
    batch_number: Optional[str] = None

    next_due_date: Optional[str] = None
    age_group: AgeGroup
    is_optional: bool = False

    certificate_url: Optional[str] = None

    reminder_sent: bool = False
    reminder_days: int = 7


class VaccinationsQuery(ApiModel):
    family_member_id: Optional[str] = None
    status: Optional[VaccinationStatus] = None
    age_group: Optional[AgeGroup] = None


class RecordVaccinationRequest(ApiModel):
    family_member_id: str
    vaccine_name: str
    vaccine_type: str
    dose_number: int
    administered_date: str
    hospital_name: Optional[str] = None
    batch_number: Optional[str] = None


class VaccineSchedule(ApiModel):
    vaccine_name: str
    vaccine_type: str
    description: str
    age_group: AgeGroup
    recommended_age: str
    total_doses: int
    interval_between_doses: Optional[str] = None
    is_optional: bool = False
    protects_against: List[str] = Field(default_factory=list)


class WellnessLog(ApiModel):
    id: str
    family_member_id: str
    date: str

    sleep_hours: Optional[float] = None
    sleep_quality: Optional[Literal["poor", "fair", "good", "excellent"]] = None
    sleep_start_time: Optional[str] = None
    sleep_end_time: Optional[str] = None

    steps: Optional[int] = None
    active_minutes: Optional[int] = None
    calories_burned: Optional[int] = None
    exercise_type: Optional[List[str]] = None
    activity_level: Optional[Literal["sedentary", "light", "moderate", "active", "very-active"]] = None

    water_intake: Optional[int] = None  # ml
    meals_logged: Optional[int] = None
    calories_consumed: Optional[int] = None

    weight: Optional[float] = None
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    heart_rate: Optional[int] = None
    blood_sugar: Optional[float] = None
    temperature: Optional[float] = None
    oxygen_level: Optional[int] = None

    mood_rating: Optional[int] = None  # 1-10
    stress_level: Optional[int] = None  # 1-10
    anxiety_level: Optional[int] = None  # 1-10

    notes: Optional[str] = None
    symptoms: Optional[List[str]] = None


class WellnessLogsQuery(ApiModel):
    family_member_id: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class LogWellnessRequest(ApiModel):
    family_member_id: str
    date: str
    sleep_hours: Optional[float] = None
    steps: Optional[int] = None
    water_intake: Optional[int] = None
    weight: Optional[float] = None
    mood_rating: Optional[int] = None


class PreventiveCareItem(ApiModel):
    id: str
    family_member_id: str
    care_type: Literal["screening", "checkup", "test", "vaccination", "consultation"]

    name: str
    description: str
    age_group: AgeGroup
    gender: Optional[Gender] = None

    frequency: Literal["once", "yearly", "monthly", "quarterly", "as-needed"]
    recommended_age: Optional[str] = None

    status: Literal["due", "overdue", "completed", "upcoming", "not-applicable"]
    last_completed_date: Optional[str] = None
    next_due_date: Optional[str] = None

    priority: Priority
    risk_level: Optional[RiskLevel] = None

    reminder_enabled: bool = True
    reminder_days_before: int = 7


class PreventiveCareQuery(ApiModel):
    family_member_id: Optional[str] = None
    status: Optional[Literal["due", "overdue", "completed", "upcoming"]] = None
    priority: Optional[Priority] = None


class CompletePreventiveCareRequest(ApiModel):
    item_id: str
    completed_date: str  # YYYY-MM-DD
    notes: Optional[str] = None
    document_url: Optional[str] = None


class RiskFactor(ApiModel):
    factor: str
    impact: Literal["low", "medium", "high"]
    category: Literal["lifestyle", "hereditary", "environmental", "behavioral"]
    modifiable: bool


class HealthRecommendation(ApiModel):
    id: str
    category: Literal["diet", "exercise", "screening", "medication", "lifestyle"]
    priority: Literal["low", "medium", "high"]
    title: str
    description: str
    actionable: bool
    due_date: Optional[str] = None


class HealthRiskAssessment(ApiModel):
    id: str
    family_member_id: str
    assessment_date: str

    cardiovascular_risk: RiskLevel
    diabetes_risk: RiskLevel
    hypertension_risk: RiskLevel
    cancer_risk: RiskLevel
    overall_health_risk: RiskLevel

    risk_factors: List[RiskFactor] = Field(default_factory=list)
    protective_factors: List[str] = Field(default_factory=list)
    recommendations: List[HealthRecommendation] = Field(default_factory=list)

    health_score: int  # 0-100
    previous_score: Optional[int] = None
    score_change: Optional[int] = None


class GoalMilestone(ApiModel):
    id: str
    title: str
    target_value: float
    achieved_date: Optional[str] = None
    is_achieved: bool = False


class WellnessGoal(ApiModel):
    id: str
    family_member_id: str
    goal_type: GoalType

    title: str
    description: str
    target_value: float
    current_value: float
    unit: str

    start_date: str
    target_date: str

    status: GoalStatus
    progress_percentage: float

    milestones: List[GoalMilestone] = Field(default_factory=list)
    last_updated: str


class CreateWellnessGoalRequest(ApiModel):
    family_member_id: str
    goal_type: GoalType
    title: str
    description: str
    target_value: float = Field(gt=0)
    unit: str
    target_date: str


def age_group_for(age: int) -> AgeGroup:
    if age < 2:
        return "infant"
    if age < 5:
        return "toddler"
    if age < 13:
        return "child"
    if age < 20:
        return "teen"
    if age < 60:
        return "adult"
    return "senior"


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class FamilyWellnessService(ABC):

    # Family members
    @abstractmethod
    async def get_family_members(self) -> List[FamilyMember]:
        ...

    @abstractmethod
    async def add_family_member(self, request: AddFamilyMemberRequest) -> FamilyMember:
        """Age and age group are derived from the birth year."""

    @abstractmethod
    async def update_family_member(self, request: UpdateFamilyMemberRequest) -> FamilyMember:
        """BMI is recomputed when both height and weight are supplied."""

    # Vaccinations
    @abstractmethod
    async def get_vaccinations(self, query: Optional[VaccinationsQuery] = None) -> List[VaccinationRecord]:
        ...

    @abstractmethod
    async def get_vaccine_schedule(self, age_group: Optional[AgeGroup] = None) -> List[VaccineSchedule]:
        ...

    @abstractmethod
    async def record_vaccination(self, request: RecordVaccinationRequest) -> VaccinationRecord:
        ...

    # Wellness logs
    @abstractmethod
    async def get_wellness_logs(self, query: WellnessLogsQuery) -> List[WellnessLog]:
        """Logs for one member, newest first."""

    @abstractmethod
    async def log_wellness(self, request: LogWellnessRequest) -> WellnessLog:
        ...

    # Preventive care
    @abstractmethod
    async def get_preventive_care(self, query: Optional[PreventiveCareQuery] = None) -> List[PreventiveCareItem]:
        ...

    @abstractmethod
    async def complete_preventive_care(self, request: CompletePreventiveCareRequest) -> PreventiveCareItem:
        """Marks the item completed; the next due date is one year after completion."""

    # Risk assessment
    @abstractmethod
    async def get_health_risk_assessment(self, family_member_id: str) -> HealthRiskAssessment:
        ...

    @abstractmethod
    async def create_health_risk_assessment(
        self, family_member_id: str, answers: Dict[str, Any]
    ) -> HealthRiskAssessment:
        ...

    # Goals
    @abstractmethod
    async def get_wellness_goals(
        self, family_member_id: str, status: Optional[GoalStatus] = None
    ) -> List[WellnessGoal]:
        ...

    @abstractmethod
    async def create_wellness_goal(self, request: CreateWellnessGoalRequest) -> WellnessGoal:
        ...

    @abstractmethod
    async def update_goal_progress(self, goal_id: str, current_value: float) -> WellnessGoal:
        """Progress is capped at 100%; reaching it marks the goal achieved."""
