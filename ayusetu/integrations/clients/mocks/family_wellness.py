"""
Mock Family Wellness Client.

Family members, vaccinations, wellness logs, preventive care items and goals
live in per-instance stores; additions and updates persist until restart.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.family_wellness import (
    AddFamilyMemberRequest,
    AgeGroup,
    CompletePreventiveCareRequest,
    CreateWellnessGoalRequest,
    FamilyMember,
    FamilyWellnessService,
    GoalMilestone,
    GoalStatus,
    HealthRecommendation,
    HealthRiskAssessment,
    LogWellnessRequest,
    PreventiveCareItem,
    PreventiveCareQuery,
    RecordVaccinationRequest,
    RiskFactor,
    UpdateFamilyMemberRequest,
    VaccinationRecord,
    VaccinationsQuery,
    VaccineSchedule,
    WellnessGoal,
    WellnessLog,
    WellnessLogsQuery,
    age_group_for,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_USER_ID = "user-001"

_MOCK_SCHEDULE: List[VaccineSchedule] = [
    VaccineSchedule(vaccine_name="BCG", vaccine_type="BCG",
                    description="Bacillus Calmette-Guérin vaccine for tuberculosis", age_group="infant",
                    recommended_age="At birth", total_doses=1, protects_against=["Tuberculosis"]),
    VaccineSchedule(vaccine_name="Hepatitis B", vaccine_type="Hep-B",
                    description="Protection against Hepatitis B virus",
                    age_group="infant", recommended_age="At birth, 6 weeks, 6 months", total_doses=3,
                    interval_between_doses="6 weeks", protects_against=["Hepatitis B"]),
    VaccineSchedule(vaccine_name="DPT", vaccine_type="DPT", description="Diphtheria, Pertussis, and Tetanus vaccine",
                    age_group="child", recommended_age="6 weeks, 10 weeks, 14 weeks, 18 months, 5 years",
                    total_doses=5, interval_between_doses="4 weeks",
                    protects_against=["Diphtheria", "Pertussis", "Tetanus"]),
    VaccineSchedule(vaccine_name="COVID-19", vaccine_type="COVID-19", description="Protection against COVID-19 virus",
                    age_group="adult", recommended_age="18+ years", total_doses=3,
                    interval_between_doses="12-16 weeks", is_optional=True,
                    protects_against=["COVID-19", "Severe COVID-19"]),
]

_MOCK_ASSESSMENT = HealthRiskAssessment(
    id="hra-001",
    family_member_id="fm-001",
    assessment_date="2026-01-10",
    cardiovascular_risk="moderate",
    diabetes_risk="low",
    hypertension_risk="moderate",
    cancer_risk="low",
    overall_health_risk="moderate",
    risk_factors=[
        RiskFactor(factor="Family history of hypertension", impact="medium", category="hereditary", modifiable=False),
        RiskFactor(factor="Sedentary lifestyle", impact="medium", category="lifestyle", modifiable=True),
        RiskFactor(factor="Elevated cholesterol levels", impact="high", category="behavioral", modifiable=True),
    ],
    protective_factors=["Regular exercise", "Balanced diet", "Non-smoker"],
    recommendations=[
        HealthRecommendation(id="rec-001", category="exercise", priority="high", title="Increase Physical Activity",
                             description="Aim for 150 minutes of moderate exercise per week", actionable=True,
                             due_date="2026-02-10"),
        HealthRecommendation(id="rec-002", category="diet", priority="high", title="Reduce Saturated Fat Intake",
                             description="Lower cholesterol through diet modifications", actionable=True),
        HealthRecommendation(id="rec-003", category="screening", priority="medium", title="Regular BP Monitoring",
                             description="Monitor blood pressure weekly", actionable=True),
    ],
    health_score=72,
    previous_score=68,
    score_change=4,
)


def body_mass_index(weight_kg: float, height_cm: float) -> float:
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def one_year_after(day: date) -> date:
    try:
        return day.replace(year=day.year + 1)
    except ValueError:
        # 29 February
        return day.replace(year=day.year + 1, day=28)


class MockFamilyWellnessClient(MockClientBase, FamilyWellnessService):
    label = "FAMILY WELLNESS MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        # In-memory stores (reset on restart)
        self._members: List[FamilyMember] = [
            FamilyMember(id="fm-001", name="Rajesh Kumar", relation="self", date_of_birth="1985-06-15", age=40,
                         age_group="adult", gender="male", blood_group="O+", abha_number="12-3456-7890-1234",
                         chronic_conditions=["Hypertension"], allergies=["Penicillin"],
                         current_medications=["Amlodipine 5mg"], height=175, weight=78, bmi=25.5,
                         last_checkup_date="2025-11-20", next_checkup_due="2026-05-20",
                         vaccinations_up_to_date=True, is_primary=True, has_full_access=True,
                         linked_by=MOCK_USER_ID),
            FamilyMember(id="fm-002", name="Priya Kumar", relation="spouse", date_of_birth="1988-03-22", age=37,
                         age_group="adult", gender="female", blood_group="A+", height=162, weight=58, bmi=22.1,
                         last_checkup_date="2025-12-10", vaccinations_up_to_date=True, has_full_access=True,
                         linked_by=MOCK_USER_ID),
            FamilyMember(id="fm-003", name="Aarav Kumar", relation="child", date_of_birth="2020-08-10", age=5,
                         age_group="child", gender="male", blood_group="O+", allergies=["Peanuts"], height=110,
                         weight=18, linked_by=MOCK_USER_ID),
        ]
        self._vaccinations: List[VaccinationRecord] = [
            VaccinationRecord(id="vac-001", family_member_id="fm-003",
                              vaccine_name="DPT (Diphtheria, Pertussis, Tetanus)", vaccine_type="DPT", dose_number=4,
                              total_doses=5, status="completed", scheduled_date="2024-08-10",
                              administered_date="2024-08-12", hospital_name="Rainbow Children Hospital",
                              batch_number="DPT-2024-08-001", next_due_date="2026-08-10", age_group="child"),
            VaccinationRecord(id="vac-002", family_member_id="fm-003", vaccine_name="MMR (Measles, Mumps, Rubella)",
                              vaccine_type="MMR", dose_number=1, total_doses=2, status="due",
                              scheduled_date="2026-02-10", next_due_date="2026-02-10", age_group="child",
                              reminder_sent=True),
            VaccinationRecord(id="vac-003", family_member_id="fm-001", vaccine_name="COVID-19 Booster",
                              vaccine_type="COVID-19", dose_number=3, total_doses=3, status="overdue",
                              scheduled_date="2025-12-01", age_group="adult", is_optional=True, reminder_sent=True,
                              reminder_days=14),
        ]
        self._logs: List[WellnessLog] = [
            WellnessLog(id="wl-001", family_member_id="fm-001", date="2026-01-14", sleep_hours=7.5,
                        sleep_quality="good", sleep_start_time="2026-01-13T23:00:00",
                        sleep_end_time="2026-01-14T06:30:00", steps=8500, active_minutes=45, calories_burned=420,
                        exercise_type=["Walking", "Yoga"], activity_level="moderate", water_intake=2500, weight=78,
                        blood_pressure_systolic=128, blood_pressure_diastolic=82, heart_rate=72, mood_rating=8,
                        stress_level=3),
            WellnessLog(id="wl-002", family_member_id="fm-002", date="2026-01-14", sleep_hours=8,
                        sleep_quality="excellent", steps=10200, active_minutes=60, water_intake=3000, weight=58,
                        mood_rating=9, stress_level=2),
        ]
        self._preventive: List[PreventiveCareItem] = [
            PreventiveCareItem(id="pc-001", family_member_id="fm-001", care_type="screening",
                               name="Annual Health Checkup",
                               description="Comprehensive health screening including blood tests, BP, ECG",
                               age_group="adult", frequency="yearly", status="due", next_due_date="2026-02-15",
                               priority="high", reminder_days_before=14),
            PreventiveCareItem(id="pc-002", family_member_id="fm-001", care_type="test", name="Lipid Profile",
                               description="Cholesterol and triglyceride levels check", age_group="adult",
                               frequency="yearly", recommended_age="40+", status="upcoming",
                               last_completed_date="2025-01-10", next_due_date="2026-03-10", priority="medium",
                               risk_level="moderate", reminder_days_before=7),
            PreventiveCareItem(id="pc-003", family_member_id="fm-002", care_type="screening",
                               name="Breast Cancer Screening", description="Mammography for breast cancer detection",
                               age_group="adult", gender="female", frequency="yearly", recommended_age="After 40",
                               status="completed", last_completed_date="2025-12-05", next_due_date="2026-12-05",
                               priority="high", reminder_days_before=30),
        ]
        self._goals: List[WellnessGoal] = [
            WellnessGoal(id="goal-001", family_member_id="fm-001", goal_type="weight-loss",
                         title="Lose 5 kg in 3 months",
                         description="Reduce weight from 78kg to 73kg through diet and exercise", target_value=73,
                         current_value=78, unit="kg", start_date="2026-01-01", target_date="2026-04-01",
                         status="in-progress", progress_percentage=20,
                         milestones=[
                             GoalMilestone(id="m-001", title="2kg down", target_value=76, is_achieved=True,
                                           achieved_date="2026-01-12"),
                             GoalMilestone(id="m-002", title="4kg down", target_value=74),
                         ],
                         last_updated="2026-01-14"),
            WellnessGoal(id="goal-002", family_member_id="fm-002", goal_type="fitness", title="10,000 steps daily",
                         description="Maintain 10,000 steps per day for better cardiovascular health",
                         target_value=10000, current_value=8500, unit="steps", start_date="2025-12-01",
                         target_date="2026-03-01", status="in-progress", progress_percentage=65,
                         last_updated="2026-01-14"),
        ]

    # ------------------------------------------------------------------
    # Family members
    # ------------------------------------------------------------------

    async def get_family_members(self) -> List[FamilyMember]:
        await self._delay(0.3)
        return self._copy(self._members)

    async def add_family_member(self, request: AddFamilyMemberRequest) -> FamilyMember:
        await self._delay(0.5)
        age = date.today().year - date.fromisoformat(request.date_of_birth[:10]).year
        member = FamilyMember(
            id=self._new_id("fm"),
            name=request.name,
            relation=request.relation,
            date_of_birth=request.date_of_birth,
            age=age,
            age_group=age_group_for(age),
            gender=request.gender,
            blood_group=request.blood_group,
            chronic_conditions=list(request.chronic_conditions),
            allergies=list(request.allergies),
            linked_by=MOCK_USER_ID,
        )
        self._members.append(member)
        logger.info("[%s] Added family member %s (%s)", self.label, member.id, member.age_group)
        return self._copy(member)

    async def update_family_member(self, request: UpdateFamilyMemberRequest) -> FamilyMember:
        await self._delay(0.5)
        member = next((m for m in self._members if m.id == request.member_id), None)
        if member is None:
            raise ServiceError("Member not found")
        for field, value in request.model_dump(exclude={"member_id"}, exclude_none=True).items():
            setattr(member, field, value)
        if request.weight and request.height:
            member.bmi = body_mass_index(request.weight, request.height)
        return self._copy(member)

    # ------------------------------------------------------------------
    # Vaccinations
    # ------------------------------------------------------------------

    async def get_vaccinations(self, query: Optional[VaccinationsQuery] = None) -> List[VaccinationRecord]:
        await self._delay(0.3)
        query = query or VaccinationsQuery()
        records = self._vaccinations
        if query.family_member_id:
            records = [v for v in records if v.family_member_id == query.family_member_id]
        if query.status:
            records = [v for v in records if v.status == query.status]
        if query.age_group:
            records = [v for v in records if v.age_group == query.age_group]
        return self._copy(records)

    async def get_vaccine_schedule(self, age_group: Optional[AgeGroup] = None) -> List[VaccineSchedule]:
        await self._delay(0.3)
        if age_group:
            return self._copy([s for s in _MOCK_SCHEDULE if s.age_group == age_group])
        return self._copy(_MOCK_SCHEDULE)

    async def record_vaccination(self, request: RecordVaccinationRequest) -> VaccinationRecord:
        await self._delay(0.5)
        record = VaccinationRecord(
            id=self._new_id("vac"),
            family_member_id=request.family_member_id,
            vaccine_name=request.vaccine_name,
            vaccine_type=request.vaccine_type,
            dose_number=request.dose_number,
            total_doses=1,
            status="completed",
            scheduled_date=request.administered_date,
            administered_date=request.administered_date,
            hospital_name=request.hospital_name,
            batch_number=request.batch_number,
            age_group="adult",
        )
        self._vaccinations.append(record)
        return self._copy(record)

    # ------------------------------------------------------------------
    # Wellness logs
    # ------------------------------------------------------------------

    async def get_wellness_logs(self, query: WellnessLogsQuery) -> List[WellnessLog]:
        await self._delay(0.3)
        logs = [log for log in self._logs if log.family_member_id == query.family_member_id]
        if query.start_date:
            logs = [log for log in logs if log.date[:10] >= query.start_date[:10]]
        if query.end_date:
            logs = [log for log in logs if log.date[:10] <= query.end_date[:10]]
        return self._copy(sorted(logs, key=lambda log: log.date, reverse=True))

    async def log_wellness(self, request: LogWellnessRequest) -> WellnessLog:
        await self._delay(0.3)
        log = WellnessLog(id=self._new_id("wl"), **request.model_dump())
        self._logs.append(log)
        return self._copy(log)

    # ------------------------------------------------------------------
    # Preventive care
    # ------------------------------------------------------------------

    async def get_preventive_care(self, query: Optional[PreventiveCareQuery] = None) -> List[PreventiveCareItem]:
        await self._delay(0.3)
        query = query or PreventiveCareQuery()
        items = self._preventive
        if query.family_member_id:
            items = [i for i in items if i.family_member_id == query.family_member_id]
        if query.status:
            items = [i for i in items if i.status == query.status]
        if query.priority:
            items = [i for i in items if i.priority == query.priority]
        return self._copy(items)

    async def complete_preventive_care(self, request: CompletePreventiveCareRequest) -> PreventiveCareItem:
        await self._delay(0.5)
        item = next((i for i in self._preventive if i.id == request.item_id), None)
        if item is None:
            raise ServiceError("Item not found")
        completed = date.fromisoformat(request.completed_date[:10])
        item.status = "completed"
        item.last_completed_date = completed.isoformat()
        item.next_due_date = one_year_after(completed).isoformat()
        return self._copy(item)

    # ------------------------------------------------------------------
    # Risk assessment
    # ------------------------------------------------------------------

    async def get_health_risk_assessment(self, family_member_id: str) -> HealthRiskAssessment:
        await self._delay(0.5)
        return self._copy(_MOCK_ASSESSMENT)

    async def create_health_risk_assessment(
        self, family_member_id: str, answers: Dict[str, Any]
    ) -> HealthRiskAssessment:
        await self._delay(1.0)
        logger.info("[%s] Risk assessment for %s (%d answers)", self.label, family_member_id, len(answers))
        return self._copy(_MOCK_ASSESSMENT)

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    async def get_wellness_goals(
        self, family_member_id: str, status: Optional[GoalStatus] = None
    ) -> List[WellnessGoal]:
        await self._delay(0.3)
        goals = [g for g in self._goals if g.family_member_id == family_member_id]
        if status:
            goals = [g for g in goals if g.status == status]
        return self._copy(goals)

    async def create_wellness_goal(self, request: CreateWellnessGoalRequest) -> WellnessGoal:
        await self._delay(0.5)
        now = self._iso_now()
        goal = WellnessGoal(
            id=self._new_id("goal"),
            **request.model_dump(),
            current_value=0,
            start_date=now,
            status="not-started",
            progress_percentage=0,
            last_updated=now,
        )
        self._goals.append(goal)
        return self._copy(goal)

    async def update_goal_progress(self, goal_id: str, current_value: float) -> WellnessGoal:
        await self._delay(0.3)
        goal = next((g for g in self._goals if g.id == goal_id), None)
        if goal is None:
            raise ServiceError("Goal not found")
        goal.current_value = current_value
        goal.progress_percentage = min(100.0, current_value / goal.target_value * 100)
        goal.status = "achieved" if goal.progress_percentage >= 100 else "in-progress"
        goal.last_updated = self._iso_now()
        return self._copy(goal)
