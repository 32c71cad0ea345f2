"""
Mock Insights Client.

Summary, trends, lab flags and risk indicators are fixed fixtures. Trackers,
medications, lifestyle entries and symptoms live in per-instance stores, and
the daily lifestyle summary is computed from the stored entries.
"""

import logging
from datetime import date
from typing import List, Optional

from ayusetu.integrations.contracts.insights import (
    DietEntry,
    DiseaseTracker,
    DiseaseType,
    EarlyRiskIndicator,
    ExerciseEntry,
    HabitEntry,
    HealthGoal,
    HealthInsight,
    HealthSummary,
    HealthTrend,
    InsightCategory,
    InsightsService,
    LabResultFlag,
    LifestyleEntry,
    LifestyleEntryInput,
    LifestyleSummary,
    Medication,
    MedicationAdherence,
    MedicationInput,
    MedicationLog,
    NormalRange,
    SleepEntry,
    StressEntry,
    SymptomEntry,
    SymptomInput,
    SymptomPattern,
    TrackerMetric,
    TrendDataPoint,
    TrendMetric,
    WaterEntry,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

_MOCK_SUMMARY = HealthSummary(
    id="summary-001",
    generated_date="2026-01-15T00:00:00Z",
    overall_score=78,
    score_category="good",
    key_insights=[
        "Blood pressure trends are improving over the last 30 days",
        "Medication adherence is excellent at 95%",
        "Sleep quality has decreased slightly this week",
        "Exercise frequency is below your weekly goal",
    ],
    recent_activity=[
        "Recorded BP: 128/82 mmHg (Jan 14)",
        "Took morning medications on time (Today)",
        "Logged 6,500 steps yesterday",
        "Slept 6.5 hours last night",
    ],
    upcoming_reminders=[
        "BP medication due at 9:00 PM today",
        "Lab test scheduled for Jan 18",
        "Dr. appointment on Jan 22",
    ],
    areas_of_concern=[
        "Sleep duration below recommended 7-8 hours",
        "Exercise frequency: Only 2 days this week (Goal: 5 days)",
    ],
    positive_indicators=[
        "Perfect medication adherence for 7 days",
        "Blood sugar levels within target range",
        "Stress levels improving",
    ],
)


def _points(unit: str, source: str, *readings) -> List[TrendDataPoint]:
    return [TrendDataPoint(date=day, value=value, unit=unit, source=source) for day, value in readings]


_MOCK_TRENDS: List[HealthTrend] = [
    HealthTrend(
        metric="bp_systolic", display_name="Blood Pressure (Systolic)", unit="mmHg",
        data_points=_points("mmHg", "Manual Entry",
                            ("2026-01-08", 135), ("2026-01-10", 132), ("2026-01-12", 128), ("2026-01-14", 125)),
        trend="improving", trend_percentage=-7.4, normal_range=NormalRange(min=90, max=120), current_value=125,
        insight="Your blood pressure is showing an improving trend. "
                "Keep up with your medications and lifestyle changes.",
    ),
    HealthTrend(
        metric="blood_sugar", display_name="Blood Sugar (Fasting)", unit="mg/dL",
        data_points=[TrendDataPoint(date="2026-01-08", value=118, unit="mg/dL", source="Lab Report")]
        + _points("mg/dL", "Manual Entry", ("2026-01-10", 112), ("2026-01-12", 108), ("2026-01-14", 105)),
        trend="improving", trend_percentage=-11.0, normal_range=NormalRange(min=70, max=100), current_value=105,
        insight="Blood sugar levels are improving but still slightly above normal. Continue monitoring.",
    ),
    HealthTrend(
        metric="weight", display_name="Body Weight", unit="kg",
        data_points=_points("kg", "Manual Entry",
                            ("2026-01-01", 78.5), ("2026-01-05", 78.2), ("2026-01-10", 77.8), ("2026-01-14", 77.5)),
        trend="improving", trend_percentage=-1.3, current_value=77.5,
        insight="Gradual weight loss is on track. Aim for 0.5-1 kg per week for healthy progress.",
    ),
]

_MOCK_LAB_FLAGS: List[LabResultFlag] = [
    LabResultFlag(id="flag-001", test_name="HbA1c", value=6.8, unit="%", normal_range=NormalRange(min=4.0, max=5.6),
                  status="high", flag_type="warning", date="2026-01-10",
                  suggestion="Slightly elevated. Indicates prediabetes range. "
                             "Discuss with your doctor about lifestyle modifications."),
    LabResultFlag(id="flag-002", test_name="Vitamin D", value=18, unit="ng/mL",
                  normal_range=NormalRange(min=30, max=100), status="low", flag_type="warning", date="2026-01-10",
                  suggestion="Low vitamin D levels. "
                             "Consider supplementation and increased sun exposure as advised by your doctor."),
]

_MOCK_RISK_INDICATORS: List[EarlyRiskIndicator] = [
    EarlyRiskIndicator(
        id="risk-001",
        risk_type="diabetes",
        risk_level="moderate",
        confidence=72,
        factors=[
            "HbA1c level at 6.8% (prediabetes range)",
            "Family history of diabetes",
            "BMI slightly above normal range",
        ],
        recommendations=[
            "Regular blood sugar monitoring",
            "Increase physical activity to 150 minutes/week",
            "Reduce refined carbohydrate intake",
            "Schedule follow-up with endocrinologist",
        ],
        data_points=["HbA1c: 6.8%", "Fasting glucose: 105 mg/dL"],
        disclaimer="This is an informational risk assessment only. "
                   "Consult your healthcare provider for proper diagnosis and treatment.",
    ),
]

_MOCK_INSIGHTS: List[HealthInsight] = [
    HealthInsight(id="insight-001", type="positive", category="medication", title="Perfect Medication Adherence!",
                  description="You've taken all medications on time for 7 consecutive days. Great job!",
                  actionable=False, priority="low", created_date="2026-01-14"),
    HealthInsight(id="insight-002", type="actionable", category="activity", title="Increase Physical Activity",
                  description="Your exercise frequency is below your weekly goal of 5 days.", actionable=True,
                  suggested_action="Try to add 2 more exercise sessions this week", priority="medium",
                  created_date="2026-01-14"),
]

_MOCK_ADHERENCE: List[MedicationAdherence] = [
    MedicationAdherence(medication_id="med-001", medication_name="Amlodipine 5mg", total_doses=30, taken_doses=29,
                        missed_doses=1, adherence_percentage=96.7, last_taken="2026-01-14T09:15:00Z",
                        next_due="2026-01-15T09:00:00Z", streak=14),
    MedicationAdherence(medication_id="med-002", medication_name="Metformin 500mg", total_doses=60, taken_doses=57,
                        missed_doses=3, adherence_percentage=95.0, last_taken="2026-01-14T21:10:00Z",
                        next_due="2026-01-15T09:00:00Z", streak=7),
]

_MOCK_PATTERNS: List[SymptomPattern] = [
    SymptomPattern(symptom="Headache", frequency=8, average_severity=4.2,
                   common_triggers=["Stress", "Screen time", "Lack of sleep"], trend="stable",
                   insight="Headaches occur about 2 times per week, often related to work stress. "
                           "Consider stress management techniques."),
]


def _in_range(day: str, start_date: Optional[str], end_date: Optional[str]) -> bool:
    if start_date and day[:10] < start_date[:10]:
        return False
    if end_date and day[:10] > end_date[:10]:
        return False
    return True


def summarize_lifestyle(day: str, entries: List[LifestyleEntry]) -> LifestyleSummary:
    """Fold the entries logged on ``day`` into one daily summary."""
    consumed = burned = water = exercise = 0
    sleep = 0.0
    stress: List[int] = []
    habits: List[HabitEntry] = []
    for entry in entries:
        if entry.date[:10] != day[:10]:
            continue
        data = entry.parsed_data()
        if isinstance(data, DietEntry):
            consumed += data.calories or 0
        elif isinstance(data, ExerciseEntry):
            exercise += data.duration
            burned += data.calories_burned or 0
        elif isinstance(data, SleepEntry):
            sleep += data.duration
        elif isinstance(data, WaterEntry):
            water += data.total_ml
        elif isinstance(data, StressEntry):
            stress.append(data.level)
        elif isinstance(data, HabitEntry):
            habits.append(data)
    return LifestyleSummary(
        date=day,
        total_calories_consumed=consumed,
        total_calories_burned=burned,
        water_intake=water,
        sleep_duration=sleep,
        exercise_duration=exercise,
        stress_level=round(sum(stress) / len(stress), 1) if stress else 0,
        habits_completed=sum(1 for h in habits if h.completed),
        habits_total=len(habits),
    )


class MockInsightsClient(MockClientBase, InsightsService):
    label = "INSIGHTS MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        # In-memory stores (reset on restart)
        self._trackers: List[DiseaseTracker] = [
            DiseaseTracker(
                id="tracker-001",
                disease="hypertension",
                display_name="High Blood Pressure",
                start_date="2025-06-01",
                status="active",
                goals=[
                    HealthGoal(id="goal-001", description="Systolic BP below 130 mmHg", target_value=130,
                               current_value=125, unit="mmHg", progress=100, achieved=True),
                    HealthGoal(id="goal-002", description="Exercise 5 days per week", target_value=5,
                               current_value=3, unit="days", progress=60, achieved=False),
                ],
                metrics=[
                    TrackerMetric(name="Systolic BP", value=125, unit="mmHg", status="good",
                                  last_recorded="2026-01-14"),
                    TrackerMetric(name="Diastolic BP", value=82, unit="mmHg", status="good",
                                  last_recorded="2026-01-14"),
                ],
                adherence_score=85,
                last_updated="2026-01-14",
            ),
        ]
        self._medications: List[Medication] = [
            Medication(id="med-001", name="Amlodipine", dosage="5mg", frequency="Once daily in the morning",
                       start_date="2025-06-01", prescribed_by="Dr. Rajesh Kumar", purpose="Blood pressure control",
                       active_ingredient="Amlodipine besylate",
                       side_effects=["Swelling of ankles", "Dizziness", "Flushing"],
                       instructions="Take with or without food. Swallow whole.", reminder_times=["09:00"]),
            Medication(id="med-002", name="Metformin", dosage="500mg", frequency="Twice daily with meals",
                       start_date="2025-08-15", prescribed_by="Dr. Priya Sharma", purpose="Blood sugar management",
                       active_ingredient="Metformin hydrochloride",
                       side_effects=["Nausea", "Diarrhea", "Upset stomach"],
                       instructions="Take with meals. Do not crush or chew.", reminder_times=["09:00", "21:00"]),
        ]
        self._lifestyle: List[LifestyleEntry] = [
            LifestyleEntry(id="life-001", date="2026-01-14", category="exercise",
                           data={"type": "Walking", "duration": 30, "intensity": "moderate",
                                 "caloriesBurned": 150, "notes": "Morning walk in the park"}),
            LifestyleEntry(id="life-002", date="2026-01-14", category="sleep",
                           data={"duration": 6.5, "quality": "fair", "bedTime": "23:30", "wakeTime": "06:00",
                                 "notes": "Woke up twice during the night"}),
        ]
        self._symptoms: List[SymptomEntry] = [
            SymptomEntry(id="symp-001", date="2026-01-14", symptom="Headache", severity=4, body_part="Forehead",
                         duration=2, duration_unit="hours", triggers=["Stress", "Screen time"],
                         relief=["Rest", "Hydration"], notes="Mild tension headache after long work session"),
            SymptomEntry(id="symp-002", date="2026-01-12", symptom="Joint pain", severity=3, body_part="Right knee",
                         duration=4, duration_unit="hours", triggers=["Cold weather"],
                         notes="Improved with warm compress"),
        ]

    # ------------------------------------------------------------------
    # Insights
    # ------------------------------------------------------------------

    async def get_health_summary(self) -> HealthSummary:
        await self._delay()
        return _MOCK_SUMMARY.model_copy(update={"generated_date": self._iso_now()}, deep=True)

    async def get_health_trends(self, metrics: Optional[List[TrendMetric]] = None) -> List[HealthTrend]:
        await self._delay()
        if metrics:
            return self._copy([t for t in _MOCK_TRENDS if t.metric in metrics])
        return self._copy(_MOCK_TRENDS)

    async def get_lab_result_flags(self) -> List[LabResultFlag]:
        await self._delay()
        return self._copy(_MOCK_LAB_FLAGS)

    async def get_early_risk_indicators(self) -> List[EarlyRiskIndicator]:
        await self._delay()
        return self._copy(_MOCK_RISK_INDICATORS)

    async def get_health_insights(self, category: Optional[InsightCategory] = None) -> List[HealthInsight]:
        await self._delay()
        if category:
            return self._copy([i for i in _MOCK_INSIGHTS if i.category == category])
        return self._copy(_MOCK_INSIGHTS)

    # ------------------------------------------------------------------
    # Disease trackers
    # ------------------------------------------------------------------

    async def get_disease_trackers(self) -> List[DiseaseTracker]:
        await self._delay()
        return self._copy(self._trackers)

    async def create_disease_tracker(self, disease: DiseaseType, display_name: str) -> DiseaseTracker:
        await self._delay(0.8)
        tracker = DiseaseTracker(
            id=self._new_id("tracker"),
            disease=disease,
            display_name=display_name,
            start_date=date.today().isoformat(),
            status="active",
            adherence_score=0,
            last_updated=self._iso_now(),
        )
        self._trackers.append(tracker)
        logger.info("[%s] Created %s tracker %s", self.label, disease, tracker.id)
        return self._copy(tracker)

    async def update_tracker_metric(self, tracker_id: str, metric_name: str, value: float) -> DiseaseTracker:
        """Unknown metric names leave the metrics untouched; only ``last_updated`` moves."""
        await self._delay(0.6)
        tracker = next((t for t in self._trackers if t.id == tracker_id), None)
        if tracker is None:
            raise ServiceError("Tracker not found")
        metric = next((m for m in tracker.metrics if m.name == metric_name), None)
        if metric is not None:
            metric.value = value
            metric.last_recorded = date.today().isoformat()
        tracker.last_updated = self._iso_now()
        return self._copy(tracker)

    # ------------------------------------------------------------------
    # Medications
    # ------------------------------------------------------------------

    async def get_medications(self) -> List[Medication]:
        await self._delay()
        return self._copy(self._medications)

    async def add_medication(self, medication: MedicationInput) -> Medication:
        await self._delay(0.8)
        added = Medication(id=self._new_id("med"), **medication.model_dump())
        self._medications.append(added)
        return self._copy(added)

    async def get_medication_adherence(self) -> List[MedicationAdherence]:
        await self._delay()
        return self._copy(_MOCK_ADHERENCE)

    async def log_medication_taken(self, medication_id: str, taken_time: Optional[str] = None) -> MedicationLog:
        await self._delay(0.5)
        now = self._iso_now()
        return MedicationLog(
            id=self._new_id("log"),
            medication_id=medication_id,
            scheduled_time=now,
            taken_time=taken_time or now,
            status="taken",
        )

    # ------------------------------------------------------------------
    # Lifestyle
    # ------------------------------------------------------------------

    async def get_lifestyle_entries(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[LifestyleEntry]:
        await self._delay()
        return self._copy([e for e in self._lifestyle if _in_range(e.date, start_date, end_date)])

    async def add_lifestyle_entry(self, entry: LifestyleEntryInput) -> LifestyleEntry:
        await self._delay(0.6)
        # Reject payloads that do not fit the category before storing them
        entry.parsed_data()
        added = LifestyleEntry(id=self._new_id("life"), **entry.model_dump())
        self._lifestyle.append(added)
        return self._copy(added)

    async def get_lifestyle_summary(self, day: str) -> LifestyleSummary:
        await self._delay()
        return summarize_lifestyle(day, self._lifestyle)

    # ------------------------------------------------------------------
    # Symptoms
    # ------------------------------------------------------------------

    async def get_symptoms(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[SymptomEntry]:
        await self._delay()
        return self._copy([s for s in self._symptoms if _in_range(s.date, start_date, end_date)])

    async def add_symptom(self, symptom: SymptomInput) -> SymptomEntry:
        await self._delay(0.6)
        added = SymptomEntry(id=self._new_id("symp"), **symptom.model_dump())
        self._symptoms.append(added)
        return self._copy(added)

    async def get_symptom_patterns(self) -> List[SymptomPattern]:
        await self._delay()
        return self._copy(_MOCK_PATTERNS)
