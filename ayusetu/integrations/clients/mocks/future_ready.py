"""
Mock Future-Ready Client.

AI insights, predictions and wearable summaries are canned. Connected
devices and booked teleconsultations are kept in memory so that history and
cancellation reflect earlier calls.
"""

import logging
from typing import Dict, List, Optional

from ayusetu.integrations.contracts.future_ready import (
    AI_HEALTH_DISCLAIMER,
    ActivitySummary,
    AiInsight,
    AiQuery,
    AiResponse,
    ConsultationHistory,
    ConsultationRequest,
    DaySlots,
    FutureReadyService,
    HealthScore,
    HealthScoreCategories,
    HealthTrendAnalysis,
    HeartRateZones,
    InsightData,
    InsightDateRange,
    PersonalizedRecommendation,
    PredictionCategory,
    PredictiveInsight,
    PrescribedMedication,
    RecommendationResource,
    RiskAssessment,
    RiskContribution,
    SleepSummary,
    SyncResult,
    TelemedicineConsultation,
    TelemedicineDoctor,
    TeleconsultPrescription,
    TrendPoint,
    WearableDevice,
    WearableDeviceType,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)

MOCK_PATIENT_ID = "user-123"
DEFAULT_CONSULTATION_FEE = 500
CONSULTATION_MINUTES = 15
SYNCED_DATA_POINTS = 147
MEETING_ROOM_URL = "https://telemedicine.ayusetu.in/room"

BP_ANSWER = (
    "Your blood pressure has been within normal range (120/80 mmHg) for the past week. "
    "Continue monitoring regularly and maintain a healthy lifestyle."
)
GENERIC_ANSWER = (
    "I can provide insights about your health trends, but please consult a healthcare professional "
    "for medical advice."
)

_MOCK_INSIGHTS: List[AiInsight] = [
    AiInsight(id="ai-001", type="trend", priority="medium", title="Blood Pressure Trending Higher",
              description="Your average blood pressure has increased by 8% over the past 2 weeks",
              generated_at="2026-01-15T08:00:00Z",
              related_data=InsightData(vital_type="blood_pressure", value=135, trend="increasing",
                                       date_range=InsightDateRange(start="2026-01-01T00:00:00Z",
                                                                   end="2026-01-15T00:00:00Z")),
              recommendation="Consider reducing salt intake and monitoring stress levels",
              action_items=["Track blood pressure daily", "Reduce sodium to <2000mg/day",
                            "Practice relaxation techniques", "Consult doctor if readings remain high"],
              disclaimer_shown=True),
    AiInsight(id="ai-002", type="recommendation", priority="low", title="Sleep Quality Improving",
              description="Your sleep quality has improved by 15% this week compared to last week",
              generated_at="2026-01-14T06:00:00Z",
              related_data=InsightData(vital_type="sleep", value=85, trend="increasing"),
              recommendation="Maintain current sleep schedule for continued improvement",
              action_items=["Continue consistent bedtime routine", "Keep bedroom temperature cool",
                            "Limit screen time before bed"],
              disclaimer_shown=True),
    AiInsight(id="ai-003", type="alert", priority="high", title="Low Physical Activity Detected",
              description="Your step count has been below recommended levels for 5 consecutive days",
              generated_at="2026-01-13T18:00:00Z",
              related_data=InsightData(vital_type="steps", value=4200, trend="decreasing"),
              recommendation="Aim for at least 7,000 steps per day for better health",
              action_items=["Set daily step goal", "Take short walking breaks every hour",
                            "Use stairs instead of elevator", "Go for evening walks"],
              disclaimer_shown=True),
]

_MOCK_PREDICTIONS: List[PredictiveInsight] = [
    PredictiveInsight(id="pred-001", category="cardiovascular", title="Moderate Cardiovascular Risk",
                      description="Based on your current health metrics, you have a moderate risk of "
                                  "cardiovascular issues in the next 10 years",
                      risk_level="moderate", probability=0.18, timeframe="next 10 years",
                      based_on=["Blood pressure trends", "Cholesterol levels", "Family history", "Activity levels"],
                      preventive_actions=["Maintain regular exercise routine (150 min/week)",
                                          "Monitor blood pressure weekly", "Keep cholesterol in check through diet",
                                          "Annual cardiovascular check-ups"],
                      generated_at="2026-01-15T09:00:00Z", confidence=0.75),
    PredictiveInsight(id="pred-002", category="diabetes", title="Low Diabetes Risk",
                      description="Your current health metrics indicate a low risk of developing type 2 diabetes",
                      risk_level="low", probability=0.08, timeframe="next 5 years",
                      based_on=["Blood glucose levels", "BMI", "Activity levels", "Family history"],
                      preventive_actions=["Continue balanced diet", "Maintain healthy weight",
                                          "Regular physical activity", "Annual HbA1c testing"],
                      generated_at="2026-01-15T09:00:00Z", confidence=0.82),
]

_MOCK_DOCTORS: List[TelemedicineDoctor] = [
    TelemedicineDoctor(id="doc-001", name="Dr. Priya Sharma", specialization="General Physician",
                       qualifications=["MBBS", "MD Internal Medicine"], experience=12, rating=4.8, review_count=1247,
                       languages=["English", "Hindi", "Marathi"], consultation_fee=500,
                       available_slots=[
                           DaySlots(date="2026-01-16", slots=["10:00 AM", "11:00 AM", "02:00 PM", "04:00 PM"]),
                           DaySlots(date="2026-01-17", slots=["09:00 AM", "10:30 AM", "03:00 PM"]),
                       ],
                       is_abdm_verified=True, hospital="Apollo Hospital, Delhi"),
    TelemedicineDoctor(id="doc-002", name="Dr. Rajesh Kumar", specialization="Cardiologist",
                       qualifications=["MBBS", "MD Cardiology", "DM"], experience=18, rating=4.9, review_count=892,
                       languages=["English", "Hindi"], consultation_fee=800,
                       available_slots=[DaySlots(date="2026-01-16", slots=["11:00 AM", "03:00 PM"])],
                       is_abdm_verified=True, hospital="Fortis Hospital, Mumbai"),
    TelemedicineDoctor(id="doc-003", name="Dr. Anjali Patel", specialization="Endocrinologist",
                       qualifications=["MBBS", "MD", "DM Endocrinology"], experience=10, rating=4.7, review_count=654,
                       languages=["English", "Hindi", "Gujarati"], consultation_fee=700, is_abdm_verified=True,
                       hospital="Max Hospital, Bangalore"),
]


class MockFutureReadyClient(MockClientBase, FutureReadyService):
    label = "FUTURE READY MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        # In-memory stores (reset on restart)
        self._devices: Dict[str, List[WearableDevice]] = {}
        self._consultations: List[TelemedicineConsultation] = [
            TelemedicineConsultation(
                id="consult-001",
                doctor_id="doc-001",
                patient_id=MOCK_PATIENT_ID,
                status="completed",
                type="video",
                scheduled_date="2026-01-10",
                scheduled_time="10:00 AM",
                duration=CONSULTATION_MINUTES,
                fee=500,
                symptoms="Fever and cough for 3 days",
                notes="Patient advised to rest and take prescribed medications",
                prescription=TeleconsultPrescription(
                    id="rx-001",
                    medications=[
                        PrescribedMedication(name="Paracetamol 500mg", dosage="1 tablet", frequency="Thrice daily",
                                             duration="3 days"),
                        PrescribedMedication(name="Cetirizine 10mg", dosage="1 tablet",
                                             frequency="Once daily at night", duration="5 days"),
                    ],
                    advice="Drink plenty of fluids, rest well. Follow up if fever persists beyond 3 days.",
                ),
            ),
        ]

    def _devices_for(self, user_id: str) -> List[WearableDevice]:
        if user_id not in self._devices:
            self._devices[user_id] = [
                WearableDevice(id="device-001", name="Fitbit Charge 5", type="fitness_tracker", manufacturer="Fitbit",
                               model="Charge 5", is_connected=True, last_synced_at="2026-01-15T07:30:00Z",
                               battery_level=68,
                               supported_data_types=["steps", "heart_rate", "sleep", "calories", "activity"]),
                WearableDevice(id="device-002", name="Apple Watch Series 9", type="smartwatch", manufacturer="Apple",
                               model="Series 9", is_connected=True, last_synced_at="2026-01-15T08:15:00Z",
                               battery_level=82,
                               supported_data_types=["steps", "heart_rate", "sleep", "calories", "activity",
                                                     "oxygen_saturation"]),
            ]
        return self._devices[user_id]

    # ------------------------------------------------------------------
    # AI assistant
    # ------------------------------------------------------------------

    async def get_ai_insights(self, user_id: str) -> List[AiInsight]:
        await self._delay(0.5)
        return self._copy(_MOCK_INSIGHTS)

    async def ask_ai(self, query: AiQuery) -> AiResponse:
        await self._delay(1.5)
        answer = BP_ANSWER if "blood pressure" in query.question.lower() else GENERIC_ANSWER
        return AiResponse(
            id=self._new_id("ai-resp"),
            query=query.question,
            answer=f"Based on your health data, here's what I found: {answer}",
            confidence=0.85,
            sources=["Health records", "Vital trends", "Medical guidelines"],
            disclaimer=AI_HEALTH_DISCLAIMER,
            timestamp=self._iso_now(),
        )

    async def get_health_trends(self, user_id: str, metric: str) -> HealthTrendAnalysis:
        await self._delay(0.6)
        return HealthTrendAnalysis(
            metric=metric,
            current_value=135,
            average_value=125,
            trend="declining",
            change_percentage=8,
            data_points=[
                TrendPoint(date="2026-01-01", value=120),
                TrendPoint(date="2026-01-05", value=128),
                TrendPoint(date="2026-01-10", value=132),
                TrendPoint(date="2026-01-15", value=135),
            ],
            insights=[
                "Blood pressure has increased by 12.5% in 2 weeks",
                "Average reading is now in pre-hypertension range",
                "Consider lifestyle modifications",
            ],
        )

    # ------------------------------------------------------------------
    # Wearables
    # ------------------------------------------------------------------

    async def get_wearable_devices(self, user_id: str) -> List[WearableDevice]:
        await self._delay(0.4)
        return self._copy(self._devices_for(user_id))

    async def connect_wearable_device(self, user_id: str, device_type: WearableDeviceType) -> WearableDevice:
        await self._delay(2.0)
        device = WearableDevice(
            id=self._new_id("device"),
            name=f"New {device_type}",
            type=device_type,
            manufacturer="Generic",
            model="Model X",
            is_connected=True,
            last_synced_at=self._iso_now(),
            battery_level=100,
            supported_data_types=["steps", "heart_rate"],
        )
        self._devices_for(user_id).append(device)
        logger.info("[%s] Connected %s for %s", self.label, device.id, user_id)
        return self._copy(device)

    async def sync_wearable_data(self, device_id: str) -> SyncResult:
        await self._delay(3.0)
        for devices in self._devices.values():
            for device in devices:
                if device.id == device_id:
                    device.last_synced_at = self._iso_now()
        return SyncResult(success=True, data_points_synced=SYNCED_DATA_POINTS)

    async def get_activity_summary(self, user_id: str, day: str) -> ActivitySummary:
        await self._delay(0.4)
        return ActivitySummary(
            date="2026-01-15",
            steps=8542,
            calories_burned=2145,
            active_minutes=65,
            distance=6.2,
            floors=12,
            heart_rate_zones=HeartRateZones(resting=1200, fat_burn=45, cardio=15, peak=5),
        )

    async def get_sleep_summary(self, user_id: str, day: str) -> SleepSummary:
        await self._delay(0.4)
        return SleepSummary(
            date="2026-01-14",
            total_sleep_time=442,
            deep_sleep=98,
            light_sleep=275,
            rem_sleep=69,
            awake_time=18,
            sleep_quality=85,
            bedtime="23:15:00",
            wakeup_time="06:37:00",
        )

    # ------------------------------------------------------------------
    # Predictive insights
    # ------------------------------------------------------------------

    async def get_predictive_insights(self, user_id: str) -> List[PredictiveInsight]:
        await self._delay(0.7)
        return self._copy(_MOCK_PREDICTIONS)

    async def get_risk_assessment(self, user_id: str, category: PredictionCategory) -> RiskAssessment:
        await self._delay(0.8)
        return RiskAssessment(
            category=category,
            risk_level="moderate",
            risk_score=35,
            factors=[
                RiskContribution(name="Blood Pressure", contribution=30, value="135/85 mmHg (High Normal)",
                                 is_modifiable=True),
                RiskContribution(name="Family History", contribution=25, value="Positive for cardiovascular disease",
                                 is_modifiable=False),
                RiskContribution(name="Physical Activity", contribution=20, value="Moderate (120 min/week)",
                                 is_modifiable=True),
                RiskContribution(name="BMI", contribution=15, value="24.5 (Normal)", is_modifiable=True),
                RiskContribution(name="Age", contribution=10, value="45 years", is_modifiable=False),
            ],
            recommendations=[
                "Increase physical activity to 180 min/week",
                "Monitor blood pressure daily",
                "Reduce sodium intake to <2000mg/day",
                "Annual cardiovascular screening",
            ],
            estimated_impact="Following recommendations could reduce risk by 15-20%",
        )

    async def get_health_score(self, user_id: str) -> HealthScore:
        await self._delay(0.5)
        return HealthScore(
            overall=78,
            categories=HealthScoreCategories(cardiovascular=74, metabolic=82, fitness=76, sleep=85, stress=68,
                                             nutrition=72),
            trend="improving",
            last_calculated="2026-01-15T00:00:00Z",
        )

    async def get_personalized_recommendations(self, user_id: str) -> List[PersonalizedRecommendation]:
        await self._delay(0.6)
        return [
            PersonalizedRecommendation(
                id="rec-001",
                category="Physical Activity",
                title="Start Morning Walks",
                description="Begin with 20-minute morning walks to boost cardiovascular health",
                priority="high",
                expected_benefit="Reduce cardiovascular risk by 10-15%",
                difficulty="easy",
                time_commitment="20 minutes daily",
                resources=[
                    RecommendationResource(type="app", title="Step Counter App"),
                    RecommendationResource(type="article", title="Benefits of Morning Walks",
                                           url="https://health.example.com/morning-walks"),
                ],
            ),
            PersonalizedRecommendation(
                id="rec-002",
                category="Nutrition",
                title="Reduce Sodium Intake",
                description="Limit salt consumption to less than 2000mg per day",
                priority="medium",
                expected_benefit="Lower blood pressure by 5-10 mmHg",
                difficulty="moderate",
                time_commitment="Ongoing lifestyle change",
            ),
        ]

    # ------------------------------------------------------------------
    # Telemedicine
    # ------------------------------------------------------------------

    async def get_doctors(self, specialization: Optional[str] = None) -> List[TelemedicineDoctor]:
        await self._delay(0.5)
        if specialization:
            needle = specialization.lower()
            return self._copy([d for d in _MOCK_DOCTORS if needle in d.specialization.lower()])
        return self._copy(_MOCK_DOCTORS)

    async def book_consultation(self, request: ConsultationRequest) -> TelemedicineConsultation:
        await self._delay(1.0)
        doctor = next((d for d in _MOCK_DOCTORS if d.id == request.doctor_id), None)
        consultation = TelemedicineConsultation(
            id=self._new_id("consult"),
            doctor_id=request.doctor_id,
            patient_id=request.patient_id,
            status="scheduled",
            type=request.type,
            scheduled_date=request.scheduled_date,
            scheduled_time=request.scheduled_time,
            duration=CONSULTATION_MINUTES,
            fee=doctor.consultation_fee if doctor else DEFAULT_CONSULTATION_FEE,
            symptoms=request.symptoms,
            meeting_link=f"{MEETING_ROOM_URL}/{self._new_id('room')}",
        )
        self._consultations.append(consultation)
        logger.info("[%s] Booked %s with %s (%s)", self.label, consultation.id, request.doctor_id, request.urgency)
        return self._copy(consultation)

    async def get_consultation_history(self, user_id: str) -> ConsultationHistory:
        await self._delay(0.4)
        consultations = self._consultations
        return ConsultationHistory(
            consultations=self._copy(consultations),
            total_consultations=len(consultations),
            upcoming_count=sum(1 for c in consultations if c.status == "scheduled"),
            completed_count=sum(1 for c in consultations if c.status == "completed"),
        )

    async def cancel_consultation(self, consultation_id: str, reason: str) -> None:
        await self._delay(0.5)
        consultation = next((c for c in self._consultations if c.id == consultation_id), None)
        if consultation is None:
            raise ServiceError("Consultation not found")
        consultation.status = "cancelled"
        consultation.notes = reason
