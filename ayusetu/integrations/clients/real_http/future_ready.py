from typing import List, Optional

from ayusetu.integrations.contracts.future_ready import (
    ActivitySummary,
    AiInsight,
    AiQuery,
    AiResponse,
    ConsultationHistory,
    ConsultationRequest,
    FutureReadyService,
    HealthScore,
    HealthTrendAnalysis,
    PersonalizedRecommendation,
    PredictionCategory,
    PredictiveInsight,
    RiskAssessment,
    SleepSummary,
    SyncResult,
    TelemedicineConsultation,
    TelemedicineDoctor,
    WearableDevice,
    WearableDeviceType,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealFutureReadyClient(RealHttpClientBase, FutureReadyService):
    """Spans four backend areas, so paths carry their own ``/ai``, ``/wearables``, ... roots."""

    async def get_ai_insights(self, user_id: str) -> List[AiInsight]:
        msg = "Failed to fetch AI insights"
        data = await self._call("GET", f"/ai/insights/{user_id}", msg)
        return build_model_list(AiInsight, data, msg)

    async def ask_ai(self, query: AiQuery) -> AiResponse:
        msg = "Failed to query AI assistant"
        data = await self._call("POST", "/ai/query", msg, json=query.to_wire())
        return build_model(AiResponse, data, msg)

    async def get_health_trends(self, user_id: str, metric: str) -> HealthTrendAnalysis:
        msg = "Failed to fetch health trends"
        data = await self._call("GET", f"/ai/trends/{user_id}/{metric}", msg)
        return build_model(HealthTrendAnalysis, data, msg)

    async def get_wearable_devices(self, user_id: str) -> List[WearableDevice]:
        msg = "Failed to fetch wearable devices"
        data = await self._call("GET", f"/wearables/devices/{user_id}", msg)
        return build_model_list(WearableDevice, data, msg)

    async def connect_wearable_device(self, user_id: str, device_type: WearableDeviceType) -> WearableDevice:
        msg = "Failed to connect wearable device"
        body = {"userId": user_id, "deviceType": device_type}
        data = await self._call("POST", "/wearables/connect", msg, json=body)
        return build_model(WearableDevice, data, msg)

    async def sync_wearable_data(self, device_id: str) -> SyncResult:
        msg = "Failed to sync wearable data"
        data = await self._call("POST", f"/wearables/sync/{device_id}", msg)
        return build_model(SyncResult, data, msg)

    async def get_activity_summary(self, user_id: str, day: str) -> ActivitySummary:
        msg = "Failed to fetch activity summary"
        data = await self._call("GET", f"/wearables/activity/{user_id}", msg, params={"date": day})
        return build_model(ActivitySummary, data, msg)

    async def get_sleep_summary(self, user_id: str, day: str) -> SleepSummary:
        msg = "Failed to fetch sleep summary"
        data = await self._call("GET", f"/wearables/sleep/{user_id}", msg, params={"date": day})
        return build_model(SleepSummary, data, msg)

    async def get_predictive_insights(self, user_id: str) -> List[PredictiveInsight]:
        msg = "Failed to fetch predictive insights"
        data = await self._call("GET", f"/predictive/insights/{user_id}", msg)
        return build_model_list(PredictiveInsight, data, msg)

    async def get_risk_assessment(self, user_id: str, category: PredictionCategory) -> RiskAssessment:
        msg = "Failed to fetch risk assessment"
        data = await self._call("GET", f"/predictive/risk/{user_id}/{category}", msg)
        return build_model(RiskAssessment, data, msg)

    async def get_health_score(self, user_id: str) -> HealthScore:
        msg = "Failed to fetch health score"
        data = await self._call("GET", f"/predictive/health-score/{user_id}", msg)
        return build_model(HealthScore, data, msg)

    async def get_personalized_recommendations(self, user_id: str) -> List[PersonalizedRecommendation]:
        msg = "Failed to fetch recommendations"
        data = await self._call("GET", f"/predictive/recommendations/{user_id}", msg)
        return build_model_list(PersonalizedRecommendation, data, msg)

    async def get_doctors(self, specialization: Optional[str] = None) -> List[TelemedicineDoctor]:
        msg = "Failed to fetch doctors"
        data = await self._call("GET", "/telemedicine/doctors", msg, params={"specialization": specialization})
        return build_model_list(TelemedicineDoctor, data, msg)

    async def book_consultation(self, request: ConsultationRequest) -> TelemedicineConsultation:
        msg = "Failed to book consultation"
        data = await self._call("POST", "/telemedicine/book", msg, json=request.to_wire())
        return build_model(TelemedicineConsultation, data, msg)

    async def get_consultation_history(self, user_id: str) -> ConsultationHistory:
        msg = "Failed to fetch consultation history"
        data = await self._call("GET", f"/telemedicine/history/{user_id}", msg)
        return build_model(ConsultationHistory, data, msg)

    async def cancel_consultation(self, consultation_id: str, reason: str) -> None:
        await self._call(
            "POST",
            f"/telemedicine/cancel/{consultation_id}",
            "Failed to cancel consultation",
            json={"reason": reason},
        )
