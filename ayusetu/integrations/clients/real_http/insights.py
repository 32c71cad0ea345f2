from typing import List, Optional

from ayusetu.integrations.contracts.insights import (
    DiseaseTracker,
    DiseaseType,
    EarlyRiskIndicator,
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
    SymptomEntry,
    SymptomInput,
    SymptomPattern,
    TrendMetric,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealInsightsClient(RealHttpClientBase, InsightsService):
    prefix = "/v1/insights"

    async def get_health_summary(self) -> HealthSummary:
        msg = "Failed to fetch health summary"
        data = await self._call("GET", "/summary", msg)
        return build_model(HealthSummary, data, msg)

    async def get_health_trends(self, metrics: Optional[List[TrendMetric]] = None) -> List[HealthTrend]:
        msg = "Failed to fetch health trends"
        params = {"metrics": ",".join(metrics) if metrics else None}
        data = await self._call("GET", "/trends", msg, params=params)
        return build_model_list(HealthTrend, data, msg)

    async def get_lab_result_flags(self) -> List[LabResultFlag]:
        msg = "Failed to fetch lab result flags"
        data = await self._call("GET", "/lab-flags", msg)
        return build_model_list(LabResultFlag, data, msg)

    async def get_early_risk_indicators(self) -> List[EarlyRiskIndicator]:
        msg = "Failed to fetch risk indicators"
        data = await self._call("GET", "/risk-indicators", msg)
        return build_model_list(EarlyRiskIndicator, data, msg)

    async def get_health_insights(self, category: Optional[InsightCategory] = None) -> List[HealthInsight]:
        msg = "Failed to fetch health insights"
        data = await self._call("GET", "/insights", msg, params={"category": category})
        return build_model_list(HealthInsight, data, msg)

    async def get_disease_trackers(self) -> List[DiseaseTracker]:
        msg = "Failed to fetch disease trackers"
        data = await self._call("GET", "/trackers", msg)
        return build_model_list(DiseaseTracker, data, msg)

    async def create_disease_tracker(self, disease: DiseaseType, display_name: str) -> DiseaseTracker:
        msg = "Failed to create disease tracker"
        body = {"disease": disease, "displayName": display_name}
        data = await self._call("POST", "/trackers", msg, json=body)
        return build_model(DiseaseTracker, data, msg)

    async def update_tracker_metric(self, tracker_id: str, metric_name: str, value: float) -> DiseaseTracker:
        msg = "Failed to update tracker metric"
        body = {"metricName": metric_name, "value": value}
        data = await self._call("PUT", f"/trackers/{tracker_id}/metrics", msg, json=body)
        return build_model(DiseaseTracker, data, msg)

    async def get_medications(self) -> List[Medication]:
        msg = "Failed to fetch medications"
        data = await self._call("GET", "/medications", msg)
        return build_model_list(Medication, data, msg)

    async def add_medication(self, medication: MedicationInput) -> Medication:
        msg = "Failed to add medication"
        data = await self._call("POST", "/medications", msg, json=medication.to_wire())
        return build_model(Medication, data, msg)

    async def get_medication_adherence(self) -> List[MedicationAdherence]:
        msg = "Failed to fetch medication adherence"
        data = await self._call("GET", "/medications/adherence", msg)
        return build_model_list(MedicationAdherence, data, msg)

    async def log_medication_taken(self, medication_id: str, taken_time: Optional[str] = None) -> MedicationLog:
        msg = "Failed to log medication"
        body = {"status": "taken"}
        if taken_time:
            body["takenTime"] = taken_time
        data = await self._call("POST", f"/medications/{medication_id}/log", msg, json=body)
        return build_model(MedicationLog, data, msg)

    async def get_lifestyle_entries(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[LifestyleEntry]:
        msg = "Failed to fetch lifestyle entries"
        params = {"startDate": start_date, "endDate": end_date}
        data = await self._call("GET", "/lifestyle", msg, params=params)
        return build_model_list(LifestyleEntry, data, msg)

    async def add_lifestyle_entry(self, entry: LifestyleEntryInput) -> LifestyleEntry:
        msg = "Failed to add lifestyle entry"
        data = await self._call("POST", "/lifestyle", msg, json=entry.to_wire())
        return build_model(LifestyleEntry, data, msg)

    async def get_lifestyle_summary(self, day: str) -> LifestyleSummary:
        msg = "Failed to fetch lifestyle summary"
        data = await self._call("GET", f"/lifestyle/summary/{day}", msg)
        return build_model(LifestyleSummary, data, msg)

    async def get_symptoms(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[SymptomEntry]:
        msg = "Failed to fetch symptoms"
        params = {"startDate": start_date, "endDate": end_date}
        data = await self._call("GET", "/symptoms", msg, params=params)
        return build_model_list(SymptomEntry, data, msg)

    async def add_symptom(self, symptom: SymptomInput) -> SymptomEntry:
        msg = "Failed to add symptom"
        data = await self._call("POST", "/symptoms", msg, json=symptom.to_wire())
        return build_model(SymptomEntry, data, msg)

    async def get_symptom_patterns(self) -> List[SymptomPattern]:
        msg = "Failed to fetch symptom patterns"
        data = await self._call("GET", "/symptoms/patterns", msg)
        return build_model_list(SymptomPattern, data, msg)
