from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.family_wellness import (
    AddFamilyMemberRequest,
    AgeGroup,
    CompletePreventiveCareRequest,
    CreateWellnessGoalRequest,
    FamilyMember,
    FamilyWellnessService,
    GoalStatus,
    HealthRiskAssessment,
    LogWellnessRequest,
    PreventiveCareItem,
    PreventiveCareQuery,
    RecordVaccinationRequest,
    UpdateFamilyMemberRequest,
    VaccinationRecord,
    VaccinationsQuery,
    VaccineSchedule,
    WellnessGoal,
    WellnessLog,
    WellnessLogsQuery,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealFamilyWellnessClient(RealHttpClientBase, FamilyWellnessService):
    prefix = "/family-wellness"

    async def get_family_members(self) -> List[FamilyMember]:
        msg = "Failed to fetch family members"
        data = await self._call("GET", "/members", msg)
        return build_model_list(FamilyMember, data, msg)

    async def add_family_member(self, request: AddFamilyMemberRequest) -> FamilyMember:
        msg = "Failed to add family member"
        data = await self._call("POST", "/members", msg, json=request.to_wire())
        return build_model(FamilyMember, data, msg)

    async def update_family_member(self, request: UpdateFamilyMemberRequest) -> FamilyMember:
        msg = "Failed to update family member"
        body = request.to_wire()
        body.pop("memberId")
        data = await self._call("PUT", f"/members/{request.member_id}", msg, json=body)
        return build_model(FamilyMember, data, msg)

    async def get_vaccinations(self, query: Optional[VaccinationsQuery] = None) -> List[VaccinationRecord]:
        msg = "Failed to fetch vaccinations"
        params = query.to_wire() if query else None
        data = await self._call("GET", "/vaccinations", msg, params=params)
        return build_model_list(VaccinationRecord, data, msg)

    async def get_vaccine_schedule(self, age_group: Optional[AgeGroup] = None) -> List[VaccineSchedule]:
        msg = "Failed to fetch vaccine schedule"
        data = await self._call("GET", "/vaccinations/schedule", msg, params={"ageGroup": age_group})
        return build_model_list(VaccineSchedule, data, msg)

    async def record_vaccination(self, request: RecordVaccinationRequest) -> VaccinationRecord:
        msg = "Failed to record vaccination"
        data = await self._call("POST", "/vaccinations", msg, json=request.to_wire())
        return build_model(VaccinationRecord, data, msg)

    async def get_wellness_logs(self, query: WellnessLogsQuery) -> List[WellnessLog]:
        msg = "Failed to fetch wellness logs"
        data = await self._call("GET", "/wellness-logs", msg, params=query.to_wire())
        return build_model_list(WellnessLog, data, msg)

    async def log_wellness(self, request: LogWellnessRequest) -> WellnessLog:
        msg = "Failed to log wellness"
        data = await self._call("POST", "/wellness-logs", msg, json=request.to_wire())
        return build_model(WellnessLog, data, msg)

    async def get_preventive_care(self, query: Optional[PreventiveCareQuery] = None) -> List[PreventiveCareItem]:
        msg = "Failed to fetch preventive care"
        params = query.to_wire() if query else None
        data = await self._call("GET", "/preventive-care", msg, params=params)
        return build_model_list(PreventiveCareItem, data, msg)

    async def complete_preventive_care(self, request: CompletePreventiveCareRequest) -> PreventiveCareItem:
        msg = "Failed to complete preventive care"
        body = request.to_wire()
        body.pop("itemId")
        data = await self._call("POST", f"/preventive-care/{request.item_id}/complete", msg, json=body)
        return build_model(PreventiveCareItem, data, msg)

    async def get_health_risk_assessment(self, family_member_id: str) -> HealthRiskAssessment:
        msg = "Failed to fetch health risk assessment"
        data = await self._call("GET", f"/risk-assessment/{family_member_id}", msg)
        return build_model(HealthRiskAssessment, data, msg)

    async def create_health_risk_assessment(
        self, family_member_id: str, answers: Dict[str, Any]
    ) -> HealthRiskAssessment:
        msg = "Failed to create health risk assessment"
        body = {"familyMemberId": family_member_id, "answers": answers}
        data = await self._call("POST", "/risk-assessment", msg, json=body)
        return build_model(HealthRiskAssessment, data, msg)

    async def get_wellness_goals(
        self, family_member_id: str, status: Optional[GoalStatus] = None
    ) -> List[WellnessGoal]:
        msg = "Failed to fetch wellness goals"
        params = {"familyMemberId": family_member_id, "status": status}
        data = await self._call("GET", "/goals", msg, params=params)
        return build_model_list(WellnessGoal, data, msg)

    async def create_wellness_goal(self, request: CreateWellnessGoalRequest) -> WellnessGoal:
        msg = "Failed to create wellness goal"
        data = await self._call("POST", "/goals", msg, json=request.to_wire())
        return build_model(WellnessGoal, data, msg)

    async def update_goal_progress(self, goal_id: str, current_value: float) -> WellnessGoal:
        msg = "Failed to update goal progress"
        data = await self._call("PUT", f"/goals/{goal_id}/progress", msg, json={"currentValue": current_value})
        return build_model(WellnessGoal, data, msg)
