from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.base import wire_updates
from ayusetu.integrations.contracts.phr import (
    ConsentArtifact,
    ConsentAuditEntry,
    ConsentRequest,
    ConsentRiskWarning,
    ConsentTemplate,
    ConsentTemplateInput,
    EmergencyAccess,
    FamilyMember,
    GranularDataSelection,
    HealthRecord,
    HealthTimeline,
    PhrService,
    build_timeline,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


class RealPhrClient(RealHttpClientBase, PhrService):
    prefix = "/v1/phr"

    async def get_health_records(self) -> List[HealthRecord]:
        msg = "Failed to fetch health records"
        data = await self._call("GET", "/records", msg)
        return build_model_list(HealthRecord, data, msg)

    async def get_health_timeline(self) -> List[HealthTimeline]:
        return build_timeline(await self.get_health_records())

    async def get_consent_requests(self) -> List[ConsentRequest]:
        msg = "Failed to fetch consent requests"
        data = await self._call("GET", "/consent/requests", msg)
        return build_model_list(ConsentRequest, data, msg)

    async def get_active_consents(self) -> List[ConsentArtifact]:
        msg = "Failed to fetch active consents"
        data = await self._call("GET", "/consent/artifacts", msg)
        return build_model_list(ConsentArtifact, data, msg)

    async def approve_consent(self, consent_id: str) -> None:
        await self._call("POST", f"/consent/{consent_id}/approve", "Failed to approve consent")

    async def deny_consent(self, consent_id: str, reason: Optional[str] = None) -> None:
        await self._call("POST", f"/consent/{consent_id}/deny", "Failed to deny consent", json={"reason": reason})

    async def revoke_consent(self, consent_id: str) -> None:
        await self._call("POST", f"/consent/{consent_id}/revoke", "Failed to revoke consent")

    async def get_family_members(self) -> List[FamilyMember]:
        msg = "Failed to fetch family members"
        data = await self._call("GET", "/family", msg)
        return build_model_list(FamilyMember, data, msg)

    async def link_family_member(self, member_abha_number: str, relationship: str) -> None:
        await self._call(
            "POST",
            "/family/link",
            "Failed to link family member",
            json={"memberAbhaNumber": member_abha_number, "relationship": relationship},
        )

    async def get_consent_templates(self) -> List[ConsentTemplate]:
        msg = "Failed to fetch consent templates"
        data = await self._call("GET", "/consent/templates", msg)
        return build_model_list(ConsentTemplate, data, msg)

    async def create_consent_template(self, template: ConsentTemplateInput) -> ConsentTemplate:
        msg = "Failed to create consent template"
        data = await self._call("POST", "/consent/templates", msg, json=template.to_wire())
        return build_model(ConsentTemplate, data, msg)

    async def delete_consent_template(self, template_id: str) -> None:
        await self._call("DELETE", f"/consent/templates/{template_id}", "Failed to delete consent template")

    async def analyze_consent_risk(self, request: ConsentRequest) -> ConsentRiskWarning:
        msg = "Failed to analyze consent risk"
        data = await self._call("POST", "/consent/analyze-risk", msg, json={"consentRequest": request.to_wire()})
        return build_model(ConsentRiskWarning, data, msg)

    async def approve_consent_with_granular_selection(
        self, consent_id: str, selection: GranularDataSelection
    ) -> None:
        await self._call(
            "POST",
            f"/consent/{consent_id}/approve-granular",
            "Failed to approve consent",
            json={"selection": selection.to_wire()},
        )

    async def get_consent_audit_trail(self, consent_id: Optional[str] = None) -> List[ConsentAuditEntry]:
        msg = "Failed to fetch consent audit trail"
        path = f"/consent/{consent_id}/audit" if consent_id else "/consent/audit"
        data = await self._call("GET", path, msg)
        return build_model_list(ConsentAuditEntry, data, msg)

    async def get_emergency_access_config(self) -> EmergencyAccess:
        msg = "Failed to fetch emergency access config"
        data = await self._call("GET", "/emergency-access", msg)
        return build_model(EmergencyAccess, data, msg)

    async def update_emergency_access_config(self, updates: Dict[str, Any]) -> EmergencyAccess:
        msg = "Failed to update emergency access config"
        data = await self._call("PUT", "/emergency-access", msg, json=wire_updates(EmergencyAccess, updates))
        return build_model(EmergencyAccess, data, msg)

    async def trigger_emergency_access(self, contact_id: str, reason: str) -> None:
        await self._call(
            "POST",
            "/emergency-access/trigger",
            "Failed to trigger emergency access",
            json={"contactId": contact_id, "reason": reason},
        )

    async def get_expiring_consents(self, days: int = 7) -> List[ConsentArtifact]:
        msg = "Failed to fetch expiring consents"
        data = await self._call("GET", "/consent/expiring", msg, params={"days": days})
        return build_model_list(ConsentArtifact, data, msg)
