"""
Mock PHR Client.

Serves a fixed set of health records and keeps consent requests, consent
artifacts, family links, consent templates, the consent audit trail and the
emergency access config in memory.
"""

import logging
import re
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from ayusetu.integrations.contracts.base import merge_model
from ayusetu.integrations.contracts.phr import (
    ConsentArtifact,
    ConsentAuditEntry,
    ConsentRequest,
    ConsentRiskWarning,
    ConsentTemplate,
    ConsentTemplateInput,
    EmergencyAccess,
    EmergencyAccessContact,
    FamilyMember,
    GranularDataSelection,
    HealthRecord,
    HealthTimeline,
    PhrService,
    build_timeline,
)

from .base import MockClientBase

logger = logging.getLogger(__name__)

LONG_CONSENT_DAYS = 90

_EPISODE_FEVER = dict(episode_id="episode-viral-fever-2026-01", episode_title="Viral Fever (Jan 2026)")

_MOCK_RECORDS: List[HealthRecord] = [
    HealthRecord(id="rec-001", type="lab_report", title="Complete Blood Count (CBC)", date="2026-01-10",
                 hospital_name="Apollo Hospital", doctor_name="Dr. Sarah Johnson", provider_id="hfr-apollo-001",
                 provider_name="Apollo Hospital", visit_id="visit-2026-01-10-apollo-opd-1", **_EPISODE_FEVER,
                 condition_name="Fever", category="Pathology", tags=["blood test", "routine"]),
    HealthRecord(id="rec-002", type="opd_prescription", title="OPD Prescription", date="2026-01-08",
                 hospital_name="Max Healthcare", doctor_name="Dr. Rajesh Kumar", provider_id="hfr-max-001",
                 provider_name="Max Healthcare", visit_id="visit-2026-01-08-max-opd-1", **_EPISODE_FEVER,
                 condition_name="Fever", category="General Medicine", tags=["fever", "medications"]),
    HealthRecord(id="rec-003", type="imaging", title="X-Ray Chest (PA View)", date="2026-01-09",
                 hospital_name="Apollo Hospital", doctor_name="Dr. Sarah Johnson", provider_id="hfr-apollo-001",
                 provider_name="Apollo Hospital", visit_id="visit-2026-01-10-apollo-opd-1", **_EPISODE_FEVER,
                 condition_name="Cough",
                 dicom_study_url="https://dicom.example.org/viewer/studies/1.2.840.113619.2.55.3.604688433.781",
                 category="Radiology", tags=["x-ray", "dicom"]),
    HealthRecord(id="rec-004", type="ipd_discharge_summary", title="IPD Discharge Summary", date="2025-12-15",
                 hospital_name="Fortis Hospital", doctor_name="Dr. Priya Sharma", provider_id="hfr-fortis-001",
                 provider_name="Fortis Hospital", visit_id="visit-2025-12-10-fortis-ipd-1",
                 episode_id="episode-appendectomy-2025-12", episode_title="Appendectomy (Dec 2025)",
                 condition_name="Appendicitis", category="Surgery", tags=["surgery", "recovery"]),
    HealthRecord(id="rec-005", type="mental_health_record", title="Mental Health Note (Confidential)",
                 date="2025-08-20", hospital_name="MindCare Clinic", doctor_name="Dr. Kavya Rao",
                 provider_id="hfr-mh-001", provider_name="MindCare Clinic", visit_id="visit-2025-08-20-mh-1",
                 episode_id="episode-anxiety-2025", episode_title="Anxiety (2025)", condition_name="Anxiety",
                 category="Mental Health", tags=["confidential"], sensitivity="sensitive",
                 requires_explicit_unlock=True),
]


def display_data_type(data_type: str) -> str:
    """'lab_report' -> 'Lab Report'"""
    return re.sub(r"\b\w", lambda m: m.group().upper(), data_type.replace("_", " "))


def _days_between(start: str, end: str) -> int:
    return (date.fromisoformat(end[:10]) - date.fromisoformat(start[:10])).days


def assess_consent_risk(request: ConsentRequest) -> ConsentRiskWarning:
    """Flag sensitive data, long durations and insurance requesters."""
    level = "low"
    reasons: List[str] = []
    recommendations: List[str] = []

    if any("mental" in dt.lower() for dt in request.data_types):
        level = "high"
        reasons.append("Includes sensitive mental health records")
        recommendations.append("Review data carefully before approval")

    duration = _days_between(request.request_date, request.expiry_date)
    if duration > LONG_CONSENT_DAYS:
        if level == "low":
            level = "medium"
        reasons.append(f"Long access duration ({duration} days)")
        recommendations.append("Consider shorter consent duration")

    if request.requester_type == "insurance":
        if level == "low":
            level = "medium"
        reasons.append("Sharing with insurance provider")
        recommendations.append("Verify necessity of all requested data types")

    if level == "low":
        return ConsentRiskWarning(
            level="low",
            message="This consent request appears safe",
            reasons=["Standard data types", "Reasonable duration", "Trusted requester type"],
            recommendations=["Review and approve if expected"],
        )
    message = (
        "High risk - Review carefully before approval" if level == "high"
        else "Medium risk - Please review the details"
    )
    return ConsentRiskWarning(level=level, message=message, reasons=reasons, recommendations=recommendations)


class MockPhrClient(MockClientBase, PhrService):
    label = "PHR MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        # In-memory stores (reset on restart)
        self._requests: List[ConsentRequest] = [
            ConsentRequest(id="cons-req-001", requester_id="hpr-doc-001", requester_name="Dr. Rajesh Kumar",
                           requester_type="doctor", purpose="treatment",
                           data_types=["OPD Prescriptions", "Lab Reports"], from_date="2025-12-01",
                           to_date="2026-01-31", expiry_date="2026-02-15", status="pending",
                           request_date="2026-01-12"),
        ]
        self._artifacts: List[ConsentArtifact] = [
            ConsentArtifact(id="cons-art-001", consent_id="cons-req-000", status="active", granted_date="2025-11-01",
                            expiry_date="2026-03-01", purpose="treatment", requester_name="Apollo Hospital",
                            data_types=["Discharge Summaries", "Lab Reports"], access_count=3,
                            last_accessed_date="2026-01-02"),
        ]
        self._family: List[FamilyMember] = [
            FamilyMember(abha_number="98-7654-3210-0001", name="Emma Doe", relationship="child", age=7),
            FamilyMember(abha_number="98-7654-3210-0002", name="Jane Doe", relationship="spouse", age=32),
        ]
        self._templates: List[ConsentTemplate] = [
            ConsentTemplate(id="tmpl-001", name="Standard Treatment Consent",
                            description="Default consent for treatment purposes with common data types",
                            purpose="treatment", data_types=["opd_prescription", "lab_report", "imaging"],
                            default_duration=30, granular_selection=False, auto_approve=False,
                            requires_review=True, created_date="2025-12-01", usage_count=5),
            ConsentTemplate(id="tmpl-002", name="Insurance Claim - Basic",
                            description="Minimal data sharing for insurance claims", purpose="insurance",
                            data_types=["ipd_discharge_summary", "lab_report"], default_duration=60,
                            granular_selection=True, auto_approve=False, requires_review=True,
                            created_date="2025-11-15", usage_count=2),
            ConsentTemplate(id="tmpl-003", name="Emergency Access",
                            description="Quick emergency consent with full data access", purpose="emergency",
                            data_types=["opd_prescription", "lab_report", "imaging", "ipd_discharge_summary",
                                        "vaccination"],
                            default_duration=7, granular_selection=False, auto_approve=True,
                            requires_review=False, created_date="2026-01-01", usage_count=1),
        ]
        self._audit: List[ConsentAuditEntry] = [
            ConsentAuditEntry(id="audit-001", consent_id="cons-art-001", action="created",
                              timestamp="2025-11-01T10:30:00Z", actor="Patient", actor_type="patient",
                              details="Consent request received from Apollo Hospital"),
            ConsentAuditEntry(id="audit-002", consent_id="cons-art-001", action="approved",
                              timestamp="2025-11-01T14:45:00Z", actor="Patient", actor_type="patient",
                              details="Consent approved for treatment purpose"),
            ConsentAuditEntry(id="audit-003", consent_id="cons-art-001", action="accessed",
                              timestamp="2025-11-05T09:15:00Z", actor="Apollo Hospital", actor_type="provider",
                              details="Health records accessed for treatment",
                              data_accessed=["Discharge Summaries", "Lab Reports"]),
            ConsentAuditEntry(id="audit-004", consent_id="cons-art-001", action="accessed",
                              timestamp="2025-12-10T11:20:00Z", actor="Apollo Hospital", actor_type="provider",
                              details="Health records accessed for treatment", data_accessed=["Lab Reports"]),
            ConsentAuditEntry(id="audit-005", consent_id="cons-art-001", action="accessed",
                              timestamp="2026-01-02T16:30:00Z", actor="Apollo Hospital", actor_type="provider",
                              details="Health records accessed for treatment",
                              data_accessed=["Discharge Summaries"]),
        ]
        self._emergency_access = EmergencyAccess(
            id="emergency-001",
            enabled=True,
            emergency_contacts=[
                EmergencyAccessContact(id="ec-001", name="Jane Doe", relationship="Spouse", phone="+91-9876543210",
                                       email="jane.doe@example.com"),
                EmergencyAccessContact(id="ec-002", name="Dr. Emergency Services", relationship="Emergency Contact",
                                       phone="+91-9123456789"),
            ],
            access_level="basic",
            data_types=["opd_prescription", "lab_report", "vaccination", "surgery_note"],
            auto_expiry=True,
            expiry_hours=24,
            requires_otp=True,
        )

    def _find_request(self, consent_id: str) -> Optional[ConsentRequest]:
        return next((r for r in self._requests if r.id == consent_id), None)

    def _grant(self, request: ConsentRequest, data_types: List[str]) -> ConsentArtifact:
        artifact = ConsentArtifact(
            id=self._new_id("cons-art"),
            consent_id=request.id,
            status="active",
            granted_date=date.today().isoformat(),
            expiry_date=request.expiry_date,
            purpose=request.purpose,
            requester_name=request.requester_name,
            data_types=data_types,
            access_count=0,
        )
        self._artifacts.insert(0, artifact)
        request.status = "approved"
        return artifact

    def _audit_entry(self, consent_id: str, action: str, actor: str, actor_type: str, details: str) -> None:
        self._audit.append(
            ConsentAuditEntry(
                id=self._new_id("audit"),
                consent_id=consent_id,
                action=action,
                timestamp=self._iso_now(),
                actor=actor,
                actor_type=actor_type,
                details=details,
            )
        )

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    async def get_health_records(self) -> List[HealthRecord]:
        await self._delay()
        return self._copy(_MOCK_RECORDS)

    async def get_health_timeline(self) -> List[HealthTimeline]:
        return build_timeline(await self.get_health_records())

    # ------------------------------------------------------------------
    # Consent
    # ------------------------------------------------------------------

    async def get_consent_requests(self) -> List[ConsentRequest]:
        await self._delay()
        return self._copy(self._requests)

    async def get_active_consents(self) -> List[ConsentArtifact]:
        await self._delay()
        return self._copy([a for a in self._artifacts if a.status == "active"])

    async def approve_consent(self, consent_id: str) -> None:
        await self._delay(0.6)
        request = self._find_request(consent_id)
        if request is None:
            logger.info("[%s] No consent request %s to approve", self.label, consent_id)
            return
        artifact = self._grant(request, list(request.data_types))
        logger.info("[%s] Consent %s approved as %s", self.label, consent_id, artifact.id)

    async def deny_consent(self, consent_id: str, reason: Optional[str] = None) -> None:
        await self._delay(0.6)
        request = self._find_request(consent_id)
        if request is not None:
            request.status = "denied"
        logger.info("[%s] Consent %s denied (reason=%s)", self.label, consent_id, reason)

    async def revoke_consent(self, consent_id: str) -> None:
        await self._delay(0.6)
        for artifact in self._artifacts:
            if consent_id in (artifact.id, artifact.consent_id):
                artifact.status = "revoked"
        logger.info("[%s] Consent %s revoked", self.label, consent_id)

    # ------------------------------------------------------------------
    # Family
    # ------------------------------------------------------------------

    async def get_family_members(self) -> List[FamilyMember]:
        await self._delay()
        return self._copy(self._family)

    async def link_family_member(self, member_abha_number: str, relationship: str) -> None:
        await self._delay(0.8)
        self._family.append(
            FamilyMember(abha_number=member_abha_number, name="Linked Member", relationship=relationship, age=30)
        )

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    async def get_consent_templates(self) -> List[ConsentTemplate]:
        await self._delay()
        return self._copy(self._templates)

    async def create_consent_template(self, template: ConsentTemplateInput) -> ConsentTemplate:
        await self._delay(0.6)
        created = ConsentTemplate(
            **template.model_dump(),
            id=self._new_id("tmpl"),
            created_date=self._iso_now(),
            usage_count=0,
        )
        self._templates.append(created)
        return self._copy(created)

    async def delete_consent_template(self, template_id: str) -> None:
        await self._delay(0.5)
        self._templates = [t for t in self._templates if t.id != template_id]

    # ------------------------------------------------------------------
    # Risk, granular approval, audit
    # ------------------------------------------------------------------

    async def analyze_consent_risk(self, request: ConsentRequest) -> ConsentRiskWarning:
        await self._delay(0.8)
        return assess_consent_risk(request)

    async def approve_consent_with_granular_selection(
        self, consent_id: str, selection: GranularDataSelection
    ) -> None:
        await self._delay(0.8)
        request = self._find_request(consent_id)
        if request is None:
            logger.info("[%s] No consent request %s to approve", self.label, consent_id)
            return
        artifact = self._grant(request, [display_data_type(dt) for dt in selection.data_types])
        self._audit_entry(
            artifact.id,
            "approved",
            "Patient",
            "patient",
            f"Approved with granular selection: {len(selection.record_ids)} records, "
            f"{len(selection.data_types)} data types",
        )

    async def get_consent_audit_trail(self, consent_id: Optional[str] = None) -> List[ConsentAuditEntry]:
        await self._delay()
        if consent_id:
            return self._copy([e for e in self._audit if e.consent_id == consent_id])
        return self._copy(self._audit)

    # ------------------------------------------------------------------
    # Emergency access
    # ------------------------------------------------------------------

    async def get_emergency_access_config(self) -> EmergencyAccess:
        await self._delay()
        return self._copy(self._emergency_access)

    async def update_emergency_access_config(self, updates: Dict[str, Any]) -> EmergencyAccess:
        await self._delay(0.6)
        self._emergency_access = merge_model(
            self._emergency_access, updates, "Failed to update emergency access config"
        )
        self._audit_entry("emergency", "modified", "Patient", "patient", "Updated emergency access configuration")
        return self._copy(self._emergency_access)

    async def trigger_emergency_access(self, contact_id: str, reason: str) -> None:
        await self._delay(1.0)
        logger.info("[%s] Break-glass access triggered by %s", self.label, contact_id)
        self._audit_entry(
            "emergency", "accessed", contact_id, "system", f"Emergency break-glass access triggered. Reason: {reason}"
        )

    async def get_expiring_consents(self, days: int = 7) -> List[ConsentArtifact]:
        await self._delay()
        today = date.today()
        horizon = today + timedelta(days=days)
        return self._copy(
            [
                a for a in self._artifacts
                if a.status == "active" and today <= date.fromisoformat(a.expiry_date[:10]) <= horizon
            ]
        )
