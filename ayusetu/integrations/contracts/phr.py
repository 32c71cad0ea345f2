"""
Contracts for the personal health record (PHR): health records and their
timeline, consent requests and artifacts, family links, consent templates,
the consent audit trail and break-glass emergency access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel

HealthRecordType = Literal[
    "opd_prescription",
    "ipd_discharge_summary",
    "lab_report",
    "imaging",
    "vaccination",
    "surgery_note",
    "emergency_visit",
    "dental_record",
    "mental_health_record",
    "other",
]
TimelineEventType = Literal["consultation", "test", "prescription", "admission", "vaccination"]
RequesterType = Literal["doctor", "hospital", "lab", "insurance"]
ConsentPurpose = Literal["treatment", "insurance", "research", "emergency"]
RiskLevel = Literal["low", "medium", "high"]


class HealthRecord(ApiModel):
    id: str
    type: HealthRecordType
    title: str
    date: str  # YYYY-MM-DD

    hospital_name: str
    doctor_name: Optional[str] = None

    condition_name: Optional[str] = None
    visit_id: Optional[str] = None
    provider_id: Optional[str] = None
    provider_name: Optional[str] = None
    episode_id: Optional[str] = None
    episode_title: Optional[str] = None

    file_url: Optional[str] = None
    thumbnail: Optional[str] = None
    dicom_study_url: Optional[str] = Field(default=None, alias="dicomStudyUrl")

    sensitivity: Optional[Literal["standard", "sensitive"]] = None
    requires_explicit_unlock: Optional[bool] = None

    category: str
    tags: List[str] = Field(default_factory=list)
    is_local: bool = False


class TimelineEvent(ApiModel):
    id: str
    type: TimelineEventType
    title: str
    description: str
    location: str
    record_id: Optional[str] = None


class HealthTimeline(ApiModel):
    date: str
    events: List[TimelineEvent] = Field(default_factory=list)


class ConsentRequest(ApiModel):
    id: str
    requester_id: str
    requester_name: str
    requester_type: RequesterType
    purpose: ConsentPurpose
    data_types: List[str] = Field(default_factory=list)
    from_date: str
    to_date: str
    expiry_date: str
    status: Literal["pending", "approved", "denied", "expired", "revoked"]
    request_date: str


class ConsentArtifact(ApiModel):
    id: str
    consent_id: str
    status: Literal["active", "expired", "revoked"]
    granted_date: str
    expiry_date: str
    purpose: str
    requester_name: str
    data_types: List[str] = Field(default_factory=list)
    access_count: int = 0
    last_accessed_date: Optional[str] = None


class FamilyMember(ApiModel):
    abha_number: str
    name: str
    relationship: str
    age: int


class ConsentTemplateInput(ApiModel):
    name: str
    description: str
    purpose: ConsentPurpose
    data_types: List[str] = Field(default_factory=list)
    default_duration: int  # days
    granular_selection: bool = False
    auto_approve: bool = False
    requires_review: bool = True


class ConsentTemplate(ConsentTemplateInput):
    id: str
    created_date: str
    usage_count: int = 0


class ConsentAuditEntry(ApiModel):
    id: str
    consent_id: str
    action: Literal["created", "approved", "denied", "accessed", "modified", "revoked", "expired"]
    timestamp: str
    actor: str
    actor_type: Literal["patient", "provider", "system"]
    details: str
    data_accessed: Optional[List[str]] = None


class ConsentRiskWarning(ApiModel):
    level: RiskLevel
    message: str
    reasons: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class GranularDataSelection(ApiModel):
    record_ids: List[str] = Field(default_factory=list)
    data_types: List[str] = Field(default_factory=list)
    date_range: Optional[Dict[str, str]] = None


class EmergencyAccessContact(ApiModel):
    id: str
    name: str
    relationship: str
    phone: str
    email: Optional[str] = None
    can_access_emergency_data: bool = True


class EmergencyAccess(ApiModel):
    id: str
    enabled: bool
    emergency_contacts: List[EmergencyAccessContact] = Field(default_factory=list)
    access_level: Literal["basic", "full"] = "basic"
    data_types: List[str] = Field(default_factory=list)
    auto_expiry: bool = True
    expiry_hours: int = 24
    requires_otp: bool = Field(default=True, alias="requiresOTP")
    audit_trail: List[ConsentAuditEntry] = Field(default_factory=list)


TIMELINE_EVENT_TYPES: Dict[str, TimelineEventType] = {
    "opd_prescription": "prescription",
    "lab_report": "test",
    "imaging": "test",
    "ipd_discharge_summary": "admission",
    "surgery_note": "admission",
    "emergency_visit": "admission",
    "vaccination": "vaccination",
}

TIMELINE_TITLES = {
    "opd_prescription": "OPD Prescription",
    "ipd_discharge_summary": "IPD Discharge",
    "lab_report": "Lab Report",
    "imaging": "Imaging",
    "vaccination": "Vaccination",
    "surgery_note": "Surgery Note",
    "emergency_visit": "Emergency Visit",
    "dental_record": "Dental Record",
    "mental_health_record": "Mental Health",
}


def build_timeline(records: List[HealthRecord]) -> List[HealthTimeline]:
    """Group records into one timeline entry per date, newest first, events sorted by title."""
    by_date: Dict[str, List[TimelineEvent]] = {}
    for record in records:
        by_date.setdefault(record.date, []).append(
            TimelineEvent(
                id=f"evt-{record.id}",
                type=TIMELINE_EVENT_TYPES.get(record.type, "consultation"),
                title=TIMELINE_TITLES.get(record.type, "Health Record"),
                description=record.title,
                location=record.provider_name or record.hospital_name,
                record_id=record.id,
            )
        )
    return [
        HealthTimeline(date=day, events=sorted(events, key=lambda e: e.title))
        for day, events in sorted(by_date.items(), reverse=True)
    ]


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class PhrService(ABC):

    # Records
    @abstractmethod
    async def get_health_records(self) -> List[HealthRecord]:
        ...

    @abstractmethod
    async def get_health_timeline(self) -> List[HealthTimeline]:
        """Records grouped by date, newest date first."""

    # Consent
    @abstractmethod
    async def get_consent_requests(self) -> List[ConsentRequest]:
        ...

    @abstractmethod
    async def get_active_consents(self) -> List[ConsentArtifact]:
        ...

    @abstractmethod
    async def approve_consent(self, consent_id: str) -> None:
        ...

    @abstractmethod
    async def deny_consent(self, consent_id: str, reason: Optional[str] = None) -> None:
        ...

    @abstractmethod
    async def revoke_consent(self, consent_id: str) -> None:
        """Revoke by artifact id or by the originating consent id."""

    # Family
    @abstractmethod
    async def get_family_members(self) -> List[FamilyMember]:
        ...

    @abstractmethod
    async def link_family_member(self, member_abha_number: str, relationship: str) -> None:
        ...

    # Templates
    @abstractmethod
    async def get_consent_templates(self) -> List[ConsentTemplate]:
        ...

    @abstractmethod
    async def create_consent_template(self, template: ConsentTemplateInput) -> ConsentTemplate:
        ...

    @abstractmethod
    async def delete_consent_template(self, template_id: str) -> None:
        ...

    # Risk, granular approval, audit
    @abstractmethod
    async def analyze_consent_risk(self, request: ConsentRequest) -> ConsentRiskWarning:
        ...

    @abstractmethod
    async def approve_consent_with_granular_selection(
        self, consent_id: str, selection: GranularDataSelection
    ) -> None:
        ...

    @abstractmethod
    async def get_consent_audit_trail(self, consent_id: Optional[str] = None) -> List[ConsentAuditEntry]:
        ...

    # Emergency access
    @abstractmethod
    async def get_emergency_access_config(self) -> EmergencyAccess:
        ...

    @abstractmethod
    async def update_emergency_access_config(self, updates: Dict[str, Any]) -> EmergencyAccess:
        ...

    @abstractmethod
    async def trigger_emergency_access(self, contact_id: str, reason: str) -> None:
        ...

    @abstractmethod
    async def get_expiring_consents(self, days: int = 7) -> List[ConsentArtifact]:
        """Active artifacts expiring between today and ``days`` from now."""
