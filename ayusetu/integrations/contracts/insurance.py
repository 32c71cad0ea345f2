"""
Contracts for insurance and financial health: policy vault, claim tracking,
cashless hospitals, cost estimation and pre-authorization.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Literal, Optional

from pydantic import Field

from .base import ApiModel
from .ingestion import UploadFile

InsuranceProvider = Literal[
    "star-health", "max-bupa", "hdfc-ergo", "icici-lombard", "care-health", "bajaj-allianz", "other"
]
PolicyType = Literal["health", "critical-illness", "personal-accident", "family-floater", "senior-citizen"]
PolicyStatus = Literal["active", "expired", "grace-period", "lapsed", "pending-renewal"]
ClaimStatus = Literal["draft", "submitted", "under-review", "approved", "settled", "rejected", "reimbursed"]
ClaimType = Literal["cashless", "reimbursement", "pre-authorization"]
DocumentType = Literal[
    "discharge-summary", "bills", "prescriptions", "lab-reports", "consultation", "pre-auth", "other"
]


class PolicyMember(ApiModel):
    name: str
    relation: Literal["self", "spouse", "child", "parent", "sibling"]
    age: int
    sum_insured: float


class InsurancePolicy(ApiModel):
    id: str
    policy_number: str
    provider: InsuranceProvider
    provider_name: str
    policy_type: PolicyType
    status: PolicyStatus

    # Coverage, INR
    sum_insured: float
    coverage_amount: float
    used_amount: float
    remaining_amount: float

    start_date: str
    end_date: str
    renewal_date: str
    grace_period_days: int

    members_covered: List[PolicyMember] = Field(default_factory=list)
    is_primary: bool

    cashless_hospitals: int
    room_rent_limit: float  # per day
    pre_existing_waiting_period: int  # months
    co_payment_percentage: float

    policy_document: Optional[str] = None
    policy_card_url: Optional[str] = None

    premium_amount: float
    premium_frequency: Literal["monthly", "quarterly", "yearly"]
    next_premium_due: str


class ClaimDocument(ApiModel):
    id: str
    type: DocumentType
    name: str
    url: str
    uploaded_at: str
    size: int


class ClaimStatusHistory(ApiModel):
    status: ClaimStatus
    date: str
    remarks: Optional[str] = None
    updated_by: str


class Claim(ApiModel):
    id: str
    claim_number: str
    policy_id: str
    policy_number: str
    provider: str

    claim_type: ClaimType
    status: ClaimStatus
    claim_amount: float
    approved_amount: Optional[float] = None
    settled_amount: Optional[float] = None
    deducted_amount: Optional[float] = None

    patient_name: str
    hospital_name: str
    hospital_address: str
    admission_date: str
    discharge_date: Optional[str] = None
    diagnosis: str
    treatment_type: str

    claim_date: str
    last_updated_date: str
    settlement_date: Optional[str] = None

    documents: List[ClaimDocument] = Field(default_factory=list)
    status_history: List[ClaimStatusHistory] = Field(default_factory=list)

    rejection_reason: Optional[str] = None
    can_appeal: bool = False


class CashlessHospital(ApiModel):
    id: str
    name: str
    address: str
    city: str
    state: str
    pincode: str
    phone: str
    email: Optional[str] = None

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance: Optional[float] = None  # km

    specializations: List[str] = Field(default_factory=list)
    rating: Optional[float] = None
    review_count: Optional[int] = None

    providers: List[InsuranceProvider] = Field(default_factory=list)
    has_emergency: bool
    has_icu: bool = Field(alias="hasICU")
    bed_count: Optional[int] = None


class CostBreakdown(ApiModel):
    category: str
    description: str
    estimated_amount: float
    insured_amount: float
    patient_liability: float


class CostEstimation(ApiModel):
    id: str
    procedure_name: str
    hospital_name: str

    estimated_cost: float
    insurance_covered: float
    co_payment: float
    out_of_pocket: float

    breakdown: List[CostBreakdown] = Field(default_factory=list)

    policy_id: str
    policy_number: str
    available_coverage: float

    valid_until: str
    created_at: str


class PreAuthorization(ApiModel):
    id: str
    auth_number: str
    policy_id: str
    claim_id: Optional[str] = None

    status: Literal["pending", "approved", "rejected", "expired"]

    hospital_name: str
    doctor_name: str
    proposed_treatment: str
    estimated_cost: float
    approved_amount: Optional[float] = None

    request_date: str
    approval_date: Optional[str] = None
    valid_until: Optional[str] = None

    documents: List[ClaimDocument] = Field(default_factory=list)


class YearlyFinancialBreakdown(ApiModel):
    year: int
    premium_paid: float
    claims_settled: float
    claim_count: int


class FinancialSummary(ApiModel):
    total_coverage: float
    total_used: float
    total_remaining: float

    total_claims: int
    claims_approved: int
    claims_settled: int
    claims_pending: int
    claims_rejected: int

    total_claim_amount: float
    total_settled_amount: float
    total_reimbursed: float
    total_premium_paid: float

    yearly_breakdown: List[YearlyFinancialBreakdown] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class AddPolicyRequest(ApiModel):
    policy_number: str
    provider: InsuranceProvider
    policy_type: PolicyType
    sum_insured: float
    start_date: str
    end_date: str
    premium_amount: float
    members: List[PolicyMember] = Field(default_factory=list)


class ClaimsQuery(ApiModel):
    policy_id: Optional[str] = None
    status: Optional[ClaimStatus] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class SubmitClaimRequest(ApiModel):
    policy_id: str
    claim_type: ClaimType
    hospital_name: str
    admission_date: str
    diagnosis: str
    estimated_amount: float


class UpdateClaimRequest(ApiModel):
    claim_id: str
    additional_info: Optional[str] = None


class CashlessHospitalQuery(ApiModel):
    city: Optional[str] = None
    pincode: Optional[str] = None
    specialization: Optional[str] = None
    provider: Optional[InsuranceProvider] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = None  # km


class CostEstimationRequest(ApiModel):
    procedure_name: str
    hospital_id: Optional[str] = None
    policy_id: str


class PreAuthRequest(ApiModel):
    policy_id: str
    hospital_name: str
    doctor_name: str
    proposed_treatment: str
    estimated_cost: float
    planned_admission_date: str


def form_fields(request: ApiModel) -> Dict[str, str]:
    """Flatten a request into multipart text fields."""
    return {key: str(value) for key, value in request.to_wire().items()}


# ---------------------------------------------------------------------------
# Service interface
# ---------------------------------------------------------------------------

class InsuranceService(ABC):

    @abstractmethod
    async def get_policies(
        self, status: Optional[PolicyStatus] = None, include_expired: bool = False
    ) -> List[InsurancePolicy]:
        """Expired policies are left out unless ``include_expired`` is set."""

    @abstractmethod
    async def add_policy(self, request: AddPolicyRequest) -> InsurancePolicy:
        ...

    @abstractmethod
    async def get_claims(self, query: Optional[ClaimsQuery] = None) -> List[Claim]:
        ...

    @abstractmethod
    async def submit_claim(
        self, request: SubmitClaimRequest, documents: Optional[List[UploadFile]] = None
    ) -> Claim:
        ...

    @abstractmethod
    async def update_claim(
        self, request: UpdateClaimRequest, documents: Optional[List[UploadFile]] = None
    ) -> Claim:
        ...

    @abstractmethod
    async def search_cashless_hospitals(
        self, query: Optional[CashlessHospitalQuery] = None
    ) -> List[CashlessHospital]:
        ...

    @abstractmethod
    async def get_cost_estimation(self, request: CostEstimationRequest) -> CostEstimation:
        ...

    @abstractmethod
    async def request_pre_authorization(
        self, request: PreAuthRequest, documents: Optional[List[UploadFile]] = None
    ) -> PreAuthorization:
        ...

    @abstractmethod
    async def get_pre_authorizations(self, policy_id: str) -> List[PreAuthorization]:
        ...

    @abstractmethod
    async def get_financial_summary(
        self, start_year: Optional[int] = None, end_year: Optional[int] = None
    ) -> FinancialSummary:
        ...
