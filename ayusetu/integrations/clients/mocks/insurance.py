"""
Mock Insurance Client.

Two active policies and one expired one, two claims, three cashless
hospitals in Hyderabad. Submitted claims are kept in memory.
"""

import logging
from typing import List, Optional

from ayusetu.integrations.contracts.ingestion import UploadFile
from ayusetu.integrations.contracts.insurance import (
    AddPolicyRequest,
    CashlessHospital,
    CashlessHospitalQuery,
    Claim,
    ClaimDocument,
    ClaimsQuery,
    ClaimStatusHistory,
    CostBreakdown,
    CostEstimation,
    CostEstimationRequest,
    FinancialSummary,
    InsurancePolicy,
    InsuranceService,
    PolicyMember,
    PolicyStatus,
    PreAuthorization,
    PreAuthRequest,
    SubmitClaimRequest,
    UpdateClaimRequest,
    YearlyFinancialBreakdown,
)
from ayusetu.integrations.errors import ServiceError

from .base import MockClientBase

logger = logging.getLogger(__name__)


def provider_display_name(provider: str) -> str:
    """``star-health`` -> ``Star Health``."""
    return " ".join(word[:1].upper() + word[1:] for word in provider.split("-"))


def _seed_policies() -> List[InsurancePolicy]:
    return [
        InsurancePolicy(
            id="policy-1", policy_number="POL123456789", provider="star-health",
            provider_name="Star Health Insurance", policy_type="family-floater", status="active",
            sum_insured=500000, coverage_amount=500000, used_amount=125000, remaining_amount=375000,
            start_date="2025-04-01", end_date="2026-03-31", renewal_date="2026-03-31", grace_period_days=30,
            members_covered=[
                PolicyMember(name="John Doe", relation="self", age=35, sum_insured=500000),
                PolicyMember(name="Jane Doe", relation="spouse", age=32, sum_insured=500000),
                PolicyMember(name="Jack Doe", relation="child", age=8, sum_insured=500000),
            ],
            is_primary=True, cashless_hospitals=8500, room_rent_limit=5000, pre_existing_waiting_period=24,
            co_payment_percentage=10, premium_amount=18500, premium_frequency="yearly",
            next_premium_due="2026-03-31",
        ),
        InsurancePolicy(
            id="policy-2", policy_number="POL987654321", provider="hdfc-ergo",
            provider_name="HDFC ERGO Health", policy_type="senior-citizen", status="active",
            sum_insured=300000, coverage_amount=300000, used_amount=0, remaining_amount=300000,
            start_date="2025-06-15", end_date="2026-06-14", renewal_date="2026-06-14", grace_period_days=15,
            members_covered=[PolicyMember(name="Robert Doe", relation="parent", age=68, sum_insured=300000)],
            is_primary=False, cashless_hospitals=7200, room_rent_limit=3000, pre_existing_waiting_period=36,
            co_payment_percentage=20, premium_amount=24000, premium_frequency="yearly",
            next_premium_due="2026-06-14",
        ),
        InsurancePolicy(
            id="policy-3", policy_number="POL555000111", provider="icici-lombard",
            provider_name="ICICI Lombard", policy_type="personal-accident", status="expired",
            sum_insured=200000, coverage_amount=200000, used_amount=0, remaining_amount=0,
            start_date="2023-04-01", end_date="2024-03-31", renewal_date="2024-03-31", grace_period_days=30,
            members_covered=[PolicyMember(name="John Doe", relation="self", age=35, sum_insured=200000)],
            is_primary=False, cashless_hospitals=6500, room_rent_limit=2500, pre_existing_waiting_period=0,
            co_payment_percentage=0, premium_amount=3200, premium_frequency="yearly",
            next_premium_due="2024-03-31",
        ),
    ]


def _seed_claims() -> List[Claim]:
    return [
        Claim(
            id="claim-1", claim_number="CLM20260112001", policy_id="policy-1", policy_number="POL123456789",
            provider="Star Health Insurance", claim_type="cashless", status="approved",
            claim_amount=125000, approved_amount=112500, settled_amount=101250, deducted_amount=11250,
            patient_name="John Doe", hospital_name="Apollo Hospital",
            hospital_address="Jubilee Hills, Hyderabad, Telangana 500033",
            admission_date="2025-12-20", discharge_date="2025-12-28", diagnosis="Acute Appendicitis",
            treatment_type="Surgery - Appendectomy", claim_date="2025-12-28", last_updated_date="2026-01-10",
            settlement_date="2026-01-10",
            documents=[
                ClaimDocument(id="doc-1", type="discharge-summary", name="Discharge_Summary.pdf",
                              url="/documents/discharge.pdf", uploaded_at="2025-12-28", size=245760),
                ClaimDocument(id="doc-2", type="bills", name="Hospital_Bills.pdf",
                              url="/documents/bills.pdf", uploaded_at="2025-12-28", size=524288),
            ],
            status_history=[
                ClaimStatusHistory(status="submitted", date="2025-12-28", remarks="Claim submitted",
                                   updated_by="Patient"),
                ClaimStatusHistory(status="under-review", date="2025-12-30", remarks="Under review by insurer",
                                   updated_by="Star Health"),
                ClaimStatusHistory(status="approved", date="2026-01-05", remarks="Claim approved",
                                   updated_by="Star Health"),
                ClaimStatusHistory(status="settled", date="2026-01-10", remarks="Amount settled to hospital",
                                   updated_by="Star Health"),
            ],
        ),
        Claim(
            id="claim-2", claim_number="CLM20260108002", policy_id="policy-1", policy_number="POL123456789",
            provider="Star Health Insurance", claim_type="reimbursement", status="under-review",
            claim_amount=35000, patient_name="Jane Doe", hospital_name="Care Hospital",
            hospital_address="Banjara Hills, Hyderabad, Telangana 500034",
            admission_date="2026-01-05", discharge_date="2026-01-07", diagnosis="Viral Fever with Dehydration",
            treatment_type="Inpatient - IV Fluids", claim_date="2026-01-08", last_updated_date="2026-01-12",
            documents=[
                ClaimDocument(id="doc-3", type="bills", name="Medical_Bills.pdf",
                              url="/documents/bills2.pdf", uploaded_at="2026-01-08", size=324576),
            ],
            status_history=[
                ClaimStatusHistory(status="submitted", date="2026-01-08",
                                   remarks="Claim submitted for reimbursement", updated_by="Patient"),
                ClaimStatusHistory(status="under-review", date="2026-01-10",
                                   remarks="Documents under verification", updated_by="Star Health"),
            ],
        ),
    ]


_CASHLESS_HOSPITALS: List[CashlessHospital] = [
    CashlessHospital(
        id="hospital-1", name="Apollo Hospital", address="Jubilee Hills Road No. 72", city="Hyderabad",
        state="Telangana", pincode="500033", phone="+91 40 2360 7777", email="info@apollohospitals.com",
        latitude=17.4312, longitude=78.4095, distance=2.5,
        specializations=["Cardiology", "Neurology", "Orthopedics", "Oncology", "Gastroenterology"],
        rating=4.5, review_count=1250, providers=["star-health", "hdfc-ergo", "max-bupa", "icici-lombard"],
        has_emergency=True, has_icu=True, bed_count=500,
    ),
    CashlessHospital(
        id="hospital-2", name="Care Hospital", address="Road No. 1, Banjara Hills", city="Hyderabad",
        state="Telangana", pincode="500034", phone="+91 40 6165 6565",
        latitude=17.4189, longitude=78.4489, distance=3.2,
        specializations=["Emergency Medicine", "Critical Care", "Pediatrics", "Obstetrics", "Surgery"],
        rating=4.3, review_count=890, providers=["star-health", "care-health", "bajaj-allianz"],
        has_emergency=True, has_icu=True, bed_count=350,
    ),
    CashlessHospital(
        id="hospital-3", name="Yashoda Hospital", address="Raj Bhavan Road, Somajiguda", city="Hyderabad",
        state="Telangana", pincode="500082", phone="+91 40 2344 2222",
        latitude=17.4292, longitude=78.4569, distance=4.1,
        specializations=["Nephrology", "Urology", "Liver Transplant", "Cardiology", "Neurosurgery"],
        rating=4.4, review_count=1050, providers=["star-health", "hdfc-ergo", "icici-lombard", "max-bupa"],
        has_emergency=True, has_icu=True, bed_count=450,
    ),
]

_COST_ESTIMATION = CostEstimation(
    id="est-1",
    procedure_name="Knee Replacement Surgery",
    hospital_name="Apollo Hospital",
    estimated_cost=350000,
    insurance_covered=315000,
    co_payment=35000,
    out_of_pocket=35000,
    breakdown=[
        CostBreakdown(category="Surgery Charges", description="Surgeon fees and operation theater",
                      estimated_amount=150000, insured_amount=135000, patient_liability=15000),
        CostBreakdown(category="Hospitalization", description="Room rent and nursing care (5 days)",
                      estimated_amount=75000, insured_amount=67500, patient_liability=7500),
        CostBreakdown(category="Implants & Consumables", description="Knee implant and surgical materials",
                      estimated_amount=100000, insured_amount=90000, patient_liability=10000),
        CostBreakdown(category="Diagnostics", description="Pre-op tests and post-op monitoring",
                      estimated_amount=15000, insured_amount=13500, patient_liability=1500),
        CostBreakdown(category="Physiotherapy", description="Post-surgery rehabilitation (10 sessions)",
                      estimated_amount=10000, insured_amount=9000, patient_liability=1000),
    ],
    policy_id="policy-1",
    policy_number="POL123456789",
    available_coverage=375000,
    valid_until="2026-02-15",
    created_at="2026-01-15",
)

_PRE_AUTHORIZATION = PreAuthorization(
    id="preauth-1",
    auth_number="PA20260115001",
    policy_id="policy-1",
    status="approved",
    hospital_name="Apollo Hospital",
    doctor_name="Dr. Rajesh Kumar",
    proposed_treatment="Angioplasty with Stent",
    estimated_cost=280000,
    approved_amount=252000,
    request_date="2026-01-12",
    approval_date="2026-01-14",
    valid_until="2026-02-14",
)

_FINANCIAL_SUMMARY = FinancialSummary(
    total_coverage=800000,
    total_used=125000,
    total_remaining=675000,
    total_claims=2,
    claims_approved=1,
    claims_settled=1,
    claims_pending=1,
    claims_rejected=0,
    total_claim_amount=160000,
    total_settled_amount=101250,
    total_reimbursed=0,
    total_premium_paid=42500,
    yearly_breakdown=[
        YearlyFinancialBreakdown(year=2025, premium_paid=42500, claims_settled=101250, claim_count=1),
        YearlyFinancialBreakdown(year=2024, premium_paid=40000, claims_settled=0, claim_count=0),
    ],
)


class MockInsuranceClient(MockClientBase, InsuranceService):
    label = "INSURANCE MOCK"

    def __init__(self, config=None) -> None:
        super().__init__(config)
        # In-memory stores (reset on restart)
        self._policies: List[InsurancePolicy] = _seed_policies()
        self._claims: List[Claim] = _seed_claims()

    def _documents(self, files: Optional[List[UploadFile]]) -> List[ClaimDocument]:
        return [
            ClaimDocument(
                id=self._new_id("doc"),
                type="other",
                name=f.name,
                url=f"/documents/{f.name}",
                uploaded_at=self._iso_now(),
                size=len(f.content),
            )
            for f in files or []
        ]

    # ------------------------------------------------------------------
    # Policies
    # ------------------------------------------------------------------

    async def get_policies(
        self, status: Optional[PolicyStatus] = None, include_expired: bool = False
    ) -> List[InsurancePolicy]:
        policies = self._policies
        if status:
            policies = [p for p in policies if p.status == status]
        if not include_expired:
            policies = [p for p in policies if p.status != "expired"]
        return self._copy(policies)

    async def add_policy(self, request: AddPolicyRequest) -> InsurancePolicy:
        await self._delay(1.0)
        policy = InsurancePolicy(
            id=self._new_id("policy"),
            policy_number=request.policy_number,
            provider=request.provider,
            provider_name=provider_display_name(request.provider),
            policy_type=request.policy_type,
            status="active",
            sum_insured=request.sum_insured,
            coverage_amount=request.sum_insured,
            used_amount=0,
            remaining_amount=request.sum_insured,
            start_date=request.start_date,
            end_date=request.end_date,
            renewal_date=request.end_date,
            grace_period_days=30,
            members_covered=request.members,
            is_primary=True,
            cashless_hospitals=8500,
            room_rent_limit=5000,
            pre_existing_waiting_period=24,
            co_payment_percentage=10,
            premium_amount=request.premium_amount,
            premium_frequency="yearly",
            next_premium_due=request.end_date,
        )
        self._policies.append(policy)
        logger.info("[%s] Policy %s added (%s)", self.label, policy.policy_number, policy.provider_name)
        return self._copy(policy)

    # ------------------------------------------------------------------
    # Claims
    # ------------------------------------------------------------------

    async def get_claims(self, query: Optional[ClaimsQuery] = None) -> List[Claim]:
        query = query or ClaimsQuery()
        claims = self._claims
        if query.policy_id:
            claims = [c for c in claims if c.policy_id == query.policy_id]
        if query.status:
            claims = [c for c in claims if c.status == query.status]
        if query.start_date:
            claims = [c for c in claims if c.claim_date[:10] >= query.start_date[:10]]
        if query.end_date:
            claims = [c for c in claims if c.claim_date[:10] <= query.end_date[:10]]
        return self._copy(claims)

    async def submit_claim(
        self, request: SubmitClaimRequest, documents: Optional[List[UploadFile]] = None
    ) -> Claim:
        await self._delay(2.0)
        now = self._iso_now()
        # Unknown policies fall back to the first policy on file
        policy = next((p for p in self._policies if p.id == request.policy_id), self._policies[0])
        claim = Claim(
            id=self._new_id("claim"),
            claim_number=f"CLM{str(self._now_ms())[-8:]}",
            policy_id=policy.id,
            policy_number=policy.policy_number,
            provider=policy.provider_name,
            claim_type=request.claim_type,
            status="submitted",
            claim_amount=request.estimated_amount,
            patient_name="John Doe",
            hospital_name=request.hospital_name,
            hospital_address="123 Medical Street, Mumbai",
            admission_date=request.admission_date,
            diagnosis=request.diagnosis,
            treatment_type="Inpatient",
            claim_date=now,
            last_updated_date=now,
            documents=self._documents(documents),
            status_history=[
                ClaimStatusHistory(status="submitted", date=now, remarks="Claim submitted successfully",
                                   updated_by="Patient"),
            ],
        )
        self._claims.append(claim)
        logger.info("[%s] Claim %s submitted for %s", self.label, claim.claim_number, request.policy_id)
        return self._copy(claim)

    async def update_claim(
        self, request: UpdateClaimRequest, documents: Optional[List[UploadFile]] = None
    ) -> Claim:
        await self._delay(1.0)
        claim = next((c for c in self._claims if c.id == request.claim_id), None)
        if claim is None:
            raise ServiceError("Claim not found")
        claim.documents.extend(self._documents(documents))
        claim.last_updated_date = self._iso_now()
        return self._copy(claim)

    # ------------------------------------------------------------------
    # Hospitals / estimates / pre-auth / summary
    # ------------------------------------------------------------------

    async def search_cashless_hospitals(
        self, query: Optional[CashlessHospitalQuery] = None
    ) -> List[CashlessHospital]:
        query = query or CashlessHospitalQuery()
        hospitals = _CASHLESS_HOSPITALS
        if query.city:
            city = query.city.lower()
            hospitals = [h for h in hospitals if city in h.city.lower()]
        if query.specialization:
            wanted = query.specialization.lower()
            hospitals = [h for h in hospitals if any(wanted in s.lower() for s in h.specializations)]
        if query.provider:
            hospitals = [h for h in hospitals if query.provider in h.providers]
        return self._copy(hospitals)

    async def get_cost_estimation(self, request: CostEstimationRequest) -> CostEstimation:
        await self._delay(1.5)
        return self._copy(_COST_ESTIMATION)

    async def request_pre_authorization(
        self, request: PreAuthRequest, documents: Optional[List[UploadFile]] = None
    ) -> PreAuthorization:
        await self._delay(2.0)
        return PreAuthorization(
            id=self._new_id("preauth"),
            auth_number=f"PA{str(self._now_ms())[-8:]}",
            policy_id=request.policy_id,
            status="pending",
            hospital_name=request.hospital_name,
            doctor_name=request.doctor_name,
            proposed_treatment=request.proposed_treatment,
            estimated_cost=request.estimated_cost,
            request_date=self._iso_now(),
            documents=self._documents(documents),
        )

    async def get_pre_authorizations(self, policy_id: str) -> List[PreAuthorization]:
        return [self._copy(_PRE_AUTHORIZATION)]

    async def get_financial_summary(
        self, start_year: Optional[int] = None, end_year: Optional[int] = None
    ) -> FinancialSummary:
        return self._copy(_FINANCIAL_SUMMARY)
