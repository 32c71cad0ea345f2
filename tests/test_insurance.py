import pytest

from ayusetu.integrations.clients.mocks import MockInsuranceClient
from ayusetu.integrations.clients.mocks.insurance import provider_display_name
from ayusetu.integrations.contracts.ingestion import UploadFile
from ayusetu.integrations.contracts.insurance import (
    AddPolicyRequest,
    CashlessHospitalQuery,
    ClaimsQuery,
    CostEstimationRequest,
    PreAuthRequest,
    SubmitClaimRequest,
    UpdateClaimRequest,
    form_fields,
)
from ayusetu.integrations.errors import ServiceError


def test_provider_display_name():
    assert provider_display_name("star-health") == "Star Health"
    assert provider_display_name("icici-lombard") == "Icici Lombard"
    assert provider_display_name("other") == "Other"


@pytest.mark.asyncio
async def test_expired_policies_hidden_by_default(config):
    client = MockInsuranceClient(config)

    visible = await client.get_policies()
    everything = await client.get_policies(include_expired=True)

    assert {p.status for p in visible} == {"active"}
    assert "expired" in {p.status for p in everything}
    assert len(everything) == len(visible) + 1


@pytest.mark.asyncio
async def test_add_policy_derives_display_name(config):
    client = MockInsuranceClient(config)

    policy = await client.add_policy(
        AddPolicyRequest(
            policy_number="POL999",
            provider="hdfc-ergo",
            policy_type="health",
            sum_insured=300000,
            start_date="2026-01-01",
            end_date="2026-12-31",
            premium_amount=12000,
        )
    )

    assert policy.provider_name == "Hdfc Ergo"
    assert policy.remaining_amount == 300000
    assert policy.id in {p.id for p in await client.get_policies()}


@pytest.mark.asyncio
async def test_submit_claim_uses_policy_details(config):
    client = MockInsuranceClient(config)

    claim = await client.submit_claim(
        SubmitClaimRequest(
            policy_id="policy-1",
            claim_type="reimbursement",
            hospital_name="Care Hospital",
            admission_date="2026-01-10",
            diagnosis="Dengue",
            estimated_amount=45000,
        ),
        documents=[UploadFile(name="bill.pdf", mime_type="application/pdf", content=b"12345")],
    )

    assert claim.claim_number.startswith("CLM")
    assert len(claim.claim_number) == 11
    assert claim.policy_number == "POL123456789"
    assert claim.status == "submitted"
    assert claim.documents[0].name == "bill.pdf"
    assert claim.documents[0].size == 5
    submitted = await client.get_claims(ClaimsQuery(status="submitted"))
    assert claim.id in {c.id for c in submitted}


@pytest.mark.asyncio
async def test_submit_claim_for_unknown_policy_falls_back(config):
    client = MockInsuranceClient(config)

    claim = await client.submit_claim(
        SubmitClaimRequest(
            policy_id="policy-x",
            claim_type="cashless",
            hospital_name="Apollo Hospital",
            admission_date="2026-01-10",
            diagnosis="Fracture",
            estimated_amount=90000,
        )
    )

    first_policy = (await client.get_policies())[0]
    assert claim.policy_id == first_policy.id
    assert claim.policy_number == first_policy.policy_number
    assert claim.provider == first_policy.provider_name


@pytest.mark.asyncio
async def test_claims_submitted_today_fall_inside_a_range_ending_today(config):
    client = MockInsuranceClient(config)
    claim = await client.submit_claim(
        SubmitClaimRequest(
            policy_id="policy-1",
            claim_type="reimbursement",
            hospital_name="Care Hospital",
            admission_date="2026-01-10",
            diagnosis="Dengue",
            estimated_amount=45000,
        )
    )
    today = claim.claim_date[:10]

    same_day = await client.get_claims(ClaimsQuery(start_date=today, end_date=today))
    before = await client.get_claims(ClaimsQuery(end_date="2000-01-01"))

    assert claim.id in {c.id for c in same_day}
    assert claim.id not in {c.id for c in before}


@pytest.mark.asyncio
async def test_update_claim_appends_documents(config):
    client = MockInsuranceClient(config)

    updated = await client.update_claim(
        UpdateClaimRequest(claim_id="claim-1", additional_info="discharge summary attached"),
        documents=[UploadFile(name="discharge.pdf")],
    )

    assert updated.documents[-1].name == "discharge.pdf"
    with pytest.raises(ServiceError):
        await client.update_claim(UpdateClaimRequest(claim_id="claim-404"))


@pytest.mark.asyncio
async def test_cashless_hospital_filters(config):
    client = MockInsuranceClient(config)

    cardiology = await client.search_cashless_hospitals(CashlessHospitalQuery(specialization="cardio"))
    care_health = await client.search_cashless_hospitals(CashlessHospitalQuery(provider="care-health"))
    elsewhere = await client.search_cashless_hospitals(CashlessHospitalQuery(city="Pune"))

    assert [h.id for h in cardiology] == ["hospital-1", "hospital-3"]
    assert [h.id for h in care_health] == ["hospital-2"]
    assert elsewhere == []


@pytest.mark.asyncio
async def test_estimates_pre_auth_and_summary(config):
    client = MockInsuranceClient(config)

    estimate = await client.get_cost_estimation(
        CostEstimationRequest(procedure_name="Knee Replacement Surgery", policy_id="policy-1")
    )
    assert estimate.estimated_cost == estimate.insurance_covered + estimate.out_of_pocket

    pre_auth = await client.request_pre_authorization(
        PreAuthRequest(
            policy_id="policy-1",
            hospital_name="Apollo Hospital",
            doctor_name="Dr. Rajesh Kumar",
            proposed_treatment="Angioplasty",
            estimated_cost=250000,
            planned_admission_date="2026-02-01",
        )
    )
    assert pre_auth.status == "pending"
    assert pre_auth.auth_number.startswith("PA")

    summary = await client.get_financial_summary()
    assert summary.total_coverage == summary.total_used + summary.total_remaining


def test_form_fields_are_wire_strings():
    fields = form_fields(
        SubmitClaimRequest(
            policy_id="policy-1",
            claim_type="cashless",
            hospital_name="Apollo",
            admission_date="2026-01-10",
            diagnosis="Fracture",
            estimated_amount=90000,
        )
    )

    assert fields["policyId"] == "policy-1"
    assert fields["estimatedAmount"] == "90000.0"


@pytest.mark.asyncio
async def test_live_policies_only_flag_expired_when_asked(live_services, router):
    router.add("GET", "/insurance/policies", [])

    await live_services.insurance.get_policies()
    assert "includeExpired" not in router.last("GET", "/insurance/policies").url.params

    await live_services.insurance.get_policies(include_expired=True)
    assert router.last("GET", "/insurance/policies").url.params["includeExpired"] == "true"


@pytest.mark.asyncio
async def test_live_claim_submission_is_multipart(live_services, router):
    router.add("POST", "/insurance/claims", {"id": "x"})

    with pytest.raises(ServiceError):
        await live_services.insurance.submit_claim(
            SubmitClaimRequest(
                policy_id="policy-1",
                claim_type="cashless",
                hospital_name="Apollo",
                admission_date="2026-01-10",
                diagnosis="Fracture",
                estimated_amount=90000,
            ),
            documents=[UploadFile(name="bill.pdf", content=b"pdf")],
        )

    body = router.last("POST", "/insurance/claims").read()
    assert b'name="documents"; filename="bill.pdf"' in body
    assert b'name="policyId"' in body
