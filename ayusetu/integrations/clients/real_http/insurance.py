from typing import List, Optional

from ayusetu.integrations.contracts.ingestion import UploadFile
from ayusetu.integrations.contracts.insurance import (
    AddPolicyRequest,
    CashlessHospital,
    CashlessHospitalQuery,
    Claim,
    ClaimsQuery,
    CostEstimation,
    CostEstimationRequest,
    FinancialSummary,
    InsurancePolicy,
    InsuranceService,
    PolicyStatus,
    PreAuthorization,
    PreAuthRequest,
    SubmitClaimRequest,
    UpdateClaimRequest,
    form_fields,
)
from ayusetu.integrations.errors import build_model, build_model_list

from .base import RealHttpClientBase


def _document_parts(documents: Optional[List[UploadFile]]) -> list:
    return [("documents", doc.as_part()) for doc in documents or []]


class RealInsuranceClient(RealHttpClientBase, InsuranceService):
    prefix = "/insurance"

    async def get_policies(
        self, status: Optional[PolicyStatus] = None, include_expired: bool = False
    ) -> List[InsurancePolicy]:
        msg = "Failed to fetch policies"
        params = {"status": status, "includeExpired": True if include_expired else None}
        data = await self._call("GET", "/policies", msg, params=params)
        return build_model_list(InsurancePolicy, data, msg)

    async def add_policy(self, request: AddPolicyRequest) -> InsurancePolicy:
        msg = "Failed to add policy"
        data = await self._call("POST", "/policies", msg, json=request.to_wire())
        return build_model(InsurancePolicy, data, msg)

    async def get_claims(self, query: Optional[ClaimsQuery] = None) -> List[Claim]:
        msg = "Failed to fetch claims"
        params = query.to_wire() if query else None
        data = await self._call("GET", "/claims", msg, params=params)
        return build_model_list(Claim, data, msg)

    async def submit_claim(
        self, request: SubmitClaimRequest, documents: Optional[List[UploadFile]] = None
    ) -> Claim:
        msg = "Failed to submit claim"
        data = await self._call(
            "POST", "/claims", msg, data=form_fields(request), files=_document_parts(documents)
        )
        return build_model(Claim, data, msg)

    async def update_claim(
        self, request: UpdateClaimRequest, documents: Optional[List[UploadFile]] = None
    ) -> Claim:
        msg = "Failed to update claim"
        path = f"/claims/{request.claim_id}"
        if documents:
            data = await self._call(
                "PUT", path, msg, data=form_fields(request), files=_document_parts(documents)
            )
        else:
            data = await self._call("PUT", path, msg, json=request.to_wire())
        return build_model(Claim, data, msg)

    async def search_cashless_hospitals(
        self, query: Optional[CashlessHospitalQuery] = None
    ) -> List[CashlessHospital]:
        msg = "Failed to search hospitals"
        params = query.to_wire() if query else None
        data = await self._call("GET", "/cashless-hospitals", msg, params=params)
        return build_model_list(CashlessHospital, data, msg)

    async def get_cost_estimation(self, request: CostEstimationRequest) -> CostEstimation:
        msg = "Failed to get cost estimation"
        data = await self._call("POST", "/cost-estimation", msg, json=request.to_wire())
        return build_model(CostEstimation, data, msg)

    async def request_pre_authorization(
        self, request: PreAuthRequest, documents: Optional[List[UploadFile]] = None
    ) -> PreAuthorization:
        msg = "Failed to request pre-authorization"
        data = await self._call(
            "POST", "/pre-authorization", msg, data=form_fields(request), files=_document_parts(documents)
        )
        return build_model(PreAuthorization, data, msg)

    async def get_pre_authorizations(self, policy_id: str) -> List[PreAuthorization]:
        msg = "Failed to fetch pre-authorizations"
        data = await self._call("GET", "/pre-authorization", msg, params={"policyId": policy_id})
        return build_model_list(PreAuthorization, data, msg)

    async def get_financial_summary(
        self, start_year: Optional[int] = None, end_year: Optional[int] = None
    ) -> FinancialSummary:
        msg = "Failed to fetch financial summary"
        params = {"startYear": start_year, "endYear": end_year}
        data = await self._call("GET", "/financial-summary", msg, params=params)
        return build_model(FinancialSummary, data, msg)
