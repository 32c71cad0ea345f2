import httpx
import pytest

from ayusetu.config import AyuSetuConfig
from ayusetu.integrations import build_services
from ayusetu.integrations.clients.mocks import MockAbdmClient, MockEmergencyClient
from ayusetu.integrations.clients.real_http import RealAbdmClient, RealEmergencyClient
from ayusetu.integrations.contracts import (
    AbdmService,
    AccessibilityService,
    AppointmentsService,
    ComplianceService,
    DataExportService,
    EmergencyService,
    FamilyWellnessService,
    FutureReadyService,
    InsightsService,
    InsuranceService,
    MonetizationService,
    NotificationsService,
    PhrService,
    RecordIngestionService,
    SecurityService,
)

SERVICE_TYPES = {
    "abdm": AbdmService,
    "accessibility": AccessibilityService,
    "appointments": AppointmentsService,
    "compliance": ComplianceService,
    "data_export": DataExportService,
    "emergency": EmergencyService,
    "family_wellness": FamilyWellnessService,
    "future_ready": FutureReadyService,
    "ingestion": RecordIngestionService,
    "insights": InsightsService,
    "insurance": InsuranceService,
    "monetization": MonetizationService,
    "notifications": NotificationsService,
    "phr": PhrService,
    "security": SecurityService,
}


def test_developer_mode_builds_mocks(mock_services):
    assert mock_services.mode == "MOCK"
    assert mock_services.api is None
    assert isinstance(mock_services.abdm, MockAbdmClient)
    assert isinstance(mock_services.emergency, MockEmergencyClient)
    for name, service_type in SERVICE_TYPES.items():
        assert isinstance(getattr(mock_services, name), service_type)


@pytest.mark.asyncio
async def test_live_mode_builds_http_clients(live_services, live_config):
    assert live_services.mode == "REAL_HTTP"
    assert live_services.api.base_url == live_config.base_url
    assert isinstance(live_services.abdm, RealAbdmClient)
    assert isinstance(live_services.emergency, RealEmergencyClient)
    for name, service_type in SERVICE_TYPES.items():
        assert isinstance(getattr(live_services, name), service_type)


@pytest.mark.asyncio
async def test_production_environment_targets_production_gateway():
    config = AyuSetuConfig(developer_mode=False, environment="production", client_id="c", client_secret="s")
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"accessToken": "t"})

    async with build_services(config, transport=httpx.MockTransport(handler)) as services:
        assert await services.abdm.get_session_token() == "t"

    assert seen[0].url.host == "healthid.abdm.gov.in"


@pytest.mark.asyncio
async def test_mock_and_live_return_the_same_shapes(mock_services, live_services, router):
    mock_score = await mock_services.security.get_privacy_shield_score()
    router.add("GET", "/security/privacy-shield-score", mock_score.to_wire())

    live_score = await live_services.security.get_privacy_shield_score()

    assert live_score == mock_score


@pytest.mark.asyncio
async def test_mock_services_close_cleanly(mock_services):
    async with mock_services as services:
        assert services.mode == "MOCK"


def test_build_services_reads_environment(monkeypatch):
    monkeypatch.setenv("AYUSETU_DEVELOPER_MODE", "true")
    monkeypatch.setenv("AYUSETU_MOCK_DELAY_SCALE", "0")

    services = build_services()

    assert services.mode == "MOCK"
    assert services.config.mock_delay_scale == 0.0
