"""
Single place where mock vs live clients are chosen.

``config.developer_mode`` picks the in-memory fakes; otherwise every live
client shares one ApiClient pointed at ``config.base_url``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import httpx

from ayusetu.config import AyuSetuConfig

from .clients.mocks import (
    MockAbdmClient,
    MockAccessibilityClient,
    MockAppointmentsClient,
    MockComplianceClient,
    MockDataExportClient,
    MockEmergencyClient,
    MockFamilyWellnessClient,
    MockFutureReadyClient,
    MockInsightsClient,
    MockInsuranceClient,
    MockMonetizationClient,
    MockNotificationsClient,
    MockPhrClient,
    MockRecordIngestionClient,
    MockSecurityClient,
)
from .clients.real_http import (
    RealAbdmClient,
    RealAccessibilityClient,
    RealAppointmentsClient,
    RealComplianceClient,
    RealDataExportClient,
    RealEmergencyClient,
    RealFamilyWellnessClient,
    RealFutureReadyClient,
    RealInsightsClient,
    RealInsuranceClient,
    RealMonetizationClient,
    RealNotificationsClient,
    RealPhrClient,
    RealRecordIngestionClient,
    RealSecurityClient,
)
from .contracts import (
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
from .http_client import ApiClient

logger = logging.getLogger(__name__)

MOCK_BUILDERS: Dict[str, Callable[[AyuSetuConfig], Any]] = {
    "abdm": MockAbdmClient,
    "accessibility": MockAccessibilityClient,
    "appointments": MockAppointmentsClient,
    "compliance": MockComplianceClient,
    "data_export": MockDataExportClient,
    "emergency": MockEmergencyClient,
    "family_wellness": MockFamilyWellnessClient,
    "future_ready": MockFutureReadyClient,
    "ingestion": MockRecordIngestionClient,
    "insights": MockInsightsClient,
    "insurance": MockInsuranceClient,
    "monetization": MockMonetizationClient,
    "notifications": MockNotificationsClient,
    "phr": MockPhrClient,
    "security": MockSecurityClient,
}

LIVE_BUILDERS: Dict[str, Callable[[ApiClient, AyuSetuConfig], Any]] = {
    "abdm": lambda api, config: RealAbdmClient(api, config),
    "accessibility": lambda api, config: RealAccessibilityClient(api),
    "appointments": lambda api, config: RealAppointmentsClient(api),
    "compliance": lambda api, config: RealComplianceClient(api),
    "data_export": lambda api, config: RealDataExportClient(api),
    "emergency": lambda api, config: RealEmergencyClient(api),
    "family_wellness": lambda api, config: RealFamilyWellnessClient(api),
    "future_ready": lambda api, config: RealFutureReadyClient(api),
    "ingestion": lambda api, config: RealRecordIngestionClient(api),
    "insights": lambda api, config: RealInsightsClient(api),
    "insurance": lambda api, config: RealInsuranceClient(api),
    "monetization": lambda api, config: RealMonetizationClient(api),
    "notifications": lambda api, config: RealNotificationsClient(api),
    "phr": lambda api, config: RealPhrClient(api),
    "security": lambda api, config: RealSecurityClient(api),
}


@dataclass
class AyuSetuServices:
    config: AyuSetuConfig
    abdm: AbdmService
    accessibility: AccessibilityService
    appointments: AppointmentsService
    compliance: ComplianceService
    data_export: DataExportService
    emergency: EmergencyService
    family_wellness: FamilyWellnessService
    future_ready: FutureReadyService
    ingestion: RecordIngestionService
    insights: InsightsService
    insurance: InsuranceService
    monetization: MonetizationService
    notifications: NotificationsService
    phr: PhrService
    security: SecurityService
    api: Optional[ApiClient] = None

    @property
    def mode(self) -> str:
        return "MOCK" if self.api is None else "REAL_HTTP"

    async def aclose(self) -> None:
        if self.api is not None:
            await self.api.aclose()

    async def __aenter__(self) -> "AyuSetuServices":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


def build_services(
    config: Optional[AyuSetuConfig] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AyuSetuServices:
    """Build every domain service for the configured mode.

    ``transport`` is handed to the shared httpx client in live mode (tests use
    ``httpx.MockTransport``); it is ignored in developer mode.
    """
    config = config or AyuSetuConfig.from_env()

    if config.developer_mode:
        logger.info("Building AyuSetu services in MOCK mode")
        clients = {name: builder(config) for name, builder in MOCK_BUILDERS.items()}
        return AyuSetuServices(config=config, **clients)

    logger.info("Building AyuSetu services in REAL_HTTP mode against %s (%s)", config.base_url, config.environment)
    api = ApiClient(config.base_url, timeout_seconds=config.timeout_seconds, transport=transport)
    clients = {name: builder(api, config) for name, builder in LIVE_BUILDERS.items()}
    return AyuSetuServices(config=config, api=api, **clients)
