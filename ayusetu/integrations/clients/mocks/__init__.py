"""
Mock (developer-mode) service clients.

These clients return fake but realistic responses without calling ABDM or the
AyuSetu backend. They are used when:
- AYUSETU_DEVELOPER_MODE is on (the default)
- We want to exercise app flows end-to-end without network access

Important:
- Mock clients implement the SAME interface as the live HTTP clients.
- Mock clients return data shaped according to ayusetu/integrations/contracts/*
"""

from .abdm import MockAbdmClient
from .accessibility import MockAccessibilityClient
from .appointments import MockAppointmentsClient
from .compliance import MockComplianceClient
from .data_export import MockDataExportClient
from .emergency import MockEmergencyClient
from .family_wellness import MockFamilyWellnessClient
from .future_ready import MockFutureReadyClient
from .ingestion import MockRecordIngestionClient
from .insights import MockInsightsClient
from .insurance import MockInsuranceClient
from .monetization import MockMonetizationClient
from .notifications import MockNotificationsClient
from .phr import MockPhrClient
from .security import MockSecurityClient

__all__ = [
    "MockAbdmClient",
    "MockAccessibilityClient",
    "MockAppointmentsClient",
    "MockComplianceClient",
    "MockDataExportClient",
    "MockEmergencyClient",
    "MockFamilyWellnessClient",
    "MockFutureReadyClient",
    "MockRecordIngestionClient",
    "MockInsightsClient",
    "MockInsuranceClient",
    "MockMonetizationClient",
    "MockNotificationsClient",
    "MockPhrClient",
    "MockSecurityClient",
]
