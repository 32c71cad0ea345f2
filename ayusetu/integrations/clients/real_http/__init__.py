"""
Live HTTP service clients.

These clients talk to the ABDM gateway (sandbox or production) through one
shared ApiClient:
- ABDM registration, login and account endpoints
- AyuSetu domain endpoints (appointments, insurance, emergency, ...)

Important:
- Must implement the same interfaces as the mock clients
- Must return data shaped according to ayusetu/integrations/contracts/*
"""

from .abdm import RealAbdmClient
from .accessibility import RealAccessibilityClient
from .appointments import RealAppointmentsClient
from .compliance import RealComplianceClient
from .data_export import RealDataExportClient
from .emergency import RealEmergencyClient
from .family_wellness import RealFamilyWellnessClient
from .future_ready import RealFutureReadyClient
from .ingestion import RealRecordIngestionClient
from .insights import RealInsightsClient
from .insurance import RealInsuranceClient
from .monetization import RealMonetizationClient
from .notifications import RealNotificationsClient
from .phr import RealPhrClient
from .security import RealSecurityClient

__all__ = [
    "RealAbdmClient",
    "RealAccessibilityClient",
    "RealAppointmentsClient",
    "RealComplianceClient",
    "RealDataExportClient",
    "RealEmergencyClient",
    "RealFamilyWellnessClient",
    "RealFutureReadyClient",
    "RealRecordIngestionClient",
    "RealInsightsClient",
    "RealInsuranceClient",
    "RealMonetizationClient",
    "RealNotificationsClient",
    "RealPhrClient",
    "RealSecurityClient",
]
