"""
Contracts (data models and service interfaces).

Each module defines the request/response shapes for one domain plus the
abstract service both clients implement.

Why this exists:
- Mock and live clients return the same validated models
- Flows rely on stable models, not on ad-hoc dicts
"""

from .abdm import AbdmService
from .accessibility import AccessibilityService
from .appointments import AppointmentsService
from .base import ApiModel, SuccessResponse, merge_model
from .compliance import ComplianceService
from .data_export import DataExportService
from .emergency import EmergencyService
from .family_wellness import FamilyWellnessService
from .future_ready import FutureReadyService
from .ingestion import RecordIngestionService, UploadFile
from .insights import InsightsService
from .insurance import InsuranceService
from .monetization import MonetizationService
from .notifications import NotificationsService
from .phr import PhrService
from .security import SecurityService

__all__ = [
    "AbdmService",
    "AccessibilityService",
    "ApiModel",
    "AppointmentsService",
    "ComplianceService",
    "DataExportService",
    "EmergencyService",
    "FamilyWellnessService",
    "FutureReadyService",
    "InsightsService",
    "InsuranceService",
    "MonetizationService",
    "NotificationsService",
    "PhrService",
    "RecordIngestionService",
    "SecurityService",
    "SuccessResponse",
    "UploadFile",
    "merge_model",
]
