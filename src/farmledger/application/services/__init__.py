"""Application services."""

from farmledger.application.services.authorization_service import (
    FarmOwnerAuthorization, RoleTableAuthorization)
from farmledger.application.services.event_log_service import EventLogService
from farmledger.application.services.hash_service import (HashService,
                                                          SHA256Algorithm,
                                                          SHA512Algorithm)
from farmledger.application.services.provenance_service import (
    EggProvenance, ProvenanceService)
from farmledger.application.services.verification_service import (
    ChainVerificationResult, VerificationResult, VerificationService)

__all__ = [
    "HashService",
    "SHA256Algorithm",
    "SHA512Algorithm",
    "EventLogService",
    "FarmOwnerAuthorization",
    "RoleTableAuthorization",
    "ProvenanceService",
    "EggProvenance",
    "VerificationService",
    "VerificationResult",
    "ChainVerificationResult",
]
