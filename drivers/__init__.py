"""
Drivers domain package.

Public API:
- Domain models: DriverProfile, DriverCandidate, DriverStatus, VerificationStatus
- Directory: DriverDirectory, InMemoryDriverDirectory
- Candidate search: CandidateProvider, filter_eligible_drivers
"""
from .models import DriverProfile, DriverCandidate, DriverStatus, VerificationStatus
from .directory import DriverDirectory, InMemoryDriverDirectory
from .selection import CandidateProvider, filter_eligible_drivers

__all__ = [
    "DriverProfile",
    "DriverCandidate",
    "DriverStatus",
    "VerificationStatus",
    "DriverDirectory",
    "InMemoryDriverDirectory",
    "CandidateProvider",
    "filter_eligible_drivers",
]
