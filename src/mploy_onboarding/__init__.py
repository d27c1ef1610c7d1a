"""
Mploy Onboarding Engine.

Multi-step onboarding wizard shared by the job seeker and employer signup
flows. Screens drive a FormStateStore; the engine sequences steps,
validates each one, converts salary units and assembles the final record
for a ProfileSubmitter.

Flows:
- Job seeker: BasicInfo → Location → Education → Experience → Salary
- Direct employer: EmployerType → CompanyInfo → Location → Verification → Dashboard
- Agency: EmployerType → CompanyInfo → Verification → Dashboard
"""

from .errors import ErrorKind, FieldError, OnboardingError
from .records import AssembledProfile
from .steps import EmployerType, ProfileKind, StepId, steps_for
from .store import FormStateStore, StepTransition
from .validation import FieldValidator

__all__ = [
    "AssembledProfile",
    "EmployerType",
    "ErrorKind",
    "FieldError",
    "FieldValidator",
    "FormStateStore",
    "OnboardingError",
    "ProfileKind",
    "StepId",
    "StepTransition",
    "steps_for",
]
