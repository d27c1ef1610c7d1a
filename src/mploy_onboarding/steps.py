"""
Onboarding Step Sequencing.

Step lists are a pure function of the profile variant:

- Job seekers: BasicInfo → Location → Education → Experience → Salary
- Direct employers: EmployerType → CompanyInfo → Location → Verification → Dashboard
- Agencies: EmployerType → CompanyInfo → Verification → Dashboard
  (no single hiring site, so no Location step)

When the variant changes mid-flow the list is recomputed and the current
step is remapped onto the new list.
"""

import logging
from enum import Enum

from .errors import SequenceInvalidError

logger = logging.getLogger(__name__)


class ProfileKind(Enum):
    """Top-level onboarding flavour."""
    JOB_SEEKER = "job_seeker"
    EMPLOYER = "employer"


class EmployerType(Enum):
    """Employer sub-flavour."""
    DIRECT = "direct"
    AGENCY = "agency"


class StepId(Enum):
    """One wizard stage."""
    # Job seeker
    BASIC_INFO = "BasicInfo"
    EDUCATION = "Education"
    EXPERIENCE = "Experience"
    SALARY = "Salary"
    # Employer
    EMPLOYER_TYPE = "EmployerType"
    COMPANY_INFO = "CompanyInfo"
    VERIFICATION = "Verification"
    DASHBOARD = "Dashboard"
    # Shared
    LOCATION = "Location"


JOB_SEEKER_STEPS = (
    StepId.BASIC_INFO,
    StepId.LOCATION,
    StepId.EDUCATION,
    StepId.EXPERIENCE,
    StepId.SALARY,
)

DIRECT_EMPLOYER_STEPS = (
    StepId.EMPLOYER_TYPE,
    StepId.COMPANY_INFO,
    StepId.LOCATION,
    StepId.VERIFICATION,
    StepId.DASHBOARD,
)

AGENCY_STEPS = (
    StepId.EMPLOYER_TYPE,
    StepId.COMPANY_INFO,
    StepId.VERIFICATION,
    StepId.DASHBOARD,
)


def coerce_employer_type(value) -> EmployerType | None:
    """EmployerType for a member or its string value; None for anything else."""
    if value is None or isinstance(value, EmployerType):
        return value
    try:
        return EmployerType(value)
    except ValueError:
        return None


def steps_for(kind: ProfileKind, employer_type: EmployerType | str | None = None) -> list[StepId]:
    """
    Get the ordered step list for a profile variant.

    Employers that have not picked a type yet get the agency list, which
    is the shortest one; it grows once `direct` is chosen.
    """
    if kind == ProfileKind.JOB_SEEKER:
        return list(JOB_SEEKER_STEPS)
    if coerce_employer_type(employer_type) == EmployerType.DIRECT:
        return list(DIRECT_EMPLOYER_STEPS)
    return list(AGENCY_STEPS)


def entry_step(kind: ProfileKind) -> StepId:
    """First step of every sequence for this kind."""
    return steps_for(kind)[0]


def step_index(steps: list[StepId], current: StepId) -> int:
    """Index of `current` in `steps`. Raises SequenceInvalidError if absent."""
    try:
        return steps.index(current)
    except ValueError:
        raise SequenceInvalidError(current, steps) from None


def progress(steps: list[StepId], current: StepId) -> float:
    """Completion fraction in (0, 1]: (index + 1) / len(steps)."""
    return (step_index(steps, current) + 1) / len(steps)


def next_step(steps: list[StepId], current: StepId) -> StepId | None:
    """Step after `current`, or None at the terminal step."""
    idx = step_index(steps, current)
    if idx + 1 >= len(steps):
        return None
    return steps[idx + 1]


def previous_step(steps: list[StepId], current: StepId) -> StepId | None:
    """Step before `current`, or None at the entry step."""
    idx = step_index(steps, current)
    if idx == 0:
        return None
    return steps[idx - 1]


def is_terminal(steps: list[StepId], current: StepId) -> bool:
    return step_index(steps, current) == len(steps) - 1


def remap_step(old_steps: list[StepId], new_steps: list[StepId], current: StepId) -> StepId:
    """
    Map `current` onto a recomputed step list.

    Keeps `current` if it survived. Otherwise walks back through the old
    list to the nearest earlier step that still exists, so the user lands
    on the last screen they completed rather than skipping ahead. Falls
    back to the first step of the new list.
    """
    if current in new_steps:
        return current

    if current in old_steps:
        for candidate in reversed(old_steps[:old_steps.index(current)]):
            if candidate in new_steps:
                logger.info(f"Remapped step {current.value} -> {candidate.value}")
                return candidate

    logger.warning(f"Step {current.value} has no counterpart; resetting to {new_steps[0].value}")
    return new_steps[0]
