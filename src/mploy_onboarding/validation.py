"""
Onboarding Field Validation.

Rules are keyed by (ProfileKind, StepId); employer company info further
branches on EmployerType. Every rule of a step runs, and the result is the
union of all failures so a screen can show every problem at once.

The validator never raises. An empty ValidationErrorSet is the only
success signal.
"""

import logging
import re
from dataclasses import replace
from datetime import date, datetime
from typing import Callable

from .config import settings
from .drafts import Draft, EmployerDraft, JobSeekerDraft
from .errors import ErrorKind, FieldError, ValidationErrorSet
from .options import (
    COMPANY_SIZE_VALUES,
    EDUCATION_LEVELS,
    GENDERS,
    MAX_DESCRIPTION_LENGTH,
    MAX_EXPERIENCE_ROLES,
    MAX_YEARS_IN_BUSINESS,
    SEARCH_RADIUS_OPTIONS_KM,
    max_education_entries,
)
from .salary import SalaryRange, to_yearly
from .steps import EmployerType, ProfileKind, StepId, coerce_employer_type, steps_for

logger = logging.getLogger(__name__)

# Indian mobile numbers: 10 digits starting 6-9
PHONE_PATTERN = re.compile(r"^[6-9]\d{9}$")
WEBSITE_PATTERN = re.compile(
    r"^(https?://)?[\da-z-]+(\.[\da-z-]+)*\.[a-z]{2,63}(:\d+)?(/\S*)?$",
    re.IGNORECASE,
)

StepRule = Callable[[Draft, date], ValidationErrorSet]


# =============================================================================
# Helpers
# =============================================================================

def is_blank(value) -> bool:
    """None, whitespace-only strings and empty collections count as blank."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def as_int(value) -> int | None:
    """
    Whole-number value of an int, an integral float or a numeric string.

    Returns None for anything else (booleans included), so text inputs
    holding "2019" validate like 2019 while "20x9" can be reported.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def normalize_phone(raw: str | int) -> str:
    """Strip separators and a +91 / 0 prefix."""
    digits = re.sub(r"[\s\-().]", "", str(raw))
    if digits.startswith("+91"):
        digits = digits[3:]
    elif len(digits) == 12 and digits.startswith("91"):
        digits = digits[2:]
    elif len(digits) == 11 and digits.startswith("0"):
        digits = digits[1:]
    return digits


def is_valid_phone(raw) -> bool:
    if isinstance(raw, bool) or not isinstance(raw, (str, int)):
        return False
    return bool(PHONE_PATTERN.match(normalize_phone(raw)))


def is_valid_website(url) -> bool:
    if not isinstance(url, str):
        return False
    return bool(WEBSITE_PATTERN.match(url.strip()))


def calculate_age(born: date, today: date) -> int:
    """Age in whole years, birthday-aware."""
    before_birthday = (today.month, today.day) < (born.month, born.day)
    return today.year - born.year - int(before_birthday)


def _coerce_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _missing(message: str) -> FieldError:
    return FieldError(ErrorKind.MISSING_REQUIRED, message)


def _require(errors: ValidationErrorSet, path: str, value, message: str) -> bool:
    """Record MissingRequired for a blank value. Returns True if present."""
    if is_blank(value):
        errors[path] = _missing(message)
        return False
    return True


def _require_int(errors: ValidationErrorSet, path: str, value, message: str) -> int | None:
    """
    Record MissingRequired for a blank value, FormatInvalid for a value
    that is not a whole number. Returns the number, or None on error.
    """
    if not _require(errors, path, value, message):
        return None
    return _check_int(errors, path, value)


def _check_int(errors: ValidationErrorSet, path: str, value) -> int | None:
    number = as_int(value)
    if number is None:
        errors[path] = FieldError(ErrorKind.FORMAT_INVALID, "Please enter a whole number")
    return number


# =============================================================================
# Validator
# =============================================================================

class FieldValidator:
    """
    Produces a ValidationErrorSet for a step (or a whole draft).

    Age bounds default to the configured settings; `clock` supplies the
    evaluation date so age checks are reproducible.
    """

    def __init__(
        self,
        min_age: int | None = None,
        max_age: int | None = None,
        clock: Callable[[], date] | None = None,
    ):
        self.min_age = settings.min_age if min_age is None else min_age
        self.max_age = settings.max_age if max_age is None else max_age
        self._clock = clock or date.today
        self._rules: dict[tuple[ProfileKind, StepId], StepRule] = {
            (ProfileKind.JOB_SEEKER, StepId.BASIC_INFO): self._seeker_basic_info,
            (ProfileKind.JOB_SEEKER, StepId.LOCATION): self._seeker_location,
            (ProfileKind.JOB_SEEKER, StepId.EDUCATION): self._seeker_education,
            (ProfileKind.JOB_SEEKER, StepId.EXPERIENCE): self._seeker_experience,
            (ProfileKind.JOB_SEEKER, StepId.SALARY): self._seeker_salary,
            (ProfileKind.EMPLOYER, StepId.EMPLOYER_TYPE): self._employer_type,
            (ProfileKind.EMPLOYER, StepId.COMPANY_INFO): self._company_info,
            (ProfileKind.EMPLOYER, StepId.LOCATION): self._employer_location,
        }

    def today(self) -> date:
        return _coerce_date(self._clock())

    def validate_step(self, kind: ProfileKind, step: StepId, draft: Draft) -> ValidationErrorSet:
        """Run every rule for one step. Steps without rules always pass."""
        rule = self._rules.get((kind, step))
        if rule is None:
            return {}
        errors = rule(draft, self.today())
        if errors:
            logger.debug(f"{kind.value}/{step.value} validation: {sorted(errors)}")
        return errors

    def validate_draft(self, kind: ProfileKind, draft: Draft) -> ValidationErrorSet:
        """Union of step errors across the draft's whole sequence."""
        employer_type = draft.employer_type.type if isinstance(draft, EmployerDraft) else None
        errors: ValidationErrorSet = {}
        for step in steps_for(kind, employer_type):
            errors.update(self.validate_step(kind, step, draft))
        return errors

    # -------------------------------------------------------------------------
    # Job seeker
    # -------------------------------------------------------------------------

    def _seeker_basic_info(self, draft: JobSeekerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        info = draft.basic_info

        _require(errors, "basic_info.first_name", info.first_name, "First name is required")
        _require(errors, "basic_info.last_name", info.last_name, "Last name is required")

        if _require(errors, "basic_info.gender", info.gender, "Gender is required"):
            gender = info.gender.strip().lower() if isinstance(info.gender, str) else None
            if gender not in GENDERS:
                errors["basic_info.gender"] = FieldError(
                    ErrorKind.FORMAT_INVALID, "Please select a valid gender"
                )

        if _require(errors, "basic_info.phone_number", info.phone_number, "Phone number is required"):
            if not is_valid_phone(info.phone_number):
                errors["basic_info.phone_number"] = FieldError(
                    ErrorKind.FORMAT_INVALID, "Please enter a valid 10-digit mobile number"
                )

        if _require(errors, "basic_info.date_of_birth", info.date_of_birth, "Date of birth is required"):
            dob_error = self._check_date_of_birth(info.date_of_birth, today)
            if dob_error:
                errors["basic_info.date_of_birth"] = dob_error

        return errors

    def _check_date_of_birth(self, value, today: date) -> FieldError | None:
        born = _coerce_date(value)
        if born is None:
            return FieldError(ErrorKind.FORMAT_INVALID, "Please enter a valid date of birth")
        if born > today:
            return FieldError(ErrorKind.RANGE_INVALID, "Date of birth cannot be in the future")
        age = calculate_age(born, today)
        if age < self.min_age:
            return FieldError(ErrorKind.RANGE_INVALID, f"You must be at least {self.min_age} years old")
        if age > self.max_age:
            return FieldError(ErrorKind.RANGE_INVALID, f"Age cannot be more than {self.max_age} years")
        return None

    def _seeker_location(self, draft: JobSeekerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        loc = draft.location
        _require(
            errors, "location.coordinates", loc.coordinates,
            "Please enable location services to continue",
        )
        if as_int(loc.search_radius) not in SEARCH_RADIUS_OPTIONS_KM:
            options = ", ".join(str(r) for r in SEARCH_RADIUS_OPTIONS_KM)
            errors["location.search_radius"] = FieldError(
                ErrorKind.RANGE_INVALID, f"Search radius must be one of {options} km"
            )
        return errors

    def _seeker_education(self, draft: JobSeekerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        edu = draft.education

        if _require(errors, "education.level", edu.level, "Education level is required"):
            if edu.level not in EDUCATION_LEVELS:
                errors["education.level"] = FieldError(
                    ErrorKind.FORMAT_INVALID, "Please select a valid education level"
                )

        if not _require(errors, "education.entries", edu.entries, "Add at least one education entry"):
            return errors

        allowed = max_education_entries(edu.level if isinstance(edu.level, str) else None)
        if len(edu.entries) > allowed:
            errors["education.entries"] = FieldError(
                ErrorKind.RANGE_INVALID,
                f"At most {allowed} education entr{'ies' if allowed != 1 else 'y'} allowed for this level",
            )

        for i, entry in enumerate(edu.entries):
            prefix = f"education.entries.{i}"
            _require(errors, f"{prefix}.degree", entry.degree, "Degree is required")
            _require(errors, f"{prefix}.specialization", entry.specialization, "Specialization is required")
            _require(errors, f"{prefix}.institution", entry.institution, "Institution is required")
            year = _require_int(errors, f"{prefix}.completion_year", entry.completion_year, "Year is required")
            if year is not None:
                if not entry.currently_pursuing and year > today.year:
                    errors[f"{prefix}.completion_year"] = FieldError(
                        ErrorKind.RANGE_INVALID,
                        "Completion year cannot be in the future unless currently pursuing",
                    )

        return errors

    def _seeker_experience(self, draft: JobSeekerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        exp = draft.experience

        if exp.has_experience is None:
            errors["experience.has_experience"] = _missing("Please tell us whether you have work experience")
            return errors
        if not exp.has_experience:
            return errors  # fresher

        years = _require_int(errors, "experience.years", exp.years, "Years of experience is required")
        _require(errors, "experience.job_title", exp.job_title, "Job title is required")
        if _require(errors, "experience.roles", exp.roles, "Please select at least one role"):
            if not isinstance(exp.roles, (list, tuple)):
                errors["experience.roles"] = FieldError(ErrorKind.FORMAT_INVALID, "Please select roles from the list")
            elif len(exp.roles) > MAX_EXPERIENCE_ROLES:
                errors["experience.roles"] = FieldError(
                    ErrorKind.RANGE_INVALID, f"Select at most {MAX_EXPERIENCE_ROLES} roles"
                )
        _require(errors, "experience.industry", exp.industry, "Industry is required")

        if exp.currently_working:
            _require(errors, "experience.notice_period", exp.notice_period, "Notice period is required")
            current_salary = _require_int(
                errors, "experience.current_salary", exp.current_salary, "Current salary is required"
            )
            if current_salary is not None and current_salary < 0:
                errors["experience.current_salary"] = FieldError(
                    ErrorKind.RANGE_INVALID, "Current salary cannot be negative"
                )

        _require(errors, "experience.start_month", exp.start_month, "Start date is required")
        start_year = _require_int(errors, "experience.start_year", exp.start_year, "Start date is required")
        if start_year is not None and start_year > today.year:
            errors["experience.start_year"] = FieldError(
                ErrorKind.RANGE_INVALID, "Start date cannot be in the future"
            )

        if years is not None and years < 0:
            errors["experience.years"] = FieldError(
                ErrorKind.RANGE_INVALID, "Years of experience cannot be negative"
            )

        return errors

    def _seeker_salary(self, draft: JobSeekerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        pref = draft.salary

        low = _require_int(errors, "salary.range.min", pref.range.min, "Minimum salary is required")
        high = _require_int(errors, "salary.range.max", pref.range.max, "Maximum salary is required")

        if low is not None and low <= 0:
            errors["salary.range.min"] = FieldError(ErrorKind.RANGE_INVALID, "Minimum salary must be positive")
            low = None
        if high is not None and high <= 0:
            errors["salary.range.max"] = FieldError(ErrorKind.RANGE_INVALID, "Maximum salary must be positive")
            high = None

        threshold = None
        if pref.threshold is not None:
            threshold = _check_int(errors, "salary.threshold", pref.threshold)
            if threshold is not None and threshold < 0:
                errors["salary.threshold"] = FieldError(ErrorKind.RANGE_INVALID, "Threshold cannot be negative")
                threshold = None

        canonical = to_yearly(replace(pref, range=SalaryRange(min=low, max=high), threshold=threshold))
        if low is not None and high is not None and canonical.range.max < canonical.range.min:
            errors["salary.range.max"] = FieldError(
                ErrorKind.CROSS_FIELD_INCONSISTENT,
                "Maximum salary should be greater than minimum salary",
            )
        if low is not None and threshold is not None and canonical.range.min < canonical.threshold:
            errors["salary.range.min"] = FieldError(
                ErrorKind.CROSS_FIELD_INCONSISTENT,
                "Minimum salary cannot be below your threshold",
            )

        return errors

    # -------------------------------------------------------------------------
    # Employer
    # -------------------------------------------------------------------------

    def _employer_type(self, draft: EmployerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        value = draft.employer_type.type
        if _require(errors, "employer_type.type", value, "Please select an employer type"):
            if coerce_employer_type(value) is None:
                errors["employer_type.type"] = FieldError(ErrorKind.FORMAT_INVALID, "Please select a valid employer type")
        return errors

    def _company_info(self, draft: EmployerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        info = draft.company_info
        is_direct = coerce_employer_type(draft.employer_type.type) == EmployerType.DIRECT
        noun = "Company" if is_direct else "Agency"

        _require(errors, "company_info.name", info.name, f"{noun} name is required")

        if _require(errors, "company_info.description", info.description, f"{noun} description is required"):
            if not isinstance(info.description, str):
                errors["company_info.description"] = FieldError(ErrorKind.FORMAT_INVALID, "Description must be text")
            elif len(info.description) > MAX_DESCRIPTION_LENGTH:
                errors["company_info.description"] = FieldError(
                    ErrorKind.RANGE_INVALID,
                    f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters",
                )

        if _require(errors, "company_info.size", info.size, f"{noun} size is required"):
            if not isinstance(info.size, str) or info.size not in COMPANY_SIZE_VALUES:
                errors["company_info.size"] = FieldError(
                    ErrorKind.FORMAT_INVALID, f"Please select a valid {noun.lower()} size"
                )

        # Website is optional but must look like a URL when given
        if not is_blank(info.website) and not is_valid_website(info.website):
            errors["company_info.website"] = FieldError(
                ErrorKind.FORMAT_INVALID, "Please enter a valid website URL"
            )

        if is_direct:
            _require(errors, "company_info.primary_industry", info.primary_industry, "Industry is required")
        else:
            _require(
                errors, "company_info.specializations", info.specializations,
                "At least one specialization is required",
            )
            years = None
            if not is_blank(info.years_in_business):
                years = _check_int(errors, "company_info.years_in_business", info.years_in_business)
            if years is not None and not 0 <= years <= MAX_YEARS_IN_BUSINESS:
                errors["company_info.years_in_business"] = FieldError(
                    ErrorKind.RANGE_INVALID,
                    f"Years in business must be between 0 and {MAX_YEARS_IN_BUSINESS}",
                )

        return errors

    def _employer_location(self, draft: EmployerDraft, today: date) -> ValidationErrorSet:
        errors: ValidationErrorSet = {}
        _require(
            errors, "location_preferences.remote_work_policy",
            draft.location_preferences.remote_work_policy,
            "Please select a work policy",
        )
        return errors
