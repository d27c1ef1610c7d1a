"""
Onboarding Form Options.

Finite option sets used by both the validator and the view layer.
"""

from .salary import LADDERS, SalaryFormat

# =============================================================================
# Job Seeker
# =============================================================================

GENDERS = ["male", "female", "other", "prefer_not_to_say"]

SEARCH_RADIUS_OPTIONS_KM = [5, 10, 15, 20, 25]

EDUCATION_LEVELS = [
    "10th or Below 10th",
    "12th Pass",
    "Diploma",
    "ITI",
    "Graduate",
    "Post Graduate",
]

# Post graduates may list their graduate degree as well
MAX_EDUCATION_ENTRIES = {"Post Graduate": 2}
DEFAULT_MAX_EDUCATION_ENTRIES = 1

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

NOTICE_PERIODS = [
    "No notice period",
    "Less than 15 days",
    "1 month",
    "2 months",
    "3 or more months",
]

MAX_EXPERIENCE_ROLES = 3

# =============================================================================
# Employer
# =============================================================================

COMPANY_SIZES = [
    {"label": "1-10 employees", "value": "1-10"},
    {"label": "11-50 employees", "value": "11-50"},
    {"label": "51-200 employees", "value": "51-200"},
    {"label": "201-500 employees", "value": "201-500"},
    {"label": "500+ employees", "value": "500+"},
]
COMPANY_SIZE_VALUES = {s["value"] for s in COMPANY_SIZES}

AGENCY_SPECIALIZATIONS = [
    {"label": "Technology", "value": "technology"},
    {"label": "Healthcare", "value": "healthcare"},
    {"label": "Finance", "value": "finance"},
    {"label": "Education", "value": "education"},
    {"label": "Manufacturing", "value": "manufacturing"},
    {"label": "Retail", "value": "retail"},
    {"label": "Hospitality", "value": "hospitality"},
    {"label": "Construction", "value": "construction"},
    {"label": "Professional Services", "value": "professional_services"},
    {"label": "Other", "value": "other"},
]

REMOTE_WORK_POLICIES = [
    {"id": "onsite", "title": "On-site Only", "description": "Employees work exclusively from the office"},
    {"id": "hybrid", "title": "Hybrid", "description": "Mix of remote and office work"},
    {"id": "remote", "title": "Fully Remote", "description": "Work from anywhere"},
]

MAX_DESCRIPTION_LENGTH = 1000
MAX_YEARS_IN_BUSINESS = 200


def max_education_entries(level: str | None) -> int:
    """How many education entries a level allows."""
    return MAX_EDUCATION_ENTRIES.get(level or "", DEFAULT_MAX_EDUCATION_ENTRIES)


def get_form_options() -> dict:
    """
    Get all option sets for frontend rendering.

    Returns dict with job seeker options (genders, radius, education,
    notice periods, salary ladders) and employer options (company sizes,
    specializations, remote work policies).
    """
    return {
        "genders": GENDERS,
        "search_radius_km": SEARCH_RADIUS_OPTIONS_KM,
        "education_levels": EDUCATION_LEVELS,
        "months": MONTHS,
        "notice_periods": NOTICE_PERIODS,
        "max_experience_roles": MAX_EXPERIENCE_ROLES,
        "salary_ladders": {fmt.value: list(LADDERS[fmt]) for fmt in SalaryFormat},
        "company_sizes": COMPANY_SIZES,
        "agency_specializations": AGENCY_SPECIALIZATIONS,
        "remote_work_policies": REMOTE_WORK_POLICIES,
        "max_description_length": MAX_DESCRIPTION_LENGTH,
    }
