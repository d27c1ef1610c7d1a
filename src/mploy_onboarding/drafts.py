"""
Onboarding Drafts.

In-progress profile records, one shape per ProfileKind. Every field that
the user has not answered yet is an explicit None (or empty list), and
each shape has a single default constructor:

- new_job_seeker_draft()
- new_employer_draft()
- new_draft(kind)

Drafts are plain dataclasses. The store never mutates them in place; it
rebuilds the sections along an edited path with dataclasses.replace so
untouched sections are shared between versions.
"""

from dataclasses import dataclass, field, asdict
from datetime import date
from enum import Enum

from .config import settings
from .salary import SalaryFormat, SalaryPreference, SalaryRange
from .steps import EmployerType, ProfileKind


class RemoteWorkPolicy(Enum):
    """Direct employer's work arrangement."""
    ONSITE = "onsite"
    HYBRID = "hybrid"
    REMOTE = "remote"


@dataclass
class Coordinates:
    lat: float
    lng: float


# =============================================================================
# Job Seeker
# =============================================================================

@dataclass
class BasicInfo:
    """Identity fields."""
    first_name: str | None = None
    last_name: str | None = None
    date_of_birth: date | None = None
    gender: str | None = None
    phone_number: str | None = None


@dataclass
class SeekerLocation:
    """Where the seeker wants to work."""
    coordinates: Coordinates | None = None
    address: str | None = None
    search_radius: int = 10  # km


@dataclass
class EducationEntry:
    """One degree."""
    degree: str | None = None
    specialization: str | None = None
    institution: str | None = None
    completion_month: str | None = None
    completion_year: int | None = None
    currently_pursuing: bool = False


@dataclass
class Education:
    level: str | None = None
    entries: list[EducationEntry] = field(default_factory=lambda: [EducationEntry()])


@dataclass
class ExperienceBlock:
    """
    Work history.

    has_experience is None until the user answers; False marks a fresher,
    in which case the remaining fields are ignored.
    """
    has_experience: bool | None = None
    years: int | None = None
    months: int | None = None
    job_title: str | None = None
    roles: list[str] = field(default_factory=list)
    company_name: str | None = None
    industry: str | None = None
    currently_working: bool = True
    notice_period: str | None = None
    current_salary: int | None = None
    start_month: str | None = None
    start_year: int | None = None


@dataclass
class JobSeekerDraft:
    basic_info: BasicInfo = field(default_factory=BasicInfo)
    location: SeekerLocation = field(default_factory=SeekerLocation)
    education: Education = field(default_factory=Education)
    experience: ExperienceBlock = field(default_factory=ExperienceBlock)
    salary: SalaryPreference = field(default_factory=SalaryPreference)

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        data = asdict(self)
        dob = self.basic_info.date_of_birth
        data["basic_info"]["date_of_birth"] = dob.isoformat() if dob else None
        data["salary"]["format"] = self.salary.format.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "JobSeekerDraft":
        """Deserialize from dict produced by to_dict."""
        basic = dict(data.get("basic_info") or {})
        if isinstance(basic.get("date_of_birth"), str):
            basic["date_of_birth"] = date.fromisoformat(basic["date_of_birth"])

        loc = dict(data.get("location") or {})
        if isinstance(loc.get("coordinates"), dict):
            loc["coordinates"] = Coordinates(**loc["coordinates"])

        edu = dict(data.get("education") or {})
        if "entries" in edu:
            edu["entries"] = [
                EducationEntry(**e) if isinstance(e, dict) else e
                for e in edu["entries"]
            ]

        salary = dict(data.get("salary") or {})
        if "format" in salary:
            salary["format"] = SalaryFormat(salary["format"])
        if isinstance(salary.get("range"), dict):
            salary["range"] = SalaryRange(**salary["range"])
        if salary.get("yearly_basis") is not None:
            salary["yearly_basis"] = tuple(salary["yearly_basis"])

        return cls(
            basic_info=BasicInfo(**basic),
            location=SeekerLocation(**loc),
            education=Education(**edu),
            experience=ExperienceBlock(**(data.get("experience") or {})),
            salary=SalaryPreference(**salary),
        )


# =============================================================================
# Employer
# =============================================================================

@dataclass
class EmployerTypeInfo:
    type: EmployerType | None = None
    is_email_verified: bool = False


@dataclass
class CompanyInfo:
    """
    Company or agency details.

    Shared: name, logo, size, description, website.
    Direct employers: primary_industry, email_domain.
    Agencies: specializations, years_in_business.
    """
    name: str | None = None
    logo: str | None = None  # uploaded image URI
    size: str | None = None
    description: str | None = None
    website: str | None = None
    primary_industry: str | None = None
    email_domain: str | None = None
    specializations: list[str] = field(default_factory=list)
    years_in_business: int | None = None


@dataclass
class PrimaryLocation:
    address: str | None = None
    coordinates: Coordinates | None = None


@dataclass
class LocationPreferences:
    """Direct employers only."""
    primary_location: PrimaryLocation = field(default_factory=PrimaryLocation)
    remote_work_policy: RemoteWorkPolicy | None = None


@dataclass
class EmployerDraft:
    employer_type: EmployerTypeInfo = field(default_factory=EmployerTypeInfo)
    company_info: CompanyInfo = field(default_factory=CompanyInfo)
    location_preferences: LocationPreferences = field(default_factory=LocationPreferences)

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict."""
        data = asdict(self)
        et = self.employer_type.type
        data["employer_type"]["type"] = getattr(et, "value", et)
        policy = self.location_preferences.remote_work_policy
        data["location_preferences"]["remote_work_policy"] = policy.value if policy else None
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "EmployerDraft":
        """Deserialize from dict produced by to_dict."""
        et = dict(data.get("employer_type") or {})
        if et.get("type") is not None:
            et["type"] = EmployerType(et["type"])

        loc = dict(data.get("location_preferences") or {})
        primary = dict(loc.get("primary_location") or {})
        if isinstance(primary.get("coordinates"), dict):
            primary["coordinates"] = Coordinates(**primary["coordinates"])
        loc["primary_location"] = PrimaryLocation(**primary)
        if loc.get("remote_work_policy") is not None:
            loc["remote_work_policy"] = RemoteWorkPolicy(loc["remote_work_policy"])

        return cls(
            employer_type=EmployerTypeInfo(**et),
            company_info=CompanyInfo(**(data.get("company_info") or {})),
            location_preferences=LocationPreferences(**loc),
        )


Draft = JobSeekerDraft | EmployerDraft


def new_job_seeker_draft() -> JobSeekerDraft:
    """Empty job seeker draft with the configured default search radius."""
    return JobSeekerDraft(
        location=SeekerLocation(search_radius=settings.default_search_radius_km),
    )


def new_employer_draft() -> EmployerDraft:
    """Empty employer draft."""
    return EmployerDraft()


def new_draft(kind: ProfileKind) -> Draft:
    """Default draft for a profile kind."""
    if kind == ProfileKind.JOB_SEEKER:
        return new_job_seeker_draft()
    return new_employer_draft()


def draft_from_dict(kind: ProfileKind, data: dict) -> Draft:
    if kind == ProfileKind.JOB_SEEKER:
        return JobSeekerDraft.from_dict(data)
    return EmployerDraft.from_dict(data)
