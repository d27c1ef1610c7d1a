"""
Assembled Profile Records.

The AssembledProfile is the contract between the onboarding engine and the
profile store. Records are immutable pydantic models whose aliases match
the document layout the store already holds (camelCase keys):

Job seeker:
    firstName, lastName, dateOfBirth, gender, phoneNumber,
    location{coordinates, searchRadius}, education{level, list[]},
    experience{hasExperience, ...}, salary{format, range{min, max}, threshold},
    onboardingComplete

Employer:
    employerType{type, isEmailVerified},
    companyInfo{name, logo, size, description, website, primaryIndustry?,
                emailDomain?, specializations?, yearsInBusiness?},
    locationPreferences?{primaryLocation, remoteWorkPolicy},
    onboardingComplete

Variant-specific keys are only emitted for the variant that owns them.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .drafts import (
    Coordinates,
    Draft,
    EmployerDraft,
    JobSeekerDraft,
    RemoteWorkPolicy,
)
from .salary import SalaryFormat
from .steps import EmployerType, ProfileKind, coerce_employer_type
from .validation import as_int, normalize_phone

ProfileStatus = Literal["draft", "published"]


class RecordModel(BaseModel):
    """Base for persisted record shapes: camelCase aliases, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class CoordinatesRecord(RecordModel):
    lat: float
    lng: float


# =============================================================================
# Job Seeker
# =============================================================================

class SeekerLocationRecord(RecordModel):
    coordinates: CoordinatesRecord
    search_radius: int
    address: str | None = None


class EducationEntryRecord(RecordModel):
    degree: str
    specialization: str
    institution: str
    completion_month: str | None = None
    completion_year: int
    currently_pursuing: bool = False


class EducationRecord(RecordModel):
    level: str
    entries: tuple[EducationEntryRecord, ...] = Field(alias="list")


class ExperienceRecord(RecordModel):
    has_experience: bool
    years: int | None = None
    months: int | None = None
    job_title: str | None = None
    roles: tuple[str, ...] = ()
    company_name: str | None = None
    industry: str | None = None
    currently_working: bool | None = None
    notice_period: str | None = None
    current_salary: int | None = None
    start_date: str | None = None


class SalaryRangeRecord(RecordModel):
    min: int
    max: int


class SalaryRecord(RecordModel):
    format: SalaryFormat
    range: SalaryRangeRecord
    threshold: int | None = None


class JobSeekerRecord(RecordModel):
    first_name: str
    last_name: str
    date_of_birth: date
    gender: str
    phone_number: str
    location: SeekerLocationRecord
    education: EducationRecord
    experience: ExperienceRecord | None = None
    salary: SalaryRecord
    onboarding_complete: bool = False


# =============================================================================
# Employer
# =============================================================================

class EmployerTypeRecord(RecordModel):
    type: EmployerType
    is_email_verified: bool = False


class CompanyInfoRecord(RecordModel):
    name: str
    logo: str | None = None
    size: str
    description: str
    website: str | None = None
    primary_industry: str | None = None
    email_domain: str | None = None
    specializations: tuple[str, ...] | None = None
    years_in_business: int | None = None


class PrimaryLocationRecord(RecordModel):
    address: str | None = None
    coordinates: CoordinatesRecord | None = None


class LocationPreferencesRecord(RecordModel):
    primary_location: PrimaryLocationRecord
    remote_work_policy: RemoteWorkPolicy


class EmployerRecord(RecordModel):
    employer_type: EmployerTypeRecord
    company_info: CompanyInfoRecord
    location_preferences: LocationPreferencesRecord | None = None
    onboarding_complete: bool = False


# =============================================================================
# Snapshot
# =============================================================================

class AssembledProfile(BaseModel):
    """Immutable snapshot of a finished draft, ready for a ProfileSubmitter."""

    model_config = ConfigDict(frozen=True)

    kind: ProfileKind
    status: ProfileStatus
    submitted_at: datetime
    record: JobSeekerRecord | EmployerRecord

    def to_document(self) -> dict:
        """Document in the store's camelCase layout."""
        doc = self.record.model_dump(by_alias=True, mode="json", exclude_unset=True)
        doc["onboardingComplete"] = self.record.onboarding_complete
        doc["status"] = self.status
        doc["updatedAt"] = self.submitted_at.isoformat()
        return doc


def _coords(value: Coordinates | None) -> CoordinatesRecord | None:
    if value is None:
        return None
    return CoordinatesRecord(lat=value.lat, lng=value.lng)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def build_job_seeker_record(draft: JobSeekerDraft, onboarding_complete: bool) -> JobSeekerRecord:
    """Map a validated job seeker draft onto the persisted layout."""
    info = draft.basic_info
    exp = draft.experience

    if exp.has_experience:
        start_year = as_int(exp.start_year)
        start = f"{exp.start_month} {start_year}" if exp.start_month and start_year else None
        experience = ExperienceRecord(
            has_experience=True,
            years=as_int(exp.years),
            months=as_int(exp.months),
            job_title=_clean(exp.job_title),
            roles=tuple(exp.roles),
            company_name=_clean(exp.company_name),
            industry=exp.industry,
            currently_working=exp.currently_working,
            notice_period=exp.notice_period if exp.currently_working else None,
            current_salary=as_int(exp.current_salary) if exp.currently_working else None,
            start_date=start,
        )
    else:
        experience = ExperienceRecord(has_experience=False)

    return JobSeekerRecord(
        first_name=_clean(info.first_name),
        last_name=_clean(info.last_name),
        date_of_birth=info.date_of_birth,
        gender=info.gender.strip().lower(),
        phone_number=normalize_phone(info.phone_number),
        location=SeekerLocationRecord(
            coordinates=_coords(draft.location.coordinates),
            search_radius=as_int(draft.location.search_radius),
            address=_clean(draft.location.address),
        ),
        education=EducationRecord(
            level=draft.education.level,
            entries=tuple(
                EducationEntryRecord(
                    degree=e.degree,
                    specialization=e.specialization,
                    institution=_clean(e.institution),
                    completion_month=e.completion_month,
                    completion_year=as_int(e.completion_year),
                    currently_pursuing=e.currently_pursuing,
                )
                for e in draft.education.entries
            ),
        ),
        experience=experience,
        salary=SalaryRecord(
            format=draft.salary.format,
            range=SalaryRangeRecord(min=as_int(draft.salary.range.min), max=as_int(draft.salary.range.max)),
            threshold=as_int(draft.salary.threshold),
        ),
        onboarding_complete=onboarding_complete,
    )


def build_employer_record(draft: EmployerDraft, onboarding_complete: bool) -> EmployerRecord:
    """Map a validated employer draft onto the persisted layout."""
    info = draft.company_info
    employer_type = coerce_employer_type(draft.employer_type.type)
    is_direct = employer_type == EmployerType.DIRECT

    company = dict(
        name=_clean(info.name),
        logo=info.logo,
        size=info.size,
        description=info.description.strip(),
        website=_clean(info.website),
    )
    if is_direct:
        company.update(
            primary_industry=_clean(info.primary_industry),
            email_domain=_clean(info.email_domain),
        )
    else:
        company.update(
            specializations=tuple(info.specializations),
            years_in_business=as_int(info.years_in_business),
        )

    fields = dict(
        employer_type=EmployerTypeRecord(
            type=employer_type,
            is_email_verified=draft.employer_type.is_email_verified,
        ),
        company_info=CompanyInfoRecord(**company),
        onboarding_complete=onboarding_complete,
    )
    if is_direct:
        loc = draft.location_preferences
        fields["location_preferences"] = LocationPreferencesRecord(
            primary_location=PrimaryLocationRecord(
                address=_clean(loc.primary_location.address),
                coordinates=_coords(loc.primary_location.coordinates),
            ),
            remote_work_policy=loc.remote_work_policy,
        )
    return EmployerRecord(**fields)


def build_record(kind: ProfileKind, draft: Draft, onboarding_complete: bool) -> JobSeekerRecord | EmployerRecord:
    if kind == ProfileKind.JOB_SEEKER:
        return build_job_seeker_record(draft, onboarding_complete)
    return build_employer_record(draft, onboarding_complete)
