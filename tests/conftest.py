"""
Pytest configuration and fixtures for onboarding engine tests.
"""

import os
from datetime import date, datetime, timezone
from unittest.mock import MagicMock

import pytest

# Set test environment before importing mploy_onboarding modules
os.environ["MPLOY_ENV"] = "development"

from mploy_onboarding.drafts import (
    BasicInfo,
    CompanyInfo,
    Coordinates,
    Education,
    EducationEntry,
    EmployerDraft,
    EmployerTypeInfo,
    ExperienceBlock,
    JobSeekerDraft,
    LocationPreferences,
    PrimaryLocation,
    RemoteWorkPolicy,
    SeekerLocation,
)
from mploy_onboarding.salary import SalaryFormat, SalaryPreference, SalaryRange
from mploy_onboarding.steps import EmployerType, ProfileKind
from mploy_onboarding.store import FormStateStore
from mploy_onboarding.validation import FieldValidator

TODAY = date(2026, 6, 15)
NOW = datetime(2026, 6, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def validator():
    """Validator pinned to a fixed evaluation date."""
    return FieldValidator(clock=lambda: TODAY)


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[{"id": "user-1"}])

    mock_client.table.return_value = mock_table

    return mock_client


def make_seeker_draft() -> JobSeekerDraft:
    """A job seeker draft that passes every step."""
    return JobSeekerDraft(
        basic_info=BasicInfo(
            first_name="Asha",
            last_name="Verma",
            date_of_birth=date(1998, 3, 20),
            gender="female",
            phone_number="9876543210",
        ),
        location=SeekerLocation(
            coordinates=Coordinates(lat=12.9716, lng=77.5946),
            address="Bengaluru",
            search_radius=10,
        ),
        education=Education(
            level="Graduate",
            entries=[
                EducationEntry(
                    degree="B.Com",
                    specialization="Accounting",
                    institution="Christ University",
                    completion_month="May",
                    completion_year=2019,
                )
            ],
        ),
        experience=ExperienceBlock(
            has_experience=True,
            years=4,
            months=6,
            job_title="Marketing Executive",
            roles=["Digital Marketing", "SEO"],
            company_name="Acme",
            industry="Retail",
            currently_working=True,
            notice_period="1 month",
            current_salary=45000,
            start_month="July",
            start_year=2020,
        ),
        salary=SalaryPreference(
            format=SalaryFormat.MONTHLY,
            range=SalaryRange(min=50000, max=70000),
            threshold=40000,
        ),
    )


def make_employer_draft(employer_type: EmployerType) -> EmployerDraft:
    """An employer draft that passes every step for its type."""
    company = CompanyInfo(
        name="Acme Staffing" if employer_type == EmployerType.AGENCY else "Acme Retail",
        size="11-50",
        description="We hire great people.",
        website="https://acme.in",
    )
    if employer_type == EmployerType.DIRECT:
        company.primary_industry = "Retail"
        company.email_domain = "acme.in"
    else:
        company.specializations = ["technology"]
        company.years_in_business = 6

    return EmployerDraft(
        employer_type=EmployerTypeInfo(type=employer_type, is_email_verified=True),
        company_info=company,
        location_preferences=LocationPreferences(
            primary_location=PrimaryLocation(address="MG Road, Bengaluru"),
            remote_work_policy=RemoteWorkPolicy.HYBRID,
        ),
    )


@pytest.fixture
def seeker_draft():
    return make_seeker_draft()


@pytest.fixture
def direct_draft():
    return make_employer_draft(EmployerType.DIRECT)


@pytest.fixture
def agency_draft():
    return make_employer_draft(EmployerType.AGENCY)


@pytest.fixture
def seeker_store():
    """Empty job seeker session with a fixed clock."""
    return FormStateStore(ProfileKind.JOB_SEEKER, clock=lambda: NOW)


@pytest.fixture
def employer_store():
    """Empty employer session with a fixed clock."""
    return FormStateStore(ProfileKind.EMPLOYER, clock=lambda: NOW)
