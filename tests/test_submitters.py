"""
Tests for the Supabase profile submitter.
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from conftest import NOW, make_employer_draft
from mploy_onboarding import submitters
from mploy_onboarding.records import AssembledProfile, build_record
from mploy_onboarding.steps import EmployerType, ProfileKind, StepId
from mploy_onboarding.store import FormStateStore
from mploy_onboarding.submitters import SupabaseProfileSubmitter, get_client


@pytest.fixture
def assembled(seeker_draft):
    return AssembledProfile(
        kind=ProfileKind.JOB_SEEKER,
        status="published",
        submitted_at=NOW,
        record=build_record(ProfileKind.JOB_SEEKER, seeker_draft, onboarding_complete=True),
    )


@pytest.fixture
def no_client(monkeypatch):
    monkeypatch.setattr(submitters, "_client", None)


class TestSupabaseProfileSubmitter:
    """Test writing documents to the profiles table."""

    def test_requires_user_id(self, mock_supabase):
        with pytest.raises(ValueError):
            SupabaseProfileSubmitter("", client=mock_supabase)

    def test_updates_user_row(self, mock_supabase, assembled):
        submitter = SupabaseProfileSubmitter("user-1", client=mock_supabase)
        assert asyncio.run(submitter.submit(assembled)) == "user-1"

        mock_supabase.table.assert_called_with("users")
        table = mock_supabase.table.return_value
        doc = table.update.call_args.args[0]
        assert doc["firstName"] == "Asha"
        assert doc["onboardingComplete"] is True
        table.eq.assert_called_with("id", "user-1")

    def test_custom_table(self, mock_supabase, assembled):
        submitter = SupabaseProfileSubmitter("user-1", client=mock_supabase, table="profiles")
        asyncio.run(submitter.submit(assembled))
        mock_supabase.table.assert_called_with("profiles")

    def test_missing_row(self, mock_supabase, assembled):
        mock_supabase.table.return_value.execute.return_value = MagicMock(data=[])
        submitter = SupabaseProfileSubmitter("ghost", client=mock_supabase)
        with pytest.raises(LookupError):
            asyncio.run(submitter.submit(assembled))

    def test_store_hand_off(self, mock_supabase):
        store = FormStateStore(ProfileKind.EMPLOYER, draft=make_employer_draft(EmployerType.DIRECT), clock=lambda: NOW)
        while store.current_step != StepId.DASHBOARD:
            assert store.advance().moved

        submitter = SupabaseProfileSubmitter("user-1", client=mock_supabase)
        assert asyncio.run(store.submit(submitter)) == "user-1"
        assert store.profile_id == "user-1"
        doc = mock_supabase.table.return_value.update.call_args.args[0]
        assert doc["companyInfo"]["name"] == "Acme Retail"


class TestGetClient:
    """Test the lazily created client singleton."""

    def test_unconfigured(self, monkeypatch, no_client):
        monkeypatch.setattr(
            submitters, "settings",
            SimpleNamespace(supabase_url=None, supabase_service_role_key=None),
        )
        with pytest.raises(RuntimeError):
            get_client()

    def test_created_once(self, monkeypatch, no_client):
        monkeypatch.setattr(
            submitters, "settings",
            SimpleNamespace(supabase_url="https://db.example.co", supabase_service_role_key="key"),
        )
        with patch.object(submitters, "create_client", return_value=MagicMock()) as create:
            first = get_client()
            second = get_client()
        assert first is second
        create.assert_called_once_with("https://db.example.co", "key")
