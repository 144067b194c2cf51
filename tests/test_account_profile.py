from __future__ import annotations

import pytest
from pydantic import ValidationError

from models.account import AccountDraft, AccountProfile


def _draft(**overrides: object) -> AccountDraft:
    values: dict[str, object] = {
        "first_name": "Grace",
        "last_name": "Hopper",
        "email": "grace@navy.example",
        "country": "United States",
    }
    values.update(overrides)
    return AccountDraft(**values)


def test_valid_draft_produces_profile() -> None:
    profile = AccountProfile.from_draft(_draft(linkedin="https://linkedin.com/in/grace"))

    assert profile.first_name == "Grace"
    assert profile.linkedin == "https://linkedin.com/in/grace"
    assert profile.password is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"first_name": ""},
        {"last_name": ""},
        {"email": ""},
        {"email": "grace@navy"},
        {"email": "grace navy.example"},
    ],
)
def test_required_fields_and_email_pattern(overrides: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        AccountProfile.from_draft(_draft(**overrides))


def test_country_is_optional() -> None:
    assert AccountProfile.from_draft(_draft(country="")).country == ""


def test_password_only_travels_when_opted_in() -> None:
    assert AccountProfile.from_draft(_draft(password="s3cret")).password is None
    assert AccountProfile.from_draft(_draft(use_password=True, password="s3cret")).password == "s3cret"
    assert AccountProfile.from_draft(_draft(use_password=True, password="")).password is None


def test_profile_is_immutable() -> None:
    profile = AccountProfile.from_draft(_draft())

    with pytest.raises(ValidationError):
        profile.first_name = "Ada"  # type: ignore[misc]
