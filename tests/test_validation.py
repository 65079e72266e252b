"""Tests for the login form validator."""

import pytest
from privateconnect.core.validation import validate
from privateconnect.models.auth import Credentials


@pytest.mark.parametrize("email", ["", "   ", "\t"])
def test_empty_email_is_required(email):
    """Blank emails are reported as missing."""
    errors = validate(Credentials(email=email, password="secret"))
    assert errors == {"email": "Email is required"}


@pytest.mark.parametrize(
    "email",
    ["plainaddress", "user@domain", "user@", "@domain.com", "a b@c.com", "a@@b.com", "a@b."],
)
def test_malformed_email(email):
    """Emails without an @ or a dotted domain are rejected."""
    errors = validate(Credentials(email=email, password="secret"))
    assert errors == {"email": "Invalid email format"}


@pytest.mark.parametrize("email", ["a@b.com", "first.last@sub.example.org", "x+y@z.io"])
def test_well_formed_input_is_valid(email):
    """Correct emails with a password produce no errors."""
    assert validate(Credentials(email=email, password="secret")) == {}


@pytest.mark.parametrize("password", ["", "  "])
def test_password_is_required(password):
    """Blank passwords are reported."""
    errors = validate(Credentials(email="a@b.com", password=password))
    assert errors == {"password": "Password is required"}


def test_all_violations_are_collected():
    """Both fields are reported in one pass."""
    errors = validate({"email": "nope", "password": ""})
    assert errors == {
        "email": "Invalid email format",
        "password": "Password is required",
    }


def test_missing_keys_count_as_empty():
    """A mapping without the fields behaves like empty input."""
    assert validate({}) == {
        "email": "Email is required",
        "password": "Password is required",
    }


def test_validate_is_idempotent():
    """Same input, same output, no shared state between calls."""
    credentials = Credentials(email="bad", password="")
    first = validate(credentials)
    first["extra"] = "mutated"
    assert validate(credentials) == {
        "email": "Invalid email format",
        "password": "Password is required",
    }
