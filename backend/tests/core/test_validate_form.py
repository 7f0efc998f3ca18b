"""Form Validation — tests for pure field and record validation.

Tests cover:
    - Required check on empty and whitespace-only values
    - Rule order: required → min → max → pattern
    - Email format on the raw value
    - validate_form aggregation and totality
    - is_submittable gate
"""

import pytest

from music_school.core.contact_form import ContactFormData
from music_school.core.domain_types import FormField
from music_school.core.errors import UnknownFieldError
from music_school.core.validate_form import (
    INVALID_EMAIL_MESSAGE,
    is_submittable,
    validate_field,
    validate_form,
)


VALID_FORM = ContactFormData(
    name="Ada Lovelace",
    email="ada@example.com",
    subject="Piano lessons",
    message="I would like to book a trial lesson.",
)


# ─── validate_field: required ────────────────────────────────────

@pytest.mark.parametrize("field", list(FormField))
@pytest.mark.parametrize("value", ["", "   ", "\t\n"])
def test_blank_required_field_yields_only_required(field, value):
    assert validate_field(field, value) == f"{field.label} is required"


def test_required_message_capitalizes_field_name():
    assert validate_field("subject", "") == "Subject is required"


# ─── validate_field: length ──────────────────────────────────────

def test_name_too_short():
    assert validate_field(FormField.NAME, "A") == "Name must be at least 2 characters"


def test_min_length_uses_trimmed_value():
    assert validate_field(FormField.NAME, "  A  ") == "Name must be at least 2 characters"


def test_name_at_min_length_passes():
    assert validate_field(FormField.NAME, "Al") is None


def test_name_too_long():
    assert validate_field(FormField.NAME, "x" * 51) == "Name must be less than 50 characters"


def test_name_at_max_length_passes():
    assert validate_field(FormField.NAME, "x" * 50) is None


def test_max_length_ignores_surrounding_whitespace():
    assert validate_field(FormField.NAME, "  " + "x" * 50 + "  ") is None


def test_subject_bounds():
    assert validate_field(FormField.SUBJECT, "Hey") == "Subject must be at least 5 characters"
    assert validate_field(FormField.SUBJECT, "y" * 101) == "Subject must be less than 100 characters"
    assert validate_field(FormField.SUBJECT, "Hello") is None


def test_message_bounds():
    assert validate_field(FormField.MESSAGE, "short") == "Message must be at least 10 characters"
    assert validate_field(FormField.MESSAGE, "m" * 1001) == "Message must be less than 1000 characters"
    assert validate_field(FormField.MESSAGE, "m" * 1000) is None


# ─── validate_field: email pattern ───────────────────────────────

def test_simple_email_passes():
    assert validate_field(FormField.EMAIL, "a@b.com") is None


@pytest.mark.parametrize("value", [
    "not-an-email", "a@b", "@b.com", "a@.com", "a b@c.com", "a@b.com\n", "a@@b.com",
])
def test_malformed_email_fails(value):
    assert validate_field(FormField.EMAIL, value) == INVALID_EMAIL_MESSAGE


def test_email_pattern_checks_raw_value():
    assert validate_field(FormField.EMAIL, " a@b.com") == INVALID_EMAIL_MESSAGE


def test_blank_email_reports_required_before_format():
    assert validate_field(FormField.EMAIL, "  ") == "Email is required"


def test_unknown_field_raises_domain_error():
    with pytest.raises(UnknownFieldError) as exc_info:
        validate_field("phone", "555")
    assert exc_info.value.http_status == 400
    assert exc_info.value.field_name == "phone"


# ─── validate_form ───────────────────────────────────────────────

def test_valid_form_has_no_errors():
    result = validate_form(VALID_FORM)
    assert result.is_valid
    assert result.errors == {}


def test_empty_form_reports_every_field_required():
    result = validate_form(ContactFormData())
    assert not result.is_valid
    assert result.errors == {
        "name": "Name is required",
        "email": "Email is required",
        "subject": "Subject is required",
        "message": "Message is required",
    }


def test_form_errors_only_for_failing_fields():
    form = VALID_FORM.with_field(FormField.EMAIL, "nope")
    result = validate_form(form)
    assert result.errors == {"email": INVALID_EMAIL_MESSAGE}


def test_form_error_keys_are_form_fields():
    result = validate_form(ContactFormData(name="x", email="y", subject="z", message="w"))
    assert set(result.errors) <= {f.value for f in FormField}


@pytest.mark.parametrize("value", [
    "\x00", "😀" * 2000, "<script>alert(1)</script>", "ﬀ" * 60, "​", "a" * 100_000,
])
def test_validate_form_is_total_for_adversarial_strings(value):
    form = ContactFormData(name=value, email=value, subject=value, message=value)
    result = validate_form(form)
    assert isinstance(result.errors, dict)


def test_validate_form_is_deterministic():
    form = ContactFormData(name="A", email="bad", subject="", message="ok")
    assert validate_form(form) == validate_form(form)


# ─── is_submittable ──────────────────────────────────────────────

def test_submittable_requires_all_fields_and_no_errors():
    assert is_submittable(VALID_FORM, {})
    assert not is_submittable(VALID_FORM, {"name": "Name is required"})
    assert not is_submittable(VALID_FORM.with_field("subject", "  "), {})
