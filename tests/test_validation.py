"""Tests for the validation engine."""

import pytest

from forms import FieldConstraints, FieldDescriptor, FieldKind, validate_field, validate_form
from forms.validation import is_absolute_url, is_empty


class TestIsEmpty:
    """Tests for the emptiness rule."""

    @pytest.mark.parametrize("value", ["", None, [], (), set()])
    def test_empty_values(self, value) -> None:
        assert is_empty(value)

    @pytest.mark.parametrize("value", [0, False, " ", "x", ["a"]])
    def test_non_empty_values(self, value) -> None:
        assert not is_empty(value)


class TestRequired:
    """Tests for the required rule."""

    @pytest.mark.parametrize("kind", list(FieldKind))
    @pytest.mark.parametrize("value", ["", None, []])
    def test_required_empty_always_errors(self, kind, value) -> None:
        field = FieldDescriptor(name="f", label="Field", kind=kind, required=True)
        assert validate_field(field, value) == "Field is required"

    @pytest.mark.parametrize("kind", list(FieldKind))
    @pytest.mark.parametrize("value", ["", None, []])
    def test_optional_empty_never_errors(self, kind, value) -> None:
        field = FieldDescriptor(
            name="f",
            label="Field",
            kind=kind,
            constraints=FieldConstraints(min_length=5, custom=lambda v: "never"),
        )
        assert validate_field(field, value) is None


class TestKindChecks:
    """Tests for built-in email, URL and phone checks."""

    def test_email_scenario(self, email_field) -> None:
        assert validate_field(email_field, "") == "Email is required"
        assert validate_field(email_field, "a@b") == "Invalid email address"
        assert validate_field(email_field, "a@b.com") is None

    @pytest.mark.parametrize("value", ["a b@c.com", "@b.com", "a@b.com\n"])
    def test_invalid_emails(self, email_field, value) -> None:
        assert validate_field(email_field, value) == "Invalid email address"

    @pytest.mark.parametrize(
        "value",
        ["https://example.com", "http://localhost:8000/api/v1", "mailto:agent@example.com"],
    )
    def test_valid_urls(self, value) -> None:
        field = FieldDescriptor(name="site", label="Site", kind=FieldKind.URL)
        assert validate_field(field, value) is None

    @pytest.mark.parametrize(
        "value",
        ["example.com", "http://", "http:", "http://exa mple.com", "https://example.com:99999"],
    )
    def test_invalid_urls(self, value) -> None:
        field = FieldDescriptor(name="site", label="Site", kind=FieldKind.URL)
        assert validate_field(field, value) == "Invalid URL"

    @pytest.mark.parametrize(
        "value, expected",
        [
            (" https://example.com", True),
            ("https://example.com \n", True),
            ("http:example.com", True),
            ("https:/example.com/path", True),
            ("http:///", False),
        ],
    )
    def test_urls_are_read_leniently(self, value, expected) -> None:
        assert is_absolute_url(value) is expected

    def test_is_absolute_url_rejects_non_strings(self) -> None:
        assert not is_absolute_url(42)

    @pytest.mark.parametrize("value", ["+1-555-0123", "(555) 123-4567", "555-0123", "+256700000000"])
    def test_valid_phone_numbers(self, value) -> None:
        field = FieldDescriptor(name="phone", label="Phone", kind=FieldKind.TEL)
        assert validate_field(field, value) is None

    @pytest.mark.parametrize("value", ["abc", "12345678901234567890", "555 0123 ext 9"])
    def test_invalid_phone_numbers(self, value) -> None:
        field = FieldDescriptor(name="phone", label="Phone", kind=FieldKind.TEL)
        assert validate_field(field, value) == "Invalid phone number"

    def test_kind_check_runs_before_constraints(self) -> None:
        field = FieldDescriptor(
            name="email",
            label="Email",
            kind=FieldKind.EMAIL,
            constraints=FieldConstraints(max_length=3),
        )
        assert validate_field(field, "not-an-email") == "Invalid email address"


class TestConstraints:
    """Tests for caller supplied constraints."""

    def test_number_bounds_scenario(self, age_field) -> None:
        assert validate_field(age_field, 17) == "Age must be at least 18"
        assert validate_field(age_field, 70) == "Age must be at most 65"
        assert validate_field(age_field, 30) is None

    def test_number_bounds_read_numeric_strings(self, age_field) -> None:
        assert validate_field(age_field, "17") == "Age must be at least 18"
        assert validate_field(age_field, "42") is None

    def test_zero_is_a_value(self, age_field) -> None:
        assert validate_field(age_field, 0) == "Age must be at least 18"

    def test_unreadable_number_skips_bounds(self, age_field) -> None:
        assert validate_field(age_field, "forty") is None

    def test_contradictory_bounds_check_min_first(self) -> None:
        field = FieldDescriptor(
            name="score",
            label="Score",
            kind=FieldKind.NUMBER,
            constraints=FieldConstraints(min=10, max=5),
        )
        assert validate_field(field, 20) == "Score must be at most 5"
        assert validate_field(field, 7) == "Score must be at least 10"

    def test_integral_float_bounds_render_without_decimal(self) -> None:
        field = FieldDescriptor(
            name="rate",
            label="Rate",
            kind=FieldKind.NUMBER,
            constraints=FieldConstraints(min=1.0, max=2.5),
        )
        assert validate_field(field, 0.5) == "Rate must be at least 1"
        assert validate_field(field, 3) == "Rate must be at most 2.5"

    def test_bounds_only_apply_to_number_fields(self) -> None:
        field = FieldDescriptor(name="code", label="Code", constraints=FieldConstraints(min=10))
        assert validate_field(field, "5") is None

    def test_pattern(self) -> None:
        field = FieldDescriptor(
            name="code", label="Facility Code", constraints=FieldConstraints(pattern=r"^[A-Z0-9-]+$")
        )
        assert validate_field(field, "HC-42") is None
        assert validate_field(field, "hc 42") == "Facility Code format is invalid"

    def test_pattern_runs_before_bounds(self) -> None:
        field = FieldDescriptor(
            name="ext",
            label="Extension",
            kind=FieldKind.NUMBER,
            constraints=FieldConstraints(pattern=r"^\d{3}$", min=500),
        )
        assert validate_field(field, 12) == "Extension format is invalid"
        assert validate_field(field, 123) == "Extension must be at least 500"

    def test_string_lengths(self) -> None:
        field = FieldDescriptor(
            name="name", label="Name", constraints=FieldConstraints(min_length=3, max_length=5)
        )
        assert validate_field(field, "ab") == "Name must be at least 3 characters"
        assert validate_field(field, "abcdef") == "Name must be at most 5 characters"
        assert validate_field(field, "abcd") is None

    def test_custom_message_used_verbatim(self) -> None:
        field = FieldDescriptor(
            name="agents",
            label="Agents",
            kind=FieldKind.NUMBER,
            constraints=FieldConstraints(custom=lambda v: None if int(v) % 2 == 0 else "Pick an even team size"),
        )
        assert validate_field(field, 3) == "Pick an even team size"
        assert validate_field(field, 4) is None

    def test_custom_only_runs_after_other_checks_pass(self) -> None:
        calls = []

        def custom(value):
            calls.append(value)
            return "custom failure"

        field = FieldDescriptor(
            name="agents",
            label="Agents",
            kind=FieldKind.NUMBER,
            constraints=FieldConstraints(min=5, custom=custom),
        )
        assert validate_field(field, 3) == "Agents must be at least 5"
        assert calls == []
        assert validate_field(field, 6) == "custom failure"
        assert calls == [6]


class TestValidateForm:
    """Tests for whole-form validation."""

    def test_collects_errors_in_schema_order(self, contact_fields) -> None:
        result = validate_form(contact_fields, {"name": "", "email": "nope", "skills": [], "on_call": False})
        assert not result.valid
        assert list(result.errors) == ["name", "email"]
        assert result.errors["email"] == "Invalid email address"

    def test_valid_form(self, contact_fields) -> None:
        result = validate_form(contact_fields, {"name": "Jane", "email": "jane@example.com"})
        assert result.valid
        assert result.errors == {}
        assert bool(result)

    def test_hidden_fields_never_report_errors(self, country_fields) -> None:
        result = validate_form(country_fields, {"country": "UG", "state": ""})
        assert "state" not in result.errors
        assert result.valid

    def test_visible_conditional_field_is_validated(self, country_fields) -> None:
        result = validate_form(country_fields, {"country": "US", "state": ""})
        assert result.errors == {"state": "State is required"}

    @pytest.mark.parametrize("value", ["", "anything", None, 12])
    def test_hidden_field_ignored_regardless_of_value(self, value) -> None:
        field = FieldDescriptor(
            name="hidden",
            label="Hidden",
            kind=FieldKind.EMAIL,
            required=True,
            show_when=lambda values: False,
        )
        assert validate_form([field], {"hidden": value}).errors == {}
