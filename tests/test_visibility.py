"""Tests for the visibility resolver."""

from forms import FieldDescriptor, is_visible, visible_fields
from forms.visibility import hidden_field_names


class TestVisibility:
    """Tests for show_when evaluation."""

    def test_fields_without_predicate_are_visible(self, email_field) -> None:
        assert is_visible(email_field, {})

    def test_predicate_sees_full_value_map(self, country_fields) -> None:
        state_field = country_fields[1]
        assert is_visible(state_field, {"country": "US"})
        assert not is_visible(state_field, {"country": "UG"})
        assert not is_visible(state_field, {})

    def test_truthy_predicate_results_are_coerced(self) -> None:
        field = FieldDescriptor(name="notes", label="Notes", show_when=lambda values: values.get("extra"))
        assert is_visible(field, {"extra": "yes"}) is True
        assert is_visible(field, {"extra": ""}) is False

    def test_visible_fields_keep_schema_order(self, country_fields, email_field) -> None:
        fields = [email_field] + country_fields
        assert [f.name for f in visible_fields(fields, {"country": "US"})] == ["email", "country", "state"]
        assert [f.name for f in visible_fields(fields, {"country": "UG"})] == ["email", "country"]
        assert hidden_field_names(fields, {"country": "UG"}) == ["state"]
