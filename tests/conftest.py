"""Pytest configuration and fixtures."""

import pytest

from forms import FieldConstraints, FieldDescriptor, FieldKind, FieldOption


@pytest.fixture
def email_field() -> FieldDescriptor:
    return FieldDescriptor(name="email", label="Email", kind=FieldKind.EMAIL, required=True)


@pytest.fixture
def age_field() -> FieldDescriptor:
    return FieldDescriptor(
        name="age",
        label="Age",
        kind=FieldKind.NUMBER,
        constraints=FieldConstraints(min=18, max=65),
    )


@pytest.fixture
def country_fields():
    """A country select and a state field only shown for the US."""
    return [
        FieldDescriptor(
            name="country",
            label="Country",
            kind=FieldKind.SELECT,
            options=[FieldOption("US", "United States"), FieldOption("UG", "Uganda")],
        ),
        FieldDescriptor(
            name="state",
            label="State",
            kind=FieldKind.TEXT,
            required=True,
            depends_on="country",
            show_when=lambda values: values.get("country") == "US",
        ),
    ]


@pytest.fixture
def contact_fields(email_field):
    """A small agent contact form."""
    return [
        FieldDescriptor(name="name", label="Name", required=True),
        email_field,
        FieldDescriptor(name="skills", label="Skills", kind=FieldKind.MULTISELECT,
                        options=["billing", "technical", "triage"]),
        FieldDescriptor(name="on_call", label="On call", kind=FieldKind.SWITCH),
    ]
