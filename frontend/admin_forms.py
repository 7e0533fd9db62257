"""Field schemas used by the admin screens"""

from typing import Any, Callable, Dict, List, Tuple

from forms import FieldConstraints, FieldDescriptor, FieldKind, FieldOption


GENDER_OPTIONS = [
    FieldOption("male", "Male"),
    FieldOption("female", "Female"),
    FieldOption("other", "Other"),
]

COUNTRY_OPTIONS = [
    FieldOption("uganda", "Uganda"),
    FieldOption("kenya", "Kenya"),
    FieldOption("tanzania", "Tanzania"),
    FieldOption("rwanda", "Rwanda"),
]

FACILITY_LEVEL_OPTIONS = [
    FieldOption("referral", "Referral Hospital"),
    FieldOption("hc4", "Health Center IV"),
    FieldOption("hc3", "Health Center III"),
    FieldOption("hc2", "Health Center II"),
]

HSD_OPTIONS = [
    FieldOption("nakawa", "Nakawa"),
    FieldOption("kawempe", "Kawempe"),
    FieldOption("makindye", "Makindye"),
    FieldOption("rubaga", "Rubaga"),
    FieldOption("central", "Central"),
]

ESCALATION_PRIORITY_OPTIONS = [
    FieldOption("low", "Low - Can be addressed within 24 hours"),
    FieldOption("medium", "Medium - Supervisor input required"),
    FieldOption("high", "High - Immediate supervisor attention needed"),
]

ESCALATION_REASONS = [
    "Complex medical inquiry beyond scope",
    "Patient expressing severe distress",
    "Medication dosage clarification needed",
    "Insurance coverage dispute",
    "Appointment scheduling conflict",
    "Patient requesting second opinion",
    "Technical system issue preventing resolution",
    "Policy exception required",
    "Other",
]


def _fill_facility_code(value: Any, values: Dict[str, Any]) -> None:
    # Suggest a code from the name until the user types one
    if not values.get("facility_code") and isinstance(value, str):
        initials = "".join(word[0] for word in value.split() if word)
        values["facility_code"] = initials.upper()


def user_form_fields() -> List[FieldDescriptor]:
    """Add/Edit user dialog"""
    return [
        FieldDescriptor(
            name="first_name", label="First Name", kind=FieldKind.TEXT,
            placeholder="Enter first name", required=True
        ),
        FieldDescriptor(
            name="last_name", label="Last Name", kind=FieldKind.TEXT,
            placeholder="Enter last name", required=True
        ),
        FieldDescriptor(
            name="email", label="Email", kind=FieldKind.EMAIL,
            placeholder="Enter email address", grid_column="1 / -1", required=True
        ),
        FieldDescriptor(
            name="phone", label="Phone Number", kind=FieldKind.TEL,
            placeholder="+256 700 000 000", grid_column="1 / -1"
        ),
        FieldDescriptor(
            name="gender", label="Gender", kind=FieldKind.SELECT,
            placeholder="Select gender", options=GENDER_OPTIONS
        ),
        FieldDescriptor(
            name="nationality", label="Nationality", kind=FieldKind.SELECT,
            placeholder="Select country", options=COUNTRY_OPTIONS[:3]
        ),
        FieldDescriptor(
            name="is_active", label="Active", kind=FieldKind.SWITCH, default_value=True
        ),
        FieldDescriptor(
            name="address", label="Address", kind=FieldKind.TEXTAREA,
            placeholder="Enter address", grid_column="1 / -1", rows=2,
            constraints=FieldConstraints(max_length=250)
        ),
    ]


def facility_form_fields() -> List[FieldDescriptor]:
    """Add/Edit facility dialog"""
    return [
        FieldDescriptor(
            name="facility_name", label="Facility Name", kind=FieldKind.TEXT,
            placeholder="Hospital", grid_column="1 / -1", required=True,
            on_change=_fill_facility_code
        ),
        FieldDescriptor(
            name="facility_code", label="Facility Code", kind=FieldKind.TEXT,
            placeholder="Code", grid_column="1 / -1",
            constraints=FieldConstraints(pattern=r"^[A-Z0-9-]+$", max_length=12)
        ),
        FieldDescriptor(
            name="facility_level", label="Facility Level", kind=FieldKind.SELECT,
            placeholder="Select level", options=FACILITY_LEVEL_OPTIONS, required=True
        ),
        FieldDescriptor(
            name="hsd", label="Health Sub-District (HSD)", kind=FieldKind.SELECT,
            placeholder="Select HSD", options=HSD_OPTIONS, required=True,
            depends_on="country", show_when=lambda values: values.get("country") == "uganda"
        ),
        FieldDescriptor(
            name="country", label="Country", kind=FieldKind.SELECT,
            placeholder="Select country", grid_column="1 / -1",
            options=COUNTRY_OPTIONS, default_value="uganda"
        ),
        FieldDescriptor(
            name="website", label="Website", kind=FieldKind.URL,
            placeholder="https://", grid_column="1 / -1"
        ),
        FieldDescriptor(
            name="bed_capacity", label="Bed Capacity", kind=FieldKind.NUMBER,
            constraints=FieldConstraints(min=0, max=2000)
        ),
    ]


def escalation_form_fields() -> List[FieldDescriptor]:
    """Escalate call to a supervisor"""
    return [
        FieldDescriptor(
            name="priority", label="Escalation priority", kind=FieldKind.RADIO,
            options=ESCALATION_PRIORITY_OPTIONS, default_value="medium",
            required=True, grid_column="1 / -1"
        ),
        FieldDescriptor(
            name="reason", label="Escalation reason", kind=FieldKind.SELECT,
            placeholder="Select a reason", options=ESCALATION_REASONS,
            required=True, grid_column="1 / -1"
        ),
        FieldDescriptor(
            name="details", label="Details", kind=FieldKind.TEXTAREA,
            placeholder="Describe the reason", required=True, grid_column="1 / -1",
            depends_on="reason", show_when=lambda values: values.get("reason") == "Other",
            constraints=FieldConstraints(min_length=10)
        ),
        FieldDescriptor(
            name="callback_at", label="Callback time", kind=FieldKind.DATETIME,
            helper_text="Leave empty if no callback is needed"
        ),
        FieldDescriptor(
            name="notify_patient", label="Notify patient", kind=FieldKind.CHECKBOX
        ),
    ]


FORMS: Dict[str, Tuple[str, Callable[[], List[FieldDescriptor]]]] = {
    "user": ("Add User", user_form_fields),
    "facility": ("Edit Facility", facility_form_fields),
    "escalation": ("Escalate Call", escalation_form_fields),
}
