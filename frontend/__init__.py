"""Frontend module for the Call Center Dashboard"""

from .admin_forms import (
    FORMS,
    user_form_fields,
    facility_form_fields,
    escalation_form_fields
)

__all__ = [
    "FORMS",
    "user_form_fields",
    "facility_form_fields",
    "escalation_form_fields"
]
