"""Custom exceptions for the Call Center Dashboard"""

from typing import Optional


class CallCenterException(Exception):
    """Base exception for all call center errors"""
    pass


class FormException(CallCenterException):
    """Exception raised by the form dialog engine"""
    pass


class SchemaException(FormException):
    """Exception raised for a malformed field schema"""
    pass


class FieldNotFoundException(SchemaException):
    """Exception raised when a field name is not part of the schema"""

    def __init__(self, name: str):
        super().__init__(f"Unknown field: {name!r}")
        self.name = name


class DialogStateException(FormException):
    """Exception raised when an operation does not fit the dialog state"""
    pass


class SaveException(FormException):
    """Exception raised when the external save operation fails"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
