"""Exceptions raised by the BTO control and repository layers.

Every rule violation carries a message meant to be shown to the user as is.
"""


class BTOError(Exception):
    """Base exception for the BTO system."""

    pass


class InvalidInputError(BTOError, ValueError):
    """Raised when user input cannot be parsed or is out of range."""

    pass


class InvalidNRICError(InvalidInputError):
    """Raised when an NRIC does not match S/T + 7 digits + letter."""

    pass


class AuthenticationError(BTOError):
    """Raised on unknown NRIC or wrong password."""

    pass


class PermissionDeniedError(BTOError):
    """Raised when a user acts on a record outside their role or project."""

    pass


class NotFoundError(BTOError):
    pass


class EligibilityError(BTOError):
    """Raised when an applicant's age or marital status rules them out."""

    pass


class ApplicationStateError(BTOError):
    """Raised on an illegal application, enquiry or withdrawal transition."""

    pass


class QuotaError(BTOError):
    """Raised when a flat type has no units left to allocate."""

    pass


class RegistrationError(BTOError):
    """Raised when an officer registration breaks a slot or period rule."""

    pass


class ProjectError(BTOError):
    """Raised when project details fail validation."""

    pass


class DataFileError(BTOError):
    """Raised when a CSV file cannot be read or written."""

    pass
