"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions. They are raised inside handlers
and converted to plain-string results at the public boundary
(see core.boundary).
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainException):
    """Raised when input or a transition precondition is invalid."""

    def __init__(self, message: str = "Validation failed", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class NotFoundError(DomainException):
    """Raised when the rows an operation needs do not resolve."""

    def __init__(self, message: str = "Not found", code: str = "NOT_FOUND"):
        super().__init__(message, code=code)


class ConstraintError(DomainException):
    """Raised when the storage layer rejects a write (e.g. uniqueness)."""

    def __init__(self, message: str = "Constraint violation"):
        super().__init__(message, code="CONSTRAINT_VIOLATION")


class UnexpectedError(DomainException):
    """Raised for failures that fit no other category."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message, code="UNEXPECTED_ERROR")


class RequirementNotFoundError(NotFoundError):
    """Raised when a license requirement is not found."""

    def __init__(self, message: str = "License requirement not found"):
        super().__init__(message, code="REQUIREMENT_NOT_FOUND")


class StepNotFoundError(NotFoundError):
    """Raised when a requirement or application step is not found."""

    def __init__(self, message: str = "Step not found"):
        super().__init__(message, code="STEP_NOT_FOUND")


class DocumentNotFoundError(NotFoundError):
    """Raised when a requirement document is not found."""

    def __init__(self, message: str = "Document not found"):
        super().__init__(message, code="DOCUMENT_NOT_FOUND")


class TemplateFileNotFoundError(NotFoundError):
    """Raised when a requirement template file is not found."""

    def __init__(self, message: str = "Template file not found"):
        super().__init__(message, code="TEMPLATE_FILE_NOT_FOUND")


class ApplicationNotFoundError(NotFoundError):
    """Raised when an application is not found."""

    def __init__(self, message: str = "Application not found"):
        super().__init__(message, code="APPLICATION_NOT_FOUND")


class InvalidApplicationStatusError(ValidationError):
    """Raised when a lifecycle transition is invalid for the current status."""

    def __init__(self, message: str = "Invalid application status"):
        super().__init__(message, code="INVALID_APPLICATION_STATUS")


class ExpertNotAssignedError(ValidationError):
    """Raised when an application is approved before an expert is assigned."""

    def __init__(
        self, message: str = "Please assign an expert before approving the application"
    ):
        super().__init__(message, code="EXPERT_NOT_ASSIGNED")


class RevisionReasonRequiredError(ValidationError):
    """Raised when a revision is requested without a reason."""

    def __init__(self, message: str = "A revision reason is required"):
        super().__init__(message, code="REVISION_REASON_REQUIRED")
