"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Raised for malformed input the domain refuses to coerce, such as an
    unrecognised ban duration or a duplicate username.
    """

    pass


class AuthenticationError(DomainError):
    """Raised when credentials are missing or invalid."""

    pass


class AccountDisabledError(DomainError):
    """Raised when a banned or deactivated user tries to act."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            "Account is deactivated. Please contact an administrator."
        )


class PermissionDeniedError(DomainError):
    """Raised when the access-control evaluator denies an action.

    The reason is surfaced verbatim so callers can present role-appropriate
    messaging.
    """

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found.

    Also raised for content hidden from the requester (inactive, banned
    author, unapproved), which is reported identically to true absence.
    """

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AttachmentError(DomainError):
    """Raised when an attachment cannot be accepted or stored."""

    pass
