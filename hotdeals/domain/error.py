"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DuplicateError(DomainError):
    """Raised when a unique key is already taken."""

    pass


class DuplicatePathError(DuplicateError):
    """Raised when a category path already exists."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Category path already exists: {path}")


class DuplicateIdentityError(DuplicateError):
    """Raised when an external identity is already bound to a user."""

    def __init__(self, uid: str):
        self.uid = uid
        super().__init__(f"Identity already bound to a user: {uid}")


class MissingParentError(DomainError):
    """Raised when a category's parent path does not exist."""

    def __init__(self, parent: str):
        self.parent = parent
        super().__init__(f"Parent category does not exist: {parent}")


class UnresolvedReferenceError(DomainError):
    """Raised when a write references an entity that cannot be resolved."""

    def __init__(self, kind: str, identifier: str):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"Unresolved {kind} reference: {identifier}")


class InvalidNamesError(ValidationError):
    """Raised when a category has no usable localized names."""

    pass


class InvalidPriceError(ValidationError):
    """Raised when a deal price is negative."""

    pass


class InvalidPathError(ValidationError):
    """Raised when a category path is malformed or mismatches its parent."""

    pass


class InvalidCursorError(ValidationError):
    """Raised when a pagination cursor is malformed or used out of context."""

    pass


class IllegalTransitionError(BusinessRuleViolationError):
    """Raised when a deal status change is not allowed by the lifecycle."""

    def __init__(self, deal_id: str, current: str, requested: str):
        self.deal_id = deal_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Deal {deal_id} cannot move from {current} to {requested}"
        )


class NotAuthorizedError(DomainError):
    """Raised when an actor lacks the role required for an operation."""

    def __init__(self, action: str, role: str):
        self.action = action
        self.role = role
        super().__init__(f"Role {role} is not allowed to {action}")


class DeadlineExceededError(DomainError):
    """Raised when a read does not complete within the caller's deadline."""

    def __init__(self, operation: str, deadline_seconds: float):
        self.operation = operation
        self.deadline_seconds = deadline_seconds
        super().__init__(
            f"{operation} did not complete within {deadline_seconds:g}s"
        )
