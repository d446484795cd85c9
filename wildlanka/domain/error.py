"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class AuthenticationRequiredError(DomainError):
    """Raised when a request carries no usable identity.

    The message is deliberately generic so it never reveals why the
    credential was rejected.
    """

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PersistenceError(DomainError):
    """Raised when the account store fails to read or write."""

    pass


class DuplicateAccountError(PersistenceError):
    """Raised when creating an account violates a uniqueness constraint."""

    pass


class TransientLookupError(DomainError):
    """Raised when a single staff record collection cannot be queried."""

    def __init__(self, collection: str, reason: str):
        self.collection = collection
        super().__init__(f"Lookup in {collection} failed: {reason}")
