"""Domain exception classes for business logic errors."""


class DomainError(Exception):
    """Base class for all domain-specific errors."""

    pass


class ResourceNotFoundError(DomainError):
    """Raised when a requested resource cannot be found."""

    pass


class ResourceExistsError(DomainError):
    """Raised when attempting to create a resource that already exists."""

    pass


class ValidationError(DomainError):
    """Raised when data validation fails."""

    pass


class InvalidInputError(ValidationError):
    """An uploaded file was rejected by validation.

    The message is the human-readable rejection reason.
    """

    @property
    def reason(self) -> str:
        return str(self)


class StorageError(DomainError):
    """Base class for blob storage failures."""

    pass


class StorageWriteError(StorageError):
    """Writing or removing a blob failed."""

    pass


class StorageReadError(StorageError):
    """Reading a blob failed."""

    pass


class MetadataError(DomainError):
    """Inserting, updating or deleting a metadata record failed."""

    pass
