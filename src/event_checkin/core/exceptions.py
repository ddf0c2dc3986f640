class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class StoreError(DomainError):
    """Raised when the remote document store cannot be reached or fails."""


class DocumentNotFoundError(StoreError):
    """Raised when a write targets a document that does not exist."""

    def __init__(self, collection: str, key: str):
        super().__init__(f"{collection}/{key} does not exist")
        self.collection = collection
        self.key = key
