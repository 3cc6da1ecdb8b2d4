"""
Error taxonomy for ingestion and storage.

Per-record problems are not exceptions: they are collected as
InvalidRecord diagnostics and the batch continues.
"""


class DrugListError(Exception):
    """Base class for all drug listing errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        data = {"error": self.message}
        if self.details:
            data["details"] = self.details
        return data


class MalformedInputError(DrugListError):
    """Ingestion source is not JSON, or holds no recognizable drug array."""


class StorageUnavailableError(DrugListError):
    """The database could not be reached or a read/write failed."""
