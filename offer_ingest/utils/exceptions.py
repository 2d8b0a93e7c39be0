"""Custom exceptions for the offer ingestion pipeline."""


class ConfigurationError(Exception):
    """
    Exception raised when a required setting (e.g. the SerpAPI key) is missing.

    Raised before the pipeline touches storage.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class SerpAPIException(Exception):
    """
    Exception raised for SERP API failures.

    Attributes:
        message: Error message
        engine: Search engine identifier (e.g., 'google_shopping')
        status_code: HTTP status code
    """

    def __init__(self, message: str, engine: str, status_code: int = 500):
        self.message = message
        self.engine = engine
        self.status_code = status_code
        super().__init__(f"{engine} API error: {message}")


class StorageError(Exception):
    """
    Exception raised when a storage batch read, delete or write fails.

    Attributes:
        message: Error message
        operation: Storage operation that failed (e.g., 'delete_batch')
    """

    def __init__(self, message: str, operation: str):
        self.message = message
        self.operation = operation
        super().__init__(f"Storage {operation} failed: {message}")
