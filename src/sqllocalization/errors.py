"""Exception hierarchy for sqllocalization.

Configuration and backing-store errors propagate to the host application;
resolution misses never raise (they surface as LocalizedString values with
resource_not_found=True).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

__all__ = [
    "ConfigurationError",
    "CultureNotFoundError",
    "DataSourceError",
    "FormattingError",
    "LocalizationError",
    "require",
]


class LocalizationError(Exception):
    """Base exception for all sqllocalization errors."""


class ConfigurationError(LocalizationError):
    """Deployment misconfiguration detected at construction time.

    Raised for a missing data-source option, a base name too short to derive
    a load filter from, or an explicit-name location that cannot be imported.
    Never retried.

    Attributes:
        option: Name of the missing configuration option, if that was the cause
    """

    def __init__(self, message: str, *, option: str | None = None) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable description
            option: Missing option key, when applicable
        """
        super().__init__(message)
        self.option = option


class DataSourceError(LocalizationError):
    """Fetching records from the backing store failed.

    The underlying driver or SQLAlchemy exception is chained as __cause__.
    The failed attempt leaves the record set unloaded, so the next lookup
    re-attempts the fetch.

    Attributes:
        connection_target: Connection string with any password masked
        table: Configured table name
        column: Configured value column
    """

    def __init__(
        self,
        message: str,
        *,
        connection_target: str = "",
        table: str = "",
        column: str = "",
    ) -> None:
        """Initialize DataSourceError.

        Args:
            message: Human-readable description
            connection_target: Masked connection string
            table: Configured table name
            column: Configured value column
        """
        super().__init__(message)
        self.connection_target = connection_target
        self.table = table
        self.column = column


class CultureNotFoundError(LocalizationError, ValueError):
    """Culture name is malformed or unknown to CLDR.

    Attributes:
        culture_name: The name that failed to parse
    """

    def __init__(self, message: str, *, culture_name: str) -> None:
        """Initialize CultureNotFoundError.

        Args:
            message: Human-readable description
            culture_name: The rejected culture name
        """
        super().__init__(message)
        self.culture_name = culture_name


class FormattingError(LocalizationError):
    """Applying format arguments to a template failed.

    Attributes:
        template: The template that could not be formatted
    """

    def __init__(self, message: str, *, template: str) -> None:
        """Initialize FormattingError.

        Args:
            message: Human-readable description
            template: Template string that failed
        """
        super().__init__(message)
        self.template = template


def require[T](value: T | None, parameter: str) -> T:
    """Reject None at a public call boundary.

    Args:
        value: Argument value
        parameter: Parameter name used in the error message

    Returns:
        The value, narrowed to non-None

    Raises:
        TypeError: If value is None
    """
    if value is None:
        msg = f"{parameter} must not be None"
        raise TypeError(msg)
    return value
