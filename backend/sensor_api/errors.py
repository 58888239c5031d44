"""Exception hierarchy shared by the repository, service and factory layers."""


class SensorAPIError(Exception):
    """Base class for errors raised by this package."""


class RepositoryError(SensorAPIError):
    """A repository could not carry out an operation."""


class RepositoryInitError(RepositoryError):
    """Table recreation or statement preparation failed."""


class RepositoryClosedError(RepositoryError):
    """The repository was used after its connection was released."""


class InvalidPaginationError(RepositoryError, ValueError):
    """page or rows_per_page is smaller than 1."""


class ServiceConfigurationError(SensorAPIError):
    """The service factory was asked for a backing store it does not know."""
