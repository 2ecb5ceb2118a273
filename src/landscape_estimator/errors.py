"""Error taxonomy shared by the estimator services and API layer."""


class EstimatorError(Exception):
    """Base class for estimator failures."""


class InvalidArgumentError(EstimatorError, ValueError):
    """Raised when a caller supplies malformed input (coordinates, radius, branch, hours)."""


class UpstreamUnavailableError(EstimatorError, ConnectionError):
    """Raised when a collaborator (database, maps provider) cannot satisfy a request."""
