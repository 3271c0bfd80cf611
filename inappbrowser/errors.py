"""Project-wide error types."""


class ProjectError(Exception):
    """Base for all in-app browser errors."""


class ValidationError(ProjectError):
    """Invalid input data."""


class ExternalServiceError(ProjectError):
    """Network, OS or host application failure."""


__all__ = ["ProjectError", "ValidationError", "ExternalServiceError"]
