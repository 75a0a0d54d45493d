from __future__ import annotations

import logging
import warnings

logger = logging.getLogger("jobfit.performance")


class InvalidInputError(ValueError):
    """Raised when the analysis pipeline cannot run on the given input."""

    def __init__(self, message: str, status_code: int = 422) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProfileNotFoundError(LookupError):
    def __init__(self, profile_id: str) -> None:
        super().__init__(f"Profile '{profile_id}' was not found.")
        self.profile_id = profile_id
        self.status_code = 404


class PerformanceWarning(UserWarning):
    """Soft signal for oversized input; processing always continues."""


def warn_performance(message: str) -> None:
    logger.warning(message)
    warnings.warn(message, PerformanceWarning, stacklevel=3)
