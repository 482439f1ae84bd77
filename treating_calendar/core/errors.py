# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain errors. Each carries a machine-readable ``reason`` and subclasses the
builtin that controllers already translate (KeyError → 404, ValueError → 4xx,
RuntimeError → 5xx).
"""


class TreatingError(Exception):
    reason: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.message

    def to_detail(self) -> dict[str, str]:
        return {"reason": self.reason, "message": self.message}


class TeamNotFoundError(TreatingError, KeyError):
    reason = "team_not_found"


class PersonNotFoundError(TreatingError, KeyError):
    reason = "person_not_found"


class AssignmentNotFoundError(TreatingError, KeyError):
    reason = "date_not_found"


class PastAssignmentError(TreatingError, ValueError):
    reason = "past_assignment"


class InvalidSwapError(TreatingError, ValueError):
    reason = "same_date"


class ValidationError(TreatingError, ValueError):
    reason = "invalid_input"


class PersistenceError(TreatingError, RuntimeError):
    reason = "persistence_failed"
