"""
Error taxonomy for the onboarding engine.

Field-level problems are data (FieldError inside a ValidationErrorSet) and
never raised. Engine-level problems raise OnboardingError subclasses.
"""

from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Kinds of onboarding errors."""
    MISSING_REQUIRED = "MissingRequired"
    FORMAT_INVALID = "FormatInvalid"
    RANGE_INVALID = "RangeInvalid"
    CROSS_FIELD_INCONSISTENT = "CrossFieldInconsistent"
    SEQUENCE_INVALID = "SequenceInvalid"
    SUBMIT_FAILED = "SubmitFailed"


@dataclass(frozen=True)
class FieldError:
    """One field-level validation failure."""
    kind: ErrorKind
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


# Field path (e.g. "basic_info.first_name") -> failure
ValidationErrorSet = dict[str, FieldError]


def error_kinds(errors: ValidationErrorSet) -> dict[str, ErrorKind]:
    """Project an error set down to {path: kind}, handy for comparisons."""
    return {path: err.kind for path, err in errors.items()}


def clear_field_errors(errors: ValidationErrorSet, path: str) -> ValidationErrorSet:
    """Return a copy of errors without `path` and anything nested under it."""
    prefix = f"{path}."
    return {
        key: err for key, err in errors.items()
        if key != path and not key.startswith(prefix)
    }


class OnboardingError(Exception):
    """Base class for onboarding engine errors."""
    kind: ErrorKind | None = None


class SequenceInvalidError(OnboardingError):
    """A step was looked up in a sequence that does not contain it."""
    kind = ErrorKind.SEQUENCE_INVALID

    def __init__(self, step, steps):
        self.step = step
        self.steps = list(steps)
        names = ", ".join(s.value for s in self.steps)
        super().__init__(f"Step '{step.value}' is not part of [{names}]")


class DraftInvalidError(OnboardingError):
    """The draft cannot be assembled because it still has blocking errors."""

    def __init__(self, errors: ValidationErrorSet):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Draft has {len(self.errors)} blocking error(s): {fields}")


class SubmitFailedError(OnboardingError):
    """The profile submitter rejected the record. The draft is left as-is."""
    kind = ErrorKind.SUBMIT_FAILED


class StoreClosedError(OnboardingError):
    """The draft was already handed off; the store no longer accepts edits."""
