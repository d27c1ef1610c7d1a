"""
Onboarding Form State.

A FormStateStore is the single owner of one onboarding session: the draft,
the step list and the current step pointer. It is created when the flow
starts, passed to each screen, and closed once the profile is submitted.

Edits are path-scoped: `update("company_info", "name", "Acme")` rebuilds
only the dataclasses along that path, so every other field and section is
shared with the previous draft version.
"""

import logging
from dataclasses import dataclass, field, fields, is_dataclass, replace
from datetime import date, datetime, time, timezone
from typing import Any, Callable

from .drafts import (
    Draft,
    EducationEntry,
    EmployerDraft,
    JobSeekerDraft,
    draft_from_dict,
    new_draft,
)
from .errors import (
    DraftInvalidError,
    ErrorKind,
    FieldError,
    OnboardingError,
    StoreClosedError,
    SubmitFailedError,
    ValidationErrorSet,
    clear_field_errors,
)
from .options import max_education_entries
from .records import AssembledProfile, ProfileStatus, build_record
from .salary import SalaryFormat, apply_threshold, toggle_format
from .steps import (
    EmployerType,
    ProfileKind,
    StepId,
    is_terminal,
    next_step,
    previous_step,
    progress,
    remap_step,
    steps_for,
)
from .submitters import ProfileSubmitter
from .validation import FieldValidator, as_int

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime | date]


@dataclass
class StepTransition:
    """Outcome of advance()/retreat()/jump_to()."""
    moved: bool
    step: StepId
    errors: ValidationErrorSet = field(default_factory=dict)
    reason: str = ""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _replace_at(node: Any, path: list[str], name: str, value: Any) -> Any:
    """Copy-on-write assignment of `name` under `path`, sharing everything else."""
    if path:
        head, rest = path[0], path[1:]
        if isinstance(node, list):
            idx = _list_index(node, head)
            items = list(node)
            items[idx] = _replace_at(node[idx], rest, name, value)
            return items
        child = getattr(node, _field_name(node, head))
        return replace(node, **{head: _replace_at(child, rest, name, value)})

    if isinstance(node, list):
        items = list(node)
        items[_list_index(node, name)] = value
        return items
    return replace(node, **{_field_name(node, name): value})


def _field_name(node: Any, name: str) -> str:
    if node is None:
        raise ValueError(f"Cannot set '{name}' inside an unset section")
    if not is_dataclass(node) or name not in {f.name for f in fields(node)}:
        raise ValueError(f"Unknown field '{name}' on {type(node).__name__}")
    return name


def _list_index(items: list, key: str) -> int:
    try:
        idx = int(key)
    except ValueError:
        raise ValueError(f"Expected a list index, got '{key}'") from None
    if not 0 <= idx < len(items):
        raise ValueError(f"List index {idx} out of range")
    return idx


class FormStateStore:
    """
    Draft and step pointer for one onboarding session.

    Screens mutate fields through update(), move with advance()/retreat(),
    and finish with submit(). Validation errors are recorded only when an
    advance is attempted; editing a field clears just that field's error.
    """

    def __init__(
        self,
        kind: ProfileKind,
        draft: Draft | None = None,
        validator: FieldValidator | None = None,
        clock: Clock | None = None,
    ):
        self.kind = kind
        self._clock = clock or _utcnow
        self.validator = validator or FieldValidator(clock=self._clock)
        self._draft: Draft = draft if draft is not None else new_draft(kind)
        self._steps = steps_for(kind, self._employer_type())
        self._current = self._steps[0]
        self._errors: ValidationErrorSet = {}
        self._pending_submission: object | None = None
        self._closed = False
        self.profile_id: str | None = None

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def steps(self) -> list[StepId]:
        return list(self._steps)

    @property
    def current_step(self) -> StepId:
        if self._current not in self._steps:
            # Remapping should make this unreachable
            logger.warning(
                f"Current step {self._current.value} missing from sequence; "
                f"resetting to {self._steps[0].value}"
            )
            self._current = self._steps[0]
        return self._current

    @property
    def errors(self) -> ValidationErrorSet:
        return dict(self._errors)

    @property
    def progress(self) -> float:
        return progress(self._steps, self.current_step)

    @property
    def is_submitting(self) -> bool:
        return self._pending_submission is not None

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # Edits
    # -------------------------------------------------------------------------

    def update(self, section_path: str, field_name: str, value: Any) -> Draft:
        """
        Replace one field inside one section of the draft.

        `section_path` is dotted and may index into lists
        ("education.entries.1"). Clears the error recorded for that field.
        The employer type is stored as an EmployerType; a salary threshold
        goes through set_salary_threshold() so it lands on the ladder.
        """
        self._ensure_open()
        target = (section_path, field_name)
        if target == ("salary", "format"):
            raise ValueError("Use change_salary_format() to switch salary format")
        if target == ("salary", "threshold"):
            return self.set_salary_threshold(value)
        if target == ("employer_type", "type") and value is not None:
            value = EmployerType(value)

        path = section_path.split(".") if section_path else []
        self._draft = _replace_at(self._draft, path, field_name, value)
        self._errors = clear_field_errors(self._errors, ".".join(path + [field_name]))

        if target == ("employer_type", "type"):
            self._resequence()
        return self._draft

    def set_employer_type(self, employer_type: EmployerType | str) -> list[StepId]:
        """Choose direct/agency; returns the recomputed step list."""
        self._require_kind(ProfileKind.EMPLOYER)
        self.update("employer_type", "type", EmployerType(employer_type))
        return self.steps

    def change_salary_format(self, salary_format: SalaryFormat | str) -> Draft:
        """Switch monthly/yearly, converting min, max and threshold together."""
        self._ensure_open()
        self._require_kind(ProfileKind.JOB_SEEKER)
        salary = toggle_format(self._draft.salary, SalaryFormat(salary_format))
        self._draft = replace(self._draft, salary=salary)
        self._errors = clear_field_errors(self._errors, "salary")
        return self._draft

    def set_salary_threshold(self, value: int | str | None) -> Draft:
        """Set the threshold from a slider value; may raise the minimum."""
        self._ensure_open()
        self._require_kind(ProfileKind.JOB_SEEKER)
        if value is not None:
            amount = as_int(value)
            if amount is None:
                raise ValueError(f"Salary threshold must be a whole number, got {value!r}")
            value = amount

        before = self._draft.salary
        salary = apply_threshold(before, value)
        self._draft = replace(self._draft, salary=salary)
        self._errors = clear_field_errors(self._errors, "salary.threshold")
        if salary.range.min != before.range.min:
            self._errors = clear_field_errors(self._errors, "salary.range.min")
        if salary.range.max != before.range.max:
            self._errors = clear_field_errors(self._errors, "salary.range.max")
        return self._draft

    def set_has_experience(self, has_experience: bool) -> Draft:
        """Answer the fresher/experienced question."""
        self._require_kind(ProfileKind.JOB_SEEKER)
        self.update("experience", "has_experience", has_experience)
        if not has_experience:
            # Fresher: the detail fields are no longer required
            self._errors = clear_field_errors(self._errors, "experience")
        return self._draft

    def add_education_entry(self) -> bool:
        """Append an empty entry if the education level allows another one."""
        self._ensure_open()
        self._require_kind(ProfileKind.JOB_SEEKER)
        edu = self._draft.education
        if len(edu.entries) >= max_education_entries(edu.level):
            return False
        self.update("education", "entries", edu.entries + [EducationEntry()])
        return True

    def remove_education_entry(self, index: int) -> bool:
        """Remove an entry; the last remaining entry cannot be removed."""
        self._ensure_open()
        self._require_kind(ProfileKind.JOB_SEEKER)
        entries = self._draft.education.entries
        if len(entries) <= 1 or not 0 <= index < len(entries):
            return False
        # Indices shift, so entry-level errors no longer line up
        self.update("education", "entries", entries[:index] + entries[index + 1:])
        return True

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def advance(self) -> StepTransition:
        """
        Validate the current step and move forward.

        Refused at the terminal step or when the step has errors; the
        errors are recorded on the store and returned.
        """
        self._ensure_open()
        current = self.current_step
        if is_terminal(self._steps, current):
            return StepTransition(moved=False, step=current, reason="terminal")

        errors = self.validator.validate_step(self.kind, current, self._draft)
        self._errors = errors
        if errors:
            logger.info(f"Cannot advance from {current.value}: {len(errors)} error(s)")
            return StepTransition(moved=False, step=current, errors=dict(errors), reason="invalid")

        self._current = next_step(self._steps, current)
        logger.info(f"Advanced {current.value} -> {self._current.value}")
        return StepTransition(moved=True, step=self._current)

    def retreat(self) -> StepTransition:
        """Move back one step. Never validated; drops any in-flight submission."""
        self._ensure_open()
        self.cancel_submission()
        current = self.current_step
        prev = previous_step(self._steps, current)
        if prev is None:
            return StepTransition(moved=False, step=current, reason="entry")
        self._current = prev
        return StepTransition(moved=True, step=prev)

    def jump_to(self, step: StepId) -> StepTransition:
        """Jump back to an earlier step (e.g. tapping a completed step)."""
        self._ensure_open()
        current = self.current_step
        if step not in self._steps or self._steps.index(step) > self._steps.index(current):
            return StepTransition(moved=False, step=current, reason="unreachable")
        if step == current:
            return StepTransition(moved=False, step=current)
        self.cancel_submission()
        self._current = step
        return StepTransition(moved=True, step=step)

    # -------------------------------------------------------------------------
    # Assembly & submission
    # -------------------------------------------------------------------------

    def assemble(self, status: ProfileStatus = "draft") -> AssembledProfile:
        """
        Snapshot the draft for submission.

        Raises DraftInvalidError with the whole-draft error set if any step
        still has a blocking error.
        """
        if status not in ("draft", "published"):
            raise ValueError(f"Unknown profile status: {status}")

        errors = self.validator.validate_draft(self.kind, self._draft)
        if errors:
            logger.warning(f"Assembly blocked by {len(errors)} error(s): {sorted(errors)}")
            raise DraftInvalidError(errors)

        return AssembledProfile(
            kind=self.kind,
            status=status,
            submitted_at=self._now(),
            record=build_record(self.kind, self._draft, onboarding_complete=status == "published"),
        )

    async def submit(self, submitter: ProfileSubmitter, status: ProfileStatus = "published") -> str | None:
        """
        Assemble and hand the profile to `submitter`.

        Returns the profile id, or None if the user backed out while the
        call was in flight (the late result is discarded). Submitter
        failures raise SubmitFailedError; nothing is retried and the draft
        is left untouched.
        """
        self._ensure_open()
        if self.is_submitting:
            raise OnboardingError("A submission is already in flight")
        if not is_terminal(self._steps, self.current_step):
            raise OnboardingError(f"Cannot submit from step {self.current_step.value}")

        record = self.assemble(status)
        token = object()
        self._pending_submission = token
        try:
            profile_id = await submitter.submit(record)
        except Exception as e:
            if self._pending_submission is not token:
                logger.warning(f"Ignoring failure of abandoned submission: {e}")
                return None
            logger.error(f"Profile submission failed: {e}")
            raise SubmitFailedError(str(e) or type(e).__name__) from e
        finally:
            abandoned = self._pending_submission is not token
            if not abandoned:
                self._pending_submission = None

        if abandoned:
            logger.warning("Discarding submission result for abandoned draft")
            return None

        self.profile_id = profile_id
        self._closed = True
        logger.info(f"Submitted {self.kind.value} profile {profile_id}")
        return profile_id

    def cancel_submission(self) -> bool:
        """Forget any in-flight submission. Returns True if one was pending."""
        if self._pending_submission is None:
            return False
        self._pending_submission = None
        logger.info("In-flight submission cancelled")
        return True

    # -------------------------------------------------------------------------
    # Session snapshots
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialize the session (draft, pointer, recorded errors)."""
        return {
            "kind": self.kind.value,
            "current_step": self.current_step.value,
            "draft": self._draft.to_dict(),
            "errors": {path: err.to_dict() for path, err in self._errors.items()},
        }

    @classmethod
    def from_dict(cls, data: dict, **kwargs) -> "FormStateStore":
        """Restore a session produced by to_dict."""
        kind = ProfileKind(data["kind"])
        store = cls(kind, draft=draft_from_dict(kind, data.get("draft") or {}), **kwargs)
        step = StepId(data.get("current_step", store._steps[0].value))
        store._current = remap_step(store._steps, store._steps, step)
        store._errors = {
            path: FieldError(ErrorKind(err["kind"]), err["message"])
            for path, err in (data.get("errors") or {}).items()
        }
        return store

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _employer_type(self) -> EmployerType | None:
        if isinstance(self._draft, EmployerDraft):
            return self._draft.employer_type.type
        return None

    def _resequence(self) -> None:
        old = self._steps
        new = steps_for(self.kind, self._employer_type())
        if new == old:
            return
        self._steps = new
        self._current = remap_step(old, new, self._current)
        logger.info(f"Step sequence now {[s.value for s in new]}, at {self._current.value}")

    def _require_kind(self, kind: ProfileKind) -> None:
        if self.kind != kind:
            raise OnboardingError(f"Operation only applies to {kind.value} onboarding")

    def _ensure_open(self) -> None:
        if self._closed:
            raise StoreClosedError("Profile already submitted; start a new session to edit")

    def _now(self) -> datetime:
        now = self._clock()
        if isinstance(now, datetime):
            return now
        return datetime.combine(now, time.min, tzinfo=timezone.utc)
