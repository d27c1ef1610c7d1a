#!/usr/bin/env python3
"""
Audit a saved onboarding session.

Restores a session snapshot (FormStateStore.to_dict output), then reports
the step sequence, progress, per-step validation and the document that
submission would write.

Usage:
    python scripts/audit_onboarding_flow.py session.json
    python scripts/audit_onboarding_flow.py session.json --today 2026-01-31

Exit codes:
    0 - Draft is complete and would assemble
    1 - Validation errors found
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dotenv import load_dotenv
load_dotenv()

from mploy_onboarding.config import configure_logging
from mploy_onboarding.errors import DraftInvalidError
from mploy_onboarding.store import FormStateStore
from mploy_onboarding.validation import FieldValidator


def audit(snapshot: dict, today: date | None = None) -> int:
    clock = (lambda: today) if today else None
    validator = FieldValidator(clock=clock) if clock else None
    store = FormStateStore.from_dict(snapshot, validator=validator, clock=clock)

    print("=" * 60)
    print("ONBOARDING SESSION AUDIT")
    print("=" * 60)

    print(f"\n[1] SEQUENCE ({store.kind.value})")
    for step in store.steps:
        marker = "->" if step == store.current_step else "  "
        print(f"   {marker} {step.value}")
    print(f"   - Progress: {store.progress:.0%}")

    print("\n[2] STEP VALIDATION")
    for step in store.steps:
        errors = store.validator.validate_step(store.kind, step, store.draft)
        status = "ok" if not errors else f"{len(errors)} error(s)"
        print(f"   - {step.value}: {status}")
        for path, err in sorted(errors.items()):
            print(f"       {path}: {err.kind.value} - {err.message}")

    print("\n[3] ASSEMBLED DOCUMENT")
    try:
        profile = store.assemble("published")
    except DraftInvalidError as e:
        print(f"   - Blocked: {e}")
        return 1

    print(json.dumps(profile.to_document(), indent=2, ensure_ascii=False))
    return 0


def main():
    parser = argparse.ArgumentParser(description="Audit a saved onboarding session")
    parser.add_argument("snapshot", type=Path, help="JSON file produced by FormStateStore.to_dict()")
    parser.add_argument("--today", type=date.fromisoformat, help="Evaluation date for age checks")
    args = parser.parse_args()

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    configure_logging()

    snapshot = json.loads(args.snapshot.read_text(encoding="utf-8"))
    sys.exit(audit(snapshot, args.today))


if __name__ == "__main__":
    main()
