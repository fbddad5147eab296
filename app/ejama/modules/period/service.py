from __future__ import annotations

from datetime import date

from app.ejama.errors import ValidationFailed
from app.ejama.modules.period.models import FLOW_LEVELS, PeriodLog
from app.ejama.modules.period.repository import PeriodRepository
from app.ejama.utils import clean_str

MAX_NOTES_LENGTH = 2000


def parse_date(s: object) -> date | None:
    """Parse YYYY-MM-DD date string."""
    s = clean_str(s)
    if not s:
        return None
    return date.fromisoformat(s)


def validate_period_payload(payload: dict) -> list[str]:
    """Validate period log payload. Returns list of errors."""
    errors = []
    start = end = None
    try:
        start = parse_date(payload.get("startDate"))
    except ValueError:
        errors.append("startDate must be a YYYY-MM-DD date.")
    else:
        if start is None:
            errors.append("startDate is required.")
    try:
        end = parse_date(payload.get("endDate"))
    except ValueError:
        errors.append("endDate must be a YYYY-MM-DD date.")
    if start and end and end < start:
        errors.append("endDate cannot be before startDate.")
    flow = clean_str(payload.get("flow")).lower()
    if flow and flow not in FLOW_LEVELS:
        errors.append(f"Invalid flow. Must be one of: {', '.join(FLOW_LEVELS)}")
    symptoms = payload.get("symptoms")
    if symptoms is not None and not (isinstance(symptoms, list) and all(isinstance(x, str) for x in symptoms)):
        errors.append("symptoms must be a list of strings.")
    if len(clean_str(payload.get("notes"))) > MAX_NOTES_LENGTH:
        errors.append(f"Notes must be at most {MAX_NOTES_LENGTH} characters.")
    return errors


def log_period(repo: PeriodRepository, user_id: str, payload: dict) -> PeriodLog:
    """Upsert the log for the payload's start date."""
    errors = validate_period_payload(payload)
    if errors:
        raise ValidationFailed(errors)
    end = parse_date(payload.get("endDate"))
    log = PeriodLog(
        start_date=parse_date(payload.get("startDate")).isoformat(),
        end_date=end.isoformat() if end else None,
        flow=clean_str(payload.get("flow")).lower() or None,
        symptoms=[s.strip() for s in payload.get("symptoms") or [] if s.strip()],
        notes=clean_str(payload.get("notes")) or None,
        user_id=user_id,
    )
    repo.save(log)
    return log


def period_history(repo: PeriodRepository, user_id: str) -> list[PeriodLog]:
    """All logs for the user, most recent start date first."""
    return sorted(repo.list_for_user(user_id), key=lambda log: log.start_date, reverse=True)
