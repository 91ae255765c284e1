from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from agentbook.errors import ValidationError

CENT = Decimal("0.01")


def as_date(value):
    """Normalize a date, datetime or ISO string to a calendar date.

    Aware datetimes are converted to UTC first so two clients in different
    time zones name the same day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        if not raw:
            raise ValueError("Date is required.")
        if len(raw) == 10:
            return date.fromisoformat(raw)
        return as_date(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    raise ValueError("Invalid date value.")


def as_money(value):
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class RequestModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


def parse_payload(model, payload):
    """Validate a request body, raising the app's ValidationError on failure."""
    try:
        if isinstance(model, TypeAdapter):
            return model.validate_python(payload or {})
        return model.model_validate(payload or {})
    except PydanticValidationError as exc:
        problems = []
        for err in exc.errors():
            location = ".".join(str(part) for part in err.get("loc", ()) if part != "__root__")
            message = err.get("msg", "Invalid value")
            problems.append(f"{location}: {message}" if location else message)
        raise ValidationError("; ".join(problems) or "Invalid request.") from exc
