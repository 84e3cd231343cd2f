import logging
import re
from datetime import datetime, time
from typing import Mapping, Optional

import pytz
from pydantic import ValidationError

from app.errors import SubmissionError
from app.schemas.student import StudentSubmission

logger = logging.getLogger(__name__)

MINIMUM_AGE_YEARS = 18
DAYS_PER_YEAR = 365.25
AGREED_VALUE = "on"

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
PHONE_PATTERN = re.compile(r"[0-9]{3}-[0-9]{3}-[0-9]{4}")

REQUIRED_FIELDS = (
    "full_name",
    "dob",
    "gender",
    "email",
    "phone",
    "address",
    "result",
    "class_applying",
)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def age_in_years(birth_date, now: datetime) -> float:
    """Age measured in days divided by 365.25, counted from midnight UTC of the birth date."""
    born_at = datetime.combine(birth_date, time.min, tzinfo=pytz.UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=pytz.UTC)
    elapsed = now - born_at
    return elapsed.total_seconds() / 86400 / DAYS_PER_YEAR


def validate_submission(fields: Mapping[str, Optional[str]], now: datetime) -> StudentSubmission:
    """Apply the validation rules in order and return the validated submission.

    ``fields`` holds the raw form values keyed by their snake_case names plus
    ``agreed``. The first failing rule raises :class:`SubmissionError` with a
    human readable reason; later rules are not evaluated.
    """
    values = {name: _clean(fields.get(name)) for name in REQUIRED_FIELDS}

    # 1. Zorunlu alanlar ve onay kutusu
    if any(values[name] is None for name in REQUIRED_FIELDS) or fields.get("agreed") != AGREED_VALUE:
        raise SubmissionError("Missing required fields")

    # 2. Doğum tarihi
    try:
        birth_date = datetime.strptime(values["dob"], "%Y-%m-%d").date()
    except ValueError:
        raise SubmissionError("Invalid date of birth")

    # 3. Yaş kontrolü
    if age_in_years(birth_date, now) < MINIMUM_AGE_YEARS:
        raise SubmissionError(f"Must be at least {MINIMUM_AGE_YEARS} years old")

    # 4. Email formatı (format kontrolleri ham değer üzerinde)
    if not EMAIL_PATTERN.search(fields["email"]):
        raise SubmissionError("Invalid email format")

    # 5. Telefon formatı
    if not PHONE_PATTERN.fullmatch(fields["phone"]):
        raise SubmissionError("Invalid phone format")

    try:
        return StudentSubmission(
            full_name=values["full_name"],
            dob=birth_date,
            gender=values["gender"],
            email=values["email"],
            phone=values["phone"],
            address=values["address"],
            previous_school=_clean(fields.get("previous_school")),
            result=values["result"],
            class_applying=values["class_applying"],
            agreed=True,
        )
    except ValidationError as e:
        logger.info(f"Submission field rejected: {e.errors()[0].get('loc')}")
        raise SubmissionError("Field value too long")
