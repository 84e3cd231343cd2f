from datetime import date, datetime

import pytest
import pytz

from app.errors import SubmissionError
from app.services.validation import age_in_years, validate_submission

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=pytz.UTC)


def raw_fields(**changes):
    fields = {
        "full_name": "Jane Doe",
        "dob": "2000-01-01",
        "gender": "Female",
        "email": "jane@example.com",
        "phone": "555-123-4567",
        "address": "1 Main Street",
        "previous_school": None,
        "result": "A",
        "class_applying": "11",
        "agreed": "on",
    }
    fields.update(changes)
    return fields


def reason_for(**changes):
    with pytest.raises(SubmissionError) as exc_info:
        validate_submission(raw_fields(**changes), NOW)
    return exc_info.value.reason


def test_valid_fields_produce_submission():
    submission = validate_submission(raw_fields(full_name="  Jane Doe  "), NOW)
    assert submission.full_name == "Jane Doe"
    assert submission.dob == date(2000, 1, 1)
    assert submission.previous_school is None
    assert submission.agreed is True


def test_blank_previous_school_becomes_none():
    submission = validate_submission(raw_fields(previous_school="  "), NOW)
    assert submission.previous_school is None


def test_age_counts_days_over_365_25():
    assert age_in_years(date(2006, 6, 1), NOW) == pytest.approx(18.0, abs=0.01)
    assert age_in_years(date(2006, 6, 2), NOW) == 18.0
    assert age_in_years(date(2006, 6, 3), NOW) < 18


def test_exactly_eighteen_is_accepted():
    assert validate_submission(raw_fields(dob="2006-06-02"), NOW).dob == date(2006, 6, 2)


def test_age_accepts_naive_now():
    assert age_in_years(date(2000, 1, 1), datetime(2018, 1, 2)) > 18


def test_same_input_depends_only_on_injected_clock():
    fields = raw_fields(dob="2006-06-10")
    with pytest.raises(SubmissionError):
        validate_submission(fields, NOW)
    later = datetime(2024, 6, 11, tzinfo=pytz.UTC)
    assert validate_submission(fields, later).dob == date(2006, 6, 10)


def test_missing_field_reason():
    assert reason_for(gender=None) == "Missing required fields"
    assert reason_for(agreed=None) == "Missing required fields"


def test_invalid_date_reason():
    assert reason_for(dob="2000-13-01") == "Invalid date of birth"


def test_email_pattern_is_searched_not_anchored():
    # matches "x@y.z" inside the value
    submission = validate_submission(raw_fields(email="a b@c.d"), NOW)
    assert submission.email == "a b@c.d"


def test_phone_rejects_non_ascii_digits():
    assert reason_for(phone="１２３-456-7890") == "Invalid phone format"


def test_overlong_field_is_rejected():
    assert reason_for(full_name="x" * 101) == "Field value too long"


def test_phone_is_checked_before_trimming():
    assert reason_for(phone=" 555-123-4567 ") == "Invalid phone format"
