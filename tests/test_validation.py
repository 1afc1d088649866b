"""Tests for named request schemas and their error messages."""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.errors import ValidationError
from app.services.validation import RequestValidator

TODAY = datetime.now(timezone.utc).date()
TOMORROW = (TODAY + timedelta(days=2)).isoformat()
YESTERDAY = (TODAY - timedelta(days=2)).isoformat()


@pytest.fixture(name="validator")
def validator_fixture() -> RequestValidator:
    return RequestValidator()


def _error(validator: RequestValidator, schema: str, payload) -> str | None:
    return validator.validate(schema, payload).error


class TestRegisterSchema:
    def test_valid_payload(self, validator: RequestValidator):
        result = validator.validate("register", {"email": "a@x.com", "password": "Abcdef1!", "name": "Al"})
        assert result.ok
        assert result.value == {"email": "a@x.com", "password": "Abcdef1!", "name": "Al"}

    def test_name_defaults_to_none(self, validator: RequestValidator):
        result = validator.validate("register", {"email": "a@x.com", "password": "Abcdef1!"})
        assert result.value["name"] is None

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({"password": "Abcdef1!"}, "Email is required"),
            ({"email": "nope", "password": "Abcdef1!"}, "Please enter a valid email address"),
            ({"email": "a@x.com"}, "Password is required"),
            ({"email": "a@x.com", "password": "Ab1!"}, "Password must be at least 8 characters long"),
            (
                {"email": "a@x.com", "password": "abcdefg1!"},
                "Password must contain uppercase, lowercase, number, and special character",
            ),
            (
                {"email": "a@x.com", "password": "Abcdefgh1"},
                "Password must contain uppercase, lowercase, number, and special character",
            ),
            ({"email": "a@x.com", "password": "Abcdef1!", "name": "A"}, "Name must be at least 2 characters long"),
            ({"email": "a@x.com", "password": "Abcdef1!", "name": "x" * 101}, "Name cannot exceed 100 characters"),
            ({"email": "a@x.com", "password": "Abcdef1!", "role": "admin"}, "role is not allowed"),
        ],
    )
    def test_error_messages(self, validator: RequestValidator, payload: dict, message: str):
        assert _error(validator, "register", payload) == message

    def test_null_name_rejected(self, validator: RequestValidator):
        payload = {"email": "a@x.com", "password": "Abcdef1!", "name": None}
        assert _error(validator, "register", payload) == "Name must be a string"

    def test_first_error_wins(self, validator: RequestValidator):
        """Only the first failing field is reported, in declaration order."""
        assert _error(validator, "register", {"email": "bad", "password": "x", "name": "A"}) == (
            "Please enter a valid email address"
        )

    def test_length_checked_before_strength(self, validator: RequestValidator):
        assert _error(validator, "register", {"email": "a@x.com", "password": "abc"}) == (
            "Password must be at least 8 characters long"
        )


class TestLoginSchema:
    def test_login_accepts_any_password(self, validator: RequestValidator):
        assert validator.validate("login", {"email": "a@x.com", "password": "x"}).ok

    def test_login_rejects_empty_password(self, validator: RequestValidator):
        assert _error(validator, "login", {"email": "a@x.com", "password": ""}) == "Password is required"

    def test_login_requires_email(self, validator: RequestValidator):
        assert _error(validator, "login", {"password": "x"}) == "Email is required"


class TestTaskCreateSchema:
    def test_defaults_applied(self, validator: RequestValidator):
        result = validator.validate("task.create", {"title": "T"})
        assert result.value == {
            "title": "T",
            "description": None,
            "status": "pending",
            "priority": "medium",
            "due_date": None,
        }

    def test_due_date_parsed(self, validator: RequestValidator):
        result = validator.validate("task.create", {"title": "T", "due_date": TOMORROW})
        assert result.value["due_date"] == date.fromisoformat(TOMORROW)

    def test_due_date_accepts_iso_datetime(self, validator: RequestValidator):
        result = validator.validate("task.create", {"title": "T", "due_date": f"{TOMORROW}T09:30:00Z"})
        assert result.value["due_date"] == date.fromisoformat(TOMORROW)

    @pytest.mark.parametrize(
        ("payload", "message"),
        [
            ({}, "Title is required"),
            ({"title": ""}, "Title cannot be empty"),
            ({"title": "x" * 256}, "Title cannot exceed 255 characters"),
            ({"title": 5}, "Title must be a string"),
            ({"title": "T", "description": "d" * 1001}, "Description cannot exceed 1000 characters"),
            ({"title": "T", "status": "done"}, "Status must be pending, in_progress, or completed"),
            ({"title": "T", "priority": "urgent"}, "Priority must be low, medium, or high"),
            ({"title": "T", "due_date": "not-a-date"}, "Due date must be a valid date"),
            ({"title": "T", "due_date": YESTERDAY}, "Due date cannot be in the past"),
        ],
    )
    def test_error_messages(self, validator: RequestValidator, payload: dict, message: str):
        assert _error(validator, "task.create", payload) == message

    def test_due_date_timestamp_in_the_past(self, validator: RequestValidator):
        a_minute_ago = (datetime.now(timezone.utc) - timedelta(minutes=1)).isoformat()
        payload = {"title": "T", "due_date": a_minute_ago}
        assert _error(validator, "task.create", payload) == "Due date cannot be in the past"

    def test_due_date_naive_timestamp_read_as_utc(self, validator: RequestValidator):
        an_hour_ago = (datetime.now(timezone.utc) - timedelta(hours=1)).replace(tzinfo=None).isoformat()
        payload = {"title": "T", "due_date": an_hour_ago}
        assert _error(validator, "task.create", payload) == "Due date cannot be in the past"

    def test_due_date_timestamp_later_today(self, validator: RequestValidator):
        in_a_minute = datetime.now(timezone.utc) + timedelta(minutes=1)
        result = validator.validate("task.create", {"title": "T", "due_date": in_a_minute.isoformat()})
        assert result.value["due_date"] == in_a_minute.date()

    def test_due_date_today_is_allowed(self, validator: RequestValidator):
        assert validator.validate("task.create", {"title": "T", "due_date": TODAY.isoformat()}).ok


class TestTaskUpdateSchema:
    def test_only_sent_fields_returned(self, validator: RequestValidator):
        result = validator.validate("task.update", {"status": "completed"})
        assert result.value == {"status": "completed"}

    def test_empty_payload_is_valid(self, validator: RequestValidator):
        result = validator.validate("task.update", {})
        assert result.ok
        assert result.value == {}

    def test_rules_still_apply(self, validator: RequestValidator):
        assert _error(validator, "task.update", {"title": ""}) == "Title cannot be empty"
        assert _error(validator, "task.update", {"priority": "urgent"}) == "Priority must be low, medium, or high"
        assert _error(validator, "task.update", {"due_date": YESTERDAY}) == "Due date cannot be in the past"


class TestRequire:
    def test_require_returns_value(self, validator: RequestValidator):
        assert validator.require("login", {"email": "a@x.com", "password": "x"})["email"] == "a@x.com"

    def test_require_raises(self, validator: RequestValidator):
        with pytest.raises(ValidationError) as exc_info:
            validator.require("task.create", {})
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Title is required"

    def test_unknown_schema(self, validator: RequestValidator):
        with pytest.raises(KeyError):
            validator.validate("task.archive", {})
