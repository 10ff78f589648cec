"""Unit tests for contact form validation."""

import pytest

from app.services.contact_validation import RECOGNIZED_FIELDS, validate_contact_form


def _errors_by_field(result) -> dict[str, str]:
    return {error.field: error.message for error in result.errors}


class TestRequiredFields:
    @pytest.mark.parametrize("missing", ["name", "email", "message"])
    def test_missing_field_is_reported(self, missing: str, valid_payload: dict) -> None:
        payload = {k: v for k, v in valid_payload.items() if k != missing}

        result = validate_contact_form(payload)

        assert result.is_valid is False
        assert result.data is None
        assert [error.field for error in result.errors] == [missing]
        assert result.errors[0].message == f"{missing.capitalize()} is required"

    def test_all_missing_fields_reported_together(self) -> None:
        result = validate_contact_form({})

        assert [error.field for error in result.errors] == ["name", "email", "message"]

    def test_blank_and_bad_values_give_three_errors(self) -> None:
        result = validate_contact_form({"name": "", "email": "bad", "message": ""})

        assert _errors_by_field(result) == {
            "name": "Name is required",
            "email": "Please provide a valid email address",
            "message": "Message is required",
        }

    def test_whitespace_only_counts_as_missing(self, valid_payload: dict) -> None:
        result = validate_contact_form({**valid_payload, "name": "   \t"})

        assert _errors_by_field(result) == {"name": "Name is required"}

    def test_non_string_value_rejected(self, valid_payload: dict) -> None:
        result = validate_contact_form({**valid_payload, "message": ["hi"]})

        assert _errors_by_field(result) == {"message": "Message must be a string"}


class TestLengthAndFormat:
    def test_length_limits_are_inclusive(self) -> None:
        local = "a" * 242
        payload = {
            "name": "n" * 100,
            "email": f"{local}@example.com",
            "message": "m" * 5000,
        }
        assert len(payload["email"]) == 254

        assert validate_contact_form(payload).is_valid is True

    @pytest.mark.parametrize(
        ("field_name", "value", "expected"),
        [
            ("name", "n" * 101, "Name must be 100 characters or less"),
            ("email", "a" * 243 + "@example.com", "Email must be 254 characters or less"),
            ("message", "m" * 5001, "Message must be 5000 characters or less"),
        ],
    )
    def test_too_long_values_rejected(
        self, field_name: str, value: str, expected: str, valid_payload: dict
    ) -> None:
        result = validate_contact_form({**valid_payload, field_name: value})

        assert _errors_by_field(result) == {field_name: expected}

    def test_length_is_checked_after_trimming(self, valid_payload: dict) -> None:
        result = validate_contact_form({**valid_payload, "name": "  " + "n" * 100 + "  "})

        assert result.is_valid is True
        assert result.data["name"] == "n" * 100

    @pytest.mark.parametrize(
        "email",
        ["plainaddress", "missing@tld", "@example.com", "two@@example.com", "sp ace@example.com"],
    )
    def test_invalid_email_shapes(self, email: str, valid_payload: dict) -> None:
        result = validate_contact_form({**valid_payload, "email": email})

        assert _errors_by_field(result) == {"email": "Please provide a valid email address"}

    @pytest.mark.parametrize("email", ["a@b.com", "first.last+tag@sub.example.co.uk"])
    def test_valid_email_shapes(self, email: str, valid_payload: dict) -> None:
        assert validate_contact_form({**valid_payload, "email": email}).is_valid is True


class TestNormalizedData:
    def test_values_are_trimmed(self) -> None:
        result = validate_contact_form(
            {"name": "  A ", "email": " a@b.com ", "message": "\nhi\n"}
        )

        assert result.is_valid is True
        assert result.errors == []
        assert result.data == {"name": "A", "email": "a@b.com", "message": "hi"}

    def test_unrecognized_fields_are_dropped(self, valid_payload: dict) -> None:
        payload = {**valid_payload, "status": "replied", "metadata": {"x": 1}, "admin": True}

        result = validate_contact_form(payload)

        assert result.is_valid is True
        assert set(result.data) <= set(RECOGNIZED_FIELDS)
        assert "status" not in result.data
        assert result.data is not payload

    def test_optional_fields_pass_through_trimmed(self, valid_payload: dict) -> None:
        result = validate_contact_form(
            {**valid_payload, "phone": " +1 555 0100 ", "company": " Acme "}
        )

        assert result.data["phone"] == "+1 555 0100"
        assert result.data["company"] == "Acme"
        assert len(result.data) == 5

    def test_blank_optional_fields_are_omitted(self, valid_payload: dict) -> None:
        result = validate_contact_form({**valid_payload, "phone": "  ", "company": None})

        assert result.is_valid is True
        assert "phone" not in result.data
        assert "company" not in result.data

    def test_oversized_optional_field_is_an_error(self, valid_payload: dict) -> None:
        result = validate_contact_form({**valid_payload, "phone": "1" * 21})

        assert _errors_by_field(result) == {"phone": "Phone must be 20 characters or less"}

    def test_errors_collected_across_required_and_optional(self) -> None:
        result = validate_contact_form({"company": 42})

        assert [error.field for error in result.errors] == ["name", "email", "message", "company"]


@pytest.mark.parametrize("body", [None, [], "text", 5])
def test_non_object_body_rejected(body) -> None:
    result = validate_contact_form(body)

    assert result.is_valid is False
    assert [error.field for error in result.errors] == ["body"]
