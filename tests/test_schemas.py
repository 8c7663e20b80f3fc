import pytest
from fastapi import status
from pydantic import ValidationError as PydanticValidationError

from contacts_api import errors, schemas


def test_contact_in_aliases_and_defaults():
    contact = schemas.ContactIn.model_validate(
        {"firstName": "John", "lastName": "Doe", "email": "john@x.com"})
    assert contact.model_dump(by_alias=True) == {
        "firstName": "John", "lastName": "Doe", "email": "john@x.com",
        "favoriteColor": "", "birthday": "",
    }


def test_contact_in_rejects_bad_email():
    with pytest.raises(PydanticValidationError):
        schemas.ContactIn(first_name="John", last_name="Doe", email="john.example.com")


def test_field_errors_and_failure_messages():
    with pytest.raises(PydanticValidationError) as exc:
        schemas.ContactIn.model_validate({"firstName": "", "email": "bad"})
    found = schemas.field_errors(exc.value.errors())
    assert found["firstName"] == "missing"
    assert found["lastName"] == "missing"
    assert found["email"] == "string_pattern_mismatch"

    failure = schemas.validation_failure(found)
    assert failure.message == "Missing required fields"
    assert "firstName" in failure.error and "lastName" in failure.error

    failure = schemas.validation_failure({"email": "string_pattern_mismatch"})
    assert failure.message == "Invalid email format"

    failure = schemas.validation_failure({"birthday": "string_type"})
    assert failure.message == "Invalid contact data"


@pytest.mark.parametrize("error, expected", [
    (errors.ValidationError("bad"), status.HTTP_400_BAD_REQUEST),
    (errors.NotFoundError("missing"), status.HTTP_404_NOT_FOUND),
    (errors.PersistenceError("db"), status.HTTP_500_INTERNAL_SERVER_ERROR),
    (errors.NotInitializedError(), status.HTTP_500_INTERNAL_SERVER_ERROR),
])
def test_status_for(error, expected):
    assert errors.status_for(error) == expected


def test_error_body():
    assert errors.NotFoundError("Contact not found").to_dict() == {"message": "Contact not found"}
    assert errors.PersistenceError("Error", "boom").to_dict() == {"message": "Error", "error": "boom"}
