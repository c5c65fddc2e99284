"""Error Hierarchy - status codes and response envelopes."""

from locallibrary.core.errors import (
    CatalogValidationError,
    ConstraintViolationError,
    DatabaseError,
    FieldError,
    ResourceNotFoundError,
)


def test_validation_error_envelope_carries_details_and_submission():
    exc = CatalogValidationError(
        [FieldError("name", "Genre name must contain at least 3 characters")],
        {"name": "ab"},
    )
    body = exc.to_response()["error"]
    assert exc.http_status == 400
    assert body["code"] == "VALIDATION_ERROR"
    assert body["details"] == [
        {"field": "name", "message": "Genre name must contain at least 3 characters"},
    ]
    assert body["submitted"] == {"name": "ab"}
    assert exc.fields == {"name"}


def test_not_found_is_404_and_names_the_resource():
    exc = ResourceNotFoundError("Author", "abc")
    assert exc.http_status == 404
    assert exc.message == "Author 'abc' not found"
    assert exc.to_response()["error"]["context"] == {
        "entity_kind": "Author", "entity_id": "abc",
    }


def test_database_errors_are_infrastructure_failures():
    assert DatabaseError("down", "execute").http_status == 503
    conflict = ConstraintViolationError("fk")
    assert isinstance(conflict, DatabaseError)
    assert conflict.http_status == 409
    assert conflict.code == "CONSTRAINT_VIOLATION"


def test_validation_envelope_includes_form_only_when_attached():
    exc = CatalogValidationError([FieldError("title", "Title must not be empty.")], {})
    assert "form" not in exc.to_response()["error"]

    exc.form = {"title": "Create Book", "authors": []}
    assert exc.to_response()["error"]["form"] == {"title": "Create Book", "authors": []}
