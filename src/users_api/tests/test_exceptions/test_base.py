import pytest

from users_api.exceptions.base import (
    AppError,
    BadRequestError,
    ConflictError,
    InternalError,
    NotFoundError,
    error_from_response,
)


class TestAppError:
    def test_defaults_per_category(self):
        assert NotFoundError().to_payload() == {"message": "Not found", "code": "not_found"}
        assert ConflictError().http_status() == 409
        assert BadRequestError().http_status() == 400
        assert InternalError().http_status() == 500

    def test_none_fields_are_dropped(self):
        err = BadRequestError("Null value in non-nullable column", column="name", table=None)
        assert err.fields == {"column": "name"}

    def test_raw_code_is_renamed_in_payload(self):
        payload = InternalError("Database error", code="40001").to_payload()
        assert payload == {"message": "Database error", "code": "internal_error", "db_code": "40001"}

    def test_str_includes_fields(self):
        err = NotFoundError("Table not found", table="users")
        assert str(err) == "Table not found (table: users)"

    def test_unknown_error_code_falls_back_to_500(self):
        assert AppError("odd", error_code="teapot").http_status() == 500


class TestErrorFromResponse:
    @pytest.mark.parametrize(
        "status_code, error_cls",
        [
            (404, NotFoundError),
            (409, ConflictError),
            (400, BadRequestError),
            (422, BadRequestError),
            (500, InternalError),
            (503, InternalError),
        ],
    )
    def test_status_selects_category(self, status_code, error_cls):
        err = error_from_response(status_code, {"message": "m", "code": "x"})
        assert type(err) is error_cls
        assert err.message == "m"
        assert err.fields == {"status_code": status_code}

    def test_diagnostic_fields_are_kept(self):
        err = error_from_response(409, {"message": "dup", "code": "conflict", "constraint": "uq_users_email"})
        assert err.fields["constraint"] == "uq_users_email"

    def test_non_json_body(self):
        err = error_from_response(502, None)
        assert isinstance(err, InternalError)
        assert err.message == "HTTP 502"

    def test_reserved_keys_in_body_do_not_break_construction(self):
        body = {"message": "upstream", "status_code": 418, "error_code": "proxy", "detail": "d"}
        err = error_from_response(502, body)

        assert isinstance(err, InternalError)
        assert err.error_code == "internal_error"
        assert err.fields == {"status_code": 502, "detail": "d"}
