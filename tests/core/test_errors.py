"""Error Hierarchy & Action Results — codes, statuses, envelopes."""

from pressroom.core.action_result import ActionResult
from pressroom.core.errors import (
    ConcurrencyError,
    DatabaseError,
    ForbiddenError,
    ResourceNotFoundError,
    SlugConflictError,
    UnauthenticatedError,
    UpstreamFailureError,
    ValidationError,
)


def test_taxonomy_status_codes():
    assert UnauthenticatedError().http_status == 401
    assert ForbiddenError("edit").http_status == 403
    assert ResourceNotFoundError("Post", "x").http_status == 404
    assert SlugConflictError("x").http_status == 409
    assert ConcurrencyError("stale").http_status == 409
    assert ValidationError("bad", ["title"]).http_status == 400
    assert UpstreamFailureError("down", "cdn").http_status == 503


def test_database_error_is_upstream_failure():
    err = DatabaseError("boom", "query")
    assert isinstance(err, UpstreamFailureError)
    assert err.code == "UPSTREAM_FAILURE"


def test_forbidden_message_names_action():
    assert ForbiddenError("delete").message == "You can only delete your own posts"


def test_to_response_envelope():
    body = ResourceNotFoundError("Post", "x").to_response()
    assert body["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert body["error"]["category"] == "resource_not_found"


def test_action_result_ok():
    result = ActionResult.ok("hello")
    assert result.success and result.error is None
    assert result.to_response() == {"success": True, "slug": "hello"}


def test_action_result_failed():
    result = ActionResult.failed(SlugConflictError("hello"))
    assert not result.success
    assert result.error_code == "CONFLICT"
    assert result.to_response() == {
        "success": False,
        "error": {"code": "CONFLICT", "message": "A post with this slug already exists"},
    }
