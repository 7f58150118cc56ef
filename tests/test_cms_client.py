import json

import pytest
import requests

from cms_client import CMSClient


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    response.url = "http://testserver"
    return response


class FakeSession:
    """Replays queued responses and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


POST = {
    "id": "6f1c1d2e-0000-4000-8000-000000000000",
    "title": "Hi",
    "content": "World",
    "created_at": "2026-10-19T08:00:00.000000+00:00",
    "last_modified": "2026-10-19T08:00:00.000000+00:00",
}


def test_login_stores_token():
    session = FakeSession(make_response(200, {"success": True, "token": "abc", "expires_at": "x"}))
    client = CMSClient(base_url="http://cms/api/", session=session)

    ok, error = client.login("secret")

    assert (ok, error) == (True, None)
    assert client.token == "abc"
    assert session.calls[0]["url"] == "http://cms/api/admin/login"
    assert session.calls[0]["json"] == {"password": "secret"}
    assert "Authorization" not in session.calls[0]["headers"]


def test_login_failure_reports_server_error():
    session = FakeSession(make_response(401, {"error": "Invalid password"}))
    client = CMSClient(session=session)

    ok, error = client.login("wrong")

    assert ok is False
    assert error == {"status_code": 401, "message": "Invalid password"}
    assert client.is_authenticated is False


def test_mutations_send_bearer_token():
    session = FakeSession(make_response(201, {"success": True, "data": POST}))
    client = CMSClient(token="abc", session=session)

    post, error = client.create_post("Hi", "World")

    assert error is None
    assert post == POST
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["headers"]["Authorization"] == "Bearer abc"


def test_mutation_without_token_is_not_sent():
    session = FakeSession()
    client = CMSClient(session=session)

    post, error = client.delete_post(POST["id"])

    assert post is None
    assert error == {"status_code": None, "message": "Not logged in"}
    assert session.calls == []


def test_update_sends_only_given_fields():
    session = FakeSession(make_response(200, {"success": True, "data": POST}))
    client = CMSClient(token="abc", session=session)

    client.update_post(POST["id"], content="World")

    assert session.calls[0]["method"] == "PATCH"
    assert session.calls[0]["json"] == {"content": "World"}


def test_validation_errors_are_passed_through():
    body = {"error": "Validation failed", "errors": ["At least one field (title or content) must be provided"]}
    session = FakeSession(make_response(400, body))
    client = CMSClient(token="abc", session=session)

    post, error = client.update_post(POST["id"])

    assert post is None
    assert error["status_code"] == 400
    assert error["errors"] == body["errors"]


def test_public_reads_do_not_send_token():
    session = FakeSession(
        make_response(200, {"success": True, "data": [POST], "count": 1}),
        make_response(200, {"success": True, "data": POST}),
    )
    client = CMSClient(token="abc", session=session)

    posts, _ = client.list_posts()
    post, _ = client.get_post(POST["id"])

    assert posts == [POST]
    assert post == POST
    assert all("Authorization" not in call["headers"] for call in session.calls)


def test_delete_returns_snapshot():
    session = FakeSession(make_response(200, {"success": True, "message": "Post deleted successfully", "deleted_post": POST}))
    client = CMSClient(token="abc", session=session)

    post, error = client.delete_post(POST["id"])

    assert error is None
    assert post == POST


@pytest.mark.parametrize("status_code, keeps_token", [(401, False), (500, True)])
def test_verify_drops_token_only_when_rejected(status_code, keeps_token):
    session = FakeSession(make_response(status_code, {"error": "nope"}))
    client = CMSClient(token="abc", session=session)

    ok, error = client.verify()

    assert ok is False
    assert error["status_code"] == status_code
    assert client.is_authenticated is keeps_token


def test_logout_always_forgets_token():
    session = FakeSession(make_response(401, {"error": "Invalid or expired token"}))
    client = CMSClient(token="abc", session=session)

    ok, error = client.logout()

    assert ok is False
    assert error["message"] == "Invalid or expired token"
    assert client.token is None


def test_connection_errors_are_reported():
    session = FakeSession(requests.ConnectionError("refused"))
    client = CMSClient(session=session)

    posts, error = client.list_posts()

    assert posts == []
    assert error == {"status_code": None, "message": "refused"}
