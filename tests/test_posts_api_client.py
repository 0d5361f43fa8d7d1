from unittest.mock import MagicMock

import pytest
import requests

from posts_api_client import PostsAPI

POST = {"id": "1", "quem": "Ana", "data_hora": "2024-05-01T10:00:00.000Z", "comentario": "oi", "publico": True}


def fake_response(body, status=200):
    resp = MagicMock()
    resp.status_code = status
    resp.headers = {"content-type": "application/json"}
    resp.json.return_value = body
    resp.content = b"x"
    return resp


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return PostsAPI(base_url="http://api.local/", session=session)


def test_create_post(api, session):
    session.request.return_value = fake_response({"success": True, "post": POST})

    post, error = api.create_post("Ana", "oi", True)

    assert error is None
    assert post == POST
    session.request.assert_called_once_with(
        method="POST",
        url="http://api.local/post",
        json={"quem": "Ana", "comentario": "oi", "publico": True},
        timeout=15,
    )


def test_list_and_count(api, session):
    session.request.return_value = fake_response({"posts": [POST], "count": 1})
    assert api.list_posts() == ([POST], None)

    session.request.return_value = fake_response({"count": 1})
    assert api.count_posts() == (1, None)


def test_get_post_not_found_is_an_error(api, session):
    session.request.return_value = fake_response({"error": "Post não encontrado", "id": "9"})

    post, error = api.get_post(9)

    assert post is None
    assert error["message"] == "Post não encontrado"
    assert error["body"]["id"] == "9"


def test_get_post_rejects_non_numeric_ids(api, session):
    post, error = api.get_post("abc")
    assert post is None
    assert "Invalid post id" in error["message"]
    session.request.assert_not_called()


def test_search_quotes_expression(api, session):
    session.request.return_value = fake_response({"posts": [POST], "count": 1, "expression": "olá mundo"})

    posts, error = api.search_posts("olá mundo")

    assert (posts, error) == ([POST], None)
    assert session.request.call_args.kwargs["url"] == "http://api.local/post/ol%C3%A1%20mundo"


@pytest.mark.parametrize("expression", ["", "123"])
def test_search_rejects_expressions_served_as_ids(api, session, expression):
    posts, error = api.search_posts(expression)
    assert posts == []
    assert error is not None
    session.request.assert_not_called()


def test_validation_error_body(api, session):
    session.request.return_value = fake_response(
        {"error": "Dados inválidos", "message": "É necessário fornecer: quem (string), comentario (string), publico (boolean)"}
    )
    post, error = api.create_post("Ana", "oi", "yes")
    assert post is None
    assert error["message"].startswith("É necessário fornecer")


def test_transport_errors(api, session):
    session.request.side_effect = requests.ConnectionError("refused")
    assert api.list_posts() == ([], {"status_code": None, "message": "refused"})


def test_http_errors(api, session):
    resp = fake_response({})
    resp.status_code = 502
    resp.text = "bad gateway"
    resp.raise_for_status.side_effect = requests.HTTPError("502", response=resp)
    session.request.return_value = resp

    count, error = api.count_posts()

    assert count is None
    assert error == {"status_code": 502, "message": "bad gateway"}
