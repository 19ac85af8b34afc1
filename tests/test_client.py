import asyncio
import logging

import httpx
import pytest

from reddable_mcp.client import ReddableClient


def _client(backend) -> ReddableClient:
    return ReddableClient("k", "https://backend.test", transport=backend.transport())


def test_listing_failure_is_logged_and_raised(backend, caplog) -> None:
    backend.route("/api/reddit/mcp/hot-posts", status_code=503, payload={"error": "down"})

    with caplog.at_level(logging.ERROR, logger="reddable_mcp.client"):
        with pytest.raises(httpx.HTTPStatusError):
            asyncio.run(_client(backend).get_hot_posts("python"))

    assert "Failed to get hot posts from r/python" in caplog.text


def test_hide_comment_failure_returns_false_and_logs(backend, caplog) -> None:
    backend.fail("/api/reddit/mcp/hide-comment", httpx.ConnectError("Connection refused"))

    with caplog.at_level(logging.ERROR, logger="reddable_mcp.client"):
        assert asyncio.run(_client(backend).hide_comment("abc")) is False

    assert "Failed to hide comment abc" in caplog.text


def test_hide_comment_accepts_empty_body(backend) -> None:
    backend.routes["/api/reddit/mcp/hide-comment"] = lambda request: httpx.Response(204)

    assert asyncio.run(_client(backend).hide_comment("abc")) is True


def test_reply_with_undecodable_body_returns_none(backend) -> None:
    backend.routes["/api/reddit/mcp/reply-comment"] = lambda request: httpx.Response(200, text="not json")

    assert asyncio.run(_client(backend).reply_to_comment("c1", "hi")) is None


def test_user_comments_sends_query_params(backend) -> None:
    backend.route("/api/reddit/mcp/user-comments", payload=[{"id": "c1"}])

    comments = asyncio.run(_client(backend).get_user_comments("bob", 7))

    assert comments == [{"id": "c1"}]
    assert dict(backend.last.url.params) == {"username": "bob", "limit": "7"}
    assert backend.last.headers["Authorization"] == "Bearer k"
    assert backend.last.headers["Content-Type"] == "application/json"
