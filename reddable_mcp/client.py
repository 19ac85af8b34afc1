import logging
from typing import Any, Dict, Optional

import httpx

from reddable_mcp.config import DEFAULT_API_BASE_URL
from reddable_mcp.models import CommentList, PostList

logger = logging.getLogger(__name__)

API_PREFIX = "/api/reddit/mcp"
DEFAULT_LIMIT = 25


def _drop_none(params: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


def _field(data: Any, key: str) -> Any:
    # Bodies that are not JSON objects carry no fields.
    return data.get(key) if isinstance(data, dict) else None


class ReddableClient:
    """
    Thin async client for the Reddable backend.
    Every method issues exactly one request; nothing is retried or cached.
    """

    def __init__(
        self,
        api_key: str,
        api_base_url: str = DEFAULT_API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_base_url = api_base_url
        self._headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        self._transport = transport

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._api_base_url,
            headers=self._headers,
            transport=self._transport,
        )

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        logger.debug(f"GET {API_PREFIX}{path} params={params}")
        async with self._http() as http:
            response = await http.get(f"{API_PREFIX}{path}", params=_drop_none(params))
            response.raise_for_status()
            return response.json()

    async def _post(self, path: str, body: Dict[str, Any]) -> httpx.Response:
        logger.debug(f"POST {API_PREFIX}{path}")
        async with self._http() as http:
            response = await http.post(f"{API_PREFIX}{path}", json=body)
            response.raise_for_status()
            return response

    # --- Reads: failures propagate to the caller ---

    async def get_user_posts(self, username: Optional[str] = None, limit: int = DEFAULT_LIMIT) -> PostList:
        return await self._get("/user-posts", {"username": username, "limit": limit})

    async def get_user_comments(self, username: Optional[str] = None, limit: int = DEFAULT_LIMIT) -> CommentList:
        return await self._get("/user-comments", {"username": username, "limit": limit})

    async def get_post_comments(self, post_id: str, subreddit: Optional[str] = None) -> CommentList:
        return await self._get("/post-comments", {"postId": post_id, "subreddit": subreddit})

    async def _get_listing(self, path: str, label: str, subreddit: str, limit: int) -> PostList:
        try:
            response = await self._post(path, {"subreddit": subreddit, "limit": limit})
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to get {label} posts from r/{subreddit}: {e}")
            raise
        return _field(data, "posts") or []

    async def get_hot_posts(self, subreddit: str, limit: int = DEFAULT_LIMIT) -> PostList:
        return await self._get_listing("/hot-posts", "hot", subreddit, limit)

    async def get_new_posts(self, subreddit: str, limit: int = DEFAULT_LIMIT) -> PostList:
        return await self._get_listing("/new-posts", "new", subreddit, limit)

    async def get_rising_posts(self, subreddit: str, limit: int = DEFAULT_LIMIT) -> PostList:
        return await self._get_listing("/rising-posts", "rising", subreddit, limit)

    # --- Writes: failures are logged and reported as a negative outcome ---

    async def hide_comment(self, comment_id: str) -> bool:
        try:
            await self._post("/hide-comment", {"commentId": comment_id})
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to hide comment {comment_id}: {e}")
            return False
        return True

    async def reply_to_comment(self, comment_id: str, text: str) -> Optional[str]:
        try:
            response = await self._post("/reply-comment", {"commentId": comment_id, "text": text})
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to reply to comment {comment_id}: {e}")
            return None
        return _field(data, "replyId") or None

    async def post_comment(self, post_id: str, text: str) -> Optional[str]:
        try:
            response = await self._post("/post-comment", {"postId": post_id, "text": text})
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Failed to post comment on post {post_id}: {e}")
            return None
        return _field(data, "commentId") or None
