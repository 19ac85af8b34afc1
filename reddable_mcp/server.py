import asyncio
import json
import logging
from typing import Annotated, Any, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.types import TextContent
from pydantic import Field

from reddable_mcp import __version__
from reddable_mcp.client import DEFAULT_LIMIT, ReddableClient
from reddable_mcp.config import Settings, load_settings

logger = logging.getLogger(__name__)

SERVER_NAME = "Reddit User MCP"

Username = Annotated[
    Optional[str],
    Field(description="Reddit username without /u/. If not provided, uses authenticated user"),
]
Subreddit = Annotated[str, Field(description="Subreddit name without /r/")]


def _limit_field(what: str) -> Any:
    return Field(description=f"Number of {what} to fetch (1-100, default: 25)", ge=1, le=100)


PostLimit = Annotated[int, _limit_field("posts")]
CommentLimit = Annotated[int, _limit_field("comments")]


def _as_json(payload: Any) -> TextContent:
    return TextContent(type="text", text=json.dumps(payload, indent=2, ensure_ascii=False))


def create_server(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastMCP:
    """
    Builds the MCP server and registers the Reddit tools.
    Each tool forwards to exactly one Reddable endpoint.
    """
    mcp = FastMCP(SERVER_NAME, version=__version__)
    reddit = ReddableClient(settings.api_key, settings.api_base_url, transport=transport)

    # --- Tool: get_user_posts ---
    @mcp.tool(title="Get User Posts", description="Fetch posts from a Reddit user")
    async def get_user_posts(username: Username = None, limit: PostLimit = DEFAULT_LIMIT) -> TextContent:
        try:
            posts = await reddit.get_user_posts(username, limit)
        except Exception as e:
            raise ToolError(f"Error fetching user posts: {e}") from e
        return _as_json(posts)

    # --- Tool: get_user_comments ---
    @mcp.tool(title="Get User Comments", description="Fetch comments from a Reddit user")
    async def get_user_comments(username: Username = None, limit: CommentLimit = DEFAULT_LIMIT) -> TextContent:
        try:
            comments = await reddit.get_user_comments(username, limit)
        except Exception as e:
            raise ToolError(f"Error fetching user comments: {e}") from e
        return _as_json(comments)

    # --- Tool: get_post_comments ---
    # Argument names are camelCase to keep the published tool schema.
    @mcp.tool(title="Get Post Comments", description="Fetch comments for a specific Reddit post")
    async def get_post_comments(
        postId: Annotated[str, Field(description="Reddit post ID (alphanumeric string in URL)")],
        subreddit: Annotated[Optional[str], Field(description="Subreddit name for faster lookup (optional)")] = None,
    ) -> TextContent:
        try:
            comments = await reddit.get_post_comments(postId, subreddit)
        except Exception as e:
            raise ToolError(f"Error fetching post comments: {e}") from e
        return _as_json(comments)

    # --- Tool: hide_comment ---
    @mcp.tool(
        title="Report Comment as Spam",
        description="Report a Reddit comment as spam (also hides it from your view)",
    )
    async def hide_comment(
        commentId: Annotated[str, Field(description="Reddit comment ID to report as spam")],
    ) -> TextContent:
        try:
            success = await reddit.hide_comment(commentId)
        except Exception as e:
            raise ToolError(f"Error hiding comment: {e}") from e
        if not success:
            raise ToolError(f"Failed to hide comment {commentId}")
        return TextContent(type="text", text=f"Successfully hid comment {commentId}")

    # --- Tool: reply_to_comment ---
    @mcp.tool(title="Reply to Comment", description="Reply to a Reddit comment")
    async def reply_to_comment(
        commentId: Annotated[str, Field(description="Reddit comment ID to reply to")],
        text: Annotated[str, Field(description="Reply text (markdown supported)")],
    ) -> TextContent:
        try:
            reply_id = await reddit.reply_to_comment(commentId, text)
        except Exception as e:
            raise ToolError(f"Error replying to comment: {e}") from e
        if not reply_id:
            raise ToolError(f"Failed to reply to comment {commentId}")
        return TextContent(type="text", text=f"Successfully replied to comment {commentId}. Reply ID: {reply_id}")

    # --- Tool: post_comment ---
    @mcp.tool(title="Post Comment", description="Post a comment directly on a Reddit post")
    async def post_comment(
        postId: Annotated[str, Field(description="Reddit post ID to comment on")],
        text: Annotated[str, Field(description="Comment text (markdown supported)")],
    ) -> TextContent:
        try:
            comment_id = await reddit.post_comment(postId, text)
        except Exception as e:
            raise ToolError(f"Error posting comment: {e}") from e
        if not comment_id:
            raise ToolError(f"Failed to post comment on post {postId}")
        return TextContent(
            type="text", text=f"Successfully posted comment on post {postId}. Comment ID: {comment_id}"
        )

    # --- Tools: subreddit listings ---
    @mcp.tool(title="Get Hot Posts", description="Fetch hot posts from a subreddit")
    async def get_hot_posts(subreddit: Subreddit, limit: PostLimit = DEFAULT_LIMIT) -> TextContent:
        try:
            posts = await reddit.get_hot_posts(subreddit, limit)
        except Exception as e:
            raise ToolError(f"Error fetching hot posts: {e}") from e
        return _as_json(posts)

    @mcp.tool(title="Get New Posts", description="Fetch new posts from a subreddit")
    async def get_new_posts(subreddit: Subreddit, limit: PostLimit = DEFAULT_LIMIT) -> TextContent:
        try:
            posts = await reddit.get_new_posts(subreddit, limit)
        except Exception as e:
            raise ToolError(f"Error fetching new posts: {e}") from e
        return _as_json(posts)

    @mcp.tool(title="Get Rising Posts", description="Fetch rising posts from a subreddit")
    async def get_rising_posts(subreddit: Subreddit, limit: PostLimit = DEFAULT_LIMIT) -> TextContent:
        try:
            posts = await reddit.get_rising_posts(subreddit, limit)
        except Exception as e:
            raise ToolError(f"Error fetching rising posts: {e}") from e
        return _as_json(posts)

    return mcp


# --- Run MCP Server ---
async def main(settings: Optional[Settings] = None) -> None:
    settings = settings or load_settings()
    mcp = create_server(settings)

    if settings.transport == "stdio":
        logger.info(f"Starting {SERVER_NAME} over stdio (backend: {settings.api_base_url})")
        await mcp.run_async("stdio")
    else:
        logger.info(
            f"Starting {SERVER_NAME} on http://{settings.host}:{settings.port} "
            f"(transport: {settings.transport}, backend: {settings.api_base_url})"
        )
        await mcp.run_async(settings.transport, host=settings.host, port=settings.port)


def run() -> None:
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())


if __name__ == "__main__":
    run()
