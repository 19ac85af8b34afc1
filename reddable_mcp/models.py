from typing import Any, List, TypedDict

# Shapes returned by the Reddable backend. They are passed through untouched.


class RedditPost(TypedDict, total=False):
    id: str
    title: str
    selftext: str
    author: str
    subreddit: str
    created_utc: float
    score: int
    num_comments: int
    permalink: str
    url: str


class RedditComment(TypedDict, total=False):
    id: str
    body: str
    author: str
    created_utc: float
    score: int
    permalink: str
    parent_id: str
    replies: Any


PostList = List[RedditPost]
CommentList = List[RedditComment]
