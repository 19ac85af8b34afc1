import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_API_BASE_URL = "https://reddable.vercel.app"
DEFAULT_TRANSPORT = "streamable-http"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8086


class Settings(BaseModel):
    """Process-wide configuration, read once at startup."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1, repr=False, description="Long-term API key for Reddable MCP access")
    api_base_url: str = Field(default=DEFAULT_API_BASE_URL, min_length=1)
    transport: str = Field(default=DEFAULT_TRANSPORT, pattern="^(stdio|streamable-http|http|sse)$")
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)


def load_settings(env_file: Optional[str] = None) -> Settings:
    """
    Loads settings from the environment, after merging in a .env file if present.
    Variables already set in the environment win over the .env file.
    """
    load_dotenv(env_file)

    api_key = os.environ.get("REDDABLE_API_KEY")
    assert api_key, "Please set REDDABLE_API_KEY in your .env file"

    return Settings(
        api_key=api_key,
        api_base_url=os.environ.get("REDDABLE_API_BASE_URL", DEFAULT_API_BASE_URL),
        transport=os.environ.get("MCP_TRANSPORT", DEFAULT_TRANSPORT),
        host=os.environ.get("HOST", DEFAULT_HOST),
        port=os.environ.get("PORT", DEFAULT_PORT),
    )
