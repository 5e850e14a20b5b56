"""Configuration for the tester client and its presentations."""

from pathlib import Path

from pydantic import BaseModel, Field


class TesterConfig(BaseModel):
    """Configuration for the tester."""

    host: str = "localhost"
    catalog_path: Path | None = None
    listen_host: str = "127.0.0.1"
    listen_port: int = Field(default=8080, ge=1, le=65535)
