from __future__ import annotations

from pydantic import BaseModel, Field


class Config(BaseModel):
    model_config = {"extra": "forbid"}


class ClientConfig(Config):
    base_url: str = Field(
        description="The root URL of the web application, under which the REST API lives",
        default="http://127.0.0.1:8080/guacamole/",
    )
    token: str | None = Field(
        description="The authentication token to send with every request",
        default=None,
    )
    timeout: float = Field(
        description="The timeout in seconds of every HTTP request",
        default=10.0,
    )
    verify: bool = Field(
        description="Whether to verify the server's TLS certificate",
        default=True,
    )
