from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Mapping
from types import TracebackType
from typing import Any

from httpx import AsyncClient, Response
from pydantic_core import to_jsonable_python
from structlog import get_logger

from .config import ClientConfig

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

logger = get_logger()


class Transport(ABC):
    @abstractmethod
    def request(
        self,
        method: str,
        url: str,
        params: Mapping[str, str],
        body: Any = None,
    ) -> Awaitable[Response]:
        """
        Issue an HTTP request.

        Args:
            method: The HTTP method.
            url: The URL, relative to the root of the web application.
            params: The query parameters.
            body: An optional payload, sent as JSON.

        Returns:
            An awaitable which resolves to the response if the request
            succeeded, and raises otherwise.
        """
        ...


class HttpxTransport(Transport):
    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: AsyncClient | None = None,
    ) -> None:
        """
        Creates a transport sending requests with an httpx async client.

        If no client is given, one is created from the configuration, and it is
        closed when the transport is. A given client is owned by the caller and
        left open.

        Args:
            config: The client configuration.
            client: An optional external httpx client.
        """
        self._config = ClientConfig() if config is None else config
        self._owns_client = client is None
        if client is None:
            client = AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                verify=self._config.verify,
            )
        self._client = client

    async def request(
        self,
        method: str,
        url: str,
        params: Mapping[str, str],
        body: Any = None,
    ) -> Response:
        """
        Send the request, serializing the body (if any) to JSON.

        Pydantic bodies are dumped by alias, and top-level fields set to None are
        left out, including pass-through attributes explicitly set to None.
        None values nested inside pass-through dicts are kept.
        """
        kwargs: dict[str, Any] = {}
        if body is not None:
            kwargs["json"] = to_jsonable_python(body, by_alias=True, exclude_none=True)
        response = await self._client.request(method, url, params=params, **kwargs)
        logger.debug(
            "Request sent",
            method=method,
            url=str(response.request.url.copy_remove_param("token")),
            status_code=response.status_code,
        )
        response.raise_for_status()
        return response

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()
