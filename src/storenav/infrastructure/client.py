"""Client for the navigator server."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from ..core.exceptions import StoreNavError

logger = logging.getLogger(__name__)


class NavigatorClient:
    """
    Keeps one connection open and exchanges request and response lines.

    Example:
        >>> async with NavigatorClient("127.0.0.1", 5000) as client:
        ...     response = await client.request("graph/getNodes")
    """

    def __init__(self, host: str = "127.0.0.1", port: int = 5000):
        self.host = host
        self.port = port
        self._reader: Optional[asyncio.StreamReader] = None
        self._writer: Optional[asyncio.StreamWriter] = None

    async def connect(self) -> None:
        self._reader, self._writer = await asyncio.open_connection(self.host, self.port)
        logger.debug(f"Connected to {self.host}:{self.port}")

    async def close(self) -> None:
        if self._writer is not None:
            self._writer.close()
            await self._writer.wait_closed()
            self._writer = None
            self._reader = None

    async def request(self, action: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Send one request and wait for its response.

        Raises:
            StoreNavError: If the client is not connected or the server hung up
        """
        if self._writer is None or self._reader is None:
            raise StoreNavError("Client is not connected")
        payload = {"headers": {"action": action}, "body": body or {}}
        self._writer.write((json.dumps(payload) + "\n").encode("utf-8"))
        await self._writer.drain()
        line = await self._reader.readline()
        if not line:
            raise StoreNavError("Server closed the connection")
        return json.loads(line)

    async def __aenter__(self) -> "NavigatorClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
