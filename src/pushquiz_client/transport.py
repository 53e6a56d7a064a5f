# Area: Transport
"""
pushquiz_client.transport — Room socket transport
=================================================

The session talks to the server through a small Transport interface:
``send(text)`` and ``close(code, reason)`` never block, and iterating
the transport yields inbound text frames until the connection ends.

WebSocketTransport implements it on top of the ``websockets`` library.
Outgoing frames are queued and written by a single writer task, so they
leave in the order they were sent and the session never awaits a write.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Awaitable, Callable, Protocol, Union

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from .errors import TransportError

logger = logging.getLogger("pushquiz_client.transport")

DEFAULT_OPEN_TIMEOUT_SECONDS = 10.0

Frame = Union[str, bytes]


class Transport(Protocol):
    def send(self, text: str) -> None: ...

    def close(self, code: int, reason: str) -> None: ...

    def __aiter__(self) -> AsyncIterator[Frame]: ...


TransportFactory = Callable[[str], Awaitable[Transport]]


@dataclass(frozen=True)
class _CloseFrame:
    code: int
    reason: str


class WebSocketTransport:
    """Transport over one websocket connection."""

    def __init__(self, websocket, url: str = ""):
        self.url = url
        self._ws = websocket
        self._closing = False
        self._outbox: "asyncio.Queue[Union[str, _CloseFrame]]" = asyncio.Queue()
        self._writer = asyncio.get_running_loop().create_task(self._drain())

    @classmethod
    async def open(
        cls, url: str, open_timeout: float = DEFAULT_OPEN_TIMEOUT_SECONDS
    ) -> "WebSocketTransport":
        """Connect to ``url``; raises TransportError if the connection fails."""
        logger.info(f"Connecting to {url}")
        try:
            websocket = await websockets.connect(url, open_timeout=open_timeout)
        except (OSError, asyncio.TimeoutError, WebSocketException) as e:
            raise TransportError(f"Could not connect to {url}: {e}") from e
        return cls(websocket, url=url)

    def send(self, text: str) -> None:
        if self._closing:
            raise TransportError("Transport is closing")
        self._outbox.put_nowait(text)

    def close(self, code: int, reason: str) -> None:
        if self._closing:
            return
        self._closing = True
        self._outbox.put_nowait(_CloseFrame(code, reason))

    def __aiter__(self) -> AsyncIterator[Frame]:
        return self._receive()

    async def _receive(self) -> AsyncIterator[Frame]:
        try:
            async for frame in self._ws:
                yield frame
        except ConnectionClosedOK:
            pass
        except ConnectionClosed as e:
            logger.warning(f"Connection lost: code={e.rcvd.code if e.rcvd else None}")
        finally:
            if not self._closing and not self._writer.done():
                self._writer.cancel()

    async def _drain(self) -> None:
        while True:
            item = await self._outbox.get()
            try:
                if isinstance(item, _CloseFrame):
                    await self._ws.close(code=item.code, reason=item.reason)
                    return
                await self._ws.send(item)
            except ConnectionClosed:
                logger.debug("Write after connection closed; dropping queued frames")
                return
