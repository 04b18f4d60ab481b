"""
MODULE OVERVIEW:
Connectivity probes driven by the chat configuration.

WHAT IS HAPPENING HERE:
These are the two smallest possible consumers of the config: one GETs a path under
the derived API URL with HTTPX, the other opens (and immediately closes) a socket
to the derived WebSocket URL. They use the same retry knobs the real client uses
(API_CONFIG retries/retryDelay, WS_CONFIG reconnect settings), so running them
tells you whether a deployment's settings actually reach a live backend.
Transport errors become a failed `ProbeResult`; nothing is raised.
"""
import asyncio
import time
from typing import Any, Awaitable, Callable, Literal

import httpx
import websockets
from loguru import logger
from pydantic import BaseModel

from chat_client.store import ChatConfig


class ProbeResult(BaseModel):
    target: Literal["api", "websocket"]
    url: str
    ok: bool
    attempts: int
    status_code: int | None = None
    error: str | None = None
    elapsed_ms: float


def probe_api(
    config: ChatConfig,
    path: str = "/health",
    transport: httpx.BaseTransport | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ProbeResult:
    api = config.API_CONFIG
    url = f"{config.get_api_url()}{path}"
    max_attempts = 1 + max(0, int(api.retries))
    start = time.perf_counter()
    status_code = None
    error = None

    with httpx.Client(timeout=api.timeout / 1000, transport=transport) as client:
        for attempt in range(1, max_attempts + 1):
            try:
                resp = client.get(url)
                status_code = resp.status_code
                resp.raise_for_status()
                return ProbeResult(
                    target="api",
                    url=url,
                    ok=True,
                    attempts=attempt,
                    status_code=status_code,
                    elapsed_ms=(time.perf_counter() - start) * 1000,
                )
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                error = str(e) or type(e).__name__
                logger.warning(f"Probe api Attempt {attempt}/{max_attempts} Url {url} Error {error}")
                if attempt < max_attempts:
                    sleep(api.retry_delay / 1000)

    return ProbeResult(
        target="api",
        url=url,
        ok=False,
        attempts=max_attempts,
        status_code=status_code,
        error=error,
        elapsed_ms=(time.perf_counter() - start) * 1000,
    )


async def probe_websocket(
    config: ChatConfig,
    connect: Callable[..., Any] = websockets.connect,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ProbeResult:
    ws = config.WS_CONFIG
    url = config.get_websocket_url()
    max_attempts = 1 + max(0, int(ws.max_reconnect_attempts)) if ws.auto_reconnect else 1
    start = time.perf_counter()
    error = None

    for attempt in range(1, max_attempts + 1):
        try:
            async with connect(url, open_timeout=ws.connection_timeout / 1000):
                return ProbeResult(
                    target="websocket",
                    url=url,
                    ok=True,
                    attempts=attempt,
                    elapsed_ms=(time.perf_counter() - start) * 1000,
                )
        except (OSError, asyncio.TimeoutError, websockets.WebSocketException) as e:
            error = str(e) or type(e).__name__
            logger.warning(f"Probe websocket Attempt {attempt}/{max_attempts} Url {url} Error {error}")
            if attempt < max_attempts:
                await sleep(ws.reconnect_interval / 1000)

    return ProbeResult(
        target="websocket",
        url=url,
        ok=False,
        attempts=max_attempts,
        error=error,
        elapsed_ms=(time.perf_counter() - start) * 1000,
    )
