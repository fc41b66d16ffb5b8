"""Shared fixtures: an in-process fake RPC node and a scripted invoker."""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from aiohttp import web, test_utils

from rpcbench.core.models import AttemptResult


class FakeNode:
    """aiohttp handler imitating a Solana JSON-RPC node."""

    def __init__(self):
        self.url: Optional[str] = None
        self.requests: List[Dict[str, Any]] = []
        self.results: Dict[str, Any] = {
            "getHealth": "ok",
            "getSlot": 1000,
            "getLatestBlockhash": {"value": {"blockhash": "abc", "lastValidBlockHeight": 1}},
            "getBalance": {"value": 0},
            "getAccountInfo": {"value": None},
            "getTokenAccountsByOwner": {"value": []},
            "getBlock": {"blockhash": "def", "transactions": []},
        }
        self.errors: Dict[str, Dict[str, Any]] = {}
        self.raw: Dict[str, Tuple[int, str]] = {}
        self.delays: Dict[str, float] = {}

    def methods_called(self) -> List[str]:
        return [r["method"] for r in self.requests]

    async def handle(self, request: web.Request) -> web.Response:
        payload = await request.json()
        self.requests.append(payload)
        method = payload["method"]

        if method in self.delays:
            await asyncio.sleep(self.delays[method])
        if method in self.raw:
            status, text = self.raw[method]
            return web.Response(status=status, text=text)
        if method in self.errors:
            return web.json_response(
                {"jsonrpc": "2.0", "id": payload["id"], "error": self.errors[method]}
            )
        return web.json_response(
            {"jsonrpc": "2.0", "id": payload["id"], "result": self.results.get(method)}
        )


@pytest_asyncio.fixture
async def fake_node():
    node = FakeNode()
    app = web.Application()
    app.router.add_post("/", node.handle)
    server = test_utils.TestServer(app)
    await server.start_server()
    node.url = str(server.make_url("/"))
    yield node
    await server.close()


class ScriptedInvoker:
    """
    Invoker stand-in returning predetermined outcomes.

    outcomes maps a method name to a list of (latency_ms, error) pairs used
    in call order; error None means success. Methods without a script
    succeed with default_latency.
    """

    def __init__(
        self,
        outcomes: Optional[Dict[str, List[Tuple[float, Optional[str]]]]] = None,
        default_latency: float = 50.0,
        slot: Any = 5000,
        pause: float = 0.0,
    ):
        self.outcomes = {k: list(v) for k, v in (outcomes or {}).items()}
        self.default_latency = default_latency
        self.slot = slot
        self.pause = pause
        self.calls: List[Tuple[str, Any]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._counts: Dict[str, int] = {}

    async def invoke(self, method, params=None, keep_result=False):
        self.calls.append((method, params))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.pause:
                await asyncio.sleep(self.pause)
        finally:
            self.in_flight -= 1

        index = self._counts.get(method, 0)
        self._counts[method] = index + 1
        script = self.outcomes.get(method)
        if script:
            latency, error = script[index % len(script)]
        else:
            latency, error = self.default_latency, None

        result = None
        if method == "getSlot" and keep_result and error is None:
            result = self.slot
        return AttemptResult(
            method=method,
            latency_ms=latency,
            success=error is None,
            error=error,
            request_id=len(self.calls),
            result=result,
        )


@pytest.fixture
def scripted_invoker():
    return ScriptedInvoker
