"""Single JSON-RPC request execution with timing."""

import asyncio
import itertools
import json
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp

from .models import AttemptResult


logger = logging.getLogger(__name__)


class RpcInvoker:
    """
    Sends JSON-RPC 2.0 requests to one endpoint and times them.

    Every outcome is returned as an AttemptResult; transport and protocol
    failures never propagate to the caller.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        url: str,
        timeout_seconds: float = 30.0,
    ):
        self.session = session
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._ids = itertools.count(1)

    def build_payload(self, method: str, params: Optional[List[Any]], request_id: int) -> Dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
            "params": list(params or []),
        }

    async def invoke(
        self,
        method: str,
        params: Optional[List[Any]] = None,
        keep_result: bool = False,
    ) -> AttemptResult:
        """
        Send one request and measure it until the body is fully read.

        Args:
            method: JSON-RPC method name
            params: Positional parameter list
            keep_result: Store the decoded "result" member on the AttemptResult

        Returns:
            AttemptResult with elapsed time and, on failure, an error message
        """
        request_id = next(self._ids)
        payload = self.build_payload(method, params, request_id)
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        start_time = time.perf_counter()
        try:
            async with self.session.post(self.url, json=payload, timeout=timeout) as response:
                response_text = await response.text()
                latency_ms = (time.perf_counter() - start_time) * 1000
                status = response.status
        except asyncio.TimeoutError:
            latency_ms = (time.perf_counter() - start_time) * 1000
            return self._failure(
                method, latency_ms, request_id,
                f"Request timed out after {self.timeout_seconds:g}s",
            )
        except aiohttp.ClientError as e:
            latency_ms = (time.perf_counter() - start_time) * 1000
            return self._failure(method, latency_ms, request_id, str(e) or type(e).__name__)
        except UnicodeDecodeError:
            latency_ms = (time.perf_counter() - start_time) * 1000
            return self._failure(
                method, latency_ms, request_id,
                "Invalid response: body could not be decoded",
            )

        if not 200 <= status < 300:
            return self._failure(
                method, latency_ms, request_id,
                f"HTTP {status}: {response_text[:200]}",
            )

        try:
            body = json.loads(response_text)
        except (json.JSONDecodeError, ValueError):
            return self._failure(
                method, latency_ms, request_id,
                f"Invalid response: body is not JSON ({response_text[:100]!r})",
            )

        if not isinstance(body, dict):
            return self._failure(
                method, latency_ms, request_id,
                "Invalid response: expected a JSON object",
            )

        if body.get("error") is not None:
            return self._failure(method, latency_ms, request_id, self._describe_error(body["error"]))

        return AttemptResult(
            method=method,
            latency_ms=latency_ms,
            success=True,
            request_id=request_id,
            result=body.get("result") if keep_result else None,
        )

    @staticmethod
    def _describe_error(error: Any) -> str:
        """Error message from a JSON-RPC error object."""
        if isinstance(error, dict):
            message = error.get("message") or "Unknown JSON-RPC error"
            code = error.get("code")
            if code is not None:
                return f"{message} (code {code})"
            return message
        return str(error)

    def _failure(self, method: str, latency_ms: float, request_id: int, error: str) -> AttemptResult:
        logger.debug(f"{method} #{request_id} failed after {latency_ms:.0f}ms: {error}")
        return AttemptResult(
            method=method,
            latency_ms=latency_ms,
            success=False,
            error=error,
            request_id=request_id,
        )
