"""Repeated invocation of one method, sequentially or in parallel."""

import asyncio
from typing import Any, Callable, List, Optional

from .invoker import RpcInvoker
from .methods import MethodDescriptor
from .models import AttemptResult, ExecutionMode

AttemptCallback = Callable[[AttemptResult], None]


class SampleCollector:
    """
    Runs N attempts of a method through an invoker.

    Supports two modes:
    - Sequential: each attempt completes before the next one starts
    - Parallel: all attempts are issued at once and awaited together

    The on_attempt callback fires once per completed attempt in either mode.
    """

    def __init__(
        self,
        invoker: RpcInvoker,
        mode: ExecutionMode = ExecutionMode.SEQUENTIAL,
        delay_seconds: float = 0.0,
        on_attempt: Optional[AttemptCallback] = None,
    ):
        self.invoker = invoker
        self.mode = mode
        self.delay_seconds = delay_seconds
        self.on_attempt = on_attempt

    async def collect(
        self,
        descriptor: MethodDescriptor,
        iterations: int,
        params: Optional[List[Any]] = None,
    ) -> List[AttemptResult]:
        """
        Collect every attempt result for one method.

        Args:
            descriptor: Method to benchmark
            iterations: Number of attempts
            params: Prebuilt parameters (built from the descriptor when None)

        Returns:
            All attempt results, successes and failures, in issue order
        """
        if params is None:
            params = descriptor.params()

        if self.mode is ExecutionMode.PARALLEL:
            return await self._collect_parallel(descriptor.name, iterations, params)
        return await self._collect_sequential(descriptor.name, iterations, params)

    async def _collect_sequential(
        self, method: str, iterations: int, params: List[Any]
    ) -> List[AttemptResult]:
        results: List[AttemptResult] = []
        for i in range(iterations):
            result = await self._attempt(method, params)
            results.append(result)
            if self.delay_seconds and i < iterations - 1:
                await asyncio.sleep(self.delay_seconds)
        return results

    async def _collect_parallel(
        self, method: str, iterations: int, params: List[Any]
    ) -> List[AttemptResult]:
        tasks = [self._attempt(method, params) for _ in range(iterations)]
        return list(await asyncio.gather(*tasks))

    async def _attempt(self, method: str, params: List[Any]) -> AttemptResult:
        result = await self.invoker.invoke(method, params)
        if self.on_attempt is not None:
            self.on_attempt(result)
        return result
