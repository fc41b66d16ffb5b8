"""Benchmark orchestration for a full run against one endpoint."""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

import aiohttp

from ..presets import FALLBACK_SLOT, SLOT_LOOKBACK
from .aggregation import aggregate, build_report
from .collector import AttemptCallback, SampleCollector
from .invoker import RpcInvoker
from .methods import METHOD_REGISTRY, MethodContext, MethodDescriptor
from .models import EndpointConfig, MethodAggregate, RunReport


class BenchmarkRunner:
    """
    Runs the method battery against the configured endpoint.

    Each registered method is collected in registry order, reduced to a
    MethodAggregate, and the whole run is rolled up into a RunReport.
    """

    def __init__(
        self,
        config: EndpointConfig,
        verbose: bool = False,
        on_attempt: Optional[AttemptCallback] = None,
        on_method_start: Optional[Callable[[str], None]] = None,
        methods: Sequence[MethodDescriptor] = METHOD_REGISTRY,
    ):
        self.config = config
        self.on_attempt = on_attempt
        self.on_method_start = on_method_start
        self.methods = tuple(methods)
        self.aggregates: List[MethodAggregate] = []

        logging.basicConfig(
            level=logging.INFO if verbose else logging.WARNING,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )
        self.logger = logging.getLogger(__name__)

    @property
    def total_attempts(self) -> int:
        """Number of attempts the run will issue, excluding the slot probe."""
        return len(self.methods) * self.config.iterations

    async def run(self) -> RunReport:
        """Open an HTTP session and run every method through it."""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
        connector = aiohttp.TCPConnector(limit=max(self.config.iterations, 10))

        async with aiohttp.ClientSession(timeout=timeout, connector=connector) as session:
            invoker = RpcInvoker(session, self.config.url, self.config.timeout_seconds)
            return await self.run_with(invoker)

    async def run_with(self, invoker: RpcInvoker) -> RunReport:
        """Run every method through an already constructed invoker."""
        self.logger.info(
            f"Benchmarking {self.config.display_url}: {len(self.methods)} methods, "
            f"{self.config.iterations} iterations, {self.config.mode.value} mode"
        )

        collector = SampleCollector(
            invoker,
            mode=self.config.mode,
            delay_seconds=self.config.delay_seconds,
            on_attempt=self.on_attempt,
        )
        context = MethodContext()
        self.aggregates = []

        start_time = time.perf_counter()
        for descriptor in self.methods:
            if descriptor.requires_slot and context.slot is None:
                context.slot = await self.resolve_slot(invoker)

            if self.on_method_start is not None:
                self.on_method_start(descriptor.name)

            attempts = await collector.collect(
                descriptor, self.config.iterations, descriptor.params(context)
            )
            method_aggregate = aggregate(descriptor.name, attempts)
            self.aggregates.append(method_aggregate)
            self._log_aggregate(method_aggregate)

        return build_report(
            self.aggregates,
            endpoint=self.config.display_url,
            iterations=self.config.iterations,
            mode=self.config.mode,
            timestamp=datetime.now(timezone.utc),
            duration_seconds=time.perf_counter() - start_time,
        )

    async def resolve_slot(self, invoker: RpcInvoker) -> int:
        """
        Fetch a recent slot for getBlock, a few slots behind the tip.

        Falls back to FALLBACK_SLOT when getSlot fails or returns something
        other than an integer.
        """
        probe = await invoker.invoke("getSlot", [], keep_result=True)
        slot = probe.result
        if probe.success and isinstance(slot, int) and not isinstance(slot, bool):
            return max(slot - SLOT_LOOKBACK, 0)

        reason = probe.error or f"unexpected result {slot!r}"
        self.logger.warning(
            f"Could not fetch current slot ({reason}); using fallback slot {FALLBACK_SLOT}"
        )
        return FALLBACK_SLOT

    def _log_aggregate(self, result: MethodAggregate) -> None:
        if result.has_latency:
            self.logger.info(
                f"{result.method}: {result.success_count}/{result.total_count} ok, "
                f"avg {result.avg_latency_ms:.1f}ms"
            )
        else:
            self.logger.warning(
                f"{result.method}: no successful attempts out of {result.total_count}"
            )
