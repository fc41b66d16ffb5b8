"""Core benchmarking components."""

from .models import EndpointConfig, ExecutionMode, AttemptResult, MethodAggregate, RunReport
from .exceptions import ConfigurationError
from .rating import Rating, classify
from .methods import METHOD_REGISTRY, MethodDescriptor, MethodContext
from .invoker import RpcInvoker
from .collector import SampleCollector
from .aggregation import aggregate, build_report
from .runner import BenchmarkRunner

__all__ = [
    "EndpointConfig",
    "ExecutionMode",
    "AttemptResult",
    "MethodAggregate",
    "RunReport",
    "ConfigurationError",
    "Rating",
    "classify",
    "METHOD_REGISTRY",
    "MethodDescriptor",
    "MethodContext",
    "RpcInvoker",
    "SampleCollector",
    "aggregate",
    "build_report",
    "BenchmarkRunner",
]
