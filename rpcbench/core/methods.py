"""The fixed battery of benchmarked RPC methods."""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from ..presets import EXAMPLE_ACCOUNT, EXAMPLE_OWNER, TOKEN_PROGRAM_ID, FALLBACK_SLOT


@dataclass
class MethodContext:
    """Values fetched during a run that some parameter builders need."""

    slot: Optional[int] = None


@dataclass(frozen=True)
class MethodDescriptor:
    """One benchmarked RPC method and how to build its parameters."""

    name: str
    build_params: Callable[[MethodContext], List[Any]]
    requires_slot: bool = False

    def params(self, context: Optional[MethodContext] = None) -> List[Any]:
        return self.build_params(context or MethodContext())


def _no_params(context: MethodContext) -> List[Any]:
    return []


def _balance_params(context: MethodContext) -> List[Any]:
    return [EXAMPLE_ACCOUNT]


def _account_info_params(context: MethodContext) -> List[Any]:
    return [EXAMPLE_ACCOUNT, {"encoding": "base64", "commitment": "confirmed"}]


def _token_accounts_params(context: MethodContext) -> List[Any]:
    return [
        EXAMPLE_OWNER,
        {"programId": TOKEN_PROGRAM_ID},
        {"encoding": "jsonParsed"},
    ]


def _block_params(context: MethodContext) -> List[Any]:
    slot = context.slot if context.slot is not None else FALLBACK_SLOT
    return [slot, {"encoding": "base64", "maxSupportedTransactionVersion": 0}]


METHOD_REGISTRY: Tuple[MethodDescriptor, ...] = (
    MethodDescriptor("getHealth", _no_params),
    MethodDescriptor("getSlot", _no_params),
    MethodDescriptor("getLatestBlockhash", _no_params),
    MethodDescriptor("getBalance", _balance_params),
    MethodDescriptor("getAccountInfo", _account_info_params),
    MethodDescriptor("getTokenAccountsByOwner", _token_accounts_params),
    MethodDescriptor("getBlock", _block_params, requires_slot=True),
)


def method_names() -> List[str]:
    """Names of the registered methods, in benchmark order."""
    return [descriptor.name for descriptor in METHOD_REGISTRY]


def get_descriptor(name: str) -> MethodDescriptor:
    for descriptor in METHOD_REGISTRY:
        if descriptor.name == name:
            return descriptor
    raise KeyError(f"Unknown method: {name}")
