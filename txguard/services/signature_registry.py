"""
Function signature registry.
Maps human-readable prototypes to 4-byte selectors and back, and holds a
static decode plan (one ABI type per parameter) for each function.
"""
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak

_PROTOTYPE_RE = re.compile(r"^(\w+)\(([^)]*)\)$")


class ParamType(str, Enum):
    """Parameter types the registry knows how to decode."""
    ADDRESS = "address"
    UINT256 = "uint256"
    ADDRESS_ARRAY = "address[]"


# ABI type string handed to eth-abi for each parameter type
ABI_TYPES: Dict[ParamType, str] = {
    ParamType.ADDRESS: "address",
    ParamType.UINT256: "uint256",
    ParamType.ADDRESS_ARRAY: "address[]",
}


def _plain(value: Any) -> Any:
    # eth-abi returns arrays as tuples
    if isinstance(value, tuple):
        return list(value)
    return value


@dataclass(frozen=True)
class FunctionSignature:
    """A registered function: prototype, selector and decode plan."""
    prototype: str
    name: str
    param_types: Tuple[ParamType, ...]
    abi_types: Tuple[str, ...]
    selector: str  # 8 lowercase hex chars, no prefix

    @classmethod
    def from_prototype(cls, prototype: str) -> "FunctionSignature":
        match = _PROTOTYPE_RE.match(prototype)
        if not match:
            raise ValueError(f"Malformed function prototype: {prototype}")

        name, params = match.groups()
        try:
            param_types = tuple(ParamType(p.strip()) for p in params.split(",")) if params else ()
        except ValueError:
            raise ValueError(f"Unsupported parameter type in {prototype}")

        return cls(
            prototype=prototype,
            name=name,
            param_types=param_types,
            abi_types=tuple(ABI_TYPES[param_type] for param_type in param_types),
            selector=selector_for(prototype),
        )

    def decode_parameters(self, payload: bytes) -> List[Any]:
        """Decode arguments positionally. Raises ValueError on malformed payloads."""
        try:
            values = abi_decode(list(self.abi_types), payload)
        except DecodingError as e:
            raise ValueError(f"ABI decode error: {e}") from e
        return [_plain(value) for value in values]


def selector_for(prototype: str) -> str:
    """First 4 bytes of keccak256(prototype) as 8 hex chars."""
    return keccak(text=prototype)[:4].hex()


# Common function signatures for DeFi operations
KNOWN_SIGNATURES = (
    # ERC-20 Token functions
    "transfer(address,uint256)",
    "transferFrom(address,address,uint256)",
    "approve(address,uint256)",

    # Uniswap V2 Router swaps
    "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
    "swapTokensForExactTokens(uint256,uint256,address[],address,uint256)",
    "swapExactETHForTokens(uint256,address[],address,uint256)",
    "swapTokensForExactETH(uint256,uint256,address[],address,uint256)",
    "swapExactTokensForETH(uint256,uint256,address[],address,uint256)",
    "swapETHForExactTokens(uint256,address[],address,uint256)",

    # Uniswap V2 Router liquidity
    "addLiquidity(address,address,uint256,uint256,uint256,uint256,address,uint256)",
    "addLiquidityETH(address,uint256,uint256,uint256,address,uint256)",
    "removeLiquidity(address,address,uint256,uint256,uint256,address,uint256)",
    "removeLiquidityETH(address,uint256,uint256,uint256,address,uint256)",
)


class SignatureRegistry:
    """
    Read-only selector <-> prototype lookup.
    Built once and injected into the decoder; tests may build their own.
    """

    def __init__(self, prototypes: Iterable[str] = KNOWN_SIGNATURES):
        by_selector: Dict[str, FunctionSignature] = {}
        by_prototype: Dict[str, FunctionSignature] = {}

        for prototype in prototypes:
            signature = FunctionSignature.from_prototype(prototype)
            existing = by_selector.get(signature.selector)
            if existing and existing.prototype != prototype:
                raise ValueError(
                    f"Selector collision: {existing.prototype} and {prototype} -> {signature.selector}"
                )
            by_selector[signature.selector] = signature
            by_prototype[prototype] = signature

        self._by_selector = MappingProxyType(by_selector)
        self._by_prototype = MappingProxyType(by_prototype)

    def lookup(self, selector: str) -> Optional[FunctionSignature]:
        """Find a function by selector (with or without 0x, any case)."""
        if not selector:
            return None
        key = selector.lower()
        if key.startswith("0x"):
            key = key[2:]
        return self._by_selector.get(key)

    def selector_of(self, prototype: str) -> Optional[str]:
        signature = self._by_prototype.get(prototype)
        return signature.selector if signature else None

    def __contains__(self, selector: str) -> bool:
        return self.lookup(selector) is not None

    def __iter__(self) -> Iterator[FunctionSignature]:
        return iter(self._by_prototype.values())

    def __len__(self) -> int:
        return len(self._by_prototype)


DEFAULT_REGISTRY = SignatureRegistry()
