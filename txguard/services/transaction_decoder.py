"""
Transaction decoder.
Classifies a raw transaction request and decodes call parameters for
selectors found in the signature registry.
"""
from typing import Optional, Tuple

from eth_utils import remove_0x_prefix

from txguard.core.enums import TransactionKind
from txguard.core.logger import get_logger
from txguard.core.models import RawTransactionRequest, DecodedTransaction
from txguard.services.signature_registry import SignatureRegistry, DEFAULT_REGISTRY

logger = get_logger(__name__)

SELECTOR_HEX_LENGTH = 8
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class InvalidTransactionError(ValueError):
    """Raised for requests the pipeline cannot represent (e.g. contract creation)."""


def strip_hex(data: Optional[str]) -> str:
    """Hex payload without the 0x prefix; empty for None."""
    if not data:
        return ""
    return remove_0x_prefix(data.strip())


def has_call_data(data: Optional[str]) -> bool:
    """True when `data` carries more than the empty / single null-byte marker."""
    return len(strip_hex(data)) > 2


def hex_to_int(value: Optional[str]) -> int:
    """Parse a hex quantity; empty or missing is zero."""
    digits = strip_hex(value)
    if not digits:
        return 0
    return int(digits, 16)


class TransactionDecoder:
    """Turns a RawTransactionRequest into a DecodedTransaction. Never raises on bad call data."""

    # Substring rules, checked in order against the function name
    KIND_RULES: Tuple[Tuple[str, TransactionKind], ...] = (
        ("transfer", TransactionKind.TRANSFER),
        ("swap", TransactionKind.SWAP),
        ("approve", TransactionKind.APPROVAL),
        ("addLiquidity", TransactionKind.LIQUIDITY),
        ("removeLiquidity", TransactionKind.LIQUIDITY),
    )

    def __init__(self, registry: SignatureRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def decode(self, request: RawTransactionRequest) -> DecodedTransaction:
        if not request.to:
            raise InvalidTransactionError("Contract creation (empty 'to') is not supported")

        value_wei = str(hex_to_int(request.value))
        data = request.data or "0x"
        payload_hex = strip_hex(data)

        # Step 1: no call data -> native currency transfer
        if len(payload_hex) <= 2:
            return DecodedTransaction(
                to=request.to,
                value=value_wei,
                data=data,
                kind=TransactionKind.TRANSFER,
            )

        # Step 2: selector lookup
        selector = payload_hex[:SELECTOR_HEX_LENGTH].lower()
        if len(selector) < SELECTOR_HEX_LENGTH or not _HEX_DIGITS.issuperset(selector):
            logger.debug("selector_unreadable", to=request.to, data_length=len(payload_hex))
            return DecodedTransaction(
                to=request.to,
                value=value_wei,
                data=data,
                kind=TransactionKind.UNKNOWN,
            )

        signature = self.registry.lookup(selector)
        if signature is None:
            return DecodedTransaction(
                to=request.to,
                value=value_wei,
                data=data,
                kind=TransactionKind.UNKNOWN,
                selector=selector,
            )

        # Step 3: parameter decoding, degrading to "absent" on any failure
        parameters = None
        try:
            payload = bytes.fromhex(payload_hex[SELECTOR_HEX_LENGTH:])
            parameters = signature.decode_parameters(payload)
        except ValueError as e:
            logger.warning(
                "parameter_decode_failed",
                selector=selector,
                function=signature.prototype,
                error=str(e),
            )

        return DecodedTransaction(
            to=request.to,
            value=value_wei,
            data=data,
            kind=self.classify(signature.prototype),
            selector=selector,
            function_name=signature.prototype,
            parameters=parameters,
        )

    @classmethod
    def classify(cls, function_name: str) -> TransactionKind:
        """Transaction kind from a function name."""
        for needle, kind in cls.KIND_RULES:
            if needle in function_name:
                return kind
        return TransactionKind.UNKNOWN


def decode(request: RawTransactionRequest, registry: SignatureRegistry = DEFAULT_REGISTRY) -> DecodedTransaction:
    """Functional entry point over TransactionDecoder."""
    return TransactionDecoder(registry).decode(request)
