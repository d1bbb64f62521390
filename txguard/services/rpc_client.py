"""
JSON-RPC client for on-chain lookups.
Answers "does this address have code?" and "what is the current block?".
"""
from typing import Optional, Tuple
from web3 import AsyncWeb3
from web3.providers.rpc import AsyncHTTPProvider
from eth_utils import is_address, to_checksum_address
from txguard.core.config import settings
from txguard.core.enums import ErrorCode
from txguard.core.logger import get_logger
from txguard.core.models import StructuredError

logger = get_logger(__name__)

SOURCE = "ethereum_rpc"


class RpcClient:
    """Thin async wrapper over web3 that reports failures as StructuredError."""

    def __init__(self, rpc_url: Optional[str] = None):
        self.rpc_url = rpc_url or settings.ethereum_rpc_url
        self.web3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url))

    async def has_code(self, address: str) -> Tuple[Optional[bool], Optional[StructuredError]]:
        """Whether `address` currently has deployed bytecode."""
        if not is_address(address):
            return None, StructuredError(
                code=ErrorCode.PARSE_ERROR,
                message=f"Invalid address: {address}",
                source=SOURCE,
            )

        try:
            code = await self.web3.eth.get_code(to_checksum_address(address))
            return len(code) > 0, None
        except Exception as e:
            logger.warning("rpc_get_code_failed", address=address, error=str(e))
            return None, StructuredError(
                code=ErrorCode.UPSTREAM_ERROR,
                message=f"eth_getCode failed: {str(e)}",
                source=SOURCE,
                retryable=True,
            )

    async def get_block_number(self) -> Tuple[Optional[int], Optional[StructuredError]]:
        """Current chain height."""
        try:
            return int(await self.web3.eth.block_number), None
        except Exception as e:
            logger.warning("rpc_block_number_failed", error=str(e))
            return None, StructuredError(
                code=ErrorCode.UPSTREAM_ERROR,
                message=f"eth_blockNumber failed: {str(e)}",
                source=SOURCE,
                retryable=True,
            )
