"""
Static address tables.
Router/token labels for display, the known-protocol fallback whitelist,
and the exchange routers used by the liquidity heuristic.
"""
from typing import Optional

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

UNISWAP_V2_ROUTER = "0x7a250d5630b4cf539739df2c5dacb4c659f2488d"
UNISWAP_V3_ROUTER = "0xe592427a0aece92de3edee1f18e0157c05861564"
SUSHISWAP_ROUTER = "0xd9e1ce17f2641f24ae83637ab66a2cca9c378b9f"
PANCAKESWAP_ROUTER = "0x10ed43c718714eb63d5aa57b78b54704e256024e"

# DEX routers, keyed by lowercase address
KNOWN_DEXES = {
    UNISWAP_V2_ROUTER: "Uniswap V2",
    UNISWAP_V3_ROUTER: "Uniswap V3",
    SUSHISWAP_ROUTER: "SushiSwap",
    PANCAKESWAP_ROUTER: "PancakeSwap",
}

KNOWN_CONTRACTS = {
    # DEX Routers
    UNISWAP_V2_ROUTER: "Uniswap V2 Router",
    UNISWAP_V3_ROUTER: "Uniswap V3 Router",
    SUSHISWAP_ROUTER: "SushiSwap Router",

    # Common tokens
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "USDC",
    "0xdac17f958d2ee523a2206206994597c13d831ec7": "USDT",
    "0x6b175474e89094c44da98b954eedeac495271d0f": "DAI",
    "0x2260fac5e5542a773aa44fbcfedf7c193bc2c599": "WBTC",

    ZERO_ADDRESS: "Null Address",
}

# Well-known audited contracts. Only consulted when the explorer lookup
# fails or is inconclusive.
KNOWN_PROTOCOL_WHITELIST = {
    # Uniswap V2
    UNISWAP_V2_ROUTER: "Uniswap V2 Router",
    "0x5c69bee701ef814a2b6a3edd4b1652cb9cc5aa6f": "Uniswap V2 Factory",

    # Uniswap V3
    UNISWAP_V3_ROUTER: "Uniswap V3 Router",
    "0x1f98431c8ad98523631ae4a59f267346ea31f984": "Uniswap V3 Factory",
    "0xc36442b4a4522e871399cd717abdd847ab11fe88": "Uniswap V3 Positions NFT",

    # OpenSea
    "0x00000000006c3852cbef3e08e8df289169ede581": "OpenSea Seaport",

    # Stablecoins
    "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48": "USDC Token",
    "0xdac17f958d2ee523a2206206994597c13d831ec7": "USDT Token",
    "0x6b175474e89094c44da98b954eedeac495271d0f": "DAI Token",

    "0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2": "Wrapped ETH (WETH)",
}

# Counterparties that indicate exchange trading activity
EXCHANGE_ROUTERS = frozenset({UNISWAP_V2_ROUTER, UNISWAP_V3_ROUTER})


def short_address(address: Optional[str]) -> str:
    """Shorten an address to first6...last4 for display."""
    if not address or len(address) < 10:
        return address or ""
    return f"{address[:6]}...{address[-4:]}"


def identify_dex(address: Optional[str]) -> str:
    """DEX name for a router address, 'Unknown DEX' otherwise."""
    return KNOWN_DEXES.get((address or "").lower(), "Unknown DEX")


def identify_contract(address: Optional[str]) -> str:
    """Human label for a well-known address, else the shortened address."""
    known = KNOWN_CONTRACTS.get((address or "").lower())
    if known:
        return known
    return short_address(address)


def known_protocol(address: Optional[str]) -> Optional[str]:
    """Protocol name if the address is on the fallback whitelist."""
    return KNOWN_PROTOCOL_WHITELIST.get((address or "").lower())


def is_exchange_router(address: Optional[str]) -> bool:
    return (address or "").lower() in EXCHANGE_ROUTERS
