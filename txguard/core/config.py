"""
Configuration management using Pydantic settings.
Loads from environment variables with validation.
"""
from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # API Keys
    etherscan_api_key: str = ""

    # RPC Endpoints
    ethereum_rpc_url: str = "https://eth.llamarpc.com"

    # Service URLs
    explorer_base_url: str = "https://api.etherscan.io/v2/api"
    chain_id: str = "1"
    request_timeout_seconds: float = 10.0

    # Risk thresholds (in ETH)
    high_value_threshold_eth: Decimal = Decimal("10")
    medium_value_threshold_eth: Decimal = Decimal("1")

    # Decision ledger
    address_hash_salt: str = "aura-decision-firewall-v1"
    recent_decisions_limit: int = 100

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # App settings
    app_name: str = "Transaction Decision Firewall"
    app_version: str = "1.0.0"
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )

    def has_explorer_api_key(self) -> bool:
        """Whether explorer lookups can be attempted at all."""
        return bool(self.etherscan_api_key)


settings = Settings()
