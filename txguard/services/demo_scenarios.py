"""
Demo scenarios.
Synthetic transactions for walkthroughs; decisions on them are logged with is_demo=True.
"""
import random
from typing import List, Optional

from txguard.core.enums import IndicatorType, ScenarioCategory, Severity, TransactionKind
from txguard.core.models import DemoScenario, RiskIndicator, TransactionContext
from txguard.services.context_assembler import now_ms

_CREATED_AT = now_ms()


def _indicator(type_: IndicatorType, severity: Severity, message: str, source: str) -> RiskIndicator:
    return RiskIndicator(type=type_, severity=severity, message=message, source=source)


DEMO_SCENARIOS: List[DemoScenario] = [
    DemoScenario(
        id="safe-usdc-transfer",
        name="Safe USDC Transfer",
        description="A straightforward transfer of USDC to a verified address",
        category=ScenarioCategory.SAFE.value,
        expected_user_action="approve",
        transaction=TransactionContext(
            hash="0xa1b2c3d4e5f6789012345678901234567890abcdef1234567890abcdef123456",
            kind=TransactionKind.TRANSFER,
            recipient="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            value="0",
            intent="Transfer 100 USDC to a verified recipient address",
            estimated_outcome="The recipient will receive exactly 100 USDC tokens",
            risk_indicators=[
                _indicator(IndicatorType.UNVERIFIED_CONTRACT, Severity.INFO,
                           "USDC contract is verified and well-established", "Etherscan API"),
            ],
            timestamp=_CREATED_AT,
        ),
        demo_notes=[
            "This represents a low-risk, everyday transaction",
            "USDC is a well-known stablecoin with high liquidity",
            "No complex smart contract interactions involved",
        ],
    ),
    DemoScenario(
        id="risky-new-token-swap",
        name="Risky New Token Swap",
        description="Swapping ETH for a newly launched, unverified token",
        category=ScenarioCategory.RISKY.value,
        expected_user_action="reject",
        transaction=TransactionContext(
            hash="0xb2c3d4e5f6789012345678901234567890abcdef1234567890abcdef12345678",
            kind=TransactionKind.SWAP,
            recipient="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
            value="2.5",
            intent="Swap 2.5 ETH for MOONSHOT tokens on Uniswap V2",
            estimated_outcome="You will receive approximately 1,000,000 MOONSHOT tokens",
            risk_indicators=[
                _indicator(IndicatorType.NEW_TOKEN, Severity.WARNING,
                           "Token is very new (3 days old)", "Etherscan API"),
                _indicator(IndicatorType.NO_DEX_POOL, Severity.WARNING,
                           "No major DEX trading activity found", "Etherscan API"),
                _indicator(IndicatorType.HIGH_VALUE, Severity.INFO,
                           "Medium value transaction: 2.50 ETH", "Transaction Analysis"),
            ],
            timestamp=_CREATED_AT,
        ),
        demo_notes=[
            "Multiple warning indicators on one transaction",
            "New token with limited trading history",
            "Low liquidity could make it difficult to sell tokens later",
        ],
    ),
    DemoScenario(
        id="complex-defi-interaction",
        name="Complex DeFi Interaction",
        description="Providing ETH/token liquidity to a DEX pool",
        category=ScenarioCategory.COMPLEX.value,
        expected_user_action="approve",
        transaction=TransactionContext(
            hash="0xc3d4e5f6789012345678901234567890abcdef1234567890abcdef123456789a",
            kind=TransactionKind.LIQUIDITY,
            recipient="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
            value="1.0",
            intent="Add liquidity to ETH/Token pool on Uniswap V2",
            estimated_outcome="You will provide ETH and tokens to earn trading fees",
            risk_indicators=[
                _indicator(IndicatorType.UNVERIFIED_CONTRACT, Severity.INFO,
                           "Contract is verified on Etherscan", "Etherscan API"),
            ],
            timestamp=_CREATED_AT,
        ),
        demo_notes=[
            "Legitimate DeFi operation with several moving parts",
            "Requires understanding of impermanent loss",
            "Shows how LP token mechanics are explained",
        ],
    ),
    DemoScenario(
        id="suspicious-approval",
        name="Suspicious Token Approval",
        description="Unlimited token approval to an unverified contract",
        category=ScenarioCategory.RISKY.value,
        expected_user_action="reject",
        transaction=TransactionContext(
            hash="0xd4e5f6789012345678901234567890abcdef1234567890abcdef123456789ab2",
            kind=TransactionKind.APPROVAL,
            recipient="0x1234567890123456789012345678901234567890",
            value="0",
            intent="Allow 0x1234...7890 to spend unlimited of your tokens",
            estimated_outcome="0x1234...7890 will be able to transfer your tokens on your behalf",
            risk_indicators=[
                _indicator(IndicatorType.UNVERIFIED_CONTRACT, Severity.WARNING,
                           "Contract is not verified on Etherscan", "Etherscan API"),
                _indicator(IndicatorType.NEW_TOKEN, Severity.WARNING,
                           "Token is very new (1 days old)", "Etherscan API"),
            ],
            timestamp=_CREATED_AT,
        ),
        demo_notes=[
            "Unlimited approvals let the spender move any amount at any time",
            "Unverified contract code cannot be reviewed",
            "Approvals can be revoked by approving zero",
        ],
    ),
    DemoScenario(
        id="nft-purchase",
        name="NFT Purchase",
        description="Purchasing an NFT from a popular marketplace",
        category=ScenarioCategory.SAFE.value,
        expected_user_action="approve",
        transaction=TransactionContext(
            hash="0xe5f6789012345678901234567890abcdef1234567890abcdef123456789abc34",
            kind=TransactionKind.UNKNOWN,
            recipient="0x00000000006c3852cbEf3e08E8dF289169EdE581",
            value="0.5",
            intent="Send 0.5 ETH to 0x0000...E581",
            estimated_outcome="0.5 ETH will be sent to 0x0000...E581",
            risk_indicators=[
                _indicator(IndicatorType.UNVERIFIED_CONTRACT, Severity.INFO,
                           "Verified Contract (Known Protocol: OpenSea Seaport)", "Fallback Verification"),
            ],
            timestamp=_CREATED_AT,
        ),
        demo_notes=[
            "Marketplace call that is not in the signature registry",
            "Low confidence explanation, but the recipient is a known protocol",
        ],
    ),
]


def get_demo_scenario_by_id(scenario_id: str) -> Optional[DemoScenario]:
    return next((s for s in DEMO_SCENARIOS if s.id == scenario_id), None)


def get_demo_scenarios_by_category(category: str) -> List[DemoScenario]:
    return [s for s in DEMO_SCENARIOS if s.category == category]


def get_random_demo_scenario() -> DemoScenario:
    return random.choice(DEMO_SCENARIOS)


def get_presentation_scenarios() -> List[DemoScenario]:
    """Curated set for live walkthroughs."""
    ids = ("safe-usdc-transfer", "risky-new-token-swap", "complex-defi-interaction")
    return [get_demo_scenario_by_id(scenario_id) for scenario_id in ids]


def is_demo_transaction(tx_hash: str) -> bool:
    return any(s.transaction.hash == tx_hash for s in DEMO_SCENARIOS)
