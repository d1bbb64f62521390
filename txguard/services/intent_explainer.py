"""
Intent explainer.
Maps a decoded transaction to a plain-language intent, an expected outcome,
a confidence level and supporting detail lines. Pure and deterministic.
"""
from typing import Any, Dict, List, Optional

from txguard.core.enums import TransactionKind, Confidence
from txguard.core.models import DecodedTransaction, IntentAnalysis
from txguard.core.known_addresses import short_address, identify_dex, identify_contract
from txguard.services.transaction_decoder import has_call_data

UINT256_MAX = (1 << 256) - 1
ETHER_DECIMALS = 18

# Amounts above this many base units are shown truncated
_LARGE_AMOUNT = 10 ** 24

CAUTION_DETAIL = "CAUTION: Unknown transaction - verify carefully before proceeding"
UNLIMITED_WARNING = "WARNING: This grants unlimited spending permission"


# ---- Formatting helpers ----

def format_units(value: Any, decimals: int = ETHER_DECIMALS) -> str:
    """
    Render an integer amount of base units as a decimal string.
    Always keeps at least one fractional digit ("1.0"). Falls back to str(value).
    """
    try:
        amount = int(value)
    except (TypeError, ValueError):
        return str(value)

    sign = "-" if amount < 0 else ""
    whole, fraction = divmod(abs(amount), 10 ** decimals)
    fraction_text = str(fraction).rjust(decimals, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_text}"


def format_ether(value_wei: Any) -> str:
    """Wei -> ETH string, with plain "0" for zero."""
    if str(value_wei) == "0":
        return "0"
    return format_units(value_wei, ETHER_DECIMALS)


def format_token_amount(amount: Any) -> str:
    """Short human form of an 18-decimal token amount. Never raises."""
    try:
        big_amount = int(amount)
    except (TypeError, ValueError):
        return str(amount)

    if big_amount > _LARGE_AMOUNT:
        return f"{str(big_amount)[:6]}..."

    num = big_amount / 10 ** ETHER_DECIMALS
    if num == 0:
        return "0"
    if num < 0.000001:
        return "< 0.000001"
    if num < 1:
        return f"{num:.6f}"
    if num < 1000:
        return f"{num:.4f}"
    if num < 1000000:
        return f"{num / 1000:.2f}K"
    return f"{num / 1000000:.2f}M"


# ---- Parameter helpers ----

def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or isinstance(value, (list, tuple, dict)):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def extract_token_addresses(parameters: Optional[List[Any]], function_name: str) -> List[str]:
    """Token path (first address array) of a swap call."""
    if not parameters or "swap" not in function_name:
        return []
    for param in parameters:
        if isinstance(param, (list, tuple)) and param:
            first = param[0]
            if isinstance(first, str) and first.startswith("0x") and len(first) == 42:
                return list(param)
    return []


def extract_amounts(parameters: Optional[List[Any]], function_name: str) -> Dict[str, int]:
    """
    Pick amount arguments by naming convention.
    swapExact*: amount_in, amount_min. swapTokensForExact*: amount_out, amount_in (max).
    transfer*/approve: amount_in is the second argument.
    """
    amounts: Dict[str, int] = {}
    if not parameters:
        return amounts

    first = _as_int(parameters[0])
    second = _as_int(parameters[1]) if len(parameters) > 1 else None

    if "swapExact" in function_name:
        if first:
            amounts["amount_in"] = first
        if second:
            amounts["amount_min"] = second
    elif "swapTokensForExact" in function_name:
        if first:
            amounts["amount_out"] = first
        if second:
            amounts["amount_in"] = second
    elif "transfer" in function_name or "approve" in function_name:
        if second:
            amounts["amount_in"] = second
    return amounts


class IntentExplainer:
    """Kind-specific explanation rules."""

    def explain(self, decoded: DecodedTransaction) -> IntentAnalysis:
        handlers = {
            TransactionKind.TRANSFER: self._explain_transfer,
            TransactionKind.SWAP: self._explain_swap,
            TransactionKind.APPROVAL: self._explain_approval,
            TransactionKind.LIQUIDITY: self._explain_liquidity,
        }
        handler = handlers.get(decoded.kind, self._explain_unknown)
        return handler(decoded)

    def _explain_transfer(self, decoded: DecodedTransaction) -> IntentAnalysis:
        function_name = decoded.function_name
        parameters = decoded.parameters

        # Native ETH transfer
        if not function_name:
            eth_amount = format_ether(decoded.value)
            return IntentAnalysis(
                intent=f"Send {eth_amount} ETH to {short_address(decoded.to)}",
                estimated_outcome=f"{eth_amount} ETH will be transferred from your wallet",
                confidence=Confidence.HIGH,
                details=[
                    f"Recipient: {decoded.to}",
                    f"Amount: {eth_amount} ETH",
                    "This is a simple ETH transfer",
                ],
            )

        if function_name == "transfer(address,uint256)" and parameters and len(parameters) >= 2:
            return IntentAnalysis(
                intent=f"Send tokens to {short_address(parameters[0])}",
                estimated_outcome="Tokens will be transferred from your wallet",
                confidence=Confidence.HIGH,
                details=[
                    f"Token contract: {identify_contract(decoded.to)}",
                    f"Recipient: {parameters[0]}",
                    f"Amount: {format_token_amount(parameters[1])} tokens",
                    "This transfers tokens you own to another address",
                ],
            )

        if function_name == "transferFrom(address,address,uint256)" and parameters and len(parameters) >= 3:
            return IntentAnalysis(
                intent=(
                    f"Transfer tokens from {short_address(parameters[0])} "
                    f"to {short_address(parameters[1])}"
                ),
                estimated_outcome="Tokens will be moved between addresses (requires prior approval)",
                confidence=Confidence.MEDIUM,
                details=[
                    f"From: {parameters[0]}",
                    f"To: {parameters[1]}",
                    f"Amount: {format_token_amount(parameters[2])} tokens",
                    "This moves tokens between addresses (typically used by contracts)",
                ],
            )

        return self._explain_unknown(decoded)

    def _explain_swap(self, decoded: DecodedTransaction) -> IntentAnalysis:
        function_name = decoded.function_name
        parameters = decoded.parameters
        if not function_name or not parameters:
            return self._explain_unknown(decoded)

        amounts = extract_amounts(parameters, function_name)
        token_path = extract_token_addresses(parameters, function_name)
        dex_name = identify_dex(decoded.to)

        if "swapExactTokensForTokens" in function_name:
            amount_in = format_token_amount(amounts["amount_in"]) if "amount_in" in amounts else "unknown"
            min_out = format_token_amount(amounts["amount_min"]) if "amount_min" in amounts else "unknown"
            return IntentAnalysis(
                intent=f"Swap {amount_in} tokens for other tokens on {dex_name}",
                estimated_outcome=f"You will receive at least {min_out} tokens",
                confidence=Confidence.HIGH,
                details=[
                    f"DEX: {dex_name}",
                    f"Input amount: {amount_in} tokens",
                    f"Minimum output: {min_out} tokens",
                    f"Token path: {len(token_path)} tokens",
                    "You are trading one token for another",
                ],
            )

        if "swapExactETHForTokens" in function_name:
            # The ETH leg is the attached value; the first argument is amountOutMin
            eth_amount = format_ether(decoded.value)
            min_tokens = format_token_amount(parameters[0]) if _as_int(parameters[0]) else "unknown"
            return IntentAnalysis(
                intent=f"Swap {eth_amount} ETH for tokens on {dex_name}",
                estimated_outcome=f"You will receive at least {min_tokens} tokens",
                confidence=Confidence.HIGH,
                details=[
                    f"DEX: {dex_name}",
                    f"ETH amount: {eth_amount}",
                    f"Minimum tokens: {min_tokens}",
                    "You are buying tokens with ETH",
                ],
            )

        if "swapExactTokensForETH" in function_name:
            token_amount = format_token_amount(amounts["amount_in"]) if "amount_in" in amounts else "unknown"
            min_eth = format_ether(amounts["amount_min"]) if "amount_min" in amounts else "unknown"
            return IntentAnalysis(
                intent=f"Swap {token_amount} tokens for ETH on {dex_name}",
                estimated_outcome=f"You will receive at least {min_eth} ETH",
                confidence=Confidence.HIGH,
                details=[
                    f"DEX: {dex_name}",
                    f"Token amount: {token_amount}",
                    f"Minimum ETH: {min_eth}",
                    "You are selling tokens for ETH",
                ],
            )

        return IntentAnalysis(
            intent=f"Perform token swap on {dex_name}",
            estimated_outcome="Tokens will be exchanged according to current market rates",
            confidence=Confidence.MEDIUM,
            details=[
                f"DEX: {dex_name}",
                f"Function: {function_name}",
                "This is a token swap transaction",
            ],
        )

    def _explain_approval(self, decoded: DecodedTransaction) -> IntentAnalysis:
        parameters = decoded.parameters
        if not parameters or len(parameters) < 2:
            return self._explain_unknown(decoded)

        amount = _as_int(parameters[1])
        if amount is None:
            return self._explain_unknown(decoded)

        spender = parameters[0]
        spender_name = identify_contract(spender)
        is_unlimited = amount >= UINT256_MAX
        amount_text = "unlimited" if is_unlimited else format_token_amount(amount)

        return IntentAnalysis(
            intent=f"Allow {spender_name} to spend {amount_text} of your tokens",
            estimated_outcome=f"{spender_name} will be able to transfer your tokens on your behalf",
            confidence=Confidence.HIGH,
            details=[
                f"Token contract: {identify_contract(decoded.to)}",
                f"Spender: {spender_name} ({spender})",
                f"Amount: {amount_text} tokens",
                UNLIMITED_WARNING if is_unlimited else "This grants limited spending permission",
                "You can revoke this permission later by setting approval to 0",
            ],
        )

    def _explain_liquidity(self, decoded: DecodedTransaction) -> IntentAnalysis:
        function_name = decoded.function_name
        if not function_name or not decoded.parameters:
            return self._explain_unknown(decoded)

        dex_name = identify_dex(decoded.to)

        if "addLiquidity" in function_name:
            if "ETH" in function_name:
                intent = f"Add liquidity to ETH/Token pool on {dex_name}"
                outcome = "You will provide ETH and tokens to earn trading fees"
            else:
                intent = f"Add liquidity to token pair on {dex_name}"
                outcome = "You will provide two tokens to earn trading fees"
            return IntentAnalysis(
                intent=intent,
                estimated_outcome=outcome,
                confidence=Confidence.HIGH,
                details=[
                    f"DEX: {dex_name}",
                    "You are becoming a liquidity provider",
                    "You will receive LP tokens representing your share",
                    "You will earn fees from trades in this pool",
                ],
            )

        if "removeLiquidity" in function_name:
            pool = "ETH/Token" if "ETH" in function_name else "token pair"
            return IntentAnalysis(
                intent=f"Remove liquidity from {pool} pool on {dex_name}",
                estimated_outcome="You will receive back your tokens plus earned fees",
                confidence=Confidence.HIGH,
                details=[
                    f"DEX: {dex_name}",
                    "You are withdrawing your liquidity",
                    "Your LP tokens will be burned",
                    "You will receive the underlying tokens",
                ],
            )

        return self._explain_unknown(decoded)

    def _explain_unknown(self, decoded: DecodedTransaction) -> IntentAnalysis:
        contract_name = identify_contract(decoded.to)
        has_value = str(decoded.value) != "0"
        has_data = has_call_data(decoded.data)

        intent = "Unknown transaction type"
        outcome = "The outcome of this transaction is unclear"
        details: List[str] = []

        if has_value:
            eth_amount = format_ether(decoded.value)
            intent = f"Send {eth_amount} ETH to {contract_name}"
            outcome = f"{eth_amount} ETH will be sent to {contract_name}"
            details.append(f"ETH sent: {eth_amount}" if has_data else f"Amount: {eth_amount} ETH")
        elif has_data:
            outcome = "This will execute a function on the contract"

        if has_data and decoded.selector:
            details.append(f"Function signature: 0x{decoded.selector}")

        details.extend([
            f"Contract: {contract_name} ({decoded.to})",
            CAUTION_DETAIL,
        ])

        return IntentAnalysis(
            intent=intent,
            estimated_outcome=outcome,
            confidence=Confidence.LOW,
            details=details,
        )


_default_explainer = IntentExplainer()


def explain(decoded: DecodedTransaction) -> IntentAnalysis:
    return _default_explainer.explain(decoded)


def generate_explanation(decoded: DecodedTransaction) -> str:
    """Render an IntentAnalysis as a block of text."""
    analysis = explain(decoded)

    explanation = f"{analysis.intent}\n\n"
    explanation += f"Expected outcome: {analysis.estimated_outcome}\n\n"

    if analysis.details:
        explanation += "Details:\n"
        for detail in analysis.details:
            explanation += f"• {detail}\n"

    if analysis.confidence == Confidence.LOW:
        explanation += "\nThis transaction type is not fully recognized. Please verify the details carefully."

    return explanation
