"""
Tests for the intent explainer and its formatting helpers.
"""
from __future__ import annotations

import re

import pytest

from txguard.core.enums import Confidence, TransactionKind
from txguard.core.models import DecodedTransaction
from txguard.services.intent_explainer import (
    CAUTION_DETAIL,
    UNLIMITED_WARNING,
    explain,
    extract_amounts,
    extract_token_addresses,
    format_ether,
    format_token_amount,
    format_units,
    generate_explanation,
)
from txguard.services.transaction_decoder import decode

from conftest import EOA, ROUTER, SPENDER, TOKEN, UINT256_MAX, UNKNOWN_CONTRACT, WETH, ONE_ETH, calldata, raw

# Long hex runs (raw selectors, calldata) must never reach intent/outcome text
RAW_HEX = re.compile(r"0x[0-9a-fA-F]{8,}")


def _explain(to=EOA, value=0, data="0x"):
    return explain(decode(raw(to=to, value=value, data=data)))


def _assert_plain_language(analysis):
    for text in (analysis.intent, analysis.estimated_outcome):
        assert text
        assert not RAW_HEX.search(text), text


def test_native_transfer():
    analysis = _explain(to=EOA, value="0x16345785d8a0000")
    assert analysis.intent == "Send 0.1 ETH to 0x742d...f44e"
    assert analysis.estimated_outcome == "0.1 ETH will be transferred from your wallet"
    assert analysis.confidence == Confidence.HIGH
    assert "This is a simple ETH transfer" in analysis.details
    _assert_plain_language(analysis)


def test_native_transfer_of_zero():
    analysis = _explain(to=EOA, value=0)
    assert analysis.intent == "Send 0 ETH to 0x742d...f44e"


def test_token_transfer():
    analysis = _explain(to=TOKEN, data=calldata("transfer(address,uint256)", SPENDER, 5 * ONE_ETH))
    assert analysis.intent == "Send tokens to 0x1111...1111"
    assert analysis.confidence == Confidence.HIGH
    assert "Token contract: DAI" in analysis.details
    assert "Amount: 5.0000 tokens" in analysis.details


def test_transfer_from_is_medium_confidence():
    data = calldata("transferFrom(address,address,uint256)", EOA, SPENDER, ONE_ETH)
    analysis = _explain(to=TOKEN, data=data)
    assert analysis.intent == "Transfer tokens from 0x742d...f44e to 0x1111...1111"
    assert analysis.confidence == Confidence.MEDIUM


def test_unlimited_approval():
    analysis = _explain(to=TOKEN, data=calldata("approve(address,uint256)", ROUTER, UINT256_MAX))
    assert "unlimited" in analysis.intent
    assert analysis.intent == "Allow Uniswap V2 Router to spend unlimited of your tokens"
    assert UNLIMITED_WARNING in analysis.details
    assert any(detail.startswith("WARNING") for detail in analysis.details)
    assert analysis.confidence == Confidence.HIGH


def test_limited_approval():
    analysis = _explain(to=TOKEN, data=calldata("approve(address,uint256)", SPENDER, 100 * ONE_ETH))
    assert analysis.intent == "Allow 0x1111...1111 to spend 100.0000 of your tokens"
    assert "This grants limited spending permission" in analysis.details
    assert UNLIMITED_WARNING not in analysis.details


def test_swap_exact_tokens_for_tokens():
    data = calldata(
        "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)",
        2 * ONE_ETH, ONE_ETH, [WETH, TOKEN], EOA, 1700000000,
    )
    analysis = _explain(to=ROUTER, data=data)
    assert analysis.intent == "Swap 2.0000 tokens for other tokens on Uniswap V2"
    assert analysis.estimated_outcome == "You will receive at least 1.0000 tokens"
    assert "Token path: 2 tokens" in analysis.details


def test_swap_exact_eth_for_tokens_uses_attached_value():
    data = calldata(
        "swapExactETHForTokens(uint256,address[],address,uint256)",
        500 * ONE_ETH, [WETH, TOKEN], EOA, 1700000000,
    )
    analysis = _explain(to=ROUTER, value=ONE_ETH // 2, data=data)
    assert analysis.intent == "Swap 0.5 ETH for tokens on Uniswap V2"
    assert analysis.estimated_outcome == "You will receive at least 500.0000 tokens"


def test_swap_exact_tokens_for_eth():
    data = calldata(
        "swapExactTokensForETH(uint256,uint256,address[],address,uint256)",
        10 * ONE_ETH, ONE_ETH // 10, [TOKEN, WETH], EOA, 1700000000,
    )
    analysis = _explain(to=ROUTER, data=data)
    assert analysis.intent == "Swap 10.0000 tokens for ETH on Uniswap V2"
    assert analysis.estimated_outcome == "You will receive at least 0.1 ETH"


def test_other_swaps_get_generic_explanation():
    data = calldata(
        "swapETHForExactTokens(uint256,address[],address,uint256)",
        ONE_ETH, [WETH, TOKEN], EOA, 1700000000,
    )
    analysis = _explain(to=UNKNOWN_CONTRACT, value=ONE_ETH, data=data)
    assert analysis.intent == "Perform token swap on Unknown DEX"
    assert analysis.confidence == Confidence.MEDIUM


def test_add_liquidity_eth():
    data = calldata(
        "addLiquidityETH(address,uint256,uint256,uint256,address,uint256)",
        TOKEN, ONE_ETH, 1, 1, EOA, 1700000000,
    )
    analysis = _explain(to=ROUTER, value=ONE_ETH, data=data)
    assert analysis.intent == "Add liquidity to ETH/Token pool on Uniswap V2"


def test_remove_liquidity_pair():
    data = calldata(
        "removeLiquidity(address,address,uint256,uint256,uint256,address,uint256)",
        TOKEN, WETH, ONE_ETH, 1, 1, EOA, 1700000000,
    )
    analysis = _explain(to=ROUTER, data=data)
    assert analysis.intent == "Remove liquidity from token pair pool on Uniswap V2"


def test_unknown_call_with_value():
    analysis = _explain(to=UNKNOWN_CONTRACT, value=ONE_ETH, data="0x12345678")
    assert analysis.intent == "Send 1.0 ETH to 0x2222...2222"
    assert analysis.intent != "Unknown transaction type"
    assert analysis.confidence == Confidence.LOW
    assert "Function signature: 0x12345678" in analysis.details
    assert analysis.details[-1] == CAUTION_DETAIL
    _assert_plain_language(analysis)


def test_unknown_call_without_value():
    analysis = _explain(to=UNKNOWN_CONTRACT, data="0xdeadbeef")
    assert analysis.intent == "Unknown transaction type"
    assert analysis.estimated_outcome == "This will execute a function on the contract"


def test_known_function_with_undecodable_arguments_falls_back_to_unknown():
    analysis = _explain(to=TOKEN, data="0x095ea7b3" + "00" * 10)
    assert analysis.confidence == Confidence.LOW
    assert analysis.intent == "Unknown transaction type"


def test_undecodable_arguments_with_value_still_report_the_amount():
    analysis = _explain(to=TOKEN, value=ONE_ETH // 10, data="0x095ea7b3" + "00" * 10)
    assert analysis.confidence == Confidence.LOW
    assert analysis.intent == "Send 0.1 ETH to DAI"


    assert analysis.intent == "Unknown transaction type"


@pytest.mark.parametrize("kind", list(TransactionKind))
def test_every_kind_is_explained_without_parameters(kind):
    """Explaining never fails, whatever the decoded shape."""
    decoded = DecodedTransaction(to=EOA, value="0", data="0xabcdef12", kind=kind, function_name=None)
    analysis = explain(decoded)
    assert analysis.intent
    assert analysis.estimated_outcome


def test_generate_explanation_for_low_confidence():
    text = generate_explanation(decode(raw(to=UNKNOWN_CONTRACT, data="0x12345678")))
    assert text.startswith("Unknown transaction type\n\n")
    assert "Expected outcome:" in text
    assert "• " + CAUTION_DETAIL in text
    assert text.endswith("Please verify the details carefully.")


def test_format_units_and_ether():
    assert format_units(ONE_ETH) == "1.0"
    assert format_units(ONE_ETH // 10) == "0.1"
    assert format_units(1) == "0.000000000000000001"
    assert format_ether("0") == "0"
    assert format_ether(str(3 * ONE_ETH // 2)) == "1.5"
    assert format_units("not a number") == "not a number"


@pytest.mark.parametrize("amount, expected", [
    (0, "0"),
    (10**11, "< 0.000001"),
    (ONE_ETH // 4, "0.250000"),
    (12 * ONE_ETH, "12.0000"),
    (1500 * ONE_ETH, "1.50K"),
    (1_000_000 * ONE_ETH, "1.00M"),
    (2_500_000 * ONE_ETH, "250000..."),
    (UINT256_MAX, "115792..."),
    ("garbage", "garbage"),
])
def test_format_token_amount(amount, expected):
    assert format_token_amount(amount) == expected


def test_extract_helpers():
    params = [10, 5, [TOKEN, WETH], EOA, 0]
    name = "swapExactTokensForTokens(uint256,uint256,address[],address,uint256)"
    assert extract_token_addresses(params, name) == [TOKEN, WETH]
    assert extract_token_addresses(params, "transfer(address,uint256)") == []
    assert extract_amounts(params, name) == {"amount_in": 10, "amount_min": 5}
    assert extract_amounts([SPENDER, 7], "approve(address,uint256)") == {"amount_in": 7}
    assert extract_amounts([3, 9], "swapTokensForExactETH") == {"amount_out": 3, "amount_in": 9}
    assert extract_amounts(None, name) == {}
