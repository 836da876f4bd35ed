"""Solana chain access."""

from .client import (
    SolanaClient,
    WalletInfo,
    TokenBalance,
    TokenPrice,
    TransactionInfo,
    NetworkStatus,
    format_wallet_info,
    format_transactions,
    format_prices,
    format_network_status,
)

__all__ = [
    "SolanaClient",
    "WalletInfo",
    "TokenBalance",
    "TokenPrice",
    "TransactionInfo",
    "NetworkStatus",
    "format_wallet_info",
    "format_transactions",
    "format_prices",
    "format_network_status"
]
