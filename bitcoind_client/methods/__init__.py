"""Typed method mixins grouped by concern."""

from .base import RpcMethods, trim_params, wallet_path
from .broadcaster import BroadcasterMethods
from .reader import ReaderMethods
from .signer import SignerMethods
from .wallet import WalletMethods

__all__ = [
    "RpcMethods",
    "ReaderMethods",
    "BroadcasterMethods",
    "WalletMethods",
    "SignerMethods",
    "trim_params",
    "wallet_path",
]
