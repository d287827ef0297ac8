"""Generic call machinery shared by the typed method mixins."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

from bitcoind_client.rpc.dispatch import Dispatcher
from bitcoind_client.types.psbt import validate_psbt
from bitcoind_client.utils.exceptions import ParamError


def trim_params(params: Sequence[Any]) -> list[Any]:
    """Drop trailing ``None`` positional params so the node applies its defaults."""
    out = list(params)
    while out and out[-1] is None:
        out.pop()
    return out


def wallet_path(wallet: str | None) -> str:
    if wallet is None:
        return "/"
    return "/wallet/" + quote(wallet, safe="")


class RpcMethods:
    """
    Base for the method mixins.

    Subclasses provide ``_dispatcher`` and ``wallet``; every typed method goes
    through ``_call`` so routing and decoding stay in one place.
    """

    _dispatcher: Dispatcher
    wallet: str | None = None

    def _wallet_path(self) -> str:
        return wallet_path(self.wallet)

    async def _call(
        self,
        method: str,
        params: Sequence[Any] = (),
        result_type: Any = Any,
        wallet_scoped: bool = False,
    ) -> Any:
        path = self._wallet_path() if wallet_scoped else "/"
        return await self._dispatcher.call(method, trim_params(params), result_type, path=path)

    @staticmethod
    def _check_psbt(psbt: str, method: str) -> str:
        if not isinstance(psbt, str):
            raise ParamError("psbt must be a base64 string", method=method)
        try:
            return validate_psbt(psbt)
        except ValueError as exc:
            raise ParamError(str(exc), method=method) from exc
