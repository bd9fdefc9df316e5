import asyncio
import itertools
import logging
from collections.abc import Iterable, Iterator

import aiohttp

from core.environment.config import Settings
from pnl.codec import DEFAULT_DECIMALS, encode_balance_call, parse_raw_amount, scale_amount
from pnl.entities import BalanceRecord, QueryTarget
from pnl.schemas import ChainConfig


def iter_query_targets(wallets: Iterable[str], tokens: Iterable[str]) -> Iterator[QueryTarget]:
    """Wallets x tokens, wallets outer and tokens inner."""
    for wallet, token in itertools.product(wallets, list(tokens)):
        yield QueryTarget(wallet=wallet, token=token)


class ChainQueryClient:
    """
    Client issuing ``balanceOf`` eth_calls against a JSON-RPC endpoint.

    Every call is single-attempt; transport and protocol failures are
    logged and reported as no value.

    Parameters
    ----------
    settings : Settings
        Application settings
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, settings: Settings, logger: logging.Logger):
        self.settings = settings
        self.logger = logger

    def build_request(self, token: str, wallet: str) -> dict:
        """
        Build the JSON-RPC request body.

        Parameters
        ----------
        token : str
            Token contract address (``to`` of the call)
        wallet : str
            Wallet address whose balance is read

        Returns
        -------
        dict
            JSON-RPC 2.0 eth_call payload
        """
        return {
            "jsonrpc": "2.0",
            "id": self.settings.rpc_request_id,
            "method": "eth_call",
            "params": [
                {"to": token, "data": encode_balance_call(wallet)},
                "latest"
            ]
        }

    def open_session(self) -> aiohttp.ClientSession:
        """
        Open an HTTP session for one chain (or one call).

        Returns
        -------
        aiohttp.ClientSession
            Session with the configured timeout, aiohttp default otherwise
        """
        if self.settings.rpc_timeout is None:
            return aiohttp.ClientSession()
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.settings.rpc_timeout)
        )

    async def query(
        self,
        endpoint: str,
        token: str,
        wallet: str,
        decimals: int = DEFAULT_DECIMALS,
        session: aiohttp.ClientSession | None = None
    ) -> float | None:
        """
        Read one wallet's balance of one token.

        Parameters
        ----------
        endpoint : str
            JSON-RPC endpoint URL
        token : str
            Token contract address
        wallet : str
            Wallet address
        decimals : int
            Token decimals used to scale the raw amount
        session : aiohttp.ClientSession | None
            Session to reuse; a one-off session is opened when omitted

        Returns
        -------
        float | None
            Balance in token units, or None when the call produced no result
        """
        if session is None:
            async with self.open_session() as own_session:
                return await self.query(endpoint, token, wallet, decimals, own_session)

        payload = self.build_request(token, wallet)

        try:
            async with session.post(endpoint, json=payload) as response:
                if not 200 <= response.status < 300:
                    self.logger.warning(
                        f"eth_call to {endpoint} returned HTTP {response.status} "
                        f"for wallet {wallet}, token {token}"
                    )
                    return None
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            self.logger.warning(
                f"eth_call to {endpoint} failed for wallet {wallet}, token {token}: {e!r}"
            )
            return None

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, str):
            error = data.get("error") if isinstance(data, dict) else None
            self.logger.warning(
                f"eth_call to {endpoint} gave no result for wallet {wallet}, "
                f"token {token}: {error or data!r}"
            )
            return None

        raw_amount = parse_raw_amount(result)
        if raw_amount is None:
            self.logger.warning(
                f"Unparseable eth_call result {result!r} for wallet {wallet}, "
                f"token {token} on {endpoint}; counting as 0"
            )
        return scale_amount(raw_amount, decimals)


class BalanceFanOut:
    """
    Runs balance queries for every chain concurrently.

    Chains run as independent tasks; within a chain the wallet x token
    product is queried sequentially over one session.

    Parameters
    ----------
    client : ChainQueryClient
        Client used for every call
    settings : Settings
        Application settings
    logger : logging.Logger
        Logger instance
    """

    def __init__(self, client: ChainQueryClient, settings: Settings, logger: logging.Logger):
        self.client = client
        self.settings = settings
        self.logger = logger

    async def run(
        self,
        chains: list[ChainConfig],
        wallets: list[str],
        tokens: list[str],
        decimals: dict[str, int] | None = None
    ) -> list[BalanceRecord]:
        """
        Query every (chain, wallet, token) triple.

        Parameters
        ----------
        chains : list[ChainConfig]
            Chains to query
        wallets : list[str]
            Wallet addresses
        tokens : list[str]
            Token contract addresses
        decimals : dict[str, int] | None
            Decimals override keyed by lowercased token address

        Returns
        -------
        list[BalanceRecord]
            One record per answered call, in completion order across chains
        """
        targets = list(iter_query_targets(wallets, tokens))
        records: list[BalanceRecord] = []

        self.logger.info(
            f"Querying {len(targets)} wallet/token pairs on {len(chains)} chains"
        )

        results = await asyncio.gather(
            *(self._run_chain(chain, targets, decimals or {}, records) for chain in chains),
            return_exceptions=True
        )

        for chain, result in zip(chains, results):
            if isinstance(result, BaseException):
                self.logger.error(f"Chain {chain.name} aborted: {result!r}")

        self.logger.info(
            f"Collected {len(records)} balances out of {len(targets) * len(chains)} calls"
        )
        return records

    async def _run_chain(
        self,
        chain: ChainConfig,
        targets: list[QueryTarget],
        decimals: dict[str, int],
        records: list[BalanceRecord]
    ) -> int:
        """
        Walk all targets on one chain, appending answered calls to records.

        Returns
        -------
        int
            Number of records this chain produced
        """
        produced = 0
        async with self.client.open_session() as session:
            for target in targets:
                quantity = await self.client.query(
                    chain.rpc,
                    target.token,
                    target.wallet,
                    decimals.get(target.token.lower(), self.settings.default_decimals),
                    session
                )
                if quantity is None:
                    continue
                records.append(
                    BalanceRecord(
                        chain=chain.name,
                        wallet=target.wallet,
                        token=target.token,
                        quantity=quantity
                    )
                )
                produced += 1

        self.logger.info(f"Chain {chain.name}: {produced}/{len(targets)} balances read")
        return produced
