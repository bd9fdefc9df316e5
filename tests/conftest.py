import logging

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from core.environment.config import Settings


WALLET_A = "0x" + "A" * 39 + "1"
WALLET_B = "0x" + "c" * 39 + "3"
TOKEN_X = "0x" + "B" * 39 + "2"
TOKEN_Y = "0x" + "d" * 39 + "4"
TOKEN_Z = "0x" + "e" * 39 + "5"

MULTICALL = "0x5BA1e12693Dc8F9c48aAD8770482f4739bEeD696"

# nothing listens on port 1
UNREACHABLE_RPC = "http://127.0.0.1:1/"


class FakeRPCNode:
    """
    Minimal JSON-RPC node answering ``balanceOf`` eth_calls.

    Attributes
    ----------
    balances : dict[tuple[str, str], str]
        Hex result by (token, wallet), both lowercased and unprefixed wallet
    failing : set[tuple[str, str]]
        Pairs answered with a JSON-RPC error instead of a result
    status : int
        HTTP status for every reply
    body : str | None
        Raw body overriding the normal reply
    requests : list[dict]
        Every JSON payload received, in arrival order
    """

    def __init__(self):
        self.balances: dict[tuple[str, str], str] = {}
        self.failing: set[tuple[str, str]] = set()
        self.status = 200
        self.body: str | None = None
        self.requests: list[dict] = []
        self.url = ""

    @staticmethod
    def key(token: str, wallet: str) -> tuple[str, str]:
        return token.lower(), wallet.lower()[-40:]

    def set_balance(self, token: str, wallet: str, result: str) -> None:
        self.balances[self.key(token, wallet)] = result

    def fail(self, token: str, wallet: str) -> None:
        self.failing.add(self.key(token, wallet))

    async def handle(self, request: web.Request) -> web.Response:
        payload = await request.json()
        self.requests.append(payload)

        if self.status != 200:
            return web.Response(status=self.status, text="unavailable")
        if self.body is not None:
            return web.Response(text=self.body, content_type="application/json")

        call = payload["params"][0]
        key = self.key(call["to"], call["data"])
        if key in self.failing:
            return web.json_response({
                "jsonrpc": "2.0",
                "id": payload["id"],
                "error": {"code": -32000, "message": "execution reverted"}
            })
        return web.json_response({
            "jsonrpc": "2.0",
            "id": payload["id"],
            "result": self.balances.get(key, "0x0")
        })


@pytest_asyncio.fixture
async def rpc_nodes():
    """
    Factory starting fake RPC nodes on local ports.

    Yields
    ------
    Callable[[], Awaitable[FakeRPCNode]]
        Coroutine function returning a started node
    """
    servers = []

    async def start() -> FakeRPCNode:
        node = FakeRPCNode()
        app = web.Application()
        app.router.add_post("/", node.handle)
        server = TestServer(app)
        await server.start_server()
        node.url = str(server.make_url("/"))
        servers.append(server)
        return node

    yield start

    for server in servers:
        await server.close()


@pytest_asyncio.fixture
async def rpc_node(rpc_nodes) -> FakeRPCNode:
    """Single started fake RPC node."""
    return await rpc_nodes()


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local env file."""
    return Settings(_env_file=None, rpc_timeout=5)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("erc20_pnl.tests")
