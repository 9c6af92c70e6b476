"""Lessons 1-4: connecting to a node, reading chain state, connecting a wallet."""

from __future__ import annotations

from academy.actions import LessonAction, LessonLogger, register_action
from academy.backends import Backend
from academy.errors import MissingConfigurationError
from academy.models import BackendKind, LogKind


@register_action("connections")
class ConnectionsLesson(LessonAction):
    """Report which of the three connection styles are available right now.

    The local wallet line describes the backend picked for this run, not
    whether a wallet is configured at all. A custom RPC URL takes
    precedence over the wallet in backend selection, so with both set the
    run goes through the RPC URL and the wallet line is left out.
    """

    template = '''from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

# 1. Standard node connection (via RPC URL)
w3 = Web3(Web3.HTTPProvider("$endpoint"))

# 2. Async connection for asyncio applications
aw3 = AsyncWeb3(AsyncHTTPProvider("$endpoint"))

# 3. Local wallet connection (e.g. Frame on port 1248)
wallet_w3 = AsyncWeb3(AsyncHTTPProvider("http://127.0.0.1:1248"))'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        log("Detecting connection methods...", LogKind.INFO)
        if not endpoint:
            log("Warning: No RPC URL provided. Use a provider like Alchemy or Infura.",
                LogKind.ERROR)
        else:
            log(f"HTTPProvider: Configured for {endpoint[:20]}...", LogKind.OUTPUT)
        if backend.kind == BackendKind.INJECTED_WALLET:
            log("Local Wallet: connected and ready.", LogKind.SUCCESS)
        log("Fallback Provider: Initialized with public nodes.", LogKind.OUTPUT)


@register_action("provider")
class ProviderLesson(LessonAction):
    """Fetch the latest block number through the custom endpoint."""

    template = '''from web3 import AsyncHTTPProvider, AsyncWeb3

# Create a provider instance
w3 = AsyncWeb3(AsyncHTTPProvider("$endpoint"))

# Fetch the latest block number from the chain
block = await w3.eth.block_number

# Result is a plain Python int
print("Current Block:", block)'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        if not endpoint:
            raise MissingConfigurationError("custom_endpoint", "Please enter an RPC URL first.")
        log("Querying network for latest block...", LogKind.INFO)
        block = await backend.query_block_height()
        log(f"Block Number: {block}", LogKind.OUTPUT)
        return block


@register_action("wallet-connect")
class WalletConnectLesson(LessonAction):
    """Ask the connected wallet for its accounts and chain."""

    template = '''from web3 import AsyncHTTPProvider, AsyncWeb3

# 1. Connect to the wallet's local RPC endpoint
w3 = AsyncWeb3(AsyncHTTPProvider("http://127.0.0.1:1248"))

# 2. Request account access (the wallet shows an approval prompt)
response = await w3.provider.make_request("eth_requestAccounts", [])
accounts = response["result"]

# 3. Ask which chain the wallet is on
chain_id = await w3.eth.chain_id
print("Account:", accounts[0])'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        log("Requesting wallet accounts...", LogKind.INFO)
        accounts = await backend.request_account_access()
        if not accounts:
            raise RuntimeError("No accounts returned from the wallet.")
        log(f"Connected Account: {accounts[0]}", LogKind.SUCCESS)
        identity = await backend.query_network_identity()
        log(f"Connected to Chain ID: {identity.chain_id}", LogKind.OUTPUT)
        return accounts


@register_action("balance")
class BalanceLesson(LessonAction):
    """Read the raw wei balance of the focus address."""

    template = '''from web3 import Web3

# Fetch balance for a specific address (checksummed first)
address = Web3.to_checksum_address("$address")
balance = await w3.eth.get_balance(address)

# Returns an int in wei (Python ints never overflow)
print(balance)'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        if not address:
            raise MissingConfigurationError("focus_address", "Please enter a Target Address first.")
        log(f"Reading balance for {address[:10]}...", LogKind.INFO)
        balance = await backend.query_balance(address)
        log(f"Raw Balance (Wei): {balance}", LogKind.OUTPUT)
        return balance
