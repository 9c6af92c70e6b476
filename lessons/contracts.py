"""Lessons 7-9: reading from, writing to and listening to a token contract."""

from __future__ import annotations

from academy.actions import LessonAction, LessonLogger, register_action
from academy.backends import Backend
from academy.models import LogKind

# USDC on Ethereum mainnet
USDC_ADDRESS = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eb48"


def _view(name: str, output_type: str) -> dict:
    return {
        "name": name,
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": output_type}],
    }


MINI_ERC20_ABI = [
    _view("name", "string"),
    _view("symbol", "string"),
    _view("decimals", "uint8"),
    {
        "name": "balanceOf",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "owner", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "transfer",
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "amount", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "name": "Transfer",
        "type": "event",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
]


@register_action("read-contract")
class ReadContractLesson(LessonAction):
    template = '''# 1. Define the ABI entries you need
abi = [{"name": "name", "type": "function", "stateMutability": "view",
        "inputs": [], "outputs": [{"name": "", "type": "string"}]}]

# 2. Initialize the contract instance
contract = w3.eth.contract(address=USDC_ADDR, abi=abi)

# 3. Call a read-only (view) function
name = await contract.functions.name().call()'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        log("Connecting to USDC Smart Contract...", LogKind.INFO)
        name = await backend.read_contract_field(USDC_ADDRESS, MINI_ERC20_ABI, "name")
        symbol = await backend.read_contract_field(USDC_ADDRESS, MINI_ERC20_ABI, "symbol")
        log(f"Contract: {name} ({symbol})", LogKind.OUTPUT)
        return {"name": name, "symbol": symbol}


@register_action("write-contract")
class WriteContractLesson(LessonAction):
    """Walk through the send-then-wait pattern without spending gas."""

    template = '''# 1. Send a state-changing call with the sender as "from"
tx_hash = await contract.functions.transfer(to, amount).transact({"from": sender})

# 2. Wait for the transaction to be mined
receipt = await w3.eth.wait_for_transaction_receipt(tx_hash)
print("Status:", receipt["status"])'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        log("Pattern: contract.functions.method(args).transact({'from': sender})", LogKind.INFO)
        log("Step 1: Send Transaction (User must approve in wallet)", LogKind.OUTPUT)
        log("Step 2: Await Mining (wait_for_transaction_receipt)", LogKind.OUTPUT)
        log("Simulation complete.", LogKind.SUCCESS)


@register_action("events")
class EventsLesson(LessonAction):
    template = '''# Poll for new 'Transfer' events with a log filter
event_filter = await contract.events.Transfer.create_filter(from_block="latest")

while True:
    for event in await event_filter.get_new_entries():
        print("New Transfer Found!", event["args"]["value"])
    await asyncio.sleep(2)'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        log("Initializing Event Filter...", LogKind.INFO)
        log("Monitoring 'Transfer' events on-chain...", LogKind.OUTPUT)
        log("Logic: contract.events.Transfer.create_filter(from_block='latest')", LogKind.OUTPUT)
        log("Listener Active (Simulation).", LogKind.SUCCESS)
