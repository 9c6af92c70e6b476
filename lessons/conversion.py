"""Lesson 5: converting between wei, gwei and ether."""

from __future__ import annotations

from academy.actions import LessonAction, LessonLogger, register_action
from academy.backends import Backend
from academy.models import LogKind
from academy.units import format_ether, format_gwei, parse_ether


@register_action("format")
class FormatLesson(LessonAction):
    """Format the focus address balance, or 1 ETH when no address is set."""

    template = '''from web3 import Web3

# 1. Wei int to ether (a Decimal, no precision lost)
eth = Web3.from_wei(wei_balance, "ether")

# 2. Ether string to wei int (1.0 ETH = 10**18 wei)
wei = Web3.to_wei("1.0", "ether")

# 3. Convert to specific units like gwei
gwei = Web3.from_wei(wei, "gwei")'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        if address:
            wei = await backend.query_balance(address)
        else:
            wei = parse_ether("1.0")

        eth = format_ether(wei)
        gwei = format_gwei(wei)
        log(f"Formatted: {eth} ETH", LogKind.OUTPUT)
        log(f"Converted: {gwei} gwei", LogKind.OUTPUT)
        log(f"Parsed: {wei} wei", LogKind.OUTPUT)
        return {"wei": wei, "ether": eth, "gwei": gwei}
