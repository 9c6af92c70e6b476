"""Lessons 6 and 10: signing with a throwaway key, hashing and checksums."""

from __future__ import annotations

from eth_account import Account
from eth_account.messages import encode_defunct
from web3 import Web3

from academy.actions import LessonAction, LessonLogger, register_action
from academy.backends import Backend
from academy.models import BackendKind, LogKind

SIGNED_MESSAGE = "web3.py Learn"
HASHED_TEXT = "web3.py v7"
DEMO_ADDRESS = "0xd8da6bf26964af9d7eed9e03e53415d37aa96045"


@register_action("signer")
class SignerLesson(LessonAction):
    """Sign a message with a freshly generated account (and the wallet, if connected)."""

    template = '''from eth_account import Account
from eth_account.messages import encode_defunct

# 1. Create an account object from a private key
account = Account.from_key(PRIVATE_KEY)

# 2. Sign a plain text message
signed = account.sign_message(encode_defunct(text="Hello World"))
print("Signature:", signed.signature.hex())'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        log("Generating disposable educational account...", LogKind.INFO)
        account = Account.create()
        log(f"Address: {account.address}", LogKind.OUTPUT)

        log(f"Signing message: '{SIGNED_MESSAGE}'...", LogKind.INFO)
        signed = account.sign_message(encode_defunct(text=SIGNED_MESSAGE))
        signature = Web3.to_hex(signed.signature)
        log(f"Signature: {signature[:30]}...", LogKind.OUTPUT)

        if backend.kind == BackendKind.INJECTED_WALLET:
            log("Asking the connected wallet to sign the same message...", LogKind.INFO)
            wallet_signature = await backend.sign_message(SIGNED_MESSAGE)
            log(f"Wallet Signature: {wallet_signature[:30]}...", LogKind.OUTPUT)

        return signature


@register_action("utils")
class UtilsLesson(LessonAction):
    """Keccak-256 of a fixed string and the checksum of a well-known address."""

    template = '''from web3 import Web3

# 1. Generate the Keccak-256 hash of a string
digest = Web3.keccak(text="web3.py")

# 2. Validate and checksum an Ethereum address
checksum = Web3.to_checksum_address("0x...")'''

    async def execute(self, backend: Backend, endpoint: str, log: LessonLogger, address: str):
        digest = Web3.to_hex(Web3.keccak(text=HASHED_TEXT))
        log(f"Hash of '{HASHED_TEXT}': {digest}", LogKind.OUTPUT)
        checksum = Web3.to_checksum_address(DEMO_ADDRESS)
        log(f"Address Checksum: {checksum}", LogKind.OUTPUT)
        return {"hash": digest, "checksum": checksum}
