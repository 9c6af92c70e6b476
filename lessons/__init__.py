"""Concrete lesson actions.

Importing this module registers every action in the action registry.
"""

from pathlib import Path

from lessons.network import BalanceLesson, ConnectionsLesson, ProviderLesson, WalletConnectLesson
from lessons.conversion import FormatLesson
from lessons.signing import SignerLesson, UtilsLesson
from lessons.contracts import EventsLesson, ReadContractLesson, WriteContractLesson

CURRICULUM_PATH = Path(__file__).parent / "curriculum.json"
