# Config Module - Config Store
#
# Load / create / save of ~/.ditconfig with an encrypted Ethereum key

from .keys import (
    DEMO_ACCOUNT,
    DEMO_CURRENCY,
    LIVE_CURRENCY,
    EthereumKeypairProvider,
    KeyPair,
    KeypairProvider,
    StaticKeypairProvider,
)
from .models import ActiveVote, ConfigRecord, KeyMaterial, RepositoryEntry
from .prompt import GetpassPrompt, PasswordPrompt, StaticPasswordPrompt, read_new_password
from .store import ConfigStore

__all__ = [
    # Store
    "ConfigStore",
    # Records
    "ConfigRecord",
    "KeyMaterial",
    "RepositoryEntry",
    "ActiveVote",
    # Keys
    "KeyPair",
    "KeypairProvider",
    "EthereumKeypairProvider",
    "StaticKeypairProvider",
    "DEMO_ACCOUNT",
    "DEMO_CURRENCY",
    "LIVE_CURRENCY",
    # Prompts
    "PasswordPrompt",
    "GetpassPrompt",
    "StaticPasswordPrompt",
    "read_new_password",
]
