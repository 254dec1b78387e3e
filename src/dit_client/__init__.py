# dit client - Local Config Store
#
# Single-user store for the dit client's configuration and its
# password-encrypted Ethereum private key.

__version__ = "0.3.0"
__author__ = "ditCraft Team"
__description__ = "Encrypted local configuration store for the dit client"

from .config import (
    ConfigRecord,
    ConfigStore,
    EthereumKeypairProvider,
    GetpassPrompt,
    StaticPasswordPrompt,
)
from .core import Settings, configure_logging
from .vault import KdfScheme, SecretCipher

__all__ = [
    "__version__",
    "ConfigStore",
    "ConfigRecord",
    "EthereumKeypairProvider",
    "GetpassPrompt",
    "StaticPasswordPrompt",
    "Settings",
    "configure_logging",
    "KdfScheme",
    "SecretCipher",
]
