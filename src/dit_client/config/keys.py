# Config Store - Keypair Providers
#
# The store never generates keys itself. It asks a KeypairProvider for an
# (address, private key hex) pair, either freshly sampled or imported.

from dataclasses import dataclass
from typing import Protocol

from eth_account import Account

from ..exceptions import KeyFormatError

PRIVATE_KEY_HEX_LENGTH = 64


@dataclass(frozen=True)
class KeyPair:
    """An Ethereum address with its plaintext private key (hex, no 0x)."""
    address: str
    private_key_hex: str

    def __repr__(self) -> str:
        # Keep the private key out of tracebacks and log output
        return f"KeyPair(address={self.address!r})"


# Publicly known pre-funded account used in demo mode
DEMO_ACCOUNT = KeyPair(
    address="0x" + "0" * 40,
    private_key_hex="0" * PRIVATE_KEY_HEX_LENGTH,
)
DEMO_CURRENCY = "xDit"
LIVE_CURRENCY = "xDai"


class KeypairProvider(Protocol):
    def generate(self) -> KeyPair:
        ...

    def import_key(self, private_key_hex: str) -> KeyPair:
        ...


def normalize_private_key_hex(private_key_hex: str) -> str:
    """
    Validate a user-supplied private key and strip an optional 0x prefix.

    Accepts 64 hex characters, or 66 with a leading "0x".

    Raises:
        KeyFormatError: Wrong length or not hex
    """
    value = private_key_hex.strip()
    if len(value) == PRIVATE_KEY_HEX_LENGTH + 2 and value[:2].lower() == "0x":
        value = value[2:]
    if len(value) != PRIVATE_KEY_HEX_LENGTH:
        raise KeyFormatError("Invalid ethereum private-key: expected 64 hex characters")
    try:
        bytes.fromhex(value)
    except ValueError as e:
        raise KeyFormatError("Invalid ethereum private-key: not hex-encoded") from e
    return value.lower()


class EthereumKeypairProvider:
    """Samples or imports secp256k1 keys through eth-account."""

    def generate(self) -> KeyPair:
        try:
            account = Account.create()
        except Exception as e:
            raise KeyFormatError(f"Failed to generate ethereum keys: {e}") from e
        return KeyPair(address=account.address, private_key_hex=bytes(account.key).hex())

    def import_key(self, private_key_hex: str) -> KeyPair:
        value = normalize_private_key_hex(private_key_hex)
        try:
            account = Account.from_key(bytes.fromhex(value))
        except Exception as e:
            # eth-keys rejects scalars outside the curve order
            raise KeyFormatError("Failed to import ethereum keys") from e
        return KeyPair(address=account.address, private_key_hex=bytes(account.key).hex())


class StaticKeypairProvider:
    """Always hands out the same pair. Used for demo mode and tests."""

    def __init__(self, keypair: KeyPair):
        self.keypair = keypair

    def generate(self) -> KeyPair:
        return self.keypair

    def import_key(self, private_key_hex: str) -> KeyPair:
        if normalize_private_key_hex(private_key_hex) != self.keypair.private_key_hex.lower():
            raise KeyFormatError("Private key does not match the configured account")
        return self.keypair
