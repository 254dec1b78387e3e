# Vault - Secret Cipher
#
# Password → encryption key (SHA-256 legacy, or salted scrypt)
# Private key encryption (AES-256-GCM)
#
# Blob layouts:
#   sha256: nonce(12) + ciphertext+tag
#   scrypt: salt(16) + nonce(12) + ciphertext+tag

import hashlib
import os
from enum import Enum
from typing import Union

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from ..exceptions import (
    AuthenticationError,
    CipherInitError,
    MalformedInputError,
    RandomSourceError,
)

Secret = Union[bytes, str]

# Wrong password and tampered data must be indistinguishable to the caller
AUTH_FAILED_MESSAGE = "Failed to decrypt the encrypted private key - wrong password?"


class KdfScheme(str, Enum):
    """Password-to-key derivation schemes."""
    SHA256 = "sha256"  # unsalted, kept to read files written by older clients
    SCRYPT = "scrypt"


def _to_bytes(value: Secret) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def _random_bytes(length: int) -> bytes:
    try:
        return os.urandom(length)
    except (NotImplementedError, OSError) as e:
        raise RandomSourceError(f"Secure random source unavailable: {e}") from e


class SecretCipher:
    """
    Encrypts and decrypts private-key bytes with a user password.

    Flow:
    1. The password is turned into a 256-bit key (see KdfScheme)
    2. AES-256-GCM encrypts the plaintext under a fresh random nonce
    3. The nonce (and salt, for scrypt) is prepended to the ciphertext

    Usage::

        cipher = SecretCipher()
        blob = cipher.encrypt(b"deadbeef...", b"hunter2")
        cipher.decrypt(blob, b"hunter2")
    """

    KEY_LENGTH = 32  # 256 bits for AES-256
    NONCE_LENGTH = 12  # 96-bit nonce for GCM (recommended)
    SALT_LENGTH = 16

    # scrypt cost parameters
    SCRYPT_N = 2 ** 14
    SCRYPT_R = 8
    SCRYPT_P = 1

    def __init__(self, scheme: Union[KdfScheme, str] = KdfScheme.SCRYPT):
        self.scheme = KdfScheme(scheme)

    @property
    def header_length(self) -> int:
        """Bytes preceding the ciphertext in a blob of this scheme."""
        if self.scheme is KdfScheme.SCRYPT:
            return self.SALT_LENGTH + self.NONCE_LENGTH
        return self.NONCE_LENGTH

    @staticmethod
    def derive_key(password: Secret) -> bytes:
        """
        Derive the legacy unsalted key from a password.

        The key is the first 32 hex characters of the SHA-256 digest, taken
        as ASCII bytes, which is the layout older clients wrote.

        Returns:
            32-byte key; the same password always yields the same key
        """
        digest = hashlib.sha256(_to_bytes(password)).hexdigest()
        return digest[:SecretCipher.KEY_LENGTH].encode("ascii")

    @classmethod
    def derive_key_scrypt(cls, password: Secret, salt: bytes) -> bytes:
        """Derive a 256-bit key from password + salt via scrypt."""
        kdf = Scrypt(
            salt=salt,
            length=cls.KEY_LENGTH,
            n=cls.SCRYPT_N,
            r=cls.SCRYPT_R,
            p=cls.SCRYPT_P,
        )
        return kdf.derive(_to_bytes(password))

    @staticmethod
    def _aead(key: bytes) -> AESGCM:
        try:
            return AESGCM(key)
        except (ValueError, TypeError) as e:
            raise CipherInitError(f"Failed to initialize AES-GCM: {e}") from e

    def encrypt(self, plaintext: bytes, password: Secret) -> bytes:
        """
        Encrypt plaintext with a key derived from password.

        Returns:
            header + ciphertext_with_tag (header layout depends on scheme)

        Raises:
            CipherInitError: The cipher could not be constructed
            RandomSourceError: No secure randomness for salt/nonce
        """
        if self.scheme is KdfScheme.SCRYPT:
            salt = _random_bytes(self.SALT_LENGTH)
            header = salt
            key = self.derive_key_scrypt(password, salt)
        else:
            header = b""
            key = self.derive_key(password)

        aesgcm = self._aead(key)
        nonce = _random_bytes(self.NONCE_LENGTH)
        ciphertext = aesgcm.encrypt(nonce, bytes(plaintext), None)
        return header + nonce + ciphertext

    def decrypt(self, blob: bytes, password: Secret) -> bytes:
        """
        Verify and decrypt a blob produced by encrypt().

        Raises:
            MalformedInputError: Blob shorter than the scheme's header
            AuthenticationError: Wrong password or corrupted/tampered data
        """
        blob = bytes(blob)
        if len(blob) < self.header_length:
            raise MalformedInputError(
                f"Encrypted data too short: {len(blob)} bytes "
                f"(need at least {self.header_length})"
            )

        if self.scheme is KdfScheme.SCRYPT:
            salt = blob[:self.SALT_LENGTH]
            key = self.derive_key_scrypt(password, salt)
        else:
            key = self.derive_key(password)

        nonce = blob[self.header_length - self.NONCE_LENGTH:self.header_length]
        ciphertext = blob[self.header_length:]

        try:
            return self._aead(key).decrypt(nonce, ciphertext, None)
        except InvalidTag:
            raise AuthenticationError(AUTH_FAILED_MESSAGE) from None


def encrypt(plaintext: bytes, password: Secret, scheme: Union[KdfScheme, str] = KdfScheme.SCRYPT) -> bytes:
    """Encrypt with a one-off SecretCipher."""
    return SecretCipher(scheme).encrypt(plaintext, password)


def decrypt(blob: bytes, password: Secret, scheme: Union[KdfScheme, str] = KdfScheme.SCRYPT) -> bytes:
    """Decrypt with a one-off SecretCipher."""
    return SecretCipher(scheme).decrypt(blob, password)
