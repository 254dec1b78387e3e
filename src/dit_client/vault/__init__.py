# Vault Module - Secret Cipher
#
# Password-based AES-256-GCM encryption of the Ethereum private key

from .encryption import KdfScheme, SecretCipher, decrypt, encrypt

__all__ = ["KdfScheme", "SecretCipher", "encrypt", "decrypt"]
