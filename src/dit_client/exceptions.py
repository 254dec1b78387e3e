"""
dit client config store exception classes
"""


class DitConfigError(Exception):
    """Base exception for config store and secret cipher operations"""
    pass


class NotFoundError(DitConfigError):
    """Raised when the config file does not exist yet"""
    pass


class ConfigIOError(DitConfigError):
    """Raised when the config file cannot be read or written"""
    pass


class ParseError(DitConfigError):
    """Raised when the config file is not well-formed JSON"""
    pass


class SerializeError(DitConfigError):
    """Raised when the in-memory record cannot be serialized"""
    pass


class ValidationError(DitConfigError):
    """Raised when a record or user input fails validation"""
    pass


class DecodeError(DitConfigError):
    """Raised when the stored encrypted key is not valid hex"""
    pass


class KeyFormatError(DitConfigError):
    """Raised when a private key cannot be generated or imported"""
    pass


class CipherError(DitConfigError):
    """Base exception for secret cipher failures"""
    pass


class CipherInitError(CipherError):
    """Raised when the AEAD cipher cannot be constructed"""
    pass


class RandomSourceError(CipherError):
    """Raised when the OS secure random source is unavailable"""
    pass


class AuthenticationError(CipherError):
    """Raised when decryption fails (wrong password or tampered data)"""
    pass


class MalformedInputError(CipherError):
    """Raised when an encrypted blob is too short to hold its header"""
    pass
