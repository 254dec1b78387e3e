# Config Store - Load / Create / Save
#
# Owns the single in-memory ConfigRecord of a client installation and its
# JSON file (default ~/.ditconfig).
#
# Security:
#   - The private key is encrypted before it is ever written
#   - unlock_private_key() returns plaintext to the caller only, never cached
#   - Writes go to a 0600 temp file and are moved into place with os.replace

import contextlib
import json
import os
import string
from pathlib import Path
from typing import Optional, Union

from ..core.log import EventType, configure_logging, get_logger, log_event
from ..core.settings import Settings
from ..exceptions import (
    AuthenticationError,
    ConfigIOError,
    DecodeError,
    DitConfigError,
    MalformedInputError,
    NotFoundError,
    ParseError,
    SerializeError,
    ValidationError,
)
from ..vault.encryption import KdfScheme, SecretCipher
from .keys import DEMO_ACCOUNT, DEMO_CURRENCY, LIVE_CURRENCY, KeypairProvider
from .models import ConfigRecord, KeyMaterial
from .prompt import UNLOCK_PASSWORD_MESSAGE, PasswordPrompt, read_new_password

logger = get_logger(__name__)

CONFIG_FILE_MODE = 0o600


class ConfigStore:
    """
    Loads, creates and persists the client's ConfigRecord.

    One instance per process is the normal case, but nothing is global:
    tests build as many independent stores as they like.

    Usage::

        store = ConfigStore()
        try:
            record = store.load()
        except NotFoundError:
            record = store.create(False, EthereumKeypairProvider(), GetpassPrompt())
        key = store.unlock_private_key(b"password")
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            path: Config file location. If None, taken from settings
                  (DIT_CONFIG, default ~/.ditconfig).
            settings: Runtime settings (default: Settings.from_env())
        """
        self.settings = settings or Settings.from_env()
        self.path = Path(path).expanduser() if path else self.settings.resolved_config_path()
        self.record: Optional[ConfigRecord] = None
        configure_logging(self.settings)

    def exists(self) -> bool:
        return self.path.is_file()

    # ── Load ────────────────────────────────────────────────────────

    def load(self) -> ConfigRecord:
        """
        Read and validate the config file, replacing the in-memory record.

        Raises:
            NotFoundError: No config file yet (run setup)
            ConfigIOError: File exists but cannot be read
            ParseError: Not well-formed JSON / unexpected structure
            ValidationError: Address is not 42 characters long
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as e:
            log_event(logger, EventType.CONFIG_LOAD_FAILED, "warning",
                      path=str(self.path), reason="not_found")
            raise NotFoundError(
                f"Config file not found at {self.path} - please run 'setup'"
            ) from e
        except OSError as e:
            log_event(logger, EventType.CONFIG_LOAD_FAILED, "error",
                      path=str(self.path), reason="io", error=str(e))
            raise ConfigIOError(f"Failed to load config file: {e}") from e

        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            log_event(logger, EventType.CONFIG_LOAD_FAILED, "error",
                      path=str(self.path), reason="parse")
            raise ParseError(f"Failed to parse JSON of config file: {e}") from e

        if not isinstance(data, dict):
            log_event(logger, EventType.CONFIG_LOAD_FAILED, "error",
                      path=str(self.path), reason="parse")
            raise ParseError("Failed to parse JSON of config file: top level is not an object")

        try:
            record = ConfigRecord.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            log_event(logger, EventType.CONFIG_LOAD_FAILED, "error",
                      path=str(self.path), reason="structure", error=str(e))
            raise ParseError(f"Unexpected structure in config file: {e}") from e

        try:
            record.validate()
        except ValidationError:
            log_event(logger, EventType.CONFIG_LOAD_FAILED, "error",
                      path=str(self.path), reason="invalid_address")
            raise

        self.record = record
        log_event(logger, EventType.CONFIG_LOADED,
                  path=str(self.path),
                  address=record.ethereum_keys.address,
                  demo_mode=record.demo_mode_active,
                  repositories=len(record.repositories))
        return record

    # ── Create ──────────────────────────────────────────────────────

    def create(
        self,
        demo_mode: bool,
        keypair_provider: KeypairProvider,
        prompt: PasswordPrompt,
        private_key_hex: Optional[str] = None,
        attempts: int = 1,
    ) -> ConfigRecord:
        """
        Build a fresh record, encrypt its private key and save it.

        Live mode takes the key from keypair_provider: generate() by default,
        import_key(private_key_hex) when a key is given. Demo mode uses the
        fixed demo account and never calls the provider.

        Args:
            demo_mode: Use the shared demo account
            keypair_provider: Source of the live account
            prompt: Asked twice for the encryption password
            private_key_hex: Existing key to import instead of generating one
            attempts: Password confirmation rounds before giving up

        Raises:
            KeyFormatError: Key generation/import failed
            ValidationError: Passwords mismatched or empty
            SerializeError, ConfigIOError: From save()
        """
        cipher = self._cipher_for(self.settings.kdf)

        if demo_mode:
            keypair = DEMO_ACCOUNT
            currency = DEMO_CURRENCY
        elif private_key_hex is not None:
            keypair = keypair_provider.import_key(private_key_hex)
            currency = LIVE_CURRENCY
        else:
            keypair = keypair_provider.generate()
            currency = LIVE_CURRENCY

        password = read_new_password(prompt, attempts=attempts)
        blob = cipher.encrypt(keypair.private_key_hex.encode("ascii"), password)

        record = ConfigRecord(
            dit_coordinator=self.settings.dit_coordinator,
            knw_voting=self.settings.knw_voting,
            knw_token=self.settings.knw_token,
            dit_token=self.settings.dit_token,
            currency=currency,
            demo_mode_active=demo_mode,
            ethereum_keys=KeyMaterial(
                address=keypair.address,
                private_key=blob.hex(),
                kdf=cipher.scheme.value,
            ),
            repositories=[],
        )
        record.validate()

        # A failed save must not leave an unwritten keypair in memory
        previous = self.record
        self.record = record
        try:
            self.save()
        except DitConfigError:
            self.record = previous
            raise

        log_event(logger, EventType.CONFIG_CREATED,
                  path=str(self.path),
                  address=keypair.address,
                  demo_mode=demo_mode,
                  kdf=cipher.scheme.value)
        return record

    # ── Save ────────────────────────────────────────────────────────

    def save(self) -> None:
        """
        Write the in-memory record to disk atomically.

        Raises:
            ValidationError: Nothing loaded or created yet
            SerializeError: Record cannot be turned into JSON
            ConfigIOError: Write or rename failed
        """
        if self.record is None:
            raise ValidationError("No config loaded - nothing to save")

        try:
            payload = json.dumps(self.record.to_dict(), indent=2).encode("utf-8")
        except (TypeError, ValueError, AttributeError) as e:
            raise SerializeError(f"Failed to serialize config: {e}") from e

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd = os.open(str(tmp_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CONFIG_FILE_MODE)
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            # Clean up temp file on failure
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            log_event(logger, EventType.CONFIG_SAVE_FAILED, "error",
                      path=str(self.path), error=str(e))
            raise ConfigIOError(f"Failed to write config file: {e}") from e

        log_event(logger, EventType.CONFIG_SAVED, "debug", path=str(self.path))

    # ── Unlock ──────────────────────────────────────────────────────

    def unlock_private_key(self, password: Union[bytes, str]) -> bytes:
        """
        Decrypt the stored private key.

        Returns:
            The plaintext private key (hex text as bytes). Not kept anywhere.

        Raises:
            ValidationError: No config loaded
            DecodeError: Stored key is not valid hex
            MalformedInputError: Stored blob is shorter than its header
            AuthenticationError: Wrong password or tampered key
        """
        if self.record is None:
            raise ValidationError("No config loaded - run load() or create() first")

        keys = self.record.ethereum_keys
        # bytes.fromhex() would also skip whitespace
        if not all(c in string.hexdigits for c in keys.private_key):
            raise DecodeError("Failed to decode private key from config")
        try:
            blob = bytes.fromhex(keys.private_key)
        except ValueError as e:
            raise DecodeError("Failed to decode private key from config") from e

        cipher = self._cipher_for(keys.kdf)
        try:
            plaintext = cipher.decrypt(blob, password)
        except (AuthenticationError, MalformedInputError) as e:
            log_event(logger, EventType.KEY_UNLOCK_FAILED, "warning",
                      address=keys.address, reason=type(e).__name__)
            raise

        log_event(logger, EventType.KEY_UNLOCKED, address=keys.address)
        return plaintext

    def prompt_and_unlock(self, prompt: PasswordPrompt) -> bytes:
        """Ask for the password once and unlock the private key."""
        return self.unlock_private_key(prompt.read_password(UNLOCK_PASSWORD_MESSAGE))

    @staticmethod
    def _cipher_for(kdf: str) -> SecretCipher:
        try:
            return SecretCipher(KdfScheme(kdf))
        except ValueError as e:
            raise ValidationError(f"Unknown key derivation scheme: {kdf!r}") from e
