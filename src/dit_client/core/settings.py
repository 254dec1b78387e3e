# Runtime Settings
# Environment-driven settings for the config store.
#
# Follows the keepalive pattern: a fixed per-user default path that can be
# overridden through an environment variable.

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_CONFIG_PATH = Path("~/.ditconfig")

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Settings for locating the config file, logging and new records.

    Args:
        config_path: Location of the config file (``~`` is expanded).
        log_level: Standard logging level name.
        log_json: Render log lines as JSON instead of console output.
        kdf: Key derivation scheme used when encrypting new keys.
        dit_coordinator: Default coordinator contract for new records.
        knw_voting: Default KNW voting contract for new records.
        knw_token: Default KNW token contract for new records.
        dit_token: Default dit token contract for new records.
    """

    config_path: Path = DEFAULT_CONFIG_PATH
    log_level: str = "INFO"
    log_json: bool = False
    kdf: str = "scrypt"
    dit_coordinator: str = ""
    knw_voting: str = ""
    knw_token: str = ""
    dit_token: str = ""

    def resolved_config_path(self) -> Path:
        return Path(self.config_path).expanduser()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from ``DIT_*`` environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            config_path=Path(env.get("DIT_CONFIG", str(DEFAULT_CONFIG_PATH))),
            log_level=env.get("DIT_LOG_LEVEL", "INFO").upper(),
            log_json=env.get("DIT_LOG_JSON", "").lower() in _TRUTHY,
            kdf=env.get("DIT_KDF", "scrypt").lower(),
            dit_coordinator=env.get("DIT_COORDINATOR", ""),
            knw_voting=env.get("DIT_KNW_VOTING", ""),
            knw_token=env.get("DIT_KNW_TOKEN", ""),
            dit_token=env.get("DIT_TOKEN", ""),
        )
