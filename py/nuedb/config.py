"""Runtime configuration read from environment variables.

``Settings.from_env`` reads every field from the environment, falling back
to the defaults below. Command-line flags in ``__main__`` override the
values it returns.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

MB = 1024 * 1024
GB = 1024 * MB


@dataclass
class Settings:
    """Server and store settings."""

    host: str = '0.0.0.0'
    port: int = 3000
    data_dir: str = './data'
    data_file: str = 'global.json'
    retention_days: float = 30
    max_payload_size: int = 5 * MB
    max_body_size: int = 5 * MB
    max_db_size: int = 2 * GB
    # Seconds between background sweeps; 0 sweeps only on requests
    sweep_interval: float = 0
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    @property
    def data_path(self) -> str:
        return os.path.join(self.data_dir, self.data_file)

    @property
    def retention_ms(self) -> int:
        return int(self.retention_days * 24 * 60 * 60 * 1000)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            host=env.get('HOST', defaults.host),
            port=int(env.get('PORT', defaults.port)),
            data_dir=env.get('DATA_DIR', defaults.data_dir),
            data_file=env.get('DATA_FILE', defaults.data_file),
            retention_days=float(env.get('RETENTION_DAYS', defaults.retention_days)),
            max_payload_size=int(env.get('MAX_JSON_SIZE', defaults.max_payload_size)),
            max_body_size=int(env.get('MAX_BODY_SIZE', defaults.max_body_size)),
            max_db_size=int(env.get('MAX_DB_SIZE', defaults.max_db_size)),
            sweep_interval=float(env.get('SWEEP_INTERVAL', defaults.sweep_interval)),
            log_level=env.get('LOG_LEVEL', defaults.log_level),
            log_file=env.get('LOG_FILE') or None,
        )
