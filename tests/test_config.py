"""Settings and logging setup tests."""

import logging
import os

from nuedb import Settings
from nuedb.logging_config import setup_logging


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.port == 3000
        assert settings.retention_ms == 30 * 24 * 60 * 60 * 1000
        assert settings.max_payload_size == 5 * 1024 * 1024
        assert settings.max_body_size == 5 * 1024 * 1024
        assert settings.max_db_size == 2 * 1024 * 1024 * 1024
        assert settings.sweep_interval == 0
        assert settings.log_file is None
        assert settings.data_path == os.path.join('./data', 'global.json')

    def test_environment_overrides(self):
        settings = Settings.from_env({
            'PORT': '8081',
            'DATA_DIR': '/tmp/nuedb',
            'DATA_FILE': 'store.json',
            'RETENTION_DAYS': '0.5',
            'MAX_JSON_SIZE': '1024',
            'MAX_DB_SIZE': '4096',
            'SWEEP_INTERVAL': '60',
            'LOG_LEVEL': 'debug',
            'LOG_FILE': 'nuedb.log',
        })
        assert settings.port == 8081
        assert settings.data_path == os.path.join('/tmp/nuedb', 'store.json')
        assert settings.retention_ms == 12 * 60 * 60 * 1000
        assert settings.max_payload_size == 1024
        assert settings.max_db_size == 4096
        assert settings.sweep_interval == 60
        assert settings.log_level == 'debug'
        assert settings.log_file == 'nuedb.log'


class TestLogging:
    def test_setup_is_idempotent(self, monkeypatch, tmp_path):
        root = logging.getLogger()
        monkeypatch.setattr(root, 'handlers', [])
        monkeypatch.setattr(root, 'level', root.level)

        logfile = tmp_path / 'nuedb.log'
        setup_logging('debug', str(logfile))
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        setup_logging('error')
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        for handler in root.handlers:
            handler.close()
