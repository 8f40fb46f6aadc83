"""Shared test configuration for nuedb."""

import os
import signal
import subprocess
import sys
import time

import pytest
import requests

from nuedb import Settings, Store, create_app

PORT = int(os.environ.get('NUEDB_PORT', '18080'))
BASE_URL = f'http://127.0.0.1:{PORT}'
PY_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'py')

START_TIME = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start=START_TIME):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    return Settings(data_dir=str(tmp_path))


@pytest.fixture
def store(settings, clock):
    return Store(settings.data_path, retention_ms=settings.retention_ms,
                 max_size=settings.max_db_size, clock=clock)


@pytest.fixture
def app(store, settings):
    return create_app(store, settings)


@pytest.fixture
def client(app):
    """Flask test client bound to a fresh store."""
    return app.test_client()


def start_server(data_dir):
    """Start ``python -m nuedb`` against data_dir and wait until it answers."""
    env = os.environ.copy()
    env['PORT'] = str(PORT)
    env['DATA_DIR'] = data_dir
    env['PYTHONPATH'] = os.pathsep.join(filter(None, [PY_DIR, env.get('PYTHONPATH')]))

    proc = subprocess.Popen(
        [sys.executable, '-m', 'nuedb', '--host', '127.0.0.1'],
        cwd=PY_DIR,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

    for _ in range(30):
        try:
            requests.get(f'{BASE_URL}/dbinfo', timeout=1)
            return proc
        except requests.exceptions.ConnectionError:
            if proc.poll() is not None:
                _, stderr = proc.communicate()
                raise RuntimeError(f'Server failed to start:\n{stderr.decode()}')
            time.sleep(0.5)

    proc.kill()
    raise RuntimeError('Server did not start in time')


def stop_server(proc):
    proc.send_signal(signal.SIGTERM)
    try:
        proc.wait(timeout=5)
    except subprocess.TimeoutExpired:
        proc.kill()
        proc.wait()


@pytest.fixture
def server(tmp_path):
    """A live server process; ``restart()`` relaunches it on the same data."""
    data_dir = str(tmp_path / 'data')
    state = {'url': BASE_URL, 'data_dir': data_dir, 'proc': start_server(data_dir)}

    def restart():
        stop_server(state['proc'])
        state['proc'] = start_server(data_dir)

    state['restart'] = restart
    yield state

    stop_server(state['proc'])
