import logging
from unittest.mock import MagicMock

import psycopg2
import pytest

from services.postgres_check import DatabaseUnavailable, check_postgres, wait_for_postgres


class FlakyPool:
    def __init__(self, failures):
        self.failures = failures
        self.attempts = 0

    def connect(self):
        self.attempts += 1
        if self.attempts <= self.failures:
            raise psycopg2.OperationalError('could not connect to server')
        return MagicMock()


def test_check_postgres_healthy():
    result = check_postgres(FlakyPool(0))

    assert result['status'] == 'healthy'
    assert result['service'] == 'postgresql'


def test_check_postgres_unhealthy():
    result = check_postgres(FlakyPool(1))

    assert result['status'] == 'unhealthy'
    assert 'could not connect to server' in result['message']


def test_wait_retries_every_interval(caplog):
    pool = FlakyPool(3)
    sleeps = []

    with caplog.at_level(logging.INFO):
        attempts = wait_for_postgres(pool, interval=1.0, timeout=0, sleep=sleeps.append)

    assert attempts == 4
    assert sleeps == [1.0, 1.0, 1.0]
    assert caplog.text.count('Waiting for database...') == 3
    assert 'Database connected' in caplog.text


def test_wait_without_timeout_keeps_going():
    pool = FlakyPool(500)
    sleeps = []

    wait_for_postgres(pool, interval=1.0, timeout=0, sleep=sleeps.append, clock=lambda: 10 ** 9)

    assert len(sleeps) == 500


def test_wait_gives_up_after_deadline():
    now = [0.0]

    def sleep(seconds):
        now[0] += seconds

    with pytest.raises(DatabaseUnavailable):
        wait_for_postgres(FlakyPool(100), interval=1.0, timeout=3, sleep=sleep, clock=lambda: now[0])

    assert now[0] == 3.0
