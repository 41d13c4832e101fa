import logging
import time

import psycopg2

from config import Config
from database.pool import ping


logger = logging.getLogger(__name__)


class DatabaseUnavailable(RuntimeError):
    pass


def check_postgres(pool):
    try:
        ping(pool)

        return {
            'status': 'healthy',
            'service': 'postgresql',
            'message': 'Successfully connected to PostgreSQL'
        }

    except psycopg2.OperationalError as e:
        return {
            'status': 'unhealthy',
            'service': 'postgresql',
            'message': f'Connection error: {str(e).strip()}'
        }
    except psycopg2.Error as e:
        return {
            'status': 'unhealthy',
            'service': 'postgresql',
            'message': f'Unexpected error: {str(e).strip()}'
        }


def wait_for_postgres(pool, interval=Config.DB_WAIT_INTERVAL, timeout=Config.DB_WAIT_TIMEOUT,
                      sleep=time.sleep, clock=time.monotonic):
    """
    Block until the database answers a liveness probe

    Probes every `interval` seconds. A timeout of 0 (the default)
    keeps waiting forever.

    Raises:
        DatabaseUnavailable: timeout is set and has passed
    """
    deadline = clock() + timeout if timeout and timeout > 0 else None
    attempts = 0

    while True:
        attempts += 1
        result = check_postgres(pool)
        if result['status'] == 'healthy':
            logger.info("Database connected")
            return attempts

        logger.info("Waiting for database... (%s)", result['message'])

        if deadline is not None and clock() >= deadline:
            raise DatabaseUnavailable(
                f"database not reachable after {attempts} attempt(s): {result['message']}"
            )

        sleep(interval)
