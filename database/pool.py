"""Pool of psycopg2 connections shared by all request threads"""
import logging
from contextlib import contextmanager

import psycopg2
from sqlalchemy.pool import QueuePool

from config import Config


logger = logging.getLogger(__name__)


def open_pool(config=Config):
    """
    Build the shared connection pool

    No connection is opened until the first checkout, so the database
    does not have to be reachable yet. Callers wait without a timeout
    once every connection is checked out.
    """
    settings = config.database_settings()

    def connect():
        conn = psycopg2.connect(**settings)
        # Every statement commits on its own
        conn.autocommit = True
        return conn

    return QueuePool(
        connect,
        pool_size=config.DB_MAX_IDLE_CONNS,
        max_overflow=config.DB_MAX_OPEN_CONNS - config.DB_MAX_IDLE_CONNS,
        recycle=config.DB_CONN_MAX_LIFETIME,
        timeout=None,
    )


@contextmanager
def checkout(pool):
    conn = pool.connect()
    try:
        yield conn
    finally:
        conn.close()


def ping(pool):
    """Round-trip a trivial query; raises psycopg2.Error when unreachable"""
    with checkout(pool) as conn:
        with conn.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()


def close_pool(pool):
    pool.dispose()
    logger.info("Closed database connection pool")
