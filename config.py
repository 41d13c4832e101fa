import os


class ConfigError(RuntimeError):
    pass


def require_env(name):
    value = os.getenv(name, '').strip()
    if not value:
        raise ConfigError(f'missing env var: {name}')
    return value


class Config:
    HOST = os.getenv('HOST', '0.0.0.0')
    PORT = int(os.getenv('PORT', '').strip() or '8080')

    # Seconds allowed for reading a request off the socket
    READ_HEADER_TIMEOUT = 5

    DB_SSLMODE = os.getenv('DB_SSLMODE', 'disable')

    DB_MAX_OPEN_CONNS = 10
    DB_MAX_IDLE_CONNS = 10
    DB_CONN_MAX_LIFETIME = 30 * 60

    DB_WAIT_INTERVAL = 1.0
    # 0 waits for the database forever
    DB_WAIT_TIMEOUT = float(os.getenv('DB_WAIT_TIMEOUT', '0') or '0')

    @classmethod
    def database_settings(cls):
        """
        Connection parameters for psycopg2.connect

        Raises:
            ConfigError: a required DB_* variable is missing or blank
        """
        return {
            'host': require_env('DB_HOST'),
            'port': require_env('DB_PORT'),
            'user': require_env('DB_USER'),
            'password': require_env('DB_PASSWORD'),
            'dbname': require_env('DB_NAME'),
            'sslmode': cls.DB_SSLMODE,
        }
