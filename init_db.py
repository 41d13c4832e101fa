"""Create the movies table and seed it when empty"""
import sys

import psycopg2

from config import Config, ConfigError


SAMPLE_TITLE = 'Sample Movie'


def create_tables(conn):
    cursor = conn.cursor()

    print("\nCreating 'movies' table...")
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS movies (
            id SERIAL PRIMARY KEY,
            title TEXT NOT NULL
        );
    """)

    cursor.execute("""
        INSERT INTO movies (title)
        SELECT %s
        WHERE NOT EXISTS (SELECT 1 FROM movies);
    """, (SAMPLE_TITLE,))

    if cursor.rowcount:
        print(f"Inserted seed movie '{SAMPLE_TITLE}'")
    else:
        print("Movies table already has records")

    conn.commit()
    cursor.close()

    print("Movies table ready!")


def main():
    print("=" * 50)
    print("Database Initialization")
    print("=" * 50)

    try:
        settings = Config.database_settings()
    except ConfigError as e:
        print(f"\nError: {e}")
        sys.exit(1)

    conn = psycopg2.connect(**settings)
    try:
        create_tables(conn)
    except psycopg2.Error as e:
        print(f"\nError: {e}")
        conn.rollback()
        raise
    finally:
        conn.close()

    print("\n" + "=" * 50)
    print("Database initialization complete!")
    print("=" * 50)


if __name__ == '__main__':
    main()
