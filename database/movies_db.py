from psycopg2.extras import RealDictCursor

from database.pool import checkout


def list_movies(pool):
    with checkout(pool) as conn:
        with conn.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute("""
                SELECT id, title
                FROM movies
                ORDER BY id
            """)
            return [dict(row) for row in cursor.fetchall()]


def create_movie(pool, title):
    with checkout(pool) as conn:
        with conn.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute("""
                INSERT INTO movies (title)
                VALUES (%s)
                RETURNING id
            """, (title,))
            movie_id = cursor.fetchone()['id']

    return {'id': movie_id, 'title': title}


def get_movie(pool, movie_id):
    """
    Fetch one movie

    Returns:
        dict: movie row, or None if no movie has this id
    """
    with checkout(pool) as conn:
        with conn.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute("""
                SELECT id, title
                FROM movies
                WHERE id = %s
            """, (movie_id,))
            movie = cursor.fetchone()

    return dict(movie) if movie else None


def update_movie(pool, movie_id, title):
    """
    Rename a movie

    Returns:
        dict: updated movie, or None if no row matched
    """
    with checkout(pool) as conn:
        with conn.cursor() as cursor:
            cursor.execute("""
                UPDATE movies
                SET title = %s
                WHERE id = %s
            """, (title, movie_id))
            updated = cursor.rowcount

    if updated == 0:
        return None
    return {'id': movie_id, 'title': title}


def delete_movie(pool, movie_id):
    with checkout(pool) as conn:
        with conn.cursor() as cursor:
            cursor.execute("DELETE FROM movies WHERE id = %s", (movie_id,))
            return cursor.rowcount > 0
