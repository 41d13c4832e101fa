import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest


DB_ENV = {
    'DB_HOST': 'localhost',
    'DB_PORT': '5432',
    'DB_USER': 'movies',
    'DB_PASSWORD': 'secret',
    'DB_NAME': 'movies',
}


class MemoryStore:
    """Stands in for database.movies_db, keyed like a SERIAL column"""

    def __init__(self):
        self.movies = {}
        self.next_id = 1

    def list_movies(self, pool):
        return [self.movies[movie_id] for movie_id in sorted(self.movies)]

    def create_movie(self, pool, title):
        movie = {'id': self.next_id, 'title': title}
        self.movies[self.next_id] = movie
        self.next_id += 1
        return dict(movie)

    def get_movie(self, pool, movie_id):
        movie = self.movies.get(movie_id)
        return dict(movie) if movie else None

    def update_movie(self, pool, movie_id, title):
        if movie_id not in self.movies:
            return None
        self.movies[movie_id]['title'] = title
        return dict(self.movies[movie_id])

    def delete_movie(self, pool, movie_id):
        return self.movies.pop(movie_id, None) is not None


@pytest.fixture
def db_env(monkeypatch):
    for name, value in DB_ENV.items():
        monkeypatch.setenv(name, value)
    return DB_ENV


@pytest.fixture
def store(monkeypatch):
    from database import movies_db

    memory = MemoryStore()
    for name in ('list_movies', 'create_movie', 'get_movie', 'update_movie', 'delete_movie'):
        monkeypatch.setattr(movies_db, name, getattr(memory, name))
    return memory


@pytest.fixture
def app(store):
    from app import create_app

    application = create_app(pool=object())
    application.testing = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()
