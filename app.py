from flask import Blueprint, Flask, current_app, jsonify, request
from werkzeug.exceptions import HTTPException, MethodNotAllowed, NotFound
from werkzeug.serving import WSGIRequestHandler, make_server
import logging
import sys

import psycopg2

from config import Config, ConfigError
from database import movies_db
from database.pool import close_pool, open_pool
from services.postgres_check import DatabaseUnavailable, wait_for_postgres
from validation import ValidationError, parse_movie_id, parse_title_payload

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

# Every method reaches the view so unsupported ones get a bare 405
ANY_METHOD = ['GET', 'HEAD', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']

movies_api = Blueprint('movies', __name__)


def get_pool():
    return current_app.extensions['movies_pool']


def method_not_allowed():
    return '', 405


@movies_api.route('/health')
def health():
    return jsonify({'status': 'ok'}), 200


@movies_api.route('/movies', methods=ANY_METHOD, provide_automatic_options=False)
def movies_collection():
    if request.method == 'GET':
        return jsonify(movies_db.list_movies(get_pool())), 200

    if request.method == 'POST':
        title = parse_title_payload(request.get_data())
        movie = movies_db.create_movie(get_pool(), title)
        return jsonify(movie), 201

    return method_not_allowed()


@movies_api.route('/movies/', defaults={'raw_id': ''}, methods=ANY_METHOD,
                  provide_automatic_options=False)
@movies_api.route('/movies/<path:raw_id>', methods=ANY_METHOD, provide_automatic_options=False)
def movie_item(raw_id):
    movie_id = parse_movie_id(raw_id)
    pool = get_pool()

    if request.method == 'GET':
        movie = movies_db.get_movie(pool, movie_id)
        if not movie:
            return jsonify({'error': 'not found'}), 404
        return jsonify(movie), 200

    if request.method == 'PUT':
        title = parse_title_payload(request.get_data())
        movie = movies_db.update_movie(pool, movie_id, title)
        if not movie:
            return jsonify({'error': 'not found'}), 404
        return jsonify(movie), 200

    if request.method == 'DELETE':
        if not movies_db.delete_movie(pool, movie_id):
            return jsonify({'error': 'not found'}), 404
        return '', 204

    return method_not_allowed()


@movies_api.app_errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({'error': e.message}), 400


@movies_api.app_errorhandler(psycopg2.Error)
def handle_database_error(e):
    # Driver text goes back to the caller unchanged
    return jsonify({'error': str(e).strip()}), 500


@movies_api.app_errorhandler(Exception)
def handle_unexpected_error(e):
    if isinstance(e, HTTPException):
        return e

    # e.g. the driver refusing a parameter before it reaches Postgres
    logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({'error': str(e).strip()}), 500


@movies_api.app_errorhandler(NotFound)
def handle_not_found(e):
    return jsonify({'error': 'not found'}), 404


@movies_api.app_errorhandler(MethodNotAllowed)
def handle_method_not_allowed(e):
    # Methods the item rule does not list still get their id checked first
    if request.path.startswith('/movies/'):
        try:
            parse_movie_id(request.path[len('/movies/'):])
        except ValidationError as err:
            return handle_validation_error(err)
    return method_not_allowed()


def create_app(pool):
    app = Flask(__name__)
    app.config.from_object(Config)
    app.extensions['movies_pool'] = pool
    app.register_blueprint(movies_api)
    return app


class RequestHandler(WSGIRequestHandler):
    timeout = Config.READ_HEADER_TIMEOUT


def main():
    try:
        pool = open_pool()
    except ConfigError as e:
        logger.critical("%s", e)
        sys.exit(1)

    try:
        wait_for_postgres(pool)
    except DatabaseUnavailable as e:
        logger.critical("%s", e)
        close_pool(pool)
        sys.exit(1)

    logger.info("Starting the Server...")
    server = make_server(
        Config.HOST,
        Config.PORT,
        create_app(pool),
        threaded=True,
        request_handler=RequestHandler
    )
    logger.info("Listening on %s:%s", Config.HOST, Config.PORT)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Stopping server...")
    finally:
        server.server_close()
        close_pool(pool)


if __name__ == '__main__':
    main()
