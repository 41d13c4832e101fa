"""Request validation for movie endpoints"""
import json
import re


INT64_MAX = 2 ** 63 - 1

_INTEGER = re.compile(r'[+-]?[0-9]+')


class ValidationError(ValueError):
    @property
    def message(self):
        return self.args[0]


def parse_movie_id(raw):
    """
    Parse the trailing segment of /movies/<id>

    Only plain base-10 integers in the signed 64-bit range that are
    greater than zero are accepted.
    """
    if not _INTEGER.fullmatch(raw or ''):
        raise ValidationError('invalid id')

    movie_id = int(raw)
    if movie_id <= 0 or movie_id > INT64_MAX:
        raise ValidationError('invalid id')
    return movie_id


def parse_title_payload(body):
    """
    Read {"title": "..."} from a request body

    Returns:
        str: the trimmed title

    Raises:
        ValidationError: malformed JSON, unknown fields, or empty title
    """
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        raise ValidationError('invalid json')

    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError('invalid json')
    if set(payload) - {'title'}:
        raise ValidationError('invalid json')

    title = payload.get('title')
    if title is None:
        title = ''
    if not isinstance(title, str):
        raise ValidationError('invalid json')

    title = title.strip()
    if not title:
        raise ValidationError('title is required')
    return title
