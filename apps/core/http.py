# apps/core/http.py
import functools
import logging

from django.http import JsonResponse

from apps.core.errors import PersistenceError, PolicyDeniedError

logger = logging.getLogger(__name__)


def json_error(message: str, status: int = 400) -> JsonResponse:
    return JsonResponse({'error': message}, status=status)


def engine_errors(view):
    """ValueError -> 400, PolicyDeniedError -> 404, PersistenceError -> 503. Stan w pamięci nie jest zmieniany."""

    @functools.wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except ValueError as e:
            return json_error(str(e), status=400)
        except PolicyDeniedError as e:
            logger.warning("Policy denied in %s: %s", view.__name__, e)
            return json_error("Not found", status=404)
        except PersistenceError as e:
            logger.error("Backend error in %s: %s", view.__name__, e)
            return json_error("Backend unavailable, please try again", status=503)

    return wrapper


def int_param(data, name: str, default=None):
    raw = data.get(name)
    if raw in (None, ''):
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid value for {name}: {raw}")
