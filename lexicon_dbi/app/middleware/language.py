"""Accept-Language detection middleware."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from lexicon_dbi.app.core.exceptions import NoLanguageAvailable


class LanguageMiddleware(BaseHTTPMiddleware):
    """Resolve ``Accept-Language`` and expose ``request.state.language``.

    The resolved language is echoed back via the ``Content-Language``
    response header. Nothing is set before the lexicons are loaded or when no
    language (not even the default) is available.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        language = _resolve(request)
        request.state.language = language

        response = await call_next(request)
        if language is not None:
            response.headers["Content-Language"] = language
        return response


def _resolve(request: Request) -> str | None:
    config = getattr(request.app.state, "i18n", None)
    if config is None:
        return None
    try:
        handle = config.resolver.resolve(
            request.headers.get("Accept-Language"), config.handles
        )
    except NoLanguageAvailable:
        return None
    return handle.tag
