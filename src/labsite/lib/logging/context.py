import logging
import os
import sys
import time
import traceback
from typing import Any, Optional, Union

from starlette.requests import HTTPConnection, Request
from starlette_context import context
from starlette_context.middleware import RawContextMiddleware

from labsite import __project__, __version__
from labsite.lib.logging.models import Source

FRONTEND_URL = os.getenv("FRONTEND_URL", "")
API_URL = os.getenv("API_URL", "")

logger = logging.getLogger(__name__)


class PopulatedRawContextMiddleware(RawContextMiddleware):
    async def set_context(self, request: Union[Request, HTTPConnection]) -> dict:
        ctx: dict[str, Any] = {
            "request_ns": time.time_ns(),
            "path": request.url.path,
            "application": __project__,
            "version": __version__,
        }

        if isinstance(request, Request):
            ctx["method"] = request.method
        elif "method" in request.scope:
            ctx["method"] = request.scope["method"]

        if FRONTEND_URL and request.headers.get("origin") == FRONTEND_URL:
            ctx["source"] = Source.web
        elif API_URL and request.headers.get("referer") == API_URL + "/docs":
            ctx["source"] = Source.docs
        else:
            ctx["source"] = Source.other

        plugin_ctx = {plugin.key: await plugin.process_request(request) for plugin in self.plugins}

        return {**ctx, **plugin_ctx}


def save_to_logging_context(ctx: dict) -> dict:
    """
    Merge *ctx* into the request logging context. Keys already present are not overwritten; the
    existing value is turned into a list and the new value appended.

    Outside of a request (scripts, tests calling library code directly) this is a no-op.
    """
    if not context.exists():
        logger.debug("Skipped saving to context. Context does not exist.")
        return {}

    for k, v in ctx.items():
        if k not in context:
            context[k] = v
        elif isinstance(context[k], list):
            context[k].append(v)
        else:
            context[k] = [context[k], v]

    return context.data


def logging_context() -> dict:
    if not context.exists():
        return {}

    return context.data


def correlation_id_for_context() -> Optional[str]:
    return logging_context().get("X-Correlation-ID", None)


def format_raised_exception_info_as_dict(err: BaseException) -> dict:
    _, _, tb = sys.exc_info()

    exc_ctx: dict = {
        "captured_exception_info": {
            "type": err.__class__.__name__,
            "string": str(err),
        }
    }

    # Point at the innermost frame from our own code rather than library internals.
    own_frames = [
        {"file": fs.filename, "line": fs.lineno, "func": fs.name}
        for fs in traceback.extract_tb(tb)
        if "/labsite/" in fs.filename
    ]
    if own_frames:
        exc_ctx["captured_exception_info"].update(own_frames[-1])

    return exc_ctx
