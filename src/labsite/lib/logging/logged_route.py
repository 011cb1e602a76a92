import time
from typing import Callable

from fastapi import Request, Response
from fastapi.routing import APIRoute
from starlette.background import BackgroundTask, BackgroundTasks

from labsite.lib.logging.canonical import log_request
from labsite.lib.logging.context import save_to_logging_context


class LoggedRoute(APIRoute):
    """
    Route class which emits one canonical log line per request once the response has been sent.
    """

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()

        async def logging_route_handler(request: Request) -> Response:
            save_to_logging_context({"time_ns": time.time_ns()})
            response = await original_route_handler(request)
            task = BackgroundTask(log_request, request, response, time.time_ns())

            existing = response.background
            if existing is None:
                response.background = task
            elif isinstance(existing, BackgroundTasks):
                existing.add_task(task)
            else:
                tasks = BackgroundTasks()
                tasks.add_task(existing)
                tasks.add_task(task)
                response.background = tasks

            return response

        return logging_route_handler
