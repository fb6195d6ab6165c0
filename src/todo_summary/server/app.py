"""FastAPI application exposing the todo REST surface."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator, Sequence
from contextlib import asynccontextmanager, contextmanager
from typing import Literal

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from todo_summary import __version__
from todo_summary.exceptions import (
    TaskNotFoundError,
    TaskValidationError,
    TodoSummaryError,
)
from todo_summary.models import Task
from todo_summary.services import SummaryService, TaskService

logger = logging.getLogger(__name__)


class TodoCreateRequest(BaseModel):
    # Missing text is reported by the service as a 400, not a 422.
    text: str | None = None


class TodoUpdateRequest(BaseModel):
    text: str | None = None
    completed: bool | None = None


class MessageResponse(BaseModel):
    message: str


class SummaryResponse(BaseModel):
    message: str
    summary: str | None = None


class HealthResponse(BaseModel):
    status: str


class APIError(Exception):
    """Error carrying the HTTP status and the client-facing message."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@contextmanager
def _upstream(message: str) -> Iterator[None]:
    """Map domain errors to API errors; store/notifier details stay in the log."""
    try:
        yield
    except TaskValidationError as e:
        raise APIError(status.HTTP_400_BAD_REQUEST, str(e)) from e
    except TaskNotFoundError as e:
        raise APIError(status.HTTP_404_NOT_FOUND, "Todo not found") from e
    except TodoSummaryError as e:
        logger.error("%s: %s", message, e)
        raise APIError(status.HTTP_500_INTERNAL_SERVER_ERROR, message) from e


def create_app(
    task_service: TaskService,
    summary_service: SummaryService,
    *,
    cors_origins: Sequence[str] = ("*",),
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        if on_shutdown is not None:
            await on_shutdown()

    app = FastAPI(
        title="Todo Summary Assistant", version=__version__, lifespan=lifespan
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def get_task_service() -> TaskService:
        return task_service

    def get_summary_service() -> SummaryService:
        return summary_service

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request body"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        return {"status": "OK"}

    @app.get("/api/todos", response_model=list[Task])
    async def list_todos(svc: TaskService = Depends(get_task_service)):
        with _upstream("Failed to fetch todos"):
            return await svc.list_tasks()

    @app.post(
        "/api/todos",
        response_model=Task,
        status_code=status.HTTP_201_CREATED,
        responses={400: {"model": MessageResponse}},
    )
    async def create_todo(
        payload: TodoCreateRequest, svc: TaskService = Depends(get_task_service)
    ):
        with _upstream("Database error"):
            return await svc.add_task(payload.text)

    @app.post("/api/todos/summarize", response_model=SummaryResponse)
    async def summarize_todos(svc: SummaryService = Depends(get_summary_service)):
        with _upstream("Failed to generate summary"):
            result = await svc.summarize()
        return {"message": result.message, "summary": result.summary}

    @app.put(
        "/api/todos/{todo_id}",
        response_model=Task,
        responses={400: {"model": MessageResponse}, 404: {"model": MessageResponse}},
    )
    async def update_todo(
        todo_id: str,
        payload: TodoUpdateRequest,
        svc: TaskService = Depends(get_task_service),
    ):
        with _upstream("Failed to update todo"):
            return await svc.update_task(
                todo_id, text=payload.text, completed=payload.completed
            )

    @app.delete("/api/todos/{todo_id}", response_model=MessageResponse)
    async def delete_todo(todo_id: str, svc: TaskService = Depends(get_task_service)):
        with _upstream("Failed to delete todo"):
            await svc.delete_task(todo_id)
        return {"message": "Todo deleted successfully"}

    @app.post("/api/summary", response_model=SummaryResponse)
    async def send_summary(svc: SummaryService = Depends(get_summary_service)):
        with _upstream("Failed to generate summary"):
            result = await svc.summarize(use_llm=svc.llm_available)
        return {"message": result.message, "summary": result.summary}

    @app.post("/api/summary/report", response_model=SummaryResponse)
    async def send_report(
        report_type: Literal["daily", "weekly"] = "daily",
        svc: SummaryService = Depends(get_summary_service),
    ):
        with _upstream("Failed to send report"):
            result = await svc.send_report(report_type)
        return {"message": result.message, "summary": result.summary}

    return app
