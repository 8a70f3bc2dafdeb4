"""HTTP API exposing the CSV pipeline and the users table."""
from __future__ import annotations

import os
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, ConfigDict, Field

from . import database, pipeline
from .errors import (
    EmptyInputError,
    InvalidHeaderError,
    SinkError,
    SourceNotFoundError,
    SourceUnavailableError,
    ValidationError,
)
from .observers import CompositeObserver, LoggingObserver, RecordingObserver
from .settings import (
    BATCH_SIZE_ENV,
    CSV_PATH_ENV,
    DB_PATH_ENV,
    DEFAULT_DB_PATH,
    resolve_batch_size,
)

DEFAULT_DB = Path(os.environ.get(DB_PATH_ENV, DEFAULT_DB_PATH))


class ProcessRequest(BaseModel):
    path: Optional[str] = Field(
        default=None,
        description=f"Path to the CSV file (defaults to the {CSV_PATH_ENV} environment variable)",
    )
    batch_size: Optional[int] = Field(default=None, alias="batchSize", ge=1)

    model_config = ConfigDict(populate_by_name=True)


def _normalise_path(path_str: str) -> Path:
    path = Path(path_str).expanduser()
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


def _ensure_database(db_path: Path) -> None:
    if not db_path.exists():
        db_path.parent.mkdir(parents=True, exist_ok=True)
        database.init_db(db_path)


class PipelineService:
    """Wrapper around the pipeline that enforces consistent database usage."""

    def __init__(self, database_path: Path | str | None = None) -> None:
        self.database_path = Path(database_path or DEFAULT_DB)

    def _connection(self):
        _ensure_database(self.database_path)
        conn = database.get_connection(self.database_path)
        database.run_migrations(conn)
        return conn

    def process_csv(self, request: ProcessRequest) -> dict:
        path_str = request.path or os.environ.get(CSV_PATH_ENV)
        if not path_str:
            raise HTTPException(
                status_code=500,
                detail=f"{CSV_PATH_ENV} is not configured and no path was provided",
            )
        try:
            batch_size = resolve_batch_size(
                request.batch_size if request.batch_size is not None else os.environ.get(BATCH_SIZE_ENV)
            )
        except ValueError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

        recorder = RecordingObserver()
        observer = CompositeObserver(recorder, LoggingObserver())
        with closing(self._connection()) as conn:
            try:
                summary = pipeline.process_file(
                    conn,
                    _normalise_path(path_str),
                    batch_size=batch_size,
                    observer=observer,
                )
            except SourceNotFoundError as exc:
                raise HTTPException(status_code=404, detail=str(exc)) from exc
            except SourceUnavailableError as exc:
                raise HTTPException(status_code=500, detail=str(exc)) from exc
            except (EmptyInputError, InvalidHeaderError, ValidationError) as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
            except SinkError as exc:
                raise HTTPException(status_code=502, detail=str(exc)) from exc

        distribution = summary.distribution
        return {
            "success": True,
            "message": "CSV processed successfully",
            "data": {
                "recordsProcessed": summary.rows_loaded,
                "duration": f"{summary.duration:.2f}s",
                "ageDistribution": distribution.percentages if distribution else None,
                "skippedRows": [warning.line_number for warning in recorder.skipped],
            },
        }

    def health(self) -> dict:
        with closing(self._connection()) as conn:
            conn.execute("SELECT 1").fetchone()
        return {
            "status": "healthy",
            "server": "running",
            "database": "connected",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def list_users(self, limit: int) -> dict:
        with closing(self._connection()) as conn:
            users = database.fetch_users(conn, limit=limit)
        return {"success": True, "count": len(users), "data": users}

    def clear_users(self) -> dict:
        with closing(self._connection()) as conn:
            deleted = database.delete_users(conn)
        return {
            "success": True,
            "message": f"Deleted {deleted} records",
            "deletedCount": deleted,
        }


def create_app(database_path: Path | str | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    service = PipelineService(database_path=database_path)
    app = FastAPI(title="nestedcsv", version="1.0.0")

    @app.post("/process-csv")
    def process_csv(request: ProcessRequest | None = None):
        return service.process_csv(request or ProcessRequest())

    @app.get("/health")
    def health():
        try:
            return service.health()
        except Exception as exc:
            raise HTTPException(
                status_code=500,
                detail={
                    "status": "unhealthy",
                    "server": "running",
                    "database": "disconnected",
                    "error": str(exc),
                },
            ) from exc

    @app.get("/users")
    def users(limit: int = Query(default=100, ge=1, le=1000)):
        return service.list_users(limit)

    @app.delete("/users")
    def clear_users():
        return service.clear_users()

    return app


def app_factory() -> FastAPI:
    """Entry point used by ASGI servers such as uvicorn."""

    return create_app()


app = app_factory()


if __name__ == "__main__":  # pragma: no cover - convenience for manual testing
    import uvicorn

    uvicorn.run("nestedcsv.api:app", host="0.0.0.0", port=3000, reload=True)
