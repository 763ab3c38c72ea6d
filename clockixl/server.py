"""FastAPI application exposing the local API key store."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .errors import ValidationError
from .keystore import KeyStore

logger = logging.getLogger(__name__)


class ApiKeyPayload(BaseModel):
    apiKey: Optional[str] = None


def create_app(store: Optional[KeyStore] = None) -> FastAPI:
    """Instantiate the FastAPI application."""
    app = FastAPI(title="clockiXL", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.key_store = store or KeyStore()

    @app.exception_handler(RequestValidationError)
    async def _invalid_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
        # missing body, malformed JSON or a non-string apiKey
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"detail": "API key is required"})

    @app.get("/api/key")
    def get_key(request: Request) -> Dict[str, Any]:
        try:
            return {"apiKey": request.app.state.key_store.get()}
        except OSError as exc:
            logger.exception("Failed to read API key")
            raise HTTPException(status_code=500, detail="Failed to read API key") from exc

    @app.post("/api/key")
    def save_key(payload: ApiKeyPayload, request: Request) -> Dict[str, Any]:
        try:
            request.app.state.key_store.save(payload.apiKey or "")
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=exc.message) from exc
        except OSError as exc:
            logger.exception("Failed to save API key")
            raise HTTPException(status_code=500, detail="Failed to save API key") from exc
        return {"success": True, "message": "API key saved"}

    @app.delete("/api/key")
    def delete_key(request: Request) -> Dict[str, Any]:
        try:
            request.app.state.key_store.delete()
        except OSError as exc:
            logger.exception("Failed to delete API key")
            raise HTTPException(status_code=500, detail="Failed to delete API key") from exc
        return {"success": True, "message": "API key deleted"}

    return app


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 3000,
    store: Optional[KeyStore] = None,
    log_level: str = "info",
) -> None:
    """Serve the key store API with uvicorn."""
    app = create_app(store)
    logger.info("API key will be saved to: %s", app.state.key_store.path)
    uvicorn.run(app, host=host, port=port, log_level=log_level)
