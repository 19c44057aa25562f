from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.endpoints import router, upload_body_handler, upload_validation_handler
from app.config.settings import Settings, load_settings
from app.services.processor import DocumentProcessor
from app.services.storage import build_storage
from app.utils.logger import Log


def create_app(settings: Optional[Settings] = None, storage=None) -> FastAPI:
    settings = settings or load_settings()
    Log.configure(settings.log_level)

    app = FastAPI(title="PDF Marker API")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, upload_validation_handler)
    app.add_exception_handler(StarletteHTTPException, upload_body_handler)

    if storage is None:
        storage = build_storage(settings)
    app.state.settings = settings
    app.state.processor = DocumentProcessor(settings, storage)

    if settings.storage_mode == "local":
        output_dir = Path(settings.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        app.mount("/output", StaticFiles(directory=output_dir), name="output")

    Log.info(f"PDF Marker API configured (storage={settings.storage_mode})")
    return app


def run() -> None:
    settings = load_settings()
    app = create_app(settings)
    Log.info(f"PDF Marker API listening on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
