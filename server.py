"""
Old phone pad web service

Serves the decoder over HTTP and hosts the small front end in static/.

    POST /decode  {"input": "4433555 555666#"}  ->  {"decoded": "HELLO"}
"""
import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from multitap import decode

BASE_DIR = Path(__file__).resolve().parent

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Service settings, read from OLDPHONEPAD_* variables or .env"""

    model_config = SettingsConfigDict(
        env_prefix="OLDPHONEPAD_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "Old Phone Pad"
    host: str = Field(default="127.0.0.1", description="Bind address")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    log_level: str = Field(default="INFO", description="Logging level")
    static_dir: Path = Field(default=BASE_DIR / "static", description="Front end directory")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Send all records to stderr as plain text"""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


class DecodeRequest(BaseModel):
    # Older clients send the PascalCase field name
    input: Optional[str] = Field(default=None, validation_alias=AliasChoices("input", "Input"))


class DecodeResponse(BaseModel):
    decoded: str


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the FastAPI app; the front end lives under /static with its page at /"""
    settings = settings or get_settings()

    app = FastAPI(title=settings.app_name, version="0.1.0")

    @app.post("/decode", response_model=DecodeResponse)
    def decode_keys(request: DecodeRequest) -> DecodeResponse:
        return DecodeResponse(decoded=decode(request.input or ""))

    @app.get("/health")
    def health():
        return {"status": "ok"}

    index_page = settings.static_dir / "index.html"
    if index_page.is_file():
        app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

        @app.get("/", include_in_schema=False)
        def index():
            return FileResponse(index_page)
    else:
        logger.warning(f"Front end page not found, front end disabled: {index_page}")

    return app


app = create_app()


def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
