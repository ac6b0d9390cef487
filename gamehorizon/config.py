"""Environment-driven settings for the store and UI processes."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    db_path: Path
    store_host: str
    store_port: int
    api_url: str
    ui_host: str
    ui_port: int
    http_timeout: float
    log_level: str


def load_settings() -> Settings:
    store_port = int(os.getenv("GAMEHORIZON_STORE_PORT", "3001"))
    return Settings(
        db_path=Path(os.getenv("GAMEHORIZON_DB_PATH", str(BASE_DIR / "db.json"))).expanduser(),
        store_host=os.getenv("GAMEHORIZON_STORE_HOST", "127.0.0.1"),
        store_port=store_port,
        api_url=os.getenv("GAMEHORIZON_API_URL", f"http://localhost:{store_port}"),
        ui_host=os.getenv("GAMEHORIZON_UI_HOST", "127.0.0.1"),
        ui_port=int(os.getenv("GAMEHORIZON_UI_PORT", "3000")),
        http_timeout=float(os.getenv("GAMEHORIZON_HTTP_TIMEOUT", "10.0")),
        log_level=os.getenv("GAMEHORIZON_LOG_LEVEL", "INFO"),
    )
