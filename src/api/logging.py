"""SQLite log of attendance export requests and their data-quality warnings."""

import sqlite3
import uuid
from dataclasses import astuple, dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path

from core.config import DB_PATH


@dataclass
class RequestLog:
    """One export request; every field but warnings maps to an api_requests column."""

    request_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    endpoint: str = ""
    method: str = ""
    client_ip: str | None = None
    window_start: str | None = None
    window_end: str | None = None
    record_count: int | None = None
    status_code: int = 0
    error_code: str | None = None
    error_message: str | None = None
    processing_time_ms: int = 0
    sheets_generated: int | None = None
    total_hours: float | None = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def columns(cls) -> list[str]:
        return [f.name for f in fields(cls) if f.name != "warnings"]

    def row(self) -> tuple:
        return astuple(self)[:-1]


def log_request(log: RequestLog, db_path: Path | None = None) -> None:
    """Insert the request and one detail row per warning."""
    columns = RequestLog.columns()
    placeholders = ", ".join("?" for _ in columns)

    conn = sqlite3.connect(db_path or DB_PATH)
    try:
        conn.execute(
            f"INSERT INTO api_requests ({', '.join(columns)}) VALUES ({placeholders})",
            log.row(),
        )
        conn.executemany(
            "INSERT INTO api_request_details (request_id, detail_type, message) VALUES (?, 'warning', ?)",
            [(log.request_id, message) for message in log.warnings],
        )
        conn.commit()
    finally:
        conn.close()
