from __future__ import annotations

import os
import sqlite3
import threading
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any

from recrutpro.core.config import settings

_JOB_COLUMNS = (
    "id",
    "created_at",
    "job_title",
    "company_name",
    "location",
    "contract_type",
    "sector",
    "salary_range",
    "ad_content",
    "ad_channel",
    "views_count",
    "is_active",
    "slug",
)
_APPLICATION_COLUMNS = (
    "id",
    "created_at",
    "job_post_id",
    "first_name",
    "last_name",
    "email",
    "phone",
    "message",
    "cv_url",
    "cv_filename",
    "status",
)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _job_row(row: tuple[Any, ...]) -> dict[str, Any]:
    record = dict(zip(_JOB_COLUMNS, row))
    record["created_at"] = datetime.fromisoformat(record["created_at"])
    record["is_active"] = bool(record["is_active"])
    return record


def _application_row(row: tuple[Any, ...]) -> dict[str, Any]:
    record = dict(zip(_APPLICATION_COLUMNS, row))
    record["created_at"] = datetime.fromisoformat(record["created_at"])
    return record


class JobBoardStore:
    """SQLite persistence for published job posts and the applications they collect."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self.db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            conn = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute("PRAGMA foreign_keys=ON;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS job_posts (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    job_title TEXT NOT NULL,
                    company_name TEXT NOT NULL,
                    location TEXT NOT NULL,
                    contract_type TEXT NOT NULL,
                    sector TEXT,
                    salary_range TEXT,
                    ad_content TEXT NOT NULL,
                    ad_channel TEXT NOT NULL,
                    views_count INTEGER NOT NULL DEFAULT 0,
                    is_active INTEGER NOT NULL DEFAULT 1,
                    slug TEXT NOT NULL UNIQUE
                );
                """
            )
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS applications (
                    id TEXT PRIMARY KEY,
                    created_at TEXT NOT NULL,
                    job_post_id TEXT NOT NULL REFERENCES job_posts (id),
                    first_name TEXT NOT NULL,
                    last_name TEXT NOT NULL,
                    email TEXT NOT NULL,
                    phone TEXT,
                    message TEXT,
                    cv_url TEXT,
                    cv_filename TEXT,
                    status TEXT NOT NULL DEFAULT 'new'
                );
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_applications_job
                ON applications (job_post_id, created_at);
                """
            )
            self._conn = conn
            return conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def insert_job_post(self, data: dict[str, Any], *, slug: str) -> dict[str, Any]:
        conn = self._get_connection()
        record = {
            "id": uuid.uuid4().hex,
            "created_at": _utc_now(),
            "job_title": data["job_title"],
            "company_name": data["company_name"],
            "location": data.get("location") or "",
            "contract_type": data["contract_type"],
            "sector": data.get("sector"),
            "salary_range": data.get("salary_range"),
            "ad_content": data["ad_content"],
            "ad_channel": data.get("ad_channel") or "Jobboard",
            "views_count": 0,
            "is_active": 1,
            "slug": slug,
        }
        with self._lock:
            conn.execute(
                f"INSERT INTO job_posts ({', '.join(_JOB_COLUMNS)}) VALUES ({', '.join('?' for _ in _JOB_COLUMNS)})",
                tuple(record[column] for column in _JOB_COLUMNS),
            )
        return self.get_job_post(record["id"]) or {}

    def slug_exists(self, slug: str) -> bool:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute("SELECT 1 FROM job_posts WHERE slug = ?", (slug,)).fetchone()
        return row is not None

    def get_job_post(self, job_post_id: str) -> dict[str, Any] | None:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                f"SELECT {', '.join(_JOB_COLUMNS)} FROM job_posts WHERE id = ?",
                (job_post_id,),
            ).fetchone()
        return _job_row(row) if row else None

    def get_active_job_post_by_slug(self, slug: str) -> dict[str, Any] | None:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                f"SELECT {', '.join(_JOB_COLUMNS)} FROM job_posts WHERE slug = ? AND is_active = 1",
                (slug,),
            ).fetchone()
        return _job_row(row) if row else None

    def increment_views(self, job_post_id: str) -> None:
        conn = self._get_connection()
        with self._lock:
            conn.execute("UPDATE job_posts SET views_count = views_count + 1 WHERE id = ?", (job_post_id,))

    def list_job_posts(self) -> list[dict[str, Any]]:
        conn = self._get_connection()
        with self._lock:
            rows = conn.execute(
                f"SELECT {', '.join(_JOB_COLUMNS)} FROM job_posts ORDER BY created_at DESC"
            ).fetchall()
        return [_job_row(row) for row in rows]

    def insert_application(self, data: dict[str, Any]) -> dict[str, Any]:
        conn = self._get_connection()
        record = {
            "id": uuid.uuid4().hex,
            "created_at": _utc_now(),
            "job_post_id": data["job_post_id"],
            "first_name": data["first_name"],
            "last_name": data["last_name"],
            "email": data["email"],
            "phone": data.get("phone") or None,
            "message": data.get("message") or None,
            "cv_url": data.get("cv_url"),
            "cv_filename": data.get("cv_filename"),
            "status": "new",
        }
        with self._lock:
            conn.execute(
                f"INSERT INTO applications ({', '.join(_APPLICATION_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in _APPLICATION_COLUMNS)})",
                tuple(record[column] for column in _APPLICATION_COLUMNS),
            )
        record["created_at"] = datetime.fromisoformat(record["created_at"])
        return record

    def list_applications(self, job_post_id: str | None = None, status: str | None = None) -> list[dict[str, Any]]:
        conn = self._get_connection()
        clauses: list[str] = []
        params: list[Any] = []
        if job_post_id:
            clauses.append("job_post_id = ?")
            params.append(job_post_id)
        if status:
            clauses.append("status = ?")
            params.append(status)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with self._lock:
            rows = conn.execute(
                f"SELECT {', '.join(_APPLICATION_COLUMNS)} FROM applications {where} ORDER BY created_at DESC",
                tuple(params),
            ).fetchall()
        return [_application_row(row) for row in rows]

    def update_application_status(self, application_id: str, status: str) -> bool:
        conn = self._get_connection()
        with self._lock:
            cur = conn.execute("UPDATE applications SET status = ? WHERE id = ?", (status, application_id))
        return cur.rowcount > 0

    def get_application(self, application_id: str) -> dict[str, Any] | None:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                f"SELECT {', '.join(_APPLICATION_COLUMNS)} FROM applications WHERE id = ?",
                (application_id,),
            ).fetchone()
        return _application_row(row) if row else None


@lru_cache(maxsize=1)
def get_job_board_store() -> JobBoardStore:
    return JobBoardStore(settings.job_board_db_path)
