import sqlite3
from pathlib import Path
from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from jobtolk.config import settings


class Base(DeclarativeBase):
    pass


def _set_sqlite_pragmas(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(db_path: Path | None = None):
    path = db_path or settings.db_path
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )
    event.listen(engine, "connect", _set_sqlite_pragmas)
    return engine


engine = get_engine()
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


SCHEMA_SQL = """\
-- ============================================================
-- PROFILES
-- ============================================================
CREATE TABLE IF NOT EXISTS profiles (
    id                   TEXT PRIMARY KEY,
    user_id              TEXT NOT NULL UNIQUE,
    username             TEXT,
    full_name            TEXT,
    bio                  TEXT,
    company_name         TEXT,
    avatar_url           TEXT,
    account_type         TEXT NOT NULL DEFAULT 'freelancer'
                         CHECK(account_type IN ('freelancer','employer')),
    service_type         TEXT CHECK(service_type IN ('remote','local')),
    location_city        TEXT,
    skills               TEXT NOT NULL DEFAULT '[]',
    service_categories   TEXT NOT NULL DEFAULT '[]',
    onboarding_completed INTEGER NOT NULL DEFAULT 0,
    created_at           TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at           TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_profiles_username ON profiles(username);
CREATE INDEX IF NOT EXISTS idx_profiles_created ON profiles(created_at);

-- ============================================================
-- JOBS
-- ============================================================
CREATE TABLE IF NOT EXISTS jobs (
    id                 TEXT PRIMARY KEY,
    employer_id        TEXT NOT NULL,
    title              TEXT NOT NULL,
    description        TEXT NOT NULL DEFAULT '',
    job_type           TEXT NOT NULL,
    category           TEXT,
    location           TEXT,
    required_skills    TEXT NOT NULL DEFAULT '[]',
    service_categories TEXT NOT NULL DEFAULT '[]',
    budget_min         REAL,
    budget_max         REAL,
    status             TEXT NOT NULL DEFAULT 'open'
                       CHECK(status IN ('open','in_progress','filled','closed')),
    created_at         TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now')),
    updated_at         TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%SZ','now'))
);

CREATE INDEX IF NOT EXISTS idx_jobs_status ON jobs(status);
CREATE INDEX IF NOT EXISTS idx_jobs_employer ON jobs(employer_id);
CREATE INDEX IF NOT EXISTS idx_jobs_created ON jobs(created_at);
"""


MIGRATIONS = [
    # v0.2: local service providers
    "ALTER TABLE profiles ADD COLUMN service_type TEXT",
    "ALTER TABLE profiles ADD COLUMN service_categories TEXT NOT NULL DEFAULT '[]'",
    "ALTER TABLE jobs ADD COLUMN service_categories TEXT NOT NULL DEFAULT '[]'",
]


def init_db(db_path: Path | None = None):
    path = db_path or settings.db_path
    conn = sqlite3.connect(str(path))
    conn.executescript(SCHEMA_SQL)
    # Run migrations idempotently (ALTER TABLE fails if the column exists)
    for migration in MIGRATIONS:
        try:
            conn.execute(migration)
            conn.commit()
        except sqlite3.OperationalError:
            pass  # column already exists
    conn.close()
