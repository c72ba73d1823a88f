from __future__ import annotations

from typing import Callable, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


# -------------------------------------------------------------------
# Engine/session creation
# -------------------------------------------------------------------

def make_engine(database_url: Optional[str]) -> Engine:
    if not database_url:
        raise RuntimeError("DATABASE_URL is not set")

    return create_engine(
        database_url,
        pool_pre_ping=True,
        future=True,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        future=True,
    )


def get_session_factory(request: Request) -> Callable[[], Session]:
    """
    The factory the app lifespan put on app.state.
    """
    return request.app.state.session_factory


# -------------------------------------------------------------------
# Schema
# -------------------------------------------------------------------

def create_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(
            text(
                """
                CREATE TABLE IF NOT EXISTS prompt (
                  prompt_id  VARCHAR(255) PRIMARY KEY,
                  prompt     TEXT NOT NULL
                )
                """
            )
        )


# -------------------------------------------------------------------
# Prompt lookup
# -------------------------------------------------------------------

def fetch_prompt(db: Session, prompt_id: str) -> Optional[str]:
    """
    Returns the reference text for prompt_id, or None if there is no such row.
    """
    row = db.execute(
        text("SELECT prompt FROM prompt WHERE prompt_id = :id"),
        {"id": prompt_id},
    ).fetchone()
    return str(row[0]) if row else None


def lookup_prompt(session_factory: Callable[[], Session], prompt_id: str) -> Optional[str]:
    """
    fetch_prompt in a session owned by the calling thread. The session is
    opened and closed here, so a caller that stops waiting never closes it
    while a query is still running.
    """
    db = session_factory()
    try:
        return fetch_prompt(db, prompt_id)
    finally:
        db.close()


def insert_prompt(db: Session, *, prompt_id: str, prompt: str) -> None:
    db.execute(
        text(
            """
            INSERT INTO prompt (prompt_id, prompt)
            VALUES (:id, :prompt)
            """
        ),
        {"id": prompt_id, "prompt": prompt},
    )
    db.commit()
