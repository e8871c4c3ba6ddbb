"""Prompt store backed by SQLite.

Usage:
    store = PromptStore(db_path="~/.cue/prompts.db")
    store.set("review", "Review {{file}} for bugs", tags=["code"])
    prompt = store.get("review")
"""

from __future__ import annotations
import json
import logging
import sqlite3
import time
from pathlib import Path

from .types import Prompt

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS prompts (
    name TEXT PRIMARY KEY,
    content TEXT NOT NULL,
    description TEXT,
    tags TEXT NOT NULL DEFAULT '[]',
    variables TEXT NOT NULL DEFAULT '[]',
    version INTEGER NOT NULL DEFAULT 1,
    created_at REAL NOT NULL,
    modified_at REAL NOT NULL
);
"""

_COLUMNS = "name, content, description, tags, variables, version, created_at, modified_at"


def _row_to_prompt(row: tuple) -> Prompt:
    name, content, description, tags, variables, version, created, modified = row
    return Prompt(
        name=name,
        content=content,
        description=description,
        tags=json.loads(tags),
        variables=json.loads(variables),
        version=version,
        created_at=created,
        modified_at=modified,
    )


class PromptStore:
    """Named prompt records in a single SQLite table."""

    __slots__ = ("_db",)

    def __init__(self, db_path: str | Path = "prompts.db") -> None:
        db_path = Path(db_path).expanduser()
        db_path.parent.mkdir(parents=True, exist_ok=True)
        self._db = sqlite3.connect(str(db_path))
        self._db.executescript(_SCHEMA)

    def get(self, name: str) -> Prompt | None:
        row = self._db.execute(
            f"SELECT {_COLUMNS} FROM prompts WHERE name = ?", (name,),
        ).fetchone()
        return _row_to_prompt(row) if row else None

    def exists(self, name: str) -> bool:
        row = self._db.execute("SELECT 1 FROM prompts WHERE name = ?", (name,)).fetchone()
        return row is not None

    def set(
        self,
        name: str,
        content: str,
        *,
        description: str | None = None,
        tags: list[str] | None = None,
        variables: list[str] | None = None,
    ) -> Prompt:
        """Insert a prompt, or replace it and bump its version."""
        now = time.time()
        existing = self.get(name)
        version = existing.version + 1 if existing else 1
        created = existing.created_at if existing else now

        self._db.execute(
            f"INSERT OR REPLACE INTO prompts ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                name, content, description,
                json.dumps(tags or []), json.dumps(variables or []),
                version, created, now,
            ),
        )
        self._db.commit()
        logger.debug("stored prompt %s v%d", name, version)
        return Prompt(
            name=name, content=content, description=description,
            tags=list(tags or []), variables=list(variables or []),
            version=version, created_at=created, modified_at=now,
        )

    def update_description(self, name: str, description: str) -> Prompt | None:
        prompt = self.get(name)
        if prompt is None:
            return None
        return self.set(
            name, prompt.content,
            description=description, tags=prompt.tags, variables=prompt.variables,
        )

    def all(self) -> list[Prompt]:
        rows = self._db.execute(f"SELECT {_COLUMNS} FROM prompts ORDER BY name").fetchall()
        return [_row_to_prompt(r) for r in rows]

    def by_tags(self, tags: list[str]) -> list[Prompt]:
        """Prompts carrying at least one of ``tags``."""
        wanted = set(tags)
        return [p for p in self.all() if wanted.intersection(p.tags)]

    def delete(self, name: str) -> bool:
        cur = self._db.execute("DELETE FROM prompts WHERE name = ?", (name,))
        self._db.commit()
        return cur.rowcount > 0

    def close(self) -> None:
        self._db.close()
