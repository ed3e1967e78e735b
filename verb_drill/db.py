from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

from verb_drill.models import Verb
from verb_drill.store import VerbStore
from verb_drill.tenses import all_columns

_log = logging.getLogger("verb_drill.db")

FORM_COLUMNS = all_columns()

_form_columns_sql = ",\n".join(f"    {c} TEXT" for c in FORM_COLUMNS)

SCHEMA = f"""
CREATE TABLE IF NOT EXISTS irregular_verbs (
    infinitive TEXT PRIMARY KEY,
{_form_columns_sql},
    source_file TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS file_mtimes (
    file_path TEXT PRIMARY KEY,
    mtime_ns INTEGER NOT NULL
);
"""


class Database(VerbStore):
    def __init__(self, db_path: Path | str):
        self.db_path = db_path
        self.conn = sqlite3.connect(str(db_path), check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")
        self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    # ── Import ────────────────────────────────────────────────────────────

    def import_verbs(self, verbs: Iterable[Verb]) -> int:
        """Insert or replace *verbs*, keeping the original ``created_at``."""
        columns = ["infinitive", *FORM_COLUMNS, "source_file", "created_at", "updated_at"]
        placeholders = ", ".join("?" for _ in columns)
        sql = (
            f"INSERT OR REPLACE INTO irregular_verbs ({', '.join(columns)}) "
            f"VALUES ({placeholders})"
        )
        now = datetime.now(timezone.utc).isoformat()
        count = 0
        for v in verbs:
            row = v.to_row()
            existing = self.conn.execute(
                "SELECT created_at FROM irregular_verbs WHERE infinitive = ?",
                (v.infinitive,),
            ).fetchone()
            created_at = existing[0] if existing else now
            values = [v.infinitive]
            values += [row.get(c) for c in FORM_COLUMNS]
            values += [v.source_file, created_at, now]
            self.conn.execute(sql, values)
            count += 1
        self.conn.commit()
        _log.debug("Imported %d verbs", count)
        return count

    def delete_verbs_by_source(self, source_file: str) -> int:
        """Remove all verbs originally imported from *source_file*."""
        cur = self.conn.execute(
            "DELETE FROM irregular_verbs WHERE source_file = ?", (source_file,)
        )
        self.conn.commit()
        return cur.rowcount

    # ── File mtimes ─────────────────────────────────────────────────────

    def get_file_mtime(self, file_path: str) -> int | None:
        row = self.conn.execute(
            "SELECT mtime_ns FROM file_mtimes WHERE file_path = ?", (file_path,)
        ).fetchone()
        return row[0] if row else None

    def set_file_mtime(self, file_path: str, mtime_ns: int) -> None:
        self.conn.execute(
            "INSERT OR REPLACE INTO file_mtimes (file_path, mtime_ns) VALUES (?, ?)",
            (file_path, mtime_ns),
        )
        self.conn.commit()

    # ── Verbs ─────────────────────────────────────────────────────────────

    def get_verb_count(self) -> int:
        row = self.conn.execute("SELECT COUNT(*) FROM irregular_verbs").fetchone()
        return row[0]

    def get_all_verbs(self) -> list[Verb]:
        rows = self.conn.execute(
            "SELECT * FROM irregular_verbs ORDER BY infinitive"
        ).fetchall()
        return [Verb.from_row(dict(r)) for r in rows]

    def get_verb_row(self, infinitive: str) -> dict | None:
        """The raw flat row for *infinitive*, column names as stored."""
        row = self.conn.execute(
            "SELECT * FROM irregular_verbs WHERE infinitive = ?", (infinitive,)
        ).fetchone()
        return dict(row) if row else None

    def get_verb_by_infinitive(self, infinitive: str) -> Verb | None:
        row = self.get_verb_row(infinitive)
        return Verb.from_row(row) if row else None

    def sample_random_verb(self, excluding: Iterable[str] = ()) -> Verb | None:
        excluded = list(dict.fromkeys(excluding))
        sql = "SELECT * FROM irregular_verbs"
        if excluded:
            placeholders = ", ".join("?" for _ in excluded)
            sql += f" WHERE infinitive NOT IN ({placeholders})"
        sql += " ORDER BY RANDOM() LIMIT 1"
        row = self.conn.execute(sql, excluded).fetchone()
        return Verb.from_row(dict(row)) if row else None

    def sample_other_verbs_with_participle(self, excluding: str, limit: int = 10) -> list[Verb]:
        rows = self.conn.execute(
            "SELECT * FROM irregular_verbs "
            "WHERE infinitive != ? "
            "AND participio_passado IS NOT NULL AND participio_passado != '' "
            "ORDER BY RANDOM() LIMIT ?",
            (excluding, limit),
        ).fetchall()
        return [Verb.from_row(dict(r)) for r in rows]

    # ── Stats ─────────────────────────────────────────────────────────────

    def get_stats(self) -> dict:
        verbs = self.get_all_verbs()
        created = {
            r["infinitive"]: r["created_at"]
            for r in self.conn.execute(
                "SELECT infinitive, created_at FROM irregular_verbs"
            ).fetchall()
        }
        return {
            "total_verbs": len(verbs),
            "verbs": [
                {
                    "infinitive": v.infinitive,
                    "created_at": created.get(v.infinitive),
                    "forms_populated": len(v.forms) + (1 if v.participio_passado else 0),
                }
                for v in verbs
            ],
        }
