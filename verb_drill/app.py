"""FastAPI application with all routes."""
from __future__ import annotations

import logging
import os
import random
import time
import uuid

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, HTTPException, Request

from verb_drill.answers import check_answer
from verb_drill.config import Settings, load_settings, save_settings
from verb_drill.db import Database
from verb_drill.distractors import multiple_choice_options
from verb_drill.exercise_generator import generate_with_fallback
from verb_drill.models import Exercise
from verb_drill.parsers.verb_table_parser import parse_verb_file
from verb_drill.tenses import InvalidTenseError

app = FastAPI(title="Verb Drill")

# Global state (initialized in startup)
_db: Database | None = None
_settings: Settings | None = None
_rng = random.Random()

_log = logging.getLogger("verb_drill.api")


def get_db() -> Database:
    assert _db is not None
    return _db


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


def _auto_import_if_changed(db: Database, settings: Settings) -> None:
    """Re-import seed files whose mtime has changed since the last import."""
    log = logging.getLogger("auto-import")
    for vf in settings.resolved_verb_files():
        if not vf.exists():
            continue
        current_mtime = vf.stat().st_mtime_ns
        if db.get_file_mtime(str(vf.resolve())) == current_mtime:
            continue
        log.info("Changed: %s, re-importing", vf.name)
        try:
            verbs = parse_verb_file(vf)
        except ValueError as e:
            log.warning("  Skipping %s, previous verbs kept: %s", vf.name, e)
            continue
        db.delete_verbs_by_source(vf.name)
        n = db.import_verbs(verbs)
        log.info("  %d verbs imported", n)
        db.set_file_mtime(str(vf.resolve()), current_mtime)


@app.on_event("startup")
async def startup():
    global _db, _settings
    if _db is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    _db = Database(_settings.db_full_path)
    if not os.environ.get("VERB_DRILL_NO_AUTO_IMPORT"):
        _auto_import_if_changed(_db, _settings)


@app.on_event("shutdown")
async def shutdown():
    if _db:
        _db.close()


# ── API: Exercises ────────────────────────────────────────────────────────

@app.post("/api/exercise")
async def api_exercise(request: Request):
    body = await request.json()
    s = get_settings()
    db = get_db()

    enabled_tenses = body.get("enabledTenses", s.enabled_tenses) or []
    exclude = body.get("excludeRecentVerbs") or []
    include_vos = bool(body.get("includeVos", s.include_vos))
    include_mc = bool(body.get("includeMultipleChoice", False))

    try:
        exercise = generate_with_fallback(
            db, enabled_tenses, exclude, include_vos,
            attempts=s.request_attempts,
            drop_exclusions_after=s.drop_exclusions_after,
            rng=_rng,
            infinitive=body.get("infinitive"),
            max_attempts=s.max_generation_attempts,
        )
    except InvalidTenseError as e:
        raise HTTPException(400, str(e))

    if exercise is None:
        raise HTTPException(404, "No exercises available with current configuration")

    if include_mc:
        try:
            exercise.multiple_choice_options = multiple_choice_options(
                db, exercise, s.num_options, include_vos, rng=_rng,
            )
        except ValueError as e:
            raise HTTPException(400, str(e))

    _log.info("Exercise %s (mc=%s)", exercise.id, include_mc)
    return {
        "exercise": exercise.to_dict(),
        "sessionId": body.get("sessionId") or f"session-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}",
        "metadata": {
            "enabledTenses": len(enabled_tenses),
            "excludedVerbs": len(exclude),
            "includeMultipleChoice": include_mc,
        },
    }


@app.post("/api/check-answer")
async def api_check_answer(request: Request):
    body = await request.json()
    if "exercise" not in body or "answer" not in body:
        raise HTTPException(400, "exercise and answer are required")
    raw = body["exercise"]
    if not isinstance(raw, dict):
        raise HTTPException(400, "exercise must be an object")
    correct_answer = raw.get("correctAnswer")
    if not isinstance(correct_answer, str) or not correct_answer:
        raise HTTPException(400, "exercise.correctAnswer must be a non-empty string")
    if not isinstance(raw.get("correctAnswerAlt"), (str, type(None))):
        raise HTTPException(400, "exercise.correctAnswerAlt must be a string or null")
    try:
        exercise = Exercise.from_dict(raw)
    except KeyError as e:
        raise HTTPException(400, f"exercise is missing {e.args[0]}")
    correct = check_answer(exercise, str(body["answer"]), bool(body.get("multipleChoice", False)))
    return {
        "correct": correct,
        "correctAnswer": exercise.correct_answer,
        "correctAnswerAlt": exercise.correct_answer_alt,
    }


# ── API: Verbs ────────────────────────────────────────────────────────────

@app.get("/api/verbs")
async def api_verbs():
    return {"verbs": [v.infinitive for v in get_db().get_all_verbs()]}


@app.get("/api/verbs/{infinitive}")
async def api_verb(infinitive: str):
    row = get_db().get_verb_row(infinitive)
    if row is None:
        raise HTTPException(404, "Verb not found")
    return row


# ── API: Stats ────────────────────────────────────────────────────────────

@app.get("/api/stats")
async def api_stats():
    return get_db().get_stats()


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    body = await request.json()
    s = get_settings()
    known = {f.name for f in Settings.__dataclass_fields__.values()}
    if "num_options" in body:
        n = body["num_options"]
        if isinstance(n, bool) or not isinstance(n, int) or n < 2:
            raise HTTPException(400, "num_options must be an integer of at least 2")
    for k, v in body.items():
        if k in known:
            setattr(s, k, v)
    save_settings(s)
    return s.to_dict()
