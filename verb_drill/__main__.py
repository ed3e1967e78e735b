"""CLI entry point for verb-drill.

Usage:
  python -m verb_drill serve [--port PORT] [--host HOST] [--no-auto-import]
  python -m verb_drill stop
  python -m verb_drill status
  python -m verb_drill import [FILE ...]
  python -m verb_drill drill [--tense TENSE ...] [--verb INFINITIVE] [--vos] [--count N]
  python -m verb_drill stats
"""
from __future__ import annotations

import os
import signal
import string
import sys
from pathlib import Path

PID_FILE = Path(__file__).resolve().parent.parent / ".server.pid"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "status":
        _status()
    elif command == "import":
        _import_verbs(args[1:])
    elif command == "drill":
        _drill(args[1:])
    elif command == "stats":
        _stats()
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, status, import, drill, stats")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            return args[i + 1]
    return default


def _parse_repeated(args: list[str], name: str) -> list[str]:
    return [args[i + 1] for i, a in enumerate(args) if a == name and i + 1 < len(args)]


def _read_pid() -> int | None:
    """Read PID from file, return None if stale or missing."""
    if not PID_FILE.exists():
        return None
    try:
        pid = int(PID_FILE.read_text().strip())
        os.kill(pid, 0)
        return pid
    except (ValueError, ProcessLookupError, PermissionError):
        PID_FILE.unlink(missing_ok=True)
        return None


def _stop() -> bool:
    """Stop a running server. Returns True if a server was stopped."""
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
        return False
    try:
        os.kill(pid, signal.SIGTERM)
        print(f"Stopped server (PID {pid}).")
        return True
    except ProcessLookupError:
        print("Server was not running (stale PID file removed).")
        return False
    finally:
        PID_FILE.unlink(missing_ok=True)


def _status():
    pid = _read_pid()
    if pid is None:
        print("Server is not running.")
    else:
        print(f"Server is running (PID {pid}).")


def _serve(args: list[str]):
    import uvicorn

    existing = _read_pid()
    if existing is not None:
        print(f"Server already running (PID {existing}). Use 'stop' first.")
        sys.exit(1)

    if "--no-auto-import" in args:
        os.environ["VERB_DRILL_NO_AUTO_IMPORT"] = "1"

    port = int(_parse_flag(args, "--port", "8766"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    PID_FILE.write_text(str(os.getpid()))

    print(f"Starting Verb Drill on http://{host}:{port}")
    print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(
            "verb_drill.app:app",
            host=host,
            port=port,
            reload=False,
            timeout_graceful_shutdown=5,
        )
    finally:
        PID_FILE.unlink(missing_ok=True)
        os.environ.pop("VERB_DRILL_NO_AUTO_IMPORT", None)


def _import_verbs(args: list[str]):
    from verb_drill.config import load_settings
    from verb_drill.db import Database
    from verb_drill.parsers.verb_table_parser import parse_verb_file

    settings = load_settings()
    db = Database(settings.db_full_path)

    files = [Path(a) for a in args] if args else settings.resolved_verb_files()
    total = 0
    for vf in files:
        if not vf.exists():
            print(f"  Skipping (not found): {vf}")
            continue
        print(f"  Parsing: {vf.name}")
        try:
            verbs = parse_verb_file(vf)
        except ValueError as e:
            print(f"    Error: {e}")
            continue
        db.delete_verbs_by_source(vf.name)
        n = db.import_verbs(verbs)
        total += n
        print(f"    {n} verbs")
        db.set_file_mtime(str(vf.resolve()), vf.stat().st_mtime_ns)

    print(f"\nImported {total} verbs, {db.get_verb_count()} in DB")
    db.close()


def _option_labels(n: int) -> list[str]:
    if n <= len(string.ascii_uppercase):
        return list(string.ascii_uppercase[:n])
    return [str(i) for i in range(1, n + 1)]


def _drill(args: list[str]):
    from verb_drill.config import load_settings
    from verb_drill.db import Database
    from verb_drill.distractors import multiple_choice_options
    from verb_drill.exercise_generator import generate_with_fallback, update_recent_verbs
    from verb_drill.tenses import InvalidTenseError

    settings = load_settings()
    tenses = _parse_repeated(args, "--tense") or settings.enabled_tenses
    include_vos = "--vos" in args or settings.include_vos
    verb = _parse_flag(args, "--verb", "") or None
    count = int(_parse_flag(args, "--count", "1"))

    db = Database(settings.db_full_path)
    try:
        if db.get_verb_count() == 0:
            print("No verbs in database. Run 'import' first.")
            sys.exit(1)

        recent: list[str] = []
        for i in range(count):
            try:
                exercise = generate_with_fallback(
                    db, tenses, recent, include_vos,
                    attempts=settings.request_attempts,
                    drop_exclusions_after=settings.drop_exclusions_after,
                    infinitive=verb,
                    max_attempts=settings.max_generation_attempts,
                )
            except InvalidTenseError as e:
                print(f"Error: {e}")
                sys.exit(1)

            if exercise is None:
                print("No exercise available with the current configuration.")
                sys.exit(1)
            recent = update_recent_verbs(recent, exercise.infinitive, settings.recent_verbs_window)

            try:
                options = multiple_choice_options(db, exercise, settings.num_options, include_vos)
            except ValueError as e:
                print(f"Error: {e}")
                sys.exit(1)

            if i:
                print()
            print(exercise.question)
            for label, option in zip(_option_labels(len(options)), options):
                print(f"  {label}) {option}")
            answer = exercise.correct_answer
            if exercise.correct_answer_alt:
                answer += f" / {exercise.correct_answer_alt}"
            print(f"\nAnswer: {answer}")
    finally:
        db.close()


def _stats():
    from verb_drill.config import load_settings
    from verb_drill.db import Database

    settings = load_settings()
    db = Database(settings.db_full_path)
    stats = db.get_stats()

    print("Verb Drill Stats")
    print("=" * 40)
    print(f"Total verbs:        {stats['total_verbs']}")
    for v in stats["verbs"]:
        print(f"  {v['infinitive']:<16s} {v['forms_populated']:3d} forms")
    db.close()


if __name__ == "__main__":
    main()
