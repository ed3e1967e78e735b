from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from verb_drill.tenses import TENSES

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "db_path": "verbs.db",
    "verb_files": [],
    "enabled_tenses": list(TENSES),
    "include_vos": False,
    "num_options": 4,
    "recent_verbs_window": 10,
    "max_generation_attempts": 20,
    "request_attempts": 5,
    "drop_exclusions_after": 3,
}


@dataclass
class Settings:
    db_path: str = DEFAULTS["db_path"]
    verb_files: list[str] = field(default_factory=lambda: list(DEFAULTS["verb_files"]))
    enabled_tenses: list[str] = field(default_factory=lambda: list(DEFAULTS["enabled_tenses"]))
    include_vos: bool = DEFAULTS["include_vos"]
    num_options: int = DEFAULTS["num_options"]
    recent_verbs_window: int = DEFAULTS["recent_verbs_window"]
    max_generation_attempts: int = DEFAULTS["max_generation_attempts"]
    request_attempts: int = DEFAULTS["request_attempts"]
    drop_exclusions_after: int = DEFAULTS["drop_exclusions_after"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def data_dir(self) -> Path:
        return self.project_root / "data"

    @property
    def db_full_path(self) -> Path:
        return self.project_root / self.db_path

    def resolved_verb_files(self) -> list[Path]:
        if self.verb_files:
            root = self.project_root
            return [root / f for f in self.verb_files]
        return sorted(self.data_dir.glob("*.json"))

    def to_dict(self) -> dict:
        return {
            "db_path": self.db_path,
            "verb_files": list(self.verb_files),
            "enabled_tenses": list(self.enabled_tenses),
            "include_vos": self.include_vos,
            "num_options": self.num_options,
            "recent_verbs_window": self.recent_verbs_window,
            "max_generation_attempts": self.max_generation_attempts,
            "request_attempts": self.request_attempts,
            "drop_exclusions_after": self.drop_exclusions_after,
        }


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
