from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.json"

DEFAULTS = {
    "llm_provider": "deepseek",
    "llm_model": "deepseek-chat",
    "llm_base_url": "https://api.deepseek.com",
    "llm_api_key": "",
    "remote_timeout": 20.0,
    "max_dictation_words": 10,
    "spelling_error_count": 3,
    "db_path": "dictee.db",
    "max_upload_bytes": 10 * 1024 * 1024,
}

API_KEY_ENV = {
    "deepseek": "DEEPSEEK_API_KEY",
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


@dataclass
class Settings:
    llm_provider: str = DEFAULTS["llm_provider"]
    llm_model: str = DEFAULTS["llm_model"]
    llm_base_url: str = DEFAULTS["llm_base_url"]
    llm_api_key: str = DEFAULTS["llm_api_key"]
    remote_timeout: float = DEFAULTS["remote_timeout"]
    max_dictation_words: int = DEFAULTS["max_dictation_words"]
    spelling_error_count: int = DEFAULTS["spelling_error_count"]
    db_path: str = DEFAULTS["db_path"]
    max_upload_bytes: int = DEFAULTS["max_upload_bytes"]

    @property
    def project_root(self) -> Path:
        return Path(__file__).resolve().parent.parent

    @property
    def db_full_path(self) -> Path:
        return self.project_root / self.db_path

    @property
    def api_key(self) -> str:
        """Configured key, else the provider's environment variable; may be empty."""
        if self.llm_api_key:
            return self.llm_api_key
        env = API_KEY_ENV.get(self.llm_provider)
        return os.environ.get(env, "") if env else ""

    def to_dict(self, include_secrets: bool = True) -> dict:
        d = {
            "llm_provider": self.llm_provider,
            "llm_model": self.llm_model,
            "llm_base_url": self.llm_base_url,
            "llm_api_key": self.llm_api_key,
            "remote_timeout": self.remote_timeout,
            "max_dictation_words": self.max_dictation_words,
            "spelling_error_count": self.spelling_error_count,
            "db_path": self.db_path,
            "max_upload_bytes": self.max_upload_bytes,
        }
        if not include_secrets:
            del d["llm_api_key"]
            d["has_api_key"] = bool(self.api_key)
        return d


def load_settings() -> Settings:
    if CONFIG_PATH.exists():
        raw = json.loads(CONFIG_PATH.read_text())
        known = {f.name for f in Settings.__dataclass_fields__.values()}
        filtered = {k: v for k, v in raw.items() if k in known}
        return Settings(**filtered)
    return Settings()


def save_settings(settings: Settings) -> None:
    CONFIG_PATH.write_text(json.dumps(settings.to_dict(), indent=4) + "\n")
