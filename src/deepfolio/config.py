from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from .prompts import DEFAULT_TEMPERATURES, GenerationTask


DEFAULT_MODEL = "gpt-4o-mini"


def repo_root() -> Path:
    # Assumes this file lives at: repo/src/deepfolio/config.py
    return Path(__file__).resolve().parents[2]


def default_settings_path() -> Path:
    return repo_root() / "configs" / "settings.yaml"


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(settings_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    configs/settings.yaml is optional; every key has a default.
    """
    path = settings_path or default_settings_path()
    if not path.exists():
        return {}
    settings = load_yaml(path)
    if not isinstance(settings, dict):
        raise ValueError(f"{path} must contain a mapping at the top level")
    return settings


@dataclass(frozen=True)
class AppConfig:
    env: str
    openai_api_key_present: bool
    openai_model: str
    timeline_temperature: float
    simple_portfolio_temperature: float
    state_path: Path
    output_dir: Path
    settings: Dict[str, Any]

    def temperature_for(self, task: GenerationTask) -> float:
        if GenerationTask(task) is GenerationTask.TIMELINE:
            return self.timeline_temperature
        return self.simple_portfolio_temperature


def _resolve(root: Path, value: Any, default: str) -> Path:
    p = Path(str(value or default)).expanduser()
    return p if p.is_absolute() else (root / p)


def load_config(settings_path: Optional[Path] = None) -> AppConfig:
    load_dotenv(repo_root() / ".env")

    settings = load_settings(settings_path)
    root = repo_root()

    generation = settings.get("generation", {}) or {}
    temps = generation.get("temperature", {}) or {}

    env = os.getenv("APP_ENV", settings.get("app", {}).get("env", "local"))
    model = (os.getenv("OPENAI_MODEL") or "").strip() or str(generation.get("model") or DEFAULT_MODEL)
    openai_key = os.getenv("OPENAI_API_KEY", "")

    return AppConfig(
        env=str(env),
        openai_api_key_present=bool(openai_key.strip()),
        openai_model=model,
        timeline_temperature=float(temps.get("timeline", DEFAULT_TEMPERATURES[GenerationTask.TIMELINE])),
        simple_portfolio_temperature=float(
            temps.get("simple_portfolio", DEFAULT_TEMPERATURES[GenerationTask.SIMPLE_PORTFOLIO])
        ),
        state_path=_resolve(root, (settings.get("state", {}) or {}).get("path"), ".deepfolio/state.json"),
        output_dir=_resolve(root, (settings.get("output", {}) or {}).get("base_dir"), "artifacts"),
        settings=settings,
    )
