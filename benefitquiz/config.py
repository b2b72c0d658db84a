from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: str = "logs"
    filename: str = "quiz.log"

    def file_path(self) -> Path:
        return Path(self.log_dir) / self.filename


@dataclass
class DeterminismConfig:
    seed: Optional[int] = None  # None draws from system entropy


@dataclass
class BankConfig:
    """Where question banks live and how they are fetched."""

    registry_path: str = os.getenv("QUIZ_BANK_REGISTRY", "data/banks.yaml")
    timeout_s: float = float(os.getenv("QUIZ_BANK_TIMEOUT", "10"))
    max_workers: int = 5


@dataclass
class GeneratorConfig:
    """Remote question generator settings.

    Talks to any OpenAI-compatible ``/chat/completions`` endpoint. The API key
    is read from ``OPENAI_API_KEY`` at call time and never serialized.
    """

    api_base: str = os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1")
    model: str = os.getenv("QUIZ_MODEL", "gpt-4o-mini")
    temperature: float = 0.7
    timeout_s: float = 30.0
    max_attempts: int = 3


@dataclass
class AppConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    determinism: DeterminismConfig = field(default_factory=DeterminismConfig)
    banks: BankConfig = field(default_factory=BankConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    @staticmethod
    def from_json(path: str | Path) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return AppConfig(
            logging=LoggingConfig(**payload.get("logging", {})),
            determinism=DeterminismConfig(**payload.get("determinism", {})),
            banks=BankConfig(**payload.get("banks", {})),
            generator=GeneratorConfig(**payload.get("generator", {})),
        )

    def to_json(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding="utf-8") as f:
            json.dump({
                "logging": asdict(self.logging),
                "determinism": asdict(self.determinism),
                "banks": asdict(self.banks),
                "generator": asdict(self.generator),
            }, f, indent=2, ensure_ascii=False)


def default_app_config() -> AppConfig:
    return AppConfig()


def load_app_config(path: str | Path | None) -> AppConfig:
    """Load config from ``path`` if it exists, else return defaults."""
    if path and Path(path).exists():
        return AppConfig.from_json(path)
    return default_app_config()
