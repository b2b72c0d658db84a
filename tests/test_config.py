from __future__ import annotations

import json
import tempfile
import unittest
from dataclasses import asdict
from pathlib import Path

from benefitquiz.config import (
    AppConfig,
    BankConfig,
    DeterminismConfig,
    GeneratorConfig,
    LoggingConfig,
    default_app_config,
    load_app_config,
)


ROOT = Path(__file__).resolve().parents[1]


class TestConfig(unittest.TestCase):
    def test_round_trip(self) -> None:
        cfg = AppConfig(
            logging=LoggingConfig(level="DEBUG", log_dir="logs", filename="roundtrip.log"),
            determinism=DeterminismConfig(seed=7),
            banks=BankConfig(registry_path="banks/registry.yaml", timeout_s=3.0, max_workers=2),
            generator=GeneratorConfig(
                api_base="http://localhost:8000/v1",
                model="local-model",
                temperature=0.2,
                timeout_s=5.0,
                max_attempts=1,
            ),
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "cfg.json"
            cfg.to_json(path)
            loaded = AppConfig.from_json(path)
        self.assertEqual(asdict(loaded), asdict(cfg))

    def test_api_key_not_serialized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.json"
            default_app_config().to_json(path)
            payload = json.loads(path.read_text(encoding="utf-8"))
        self.assertNotIn("api_key", payload["generator"])
        self.assertEqual(set(payload), {"logging", "determinism", "banks", "generator"})

    def test_partial_file_uses_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.json"
            path.write_text(json.dumps({"determinism": {"seed": 3}}), encoding="utf-8")
            cfg = AppConfig.from_json(path)
        self.assertEqual(cfg.determinism.seed, 3)
        self.assertEqual(cfg.logging, LoggingConfig())
        self.assertEqual(cfg.generator.max_attempts, 3)

    def test_missing_file_gives_defaults(self) -> None:
        cfg = load_app_config("does/not/exist.json")
        self.assertEqual(asdict(cfg), asdict(default_app_config()))
        self.assertEqual(asdict(load_app_config(None)), asdict(default_app_config()))

    def test_shipped_default_config(self) -> None:
        cfg = AppConfig.from_json(ROOT / "configs" / "default.json")
        self.assertIsNone(cfg.determinism.seed)
        self.assertEqual(cfg.generator.model, "gpt-4o-mini")
        self.assertEqual(cfg.generator.temperature, 0.7)
        self.assertEqual(cfg.logging.file_path(), Path("logs") / "quiz.log")


if __name__ == "__main__":
    unittest.main()
