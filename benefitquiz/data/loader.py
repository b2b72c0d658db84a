"""Question bank loading.

Banks are JSON arrays of raw question records, one per topic, listed in a YAML
registry::

    banks:
      basics: banks/bank.basics.json
      funding: https://example.com/data/bank.funding.json

Relative paths resolve against the registry file. ``load_pool`` never raises:
unreadable banks degrade to the built-in fallback set.
"""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from concurrent.futures import ThreadPoolExecutor, wait
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from ..errors import BankUnavailableError, InvalidQuestionError
from .fallback import fallback_questions
from .schemas import MIXED, TOPICS, Question, normalize_record

logger = logging.getLogger(__name__)

DEFAULT_BANK_DIR = Path(__file__).resolve().parents[2] / "data" / "banks"


def default_registry(bank_dir: Union[str, Path] = DEFAULT_BANK_DIR) -> Dict[str, str]:
    """Registry for the conventional ``bank.<topic>.json`` layout."""
    base = Path(bank_dir)
    return {t: str(base / f"bank.{t}.json") for t in TOPICS}


def load_registry(path: Union[str, Path, None]) -> Dict[str, str]:
    """Read a YAML bank registry, or fall back to the default layout.

    Unknown topics in the registry are ignored with a warning.
    """
    if path is None or not Path(path).exists():
        logger.debug("No bank registry at %s; using default layout", path)
        return default_registry()

    reg_path = Path(path).resolve()
    with open(reg_path, "r", encoding="utf-8") as f:
        payload = yaml.safe_load(f) or {}

    entries = payload.get("banks", {}) if isinstance(payload, dict) else {}
    registry: Dict[str, str] = {}
    for topic, location in (entries or {}).items():
        if topic not in TOPICS:
            logger.warning("Ignoring registry entry for unknown topic: %s", topic)
            continue
        location = str(location)
        if not _is_url(location) and not Path(location).is_absolute():
            location = str(reg_path.parent / location)
        registry[topic] = location
    return registry


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _read_location(location: str, timeout_s: float) -> str:
    if _is_url(location):
        req = urllib.request.Request(location, headers={"Cache-Control": "no-store"})
        try:
            with urllib.request.urlopen(req, timeout=timeout_s) as resp:  # noqa: S310
                return resp.read().decode("utf-8")
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise BankUnavailableError(f"Could not fetch bank {location}: {e}", location) from e

    path = Path(location)
    if not path.is_file():
        raise BankUnavailableError(f"Bank file not found: {path}", location)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise BankUnavailableError(f"Could not read bank {path}: {e}", location) from e


def load_bank(location: str, topic: Optional[str] = None, timeout_s: float = 10.0) -> List[Question]:
    """Load and normalize one bank.

    Malformed records are discarded individually; ``topic`` fills in records
    that omit their own topic.

    Raises:
        BankUnavailableError: if the bank cannot be read, is not JSON, or is not a list
    """
    text = _read_location(location, timeout_s)
    try:
        rows = json.loads(text)
    except json.JSONDecodeError as e:
        raise BankUnavailableError(f"Bank {location} is not valid JSON: {e}", location) from e
    if not isinstance(rows, list):
        raise BankUnavailableError(
            f"Bank {location} must be a JSON array, got {type(rows).__name__}", location
        )

    questions: List[Question] = []
    dropped = 0
    for idx, row in enumerate(rows):
        try:
            questions.append(normalize_record(row, default_topic=topic))
        except InvalidQuestionError as e:
            dropped += 1
            logger.warning("Discarding record %d in %s: %s", idx, location, e)
    logger.debug("Loaded %d questions from %s (%d discarded)", len(questions), location, dropped)
    return questions


def load_pool(
    topic: str,
    registry: Optional[Dict[str, str]] = None,
    timeout_s: float = 10.0,
    max_workers: int = 5,
) -> List[Question]:
    """Return the flat candidate pool for ``topic`` (or every topic for "mixed").

    No deduplication happens here. Failures are absorbed: a single topic
    degrades to the fallback set; "mixed" keeps whatever banks loaded and only
    falls back when all of them fail or are empty.
    """
    registry = registry if registry is not None else default_registry()

    if topic == MIXED:
        return _load_mixed(registry, timeout_s, max_workers)

    location = registry.get(topic)
    if location is None:
        logger.warning("No bank registered for topic %r; using fallback set", topic)
        return fallback_questions()
    try:
        questions = load_bank(location, topic=topic, timeout_s=timeout_s)
    except BankUnavailableError as e:
        logger.warning("%s; using fallback set", e)
        return fallback_questions()
    if not questions:
        logger.warning("Bank for %s is empty; using fallback set", topic)
        return fallback_questions()
    return questions


def _load_mixed(registry: Dict[str, str], timeout_s: float, max_workers: int) -> List[Question]:
    if not registry:
        return fallback_questions()

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(registry)))) as pool:
        futures = {
            topic: pool.submit(load_bank, location, topic, timeout_s)
            for topic, location in registry.items()
        }
        # Every future settles; one failure never cancels the others
        wait(futures.values())

    items: List[Question] = []
    for topic, fut in futures.items():
        exc = fut.exception()
        if exc is not None:
            logger.warning("Skipping %s bank in mixed pool: %s", topic, exc)
            continue
        items.extend(fut.result())

    if not items:
        logger.warning("No banks available for mixed pool; using fallback set")
        return fallback_questions()
    logger.info("Mixed pool assembled from %d banks: %d questions", len(registry), len(items))
    return items
