"""Client for remote question generation over an OpenAI-compatible API."""

from __future__ import annotations

import http.client
import json
import logging
import os
import re
import urllib.error
import urllib.request
from typing import Any, Dict, Optional

from ..config import GeneratorConfig
from ..errors import GenerationError
from ..utils.resilience import APIError, RetryConfig, with_retry

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "Return only JSON. No preface."
FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def build_generation_prompt(topic: str, difficulty: str, count: int) -> str:
    return (
        f"You are an expert in US employee benefits. Create {count} multiple-choice quiz questions "
        f'on the topic "{topic}" with difficulty "{difficulty}".\n'
        'Return strict JSON: {"questions":[{"q":"...","choices":["A","B","C","D"],'
        '"answer":0-3,"explain":"..."}]}. Keep choices plausible and explanations concise.'
    )


def extract_json_payload(content: str) -> Dict[str, Any]:
    """Parse the model reply into a dict, tolerating a fenced code block.

    Unparseable content yields ``{"questions": []}``.
    """
    if not isinstance(content, str):
        return {"questions": []}
    raw = content.strip()
    m = FENCE_RE.search(raw)
    if m:
        raw = m.group(1).strip()
    try:
        payload = json.loads(raw or "{}")
    except json.JSONDecodeError:
        logger.warning("Generator reply was not valid JSON")
        return {"questions": []}
    if not isinstance(payload, dict):
        return {"questions": []}
    if not isinstance(payload.get("questions"), list):
        payload["questions"] = []
    return payload


class QuestionGenerator:
    """Requests fresh questions from a chat-completions endpoint.

    Args:
        config: endpoint, model and retry settings
        api_key: overrides ``OPENAI_API_KEY``
    """

    def __init__(self, config: Optional[GeneratorConfig] = None, api_key: Optional[str] = None):
        self.config = config or GeneratorConfig()
        self.api_key = api_key if api_key is not None else os.getenv("OPENAI_API_KEY", "")
        self.retry = RetryConfig(max_attempts=max(1, self.config.max_attempts))

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        url = self.config.api_base.rstrip("/") + "/chat/completions"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        req = urllib.request.Request(
            url, data=json.dumps(body).encode("utf-8"), headers=headers, method="POST"
        )
        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout_s) as resp:  # noqa: S310
                return json.loads(resp.read().decode("utf-8"))
        except urllib.error.HTTPError as e:
            raise APIError(f"Generator returned HTTP {e.code}", status_code=e.code) from e
        except urllib.error.URLError as e:
            raise ConnectionError(f"Generator unreachable: {e.reason}") from e
        except http.client.HTTPException as e:
            raise GenerationError(f"Generator response was cut short: {e!r}") from e
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise GenerationError(f"Generator response was not UTF-8 JSON: {e}") from e

    def complete(self, prompt: str) -> str:
        """Send one chat completion and return the message content."""
        body = {
            "model": self.config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": self.config.temperature,
        }
        try:
            data = with_retry(self.retry)(self._post)(body)
        except APIError as e:
            raise GenerationError(str(e), status_code=e.status_code) from e
        except (ConnectionError, TimeoutError) as e:
            raise GenerationError(f"Generator request failed: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationError("Generator response had no message content") from e
        if content is None:
            return ""
        if not isinstance(content, str):
            raise GenerationError(
                f"Generator message content must be text, got {type(content).__name__}"
            )
        return content

    def generate(self, topic: str, difficulty: str, count: int) -> Dict[str, Any]:
        """Return the decoded ``{"questions": [...]}`` payload.

        Raises:
            GenerationError: on missing credentials or any request failure
        """
        if not self.api_key:
            raise GenerationError("OPENAI_API_KEY is not set")
        logger.info("Requesting %d generated questions for %s/%s", count, topic, difficulty)
        content = self.complete(build_generation_prompt(topic, difficulty, count))
        return extract_json_payload(content)
