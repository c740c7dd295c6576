from __future__ import annotations

import json
import time
from typing import Callable, List, Optional

import requests

from rankboard.core.config import (
    API_BASE_URL,
    INITIAL_BACKOFF_MS,
    MAX_RETRIES,
    MODEL_NAME,
    REQUEST_TIMEOUT,
)
from rankboard.core.errors import RemoteExtractionError
from rankboard.core.logger import AppLogger
from rankboard.core.tracker import ExecutionTracker


def _candidate_text(result) -> Optional[str]:
    """Text of the first candidate part, or None if the response has none."""
    try:
        text = result["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str):
        return None
    return text.strip() or None


class GeminiClient:
    """
    Calls Gemini generateContent for one multimodal extraction request.

    A failed attempt (transport error, non-2xx status, undecodable body) is
    retried up to ``max_retries`` more times, waiting initial_backoff_ms,
    then double that, and so on. A 2xx response without text is not retried.
    """
    def __init__(
        self,
        api_key: Optional[str],
        model_name: str = MODEL_NAME,
        base_url: str = API_BASE_URL,
        timeout: int = REQUEST_TIMEOUT,
        max_retries: int = MAX_RETRIES,
        initial_backoff_ms: int = INITIAL_BACKOFF_MS,
        sleep: Callable[[float], None] = time.sleep,
        logger: AppLogger = None,
        tracker: ExecutionTracker = None,
    ):
        self.api_key = api_key
        self.model_name = model_name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_backoff_ms = initial_backoff_ms
        self.sleep = sleep
        self.logger = logger or AppLogger()
        self.tracker = tracker or ExecutionTracker()

    def backoff_schedule(self) -> List[int]:
        """Delays in ms waited before each retry."""
        return [self.initial_backoff_ms * 2 ** i for i in range(self.max_retries)]

    def build_payload(self, parts: list, system_instruction: str) -> dict:
        return {
            "contents": [{"parts": parts}],
            "systemInstruction": {"parts": [{"text": system_instruction}]},
            "generationConfig": {"responseMimeType": "application/json"},
        }

    def _post(self, payload: dict) -> dict:
        url = f"{self.base_url}/{self.model_name}:generateContent"
        response = requests.post(
            url,
            params={"key": self.api_key},
            headers={"Content-Type": "application/json"},
            data=json.dumps(payload),
            timeout=self.timeout,
        )
        if not 200 <= response.status_code < 300:
            raise requests.HTTPError(f"HTTP error! status: {response.status_code}", response=response)
        return response.json()

    def extract(self, parts: list, system_instruction: str) -> str:
        """Returns the model's response text or raises RemoteExtractionError."""
        payload = self.build_payload(parts, system_instruction)
        schedule = self.backoff_schedule()
        last_error = None

        self.tracker.start()
        for attempt in range(self.max_retries + 1):
            self.tracker.log_attempt()
            self.logger.log(f"📡 Calling {self.model_name} (Attempt {attempt + 1}/{self.max_retries + 1})")
            try:
                result = self._post(payload)
            except (requests.exceptions.RequestException, ValueError) as e:
                last_error = e
                self.logger.warning(f"💥 Extraction request failed: {e}")
            else:
                text = _candidate_text(result)
                if text is None:
                    self.tracker.log_failure("Empty model response")
                    self.tracker.finish()
                    self.logger.error("⚠️ Model response contained no text.")
                    raise RemoteExtractionError("Model response contained no text")
                self.tracker.log_success()
                self.tracker.finish()
                self.logger.log(f"✅ Response received ({len(text)} chars).")
                return text

            if attempt < self.max_retries:
                delay_ms = schedule[attempt]
                self.tracker.log_retry(delay_ms, str(last_error))
                self.logger.log(f"⏳ Retrying in {delay_ms / 1000:.0f}s...")
                self.sleep(delay_ms / 1000)

        self.tracker.log_failure("Max Retries Exhausted")
        self.tracker.finish()
        self.logger.error("❌ FATAL: Max retries exhausted.")
        raise RemoteExtractionError(f"Max retries exhausted: {last_error}") from last_error
