"""Gemini ``generateContent`` client shared by the whole process."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

logger = logging.getLogger(__name__)


class ModelClientError(Exception):
    """Transport, quota, or response-shape failure talking to the model."""


@dataclass
class ModelClientConfig:
    """Runtime knobs for the external model."""

    api_key: str
    model: str
    api_base: str
    timeout: float

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> "ModelClientConfig":
        return cls(
            api_key=config.get("GEMINI_API_KEY") or "",
            model=config.get("GEMINI_MODEL") or "gemini-2.5-flash",
            api_base=(config.get("GEMINI_API_BASE") or "").rstrip("/"),
            timeout=float(config.get("AI_TIMEOUT_SECONDS") or 15),
        )


class GeminiClient:
    """Thin wrapper over the REST endpoint.

    Built once in ``create_app`` and injected into the annotation and
    semantic search services. Every call is a single attempt bounded by
    ``timeout``; there are no retries.
    """

    def __init__(self, config: ModelClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "GeminiClient":
        return cls(ModelClientConfig.from_mapping(config))

    @property
    def endpoint(self) -> str:
        return f"{self.config.api_base}/models/{self.config.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the text of the first candidate.

        Raises:
            ModelClientError: on any transport or response-shape failure.
        """
        if not self.config.api_key:
            raise ModelClientError("GEMINI_API_KEY is not configured")

        body = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            resp = self.session.post(
                self.endpoint,
                params={"key": self.config.api_key},
                json=body,
                timeout=self.config.timeout,
            )
            resp.raise_for_status()
            payload = resp.json()
        except requests.RequestException as e:
            raise ModelClientError(f"model request failed: {e}") from e
        except ValueError as e:
            raise ModelClientError("model response is not JSON") from e

        return _first_candidate_text(payload)


def _first_candidate_text(payload: Any) -> str:
    try:
        parts = payload["candidates"][0]["content"]["parts"]
        text = "".join(part.get("text", "") for part in parts)
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ModelClientError("model response has no candidate text") from e
    if not text.strip():
        raise ModelClientError("model returned an empty candidate")
    return text


def current_model_client() -> GeminiClient:
    """The client built by ``create_app`` for this process."""
    from flask import current_app

    return current_app.extensions["model_client"]
