from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from openai import OpenAI

from bidforge.config import Settings
from bidforge.types import ModelResponse

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ProviderConfig:
    name: str
    base_url: str
    api_key: str
    timeout_sec: int


@dataclass(slots=True)
class ChatOptions:
    model: str
    temperature: float
    max_tokens: int
    token_param: str = "max_tokens"
    json_mode: bool = False


class LLMProvider:
    def __init__(self, config: ProviderConfig):
        self.config = config
        self.client = OpenAI(
            base_url=config.base_url,
            api_key=config.api_key,
            timeout=float(config.timeout_sec),
        )

    def complete_chat(self, *, system: str, prompt: str, options: ChatOptions) -> ModelResponse:
        request: dict[str, Any] = {
            "model": options.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "temperature": options.temperature,
            options.token_param: options.max_tokens,
        }
        if options.json_mode:
            request["response_format"] = {"type": "json_object"}

        logger.debug("chat completion provider=%s model=%s", self.config.name, options.model)
        response = self.client.chat.completions.create(**request)

        text = self._extract_chat_text(response)
        raw = response.model_dump() if hasattr(response, "model_dump") else {}
        if not isinstance(raw, dict):
            raw = {"raw": raw}
        raw["model"] = options.model
        return ModelResponse(content=text, raw=raw)

    @staticmethod
    def _extract_chat_text(response: Any) -> str:
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""

        message = getattr(choices[0], "message", None)
        if message is None:
            return ""

        content = getattr(message, "content", "")
        if isinstance(content, str):
            return content
        if content is None:
            return ""
        return str(content)


def openai_provider(settings: Settings) -> LLMProvider:
    return LLMProvider(
        ProviderConfig(
            name="openai",
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            timeout_sec=settings.openai_timeout_sec,
        )
    )
