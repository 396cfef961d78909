# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-12
# Updated: 2026-10-09
# Description: OpenAIChat
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from openai import OpenAI

from utility.logging_utils import get_class_logger

Message = Dict[str, str]  # {"role": "system"|"user"|"assistant", "content": "..."}


def build_messages(user_text: str, system_text: Optional[str] = None) -> List[Message]:
    messages: List[Message] = [{"role": "system", "content": system_text}] if system_text else []
    messages.append({"role": "user", "content": user_text})
    return messages


@dataclass
class OpenAIChat:
    """
    Thin chat-completions client for answer synthesis. Reads `chat_model`,
    `openai_api_key`, `openai_base_url` and `ai_timeout_s` from the Config.

    The SDK's own retries are disabled: a failed call surfaces immediately so
    the caller can trip the circuit breaker and answer locally instead.
    """

    cfg: Any
    client: Any = None
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

        self.model = getattr(self.cfg, "chat_model", None)
        if not self.model:
            raise ValueError("OpenAIChat requires cfg.chat_model")

        if self.client is None:
            self.client = self._connect()

        self.logger.info("OpenAIChat ready (model=%s)", self.model)

    def _connect(self) -> OpenAI:
        api_key = getattr(self.cfg, "openai_api_key", None)
        if not api_key:
            raise ValueError("OpenAIChat requires cfg.openai_api_key")
        return OpenAI(
            api_key=api_key,
            base_url=getattr(self.cfg, "openai_base_url", None) or None,
            timeout=getattr(self.cfg, "ai_timeout_s", 12.0),
            max_retries=0,
        )

    def chat(
            self,
            messages: List[Message],
            temperature: float = 0.0,
            max_tokens: int = 512,
            top_p: float = 1.0,
            seed: Optional[int] = None,
            response_format: Optional[Dict[str, Any]] = None,
            extra_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one completion request and return the SDK response object untouched."""
        if not messages:
            raise ValueError("chat() needs at least one message")

        optional = {"seed": seed, "response_format": response_format}
        request: Dict[str, Any] = dict(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            top_p=top_p,
            **{k: v for k, v in optional.items() if v is not None},
        )
        request.update(extra_params or {})

        self.logger.debug(
            "chat (start): model=%s messages=%d temperature=%s max_tokens=%s",
            self.model,
            len(messages),
            temperature,
            max_tokens,
        )
        resp = self.client.chat.completions.create(**request)
        self.logger.debug("chat (done): usage=%r", getattr(resp, "usage", None))
        return resp

    @staticmethod
    def content_of(resp: Any) -> str:
        """Text of the first choice; a response without choices is a RuntimeError."""
        choices = getattr(resp, "choices", None)
        if not choices:
            raise RuntimeError("Chat response carried no choices")
        message = getattr(choices[0], "message", None)
        if message is None:
            raise RuntimeError("Chat response choice carried no message")
        return getattr(message, "content", None) or ""

    def simple_chat(self, user_text: str, system_text: Optional[str] = None, **kwargs: Any) -> Dict[str, Any]:
        resp = self.chat(build_messages(user_text, system_text), **kwargs)
        model = getattr(resp, "model", None)
        self.logger.info("simple_chat answered (model=%s)", model)
        return {
            "answer": self.content_of(resp),
            "raw": resp,
            "usage": getattr(resp, "usage", None),
            "model": model,
        }

    def healthcheck(self) -> bool:
        """One tiny completion round-trip; any failure is logged and reported as False."""
        try:
            self.simple_chat("ping", max_tokens=5)
        except Exception as e:
            self.logger.warning("Chat healthcheck failed: %s", e)
            return False
        return True
