# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-13
# Updated: 2026-10-16
# Description: FolioAnswerService.py
# -----------------------------------------------------------------------------
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

import settings
from chat.OpenAIChat import OpenAIChat, Message
from config.Config import Config
from resilience import RemoteErrors
from resilience.CircuitBreaker import CircuitBreaker
from retrieval.SearchTypes import AnswerResult, SearchResult
from utility.logging_utils import get_class_logger

NO_RESULTS_MESSAGE = (
    "I couldn't find any relevant results. "
    "Try rephrasing the search or using more specific keywords."
)

SYSTEM_PROMPT = (
    "You are the assistant of a developer portfolio.\n"
    "Answer ONLY from the numbered documents provided.\n"
    "Cite the documents you use by their number, like [1], [2].\n"
    "Do not invent links.\n"
    'Reply ONLY with valid JSON: {"answer": "...", "citations": [1, 2]}\n'
)


class AnswerPayload(BaseModel):
    answer: str = Field(..., min_length=1)
    citations: List[int]


def _validate(obj: Any) -> Optional[AnswerPayload]:
    if not isinstance(obj, dict):
        return None
    try:
        return AnswerPayload.model_validate(obj)
    except ValidationError:
        return None


def parse_answer_payload(raw: str) -> Optional[AnswerPayload]:
    """
    Strict JSON first; then the first brace-delimited JSON object found in
    the text (models like to wrap JSON in prose or code fences).
    """
    text = (raw or "").strip()
    if not text:
        return None

    try:
        return _validate(json.loads(text))
    except ValueError:
        pass

    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, _end = decoder.raw_decode(text, start)
        except ValueError:
            start = text.find("{", start + 1)
            continue
        return _validate(obj)
    return None


def local_summary(query_text: str, results: Sequence[SearchResult], take: int = 3) -> AnswerResult:
    """Deterministic templated answer over the top `take` results."""
    top = list(results)[:take]
    if not top:
        return AnswerResult(answer=NO_RESULTS_MESSAGE, cited_ranks=[], used_fallback=True)

    lines: List[str] = []
    for r in top:
        ref = r.ref or {}
        bits: List[str] = []
        if ref.get("title"):
            bits.append(f"**{ref['title']}**")
        tech = ref.get("tech") or []
        if tech:
            bits.append(f"tech: {', '.join(str(t) for t in tech[:4])}")
        if ref.get("github"):
            bits.append("GitHub available")
        if ref.get("demo"):
            bits.append("Demo available")
        if not bits:
            bits.append(" ".join((r.snippet or "").split())[:80])
        lines.append(f"- [{r.rank}] {' · '.join(bits)}")

    answer = "\n".join([
        f'Here are the most relevant results for **"{query_text}"**:',
        *lines,
        'Tip: add stack or features to narrow it down (e.g. "React + Stripe", "Node + Auth + Mongo").',
    ])
    return AnswerResult(answer=answer, cited_ranks=[r.rank for r in top], used_fallback=True)


class FolioAnswerService:
    """
    Answer synthesis:
        - no results -> fixed message, no remote call
        - structured JSON completion via OpenAIChat (timeout + breaker)
        - deterministic local summary on any failure or malformed output
    Never raises.
    """

    def __init__(
            self,
            *,
            chat_client: Optional[OpenAIChat] = None,
            breaker: Optional[CircuitBreaker] = None,
            cfg: Optional[Config] = None,
            timeout_s: Optional[float] = None,
            summary_take: int = settings.SUMMARY_TAKE,
            temperature: float = settings.CHAT_TEMPERATURE,
            max_tokens: int = settings.CHAT_MAX_TOKENS,
            logger: logging.Logger | None = None,
    ) -> None:
        self.chat_client = chat_client
        self.breaker = breaker or CircuitBreaker()
        # an explicit timeout wins; otherwise the configured AI budget (FOLIO_AI_TIMEOUT_MS)
        self.timeout_s = timeout_s if timeout_s is not None else (cfg or Config.from_env()).ai_timeout_s
        self.summary_take = summary_take
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logger or get_class_logger(self.__class__)
        self._executor = ThreadPoolExecutor(max_workers=settings.REMOTE_WORKERS, thread_name_prefix="folio-answer")

        self.logger.info(
            "FolioAnswerService initialised (chat_client=%s)",
            type(chat_client).__name__ if chat_client is not None else None,
        )

    def synthesize(self, query_text: str, results: Sequence[SearchResult]) -> AnswerResult:
        if not results:
            return AnswerResult(answer=NO_RESULTS_MESSAGE, cited_ranks=[], used_fallback=False)

        if self.chat_client is None:
            return self._local(query_text, results)

        if not self.breaker.allow():
            self.logger.debug("Breaker open (%d ms left); local summary", self.breaker.remaining_ms())
            return self._local(query_text, results)

        messages = self._build_messages(query_text, results)
        try:
            resp = RemoteErrors.call_with_timeout(
                self._executor,
                self.timeout_s,
                self._complete,
                messages,
            )
            raw = OpenAIChat.content_of(resp)
        except Exception as e:
            if RemoteErrors.is_quota_error(e):
                self.logger.warning("LLM_QUOTA/FALLBACK: %s", RemoteErrors.describe(e))
            elif RemoteErrors.is_timeout_error(e):
                self.logger.warning("LLM_TIMEOUT/FALLBACK: no response in %.1fs", self.timeout_s)
            elif RemoteErrors.is_busy_error(e):
                self.logger.warning("LLM_BUSY/FALLBACK: %s", e)
            else:
                self.logger.warning("LLM_ERROR/FALLBACK: %s", RemoteErrors.describe(e))
            # busy pool: breaker untouched
            if not RemoteErrors.is_busy_error(e):
                self.breaker.open(RemoteErrors.cooldown_ms(e))
            return self._local(query_text, results)

        payload = parse_answer_payload(raw)
        if payload is None:
            self.logger.warning("LLM_JSON_FALLBACK: unparseable completion (%d chars)", len(raw))
            return self._local(query_text, results)

        valid_ranks = {r.rank for r in results}
        cited = [c for c in dict.fromkeys(payload.citations) if c in valid_ranks]

        self.logger.info("synthesize: answer_chars=%d citations=%s", len(payload.answer), cited)
        return AnswerResult(
            answer=payload.answer,
            cited_ranks=cited,
            used_fallback=False,
            model=getattr(resp, "model", None),
        )

    def _complete(self, messages: List[Message]) -> Any:
        return self.chat_client.chat(
            messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    @staticmethod
    def _build_messages(query_text: str, results: Sequence[SearchResult]) -> List[Message]:
        ctx = "\n\n".join(
            f"[{r.rank}] {(r.ref or {}).get('title') or 'Untitled'}\n{r.snippet}"
            for r in results
        )
        user_payload = (
            f"QUESTION: {query_text}\n\n"
            f"CONTEXT:\n{ctx}\n\n"
            'Reply in JSON: { "answer": "...", "citations": [1, 2, ...] }'
        )
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": user_payload},
        ]

    def _local(self, query_text: str, results: Sequence[SearchResult]) -> AnswerResult:
        return local_summary(query_text, results, take=self.summary_take)

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

