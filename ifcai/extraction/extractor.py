"""ParameterExtractor — turn a building description into a ParameterRecord.

Usage::

    from ifcai.extraction import ParameterExtractor

    extractor = ParameterExtractor()
    report = extractor.extract("A two-storey house of 150 m² with 3 bedrooms")
    report.record.floor_count  # 2

Each extraction question is sent to the text model concurrently.  A
question that fails, times out, or yields an unreadable answer keeps its
documented default; it never aborts the other questions.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any

from ifcai import config
from ifcai.cache import ExtractionCache
from ifcai.errors import ExtractionPartialFailure, InputValidationError
from ifcai.extraction.providers.base import AnswerProvider
from ifcai.extraction.providers.fallback import FallbackProvider
from ifcai.extraction.providers.ollama import OllamaProvider
from ifcai.extraction.questions import QUESTIONS, Question, limit_context
from ifcai.extraction.schema import ExtractionReport, ParameterRecord

logger = logging.getLogger(__name__)


def validate_text(text: str, minimum: int = config.MIN_TEXT_LENGTH) -> str:
    """Return the trimmed *text*, or raise :class:`InputValidationError`."""
    text = (text or "").strip()
    if len(text) < minimum:
        raise InputValidationError(len(text), minimum)
    return text


class ParameterExtractor:
    """Extract building parameters with a text model.

    Parameters
    ----------
    provider:
        An explicit :class:`AnswerProvider`.  If *None*, the extractor
        uses :class:`OllamaProvider`.  When the provider reports itself
        unavailable, the rule-based :class:`FallbackProvider` answers
        instead.
    timeout:
        Per-question timeout in seconds.
    cache:
        Optional :class:`ExtractionCache` keyed by the normalised text.
    questions:
        Question table; defaults to :data:`QUESTIONS`.
    """

    def __init__(
        self,
        provider: AnswerProvider | None = None,
        *,
        timeout: float = config.DEFAULT_QUERY_TIMEOUT,
        cache: ExtractionCache | None = None,
        questions: tuple[Question, ...] = QUESTIONS,
    ) -> None:
        self._provider = provider if provider is not None else OllamaProvider()
        self._fallback = FallbackProvider()
        self._timeout = timeout
        self._cache = cache
        self._questions = questions

    @property
    def questions(self) -> tuple[Question, ...]:
        return self._questions

    def extract(self, text: str) -> ExtractionReport:
        """Validate *text* and extract a :class:`ParameterRecord` from it.

        Raises
        ------
        InputValidationError
            If the trimmed text is shorter than the minimum length.
        """
        text = validate_text(text)

        if self._cache is not None:
            cached = self._cache.get(text)
            if cached is not None:
                logger.info("Parameters served from extraction cache")
                return ExtractionReport(record=cached, provider="cache", from_cache=True)

        provider = self._select_provider()
        context = limit_context(text)
        logger.debug(
            "Extracting %d parameters with %s (context %d chars)",
            len(self._questions), provider.name, len(context),
        )

        answers, failures = self._ask_all(provider, context)
        values: dict[str, Any] = {}
        for question in self._questions:
            raw = answers.get(question.field)
            if raw is None:
                continue
            parsed = question.parse(raw)
            if parsed is None:
                failures.append(
                    ExtractionPartialFailure(question.field, f"unreadable answer {raw!r}")
                )
                continue
            values[question.field] = parsed

        values = self._clamp(values, failures)
        record = ParameterRecord(**values)

        for failure in failures:
            logger.warning("Extraction fell back to default for %s", failure)

        if self._cache is not None:
            self._cache.put(text, record)
            self._cache.evict_if_over()

        logger.info("Extracted parameters: %s", record.model_dump())
        return ExtractionReport(
            record=record,
            answers=answers,
            failures=failures,
            provider=provider.name,
        )

    # -- internals ------------------------------------------------------------

    def _select_provider(self) -> AnswerProvider:
        try:
            available = self._provider.is_available()
        except Exception:
            logger.debug("Availability check failed for %s", self._provider.name, exc_info=True)
            available = False
        if not available:
            logger.info("Provider %s not available, using regex fallback", self._provider.name)
            return self._fallback
        return self._provider

    def _ask_all(
        self, provider: AnswerProvider, context: str,
    ) -> tuple[dict[str, str | None], list[ExtractionPartialFailure]]:
        """Ask every question concurrently; wait for all, tolerating failures."""
        answers: dict[str, str | None] = {}
        failures: list[ExtractionPartialFailure] = []

        if not self._questions:
            return answers, failures

        executor = ThreadPoolExecutor(
            max_workers=len(self._questions), thread_name_prefix="ifcai-extract",
        )
        try:
            futures: list[tuple[Question, Future[str | None], float]] = [
                (
                    q,
                    executor.submit(provider.answer, q.text, context),
                    time.monotonic() + self._timeout,
                )
                for q in self._questions
            ]
            for question, future, deadline in futures:
                remaining = max(deadline - time.monotonic(), 0.0)
                try:
                    answer = future.result(timeout=remaining)
                except FutureTimeoutError:
                    future.cancel()
                    failures.append(ExtractionPartialFailure(
                        question.field, f"timed out after {self._timeout:g}s",
                    ))
                    answers[question.field] = None
                    continue
                except Exception as exc:
                    logger.debug("Question %r failed", question.text, exc_info=True)
                    failures.append(ExtractionPartialFailure(question.field, str(exc) or type(exc).__name__))
                    answers[question.field] = None
                    continue

                if answer is None or not str(answer).strip():
                    failures.append(ExtractionPartialFailure(question.field, "no answer"))
                    answers[question.field] = None
                else:
                    answers[question.field] = str(answer).strip()
        finally:
            # Stragglers past their deadline are abandoned, not awaited.
            executor.shutdown(wait=False, cancel_futures=True)

        return answers, failures

    @staticmethod
    def _clamp(
        values: dict[str, Any], failures: list[ExtractionPartialFailure],
    ) -> dict[str, Any]:
        """Bound the floor count to what the id layout can number."""
        floors = values.get("floor_count")
        if floors is not None and floors > config.MAX_STOREYS:
            failures.append(ExtractionPartialFailure(
                "floor_count", f"{floors} floors exceeds maximum {config.MAX_STOREYS}, clamped",
            ))
            values = {**values, "floor_count": config.MAX_STOREYS}
        return values
