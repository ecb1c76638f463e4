"""AI summarization client (Gemini REST API) for survey insights"""

import json
import logging
from collections import Counter
from typing import Any, Dict, List

import httpx

from lypay_survey.config import settings
from lypay_survey.domain.exceptions import SummarizationError
from lypay_survey.domain.models import SurveyEntry
from lypay_survey.domain.reference import STATUS_LABELS
from lypay_survey.infrastructure.observability.metrics import summary_failures_counter, summary_latency_histogram

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "لا توجد بيانات كافية للتحليل حالياً."
FALLBACK_MESSAGE = "حدث خطأ أثناء محاولة تحليل البيانات عبر الذكاء الاصطناعي."

SYSTEM_INSTRUCTION = "أنت محلل بيانات متخصص في القطاع المصرفي. قدم تحليلاً دقيقاً ومختصراً باللغة العربية الفصحى."


def build_prompt(entries: List[SurveyEntry]) -> str:
    """Digest of status counts and rejection reasons sent to the model"""
    status_breakdown = Counter(STATUS_LABELS[e.status] for e in entries)
    reasons = [e.rejection_reason for e in entries if e.rejection_reason]

    return (
        "Analyze the following survey data for LYPay (payment service).\n"
        "Summarize the overall satisfaction based on status.\n"
        "Identify any problematic banks or recurring issues in the rejection reasons.\n"
        "Provide actionable insights in Arabic.\n"
        "\n"
        "Data Summary:\n"
        f"Total Entries: {len(entries)}\n"
        f"Status Breakdown: {json.dumps(dict(status_breakdown), ensure_ascii=False)}\n"
        f"Rejection Reasons: {', '.join(reasons)}\n"
    )


class SummaryClient:
    """Client for the external text-generation service"""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.ai_api_key
        self.base_url = base_url or settings.ai_api_base
        self.model = model or settings.ai_model
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def summarize(self, entries: List[SurveyEntry]) -> str:
        """
        Return prose insights for the given entries.

        Best-effort: any failure yields FALLBACK_MESSAGE and is never raised.
        """
        if not entries:
            return NO_DATA_MESSAGE

        try:
            with summary_latency_histogram.time():
                return await self._generate(build_prompt(entries))
        except SummarizationError as e:
            summary_failures_counter.inc()
            logger.warning(f"AI summarization failed: {e}")
            return FALLBACK_MESSAGE

    async def _generate(self, prompt: str) -> str:
        """
        Call generateContent and extract the first candidate's text.

        Raises:
            SummarizationError: On missing key, bad URL, timeout, HTTP errors, or unexpected response shape
        """
        if not self.api_key:
            raise SummarizationError("AI API key is not configured")

        payload: Dict[str, Any] = {
            "system_instruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/models/{self.model}:generateContent",
                    headers={"x-goog-api-key": self.api_key},
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
                text = "".join(part.get("text", "") for part in data["candidates"][0]["content"]["parts"])

            except httpx.TimeoutException as e:
                raise SummarizationError(f"AI service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise SummarizationError(f"AI service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise SummarizationError(f"AI service unreachable: {e}") from e
            except httpx.InvalidURL as e:
                raise SummarizationError(f"Invalid AI service URL: {e}") from e
            except (KeyError, IndexError, ValueError, TypeError, AttributeError) as e:
                raise SummarizationError(f"Invalid response from AI service: {e}") from e

        if not text.strip():
            raise SummarizationError("AI service returned an empty summary")
        return text
