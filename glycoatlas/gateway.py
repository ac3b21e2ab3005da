"""Data source gateway: expression search and per-gene reports.

The controller only depends on the `Gateway` protocol. `LLMGateway` fills it
from a generative model; every failure on that path (transport, truncated or
malformed output, schema mismatch) is reported as `DataUnavailable`.
"""

import json
import logging
import re
from typing import Any, Protocol

from glycoatlas import llm
from glycoatlas.catalog import RnaCategory
from glycoatlas.config import settings
from glycoatlas.models import DetailedAnalysisResult, ExpressionRecord
from glycoatlas.prompts import detailed_prompt, expression_prompt, system_prompt

log = logging.getLogger(__name__)


class DataUnavailable(Exception):
    """The data source could not deliver a usable result."""


class Gateway(Protocol):
    async def fetch_expression(
        self, tumor_code: str, category: RnaCategory
    ) -> list[ExpressionRecord]: ...

    async def fetch_detailed_analysis(
        self, symbol: str, tumor_code: str
    ) -> DetailedAnalysisResult: ...


def _parse_llm_json(text: str) -> dict[str, Any]:
    """Leniently parse a JSON object from model output."""
    text = text.strip()
    candidates = [text]
    # Code fences, then the outermost {...}
    m = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if m:
        candidates.append(m.group(1).strip())
    m = re.search(r"\{.*\}", text, re.DOTALL)
    if m:
        candidates.append(m.group())
    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    raise ValueError(f"Could not parse a JSON object from model output: {text[:200]}")


class LLMGateway:
    def __init__(self, candidate_count: int | None = None):
        self.candidate_count = candidate_count or settings.dashboard.candidate_count

    async def _ask(self, prompt: str) -> dict[str, Any]:
        raw, finish_reason = await llm.chat(system_prompt(), prompt)
        if finish_reason == "length":
            raise ValueError("Model output was truncated")
        return _parse_llm_json(raw)

    async def fetch_expression(
        self, tumor_code: str, category: RnaCategory
    ) -> list[ExpressionRecord]:
        prompt = expression_prompt(tumor_code, category.value, self.candidate_count)
        try:
            parsed = await self._ask(prompt)
            items = parsed.get("records")
            if not isinstance(items, list):
                raise ValueError("reply has no 'records' list")
            records = [ExpressionRecord.model_validate(item) for item in items]
        except ValueError as e:  # includes pydantic.ValidationError
            log.warning("Expression data for %s/%s unusable: %s", tumor_code, category.value, e)
            raise DataUnavailable("Failed to retrieve analysis data.") from e
        except Exception as e:
            log.exception("Error fetching expression data")
            raise DataUnavailable("Failed to retrieve analysis data.") from e
        log.info("Fetched %d %s records for %s", len(records), category.value, tumor_code)
        return records

    async def fetch_detailed_analysis(
        self, symbol: str, tumor_code: str
    ) -> DetailedAnalysisResult:
        prompt = detailed_prompt(symbol, tumor_code)
        try:
            parsed = await self._ask(prompt)
            result = DetailedAnalysisResult.model_validate(parsed)
        except ValueError as e:  # includes pydantic.ValidationError
            log.warning("Detailed analysis for %s in %s unusable: %s", symbol, tumor_code, e)
            raise DataUnavailable("Failed to perform comprehensive analysis.") from e
        except Exception as e:
            log.exception("Error fetching detailed analysis")
            raise DataUnavailable("Failed to perform comprehensive analysis.") from e
        return result
