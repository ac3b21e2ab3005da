"""Dashboard orchestration: search -> select candidate -> detailed report.

The controller owns two slots. A new search always sends the report slot back
to idle, since a report only makes sense under the list it was picked from.
Both slots use last-start-wins semantics (see `glycoatlas.state`).
"""

import asyncio
import logging
from collections.abc import Callable

from pydantic import BaseModel

from glycoatlas.catalog import RnaCategory, validate_category, validate_tumor_code
from glycoatlas.export import (
    encode_expression,
    encode_samples,
    expression_filename,
    samples_filename,
)
from glycoatlas.gateway import DataUnavailable, Gateway
from glycoatlas.models import (
    AlignedSurvivalPoint,
    DetailedAnalysisResult,
    ExportDocument,
    SampleSurvivalSummary,
    SearchQuery,
    SearchResult,
)
from glycoatlas.state import RequestState, Slot
from glycoatlas.survival import align_survival, summarize_samples

log = logging.getLogger(__name__)

SEARCH_FAILED = "Failed to retrieve analysis data."
REPORT_FAILED = "Failed to perform comprehensive analysis."


class DashboardView(BaseModel):
    search: RequestState
    report: RequestState
    aligned_survival: list[AlignedSurvivalPoint] | None = None
    focus: str | None = None


class DashboardController:
    def __init__(
        self,
        gateway: Gateway,
        focus_delay: float = 0.0,
        on_focus: Callable[[str], None] | None = None,
    ):
        self.gateway = gateway
        self.focus_delay = focus_delay
        self.on_focus = on_focus
        self.search: Slot[SearchResult] = Slot("search")
        self.report: Slot[DetailedAnalysisResult] = Slot("report")
        self._query: SearchQuery | None = None
        self._focus_target: str | None = None

    async def run_search(
        self, tumor_code: str, rna_category: str | RnaCategory
    ) -> RequestState[SearchResult]:
        # Validate before touching any state so bad input never reaches the gateway
        query = SearchQuery(
            tumor_code=validate_tumor_code(tumor_code),
            rna_category=validate_category(rna_category),
        )

        token = self.search.start()
        self.report.reset()
        self._focus_target = None
        self._query = query
        log.info("Search started: %s / %s", query.tumor_code, query.rna_category.value)

        try:
            records = await self.gateway.fetch_expression(query.tumor_code, query.rna_category)
        except DataUnavailable:
            if self.search.is_current(token):
                log.warning("Search %s / %s failed", query.tumor_code,
                            query.rna_category.value, exc_info=True)
            self.search.reject(token, SEARCH_FAILED)
            return self.search.state

        # The source's category field is not trusted; tag with what was asked for.
        tagged = [r.model_copy(update={"category": query.rna_category.value}) for r in records]
        self.search.resolve(token, SearchResult(query=query, records=tagged))
        return self.search.state

    async def select_candidate(self, symbol: str) -> RequestState[DetailedAnalysisResult]:
        if not symbol or not symbol.strip():
            raise ValueError("symbol is required")
        if self._query is None:
            raise ValueError("No search has been run; select a tumor type first")
        tumor_code = self._query.tumor_code

        token = self.report.start()
        self._focus_target = None
        log.info("Detailed analysis started: %s in %s", symbol, tumor_code)

        try:
            result = await self.gateway.fetch_detailed_analysis(symbol, tumor_code)
        except DataUnavailable:
            if self.report.is_current(token):
                log.warning("Detailed analysis of %s in %s failed", symbol, tumor_code,
                            exc_info=True)
            self.report.reject(token, REPORT_FAILED)
            return self.report.state

        result = result.model_copy(update={"gene_symbol": symbol, "tumor_type": tumor_code})
        if self.report.resolve(token, result):
            self._schedule_focus(token, symbol)
        return self.report.state

    # ── Focus intent ──

    def _schedule_focus(self, token: int, symbol: str) -> None:
        # Fire-and-forget, after the state is committed. Never retried; if the
        # loop goes away first it simply does not happen.
        loop = asyncio.get_running_loop()
        loop.call_later(self.focus_delay, self._emit_focus, token, symbol)

    def _emit_focus(self, token: int, symbol: str) -> None:
        if not (self.report.is_current(token) and self.report.state.is_success):
            return
        self._focus_target = symbol
        if self.on_focus is not None:
            try:
                self.on_focus(symbol)
            except Exception:
                log.warning("Focus callback failed for %s", symbol, exc_info=True)

    def take_focus(self) -> str | None:
        """Return the pending focus target once, then clear it."""
        target, self._focus_target = self._focus_target, None
        return target

    # ── Derived views ──

    def aligned_survival(self) -> list[AlignedSurvivalPoint] | None:
        state = self.report.state
        if not state.is_success:
            return None
        return align_survival(state.data.survival.data)

    def sample_summary(self) -> SampleSurvivalSummary | None:
        state = self.report.state
        if not state.is_success:
            return None
        return summarize_samples(state.data.survival.samples)

    def export_current_search(self) -> ExportDocument | None:
        state = self.search.state
        if not state.is_success:
            return None
        query = state.data.query
        return ExportDocument(
            filename=expression_filename(query.tumor_code, query.rna_category.value),
            content=encode_expression(state.data.records),
        )

    def export_current_samples(self) -> ExportDocument | None:
        state = self.report.state
        if not state.is_success or not state.data.survival.samples:
            return None
        report = state.data
        return ExportDocument(
            filename=samples_filename(report.tumor_type, report.gene_symbol),
            content=encode_samples(report.survival.samples, report.tumor_type, report.gene_symbol),
        )

    def view(self, consume_focus: bool = False) -> DashboardView:
        return DashboardView(
            search=self.search.state,
            report=self.report.state,
            aligned_survival=self.aligned_survival(),
            focus=self.take_focus() if consume_focus else None,
        )
