"""Shared fixtures: payload factories and controllable gateways."""

import asyncio

import pytest

from glycoatlas.catalog import RnaCategory
from glycoatlas.controller import DashboardController
from glycoatlas.gateway import DataUnavailable
from glycoatlas.models import (
    ClinicalSample,
    DetailedAnalysisResult,
    ExpressionRecord,
    SurvivalAnalysis,
    SurvivalPoint,
)


def make_record(symbol: str = "tRNA-Gly-GCC", **overrides) -> ExpressionRecord:
    fields = {
        "gene_id": f"ENSG_{symbol}",
        "symbol": symbol,
        "category": "tRNA",
        "tumor_expression": 8.12345,
        "normal_expression": 5.5,
        "fold_change": 2.62345,
        "p_value": 0.000012345,
        "fdr": 0.0002,
        "evidence": "Sialylated glycan detected on cell surface",
        "localization": "Cell surface",
    }
    fields.update(overrides)
    return ExpressionRecord(**fields)


def make_report(
    symbol: str = "RNY5",
    tumor_type: str = "BRCA",
    points: list[SurvivalPoint] | None = None,
    samples: list[ClinicalSample] | None = None,
) -> DetailedAnalysisResult:
    if points is None:
        points = [
            SurvivalPoint(time=0, survival_prob=1.0, group="High Expression"),
            SurvivalPoint(time=12, survival_prob=0.7, group="High Expression"),
            SurvivalPoint(time=0, survival_prob=1.0, group="Low Expression"),
            SurvivalPoint(time=24, survival_prob=0.85, group="Low Expression"),
        ]
    if samples is None:
        samples = [
            ClinicalSample(sample_id="TCGA-A1-0001", expression_level=9.1, group="High",
                           survival_months=14.25, status="DECEASED"),
            ClinicalSample(sample_id="TCGA-A1-0002", expression_level=3.2, group="Low",
                           survival_months=60.0, status="LIVING"),
        ]
    return DetailedAnalysisResult(
        gene_symbol=symbol,
        tumor_type=tumor_type,
        survival=SurvivalAnalysis(
            p_val_log_rank=0.012,
            hazard_ratio=1.8,
            interpretation="High expression associates with poorer survival.",
            data=points,
            samples=samples,
        ),
    )


class StaticGateway:
    """Answers immediately with preset payloads, or fails when told to."""

    def __init__(self, records=None, report=None, fail: bool = False):
        self.records = records if records is not None else [make_record()]
        self.report = report
        self.fail = fail
        self.expression_calls: list[tuple[str, RnaCategory]] = []
        self.report_calls: list[tuple[str, str]] = []

    async def fetch_expression(self, tumor_code, category):
        self.expression_calls.append((tumor_code, category))
        if self.fail:
            raise DataUnavailable("upstream exploded: HTTP 503 from model endpoint")
        return self.records

    async def fetch_detailed_analysis(self, symbol, tumor_code):
        self.report_calls.append((symbol, tumor_code))
        if self.fail:
            raise DataUnavailable("upstream exploded: HTTP 503 from model endpoint")
        return self.report or make_report(symbol, tumor_code)


class PendingGateway:
    """Every call blocks until the test settles its future."""

    def __init__(self):
        self.expression: list[asyncio.Future] = []
        self.reports: list[asyncio.Future] = []

    async def fetch_expression(self, tumor_code, category):
        fut = asyncio.get_running_loop().create_future()
        self.expression.append(fut)
        return await fut

    async def fetch_detailed_analysis(self, symbol, tumor_code):
        fut = asyncio.get_running_loop().create_future()
        self.reports.append(fut)
        return await fut


@pytest.fixture
def static_gateway() -> StaticGateway:
    return StaticGateway()


@pytest.fixture
def controller(static_gateway) -> DashboardController:
    return DashboardController(static_gateway)
