import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, Response

from glycoatlas import llm
from glycoatlas.catalog import RNA_CATEGORIES, TUMOR_TYPES
from glycoatlas.config import settings
from glycoatlas.controller import DashboardController, DashboardView
from glycoatlas.gateway import LLMGateway
from glycoatlas.models import (
    AlignedSurvivalPoint,
    AnalyzeRequest,
    ExportDocument,
    SampleSurvivalSummary,
    SearchRequest,
    SetModelRequest,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.azure_openai.is_configured:
        log.warning(
            "Azure OpenAI is not configured. The dashboard will start but "
            "every search will fail until credentials are provided."
        )
    app.state.controller = DashboardController(
        LLMGateway(),
        focus_delay=settings.dashboard.focus_delay_s,
    )
    yield


app = FastAPI(title="glycoatlas", version="0.1.0", lifespan=lifespan)


def get_controller(request: Request) -> DashboardController:
    return request.app.state.controller


def _csv_response(doc: ExportDocument | None) -> Response:
    if doc is None:
        return Response(status_code=204)
    return Response(
        content=doc.content.encode("utf-8"),
        media_type=f"{doc.media_type}; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{doc.filename}"'},
    )


@app.get("/api/health")
async def health():
    return {"status": "ok", "llm_configured": settings.azure_openai.is_configured}


@app.get("/api/catalog")
async def catalog():
    return {
        "tumor_types": [t.model_dump() for t in TUMOR_TYPES],
        "rna_categories": [c.value for c in RNA_CATEGORIES],
    }


@app.post("/api/search", response_model=DashboardView)
async def search(req: SearchRequest, controller: DashboardController = Depends(get_controller)):
    try:
        await controller.run_search(req.tumor_code, req.rna_category)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return controller.view()


@app.post("/api/analyze", response_model=DashboardView)
async def analyze(req: AnalyzeRequest, controller: DashboardController = Depends(get_controller)):
    try:
        await controller.select_candidate(req.symbol)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return controller.view()


@app.get("/api/state", response_model=DashboardView)
async def state(controller: DashboardController = Depends(get_controller)):
    """Current slot states; the pending focus target is handed out once."""
    return controller.view(consume_focus=True)


@app.get("/api/report/survival", response_model=list[AlignedSurvivalPoint])
async def report_survival(controller: DashboardController = Depends(get_controller)):
    series = controller.aligned_survival()
    if series is None:
        return Response(status_code=204)
    return series


@app.get("/api/report/samples/summary", response_model=SampleSurvivalSummary)
async def report_sample_summary(controller: DashboardController = Depends(get_controller)):
    summary = controller.sample_summary()
    if summary is None:
        return Response(status_code=204)
    return summary


@app.get("/api/export/search")
async def export_search(controller: DashboardController = Depends(get_controller)):
    return _csv_response(controller.export_current_search())


@app.get("/api/export/samples")
async def export_samples(controller: DashboardController = Depends(get_controller)):
    return _csv_response(controller.export_current_samples())


@app.get("/api/settings")
async def get_settings():
    return {
        "current_model": llm.get_deployment(),
        "available_models": llm.AVAILABLE_MODELS,
    }


@app.put("/api/settings/model")
async def set_model(req: SetModelRequest):
    try:
        llm.set_deployment(req.model)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"current_model": llm.get_deployment()}
