# src/strady/api/http.py
from __future__ import annotations

from fastapi import APIRouter, Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from strady.adapters.config import AppConfig, config as default_config
from strady.adapters.logging_utils import get_logger
from strady.adapters.storage import ensure_dir
from strady.domain.errors import InvalidInputError, RateFileError, UploadFailedError
from strady.domain.finance import compute_summary
from strady.domain.rates import RateTableStore
from strady.services.summary_pdf import (
    PDF_FILENAME,
    PDF_MEDIA_TYPE,
    iter_pdf_chunks,
    render_summary_pdf,
)
from strady.services.uploads import receive_rates_upload
from strady.services.validation import prepare_investment_input
from .schemas import InvestmentRequest, MessageResponse

logger = get_logger(__name__)

WELCOME_MESSAGE = "Welcome to the Strady.imo API!"
UPLOAD_OK_MESSAGE = "File uploaded and rates refreshed successfully."

router = APIRouter()


def get_rate_store(request: Request) -> RateTableStore:
    return request.app.state.rate_store


def get_settings(request: Request) -> AppConfig:
    return request.app.state.config


@router.get("/", response_model=MessageResponse)
def root() -> MessageResponse:
    return MessageResponse(message=WELCOME_MESSAGE)


@router.get("/api/loan-rates", response_model=list[dict[str, str]])
def list_loan_rates(store: RateTableStore = Depends(get_rate_store)) -> list[dict[str, str]]:
    return list(store.get().rows)


@router.post("/api/upload-rates", response_model=MessageResponse)
def upload_rates(
    rates_file: UploadFile | None = File(None, alias="ratesFile"),
    store: RateTableStore = Depends(get_rate_store),
) -> MessageResponse:
    """
    Replace the rate file and refresh the cache.

    The reload finishes before we answer, so a client reading
    /api/loan-rates after a 200 always sees the new rows.
    """
    if rates_file is None:
        raise HTTPException(status_code=400, detail="No file uploaded (expected form field 'ratesFile')")

    try:
        receive_rates_upload(rates_file.file, store, filename=rates_file.filename)
    except RateFileError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except UploadFailedError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e
    finally:
        rates_file.file.close()

    return MessageResponse(message=UPLOAD_OK_MESSAGE)


@router.post(
    "/api/generate-pdf",
    response_class=StreamingResponse,
    responses={200: {"content": {PDF_MEDIA_TYPE: {}}, "description": "Project summary PDF"}},
)
def generate_pdf(
    payload: InvestmentRequest,
    settings: AppConfig = Depends(get_settings),
) -> StreamingResponse:
    try:
        inp = prepare_investment_input(payload.to_payload())
        figures = compute_summary(inp)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e

    data = render_summary_pdf(figures)
    logger.info(
        "Summary PDF generated",
        extra={"context": {"region": inp.region, "renovation_items": len(inp.renovation_items)}},
    )
    return StreamingResponse(
        iter_pdf_chunks(data, settings.PDF_CHUNK_SIZE),
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={PDF_FILENAME}"},
    )


def create_app(settings: AppConfig | None = None) -> FastAPI:
    """
    Build the API.

    Startup work happens here, once per process: the data directory is
    created and the rate table is loaded before the first request is served.
    """
    settings = settings or default_config

    app = FastAPI(
        title="Strady.imo API",
        docs_url="/api-docs",
        redoc_url=None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    ensure_dir(settings.DATA_DIR)
    store = RateTableStore(settings.rates_path)
    store.reload()

    app.state.config = settings
    app.state.rate_store = store
    app.include_router(router)

    logger.info(
        "API ready",
        extra={"context": {"env": settings.ENV, "rates_path": str(settings.rates_path)}},
    )
    return app
