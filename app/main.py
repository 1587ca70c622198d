"""
Kinetic Intake Report API - FastAPI Application

Endpoints:
  POST /api/chat                     Generate a diagnostic report from an intake form
  GET  /api/chat                     Assistant health check
  GET  /api/reports/{report_id}      Fetch a stored report and its viewer sections
  POST /api/reports/generate-pdf     Render a report as an A4 PDF download
  POST /api/reports/send-email       Email a report as a PDF attachment
  POST /api/intake/progress          Section completion of an intake form
  GET  /health                       Service health check
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.config import AppConfig, SmtpConfig
from app.core.assistant import AssistantClient
from app.core.intake import completion_percent, has_movement_assessment, section_status
from app.core.reports import PdfRenderer
from app.models import (
    ChatRequest,
    GeneratePdfRequest,
    GenerateReportResponse,
    HealthResponse,
    IntakeForm,
    SendEmailRequest,
    SendEmailResponse,
    StoredReportResponse,
)
from app.services import ReportMailer, ReportRepository, ReportService
from app.utils import IntakeReportError, get_logger, setup_logging

_config = AppConfig()
setup_logging(_config.log_level, _config.log_file)

logger = get_logger(__name__)

START_TIME = datetime.now()


# ---- Services ----

_report_service = ReportService(
    assistant=AssistantClient(),
    repository=ReportRepository(),
    renderer=PdfRenderer(),
    mailer=ReportMailer(SmtpConfig(), brand=_config.brand),
    app_config=_config,
)


def get_report_service() -> ReportService:
    """Dependency hook; tests override it with a service wired to fakes."""
    return _report_service


# ---- Application Lifespan ----

@asynccontextmanager
async def lifespan(app: FastAPI):
    service = get_report_service()
    if not service.assistant.is_available:
        logger.warning("OPENAI_API_KEY / OPENAI_ASSISTANT_ID not set - report generation will fail")
    if not service.repository.is_configured:
        logger.warning("MONGODB_URI not set - generated reports will not be stored")
    if not service.mailer.config.is_complete:
        logger.warning("SMTP settings incomplete - report emails are disabled")

    logger.info("API ready to accept requests")
    yield

    service.repository.close()
    logger.info("Kinetic Intake Report API shut down.")


# ---- FastAPI Application ----

app = FastAPI(
    title="Kinetic Intake Report API",
    description="Biomechanical intake, AI diagnostic reports, PDF export and email delivery",
    version=_config.version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_config.cors_origins,
    allow_credentials="*" not in _config.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- Error Envelope ----

@app.exception_handler(IntakeReportError)
async def intake_report_error_handler(request: Request, exc: IntakeReportError):
    """Known failures carry their own status and message."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors (400), not 422."""
    logger.warning(f"{request.method} {request.url.path} -> 400 invalid body")
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({
            "success": False,
            "error": "Invalid request body",
            "code": "VALIDATION_ERROR",
            "details": {"errors": exc.errors()},
        }),
    )


def _unexpected(action: str, exc: Exception) -> IntakeReportError:
    logger.exception(f"{action} failed: {exc}")
    return IntakeReportError(str(exc) or "Unexpected error")


# ---- API Endpoints ----

async def _health(service: ReportService, deep: bool = False) -> HealthResponse:
    services = {
        "assistant": "configured" if service.assistant.is_available else "not_configured",
        "storage": "configured" if service.repository.is_configured else "not_configured",
        "smtp": "configured" if service.mailer.config.is_complete else "not_configured",
    }
    details = None
    if deep:
        if service.repository.is_configured:
            reachable = await run_in_threadpool(service.repository.ping)
            services["storage"] = "connected" if reachable else "unreachable"
        details = {"assistant": service.assistant.get_stats()}

    return HealthResponse(
        status="healthy",
        version=_config.version,
        timestamp=datetime.now().isoformat(),
        uptime_seconds=(datetime.now() - START_TIME).total_seconds(),
        services=services,
        details=details,
    )


@app.get("/", response_model=HealthResponse, tags=["Health"])
async def root(service: ReportService = Depends(get_report_service)):
    """API root - health check."""
    return await _health(service)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(
    deep: bool = False,
    service: ReportService = Depends(get_report_service),
):
    """Health check endpoint. ``?deep=true`` pings the report store."""
    return await _health(service, deep)


@app.post("/api/chat", response_model=GenerateReportResponse, tags=["Reports"])
async def generate_report(
    request: ChatRequest,
    service: ReportService = Depends(get_report_service),
):
    """
    Send an intake form (or a free-text prompt) to the assistant.

    The reply is returned raw and, when it is JSON, parsed. Report-shaped
    replies are stored and their id returned as ``response_id``.
    """
    try:
        data = await service.generate(request.model_dump(by_alias=True))
    except IntakeReportError:
        raise
    except Exception as e:
        raise _unexpected("Report generation", e) from e

    return GenerateReportResponse(data=data)


@app.get("/api/chat", tags=["Reports"])
async def assistant_health():
    """Assistant API health check with an example payload."""
    return {
        "success": True,
        "message": f"{_config.brand} Assistant API running",
        "example": {
            "input": "Generate a general_mobility_kinetic_chain report",
        },
    }


@app.get("/api/reports/{report_id}", response_model=StoredReportResponse, tags=["Reports"])
async def get_report(
    report_id: str,
    service: ReportService = Depends(get_report_service),
):
    """Fetch a stored report for the viewer."""
    try:
        result = await service.get_report(report_id)
    except IntakeReportError:
        raise
    except Exception as e:
        raise _unexpected("Report lookup", e) from e

    return StoredReportResponse(data=result["report"], sections=result["sections"])


@app.post("/api/reports/generate-pdf", tags=["Reports"])
async def generate_pdf(
    request: GeneratePdfRequest,
    service: ReportService = Depends(get_report_service),
):
    """Render the posted report as a downloadable A4 PDF."""
    try:
        pdf, filename = await service.build_pdf(request.report)
    except IntakeReportError:
        raise
    except Exception as e:
        raise _unexpected("PDF generation", e) from e

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/api/reports/send-email", response_model=SendEmailResponse, tags=["Reports"])
async def send_report_email(
    request: SendEmailRequest,
    service: ReportService = Depends(get_report_service),
):
    """Generate the report PDF and email it to ``to``."""
    try:
        message_id = await service.send_email(
            to=request.to,
            report=request.report,
            subject=request.subject,
            message=request.message,
        )
    except IntakeReportError:
        raise
    except Exception as e:
        raise _unexpected("Report email", e) from e

    return SendEmailResponse(messageId=message_id)


@app.post("/api/intake/progress", tags=["Intake"])
async def intake_progress(form: IntakeForm) -> Dict[str, Any]:
    """Per-section completion of an intake form."""
    return {
        "success": True,
        "sections": section_status(form),
        "completionPercent": completion_percent(form),
        "hasMovementAssessment": has_movement_assessment(form),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=False)
