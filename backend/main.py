# main.py
from dotenv import load_dotenv
load_dotenv()

import os
import time
import uuid
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from db import engine
from errors import NotFoundError, OutreachError, ValidationError
from llm import llm_mode
from logging_config import get_logger
from routers import campaigns, demo, discovery, influencers, messages
from routers.webhooks_sendgrid import router as sendgrid_webhooks_router

logger = get_logger("icy", component="api")

app = FastAPI(title="ICY Influencer Outreach")


@app.on_event("startup")
def on_startup():
    logger.info("API started", extra={"db_url": engine.url.render_as_string(hide_password=True)})

    if not os.getenv("YOUTUBE_API_KEY"):
        logger.error("YOUTUBE_API_KEY is not set - YouTube discovery is unavailable")
    if not os.getenv("SENDGRID_API_KEY"):
        logger.warning("SENDGRID_API_KEY is not set - email sending will be disabled")
    if llm_mode() == "mock":
        logger.warning("Generative text is in mock mode", extra={"llm_mode": os.getenv("LLM_MODE", "mock")})


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    start = time.time()

    try:
        response: Response = await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled exception",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
            },
        )
        raise

    duration_ms = int((time.time() - start) * 1000)

    logger.info(
        "request",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        },
    )

    response.headers["x-request-id"] = request_id
    return response


# ----------------------------
# Error mapping
# ----------------------------
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ValidationError)
async def domain_validation_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    detail = f"{field}: {first.get('msg')}" if field else str(first.get("msg", "Invalid request"))
    return JSONResponse(status_code=400, content={"detail": detail})


@app.exception_handler(OutreachError)
async def outreach_error_handler(request: Request, exc: OutreachError):
    logger.error(
        "Request failed",
        extra={"path": request.url.path, "error_type": type(exc).__name__, "error": exc.message},
    )
    return JSONResponse(status_code=500, content={"detail": exc.message})


app.include_router(influencers.router, prefix="/influencers", tags=["influencers"])
app.include_router(messages.router, tags=["messages"])
app.include_router(discovery.router, tags=["discovery"])
app.include_router(campaigns.router, tags=["campaigns"])
app.include_router(demo.router)

app.include_router(sendgrid_webhooks_router)


@app.get("/health")
def health():
    return {"ok": True}
