from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .config import settings
from .logging_utils import setup_logging, setup_sentry
from .middleware.request_context import RequestContextMiddleware
from .routes import dashboard, experiences

setup_logging()
setup_sentry(settings)

app = FastAPI(title="Memberboard", version="0.1.0")

app.add_middleware(RequestContextMiddleware)

app.include_router(dashboard.router)
app.include_router(experiences.router)


@app.get("/healthz")
async def healthz():
    return {
        "ok": True,
        "message": "Backend responding",
        "product_configured": bool(settings.whop_product_id),
    }


@app.get("/metrics")
def metrics_endpoint():
    payload = generate_latest()
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
