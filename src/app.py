"""Cargo tracking FastAPI application.

Web server that processes shipping commands synchronously via HTTP. Each
request is wrapped in the shipping domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - default/"test" → memory database, synchronous event handlers
#   - "production"   → PostgreSQL
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from shipping.domain import shipping

shipping.init()

with shipping.domain_context():
    from shipping.location.registration import seed_sample_locations  # noqa: E402

    seed_sample_locations()

_SHIPPING_PREFIXES = ("/cargos", "/locations", "/handling-events")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Cargo Tracking API",
    description="Cargo booking, routing and tracking",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the shipping domain context for each domain request."""
    if request.url.path.startswith(_SHIPPING_PREFIXES):
        with shipping.domain_context():
            response = await call_next(request)
        return response
    # No domain match — pass through (health check, docs, etc.)
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from shipping.api import cargo_router, handling_router, location_router  # noqa: E402

app.include_router(cargo_router)
app.include_router(location_router)
app.include_router(handling_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "shipping": {"name": shipping.name},
            },
        }
    )
