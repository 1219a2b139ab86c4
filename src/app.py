"""Brewery FastAPI application.

Web server for the beer catalog, customers, beer orders and shipments.
Commands are processed synchronously inside the brewery domain context,
which the middleware pushes for every request.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the config overlay (memory store by default,
# PostgreSQL in staging and production).
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from brewery.domain import brewery
from brewery.utils.logging import bind_request_context, clear_request_context

brewery.init()

REQUEST_ID_HEADER = "X-Request-ID"

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Brewery API",
    description="Beer catalog, customers, beer orders and shipments",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the brewery domain context and bind request details to the log context."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    bind_request_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        with brewery.domain_context():
            response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        clear_request_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from brewery.api import (  # noqa: E402
    beer_router,
    customer_router,
    order_router,
    register_exception_handlers,
    shipment_router,
)

app.include_router(beer_router)
app.include_router(customer_router)
app.include_router(order_router)
app.include_router(shipment_router)
register_exception_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": brewery.name}})
