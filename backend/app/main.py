import logging

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from routes.rooms import router as rooms_router

logger = logging.getLogger(__name__)

# Sent on every response, error and preflight included. Session state is
# ephemeral, so nothing may be cached.
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
    "Cache-Control": "no-store",
}

app = FastAPI(
    title="Rendezvous API",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    redirect_slashes=False,
)
app.include_router(rooms_router)


@app.middleware("http")
async def apply_cors_headers(request: Request, call_next) -> Response:
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
    # Unknown paths and known paths hit with the wrong method look the same to clients.
    if exc.status_code in (404, 405):
        logger.debug("[main] %s %s -> 404", request.method, request.url.path)
        return PlainTextResponse("Not found", status_code=404)
    return await http_exception_handler(request, exc)


@app.get("/health", response_class=PlainTextResponse)
def health() -> str:
    return "ok"
