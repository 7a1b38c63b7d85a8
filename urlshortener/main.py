import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.responses import RedirectResponse

from urlshortener import schemas
from urlshortener.aliases import generate_alias
from urlshortener.config import Settings
from urlshortener.exceptions import (
    AliasConflictError,
    AliasNotFoundError,
    InvalidMappingError,
    StoreError,
)
from urlshortener.middleware import RequestContextMiddleware, TimeoutMiddleware
from urlshortener.storage import AliasStore
from urlshortener.validators import validate_save_request

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> AliasStore:
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _log_extra(request: Request, **fields) -> dict:
    return {"request_id": getattr(request.state, "request_id", None), **fields}


# Health check (useful for uptime monitors & load balancers)
@router.get("/health", response_model=schemas.HealthOut, include_in_schema=False)
def health(settings: Settings = Depends(get_settings)):
    return {"status": "ok", "env": settings.environment}


@router.post("/url", response_model=schemas.SaveResponse)
def save_url(
    link_in: schemas.SaveRequest,
    request: Request,
    store: AliasStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    errors = validate_save_request(link_in.url, link_in.alias)
    if errors:
        logger.info("invalid save request: %s", "; ".join(errors), extra=_log_extra(request))
        raise HTTPException(status_code=400, detail=", ".join(errors))

    # no retry on conflict, a clashing generated alias is reported like any other
    alias = link_in.alias or generate_alias(settings.alias_length)
    try:
        mapping_id = store.save(link_in.url, alias)
    except AliasConflictError:
        logger.info("url already exists: alias=%s", alias, extra=_log_extra(request))
        raise HTTPException(status_code=409, detail="url already exists")
    except InvalidMappingError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StoreError:
        logger.exception("failed to save url", extra=_log_extra(request, alias=alias))
        raise HTTPException(status_code=500, detail="failed to save url")

    logger.info("url added: id=%s alias=%s", mapping_id, alias, extra=_log_extra(request))
    return {"status": "OK", "alias": alias}


@router.delete("/url/{alias}", response_model=schemas.StatusOut)
def delete_url(alias: str, request: Request, store: AliasStore = Depends(get_store)):
    try:
        store.delete(alias)
    except StoreError:
        logger.exception("failed to delete url", extra=_log_extra(request, alias=alias))
        raise HTTPException(status_code=500, detail="internal error")
    logger.info("url deleted: alias=%s", alias, extra=_log_extra(request))
    return {"status": "OK"}


@router.get("/{alias}", include_in_schema=False)
def redirect(alias: str, request: Request, store: AliasStore = Depends(get_store)):
    try:
        target_url = store.lookup(alias)
    except AliasNotFoundError:
        logger.info("alias not found: %s", alias, extra=_log_extra(request))
        raise HTTPException(status_code=404, detail="not found")
    except StoreError:
        logger.exception("failed to get url", extra=_log_extra(request, alias=alias))
        raise HTTPException(status_code=500, detail="internal error")

    logger.debug("redirecting %s -> %s", alias, target_url, extra=_log_extra(request))
    return RedirectResponse(url=target_url, status_code=302)


def create_app(settings: Settings, store: AliasStore | None = None) -> FastAPI:
    """Build the application around one shared AliasStore.

    When no store is passed one is opened at ``settings.storage_path``;
    StoreUnavailableError propagates so startup fails.
    """
    if store is None:
        store = AliasStore.open(settings.storage_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        app.state.store.close()

    app = FastAPI(
        title="URL Shortener",
        description="Save long URLs under short aliases and redirect to them.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.settings = settings

    app.add_middleware(TimeoutMiddleware, timeout=settings.http_timeout)
    app.add_middleware(RequestContextMiddleware)
    app.include_router(router)
    return app
