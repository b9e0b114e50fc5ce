"""HTTP application serving composed pages and the editor/visitor procedures.

Routes
------
- ``GET /healthz``: liveness probe.
- ``GET|POST|OPTIONS /auth-callback``: credential handshake for the editor.
- ``ANY /github-proxy?action=...``: repository relay for the editor.
- ``POST /api/newsletter/subscribe-hero|subscribe-full|partnership-inquiry``.
- ``POST /``: local stand-in for the static form collector.
- ``GET /`` and ``GET /{slug}``: composed pages, or the not-found view.

Process configuration is read through the :func:`get_settings` dependency so
tests can override it. Content is loaded once when the app is created.

Usage::

    uvicorn --factory wedding_pages.server:create_app
"""

from __future__ import annotations

import logging
import typing as typ
from http import HTTPStatus
from pathlib import Path
from urllib.parse import parse_qsl

from fastapi import Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse, Response

from .auth_bridge import AuthBridge
from .composer import PageComposer
from .config import load_site_config
from .content import load_content_store
from .errors import UpstreamError, ValidationError
from .forms.validation import validate_rsvp
from .github_proxy import ProxyRequest, handle_proxy_request
from .newsletter import (
    FullSubscription,
    HeroSubscription,
    MailchimpClient,
    NewsletterService,
    PartnershipInquiry,
    ProcedureResult,
)
from .resolver import PageResolver
from .settings import RuntimeSettings

if typ.TYPE_CHECKING:
    import requests

    from .content import ContentStore

logger = logging.getLogger(__name__)

COLLECTOR_FORMS = {"rsvp": validate_rsvp}
PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def get_settings() -> RuntimeSettings:
    """Return the process configuration for the current request."""
    return RuntimeSettings.from_env()


def _to_response(
    status: int, body: str | bytes, headers: typ.Mapping[str, str]
) -> Response:
    return Response(content=body, status_code=status, headers=dict(headers))


def create_app(
    site_config_path: Path | None = None,
    *,
    store: ContentStore | None = None,
    session: requests.Session | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    site_config_path : Path, optional
        Path to ``site.yaml``. Defaults to ``PAGES_CONFIG`` from the
        environment, falling back to ``config/site.yaml``.
    store : ContentStore, optional
        Preloaded content; loaded from the configured content directory when
        omitted.
    session : requests.Session, optional
        Session used for every upstream call (GitHub and Mailchimp).
    """
    config = load_site_config(
        site_config_path or RuntimeSettings.from_env().site_config_path
    )
    store = store or load_content_store(
        config.content.root, pages_dir=config.content.pages
    )
    composer = PageComposer(config, store)
    resolver = PageResolver(store.pages, config.site.default_slug)
    bridge = AuthBridge(composer.env)

    app = FastAPI(title="wedding-pages", version="0.1.0")
    app.state.composer = composer
    app.state.resolver = resolver

    @app.exception_handler(UpstreamError)
    async def upstream_error(_request: Request, exc: UpstreamError) -> JSONResponse:
        logger.error("Upstream failure: %s", exc.detail or exc)
        return JSONResponse(
            {"detail": str(exc)}, status_code=HTTPStatus.INTERNAL_SERVER_ERROR
        )

    @app.get("/healthz")
    def healthz() -> dict[str, typ.Any]:
        return {"status": "ok", "pages": len(resolver.slugs())}

    @app.api_route("/auth-callback", methods=["GET", "POST", "OPTIONS"])
    def auth_callback(
        request: Request, settings: RuntimeSettings = Depends(get_settings)
    ) -> Response:
        if request.method == "OPTIONS":
            result = bridge.preflight()
        else:
            result = bridge.callback(settings)
        return _to_response(result.status, result.body, result.headers)

    @app.api_route("/github-proxy", methods=PROXY_METHODS)
    async def github_proxy(
        request: Request, settings: RuntimeSettings = Depends(get_settings)
    ) -> Response:
        proxy_request = ProxyRequest(
            action=request.query_params.get("action", ""),
            method=request.method,
            params=dict(request.query_params),
            body=await request.body() or None,
        )
        result = await run_in_threadpool(
            handle_proxy_request, settings, proxy_request, session=session
        )
        return _to_response(result.status, result.body, result.headers)

    def _newsletter(settings: RuntimeSettings) -> NewsletterService:
        client = MailchimpClient.from_settings(settings, session=session)
        return NewsletterService(settings, client=client)

    @app.post("/api/newsletter/subscribe-hero", response_model=ProcedureResult)
    def subscribe_hero(
        body: HeroSubscription, settings: RuntimeSettings = Depends(get_settings)
    ) -> ProcedureResult:
        return _newsletter(settings).subscribe_hero(body)

    @app.post("/api/newsletter/subscribe-full", response_model=ProcedureResult)
    def subscribe_full(
        body: FullSubscription, settings: RuntimeSettings = Depends(get_settings)
    ) -> ProcedureResult:
        return _newsletter(settings).subscribe_full(body)

    @app.post("/api/newsletter/partnership-inquiry", response_model=ProcedureResult)
    def partnership_inquiry(
        body: PartnershipInquiry, settings: RuntimeSettings = Depends(get_settings)
    ) -> ProcedureResult:
        return _newsletter(settings).partnership_inquiry(body)

    @app.post("/")
    async def form_collector(request: Request) -> JSONResponse:
        raw = (await request.body()).decode("utf-8", errors="replace")
        fields = dict(parse_qsl(raw, keep_blank_values=True))
        form_name = fields.pop("form-name", "")
        validator = COLLECTOR_FORMS.get(form_name)
        if validator is None:
            return JSONResponse(
                {"error": f"Unknown form: {form_name or '<missing>'}"},
                status_code=HTTPStatus.BAD_REQUEST,
            )
        try:
            cleaned = validator(fields)
        except ValidationError as exc:
            return JSONResponse(
                {"errors": exc.field_errors},
                status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
            )
        logger.info(
            "Received %s submission (attendance=%s)",
            form_name,
            cleaned.get("attendance", "-"),
        )
        return JSONResponse({"ok": True})

    @app.get("/", response_class=HTMLResponse)
    @app.get("/{slug}", response_class=HTMLResponse)
    def page(request: Request) -> HTMLResponse:
        path = request.url.path
        found = resolver.find(path)
        if found is None:
            return HTMLResponse(
                composer.compose_not_found(path), status_code=HTTPStatus.NOT_FOUND
            )
        return HTMLResponse(composer.compose(found))

    return app


__all__ = ["create_app", "get_settings"]
