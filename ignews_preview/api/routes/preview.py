"""
Preview routes - public teaser pages and the subscriber redirect check.

Pages come from the regeneration scheduler, so most requests are served
from cache. The access endpoint is never cached: it depends on the
visitor's session.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, JSONResponse

from ignews_preview.api.deps import (
    get_gate_config,
    get_page_config,
    get_rules,
    get_scheduler,
    get_session_claims,
)
from ignews_preview.components.access_gate import (
    AccessGateConfig,
    DecideInput,
    SessionClaimPort,
    run,
)
from ignews_preview.components.content_fetch import ContentBackendError
from ignews_preview.components.page import PageConfig, render_not_found_html, render_unavailable_html
from ignews_preview.components.regeneration import Freshness, RegenerationScheduler
from ignews_preview.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

CACHE_STATUS = {
    Freshness.FRESH: "HIT",
    Freshness.STALE: "STALE",
    Freshness.MISSING: "MISS",
}


@router.get(
    "/posts/preview/{slug}",
    response_class=HTMLResponse,
    summary="Post preview",
    description="Truncated public preview of a post, regenerated every revalidate period.",
)
def preview_page(
    slug: str,
    scheduler: RegenerationScheduler = Depends(get_scheduler),
    page_config: PageConfig = Depends(get_page_config),
) -> HTMLResponse:
    try:
        result = scheduler.serve(slug)
    except ContentBackendError:
        logger.exception("Could not generate preview for %r", slug)
        return HTMLResponse(content=render_unavailable_html(page_config), status_code=502)

    if result.page is None:
        return HTMLResponse(content=render_not_found_html(page_config), status_code=404)

    revalidate = scheduler.config.revalidate_seconds
    return HTMLResponse(
        content=result.page.html,
        status_code=200,
        headers={
            "Cache-Control": f"s-maxage={revalidate}, stale-while-revalidate",
            "X-Preview-Cache": CACHE_STATUS[result.freshness],
        },
    )


@router.get(
    "/api/posts/preview/{slug}/access",
    summary="Preview access decision",
    description="Whether the current visitor should be sent to the full post.",
)
def preview_access(
    slug: str,
    request: Request,
    claims: SessionClaimPort = Depends(get_session_claims),
    gate_config: AccessGateConfig = Depends(get_gate_config),
    rules: Rules = Depends(get_rules),
) -> JSONResponse:
    token = request.cookies.get(rules.session.cookie_name) or request.headers.get("Authorization")
    decision = run(DecideInput(slug=slug, claim_state=claims.claim_state(token)), config=gate_config)

    body: dict[str, Any] = decision.to_dict()
    return JSONResponse(content=body, headers={"Cache-Control": "private, no-store"})
