import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from ignews_preview.adapters.background import ThreadPoolBackgroundRunner
from ignews_preview.adapters.clock import SystemClock
from ignews_preview.adapters.page_cache import InMemoryPageCache
from ignews_preview.adapters.prismic import PrismicContentBackend, create_prismic_backend
from ignews_preview.adapters.session_jwt import JWTSessionClaims, create_session_claims
from ignews_preview.components.access_gate import AccessGateConfig
from ignews_preview.components.content_fetch import ContentFetcher
from ignews_preview.components.page import PageAssembler, PageConfig
from ignews_preview.components.preview import PreviewTransformer
from ignews_preview.components.regeneration import PagePipeline, RegenerationScheduler
from ignews_preview.rules.loader import load_rules
from ignews_preview.rules.models import Rules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get("PREVIEW_RULES_PATH", self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


def get_page_config(rules: Rules = Depends(get_rules)) -> PageConfig:
    return rules.page_config()


def get_gate_config(rules: Rules = Depends(get_rules)) -> AccessGateConfig:
    return rules.gate_config()


# --- Adapters ---
_backend_instance: PrismicContentBackend | None = None


def get_content_backend() -> PrismicContentBackend:
    """Get content backend singleton."""
    global _backend_instance
    if _backend_instance is None:
        backend_rules = get_rules().content_backend
        _backend_instance = create_prismic_backend(
            backend_rules.api_endpoint,
            access_token_env=backend_rules.access_token_env,
            timeout_seconds=backend_rules.timeout_seconds,
        )
    return _backend_instance


_session_claims_instance: JWTSessionClaims | None = None


def get_session_claims() -> JWTSessionClaims:
    """Get session claim reader singleton."""
    global _session_claims_instance
    if _session_claims_instance is None:
        session_rules = get_rules().session
        _session_claims_instance = create_session_claims(
            secret_env=session_rules.secret_env,
            algorithm=session_rules.algorithm,
            claim_field=session_rules.claim_field,
        )
    return _session_claims_instance


_runner_instance: ThreadPoolBackgroundRunner | None = None


def get_background_runner() -> ThreadPoolBackgroundRunner:
    """Get background runner singleton."""
    global _runner_instance
    if _runner_instance is None:
        _runner_instance = ThreadPoolBackgroundRunner(
            max_workers=get_rules().regeneration.max_workers
        )
    return _runner_instance


# --- Scheduler ---
_scheduler_instance: RegenerationScheduler | None = None


def build_scheduler(
    rules: Rules,
    backend: PrismicContentBackend,
    runner: ThreadPoolBackgroundRunner,
) -> RegenerationScheduler:
    """Wire fetch -> transform -> assemble behind the regeneration scheduler."""
    pipeline = PagePipeline(
        fetcher=ContentFetcher(backend, document_type=rules.content_backend.document_type),
        transformer=PreviewTransformer(rules.preview_config()),
        assembler=PageAssembler(rules.page_config()),
    )
    return RegenerationScheduler(
        generator=pipeline,
        cache=InMemoryPageCache(),
        runner=runner,
        clock=SystemClock(),
        config=rules.regeneration_config(),
    )


def get_scheduler() -> RegenerationScheduler:
    """Get scheduler singleton; it owns the published page cache."""
    global _scheduler_instance
    if _scheduler_instance is None:
        _scheduler_instance = build_scheduler(
            get_rules(),
            get_content_backend(),
            get_background_runner(),
        )
    return _scheduler_instance


def shutdown_adapters() -> None:
    """Release pooled resources on app shutdown."""
    global _runner_instance, _backend_instance
    if _runner_instance is not None:
        _runner_instance.shutdown(wait=False)
        _runner_instance = None
    if _backend_instance is not None:
        _backend_instance.close()
        _backend_instance = None
