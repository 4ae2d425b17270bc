from typing import Literal

from pydantic import BaseModel, Field

from ignews_preview.components.access_gate import AccessGateConfig
from ignews_preview.components.page import PageConfig, PublisherIdentity, SiteConfig
from ignews_preview.components.preview import PreviewConfig
from ignews_preview.components.regeneration import RegenerationConfig


class ContentBackendRules(BaseModel):
    api_endpoint: str
    document_type: str = "post"
    access_token_env: str = "PRISMIC_ACCESS_TOKEN"
    timeout_seconds: float | None = None


class PreviewRules(BaseModel):
    max_blocks: int = Field(default=3, ge=0)
    excluded_block_types: list[str] = Field(default_factory=lambda: ["preformatted"])
    excerpt_block_type: str = "paragraph"
    default_locale: str = "pt-BR"


class RegenerationRules(BaseModel):
    revalidate_seconds: int = Field(default=1800, gt=0)
    fallback: Literal["blocking"] = "blocking"
    max_workers: int = Field(default=4, gt=0)


class SiteRules(BaseModel):
    name: str = "ig.news"
    subscribe_path: str = "/"
    full_content_path: str = "/posts/{slug}"
    access_endpoint_path: str = "/api/posts/preview/{slug}/access"


class StructuredDataRules(BaseModel):
    author_name: str
    publisher_name: str
    publisher_logo_url: str


class SessionRules(BaseModel):
    cookie_name: str = "access_token"
    claim_field: str = "activeSubscription"
    secret_env: str = "PREVIEW_SESSION_SECRET"
    algorithm: str = "HS256"


class Rules(BaseModel):
    content_backend: ContentBackendRules
    preview: PreviewRules = Field(default_factory=PreviewRules)
    regeneration: RegenerationRules = Field(default_factory=RegenerationRules)
    site: SiteRules = Field(default_factory=SiteRules)
    structured_data: StructuredDataRules
    session: SessionRules = Field(default_factory=SessionRules)

    # --- Component configs ---

    def preview_config(self) -> PreviewConfig:
        return PreviewConfig(
            max_blocks=self.preview.max_blocks,
            excluded_block_types=frozenset(self.preview.excluded_block_types),
            excerpt_block_type=self.preview.excerpt_block_type,
            default_locale=self.preview.default_locale,
        )

    def page_config(self) -> PageConfig:
        return PageConfig(
            site=SiteConfig(
                name=self.site.name,
                subscribe_path=self.site.subscribe_path,
                access_endpoint_path=self.site.access_endpoint_path,
            ),
            identity=PublisherIdentity(
                author_name=self.structured_data.author_name,
                publisher_name=self.structured_data.publisher_name,
                publisher_logo_url=self.structured_data.publisher_logo_url,
            ),
        )

    def gate_config(self) -> AccessGateConfig:
        return AccessGateConfig(
            full_content_path=self.site.full_content_path,
            claim_field=self.session.claim_field,
        )

    def regeneration_config(self) -> RegenerationConfig:
        return RegenerationConfig(
            revalidate_seconds=self.regeneration.revalidate_seconds,
            fallback=self.regeneration.fallback,
        )
