"""
Page component - compose a preview into a servable HTML page.

Purely compositional: every value comes from the Preview or PageConfig.
"""

from __future__ import annotations

import json
from typing import Any

from ignews_preview.components.preview import Preview

from .models import DEFAULT_PAGE_CONFIG, PageConfig, PageOutput, PublisherIdentity


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#x27;")
    )


def _script_json(value: Any) -> str:
    """JSON safe to inline inside a <script> element."""
    return (
        json.dumps(value, ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


# --- Structured Data ---


def build_structured_data(
    preview: Preview,
    identity: PublisherIdentity = DEFAULT_PAGE_CONFIG.identity,
) -> dict[str, Any]:
    """NewsArticle JSON-LD for search engines."""
    return {
        "@context": "https://schema.org",
        "@type": "NewsArticle",
        "datePublished": preview.date_published,
        "dateModified": preview.date_modified,
        "author": {"@type": "Person", "name": identity.author_name},
        "publisher": {
            "@type": "Person",
            "name": identity.publisher_name,
            "logo": {
                "@type": "ImageObject",
                "url": identity.publisher_logo_url,
            },
        },
    }


# --- HTML ---


def render_head(preview: Preview, structured_data: dict[str, Any], config: PageConfig) -> str:
    return "\n    ".join(
        [
            f"<title>{_escape_html(preview.title)} | {_escape_html(config.site.name)}</title>",
            f'<meta name="description" content="{_escape_html(preview.excerpt)}" />',
            f'<script type="application/ld+json">{_script_json(structured_data)}</script>',
        ]
    )


def render_gate_script(slug: str, config: PageConfig) -> str:
    """
    Client bootstrap for the access gate.

    Resolves the visitor's claim after render and follows a redirect action.
    A failed or non-2xx access check marks the visitor inactive.
    """
    endpoint = config.site.access_endpoint_path.format(slug=slug)
    return f"""<script>
    (function () {{
      function setClaimState(state) {{
        var cta = document.querySelector("[data-claim-state]");
        if (cta) {{ cta.setAttribute("data-claim-state", state); }}
      }}
      fetch({_script_json(endpoint)}, {{ credentials: "same-origin" }})
        .then(function (res) {{
          if (!res.ok) {{ throw new Error("access check failed: " + res.status); }}
          return res.json();
        }})
        .then(function (gate) {{
          setClaimState(gate.claim_state);
          if (gate.action === "redirect" && gate.target) {{
            window.location.assign(gate.target);
          }}
        }})
        .catch(function () {{
          setClaimState("inactive");
        }});
    }})();
    </script>"""


def render_body(preview: Preview, config: PageConfig = DEFAULT_PAGE_CONFIG) -> str:
    site = config.site
    return f"""<main class="container">
      <article class="post">
        <h1>{_escape_html(preview.title)}</h1>
        <time datetime="{_escape_html(preview.date_modified)}">{_escape_html(preview.updated_at)}</time>
        <div class="postContent previewContent">{preview.content}</div>
        <div class="continueReading" data-claim-state="unknown">
          {_escape_html(site.cta_text)}
          <a href="{_escape_html(site.subscribe_path)}">{_escape_html(site.cta_link_text)}</a>
        </div>
      </article>
    </main>"""


def render_page_html(head: str, body: str, lang: str, gate_script: str = "") -> str:
    return f"""<!DOCTYPE html>
<html lang="{_escape_html(lang or "en")}">
<head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    {head}
</head>
<body>
    {body}
    {gate_script}
</body>
</html>"""


# --- Assembly ---


def assemble(preview: Preview, config: PageConfig = DEFAULT_PAGE_CONFIG) -> PageOutput:
    """Compose a Preview into the page served to every visitor."""
    structured_data = build_structured_data(preview, config.identity)
    body = render_body(preview, config)
    html = render_page_html(
        render_head(preview, structured_data, config),
        body,
        preview.lang,
        render_gate_script(preview.slug, config),
    )

    return PageOutput(
        slug=preview.slug,
        title=preview.title,
        description=preview.excerpt,
        lang=preview.lang,
        structured_data=structured_data,
        body_html=body,
        html=html,
    )


class PageAssembler:
    """Holds page configuration and assembles pages."""

    def __init__(self, config: PageConfig | None = None) -> None:
        self._config = config or DEFAULT_PAGE_CONFIG

    def assemble(self, preview: Preview) -> PageOutput:
        return assemble(preview, self._config)


def render_not_found_html(config: PageConfig = DEFAULT_PAGE_CONFIG) -> str:
    """Standard not-found page."""
    head = f"<title>Not found | {_escape_html(config.site.name)}</title>"
    body = '<main class="container"><h1>404</h1><p>This page could not be found.</p></main>'
    return render_page_html(head, body, "en")


def render_unavailable_html(config: PageConfig = DEFAULT_PAGE_CONFIG) -> str:
    """Generic error page; never carries error details."""
    head = f"<title>Unavailable | {_escape_html(config.site.name)}</title>"
    body = (
        '<main class="container"><h1>Temporarily unavailable</h1>'
        "<p>Please try again in a few minutes.</p></main>"
    )
    return render_page_html(head, body, "en")
