"""
Content fetch component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class ContentBackendPort(Protocol):
    """
    Port for the headless CMS.

    Implementations:
    - PrismicContentBackend: Prismic REST API over httpx
    - in-memory fakes in tests
    """

    def get_by_uid(self, document_type: str, uid: str) -> dict[str, Any] | None:
        """
        Get one raw document by its UID.

        Returns:
            The raw document JSON, or None when no document has that UID.

        Raises:
            ContentBackendError: when the query itself fails.
        """
        ...
