from __future__ import annotations

import logging
from typing import Optional

from shortlinks.core.errors import NotFoundError, StoreError, ValidationError
from shortlinks.db.store import UrlRecord, UrlStore
from shortlinks.services.codes import CodeGenerator

logger = logging.getLogger(__name__)


def build_short_url(base_url: str, code: str) -> str:
    return f"{base_url.rstrip('/')}/{code}"


class LinkService:
    def __init__(self, store: UrlStore, generator: CodeGenerator):
        self.store = store
        self.generator = generator

    def shorten(self, long_url: Optional[str]) -> str:
        """
        Stores long_url under a fresh code and returns the code.

        Raises ValidationError for missing/blank input (the generator is not
        called), GenerationError or StoreError otherwise.
        """
        if long_url is None or not long_url.strip():
            raise ValidationError("URL required")

        code = self.generator.generate()
        self.store.insert(long_url, code)

        logger.info("Created short code %s", code)
        return code

    def resolve(self, code: str) -> UrlRecord:
        """
        Fetches the record a redirect points at, without counting it.
        Any store failure is reported as not-found so visitors never see a 5xx.
        """
        try:
            return self.store.fetch_by_code(code)
        except StoreError as exc:
            logger.warning("Lookup failed for %s", code, exc_info=True)
            raise NotFoundError(f"no url for code {code!r}") from exc

    def follow(self, code: str) -> UrlRecord:
        """
        Resolves a code for a redirect and counts the follow.
        A failed increment is logged and ignored; the visitor still gets redirected.
        """
        record = self.resolve(code)

        try:
            self.store.increment_follow_count(code)
        except StoreError:
            logger.warning("Could not increment times_followed for %s", code, exc_info=True)

        logger.info("Redirecting %s -> %s", code, record.long_url)
        return record

    def lookup(self, code: str) -> UrlRecord:
        return self.store.fetch_by_code(code)
