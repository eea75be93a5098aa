# catalog_sync/services/shopify/pager.py
"""
Cursor walk over the Shopify products connection.
"""

import logging
from typing import AsyncIterator, List, Optional, Protocol

from catalog_sync.core.exceptions import TransportError
from catalog_sync.schemas.product import ProductPage, RemoteProduct

logger = logging.getLogger(__name__)


class ProductListing(Protocol):
    async def list_page(self, shop: str, page_size: int, cursor: Optional[str] = None) -> ProductPage:
        ...


class ProductPageWalker:
    """
    Walks every page of a shop's catalog, one cursor chain per call.

    The walker keeps no state between calls, so each iteration starts again
    from the first page. Page failures propagate as TransportError; there is
    no resume from a partial walk.
    """

    def __init__(self, listing: ProductListing, page_size: int = 50):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.listing = listing
        self.page_size = page_size

    async def iter_products(self, shop: str) -> AsyncIterator[RemoteProduct]:
        cursor = None
        page_num = 1
        has_next_page = True

        while has_next_page:
            logger.debug(f"Fetching page {page_num} for {shop} (after cursor: {cursor})")
            try:
                page = await self.listing.list_page(shop, self.page_size, cursor)
            except TransportError:
                raise
            except Exception as e:
                raise TransportError(f"Page {page_num} request failed for {shop}: {e}") from e

            for record in page.records:
                yield record

            has_next_page = page.has_next_page
            if has_next_page and not page.end_cursor:
                raise TransportError(f"Page {page_num} for {shop} reported more pages without an end cursor")
            cursor = page.end_cursor
            page_num += 1

        logger.info(f"Walked {page_num - 1} page(s) for {shop}")

    async def fetch_all(self, shop: str) -> List[RemoteProduct]:
        return [record async for record in self.iter_products(shop)]
