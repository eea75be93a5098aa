from typing import List, Optional

from catalog_sync.core.exceptions import ShopifyAPIError
from catalog_sync.schemas.product import ProductPage, RemoteProduct


def make_products(count: int, start: int = 1, gid: bool = True) -> List[RemoteProduct]:
    """Build `count` remote products with sequential ids"""
    products = []
    for n in range(start, start + count):
        product_id = f"gid://shopify/Product/{n}" if gid else str(n)
        products.append(RemoteProduct(id=product_id, title=f"Product {n}",
                                      description_html=f"<p>Product {n}</p>"))
    return products


class MockProductListing:
    """
    In-memory stand-in for the Shopify listing collaborator.

    Serves the given pages in order, chaining cursors "cursor-1", "cursor-2", ...
    and can be told to fail on a given page.
    """

    def __init__(self, pages: List[List[RemoteProduct]], fail_on_page: Optional[int] = None):
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.calls: list = []

    async def list_page(self, shop: str, page_size: int, cursor: Optional[str] = None) -> ProductPage:
        self.calls.append({"shop": shop, "page_size": page_size, "cursor": cursor})
        index = 0 if cursor is None else int(cursor.split("-")[1])

        if self.fail_on_page is not None and index == self.fail_on_page:
            raise ShopifyAPIError(f"Simulated failure on page {index + 1}")

        has_next_page = index + 1 < len(self.pages)
        return ProductPage(
            records=self.pages[index] if self.pages else [],
            has_next_page=has_next_page,
            end_cursor=f"cursor-{index + 1}" if has_next_page else None,
        )
