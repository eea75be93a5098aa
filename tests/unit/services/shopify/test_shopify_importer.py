# tests/unit/services/shopify/test_shopify_importer.py
import pytest
from unittest.mock import AsyncMock

from catalog_sync.core.exceptions import StorageError, TransportError
from catalog_sync.schemas.product import RemoteProduct
from catalog_sync.services.shopify.importer import ShopifyImporter
from catalog_sync.services.shopify.pager import ProductPageWalker
from tests.mocks.mock_listing import MockProductListing, make_products


def build_importer(record_store, pages, page_size=50, fail_on_page=None):
    listing = MockProductListing(pages, fail_on_page=fail_on_page)
    walker = ProductPageWalker(listing, page_size=page_size)
    return ShopifyImporter(walker, record_store)


@pytest.mark.asyncio
async def test_run_imports_every_product(record_store, shop):
    importer = build_importer(
        record_store,
        [make_products(50), make_products(50, start=51), make_products(7, start=101)],
    )

    result = await importer.run(shop)

    assert result.shop == shop
    assert result.products_synced == 107
    assert result.total_fetched == 107
    assert result.skipped == []
    assert await record_store.count() == 107


@pytest.mark.asyncio
async def test_run_stores_normalized_ids(record_store, shop):
    """GraphQL global ids are stored under their numeric id"""
    importer = build_importer(record_store, [make_products(1, start=8001)])

    await importer.run(shop)

    stored = await record_store.get("8001")
    assert stored is not None
    assert stored.title == "Product 8001"
    assert stored.description_html == "<p>Product 8001</p>"


@pytest.mark.asyncio
async def test_run_skips_invalid_records(record_store, shop):
    """A record with an empty title is skipped and the run continues"""
    page = make_products(5)
    page[2] = RemoteProduct(id="gid://shopify/Product/3", title="")
    page.append(RemoteProduct(id="", title="No id"))
    importer = build_importer(record_store, [page, make_products(3, start=10)])

    result = await importer.run(shop)

    assert result.total_fetched == 9
    assert result.products_synced == 7
    assert [s.external_id for s in result.skipped] == ["gid://shopify/Product/3", ""]
    assert await record_store.count() == 7
    assert await record_store.get("3") is None


@pytest.mark.asyncio
async def test_run_skips_storage_failures(shop):
    """A storage failure on one record is treated like a validation skip"""
    record_store = AsyncMock()
    record_store.upsert.side_effect = [None, StorageError("disk full"), None]
    importer = build_importer(record_store, [make_products(3)])

    result = await importer.run(shop)

    assert result.products_synced == 2
    assert len(result.skipped) == 1
    assert result.skipped[0].reason == "disk full"
    assert record_store.upsert.await_count == 3


@pytest.mark.asyncio
async def test_run_writes_in_walker_order(shop):
    record_store = AsyncMock()
    importer = build_importer(record_store, [make_products(2), make_products(2, start=3)], page_size=2)

    await importer.run(shop)

    written = [call.kwargs["external_id"] for call in record_store.upsert.await_args_list]
    assert written == ["1", "2", "3", "4"]


@pytest.mark.asyncio
async def test_run_aborts_on_transport_error(record_store, shop):
    importer = build_importer(
        record_store,
        [make_products(50), make_products(50, start=51)],
        fail_on_page=1,
    )

    with pytest.raises(TransportError):
        await importer.run(shop)

    # The catalog is walked before any write
    assert await record_store.count() == 0
