# tests/unit/services/test_record_store.py
import asyncio
import pytest

from catalog_sync.core.exceptions import StorageError, ValidationError
from catalog_sync.services.record_store import RecordStore

"""
1. Create and update
"""

@pytest.mark.asyncio
async def test_upsert_creates_product_and_shop(record_store, shop):
    """First write for an unseen id creates the product and its shop"""
    product = await record_store.upsert(shop, "123", "Telecaster", "<p>Butterscotch</p>")

    assert product.external_id == "123"
    assert product.shop_id == shop
    assert product.title == "Telecaster"
    assert product.description_html == "<p>Butterscotch</p>"
    assert product.updated_at is not None

    stored_shop = await record_store.get_shop(shop)
    assert stored_shop is not None
    assert stored_shop.last_activity_at is not None


@pytest.mark.asyncio
async def test_upsert_is_idempotent(record_store, shop):
    """Same id twice yields one row with the second call's values"""
    await record_store.upsert(shop, "123", "First Title", "first")
    assert await record_store.count() == 1

    product = await record_store.upsert(shop, "123", "Second Title", "second")

    assert await record_store.count() == 1
    assert product.title == "Second Title"
    assert product.description_html == "second"

    stored = await record_store.get("123")
    assert stored.title == "Second Title"
    assert stored.description_html == "second"


@pytest.mark.asyncio
async def test_upsert_updates_timestamp(record_store, shop):
    first = await record_store.upsert(shop, "123", "Title")
    await asyncio.sleep(0.01)
    second = await record_store.upsert(shop, "123", "Title")

    assert second.updated_at >= first.updated_at
    assert second.created_at == first.created_at


@pytest.mark.asyncio
async def test_upsert_ignores_shop_reassignment(record_store, shop):
    """shop_id is fixed at creation; a different shop on update only changes the other fields"""
    await record_store.upsert(shop, "123", "Original")

    product = await record_store.upsert("other-shop.myshopify.com", "123", "Renamed")

    assert product.shop_id == shop
    assert product.title == "Renamed"
    assert len(await record_store.list_for_shop(shop)) == 1
    assert await record_store.list_for_shop("other-shop.myshopify.com") == []


@pytest.mark.asyncio
async def test_upsert_defaults_description(record_store, shop):
    product = await record_store.upsert(shop, "123", "Title", None)
    assert product.description_html == ""


@pytest.mark.asyncio
async def test_upsert_touches_shop_activity(record_store, shop):
    await record_store.upsert(shop, "1", "One")
    first_activity = (await record_store.get_shop(shop)).last_activity_at

    await asyncio.sleep(0.01)
    await record_store.upsert(shop, "2", "Two")
    second_activity = (await record_store.get_shop(shop)).last_activity_at

    assert second_activity > first_activity


"""
2. Validation and storage failures
"""

@pytest.mark.asyncio
@pytest.mark.parametrize("title", ["", "   ", None])
async def test_upsert_rejects_empty_title(record_store, shop, title):
    with pytest.raises(ValidationError):
        await record_store.upsert(shop, "123", title)

    assert await record_store.count() == 0
    assert await record_store.get_shop(shop) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("external_id", ["", "  ", None])
async def test_upsert_rejects_empty_external_id(record_store, shop, external_id):
    with pytest.raises(ValidationError):
        await record_store.upsert(shop, external_id, "Title")


@pytest.mark.asyncio
async def test_upsert_rejects_empty_shop(record_store):
    with pytest.raises(ValidationError):
        await record_store.upsert("", "123", "Title")


@pytest.mark.asyncio
async def test_upsert_wraps_database_errors(test_engine, session_factory, shop):
    """A database failure surfaces as StorageError"""
    async with test_engine.begin() as conn:
        await conn.exec_driver_sql("DROP TABLE products")

    store = RecordStore(session_factory)
    with pytest.raises(StorageError):
        await store.upsert(shop, "123", "Title")


"""
3. Concurrency
"""

@pytest.mark.asyncio
async def test_concurrent_upserts_same_key_do_not_tear(record_store, shop):
    """Concurrent writers to one id leave one row whose fields all come from the same write"""
    writes = [
        record_store.upsert(shop, "42", f"Title {i}", f"Description {i}")
        for i in range(10)
    ]
    await asyncio.gather(*writes)

    assert await record_store.count() == 1
    stored = await record_store.get("42")
    title_suffix = stored.title.split(" ")[-1]
    description_suffix = stored.description_html.split(" ")[-1]
    assert title_suffix == description_suffix


@pytest.mark.asyncio
async def test_concurrent_upserts_distinct_keys(record_store, shop):
    await asyncio.gather(*[
        record_store.upsert(shop, str(i), f"Product {i}") for i in range(20)
    ])

    assert await record_store.count() == 20
    assert len(await record_store.list_for_shop(shop)) == 20
