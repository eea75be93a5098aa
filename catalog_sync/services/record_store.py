# catalog_sync/services/record_store.py
"""
The single write path for products.

Both the bulk importer and the webhook processor write through
RecordStore.upsert, so the database only ever sees one merge rule:
create on an unseen external_id, otherwise overwrite title,
description_html and updated_at. shop_id is set once at creation.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import select, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_sync.core.exceptions import StorageError, ValidationError
from catalog_sync.models.product import Product
from catalog_sync.models.shop import Shop

logger = logging.getLogger(__name__)

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class RecordStore:
    """
    Product persistence keyed by external id.

    Every call opens its own session, so concurrent callers never share one.
    Each upsert is a single transaction built from INSERT ... ON CONFLICT
    statements, which keeps writes to one key atomic: concurrent writers are
    serialized by the database and the last one wins in full.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    def _insert(self, session: AsyncSession, table):
        dialect = session.bind.dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect](table)
        except KeyError:
            raise StorageError(f"Upsert is not supported on the '{dialect}' dialect")

    async def upsert(
        self,
        shop_id: str,
        external_id: str,
        title: str,
        description_html: Optional[str] = "",
    ) -> Product:
        """
        Create or update the product with this external id.

        Raises:
            ValidationError: title, external_id or shop_id is empty
            StorageError: the database rejected the write
        """
        if not external_id or not str(external_id).strip():
            raise ValidationError("Product external id is required")
        if not title or not title.strip():
            raise ValidationError(f"Product {external_id} has an empty title")
        if not shop_id or not shop_id.strip():
            raise ValidationError(f"Product {external_id} has no owning shop")

        description_html = description_html or ""
        now = datetime.now(timezone.utc)

        try:
            async with self.session_factory() as session:
                async with session.begin():
                    shop_stmt = self._insert(session, Shop).values(
                        id=shop_id,
                        created_at=now,
                        last_activity_at=now,
                    )
                    shop_stmt = shop_stmt.on_conflict_do_update(
                        index_elements=["id"],
                        set_={"last_activity_at": now},
                    )
                    await session.execute(shop_stmt)

                    product_stmt = self._insert(session, Product).values(
                        external_id=external_id,
                        shop_id=shop_id,
                        title=title,
                        description_html=description_html,
                        created_at=now,
                        updated_at=now,
                    )
                    # shop_id stays out of the update set
                    product_stmt = product_stmt.on_conflict_do_update(
                        index_elements=["external_id"],
                        set_={
                            "title": title,
                            "description_html": description_html,
                            "updated_at": now,
                        },
                    )
                    await session.execute(product_stmt)

                    result = await session.execute(
                        select(Product)
                        .where(Product.external_id == external_id)
                        .execution_options(populate_existing=True)
                    )
                    product = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to upsert product {external_id} for {shop_id}: {str(e)}")
            raise StorageError(f"Failed to upsert product {external_id}: {str(e)}") from e

        if product.shop_id != shop_id:
            logger.warning(
                f"Product {external_id} belongs to {product.shop_id}; ignored reassignment to {shop_id}"
            )
        logger.debug(f"Upserted product {external_id} ({title})")
        return product

    async def get(self, external_id: str) -> Optional[Product]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Product).where(Product.external_id == external_id)
            )
            return result.scalar_one_or_none()

    async def get_shop(self, shop_id: str) -> Optional[Shop]:
        async with self.session_factory() as session:
            return await session.get(Shop, shop_id)

    async def list_for_shop(self, shop_id: str) -> List[Product]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(Product).where(Product.shop_id == shop_id).order_by(Product.id)
            )
            return list(result.scalars().all())

    async def count(self) -> int:
        async with self.session_factory() as session:
            result = await session.execute(select(func.count()).select_from(Product))
            return result.scalar_one()
