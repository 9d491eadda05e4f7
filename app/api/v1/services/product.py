"""
Product catalog service layer.

Listing is ordered most-recently-updated first with the primary key as a
tie-breaker, so consecutive pages neither repeat nor skip rows.
"""

import logging
import uuid
from datetime import datetime
from typing import Union

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.api.v1.models.product import Product
from app.api.v1.schemas.product import ProductCreateRequest
from app.api.utils.exceptions import ProductAlreadyExistsException, ProductNotFoundException

logger = logging.getLogger(__name__)


def _as_uuid(product_id: Union[str, uuid.UUID]) -> uuid.UUID:
    if isinstance(product_id, uuid.UUID):
        return product_id
    try:
        return uuid.UUID(str(product_id))
    except ValueError:
        raise ProductNotFoundException(f"Product {product_id} not found")


class ProductService:
    """Service class for product catalog operations."""

    @staticmethod
    async def create_product(data: ProductCreateRequest, session: AsyncSession) -> Product:
        """
        Create a new product.

        Args:
            data (ProductCreateRequest): Validated product fields
            session (AsyncSession): Database session

        Returns:
            Product: Created product

        Raises:
            ProductAlreadyExistsException: If the SKU is already taken
        """
        statement = select(Product).where(Product.sku == data.sku)
        result = await session.execute(statement)
        if result.scalar_one_or_none():
            logger.warning(f"Product creation rejected, duplicate SKU: {data.sku}")
            raise ProductAlreadyExistsException(f"Product with SKU {data.sku} already exists")

        now = datetime.utcnow()
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            sku=data.sku,
            stock=data.stock,
            image_url=str(data.image_url) if data.image_url else None,
            category=data.category,
            is_active=data.is_active,
            created_at=now,
            updated_at=now,
            deleted=False,
        )

        try:
            session.add(product)
            await session.commit()
            await session.refresh(product)
        except IntegrityError:
            await session.rollback()
            logger.warning(f"Product creation raced on SKU: {data.sku}")
            raise ProductAlreadyExistsException(f"Product with SKU {data.sku} already exists")
        except Exception as e:
            await session.rollback()
            logger.error(f"Failed to create product: {str(e)}", exc_info=True)
            raise

        logger.info(f"Product created: {product.id} ({product.sku})")
        return product

    @staticmethod
    async def get_product(product_id: Union[str, uuid.UUID], session: AsyncSession) -> Product:
        """
        Get a product by ID, including soft-deleted products.

        Args:
            product_id (str | UUID): Product UUID
            session (AsyncSession): Database session

        Returns:
            Product: Product object

        Raises:
            ProductNotFoundException: If the product does not exist or the ID is malformed
        """
        product = await session.get(Product, _as_uuid(product_id))

        if not product:
            logger.warning(f"Product not found: {product_id}")
            raise ProductNotFoundException(f"Product {product_id} not found")

        logger.debug(f"Retrieved product {product_id}")
        return product

    @staticmethod
    async def list_products(
        limit: int,
        offset: int,
        session: AsyncSession,
    ) -> tuple[list[Product], int]:
        """
        Get one page of non-deleted products and the total count.

        Args:
            limit (int): Page size
            offset (int): Number of rows to skip
            session (AsyncSession): Database session

        Returns:
            tuple[list[Product], int]: (products on this page, total non-deleted products)
        """
        try:
            count_statement = (
                select(func.count())
                .select_from(Product)
                .where(Product.deleted == False)  # noqa: E712
            )
            total = (await session.execute(count_statement)).scalar_one()

            statement = (
                select(Product)
                .where(Product.deleted == False)  # noqa: E712
                .order_by(Product.updated_at.desc(), Product.id.desc())
                .offset(offset)
                .limit(limit)
            )
            result = await session.execute(statement)
            products = list(result.scalars().all())

            logger.debug(f"Retrieved {len(products)} of {total} products (offset {offset})")
            return products, total
        except Exception as e:
            logger.error(f"Failed to list products: {str(e)}", exc_info=True)
            raise

    @staticmethod
    async def delete_product(product_id: Union[str, uuid.UUID], session: AsyncSession) -> Product:
        """
        Soft-delete a product.

        Args:
            product_id (str | UUID): Product UUID
            session (AsyncSession): Database session

        Returns:
            Product: The product, now marked deleted

        Raises:
            ProductNotFoundException: If the product does not exist or is already deleted
        """
        product = await ProductService.get_product(product_id, session)

        if product.deleted:
            logger.warning(f"Product already deleted: {product_id}")
            raise ProductNotFoundException(f"Product {product_id} not found")

        try:
            product.deleted = True
            product.updated_at = datetime.utcnow()
            session.add(product)
            await session.commit()
            await session.refresh(product)
        except Exception as e:
            await session.rollback()
            logger.error(f"Failed to delete product: {str(e)}", exc_info=True)
            raise

        logger.info(f"Product deleted: {product_id}")
        return product
