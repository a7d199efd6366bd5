# app/db/context.py

import logging
from typing import Iterator, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Connection

from app.db.engine import get_engine
from app.db.schema import products
from app.models.products import Product

logger = logging.getLogger(__name__)


def _row_to_product(row) -> Product:
    return Product(
        id=row["id"],
        name=row["name"],
        description=row["description"],
        quantity=row["quantity"],
    )


class ProductContext:
    """
    Reads and writes Product rows over a single connection.

    Every write commits before returning; nothing is held open across calls.
    """

    def __init__(self, conn: Connection):
        self.conn = conn

    def list_all(self) -> List[Product]:
        stmt = select(products).order_by(products.c.id)
        rows = self.conn.execute(stmt).mappings().all()
        self.conn.rollback()
        return [_row_to_product(row) for row in rows]

    def get_by_id(self, product_id: int) -> Optional[Product]:
        stmt = select(products).where(products.c.id == product_id)
        row = self.conn.execute(stmt).mappings().first()
        self.conn.rollback()

        if row is None:
            return None
        return _row_to_product(row)

    def insert(self, product: Product) -> Product:
        # The store assigns the id; whatever the client sent is dropped.
        stmt = products.insert().values(
            name=product.name,
            description=product.description,
            quantity=product.quantity,
        )
        result = self.conn.execute(stmt)
        self.conn.commit()

        new_id = result.inserted_primary_key[0]
        logger.debug("Inserted Product %s", new_id)
        return Product(
            id=new_id,
            name=product.name,
            description=product.description,
            quantity=product.quantity,
        )

    def update_by_id(self, product_id: int, product: Product) -> int:
        """
        Overwrite every field of the row with `product_id` in one statement.

        Returns the number of rows affected (0 or 1).
        """
        stmt = (
            update(products)
            .where(products.c.id == product_id)
            .values(
                id=product_id,
                name=product.name,
                description=product.description,
                quantity=product.quantity,
            )
        )
        result = self.conn.execute(stmt)
        self.conn.commit()

        logger.debug("Updated Product %s (rows=%s)", product_id, result.rowcount)
        return result.rowcount

    def delete_by_id(self, product_id: int) -> int:
        stmt = delete(products).where(products.c.id == product_id)
        result = self.conn.execute(stmt)
        self.conn.commit()

        logger.debug("Deleted Product %s (rows=%s)", product_id, result.rowcount)
        return result.rowcount


def get_product_context() -> Iterator[ProductContext]:
    """
    FastAPI dependency: one pooled connection per request, returned on exit.
    """
    engine = get_engine()

    with engine.connect() as conn:
        yield ProductContext(conn)
