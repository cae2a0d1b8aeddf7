"""SQLite-backed implementation of ProductRepository."""

from __future__ import annotations

import json
import sqlite3
from decimal import Decimal

from storefront.domain.model.product import Product, ProductOption
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository


class SqliteProductRepository(ProductRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._conn.execute(
            "SELECT id, name, price, stock FROM products WHERE id = ?", (product_id,)
        ).fetchone()
        return self._to_domain(row) if row is not None else None

    def get_by_name(self, name: str) -> Product | None:
        row = self._conn.execute(
            "SELECT id, name, price, stock FROM products WHERE name = ? COLLATE NOCASE",
            (name.strip(),),
        ).fetchone()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = self._conn.execute(
            "SELECT id, name, price, stock FROM products ORDER BY id"
        ).fetchall()
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> None:
        cursor = self._conn.execute(
            "INSERT INTO products (name, price, stock) VALUES (?, ?, ?)",
            (product.name, str(product.price.amount), product.stock),
        )
        product.id = cursor.lastrowid
        self._conn.executemany(
            'INSERT INTO product_options (product_id, title, "values") VALUES (?, ?, ?)',
            [
                (product.id, opt.title, json.dumps(list(opt.values)))
                for opt in product.options
            ],
        )

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        cursor = self._conn.execute(
            "UPDATE products SET stock = stock - ? WHERE id = ? AND stock >= ?",
            (quantity, product_id, quantity),
        )
        return cursor.rowcount == 1

    def increment_stock(self, product_id: int, quantity: int) -> bool:
        cursor = self._conn.execute(
            "UPDATE products SET stock = stock + ? WHERE id = ?",
            (quantity, product_id),
        )
        return cursor.rowcount == 1

    # --- Serialization --------------------------------------------------------

    def _to_domain(self, row: sqlite3.Row) -> Product:
        option_rows = self._conn.execute(
            'SELECT title, "values" FROM product_options WHERE product_id = ? ORDER BY id',
            (row["id"],),
        ).fetchall()
        return Product(
            id=row["id"],
            name=row["name"],
            price=Money(Decimal(row["price"])),
            stock=row["stock"],
            options=[
                ProductOption(title=o["title"], values=tuple(json.loads(o["values"])))
                for o in option_rows
            ],
        )
