"""SQLite-backed implementation of OrderRepository.

Item options are stored as JSON text and deserialized on every read, so
callers never see the serialized form.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from decimal import Decimal

from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.order_repository import OrderFilters, OrderRepository

_SORT_COLUMNS = {
    "id": "id",
    "ordered_at": "ordered_at",
    "total": "CAST(total AS REAL)",
    "status": "status",
}


class SqliteOrderRepository(OrderRepository):

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._conn.execute(
            "SELECT id, user_id, status, ordered_at FROM orders WHERE id = ?",
            (order_id,),
        ).fetchone()
        if row is None:
            return None
        items = self._load_items([row["id"]])
        return self._to_domain(row, items.get(row["id"], []))

    def add(self, order: Order) -> None:
        cursor = self._conn.execute(
            "INSERT INTO orders (user_id, status, total, ordered_at) VALUES (?, ?, ?, ?)",
            (
                order.user_id,
                order.status.value,
                str(order.total.amount),
                order.ordered_at.isoformat(),
            ),
        )
        order.id = cursor.lastrowid
        for item in order.items:
            item_cursor = self._conn.execute(
                "INSERT INTO order_items (order_id, product_id, quantity, price, options) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    order.id,
                    item.product_id,
                    item.quantity.value,
                    str(item.unit_price.amount),
                    json.dumps(item.options) if item.options is not None else None,
                ),
            )
            item.id = item_cursor.lastrowid

    def update_status(self, order: Order) -> None:
        self._conn.execute(
            "UPDATE orders SET status = ? WHERE id = ?", (order.status.value, order.id)
        )

    def delete(self, order_id: int) -> None:
        self._conn.execute("DELETE FROM order_items WHERE order_id = ?", (order_id,))
        self._conn.execute("DELETE FROM orders WHERE id = ?", (order_id,))

    def list(self, filters: OrderFilters) -> tuple[list[Order], int]:
        clauses: list[str] = []
        params: list[object] = []
        if filters.status is not None:
            clauses.append("status = ?")
            params.append(filters.status.value)
        if filters.user_id is not None:
            clauses.append("user_id = ?")
            params.append(filters.user_id)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        total = self._conn.execute(
            f"SELECT COUNT(*) FROM orders{where}", params
        ).fetchone()[0]

        direction = "DESC" if filters.sort_order == "desc" else "ASC"
        sql = (
            f"SELECT id, user_id, status, ordered_at FROM orders{where} "
            f"ORDER BY {_SORT_COLUMNS[filters.sort_by]} {direction}, id {direction}"
        )
        if filters.paginated:
            sql += " LIMIT ? OFFSET ?"
            params = [*params, filters.limit, filters.offset]

        rows = self._conn.execute(sql, params).fetchall()
        items = self._load_items([row["id"] for row in rows])
        return [self._to_domain(row, items.get(row["id"], [])) for row in rows], total

    # --- Serialization --------------------------------------------------------

    def _load_items(self, order_ids: list[int]) -> dict[int, list[OrderItem]]:
        if not order_ids:
            return {}
        placeholders = ", ".join("?" for _ in order_ids)
        rows = self._conn.execute(
            "SELECT i.id, i.order_id, i.product_id, i.quantity, i.price, i.options, "
            "p.name AS product_name, p.price AS product_price, p.stock AS product_stock "
            "FROM order_items i LEFT JOIN products p ON p.id = i.product_id "
            f"WHERE i.order_id IN ({placeholders}) ORDER BY i.id",
            order_ids,
        ).fetchall()

        grouped: dict[int, list[OrderItem]] = {}
        for row in rows:
            grouped.setdefault(row["order_id"], []).append(
                OrderItem(
                    id=row["id"],
                    product_id=row["product_id"],
                    product_name=row["product_name"],
                    quantity=Quantity(row["quantity"]),
                    unit_price=Money(Decimal(row["price"])),
                    options=json.loads(row["options"]) if row["options"] is not None else None,
                    product=_current_product(row),
                )
            )
        return grouped

    @staticmethod
    def _to_domain(row: sqlite3.Row, items: list[OrderItem]) -> Order:
        return Order(
            id=row["id"],
            user_id=row["user_id"],
            items=items,
            status=OrderStatus(row["status"]),
            ordered_at=datetime.fromisoformat(row["ordered_at"]),
        )


def _current_product(row: sqlite3.Row) -> Product | None:
    """Catalog view of an item's product, without options; None if deleted."""
    if row["product_name"] is None:
        return None
    return Product(
        id=row["product_id"],
        name=row["product_name"],
        price=Money(Decimal(row["product_price"])),
        stock=row["product_stock"],
    )
