"""SQLite schema for products, orders and order items."""

from __future__ import annotations

import sqlite3

SCHEMA = """
CREATE TABLE IF NOT EXISTS products (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    name    TEXT    NOT NULL UNIQUE COLLATE NOCASE,
    price   TEXT    NOT NULL,
    stock   INTEGER NOT NULL DEFAULT 0 CHECK (stock >= 0)
);

CREATE TABLE IF NOT EXISTS product_options (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    product_id  INTEGER NOT NULL REFERENCES products (id) ON DELETE CASCADE,
    title       TEXT    NOT NULL,
    "values"    TEXT    NOT NULL,
    UNIQUE (product_id, title)
);

CREATE TABLE IF NOT EXISTS orders (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL,
    status      TEXT    NOT NULL,
    total       TEXT    NOT NULL,
    ordered_at  TEXT    NOT NULL
);

CREATE INDEX IF NOT EXISTS ix_orders_user_status ON orders (user_id, status);

CREATE TABLE IF NOT EXISTS order_items (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    order_id    INTEGER NOT NULL REFERENCES orders (id),
    product_id  INTEGER NOT NULL,
    quantity    INTEGER NOT NULL CHECK (quantity > 0),
    price       TEXT    NOT NULL,
    options     TEXT
);

CREATE INDEX IF NOT EXISTS ix_order_items_order ON order_items (order_id);
"""


def initialize(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA)
