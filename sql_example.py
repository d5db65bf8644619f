# Relational query demo: open a connection, read the product table row by row,
# read a single row, then insert a batch through one prepared statement.

import logging
import sys

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from config import Config

logger = logging.getLogger(__name__)

CREATE_PRODUCT_TABLE = text(
    'CREATE TABLE IF NOT EXISTS product ('
    'id INTEGER PRIMARY KEY AUTOINCREMENT, '
    'name VARCHAR(255) NOT NULL, '
    'price INTEGER NOT NULL)'
)
SELECT_PRODUCTS = text('SELECT id, name, price FROM product ORDER BY id')
SELECT_PRODUCT = text('SELECT id, name, price FROM product WHERE id = :id')
INSERT_PRODUCT = text('INSERT INTO product (name, price) VALUES (:name, :price)')

DEMO_PRODUCTS = [
    ('Light', 10),
    ('Mic', 30),
    ('Router', 90),
]


def connect(url=None):
    return create_engine(url or Config.DATABASE_URL)


def ensure_schema(conn):
    conn.execute(CREATE_PRODUCT_TABLE)


def fetch_products(conn):
    rows = []
    for row in conn.execute(SELECT_PRODUCTS):
        rows.append((row.id, row.name, row.price))
    return rows


def fetch_product(conn, product_id):
    row = conn.execute(SELECT_PRODUCT, {'id': product_id}).first()
    if row is None:
        raise LookupError(f'no product with id {product_id}')
    return (row.id, row.name, row.price)


def insert_products(conn, products):
    """Insert (name, price) pairs with a single executemany call."""
    params = [{'name': name, 'price': price} for name, price in products]
    if not params:
        return 0
    conn.execute(INSERT_PRODUCT, params)
    return len(params)


def run(url=None, out=print):
    engine = connect(url)
    try:
        with engine.begin() as conn:
            ensure_schema(conn)

            for product_id, name, price in fetch_products(conn):
                out(f"ID: {product_id}, Name: '{name}', Price: {price}")

            try:
                product_id, name, price = fetch_product(conn, 1)
                out(f"ID: {product_id}, Name: '{name}', Price: {price}")
            except LookupError as exc:
                out(str(exc))

            inserted = insert_products(conn, DEMO_PRODUCTS)
            out(f'Inserted {inserted} products')
            return inserted
    finally:
        engine.dispose()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=Config.LOG_LEVEL)
    url = argv[0] if argv else None
    try:
        run(url)
    except SQLAlchemyError as exc:
        logger.critical('SQL demo failed: %s', exc)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
