# Positionally indexed product store for the CRUD routes.
# Products live in an in-memory list guarded by one lock. A product's id is its index in the list.

import logging
import math
import threading

logger = logging.getLogger(__name__)


class ProductNotFound(Exception):
    def __init__(self, product_id):
        super().__init__('not found')
        self.product_id = product_id


class InvalidProduct(ValueError):
    pass


class Product:
    def __init__(self, name='', price=0.0):
        self.name = name
        self.price = price

    @classmethod
    def from_dict(cls, payload):
        """Build a product from decoded JSON. Missing or null fields fall back to '' and 0.0."""
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise InvalidProduct(f'cannot decode {type(payload).__name__} into a product')

        name = payload.get('name')
        if name is None:
            name = ''
        elif not isinstance(name, str):
            raise InvalidProduct(f'field "name" must be a string, got {type(name).__name__}')

        price = payload.get('price')
        if price is None:
            price = 0.0
        elif isinstance(price, bool) or not isinstance(price, (int, float)):
            raise InvalidProduct(f'field "price" must be a number, got {type(price).__name__}')

        try:
            price = float(price)
        except OverflowError:
            raise InvalidProduct('field "price" out of range')
        if not math.isfinite(price):
            raise InvalidProduct('field "price" must be a finite number')

        return cls(name, price)

    def to_dict(self):
        return {'name': self.name, 'price': self.price}

    def copy(self):
        return Product(self.name, self.price)

    def __eq__(self, other):
        if not isinstance(other, Product):
            return NotImplemented
        return (self.name, self.price) == (other.name, other.price)

    def __hash__(self):
        return hash((self.name, self.price))

    def __repr__(self):
        return f'Product(name={self.name!r}, price={self.price!r})'


SEED_PRODUCTS = [
    ('Shoes', 25.00),
    ('Webcam', 50.00),
    ('Mic', 20.00),
]


class ProductStore:
    # Every method holds the lock for its whole body, reads included.

    def __init__(self, products=None):
        self._lock = threading.Lock()
        self._products = list(products or [])

    @classmethod
    def seeded(cls):
        return cls([Product(name, price) for name, price in SEED_PRODUCTS])

    def _check_id(self, product_id):
        # caller must hold the lock
        if product_id < 0 or product_id >= len(self._products):
            logger.info('product %s not found (%d products)', product_id, len(self._products))
            raise ProductNotFound(product_id)

    def __len__(self):
        with self._lock:
            return len(self._products)

    def list_products(self):
        with self._lock:
            return [p.copy() for p in self._products]

    def get_product(self, product_id):
        with self._lock:
            self._check_id(product_id)
            return self._products[product_id].copy()

    def add_product(self, product):
        with self._lock:
            self._products.append(product.copy())
            logger.debug('added %r at %d', product, len(self._products) - 1)
            return product.copy()

    def update_product(self, product_id, patch):
        # Sparse patch: an empty name or a zero price leaves the field as it is,
        # so neither value can be set through an update.
        with self._lock:
            self._check_id(product_id)
            product = self._products[product_id]
            if patch.name != '':
                product.name = patch.name
            if patch.price != 0.0:
                product.price = patch.price
            logger.debug('updated product %d to %r', product_id, product)
            return product.copy()

    def delete_product(self, product_id):
        with self._lock:
            self._check_id(product_id)
            last = len(self._products) - 1
            if product_id < last:
                self._products[product_id], self._products[last] = self._products[last], self._products[product_id]
            removed = self._products.pop()
            logger.debug('deleted %r from %d', removed, product_id)
            return removed
