import logging
import re
import sys

import click
from flask import Flask, Response, request
from flask_cors import CORS
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import BadRequest, HTTPException, MethodNotAllowed, NotFound, UnsupportedMediaType

import sql_example
from auth import auth_bp
from config import Config
from product_model import InvalidProduct, Product, ProductNotFound, ProductStore

app = Flask(__name__)
app.config.from_object(Config)
CORS(app)
app.register_blueprint(auth_bp)

logging.basicConfig(
    level=app.config['LOG_LEVEL'],
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

# Created once per process, lost on exit.
product_store = ProductStore.seeded()

PRODUCT_ID_PATTERN = re.compile(r'[+-]?[0-9]+')
PRODUCT_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE']


def respond_with_json(code, data):
    try:
        body = app.json.dumps(data)
    except (TypeError, ValueError):
        app.logger.exception('could not serialize response for %s %s', request.method, request.path)
        return Response(status=500)
    return Response(body, status=code, mimetype='application/json')


def respond_with_error(code, msg):
    return respond_with_json(code, {'error': msg})


def parse_product_id(raw):
    # ids are plain indexes into the product list
    if raw is None or not PRODUCT_ID_PATTERN.fullmatch(raw):
        raise NotFound('not found')
    return int(raw)


def product_from_request():
    if not request.is_json:
        raise UnsupportedMediaType("content type 'application/json' required")
    payload = request.get_json()
    try:
        return Product.from_dict(payload)
    except InvalidProduct as exc:
        raise BadRequest(str(exc))


@app.errorhandler(HTTPException)
def handle_http_error(e):
    if isinstance(e, MethodNotAllowed):
        response = respond_with_error(e.code, 'invalid method')
        if e.valid_methods:
            response.headers['Allow'] = ', '.join(e.valid_methods)
        return response
    return respond_with_error(e.code, e.description)


@app.errorhandler(ProductNotFound)
def handle_product_not_found(e):
    return respond_with_error(404, 'not found')


@app.route('/')
def home():
    return 'Hello World', 200, {'Content-Type': 'text/plain; charset=utf-8'}


@app.route('/products', methods=PRODUCT_METHODS, strict_slashes=False)
@app.route('/products/<product_id>', methods=PRODUCT_METHODS)
def products(product_id=None):
    if request.method == 'GET':
        return get_products(product_id)
    if request.method == 'POST':
        # the id is ignored, a POST always appends
        return create_product()
    if request.method in ('PUT', 'PATCH'):
        return update_product(product_id)
    if request.method == 'DELETE':
        return delete_product(product_id)
    raise MethodNotAllowed()


def get_products(product_id):
    if product_id is None:
        return respond_with_json(200, [p.to_dict() for p in product_store.list_products()])
    product = product_store.get_product(parse_product_id(product_id))
    return respond_with_json(200, product.to_dict())


def create_product():
    product = product_store.add_product(product_from_request())
    return respond_with_json(201, product.to_dict())


def update_product(product_id):
    product_id = parse_product_id(product_id)
    patch = product_from_request()
    # range check happens under the store lock, the list may have shrunk meanwhile
    product = product_store.update_product(product_id, patch)
    return respond_with_json(201, product.to_dict())


def delete_product(product_id):
    product_store.delete_product(parse_product_id(product_id))
    return Response(status=204, mimetype='application/json')


@app.cli.command('sql-demo')
@click.option('--url', default=None, help='Database URL, defaults to DATABASE_URL.')
def sql_demo(url):
    """Run the relational query demo against the product table."""
    try:
        sql_example.run(url or app.config['DATABASE_URL'], out=click.echo)
    except SQLAlchemyError as exc:
        app.logger.critical('SQL demo failed: %s', exc)
        sys.exit(1)


def main():
    try:
        app.run(
            host=app.config['HOST'],
            port=app.config['PORT'],
            debug=app.config['DEBUG'],
            threaded=app.config['THREADED'],
        )
    except OSError as exc:
        app.logger.critical('could not start server: %s', exc)
        sys.exit(1)


if __name__ == '__main__':
    main()
