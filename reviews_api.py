#!/usr/bin/env python3
"""
Restaurant Reviews API - Flask REST service for users, restaurants and reviews.

Every route opens one SQLAlchemy session, calls a service and closes the
session again.  Domain errors raised by the validators and repositories are
translated into HTTP status codes here and nowhere else.
"""

import argparse
import logging
import os
import re
from typing import Dict, Optional

from flask import Flask, jsonify, request
from sqlalchemy import text

import database
from restaurant_reviews import setup_logging
from restaurant_reviews.config import load_config
from restaurant_reviews.errors import (
    ConfigError, EntityNotFound, FieldValidationError, ReferenceNotFound,
    UniquenessConflict,
)
from restaurant_reviews.repositories import (
    RestaurantRepository, ReviewRepository, UserRepository,
)
from restaurant_reviews.services import (
    RestaurantService, ReviewService, UserService,
)
from restaurant_reviews.validators import (
    RestaurantValidator, ReviewValidator, UserValidator,
)
from restaurant_reviews.validators.user_validator import PHONE_PATTERN

# Initialize logging early so database module logs are captured
log_level = os.getenv('REVIEWS_LOG_LEVEL', 'INFO')
setup_logging(log_level)
api_logger = logging.getLogger('restaurant_reviews.api')

_user_repository = UserRepository()
_restaurant_repository = RestaurantRepository()
_review_repository = ReviewRepository()

_user_service = UserService(_user_repository, UserValidator(_user_repository))
_restaurant_service = RestaurantService(
    _restaurant_repository, RestaurantValidator(_restaurant_repository))
_review_service = ReviewService(
    _review_repository, ReviewValidator(_review_repository, _user_repository))

UNEXPECTED_ERROR = 'An unexpected error occurred whilst processing the request'
_PHONE_RE = re.compile(PHONE_PATTERN)

app = Flask(__name__)


# ===========================================================================================
# Helpers
# ===========================================================================================

def _error(message: str, status: int, reasons: Optional[Dict[str, str]] = None):
    """Build a JSON error response with optional per-field reasons."""
    body = {'error': message}
    if reasons:
        body['reasons'] = reasons
    return jsonify(body), status


def _read_body() -> Optional[dict]:
    """Return the JSON request body, or None if it is missing or not an object."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _is_id(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _open_session():
    if database.SessionLocal is None:
        return None
    return database.SessionLocal()


def _list(service, label: str):
    db = _open_session()
    if db is None:
        return jsonify([]), 200
    try:
        entities = service.find_all(db)
        return jsonify([e.to_dict() for e in entities]), 200
    except Exception as e:
        api_logger.exception('findAll %s failed: %s', label, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()


def _get_by_id(service, label: str, entity_id: int):
    db = _open_session()
    if db is None:
        return _error('Database not available', 503)
    try:
        entity = service.find_by_id(db, entity_id)
        if entity is None:
            return _error(f'No {label} with the id {entity_id} was found!', 404)
        api_logger.info('findById %s: found %r', entity_id, entity)
        return jsonify(entity.to_dict()), 200
    except Exception as e:
        api_logger.exception('findById %s %s failed: %s', label, entity_id, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()


def _get_by_unique(service, value: str):
    db = _open_session()
    if db is None:
        return _error('Database not available', 503)
    try:
        entity = service.find_by_unique(db, value)
        return jsonify(entity.to_dict()), 200
    except EntityNotFound as e:
        return _error(e.message, 404)
    except Exception as e:
        api_logger.exception('findByUnique %s failed: %s', value, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()


def _create(service, model, label: str):
    """Deserialize the body into *model*, create it and answer 201."""
    data = _read_body()
    if data is None:
        return _error('Bad Request', 400)

    entity = model.from_dict(data)
    # Ids are generated by the database
    entity.id = None

    db = _open_session()
    if db is None:
        return _error('Database not available', 503)
    try:
        created = service.create(db, entity)
        body = created.to_dict()
    except FieldValidationError as e:
        return _error('Bad Request', 400, e.reasons)
    except UniquenessConflict as e:
        return _error(f'{label} supplied in request body conflicts with an existing {label}',
                      409, {e.field: e.message})
    except ReferenceNotFound as e:
        return _error('Bad Request', 400, {e.field: e.message})
    except Exception as e:
        api_logger.exception('create %s failed: %s', label, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()

    api_logger.info('create%s completed. %s = %s', label, label, body)
    return jsonify(body), 201


def _update(service, model, label: str, entity_id: int):
    """Replace the stored *model* with id *entity_id* by the request body."""
    data = _read_body()
    if data is None or not _is_id(data.get('id')):
        return _error(f'Invalid {label} supplied in request body', 400)
    if data['id'] != entity_id:
        # The client attempted to update the read-only id
        return _error(f'{label} details supplied in request body conflict with another {label}',
                      409, {'id': f'The {label} ID in the request body must match '
                                  f'that of the {label} being updated'})

    db = _open_session()
    if db is None:
        return _error('Database not available', 503)
    try:
        if service.find_by_id(db, entity_id) is None:
            return _error(f'No {label} with the id {entity_id} was found!', 404)
        updated = service.update(db, model.from_dict(data))
        body = updated.to_dict()
    except FieldValidationError as e:
        return _error('Bad Request', 400, e.reasons)
    except UniquenessConflict as e:
        return _error(f'{label} details supplied in request body conflict with another {label}',
                      409, {e.field: e.message})
    except Exception as e:
        api_logger.exception('update %s %s failed: %s', label, entity_id, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()

    api_logger.info('update%s completed. %s = %s', label, label, body)
    return jsonify(body), 200


def _delete(service, label: str, entity_id: int):
    db = _open_session()
    if db is None:
        return _error('Database not available', 503)
    try:
        entity = service.find_by_id(db, entity_id)
        if entity is None:
            return _error(f'No {label} with the id {entity_id} was found!', 404)
        service.delete(db, entity)
    except Exception as e:
        api_logger.exception('delete %s %s failed: %s', label, entity_id, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()

    api_logger.info('delete%s completed. id = %s', label, entity_id)
    return '', 204


# ===========================================================================================
# User Endpoints
# ===========================================================================================

@app.route('/users', methods=['GET'])
def retrieve_all_users():
    """Fetch all Users, ordered by name"""
    return _list(_user_service, 'User')


@app.route('/users/email/<email>', methods=['GET'])
def retrieve_user_by_email(email):
    """Fetch a User by email"""
    if '@' not in email:
        return _error(f'No User with the email {email} was found!', 404)
    return _get_by_unique(_user_service, email)


@app.route('/users/<int:user_id>', methods=['GET'])
def retrieve_user_by_id(user_id):
    """Fetch a User by id"""
    return _get_by_id(_user_service, 'User', user_id)


@app.route('/users', methods=['POST'])
def create_user():
    """Add a new User to the database"""
    return _create(_user_service, database.User, 'User')


@app.route('/users/<int:user_id>', methods=['PUT'])
def update_user(user_id):
    """Update a User in the database"""
    return _update(_user_service, database.User, 'User', user_id)


@app.route('/users/<int:user_id>', methods=['DELETE'])
def delete_user(user_id):
    """Delete a User, and their reviews, from the database"""
    return _delete(_user_service, 'User', user_id)


# ===========================================================================================
# Restaurant Endpoints
# ===========================================================================================

@app.route('/restaurants', methods=['GET'])
def retrieve_all_restaurants():
    """Fetch all Restaurants, ordered by name"""
    return _list(_restaurant_service, 'Restaurant')


@app.route('/restaurants/phoneNumber/<phone_number>', methods=['GET'])
def retrieve_restaurant_by_phone_number(phone_number):
    """Fetch a Restaurant by phone number"""
    if not _PHONE_RE.fullmatch(phone_number):
        return _error(f'No restaurant with the phone number {phone_number} was found!', 404)
    return _get_by_unique(_restaurant_service, phone_number)


@app.route('/restaurants/<int:restaurant_id>', methods=['GET'])
def retrieve_restaurant_by_id(restaurant_id):
    """Fetch a Restaurant by id"""
    return _get_by_id(_restaurant_service, 'Restaurant', restaurant_id)


@app.route('/restaurants', methods=['POST'])
def create_restaurant():
    """Add a new Restaurant to the database"""
    return _create(_restaurant_service, database.Restaurant, 'Restaurant')


@app.route('/restaurants/<int:restaurant_id>', methods=['PUT'])
def update_restaurant(restaurant_id):
    """Update a Restaurant in the database"""
    return _update(_restaurant_service, database.Restaurant, 'Restaurant', restaurant_id)


@app.route('/restaurants/<int:restaurant_id>', methods=['DELETE'])
def delete_restaurant(restaurant_id):
    """Delete a Restaurant from the database"""
    return _delete(_restaurant_service, 'Restaurant', restaurant_id)


# ===========================================================================================
# Review Endpoints (reviews are immutable once posted: no PUT or DELETE)
# ===========================================================================================

@app.route('/reviews', methods=['GET'])
def retrieve_all_reviews():
    """Fetch all Reviews, ordered by user id then restaurant id"""
    return _list(_review_service, 'Review')


@app.route('/reviews/<int:user_id>', methods=['GET'])
def retrieve_reviews_by_user_id(user_id):
    """Fetch the Reviews written by one User"""
    db = _open_session()
    if db is None:
        return _error('Database not available', 503)
    try:
        reviews = _review_service.find_by_user_id(db, user_id)
        if not reviews:
            return _error(f'No review with the user id {user_id} was found!', 404)
        api_logger.info('findByUserId %s: found %d reviews', user_id, len(reviews))
        return jsonify([r.to_dict() for r in reviews]), 200
    except Exception as e:
        api_logger.exception('findByUserId %s failed: %s', user_id, e)
        return _error(UNEXPECTED_ERROR, 500)
    finally:
        db.close()


@app.route('/reviews', methods=['POST'])
def create_review():
    """Add a new Review to the database"""
    return _create(_review_service, database.Review, 'Review')


# ===========================================================================================
# Status and Documentation
# ===========================================================================================

@app.route('/api/status')
def api_status():
    """Report whether the database answers."""
    db_ok = False
    db = _open_session()
    if db is not None:
        try:
            db.execute(text('SELECT 1'))
            db_ok = True
        except Exception as e:
            api_logger.warning('Database status check failed: %s', e)
        finally:
            db.close()
    return jsonify({'status': 'ok', 'database': db_ok}), 200


@app.route('/api/openapi.json')
def api_openapi_spec():
    """Serve the OpenAPI 3.0 specification as JSON."""
    try:
        from openapi_spec import build_spec
        server_url = request.url_root.rstrip('/')
        spec = build_spec(server_url=server_url)
        return jsonify(spec)
    except Exception as e:
        api_logger.error(f"Error building OpenAPI spec: {e}")
        return jsonify({'error': 'Could not generate spec'}), 500


@app.route('/api/docs')
def api_swagger_ui():
    """Serve an interactive Swagger UI for the REST API."""
    openapi_url = '/api/openapi.json'
    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Restaurant Reviews API Documentation</title>
  <link rel="stylesheet"
        href="https://unpkg.com/swagger-ui-dist@5/swagger-ui.css">
</head>
<body>
  <div id="swagger-ui"></div>
  <script src="https://unpkg.com/swagger-ui-dist@5/swagger-ui-bundle.js"></script>
  <script>
    SwaggerUIBundle({{
      url: "{openapi_url}",
      dom_id: "#swagger-ui",
      presets: [SwaggerUIBundle.presets.apis, SwaggerUIBundle.SwaggerUIStandalonePreset],
      layout: "BaseLayout",
      deepLinking: true,
    }});
  </script>
</body>
</html>"""
    return html, 200, {'Content-Type': 'text/html; charset=utf-8'}


@app.errorhandler(404)
def not_found(e):
    return _error('Not Found', 404)


@app.errorhandler(405)
def method_not_allowed(e):
    return _error('Method Not Allowed', 405)


def main():
    """Main entry point for the API server"""
    parser = argparse.ArgumentParser(description='Restaurant Reviews API')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--host', help='Interface to bind (overrides config)')
    parser.add_argument('--port', type=int, help='Port to listen on (overrides config)')
    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    logger = setup_logging(config['log_level'])
    try:
        os.makedirs('logs', exist_ok=True)
        fh = logging.FileHandler('logs/reviews_api.log')
        fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
        logger.addHandler(fh)
    except OSError:
        api_logger.warning('Could not create log file handler')

    if config['database_url'] != database.DATABASE_URL:
        database.configure(config['database_url'])
    if not database.init_db():
        api_logger.error('Database initialization failed; requests will return errors')

    host = args.host or config['host']
    port = args.port or config['port']
    api_logger.info('Restaurant Reviews API listening on http://%s:%s', host, port)
    app.run(host=host, port=port, debug=bool(config['debug']))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
