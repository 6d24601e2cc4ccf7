import logging
from contextlib import contextmanager

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy.exc import DataError, IntegrityError, InterfaceError, OperationalError

from catalog_api.errors import DuplicateKey, PersistenceUnavailable, ValidationError

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()


def _duplicate_message(exc):
    text = str(getattr(exc, "orig", exc)).lower()
    if "email" in text:
        return "Email already exists"
    if "sku" in text:
        return "SKU already exists"
    if "name" in text:
        return "Name already exists"
    return "Duplicate key"


@contextmanager
def persistence_errors():
    """Translate driver errors raised inside the block into service errors.

    Usable as ``with persistence_errors():`` or as a decorator. The session
    is rolled back before the translated error propagates.
    """
    try:
        yield
    except IntegrityError as e:
        db.session.rollback()
        logger.warning("Uniqueness violation: %s", e.orig)
        raise DuplicateKey(_duplicate_message(e)) from e
    except DataError as e:
        db.session.rollback()
        logger.warning("Rejected value: %s", e.orig)
        raise ValidationError("Value out of range for stored field") from e
    except (OperationalError, InterfaceError) as e:
        db.session.rollback()
        logger.error("Database unavailable: %s", e.orig)
        raise PersistenceUnavailable() from e
