from contextlib import contextmanager
from flask import current_app
from servible.extensions import db

@contextmanager
def transactional():
    """
    Commit the session when the block completes.

    Any exception rolls the session back and propagates unchanged, so
    domain errors raised inside the block still reach the error handlers.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.debug("Transaction rolled back", exc_info=True)
        raise
