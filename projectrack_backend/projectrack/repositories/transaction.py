from contextlib import contextmanager

from .. import db


@contextmanager
def atomic():
    """
    Runs the block as one unit of work: commit on success, rollback on any exception.

    Repository writes only flush, so everything written inside the block
    becomes visible together or not at all.
    """
    try:
        yield db.session
        db.session.commit()
    except BaseException:
        db.session.rollback()
        raise
