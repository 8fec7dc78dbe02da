import logging
import os
import time
import uuid
from contextlib import contextmanager

from werkzeug.utils import secure_filename


logger = logging.getLogger(__name__)


def too_large_message(limit):
    if limit >= 1024 * 1024:
        return f"File too large. Maximum size is {limit // (1024 * 1024)} MB."
    return f"File too large. Maximum size is {limit} bytes."


def unique_filename(original_name):
    """timestamp-random-name, with the client's name sanitized."""
    safe_name = secure_filename(original_name or '') or 'document.pdf'
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:12]}-{safe_name}"


def upload_path(file, folder):
    os.makedirs(folder, exist_ok=True)
    return os.path.join(folder, unique_filename(file.filename))


def discard(path):
    try:
        os.remove(path)
        logger.info("Removed orphaned upload %s", path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Error deleting orphaned upload %s: %s", path, e)


@contextmanager
def stored_upload(file, folder):
    """
    Writes the upload to disk and yields its path.

    The file is deleted again if the block exits with any exception, so a
    rejected request never leaves a file behind.
    """
    path = upload_path(file, folder)
    try:
        # a write that fails partway still leaves a file to remove
        file.save(path)
        logger.debug("Stored upload %s at %s", file.filename, path)
        yield path
    except BaseException:
        discard(path)
        raise
