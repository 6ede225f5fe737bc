"""The boundary every inbound workflow runs behind.

`workflow` turns framework and storage failures into the marketplace error
taxonomy and logs the outcome. `run_atomically` processes one command inside
its unit of work while holding the row locks it needs, retrying a bounded
number of times when a concurrent writer wins.
"""

import os
import time
from functools import wraps

from protean.exceptions import ExpectedVersionError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from marketplace.errors import InvalidInput, MarketplaceError, NotFound, StorageConflict
from marketplace.utils.locks import row_locks
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


def conflict_attempts() -> int:
    return max(1, int(os.getenv("MARKETPLACE_CONFLICT_RETRIES", "3")))


def describe(exc, default):
    """Flatten a Protean error's message dict into one readable line."""
    messages = getattr(exc, "messages", None)
    if isinstance(messages, dict) and messages:
        parts = []
        for field, errors in messages.items():
            text = ", ".join(str(e) for e in errors) if isinstance(errors, list | tuple) else str(errors)
            parts.append(f"{field}: {text}")
        return "; ".join(parts)
    if isinstance(messages, str) and messages:
        return messages
    return default


def workflow(name):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            log = logger.bind(workflow=name)
            try:
                result = fn(*args, **kwargs)
            except MarketplaceError as exc:
                log.info("workflow_rejected", error=exc.code, reason=exc.message)
                raise
            except ObjectNotFoundError as exc:
                log.info("workflow_rejected", error=NotFound.code)
                raise NotFound(describe(exc, "Not found")) from exc
            except ValidationError as exc:
                log.info("workflow_rejected", error=InvalidInput.code)
                raise InvalidInput(describe(exc, "Invalid input")) from exc
            except ExpectedVersionError as exc:
                log.warning("workflow_conflict", error=StorageConflict.code)
                raise StorageConflict("Concurrent update, please retry") from exc

            log.debug("workflow_completed")
            return result

        return wrapper

    return decorator


def retry_on_conflict(max_attempts=None, backoff=0.05):
    """Re-run the wrapped call on StorageConflict. Only wrap idempotent units of work."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            attempts = max_attempts or conflict_attempts()
            attempt = 0
            while True:
                attempt += 1
                try:
                    return fn(*args, **kwargs)
                except StorageConflict as exc:
                    if attempt >= attempts:
                        raise
                    logger.warning("storage_conflict_retry", attempt=attempt, reason=exc.message)
                    time.sleep(backoff * attempt)

        return wrapper

    return decorator


@retry_on_conflict()
def run_atomically(command, *lock_keys):
    """Process `command` synchronously with `lock_keys` held until its unit of work commits."""
    with row_locks.hold(*lock_keys):
        try:
            return current_domain.process(command, asynchronous=False)
        except ExpectedVersionError as exc:
            raise StorageConflict("Concurrent update, please retry") from exc
