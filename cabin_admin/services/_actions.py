"""
Shared wrapper turning action failures into ``ActionResult`` values.

Every write action follows the same contract: expected failures
(``CabinAdminError``) and database faults become a failed result with a
user-facing message. Nothing raised inside an action reaches the routes.
"""

from __future__ import annotations

import functools
import time
from typing import Any, Callable

import structlog
from sqlalchemy.exc import SQLAlchemyError

from cabin_admin.errors import BackendError, CabinAdminError
from cabin_admin.metrics import action_duration, action_outcomes
from cabin_admin.schemas.results import ActionResult

logger = structlog.get_logger(__name__)

ActionFunc = Callable[..., ActionResult]


def action(name: str, backend_message: str) -> Callable[[ActionFunc], ActionFunc]:
    """
    Decorate a write action.

    Args:
        name: Action name used in logs and metrics
        backend_message: Message returned when the database call fails

    Example:
        >>> @action("cancel_reservation", "Error al cancelar la reserva")
        ... def cancel_reservation(engine, session, reservation_id):
        ...     ...
    """

    def decorator(func: ActionFunc) -> ActionFunc:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ActionResult:
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except CabinAdminError as exc:
                logger.info("action_rejected", action=name, kind=exc.kind, error=exc.message)
                action_outcomes.labels(action=name, outcome=exc.kind).inc()
                return ActionResult.failure(exc)
            except SQLAlchemyError as exc:
                # No automatic retry: the staff member decides whether to resubmit
                logger.exception("action_backend_failed", action=name, error=str(exc))
                action_outcomes.labels(action=name, outcome=BackendError.kind).inc()
                return ActionResult.failure(BackendError(backend_message))
            finally:
                action_duration.labels(action=name).observe(time.time() - start_time)

            action_outcomes.labels(action=name, outcome="ok").inc()
            return result

        return wrapper

    return decorator
