"""
core.domain.transactions - Helpers for safe read-modify-write sequences.

Provides utilities that wrap ``transaction.atomic``, ``select_for_update``
and version-guarded writes into reusable patterns so that every app's
service layer follows the same concurrency-safe approach.

Concurrency model
-----------------
* Reads that precede a mutation lock the row first
  (``select_for_update``) inside ``transaction.atomic()``.
* Writes to contended fields go through ``guarded_update``: a single
  conditional ``UPDATE ... WHERE pk = %s AND version = %s``.  Zero rows
  updated means somebody else won the race; ``Conflict`` is raised and
  the surrounding atomic block rolls back every write made so far.
* ``retry_on_conflict`` runs a whole read-then-act sequence again,
  exactly once, when the first attempt lost such a race.

Usage::

    from core.domain.transactions import guarded_update, retry_on_conflict

    def _claim(code, admin):
        complaint = lock_for_update(Complaint, code=code)
        guarded_update(complaint, assigned_admin=admin)
        return complaint

    complaint = retry_on_conflict(_claim, code, admin)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from core.domain.exceptions import Conflict, InvalidTransition, NotFound

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=models.Model)


def run_in_atomic(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Execute ``fn(*args, **kwargs)`` inside ``transaction.atomic()``.

    Raises:
        Any exception raised by ``fn`` - the transaction is rolled back.
    """
    with transaction.atomic():
        return fn(*args, **kwargs)


def lock_for_update(model_class: type[M], **lookup: Any) -> M:
    """
    Acquire a row-level lock on the model instance matching ``lookup``.

    Convenience wrapper around ``select_for_update().get(**lookup)``
    that must be called inside an ``atomic()`` block.

    Raises:
        NotFound: If no row matches.
    """
    try:
        return model_class.objects.select_for_update().get(**lookup)
    except model_class.DoesNotExist:
        described = ", ".join(f"{k}={v}" for k, v in lookup.items())
        raise NotFound(f"{model_class.__name__} with {described} does not exist.")


def guarded_update(instance: M, **changes: Any) -> M:
    """
    Persist ``changes`` only if ``instance.version`` is still current.

    The model must carry an integer ``version`` field.  On success the
    in-memory instance reflects the new values and the bumped version.

    Raises:
        Conflict: The row was modified (or deleted) since ``instance``
                  was read.
    """
    model_class = type(instance)
    values = dict(changes)
    if any(f.name == "updated_at" for f in model_class._meta.get_fields()):
        values.setdefault("updated_at", timezone.now())

    rows = (
        model_class.objects
        .filter(pk=instance.pk, version=instance.version)
        .update(version=F("version") + 1, **values)
    )
    if rows == 0:
        logger.info(
            "Stale write rejected for %s pk=%s at version %s",
            model_class.__name__,
            instance.pk,
            instance.version,
        )
        raise Conflict(
            f"{model_class.__name__} {instance.pk} was modified concurrently."
        )

    for field, value in values.items():
        setattr(instance, field, value)
    instance.version += 1
    return instance


def retry_on_conflict(fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    """
    Run ``fn`` atomically; if it loses an optimistic-lock race, run it
    once more from scratch.

    ``InvalidTransition`` is a ``Conflict`` about business state, not a
    race, and is never retried.  A second ``Conflict`` propagates.
    """
    try:
        return run_in_atomic(fn, *args, **kwargs)
    except InvalidTransition:
        raise
    except Conflict as exc:
        logger.info("Retrying %s after conflict: %s", fn.__name__, exc)
    return run_in_atomic(fn, *args, **kwargs)
