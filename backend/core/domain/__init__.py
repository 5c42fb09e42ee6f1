"""
core.domain - Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF ``EXCEPTION_HANDLER`` translating those exceptions.
notifications      Notification event building and after-commit dispatch.
transactions       ``transaction.atomic`` + ``select_for_update`` + version guards.

Usage from any app::

    from core.domain.exceptions import Forbidden, NotFound
    from core.domain.notifications import NotificationService
    from core.domain.transactions import guarded_update, retry_on_conflict
"""
