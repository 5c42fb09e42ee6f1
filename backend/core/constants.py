"""
Core constants - **Single Source of Truth** for project-wide magic values.

Any business rule that references a fixed value should import it from
here instead of hardcoding.  This avoids drift between apps that use the
same value.
"""

# ── Complaint codes ─────────────────────────────────────────────────
# Public complaint reference: prefix + epoch milliseconds + random digits,
# e.g. ``URB1718000000000042``.
COMPLAINT_CODE_PREFIX: str = "URB"
COMPLAINT_CODE_RANDOM_DIGITS: int = 3

# ── Notification categories ─────────────────────────────────────────
NOTIFICATION_CATEGORY_COMPLAINT: str = "complaint"
NOTIFICATION_CATEGORY_ALERT: str = "alert"

# ── Pagination ──────────────────────────────────────────────────────
NOTIFICATIONS_DEFAULT_LIMIT: int = 50
NOTIFICATIONS_MAX_LIMIT: int = 100
