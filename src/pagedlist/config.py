"""Default configuration values for pagedlist."""

from __future__ import annotations

from typing import Final

# Items requested per page when neither the collection profile nor the
# settings file says otherwise.
DEFAULT_PAGE_SIZE: Final[int] = 20

# Quiet period applied to free-text search edits before a reset fetch is
# issued.  Discrete selections (dates, owner, status) bypass it.
SEARCH_DEBOUNCE_MS: Final[int] = 400

# Backend requests that have not answered within this many seconds surface as
# ``NetworkError``.
REQUEST_TIMEOUT_SEC: Final[float] = 10.0

# Rows (pure trigger) or pixels (Qt scroll area) from the end of the loaded
# list at which the end-of-list sentinel counts as visible.
SENTINEL_THRESHOLD_ROWS: Final[int] = 5
SENTINEL_THRESHOLD_PX: Final[int] = 48

SETTINGS_DIR_NAME: Final[str] = "pagedlist"
