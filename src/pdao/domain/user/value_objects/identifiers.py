"""Generated public identifiers.

Both identifiers follow ``<PREFIX>-<YYYYMMDD>-<5 uppercase alphanumerics>``.
"""

import secrets
import string
from datetime import date

from pdao.domain.shared.time import today_utc

_ALPHABET = string.ascii_uppercase + string.digits
_SUFFIX_LENGTH = 5

USER_ID_PREFIX = "PDAO"
FORM_ID_PREFIX = "FORM"


def _generate(prefix: str, today: date | None) -> str:
    day = today or today_utc()
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_SUFFIX_LENGTH))
    return f"{prefix}-{day:%Y%m%d}-{suffix}"


def generate_user_id(today: date | None = None) -> str:
    """Return a fresh ``PDAO-YYYYMMDD-XXXXX`` user identifier."""
    return _generate(USER_ID_PREFIX, today)


def generate_form_id(today: date | None = None) -> str:
    """Return a fresh ``FORM-YYYYMMDD-XXXXX`` verification-form identifier."""
    return _generate(FORM_ID_PREFIX, today)
