"""Human-readable asset identifiers: ``{PREFIX}-{YEAR}-{8 digits}``."""
import random
import re
import time
from datetime import datetime, timezone

_PREFIX_RE = re.compile(r"[A-Za-z]{2,4}")


def normalize_prefix(prefix: str) -> str:
    """Upper-case a 2-4 letter prefix. Raises ValueError otherwise."""
    if not isinstance(prefix, str) or not _PREFIX_RE.fullmatch(prefix):
        raise ValueError(f"Identifier prefix must be 2-4 letters, got {prefix!r}")
    return prefix.upper()


def prefix_for_type_name(type_name: str, fallback: str) -> str:
    """First three letters of the asset type name, else `fallback`."""
    letters = "".join(ch for ch in type_name if ch.isascii() and ch.isalpha())[:3]
    if len(letters) >= 2:
        return letters.upper()
    return normalize_prefix(fallback)


def generate_asset_identifier(prefix: str, now: datetime | None = None) -> str:
    """
    Generate an identifier such as ``LAP-2024-73810042``.

    The digits are the last four of the millisecond clock followed by four
    random digits, so uniqueness is probabilistic only.
    """
    now = now or datetime.now(timezone.utc)
    millis = str(int(time.time() * 1000))[-4:]
    suffix = f"{random.randint(0, 9999):04d}"
    return f"{normalize_prefix(prefix)}-{now.year}-{millis}{suffix}"
