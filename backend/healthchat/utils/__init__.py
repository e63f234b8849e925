from .time import utc_now, utc_iso
from .text import to_bool, squash_ws, shorten

__all__ = [
    "utc_now", "utc_iso",
    "to_bool", "squash_ws", "shorten",
]
