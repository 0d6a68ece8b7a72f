import math
import unicodedata


def round_half_up(x: float) -> int:
    """Rounds halves away from zero for positive numbers, unlike the builtin ``round``."""
    return int(math.floor(x + 0.5))


def clamp(x: float, low: float, high: float) -> float:
    return max(low, min(high, x))


def strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))
