import re
import unicodedata

from src.config.settings import settings

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NON_ALNUM_OR_SPACE = re.compile(r"[^a-z0-9\s]")


def normalize_username(username: str | None) -> str:
    return (username or "").strip().lower()


def fallback_email(username: str) -> str:
    """Placeholder email for participants created without one."""
    safe_username = _NON_ALNUM.sub("", normalize_username(username)) or "guest"
    return f"{safe_username}@{settings.guest_email_domain}"


def strip_diacritics(value: str) -> str:
    # "đ" has no combining form
    decomposed = unicodedata.normalize("NFD", value.replace("đ", "d").replace("Đ", "D"))
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def generate_username_from_name(name: str) -> str:
    """
    Suggest a username from a full name: last word followed by the initials of
    the preceding words, e.g. "Nguyễn Văn An" -> "annv".
    """
    normalized = _NON_ALNUM_OR_SPACE.sub(" ", strip_diacritics(name).lower()).strip()
    if not normalized:
        return ""

    parts = normalized.split()
    last = parts.pop()
    initials = "".join(part[0] for part in parts)
    candidate = _NON_ALNUM.sub("", last + initials)
    return candidate or normalized.replace(" ", "")
