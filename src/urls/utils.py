from string import ascii_lowercase, ascii_uppercase, digits
from secrets import choice
from urllib.parse import urlsplit

alphabet = ascii_lowercase + ascii_uppercase + digits


def generate_short_code(length: int = 6) -> str:
    return ''.join(choice(alphabet) for _ in range(length))


def is_absolute_url(url: str) -> bool:
    if not url or url != url.strip() or any(c.isspace() for c in url):
        return False
    try:
        parts = urlsplit(url)
        # accessing .port validates it
        parts.port
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.hostname)


def build_short_url(base_url: str, short_code: str) -> str:
    return f'{base_url.rstrip("/")}/{short_code}'
