"""Input validation helpers."""
from pydantic import HttpUrl, TypeAdapter, ValidationError

_http_url = TypeAdapter(HttpUrl)


def is_valid_url(raw: str) -> bool:
    """Check that ``raw`` is an absolute http(s) URL with a host."""
    try:
        _http_url.validate_python(raw)
    except ValidationError:
        return False
    return True
