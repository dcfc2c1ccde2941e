from typing import Iterable, Optional

from pydantic import HttpUrl, TypeAdapter, ValidationError

from app.shared.errors import BadRequest

_http_url = TypeAdapter(HttpUrl)


def is_url_valid(value: Optional[str]) -> bool:
    """
    Check whether a string is an absolute http(s) URL.

    Empty strings and None mean "no URL given" and are accepted.
    """
    if value is None or value == "":
        return True
    try:
        _http_url.validate_python(value)
    except ValidationError:
        return False
    return True


def ensure_url(value: Optional[str], field: str) -> None:
    if not is_url_valid(value):
        raise BadRequest(f"Invalid {field}: {value}")


def ensure_urls(values: Optional[Iterable[Optional[str]]], field: str) -> None:
    for value in values or []:
        ensure_url(value, field)
