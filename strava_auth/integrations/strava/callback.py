"""Parsing of the redirect Strava sends back after the consent screen."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl, urljoin, urlsplit

from pydantic import ValidationError

from strava_auth.integrations.strava.errors import MalformedCallbackError
from strava_auth.integrations.strava.schemas import CallbackParams

CALLBACK_PARAM_NAMES = ("state", "code", "scope")


def build_callback_params(params: CallbackParams | Mapping[str, Any]) -> CallbackParams:
    """Build CallbackParams from a mapping, failing fast on bad input.

    Args:
        params: Either ready CallbackParams or a mapping with state/code/scope keys

    Returns:
        Validated CallbackParams

    Raises:
        MalformedCallbackError: If code is missing/empty or scope is not a CSV of scope names
    """
    if isinstance(params, CallbackParams):
        return params
    if not isinstance(params, Mapping):
        raise MalformedCallbackError(f"Callback parameters must be a mapping, got {type(params).__name__}")
    try:
        return CallbackParams.model_validate(dict(params))
    except ValidationError as e:
        fields = ", ".join(sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}))
        raise MalformedCallbackError(f"Invalid callback parameters: {fields}") from e


def parse_callback_url(callback_url: str, base_url: str | None = None) -> CallbackParams:
    """Extract state/code/scope from a callback URL.

    Two modes:
    - absolute URL, or relative URL with no base: the query string is read as is
    - relative URL with base_url: resolved against base_url first

    Only the query string is used, so no host is ever invented for relative URLs.
    When a parameter repeats, the first occurrence wins.
    """
    url = urljoin(base_url, callback_url) if base_url else callback_url
    query = urlsplit(url).query

    values: dict[str, str] = {}
    for name, value in parse_qsl(query, keep_blank_values=True):
        if name in CALLBACK_PARAM_NAMES and name not in values:
            values[name] = value

    return build_callback_params(values)
