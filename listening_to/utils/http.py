"""Fetch-and-validate helper shared by every external lookup.

Given a URL and a shape descriptor (any type pydantic can build a
``TypeAdapter`` for: a model class, ``list[Model]``, ...), fetch JSON and
return the validated value.  Every failure mode the callers care about --
non-2xx status, transport error, undecodable body, schema mismatch -- is
folded into ``None`` and logged here, so providers only ever see
"value or nothing".
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from listening_to.utils.logging import get_logger

_T = TypeVar("_T")

_logger = get_logger(__name__)


@lru_cache(maxsize=64)
def _adapter(schema: Any) -> TypeAdapter[Any]:
    return TypeAdapter(schema)


async def fetch_validated(
    client: httpx.AsyncClient,
    url: str,
    schema: type[_T] | Any,
    params: Mapping[str, str] | None = None,
) -> _T | None:
    """GET *url* and validate the JSON body against *schema*.

    Parameters
    ----------
    client:
        Shared async HTTP client (timeouts and headers are configured there).
    url:
        Absolute endpoint URL.
    schema:
        Shape descriptor for the response body.
    params:
        Optional query-string parameters.

    Returns
    -------
    The validated value, or ``None`` on any HTTP, transport, decoding or
    validation failure.
    """
    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
        payload = response.json()
    except httpx.HTTPStatusError as exc:
        _logger.warning(
            "fetch_validated_http_error",
            url=url,
            status=exc.response.status_code,
        )
        return None
    except httpx.HTTPError as exc:
        _logger.warning("fetch_validated_request_failed", url=url, error=str(exc))
        return None
    except ValueError as exc:
        # json.JSONDecodeError is a ValueError subclass.
        _logger.warning("fetch_validated_invalid_json", url=url, error=str(exc))
        return None

    try:
        return _adapter(schema).validate_python(payload)
    except ValidationError as exc:
        _logger.warning(
            "fetch_validated_schema_mismatch",
            url=url,
            error_count=exc.error_count(),
            errors=exc.errors(include_url=False)[:3],
        )
        return None
