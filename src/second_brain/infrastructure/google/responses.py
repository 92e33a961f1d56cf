"""Decoding of Google API response bodies."""

from typing import Any

import httpx

from second_brain.core.exceptions import RemoteCallFailedError


def json_object(response: httpx.Response, service: str, operation: str) -> dict[str, Any]:
    """
    Decode a successful response body as a JSON object.

    Proxies and captive portals answer 200 with HTML, so a body that is
    not a JSON object counts as a failed call.

    Raises:
        RemoteCallFailedError: If the body is not valid JSON or not an object
    """
    try:
        data = response.json()
    except ValueError as e:
        raise RemoteCallFailedError(service, operation, "invalid JSON response") from e
    if not isinstance(data, dict):
        raise RemoteCallFailedError(
            service, operation, f"expected a JSON object, got {type(data).__name__}"
        )
    return data
