"""Translation of actions into outbound HTTP requests.

Pure functions: no I/O, no state. The placement rules:
    - GET/HEAD with fields: fields become the query string, no body
    - fields with a JSON content type: fields become a JSON body
    - fields otherwise: fields become a form-urlencoded body
    - no fields: no body, href unchanged
"""

import json
from typing import Any, Mapping
from urllib.parse import quote, urlencode

from siren_cache.entities import Action, OutboundRequest
from siren_cache.entities.entity import thaw

QUERY_METHODS = ("GET", "HEAD")

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_UNRESERVED = "!*'()"


def field_data(action: Action) -> dict[str, Any] | None:
    """Collect action fields into a name -> value mapping.

    Later fields overwrite earlier ones with the same name.

    Returns:
        The mapping, or None if the action has no fields
    """
    if not action.fields:
        return None
    return {f.name: thaw(f.value) for f in action.fields}


def urlencode_data(data: Mapping[str, Any]) -> str:
    """Percent-encode every key and value of `data` as `k=v&k=v`."""
    return urlencode(
        [(str(key), _stringify(value)) for key, value in data.items()],
        quote_via=quote,
        safe=_UNRESERVED,
    )


def build_request(action: Action, token: str | None = None) -> OutboundRequest:
    """Build the request for submitting `action`.

    Args:
        action: The action to submit
        token: Optional bearer credential

    Returns:
        OutboundRequest with method, url, headers and optional body
    """
    method = action.http_method
    headers: dict[str, str] = {}
    if token:
        headers["authorization"] = f"Bearer {token}"
    if action.type:
        headers["content-type"] = action.type

    url = action.href
    body: str | None = None
    data = field_data(action)
    if data:
        if method in QUERY_METHODS:
            separator = "&" if "?" in url else "?"
            url = f"{url}{separator}{urlencode_data(data)}"
        elif action.type and "json" in action.type.lower():
            body = json.dumps(data)
        else:
            body = urlencode_data(data)

    return OutboundRequest(method=method, url=url, headers=headers, body=body)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)
