"""JSON wire format for request patterns and recorded expectations."""

import json
from typing import Any

from proxyctl.errors import DecodeError
from proxyctl.models import (
    Delay,
    Expectation,
    NamedValues,
    RemainingTimes,
    RequestPattern,
    ResponseSpec,
)


def _as_int(value: Any, field_name: str, default: int = 0) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Invalid integer for '{field_name}': {value!r}") from exc


def _encode_named(values: NamedValues) -> list[dict[str, Any]]:
    return [{"name": name, "values": list(vals)} for name, vals in values]


def _decode_named(raw: Any, field_name: str) -> NamedValues:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise DecodeError(f"Expected a list for '{field_name}', got {type(raw).__name__}")
    decoded = []
    for item in raw:
        if not isinstance(item, dict) or "name" not in item:
            raise DecodeError(f"Malformed entry in '{field_name}': {item!r}")
        values = item.get("values") or []
        if not isinstance(values, list):
            raise DecodeError(f"Malformed values for '{item['name']}' in '{field_name}'")
        decoded.append((str(item["name"]), tuple(str(v) for v in values)))
    return tuple(decoded)


def request_to_dict(pattern: RequestPattern) -> dict[str, Any]:
    """Convert a pattern to its wire dict, omitting empty fields."""
    data: dict[str, Any] = {}
    if pattern.method:
        data["method"] = pattern.method
    if pattern.path:
        data["path"] = pattern.path
    if pattern.query_string:
        data["queryString"] = pattern.query_string
    if pattern.body:
        data["body"] = pattern.body
    if pattern.headers:
        data["headers"] = _encode_named(pattern.headers)
    if pattern.cookies:
        data["cookies"] = _encode_named(pattern.cookies)
    return data


def serialize_request(pattern: RequestPattern | None) -> str:
    """Serialize a pattern for a request body; ``None`` means match everything."""
    if pattern is None:
        return ""
    return json.dumps(request_to_dict(pattern))


def request_from_dict(data: Any) -> RequestPattern:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object for 'httpRequest', got {type(data).__name__}")
    return RequestPattern(
        method=str(data.get("method") or ""),
        path=str(data.get("path") or ""),
        query_string=str(data.get("queryString") or ""),
        body=str(data.get("body") or ""),
        headers=_decode_named(data.get("headers"), "headers"),
        cookies=_decode_named(data.get("cookies"), "cookies"),
    )


def deserialize_request(text: str) -> RequestPattern:
    """Parse a pattern from its JSON wire form."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid request pattern JSON: {exc}") from exc
    return request_from_dict(data)


def _response_from_dict(data: Any) -> ResponseSpec | None:
    if data is None:
        return None
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object for 'httpResponse', got {type(data).__name__}")
    delay = None
    raw_delay = data.get("delay")
    if isinstance(raw_delay, dict):
        delay = Delay(
            time_unit=str(raw_delay.get("timeUnit") or "MILLISECONDS"),
            value=_as_int(raw_delay.get("value"), "delay.value"),
        )
    return ResponseSpec(
        status_code=_as_int(data.get("statusCode"), "statusCode", default=200),
        body=str(data.get("body") or ""),
        headers=_decode_named(data.get("headers"), "headers"),
        cookies=_decode_named(data.get("cookies"), "cookies"),
        delay=delay,
    )


def _times_from_dict(data: Any) -> RemainingTimes | None:
    if not isinstance(data, dict):
        return None
    return RemainingTimes(
        remaining_times=_as_int(data.get("remainingTimes"), "remainingTimes"),
        unlimited=bool(data.get("unlimited", True)),
    )


def expectation_from_dict(data: Any) -> Expectation:
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an expectation object, got {type(data).__name__}")
    return Expectation(
        http_request=request_from_dict(data.get("httpRequest") or {}),
        http_response=_response_from_dict(data.get("httpResponse")),
        times=_times_from_dict(data.get("times")),
    )


def deserialize_expectations(content: bytes | str) -> list[Expectation] | None:
    """Decode a ``/retrieve`` body.

    An empty body decodes to an empty list. The JSON literal ``null`` decodes to
    None, meaning the proxy sent no parseable result rather than zero records.
    Anything that is not an array of objects raises :class:`DecodeError`.
    """
    if isinstance(content, bytes):
        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Response body is not valid UTF-8: {exc}") from exc
    else:
        text = content

    if not text.strip():
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Invalid expectations JSON: {exc}") from exc

    if data is None:
        return None
    if not isinstance(data, list):
        raise DecodeError(f"Expected a JSON array of expectations, got {type(data).__name__}")
    return [expectation_from_dict(item) for item in data]


def expectation_to_dict(expectation: Expectation) -> dict[str, Any]:
    """Convert an expectation back to its wire dict."""
    data: dict[str, Any] = {"httpRequest": request_to_dict(expectation.http_request)}
    response = expectation.http_response
    if response is not None:
        resp: dict[str, Any] = {"statusCode": response.status_code}
        if response.body:
            resp["body"] = response.body
        if response.headers:
            resp["headers"] = _encode_named(response.headers)
        if response.cookies:
            resp["cookies"] = _encode_named(response.cookies)
        if response.delay is not None:
            resp["delay"] = {"timeUnit": response.delay.time_unit, "value": response.delay.value}
        data["httpResponse"] = resp
    if expectation.times is not None:
        data["times"] = {
            "remainingTimes": expectation.times.remaining_times,
            "unlimited": expectation.times.unlimited,
        }
    return data
