"""Shared helpers for the CMS tools: parameter parsing and result envelopes."""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Optional, Tuple

from src.adapters.cms_client import CmsApiError


def failure(error: str, message: str, **extra: Any) -> Dict[str, Any]:
    """Build a failure envelope. Tools return it instead of raising."""
    return {"success": False, "error": error, "message": message, **extra}


def missing_params(params: Dict[str, Any], names: Iterable[str]) -> Optional[Dict[str, Any]]:
    """Return a failure envelope if any required parameter is missing or empty."""
    missing = [name for name in names if params.get(name) in (None, "")]
    if not missing:
        return None
    return failure(
        "Missing required parameters",
        f"Missing required parameter(s): {', '.join(missing)}",
    )


def optional_str(params: Dict[str, Any], name: str) -> Optional[str]:
    """Read an optional scalar parameter as a string (empty means absent)."""
    value = params.get(name)
    if value in (None, ""):
        return None
    return str(value)


def parse_json_param(
    params: Dict[str, Any],
    name: str,
    expected: Optional[type] = None,
    expected_label: str = "",
) -> Tuple[Any, Optional[Dict[str, Any]]]:
    """Parse a JSON-encoded string parameter.

    LLM 프레임워크가 복잡한 값을 JSON 문자열로 넘기기 때문에 파싱이 필요합니다.
    이미 파싱된 값(dict/list)이 들어오면 그대로 사용합니다.

    Returns:
        (parsed value, None) on success, (None, failure envelope) otherwise
    """
    raw = params.get(name)
    if isinstance(raw, str):
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            return None, failure(
                f"Invalid JSON format for {name}",
                f"Failed to parse {name} JSON. Please ensure it's valid JSON format.",
            )
    else:
        value = raw

    if expected is not None and not isinstance(value, expected):
        return None, failure(
            f"Invalid {name} format",
            f"{name} must be a JSON {expected_label or expected.__name__}",
        )
    return value, None


def cms_failure(action: str, exc: CmsApiError) -> Dict[str, Any]:
    """Convert a CMS client error into a failure envelope."""
    return failure(
        str(exc),
        f"Failed to {action}: {exc}",
        error_details=exc.details if exc.details is not None else str(exc),
        status_code=exc.status_code,
    )
