"""Plain text extraction from the ``text`` or ``data`` check parameter."""

from __future__ import annotations

import json
from typing import Any, NoReturn

from textcheck_service_libs.error_handling import CorrelationContext, raise_validation_error

from services.text_check_service.request_parameters import CheckParameters


def _invalid_data(message: str, correlation_context: CorrelationContext) -> NoReturn:
    raise_validation_error(
        service="text-check-service",
        operation="extract_text",
        field="data",
        message=message,
        correlation_id=correlation_context.uuid,
    )


def extract_text(params: CheckParameters, correlation_context: CorrelationContext) -> str:
    """
    Return the text to check.

    ``text`` wins when both are given. ``data`` is annotated JSON::

        {"annotation": [{"text": "A "}, {"markup": "<b>"}, {"text": "test"},
                        {"markup": "<br/>", "interpretAs": "\\n"}]}

    Text parts are checked as-is, markup parts contribute only their
    ``interpretAs`` value.
    """
    if params.text is not None:
        return params.text
    if params.data is None:
        return ""

    try:
        payload: Any = json.loads(params.data)
    except json.JSONDecodeError as e:
        _invalid_data(f"Could not parse JSON from 'data' parameter: {e}", correlation_context)
    annotation = payload.get("annotation") if isinstance(payload, dict) else None
    if not isinstance(annotation, list):
        _invalid_data("'data' needs an 'annotation' list", correlation_context)

    parts: list[str] = []
    for item in annotation:
        if not isinstance(item, dict):
            _invalid_data(f"Invalid annotation item: {item!r}", correlation_context)
        if "text" in item and "markup" in item:
            _invalid_data(
                f"Annotation item has both 'text' and 'markup': {item!r}", correlation_context
            )
        if "text" in item:
            parts.append(str(item["text"]))
        elif "markup" in item:
            parts.append(str(item.get("interpretAs", "")))
        else:
            _invalid_data(
                f"Annotation item needs 'text' or 'markup': {item!r}", correlation_context
            )
    return "".join(parts)
