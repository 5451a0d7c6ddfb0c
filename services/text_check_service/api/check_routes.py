"""Check routes for Text Check Service."""

from __future__ import annotations

from typing import Any

from dishka import FromDishka
from quart import Blueprint, Response, jsonify, request
from quart_dishka import inject
from textcheck_service_libs.error_handling import CorrelationContext
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.implementations.request_interpreter import RequestInterpreter
from services.text_check_service.languages import SUPPORTED_LANGUAGES

logger = create_service_logger("text_check_service.api.check")
check_bp = Blueprint("check_routes", __name__)


async def _raw_parameters() -> dict[str, str]:
    """Merge query arguments and form fields; form fields win on conflicts."""
    raw: dict[str, str] = {key: value for key, value in request.args.items()}
    if request.method == "POST":
        form = await request.form
        raw.update({key: value for key, value in form.items()})
    return raw


@check_bp.route("/v2/check", methods=["GET", "POST"])
@inject
async def check_text(
    corr: FromDishka[CorrelationContext],
    interpreter: FromDishka[RequestInterpreter],
) -> tuple[dict[str, Any], int]:
    """
    Check text and return matches.

    Parameters arrive as query arguments or form fields (see CheckParameters
    for the recognized names). Rejected requests never reach the engine and
    are answered by the registered error handler.
    """
    raw = await _raw_parameters()
    logger.info(
        "Check request received",
        correlation_id=corr.original,
        parameters=sorted(key for key in raw if key not in ("text", "data")),
    )
    response = await interpreter.check(raw, corr)
    return response.to_json_dict(), 200


@check_bp.route("/v2/languages", methods=["GET"])
async def list_languages() -> tuple[Response, int]:
    """List the languages the checker supports."""
    return jsonify(
        [
            {"name": language.name, "code": language.short_code, "longCode": language.code}
            for language in SUPPORTED_LANGUAGES
        ]
    ), 200
