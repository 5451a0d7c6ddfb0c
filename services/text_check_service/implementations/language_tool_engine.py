"""
Checking engine backed by a remote LanguageTool server.

The resolved check specification is forwarded to the server's v2 check
endpoint with the chosen language pinned, so the server does no language
resolution of its own.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import aiohttp
from textcheck_service_libs.error_handling import (
    CorrelationContext,
    raise_external_service_error,
    raise_service_unavailable,
    raise_timeout_error,
)
from textcheck_service_libs.logging_utils import create_service_logger

from services.text_check_service.api_models import CheckSpecification, RuleMatch
from services.text_check_service.config import Settings
from services.text_check_service.protocols import CheckEngineProtocol

logger = create_service_logger("text_check_service.implementations.language_tool_engine")


class LanguageToolHttpEngine(CheckEngineProtocol):
    """Forwards interpreted requests to a LanguageTool server over HTTP."""

    def __init__(self, settings: Settings, metrics: dict[str, Any] | None = None) -> None:
        self.settings = settings
        self.metrics = metrics
        self.semaphore = asyncio.Semaphore(settings.LANGUAGE_TOOL_MAX_CONCURRENT_REQUESTS)
        self.server_url = settings.LANGUAGE_TOOL_URL.rstrip("/")
        self.http_session: aiohttp.ClientSession | None = None

        logger.info(
            "LanguageToolHttpEngine initialized",
            server_url=self.server_url,
            max_concurrent=settings.LANGUAGE_TOOL_MAX_CONCURRENT_REQUESTS,
            timeout=settings.LANGUAGE_TOOL_REQUEST_TIMEOUT_SECONDS,
        )

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure HTTP session is initialized."""
        if not self.http_session:
            self.http_session = aiohttp.ClientSession()
        return self.http_session

    async def close(self) -> None:
        if self.http_session is not None:
            await self.http_session.close()
            self.http_session = None

    @staticmethod
    def build_form(spec: CheckSpecification) -> dict[str, str]:
        """Form fields for the LanguageTool v2 check endpoint."""
        form = {"text": spec.text, "language": spec.resolved.chosen.code}
        if spec.rule_filter.enabled:
            form["enabledRules"] = ",".join(spec.rule_filter.enabled)
        if spec.rule_filter.disabled:
            form["disabledRules"] = ",".join(spec.rule_filter.disabled)
        if spec.mother_tongue is not None:
            form["motherTongue"] = spec.mother_tongue.code
        return form

    async def check(
        self, spec: CheckSpecification, correlation_context: CorrelationContext
    ) -> list[RuleMatch]:
        timeout_seconds = self.settings.LANGUAGE_TOOL_REQUEST_TIMEOUT_SECONDS
        async with self.semaphore:
            start = time.perf_counter()
            try:
                async with asyncio.timeout(timeout_seconds):
                    raw_matches = await self._post_check(spec, correlation_context)
            except TimeoutError:
                logger.error(
                    "LanguageTool request timed out",
                    correlation_id=correlation_context.original,
                    timeout_seconds=timeout_seconds,
                )
                raise_timeout_error(
                    service="text-check-service",
                    operation="check_text",
                    timeout_seconds=timeout_seconds,
                    message="LanguageTool request timed out",
                    correlation_id=correlation_context.uuid,
                )
            except aiohttp.ClientConnectionError as e:
                logger.error(
                    f"LanguageTool server unreachable: {e}",
                    correlation_id=correlation_context.original,
                )
                raise_service_unavailable(
                    service="text-check-service",
                    operation="check_text",
                    unavailable_service="languagetool_server",
                    message=f"LanguageTool server unreachable: {e}",
                    correlation_id=correlation_context.uuid,
                )
            except aiohttp.ClientError as e:
                logger.error(
                    f"HTTP client error communicating with LanguageTool: {e}",
                    correlation_id=correlation_context.original,
                    exc_info=True,
                )
                raise_external_service_error(
                    service="text-check-service",
                    operation="check_text",
                    external_service="languagetool_server",
                    message=f"Failed to communicate with LanguageTool server: {e}",
                    correlation_id=correlation_context.uuid,
                )

            matches = [self._to_rule_match(raw) for raw in raw_matches]
            logger.info(
                "LanguageTool check completed",
                correlation_id=correlation_context.original,
                match_count=len(matches),
                duration_seconds=round(time.perf_counter() - start, 3),
            )
            return matches

    async def _post_check(
        self, spec: CheckSpecification, correlation_context: CorrelationContext
    ) -> list[dict[str, Any]]:
        session = await self._ensure_session()
        async with session.post(
            f"{self.server_url}/v2/check",
            data=self.build_form(spec),  # LanguageTool expects form data, not JSON
        ) as response:
            if response.status != 200:
                error_text = await response.text()
                logger.error(
                    f"LanguageTool returned error status: {response.status}",
                    correlation_id=correlation_context.original,
                    error=error_text[:500],
                )
                raise aiohttp.ClientResponseError(
                    request_info=response.request_info,
                    history=response.history,
                    status=response.status,
                    message=f"LanguageTool error: {error_text[:200]}",
                )
            result = await response.json()
            matches: list[dict[str, Any]] = result.get("matches", [])
            return matches

    @staticmethod
    def _to_rule_match(raw: dict[str, Any]) -> RuleMatch:
        rule = raw.get("rule", {})
        category = rule.get("category", {})
        replacements = tuple(
            r.get("value", "") for r in raw.get("replacements", []) if isinstance(r, dict)
        )
        return RuleMatch(
            rule_id=rule.get("id", "UNKNOWN_RULE"),
            message=raw.get("message", ""),
            short_message=raw.get("shortMessage", ""),
            offset=raw.get("offset", 0),
            length=raw.get("length", 0),
            replacements=replacements,
            category_id=category.get("id", "MISC"),
            category_name=category.get("name", "Miscellaneous"),
            rule_description=rule.get("description", ""),
            issue_type=rule.get("issueType", "uncategorized"),
            sentence=raw.get("sentence", ""),
        )

    async def get_health_status(self, correlation_context: CorrelationContext) -> dict[str, Any]:
        session = await self._ensure_session()
        start = time.perf_counter()
        try:
            async with session.get(
                f"{self.server_url}/v2/languages",
                timeout=aiohttp.ClientTimeout(total=5),
            ) as response:
                healthy = response.status == 200
        except aiohttp.ClientError as e:
            raise_service_unavailable(
                service="text-check-service",
                operation="health_check",
                unavailable_service="languagetool_server",
                message=f"LanguageTool server unreachable: {e}",
                correlation_id=correlation_context.uuid,
            )
        return {
            "implementation": "languagetool",
            "server_url": self.server_url,
            "status": "healthy" if healthy else "unhealthy",
            "response_time_ms": int((time.perf_counter() - start) * 1000),
        }
