"""Selection of the API version rules configured for this service instance."""

from __future__ import annotations

from collections.abc import Callable
from uuid import uuid4

from textcheck_service_libs.error_handling import raise_configuration_error

from services.text_check_service.implementations.v2_api_rules import V2ApiRules
from services.text_check_service.protocols import ApiRulesProtocol, LanguageDetectorProtocol

API_RULES_BY_VERSION: dict[str, Callable[[LanguageDetectorProtocol], ApiRulesProtocol]] = {
    "v2": V2ApiRules,
}


def create_api_rules(api_version: str, detector: LanguageDetectorProtocol) -> ApiRulesProtocol:
    """
    Build the rules for ``api_version``.

    Raises:
        TextCheckServiceError: CONFIGURATION_ERROR for an unsupported version
    """
    factory = API_RULES_BY_VERSION.get(api_version)
    if factory is None:
        raise_configuration_error(
            service="text-check-service",
            operation="create_api_rules",
            config_key="API_VERSION",
            message=(
                f"Unsupported API version '{api_version}', "
                f"supported: {', '.join(sorted(API_RULES_BY_VERSION))}"
            ),
            correlation_id=uuid4(),
        )
    return factory(detector)
