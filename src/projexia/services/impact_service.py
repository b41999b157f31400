"""Impact service - socio-economic impact indicators from a project description."""

from __future__ import annotations

import httpx

from projexia.api.llm_client import LLMClient
from projexia.exceptions import ImpactGenerationError
from projexia.models import ImpactIndicators, ImpactRequest
from projexia.utils.logger import get_logger

PROMPT_TEMPLATE = """You are an expert in socio-economic impact assessment.

Based on the following project description, identify key socio-economic impact indicators that can be used to measure and track the project's success.

Project Description: {project_description}

List the indicators in a clear, concise, and measurable format.
Consider both quantitative and qualitative indicators.
Also consider both leading and lagging indicators.
"""


def build_prompt(request: ImpactRequest) -> str:
    return PROMPT_TEMPLATE.format(project_description=request.project_description)


class ImpactService:
    """Generates impact indicators through the language model client."""

    def __init__(self, client: LLMClient):
        self.client = client
        self.logger = get_logger()

    async def generate(self, project_description: str) -> ImpactIndicators:
        """Generate indicators for a project description.

        Args:
            project_description: At least 50 characters after stripping

        Returns:
            ImpactIndicators with the model's answer

        Raises:
            ValidationError: If the description is too short
            ImpactGenerationError: If the model cannot be reached or answers badly
        """
        request = ImpactRequest(project_description=project_description)
        try:
            text = await self.client.generate_text(build_prompt(request))
        except httpx.HTTPStatusError as e:
            self.logger.error("impact generation failed: HTTP %s", e.response.status_code)
            raise ImpactGenerationError(
                f"The language model rejected the request (HTTP {e.response.status_code})"
            ) from e
        except httpx.HTTPError as e:
            self.logger.error("impact generation failed: %s", e)
            raise ImpactGenerationError(f"Could not reach the language model: {e}") from e
        finally:
            await self.client.close()

        return ImpactIndicators(indicators=text)


def get_impact_service() -> ImpactService:
    """Factory function to get an ImpactService instance."""
    from projexia.services.config_service import get_config_service

    return ImpactService(LLMClient(get_config_service().config.ai))
