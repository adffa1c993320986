"""Turns a free-text case description into structured legal-matter metadata."""

import asyncio

from api.base_client import BaseAIClient
from matching.response_parser import extract_json_object
from models.case_analysis import CaseAnalysis
from models.errors import CompletionParseError
from utils.logger import get_logger

logger = get_logger(__name__)

ANALYSIS_MAX_TOKENS = 1024

CASE_ANALYSIS_PROMPT = """Analyze this legal case description and extract key information for finding expert witnesses. Return ONLY valid JSON with this structure:
{{
  "coreConflict": "brief description of the main legal issue",
  "expertiseNeeded": ["list of specific expertise areas needed"],
  "caseType": "type of case (e.g., medical malpractice, construction defect)",
  "jurisdiction": "location if mentioned",
  "keyIssues": ["list of specific technical or factual issues"],
  "suggestedSpecialties": ["expert witness specialties that would be relevant"]
}}

Case description:
{case_description}"""


class CaseAnalyzer:
    """
    Advisory case analysis backed by a language model.

    analyze() NEVER raises: missing credentials, provider errors, timeouts
    and unparseable completions all return None so the search can continue
    on explicit filters alone.
    """

    def __init__(self, client: BaseAIClient | None, timeout_s: float = 30.0):
        """
        Args:
            client: Language-model client, or None when no credentials are configured
            timeout_s: Upper bound for the whole analysis call
        """
        self.client = client
        self.timeout_s = timeout_s

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def build_prompt(self, case_description: str) -> str:
        return CASE_ANALYSIS_PROMPT.format(case_description=case_description)

    def analyze(self, case_description: str) -> CaseAnalysis | None:
        if self.client is None:
            logger.warning("Language model not configured, skipping case analysis")
            return None

        try:
            response = self.client.get_completion(
                self.build_prompt(case_description), max_tokens=ANALYSIS_MAX_TOKENS
            )
            if response.is_error:
                logger.error(
                    f"Case analysis failed: {response.error.message}",
                    extra={
                        "extra_fields": {
                            "provider": response.error.provider,
                            "code": response.error.code,
                        }
                    },
                )
                return None

            analysis = CaseAnalysis.from_payload(extract_json_object(response.text))

        except CompletionParseError as e:
            logger.warning(
                f"Case analysis response unusable: {e}",
                extra={"extra_fields": {"provider": self.client.provider}},
            )
            return None
        except Exception as e:
            logger.error(f"Case analysis failed: {e}", exc_info=True)
            return None

        logger.info(
            "Case analysis extracted",
            extra={
                "extra_fields": {
                    "case_type": analysis.case_type,
                    "suggested_specialties": analysis.suggested_specialties,
                    "jurisdiction": analysis.jurisdiction,
                    "provider": response.provider,
                    "model": response.model,
                    "latency_ms": response.latency_ms,
                    "total_tokens": response.token_usage.total_tokens,
                    "finish_reason": response.finish_reason,
                }
            },
        )
        return analysis

    async def analyze_async(self, case_description: str) -> CaseAnalysis | None:
        """Run analyze() off the event loop, bounded by timeout_s."""
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.analyze, case_description), timeout=self.timeout_s
            )
        except asyncio.TimeoutError:
            logger.error(f"Case analysis timed out after {self.timeout_s}s")
            return None
