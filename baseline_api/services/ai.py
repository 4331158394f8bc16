"""AI service: Together.ai fix suggestions for detected web features."""

import logging
from typing import List, Optional

from openai import OpenAI, OpenAIError

from baseline_checker import AnalysisResult, FeatureUsage

from ..config import get_together_api_key, get_together_model

logger = logging.getLogger(__name__)


def _client() -> Optional[OpenAI]:
    """Return OpenAI-compatible client for Together.ai, or None without an API key."""
    key = get_together_api_key()
    if not key:
        return None
    return OpenAI(api_key=key, base_url="https://api.together.xyz/v1")


def _usages_summary(usages: List[FeatureUsage]) -> str:
    if not usages:
        return "No failing web features found."
    parts = []
    for u in usages:
        tier = u.baseline.value if u.baseline else "unknown"
        parts.append(
            f"- {u.file}:{u.line} [{u.severity.value}] {u.token} ({u.feature_id}, {tier})\n"
            f"  Code: {u.context}"
        )
        if u.alternative:
            parts.append(f"  Known alternative: {u.alternative}")
    return "\n".join(parts)


class AIService:
    """Together.ai-backed fix suggestions."""

    def suggest_fixes(
        self,
        result: AnalysisResult,
        target: str,
        code: Optional[str] = None,
    ) -> Optional[str]:
        """Return AI-generated fallback suggestions for failing usages. None if AI unavailable."""
        failing = result.violations + result.warnings
        if not failing:
            return None
        client = _client()
        if not client:
            return None
        prompt = (
            "You are a web platform compatibility expert. A static checker compared the "
            f"features below against the Baseline target '{target}' and found they fall short.\n\n"
            "Usages:\n"
            f"{_usages_summary(failing[:50])}\n\n"
        )
        if code:
            prompt += f"Source code:\n```\n{code[:8000]}\n```\n\n"
        prompt += (
            "For each feature, suggest a fallback or progressive enhancement (for example "
            "@supports guards, feature detection, or a polyfill) that keeps the page working "
            "in browsers outside the target. Be concise. Use short code examples and bullet points. "
            "Do not rewrite the whole file."
        )
        try:
            r = client.chat.completions.create(
                model=get_together_model(),
                messages=[{"role": "user", "content": prompt}],
                max_tokens=2048,
            )
        except OpenAIError as e:
            logger.warning("AI fix suggestion request failed: %s", e)
            return None
        if r.choices and r.choices[0].message.content:
            return r.choices[0].message.content.strip()
        return None
