"""
Model router for selecting the model used by each AI feature.
"""
import logging
from mockprep.core import config

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

# Feature -> model mapping
MODEL_ROUTING = {
    "question_generation": "gpt-4o-mini",
    "response_analysis": "gpt-4o-mini",
}


def get_model_for_feature(feature: str) -> str:
    """
    Get the model for a feature.

    OPENAI_MODEL, when set, overrides the routing table for every feature.

    Args:
        feature: Feature name ("question_generation" | "response_analysis")

    Returns:
        Model identifier string
    """
    if config.OPENAI_MODEL:
        return config.OPENAI_MODEL
    return MODEL_ROUTING.get(feature, DEFAULT_MODEL)


def is_model_available() -> bool:
    """Check if a model is available (OpenAI configured)."""
    return bool(config.OPENAI_API_KEY)
