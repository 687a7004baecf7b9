"""
LLM Providers package for recipe extraction and dish image generation.
Provides a unified interface for different LLM vision providers.
"""

from .base import GeneratedImage, RecipeProvider, strip_code_fence
from .gemini import GeminiRecipeProvider
from .openai import OpenAIRecipeProvider
from config import config


def get_recipe_provider() -> RecipeProvider:
    """
    Factory function to get the appropriate recipe provider based on config.

    Returns:
        An instance of the configured LLM recipe provider.

    Raises:
        ValueError: If the configured provider is not supported.
    """
    if config.LLM_PROVIDER == "gemini":
        return GeminiRecipeProvider()
    elif config.LLM_PROVIDER == "openai":
        return OpenAIRecipeProvider()
    else:
        raise ValueError(f"Unsupported LLM provider: {config.LLM_PROVIDER}")


__all__ = [
    "GeneratedImage",
    "RecipeProvider",
    "GeminiRecipeProvider",
    "OpenAIRecipeProvider",
    "get_recipe_provider",
    "strip_code_fence",
]
