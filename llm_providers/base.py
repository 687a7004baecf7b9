"""
Base class for LLM recipe providers.
Provides a common interface for reading a recipe photo and drawing the dish
with different LLM vendors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import json
import re

from errors import ExtractionError
from helpers import DISH_IMAGE_PROMPT_SUFFIX, RECIPE_EXTRACTION_PROMPT, setup_logger
from recipe import RecipeRecord

logger = setup_logger(__name__)

_FENCE_RE = re.compile(r"^```(\w*)?\s*\n?(.*?)\n?\s*```$", re.DOTALL)


@dataclass
class GeneratedImage:
    base64_data: str
    mime_type: str = "image/jpeg"

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if the model added one."""
    text = (text or "").strip()
    match = _FENCE_RE.match(text)
    if match and match.group(2):
        return match.group(2).strip()
    return text


class RecipeProvider(ABC):
    """Abstract base class for vision extraction and dish image generation."""

    name: str = "LLM"

    @property
    @abstractmethod
    def api_key(self) -> str:
        pass

    @abstractmethod
    def _request_recipe_json(self, image_b64: str, mime_type: str) -> str:
        """
        Send the image and extraction prompt to the model.

        Returns:
            The raw text of the model's answer.
        """
        pass

    @abstractmethod
    def _request_dish_image(self, prompt: str) -> GeneratedImage | None:
        pass

    def extract_recipe(self, image_b64: str, mime_type: str) -> RecipeRecord:
        """
        Extract a recipe from a base64 encoded photo.

        Args:
            image_b64: Image bytes, base64 encoded, without a data URL prefix.
            mime_type: MIME type of the image, e.g. "image/png".

        Returns:
            The extracted recipe with missing fields defaulted.

        Raises:
            ExtractionError: If the provider is not configured, the call fails
                or the answer is not valid JSON.
        """
        self._ensure_api_key()
        try:
            raw = self._request_recipe_json(image_b64, mime_type)
        except Exception as e:
            logger.error(f"Error extracting recipe from image using {self.name}: {e}")
            raise self._extraction_error(e) from e
        return self._parse_recipe_response(raw)

    def generate_dish_image(self, description: str | None) -> GeneratedImage | None:
        """
        Generate a picture of the finished dish.

        Returns:
            The generated image, or None if the description is blank or the
            model produced nothing.
        """
        self._ensure_api_key()
        if not description or not description.strip():
            return None

        try:
            image = self._request_dish_image(self._get_image_prompt(description))
        except Exception as e:
            logger.error(f"{self.name} image generation failed: {e}")
            return None
        if image is None:
            logger.warning(f"Image generation did not return any images for description: {description}")
        return image

    def _ensure_api_key(self) -> None:
        if not self.api_key:
            logger.error(f"{self.name} API Key is not configured.")
            raise ExtractionError(
                f"{self.name} API Error: API Key is not configured. "
                "Please set it in the environment or .env file.")

    def _get_image_prompt(self, description: str) -> str:
        return description.strip() + DISH_IMAGE_PROMPT_SUFFIX

    def _get_extraction_prompt(self) -> str:
        return RECIPE_EXTRACTION_PROMPT

    def _parse_recipe_response(self, response: str) -> RecipeRecord:
        """Parse the model's JSON answer into a RecipeRecord."""
        json_str = strip_code_fence(response)
        try:
            data = json.loads(json_str)
        except ValueError as e:
            logger.error(f"Failed to parse JSON response from {self.name}: {e}. Raw response: {json_str[:500]}")
            raise ExtractionError(
                "The AI returned an invalid JSON format. "
                "The recipe might be too complex or the image unclear.") from e
        if not isinstance(data, dict):
            raise ExtractionError(
                "The AI returned an invalid JSON format. "
                "The recipe might be too complex or the image unclear.")
        return RecipeRecord.from_dict(data)

    def _extraction_error(self, error: Exception) -> ExtractionError:
        message = str(error)
        lowered = message.lower()
        if "api key" in lowered or "api_key" in lowered or "quota" in lowered:
            return ExtractionError(
                f"{self.name} API Error: {message}. Please check your API key and quota.")
        return ExtractionError(f"Failed to extract recipe via AI: {message}")
