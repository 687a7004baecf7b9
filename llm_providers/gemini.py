"""
Gemini LLM provider.
Uses Google's Gemini API for vision extraction and Imagen for dish images.
"""

import base64

from .base import GeneratedImage, RecipeProvider
from config import config


class GeminiRecipeProvider(RecipeProvider):
    """Recipe provider using Google Gemini's vision capabilities."""

    name = "Gemini"

    @property
    def api_key(self) -> str:
        return config.GEMINI_API_KEY

    def _client(self):
        from google import genai

        return genai.Client(api_key=self.api_key)

    def _request_recipe_json(self, image_b64: str, mime_type: str) -> str:
        from google.genai import types

        parts = [
            types.Part.from_bytes(data=base64.b64decode(image_b64), mime_type=mime_type),
            types.Part.from_text(text=self._get_extraction_prompt()),
        ]
        response = self._client().models.generate_content(
            model=config.GEMINI_MODEL,
            contents=[types.Content(role="user", parts=parts)],
            config=types.GenerateContentConfig(response_mime_type="application/json"),
        )
        return response.text or ""

    def _request_dish_image(self, prompt: str) -> GeneratedImage | None:
        from google.genai import types

        response = self._client().models.generate_images(
            model=config.GEMINI_IMAGE_MODEL,
            prompt=prompt,
            config=types.GenerateImagesConfig(number_of_images=1, output_mime_type="image/jpeg"),
        )
        if not response.generated_images:
            return None
        image = response.generated_images[0].image
        if image is None or not image.image_bytes:
            return None
        return GeneratedImage(
            base64_data=base64.b64encode(image.image_bytes).decode("utf-8"),
            mime_type=image.mime_type or "image/jpeg",
        )
