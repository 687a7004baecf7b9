"""
OpenAI LLM provider.
Uses OpenAI's Responses API with vision input and its image generation API.
"""

from .base import GeneratedImage, RecipeProvider
from config import config


class OpenAIRecipeProvider(RecipeProvider):
    """Recipe provider using OpenAI's vision capabilities."""

    name = "OpenAI"

    @property
    def api_key(self) -> str:
        return config.OPENAI_API_KEY

    def _client(self):
        from openai import OpenAI

        return OpenAI(api_key=self.api_key)

    def _request_recipe_json(self, image_b64: str, mime_type: str) -> str:
        content = [
            {"type": "input_image", "image_url": f"data:{mime_type};base64,{image_b64}"},
            {"type": "input_text", "text": self._get_extraction_prompt()},
        ]
        response = self._client().responses.create(
            model=config.OPENAI_MODEL,
            input=[{"role": "user", "content": content}],
        )
        return response.output_text or ""

    def _request_dish_image(self, prompt: str) -> GeneratedImage | None:
        result = self._client().images.generate(
            model=config.OPENAI_IMAGE_MODEL,
            prompt=prompt,
            n=1,
            output_format="jpeg",
        )
        if not result.data or not result.data[0].b64_json:
            return None
        return GeneratedImage(base64_data=result.data[0].b64_json, mime_type="image/jpeg")
