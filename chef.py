import base64
from dataclasses import dataclass

from errors import RecipeReaderError
from helpers import setup_logger
from llm_providers import GeneratedImage, RecipeProvider, get_recipe_provider
from recipe import RecipeRecord

logger = setup_logger(__name__)

SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif", "image/heic", "image/heif")

NO_DESCRIPTION_MESSAGE = "No dish image description was found in the recipe to generate an image from."
NO_IMAGE_MESSAGE = "An image could not be generated based on the description (the AI did not return an image)."


@dataclass
class RecipeReading:
    recipe: RecipeRecord
    dish_image: GeneratedImage | None = None
    dish_image_error: str | None = None


class Chef:
    """Reads a recipe photo and, if asked, draws the finished dish."""

    def __init__(self, provider: RecipeProvider | None = None):
        self.provider = provider or get_recipe_provider()

    def read_recipe(self, image_bytes: bytes, mime_type: str, generate_image: bool = True) -> RecipeReading:
        """
        Extract the recipe from a photo.

        Extraction errors propagate. Image generation problems never do; they
        are reported through RecipeReading.dish_image_error instead.
        """
        image_b64 = base64.b64encode(image_bytes).decode("utf-8")
        recipe = self.provider.extract_recipe(image_b64, mime_type)
        logger.info(f"Extracted recipe: {recipe.name}")

        reading = RecipeReading(recipe=recipe)
        if generate_image:
            self._illustrate(reading)
        return reading

    def _illustrate(self, reading: RecipeReading) -> None:
        description = reading.recipe.dish_image_description
        if not description:
            reading.dish_image_error = NO_DESCRIPTION_MESSAGE
            return

        try:
            image = self.provider.generate_dish_image(description)
        except RecipeReaderError as e:
            logger.error(f"Error generating dish image: {e}")
            reading.dish_image_error = e.message
            return

        if image is None:
            reading.dish_image_error = NO_IMAGE_MESSAGE
        else:
            reading.dish_image = image
