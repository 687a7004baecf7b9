import logging
import re

import requests
from requests.adapters import HTTPAdapter

from config import config


RECIPE_EXTRACTION_PROMPT = """Analyze the provided image, which contains a cooking recipe. Extract the recipe details and structure them as a JSON object adhering to the schema.org/Recipe format.
The JSON object MUST include '@context': 'http://schema.org' and '@type': 'Recipe'.

Essential fields to extract:
- name: The title of the recipe. If not found, use "Untitled Recipe".
- recipeIngredient: An array of strings, where each string is a single ingredient with its quantity and unit. If none found, use an empty array.
- recipeInstructions: An array of strings, where each string is a distinct step in the cooking process. If none found, use an empty array. Consider that instructions might be presented as a list of HowToStep objects (e.g. { "@type": "HowToStep", "text": "Instruction text" }); if so, extract the 'text' property of each step into the array.

Optional fields to extract if clearly identifiable from the image:
- description: A brief summary of the recipe.
- prepTime: Preparation time in ISO 8601 duration format (e.g., 'PT30M' for 30 minutes).
- cookTime: Cooking time in ISO 8601 duration format (e.g., 'PT1H' for 1 hour).
- recipeYield: Number of servings (e.g., '4 servings').
- recipeCategory: Category (e.g., 'Dessert', 'Main Course').
- recipeCuisine: Cuisine type (e.g., 'Italian', 'Mexican').
- keywords: A string of comma-separated keywords.
- dishImageDescription: If the image contains a clear visual of the final prepared dish itself, provide a concise visual description of this dish suitable for an image generation model (e.g., "A stack of fluffy pancakes with syrup and berries"). If no clear dish image is present or identifiable, set this field to null.

If any optional fields cannot be reliably extracted, omit them or set their value to null.
Ensure the output is ONLY a single, valid JSON object. Do not include any explanatory text or markdown formatting outside of the JSON structure itself.
If no discernible recipe is found, return a JSON object with name "No Recipe Found", empty arrays for recipeIngredient and recipeInstructions, and null for dishImageDescription.
Example for instructions: if image has "1. Preheat oven. 2. Mix ingredients.", output should be: "recipeInstructions": ["Preheat oven.", "Mix ingredients."]
"""

# Appended to the dish description before it goes to the image model
DISH_IMAGE_PROMPT_SUFFIX = ", food photography, delicious, high quality, vibrant colors"


def setup_logger(name: str) -> logging.Logger:
    """Return a named logger writing to stderr at the configured level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - %(levelname)s - [%(name)s] %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, config.LOG_LEVEL.upper(), logging.INFO))
    return logger


def create_http_session() -> requests.Session:
    """Create a requests session for API calls.

    Failed calls are surfaced to the caller as-is, so the adapter is mounted
    without a retry strategy.
    """
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=0, pool_connections=10, pool_maxsize=10)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def dish_image_filename(recipe_name: str | None) -> str:
    """File name used when saving a generated dish image."""
    if not recipe_name:
        return "generated_dish_image.jpeg"
    slug = re.sub(r"[^a-z0-9]", "_", recipe_name, flags=re.IGNORECASE).lower()
    return f"{slug}_dish_image.jpeg"
