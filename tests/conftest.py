import json

import pytest

from llm_providers import GeneratedImage, RecipeProvider


class FakeProvider(RecipeProvider):
    """Provider returning canned answers instead of calling a model."""

    name = "Fake"

    def __init__(self, answer="", image=None, error=None, image_error=None, key="test-key"):
        self.answer = answer
        self.image = image
        self.error = error
        self.image_error = image_error
        self.key = key
        self.extract_calls = []
        self.image_prompts = []

    @property
    def api_key(self) -> str:
        return self.key

    def _request_recipe_json(self, image_b64, mime_type):
        self.extract_calls.append((image_b64, mime_type))
        if self.error is not None:
            raise self.error
        return self.answer

    def _request_dish_image(self, prompt):
        self.image_prompts.append(prompt)
        if self.image_error is not None:
            raise self.image_error
        return self.image


@pytest.fixture
def pancake_json():
    return json.dumps({
        "@context": "http://schema.org",
        "@type": "Recipe",
        "name": "Pancakes",
        "recipeIngredient": ["2 cups flour", "1 egg"],
        "recipeInstructions": ["Mix.", "Fry."],
        "recipeYield": "4 servings",
        "dishImageDescription": "A stack of fluffy pancakes",
    })


@pytest.fixture
def dish_image():
    return GeneratedImage(base64_data="aW1hZ2U=", mime_type="image/jpeg")


@pytest.fixture
def fake_provider_cls():
    return FakeProvider
