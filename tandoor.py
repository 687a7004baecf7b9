import json

import requests

from errors import (
    AuthenticationError,
    ConfigurationError,
    EndpointNotFoundError,
    NetworkError,
    RequestFailedError,
    TandoorExportError,
    UnknownExportError,
    ValidationError,
)
from helpers import create_http_session, setup_logger
from parsing import is_ingredient_header, parse_iso_duration, parse_servings
from recipe import PlainText, RecipeRecord, StructuredStep

logger = setup_logger(__name__)

NAME_MAX = 128
DESCRIPTION_MAX = 512
FOOD_NAME_MAX = 128
KEYWORD_MAX = 128

NO_INSTRUCTIONS_TEXT = "No instructions provided."
RECIPE_API_PATH = "/api/recipe/"
ACCEPTED_URL_SCHEMES = ("http://", "https://")


# ---------------------------------------------------------------------------
# Schema.org Recipe -> Tandoor recipe payload
# ---------------------------------------------------------------------------

def _default_unit() -> dict:
    return {"name": "g", "description": None}


def _build_step(instruction: str, order: int) -> dict:
    return {
        "name": "",
        "type": "TEXT",
        "instruction": instruction,
        "ingredients": [],
        "time": 0,
        "order": order,
        "show_as_header": False,
    }


def _step_text(step) -> str:
    if isinstance(step, (PlainText, StructuredStep)):
        return step.text
    return str(step)


def _build_steps(recipe: RecipeRecord) -> list[dict]:
    """
    Build Tandoor step list from recipe instructions.

    Blank steps are dropped before numbering, and a placeholder step is used
    when nothing is left since Tandoor needs a step to hang ingredients on.
    """
    texts = [_step_text(step).strip() for step in recipe.instructions]
    texts = [text for text in texts if text]
    if not texts:
        texts = [NO_INSTRUCTIONS_TEXT]
    return [_build_step(text, order) for order, text in enumerate(texts)]


def _build_ingredients(recipe: RecipeRecord) -> list[dict]:
    """
    Build Tandoor ingredient list from the raw ingredient lines.

    Amounts and units are not parsed: every line is sent as its food name with
    a placeholder amount and no_amount set. Section labels ("For the sauce:")
    become header rows. order is the line's position in the source list.
    """
    ingredients = []
    for order, line in enumerate(recipe.ingredients):
        text = line.strip()
        if not text:
            continue

        if is_ingredient_header(text):
            ingredients.append({
                "food": None,
                "unit": _default_unit(),
                "amount": "0",
                "note": text,
                "order": order,
                "is_header": True,
                "no_amount": False,
            })
        else:
            ingredients.append({
                "food": {
                    "name": text[:FOOD_NAME_MAX],
                    "ignore_shopping": False,
                    "supermarket_category": None,
                },
                "unit": _default_unit(),
                "amount": "0",
                "note": "",
                "order": order,
                "is_header": False,
                "no_amount": True,
            })
    return ingredients


def _build_keywords(recipe: RecipeRecord) -> list[dict]:
    """
    Comma separated keywords, then category and cuisine, exact duplicates
    removed. Category and cuisine may hold several comma joined values too.
    """
    tokens = []
    for field_value in (recipe.keywords, recipe.category, recipe.cuisine):
        if field_value:
            tokens.extend(token.strip() for token in field_value.split(","))

    keywords = []
    seen_names = set()
    for token in tokens:
        name = token[:KEYWORD_MAX]
        if not name or name in seen_names:
            continue
        seen_names.add(name)
        keywords.append({"name": name})
    return keywords


def _fill_schema_defaults(payload: dict) -> dict:
    """Set the fields Tandoor's recipe schema requires but a photo never provides."""
    payload.update({
        "nutrition": {
            "carbohydrates": 0,
            "fats": 0,
            "proteins": 0,
            "calories": 0,
            "source": "",
        },
        "properties": [],
        "shared": [],
        "internal": False,
        "show_ingredient_overview": False,
        "private": False,
    })
    return payload


def to_tandoor_payload(recipe: RecipeRecord | dict) -> dict:
    """
    Map a Schema.org style recipe into the payload of Tandoor's
    POST /api/recipe/ endpoint.

    Field limits from the Tandoor recipe schema:
      - name: max 128 chars
      - description: max 512 chars
      - servings_text: max 32 chars
      - keyword and food names: max 128 chars

    working_time (prep) and waiting_time (cook) are left out when no duration
    can be derived. All ingredients are attached to the first step.
    """
    recipe = RecipeRecord.from_dict(recipe)

    description = recipe.description[:DESCRIPTION_MAX] if recipe.description else None
    servings, servings_text = parse_servings(recipe.recipe_yield)

    steps = _build_steps(recipe)
    steps[0]["ingredients"] = _build_ingredients(recipe)

    payload = {
        "name": (recipe.name or "")[:NAME_MAX],
        "description": description,
        "keywords": _build_keywords(recipe),
        "steps": steps,
        "servings": servings,
        "servings_text": servings_text,
    }

    working_time = parse_iso_duration(recipe.prep_time)
    if working_time is not None:
        payload["working_time"] = working_time
    waiting_time = parse_iso_duration(recipe.cook_time)
    if waiting_time is not None:
        payload["waiting_time"] = waiting_time

    return _fill_schema_defaults(payload)


# ---------------------------------------------------------------------------
# Export client
# ---------------------------------------------------------------------------

def _error_detail(resp: requests.Response) -> tuple[str, dict]:
    """
    Pull a readable detail out of a failed Tandoor response.

    Returns (detail, field_errors). Field errors ({"name": ["too long"]}) are
    flattened into "name: too long"; otherwise the "detail" field is used,
    then the JSON body itself, then the raw response text.
    """
    try:
        body = resp.json()
    except ValueError:
        return resp.text or "", {}

    if isinstance(body, dict):
        field_errors = {}
        for field_name, messages in body.items():
            if isinstance(messages, list):
                field_errors[field_name] = [
                    m if isinstance(m, str) else json.dumps(m) for m in messages
                ]
        if field_errors:
            summary = "; ".join(
                f"{name}: {', '.join(messages)}" for name, messages in field_errors.items()
            )
            return summary, field_errors
        if body.get("detail"):
            return str(body["detail"]), {}

    if body:
        return json.dumps(body), {}
    return resp.text or "", {}


class Tandoor:
    """
    Export recipes to Tandoor Recipes.
    API documentation: https://docs.tandoor.dev/api/
    """

    def __init__(self, base_url: str, api_key: str):
        base_url = (base_url or "").strip()
        if not base_url.startswith(ACCEPTED_URL_SCHEMES):
            raise ConfigurationError(
                f"Invalid Tandoor URL '{base_url}': Must start with http:// or https://")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.recipe_url = f"{self.base_url}{RECIPE_API_PATH}"
        self._session = create_http_session()

    def _build_headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    def create_recipe(self, recipe: RecipeRecord | dict) -> None:
        """
        Create a recipe in Tandoor with a single API call.
        POST /api/recipe/
        """
        payload = to_tandoor_payload(recipe)
        self.send_payload(payload)

    def send_payload(self, payload: dict) -> None:
        """
        POST an already normalized payload and raise a TandoorExportError
        subclass for anything but a 2xx response.
        """
        logger.info(f"Creating recipe: {payload.get('name')}")
        logger.info(f"POST {self.recipe_url}")

        try:
            resp = self._session.post(
                self.recipe_url, json=payload, headers=self._build_headers())
        except (requests.ConnectionError, requests.Timeout) as e:
            logger.error(f"Could not reach Tandoor: {e}")
            raise NetworkError(
                "Network error or Tandoor instance unreachable. Check URL and CORS "
                "settings on your Tandoor instance if this is a self-hosted setup. "
                f"Original: {e}"
            ) from e
        except Exception as e:
            logger.error(f"Unexpected export failure: {e}")
            raise UnknownExportError(
                f"An unknown error occurred during export: {e}") from e

        logger.info(f"Response status: {resp.status_code}")
        if not resp.ok:
            logger.error(f"Error response: {resp.text[:1000]}")
            raise self._classify_error(resp)

    def _classify_error(self, resp: requests.Response) -> TandoorExportError:
        status = resp.status_code

        if status in (401, 403):
            return AuthenticationError(
                "Authentication failed. Please check your Tandoor API Key.")
        if status == 404:
            return EndpointNotFoundError(
                f"Tandoor API endpoint not found at {self.recipe_url}. "
                "Please check the Tandoor Instance URL.",
                url=self.recipe_url,
            )

        detail, field_errors = _error_detail(resp)
        if status == 400:
            return ValidationError(
                f"Invalid recipe data or request. Tandoor reported: {detail or 'no details'}",
                detail=detail,
                field_errors=field_errors,
            )

        message = f"Tandoor API request failed with status {status}."
        if detail:
            message += f" Details: {detail}"
        return RequestFailedError(message, status_code=status, detail=detail)


def export_to_tandoor(base_url: str, api_key: str, recipe: RecipeRecord | dict) -> None:
    """Normalize a recipe and create it on the given Tandoor instance."""
    Tandoor(base_url, api_key).create_recipe(recipe)
