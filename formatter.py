from parsing import format_iso_duration
from recipe import StructuredStep, UNTITLED_RECIPE, RecipeRecord

NOT_FOUND_MESSAGE = "No recipe could be identified in the image."


def format_recipe_text(recipe: RecipeRecord | dict | None) -> str:
    """Render a recipe as human readable plain text."""
    if recipe is None:
        return "No recipe data available."
    recipe = RecipeRecord.from_dict(recipe)
    if recipe.is_not_found:
        return NOT_FOUND_MESSAGE

    text = ""
    if recipe.name and recipe.name != UNTITLED_RECIPE:
        text += f"{recipe.name}\n"

    if recipe.description:
        text += f"\nDescription: {recipe.description}\n"
    if recipe.recipe_yield:
        text += f"\nYield: {recipe.recipe_yield}\n"
    if recipe.prep_time:
        text += f"Prep Time: {format_iso_duration(recipe.prep_time)}\n"
    if recipe.cook_time:
        text += f"Cook Time: {format_iso_duration(recipe.cook_time)}\n"
    if recipe.category:
        text += f"Category: {recipe.category}\n"
    if recipe.cuisine:
        text += f"Cuisine: {recipe.cuisine}\n"

    if recipe.ingredients:
        text += "\nIngredients:\n"
        for ingredient in recipe.ingredients:
            text += f"- {ingredient}\n"
    else:
        text += "\nNo ingredients found.\n"

    if recipe.instructions:
        text += "\nInstructions:\n"
        for index, step in enumerate(recipe.instructions, start=1):
            # Numbering follows the source list, so an empty HowToStep leaves a gap
            if isinstance(step, StructuredStep) and not step.text:
                continue
            text += f"{index}. {step.text}\n"
    else:
        text += "\nNo instructions found.\n"

    if recipe.keywords:
        text += f"\nKeywords: {recipe.keywords}\n"

    return text.strip()
