"""
In-memory form of a recipe extracted by the vision model.

The model answers with Schema.org Recipe JSON-LD, but nothing about that
answer can be trusted: fields go missing, change type, or come back as lists
where strings were asked for. RecipeRecord.from_dict absorbs all of that so
the rest of the code can rely on a fixed shape.
"""

from dataclasses import dataclass, field

UNTITLED_RECIPE = "Untitled Recipe"
NO_RECIPE_FOUND = "No Recipe Found"


@dataclass(frozen=True)
class PlainText:
    """An instruction given as a bare string."""
    text: str


@dataclass(frozen=True)
class StructuredStep:
    """An instruction given as a HowToStep object."""
    text: str


Instruction = PlainText | StructuredStep


def _optional_text(value) -> str | None:
    """Coerce a scalar or list field to a string, or None when empty."""
    if value is None:
        return None
    if isinstance(value, list):
        value = ", ".join(str(v).strip() for v in value if v is not None and str(v).strip())
    elif not isinstance(value, str):
        value = str(value)
    return value if value.strip() else None


def _instruction_entries(entries) -> list[Instruction]:
    instructions: list[Instruction] = []
    if not isinstance(entries, list):
        return instructions

    for entry in entries:
        if entry is None:
            continue
        if isinstance(entry, str):
            instructions.append(PlainText(entry))
        elif isinstance(entry, (PlainText, StructuredStep)):
            text = entry.text
            instructions.append(type(entry)("" if text is None else str(text)))
        elif isinstance(entry, dict) and entry.get("@type") == "HowToSection":
            # A section only groups steps; keep the steps in order
            instructions.extend(_instruction_entries(entry.get("itemListElement")))
        elif isinstance(entry, dict):
            # Step objects without text end up blank and are skipped downstream
            text = entry.get("text")
            instructions.append(StructuredStep("" if text is None else str(text)))
        else:
            instructions.append(PlainText(str(entry)))
    return instructions


def _ingredient_lines(entries) -> list[str]:
    if not isinstance(entries, list):
        return []
    return [e if isinstance(e, str) else str(e) for e in entries if e is not None]


@dataclass
class RecipeRecord:
    name: str = UNTITLED_RECIPE
    description: str | None = None
    ingredients: list[str] = field(default_factory=list)
    instructions: list[Instruction] = field(default_factory=list)
    prep_time: str | None = None
    cook_time: str | None = None
    recipe_yield: str | None = None
    category: str | None = None
    cuisine: str | None = None
    keywords: str | None = None
    dish_image_description: str | None = None

    @classmethod
    def from_dict(cls, data) -> "RecipeRecord":
        """Build a record from Schema.org JSON-LD, defaulting anything unusable."""
        if isinstance(data, RecipeRecord):
            # Records can be built by hand, so they get the same coercions
            return cls(
                name=_optional_text(data.name) or UNTITLED_RECIPE,
                description=_optional_text(data.description),
                ingredients=_ingredient_lines(data.ingredients),
                instructions=_instruction_entries(data.instructions),
                prep_time=_optional_text(data.prep_time),
                cook_time=_optional_text(data.cook_time),
                recipe_yield=_optional_text(data.recipe_yield),
                category=_optional_text(data.category),
                cuisine=_optional_text(data.cuisine),
                keywords=_optional_text(data.keywords),
                dish_image_description=_optional_text(data.dish_image_description),
            )
        if not isinstance(data, dict):
            return cls()

        return cls(
            name=_optional_text(data.get("name")) or UNTITLED_RECIPE,
            description=_optional_text(data.get("description")),
            ingredients=_ingredient_lines(data.get("recipeIngredient")),
            instructions=_instruction_entries(data.get("recipeInstructions")),
            prep_time=_optional_text(data.get("prepTime")),
            cook_time=_optional_text(data.get("cookTime")),
            recipe_yield=_optional_text(data.get("recipeYield")),
            category=_optional_text(data.get("recipeCategory")),
            cuisine=_optional_text(data.get("recipeCuisine")),
            keywords=_optional_text(data.get("keywords")),
            dish_image_description=_optional_text(data.get("dishImageDescription")),
        )

    def to_dict(self) -> dict:
        """Render the record as Schema.org Recipe JSON-LD."""
        instructions = []
        for step in self.instructions:
            if isinstance(step, StructuredStep):
                instructions.append({"@type": "HowToStep", "text": step.text})
            else:
                instructions.append(step.text)

        return {
            "@context": "http://schema.org",
            "@type": "Recipe",
            "name": self.name,
            "description": self.description,
            "recipeIngredient": list(self.ingredients),
            "recipeInstructions": instructions,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "recipeYield": self.recipe_yield,
            "recipeCategory": self.category,
            "recipeCuisine": self.cuisine,
            "keywords": self.keywords,
            "dishImageDescription": self.dish_image_description,
        }

    @property
    def is_not_found(self) -> bool:
        return self.name == NO_RECIPE_FOUND
