import argparse
import base64
import json
import mimetypes
import os
import sys

from chef import Chef
from config import config
from errors import ExtractionError, TandoorExportError
from formatter import format_recipe_text
from helpers import dish_image_filename
from tandoor import export_to_tandoor


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read a recipe from a photo.")
    parser.add_argument("image", help="Path to the recipe photo")
    parser.add_argument("--format", choices=["text", "tandoorJson"], default="text")
    parser.add_argument("--no-image", action="store_true", help="Skip dish image generation")
    parser.add_argument("--image-out", default=".", help="Directory for the generated dish image")
    parser.add_argument("--export", action="store_true", help="Export the recipe to Tandoor")
    parser.add_argument("--tandoor-url", default=config.TANDOOR_HOST)
    parser.add_argument("--api-key", default=config.TANDOOR_API_KEY)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    mime_type = mimetypes.guess_type(args.image)[0] or "image/jpeg"
    with open(args.image, "rb") as f:
        image_bytes = f.read()

    try:
        reading = Chef().read_recipe(image_bytes, mime_type, generate_image=not args.no_image)
    except ExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    recipe = reading.recipe
    if args.format == "text":
        print(format_recipe_text(recipe))
    else:
        print(json.dumps(recipe.to_dict(), indent=2, ensure_ascii=False))

    if reading.dish_image:
        image_path = os.path.join(args.image_out, dish_image_filename(recipe.name))
        with open(image_path, "wb") as f:
            f.write(base64.b64decode(reading.dish_image.base64_data))
        print(f"Dish image saved to: {image_path}")
    elif reading.dish_image_error and not args.no_image:
        print(f"Dish image: {reading.dish_image_error}", file=sys.stderr)

    if args.export:
        if not args.tandoor_url or not args.api_key:
            print("Error: Please enter both Tandoor URL and API Key.", file=sys.stderr)
            return 1
        try:
            export_to_tandoor(args.tandoor_url, args.api_key, recipe)
        except TandoorExportError as e:
            print(f"Export failed: {e}", file=sys.stderr)
            return 1
        print(f'Recipe "{recipe.name}" successfully exported to Tandoor!')

    return 0


if __name__ == "__main__":
    sys.exit(main())
