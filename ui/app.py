"""
Recipe Reader Web API
A Flask-based JSON interface for extracting recipes from photos and exporting
them to Tandoor.
"""

from flask import Flask, request, jsonify

from chef import Chef, SUPPORTED_MIME_TYPES
from config import config
from errors import (
    AuthenticationError,
    ConfigurationError,
    EndpointNotFoundError,
    ExtractionError,
    NetworkError,
    RequestFailedError,
    TandoorExportError,
    ValidationError,
)
from formatter import format_recipe_text
from helpers import setup_logger
from recipe import RecipeRecord
from tandoor import export_to_tandoor

logger = setup_logger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_MB * 1024 * 1024

# HTTP status returned to the browser for each export failure
EXPORT_ERROR_STATUS = {
    ConfigurationError: 400,
    AuthenticationError: 401,
    EndpointNotFoundError: 404,
    ValidationError: 422,
    NetworkError: 502,
    RequestFailedError: 502,
}

OUTPUT_FORMATS = ('text', 'tandoorJson')


def _form_flag(name: str, default: bool) -> bool:
    value = request.form.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def get_chef() -> Chef:
    """Build the Chef for a request; tests replace this."""
    return Chef()


@app.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@app.route('/api/extract', methods=['POST'])
def extract_recipe():
    """Extract a recipe from an uploaded photo."""
    config.reload()
    upload = request.files.get('image')
    if upload is None or not upload.filename:
        return jsonify({'error': 'An image file is required'}), 400

    mime_type = upload.mimetype or ''
    if mime_type not in SUPPORTED_MIME_TYPES:
        return jsonify({'error': f'Unsupported image type: {mime_type or "unknown"}'}), 400

    output_format = request.form.get('format', 'text')
    if output_format not in OUTPUT_FORMATS:
        return jsonify({'error': f'Unknown output format: {output_format}'}), 400

    generate_image = _form_flag('generate_image', True)

    try:
        reading = get_chef().read_recipe(upload.read(), mime_type, generate_image=generate_image)
    except ExtractionError as e:
        return jsonify({'error': e.message}), 502

    result = {
        'recipe': reading.recipe.to_dict(),
        'dish_image': None,
        'dish_image_error': reading.dish_image_error,
    }
    if output_format == 'text':
        result['text'] = format_recipe_text(reading.recipe)
    if reading.dish_image:
        result['dish_image'] = {
            'base64_data': reading.dish_image.base64_data,
            'mime_type': reading.dish_image.mime_type,
            'data_url': reading.dish_image.data_url,
        }
    return jsonify(result)


@app.route('/api/format', methods=['POST'])
def format_recipe():
    """Render recipe JSON-LD as plain text."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'error': 'Recipe JSON is required'}), 400
    recipe = data.get('recipe', data)
    return jsonify({'text': format_recipe_text(recipe)})


@app.route('/api/export', methods=['POST'])
def export_recipe():
    """Export a recipe to a Tandoor instance."""
    config.reload()
    data = request.get_json(silent=True) or {}
    recipe_data = data.get('recipe')
    if not isinstance(recipe_data, dict):
        return jsonify({'error': 'Recipe data is required'}), 400

    tandoor_url = data.get('tandoor_url') or config.TANDOOR_HOST
    api_key = data.get('api_key') or config.TANDOOR_API_KEY
    if not tandoor_url or not api_key:
        return jsonify({'error': 'Please enter both Tandoor URL and API Key.'}), 400

    recipe = RecipeRecord.from_dict(recipe_data)
    try:
        export_to_tandoor(tandoor_url, api_key, recipe)
    except TandoorExportError as e:
        logger.error(f"Tandoor export failed: {e}")
        status = EXPORT_ERROR_STATUS.get(type(e), 500)
        return jsonify({'error': f'Export failed: {e.message}'}), status

    return jsonify({
        'status': 'success',
        'message': f'Recipe "{recipe.name}" successfully exported to Tandoor!',
    })


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000)
