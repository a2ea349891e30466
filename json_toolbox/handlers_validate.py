from __future__ import annotations

from loguru import logger

from .errors import JsonParseError, SchemaDefinitionError
from .io_utils import dump_json
from .samples import SAMPLE_SCHEMA, SAMPLE_VALID_DATA
from .settings import get_settings
from .validation import validate_text

log = logger.bind(name=__name__)


def validate_handler(data_text, schema_text):
    if not (data_text or "").strip() or not (schema_text or "").strip():
        return "Please enter both JSON data and a JSON schema.", [], None

    try:
        report = validate_text(data_text, schema_text)
    except (JsonParseError, SchemaDefinitionError) as e:
        log.warning("Validation input rejected: {}", e)
        return f"Error: {str(e)}", [], None

    if report.valid:
        return "JSON data is valid against the schema.", [], None

    details = [issue.to_dict() for issue in report.issues]
    return f"JSON data is invalid: {len(report.issues)} error(s) found.", report.to_rows(), details


def load_schema_template_handler():
    indent = get_settings().default_indent
    return dump_json(SAMPLE_VALID_DATA, indent), dump_json(SAMPLE_SCHEMA, indent), "Sample schema and data loaded."
