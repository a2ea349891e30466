"""JSON Schema validation.

The validator class follows the schema's ``$schema`` keyword (Draft 7 when it
is missing). All errors are collected, and ``format`` keywords are checked.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from jsonschema import Draft7Validator, FormatChecker
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for
from loguru import logger

from .errors import SchemaDefinitionError
from .io_utils import parse_json

log = logger.bind(name=__name__)

ROOT_LABEL = "root"


def _escape_pointer_token(token: Any) -> str:
    return str(token).replace("~", "~0").replace("/", "~1")


def to_instance_path(path) -> str:
    """Render a jsonschema error path as a JSON Pointer ('' for the root)."""
    return "".join(f"/{_escape_pointer_token(p)}" for p in path)


@dataclass(frozen=True)
class ValidationIssue:
    instance_path: str
    message: str
    keyword: str
    params: Dict[str, Any]
    data: Any = None

    @property
    def display_path(self) -> str:
        return self.instance_path or ROOT_LABEL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "instancePath": self.instance_path,
            "message": self.message,
            "keyword": self.keyword,
            "params": self.params,
            "data": self.data,
        }


@dataclass
class ValidationReport:
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.issues

    def to_rows(self) -> List[List[str]]:
        return [[i.display_path, i.keyword, i.message] for i in self.issues]


def _params_for(error) -> Dict[str, Any]:
    if error.validator == "required" and isinstance(error.instance, dict):
        # one error is raised per missing property; its message names it
        missing = [name for name in error.validator_value if name not in error.instance]
        named = next((name for name in missing if repr(name) in error.message), None)
        return {"missingProperty": named if named is not None else missing}
    if error.validator == "additionalProperties" and isinstance(error.instance, dict):
        known = set(error.schema.get("properties", {}))
        extra = [name for name in error.instance if name not in known]
        return {"additionalProperty": extra[0] if len(extra) == 1 else extra}
    return {str(error.validator): error.validator_value}


def validate_document(data: Any, schema: Any) -> ValidationReport:
    """Validate an already-parsed document against an already-parsed schema."""
    if not isinstance(schema, (dict, bool)):
        raise SchemaDefinitionError("Schema must be a JSON object or boolean.")

    validator_cls = validator_for(schema, default=Draft7Validator)
    try:
        validator_cls.check_schema(schema)
    except SchemaError as exc:
        raise SchemaDefinitionError(f"Invalid schema: {exc.message}") from exc

    validator = validator_cls(schema, format_checker=FormatChecker())
    issues = [
        ValidationIssue(
            instance_path=to_instance_path(error.absolute_path),
            message=error.message,
            keyword=str(error.validator),
            params=_params_for(error),
            data=error.instance,
        )
        for error in validator.iter_errors(data)
    ]
    log.debug("Validation finished with {} issue(s)", len(issues))
    return ValidationReport(issues)


def validate_text(data_text: str, schema_text: str) -> ValidationReport:
    """Parse both inputs, then validate. JsonParseError names the failing input."""
    data = parse_json(data_text, source="JSON data")
    schema = parse_json(schema_text, source="JSON schema")
    return validate_document(data, schema)
