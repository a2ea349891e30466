"""Format conversions between JSON and YAML / XML / CSV."""
from __future__ import annotations

import csv
import io
import json
import re
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, List, Optional
from xml.sax.saxutils import escape

import yaml
from loguru import logger

from .coercion import to_string
from .errors import ConversionError, JsonParseError
from .flattening import collect_headers, rows_for_export
from .io_utils import parse_json

log = logger.bind(name=__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
_XML_NAME_INVALID = re.compile(r"[^A-Za-z0-9_.\-:]")


class ConversionType(str, Enum):
    JSON_TO_YAML = "json_to_yaml"
    YAML_TO_JSON = "yaml_to_json"
    JSON_TO_XML = "json_to_xml"
    JSON_TO_CSV = "json_to_csv"

    @property
    def label(self) -> str:
        source, target = self.value.split("_to_")
        return f"{source.upper()} → {target.upper()}"

    @property
    def extension(self) -> str:
        return self.value.split("_to_")[1]


@dataclass
class XmlOptions:
    pretty: bool = True
    indent: str = "  "
    header: bool = True


@dataclass
class CsvOptions:
    delimiter: str = ","
    header: bool = True
    flatten: bool = True


@dataclass
class ConversionOptions:
    indent: int = 2
    xml: XmlOptions = field(default_factory=XmlOptions)
    csv: CsvOptions = field(default_factory=CsvOptions)


class _NoAliasDumper(yaml.SafeDumper):
    def ignore_aliases(self, data):
        return True


def _json_default(value: Any):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (set, tuple)):
        return list(value)
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    return str(value)


def json_to_yaml(data: Any, indent: int = 2) -> str:
    return yaml.dump(
        data,
        Dumper=_NoAliasDumper,
        indent=indent,
        width=float("inf"),
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
    )


def yaml_to_json(text: str, indent: int = 2) -> str:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConversionError(f"Invalid YAML: {exc}") from exc
    return json.dumps(data, indent=indent, ensure_ascii=False, default=_json_default)


def _xml_name(name: Any) -> str:
    tag = _XML_NAME_INVALID.sub("_", str(name))
    if not tag or not (tag[0].isalpha() or tag[0] == "_"):
        tag = f"_{tag}"
    return tag


def _xml_text(value: Any) -> str:
    return escape(value if isinstance(value, str) else to_string(value))


def json_to_xml(data: Any, options: Optional[XmlOptions] = None) -> str:
    options = options or XmlOptions()
    newline = "\n" if options.pretty else ""
    parts: List[str] = []

    def emit(name: Any, value: Any, depth: int) -> None:
        if isinstance(value, list):
            for item in value:
                emit(name, item, depth)
            return
        pad = options.indent * depth if options.pretty else ""
        tag = _xml_name(name)
        if value is None or value == {}:
            parts.append(f"{pad}<{tag}/>{newline}")
        elif isinstance(value, dict):
            parts.append(f"{pad}<{tag}>{newline}")
            for key, child in value.items():
                emit(key, child, depth + 1)
            parts.append(f"{pad}</{tag}>{newline}")
        else:
            parts.append(f"{pad}<{tag}>{_xml_text(value)}</{tag}>{newline}")

    def emit_top(value: Any) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                emit(key, child, 0)
        elif isinstance(value, list):
            for item in value:
                emit_top(item)
        elif value is not None:
            parts.append(f"{_xml_text(value)}{newline}")

    emit_top(data)
    body = "".join(parts).rstrip("\n")
    if options.header:
        return f"{XML_HEADER}{newline}{body}" if body else XML_HEADER
    return body


def _csv_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return to_string(value)


def json_to_csv(data: Any, options: Optional[CsvOptions] = None) -> str:
    options = options or CsvOptions()
    if len(options.delimiter) != 1:
        raise ConversionError("CSV delimiter must be a single character.")

    rows = rows_for_export(data, flatten=options.flatten)
    headers = collect_headers(rows)

    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=options.delimiter, lineterminator="\r\n")
    if options.header:
        writer.writerow(headers)
    for row in rows:
        writer.writerow([_csv_cell(row.get(h)) for h in headers])
    return buffer.getvalue().rstrip("\r\n")


def convert(text: str, conversion: ConversionType, options: Optional[ConversionOptions] = None) -> str:
    """Convert `text` according to `conversion`, raising ConversionError on bad input."""
    options = options or ConversionOptions()
    conversion = ConversionType(conversion)

    if not (text or "").strip():
        raise ConversionError("Please enter content to convert.")

    if conversion is ConversionType.YAML_TO_JSON:
        output = yaml_to_json(text, options.indent)
    else:
        try:
            data = parse_json(text)
        except JsonParseError as exc:
            raise ConversionError(str(exc)) from exc

        if conversion is ConversionType.JSON_TO_YAML:
            output = json_to_yaml(data, options.indent)
        elif conversion is ConversionType.JSON_TO_XML:
            output = json_to_xml(data, options.xml)
        else:
            output = json_to_csv(data, options.csv)

    log.debug("Converted {} chars via {}", len(text), conversion.value)
    return output
