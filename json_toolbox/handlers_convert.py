from __future__ import annotations

import os
import tempfile

import gradio as gr
from loguru import logger

from .converters import ConversionOptions, ConversionType, CsvOptions, XmlOptions, convert
from .errors import ConversionError

log = logger.bind(name=__name__)

CONVERSION_CHOICES = [c.label for c in ConversionType]
INDENT_CHOICES = ["2", "4", "8"]
_BY_LABEL = {c.label: c for c in ConversionType}


def conversion_from_label(label) -> ConversionType:
    if isinstance(label, ConversionType):
        return label
    if label in _BY_LABEL:
        return _BY_LABEL[label]
    return ConversionType(label)


def build_options(indent, xml_pretty, xml_indent, xml_header, csv_delimiter, csv_header, csv_flatten) -> ConversionOptions:
    delimiter = csv_delimiter or ","
    if delimiter == "\\t":
        delimiter = "\t"
    return ConversionOptions(
        indent=int(indent or 2),
        xml=XmlOptions(pretty=bool(xml_pretty), indent=xml_indent if xml_indent is not None else "  ", header=bool(xml_header)),
        csv=CsvOptions(delimiter=delimiter, header=bool(csv_header), flatten=bool(csv_flatten)),
    )


def toggle_options_handler(label):
    conversion = conversion_from_label(label)
    return (
        gr.update(visible=conversion is ConversionType.JSON_TO_XML),
        gr.update(visible=conversion is ConversionType.JSON_TO_CSV),
    )


def convert_handler(text, label, indent, xml_pretty, xml_indent, xml_header, csv_delimiter, csv_header, csv_flatten):
    try:
        conversion = conversion_from_label(label)
        options = build_options(indent, xml_pretty, xml_indent, xml_header, csv_delimiter, csv_header, csv_flatten)
        output = convert(text, conversion, options)
    except (ConversionError, ValueError) as exc:
        log.warning("Conversion failed: {}", exc)
        return "", f"Error during conversion: {str(exc)}"
    return output, f"Converted {conversion.label}."


def export_conversion_handler(output, label, file_name):
    if not output:
        return None, "Nothing to export."

    conversion = conversion_from_label(label)
    if not file_name or not file_name.strip():
        file_name = "converted"
    file_name = file_name.strip()

    ext = f".{conversion.extension}"
    if not file_name.lower().endswith(ext):
        file_name += ext

    path = os.path.join(tempfile.gettempdir(), file_name)
    try:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(output)
    except OSError as e:
        return None, f"Error during export: {str(e)}"
    return path, f"Export successful! Saved to {path}"
