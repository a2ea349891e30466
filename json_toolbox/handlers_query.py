from __future__ import annotations

from typing import Optional

import gradio as gr

from .errors import JsonParseError
from .io_utils import dump_json, parse_json, read_text_content
from .samples import SAMPLE_DOCUMENT
from .session import QuerySession
from .settings import get_settings
from .suggestions import suggest_queries


def ensure_session(session: Optional[QuerySession]) -> QuerySession:
    return session if session is not None else QuerySession()


def history_dropdown(session: QuerySession):
    choices = [entry.query for entry in session.history]
    return gr.update(choices=choices, value=None, interactive=bool(choices))


def result_choices(session: QuerySession):
    choices = [f"{i}: {r.path} ({r.type})" for i, r in enumerate(session.results)]
    return gr.update(choices=choices, value=None, interactive=bool(choices))


def run_query_handler(json_text, query, session):
    session = ensure_session(session)
    outcome = session.execute(json_text, query)
    results = [r.to_dict() for r in outcome.results] if outcome.ok else None
    return (
        results,
        outcome.message,
        session.history.to_rows(),
        history_dropdown(session),
        result_choices(session),
        session,
    )


def rerun_history_handler(json_text, selected_query, session):
    if not selected_query:
        session = ensure_session(session)
        return (
            gr.update(),
            None,
            "Select a query from the history.",
            session.history.to_rows(),
            history_dropdown(session),
            result_choices(session),
            session,
        )
    return (selected_query, *run_query_handler(json_text, selected_query, session))


def result_detail_handler(selection, session):
    session = ensure_session(session)
    if not selection:
        return ""
    try:
        index = int(str(selection).split(":", 1)[0])
    except ValueError:
        return ""
    result = session.select(index)
    if result is None:
        return ""
    return dump_json(result.value, get_settings().default_indent)


def suggestions_for_text(json_text):
    if not (json_text or "").strip():
        return gr.update(choices=[], value=None)
    try:
        data = parse_json(json_text)
    except JsonParseError:
        return gr.update(choices=[], value=None)
    return gr.update(choices=suggest_queries(data), value=None)


def load_sample_handler():
    text = dump_json(SAMPLE_DOCUMENT, get_settings().default_indent)
    return text, "Sample bookstore data loaded.", suggestions_for_text(text)


def load_query_file_handler(file_obj):
    if file_obj is None:
        return gr.update(), "No file uploaded.", gr.update()
    try:
        text = read_text_content(file_obj)
        parse_json(text)
    except (OSError, UnicodeDecodeError, JsonParseError) as e:
        return gr.update(), f"Error loading file: {str(e)}", gr.update()
    return text, "File loaded.", suggestions_for_text(text)


def clear_history_handler(session):
    session = ensure_session(session)
    session.history.clear()
    return session.history.to_rows(), history_dropdown(session), session
