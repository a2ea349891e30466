import gradio as gr

from json_toolbox.handlers_convert import (
    CONVERSION_CHOICES,
    INDENT_CHOICES,
    convert_handler,
    export_conversion_handler,
    toggle_options_handler,
)
from json_toolbox.handlers_query import (
    clear_history_handler,
    load_query_file_handler,
    load_sample_handler,
    rerun_history_handler,
    result_detail_handler,
    run_query_handler,
    suggestions_for_text,
)
from json_toolbox.handlers_validate import load_schema_template_handler, validate_handler
from json_toolbox.logging_setup import setup_logging
from json_toolbox.samples import QUERY_EXAMPLES, SYNTAX_GUIDE
from json_toolbox.settings import get_settings

settings = get_settings()


def guide_markdown():
    lines = ["| Syntax | Meaning |", "|---|---|"]
    lines += [f"| `{path}` | {text} |" for path, text in SYNTAX_GUIDE]
    lines += ["", "**Examples (sample data)**", "", "| Query | Returns |", "|---|---|"]
    lines += [f"| `{path}` | {text} |" for path, text in QUERY_EXAMPLES]
    return "\n".join(lines)


# --- UI Definition ---
with gr.Blocks(title="JSON Toolbox") as demo:
    gr.Markdown("# JSON Toolbox")
    gr.Markdown("Query JSON with JSONPath, convert it to other formats, and validate it against a schema.")

    # State
    query_session_state = gr.State()

    with gr.Tab("Query"):
        with gr.Row():
            # Left Panel: Input
            with gr.Column(scale=1):
                gr.Markdown("### 1. JSON Data")
                query_file = gr.File(label="Upload JSON File", file_types=[".json"])
                load_sample_btn = gr.Button("Load Sample Data")
                json_input = gr.Textbox(label="JSON", lines=20, placeholder='{"store": {"book": []}}')
                query_status = gr.Textbox(label="Status", interactive=False)

            # Right Panel: Query & Results
            with gr.Column(scale=1):
                gr.Markdown("### 2. JSONPath Query")
                query_input = gr.Textbox(label="Query", placeholder="$.store.book[*].title")
                suggestion_selector = gr.Dropdown(label="Suggestions", choices=[], interactive=True)
                run_query_btn = gr.Button("Execute Query", variant="primary")

                gr.Markdown("### 3. Results")
                query_results = gr.JSON(label="Results")
                result_selector = gr.Dropdown(label="Inspect Result", choices=[], interactive=False)
                result_detail = gr.Code(label="Result Value", language="json")

                gr.Markdown("### 4. Recent Queries")
                history_table = gr.Dataframe(
                    headers=["Query", "Results", "Time"],
                    datatype=["str", "number", "str"],
                    col_count=(3, "fixed"),
                    interactive=False,
                    label="History",
                )
                history_selector = gr.Dropdown(label="Run Again", choices=[], interactive=False)
                with gr.Row():
                    rerun_btn = gr.Button("Run Selected")
                    clear_history_btn = gr.Button("Clear History")

        with gr.Accordion("Query Guide", open=False):
            gr.Markdown(guide_markdown())

        load_sample_btn.click(
            fn=load_sample_handler,
            inputs=[],
            outputs=[json_input, query_status, suggestion_selector],
        )

        query_file.upload(
            fn=load_query_file_handler,
            inputs=[query_file],
            outputs=[json_input, query_status, suggestion_selector],
        )

        json_input.blur(
            fn=suggestions_for_text,
            inputs=[json_input],
            outputs=[suggestion_selector],
        )

        suggestion_selector.change(
            fn=lambda s: s if s else gr.update(),
            inputs=[suggestion_selector],
            outputs=[query_input],
        )

        query_outputs = [query_results, query_status, history_table, history_selector, result_selector, query_session_state]

        run_query_btn.click(
            fn=run_query_handler,
            inputs=[json_input, query_input, query_session_state],
            outputs=query_outputs,
        )

        query_input.submit(
            fn=run_query_handler,
            inputs=[json_input, query_input, query_session_state],
            outputs=query_outputs,
        )

        rerun_btn.click(
            fn=rerun_history_handler,
            inputs=[json_input, history_selector, query_session_state],
            outputs=[query_input] + query_outputs,
        )

        result_selector.change(
            fn=result_detail_handler,
            inputs=[result_selector, query_session_state],
            outputs=[result_detail],
        )

        clear_history_btn.click(
            fn=clear_history_handler,
            inputs=[query_session_state],
            outputs=[history_table, history_selector, query_session_state],
        )

    with gr.Tab("Convert"):
        with gr.Row():
            with gr.Column(scale=1):
                gr.Markdown("### 1. Source")
                convert_input = gr.Textbox(label="Input", lines=20)
                conversion_type = gr.Radio(choices=CONVERSION_CHOICES, value=CONVERSION_CHOICES[0], label="Conversion")
                indent_selector = gr.Dropdown(label="Indent", choices=INDENT_CHOICES, value=str(settings.default_indent))

                with gr.Group(visible=False) as xml_options:
                    xml_pretty = gr.Checkbox(label="Pretty print", value=True)
                    xml_indent = gr.Textbox(label="XML indent", value="  ")
                    xml_header = gr.Checkbox(label="XML header", value=True)

                with gr.Group(visible=False) as csv_options:
                    csv_delimiter = gr.Textbox(label="Delimiter (use \\t for tab)", value=",")
                    csv_header = gr.Checkbox(label="Header row", value=True)
                    csv_flatten = gr.Checkbox(label="Flatten nested objects", value=True)

                convert_btn = gr.Button("Convert", variant="primary")

            with gr.Column(scale=1):
                gr.Markdown("### 2. Result")
                convert_output = gr.Textbox(label="Output", lines=20, interactive=False)
                convert_status = gr.Textbox(label="Status", interactive=False)
                convert_filename = gr.Textbox(label="Output Filename (optional)", placeholder="converted")
                export_btn = gr.Button("Export Result")
                convert_download = gr.File(label="Download Result")

        conversion_type.change(
            fn=toggle_options_handler,
            inputs=[conversion_type],
            outputs=[xml_options, csv_options],
        )

        convert_btn.click(
            fn=convert_handler,
            inputs=[
                convert_input,
                conversion_type,
                indent_selector,
                xml_pretty,
                xml_indent,
                xml_header,
                csv_delimiter,
                csv_header,
                csv_flatten,
            ],
            outputs=[convert_output, convert_status],
        )

        export_btn.click(
            fn=export_conversion_handler,
            inputs=[convert_output, conversion_type, convert_filename],
            outputs=[convert_download, convert_status],
        )

    with gr.Tab("Validate"):
        with gr.Row():
            with gr.Column():
                validate_data_input = gr.Textbox(label="JSON Data", lines=16)
            with gr.Column():
                validate_schema_input = gr.Textbox(label="JSON Schema", lines=16)

        with gr.Row():
            load_template_btn = gr.Button("Load Sample Schema")
            validate_btn = gr.Button("Validate", variant="primary")

        validate_status = gr.Textbox(label="Result", interactive=False)
        validate_errors = gr.Dataframe(
            headers=["Path", "Keyword", "Message"],
            datatype=["str", "str", "str"],
            col_count=(3, "fixed"),
            interactive=False,
            label="Errors",
        )
        validate_details = gr.JSON(label="Error Details")

        load_template_btn.click(
            fn=load_schema_template_handler,
            inputs=[],
            outputs=[validate_data_input, validate_schema_input, validate_status],
        )

        validate_btn.click(
            fn=validate_handler,
            inputs=[validate_data_input, validate_schema_input],
            outputs=[validate_status, validate_errors, validate_details],
        )

if __name__ == "__main__":
    setup_logging()
    demo.launch(server_name=settings.server_name, server_port=settings.server_port)
