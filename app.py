import os
from functools import partial

import gradio as gr

from jsfmt_studio import handlers
from jsfmt_studio.config import load_settings
from jsfmt_studio.dialects import EFFECTIVE_DIALECTS, EXTENSION_DIALECTS, Dialect
from jsfmt_studio.logging import configure_logging
from jsfmt_studio.options import PRINT_WIDTH_MAX, PRINT_WIDTH_MIN, TAB_WIDTHS, TRAILING_COMMAS
from jsfmt_studio.rendering import DIFF_CSS

settings = load_settings()
defaults = settings.default_options

READ_CLIPBOARD_JS = """
async () => {
  if (!navigator.clipboard || !navigator.clipboard.readText) { return null; }
  try { return await navigator.clipboard.readText(); }
  catch (e) { return "\\u0000clipboard-read-failed"; }
}
"""

WRITE_CLIPBOARD_JS = """
async (text) => {
  if (!text) { return ""; }
  if (navigator.clipboard && navigator.clipboard.writeText) {
    try { await navigator.clipboard.writeText(text); return "ok"; } catch (e) {}
  }
  try {
    const area = document.createElement("textarea");
    area.value = text;
    area.style.position = "fixed";
    area.style.opacity = "0";
    document.body.appendChild(area);
    area.select();
    const copied = document.execCommand("copy");
    document.body.removeChild(area);
    return copied ? "fallback-ok" : "fallback-failed";
  } catch (e) {
    return "fallback-failed";
  }
}
"""

# Ctrl (Cmd on macOS) + Enter / Shift+C / S click the matching buttons.
SHORTCUTS_HEAD = """
<script>
document.addEventListener("keydown", (event) => {
  const isMac = navigator.platform.toUpperCase().includes("MAC");
  if (!(isMac ? event.metaKey : event.ctrlKey)) { return; }
  let target = null;
  if (event.key === "Enter") { target = "jsfmt-format"; }
  else if (event.shiftKey && event.key.toLowerCase() === "c") { target = "jsfmt-copy"; }
  else if (!event.shiftKey && event.key.toLowerCase() === "s") { target = "jsfmt-download"; }
  const button = target && document.getElementById(target);
  if (button) { event.preventDefault(); button.click(); }
});
</script>
"""

# --- UI Definition ---
with gr.Blocks(title="JS Format Studio", css=DIFF_CSS, head=SHORTCUTS_HEAD) as demo:
    gr.Markdown("# JS Format Studio")
    gr.Markdown("Paste or upload JavaScript, JSX, TypeScript or TSX and reformat it with Prettier.")

    # State
    workspace = gr.State(value=None, delete_callback=handlers.close_workspace)
    paste_buffer = gr.Textbox(visible=False)
    copy_buffer = gr.Textbox(visible=False)
    copy_result = gr.Textbox(visible=False)

    with gr.Row():
        # Left Panel: Input
        with gr.Column(scale=1):
            gr.Markdown("### 1. Input")
            with gr.Row():
                language_dropdown = gr.Dropdown(
                    label="Language",
                    choices=[d.value for d in Dialect],
                    value=Dialect.AUTO.value,
                    interactive=True,
                )
                sample_dropdown = gr.Dropdown(
                    label="Load sample",
                    choices=[d.value for d in EFFECTIVE_DIALECTS],
                    value=None,
                    interactive=True,
                )
            with gr.Row(visible=False) as confirm_row:
                confirm_msg = gr.Markdown()
                confirm_btn = gr.Button("Switch", size="sm", variant="primary")
                cancel_btn = gr.Button("Keep current", size="sm")
            with gr.Row():
                input_gutter = gr.Textbox(
                    label="Line", value=" 1", lines=20, max_lines=20, interactive=False, scale=0, min_width=70
                )
                input_code = gr.Code(label="Source", language="javascript", interactive=True, lines=20, scale=1)
            file_input = gr.File(
                label="Upload source file",
                file_types=[f".{ext}" for ext in EXTENSION_DIALECTS],
                type="filepath",
            )
            with gr.Row():
                format_btn = gr.Button("Format", variant="primary", elem_id="jsfmt-format")
                paste_btn = gr.Button("Paste")
                clear_btn = gr.Button("Clear")

        # Right Panel: Output
        with gr.Column(scale=1):
            gr.Markdown("### 2. Output")
            view_mode = gr.Radio(choices=["plain", "diff"], value="plain", label="View")
            with gr.Row():
                output_gutter = gr.Textbox(
                    label="Line", value="", lines=20, max_lines=20, interactive=False, scale=0, min_width=70
                )
                output_code = gr.Code(label="Formatted", language="javascript", interactive=False, lines=20, scale=1)
            diff_view = gr.HTML(visible=False)
            status_msg = gr.Textbox(label="Status", value="Ready", interactive=False)
            with gr.Row():
                copy_btn = gr.Button("Copy", elem_id="jsfmt-copy")
                download_btn = gr.Button("Download", elem_id="jsfmt-download")
            download_output = gr.File(label="Download Result", visible=False)

    with gr.Accordion("3. Formatting options", open=False):
        with gr.Row():
            tab_width = gr.Radio(
                choices=[str(w) for w in TAB_WIDTHS], value=str(defaults.tab_width), label="Tab width"
            )
            print_width = gr.Slider(
                minimum=PRINT_WIDTH_MIN, maximum=PRINT_WIDTH_MAX, step=1,
                value=defaults.print_width, label="Print width",
            )
            trailing_comma = gr.Radio(
                choices=list(TRAILING_COMMAS), value=defaults.trailing_comma, label="Trailing commas"
            )
            semicolons = gr.Checkbox(value=defaults.semicolons, label="Semicolons")
            single_quote = gr.Checkbox(value=defaults.single_quote, label="Single quotes")

    status_timer = gr.Timer(0.5)

    view_outputs = [input_gutter, output_code, output_gutter, diff_view, status_msg]
    option_inputs = [tab_width, print_width, trailing_comma, semicolons, single_quote]

    demo.load(fn=partial(handlers.create_workspace, settings), outputs=[workspace])

    input_code.change(
        fn=handlers.on_input_change,
        inputs=[workspace, input_code],
        outputs=view_outputs,
        concurrency_limit=None,
        show_progress="hidden",
    )

    for component in option_inputs:
        component.change(
            fn=handlers.on_options_change,
            inputs=[workspace, *option_inputs],
            outputs=view_outputs,
            concurrency_limit=None,
            show_progress="hidden",
        )

    language_dropdown.input(
        fn=handlers.on_language_request,
        inputs=[workspace, language_dropdown],
        outputs=[language_dropdown, confirm_row, confirm_msg, *view_outputs],
    )
    confirm_btn.click(
        fn=handlers.on_language_confirm,
        inputs=[workspace],
        outputs=[language_dropdown, confirm_row, confirm_msg, *view_outputs],
    )
    cancel_btn.click(
        fn=handlers.on_language_cancel,
        inputs=[workspace],
        outputs=[language_dropdown, confirm_row, confirm_msg, *view_outputs],
    )

    format_btn.click(fn=handlers.on_format_click, inputs=[workspace, input_code], outputs=view_outputs)

    paste_btn.click(fn=None, inputs=None, outputs=[paste_buffer], js=READ_CLIPBOARD_JS).then(
        fn=handlers.on_paste,
        inputs=[workspace, paste_buffer],
        outputs=[input_code, *view_outputs],
    )

    file_input.upload(
        fn=handlers.on_upload,
        inputs=[workspace, file_input],
        outputs=[input_code, language_dropdown, *view_outputs],
    )

    sample_dropdown.input(
        fn=handlers.on_sample,
        inputs=[workspace, sample_dropdown],
        outputs=[input_code, *view_outputs],
    )

    view_mode.change(fn=handlers.on_view_mode, inputs=[workspace, view_mode], outputs=view_outputs)

    clear_btn.click(fn=handlers.on_clear, inputs=[workspace], outputs=[input_code, *view_outputs])

    copy_btn.click(fn=handlers.on_copy, inputs=[workspace], outputs=[copy_buffer, status_msg]).then(
        fn=None, inputs=[copy_buffer], outputs=[copy_result], js=WRITE_CLIPBOARD_JS
    ).then(
        fn=handlers.on_copy_result,
        inputs=[workspace, copy_result],
        outputs=[status_msg],
    )

    download_btn.click(fn=handlers.on_download, inputs=[workspace], outputs=[download_output, status_msg])

    status_timer.tick(fn=handlers.poll_status, inputs=[workspace], outputs=[status_msg], show_progress="hidden")

if __name__ == "__main__":
    configure_logging(
        json_mode=os.environ.get("JSFMT_STUDIO_LOG_JSON") == "1",
        verbosity=int(os.environ.get("JSFMT_STUDIO_VERBOSITY", "1")),
    )
    demo.launch()
