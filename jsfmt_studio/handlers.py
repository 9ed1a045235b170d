"""Gradio event handlers.

Each browser tab owns one `Workspace` (held in `gr.State`). Handlers mutate
it through the scheduler or explicit session actions and return component
updates in the order of `view_outputs` in `app.py`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import gradio as gr
import structlog

from .config import StudioSettings
from .dialects import SAMPLES, coerce_dialect, highlight_language
from .engine import FormatEngine, PrettierEngine
from .errors import ClipboardError, CopyFallbackError, StudioError
from .io_utils import check_paste, ensure_actionable_output, read_source_file, write_download
from .options import options_from_ui
from .rendering import diff_html, input_gutter, plain_gutter, status_text
from .scheduler import FormatScheduler
from .selection import Applied, AwaitingConfirmation, LanguageSelection
from .session import Session, ViewMode

logger = structlog.get_logger(__name__)

VIEW_OUTPUT_COUNT = 5

# Values written by the copy button's browser-side script.
COPY_OK = "ok"
COPY_FALLBACK_OK = "fallback-ok"
COPY_FALLBACK_FAILED = "fallback-failed"


@dataclass
class Workspace:
    session: Session
    scheduler: FormatScheduler
    selection: LanguageSelection
    settings: StudioSettings


def create_workspace(settings: StudioSettings, engine: Optional[FormatEngine] = None) -> Workspace:
    session = Session(options=settings.default_options)
    if engine is None:
        engine = PrettierEngine(settings.prettier_command, settings.engine_timeout_seconds)
    return Workspace(
        session=session,
        scheduler=FormatScheduler(session, engine, settings),
        selection=LanguageSelection(session.selection),
        settings=settings,
    )


def close_workspace(ws: Optional[Workspace]) -> None:
    if ws is not None:
        ws.scheduler.close()
        logger.debug("workspace_closed")


def _report(ws: Workspace, error: StudioError) -> None:
    logger.info("user_error", kind=error.kind, message=error.user_message)
    ws.session.notice = error.user_message


def render_view(ws: Workspace):
    """Updates for: input gutter, output code, output gutter, diff view, status."""
    session = ws.session
    plain = session.view_mode is ViewMode.PLAIN
    return (
        input_gutter(session),
        gr.update(
            value=session.output_text,
            language=highlight_language(session.effective_dialect),
            visible=plain,
        ),
        gr.update(value=plain_gutter(session.output_text), visible=plain),
        gr.update(value=diff_html(session.diff), visible=not plain),
        status_text(session),
    )


def skip_view():
    return tuple(gr.skip() for _ in range(VIEW_OUTPUT_COUNT))


async def on_input_change(ws: Workspace, text):
    text = text or ""
    if text == ws.session.input_text:
        return skip_view()
    ws.session.notice = ""
    applied = await ws.scheduler.on_edit(text)
    return render_view(ws) if applied else skip_view()


async def on_options_change(ws: Workspace, tab_width, print_width, trailing_comma, semicolons, single_quote):
    try:
        options = options_from_ui(tab_width, print_width, trailing_comma, semicolons, single_quote)
    except ValueError as error:
        ws.session.notice = str(error)
        return render_view(ws)
    if options == ws.session.options:
        return skip_view()
    applied = await ws.scheduler.on_options_change(options)
    return render_view(ws) if applied else skip_view()


async def on_format_click(ws: Workspace, text):
    ws.session.input_text = text or ""
    ws.session.notice = ""
    await ws.scheduler.format_now()
    return render_view(ws)


def _confirmation_hidden():
    return gr.update(visible=False), ""


async def on_language_request(ws: Workspace, requested):
    state = ws.selection.request(requested, has_input=bool(ws.session.input_text.strip()))
    if isinstance(state, AwaitingConfirmation):
        prompt = (
            f"Switch language from **{state.current.value}** to **{state.pending.value}**? "
            "The output will be reformatted."
        )
        return (gr.skip(), gr.update(visible=True), prompt, *skip_view())
    return await _apply_selection(ws, state)


def _no_pending_change(ws: Workspace) -> bool:
    return not isinstance(ws.selection.state, AwaitingConfirmation)


async def on_language_confirm(ws: Workspace):
    # A double click or a stale dialog can confirm twice.
    if _no_pending_change(ws):
        return (gr.skip(), gr.skip(), gr.skip(), *skip_view())
    return await _apply_selection(ws, ws.selection.confirm())


async def on_language_cancel(ws: Workspace):
    if _no_pending_change(ws):
        return (gr.skip(), gr.skip(), gr.skip(), *skip_view())
    state = ws.selection.cancel()
    ws.selection.reset()
    return (gr.update(value=state.current.value), *_confirmation_hidden(), *skip_view())


async def _apply_selection(ws: Workspace, state: Applied):
    ws.selection.reset()
    dialect = state.current
    ws.session.selection = dialect
    ws.session.notice = ""
    await ws.scheduler.format_now()
    return (gr.update(value=dialect.value), *_confirmation_hidden(), *render_view(ws))


async def on_upload(ws: Workspace, file_obj):
    try:
        text, dialect = read_source_file(file_obj, ws.settings.max_file_bytes)
    except StudioError as error:
        _report(ws, error)
        return (gr.skip(), gr.skip(), *render_view(ws))

    logger.info("file_loaded", dialect=dialect.value, chars=len(text))
    ws.session.input_text = text
    ws.session.selection = dialect
    ws.selection.adopt(dialect)
    ws.session.notice = ""
    await ws.scheduler.format_now()
    return (text, gr.update(value=dialect.value), *render_view(ws))


async def on_paste(ws: Workspace, pasted):
    try:
        text = check_paste(pasted, ws.settings.max_input_chars)
    except StudioError as error:
        _report(ws, error)
        return (gr.skip(), *render_view(ws))

    ws.session.input_text = text
    ws.session.notice = ""
    await ws.scheduler.format_now()
    return (text, *render_view(ws))


async def on_sample(ws: Workspace, sample_name):
    if not sample_name:
        return (gr.skip(), *skip_view())
    text = SAMPLES[coerce_dialect(sample_name)]
    ws.session.input_text = text
    ws.session.notice = ""
    await ws.scheduler.format_now()
    return (text, *render_view(ws))


async def on_view_mode(ws: Workspace, mode):
    ws.session.set_view_mode(ViewMode(str(mode).lower()))
    return render_view(ws)


async def on_clear(ws: Workspace):
    ws.scheduler.clear()
    return ("", *render_view(ws))


async def on_copy(ws: Workspace):
    """Validate the output; the browser script copies what this returns."""
    try:
        text = ensure_actionable_output(ws.session.output_text)
    except StudioError as error:
        _report(ws, error)
        return "", status_text(ws.session)
    return text, status_text(ws.session)


async def on_copy_result(ws: Workspace, result):
    if not result:
        return gr.skip()
    if result in (COPY_OK, COPY_FALLBACK_OK):
        ws.session.notice = "Copied to clipboard."
    elif result == COPY_FALLBACK_FAILED:
        _report(ws, CopyFallbackError("Copy failed; select the output and copy it manually."))
    else:
        _report(ws, ClipboardError("Could not write to the clipboard."))
    return status_text(ws.session)


async def on_download(ws: Workspace):
    try:
        path = write_download(ws.session.output_text, ws.session.effective_dialect)
    except StudioError as error:
        _report(ws, error)
        return gr.update(value=None, visible=False), status_text(ws.session)
    ws.session.notice = ""
    return gr.update(value=path, visible=True), status_text(ws.session)


async def poll_status(ws: Optional[Workspace]):
    if ws is None:
        return gr.skip()
    return status_text(ws.session)
