from __future__ import annotations

import logging

from nicegui import ui
from nicegui.events import UploadEventArguments, ValueChangeEventArguments

from ..domain.errors import ImportBotError
from ..domain.schema_defs import IDENTIFYING_FIELD, label_for
from .components import base_card
from .constants import default_output_base
from .controller import UiController
from .logging_bridge import attach_ui_log_handler
from .render import ProgressModel, field_options, mapping_rows, preview_model, report_lines
from .theme import inject_theme


def build_main_view(controller: UiController) -> None:
    inject_theme()

    # Header
    with ui.row().classes("items-center gap-4 mb-6"):
        ui.icon("upload_file", size="3rem").classes("text-blue-700")
        ui.label("Import Bot").classes("text-5xl font-bold text-gray-800")

    ui.markdown("**Import prospects and contacts from a CSV file**").classes(
        "text-lg text-gray-600 mb-8"
    )

    out_base = default_output_base()
    out_base.mkdir(parents=True, exist_ok=True)

    # Upload
    with base_card("1. Upload CSV", "UTF-8, comma or semicolon separated"):
        file_label = ui.label("No file selected").classes("text-sm text-gray-500")
        upload = ui.upload(
            label="Choose .csv file", auto_upload=True, multiple=False
        ).props("accept=.csv,text/csv").classes("w-full")

    # Preview
    preview_card = base_card("2. Preview", f"First {controller.cfg.preview_rows} rows")
    with preview_card:
        preview_area = ui.column().classes("w-full")
    preview_card.set_visibility(False)

    # Mapping
    mapping_card = base_card("3. Map columns", f"{label_for(IDENTIFYING_FIELD)} is required")
    with mapping_card:
        mapping_area = ui.column().classes("w-full gap-1")
        mapping_hint = ui.label("").classes("text-sm text-orange-600")
    mapping_card.set_visibility(False)

    # Run + progress
    run_button = ui.button("▶ Start import").classes(
        "bg-blue-600 hover:bg-blue-700 text-white px-8 py-4 text-lg font-semibold rounded-lg shadow-lg w-full mb-2"
    )
    run_button.disable()
    progress_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-full")
    progress_label = ui.label("").classes("text-sm text-gray-600")
    progress_bar.set_visibility(False)

    # Report
    report_card = base_card("4. Report")
    with report_card:
        report_area = ui.column().classes("w-full")
        with ui.row().classes("gap-2"):
            export_button = ui.button("📊 Export created records")
            reset_button = ui.button("↺ Import another file")
    report_card.set_visibility(False)

    # Live log
    with ui.expansion("Log", icon="list").classes("w-full max-w-3xl"):
        log_view = ui.log(max_lines=200).classes("w-full h-48")
    buf = attach_ui_log_handler(logging.getLogger("importbot"))
    buf.on_append = log_view.push

    def refresh_mapping() -> None:
        mapping = controller.session.mapping
        mapping_area.clear()
        if mapping is None:
            return
        options = field_options()
        with mapping_area:
            for row in mapping_rows(mapping):
                with ui.row().classes("items-center gap-2 w-full"):
                    ui.label(row.header or f"(column {row.col + 1})").classes("w-1/3 truncate")
                    ui.label("→")
                    ui.select(
                        options=options,
                        value=row.field_path,
                        on_change=lambda e, c=row.col: on_mapping_change(c, e),
                    ).classes("w-1/2")
                    if row.overridden:
                        ui.icon("edit", size="1rem").classes("ib-subtle").tooltip("Set manually")
        if controller.can_start():
            mapping_hint.text = ""
            run_button.enable()
        else:
            mapping_hint.text = f"Map a column to '{label_for(IDENTIFYING_FIELD)}' to continue"
            run_button.disable()

    def on_mapping_change(col: int, e: ValueChangeEventArguments) -> None:
        try:
            controller.set_override(col, e.value or "")
        except ImportBotError as exc:
            ui.notify(str(exc), type="warning")
        refresh_mapping()

    def on_upload(e: UploadEventArguments) -> None:
        data = e.content.read() if hasattr(e.content, "read") else e.content
        try:
            table = controller.load_upload(e.name, data)
        except ImportBotError as exc:
            ui.notify(str(exc), type="negative")
            return
        file_label.text = f"✓ {table.name} ({table.data_rows} rows, separator '{table.separator}')"
        file_label.classes("text-sm text-green-600")

        model = preview_model(table.rows, controller.cfg.preview_rows)
        preview_area.clear()
        with preview_area:
            columns = [
                {"name": str(i), "label": h, "field": str(i), "align": "left"}
                for i, h in enumerate(model.headers)
            ]
            rows = [{str(i): v for i, v in enumerate(r)} for r in model.rows]
            ui.table(columns=columns, rows=rows).classes("w-full")
            ui.label(model.hint).classes("text-xs text-gray-500")
        preview_card.set_visibility(True)
        mapping_card.set_visibility(True)
        report_card.set_visibility(False)
        refresh_mapping()

    upload.on_upload(on_upload)

    def on_progress(done: int, total: int) -> None:
        model = ProgressModel(done, total)
        progress_bar.value = model.fraction
        progress_label.text = model.status

    async def do_run() -> None:
        run_button.disable()
        upload.disable()
        progress_bar.set_visibility(True)
        on_progress(0, controller.session.table.data_rows if controller.session.table else 0)

        result = await controller.run_import(on_progress)

        upload.enable()
        report_area.clear()
        with report_area:
            if result.error:
                ui.label(f"❌ Import failed: {result.error}").classes("text-red-600")
            elif result.report is not None:
                for line in report_lines(result.report):
                    ui.label(line).classes("text-lg")
                if result.report.errors:
                    with ui.expansion(f"Errors ({len(result.report.errors)})").classes("w-full"):
                        for err in result.report.errors:
                            ui.label(err).classes("text-sm text-red-700")
        report_card.set_visibility(True)
        refresh_mapping()

    def do_export() -> None:
        path = controller.export_records(out_base)
        if path is not None:
            ui.notify(f"Wrote {path}", type="positive")

    def do_reset() -> None:
        try:
            controller.reset()
        except ImportBotError as exc:
            ui.notify(str(exc), type="warning")
            return
        upload.reset()
        file_label.text = "No file selected"
        file_label.classes("text-sm text-gray-500")
        for card in (preview_card, mapping_card, report_card):
            card.set_visibility(False)
        progress_bar.set_visibility(False)
        progress_label.text = ""
        run_button.disable()

    run_button.on_click(do_run)
    export_button.on_click(do_export)
    reset_button.on_click(do_reset)

    # Footer
    ui.separator().classes("my-6")
    ui.label(f"Output directory: {out_base}").classes("text-xs text-gray-500")
