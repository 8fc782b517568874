# desktop_app.py

import argparse
import logging
import queue
import threading
from typing import Any, Dict, List, Optional

import flet as ft

from itinerary_planner.agent.prompts import TRIP_TYPE_LABELS, format_budget, trip_type_label
from itinerary_planner.config import PLANNER_HEADLESS, PLANNER_TOAST_DURATION_MS
from itinerary_planner.core.exceptions import FormValidationError
from itinerary_planner.core.form_state import (
    DEFAULT_DAYS,
    FIELD_NAMES,
    MAX_DAYS,
    MIN_DAYS,
    FormStateController,
    TripRequest,
)
from itinerary_planner.core.generation_client import ItineraryGenerationClient
from itinerary_planner.core.notifications import NotificationQueue, ToastEntry
from itinerary_planner.core.submission import SubmissionController
from itinerary_planner.ui.messages import (
    RequestMessage,
    ResponseMessage,
    ResponseType,
)
from itinerary_planner.ui.theme import EXPRESSIVE_PALETTE, TYPE_SCALE, card_gradient, floating_shadow
from itinerary_planner.ui.toast import ToastStack
from itinerary_planner.ui.worker import ItineraryWorker


def _ensure_console_logging() -> None:
    """Ensure root logger always streams to console so exceptions are visible."""
    root_logger = logging.getLogger()
    formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    stream_handler_exists = False
    for handler in root_logger.handlers:
        if isinstance(handler, logging.StreamHandler):
            if handler.formatter is None:
                handler.setFormatter(formatter)
            stream_handler_exists = True
            break
    if not stream_handler_exists:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.INFO)


_ensure_console_logging()

FORM_TAB_INDEX = 0
ITINERARY_TAB_INDEX = 1

COPY_TOAST_TITLE = "Itinerary copied!"
COPY_TOAST_DESCRIPTION = "The itinerary was copied to the clipboard."
SUBMIT_BUTTON_TEXT = "Generate Itinerary"
SUBMIT_BUTTON_BUSY_TEXT = "Generating itinerary..."

FORM_FIELD_DEFINITIONS: List[Dict[str, Any]] = [
    {"name": "destination", "label": "Destination", "placeholder": "e.g. Paris, France", "required": True},
    {"name": "days", "label": "Number of days", "type": "slider"},
    {"name": "tripType", "label": "Trip type", "type": "select", "placeholder": "Select the trip type"},
    {"name": "interests", "label": "Interests", "placeholder": "e.g. museums, beach, hiking"},
    {"name": "budget", "label": "Total budget", "placeholder": "e.g. 1000", "keyboard": "number"},
]


def format_trip_details(request: TripRequest) -> List[str]:
    return [
        f"Destination: {request.destination}",
        f"Duration: {request.days} days",
        f"Trip type: {trip_type_label(request.trip_type)}",
        f"Interests: {request.interests or '-'}",
        f"Budget: {format_budget(request.budget)} euros",
    ]


class PlannerApp:
    def __init__(self, page: ft.Page):
        logging.info("PlannerApp.__init__ started")
        self.page = page
        self.request_queue: "queue.Queue[RequestMessage]" = queue.Queue()
        self.response_queue: "queue.Queue[ResponseMessage]" = queue.Queue()
        self.worker_thread: Optional[threading.Thread] = None
        self.queue_thread: Optional[threading.Thread] = None
        self.ui_loop_running = True
        self.task_in_progress = False
        self._shutdown_lock = threading.Lock()
        self.shutdown_requested = False

        self.form = FormStateController()
        self.notifications = NotificationQueue(default_duration_ms=PLANNER_TOAST_DURATION_MS)
        self.controller = SubmissionController(ItineraryGenerationClient())
        self.worker = ItineraryWorker(self.request_queue, self.response_queue, self.controller)

        self.form_controls: Dict[str, ft.Control] = {}
        self.days_label: Optional[ft.Text] = None
        self.form_error_text: Optional[ft.Container] = None
        self.status_label: Optional[ft.Text] = None
        self._form_submit_button: Optional[ft.ElevatedButton] = None
        self._form_progress_indicator: Optional[ft.ProgressRing] = None
        self.tabs: Optional[ft.Tabs] = None
        self._itinerary_tab: Optional[ft.Tab] = None
        self._trip_details_column: Optional[ft.Column] = None
        self._itinerary_text: Optional[ft.Text] = None
        self._toast_stack: Optional[ToastStack] = None
        self.itinerary: str = ""
        self.trip_details: Optional[TripRequest] = None

        self._configure_page()
        self._build_layout()
        self._register_window_handlers()
        self.notifications.add_listener(self._render_toasts)
        logging.info("PlannerApp.__init__ completed")

    def mount(self):
        logging.info("Starting itinerary worker thread...")
        self.worker_thread = threading.Thread(target=self.worker.run, daemon=True)
        self.worker_thread.start()
        self.queue_thread = threading.Thread(target=self._process_response_queue_loop, daemon=True)
        self.queue_thread.start()
        self._update_submit_button_state()
        self._update_ui()

    def _configure_page(self):
        self.page.title = "Travel Planning Assistant"
        self.page.window.width = 900
        self.page.window.height = 860
        self.page.window.min_width = 480
        self.page.window.min_height = 560
        self.page.bgcolor = EXPRESSIVE_PALETTE["surface"]
        self.page.padding = 24
        self.page.scroll = ft.ScrollMode.AUTO

    def _build_text_field(self, definition: Dict[str, Any]) -> ft.TextField:
        name = definition["name"]
        keyboard = ft.KeyboardType.NUMBER if definition.get("keyboard") == "number" else ft.KeyboardType.TEXT
        return ft.TextField(
            label=definition["label"],
            hint_text=definition.get("placeholder"),
            value=str(self.form.value(name)),
            keyboard_type=keyboard,
            border_radius=8,
            on_change=lambda e, field_name=name: self._handle_field_change(field_name, e.control.value),
        )

    def _build_form_panel(self) -> ft.Container:
        palette = EXPRESSIVE_PALETTE
        rows: List[ft.Control] = []
        for definition in FORM_FIELD_DEFINITIONS:
            name = definition["name"]
            field_type = definition.get("type", "text")
            if field_type == "slider":
                self.days_label = ft.Text(
                    f"{definition['label']} ({DEFAULT_DAYS})",
                    size=TYPE_SCALE["subtitle"]["size"],
                    weight=TYPE_SCALE["subtitle"]["weight"],
                    color=palette["on_surface"],
                )
                control: ft.Control = ft.Slider(
                    min=MIN_DAYS,
                    max=MAX_DAYS,
                    divisions=MAX_DAYS - MIN_DAYS,
                    value=self.form.value(name),
                    label="{value}",
                    on_change=lambda e: self._handle_field_change("days", e.control.value),
                )
                rows.append(ft.Column([self.days_label, control], spacing=4))
            elif field_type == "select":
                control = ft.Dropdown(
                    label=definition["label"],
                    hint_text=definition.get("placeholder"),
                    options=[ft.dropdown.Option(key=key, text=text) for key, text in TRIP_TYPE_LABELS.items()],
                    border_radius=8,
                    on_change=lambda e: self._handle_field_change("tripType", e.control.value or ""),
                )
                rows.append(control)
            else:
                control = self._build_text_field(definition)
                rows.append(control)
            self.form_controls[name] = control

        self.form_error_text = ft.Container(
            content=ft.Text("", color=palette["on_error_container"]),
            bgcolor=palette["error_container"],
            border=ft.border.all(1, palette["error"]),
            border_radius=8,
            padding=16,
            visible=False,
        )
        self._form_progress_indicator = ft.ProgressRing(width=18, height=18, stroke_width=2, visible=False)
        self._form_submit_button = ft.ElevatedButton(
            text=SUBMIT_BUTTON_TEXT,
            bgcolor=palette["primary"],
            color=palette["on_primary"],
            height=48,
            expand=True,
            on_click=self._submit_form,
        )
        self.status_label = ft.Text("", size=TYPE_SCALE["caption"]["size"], color=palette["on_surface_variant"])
        rows.append(ft.Row([self._form_progress_indicator, self._form_submit_button], spacing=12))
        rows.append(self.status_label)
        rows.append(self.form_error_text)
        return ft.Container(ft.Column(rows, spacing=18), padding=ft.padding.only(top=16))

    def _build_itinerary_panel(self) -> ft.Container:
        palette = EXPRESSIVE_PALETTE
        self._trip_details_column = ft.Column([], spacing=6)
        self._itinerary_text = ft.Text("", selectable=True, size=TYPE_SCALE["body"]["size"], color=palette["on_surface"])
        copy_button = ft.OutlinedButton("Copy", icon=ft.Icons.COPY, on_click=self._copy_itinerary)
        return ft.Container(
            ft.Column(
                [
                    ft.Text("Trip details:", size=TYPE_SCALE["title"]["size"], color=palette["primary"]),
                    self._trip_details_column,
                    ft.Row(
                        [ft.Text("Itinerary:", size=TYPE_SCALE["title"]["size"], color=palette["primary"]), copy_button],
                        alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
                    ),
                    ft.Container(
                        self._itinerary_text,
                        bgcolor=palette["primary_container"],
                        border_radius=12,
                        padding=24,
                    ),
                ],
                spacing=12,
            ),
            padding=ft.padding.only(top=16),
        )

    def _build_layout(self):
        palette = EXPRESSIVE_PALETTE
        self._itinerary_tab = ft.Tab(text="Itinerary", content=self._build_itinerary_panel())
        # Enabled once the first itinerary arrives.
        self._itinerary_tab.disabled = True
        self.tabs = ft.Tabs(
            selected_index=FORM_TAB_INDEX,
            tabs=[ft.Tab(text="Form", content=self._build_form_panel()), self._itinerary_tab],
            expand=True,
        )
        header = ft.Column(
            [
                ft.Text(
                    "Travel Planning Assistant",
                    size=TYPE_SCALE["hero"]["size"],
                    weight=TYPE_SCALE["hero"]["weight"],
                    color=palette["on_primary_container"],
                ),
                ft.Text(
                    "Fill in your trip details to generate a personalised itinerary.",
                    size=TYPE_SCALE["body"]["size"],
                    color=palette["on_surface_variant"],
                ),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        )
        card = ft.Container(
            ft.Column([header, self.tabs], spacing=16),
            gradient=card_gradient(),
            border_radius=16,
            padding=24,
            shadow=floating_shadow("lg"),
            width=760,
        )
        self.page.add(ft.Row([card], alignment=ft.MainAxisAlignment.CENTER))

        self._toast_stack = ToastStack()
        self.page.overlay.append(ft.Container(self._toast_stack, right=16, bottom=16))

    def _register_window_handlers(self):
        self.page.window.on_event = self._on_window_event
        self.page.on_disconnect = self._on_page_disconnect

    def _handle_field_change(self, field_name: str, value: Any) -> None:
        error = self.form.set_field(field_name, value)
        if field_name == "days" and self.days_label is not None:
            label = f"Number of days ({self.form.value('days')})"
            self.days_label.value = f"{label}: {error}" if error else label
        self._apply_field_error(field_name, error)
        self._update_submit_button_state()
        self._update_ui()

    def _apply_field_error(self, field_name: str, error: str) -> None:
        control = self.form_controls.get(field_name)
        if control is not None and hasattr(control, "error_text"):
            control.error_text = error or None

    def _set_form_error(self, message: str) -> None:
        if not self.form_error_text:
            return
        self.form_error_text.content.value = message
        self.form_error_text.visible = bool(message)

    def _update_submit_button_state(self) -> None:
        button = self._form_submit_button
        busy = self.task_in_progress or self.controller.is_loading
        if button is not None:
            button.disabled = busy or not self.form.is_submittable()
            button.text = SUBMIT_BUTTON_BUSY_TEXT if busy else SUBMIT_BUTTON_TEXT
        if self._form_progress_indicator is not None:
            self._form_progress_indicator.visible = busy

    def _submit_form(self, e: Optional[ft.ControlEvent]):
        if self.task_in_progress or self.controller.is_loading:
            return
        try:
            request = self.form.build_request()
        except FormValidationError as exc:
            for name in FIELD_NAMES:
                self._apply_field_error(name, exc.errors.get(name, ""))
            self._update_submit_button_state()
            self._update_ui()
            return

        self._set_form_error("")
        self.task_in_progress = True
        self._update_submit_button_state()
        self.request_queue.put(RequestMessage.generate(request))
        self._update_ui()

    def _process_response_queue_loop(self):
        logging.info("Response queue loop started.")
        while self.ui_loop_running:
            try:
                raw_message = self.response_queue.get(timeout=0.1)
            except queue.Empty:
                continue

            if not isinstance(raw_message, ResponseMessage):
                logging.error("Ignoring unexpected worker response: %r", raw_message)
                continue
            self._display_response(raw_message)

    def _display_response(self, response: ResponseMessage):
        if response.type is ResponseType.SHUTDOWN_COMPLETE:
            self.ui_loop_running = False
            return
        if response.type is ResponseType.STATUS:
            if self.status_label:
                self.status_label.value = response.content
        elif response.type is ResponseType.ITINERARY:
            self._show_itinerary(response.content, response.trip_request)
        elif response.type is ResponseType.ERROR:
            self._set_form_error(response.content)
            self.itinerary = ""
            if self._itinerary_tab is not None:
                self._itinerary_tab.disabled = True
        elif response.type is ResponseType.END_OF_TASK:
            self.task_in_progress = False
            if self.status_label:
                self.status_label.value = ""
            self._update_submit_button_state()
        self._update_ui()

    def _show_itinerary(self, itinerary_text: str, trip_request: Optional[TripRequest]) -> None:
        self.itinerary = itinerary_text
        self.trip_details = trip_request
        if self._itinerary_text is not None:
            self._itinerary_text.value = itinerary_text
        if self._trip_details_column is not None and self.trip_details is not None:
            self._trip_details_column.controls = [
                ft.Text(f"• {line}", color=EXPRESSIVE_PALETTE["on_surface"])
                for line in format_trip_details(self.trip_details)
            ]
        if self._itinerary_tab is not None:
            self._itinerary_tab.disabled = not itinerary_text
        if self.tabs is not None:
            self.tabs.selected_index = ITINERARY_TAB_INDEX

    def _copy_itinerary(self, e: Optional[ft.ControlEvent]) -> None:
        if not self.itinerary:
            return
        setter = getattr(self.page, "set_clipboard", None)
        if not callable(setter):
            logging.warning("Clipboard is not available on this page.")
            return
        try:
            setter(self.itinerary)
        except Exception as copy_err:
            logging.error("Failed to copy itinerary: %s", copy_err)
            return
        self.notifications.enqueue(COPY_TOAST_TITLE, COPY_TOAST_DESCRIPTION)

    def _render_toasts(self, entries: List[ToastEntry]) -> None:
        if self._toast_stack is None:
            return
        self._toast_stack.render(entries)
        self._update_ui()

    def _update_ui(self):
        try:
            self.page.update()
        except Exception as e:
            logging.warning("Failed to update the UI: %s", e)

    def _shutdown(self, reason: str = "") -> None:
        with self._shutdown_lock:
            if self.shutdown_requested:
                return
            self.shutdown_requested = True
        logging.info("Shutting down planner (%s).", reason or "unknown")
        self.notifications.close()
        self.request_queue.put(RequestMessage.quit())

    def _on_window_event(self, e: ft.ControlEvent):
        if e.data == "close":
            self._shutdown(reason="window-close")

    def _on_page_disconnect(self, e: ft.ControlEvent):
        self._shutdown(reason="page-disconnect")


def main(page: ft.Page):
    app = PlannerApp(page)
    page.planner_app = app
    app.mount()


def _parse_cli_args():
    parser = argparse.ArgumentParser(description="Launch the travel planner Flet application.")
    parser.add_argument("--host", help="Host interface to bind the Flet web server.")
    parser.add_argument("--port", type=int, help="Port to bind the Flet web server.")
    parser.add_argument("--no-browser", action="store_true", help="Run without launching the bundled Flet viewer.")
    parser.add_argument("--web", action="store_true", help="Open the app in a web browser instead of a window.")
    return parser.parse_args()


if __name__ == "__main__":
    args = _parse_cli_args()
    app_kwargs = dict(target=main)
    if args.host:
        app_kwargs["host"] = args.host
    if args.port:
        app_kwargs["port"] = args.port
    if args.no_browser or PLANNER_HEADLESS:
        app_kwargs["view"] = None
    elif args.web:
        app_kwargs["view"] = ft.AppView.WEB_BROWSER
    ft.app(**app_kwargs)
