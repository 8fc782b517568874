"""Flet rendering for the notification queue."""

from typing import List

import flet as ft

from itinerary_planner.core.notifications import ToastEntry

from .theme import EXPRESSIVE_PALETTE, TYPE_SCALE, floating_shadow, glass_border

_MAX_TOAST_WIDTH = 360


class ToastCard(ft.Container):
    """A single toast; it only reads the entry and never removes it."""

    def __init__(self, entry: ToastEntry):
        palette = EXPRESSIVE_PALETTE
        controls: List[ft.Control] = [
            ft.Text(
                entry.title,
                size=TYPE_SCALE["subtitle"]["size"],
                weight=TYPE_SCALE["subtitle"]["weight"],
                color=palette["on_surface"],
            )
        ]
        if entry.description:
            controls.append(
                ft.Text(
                    entry.description,
                    size=TYPE_SCALE["caption"]["size"],
                    color=palette["on_surface_variant"],
                )
            )
        super().__init__(
            content=ft.Column(controls, spacing=4, tight=True),
            bgcolor=palette["surface"],
            border=glass_border(0.6),
            border_radius=12,
            padding=ft.Padding(16, 12, 16, 12),
            margin=ft.margin.only(bottom=8),
            shadow=floating_shadow("md"),
            width=_MAX_TOAST_WIDTH,
        )
        self.toast_id = entry.id


class ToastStack(ft.Column):
    """Bottom-right stack of active toasts, oldest on top."""

    def __init__(self):
        super().__init__(spacing=0, tight=True, horizontal_alignment=ft.CrossAxisAlignment.END)

    def render(self, entries: List[ToastEntry]) -> None:
        self.controls = [ToastCard(entry) for entry in entries]


__all__ = ["ToastCard", "ToastStack"]
