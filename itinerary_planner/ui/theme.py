"""Theme primitives for the trip planner desktop UI."""

from __future__ import annotations

import flet as ft


# Sky blues on a pale surface, with a warm accent for errors.
EXPRESSIVE_PALETTE: dict[str, str] = {
    "primary": "#1D4ED8",
    "on_primary": "#FFFFFF",
    "primary_container": "#DBEAFE",
    "on_primary_container": "#1E3A8A",
    "secondary": "#2563EB",
    "background": "#EFF6FF",
    "surface": "#FFFFFF",
    "surface_high": "#F8FAFF",
    "on_surface": "#1F2937",
    "on_surface_variant": "#4B5563",
    "outline": "#D1D5DB",
    "error": "#EF4444",
    "error_container": "#FEE2E2",
    "on_error_container": "#991B1B",
    "shadow": "#0F172A",
}


TYPE_SCALE: dict[str, dict[str, object]] = {
    "hero": {"size": 28, "weight": ft.FontWeight.W_700},
    "title": {"size": 20, "weight": ft.FontWeight.W_600},
    "subtitle": {"size": 16, "weight": ft.FontWeight.W_600},
    "body": {"size": 15, "weight": ft.FontWeight.W_400},
    "caption": {"size": 13, "weight": ft.FontWeight.W_400},
}


def floating_shadow(level: str = "md") -> ft.BoxShadow:
    """Soft drop shadow for cards and toasts."""

    levels = {
        "sm": {"y": 4, "blur": 14, "spread": 0, "opacity": 0.08},
        "md": {"y": 10, "blur": 28, "spread": 0, "opacity": 0.10},
        "lg": {"y": 22, "blur": 46, "spread": 2, "opacity": 0.12},
    }
    spec = levels.get(level, levels["md"])
    return ft.BoxShadow(
        spread_radius=spec["spread"],
        blur_radius=spec["blur"],
        color=ft.Colors.with_opacity(spec["opacity"], EXPRESSIVE_PALETTE["shadow"]),
        offset=ft.Offset(0, spec["y"]),
    )


def card_gradient() -> ft.LinearGradient:
    """Blue-to-white wash used behind the planner card."""

    return ft.LinearGradient(
        begin=ft.alignment.top_center,
        end=ft.alignment.bottom_center,
        colors=[
            EXPRESSIVE_PALETTE["background"],
            EXPRESSIVE_PALETTE["surface"],
        ],
    )


def glass_border(alpha: float = 0.32) -> ft.Border:
    alpha = max(0.0, min(alpha, 1.0))
    return ft.border.all(1, ft.Colors.with_opacity(alpha, EXPRESSIVE_PALETTE["outline"]))


__all__ = [
    "EXPRESSIVE_PALETTE",
    "TYPE_SCALE",
    "floating_shadow",
    "card_gradient",
    "glass_border",
]
