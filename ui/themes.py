"""Theme definitions for the server graph card."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ThemeDefinition:
    """Palette configuration for one server card.

    Parameters
    ----------
    name:
        Human-friendly display name for the theme.
    card_background / card_border:
        Card fill and the hairline used for borders and separators.
    stylesheet:
        Widget stylesheet snippet tailored to this palette.
    series_color:
        Stroke and gradient colour for the player-count area.
    guide_color:
        Dashed hover guide and peak marker colour.
    tooltip_background / tooltip_title / tooltip_label / tooltip_value:
        Tooltip box fill and the colours of its text segments.
    """

    name: str
    card_background: str
    card_border: str
    stylesheet: str
    series_color: str
    guide_color: str
    tooltip_background: str
    tooltip_title: str
    tooltip_label: str
    tooltip_value: str


STYLESHEET_TEMPLATE = """
QFrame#serverCard {{
    background-color: {card_bg};
    border: 1px solid {card_border};
    border-radius: 8px;
}}
QFrame#cardHeader, QFrame#statsRow QFrame {{
    border: none;
    border-bottom: 1px solid {card_border};
}}
QLabel#serverName {{ color: {text_primary}; font-weight: 600; font-size: 14px; }}
QLabel#serverAddress {{ color: {text_muted}; font-size: 14px; }}
QLabel#statTitle {{ color: {text_secondary}; font-size: 14px; }}
QLabel#statValue {{ color: {text_muted}; font-size: 14px; }}
QToolButton#copyButton {{
    background-color: transparent;
    border: 1px solid {button_border};
    border-radius: 6px;
    padding: 8px;
    color: {text_secondary};
}}
QToolButton#copyButton:hover {{
    background-color: {card_border};
    border-color: {button_border_hover};
}}
QFrame#snackbar {{
    border-radius: 6px;
    padding: 6px 10px;
}}
QFrame#snackbar[kind="success"] {{ background-color: {success_bg}; }}
QFrame#snackbar[kind="error"] {{ background-color: {error_bg}; }}
QFrame#snackbar QLabel {{ color: {snackbar_text}; }}
"""


def _make_stylesheet(palette: dict[str, str]) -> str:
    return STYLESHEET_TEMPLATE.format(**palette)


DEFAULT_THEME = "Midnight"


THEMES: dict[str, ThemeDefinition] = {
    "Midnight": ThemeDefinition(
        name="Midnight",
        card_background="#0f0f10",
        card_border="#2f2f2f",
        stylesheet=_make_stylesheet(
            {
                "card_bg": "#0f0f10",
                "card_border": "#2f2f2f",
                "text_primary": "#d1d5db",
                "text_secondary": "#9ca3af",
                "text_muted": "#6b7280",
                "button_border": "#374151",
                "button_border_hover": "#6b7280",
                "success_bg": "#166534",
                "error_bg": "#991b1b",
                "snackbar_text": "#f9fafb",
            }
        ),
        series_color="#008000",
        guide_color="#808080",
        tooltip_background="#0f0f10",
        tooltip_title="#c6c6c6",
        tooltip_label="#808080",
        tooltip_value="#c6c6c6",
    ),
    "Daylight": ThemeDefinition(
        name="Daylight",
        card_background="#f8fafc",
        card_border="#d6dce5",
        stylesheet=_make_stylesheet(
            {
                "card_bg": "#f8fafc",
                "card_border": "#d6dce5",
                "text_primary": "#1f2933",
                "text_secondary": "#4b5563",
                "text_muted": "#6b7280",
                "button_border": "#cbd2dc",
                "button_border_hover": "#9aa5b1",
                "success_bg": "#2e7d32",
                "error_bg": "#c62828",
                "snackbar_text": "#ffffff",
            }
        ),
        series_color="#2e7d32",
        guide_color="#9aa5b1",
        tooltip_background="#ffffff",
        tooltip_title="#1f2933",
        tooltip_label="#6b7280",
        tooltip_value="#1f2933",
    ),
}


def resolve_theme(name: str | None) -> ThemeDefinition:
    if name and name in THEMES:
        return THEMES[name]
    if name:
        lowered = name.lower()
        for key, theme in THEMES.items():
            if key.lower() == lowered:
                return theme
    return THEMES[DEFAULT_THEME]
