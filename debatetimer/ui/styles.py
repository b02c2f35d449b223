"""QSS stylesheets for the timer screen.

The screen has exactly two looks: black (normal) and white (flashing).
Text colour inverts with the background so the time stays readable
through a flash.
"""

from __future__ import annotations

# ── palettes ────────────────────────────────────────────────────────────

DARK_PALETTE: dict[str, str] = {
    "bg":        "#000000",
    "text":      "#FFFFFF",
    "muted":     "#808080",
    "start":     "#0A84FF",   # system blue
    "stop":      "#FF3B30",   # system red
    "border":    "#3A3A3C",
}

FLASH_PALETTE: dict[str, str] = {
    **DARK_PALETTE,
    "bg":     "#FFFFFF",
    "text":   "#000000",
    "border": "#D1D1D6",
}


def get_palette(lit: bool) -> dict[str, str]:
    return dict(FLASH_PALETTE if lit else DARK_PALETTE)


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-size: 16px;
    }}

    QLabel#timeLabel {{
        font-size: 64px;
        font-weight: 700;
    }}

    /* ── start / stop ────────────────────────────── */
    QPushButton#startButton, QPushButton#stopButton {{
        color: #FFFFFF;
        border: none;
        border-radius: 20px;
        padding: 16px 40px;
        font-size: 20px;
        font-weight: 700;
    }}

    QPushButton#startButton {{
        background-color: {p['start']};
    }}

    QPushButton#stopButton {{
        background-color: {p['stop']};
    }}

    /* ── test alert ──────────────────────────────── */
    QPushButton#testButton {{
        background-color: transparent;
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 8px 16px;
    }}

    QPushButton#testButton:disabled {{
        color: {p['muted']};
    }}

    /* ── pickers ─────────────────────────────────── */
    QComboBox {{
        background-color: {p['bg']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 4px 10px;
    }}
    """
