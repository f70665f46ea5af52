"""QSS stylesheet and phase colours for the Airbike timer."""

from __future__ import annotations

from ..timer.state import Phase

# ── phase label colours ──────────────────────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.PREPARATION: "#FACC15",   # yellow
    Phase.WORK:        "#EEF3FB",   # near white
    Phase.REST:        "#4ADE80",   # green
}

PALETTE: dict[str, str] = {
    "bg":           "#0B1220",
    "bg_secondary": "#16213A",
    "accent":       "#3D5FC4",   # smalt
    "accent2":      "#5B7CDB",
    "text":         "#EEF3FB",
    "text_muted":   "#7C8BB0",
    "success":      "#15803D",
    "warning":      "#F97316",
    "danger":       "#F38BA8",
    "border":       "#243257",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Be Vietnam Pro", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        border: none;
        font-size: 20px;
        padding: 18px 44px;
        border-radius: 30px;
        font-weight: 800;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
    }}

    QLabel#timeLabel {{
        color: {p['accent']};
        font-size: 96px;
        font-weight: 900;
    }}

    QLabel#roundLabel {{
        color: {p['text_muted']};
        font-size: 20px;
        font-weight: 600;
    }}

    QLabel#accelerationLabel {{
        color: {p['warning']};
        font-size: 26px;
        font-weight: 800;
    }}

    QFrame#completedBanner {{
        background-color: {p['success']};
        border-radius: 12px;
    }}

    QLineEdit, QSpinBox {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 10px;
    }}

    QLineEdit:focus, QSpinBox:focus {{
        border-color: {p['accent']};
    }}

    QStatusBar {{
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
