"""QSS stylesheet and status colours for JudoTimer."""

from __future__ import annotations

from ..timer.reducer import RunStatus

# Time readout colour per status.
STATUS_COLORS: dict[RunStatus, str] = {
    RunStatus.IDLE:      "#FFFFFF",
    RunStatus.PREPARING: "#8E8E93",
    RunStatus.RUNNING:   "#FFFFFF",
    RunStatus.PAUSED:    "#8E8E93",
    RunStatus.FINISHED:  "#FFFFFF",
}

WARNING_COLOR = "#FFCC00"

PALETTE: dict[str, str] = {
    "bg":        "#000000",
    "surface":   "#3A3A3C",
    "accent":    "#0A84FF",
    "accent2":   "#409CFF",
    "text":      "#FFFFFF",
    "text_muted": "#CCCCCC",
    "disabled":  "#636366",
}


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QLabel#phaseLabel {{
        color: {p['text_muted']};
        font-weight: 700;
    }}

    QLabel#timeLabel {{
        font-weight: 700;
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['surface']};
        color: {p['text']};
        border: none;
        border-radius: 15px;
        padding: 12px 20px;
        font-size: 18px;
        font-weight: 600;
    }}

    QPushButton:disabled {{
        color: {p['disabled']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        border-radius: 20px;
        font-size: 24px;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#primaryButton:disabled {{
        background-color: {p['disabled']};
        color: {p['text_muted']};
    }}

    QPushButton#phaseButton {{
        background-color: transparent;
        color: {p['text_muted']};
        font-size: 14px;
        padding: 6px 14px;
    }}

    QPushButton#phaseButton:checked {{
        color: {p['text']};
        background-color: {p['surface']};
    }}
    """
