"""Main timer display widget.

Portrait (taller than wide), top → bottom:
    - Phase selector (Randori / Rest)
    - Phase label, big m:ss readout, warning indicator
    - Button row: reset · play/pause · fast forward

Landscape: the buttons stack vertically on the left third, the readout
takes the rest.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QBoxLayout, QButtonGroup, QHBoxLayout, QLabel, QPushButton,
    QSizePolicy, QVBoxLayout, QWidget,
)

from ..timer.engine import TimerEngine
from ..timer.reducer import PhaseKind, RunStatus, TimerState
from .styles import STATUS_COLORS, WARNING_COLOR


PLAY_LABELS: dict[RunStatus, str] = {
    RunStatus.IDLE:      "Start",
    RunStatus.PREPARING: "Get ready",
    RunStatus.RUNNING:   "Pause",
    RunStatus.PAUSED:    "Resume",
    RunStatus.FINISHED:  "Start",
}

WARNING_GLYPH = "⚠️"


def format_time(seconds: int) -> str:
    m, s = divmod(max(0, int(seconds)), 60)
    return f"{m}:{s:02d}"


class TimerWidget(QWidget):
    """Renders the engine state and forwards button presses to it."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._landscape = False
        self._time_colour = "#FFFFFF"
        self._font_px: dict[str, int] = {"time": 120, "phase": 36, "warning": 45}
        self._build_ui()
        self._connect_signals()
        self._render(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        self._root = QBoxLayout(QBoxLayout.Direction.TopToBottom, self)
        self._root.setContentsMargins(20, 20, 20, 20)
        self._root.setSpacing(20)

        # ── readout ──────────────────────────────────────────────────
        display = QWidget(self)
        display_layout = QVBoxLayout(display)
        display_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        display_layout.setSpacing(12)

        selector_row = QHBoxLayout()
        selector_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._phase_group = QButtonGroup(self)
        self._phase_group.setExclusive(True)
        self._phase_buttons: dict[PhaseKind, QPushButton] = {}
        for phase in PhaseKind:
            btn = QPushButton(phase.label, display)
            btn.setObjectName("phaseButton")
            btn.setCheckable(True)
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            self._phase_group.addButton(btn)
            self._phase_buttons[phase] = btn
            selector_row.addWidget(btn)
        display_layout.addLayout(selector_row)

        self._phase_label = QLabel(display)
        self._phase_label.setObjectName("phaseLabel")
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        display_layout.addWidget(self._phase_label)

        self._time_label = QLabel(display)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setSizePolicy(
            QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred,
        )
        display_layout.addWidget(self._time_label)

        self._warning_label = QLabel(WARNING_GLYPH, display)
        self._warning_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        # Keep the slot's height so the readout doesn't jump.
        policy = self._warning_label.sizePolicy()
        policy.setRetainSizeWhenHidden(True)
        self._warning_label.setSizePolicy(policy)
        display_layout.addWidget(self._warning_label)

        # ── controls ─────────────────────────────────────────────────
        controls = QWidget(self)
        self._controls_layout = QBoxLayout(
            QBoxLayout.Direction.LeftToRight, controls,
        )
        self._controls_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._controls_layout.setSpacing(24)

        self._reset_btn = QPushButton("Reset", controls)
        self._reset_btn.setToolTip("Back to the start of this phase (Esc)")

        self._play_btn = QPushButton("Start", controls)
        self._play_btn.setObjectName("primaryButton")
        self._play_btn.setToolTip("Start / pause (Space)")

        self._skip_btn = QPushButton("Skip", controls)
        self._skip_btn.setToolTip("Jump to the next phase (→)")

        for btn in (self._reset_btn, self._play_btn, self._skip_btn):
            # Space belongs to the window, not to a focused button.
            btn.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            self._controls_layout.addWidget(btn)

        self._display = display
        self._controls = controls
        self._root.addWidget(display, 1)
        self._root.addWidget(controls)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._reset_btn.clicked.connect(self._engine.reset)
        self._play_btn.clicked.connect(self._engine.toggle)
        self._skip_btn.clicked.connect(self._engine.fast_forward)
        for phase, btn in self._phase_buttons.items():
            btn.clicked.connect(
                lambda _checked=False, p=phase: self._engine.select_phase(p)
            )
        self._engine.state_changed.connect(self._render)

    # ── slots ─────────────────────────────────────────────────────────────

    def _render(self, state: TimerState) -> None:
        self._phase_label.setText(state.phase.label)
        self._time_label.setText(format_time(state.remaining))
        self._time_colour = STATUS_COLORS.get(state.status, "#FFFFFF")
        self._restyle_labels()
        self._warning_label.setVisible(state.show_warning)

        self._play_btn.setText(PLAY_LABELS[state.status])
        preparing = state.status == RunStatus.PREPARING
        self._play_btn.setEnabled(not preparing)
        self._skip_btn.setEnabled(not preparing)

        selectable = self._engine.can_select_phase
        for phase, btn in self._phase_buttons.items():
            btn.setEnabled(selectable)
            btn.setChecked(phase == state.phase)

    # ── orientation ───────────────────────────────────────────────────────

    @property
    def is_landscape(self) -> bool:
        return self._landscape

    def set_landscape(self, landscape: bool) -> None:
        """Rearrange for a wide (landscape) or tall (portrait) window."""
        self._landscape = landscape
        if landscape:
            # Controls first on the left, readout on the right.
            self._root.setDirection(QBoxLayout.Direction.RightToLeft)
            self._root.setStretchFactor(self._display, 65)
            self._root.setStretchFactor(self._controls, 35)
            self._controls_layout.setDirection(QBoxLayout.Direction.TopToBottom)
        else:
            self._root.setDirection(QBoxLayout.Direction.TopToBottom)
            self._root.setStretchFactor(self._display, 1)
            self._root.setStretchFactor(self._controls, 0)
            self._controls_layout.setDirection(QBoxLayout.Direction.LeftToRight)
        self._apply_font_sizes()

    def _apply_font_sizes(self) -> None:
        h = max(1, self.height())
        if self._landscape:
            time_px = min(int(h * 0.5), 300)
            label_px = min(int(h * 0.08), 64)
            warn_px = min(int(h * 0.15), 120)
        else:
            time_px = min(int(h * 0.2), 120)
            label_px = min(int(h * 0.04), 36)
            warn_px = min(int(h * 0.05), 45)
        self._font_px = {
            "time": max(8, time_px),
            "phase": max(8, label_px),
            "warning": max(8, warn_px),
        }
        self._restyle_labels()

    def _restyle_labels(self) -> None:
        # Per-widget QSS; the global stylesheet would override setFont().
        px = self._font_px
        self._time_label.setStyleSheet(
            f"color: {self._time_colour}; font-size: {px['time']}px;"
        )
        self._phase_label.setStyleSheet(f"font-size: {px['phase']}px;")
        self._warning_label.setStyleSheet(
            f"color: {WARNING_COLOR}; font-size: {px['warning']}px;"
        )

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        size = event.size()
        landscape = size.width() > size.height()
        if landscape != self._landscape:
            self.set_landscape(landscape)
        else:
            self._apply_font_sizes()
