"""Main application window for JudoTimer."""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QApplication, QMainWindow, QMessageBox

from .audio.sounds import SoundManager
from .display import DisplayPolicy
from .settings import Settings, load_settings, save_settings
from .timer.engine import TimerEngine
from .timer.reducer import PhaseKind, RunStatus
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget


class JudoTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        sounds=None,
        display_policy: DisplayPolicy | None = None,
        scheduler=None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("JudoTimer")
        self.setMinimumSize(320, 320)

        # ── geometry save timer ───────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()

        # ── collaborators ─────────────────────────────────────────────
        self._sound_manager = sounds if sounds is not None else SoundManager(self)
        if isinstance(self._sound_manager, SoundManager):
            self._sound_manager.set_enabled(self._settings.sound_enabled)
            self._sound_manager.set_volume(self._settings.sound_volume)

        self._display_policy = display_policy or DisplayPolicy(
            self, enabled=self._settings.keep_screen_awake,
        )

        self._timer_engine = TimerEngine(
            self, sounds=self._sound_manager, scheduler=scheduler,
        )

        # ── UI ────────────────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._timer_engine, self)
        self.setCentralWidget(self._timer_widget)
        self.setStyleSheet(build_stylesheet())

        self._build_menu_bar()
        self._restore_geometry()
        if self._settings.always_on_top:
            self._apply_always_on_top(True)

        app = QApplication.instance()
        if app is not None:
            app.applicationStateChanged.connect(self._on_application_state)

    # ══════════════════════════════════════════════════════════════════
    #  ACCESSORS
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def display_policy(self) -> DisplayPolicy:
        return self._display_policy

    @property
    def settings(self) -> Settings:
        return self._settings

    # ══════════════════════════════════════════════════════════════════
    #  MENU BAR
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        # ── JudoTimer menu (About, Quit: macOS roles) ───────────────
        about_action = QAction("About JudoTimer", self)
        about_action.setMenuRole(QAction.MenuRole.AboutRole)
        about_action.triggered.connect(self._show_about)

        quit_action = QAction("Quit JudoTimer", self)
        quit_action.setMenuRole(QAction.MenuRole.QuitRole)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self._quit_with_confirm)

        app_menu = menu_bar.addMenu("JudoTimer")
        app_menu.addAction(about_action)
        app_menu.addAction(quit_action)

        # ── Timer menu ───────────────────────────────────────────────
        timer_menu = menu_bar.addMenu("Timer")
        for label, phase, key in (
            ("Randori", PhaseKind.WORK, "1"),
            ("Rest", PhaseKind.REST, "2"),
        ):
            action = QAction(label, self)
            action.setShortcut(QKeySequence(key))
            action.triggered.connect(
                lambda _checked=False, p=phase: self._timer_engine.select_phase(p)
            )
            timer_menu.addAction(action)

        timer_menu.addSeparator()

        skip_action = QAction("Skip to Next Phase", self)
        skip_action.setShortcut(QKeySequence(Qt.Key.Key_Right))
        skip_action.triggered.connect(self._on_skip)
        timer_menu.addAction(skip_action)

        # ── Sound menu ───────────────────────────────────────────────
        sound_menu = menu_bar.addMenu("Sound")
        self._sound_action = QAction("Beeps", self)
        self._sound_action.setCheckable(True)
        self._sound_action.setChecked(self._settings.sound_enabled)
        self._sound_action.triggered.connect(self._toggle_sound)
        sound_menu.addAction(self._sound_action)

        # ── View menu ────────────────────────────────────────────────
        view_menu = menu_bar.addMenu("View")

        self._aot_action = QAction("Always on Top", self)
        self._aot_action.setCheckable(True)
        self._aot_action.setChecked(self._settings.always_on_top)
        self._aot_action.triggered.connect(self._toggle_always_on_top)
        view_menu.addAction(self._aot_action)

        self._awake_action = QAction("Keep Screen Awake", self)
        self._awake_action.setCheckable(True)
        self._awake_action.setChecked(self._settings.keep_screen_awake)
        self._awake_action.triggered.connect(self._toggle_keep_awake)
        view_menu.addAction(self._awake_action)

    def _show_about(self) -> None:
        QMessageBox.about(
            self,
            "About JudoTimer",
            "<h3>JudoTimer</h3>"
            "<p>Randori interval timer: 3:30 on, 1:30 rest, "
            "with a countdown beep for the last three seconds.</p>",
        )

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS TOGGLES
    # ══════════════════════════════════════════════════════════════════

    def _toggle_sound(self) -> None:
        new_val = not self._settings.sound_enabled
        self._settings.sound_enabled = new_val
        save_settings(self._settings)
        self._sound_action.setChecked(new_val)
        if isinstance(self._sound_manager, SoundManager):
            self._sound_manager.set_enabled(new_val)

    def _toggle_keep_awake(self) -> None:
        new_val = not self._settings.keep_screen_awake
        self._settings.keep_screen_awake = new_val
        save_settings(self._settings)
        self._awake_action.setChecked(new_val)
        self._display_policy.set_enabled(new_val)
        if new_val and self.isVisible():
            self._display_policy.engage()

    def _toggle_always_on_top(self) -> None:
        new_val = not self._settings.always_on_top
        self._settings.always_on_top = new_val
        save_settings(self._settings)
        self._aot_action.setChecked(new_val)
        self._apply_always_on_top(new_val)

    def _apply_always_on_top(self, on_top: bool) -> None:
        """Apply or remove WindowStaysOnTopHint."""
        visible = self.isVisible()
        flags = self.windowFlags()
        if on_top:
            flags |= Qt.WindowType.WindowStaysOnTopHint
        else:
            flags &= ~Qt.WindowType.WindowStaysOnTopHint
        self.setWindowFlags(flags)
        if visible:
            self.show()  # setWindowFlags hides the window

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves: restart the 500ms timer on each move/resize."""
        if hasattr(self, "_geometry_save_timer"):
            self._geometry_save_timer.start()

    def _quit_with_confirm(self) -> None:
        """Quit, but ask first if a round is in progress."""
        if self._timer_engine.status in (
            RunStatus.PREPARING, RunStatus.RUNNING, RunStatus.PAUSED,
        ):
            reply = QMessageBox.question(
                self,
                "Quit JudoTimer?",
                "A round is in progress. Quit anyway?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            if reply != QMessageBox.StandardButton.Yes:
                return
        self.close()
        QApplication.quit()

    # ══════════════════════════════════════════════════════════════════
    #  KEYBOARD
    # ══════════════════════════════════════════════════════════════════

    def _on_space(self) -> None:
        """Start, pause, or resume the timer."""
        self._timer_engine.toggle()

    def _on_escape(self) -> None:
        """Reset the timer (no-op when idle)."""
        if self._timer_engine.status != RunStatus.IDLE:
            self._timer_engine.reset()

    def _on_skip(self) -> None:
        """Fast forward, ignored while preparing like the Skip button."""
        if self._timer_engine.status != RunStatus.PREPARING:
            self._timer_engine.fast_forward()

    def _on_application_state(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationActive and self.isVisible():
            self._display_policy.engage()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        self._display_policy.engage()
        if self._timer_engine.status == RunStatus.IDLE:
            self._timer_engine.reset()

    def hideEvent(self, event) -> None:  # type: ignore[override]
        super().hideEvent(event)
        self._display_policy.release()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._save_geometry()
        self._display_policy.release()
        self._timer_engine.shutdown()
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Handle Space (start/pause) and Escape (reset) globally."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            self._on_space()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._on_escape()
            event.accept()
            return
        super().keyPressEvent(event)
