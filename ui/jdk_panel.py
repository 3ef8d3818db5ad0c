"""
ui/jdk_panel.py
===============
Textual screen for picking the active JDK.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Label

from errors import JdkPulseError
from jdk_manager import JdkManager, Result
from jdk_sources import JdkRecord

logger = logging.getLogger(__name__)

JENV_DEFAULT_KEY = "jenv-default"
ERROR_KEY = "error"


class JdkScreen(Screen):
    """JDK selection screen."""

    DEFAULT_CSS = """
    JdkScreen .panel { padding: 1 2; }
    JdkScreen .panel-title { text-style: bold; margin-bottom: 1; }
    JdkScreen #jdk-table { height: 1fr; }
    JdkScreen #jdk-actions { height: auto; margin-top: 1; }
    """

    BINDINGS = [
        ("r", "refresh", "Refresh"),
        ("q", "app.quit", "Quit"),
    ]

    def __init__(self, manager: JdkManager) -> None:
        super().__init__()
        self.manager = manager
        # Row keys are positional; two sources may report the same id
        self._rows: Dict[str, JdkRecord] = {}

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Vertical(classes="panel"):
            yield Label("☕  Installed JDKs", classes="panel-title")
            yield Label("", id="active-jdk-label")
            yield DataTable(id="jdk-table", cursor_type="row")

            with Horizontal(id="jdk-actions"):
                yield Button("✓ Set Active", id="btn-set-active", variant="success")
                yield Button("↻ Refresh", id="btn-refresh", variant="primary")

        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#jdk-table", DataTable)
        table.add_columns("", "JDK", "ID", "Home")
        self._refresh_table()

    # ── Table ──────────────────────────────────

    def _refresh_table(self) -> None:
        table = self.query_one("#jdk-table", DataTable)
        table.clear()
        self._rows.clear()

        try:
            jdks = self.manager.list()
            active = self.manager.get_active()
        except JdkPulseError as exc:
            logger.error("Error loading JDKs: %s", exc)
            table.add_row("", "Error loading JDKs", "", "", key=ERROR_KEY)
            self._show_active(None, error=str(exc))
            return

        if self.manager.uses_jenv_default():
            table.add_row("", "Use jenv default", "", "", key=JENV_DEFAULT_KEY)

        for index, jdk in enumerate(jdks):
            key = f"row-{index}"
            self._rows[key] = jdk
            mark = "✓" if self.manager.is_active(jdk, active) else ""
            table.add_row(mark, self.manager.label_for(jdk), jdk.id, jdk.home, key=key)

        self._show_active(active)

    def _show_active(self, active: Optional[JdkRecord], error: Optional[str] = None) -> None:
        label = self.query_one("#active-jdk-label", Label)
        if error:
            label.update(Text(error, style="red"))
        elif active:
            label.update(Text(f"Active: {self.manager.label_for(active)} at {active.home}"))
        else:
            label.update("Active: None")
        self.app.sub_title = self.manager.status_text(active)

    # ── Events ─────────────────────────────────

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self._select(event.row_key.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "btn-refresh":
            self.action_refresh()
        elif event.button.id == "btn-set-active":
            table = self.query_one("#jdk-table", DataTable)
            if table.row_count == 0:
                return
            row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
            self._select(row_key.value)

    def action_refresh(self) -> None:
        self._refresh_table()
        self.notify(f"Found {len(self._rows)} JDK(s)")

    def _select(self, key: Optional[str]) -> None:
        if key is None or key == ERROR_KEY:
            return

        if key == JENV_DEFAULT_KEY:
            result = self.manager.activate_jenv_default()
        else:
            jdk = self._rows.get(key)
            if jdk is None:
                return
            result = self.manager.activate(jdk.home)

        self._report(result)
        self._refresh_table()

    def _report(self, result: Result) -> None:
        if result.success:
            self.notify(result.message)
        elif result.error:
            self.notify(f"{result.message}: {result.error}", severity="error")
        else:
            self.notify(result.message, severity="error")
