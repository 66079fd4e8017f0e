"""Empty State Component & Registry

Surfaces the grid's three distinct empty states (no data source, no columns,
no matching rows) through a small template registry and a widget that
renders one template at a time.

Design Goals:
 - Central registry of templates (EmptyState -> title/description)
 - Simple widget (EmptyStateWidget) that renders a template and optional action
 - Testable: pure registry logic, widget only swaps label text
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from datagrid.models import EmptyState

__all__ = [
    "EmptyStateTemplate",
    "EmptyStateRegistry",
    "EmptyStateWidget",
]


@dataclass
class EmptyStateTemplate:
    """Template definition for a reusable empty state."""

    key: EmptyState
    title: str
    description: str
    action_text: Optional[str] = None


class EmptyStateRegistry:
    """Registry holding templates for grid empty states."""

    def __init__(self):
        self._templates: Dict[EmptyState, EmptyStateTemplate] = {}
        self._bootstrap_defaults()

    def _bootstrap_defaults(self):
        self.register(
            EmptyStateTemplate(
                key=EmptyState.NO_DATA_SOURCE,
                title="No data source provided",
                description="Load rows into the grid to display them here.",
            )
        )
        self.register(
            EmptyStateTemplate(
                key=EmptyState.NO_COLUMNS,
                title="No columns defined",
                description="Add at least one column definition to display rows.",
            )
        )
        self.register(
            EmptyStateTemplate(
                key=EmptyState.NO_MATCHES,
                title="No data available",
                description="No rows match the current search.",
                action_text="Clear search",
            )
        )

    def register(self, template: EmptyStateTemplate) -> None:
        self._templates[template.key] = template

    def get(self, key: EmptyState) -> Optional[EmptyStateTemplate]:
        return self._templates.get(key)


class EmptyStateWidget(QWidget):
    """Widget rendering the template for the current EmptyState.

    Signals:
        actionRequested: emitted with the state value when the action button is clicked.
    """

    actionRequested = pyqtSignal(str)

    def __init__(
        self, registry: Optional[EmptyStateRegistry] = None, parent: Optional[QWidget] = None
    ):
        super().__init__(parent)
        self._registry = registry or EmptyStateRegistry()
        self._state = EmptyState.NONE
        self._build_ui()
        self.hide()

    def _build_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 8, 0, 8)
        self.title_label = QLabel("")
        self.title_label.setObjectName("emptyStateTitle")
        layout.addWidget(self.title_label)
        self.desc_label = QLabel("")
        self.desc_label.setObjectName("emptyStateDesc")
        self.desc_label.setWordWrap(True)
        layout.addWidget(self.desc_label)
        self.action_button = QPushButton("")
        self.action_button.setObjectName("emptyStateAction")
        self.action_button.clicked.connect(  # type: ignore
            lambda: self.actionRequested.emit(self._state.value)
        )
        self.action_button.hide()
        layout.addWidget(self.action_button)
        layout.addStretch(1)

    # API --------------------------------------------------------------
    def state(self) -> EmptyState:
        return self._state

    def set_state(self, state: EmptyState) -> None:
        self._state = state
        tpl = self._registry.get(state)
        if state is EmptyState.NONE or tpl is None:
            self.hide()
            return
        self.title_label.setText(tpl.title)
        self.desc_label.setText(tpl.description)
        if tpl.action_text:
            self.action_button.setText(tpl.action_text)
            self.action_button.show()
        else:
            self.action_button.hide()
        self.show()
