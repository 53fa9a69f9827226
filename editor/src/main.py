import sys
import os
import logging

# Configure logging
logging.basicConfig(
    level=logging.WARNING,  # Only show warnings and errors
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)  # Output to console
    ]
)

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    current_dir = os.path.dirname(os.path.abspath(__file__))
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5 import QtWidgets
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QSplitter, QApplication,
    QLabel, QPlainTextEdit, QPushButton, QCheckBox, QComboBox, QToolBar,
    QInputDialog, QLineEdit, QTextEdit, QAbstractSpinBox,
)
from PyQt5.QtCore import Qt, QEvent
from PyQt5.QtGui import QPalette, QColor

# Component imports
from components.canvas_widget import ShapeCanvasWidget
from components.property_panel import PropertyPanel

# Utility imports
from utils.logger import loggerRaise, set_main_window, set_notifier

# Service imports
from services.editor_session import EditorSession
from services.creation_store import CreationStore, save_as_new_strategy, overwrite_strategy
from constants import (
    SHAPE_TYPES, SHAPE_DISPLAY_NAMES, GRID_SIZE_OPTIONS, DEFAULT_GRID_SIZE,
    DEFAULT_SNAP_ENABLED, NOTIFY_ERROR, NOTIFY_INFO, NOTIFY_SUCCESS,
)

TEXT_INPUT_WIDGETS = (QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox)

KEY_NAMES = {
    Qt.Key_Delete: 'Delete',
    Qt.Key_Backspace: 'Backspace',
}

STATUS_TIMEOUT_MS = 4000


def key_name(key):
    """Host key name for a Qt key code, or None"""
    if key in KEY_NAMES:
        return KEY_NAMES[key]
    if Qt.Key_A <= key <= Qt.Key_Z:
        return chr(key).lower()
    return None


class ShapeStudioWindow(QMainWindow):
    """Main window: shape toolbar, canvas, property panel and code panes"""

    def __init__(self, store=None):
        super().__init__()
        self.setWindowTitle("CSS Shapes Studio")
        self.resize(1280, 720)

        self._logger = logging.getLogger('ShapeStudioWindow')
        self.store = store if store is not None else CreationStore()
        self.current_creation = None
        self.session = None

        set_main_window(self)
        set_notifier(self.notify)

        self._create_menu_bar()
        self._create_toolbar()

        # Shortcuts are resolved by the session, catch keys before child widgets do
        QApplication.instance().installEventFilter(self)

        self.status_left = QLabel("Ready")
        self.statusBar().addWidget(self.status_left, 1)

        self.new_creation()

    # ========================================
    # Session lifecycle
    # ========================================

    def _start_session(self, initial_shapes=None, commit_action=None, name="New creation"):
        """Replace the current session and rebuild the editing area around it"""
        self.session = EditorSession(
            initial_shapes=initial_shapes,
            commit_action=commit_action,
            notify=self.notify,
            snap_enabled=self.snap_check.isChecked(),
            grid_size=int(self.grid_combo.currentText()),
        )
        self.session.subscribe(self._on_session_changed)
        self.setup_ui()
        self.setWindowTitle(f"CSS Shapes Studio - {name}")
        self._on_session_changed(self.session)

    def new_creation(self):
        """Start an empty composition that commits as a new creation"""
        self.current_creation = None
        self._start_session(commit_action=self._save_as_new_action())

    def open_creation(self):
        """Pick a saved creation and edit it; commit overwrites it in place"""
        creations = self.store.list()
        if not creations:
            self.notify("No saved creations", NOTIFY_INFO)
            return

        labels = [f"{c['name']} ({len(c['shapes'])} shapes)" for c in creations]
        label, ok = QInputDialog.getItem(self, "Open Creation", "Creation:", labels, 0, False)
        if not ok:
            return

        creation = creations[labels.index(label)]
        try:
            self.current_creation = creation
            self._start_session(
                initial_shapes=creation['shapes'],
                commit_action=overwrite_strategy(self.store, creation['id'], self.notify),
                name=creation['name'],
            )
        except Exception as e:
            loggerRaise(e, f"Could not open \"{creation['name']}\"")

    def save_creation(self):
        """Commit the session with its current strategy"""
        try:
            self.session.commit()
        except Exception as e:
            loggerRaise(e, "Failed to save creation")

    def save_creation_as_new(self):
        """Commit the session as a new creation regardless of where it came from"""
        if not self.session.shapes:
            self.notify("Add at least one shape", NOTIFY_ERROR)
            return
        try:
            self._save_as_new_action()(self.session.get_snapshot())
        except Exception as e:
            loggerRaise(e, "Failed to save creation")

    def _save_as_new_action(self):
        def _commit(records):
            name, ok = QInputDialog.getText(self, "Save Creation", "Name:", text="Custom Creation")
            if not ok:
                return None
            return save_as_new_strategy(self.store, name.strip(), self.notify)(records)
        return _commit

    # ============= UI Setup =============

    def _create_menu_bar(self):
        menubar = self.menuBar()

        file_menu = menubar.addMenu("&File")
        file_menu.addAction("&New", self.new_creation)
        file_menu.addAction("&Open...", self.open_creation)
        file_menu.addSeparator()
        file_menu.addAction("&Save", self.save_creation)
        file_menu.addAction("Save as &New...", self.save_creation_as_new)
        file_menu.addSeparator()
        file_menu.addAction("E&xit", self.close)

        # Key handling lives in eventFilter, the labels only show the bindings
        self.edit_menu = menubar.addMenu("&Edit")
        self.undo_action = self.edit_menu.addAction("Undo\tCtrl+Z", lambda: self.session.undo())
        self.redo_action = self.edit_menu.addAction("Redo\tCtrl+Shift+Z", lambda: self.session.redo())
        self.edit_menu.addSeparator()
        self.edit_menu.addAction("Cut\tCtrl+X", lambda: self.session.cut())
        self.edit_menu.addAction("Copy\tCtrl+C", lambda: self.session.copy())
        self.edit_menu.addAction("Paste\tCtrl+V", lambda: self.session.paste())
        self.edit_menu.addAction("Delete\tDel", lambda: self.session.delete_selected())
        self.edit_menu.addSeparator()
        self.edit_menu.addAction("Clear Canvas", lambda: self.session.clear())

    def _create_toolbar(self):
        toolbar = QToolBar("Shapes")
        toolbar.setMovable(False)
        self.addToolBar(Qt.TopToolBarArea, toolbar)

        for shape_type in SHAPE_TYPES:
            toolbar.addAction(SHAPE_DISPLAY_NAMES[shape_type],
                              lambda checked=False, t=shape_type: self.session.add_shape(t))

        toolbar.addSeparator()
        self.snap_check = QCheckBox("Snap to grid")
        self.snap_check.setChecked(DEFAULT_SNAP_ENABLED)
        self.snap_check.toggled.connect(self._on_snap_changed)
        toolbar.addWidget(self.snap_check)

        self.grid_combo = QComboBox()
        self.grid_combo.addItems([str(size) for size in GRID_SIZE_OPTIONS])
        self.grid_combo.setCurrentText(str(DEFAULT_GRID_SIZE))
        self.grid_combo.currentTextChanged.connect(self._on_snap_changed)
        toolbar.addWidget(self.grid_combo)

    def setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        splitter = QSplitter(Qt.Horizontal)

        # Center: canvas above the generated code
        center = QWidget()
        center_layout = QVBoxLayout(center)
        self.canvas_widget = ShapeCanvasWidget(self.session)
        center_layout.addWidget(self.canvas_widget, 0, Qt.AlignHCenter)

        code_row = QHBoxLayout()
        self.css_view = self._code_pane(code_row, "CSS")
        self.html_view = self._code_pane(code_row, "HTML")
        center_layout.addLayout(code_row, 1)
        splitter.addWidget(center)

        # Right: properties of the selection
        self.property_panel = PropertyPanel(self.session)
        splitter.addWidget(self.property_panel)

        splitter.setSizes([960, 320])
        splitter.setCollapsible(0, False)
        main_layout.addWidget(splitter)

    def _code_pane(self, row, title):
        column = QVBoxLayout()
        header = QHBoxLayout()
        header.addWidget(QLabel(title))
        header.addStretch()
        copy_button = QPushButton(f"Copy {title}")
        header.addWidget(copy_button)
        column.addLayout(header)

        view = QPlainTextEdit()
        view.setReadOnly(True)
        view.setLineWrapMode(QPlainTextEdit.NoWrap)
        column.addWidget(view)
        row.addLayout(column)

        copy_button.clicked.connect(lambda: self._copy_code(view, title))
        return view

    def _copy_code(self, view, title):
        QApplication.clipboard().setText(view.toPlainText())
        self.notify(f"{title} copied to clipboard", NOTIFY_SUCCESS)

    # ========================================
    # Session callbacks
    # ========================================

    def _on_session_changed(self, session):
        if session is not self.session:
            return
        self.undo_action.setEnabled(session.can_undo())
        self.redo_action.setEnabled(session.can_redo())
        if hasattr(self, 'css_view'):
            self.css_view.setPlainText(session.generate_css())
            self.html_view.setPlainText(session.generate_html())

    def _on_snap_changed(self, *args):
        if self.session is None:
            return
        self.session.set_snap(self.snap_check.isChecked(), int(self.grid_combo.currentText()))
        self.canvas_widget.update()

    def notify(self, message, kind=NOTIFY_INFO):
        """Show a user notification in the status bar"""
        if kind == NOTIFY_ERROR:
            self._logger.warning(message)
        self.statusBar().showMessage(message, STATUS_TIMEOUT_MS)

    # ========================================
    # Events
    # ========================================

    def eventFilter(self, obj, event):
        """Route editing shortcuts to the session before child widgets consume them"""
        if event.type() == QEvent.KeyPress and isinstance(obj, QWidget) and obj.window() is self:
            name = key_name(event.key())
            if name is not None and self.session is not None:
                focus = QApplication.focusWidget()
                consumed = self.session.handle_shortcut(
                    name,
                    ctrl=bool(event.modifiers() & Qt.ControlModifier),
                    shift=bool(event.modifiers() & Qt.ShiftModifier),
                    text_input_focused=isinstance(focus, TEXT_INPUT_WIDGETS),
                )
                if consumed:
                    return True
        return super().eventFilter(obj, event)


def main():
    """Main entry point for CSS Shapes Studio"""
    app = QtWidgets.QApplication([])

    # Use Fusion style with dark palette
    app.setStyle("Fusion")

    dark_palette = QPalette()
    dark_palette.setColor(QPalette.Window, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.WindowText, Qt.white)
    dark_palette.setColor(QPalette.Base, QColor(25, 25, 25))
    dark_palette.setColor(QPalette.AlternateBase, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ToolTipBase, Qt.white)
    dark_palette.setColor(QPalette.ToolTipText, Qt.white)
    dark_palette.setColor(QPalette.Text, Qt.white)
    dark_palette.setColor(QPalette.Button, QColor(53, 53, 53))
    dark_palette.setColor(QPalette.ButtonText, Qt.white)
    dark_palette.setColor(QPalette.BrightText, Qt.red)
    dark_palette.setColor(QPalette.Link, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
    dark_palette.setColor(QPalette.HighlightedText, Qt.black)

    app.setPalette(dark_palette)

    window = ShapeStudioWindow()
    window.show()
    app.exec_()


if __name__ == "__main__":
    main()
