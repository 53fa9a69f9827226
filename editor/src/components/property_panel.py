"""Property panel - edits the selected shape through the session"""

# PyQt5 imports
from PyQt5.QtWidgets import (
    QWidget, QFormLayout, QLineEdit, QSpinBox, QCheckBox, QComboBox, QLabel,
)

from constants import (
    SHAPE_DISPLAY_NAMES, OPACITY_MIN, OPACITY_MAX, ROTATION_FULL_TURN,
    BORDER_RADIUS_MIN, BORDER_RADIUS_MAX, CURVE_MIN, CURVE_MAX,
    MIN_SHAPE_SIZE, FONT_SIZE_MIN, TEXT_ALIGNS, FONT_WEIGHTS, FONT_STYLES,
)
from models.shape import supports_attribute

MAX_DIMENSION = 4000
MAX_FONT_SIZE = 400


class PropertyPanel(QWidget):
    """Form bound to EditorSession.selected_shape()

    Every edit goes through session.update_property, so invalid values are
    ignored there and each accepted change is one undo step.
    """

    def __init__(self, session, parent=None):
        super().__init__(parent)
        self.session = session
        self._updating = False  # Prevent feedback loops while loading values
        self._rows = {}

        self._setup_ui()
        session.subscribe(self._on_session_changed)
        self.refresh()

    def _setup_ui(self):
        self.form_layout = QFormLayout(self)

        self.type_label = QLabel("No selection")
        self.form_layout.addRow("Shape", self.type_label)

        self.x_spin = self._spin_row('x', "X", 0, MAX_DIMENSION)
        self.y_spin = self._spin_row('y', "Y", 0, MAX_DIMENSION)
        self.width_spin = self._spin_row('width', "Width", MIN_SHAPE_SIZE, MAX_DIMENSION)
        self.height_spin = self._spin_row('height', "Height", MIN_SHAPE_SIZE, MAX_DIMENSION)

        self.color_edit = QLineEdit()
        self.color_edit.editingFinished.connect(
            lambda: self._set('color', self.color_edit.text().strip()))
        self._add_row('color', "Color", self.color_edit)

        self.opacity_spin = self._spin_row('opacity', "Opacity", OPACITY_MIN, OPACITY_MAX)
        self.rotation_spin = self._spin_row('rotation', "Rotation", 0, ROTATION_FULL_TURN - 1)

        self.flip_x_check = self._check_row('flip_x', "Flip horizontal")
        self.flip_y_check = self._check_row('flip_y', "Flip vertical")

        self.border_radius_spin = self._spin_row('border_radius', "Corner radius %",
                                                 BORDER_RADIUS_MIN, BORDER_RADIUS_MAX)
        self.curve_spin = self._spin_row('curve', "Corner curve", CURVE_MIN, CURVE_MAX)

        self.text_edit = QLineEdit()
        self.text_edit.editingFinished.connect(lambda: self._set('text', self.text_edit.text()))
        self._add_row('text', "Text", self.text_edit)

        self.font_size_spin = self._spin_row('font_size', "Font size", FONT_SIZE_MIN, MAX_FONT_SIZE)

        self.font_family_edit = QLineEdit()
        self.font_family_edit.editingFinished.connect(
            lambda: self._set('font_family', self.font_family_edit.text().strip()))
        self._add_row('font_family', "Font", self.font_family_edit)

        self.font_weight_combo = self._combo_row('font_weight', "Weight", FONT_WEIGHTS)
        self.font_style_combo = self._combo_row('font_style', "Style", FONT_STYLES)
        self.text_align_combo = self._combo_row('text_align', "Align", TEXT_ALIGNS)

    def _add_row(self, attr, label, widget):
        self.form_layout.addRow(label, widget)
        self._rows[attr] = (self.form_layout.labelForField(widget), widget)

    def _spin_row(self, attr, label, minimum, maximum):
        spin = QSpinBox()
        spin.setRange(minimum, maximum)
        spin.valueChanged.connect(lambda value: self._set(attr, value))
        self._add_row(attr, label, spin)
        return spin

    def _check_row(self, attr, label):
        check = QCheckBox()
        check.toggled.connect(lambda checked: self._set(attr, checked))
        self._add_row(attr, label, check)
        return check

    def _combo_row(self, attr, label, options):
        combo = QComboBox()
        combo.addItems(list(options))
        combo.currentTextChanged.connect(lambda text: self._set(attr, text))
        self._add_row(attr, label, combo)
        return combo

    def _set(self, attr, value):
        if self._updating:
            return
        shape = self.session.selected_shape()
        if shape is not None:
            self.session.update_property(shape.id, attr, value)

    def _on_session_changed(self, session):
        self.refresh()

    def refresh(self):
        """Load the selected shape's values into the form"""
        shape = self.session.selected_shape()
        self._updating = True
        try:
            if shape is None:
                self.type_label.setText("No selection")
                for label, widget in self._rows.values():
                    label.setVisible(False)
                    widget.setVisible(False)
                return

            self.type_label.setText(SHAPE_DISPLAY_NAMES.get(shape.type, shape.type))
            for attr, (label, widget) in self._rows.items():
                visible = supports_attribute(shape.type, attr)
                label.setVisible(visible)
                widget.setVisible(visible)
                if not visible:
                    continue
                value = getattr(shape, attr)
                if isinstance(widget, QSpinBox):
                    widget.setValue(int(round(value or 0)))
                elif isinstance(widget, QCheckBox):
                    widget.setChecked(bool(value))
                elif isinstance(widget, QComboBox):
                    widget.setCurrentText(str(value))
                else:
                    widget.setText(value or '')
        finally:
            self._updating = False
