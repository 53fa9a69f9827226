"""Shape canvas widget - paints the session's shapes and forwards mouse input.

All editing decisions live in EditorSession / CanvasController; this widget
only converts Qt events to canvas pixels and repaints when the session says
something changed.
"""

# PyQt5 imports
from PyQt5.QtWidgets import QWidget, QApplication
from PyQt5.QtCore import Qt, QEvent, QPointF, QRectF
from PyQt5.QtGui import QPainter, QPainterPath, QPen, QBrush, QColor, QFont, QPolygonF

from constants import (
	SHAPE_TEXT, ROUND_TYPES, BORDER_RADIUS_TYPES, CURVE_TYPES,
	DEFAULT_SHAPE_COLOR, DEFAULT_FONT_SIZE, DEFAULT_FONT_FAMILY, DEFAULT_TEXT,
	RESIZE_HANDLE_SIZE,
)
from models.geometry import polygon_for, rounded_corners

CURSORS = {
	'move': Qt.SizeAllCursor,
	'se-resize': Qt.SizeFDiagCursor,
}

TEXT_ALIGN_FLAGS = {
	'left': Qt.AlignLeft,
	'center': Qt.AlignHCenter,
	'right': Qt.AlignRight,
}

CANVAS_BACKGROUND = QColor(255, 255, 255)
GRID_COLOR = QColor(229, 231, 235)
SELECTION_COLOR = QColor(0, 74, 173)


def shape_path(shape):
	"""QPainterPath of a non-text shape in local coords (origin at the shape centre)"""
	half_w = shape.width / 2
	half_h = shape.height / 2
	rect = QRectF(-half_w, -half_h, shape.width, shape.height)
	path = QPainterPath()

	def to_local(point):
		return QPointF(point[0] / 100 * shape.width - half_w, point[1] / 100 * shape.height - half_h)

	if shape.type in CURVE_TYPES and shape.curve:
		for i, (start, vertex, end) in enumerate(rounded_corners(shape.type, shape.curve)):
			if i == 0:
				path.moveTo(to_local(start))
			else:
				path.lineTo(to_local(start))
			path.quadTo(to_local(vertex), to_local(end))
		path.closeSubpath()
		return path

	points = polygon_for(shape.type)
	if points is not None:
		path.addPolygon(QPolygonF([to_local(p) for p in points]))
		path.closeSubpath()
	elif shape.type in ROUND_TYPES:
		path.addEllipse(rect)
	elif shape.type in BORDER_RADIUS_TYPES:
		# CSS percent radii are relative to the full box, Qt's to half of it
		radius = (shape.border_radius or 0) * 2
		path.addRoundedRect(rect, radius, radius, Qt.RelativeSize)
	else:
		path.addRect(rect)
	return path


class ShapeCanvasWidget(QWidget):
	"""Canvas that renders an EditorSession and forwards pointer gestures"""

	def __init__(self, session, parent=None):
		super().__init__(parent)
		self.session = session
		self._release_filter_installed = False

		self.setMouseTracking(True)
		self.setFocusPolicy(Qt.StrongFocus)
		self.setFixedSize(session.controller.canvas_width, session.controller.canvas_height)

		session.subscribe(self._on_session_changed)

	def _on_session_changed(self, session):
		self.update()

	# ========================================
	# Painting
	# ========================================

	def paintEvent(self, event):
		painter = QPainter(self)
		painter.setRenderHint(QPainter.Antialiasing)
		painter.fillRect(self.rect(), CANVAS_BACKGROUND)

		if self.session.controller.snap_enabled:
			self._draw_grid(painter)

		selected = self.session.selected_shape()
		for shape in self.session.shapes:
			self._draw_shape(painter, shape, shape is selected)
		painter.end()

	def _draw_grid(self, painter):
		grid = self.session.controller.grid_size
		painter.setPen(QPen(GRID_COLOR, 1))
		for x in range(0, self.width(), grid):
			painter.drawLine(x, 0, x, self.height())
		for y in range(0, self.height(), grid):
			painter.drawLine(0, y, self.width(), y)

	def _draw_shape(self, painter, shape, is_selected):
		painter.save()
		painter.translate(shape.x + shape.width / 2, shape.y + shape.height / 2)
		painter.rotate(shape.rotation or 0)

		painter.save()
		painter.scale(-1 if shape.flip_x else 1, -1 if shape.flip_y else 1)
		painter.setOpacity((shape.opacity if shape.opacity is not None else 100) / 100)

		color = QColor(shape.color)
		if not color.isValid():
			# Gradients and other CSS values only render in the browser
			color = QColor(DEFAULT_SHAPE_COLOR)

		if shape.type == SHAPE_TEXT:
			self._draw_text(painter, shape, color)
		else:
			painter.setPen(Qt.NoPen)
			painter.setBrush(QBrush(color))
			painter.drawPath(shape_path(shape))
		painter.restore()

		if is_selected:
			self._draw_selection(painter, shape)
		painter.restore()

	def _draw_text(self, painter, shape, color):
		font = QFont(shape.font_family or DEFAULT_FONT_FAMILY)
		font.setPixelSize(int(shape.font_size or DEFAULT_FONT_SIZE))
		font.setBold(shape.font_weight not in (None, 'normal', '100', '200', '300', '400'))
		font.setItalic(shape.font_style == 'italic')
		painter.setFont(font)
		painter.setPen(QPen(color))

		rect = QRectF(-shape.width / 2, -shape.height / 2, shape.width, shape.height)
		flags = TEXT_ALIGN_FLAGS.get(shape.text_align, Qt.AlignLeft) | Qt.AlignVCenter | Qt.TextWordWrap
		painter.drawText(rect, int(flags), shape.text or DEFAULT_TEXT)

	def _draw_selection(self, painter, shape):
		half_w = shape.width / 2
		half_h = shape.height / 2

		pen = QPen(SELECTION_COLOR, 2, Qt.DashLine)
		painter.setPen(pen)
		painter.setBrush(Qt.NoBrush)
		painter.drawRect(QRectF(-half_w, -half_h, shape.width, shape.height))

		handle = RESIZE_HANDLE_SIZE
		painter.setPen(QPen(QColor(255, 255, 255), 2))
		painter.setBrush(QBrush(SELECTION_COLOR))
		painter.drawEllipse(QPointF(half_w, half_h), handle / 2, handle / 2)

	# ========================================
	# Pointer input
	# ========================================

	def mousePressEvent(self, event):
		"""Start a move/resize gesture or clear the selection"""
		if event.button() != Qt.LeftButton:
			super().mousePressEvent(event)
			return

		self.setFocus()
		self.session.pointer_down(event.x(), event.y())
		if not self.session.controller.is_idle:
			self._install_release_filter()
		event.accept()

	def mouseMoveEvent(self, event):
		"""Drive the active gesture, or update the hover cursor"""
		if not self.session.controller.is_idle:
			self.session.pointer_move(event.x(), event.y())
			event.accept()
			return

		cursor = self.session.controller.cursor_at(event.x(), event.y())
		self.setCursor(CURSORS.get(cursor, Qt.ArrowCursor))
		super().mouseMoveEvent(event)

	def mouseReleaseEvent(self, event):
		"""Finish the gesture (normally already done by the global filter)"""
		if event.button() == Qt.LeftButton:
			self._finish_gesture()
			event.accept()
			return
		super().mouseReleaseEvent(event)

	def eventFilter(self, obj, event):
		"""Application-wide release listener so gestures end outside the canvas too"""
		if event.type() == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
			self._finish_gesture()
		return False

	def _install_release_filter(self):
		app = QApplication.instance()
		if app is not None and not self._release_filter_installed:
			app.installEventFilter(self)
			self._release_filter_installed = True

	def _remove_release_filter(self):
		app = QApplication.instance()
		if app is not None and self._release_filter_installed:
			app.removeEventFilter(self)
			self._release_filter_installed = False

	def _finish_gesture(self):
		self._remove_release_filter()
		self.session.pointer_up()
