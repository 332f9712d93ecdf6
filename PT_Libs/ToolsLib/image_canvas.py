from io import BytesIO
from typing import Any, List, Optional, Sequence, Tuple

from PyQt5.QtCore import QPointF, Qt, pyqtSignal
from PyQt5.QtGui import QBrush, QColor, QPainter, QPen, QPixmap, QPolygonF
from PyQt5.QtWidgets import QWidget

from PT_Libs.constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    POLYGON_FILL_ALPHA,
    POLYGON_POINT_RADIUS,
    POLYGON_STROKE_COLOR,
)
from PT_Libs.ImageLib.view_transform import ViewTransform


def image_to_pixmap(image: Any) -> QPixmap:
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    pixmap = QPixmap()
    pixmap.loadFromData(buffer.getvalue(), "PNG")
    return pixmap


class ImageCanvas(QWidget):
    """
    Fixed-size canvas drawing image layers through a ViewTransform.

    Left clicks are reported in canvas coordinates through ``clicked``;
    right-drag pans and the wheel zooms, both reported through
    ``viewChanged`` so sibling canvases can follow.
    """

    clicked = pyqtSignal(float, float)
    viewChanged = pyqtSignal(object)

    def __init__(
        self,
        parent: Optional[QWidget] = None,
        width: int = DEFAULT_CANVAS_WIDTH,
        height: int = DEFAULT_CANVAS_HEIGHT,
    ) -> None:
        super().__init__(parent)
        self.setFixedSize(width, height)
        self.setMouseTracking(True)

        self.view = ViewTransform()
        self._layers: List[Tuple[QPixmap, float]] = []
        self._polygon: List[Tuple[float, float]] = []
        self._polygon_closed = False
        self._info_lines: List[str] = []
        self._placeholder = ""
        self._pan_anchor: Optional[QPointF] = None

    def set_view(self, view: ViewTransform) -> None:
        self.view = view
        self.update()

    def set_layers(self, images: Sequence[Tuple[Any, float]]) -> None:
        """Replace the drawn layers with (PIL image, opacity) pairs, bottom first."""
        self._layers = [(image_to_pixmap(image), opacity) for image, opacity in images if image is not None]
        self.update()

    def set_polygon(self, points: Sequence[Tuple[float, float]], closed: bool) -> None:
        self._polygon = list(points)
        self._polygon_closed = closed
        self.update()

    def set_info_lines(self, lines: Sequence[str]) -> None:
        self._info_lines = list(lines)
        self.update()

    def set_placeholder(self, text: str) -> None:
        self._placeholder = text
        self.update()

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.RightButton:
            self._pan_anchor = QPointF(event.pos())
        elif event.button() == Qt.LeftButton:
            self.clicked.emit(float(event.pos().x()), float(event.pos().y()))

    def mouseMoveEvent(self, event) -> None:
        if self._pan_anchor is None:
            return
        position = QPointF(event.pos())
        delta = position - self._pan_anchor
        self._pan_anchor = position
        self.view = self.view.panned(delta.x(), delta.y())
        self.viewChanged.emit(self.view)
        self.update()

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.RightButton:
            self._pan_anchor = None

    def leaveEvent(self, event) -> None:
        self._pan_anchor = None

    def contextMenuEvent(self, event) -> None:
        event.accept()

    def wheelEvent(self, event) -> None:
        position = event.pos()
        self.view = self.view.zoomed_at(position.x(), position.y(), event.angleDelta().y() > 0)
        self.viewChanged.emit(self.view)
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#e5e7eb"))

        if not self._layers:
            painter.setPen(QColor("#4b5563"))
            painter.drawText(self.rect(), Qt.AlignCenter, self._placeholder)
            painter.end()
            return

        painter.save()
        painter.translate(self.view.pan_x, self.view.pan_y)
        painter.scale(self.view.zoom, self.view.zoom)
        for pixmap, opacity in self._layers:
            painter.setOpacity(opacity)
            painter.drawPixmap(0, 0, pixmap)
        painter.setOpacity(1.0)
        self._paint_polygon(painter)
        painter.restore()

        painter.setPen(QColor("#111827"))
        for row, line in enumerate(self._info_lines):
            painter.drawText(10, 20 + row * 20, line)
        painter.end()

    def _paint_polygon(self, painter: QPainter) -> None:
        if not self._polygon:
            return

        stroke = QColor(POLYGON_STROKE_COLOR)
        fill = QColor(POLYGON_STROKE_COLOR)
        fill.setAlpha(POLYGON_FILL_ALPHA)
        pen = QPen(stroke)
        pen.setWidthF(2.0 / self.view.zoom)
        painter.setPen(pen)

        outline = QPolygonF([QPointF(x, y) for x, y in self._polygon])
        if self._polygon_closed and len(self._polygon) >= 3:
            painter.setBrush(QBrush(fill))
            painter.drawPolygon(outline, Qt.OddEvenFill)
        else:
            painter.drawPolyline(outline)

        radius = POLYGON_POINT_RADIUS / self.view.zoom
        painter.setPen(Qt.NoPen)
        for index, (x, y) in enumerate(self._polygon):
            painter.setBrush(QColor("green") if index == 0 else QColor("blue"))
            painter.drawEllipse(QPointF(x, y), radius, radius)
