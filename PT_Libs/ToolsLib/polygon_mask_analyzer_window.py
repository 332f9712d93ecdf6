import logging
from pathlib import Path
from typing import Any, Optional

from PyQt5.QtWidgets import (
    QCheckBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from PT_Libs.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MASKS_FILE_FILTER,
    STANDARD_IMAGE_FILTER,
)
from PT_Libs.exceptions import AnalysisPreconditionError, PortfolioToolsError
from PT_Libs.ImageLib.view_transform import ViewTransform
from PT_Libs.ToolsLib.image_canvas import ImageCanvas
from PT_Libs.ToolsLib.tool_state import PolygonAnalyzerState

logger = logging.getLogger(__name__)

MASK_OVERLAY_OPACITY = 0.5


class PolygonMaskAnalyzerWindow(QMainWindow):
    def __init__(self, state: Optional[PolygonAnalyzerState] = None) -> None:
        super().__init__()
        self.setWindowTitle("Polygon Mask Analyzer")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.state = state or PolygonAnalyzerState()
        self._mask_preview: Optional[Any] = None

        self._build_ui()
        self._connect_signals()
        self.refresh_layers()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        controls_col = QVBoxLayout()

        self.btn_load_image = QPushButton("Upload Image")
        self.btn_load_masks = QPushButton("Upload Mask Data")
        self.btn_reset_view = QPushButton("Reset View")
        self.btn_reset_polygon = QPushButton("Reset Polygon")
        self.btn_analyze = QPushButton("Analyze Polygon")
        self.chk_show_mask = QCheckBox("Show mask overlay")
        self.chk_show_mask.setChecked(True)

        self.label_status = QLabel("Upload an image and mask data to begin")
        self.label_result = QLabel("No analysis yet")
        self.label_result.setWordWrap(True)

        self.canvas = ImageCanvas()
        self.canvas.set_placeholder("Upload an image to draw a polygon on it")

        controls_col.addWidget(self.btn_load_image)
        controls_col.addWidget(self.btn_load_masks)
        controls_col.addWidget(self.btn_reset_view)
        controls_col.addWidget(self.btn_reset_polygon)
        controls_col.addWidget(self.chk_show_mask)
        controls_col.addWidget(self.btn_analyze)
        controls_col.addWidget(self.label_status)
        controls_col.addWidget(QLabel("Analysis Result"))
        controls_col.addWidget(self.label_result)
        controls_col.addWidget(QLabel("Left-click to add points, right-click and drag to pan, mouse wheel to zoom"))
        controls_col.addStretch(1)

        root.addLayout(controls_col, stretch=1)
        root.addWidget(self.canvas, stretch=3)

    def _connect_signals(self) -> None:
        self.btn_load_image.clicked.connect(self.load_image)
        self.btn_load_masks.clicked.connect(self.load_masks)
        self.btn_reset_view.clicked.connect(self.reset_view)
        self.btn_reset_polygon.clicked.connect(self.reset_polygon)
        self.btn_analyze.clicked.connect(self.complete_polygon)
        self.chk_show_mask.toggled.connect(lambda _checked: self.refresh_layers())
        self.canvas.clicked.connect(self.on_canvas_clicked)
        self.canvas.viewChanged.connect(self.on_view_changed)

    def load_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Upload Image", "", STANDARD_IMAGE_FILTER)
        if not file_path:
            return

        try:
            self.state.load_image(Path(file_path))
        except PortfolioToolsError as exc:
            self._show_error("Error Loading Image", str(exc))
            return

        self._mask_preview = self.state.mask_preview()
        self.refresh_layers()

    def load_masks(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Upload Mask Data", "", MASKS_FILE_FILTER)
        if not file_path:
            return

        try:
            self.state.load_masks(Path(file_path))
        except (PortfolioToolsError, OSError) as exc:
            logger.warning(f"Rejected mask file {file_path}: {exc}")
            self._show_error("Invalid Mask Data", f"{exc}\n\nPlease upload a valid JSON file.")
            return

        self._mask_preview = self.state.mask_preview()
        self.refresh_layers()

    def reset_view(self) -> None:
        self.state.reset_view()
        self.refresh_view()

    def reset_polygon(self) -> None:
        self.state.reset_polygon()
        self.refresh_polygon()

    def on_canvas_clicked(self, canvas_x: float, canvas_y: float) -> None:
        if self.state.add_point_at_canvas(canvas_x, canvas_y):
            self.refresh_polygon()

    def on_view_changed(self, view: ViewTransform) -> None:
        self.state.view = view
        self.refresh_view()

    def complete_polygon(self) -> None:
        try:
            self.state.complete_polygon()
        except AnalysisPreconditionError as exc:
            QMessageBox.information(self, "Cannot Analyze", str(exc))
            return
        self.refresh_polygon()

    def refresh_layers(self) -> None:
        layers = [(self.state.image, 1.0)]
        if self.chk_show_mask.isChecked() and self._mask_preview is not None:
            layers.append((self._mask_preview, MASK_OVERLAY_OPACITY))
        self.canvas.set_layers(layers)
        self.refresh_polygon()

    def refresh_polygon(self) -> None:
        polygon = self.state.polygon
        self.canvas.set_polygon(polygon, closed=len(polygon) >= 3)

        result = self.state.result
        if result is None:
            self.label_result.setText("No analysis yet")
        else:
            self.label_result.setText(
                f"Total polygon pixels: {result.total_polygon_pixels}\n"
                f"Masked pixels in polygon: {result.masked_polygon_pixels}\n"
                f"Coverage: {result.formatted_percentage}%"
            )
        self.refresh_view()

    def refresh_view(self) -> None:
        view = self.state.view
        self.canvas.set_view(view)

        image_text = "no image" if self.state.image is None else f"{self.state.image.width}×{self.state.image.height}px"
        mask_text = f"{len(self.state.mask_set)} masks" if self.state.mask_loaded else "no masks"
        self.label_status.setText(f"Image: {image_text}, {mask_text}")

        if self.state.image is not None:
            self.canvas.set_info_lines([f"Zoom: {view.zoom:.1f}x", f"Points: {len(self.state.polygon)}"])

    def _show_error(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)
