import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from PT_Libs.constants import (
    BOUND_MAX,
    BOUND_MIN,
    CHANNELS,
    CHANNEL_MAX,
    CHANNEL_MIN,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    MASKS_FILE_FILTER,
    MASKS_FILE_NAME,
    MASK_TYPE_NEGATIVE,
    MASK_TYPE_POSITIVE,
    STANDARD_IMAGE_FILTER,
)
from PT_Libs.exceptions import PermanentMaskError, PortfolioToolsError
from PT_Libs.ImageLib.image_loader import is_large_file
from PT_Libs.ImageLib.view_transform import ViewTransform
from PT_Libs.MaskLib.color_range import hex_to_rgb, rgb_to_hex
from PT_Libs.ToolsLib.image_canvas import ImageCanvas
from PT_Libs.ToolsLib.tool_state import ColorRangePickerState

logger = logging.getLogger(__name__)

CHANNEL_LABELS = {"r": "Red (R)", "g": "Green (G)", "b": "Blue (B)"}


class ColorRangePickerWindow(QMainWindow):
    def __init__(self, state: Optional[ColorRangePickerState] = None) -> None:
        super().__init__()
        self.setWindowTitle("Color Range Picker")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.state = state or ColorRangePickerState()
        self.sliders: Dict[Tuple[str, str], QSlider] = {}
        self.range_labels: Dict[str, QLabel] = {}

        self._build_ui()
        self._connect_signals()
        self.refresh_all()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        controls_col = QVBoxLayout()
        preview_col = QVBoxLayout()

        self.btn_load_image = QPushButton("Upload Image")
        self.btn_reset_view = QPushButton("Reset View")
        self.btn_reset_masks = QPushButton("Reset Masks")
        self.btn_add_positive = QPushButton("Add Positive")
        self.btn_add_negative = QPushButton("Add Negative")
        self.btn_delete_mask = QPushButton("Delete Mask")
        self.btn_remove_color = QPushButton("Remove Color")
        self.btn_download = QPushButton("Download Masks Data")
        self.btn_import = QPushButton("Import Masks Data")

        self.image_canvas = ImageCanvas()
        self.image_canvas.set_placeholder("Upload an image to pick colors from it")
        self.mask_canvas = ImageCanvas()
        self.mask_canvas.set_placeholder("Upload an image to see the color range mask")

        self.masks_list = QListWidget()
        self.colors_list = QListWidget()
        self.label_range_title = QLabel()
        self.label_mode = QLabel()

        buttons_row = QHBoxLayout()
        buttons_row.addWidget(self.btn_load_image)
        buttons_row.addWidget(self.btn_reset_view)
        buttons_row.addWidget(self.btn_reset_masks)

        mask_buttons_row = QHBoxLayout()
        mask_buttons_row.addWidget(self.btn_add_positive)
        mask_buttons_row.addWidget(self.btn_add_negative)
        mask_buttons_row.addWidget(self.btn_delete_mask)

        sliders_grid = QGridLayout()
        for row, channel in enumerate(CHANNELS):
            sliders_grid.addWidget(QLabel(CHANNEL_LABELS[channel]), row, 0)
            for column, bound in enumerate((BOUND_MIN, BOUND_MAX), start=1):
                slider = QSlider(Qt.Horizontal)
                slider.setRange(CHANNEL_MIN, CHANNEL_MAX)
                self.sliders[(channel, bound)] = slider
                sliders_grid.addWidget(slider, row, column)
            self.range_labels[channel] = QLabel()
            sliders_grid.addWidget(self.range_labels[channel], row, 3)

        controls_col.addLayout(buttons_row)
        controls_col.addWidget(self.image_canvas)
        controls_col.addWidget(QLabel("Left-click to select color, right-click and drag to pan, mouse wheel to zoom"))
        controls_col.addWidget(QLabel("Masks"))
        controls_col.addLayout(mask_buttons_row)
        controls_col.addWidget(self.masks_list)
        controls_col.addWidget(self.label_range_title)
        controls_col.addWidget(self.label_mode)
        controls_col.addLayout(sliders_grid)
        controls_col.addWidget(QLabel("Selected Colors"))
        controls_col.addWidget(self.colors_list)
        controls_col.addWidget(self.btn_remove_color)

        preview_col.addWidget(self.mask_canvas)
        preview_col.addWidget(QLabel("White areas show pixels that match the final mask calculation"))
        preview_col.addWidget(self.btn_download)
        preview_col.addWidget(self.btn_import)
        preview_col.addStretch(1)

        root.addLayout(controls_col, stretch=1)
        root.addLayout(preview_col, stretch=1)

    def _connect_signals(self) -> None:
        self.btn_load_image.clicked.connect(self.load_image)
        self.btn_reset_view.clicked.connect(self.reset_view)
        self.btn_reset_masks.clicked.connect(self.reset_masks)
        self.btn_add_positive.clicked.connect(lambda: self.add_mask(MASK_TYPE_POSITIVE))
        self.btn_add_negative.clicked.connect(lambda: self.add_mask(MASK_TYPE_NEGATIVE))
        self.btn_delete_mask.clicked.connect(self.delete_mask)
        self.btn_remove_color.clicked.connect(self.remove_color)
        self.btn_download.clicked.connect(self.download_masks)
        self.btn_import.clicked.connect(self.import_masks)
        self.masks_list.currentRowChanged.connect(self.switch_to_mask)
        self.masks_list.itemChanged.connect(self.rename_mask)
        self.image_canvas.clicked.connect(self.on_image_clicked)
        self.image_canvas.viewChanged.connect(self.on_view_changed)
        self.mask_canvas.viewChanged.connect(self.on_view_changed)

        for (channel, bound), slider in self.sliders.items():
            slider.valueChanged.connect(
                lambda value, channel=channel, bound=bound: self.on_range_changed(channel, bound, value)
            )

    def load_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Upload Image", "", STANDARD_IMAGE_FILTER)
        if not file_path:
            return

        if is_large_file(Path(file_path)):
            self._show_info("Large Image", "Loading large image. This may take a moment...")

        try:
            self.state.load_image(Path(file_path))
        except PortfolioToolsError as exc:
            self._show_error("Error Loading Image", str(exc))
            return

        self.refresh_all()

    def reset_view(self) -> None:
        self.state.reset_view()
        self.refresh_view()

    def reset_masks(self) -> None:
        self.state.reset_masks()
        self.refresh_masks()

    def add_mask(self, mask_type: str) -> None:
        self.state.mask_set.add_mask(mask_type)
        self.refresh_masks()

    def delete_mask(self) -> None:
        try:
            self.state.mask_set.delete_mask(self.state.mask_set.active_index)
        except PermanentMaskError as exc:
            self._show_info("Cannot Delete", str(exc))
            return
        self.refresh_masks()

    def switch_to_mask(self, index: int) -> None:
        if index < 0 or index == self.state.mask_set.active_index:
            return
        self.state.mask_set.switch_to(index)
        self.refresh_controls()
        self.refresh_view()

    def rename_mask(self, item: QListWidgetItem) -> None:
        index = self.masks_list.row(item)
        mask_set = self.state.mask_set
        if not 0 <= index < len(mask_set) or item.text() == mask_set[index].name:
            return

        try:
            mask_set.rename_mask(index, item.text())
        except ValueError as exc:
            self._show_info("Cannot Rename", str(exc))

        self.masks_list.blockSignals(True)
        item.setText(mask_set[index].name)
        self.masks_list.blockSignals(False)
        self.label_range_title.setText(f"{mask_set.active_mask.name} Range")
        self.refresh_view()

    def on_image_clicked(self, canvas_x: float, canvas_y: float) -> None:
        if self.state.pick_color_at_canvas(canvas_x, canvas_y) is not None:
            self.refresh_masks()

    def remove_color(self) -> None:
        item = self.colors_list.currentItem()
        if item is None:
            return
        self.state.mask_set.remove_color(hex_to_rgb(item.text()))
        self.refresh_masks()

    def on_range_changed(self, channel: str, bound: str, value: int) -> None:
        self.state.mask_set.set_range_bound(channel, bound, value)
        self.refresh_sliders()
        self.refresh_mask_canvas()

    def on_view_changed(self, view: ViewTransform) -> None:
        self.state.view = view
        self.refresh_view()

    def download_masks(self) -> None:
        file_path, _ = QFileDialog.getSaveFileName(self, "Download Masks Data", MASKS_FILE_NAME, MASKS_FILE_FILTER)
        if not file_path:
            return

        try:
            self.state.export_masks(Path(file_path))
        except OSError as exc:
            self._show_error("Error Saving Masks", str(exc))

    def import_masks(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Import Masks Data", "", MASKS_FILE_FILTER)
        if not file_path:
            return

        try:
            self.state.import_masks(Path(file_path))
        except (PortfolioToolsError, OSError) as exc:
            self._show_error("Invalid Mask Data", str(exc))
            return
        self.refresh_all()

    def refresh_all(self) -> None:
        self.image_canvas.set_layers([(self.state.image, 1.0)])
        self.refresh_masks()

    def refresh_masks(self) -> None:
        self.refresh_controls()
        self.refresh_mask_canvas()
        self.refresh_view()

    def refresh_controls(self) -> None:
        mask_set = self.state.mask_set
        active = mask_set.active_mask

        self.masks_list.blockSignals(True)
        self.masks_list.clear()
        for mask in mask_set:
            item = QListWidgetItem(mask.name)
            item.setFlags(item.flags() | Qt.ItemIsEditable)
            item.setToolTip(f"{len(mask.colors)} colors, double-click to rename")
            item.setForeground(QColor("#15803d") if mask.is_positive else QColor("#b91c1c"))
            self.masks_list.addItem(item)
        self.masks_list.setCurrentRow(mask_set.active_index)
        self.masks_list.blockSignals(False)

        self.btn_delete_mask.setEnabled(mask_set.active_index != 0)
        self.label_range_title.setText(f"{active.name} Range")
        self.label_mode.setText("Colors to exclude" if active.is_negative else "Colors to include")

        self.colors_list.clear()
        for color in active.colors:
            item = QListWidgetItem(rgb_to_hex(color))
            item.setBackground(QColor(*color))
            self.colors_list.addItem(item)

        self.refresh_sliders()

    def refresh_sliders(self) -> None:
        color_range = self.state.mask_set.active_mask.range
        for (channel, bound), slider in self.sliders.items():
            slider.blockSignals(True)
            slider.setValue(getattr(color_range.channel(channel), bound))
            slider.blockSignals(False)
        for channel, label in self.range_labels.items():
            channel_range = color_range.channel(channel)
            label.setText(f"{channel_range.min} - {channel_range.max}")

    def refresh_mask_canvas(self) -> None:
        result = self.state.compute_mask()
        if result is None:
            self.mask_canvas.set_layers([])
            return
        if result.is_error:
            logger.warning(f"Showing error mask: {result.error_message}")
        self.mask_canvas.set_layers([(result.image, 1.0)])

    def refresh_view(self) -> None:
        view = self.state.view
        active_name = self.state.mask_set.active_mask.name
        self.image_canvas.set_view(view)
        self.mask_canvas.set_view(view)

        if self.state.image is not None:
            width, height = self.state.image.size
            self.image_canvas.set_info_lines([f"Zoom: {view.zoom:.1f}x", f"Image: {width}×{height}px"])
            self.mask_canvas.set_info_lines(
                [f"Zoom: {view.zoom:.1f}x", f"Active: {active_name}", f"Masks: {len(self.state.mask_set)}"]
            )

    def _show_info(self, title: str, message: str) -> None:
        QMessageBox.information(self, title, message)

    def _show_error(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)
