import logging
from pathlib import Path
from typing import Dict, Optional

from PyQt5.QtGui import QColor
from PyQt5.QtWidgets import (
    QApplication,
    QButtonGroup,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from PT_Libs.constants import COLOR_FORMATS, COLOR_PICKER_CANVAS_SIZE, STANDARD_IMAGE_FILTER
from PT_Libs.exceptions import PortfolioToolsError
from PT_Libs.ImageLib.view_transform import ViewTransform
from PT_Libs.MaskLib.color_formats import format_color
from PT_Libs.MaskLib.color_range import rgb_to_hex
from PT_Libs.ToolsLib.image_canvas import ImageCanvas
from PT_Libs.ToolsLib.tool_state import ColorPickerState

logger = logging.getLogger(__name__)

SWATCH_SIZE = 64


class ColorPickerWindow(QMainWindow):
    def __init__(self, state: Optional[ColorPickerState] = None) -> None:
        super().__init__()
        self.setWindowTitle("Color Picker")

        self.state = state or ColorPickerState()
        self.format_buttons: Dict[str, QPushButton] = {}

        self._build_ui()
        self._connect_signals()
        self.refresh_all()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        image_col = QVBoxLayout()
        color_col = QVBoxLayout()

        self.btn_load_image = QPushButton("Upload Image")
        self.btn_reset_view = QPushButton("Reset View")
        self.btn_copy = QPushButton("Copy")
        self.btn_save_color = QPushButton("Save Color")
        self.btn_remove_color = QPushButton("Remove Color")

        self.image_canvas = ImageCanvas(width=COLOR_PICKER_CANVAS_SIZE, height=COLOR_PICKER_CANVAS_SIZE)
        self.image_canvas.set_placeholder("Upload an image to pick colors")

        self.swatch = QLabel()
        self.swatch.setFixedSize(SWATCH_SIZE, SWATCH_SIZE)
        self.color_text = QLineEdit()
        self.color_text.setReadOnly(True)
        self.label_details = QLabel()
        self.saved_list = QListWidget()

        self.format_group = QButtonGroup(self)
        self.format_group.setExclusive(True)
        format_row = QHBoxLayout()
        for color_format in COLOR_FORMATS:
            button = QPushButton(color_format.upper())
            button.setCheckable(True)
            self.format_group.addButton(button)
            self.format_buttons[color_format] = button
            format_row.addWidget(button)

        buttons_row = QHBoxLayout()
        buttons_row.addWidget(self.btn_load_image)
        buttons_row.addWidget(self.btn_reset_view)

        value_row = QHBoxLayout()
        value_row.addWidget(self.color_text)
        value_row.addWidget(self.btn_copy)

        image_col.addLayout(buttons_row)
        image_col.addWidget(self.image_canvas)
        image_col.addWidget(QLabel("Left-click to pick, right-click and drag to pan, mouse wheel to zoom"))
        image_col.addStretch(1)

        color_col.addWidget(self.swatch)
        color_col.addLayout(format_row)
        color_col.addLayout(value_row)
        color_col.addWidget(self.btn_save_color)
        color_col.addWidget(QLabel("Color Details"))
        color_col.addWidget(self.label_details)
        color_col.addWidget(QLabel("Saved Colors"))
        color_col.addWidget(self.saved_list)
        color_col.addWidget(self.btn_remove_color)

        root.addLayout(image_col)
        root.addLayout(color_col, stretch=1)

    def _connect_signals(self) -> None:
        self.btn_load_image.clicked.connect(self.load_image)
        self.btn_reset_view.clicked.connect(self.reset_view)
        self.btn_copy.clicked.connect(self.copy_color)
        self.btn_save_color.clicked.connect(self.save_color)
        self.btn_remove_color.clicked.connect(self.remove_saved_color)
        self.saved_list.itemClicked.connect(self.select_saved_color)
        self.image_canvas.clicked.connect(self.on_image_clicked)
        self.image_canvas.viewChanged.connect(self.on_view_changed)

        for color_format, button in self.format_buttons.items():
            button.clicked.connect(lambda _checked, color_format=color_format: self.set_format(color_format))

    def load_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Upload Image", "", STANDARD_IMAGE_FILTER)
        if not file_path:
            return

        try:
            self.state.load_image(Path(file_path))
        except PortfolioToolsError as exc:
            QMessageBox.warning(self, "Error Loading Image", str(exc))
            return

        self.refresh_all()

    def reset_view(self) -> None:
        self.state.reset_view()
        self.image_canvas.set_view(self.state.view)

    def on_image_clicked(self, canvas_x: float, canvas_y: float) -> None:
        if self.state.pick_color_at_canvas(canvas_x, canvas_y) is not None:
            self.refresh_color()

    def on_view_changed(self, view: ViewTransform) -> None:
        self.state.view = view

    def set_format(self, color_format: str) -> None:
        self.state.set_format(color_format)
        self.refresh_color()

    def copy_color(self) -> None:
        QApplication.clipboard().setText(self.state.formatted_color())
        logger.debug(f"Copied {self.state.formatted_color()}")

    def save_color(self) -> None:
        if self.state.save_color():
            self.refresh_saved_colors()

    def select_saved_color(self, item: QListWidgetItem) -> None:
        self.state.select_saved_color(self.saved_list.row(item))
        self.refresh_color()

    def remove_saved_color(self) -> None:
        row = self.saved_list.currentRow()
        if row < 0:
            return
        self.state.remove_saved_color(self.state.saved_colors[row])
        self.refresh_saved_colors()

    def refresh_all(self) -> None:
        self.image_canvas.set_layers([(self.state.image, 1.0)])
        self.image_canvas.set_view(self.state.view)
        self.refresh_color()
        self.refresh_saved_colors()

    def refresh_color(self) -> None:
        color = self.state.color
        self.swatch.setStyleSheet(f"background-color: {rgb_to_hex(color)}; border: 1px solid #9ca3af;")
        self.format_buttons[self.state.color_format].setChecked(True)
        self.color_text.setText(self.state.formatted_color())
        self.label_details.setText(
            "\n".join(f"{color_format.upper()}: {format_color(color, color_format)}" for color_format in COLOR_FORMATS)
        )

    def refresh_saved_colors(self) -> None:
        self.saved_list.clear()
        for color in self.state.saved_colors:
            item = QListWidgetItem(rgb_to_hex(color))
            item.setBackground(QColor(*color))
            item.setToolTip("Click to select")
            self.saved_list.addItem(item)
