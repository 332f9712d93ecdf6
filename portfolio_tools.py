import logging
import sys

from PyQt5.QtWidgets import QApplication

TOOLS = ("picker", "analyzer", "color")


def create_window(tool: str):
    if tool == "color":
        from PT_Libs.ToolsLib.color_picker_window import ColorPickerWindow

        return ColorPickerWindow()

    if tool == "analyzer":
        from PT_Libs.ToolsLib.polygon_mask_analyzer_window import PolygonMaskAnalyzerWindow

        return PolygonMaskAnalyzerWindow()

    from PT_Libs.ToolsLib.color_range_picker_window import ColorRangePickerWindow

    return ColorRangePickerWindow()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    tool = sys.argv[1] if len(sys.argv) > 1 else "picker"
    if tool not in TOOLS:
        print(f"Usage: python portfolio_tools.py [{'|'.join(TOOLS)}]", file=sys.stderr)
        sys.exit(2)

    app = QApplication(sys.argv)
    window = create_window(tool)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
