"""
ToolsLib - Tool state and PyQt5 front-ends

State objects for the color picker, the color range picker and the polygon
mask analyzer, plus the windows that drive them. The windows are imported
lazily by the launcher so the state objects can be used without a Qt
installation.
"""

from PT_Libs.ToolsLib.tool_state import ColorPickerState, ColorRangePickerState, PolygonAnalyzerState

__all__ = [
    "ColorPickerState",
    "ColorRangePickerState",
    "PolygonAnalyzerState",
]
