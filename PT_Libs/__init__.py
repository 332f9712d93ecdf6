"""
PT_Libs - Portfolio Tools Library Modules

This package contains the core functionality of the portfolio image tools,
organized into specialized sub-packages:

- MaskLib: Color ranges, mask models, evaluation, rasterization, coverage and mask files
- ImageLib: Image loading and the zoom/pan view transform
- ToolsLib: Tool state objects and the PyQt5 windows for both tools
"""

__version__ = "0.1.0"
