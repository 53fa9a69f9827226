"""UI components for CSS Shapes Studio

This package contains the canvas interaction logic and the Qt widgets:
- canvas: Pointer state machine and hit testing (no Qt imports)
- canvas_widget: Qt canvas that paints shapes and forwards mouse events
- property_panel: Qt editor for the selected shape's properties

Qt widgets are imported from their modules directly so the canvas package
stays usable without a display.
"""
