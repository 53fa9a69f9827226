"""
CSS Shapes Studio - Constants and Configuration

This module contains all constant values used throughout the application:
- Shape type tags and which optional fields each type carries
- Default shape geometry and styling
- Min/max values and constraints
- Canvas, grid and paste settings
- Code export settings
"""

# ======================================================================
# SHAPE TYPES
# ======================================================================
# Type tags are part of the saved record format, keep them stable.

SHAPE_RECTANGLE = 'rectangle'
SHAPE_SQUARE = 'square'
SHAPE_CIRCLE = 'circle'
SHAPE_ELLIPSE = 'ellipse'
SHAPE_TRIANGLE = 'triangle'
SHAPE_RIGHT_TRIANGLE = 'rightTriangle'
SHAPE_DIAMOND = 'diamond'
SHAPE_PENTAGON = 'pentagon'
SHAPE_HEXAGON = 'hexagon'
SHAPE_STAR = 'star'
SHAPE_ARROW = 'arrow'
SHAPE_TEXT = 'text'

# Toolbar order
SHAPE_TYPES = (
    SHAPE_RECTANGLE, SHAPE_SQUARE, SHAPE_CIRCLE, SHAPE_ELLIPSE,
    SHAPE_TRIANGLE, SHAPE_RIGHT_TRIANGLE, SHAPE_DIAMOND,
    SHAPE_PENTAGON, SHAPE_HEXAGON, SHAPE_STAR, SHAPE_ARROW,
    SHAPE_TEXT,
)

SHAPE_DISPLAY_NAMES = {
    SHAPE_RECTANGLE: 'Rectangle',
    SHAPE_SQUARE: 'Square',
    SHAPE_CIRCLE: 'Circle',
    SHAPE_ELLIPSE: 'Ellipse',
    SHAPE_TRIANGLE: 'Triangle',
    SHAPE_RIGHT_TRIANGLE: 'Right Triangle',
    SHAPE_DIAMOND: 'Diamond',
    SHAPE_PENTAGON: 'Pentagon',
    SHAPE_HEXAGON: 'Hexagon',
    SHAPE_STAR: 'Star',
    SHAPE_ARROW: 'Arrow',
    SHAPE_TEXT: 'Text',
}

# Types whose corners are set with border-radius instead of clip-path
ROUND_TYPES = (SHAPE_CIRCLE, SHAPE_ELLIPSE)
BORDER_RADIUS_TYPES = (SHAPE_RECTANGLE, SHAPE_SQUARE)

# Types that expose the corner curve slider
CURVE_TYPES = (SHAPE_TRIANGLE, SHAPE_RIGHT_TRIANGLE, SHAPE_DIAMOND, SHAPE_STAR)

# ======================================================================
# DEFAULT SHAPE VALUES
# ======================================================================

DEFAULT_SHAPE_COLOR = '#004aad'
DEFAULT_OPACITY = 100
DEFAULT_ROTATION = 0
DEFAULT_FLIP_X = False
DEFAULT_FLIP_Y = False

# New shapes land here unless the host passes a position
DEFAULT_SHAPE_X = 200
DEFAULT_SHAPE_Y = 150

DEFAULT_SHAPE_WIDTH = 80
DEFAULT_SHAPE_HEIGHT = 80

# Per-type (width, height) overrides
DEFAULT_SHAPE_SIZES = {
    SHAPE_ELLIPSE: (120, 60),
    SHAPE_RECTANGLE: (80, 50),
    SHAPE_TEXT: (150, 40),
}

DEFAULT_BORDER_RADIUS = 0
DEFAULT_CURVE = 0

# Text shapes
DEFAULT_TEXT = 'Text'
DEFAULT_FONT_SIZE = 24
DEFAULT_FONT_FAMILY = 'Arial'
DEFAULT_FONT_WEIGHT = 'normal'
DEFAULT_FONT_STYLE = 'normal'
DEFAULT_TEXT_ALIGN = 'center'

FONT_WEIGHTS = ('normal', 'bold', '100', '200', '300', '400', '500', '600', '700', '800', '900')
FONT_STYLES = ('normal', 'italic')
TEXT_ALIGNS = ('left', 'center', 'right')

# ======================================================================
# CONSTRAINTS
# ======================================================================

MIN_SHAPE_SIZE = 20

OPACITY_MIN = 0
OPACITY_MAX = 100

ROTATION_FULL_TURN = 360

BORDER_RADIUS_MIN = 0
BORDER_RADIUS_MAX = 50

CURVE_MIN = 0
CURVE_MAX = 100

FONT_SIZE_MIN = 1

# ======================================================================
# CANVAS
# ======================================================================

CANVAS_WIDTH = 600
CANVAS_HEIGHT = 400

# Grid snapping (host configurable)
DEFAULT_SNAP_ENABLED = False
DEFAULT_GRID_SIZE = 20
GRID_SIZE_OPTIONS = (10, 20, 25, 40, 50)

# Resize handle: square centred on the bottom-right corner
RESIZE_HANDLE_SIZE = 16

# ======================================================================
# HISTORY MANAGEMENT
# ======================================================================

# None keeps every entry; editing sessions are short-lived
MAX_HISTORY_ENTRIES = None

# ======================================================================
# PASTE OFFSET
# ======================================================================

# Pixels added to both axes of the clipboard shape on paste
PASTE_OFFSET_X = 20
PASTE_OFFSET_Y = 20

# ======================================================================
# CODE EXPORT
# ======================================================================

DEFAULT_COMPOSITION_NAME = 'css-shapes'

# Space added past the right/bottom-most shape edge for the export container
EXPORT_MARGIN = 20

EMPTY_CSS_PLACEHOLDER = '/* Add shapes to the canvas to generate CSS */'
EMPTY_HTML_PLACEHOLDER = '<!-- Add shapes to the canvas -->'

# ======================================================================
# NOTIFICATIONS
# ======================================================================

NOTIFY_SUCCESS = 'success'
NOTIFY_ERROR = 'error'
NOTIFY_INFO = 'info'
