#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdgrid library.

This module centralizes the markers, keyword sets, CSS class names and
default configuration values used across mdgrid. Constants are organized
by category:

1. Grid Block Syntax - markers recognized by the grid parser
2. Grid Defaults - default settings values
3. Layout and Styling - class names and the bundled stylesheet
4. Image Modifiers - embedded-image keywords and menu defaults
5. Dependencies - third-party package requirements
"""

from __future__ import annotations

import re

# =============================================================================
# Grid Block Syntax
# =============================================================================

GRID_START_PREFIX = "=== start-grid:"
GRID_END_MARKER = "=== end-grid"
GRID_SETTINGS_MARKER = "grid-settings"

# Matched against the whitespace-trimmed line
CELL_MARKER_PATTERN = re.compile(r"^=== cell ([A-Z]\d+) ===$")

# Settings keys as they appear in the block
SETTING_COLUMNS = "columns"
SETTING_ROWS = "rows"
SETTING_SHOW_BORDERS = "show-borders"
SETTING_CELL_HEIGHT = "cell-height"
SETTING_DYNAMIC_HEIGHT = "dynamic-height"
SETTING_INVISIBLE_MODE = "invisible-mode"
SETTING_COL_WIDTHS = "col-widths"
SETTING_ROW_HEIGHTS = "row-heights"

RECOGNIZED_SETTINGS = frozenset(
    {
        SETTING_COLUMNS,
        SETTING_ROWS,
        SETTING_SHOW_BORDERS,
        SETTING_CELL_HEIGHT,
        SETTING_DYNAMIC_HEIGHT,
        SETTING_INVISIBLE_MODE,
        SETTING_COL_WIDTHS,
        SETTING_ROW_HEIGHTS,
    }
)

# =============================================================================
# Grid Defaults
# =============================================================================

DEFAULT_GRID_COLUMNS = 2
DEFAULT_GRID_ROWS = 2
DEFAULT_SHOW_BORDERS = True
DEFAULT_DYNAMIC_HEIGHT = True
MAX_GRID_COLUMNS = 26  # A..Z

DEFAULT_TEMPLATE_CELL_HEIGHT = "120px"
DEFAULT_TEMPLATE_ROWS = 6

# =============================================================================
# Layout and Styling
# =============================================================================

CLASS_GRID_CONTAINER = "grid-container"
CLASS_NO_BORDERS = "no-borders"
CLASS_DYNAMIC_HEIGHT = "dynamic-height"
CLASS_INVISIBLE_MODE = "invisible-mode"
CLASS_GLOBAL_INVISIBLE = "grid-global-invisible"
CLASS_GRID_CELL = "grid-cell"
CLASS_CELL_PLACEHOLDER = "grid-cell-placeholder"
CLASS_CELL_IMAGE = "grid-cell-image"
CLASS_IMAGE_ERROR = "grid-image-error"

# Per-column-count image sizing; other column counts get no extra class
COLUMN_IMAGE_CLASSES = {
    2: "grid-img-2col",
    3: "grid-img-3col",
}

CSS_VAR_COLUMNS = "--grid-cols"
CSS_VAR_ROWS = "--grid-rows"
CSS_VAR_CELL_HEIGHT = "--cell-height"

DEFAULT_IMAGE_ERROR_TEXT = "\U0001f5bc\ufe0f Image not found"

DEFAULT_GRID_CSS = """\
.grid-container {
    display: grid;
    gap: 0.75em;
    margin: 1em 0;
    width: 100%;
    box-sizing: border-box;
}
.grid-container .grid-cell {
    border: 1px solid #d0d7de;
    border-radius: 4px;
    padding: 0.5em 0.75em;
    min-width: 0;
    overflow-wrap: anywhere;
    min-height: var(--cell-height, auto);
}
.grid-container.no-borders .grid-cell {
    border: none;
}
.grid-container.dynamic-height .grid-cell {
    min-height: 0;
}
.grid-container.invisible-mode .grid-cell,
.grid-container.grid-global-invisible .grid-cell,
body.grid-global-invisible .grid-container .grid-cell {
    border: none;
    background: transparent;
    padding: 0;
}
.grid-cell-placeholder {
    min-height: 1em;
}
.grid-cell-image {
    max-width: 100%;
    height: auto;
}
.grid-img-2col {
    max-height: 420px;
}
.grid-img-3col {
    max-height: 280px;
}
.grid-image-error {
    color: #9a6700;
    font-size: 0.9em;
    font-style: italic;
}
img.image-left, img.image-float-left {
    float: left;
    margin: 0 1em 0.5em 0;
}
img.image-right, img.image-float-right {
    float: right;
    margin: 0 0 0.5em 1em;
}
img.image-center {
    display: block;
    margin: 0 auto;
}
img.image-small {
    width: 25%;
}
img.image-medium {
    width: 50%;
}
img.image-large {
    width: 100%;
}
"""

# =============================================================================
# Image Modifiers
# =============================================================================

DEFAULT_POSITION_KEYWORDS: tuple[str, ...] = ("left", "right", "center", "float-left", "float-right")
DEFAULT_SIZE_KEYWORDS: tuple[str, ...] = ("small", "medium", "large")
DEFAULT_CLEAR_KEYWORD = "clear"
DEFAULT_IMAGE_SEARCH_RADIUS = 2

EMBEDDED_IMAGE_PATTERN = re.compile(r"!\[\[([^\]]*)\]\]")
MODIFIER_SEPARATOR = "|"

# Numeric width ("300") or width x height ("300x200") embed modifiers
IMAGE_DIMENSION_PATTERN = re.compile(r"^(\d+)(?:x(\d+))?$")

IMAGE_CLASS_PREFIX = "image-"

NOTICE_IMAGE_NOT_FOUND = "Could not find image to modify"

# =============================================================================
# Dependencies
# =============================================================================

DEPS_MARKDOWN = [("mistune", "mistune", ">=3.0.0")]
DEPS_HTML = [("beautifulsoup4", "bs4", ">=4.12.0")]
