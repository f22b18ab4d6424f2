"""
Centralized constants for docstyle.
All magic numbers used by the styling and pagination engine.
"""

# ===========================================
# UNIT CONVERSION
# ===========================================
MM_TO_PX = 3.7795275591               # 96 DPI: 96 / 25.4
PT_TO_PX = 96 / 72                    # 1pt = 1.333px
CM_TO_PT = 28.35                      # red line indent (cm) -> pt

# ===========================================
# ELEMENT IDS
# ===========================================
ELEMENT_ID_CONTENT_CHARS = 50         # leading chars used in content-derived ids
SELECTABLE_CLASS = "element-selectable"

# ===========================================
# PAGINATION / MEASUREMENT
# ===========================================
IMAGE_DECODE_TIMEOUT_MS = 3000        # bounded wait for each <img>
FALLBACK_IMAGE_HEIGHT_PX = 200        # height used when an image can't be probed
AVERAGE_GLYPH_WIDTH_EM = 0.5          # average advance width for Times-like fonts
MEASURE_YIELD_EVERY = 1               # yield to the event loop every N elements
BASE_FONT_SIZE_PT = 14                # container font for measurement
BASE_LINE_HEIGHT = 1.5
BASE_FONT_FAMILY = "'Times New Roman', Times, serif"

# ===========================================
# TABLE OF CONTENTS
# ===========================================
TOC_DOT_CHAR = "·"               # middle dot
TOC_DOT_COUNT = 300
TOC_DOT_LETTER_SPACING_EM = 0.15
TOC_DEFAULT_TITLE = "СОДЕРЖАНИЕ"

# ===========================================
# LOGGING
# ===========================================
LOG_LEVEL = 'INFO'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_FILE = 'logs/docstyle.log'
LOG_MAX_SIZE_MB = 10
LOG_BACKUP_COUNT = 5
