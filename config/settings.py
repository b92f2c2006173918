"""
Centralized configuration for seo-content-blueprint.
Model identifiers, timeouts, image parameters and shared constants.
"""

# ─── Models ──────────────────────────────────────────────────────────────────

OUTLINE_MODEL = "gpt-4o"
DRAFT_MODEL = "gpt-4o"
IMAGE_MODEL = "gpt-image-1"

# ─── Remote calls ────────────────────────────────────────────────────────────

REQUEST_TIMEOUT = 120  # seconds, per call
IMAGE_TIMEOUT = 180

# ─── Image generation ────────────────────────────────────────────────────────

IMAGE_ASPECT_RATIO = "16:9"
IMAGE_SIZE = "1536x1024"  # closest landscape size to 16:9
IMAGE_QUALITY = "medium"  # resolution tier
IMAGE_STYLE_SUFFIX = (
    ". Photorealistic, high quality, professional business style, 4k, "
    "soft cinematic lighting, 16:9 aspect ratio."
)
IMAGE_DATA_URI_PREFIX = "data:image/png;base64,"

# ─── Output languages ────────────────────────────────────────────────────────

OUTPUT_LANGUAGES = {
    "zh-TW": "Traditional Chinese",
    "zh-CN": "Simplified Chinese",
    "en": "English",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "ja": "Japanese",
}
DEFAULT_OUTPUT_LANGUAGE = "zh-TW"

# ─── Target regions (UI) ─────────────────────────────────────────────────────

COUNTRIES = [
    "Taiwan",
    "Hong Kong",
    "United States",
    "United Kingdom",
    "France",
    "Germany",
    "Spain",
    "Canada",
    "Australia",
    "Japan",
    "Singapore",
]

# ─── Outline constraints ─────────────────────────────────────────────────────

HEADING_LEVELS = ("H2", "H3")
SCORE_MIN = 0
SCORE_MAX = 100

# ─── Excel Styling ───────────────────────────────────────────────────────────

EXCEL_STYLES = {
    "header_color": "366092",
    "header_font_color": "FFFFFF",
}
