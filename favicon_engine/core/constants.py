"""Core constants: cache key structure, icon search tables, content types.

Single source of truth for literal values shared by the cache, discovery
and synthesis layers.
"""

# Bump to invalidate every cached entry when the key format changes.
CACHE_KEY_VERSION = "v1"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Cache key types
CACHE_PREFIX_FAVICON = "favicon"
CACHE_PREFIX_FAVICON_NEGATIVE = "favicon-negative"
CACHE_PREFIX_COLOR = "color"

# Favicon variant key parts; placed before the path so no path can mimic them
GRAYSCALE_KEY_PART = "gray"
COLOR_KEY_PART = "color"

# Icon file names in priority order (lower index wins)
ICON_PATTERNS: tuple[str, ...] = (
    "favicon.ico",
    "favicon.png",
    "favicon.svg",
    "icon.png",
    "icon.ico",
    "logo.png",
    "logo.svg",
)

# Conventional icon locations probed by the quick search ("" is the project root)
COMMON_ICON_DIRS: tuple[str, ...] = (
    "",
    "public",
    "static",
    "assets",
    "frontend/public",
    "client/public",
    "src/assets",
    "web",
    "www",
    "images",
    "img",
    "app/static",
    "app/assets",
    "src/static",
)

# Build/dependency directories never entered by the full scan
IGNORED_DIRS: frozenset[str] = frozenset({
    "node_modules",
    ".git",
    "vendor",
    ".next",
    ".nuxt",
    "dist",
    "build",
    "coverage",
    ".cache",
    "__pycache__",
    ".pytest_cache",
    "venv",
    ".venv",
    "target",
})

# Emitted content types
CONTENT_TYPE_PNG = "image/png"
CONTENT_TYPE_ICO = "image/x-icon"
CONTENT_TYPE_SVG = "image/svg+xml"
ICON_CONTENT_TYPES: frozenset[str] = frozenset({
    CONTENT_TYPE_PNG,
    CONTENT_TYPE_ICO,
    CONTENT_TYPE_SVG,
})

# Badge text used when a name yields no usable initials
BADGE_PLACEHOLDER_INITIALS = "VS"

# Longest display name considered for initials
MAX_DISPLAY_NAME_LENGTH = 100
