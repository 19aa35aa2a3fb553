"""Central configuration for the image smoothing filter.

All tunable parameters are defined here with descriptive names.
The filtering core itself accepts any odd kernel size; the values below
are the application policy enforced by FilterConfig and the entry points.
"""

# =============================================================================
# SMOOTHING
# =============================================================================

# Kernel sizes offered to users (square, odd, uniform-average)
ALLOWED_KERNEL_SIZES = (3, 5, 7, 9)

# Kernel size used when none is requested
DEFAULT_KERNEL_SIZE = 3

# Human-readable labels shown next to each kernel size
KERNEL_SIZE_LABELS = {
    3: ("Subtle", "Light smoothing"),
    5: ("Moderate", "Medium smoothing"),
    7: ("Strong", "Heavy smoothing"),
    9: ("Extreme", "Very heavy smoothing"),
}

# =============================================================================
# GRAYSCALE
# =============================================================================

# ITU-R BT.601 luma weights for (R, G, B). They sum to exactly 1.0.
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

# Grayscale is off unless explicitly toggled on
DEFAULT_GRAYSCALE = False

# =============================================================================
# UPLOADS
# =============================================================================

# Maximum accepted upload size in bytes (10 MB)
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# File extensions picked up when processing a directory
SUPPORTED_IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tif", ".tiff")

# =============================================================================
# EXPORT
# =============================================================================

# Prefix of the generated download filename (a timestamp is appended)
EXPORT_FILENAME_PREFIX = "smoothed-image"

# =============================================================================
# WEB SERVER
# =============================================================================

WEB_HOST = "localhost"
WEB_PORT = 30003
