import os
from dotenv import load_dotenv

# Load environment variables from a .env file in the working directory, if any.
# Example .env content:
# PICPRESS_DEFAULT_QUALITY=85
# PICPRESS_DEFAULT_SPEED=6
# PICPRESS_LOG_LEVEL=DEBUG
load_dotenv()

# --- Encoding defaults ---
DEFAULT_QUALITY = int(os.getenv("PICPRESS_DEFAULT_QUALITY", "100"))
DEFAULT_SPEED = int(os.getenv("PICPRESS_DEFAULT_SPEED", "4"))

# Chroma subsampling handed to the AVIF encoder. 4:4:4 keeps full-resolution colour.
AVIF_SUBSAMPLING = os.getenv("PICPRESS_AVIF_SUBSAMPLING", "4:4:4")

# zlib level for PNG output (0-9); PNG is lossless at every level.
PNG_COMPRESS_LEVEL = int(os.getenv("PICPRESS_PNG_COMPRESS_LEVEL", "6"))

# --- Logging ---
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_log_level(value, default="INFO"):
    """Upper-cased level name, or `default` when the value is not a known level."""
    level = (value or "").strip().upper()
    return level if level in LOG_LEVELS else default


LOG_LEVEL = resolve_log_level(os.getenv("PICPRESS_LOG_LEVEL"))
LOG_FORMAT = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
LOG_DATE_FORMAT = '%H:%M:%S'
