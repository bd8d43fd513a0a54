import os
import dotenv

# Load environment variables from .env file
dotenv.load_dotenv()

# Provider Configuration
# OPENAI_API_KEY is read by the client factory on each request so that
# demo mode follows the live environment.
VISION_MODEL = os.getenv("VISION_MODEL", "gpt-4o")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "dall-e-3")
IMAGE_SIZE = os.getenv("IMAGE_SIZE", "1024x1024")
IMAGE_QUALITY = os.getenv("IMAGE_QUALITY", "hd")
ANALYSIS_MAX_TOKENS = int(os.getenv("ANALYSIS_MAX_TOKENS", "500"))

# Upload limits
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10 MiB per file
UPLOAD_FIELDS = ("dress", "person")

# Variation output
VARIATION_COUNT = 5
PLACEHOLDER_IMAGE_URL = "/fashion-placeholder.svg"
PLACEHOLDER_IMAGE_PATH = os.path.join(os.path.dirname(__file__), "static", "fashion-placeholder.svg")

# Download proxy
DOWNLOAD_FILENAME = "fashion-variation.jpg"
DOWNLOAD_DEFAULT_CONTENT_TYPE = "image/jpeg"

# Misc endpoints
DEFAULT_PING_MESSAGE = "ping"

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() in {"1", "true", "yes"}
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "fashion_variations.log")

# CORS Origins (comma separated, "*" allows any origin)
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]
