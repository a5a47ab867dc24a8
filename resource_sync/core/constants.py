"""
Shared constants for Meme Resource Sync.
"""

# Default remote prefix (jsDelivr GitHub CDN, tag appended directly after "@")
DEFAULT_RESOURCE_URL = "https://cdn.jsdelivr.net/gh/MemeCrafters/meme-generator-rs@"

# Manifest file name under {base_url}v{version}/resources/
MANIFEST_NAME = "resources.json"

# Maximum simultaneous downloads per sync call (shared across categories)
MAX_CONCURRENT_DOWNLOADS = 32

# Read size when hashing local files
HASH_CHUNK_SIZE = 65536

# Read size when streaming response bodies to disk
DOWNLOAD_CHUNK_SIZE = 32768

# Prefix and suffix for in-progress downloads (moved into place once complete).
# The part between them is random and the file is created exclusively.
DOWNLOAD_PREFIX = "_download_"
DOWNLOAD_SUFFIX = ".part"
