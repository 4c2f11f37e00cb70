# bibleapi/config.py
import os

from dotenv import load_dotenv

# Load .env
load_dotenv()

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

# ---- VERSION TABLE ----
VERSIONS_FILE = os.getenv(
    "BIBLE_VERSIONS_FILE",
    os.path.join(PACKAGE_DIR, "data", "versions.yml"),
)

# ---- PROVIDER SITES ----
BIBLEGATEWAY_BASE_URL = os.getenv("BIBLEGATEWAY_BASE_URL", "https://classic.biblegateway.com")
BIBLEHUB_BASE_URL = os.getenv("BIBLEHUB_BASE_URL", "https://biblehub.com")
BIBLECOM_BASE_URL = os.getenv("BIBLECOM_BASE_URL", "https://www.bible.com")
BIBLENOW_BASE_URL = os.getenv("BIBLENOW_BASE_URL", "https://biblenow.net")

# ---- HTTP ----
HTTP_TIMEOUT = float(os.getenv("BIBLE_HTTP_TIMEOUT", "15"))  # seconds
USER_AGENT = os.getenv("BIBLE_USER_AGENT", "Mozilla/5.0 (compatible; BibleAIAPI/1.0)")

HEADERS = {
    "User-Agent": USER_AGENT,
}
