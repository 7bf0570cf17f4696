# ===== CONFIGURATION & CONSTANTS =====
import os

# --- General Settings ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CACHE_DIR = os.getenv("CACHE_DIR", "cache")
DEFAULT_CACHE_TTL = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour in seconds
DATA_DIR = os.getenv("DATA_DIR", "data")
TRACKED_GAMES_FILE = os.path.join(DATA_DIR, "tracked_games.json")
UPDATES_FILE = os.path.join(DATA_DIR, "updates.json")
REQUEST_TIMEOUT = 25

# --- Web Scraping & API Headers ---
COMMON_HEADERS = {
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept': 'application/json, text/plain, */*',
    'Accept-Encoding': 'gzip, deflate, br',
    'Connection': 'keep-alive'
}

# --- WordPress Release Sites ---
SITE_CONFIGS = {
    "skidrow": {
        "base_url": "https://www.skidrowreloaded.com/wp-json/wp/v2/posts",
        "type": "skidrow",
        "name": "SkidrowReloaded"
    },
    "freegog": {
        "base_url": "https://freegogpcgames.com/wp-json/wp/v2/posts",
        "type": "freegog",
        "name": "FreeGOGPCGames"
    },
    "gamedrive": {
        "base_url": "https://gamedrive.org/wp-json/wp/v2/posts",
        "type": "gamedrive",
        "name": "GameDrive"
    },
    "steamrip": {
        "base_url": "https://steamrip.com/wp-json/wp/v2/posts",
        "type": "steamrip",
        "name": "SteamRip"
    }
}

MAX_POSTS_PER_SITE = {
    "skidrow": 40,
    "gamedrive": 40,
    "steamrip": 40,
    "freegog": 40,
    "default": 50
}

# --- Title Normalization Vocabulary ---
# Matched as whole words only (a hyphen counts as part of the word).
PIRACY_TAGS = [
    "denuvoless", "cracked", "repack", "fitgirl", "dodi", "empress",
    "codex", "skidrow", "plaza", "rune", "tenoke", "p2p"
]

NOISE_PHRASES = [
    r"free download", r"full version", r"complete edition",
    r"all dlc", r"with dlc", r"dlc included",
    r"pre-installed", r"preinstalled",
    r"update[\s-]+(?:\d+(?:\.\d+)*|one|two|three|four|five|six|seven|eight|nine|ii|iii|iv|v|vi|vii|viii|ix|x)",
    r"hotfix", r"patch"
]

DLC_PHRASES = [
    r"character pack \d*", r"dlc pack \d*", r"expansion pack \d*",
    r"pre-purchase bonus", r"pre-order bonus", r"bonus content",
    r"with all dlc", r"season pass", r"dlc bundle"
]

RELEASE_GROUPS = [
    "GOG", "P2P", "CODEX", "SKIDROW", "REPACK", "FITGIRL", "DODI", "EMPRESS",
    "RUNE", "PLAZA", "HOODLUM", "RAZOR1911", "STEAMPUNKS", "DARKSIDERS",
    "GOLDBERG", "ALI213", "3DM", "PROPHET", "CPY", "SCENE", "CRACKED",
    "FULL", "UNLOCKED", "TENOKE"
]

# Words that do not make two titles different games on their own
EDITION_NOISE_WORDS = [
    "goty", "game of the year", "definitive", "ultimate", "enhanced",
    "complete", "deluxe", "premium", "edition", "version", "remaster",
    "remastered", "remake"
]

# Literal overrides applied after bracket/glyph stripping, before number normalization.
# Ordered (pattern, replacement) pairs, evaluated case-insensitively.
TITLE_OVERRIDES = [
    (r"\b(dragon\s+ball\s+sparking)\s+0\b", r"\1 zero"),
]

# --- Version / Build Detection ---
DATE_VERSION_STALE_DAYS = 7
BUILD_YEAR_RANGE = (1990, 2030)       # a bare 4-digit number in this range is a year
DATE_BUILD_YEAR_RANGE = (2000, 2030)  # YYYYMMDD digit runs treated as dates
MIN_BUILD_DIGITS = 4
MIN_AMBIGUOUS_BUILD_DIGITS = 6
VERSION_SUFFIX_TAGS = ["alpha", "beta", "rc", "final", "release", "hotfix", "patch"]
VERSION_QUALIFIERS = ["repack", "proper", "goty"]

# --- User Input Validation ---
BUILD_MIN_LENGTH = 3
BUILD_MAX_LENGTH = 12

# --- Title Matching ---
SIMILARITY_THRESHOLD = 0.8
