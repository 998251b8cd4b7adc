"""
Settings and configuration defaults for Saya.

Every value here can be overridden through an environment variable so that
the surrounding application (or a test run) can point the engine at other
dictionary and enrichment files without touching code.
"""

import os
from pathlib import Path

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Bundled base dictionary (jmdict-simplified JSON subset)
DEFAULT_DICTIONARY_PATH = DATA_DIR / "jmdict-eng-sample.json"

# Environment variable for a custom base dictionary
DICTIONARY_PATH = Path(os.environ.get("SAYA_DICTIONARY_PATH", DEFAULT_DICTIONARY_PATH))

# Supplemental dictionaries, merged on top of the base in order
SUPPLEMENTAL_DICTIONARIES = [
    Path(p) for p in os.environ.get("SAYA_SUPPLEMENTAL_DICTIONARIES", "").split(os.pathsep) if p
]

# Gloss language retained at load time
TARGET_LANGUAGE = os.environ.get("SAYA_LANGUAGE", "eng")

# Enrichment (frequency, pitch accent, JLPT)
ENRICHMENT_ENABLED = os.environ.get("SAYA_ENRICHMENT", "1").lower() not in ("0", "false", "no")
FREQUENCY_PATH = os.environ.get("SAYA_FREQUENCY_PATH") or None
PITCH_ACCENT_PATH = os.environ.get("SAYA_PITCH_ACCENT_PATH") or None
JLPT_PATH = os.environ.get("SAYA_JLPT_PATH") or None

# Debug mode
DEBUG = os.environ.get("SAYA_DEBUG", "").lower() in ("1", "true", "yes")
LOG_LEVEL = "DEBUG" if DEBUG else os.environ.get("SAYA_LOG_LEVEL", "WARNING").upper()

# Longest span the tokenizer emits (longer than any realistic single word)
MAX_SPAN_LENGTH = 10

# Default bounds for analyze(): spans examined and results kept per span
MAX_SPANS = 10
MAX_RESULTS_PER_SPAN = 5

# Default timeout for async analysis, in seconds
ANALYSIS_TIMEOUT = 30.0

# Worker threads for batch lookups
MAX_WORKERS = 4
