import os

TIME_ZONE = float(os.environ.get("AMLICH_TIME_ZONE", "7.0"))  # UTC offset in hours (-12..14)
RULESET_ID = os.environ.get("AMLICH_RULESET", "vn_baseline_v1")
LANG = os.environ.get("AMLICH_LANG", "vi")

SUPPORTED_LANGS = {"vi", "en"}

if not -12.0 <= TIME_ZONE <= 14.0:
    raise ValueError("AMLICH_TIME_ZONE must be between -12 and 14")

if not RULESET_ID.strip():
    raise ValueError("AMLICH_RULESET must not be empty")

if LANG not in SUPPORTED_LANGS:
    raise ValueError("AMLICH_LANG must be vi or en")
