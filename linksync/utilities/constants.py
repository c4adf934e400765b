"""Matching and naming constants.

Provider signatures, display logos and link names are fixed by the
consuming app; change them here only together with the app.
"""

from linksync.core.types import ProviderBucket

# =============================================================================
# TEAM NAME NORMALIZATION
# Club-name decorations removed when they appear as whole words.
# =============================================================================

CLUB_DECORATION_TOKENS: tuple[str, ...] = ("fc", "cf", "sc", "ac", "rc", "cd")


# =============================================================================
# PROVIDER SIGNATURES
# Tested in this order; the first match wins.
# Format: (bucket, field, substring) where field is "referer" or "url"
# =============================================================================

PROVIDER_SIGNATURES: tuple[tuple[ProviderBucket, str, str], ...] = (
    # FMP urls are opaque; the referer header identifies them
    (ProviderBucket.FMP, "referer", "fmp.live"),
    (ProviderBucket.SOCO, "url", "pull.niues.live"),
    (ProviderBucket.OK9, "url", "cdnok9.com"),
)

PROVIDER_LOGOS: dict[ProviderBucket, str] = {
    ProviderBucket.FMP: "https://i.ibb.co/CFsJDtb/1000315330.png",
    ProviderBucket.SOCO: "https://i.ibb.co/DgvNg0k0/1000315332.png",
    ProviderBucket.OK9: "https://i.ibb.co/k66hvS7j/1000313353.jpg",
}

DEFAULT_LINK_PRIORITY: tuple[ProviderBucket, ...] = (
    ProviderBucket.FMP,
    ProviderBucket.SOCO,
    ProviderBucket.OK9,
)


# =============================================================================
# LINK DISPLAY NAMES
# =============================================================================

PRIMARY_LINK_NAME = "SPORTIFy TV"
SECONDARY_LINK_NAME = "SPORTIFy TV+ HD"

BRAND_TOKEN = "SPORTIFy"

BRAND_ADJECTIVES: tuple[str, ...] = (
    "FAST",
    "PRO",
    "MAX",
    "ULTRA",
    "PLUS",
    "GOLD",
    "LIVE",
    "PRIME",
    "TURBO",
    "STAR",
)
CRICKET_ADJECTIVES: tuple[str, ...] = ("CRICKET", "T20", "MATCH")
FOOTBALL_ADJECTIVES: tuple[str, ...] = ("FOOTBALL", "SOCCER", "GOAL")
RESOLUTIONS: tuple[str, ...] = ("HD", "FHD", "SD")

# Chance that the general adjective is swapped for a sport-specific one
SPORT_ADJECTIVE_CHANCE = 0.3


# =============================================================================
# MATCHING
# =============================================================================

MATCH_WINDOW_MS = 24 * 60 * 60 * 1000  # Feed and catalog start must be closer than this

# Near-miss diagnostics only report candidates scoring at least this much
NEAR_MISS_MIN_SCORE = 60.0
