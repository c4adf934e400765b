"""Team name normalization for matching.

Feed and catalog spell team names inconsistently (accents, club
decorations, punctuation). Both sides are reduced to a compact comparison
key so "FC Barcelona" and "Barcelona" compare equal:

    "Atlético de Madrid" -> "atleticodemadrid"
    "FC Barcelona"       -> "barcelona"
    "Brighton & Hove"    -> "brightonhove"
"""

import re
import unicodedata

from linksync.utilities.constants import CLUB_DECORATION_TOKENS

_DECORATION_PATTERN = re.compile(rf"\b(?:{'|'.join(CLUB_DECORATION_TOKENS)})\b")
_NON_ALNUM_PATTERN = re.compile(r"[^a-z0-9]")


def strip_diacritics(text: str) -> str:
    """Decompose (NFD) and drop combining marks: "é" -> "e".

    Characters with no decomposition (ß, ø) are kept as-is here and
    removed later by the [a-z0-9] filter.
    """
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_team_name(raw: str | None) -> str:
    """Reduce a team name to its comparison key.

    Steps: lowercase, strip diacritics, drop whole-word club decorations
    (fc, cf, sc, ac, rc, cd), drop everything outside [a-z0-9].

    Pure and idempotent: normalize_team_name(normalize_team_name(x))
    == normalize_team_name(x).

    Args:
        raw: Team name as spelled by the feed or the catalog

    Returns:
        Comparison key, "" for empty/missing input
    """
    if not raw:
        return ""

    text = strip_diacritics(raw.lower())
    text = _DECORATION_PATTERN.sub("", text)
    text = _NON_ALNUM_PATTERN.sub("", text).strip()

    # "F.C." collapses to "fc" only after punctuation is gone; a bare
    # decoration must normalize to "" or the key stops being a fixed point
    if text in CLUB_DECORATION_TOKENS:
        return ""
    return text


def team_pair_key(home_team: str | None, away_team: str | None) -> str:
    """Key identifying a fixture by its normalized team pair."""
    return f"{normalize_team_name(home_team)}_vs_{normalize_team_name(away_team)}"
