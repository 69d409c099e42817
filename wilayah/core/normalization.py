"""Text normalization utilities for Indonesian administrative names."""
import re
import unicodedata
from typing import List, Tuple


# Applied before and after the abbreviation table
SPACING_RULES: List[Tuple[str, str]] = [
    (r"\s+", " "),
    (r"\s*-\s*", "-"),
    (r"\s*/\s*", "/"),
]

# Ordered: earlier expansions produce text matched by later, more specific rules.
# All patterns are applied case-insensitively.
NAME_REPLACEMENTS: List[Tuple[str, str]] = SPACING_RULES + [
    (r"\bKep\.\s*", "Kepulauan "),
    (r"^Daista(?:\.\s*|\s+|$)", "DI "),
    (r"^DI\b", "DI"),
    (r"^DKI\b", "DKI"),
    (r"^Kab(?:\.\s*|\s+)", "Kabupaten "),
    (r"\bAdm(?:\.\s*|\s+)", "Administrasi "),
]

# Known truncations in the primary source
SUFFIX_CORRECTIONS: List[Tuple[str, str]] = [
    (r"Siau Tagulandang B$", "Siau Tagulandang Biaro"),
    (r"Bolaang Mongondow Ut$", "Bolaang Mongondow Utara"),
    (r"Bolaang Mongondow Se$", "Bolaang Mongondow Selatan"),
]

# Connectors kept lower case when not leading
LOWERCASE_WORDS = {"of", "the", "and"}


def _compile(rules: List[Tuple[str, str]]):
    return [(re.compile(pattern, re.IGNORECASE), replacement) for pattern, replacement in rules]


_REPLACEMENTS = _compile(NAME_REPLACEMENTS + SUFFIX_CORRECTIONS)
_SPACING = _compile(SPACING_RULES)

_LEADING_NUMBERING = re.compile(r"^(?:\d+\s*)+")
_SPACED_WORD = re.compile(r"\b(?:[A-Za-z] ){2,}[A-Za-z]\b")
_WORD = re.compile(r"[^\s\-/().]+")


def repair_spaced_words(text: str) -> str:
    """
    Collapse letter runs such as "B A N D U N G" into "BANDUNG".

    Only the spaced run itself is touched; surrounding words keep their spacing.
    """
    return _SPACED_WORD.sub(lambda m: m.group(0).replace(" ", ""), text)


def titleize(text: str) -> str:
    """Capitalize each word of a place name, keeping connectors lower case."""
    position = 0

    def capitalize(match):
        nonlocal position
        word = match.group(0).lower()
        first = position == 0
        position += 1
        if not first and word in LOWERCASE_WORDS:
            return word
        return word[:1].upper() + word[1:]

    return _WORD.sub(capitalize, text)


def normalize_name(name: str, titleize_words: bool = False) -> str:
    """
    Clean a raw administrative name from the gazetteer export.

    Strips row numbering, repairs spaced-out words, optionally titleizes,
    then applies the abbreviation table and the known suffix corrections.
    Running it on its own output returns the output unchanged.

    Args:
        name: Raw name as found in the source row
        titleize_words: Whether to capitalize every word

    Returns:
        Normalized name
    """
    if not name:
        return ""

    output = re.sub(r"\s+", " ", name).strip()
    output = _LEADING_NUMBERING.sub("", output).strip()
    output = repair_spaced_words(output)

    if titleize_words:
        output = titleize(output)

    for pattern, replacement in _REPLACEMENTS:
        output = pattern.sub(replacement, output)

    # Expansions may leave a space next to a hyphen or slash
    for pattern, replacement in _SPACING:
        output = pattern.sub(replacement, output)

    return output.strip()


def slugify(text: str) -> str:
    """
    ASCII, lowercase, hyphen-separated form of a name for URI path segments.

    Args:
        text: Display name

    Returns:
        Slug such as "kabupaten-cilacap"
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))
    text = text.encode("ascii", "ignore").decode("ascii").lower()
    text = re.sub(r"[^a-z0-9\s-]", " ", text)
    text = re.sub(r"[\s-]+", "-", text)

    return text.strip("-")


def name_key(name: str) -> str:
    """Lookup key used by the name index."""
    return re.sub(r"\s+", " ", name).strip().lower()
