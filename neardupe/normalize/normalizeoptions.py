"""Normalization options.

NormalizeOptions is an immutable value object. Build variations with
``dataclasses.replace(default_normalize_options(), lowercase=False)`` rather
than mutating a shared default.
"""

from dataclasses import dataclass, fields, replace
from typing import Tuple


# Upper bound on the variants kept for one field. Key composition takes the
# Cartesian product of several fields, so this bounds the key count.
MAX_VARIANTS_PER_FIELD = 32


# Address component bits. The variant expander applies a dictionary category
# to a field only when the field's bit is in ``address_components``.
ADDRESS_NONE = 0
ADDRESS_ANY = 1 << 0
ADDRESS_NAME = 1 << 1
ADDRESS_HOUSE_NUMBER = 1 << 2
ADDRESS_STREET = 1 << 3
ADDRESS_UNIT = 1 << 4
ADDRESS_LEVEL = 1 << 5
ADDRESS_STAIRCASE = 1 << 6
ADDRESS_ENTRANCE = 1 << 7
ADDRESS_CATEGORY = 1 << 8
ADDRESS_NEAR = 1 << 9
ADDRESS_TOPONYM = 1 << 13
ADDRESS_POSTAL_CODE = 1 << 14
ADDRESS_PO_BOX = 1 << 15
ADDRESS_ALL = (1 << 16) - 1

# Label -> component bit
LABEL_COMPONENTS = {
    "house": ADDRESS_NAME,
    "name": ADDRESS_NAME,
    "house_number": ADDRESS_HOUSE_NUMBER,
    "road": ADDRESS_STREET,
    "unit": ADDRESS_UNIT,
    "level": ADDRESS_LEVEL,
    "staircase": ADDRESS_STAIRCASE,
    "entrance": ADDRESS_ENTRANCE,
    "po_box": ADDRESS_PO_BOX,
    "postcode": ADDRESS_POSTAL_CODE,
    "suburb": ADDRESS_TOPONYM,
    "city_district": ADDRESS_TOPONYM,
    "city": ADDRESS_TOPONYM,
    "island": ADDRESS_TOPONYM,
    "state_district": ADDRESS_TOPONYM,
    "state": ADDRESS_TOPONYM,
    "country_region": ADDRESS_TOPONYM,
    "country": ADDRESS_TOPONYM,
    "world_region": ADDRESS_TOPONYM,
}


def component_enabled(mask: int, label: str) -> bool:
    """True when ``label``'s component bit is selected by ``mask``.

    ADDRESS_ANY selects every component.
    """
    if mask & ADDRESS_ANY:
        return True
    return bool(mask & LABEL_COMPONENTS.get(label, ADDRESS_NONE))


@dataclass(frozen=True)
class NormalizeOptions:
    """Toggles for the normalizer and variant expander.

    Each flag is independent:

        languages: working language codes; empty means "detect" or English
        address_components: bit mask of components dictionaries apply to
        latin_ascii: fold Latin letters without decomposition (ß -> ss)
        transliterate: append a Latin rendering of non-Latin text
        strip_accents: replace accented letters by their base letters; when
            off the accent-free form is still appended as an alternative
        decompose: NFKC compatibility folding instead of NFC
        lowercase: lowercase everything
        trim_string: strip the ends and collapse inner whitespace
        replace_word_hyphens: "jean-paul" -> "jean paul"
        delete_word_hyphens: "jean-paul" -> "jeanpaul"
        replace_numeric_hyphens: "150-0042" -> "150 0042"
        delete_numeric_hyphens: "150-0042" -> "1500042"
        split_alpha_from_numeric: "6th" -> "6 th", "7eleven" -> "7-eleven"
        delete_final_periods: "st." -> "st"
        delete_acronym_periods: "u.s.a." -> "usa"
        drop_english_possessives: "mcdonald's" -> "mcdonald"
        delete_apostrophes: "mcdonald's" -> "mcdonalds"
        expand_numex: "six" -> "6", "fifth" -> "5th"
        roman_numerals: "IV" -> "iv", "4"
    """

    languages: Tuple[str, ...] = ()
    address_components: int = ADDRESS_ANY
    latin_ascii: bool = True
    transliterate: bool = True
    strip_accents: bool = True
    decompose: bool = True
    lowercase: bool = True
    trim_string: bool = True
    replace_word_hyphens: bool = True
    delete_word_hyphens: bool = True
    replace_numeric_hyphens: bool = False
    delete_numeric_hyphens: bool = False
    split_alpha_from_numeric: bool = True
    delete_final_periods: bool = True
    delete_acronym_periods: bool = True
    drop_english_possessives: bool = True
    delete_apostrophes: bool = True
    expand_numex: bool = True
    roman_numerals: bool = True

    def with_languages(self, languages) -> "NormalizeOptions":
        return replace(self, languages=tuple(languages))


def default_normalize_options() -> NormalizeOptions:
    """Return a fresh copy of the default normalization options."""
    return NormalizeOptions()


def all_off_normalize_options(**overrides) -> NormalizeOptions:
    """Options with every transformation disabled, then ``overrides`` applied.

    Examples:
        >>> all_off_normalize_options(lowercase=True).lowercase
        True
    """
    flags = {
        f.name: False
        for f in fields(NormalizeOptions)
        if isinstance(f.default, bool)
    }
    flags.update(overrides)
    return NormalizeOptions(**flags)


# Per-field overrides used when normalizing address components for hashing.
# House numbers and postcodes are never Roman numerals, and postcodes never
# contain spelled numbers.
FIELD_OVERRIDES = {
    "house_number": {"split_alpha_from_numeric": False, "roman_numerals": False},
    "postcode": {"split_alpha_from_numeric": False, "roman_numerals": False, "expand_numex": False},
    "road": {"split_alpha_from_numeric": False},
    "unit": {"split_alpha_from_numeric": False},
    "level": {"split_alpha_from_numeric": False},
}


def options_for_field(options: NormalizeOptions, label: str) -> NormalizeOptions:
    overrides = FIELD_OVERRIDES.get(label)
    return replace(options, **overrides) if overrides else options


__all__ = [
    "MAX_VARIANTS_PER_FIELD",
    "ADDRESS_NONE",
    "ADDRESS_ANY",
    "ADDRESS_NAME",
    "ADDRESS_HOUSE_NUMBER",
    "ADDRESS_STREET",
    "ADDRESS_UNIT",
    "ADDRESS_LEVEL",
    "ADDRESS_STAIRCASE",
    "ADDRESS_ENTRANCE",
    "ADDRESS_CATEGORY",
    "ADDRESS_NEAR",
    "ADDRESS_TOPONYM",
    "ADDRESS_POSTAL_CODE",
    "ADDRESS_PO_BOX",
    "ADDRESS_ALL",
    "LABEL_COMPONENTS",
    "component_enabled",
    "NormalizeOptions",
    "default_normalize_options",
    "all_off_normalize_options",
    "options_for_field",
]
