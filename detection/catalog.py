# =============================================================================
# detection/catalog.py - Detection Catalog
# =============================================================================
# Read-only data the detection strategies consult:
#
#   - PATTERN_RULES: value regexes in priority order
#   - SEMANTIC_KEYWORDS: header keywords in lookup order
#   - VALIDATION_PATTERNS: regexes materialized as pattern rules per type
#
# Everything here is built once (get_catalog() is cached) and never mutated,
# so concurrent pipeline runs share it safely.
# =============================================================================

import re
from dataclasses import dataclass, field
from functools import cached_property, lru_cache
from types import MappingProxyType
from typing import Mapping

from core.models import FieldType


# =============================================================================
# Catalog Entries
# =============================================================================

@dataclass(frozen=True)
class PatternRule:
    """A value regex that votes for a field type."""
    name: str
    regex: re.Pattern
    field_type: FieldType
    confidence: float
    reasoning: str

    def matches(self, value: str) -> bool:
        return bool(self.regex.match(value.strip()))


@dataclass(frozen=True)
class SemanticKeyword:
    """A header keyword that votes for a field type."""
    keyword: str
    field_type: FieldType
    confidence: float
    reasoning: str


@dataclass(frozen=True)
class ValidationPattern:
    """Regex turned into a pattern validation rule for a field type."""
    pattern: str
    message: str
    confidence: float


# =============================================================================
# Regex Sources
# =============================================================================

EMAIL_REGEX = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
PHONE_REGEX = r"^[\+]?[1-9][\d\s\-\(\)]{7,15}$"
URL_REGEX = r"^https?://.+"
ISO_DATE_REGEX = r"^\d{4}-\d{2}-\d{2}$"
US_DATE_REGEX = r"^\d{2}/\d{2}/\d{4}$"
CURRENCY_REGEX = r"^\$?[\d,]+(\.\d{2})?$"
ZIPCODE_REGEX = r"^\d{5}(-\d{4})?$"
PERCENTAGE_REGEX = r"^-?\d+(\.\d+)?%$"
NUMBER_REGEX = r"^-?\d+(\.\d+)?$"


def _rule(name: str, pattern: str, field_type: FieldType, confidence: float, reasoning: str) -> PatternRule:
    return PatternRule(
        name=name,
        regex=re.compile(pattern),
        field_type=field_type,
        confidence=confidence,
        reasoning=reasoning,
    )


# Priority order matters: on equal scores the earlier rule wins
PATTERN_RULES: tuple[PatternRule, ...] = (
    _rule("email", EMAIL_REGEX, FieldType.EMAIL, 0.95, "Email pattern detected"),
    _rule("phone", PHONE_REGEX, FieldType.PHONE, 0.90, "Phone number pattern detected"),
    _rule("url", URL_REGEX, FieldType.URL, 0.95, "URL pattern detected"),
    _rule("date_iso", ISO_DATE_REGEX, FieldType.DATE, 0.90, "ISO date pattern detected"),
    _rule("date_us", US_DATE_REGEX, FieldType.DATE, 0.85, "MM/DD/YYYY date pattern detected"),
    _rule("currency", CURRENCY_REGEX, FieldType.MONEY, 0.90, "Currency pattern detected"),
    _rule("zipcode", ZIPCODE_REGEX, FieldType.ZIPCODE, 0.95, "ZIP code pattern detected"),
    _rule("percentage", PERCENTAGE_REGEX, FieldType.PERCENTAGE, 0.80, "Percentage pattern detected"),
    _rule("number", NUMBER_REGEX, FieldType.NUMBER, 0.85, "Numeric pattern detected"),
)


def _kw(keyword: str, field_type: FieldType, confidence: float, reasoning: str) -> SemanticKeyword:
    return SemanticKeyword(keyword, field_type, confidence, reasoning)


# Lookup order matters: the first substring match wins
SEMANTIC_KEYWORDS: tuple[SemanticKeyword, ...] = (
    # Contact information
    _kw("email", FieldType.EMAIL, 0.95, "Column name suggests email field"),
    _kw("phone", FieldType.PHONE, 0.90, "Column name suggests phone field"),
    _kw("address", FieldType.ADDRESS, 0.90, "Column name suggests address field"),
    _kw("zip", FieldType.ZIPCODE, 0.90, "Column name suggests ZIP code field"),
    _kw("country", FieldType.COUNTRY, 0.90, "Column name suggests country field"),
    _kw("state", FieldType.STATE, 0.90, "Column name suggests state field"),

    # Financial
    _kw("price", FieldType.MONEY, 0.90, "Column name suggests price field"),
    _kw("cost", FieldType.MONEY, 0.90, "Column name suggests cost field"),
    _kw("amount", FieldType.MONEY, 0.85, "Column name suggests amount field"),
    _kw("percentage", FieldType.PERCENTAGE, 0.90, "Column name suggests percentage field"),

    # Dates and times
    _kw("date", FieldType.DATE, 0.90, "Column name suggests date field"),
    _kw("time", FieldType.TIME, 0.90, "Column name suggests time field"),
    _kw("created", FieldType.DATETIME, 0.85, "Column name suggests creation timestamp"),
    _kw("updated", FieldType.DATETIME, 0.85, "Column name suggests update timestamp"),

    # URLs and links
    _kw("url", FieldType.URL, 0.95, "Column name suggests URL field"),
    _kw("link", FieldType.URL, 0.90, "Column name suggests link field"),
    _kw("website", FieldType.URL, 0.90, "Column name suggests website field"),

    # Text content
    _kw("description", FieldType.TEXTAREA, 0.80, "Column name suggests description field"),
    _kw("comment", FieldType.TEXTAREA, 0.80, "Column name suggests comment field"),
    _kw("note", FieldType.TEXTAREA, 0.80, "Column name suggests note field"),
    _kw("message", FieldType.TEXTAREA, 0.80, "Column name suggests message field"),

    # Boolean and choice fields
    _kw("active", FieldType.YESNO, 0.80, "Column name suggests boolean field"),
    _kw("enabled", FieldType.YESNO, 0.80, "Column name suggests boolean field"),
    _kw("status", FieldType.SELECT, 0.70, "Column name suggests status selection"),
    _kw("type", FieldType.SELECT, 0.70, "Column name suggests type selection"),
    _kw("category", FieldType.SELECT, 0.70, "Column name suggests category selection"),

    # Ratings and scales
    _kw("rating", FieldType.RATING, 0.90, "Column name suggests rating field"),
    _kw("score", FieldType.RATING, 0.80, "Column name suggests score field"),
    _kw("priority", FieldType.SLIDER, 0.70, "Column name suggests priority scale"),

    # Files and media
    _kw("image", FieldType.IMAGE, 0.90, "Column name suggests image field"),
    _kw("photo", FieldType.IMAGE, 0.90, "Column name suggests photo field"),
    _kw("file", FieldType.FILE, 0.90, "Column name suggests file field"),
    _kw("document", FieldType.FILE, 0.90, "Column name suggests document field"),
    _kw("signature", FieldType.SIGNATURE, 0.95, "Column name suggests signature field"),
)

# Partial header matches are trusted less than exact ones
PARTIAL_MATCH_FACTOR = 0.8

VALIDATION_PATTERNS: Mapping[FieldType, ValidationPattern] = MappingProxyType({
    FieldType.EMAIL: ValidationPattern(EMAIL_REGEX, "Please enter a valid email address", 0.95),
    FieldType.PHONE: ValidationPattern(PHONE_REGEX, "Please enter a valid phone number", 0.90),
    FieldType.URL: ValidationPattern(URL_REGEX, "Please enter a valid URL", 0.95),
    FieldType.NUMBER: ValidationPattern(NUMBER_REGEX, "Please enter a valid number", 0.90),
})


# =============================================================================
# Catalog
# =============================================================================

@dataclass(frozen=True)
class DetectionCatalog:
    """
    Immutable bundle of everything the strategies look up.

    Pass a custom catalog to FieldTypeDetector to extend the keyword table
    or pattern list without touching module state.
    """
    pattern_rules: tuple[PatternRule, ...] = PATTERN_RULES
    semantic_keywords: tuple[SemanticKeyword, ...] = SEMANTIC_KEYWORDS
    validation_patterns: Mapping[FieldType, ValidationPattern] = field(
        default_factory=lambda: VALIDATION_PATTERNS
    )
    partial_match_factor: float = PARTIAL_MATCH_FACTOR

    @cached_property
    def keyword_index(self) -> Mapping[str, SemanticKeyword]:
        """Keyword -> entry, first entry wins for duplicated keywords."""
        lookup: dict[str, SemanticKeyword] = {}
        for entry in self.semantic_keywords:
            lookup.setdefault(entry.keyword, entry)
        return MappingProxyType(lookup)

    def rule_for_pattern(self, pattern: str) -> PatternRule | None:
        for rule in self.pattern_rules:
            if rule.regex.pattern == pattern:
                return rule
        return None


@lru_cache
def get_catalog() -> DetectionCatalog:
    """Shared default catalog, built on first use."""
    return DetectionCatalog()
