# =============================================================================
# generation/placeholders.py - Per-Type Field Templates
# =============================================================================
# Read-only lookup tables the recommender uses to dress a field:
#
#   - PLACEHOLDER_TEMPLATES: placeholder text per field type ("{header}" is
#     replaced with the lower-cased column name)
#   - WIDGET_PROPERTIES: type-specific widget settings
#   - DATE_FORMAT: display format hint for date fields
# =============================================================================

from types import MappingProxyType
from typing import Any, Mapping

from core.models import FieldType

HEADER_TEMPLATE = "Enter {header}..."

PLACEHOLDER_TEMPLATES: Mapping[FieldType, str] = MappingProxyType({
    FieldType.TEXT: HEADER_TEMPLATE,
    FieldType.EMAIL: "Enter email address...",
    FieldType.PASSWORD: "Enter password...",
    FieldType.NUMBER: "Enter number...",
    FieldType.URL: "https://example.com",
    FieldType.SEARCH: "Search...",
    FieldType.DATE: "Select date...",
    FieldType.DATETIME: "Select date and time...",
    FieldType.TIME: "Select time...",
    FieldType.MONTH: "Select month...",
    FieldType.WEEK: "Select week...",
    FieldType.YEAR: "Select year...",
    FieldType.TEXTAREA: HEADER_TEMPLATE,
    FieldType.RICH_TEXT: HEADER_TEMPLATE,
    FieldType.MARKDOWN: HEADER_TEMPLATE,
    FieldType.SELECT: "Select an option...",
    FieldType.MULTISELECT: "Select options...",
    FieldType.CHECKBOX: "Select options...",
    FieldType.RADIO: "Select an option...",
    FieldType.YESNO: "Select Yes or No",
    FieldType.TOGGLE: "Toggle on/off",
    FieldType.MONEY: "$0.00",
    FieldType.PERCENTAGE: "0%",
    FieldType.CURRENCY: "$0.00",
    FieldType.PHONE: "(555) 123-4567",
    FieldType.ADDRESS: "Enter address...",
    FieldType.COUNTRY: "Select country...",
    FieldType.STATE: "Select state...",
    FieldType.ZIPCODE: "12345",
    FieldType.FILE: "Choose file...",
    FieldType.IMAGE: "Choose image...",
    FieldType.SIGNATURE: "Type your name...",
    FieldType.AUDIO: "Choose audio file...",
    FieldType.VIDEO: "Choose video file...",
    FieldType.RATING: "Rate from 1-5",
    FieldType.SLIDER: "Adjust slider",
    FieldType.RANGE: "Select range",
    FieldType.LIKERT: "Select option",
    FieldType.COLOR: "#000000",
    FieldType.TAGS: "Add tags...",
    FieldType.AUTOCOMPLETE: "Start typing...",
    FieldType.LOCATION: "Enter location...",
    FieldType.MATRIX: "Select options...",
})

WIDGET_PROPERTIES: Mapping[FieldType, Mapping[str, Any]] = MappingProxyType({
    FieldType.RATING: MappingProxyType({"rating_max": 5}),
    FieldType.SLIDER: MappingProxyType({"slider_min": 0, "slider_max": 100, "slider_step": 1}),
    FieldType.TEXTAREA: MappingProxyType({"textarea_rows": 4}),
    FieldType.MONEY: MappingProxyType({"currency": "USD"}),
    FieldType.CURRENCY: MappingProxyType({"currency": "USD"}),
    FieldType.PERCENTAGE: MappingProxyType({"percentage_decimals": 2}),
})

DATE_FORMAT = "mm/dd/yyyy"


def placeholder_for(field_type: FieldType, header: str) -> str:
    """
    Placeholder text for a field.

    Example:
        placeholder_for(FieldType.EMAIL, "Email")      # "Enter email address..."
        placeholder_for(FieldType.TEXT, "Full Name")   # "Enter full name..."
    """
    template = PLACEHOLDER_TEMPLATES.get(field_type, HEADER_TEMPLATE)
    return template.format(header=header.lower())


def widget_properties(field_type: FieldType) -> dict[str, Any]:
    """Fresh copy of the widget properties for a field type."""
    return dict(WIDGET_PROPERTIES.get(field_type, {}))
