# =============================================================================
# generation - Form Schema Generation
# =============================================================================
# Turns detection results into form fields and drives the full pipeline:
# - placeholders.py: per-type placeholder text and widget properties
# - recommender.py: FieldRecommender (profile + detection -> FieldSpec)
# - assembler.py: FormAssembler (CSV text -> FormSchema / FormPreview)
#
# Usage:
#   from generation import FormAssembler
#
#   result = FormAssembler().generate("name,email\nAlice,alice@x.com\n")
# =============================================================================

from generation.assembler import FormAssembler, coerce_options
from generation.placeholders import placeholder_for, widget_properties
from generation.recommender import FieldRecommender

__all__ = [
    "FormAssembler",
    "FieldRecommender",
    "coerce_options",
    "placeholder_for",
    "widget_properties",
]
