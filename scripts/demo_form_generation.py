#!/usr/bin/env python3
# =============================================================================
# scripts/demo_form_generation.py - Form Generation Demo
# =============================================================================
# Runs the full CSV -> form schema pipeline and prints what was inferred.
#
# Usage:
#   python scripts/demo_form_generation.py <path_to_csv>
#   python scripts/demo_form_generation.py                  # Uses demo data
#   python scripts/demo_form_generation.py data.csv --json  # Dump schema JSON
# =============================================================================

import os
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from core.config import configure_logging, get_settings
from core.models import FieldOverride, FieldType, GenerationOptions
from generation import FormAssembler

DEMO_CSV = """name,email,phone,signup_date,plan,rating,website,notes
Alice Johnson,alice@example.com,+1 555 010 2000,01/15/2024,pro,5,https://alice.dev,Prefers email contact
Bob Smith,bob@example.com,+1 555 010 2001,02/03/2024,free,4,https://bob.io,
Carol White,carol@example.com,+1 555 010 2002,02/20/2024,pro,5,https://carol.net,Asked about invoices
Dan Brown,dan@example.com,+1 555 010 2003,03/11/2024,team,3,https://dan.org,
Eve Black,eve@example.com,+1 555 010 2004,03/28/2024,free,4,https://eve.co,Beta tester
"""


def print_header(title: str):
    print(f"\n{'=' * 60}")
    print(title)
    print(f"{'=' * 60}")


def main():
    settings = get_settings()
    configure_logging(settings)

    args = [a for a in sys.argv[1:] if not a.startswith("--")]
    dump_json = "--json" in sys.argv

    if args:
        path = Path(args[0])
        content = path.read_text(encoding="utf-8")
        title = f"Form for {path.stem}"
    else:
        content = DEMO_CSV
        title = "Customer Signup"

    assembler = FormAssembler(settings)

    # 1. PREVIEW
    print_header("PREVIEW")
    preview_result = assembler.preview(content)
    if not preview_result.success:
        print(f"Preview failed: [{preview_result.error.code.value}] {preview_result.error.message}")
        sys.exit(1)

    preview = preview_result.data
    print(f"Estimated fields: {preview.estimated_fields}")
    print(f"Complexity: {preview.complexity_score:.2f}")
    print(f"User interaction required: {preview.user_interaction_required}")
    for improvement in preview.suggested_improvements:
        print(f"  - {improvement}")

    # 2. GENERATE
    print_header("GENERATE")
    options = GenerationOptions(
        title=title,
        field_overrides=[] if args else [FieldOverride(column_index=4, field_type=FieldType.RADIO)],
    )
    result = assembler.generate(content, options)
    if not result.success:
        error = result.error
        print(f"Generation failed: [{error.code.value}] {error.message}")
        if error.suggestion:
            print(f"Suggestion: {error.suggestion}")
        sys.exit(1)

    schema = result.data
    for spec in schema.fields:
        flags = "required" if spec.required else "optional"
        if spec.overridden:
            flags += ", pinned"
        print(f"{spec.label:<15} {spec.field_type.value:<12} {spec.confidence:>5.0%}  ({flags})")
        if spec.options:
            print(f"{'':<15} options: {', '.join(spec.options)}")
        for rule in spec.validation_rules:
            print(f"{'':<15} {rule.kind.value}: {rule.value}")

    print(f"\nAverage confidence: {schema.metadata.average_confidence:.0%}")
    print(f"Quality: {schema.quality_metrics.model_dump()}")

    if result.warnings:
        print("\nWarnings:")
        for warning in result.warnings:
            print(f"  - {warning}")

    if schema.metadata.recommendations:
        print("\nRecommendations:")
        for recommendation in schema.metadata.recommendations:
            print(f"  - {recommendation}")

    print(f"\nFinished in {result.metadata['execution_time_ms']:.1f}ms")

    if dump_json:
        print_header("SCHEMA JSON")
        print(schema.model_dump_json(indent=2))


if __name__ == "__main__":
    main()
