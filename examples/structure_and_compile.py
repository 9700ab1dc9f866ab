#!/usr/bin/env python3
"""
Example: Lay out a score with a structure, then compile a clip.

Usage:
    python examples/structure_and_compile.py

Shows the two halves of the pipeline:
1. A library structure orders the unique sections and applies
   transposition and drum removal per section
2. One section's bass line is compiled into the message batch that
   fills a clip
"""

import json

from chuk_mcp_fluid.compiler import batch_to_dicts, create_clip
from chuk_mcp_fluid.structure import StructureLibrary, apply_structure


def main() -> None:
    """Structure a four-section score and compile a bass clip."""
    score = [
        {"nLibrary": {"bass": 36}, "drums": {"k": "k...k..."}},
        {"nLibrary": {"bass": 40}, "drums": {"k": "k.k.k.k.", "s": "..s...s."}},
        {"nLibrary": {"bass": 45}, "drums": {"k": "kkkkkkkk", "s": "..s...s."}},
        {"nLibrary": {"bass": 36}, "drums": {"k": "k......."}},
    ]

    library = StructureLibrary()

    print("Available structures:")
    for meta in library.list_structures():
        print(f"  {meta.name}: {meta.labels}")
    print()

    structured = apply_structure(score, library.get_structure("verse-chorus"))

    print("Structured score:")
    for name, section in structured.named_sections().items():
        drums = "drums" if section["drums"] else "no drums"
        print(f"  {name}: bass={section['nLibrary']['bass']} ({drums})")
    print()

    # One bar of bass, times in whole notes
    chorus = structured.named_sections()["B1"]
    root = chorus["nLibrary"]["bass"]
    notes = [
        {"n": root, "s": 0, "l": "quarter", "v": 100},
        {"n": root + 7, "s": "1/4", "l": "eighth"},
        {"n": root + 12, "s": "3/8", "l": "eighth"},
        {"n": "e2", "s": "1/2", "l": "half"},
    ]
    batch = create_clip("bass", "chorus-2", 0, 8, notes)

    print(f"Message batch ({len(batch)} messages):")
    print(json.dumps(batch_to_dicts(batch), indent=2))


if __name__ == "__main__":
    main()
