"""
CHUK Fluid - score structuring and DAW message compilation.

    score sections + structure → structured score → notes → message batches
"""

__version__ = "0.1.0"
