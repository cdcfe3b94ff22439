"""algorithms subpackage — concrete similarity algorithms.

Importing this package registers every built-in algorithm in the default
registry (``strcompare.registry.default_registry()``).  Each module holds one
family; the compute functions stay importable for direct use.

Example::

    from strcompare.algorithms import levenshtein
    from strcompare.options import MetricOptions
    from strcompare.pool import ScratchPool

    levenshtein("kitten", "sitting", MetricOptions(), ScratchPool()).raw["dist"]  # 3
"""

from __future__ import annotations

from strcompare.algorithms.alignment import needleman_wunsch, smith_waterman
from strcompare.algorithms.edit import damerau, levenshtein
from strcompare.algorithms.jaro import jaro_winkler
from strcompare.algorithms.overlap import cosine, dice, jaccard, qgram
from strcompare.algorithms.positional import hamming
from strcompare.algorithms.sequence import lcs

__all__ = [
    "cosine",
    "damerau",
    "dice",
    "hamming",
    "jaccard",
    "jaro_winkler",
    "lcs",
    "levenshtein",
    "needleman_wunsch",
    "qgram",
    "smith_waterman",
]
