"""Word counting — the pure part of the pipeline.

Learn: Nothing in this package does I/O. Documents go in, a frequency
map comes out, and two maps can be compared. That keeps the poller's
change detection trivially testable.
"""

from blogwords.words.documents import Document
from blogwords.words.frequency import (
    FrequencyMap,
    count_words,
    maps_equal,
    tokenize,
    top_words,
)

__all__ = [
    "Document",
    "FrequencyMap",
    "count_words",
    "maps_equal",
    "tokenize",
    "top_words",
]
