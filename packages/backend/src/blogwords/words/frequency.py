"""Word frequency counting and comparison."""

import re
from collections import Counter
from typing import Iterable, Optional, Union

from blogwords.words.documents import Document

FrequencyMap = dict[str, int]

# Letters and digits of any script; underscore counts as a separator.
_WORD_RE = re.compile(r"[^\W_]+")


def tokenize(text: str) -> list[str]:
    """Lowercase and split on anything that isn't a letter or digit."""
    return _WORD_RE.findall(text.lower())


def count_words(documents: Iterable[Union[Document, str]]) -> FrequencyMap:
    """Count every word across all documents, case-insensitively.

    Plain strings are accepted alongside Documents. The result is built
    from scratch on every call; keys appear in first-occurrence order.
    """
    counts: Counter[str] = Counter()
    for doc in documents:
        text = doc.text if isinstance(doc, Document) else doc
        counts.update(tokenize(text))
    return dict(counts)


def maps_equal(a: FrequencyMap, b: FrequencyMap) -> bool:
    """Strict equality: same keys, same counts.

    A key missing on one side is never treated as a zero count.
    """
    if len(a) != len(b):
        return False
    for word, count in a.items():
        if word not in b or b[word] != count:
            return False
    return True


def top_words(freq: FrequencyMap, limit: Optional[int] = None) -> list[tuple[str, int]]:
    """Words by descending count; ties keep first-occurrence order."""
    ranked = sorted(freq.items(), key=lambda item: item[1], reverse=True)
    return ranked if limit is None else ranked[:limit]
