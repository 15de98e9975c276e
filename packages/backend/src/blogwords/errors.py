"""Domain exceptions.

Learn: Only FetchError is recovered inside the poller (a failed fetch is
logged and the tick carries on). PublishError surfaces to whoever called
the tick; the scheduler logs it and keeps going. MalformedSnapshotError
belongs to readers of the stored snapshot.
"""


class BlogWordsError(Exception):
    pass


class FetchError(BlogWordsError):
    """The blog API was unreachable or returned something that isn't a post list."""


class PublishError(BlogWordsError):
    """Writing the snapshot to Redis failed."""


class MalformedSnapshotError(BlogWordsError):
    """The stored snapshot could not be parsed back into a frequency map."""
