"""Blog API access.

Learn: The fetcher never raises for an expected failure. It returns a
FetchResult so the poller can tell "the blog has no posts" apart from
"the blog could not be reached".
"""
