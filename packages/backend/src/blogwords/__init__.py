"""blogwords — live word frequencies for a blog.

Polls a WordPress posts API, counts the words across all posts, and pushes
the resulting frequency map to WebSocket clients whenever it changes.
"""

__version__ = "0.1.0"
