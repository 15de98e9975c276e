"""Blog poller — the change-detection loop and its scheduler.

Learn: The poller is its own process, separate from the WebSocket
server. It only needs the blog API and Redis. If it dies, connected
clients keep the last snapshot and the API keeps serving it.
"""
