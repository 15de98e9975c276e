"""Real-time infrastructure — Redis snapshot store + pub/sub + WebSocket.

Learn: A published snapshot travels through two paths:
1. Poller → Redis SET (durable copy for late joiners and the HTTP API)
2. Poller → Redis PUBLISH → WebSocket → browser (live delivery)

The poller and the web server never talk to each other directly.
"""
