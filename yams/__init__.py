"""
YAMS - Yet Another Model Server

Runs every registered prediction model on a fixed interval, persists the
predictions keyed by model identity and time, and serves them back over HTTP.

Layer Structure:
- Domain: Identities, predictions, model configurations and forecasters
- Application: Tick execution and query use cases, DTOs
- Infrastructure: MongoDB, Redis, Celery and HTTP gateway implementations
- Presentation: FastAPI routers
- Shared: Logging, constants and environment helpers
- Main: Composition root, configuration and entry points
"""
