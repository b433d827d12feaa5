"""
Restaurant API - Middleware Package
====================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Correlation ID for log lines and error bodies
    2. Logging: One access line per request with status and duration
    3. CORS: FastAPI's CORSMiddleware (handles preflight)
"""
