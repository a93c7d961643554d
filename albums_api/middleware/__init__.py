# Middleware package init
"""
Albums API — Middleware Package
================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters):
    Request → [Request ID] → [Logging] → [Unexpected Error] → [GZip] → [CORS] → Route Handler

    - Request ID first, so every later log line can carry it
    - Logging captures the final status and duration on the way back out
    - Unexpected Error turns uncaught exceptions into the 500 JSON body
      before they reach Logging or Request ID
"""
