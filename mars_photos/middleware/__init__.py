"""
Mars Photo API: Middleware Package
====================================

What:  Cross-cutting concerns applied to every request.

Middleware chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    The request ID is assigned before the logging middleware runs, so
    every access log line and every handler log line share the same id.
"""
