# Middleware package init
"""
PicTweet Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Execution order for an incoming request:
    [Rate Limit] → [Request ID] → [Access Log] → [GZip] → [CORS] → route

Responses unwind in reverse, so the access log sees the final status code
and the X-Request-ID header is present on every response that passed the
rate limiter.
"""
