# Middleware package init
"""
Bloglist Backend — Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

Bearer-token authentication is not part of this chain: it is a per-route
FastAPI dependency (see auth.py) so public routes never touch the token.
"""
