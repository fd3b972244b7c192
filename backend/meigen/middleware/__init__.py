# Middleware package init
"""
Meigen Backend — Middleware Package
====================================

Middleware Chain (outermost first):
    Request → [Login Rate Limit] → [Request ID] → [Logging] → [GZip] → [CORS] → Route

    1. Login rate limit rejects login floods before they touch the database
    2. Request ID is set before anything logs
    3. Logging records status and duration once the response exists
"""
