# Routes package init
"""
Albums API — API Routes Package
================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - albums.py:  the seven album CRUD routes (/albums, /albumsPost, ...)
    - health.py:  GET /health (service health check)

Routes stay thin: they parse path/query/body input, call AlbumService, and
let the global exception handlers turn errors into responses.
"""
