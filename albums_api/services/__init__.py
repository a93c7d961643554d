# Services package init
"""
Albums API — Services Layer
============================

What:  Store access and request-input extraction, independent of HTTP.

Service Inventory:
    - AlbumService: one parameterized SQL statement per CRUD operation
    - album_input:  id/year parsing and the body/query extraction strategies
"""
