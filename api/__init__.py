"""
HTTP API package for the Classi scoring service.
"""
