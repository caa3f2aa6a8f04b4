"""
GridVault: file upload, listing and full-text search on MongoDB GridFS.
"""
__version__ = "1.0.0"
