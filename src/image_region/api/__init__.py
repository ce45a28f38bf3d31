"""
HTTP layer for the Image Region Service
"""
