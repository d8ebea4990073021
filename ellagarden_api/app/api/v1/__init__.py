"""
Version 1 of the API.

Mounted under ``/api`` to keep the paths the front end already uses.
"""
