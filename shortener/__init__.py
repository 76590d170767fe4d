"""
Link preview shortener.

Short links that open on a preview page (title, description, image, quote)
before sending the visitor on to the original URL.
"""

__version__ = "1.0.0"
