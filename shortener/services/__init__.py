"""
Short link services.

- code_generator: random base62 short codes
- link_store: inserts and lookups on the links table
- link_service: create-with-retry and the resolve operations used by the pages and API
"""
