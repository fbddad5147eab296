"""
Per-user bookmarks and reading progress, one key pair per content domain
(education articles, health tips).
"""
