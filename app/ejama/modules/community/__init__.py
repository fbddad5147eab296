"""
Community forum: categories, threads, posts and per-user membership.

Default content is seeded on the first load that finds no categories.
"""
