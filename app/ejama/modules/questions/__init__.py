"""
Ask-the-expert Q&A: question submission, public and per-user listings, and
the moderator answer/status workflow.
"""
