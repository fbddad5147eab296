"""Profile settings: the user's profile picture."""
