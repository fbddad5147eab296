"""Anonymous product feedback (no sign-in required)."""
