"""Period tracker: one log per user and cycle start date."""
