"""Pure numerical helpers: trends, session metrics and periodization curves."""
