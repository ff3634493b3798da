"""Input format handling."""
