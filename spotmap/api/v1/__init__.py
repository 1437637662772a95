"""Version 1 of the spotmap API."""
