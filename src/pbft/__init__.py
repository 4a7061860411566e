"""Configuration substrate for a PBFT consensus node."""
