"""Event seat inventory and booking service."""
