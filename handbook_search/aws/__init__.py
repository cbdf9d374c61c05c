"""AWS session and client management."""
