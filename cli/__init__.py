"""Command-line entry points for sensorbridge."""
