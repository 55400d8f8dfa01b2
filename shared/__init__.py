"""Shared schemas for sensorbridge."""
