"""Mailmaster newsletter management API."""
