"""
Fluent Life Admin API

Administrative back office for the Fluent Life speech-training platform.
"""
