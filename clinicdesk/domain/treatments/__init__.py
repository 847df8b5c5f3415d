"""Treatments domain - service types with default price, duration and recurrence"""
