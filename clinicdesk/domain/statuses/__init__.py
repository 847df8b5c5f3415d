"""Statuses domain - appointment statuses and their billable/default flags"""
