"""Appointments domain - booking, pricing and calendar interactions"""
