"""Business domains: catalogs, appointment book and analytics"""
