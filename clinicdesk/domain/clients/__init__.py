"""Clients domain - client catalog, discounts and finished treatments"""
