"""Analytics domain - recurrence projection, retention and financial reporting"""
