"""ClinicDesk - clinic appointment book, retention and financial analytics API"""

__version__ = "1.0.0"
