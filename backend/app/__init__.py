"""Rental desk backend application package."""
