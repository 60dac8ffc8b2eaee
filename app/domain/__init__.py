"""Règles métier pures : devises, cycles de vie, maintenance."""
