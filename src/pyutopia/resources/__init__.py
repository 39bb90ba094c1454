"""Bundled refrigerator camera pictures (plain PGM)."""
