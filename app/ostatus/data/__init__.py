"""Bundled data files for ostatus."""
