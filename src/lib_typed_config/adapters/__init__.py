"""Adapters connecting the library to files and in-memory trees."""
