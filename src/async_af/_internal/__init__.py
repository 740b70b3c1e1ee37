"""Internal helpers shared by the adapters. Not part of the public API."""
