"""The microini command line."""
