"""Sohodemo - demo and documentation server for the SoHo XI component library."""
