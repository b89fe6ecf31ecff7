"""Mock JSON endpoints used by the demo pages."""
