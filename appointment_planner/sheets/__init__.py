"""Schedule / contact / settings source readers."""
