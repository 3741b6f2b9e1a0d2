"""Planner services: normalization, classification, registry, calendar, feasibility."""
