"""Export — CAD file writers fed by placements and routes."""

from .eagle import generate_eagle_schematic, clean_name

__all__ = ["generate_eagle_schematic", "clean_name"]
