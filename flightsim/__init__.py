"""Flight simulation core: aircraft dynamics, cameras, HUD geometry, terrain, flame particles and cloud lighting math."""

__version__ = "0.1.0"

__all__ = [
    "vecmath",
    "camera",
    "bounding_box",
    "aircraft",
    "glyphs",
    "hud",
    "terrain",
    "particle",
    "heightgen",
    "surfaces",
    "mount",
    "mounts",
    "flame",
    "cloud",
]