"""
SKYPATH Services Package

Environmental
-------------
- services.ephemeris: Sun and Moon positions, lunar phase, daily tracks
  (analytic model), plus a Skyfield reference for validation
"""

__version__ = "0.1.0"
