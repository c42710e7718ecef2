# This file makes ranchops_project a Python package

"""ranchops_project package

The application code lives under *ranchops_project.src.*; run the desktop
zone editor with ``python -m ranchops_project.run_ranchops``.
"""
