"""
FamFin: household budget, pocket money and task tracking API.
"""

__version__ = "0.1.0"
