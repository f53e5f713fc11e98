"""
QuickCalc: a multi-function calculator web service.

Packages:
    calculator  — pure calculation engine (conversions, ages, arithmetic, descriptions)
    rest        — FastAPI application, routers, request models and the calculation history
    config      — INI-file ConfigurationManager
    cli         — server launcher and command-line calculator
    utils       — small shared helpers
"""

__version__ = "0.1.0"
