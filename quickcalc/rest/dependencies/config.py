"""
Configuration and shared service dependencies for FastAPI application.

The configuration manager and the calculation store are created once by
create_app() and parked on app.state; these providers hand them to endpoints
so tests can build an app around their own instances.
"""

from fastapi import Request

from quickcalc.config.configuration_manager import ConfigurationManager
from quickcalc.rest.calculation_store import CalculationStore


def get_config_manager( request: Request ) -> ConfigurationManager:
    """
    Dependency to get the application's configuration manager.

    Requires:
        - create_app() stored a ConfigurationManager on app.state.config_mgr

    Ensures:
        - Returns the same instance for every request of one app
    """
    return request.app.state.config_mgr


def get_calculation_store( request: Request ) -> CalculationStore:
    """
    Dependency to get the application's calculation history.

    Requires:
        - create_app() stored a CalculationStore on app.state.calculation_store

    Ensures:
        - Returns the same instance for every request of one app
    """
    return request.app.state.calculation_store
