"""
Recipe service connectors.

- base: BaseRecipeConnector interface
- mealdb_connector: TheMealDB implementation over requests
"""

from .base import BaseRecipeConnector
from .mealdb_connector import MealDBConnector

__all__ = ["BaseRecipeConnector", "MealDBConnector"]
