"""
Session management utilities for the Streamlit front end.

The core objects live in st.session_state so that they survive Streamlit reruns:
- one SearchOrchestrator (and its SessionState) per browser session
- one FavoritesReconciler per browser session, seeded from the configured store

The favorites store itself is durable, so favorites also survive new sessions and
process restarts.
"""

import asyncio
from typing import Any, Coroutine

import streamlit as st

from recipes.connectors.mealdb_connector import MealDBConnector
from recipes.favorites import FavoritesReconciler
from recipes.orchestrator import SearchOrchestrator
from recipes.storage import create_favorites_store

ORCHESTRATOR_KEY = "recipe_orchestrator"
FAVORITES_KEY = "recipe_favorites"


def get_orchestrator() -> SearchOrchestrator:
    """
    Get or create the session's SearchOrchestrator.

    Returns:
        SearchOrchestrator backed by a MealDBConnector configured from the environment
    """
    if ORCHESTRATOR_KEY not in st.session_state:
        st.session_state[ORCHESTRATOR_KEY] = SearchOrchestrator(MealDBConnector())
    return st.session_state[ORCHESTRATOR_KEY]


def get_favorites() -> FavoritesReconciler:
    """
    Get or create the session's FavoritesReconciler.

    The store is loaded once, when the reconciler is created.
    """
    if FAVORITES_KEY not in st.session_state:
        st.session_state[FAVORITES_KEY] = FavoritesReconciler(create_favorites_store())
    return st.session_state[FAVORITES_KEY]


def run_event(coro: Coroutine[Any, Any, None]) -> None:
    """Run one orchestrator coroutine to completion from a Streamlit callback."""
    asyncio.run(coro)
