"""
Tests for the Streamlit page using Streamlit's AppTest harness.

The HTTP layer is mocked at requests.Session.get, so the page runs against the real
orchestrator and connector without network access.
"""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from streamlit.testing.v1 import AppTest

from conftest import make_filter_meal

APP_PATH = Path(__file__).resolve().parent.parent / "streamlit_app" / "app.py"


def meals_response(*meals) -> Mock:
    response = Mock()
    response.raise_for_status.return_value = None
    response.json.return_value = {"meals": list(meals)}
    return response


@pytest.fixture
def favorites_env(monkeypatch, tmp_path):
    monkeypatch.setenv("FAVORITES_PATH", str(tmp_path / "favorites.json"))
    monkeypatch.delenv("FAVORITES_DATABASE_URL", raising=False)


@pytest.fixture
def mock_get():
    with patch("requests.Session.get") as get:
        get.return_value = meals_response(
            make_filter_meal("52940", "Brown Stew Chicken"),
            make_filter_meal("52846", "Chicken & mushroom Hotpot"),
        )
        yield get


@pytest.fixture
def app(favorites_env, mock_get) -> AppTest:
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    assert not at.exception
    return at


class TestSearchPage:
    """Page-level search interactions."""

    def test_initial_render_issues_no_request(self, app, mock_get):
        """Test that loading the page does not call the service."""
        mock_get.assert_not_called()
        assert app.session_state["recipe_orchestrator"].state.results == []

    def test_enter_in_query_box_submits_search(self, app, mock_get):
        """Test that committing the query text runs the search."""
        app.text_input(key="query_box").input("chicken").run()

        assert not app.exception
        mock_get.assert_called_once()
        assert mock_get.call_args.kwargs["params"] == {"i": "chicken"}
        state = app.session_state["recipe_orchestrator"].state
        assert [r.id for r in state.results] == ["52940", "52846"]
        assert state.error_message is None

    def test_blank_enter_does_not_search(self, app, mock_get):
        """Test that committing whitespace only updates the query text."""
        app.text_input(key="query_box").input("   ").run()

        mock_get.assert_not_called()
        assert app.session_state["recipe_orchestrator"].state.error_message is None

    def test_type_then_click_searches_once(self, app, mock_get):
        """Test that editing the query and clicking Search in one rerun sends one request."""
        app.text_input(key="query_box").input("chicken")
        app.button(key="search_button").click().run()

        assert not app.exception
        assert mock_get.call_count == 1

    def test_search_button_after_enter_searches_again(self, app, mock_get):
        """Test that a later click re-runs the search."""
        app.text_input(key="query_box").input("chicken").run()
        app.button(key="search_button").click().run()

        assert mock_get.call_count == 2

    def test_results_grid_renders_cards(self, app):
        """Test that result cards render with their open buttons."""
        app.text_input(key="query_box").input("chicken").run()

        assert not app.exception
        assert app.button(key="results_open_52940").label == "View recipe"
        assert any("Brown Stew Chicken" in md.value for md in app.markdown)
