"""
Recipe Finder - Streamlit Frontend Main Entry Point.

This page renders the SessionState produced by the core and forwards user events
back to it. It holds no recipe logic of its own:

- mode picker, query box / category buttons, "Surprise me" -> SearchOrchestrator
- heart buttons -> FavoritesReconciler
- result grid, favorites grid, detail panel -> read-only views of the state

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import the recipes package
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
from recipes.config import configure_logging

import streamlit as st

from recipes.models import CATEGORIES, RecipeDetail, SearchMode
from ui.feedback import show_empty_state, show_error, working_spinner
from utils.session import get_favorites, get_orchestrator, run_event

configure_logging()

MODE_LABELS = {
    SearchMode.INGREDIENT: "By Ingredient",
    SearchMode.NAME: "By Name",
    SearchMode.CATEGORY: "By Category",
}
PLACEHOLDERS = {
    SearchMode.INGREDIENT: "chicken, tomato, rice...",
    SearchMode.NAME: "pasta carbonara, chocolate cake...",
}
GRID_COLUMNS = 3
SUBMITTED_KEY = "query_submitted"

st.set_page_config(page_title="TasteFinder", page_icon="🍳", layout="wide")

orchestrator = get_orchestrator()
favorites = get_favorites()
state = orchestrator.state


# ---------------------------------------------------------------------------
# Event handlers
# ---------------------------------------------------------------------------

def on_mode_change() -> None:
    orchestrator.set_mode(st.session_state["mode_picker"])


def on_query_change() -> None:
    """Enter in the query box submits the search."""
    text = st.session_state["query_box"]
    orchestrator.set_query_text(text)
    if text.strip():
        on_search()
        st.session_state[SUBMITTED_KEY] = True


def on_search(explicit_query=None) -> None:
    if state.showing_favorites:
        orchestrator.toggle_show_favorites()
    with working_spinner("Searching recipes…"):
        run_event(orchestrator.submit_search(explicit_query))


def on_search_button() -> None:
    # Typing then clicking fires on_query_change first in the same rerun
    if st.session_state.pop(SUBMITTED_KEY, False):
        return
    on_search()


def on_random() -> None:
    with working_spinner("Picking a surprise…"):
        run_event(orchestrator.request_random())


def on_open(recipe_id: str) -> None:
    with working_spinner("Loading recipe…"):
        run_event(orchestrator.open_detail(recipe_id))


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------

def heart_label(recipe_id: str) -> str:
    return "❤️" if favorites.is_favorite(recipe_id) else "🤍"


def render_recipe_grid(recipes, key_prefix: str) -> None:
    """Render recipe cards in a grid with open and favorite buttons."""
    columns = st.columns(GRID_COLUMNS)
    for index, recipe in enumerate(recipes):
        with columns[index % GRID_COLUMNS]:
            with st.container(border=True):
                if recipe.thumbnail:
                    st.image(recipe.thumbnail, width="stretch")
                st.markdown(f"**{recipe.name}**")
                if recipe.category:
                    st.caption(recipe.category)
                col_open, col_fav = st.columns([3, 1])
                col_open.button(
                    "View recipe",
                    key=f"{key_prefix}_open_{recipe.id}",
                    on_click=on_open,
                    args=(recipe.id,),
                    width="stretch",
                )
                col_fav.button(
                    heart_label(recipe.id),
                    key=f"{key_prefix}_fav_{recipe.id}",
                    on_click=favorites.toggle_favorite,
                    args=(recipe,),
                )


def render_detail(detail: RecipeDetail) -> None:
    """Render the full recipe panel."""
    with st.container(border=True):
        col_title, col_actions = st.columns([4, 1])
        with col_title:
            st.subheader(detail.name)
            tags = [t for t in (detail.category, detail.area) if t]
            if tags:
                st.caption(" · ".join(tags))
        with col_actions:
            st.button(
                heart_label(detail.id),
                key="detail_fav",
                on_click=favorites.toggle_favorite,
                args=(detail,),
            )
            st.button("Close", key="detail_close", on_click=orchestrator.close_detail)

        col_image, col_ingredients = st.columns([1, 1])
        if detail.thumbnail:
            col_image.image(detail.thumbnail, width="stretch")
        with col_ingredients:
            st.markdown("#### Ingredients")
            for line in detail.ingredient_lines():
                st.markdown(f"- {line}")

        st.markdown("#### Instructions")
        for step in detail.instruction_steps():
            st.write(step)

        if detail.youtube_id:
            st.video(detail.video_url)
        elif detail.video_url:
            st.link_button("Watch Video Tutorial", detail.video_url)


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

with st.sidebar:
    st.markdown("### 🍳 **TasteFinder**")
    st.divider()
    fav_label = "Hide favorites" if state.showing_favorites else f"Favorites ({len(favorites.favorites)})"
    st.button(fav_label, on_click=orchestrator.toggle_show_favorites, width="stretch")

st.title("What's Cooking?")

search_modes = list(MODE_LABELS)
current_mode = state.mode if state.mode in MODE_LABELS else SearchMode.INGREDIENT
col_modes, col_random = st.columns([4, 1])
with col_modes:
    st.radio(
        "Search mode",
        options=search_modes,
        index=search_modes.index(current_mode),
        format_func=lambda mode: MODE_LABELS[mode],
        horizontal=True,
        key="mode_picker",
        on_change=on_mode_change,
        label_visibility="collapsed",
    )
with col_random:
    st.button("Surprise Me!", on_click=on_random, width="stretch", type="primary")

if state.mode is SearchMode.CATEGORY:
    category_columns = st.columns(5)
    for index, category in enumerate(CATEGORIES):
        category_columns[index % 5].button(
            category,
            key=f"category_{category}",
            on_click=on_search,
            args=(category,),
            width="stretch",
        )
else:
    col_query, col_submit = st.columns([4, 1])
    col_query.text_input(
        "Search",
        value=state.query_text,
        key="query_box",
        on_change=on_query_change,
        placeholder=PLACEHOLDERS.get(state.mode, ""),
        label_visibility="collapsed",
    )
    col_submit.button("Search", key="search_button", on_click=on_search_button, width="stretch")

if state.error_message:
    show_error(state.error_message)

if state.selected_detail is not None:
    render_detail(state.selected_detail)

if state.showing_favorites:
    st.markdown("### Your favorites")
    if len(favorites.favorites) == 0:
        show_empty_state("No favorites yet", "Tap the heart on any recipe to save it here.")
    else:
        render_recipe_grid(favorites.favorites.to_list(), key_prefix="favorites")
elif not state.is_loading and state.results:
    render_recipe_grid(state.results, key_prefix="results")

st.session_state.pop(SUBMITTED_KEY, None)
