import logging

import pandas as pd
import streamlit as st

from daily_guesser.catalog import load_catalog
from daily_guesser.config import settings
from daily_guesser.daily import todays_selection
from daily_guesser.errors import GuesserError
from daily_guesser.game import DailyGame, bearing_direction, distance_pct, share_text
from daily_guesser.logging_config import setup_logging
from daily_guesser.metadata import build_metadata
from daily_guesser.stats import StatsStore

# Set Page Configuration
st.set_page_config(page_title="Daily Country Guesser", layout="centered")

setup_logging()
logger = logging.getLogger(__name__)

# --- Make layout tighter ---
st.markdown("""
    <style>
    .block-container {
        padding-top: 2rem;
        padding-bottom: 0rem;
    }
    div.stButton > button {
        width: 100%;
    }
    </style>
""", unsafe_allow_html=True)

FLAG_URL = "https://flagcdn.com/{}.svg"


# ==================== Prepare Data ====================
@st.cache_resource
def get_catalog():
    return load_catalog(settings.data_dir)


@st.cache_data(ttl=settings.cache_ttl_seconds)
def get_metadata(target_code, puzzle_number):
    logger.info("Building metadata for puzzle #%d", puzzle_number)
    return build_metadata(get_catalog(), target_code, puzzle_number, settings.bonus_round_size)


def flag_url(code):
    return FLAG_URL.format(code.lower())


# ==================== Player State ====================
def get_game(store, player, selection):
    key = f"game_{player}"
    game = st.session_state.get(key)
    if game is None or (game.target_code, game.puzzle_number) != (selection.target_code, selection.puzzle_number):
        game = store.load_game(player, selection) or DailyGame(
            target_code=selection.target_code,
            puzzle_number=selection.puzzle_number,
            num_guesses_allowed=settings.num_guesses_allowed,
        )
        st.session_state[key] = game
    return game


# ==================== Guesses ====================
def display_guesses(game):
    rows = []
    for g in game.guesses:
        rows.append({
            "Country": g.country_name,
            "Distance": f"{g.distance_km:,} km",
            "Direction": "" if g.correct else bearing_direction(g.bearing_deg)[1],
            "Proximity": "🎉" if g.correct else f"{distance_pct(g.distance_km)}%",
        })
    if rows:
        st.table(pd.DataFrame(rows))
    remaining = game.num_guesses_allowed - game.num_guesses
    if not game.completed:
        st.caption(f"{remaining} guess{'es' if remaining != 1 else ''} left")


def guess_form(store, player, game, metadata):
    options = game.remaining_options(metadata)
    names = {e.country_code: e.country_name for e in options}
    with st.form("guess_form", clear_on_submit=True):
        code = st.selectbox(
            "Start typing a country name...",
            [e.country_code for e in options],
            format_func=names.get,
            index=None,
        )
        if st.form_submit_button("Guess") and code:
            guess = game.make_guess(metadata, code)
            logger.info("%s guessed %s for puzzle #%d", player, code, game.puzzle_number)
            store.save_game(player, game)
            if guess.correct:
                st.balloons()
            st.rerun()


# ==================== Bonus Round ====================
def bonus_round(store, player, game, metadata):
    st.subheader("Bonus round")
    st.markdown(f"Select the correct flag for **{metadata.target.name}**")
    cols = st.columns(2)
    for i, code in enumerate(metadata.bonus_candidates):
        with cols[i % 2]:
            st.image(flag_url(code), use_container_width=True)
            if st.button("This one", key=f"bonus_{code}"):
                game.make_bonus_guess(metadata, code)
                store.record_result(player, game)
                st.rerun()


# ==================== Stats ====================
def display_stats(stats):
    st.subheader("Stats")
    c1, c2, c3, c4, c5 = st.columns(5)
    c1.metric("Played", stats.num_completed)
    c2.metric("Win", f"{stats.win_pct}%")
    c3.metric("Bonus correct", f"{stats.bonus_pct}%")
    c4.metric("Current streak", stats.current_streak)
    c5.metric("Max streak", stats.max_streak)

    st.markdown("**Guess distribution**")
    st.bar_chart(pd.Series(stats.guess_distribution, name="Games"), horizontal=True)


# ==================== UI ====================
try:
    catalog = get_catalog()
    selection = todays_selection(catalog, settings.epoch)
    metadata = get_metadata(selection.target_code, selection.puzzle_number)
except GuesserError as e:
    logger.exception("Could not prepare today's puzzle")
    st.error(f"Could not prepare today's puzzle: {e}")
    st.stop()

st.title(f"🌍 Daily Country Guesser #{selection.puzzle_number}")

with st.sidebar:
    player = st.text_input("Player name", "Player").strip() or "Player"

store = StatsStore(settings.stats_path)
game = get_game(store, player, selection)

display_guesses(game)

if not game.completed:
    guess_form(store, player, game, metadata)
elif game.bonus_guess is None:
    bonus_round(store, player, game, metadata)
else:
    left, right = st.columns([1, 4])
    with left:
        st.image(flag_url(metadata.target.code), width=80)
    with right:
        st.markdown(f"### {metadata.target.name}")
    st.write(f"Bonus round: {'✅' if game.bonus_correct else '❌'}")
    st.code(share_text(game, settings.share_url), language=None)

with st.expander("Your stats"):
    display_stats(store.load_stats(player))
