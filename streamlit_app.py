"""
Pixel Tiles - Studio Edition

Run with:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import io

import numpy as np
import streamlit as st
from PIL import Image, ImageDraw

from pixel_tiles.color_utils import DISTANCE_METRICS, get_distance
from pixel_tiles.config import TileConfig
from pixel_tiles.errors import InvalidConfiguration
from pixel_tiles.grid import TileGrid
from pixel_tiles.optimizer import neighbourhood_cost, step
from pixel_tiles.pixelate import pixelate
from pixel_tiles.samplers import RandomPixelSampler
from pixel_tiles.shuffle import shuffle

# -- Page config -------------------------------------------------------
st.set_page_config(
    page_title="Pixel Tiles",
    page_icon=None,
    layout="wide",
    initial_sidebar_state="collapsed",
)

_DEFAULTS = TileConfig()
_SEED = 42

# -- CSS ---------------------------------------------------------------
st.markdown("""
<style>
    .stApp {
        background-color: #faf9f6;
        color: #2a2a2a;
        font-family: 'Inter', 'Helvetica Neue', sans-serif;
    }
    .block-container {
        max-width: 1000px;
        padding-top: 3.5rem;
        padding-bottom: 4rem;
    }
    .gallery-title {
        font-family: 'Cormorant Garamond', 'Georgia', serif;
        font-size: 2.8rem;
        font-weight: 300;
        text-align: center;
        border-bottom: 1px solid #1a1a1a;
        padding-bottom: 0.6rem;
        margin-bottom: 0.5rem;
    }
    .gallery-subtitle {
        font-size: 0.75rem;
        font-weight: 300;
        line-height: 1.8;
        margin-bottom: 3.5rem;
    }
    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
    header {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


# -- Helpers -----------------------------------------------------------

def _add_passepartout(img: Image.Image, border: int = 20) -> Image.Image:
    w, h = img.size
    bg = (250, 249, 246)
    canvas = Image.new("RGB", (w + border * 2, h + border * 2), bg)
    canvas.paste(img, (border, border))
    draw = ImageDraw.Draw(canvas)
    draw.rectangle(
        [border - 1, border - 1, border + w, border + h],
        outline=(224, 222, 216), width=1,
    )
    return canvas


def _build_grid(data: bytes, columns: int, do_shuffle: bool) -> None:
    engine_seq, sampler_seq = np.random.SeedSequence(_SEED).spawn(2)
    sampler = RandomPixelSampler(np.random.default_rng(sampler_seq))
    grid = TileGrid.from_image(Image.open(io.BytesIO(data)), sampler=sampler)
    rng = np.random.default_rng(engine_seq)
    pixelate(grid, columns)
    if do_shuffle:
        shuffle(grid, rng)
    st.session_state.grid = grid
    st.session_state.rng = rng
    st.session_state.steps = 0


# -- Title -------------------------------------------------------------
st.markdown(
    '<div class="gallery-title">Tile Studio</div>',
    unsafe_allow_html=True,
)
st.markdown(
    '<div class="gallery-subtitle">'
    "Upload any image and it is cut into a grid of flat-coloured tiles. "
    "Shuffle the tiles into noise, then press STEP to let a greedy local "
    "search move each picked tile next to the neighbours it resembles most. "
    "Each step relocates a fraction of the tiles; colours slowly gather into "
    "soft fields."
    "</div>",
    unsafe_allow_html=True,
)

# -- Controls ----------------------------------------------------------
ctrl1, ctrl2, ctrl3 = st.columns(3)
with ctrl1:
    columns = st.slider("Columns", 4, 120, _DEFAULTS.columns)
with ctrl2:
    frequency = st.slider("Frequency", 0.01, 1.0, _DEFAULTS.frequency, step=0.01)
with ctrl3:
    metric = st.selectbox(
        "Metric", sorted(DISTANCE_METRICS),
        index=sorted(DISTANCE_METRICS).index(_DEFAULTS.metric),
    )
do_shuffle = st.checkbox("Shuffle", value=True)
upscale = st.slider("Upscale", 1, 20, 8)

st.markdown("---")

# -- Upload ------------------------------------------------------------
uploaded = st.file_uploader(
    "Select artwork", type=["jpg", "jpeg", "png", "gif", "webp", "bmp"],
)

if uploaded is not None:
    st.session_state.uploaded_data = uploaded.getvalue()
elif "uploaded_data" not in st.session_state:
    st.session_state.uploaded_data = None

if st.session_state.uploaded_data is not None:
    b1, b2 = st.columns(2)
    with b1:
        if st.button("TILE", type="primary", use_container_width=True):
            try:
                _build_grid(st.session_state.uploaded_data, columns, do_shuffle)
            except InvalidConfiguration as exc:
                st.error(str(exc))
    with b2:
        if st.button("STEP", use_container_width=True) and "grid" in st.session_state:
            step(
                st.session_state.grid, frequency, get_distance(metric),
                st.session_state.rng,
            )
            st.session_state.steps += 1

    if "grid" in st.session_state:
        grid: TileGrid = st.session_state.grid
        display = grid.to_image()
        display = display.resize(
            (grid.width * upscale, grid.height * upscale), Image.NEAREST,
        )
        st.image(_add_passepartout(display, border=28), use_container_width=True)

        buf = io.BytesIO()
        display.save(buf, format="PNG")
        _, dl_col, _ = st.columns([1, 2, 1])
        with dl_col:
            st.download_button(
                "SAVE",
                data=buf.getvalue(),
                file_name="pixel_tiles.png",
                mime="image/png",
                use_container_width=True,
            )

        m1, m2, m3 = st.columns(3)
        m1.metric("Tiles", f"{grid.cols} × {grid.rows}")
        m2.metric("Steps", f"{st.session_state.steps}")
        m3.metric("Cost", f"{neighbourhood_cost(grid, get_distance(metric)):,.0f}")
