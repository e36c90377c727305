import logging
from dataclasses import dataclass, field
from typing import Dict, Tuple

import matplotlib.pyplot as plt
import numpy as np
import streamlit as st

from kmap_minimizer import (
    Form,
    KMapError,
    TermMap,
    evaluate_expression,
    format_minterm_string,
    get_variables,
    grid_cells,
    group_segments,
    implicants_to_groups,
    layout_for,
    parse_minterm_string,
    simplify,
)
from kmap_minimizer.render import product_term, sum_clause

logger = logging.getLogger(__name__)

# ------------------------------- Display settings -------------------------------


@dataclass(frozen=True)
class DisplayConfig:
    palette: Tuple[str, ...] = (
        "#e53935", "#1e88e5", "#43a047", "#f39c12",
        "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
    )
    one_color: str = "#1f3c88"
    zero_color: str = "#9aa7b7"
    dc_color: str = "#ff8c32"
    figure_sizes: Dict[int, Tuple[float, float]] = field(
        default_factory=lambda: {1: (2.4, 3.2), 2: (3.2, 3.2), 3: (5.2, 3.4), 4: (5.2, 5.2)}
    )
    default_form: Form = Form.SOP


def log_activity(message: str) -> None:
    logger.info(message)
    st.session_state.setdefault("activity", []).insert(0, message)


def axis_tick_labels(codes, bits: int, names: str):
    if bits == 0:
        return [""]
    return [f"{names}={code:0{bits}b}" for code in codes]


def draw_kmap(tmap: TermMap, implicants, form: Form, config: DisplayConfig):
    """Draw cell values and implicant groups; returns the matplotlib figure."""
    layout = layout_for(tmap.nvars)
    nrows, ncols = layout.shape
    fig, ax = plt.subplots(figsize=config.figure_sizes.get(tmap.nvars, (4.2, 4.2)))
    ax.set_xlim(-0.6, ncols)
    ax.set_ylim(-0.6, nrows)
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.set_xticklabels([])
    ax.set_yticklabels([])
    ax.grid(True, color="#888", linewidth=1)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    row_names, col_names = layout.axis_labels(tmap.variables)
    for j, lab in enumerate(axis_tick_labels(layout.cols, layout.col_bits, col_names)):
        ax.text(j + 0.5, -0.25, lab, ha="center", va="center", fontsize=10, color="#333")
    for i, lab in enumerate(axis_tick_labels(layout.rows, layout.row_bits, row_names)):
        ax.text(-0.25, i + 0.5, lab, ha="right", va="center", fontsize=10, color="#333")

    for row in grid_cells(tmap, layout):
        for cell in row:
            if cell.dont_care:
                val, color = "d", config.dc_color
            elif cell.value:
                val, color = "1", config.one_color
            else:
                val, color = "0", config.zero_color
            ax.text(cell.col + 0.5, cell.row + 0.5, val, color=color,
                    fontsize=13, ha="center", va="center", weight="bold")
            ax.text(cell.col + 0.05, cell.row + 0.9, f"m{cell.index}",
                    color="#777", fontsize=8, alpha=0.7)

    label_for = sum_clause if form is Form.POS else product_term
    groups = implicants_to_groups(implicants, layout)
    for i, (imp, g) in enumerate(zip(implicants, groups)):
        color = config.palette[i % len(config.palette)]
        inset = 0.06 + 0.04 * (i % 3)
        for r0, rows, c0, cols in group_segments(g, nrows, ncols):
            ax.add_patch(plt.Rectangle(
                (c0 + inset, r0 + inset), cols - 2 * inset, rows - 2 * inset,
                fill=False, color=color, lw=2.5, ls="-",
            ))
        ax.text(g.c0 + g.cols / 2, g.r0 + g.rows / 2, label_for(imp, tmap.variables),
                color=color, fontsize=9, ha="center", va="bottom", weight="bold")
    return fig


def truth_table_records(variables, rows):
    return [{**{v: r.env[v] for v in variables}, "Y": r.output, "m": r.index} for r in rows]


# ------------------------------- Page -------------------------------

config = DisplayConfig()
logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="K-Map Minimizer", layout="wide")
st.title("🧮 K-Map Minimizer (Quine–McCluskey)")
st.markdown("---")

mode = st.radio("Input type:", ["Boolean expression", "Minterm list"])
form = Form(st.radio("Output form:", [f.value for f in Form],
                     index=[f for f in Form].index(config.default_form), horizontal=True))

if mode == "Boolean expression":
    raw_expr = st.text_input("Expression (e.g. A'B + AC, ~(A ^ B)C):")
else:
    n = st.number_input("Number of variables:", min_value=1, max_value=6, value=4, step=1)
    raw_terms = st.text_input("Minterms, d-prefixed don't cares (e.g. 1,3,5,7,d2):")

if st.button("Simplify 🚀"):
    try:
        if mode == "Boolean expression":
            parsed = evaluate_expression(raw_expr)
            variables = parsed.variables
            tmap = TermMap.from_truth_table(variables, parsed.rows)
            st.subheader("Truth table")
            st.table(truth_table_records(variables, parsed.rows))
        else:
            variables = get_variables(int(n))
            mins, dcs = parse_minterm_string(raw_terms)
            tmap = TermMap.from_terms(variables, mins, dcs)

        implicants, text = simplify(tmap, form)
        st.success(f"**{form.value}:**  \nF = {text}")
        st.code(format_minterm_string(tmap.minterms(), tmap.dontcares()) or "—")

        details = (
            f"• variables: {', '.join(variables)}\n"
            f"• minterms = {tmap.minterms()}\n"
            f"• don't cares = {tmap.dontcares() or '—'}\n"
            f"• result ({form.value}): F = {text}"
        )
        st.text_area("Details:", details, height=140)
        log_activity(f"{form.value} of {format_minterm_string(tmap.minterms(), tmap.dontcares()) or '∅'}: {text}")

        if layout_for(tmap.nvars) is None:
            st.info("The K-map view is available for 1 to 4 variables.")
        else:
            st.markdown("### 🗺️ Karnaugh map")
            st.pyplot(draw_kmap(tmap, implicants, form, config))

    except KMapError as e:
        logger.warning("simplification failed: %s", e)
        st.error(f"Could not simplify:\n{e}")

with st.expander("Activity log"):
    for line in st.session_state.get("activity", []):
        st.write(line)
