# === FRONT MATTER ===
# libraries
import logging
from io import BytesIO  # to use as buffer for export options

import pandas as pd
import streamlit as st
from scipy.stats import norm

# functions
from critpath import config
from critpath.charts import draw_gantt, draw_network, draw_pdf
from critpath.engine import run
from critpath.exceptions import CritPathError
from critpath.graph_helpers import TaskGraph, build_graph
from critpath.input_parser import (
    load_file, normalize_columns, parse_df, parse_pert_df, round_durations, validate_df,
)

logger = logging.getLogger(__name__)


def png_download(fig, file_name):
    """offer a matplotlib figure as a png download"""
    buffer = BytesIO()
    fig.savefig(buffer, format="png", bbox_inches="tight")
    st.download_button(
        label="Download Chart as PNG",
        data=buffer.getvalue(),
        file_name=file_name,
        mime="image/png"
    )


# streamlit preview- ui
st.title("Project Planner: CPM & PERT")

with st.sidebar.expander("**About This App**", expanded=True):
    st.markdown("""
    **Planning Made Easier.**

    Upload a CSV, JSON, or Excel file with columns for task, duration (optimistic,
    most likely and pessimistic estimates for PERT), and dependencies, and:
    - Map task dependencies and catch circular ones
    - Spot what's critical and what has slack
    - Visualize your timeline with Gantt charts, network diagrams, and PERT probability curves
    - Estimate how likely you are to finish on time (PERT)
    """)

upload, results, viz = st.tabs(["Upload", "Results", "Visualizations"])

# === File Upload & Parsing ===
with upload:
    use_pert = st.toggle("Use PERT (3-point estimates)")
    uploaded_file = st.file_uploader("Upload task file (.csv, .json, or .xlsx)", type=config.SUPPORTED_FILE_TYPES)
    unit = st.selectbox("Select time unit for duration: ", [" ", "hours", "days", "weeks", "months"])
    if not uploaded_file:
        st.stop()
    try:
        df = normalize_columns(load_file(uploaded_file))
        for w in validate_df(df, use_pert=use_pert):
            st.warning(w)
        st.info(f"**Preview:** ({df.shape[0]} rows x {df.shape[1]} columns)")
        with st.expander("Show full dataset"):
            st.dataframe(df)
        if df.shape[0] > config.LARGE_PROJECT_ROWS:
            st.info("Large project detected- loading may take some time!")
        if use_pert:
            duration_dict, edge_list, label_to_task, var_dict = parse_pert_df(df)
        else:
            duration_dict, edge_list, label_to_task = parse_df(df)
            var_dict = None
        duration_dict = round_durations(duration_dict)
        graph = TaskGraph(build_graph(duration_dict, edge_list))
        result = run(graph, duration_dict)
    except CritPathError as e:
        logger.warning("Upload rejected: %s", e)
        st.error(str(e))
        st.stop()
    if not result:
        st.error(f"{result}. Remove one of these dependencies and upload again.")
        st.stop()
    st.success("Successfully parsed!")

    # === Debugging: Show Internal Mappings ===
    with st.expander("See internal mappings (for debugging)"):
        st.markdown("**Task-Duration mapping:**")
        st.table(pd.DataFrame(list(duration_dict.items()), columns=["Task", "Duration"]))
        st.markdown("**Dependency order:** ")
        st.json(edge_list)
        st.markdown("**Task-Label mapping:** ")
        st.json(label_to_task)

slack_dict = result.slack_dict()
cp = result.critical_path()
total_dur = result.critical_path_length()

# === Summary Table (ES/EC/LS/LC/Slack) ===
with results:
    st.dataframe(result.to_dataframe(label_to_task))
    st.markdown(f"Total Duration for Project: {total_dur} {unit} ")
    st.markdown("Critical path: " + " → ".join(label_to_task[u] for u in cp))
    cp_sd = None
    if use_pert:
        # project sd using only the critical chain
        cp_sd = sum(var_dict[n] for n in cp) ** 0.5
        st.markdown("### PERT Analysis- Uncertainty Estimation")
        st.write(
            f"Based on variance in time estimates for tasks on the critical path, "
            f"the standard deviation of project duration is ±{cp_sd:.2f} {unit}."
        )
        st.success(
            f"You can be ~68% confident that the project will complete within "
            f"{total_dur} ± {cp_sd:.2f} {unit}, "
            f"and ~95% confident within {total_dur} ± {2 * cp_sd:.2f} {unit}."
        )
        with st.expander("Calculate probability for a custom deadline: "):
            deadline = st.number_input(
                f"Target completion time ({unit}): ",
                min_value=0.0,
                value=round(total_dur + cp_sd, 2),
                step=0.1
            )
            if cp_sd > 0:
                prob = norm.cdf(deadline, loc=total_dur, scale=cp_sd)
            else:
                prob = 1.0 if deadline >= total_dur else 0.0
            st.success(
                f"Based on your PERT estimates, there is a **{prob * 100:.1f}%** chance "
                f"that the project will complete within **{round(deadline, 2)} {unit}**."
            )
    else:
        st.info(
            "The **total project duration** is based on the longest sequence of dependent tasks "
            "(the critical path). Any delay in these tasks will directly affect the project completion time."
        )
        st.success("Tasks with **0 slack** are critical.")

# === Visualizations ===
with viz:
    legend_df = pd.DataFrame({"Label": list(label_to_task), "Task": list(label_to_task.values())})
    if use_pert and cp_sd:
        fig = draw_pdf(total_dur, cp_sd, unit)
        st.pyplot(fig)
        png_download(fig, "prob_dist.png")
    else:
        c1, c2 = st.columns(2)
        with c1:
            gantt_bool = st.toggle("Gantt Chart")
        with c2:
            only_cp = st.toggle("Show only critical path")
        if gantt_bool:
            fig = draw_gantt(result, cp if only_cp else result.order, label_to_task, slack_dict)
            st.pyplot(fig)
            png_download(fig, "gantt_chart.png")
        else:
            fig = draw_network(graph, cp, slack_dict, only_cp)
            st.pyplot(fig)
            png_download(fig, "dag_network.png")
        with st.expander("Legend"):
            st.dataframe(legend_df)
