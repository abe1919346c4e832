# figures for the planner; each function returns a matplotlib figure
import matplotlib.pyplot as plt
import networkx as nx
import numpy as np
from scipy.stats import norm


def draw_gantt(result, tasks_to_plot, label_to_task, slack_dict):
    fig, ax = plt.subplots(figsize=(8, 4), facecolor="whitesmoke")
    ax.set_facecolor("whitesmoke")
    total_dur = result.critical_path_length()
    for i, task in enumerate(tasks_to_plot):
        start = result.es(task)
        duration = result.ec(task) - start
        color = "#EF9A9A" if result.critical(task) else "#BBDEFB"
        ax.barh(
            y=i,                #row number
            width=duration,     #how long the task takes
            left=start,         #where the bar starts on the x-axis
            height=0.4,
            color=color,        #red or blue
            edgecolor="#1a1a1a"
        )
        # short bars get the label outside
        text_x = start + duration + 0.1 if duration < 1.2 else start + 0.1
        if text_x > total_dur + 1:
            text_x = start + duration - 0.3  # pull label back inside
        ax.text(text_x, i, f"s ={slack_dict[task]}", ha="left", va="center",
                color="#1a1a1a", fontsize=6, fontweight="medium")
    ax.set_xlim(0, total_dur + 1)    # expand x-axis for some breathing space
    ax.set_yticks(range(len(tasks_to_plot)))
    ax.set_yticklabels([label_to_task[t] for t in tasks_to_plot])
    ax.set_xlabel("Time")
    ax.set_title("Gantt Chart with Critical Tasks")
    ax.grid(axis="x", linestyle=":", color="gray", alpha=0.5)
    return fig


def network_view(graph, cp, only_cp):
    """
    input: TaskGraph, critical chain, whether to keep only the chain
    output: the networkx graph to draw
    """
    G = graph.nx_graph
    if not only_cp:
        return G.copy()
    # a one-task chain has no edges, keep its node anyway
    view = nx.DiGraph()
    view.add_nodes_from(cp)
    view.add_edges_from(zip(cp, cp[1:]))
    return view


def draw_network(graph, cp, slack_dict, only_cp):
    G_sub = network_view(graph, cp, only_cp)
    cp_nodes = set(cp)
    cp_edges = set(zip(cp, cp[1:]))
    pos = nx.spring_layout(G_sub, seed=42)
    node_colors = ["#EF9A9A" if node in cp_nodes else "#BBDEFB" for node in G_sub.nodes()]
    edge_colors = ["#E57373" if (u, v) in cp_edges else "#64B5F6" for u, v in G_sub.edges()]
    fig, ax = plt.subplots(figsize=(8, 6), facecolor="whitesmoke")
    ax.set_facecolor("whitesmoke")
    nx.draw(G_sub, pos, with_labels=True, node_color=node_colors, edge_color=edge_colors,
            node_size=1500, font_weight="bold", font_color="#1a1a1a", ax=ax)
    labels = {node: f"\n\ns={slack_dict[node]}" for node in G_sub.nodes}
    nx.draw_networkx_labels(G_sub, pos, labels=labels, font_size=9, horizontalalignment="center", ax=ax)
    ax.set_title("Network Diagram with Critical Path")
    return fig


def draw_pdf(mu, sigma, unit):
    # x range: mean +- 4sig
    x_range = np.linspace(mu - 4 * sigma, mu + 4 * sigma, 500)
    pdf_vals = norm.pdf(x_range, loc=mu, scale=sigma)
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.plot(x_range, pdf_vals, color="#4A90E2", lw=2)
    for k, style, shade, label in [(1, "--", "#BBDEFB", "~68% range"), (2, ":", "#E3F2FD", "~95% range")]:
        ax.axvline(mu - k * sigma, color="#1a1a1a", linestyle=style, lw=1)
        ax.axvline(mu + k * sigma, color="#1a1a1a", linestyle=style, lw=1)
        ax.fill_between(x_range, pdf_vals, where=((x_range >= mu - k * sigma) & (x_range <= mu + k * sigma)),
                        color=shade, alpha=0.7 if k == 1 else 0.5, label=label)
    ax.axvline(mu, color="tomato", linestyle="-", lw=2, label="Expected Duration")
    ax.set_title("Project Completion Probability Distribution")
    ax.set_xlabel(f"Project Duration ({unit})")
    ax.set_ylabel("Probability Density")
    ax.legend()
    return fig
