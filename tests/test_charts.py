import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt

from critpath.charts import draw_gantt, draw_network, draw_pdf, network_view
from critpath.engine import run


def test_network_view_full_graph(diamond):
    view = network_view(diamond, [1, 2, 4], only_cp=False)
    assert sorted(view.nodes()) == [1, 2, 3, 4]
    assert view.number_of_edges() == 4


def test_network_view_critical_chain(diamond):
    view = network_view(diamond, [1, 2, 4], only_cp=True)
    assert sorted(view.nodes()) == [1, 2, 4]
    assert sorted(view.edges()) == [(1, 2), (2, 4)]


def test_network_view_single_task_chain(graph_factory):
    g = graph_factory({"a": 5, "b": 1}, [])
    cp = run(g, [5, 1]).critical_path()
    assert cp == ["a"]
    view = network_view(g, cp, only_cp=True)
    assert list(view.nodes()) == ["a"]
    assert view.number_of_edges() == 0


def test_figures_render(diamond):
    result = run(diamond, [0, 3, 2, 0])
    names = {1: "start", 2: "build", 3: "test", 4: "end"}
    slack_dict = result.slack_dict()
    for fig in (
        draw_gantt(result, result.order, names, slack_dict),
        draw_network(diamond, result.critical_path(), slack_dict, only_cp=True),
        draw_pdf(3, 0.5, "days"),
    ):
        assert fig.axes
        plt.close(fig)
