from typing import List, Sequence, Tuple
import pyqtgraph as pg


def smooth(values: Sequence[float], factor: float = 0.35) -> List[float]:
    out, last = [], None
    for v in values:
        last = v if last is None else last + factor * (v - last)
        out.append(last)
    return out


def setup_wpm_plot(plot_widget: pg.PlotWidget):
    plot_widget.setBackground(None)
    plot_widget.showGrid(x=False, y=True, alpha=0.12)
    plot_widget.setMenuEnabled(False)
    plot_widget.setMouseEnabled(x=False, y=False)
    plot_widget.hideButtons()
    plot_widget.setLabel("left", "WPM")
    plot_widget.setLabel("bottom", "Time (s)")


def plot_trace(plot_widget: pg.PlotWidget, trace: Sequence[Tuple[float, int]], line_color: str):
    """Plot (elapsed, wpm) samples; returns the curve item."""
    xs = [float(t) for t, _ in trace]
    ys = smooth([float(w) for _, w in trace])
    return plot_widget.plot(xs, ys, pen=pg.mkPen(line_color, width=2.5), antialias=True)
