from io import BytesIO

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from PIL import Image

LINE_COLOR = (0, 230, 0)
CHART_COLOR = (0, 60, 0)
MAX_FPS_HISTORY = 120  # samples kept for the chart
TARGET_FPS = 60


def _rgb(color):
    return tuple(c / 255 for c in color)


def plot_fps_history(history, max_samples=MAX_FPS_HISTORY, target_fps=TARGET_FPS):
    fig, ax = plt.subplots(figsize=(4, 1.5), dpi=100)
    fig.patch.set_facecolor(_rgb(CHART_COLOR))
    ax.set_facecolor(_rgb(CHART_COLOR))

    samples = np.asarray(history[-max_samples:], dtype=np.float64)
    ax.plot(np.arange(len(samples)), samples, color=_rgb(LINE_COLOR), linewidth=1)

    ax.set_xlim(0, max_samples)
    ax.set_ylim(0, max(target_fps, samples.max() if len(samples) else 0))
    ax.set_title("FPS History", color=_rgb(LINE_COLOR), fontsize=9, loc="left")
    ax.tick_params(colors=_rgb(LINE_COLOR), labelsize=7)
    for spine in ax.spines.values():
        spine.set_color(_rgb(LINE_COLOR))
    fig.tight_layout()
    return fig


def render_figure_to_image(fig):
    buf = BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor())
    buf.seek(0)
    image = Image.open(BytesIO(buf.read())).convert("RGBA")  # Create a new buffer to keep the image open
    buf.close()
    plt.close(fig)
    return image


def get_fps_chart_image(history):
    return render_figure_to_image(plot_fps_history(history))
