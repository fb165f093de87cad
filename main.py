import sys
import logging
from time import time

from PyQt5.QtWidgets import (
    QApplication, QMainWindow, QVBoxLayout, QWidget, QHBoxLayout,
    QGraphicsView, QGraphicsScene, QLabel, QGroupBox,
)
from PyQt5.QtCore import Qt, QTimer, QEvent
from PyQt5.QtGui import QPixmap, QImage, QPen, QColor, QBrush

from dragon.cli import parse_args, apply_overrides
from dragon.export import export_snapshot
from dragon.plot_utils import MAX_FPS_HISTORY, get_fps_chart_image
from dragon.settings import ConfigError, default_settings, load_settings
from dragon.simulation import DragonSimulation
from dragon.styles import get_font, get_stylesheet


def setup_logging(log_file):
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    console_handler.setFormatter(console_formatter)
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.INFO)
    file_formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
    file_handler.setFormatter(file_formatter)
    logger.addHandler(console_handler)
    logger.addHandler(file_handler)


def pil_to_pixmap(image):
    data = image.convert("RGBA").tobytes("raw", "RGBA")
    q_image = QImage(data, image.width, image.height, 4 * image.width, QImage.Format_RGBA8888)
    return QPixmap.fromImage(q_image.copy())  # copy detaches from the bytes buffer


class SceneSink:
    """Render sink that adds items to a QGraphicsScene."""

    def __init__(self, scene):
        self.scene = scene
        self.pens = {}
        self.brushes = {}

    def draw_line(self, p1, p2, stroke_width, color):
        key = (stroke_width, color)
        if key not in self.pens:
            self.pens[key] = QPen(QBrush(QColor(*color)), stroke_width)
        self.scene.addLine(p1[0], p1[1], p2[0], p2[1], self.pens[key])

    def draw_filled_rect(self, center, half_size, color):
        if color not in self.brushes:
            self.brushes[color] = QBrush(QColor(*color))
        x, y = center
        self.scene.addRect(
            x - half_size, y - half_size, 2 * half_size, 2 * half_size, QPen(Qt.NoPen), self.brushes[color]
        )


class DragonApp(QMainWindow):
    CHART_REFRESH_FRAMES = 15
    PANEL_WIDTH = 240
    CONTROLS_HELP = (
        "D - Toggle Debug Mode\n"
        "P - Pause/Resume\n"
        "+ / - - Adjust Delay\n"
        "Wheel - Zoom\n"
        "F11 - Fullscreen, Esc - Quit"
    )

    def __init__(self, settings):
        super().__init__()
        self.settings = settings
        self.simulation = DragonSimulation(settings)
        self.fps_history = []
        self.last_frame_time = None
        self.fps_chart = None

        self.init_ui()

        self.timer = QTimer(self)
        self.timer.timeout.connect(self.on_frame)
        self.timer.start(int(1000 / settings.frame_rate))

    def init_ui(self):
        self.setWindowTitle("Dragon Curve")
        self.setStyleSheet(get_stylesheet())

        main_layout = QHBoxLayout()

        display_layout = QVBoxLayout()
        self.setup_display(display_layout)
        main_layout.addLayout(display_layout)

        main_layout.addLayout(self.setup_panel())

        container = QWidget()
        container.setLayout(main_layout)
        self.setCentralWidget(container)

        # Wheel events arrive at the viewport
        self.graphics_view.viewport().installEventFilter(self)

        self.graphics_view.setFocus()
        self.graphics_view.keyPressEvent = self.on_key

    def setup_display(self, layout):
        """Set up the drawing area."""
        width, height = self.settings.viewport
        self.graphics_view = QGraphicsView()
        self.graphics_scene = QGraphicsScene()
        self.graphics_scene.setSceneRect(0, 0, width, height)
        self.graphics_scene.setBackgroundBrush(QBrush(QColor(0, 0, 0)))
        self.graphics_view.setScene(self.graphics_scene)
        self.graphics_view.setFixedSize(width + 2, height + 2)
        self.graphics_view.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.graphics_view.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.sink = SceneSink(self.graphics_scene)
        layout.addWidget(self.graphics_view)

    def setup_panel(self):
        """Set up the stats and debug groups."""
        panel_layout = QVBoxLayout()

        stats_group = QGroupBox("Stats")
        stats_group.setMaximumWidth(self.PANEL_WIDTH)
        stats_layout = QVBoxLayout()
        self.segments_label = self.create_label()
        self.iteration_label = self.create_label()
        self.fps_label = self.create_label()
        self.paused_label = self.create_label("PAUSED")
        self.delay_label = self.create_label()
        for label in (self.segments_label, self.iteration_label, self.fps_label, self.paused_label, self.delay_label):
            stats_layout.addWidget(label)
        stats_group.setLayout(stats_layout)
        panel_layout.addWidget(stats_group, alignment=Qt.AlignTop)

        self.debug_group = QGroupBox("Debug")
        self.debug_group.setMaximumWidth(self.PANEL_WIDTH)
        debug_layout = QVBoxLayout()
        self.debug_label = self.create_label()
        debug_layout.addWidget(self.debug_label)
        debug_layout.addWidget(self.create_label(self.CONTROLS_HELP))
        self.debug_group.setLayout(debug_layout)
        self.debug_group.hide()
        panel_layout.addWidget(self.debug_group, alignment=Qt.AlignTop)

        panel_layout.addStretch()
        return panel_layout

    def create_label(self, text=""):
        label = QLabel(text)
        label.setFont(get_font())
        return label

    def on_frame(self):
        """Advance one frame and redraw."""
        now = time()
        if self.last_frame_time is not None and now > self.last_frame_time:
            self.fps_history.append(1 / (now - self.last_frame_time))
            self.fps_history = self.fps_history[-MAX_FPS_HISTORY:]
        self.last_frame_time = now

        self.graphics_scene.clear()
        self.simulation.tick(self.sink)
        self.update_panel()

    def update_panel(self):
        stats = self.simulation.stats()
        fps = self.fps_history[-1] if self.fps_history else 0.0
        self.segments_label.setText(f"Segments: {stats['segments'] + stats['squares']}")
        self.iteration_label.setText(f"Iteration: {stats['iteration']}")
        self.fps_label.setText(f"FPS: {fps:.1f}")
        self.paused_label.setVisible(stats["paused"])
        if stats["delay_remaining"] is not None:
            self.delay_label.setText(f"Delay: {stats['delay_remaining']}")
        else:
            self.delay_label.setText("")

        self.debug_group.setVisible(stats["debug"])
        if not stats["debug"]:
            return

        delay_count = ""
        if stats["delay_remaining"] is not None:
            delay_count = f"\nDelay Count: {stats['delay'] - stats['delay_remaining']}/{stats['delay']}"
        self.debug_label.setText(
            f"Segments: {stats['segments']}\n"
            f"Squares: {stats['squares']}\n"
            f"Drawn: {stats['drawn']}\n"
            f"View Scale: {stats['scale']:.6f}\n"
            f"Transition: {stats['transition']:.2f}\n"
            f"Iteration: {stats['iteration']}\n"
            f"Delay: {stats['delay']} frames"
            f"{delay_count}"
        )

        frame = self.simulation.clock.frame_count
        if self.fps_chart is None or frame % self.CHART_REFRESH_FRAMES == 0:
            self.fps_chart = pil_to_pixmap(get_fps_chart_image(self.fps_history))
        chart = self.graphics_scene.addPixmap(self.fps_chart)
        chart.setPos(self.settings.viewport[0] - self.fps_chart.width() - 20, 20)

    def on_key(self, event):
        """Handle key press events."""
        logging.info(f"Key pressed: {event.key()}")
        if event.key() == Qt.Key_Escape:
            self.close()
        elif event.key() == Qt.Key_F11:
            if self.isFullScreen():
                self.showNormal()
            else:
                self.showFullScreen()
        elif event.text():
            self.simulation.on_key(event.text())

    def eventFilter(self, source, event):
        """Turn wheel events into zoom steps."""
        if event.type() == QEvent.Wheel:
            # Qt reports scrolling down as a negative delta
            self.simulation.on_scroll(-event.angleDelta().y())
            return True
        return super().eventFilter(source, event)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file)

    settings = default_settings
    if args.load:
        try:
            settings = load_settings(args.load)
        except ConfigError as error:
            logging.error(f"Invalid settings in {args.load}: {error}")
            return 2
        logging.info(f"Settings loaded from {args.load}")
    settings = apply_overrides(settings, args)

    if args.export:
        export_snapshot(settings, args.export, args.iterations)
        return 0

    app = QApplication(sys.argv)
    main_window = DragonApp(settings)
    main_window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
