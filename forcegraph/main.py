import argparse
import logging
import os
import sys

import networkx as nx
from PyQt6.QtWidgets import QApplication, QMainWindow, QFileDialog, QMessageBox, QLabel
from PyQt6.QtGui import QAction, QPalette, QColor
from PyQt6.QtCore import Qt

from forcegraph.config import load_config
from forcegraph.demo import build_demo_graph
from forcegraph.errors import GraphError
from forcegraph.graph_engine import GraphEngine
from forcegraph.ui.graph_widget import GraphWidget
from forcegraph.ui.preferences import PreferencesDialog
from forcegraph.ui.settings import SettingsStore

logger = logging.getLogger(__name__)

READERS = {
    ".graphml": nx.read_graphml,
    ".gml": nx.read_gml,
    ".edgelist": nx.read_edgelist,
    ".txt": nx.read_edgelist,
}


def read_graph(path):
    ext = os.path.splitext(path)[1].lower()
    reader = READERS.get(ext)
    if reader is None:
        raise GraphError(f"Unsupported graph format: {ext or path}")
    return reader(path)


class MainWindow(QMainWindow):
    def __init__(self, config):
        super().__init__()
        self.setWindowTitle("forcegraph")
        self.resize(1200, 800)

        self.engine = GraphEngine(config)
        self.store = SettingsStore()

        self.graph_widget = GraphWidget(self.engine, store=self.store)
        self.graph_widget.nodeClicked.connect(self.on_node_clicked)
        self.setCentralWidget(self.graph_widget)

        self.info_label = QLabel("Drag nodes, drag the background to pan, scroll to zoom.")
        self.statusBar().addWidget(self.info_label)

        self.create_menu()
        self.setup_theme()

    def create_menu(self):
        menu = self.menuBar()
        menu.clear()

        file_menu = menu.addMenu("File")

        open_action = QAction("Open graph...", self)
        open_action.setShortcut("Ctrl+O")
        open_action.triggered.connect(self.open_file_dialog)
        file_menu.addAction(open_action)

        exit_action = QAction("Exit", self)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

        edit_menu = menu.addMenu("Edit")
        pref_action = QAction("Preferences", self)
        pref_action.triggered.connect(self.open_preferences)
        edit_menu.addAction(pref_action)

        view_menu = menu.addMenu("View")
        reset_action = QAction("Reset view", self)
        reset_action.triggered.connect(self.graph_widget.reset_view)
        view_menu.addAction(reset_action)

        sim_menu = menu.addMenu("Simulation")
        self.pause_action = QAction("Pause", self)
        self.pause_action.setCheckable(True)
        self.pause_action.toggled.connect(self.toggle_pause)
        sim_menu.addAction(self.pause_action)

    def setup_theme(self):
        app = QApplication.instance()
        app.setStyle("Fusion")

        palette = QPalette()
        palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
        palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
        palette.setColor(QPalette.ColorRole.Base, QColor(25, 25, 25))
        palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
        palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
        palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
        palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
        app.setPalette(palette)

    def toggle_pause(self, paused):
        if paused:
            self.graph_widget.pause()
        else:
            self.graph_widget.resume()

    def open_preferences(self):
        dlg = PreferencesDialog(self.engine.config, self)
        dlg.settings_applied.connect(self.apply_preferences)
        dlg.exec()

    def apply_preferences(self, values):
        try:
            config = self.engine.configure(**values)
        except GraphError as e:
            QMessageBox.critical(self, "Error", str(e))
            return
        self.graph_widget.view.persist = config.persist_zoom

    def on_node_clicked(self, uid):
        node = self.engine.nodes.get(uid)
        if node is not None:
            self.info_label.setText(f"{node.label or uid}: {len(node.neighbors)} neighbours")

    def open_file_dialog(self):
        fname, _ = QFileDialog.getOpenFileName(
            self, "Open graph", "", "Graphs (*.graphml *.gml *.edgelist *.txt);;All Files (*)"
        )
        if fname:
            self.load_graph(fname)

    def load_graph(self, path):
        try:
            graph = read_graph(path)
        except (GraphError, OSError, nx.NetworkXError) as e:
            logger.error("Failed to load %s: %s", path, e)
            QMessageBox.critical(self, "Error", f"Could not load graph: {e}")
            return

        self.engine = GraphEngine(self.engine.config)
        self.engine.set_bounds(self.graph_widget.width(), self.graph_widget.height())
        self.engine.load_from_networkx(graph)
        self.graph_widget.set_engine(self.engine)
        self.graph_widget.reset_view()
        self.pause_action.setChecked(False)
        self.graph_widget.resume()
        self.info_label.setText(
            f"{os.path.basename(path)}: {len(self.engine.nodes)} nodes, {len(self.engine.edges)} edges"
        )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Interactive force-directed graph viewer")
    parser.add_argument("graph", nargs="?", help="GraphML, GML or edge list file to open")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--nodes", type=int, default=200, help="Size of the demo graph")
    args, qt_args = parser.parse_known_args(argv)

    logging.basicConfig(level=logging.INFO)

    try:
        config = load_config(args.config)
    except GraphError as e:
        logger.error("%s", e)
        return 2

    app = QApplication([sys.argv[0], *qt_args])
    window = MainWindow(config)
    if args.graph:
        window.load_graph(args.graph)
    else:
        build_demo_graph(window.engine, count=args.nodes, seed=config.seed)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
