import time

from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import QTimer, Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QFont, QTransform

from forcegraph.interaction import InteractionController
from forcegraph.view import ViewTransform

QT_CURSORS = {
    "default": Qt.CursorShape.ArrowCursor,
    "pointer": Qt.CursorShape.PointingHandCursor,
    "grab": Qt.CursorShape.OpenHandCursor,
    "grabbing": Qt.CursorShape.ClosedHandCursor,
}

DIM_ALPHA = 60


class GraphWidget(QWidget):
    nodeClicked = pyqtSignal(int)

    def __init__(self, engine, store=None, parent=None):
        super().__init__(parent)
        self.engine = engine
        config = engine.config

        # Rendering settings
        self.node_color = QColor(config.node_color)
        self.hover_color = QColor(config.hover_color)
        self.node_text_color = QColor(config.text_color)
        self.edge_color = QColor(config.edge_color)
        self.bg_color = QColor(config.background)
        self.label_font = QFont(config.font, config.font_size)

        # Camera
        self.view = ViewTransform(
            config.min_scale, config.max_scale, store=store, persist=config.persist_zoom
        )
        self.controller = InteractionController(engine, self.view)
        self.cursor_pos = None

        # Frame timing
        self.last_frame_time = time.perf_counter()
        self.frame_diff = 0.0

        # Physics Timer
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.physics_loop)
        self.timer.start(16) # ~60 FPS

        self.setMouseTracking(True)

    @property
    def framerate(self):
        return round(1 / self.frame_diff) if self.frame_diff > 0 else 0

    def physics_loop(self):
        if not self.engine.advance_frame():
            self.timer.stop()
            return
        now = time.perf_counter()
        self.frame_diff = now - self.last_frame_time
        self.last_frame_time = now
        self.update()

    def resume(self):
        self.engine.start()
        self.last_frame_time = time.perf_counter()
        if not self.timer.isActive():
            self.timer.start(16)

    def pause(self):
        self.engine.stop()

    def set_engine(self, engine):
        self.controller.attach(engine)
        self.engine = engine
        self.update()

    def resizeEvent(self, event):
        self.engine.set_bounds(self.width(), self.height())
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Fill Background
        painter.fillRect(self.rect(), self.bg_color)

        # Apply Camera Transform: device = (sim + translate) * scale
        transform = QTransform()
        transform.scale(self.view.scale, self.view.scale)
        transform.translate(self.view.translate_x, self.view.translate_y)
        painter.setTransform(transform)

        hovered = self.controller.hovered_node
        focus = None
        if hovered is not None and self.engine.config.dim_unrelated:
            focus = hovered.neighbors | {hovered.uid}

        # Draw Edges
        for u, v in self.engine.edges:
            n1 = self.engine.nodes[u]
            n2 = self.engine.nodes[v]
            color = QColor(self.edge_color)
            if focus is not None and hovered.uid not in (u, v):
                color.setAlpha(DIM_ALPHA)
            painter.setPen(QPen(color, 1 / self.view.scale))
            painter.drawLine(QPointF(n1.x, n1.y), QPointF(n2.x, n2.y))

        # Draw Nodes
        painter.setFont(self.label_font)
        show_labels = self.view.scale >= self.engine.config.min_label_scale

        for node in self.engine.nodes.values():
            if node is hovered:
                color = QColor(self.hover_color)
            else:
                color = QColor(node.color) if node.color else QColor(self.node_color)
            if focus is not None and node.uid not in focus:
                color.setAlpha(DIM_ALPHA)
            painter.setBrush(QBrush(color))
            painter.setPen(Qt.PenStyle.NoPen)

            rect = QRectF(node.x - node.size, node.y - node.size, node.size * 2, node.size * 2)
            painter.drawEllipse(rect)

            if show_labels and node.label:
                text_color = QColor(self.node_text_color)
                if focus is not None and node.uid not in focus:
                    text_color.setAlpha(DIM_ALPHA)
                painter.setPen(text_color)
                painter.drawText(QRectF(node.x - 50, node.y + node.size + 2, 100, 20),
                                 Qt.AlignmentFlag.AlignCenter, node.label)

        # Screen-space overlays
        painter.resetTransform()
        if self.engine.config.cursor_dot and self.cursor_pos is not None:
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(self.hover_color))
            painter.drawEllipse(self.cursor_pos, 3, 3)

        painter.setPen(self.node_text_color)
        painter.drawText(QRectF(8, 8, 120, 20), Qt.AlignmentFlag.AlignLeft, f"{self.framerate} fps")

    def _sync_cursor(self):
        self.setCursor(QT_CURSORS[self.controller.cursor])

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        node = self.controller.pointer_down(pos.x(), pos.y())
        if node is not None:
            self.nodeClicked.emit(node.uid)
        self._sync_cursor()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.cursor_pos = pos
        self.controller.pointer_move(pos.x(), pos.y())
        self._sync_cursor()
        self.update()

    def mouseReleaseEvent(self, event):
        pos = event.position()
        self.controller.pointer_up(pos.x(), pos.y())
        self._sync_cursor()

    def leaveEvent(self, event):
        self.controller.pointer_leave()
        self.cursor_pos = None
        self._sync_cursor()
        super().leaveEvent(event)

    def wheelEvent(self, event):
        # Zoom about the cursor
        pos = event.position()
        self.controller.wheel(pos.x(), pos.y(), event.angleDelta().y())
        self.update()

    def center_on_node(self, uid):
        node = self.engine.nodes.get(uid)
        if node is not None:
            self.view.center_on(node.x, node.y, self.width(), self.height())
            self.update()

    def reset_view(self):
        self.view.reset()
        self.update()
