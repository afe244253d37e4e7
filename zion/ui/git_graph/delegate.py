"""Item delegate painting the lane graph next to each commit subject."""

from PySide6.QtCore import QModelIndex, QPersistentModelIndex, QPointF, QRectF, QSize, Qt
from PySide6.QtGui import QFont, QFontMetrics, QPainter, QPainterPath, QPen
from PySide6.QtWidgets import QStyle, QStyledItemDelegate, QStyleOptionViewItem, QWidget

from zion.constants import DEFAULT_LANE_WIDTH, DEFAULT_ROW_HEIGHT, GRAPH_PADDING
from zion.graph.types import Commit
from zion.ui.git_graph.geometry import Stroke, StrokeKind, graph_width, row_geometry
from zion.ui.git_graph.model import COMMIT_ROLE, CommitListModel
from zion.ui.git_graph.types import NODE_OUTLINE, get_lane_color


class LaneGraphDelegate(QStyledItemDelegate):
    """Paints one commit row: lanes, node, decorations and subject."""

    NODE_RADIUS = 6.5
    HEAD_RADIUS = 8.0
    LINE_WIDTH = 1.4
    EMPHASIZED_LINE_WIDTH = 2.5
    EDGE_WIDTH = 2.0

    def __init__(
        self,
        row_height: int = DEFAULT_ROW_HEIGHT,
        lane_width: int = DEFAULT_LANE_WIDTH,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.row_height = row_height
        self.lane_width = lane_width

    def sizeHint(  # noqa: N802
        self, option: QStyleOptionViewItem, index: QModelIndex | QPersistentModelIndex
    ) -> QSize:
        hint = super().sizeHint(option, index)
        return QSize(hint.width(), self.row_height)

    def _graph_width(self, index: QModelIndex | QPersistentModelIndex) -> float:
        model = index.model()
        lanes = model.max_lanes if isinstance(model, CommitListModel) else 1
        return graph_width(lanes, self.lane_width, GRAPH_PADDING)

    def paint(
        self,
        painter: QPainter,
        option: QStyleOptionViewItem,
        index: QModelIndex | QPersistentModelIndex,
    ) -> None:
        """Paint the row."""
        commit = index.data(COMMIT_ROLE)
        if not isinstance(commit, Commit):
            super().paint(painter, option, index)
            return

        rect = option.rect  # type: ignore[attr-defined]
        state = option.state  # type: ignore[attr-defined]
        painter.save()
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        if state & QStyle.StateFlag.State_Selected:
            painter.fillRect(rect, option.palette.highlight())  # type: ignore[attr-defined]

        painter.translate(rect.left(), rect.top())
        self._paint_graph(painter, commit, float(rect.height()))

        text_left = self._graph_width(index)
        text_rect = QRectF(text_left, 0, rect.width() - text_left, rect.height())
        self._paint_text(painter, commit, text_rect)

        painter.restore()

    def _paint_graph(self, painter: QPainter, commit: Commit, height: float) -> None:
        geometry = row_geometry(commit, height, self.lane_width, GRAPH_PADDING)

        # Lines first, node on top
        for stroke in geometry.strokes:
            self._paint_stroke(painter, stroke)

        center = QPointF(*geometry.node)
        color = get_lane_color(geometry.node_color_key)
        painter.setPen(QPen(NODE_OUTLINE, 1.8))
        painter.setBrush(color)
        if commit.is_head:
            painter.drawEllipse(center, self.HEAD_RADIUS, self.HEAD_RADIUS)
            painter.setBrush(NODE_OUTLINE)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.drawEllipse(center, 3.0, 3.0)
        else:
            painter.drawEllipse(center, self.NODE_RADIUS, self.NODE_RADIUS)

    def _paint_stroke(self, painter: QPainter, stroke: Stroke) -> None:
        color = get_lane_color(stroke.color_key)
        if stroke.kind is StrokeKind.LINE:
            width = self.EMPHASIZED_LINE_WIDTH if stroke.emphasized else self.LINE_WIDTH
            if not stroke.emphasized:
                color.setAlphaF(0.6)
        else:
            width = self.EDGE_WIDTH

        pen = QPen(color, width)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)

        path = QPainterPath()
        points = [QPointF(x, y) for x, y in stroke.points]
        path.moveTo(points[0])
        if stroke.kind is StrokeKind.LINE:
            path.lineTo(points[1])
        else:
            path.cubicTo(points[1], points[2], points[3])
        painter.drawPath(path)

    def _paint_text(self, painter: QPainter, commit: Commit, rect: QRectF) -> None:
        x = rect.left()
        baseline_rect = QRectF(rect)

        # Decoration pills before the subject
        pill_font = QFont("sans-serif", 8)
        fm = QFontMetrics(pill_font)
        painter.setFont(pill_font)
        for decoration in commit.decorations:
            text_width = fm.horizontalAdvance(decoration) + 10
            pill = QRectF(x, rect.top() + 5, text_width, rect.height() - 10)
            color = get_lane_color(commit.node_color_key)
            painter.setPen(Qt.PenStyle.NoPen)
            color.setAlphaF(0.2)
            painter.setBrush(color)
            painter.drawRoundedRect(pill, 4, 4)
            painter.setPen(get_lane_color(commit.node_color_key).darker(130))
            painter.drawText(pill, Qt.AlignmentFlag.AlignCenter, decoration)
            x += text_width + 4

        baseline_rect.setLeft(x + 2)
        painter.setFont(QFont())
        painter.setPen(Qt.GlobalColor.black)
        subject = QFontMetrics(painter.font()).elidedText(
            f"{commit.short_hash}  {commit.subject}",
            Qt.TextElideMode.ElideRight,
            int(baseline_rect.width()),
        )
        painter.drawText(baseline_rect, Qt.AlignmentFlag.AlignVCenter, subject)
