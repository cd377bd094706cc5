from __future__ import annotations

import unittest

from claris_core.node import (
    Arc,
    Circle,
    Color,
    Curve,
    FontSlant,
    FontWeight,
    InvalidColorError,
    InvalidPointError,
    InvalidVertexError,
    Line,
    LineCap,
    MappingDocument,
    Point,
    Polygon,
    Rectangle,
    RequiredFieldError,
    Scale,
    Stroke,
    Text,
    Triangle,
)
from claris_core.node.layers import DEFAULT_FONT_FAMILY, DEFAULT_FONT_SIZE


RED = Color(255, 0, 0, 1.0)


class RectangleTests(unittest.TestCase):
    def test_parse_with_defaults(self) -> None:
        layer = Rectangle.parse(MappingDocument({"x": 1, "y": 2, "width": 30, "height": 40, "color": "#FF0000"}))
        self.assertEqual(layer, Rectangle(x=1.0, y=2.0, width=30.0, height=40.0, color=RED))
        self.assertFalse(layer.fill)
        self.assertEqual(layer.radius, 0.0)
        self.assertEqual(layer.stroke, Stroke())
        self.assertEqual(layer.scale, Scale())

    def test_required_fields(self) -> None:
        base = {"x": 1, "y": 2, "width": 30, "height": 40, "color": "#FF0000"}
        for key in base:
            raw = dict(base)
            del raw[key]
            with self.subTest(key=key):
                with self.assertRaises(RequiredFieldError) as ctx:
                    Rectangle.parse(MappingDocument(raw))
                self.assertEqual(ctx.exception, RequiredFieldError("rectangle", key))

    def test_invalid_color_propagates(self) -> None:
        with self.assertRaises(InvalidColorError):
            Rectangle.parse(MappingDocument({"x": 1, "y": 2, "width": 3, "height": 4, "color": "#AABBCG"}))


class CircleArcTests(unittest.TestCase):
    def test_circle_radius_is_optional(self) -> None:
        layer = Circle.parse(MappingDocument({"x": 5, "y": 6, "color": "red", "fill": True}))
        self.assertEqual(layer.radius, 0.0)
        self.assertTrue(layer.fill)

    def test_circle_requires_center(self) -> None:
        with self.assertRaises(RequiredFieldError) as ctx:
            Circle.parse(MappingDocument({"x": 5, "color": "red"}))
        self.assertEqual(ctx.exception.field, "y")

    def test_arc_fields(self) -> None:
        layer = Arc.parse(
            MappingDocument(
                {"x": 1, "y": 1, "start": 0, "end": 90, "radius": 10, "color": "red", "close": True, "alpha": 0.5}
            )
        )
        self.assertEqual((layer.start, layer.end, layer.radius), (0.0, 90.0, 10.0))
        self.assertTrue(layer.close)
        self.assertFalse(layer.fill)
        self.assertEqual(layer.color.a, 0.5)

    def test_arc_requires_radius(self) -> None:
        with self.assertRaises(RequiredFieldError) as ctx:
            Arc.parse(MappingDocument({"x": 1, "y": 1, "start": 0, "end": 90, "color": "red"}))
        self.assertEqual(str(ctx.exception), "'arc' is required 'radius' option")


class VertexLayerTests(unittest.TestCase):
    def test_triangle_vertices(self) -> None:
        layer = Triangle.parse(MappingDocument({"vertex": [[0, 0], [10, 0], [5, 8]], "color": "red"}))
        self.assertEqual((layer.a, layer.b, layer.c), (Point(0, 0), Point(10, 0), Point(5, 8)))

    def test_triangle_needs_exactly_three_vertices(self) -> None:
        with self.assertRaises(InvalidVertexError):
            Triangle.parse(MappingDocument({"vertex": [[0, 0], [10, 0]], "color": "red"}))
        with self.assertRaises(InvalidVertexError):
            Triangle(vertex=(Point(0, 0), Point(1, 1)), color=RED)  # type: ignore[arg-type]

    def test_triangle_rejects_malformed_point(self) -> None:
        with self.assertRaises(InvalidPointError):
            Triangle.parse(MappingDocument({"vertex": [[0, 0], [10], [5, 8]], "color": "red"}))

    def test_triangle_requires_vertex(self) -> None:
        with self.assertRaises(RequiredFieldError):
            Triangle.parse(MappingDocument({"color": "red"}))

    def test_polygon_vertices(self) -> None:
        layer = Polygon.parse(
            MappingDocument({"vertex": [[0, 0], [10, 0], [10, 10], [0, 10]], "color": "red", "fill": True})
        )
        self.assertEqual(len(layer.vertex), 4)
        self.assertTrue(layer.fill)

    def test_polygon_needs_two_vertices(self) -> None:
        with self.assertRaises(InvalidVertexError):
            Polygon.parse(MappingDocument({"vertex": [[0, 0]], "color": "red"}))

    def test_line_points_and_stroke(self) -> None:
        layer = Line.parse(
            MappingDocument(
                {"points": [[0, 0], [1, 1], [2, 0]], "color": "red", "stroke": {"width": 3, "cap": "square"}}
            )
        )
        self.assertEqual(len(layer.points), 3)
        self.assertEqual(layer.stroke, Stroke(width=3.0, cap=LineCap.SQUARE))

    def test_line_needs_points(self) -> None:
        with self.assertRaises(InvalidPointError):
            Line.parse(MappingDocument({"points": [], "color": "red"}))
        with self.assertRaises(RequiredFieldError):
            Line.parse(MappingDocument({"color": "red"}))


class CurveTextTests(unittest.TestCase):
    def test_curve_points(self) -> None:
        layer = Curve.parse(MappingDocument({"start": [0, 0], "mid": [5, 10], "end": [10, 0], "color": "red"}))
        self.assertEqual((layer.start, layer.mid, layer.end), (Point(0, 0), Point(5, 10), Point(10, 0)))

    def test_curve_requires_end(self) -> None:
        with self.assertRaises(RequiredFieldError) as ctx:
            Curve.parse(MappingDocument({"start": [0, 0], "mid": [5, 10], "color": "red"}))
        self.assertEqual(ctx.exception.field, "end")

    def test_curve_rejects_malformed_point(self) -> None:
        with self.assertRaises(InvalidPointError):
            Curve.parse(MappingDocument({"start": [0], "mid": [5, 10], "end": [1, 1], "color": "red"}))

    def test_text_defaults(self) -> None:
        layer = Text.parse(MappingDocument({"x": 1, "y": 2, "text": "hi", "color": "red"}))
        self.assertEqual(layer.family, DEFAULT_FONT_FAMILY)
        self.assertEqual(layer.size, DEFAULT_FONT_SIZE)
        self.assertEqual(layer.weight, FontWeight.NORMAL)
        self.assertEqual(layer.slant, FontSlant.NORMAL)

    def test_text_font_options(self) -> None:
        layer = Text.parse(
            MappingDocument(
                {
                    "x": 1,
                    "y": 2,
                    "text": "hi",
                    "color": "red",
                    "family": "monospace",
                    "size": 20,
                    "weight": "bold",
                    "slant": "italic",
                }
            )
        )
        self.assertEqual((layer.family, layer.size), ("monospace", 20.0))
        self.assertEqual(layer.weight, FontWeight.BOLD)
        self.assertEqual(layer.slant, FontSlant.ITALIC)

    def test_text_requires_text(self) -> None:
        with self.assertRaises(RequiredFieldError) as ctx:
            Text.parse(MappingDocument({"x": 1, "y": 2, "color": "red"}))
        self.assertEqual(str(ctx.exception), "'text' is required 'text' option")


if __name__ == "__main__":
    unittest.main()
