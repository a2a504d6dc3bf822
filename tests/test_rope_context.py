import unittest

import numpy as np

from bezier import sample_curve
from config import Config, RenderConfig
from rope_context import apply_tilt, build_frame, create_context, step_springs
from tilt_mapper import TiltSample
from vector_math import Point2


class TestCreateContext(unittest.TestCase):
    def test_initial_layout(self):
        ctx = create_context(400.0, 300.0)
        self.assertAlmostEqual(ctx.p0.x, 60.0, places=9)
        self.assertAlmostEqual(ctx.p0.y, 150.0, places=9)
        self.assertAlmostEqual(ctx.p3.x, 340.0, places=9)
        self.assertAlmostEqual(ctx.p3.y, 150.0, places=9)
        self.assertAlmostEqual(ctx.p1.position.x, 140.0, places=9)
        self.assertAlmostEqual(ctx.p1.position.y, 90.0, places=9)
        self.assertAlmostEqual(ctx.p2.position.x, 260.0, places=9)
        self.assertAlmostEqual(ctx.p2.position.y, 210.0, places=9)
        self.assertEqual(ctx.target1, ctx.p1.position)
        self.assertEqual(ctx.target2, ctx.p2.position)
        self.assertEqual(ctx.p1.velocity, Point2(0.0, 0.0))
        self.assertEqual(ctx.p2.velocity, Point2(0.0, 0.0))

    def test_uses_config_constants(self):
        cfg = Config()
        cfg.spring.stiffness = 0.5
        cfg.layout.p0 = [0.0, 0.0]
        ctx = create_context(100.0, 100.0, cfg)
        self.assertEqual(ctx.spring.stiffness, 0.5)
        self.assertEqual(ctx.p0, Point2(0.0, 0.0))


class TestTicking(unittest.TestCase):
    def test_springs_at_rest_without_input(self):
        ctx = create_context(400.0, 300.0)
        before = ctx.control_points()
        for _ in range(100):
            step_springs(ctx)
        self.assertEqual(ctx.control_points(), before)
        self.assertEqual(ctx.tick_count, 100)

    def test_endpoints_never_move(self):
        ctx = create_context(400.0, 300.0)
        p0, p3 = ctx.p0, ctx.p3
        apply_tilt(ctx, TiltSample(pitch=0.8, roll=-1.2), 400.0, 300.0)
        for _ in range(500):
            step_springs(ctx)
        self.assertEqual(ctx.p0, p0)
        self.assertEqual(ctx.p3, p3)
        self.assertNotEqual(ctx.p1.position, Point2(140.0, 90.0))

    def test_apply_tilt_last_write_wins(self):
        ctx = create_context(400.0, 300.0)
        apply_tilt(ctx, TiltSample(pitch=1.0, roll=1.0), 400.0, 300.0)
        apply_tilt(ctx, TiltSample(pitch=0.0, roll=0.0), 400.0, 300.0)
        self.assertEqual(ctx.target1, Point2(120.0, 90.0))
        self.assertEqual(ctx.target2, Point2(280.0, 210.0))


class TestBuildFrame(unittest.TestCase):
    def test_frame_contents(self):
        ctx = create_context(400.0, 300.0)
        frame = build_frame(ctx)
        self.assertEqual(frame.curve.shape, (101, 2))
        self.assertEqual(frame.tangents.shape, (6, 2, 2))
        self.assertEqual(frame.control_points, ctx.control_points())
        self.assertEqual(frame.tick, 0)

    def test_render_config_controls_sampling(self):
        ctx = create_context(400.0, 300.0)
        render = RenderConfig(curve_steps=10, tangent_params=[0.5], tangent_length=5.0)
        frame = build_frame(ctx, render)
        self.assertEqual(frame.curve.shape, (11, 2))
        self.assertEqual(frame.tangents.shape, (1, 2, 2))
        seg = frame.tangents[0]
        self.assertAlmostEqual(float(np.hypot(*(seg[1] - seg[0]))), 5.0, places=9)


class TestEndToEnd(unittest.TestCase):
    def test_curve_converges_to_target_curve(self):
        ctx = create_context(400.0, 300.0)
        apply_tilt(ctx, TiltSample(pitch=0.0, roll=0.0), 400.0, 300.0)

        for _ in range(20000):
            step_springs(ctx)
        frame = build_frame(ctx)

        expected = sample_curve(ctx.p0, ctx.target1, ctx.target2, ctx.p3)
        np.testing.assert_allclose(frame.curve, expected, atol=1e-6)


if __name__ == "__main__":
    unittest.main()
