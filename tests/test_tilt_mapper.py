import math
import unittest

from config import TiltConfig
from tilt_mapper import TiltSample, map_tilt_to_targets, pointer_to_tilt
from vector_math import Point2


class TestMapTiltToTargets(unittest.TestCase):
    def test_level_device_centres_targets(self):
        t1, t2 = map_tilt_to_targets(0.0, 0.0, 400.0, 300.0)
        self.assertEqual(t1, Point2(120.0, 90.0))
        self.assertEqual(t2, Point2(280.0, 210.0))

    def test_full_roll_and_pitch_reach_band_edges(self):
        t1, t2 = map_tilt_to_targets(math.pi / 2, math.pi, 1000.0, 1000.0)
        # midX = 1000 * 0.9, midY = 1000 * 0.2
        self.assertAlmostEqual(t1.x, 900.0 - 80.0, places=9)
        self.assertAlmostEqual(t1.y, 200.0 - 60.0, places=9)
        self.assertAlmostEqual(t2.x, 900.0 + 80.0, places=9)
        self.assertAlmostEqual(t2.y, 200.0 + 60.0, places=9)

    def test_out_of_range_angles_are_not_clamped(self):
        t1, _ = map_tilt_to_targets(0.0, 2 * math.pi, 1000.0, 1000.0)
        # midX = 1000 * (0.5 + 0.8) lies outside the viewport
        self.assertAlmostEqual(t1.x, 1300.0 - 80.0, places=9)

    def test_custom_tilt_config(self):
        tilt = TiltConfig(horizontal_span=0.0, vertical_span=0.0, offset_x=10.0, offset_y=5.0)
        t1, t2 = map_tilt_to_targets(1.0, 1.0, 200.0, 100.0, tilt)
        self.assertEqual(t1, Point2(90.0, 45.0))
        self.assertEqual(t2, Point2(110.0, 55.0))


class TestPointerToTilt(unittest.TestCase):
    def test_centre_is_level(self):
        sample = pointer_to_tilt(200.0, 150.0, 400.0, 300.0)
        self.assertAlmostEqual(sample.pitch, 0.0, places=12)
        self.assertAlmostEqual(sample.roll, 0.0, places=12)

    def test_corners_and_clamping(self):
        top_right = pointer_to_tilt(400.0, 0.0, 400.0, 300.0)
        self.assertAlmostEqual(top_right.pitch, math.pi / 2, places=12)
        self.assertAlmostEqual(top_right.roll, math.pi, places=12)

        outside = pointer_to_tilt(-50.0, 900.0, 400.0, 300.0)
        self.assertAlmostEqual(outside.pitch, -math.pi / 2, places=12)
        self.assertAlmostEqual(outside.roll, -math.pi, places=12)

    def test_targets_follow_pointer(self):
        sample = pointer_to_tilt(300.0, 75.0, 400.0, 300.0)
        t1, t2 = map_tilt_to_targets(sample.pitch, sample.roll, 400.0, 300.0)
        mid_x = (t1.x + t2.x) / 2
        mid_y = (t1.y + t2.y) / 2
        self.assertGreater(mid_x, 200.0)
        self.assertLess(mid_y, 150.0)

    def test_empty_viewport(self):
        self.assertEqual(pointer_to_tilt(10.0, 10.0, 0.0, 0.0), TiltSample(0.0, 0.0))


if __name__ == "__main__":
    unittest.main()
