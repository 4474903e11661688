from unittest import TestCase

from datetime import datetime

import numpy as np
import pandas as pd

import quatrot as qr


def random_unit_quaternions(count, seed=0):

    rng = np.random.default_rng(seed)

    quaternions = rng.normal(size=(4, count))

    return (quaternions / np.linalg.norm(quaternions, axis=0, keepdims=True)).astype(np.float32)


def random_unit_vectors(count, seed=1):

    rng = np.random.default_rng(seed)

    vectors = rng.normal(size=(3, count))

    return (vectors / np.linalg.norm(vectors, axis=0, keepdims=True)).astype(np.float32)


def assert_same_rotation(test, actual, desired, atol=1e-4):

    actual = np.asarray(actual)
    desired = np.asarray(desired)

    test.assertTrue(np.allclose(actual, desired, atol=atol) or np.allclose(actual, -desired, atol=atol),
                    msg=f'{actual} and {desired} are not the same rotation')


class TestIdentityQuaternion(TestCase):

    def test_identity_quaternion(self):

        np.testing.assert_array_equal(qr.IDENTITY_QUATERNION, [0, 0, 0, 1])

        self.assertEqual(qr.IDENTITY_QUATERNION.dtype, np.float32)

        with self.assertRaises(ValueError):
            qr.IDENTITY_QUATERNION[0] = 1


class TestQuaternionNormalize(TestCase):

    def test_quaternion_normalize(self):

        q = qr.quaternion_normalize([1, 2, 3, 4])

        np.testing.assert_allclose(q, np.array([1, 2, 3, 4]) / np.sqrt(30), atol=1e-6)
        self.assertEqual(q.dtype, np.float32)

        # the sign is left alone
        np.testing.assert_allclose(qr.quaternion_normalize([0, 0, 0, -2]), [0, 0, 0, -1])

        q = qr.quaternion_normalize([[1, 0], [2, 0], [3, 0], [4, 2]])

        np.testing.assert_allclose(q, np.array([[1, 0], [2, 0], [3, 0], [4, 2]]) / [np.sqrt(30), 2], atol=1e-6)

    def test_degenerate(self):

        np.testing.assert_array_equal(qr.quaternion_normalize([0, 0, 0, 1e-20]), [0, 0, 0, 1])

        np.testing.assert_array_equal(qr.quaternion_normalize([0, 0, 0, 0]), [0, 0, 0, 1])

        q = qr.quaternion_normalize([[0, 0], [0, 3], [0, 0], [0, 4]])

        np.testing.assert_allclose(q, [[0, 0], [0, 0.6], [0, 0], [1, 0.8]], atol=1e-6)

        self.assertFalse(np.isnan(q).any())

    def test_tolerance(self):

        np.testing.assert_allclose(qr.quaternion_normalize([0, 0, 0.001, 0]), [0, 0, 1, 0], atol=1e-6)

        np.testing.assert_array_equal(qr.quaternion_normalize([0, 0, 0.001, 0], tolerance=1e-4), [0, 0, 0, 1])

    def test_input_unchanged(self):

        quaternion = np.array([1, 2, 3, 4], dtype=np.float32)

        qr.quaternion_normalize(quaternion)

        np.testing.assert_array_equal(quaternion, [1, 2, 3, 4])

        with self.assertRaises(ValueError):
            qr.quaternion_normalize([1, 2, 3])


class TestQuaternionInverse(TestCase):

    def test_quaternion_inverse(self):

        quaternion = np.array([1, 2, 3, 4], dtype=np.float32)

        np.testing.assert_array_equal(qr.quaternion_inverse(quaternion), [-1, -2, -3, 4])
        np.testing.assert_array_equal(quaternion, [1, 2, 3, 4])

        qinv = qr.quaternion_inverse([[1, 0], [2, 0], [3, 0], [4, 1]])

        np.testing.assert_array_equal(qinv, [[-1, 0], [-2, 0], [-3, 0], [4, 1]])

    def test_inverse_undoes_rotation(self):

        quaternions = random_unit_quaternions(20)

        for quaternion in quaternions.T:

            with self.subTest(quaternion=quaternion):

                product = qr.quaternion_multiplication(quaternion, qr.quaternion_inverse(quaternion))

                assert_same_rotation(self, product, [0, 0, 0, 1])


class TestQuaternionMultiplication(TestCase):

    def test_quaternion_multiplication(self):

        # i*j = k and j*i = -k
        np.testing.assert_array_equal(qr.quaternion_multiplication([1, 0, 0, 0], [0, 1, 0, 0]), [0, 0, 1, 0])
        np.testing.assert_array_equal(qr.quaternion_multiplication([0, 1, 0, 0], [1, 0, 0, 0]), [0, 0, -1, 0])

        # i*i = -1
        np.testing.assert_array_equal(qr.quaternion_multiplication([1, 0, 0, 0], [1, 0, 0, 0]), [0, 0, 0, -1])

        q = qr.quaternion_multiplication([1, 2, 3, 4], [5, 6, 7, 8])

        np.testing.assert_array_equal(q, [24, 48, 48, -6])

    def test_identity(self):

        for quaternion in random_unit_quaternions(10).T:

            with self.subTest(quaternion=quaternion):

                np.testing.assert_allclose(qr.quaternion_multiplication(quaternion, qr.IDENTITY_QUATERNION),
                                           quaternion, atol=1e-6)
                np.testing.assert_allclose(qr.quaternion_multiplication(qr.IDENTITY_QUATERNION, quaternion),
                                           quaternion, atol=1e-6)

    def test_vectorized(self):

        first = random_unit_quaternions(5, seed=3)
        second = random_unit_quaternions(5, seed=4)

        products = qr.quaternion_multiplication(first, second)

        self.assertEqual(products.shape, (4, 5))

        for ind in range(5):
            np.testing.assert_allclose(products[:, ind], qr.quaternion_multiplication(first[:, ind], second[:, ind]),
                                       atol=1e-6)

        products = qr.quaternion_multiplication(first[:, 0], second)

        for ind in range(5):
            np.testing.assert_allclose(products[:, ind], qr.quaternion_multiplication(first[:, 0], second[:, ind]),
                                       atol=1e-6)

    def test_composition_order(self):

        first = random_unit_quaternions(10, seed=5)
        second = random_unit_quaternions(10, seed=6)
        third = random_unit_quaternions(10, seed=7)
        vectors = random_unit_vectors(10)

        for a, b, c, v in zip(first.T, second.T, third.T, vectors.T):

            with self.subTest(a=a, b=b):

                # a*b applies b first and then a
                np.testing.assert_allclose(qr.rotate_vector(qr.quaternion_multiplication(a, b), v),
                                           qr.rotate_vector(a, qr.rotate_vector(b, v)), atol=1e-5)

                # associative
                np.testing.assert_allclose(qr.quaternion_multiplication(qr.quaternion_multiplication(a, b), c),
                                           qr.quaternion_multiplication(a, qr.quaternion_multiplication(b, c)),
                                           atol=1e-5)

                # the product of unit quaternions is still unit length
                self.assertAlmostEqual(float(qr.quaternion_size(qr.quaternion_multiplication(a, b))), 1, places=5)


class TestQuaternionSize(TestCase):

    def test_quaternion_dot(self):

        self.assertEqual(qr.quaternion_dot([1, 2, 3, 4], [4, 3, 2, 1]), 20)

        np.testing.assert_array_equal(qr.quaternion_dot([[1, 0], [2, 0], [3, 0], [4, 1]], [1, 0, 0, 1]), [5, 1])

    def test_quaternion_size(self):

        self.assertEqual(qr.quaternion_size_squared([1, 2, 3, 4]), 30)

        self.assertAlmostEqual(float(qr.quaternion_size([1, 2, 3, 4])), np.sqrt(30), places=5)

        np.testing.assert_allclose(qr.quaternion_size([[1, 0], [2, 0], [2, 0], [0, 1]]), [3, 1])


class TestRotateVector(TestCase):

    def test_rotate_vector(self):

        half = np.sqrt(2) / 2

        # 90 degrees about y takes x to -z
        np.testing.assert_allclose(qr.rotate_vector([0, half, 0, half], [1, 0, 0]), [0, 0, -1], atol=1e-6)

        # 180 degrees about z takes x to -x
        np.testing.assert_allclose(qr.rotate_vector([0, 0, 1, 0], [1, 0, 0]), [-1, 0, 0], atol=1e-6)

        # 90 degrees about x takes y to z
        np.testing.assert_allclose(qr.rotate_vector([half, 0, 0, half], [0, 1, 0]), [0, 0, 1], atol=1e-6)

        np.testing.assert_allclose(qr.rotate_vector([0, 0, 0, 1], [1, 2, 3]), [1, 2, 3])

    def test_preserves_length(self):

        rng = np.random.default_rng(8)

        vectors = rng.normal(size=(3, 20)).astype(np.float32)

        for quaternion, vector in zip(random_unit_quaternions(20).T, vectors.T):

            with self.subTest(quaternion=quaternion, vector=vector):

                rotated = qr.rotate_vector(quaternion, vector)

                self.assertAlmostEqual(float(np.linalg.norm(rotated)), float(np.linalg.norm(vector)), places=4)

                np.testing.assert_allclose(qr.unrotate_vector(quaternion, rotated), vector, atol=1e-5)

    def test_vectorized(self):

        quaternions = random_unit_quaternions(6)
        vectors = random_unit_vectors(6)

        rotated = qr.rotate_vector(quaternions, vectors)

        self.assertEqual(rotated.shape, (3, 6))

        for ind in range(6):
            np.testing.assert_allclose(rotated[:, ind], qr.rotate_vector(quaternions[:, ind], vectors[:, ind]),
                                       atol=1e-6)

        rotated = qr.rotate_vector(quaternions[:, 0], vectors)

        for ind in range(6):
            np.testing.assert_allclose(rotated[:, ind], qr.rotate_vector(quaternions[:, 0], vectors[:, ind]),
                                       atol=1e-6)

        rotated = qr.rotate_vector(quaternions, vectors[:, 0])

        for ind in range(6):
            np.testing.assert_allclose(rotated[:, ind], qr.rotate_vector(quaternions[:, ind], vectors[:, 0]),
                                       atol=1e-6)

    def test_bad_shape(self):

        with self.assertRaises(ValueError):
            qr.rotate_vector([0, 0, 0, 1], [1, 2])

        with self.assertRaises(ValueError):
            qr.rotate_vector([0, 0, 1], [1, 2, 3])


class TestNLERP(TestCase):

    def test_nlerp(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        np.testing.assert_allclose(qr.nlerp(q0, q1, 0), q0, atol=1e-6)

        np.testing.assert_allclose(qr.nlerp(q0, q1, 1), q1, atol=1e-6)

        qtrue = (np.array(q0) + np.array(q1)) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qr.nlerp(q0, q1, 0.5), qtrue, atol=1e-6)

        np.testing.assert_allclose(qr.nlerp(q0, q1, 5, time0=0, time1=10), qtrue, atol=1e-6)

    def test_short_arc(self):

        q0 = [0, 0, 0, 1]
        q1 = np.array([0.5, 0.5, 0.5, -0.5])

        np.testing.assert_array_equal(qr.nlerp(q0, q1, 0.3), qr.nlerp(q0, -q1, 0.3))


class TestSLERP(TestCase):

    def test_slerp(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        np.testing.assert_allclose(qr.slerp(q0, q1, 0), q0, atol=1e-6)

        np.testing.assert_allclose(qr.slerp(q0, q1, 1), q1, atol=1e-6)

        qtrue = (np.array(q0) + np.array(q1)) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qr.slerp(q0, q1, 0.5), qtrue, atol=1e-6)

        qtrue_quarter = (np.array(q0) + qtrue) / 2
        qtrue_quarter /= np.linalg.norm(qtrue_quarter)

        np.testing.assert_allclose(qr.slerp(q0, q1, 0.25), qtrue_quarter, atol=1e-6)

        # comes from ODTBX matlab function
        qtrue = [0.424985851398278, 0.424985851398278, 0.424985851398278, 0.676875969682661]

        np.testing.assert_allclose(qr.slerp(q0, q1, 0.79), qtrue, atol=1e-5)

    def test_half_way_about_y(self):

        quarter_turn = qr.axis_angle_to_quaternion([0, 1, 0], np.pi / 2)

        np.testing.assert_allclose(qr.slerp(qr.IDENTITY_QUATERNION, quarter_turn, 0.5),
                                   [0, 0.3826834, 0, 0.9238795], atol=1e-6)

    def test_constant_angular_velocity(self):

        end = qr.axis_angle_to_quaternion([0, 0, 1], 2.0)

        for fraction in [0.1, 0.25, 0.5, 0.8]:

            with self.subTest(fraction=fraction):

                np.testing.assert_allclose(qr.slerp([0, 0, 0, 1], end, fraction),
                                           qr.axis_angle_to_quaternion([0, 0, 1], 2.0 * fraction), atol=1e-5)

    def test_properties(self):

        starts = random_unit_quaternions(10, seed=10)
        ends = random_unit_quaternions(10, seed=11)

        for q0, q1 in zip(starts.T, ends.T):

            with self.subTest(q0=q0, q1=q1):

                assert_same_rotation(self, qr.slerp(q0, q1, 0), q0)
                assert_same_rotation(self, qr.slerp(q0, q1, 1), q1)

                for fraction in np.linspace(0, 1, 7):

                    np.testing.assert_allclose(qr.slerp(q0, q0, fraction), q0, atol=1e-4)

                    self.assertAlmostEqual(float(qr.quaternion_size(qr.slerp(q0, q1, fraction))), 1, places=4)

    def test_short_arc(self):

        q0 = qr.axis_angle_to_quaternion([1, 0, 0], 0.3)
        q1 = -qr.axis_angle_to_quaternion([0, 1, 0], 0.5)

        self.assertLess(qr.quaternion_dot(q0, q1), 0)

        for fraction in [0, 0.2, 0.5, 0.9, 1]:

            with self.subTest(fraction=fraction):

                qt = qr.slerp(q0, q1, fraction)

                np.testing.assert_array_equal(qt, qr.slerp(q0, -q1, fraction))

                self.assertGreaterEqual(qr.quaternion_dot(qt, q0), 0)

        # the end point is the short arc representative of q1
        np.testing.assert_allclose(qr.slerp(q0, q1, 1), -q1, atol=1e-6)

    def test_colinear(self):

        q0 = qr.axis_angle_to_quaternion([0, 0, 1], 0.5)
        q1 = qr.axis_angle_to_quaternion([0, 0, 1], 0.501)

        self.assertGreaterEqual(qr.quaternion_dot(q0, q1), 0.9999)

        qtrue = 0.6 * q0 + 0.4 * q1
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qr.slerp(q0, q1, 0.4), qtrue, atol=1e-6)

        self.assertFalse(np.isnan(qr.slerp(q0, q0, 0.5)).any())

    def test_times(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        half_way = qr.slerp(q0, q1, 0.5)

        with self.subTest(time_type=float):
            np.testing.assert_allclose(qr.slerp(q0, q1, 15, time0=10, time1=20), half_way, atol=1e-6)

        with self.subTest(time_type=datetime):
            np.testing.assert_allclose(qr.slerp(q0, q1, datetime(2020, 1, 1, 0, 0, 30),
                                                time0=datetime(2020, 1, 1), time1=datetime(2020, 1, 1, 0, 1)),
                                       half_way, atol=1e-6)

        with self.subTest(time_type=pd.Timestamp):
            np.testing.assert_allclose(qr.slerp(q0, q1, pd.Timestamp('2020-01-01 00:00:30'),
                                                time0=pd.Timestamp('2020-01-01'),
                                                time1=pd.Timestamp('2020-01-01 00:01')),
                                       half_way, atol=1e-6)

        with self.assertRaises(TypeError):
            qr.slerp(q0, q1, 'half')

    def test_single_quaternions_only(self):

        with self.assertRaises(ValueError):
            qr.slerp(random_unit_quaternions(2), random_unit_quaternions(2, seed=2), 0.5)
