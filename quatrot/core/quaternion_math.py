# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

import numpy as np

from quatrot._typing import ARRAY_LIKE, SINGLE_ARRAY, F_SCALAR_OR_ARRAY, DatetimeLike

from quatrot.core._helpers import _check_quaternion_array_and_shape, _check_vector_array_and_shape, _fractional_time

__all__ = ["IDENTITY_QUATERNION", "quaternion_normalize", "quaternion_inverse", "quaternion_multiplication",
           "quaternion_dot", "quaternion_size", "quaternion_size_squared", "rotate_vector", "unrotate_vector",
           "nlerp", "slerp"]


IDENTITY_QUATERNION: SINGLE_ARRAY = np.array([0, 0, 0, 1], dtype=np.float32)
"""
The identity rotation quaternion ``[0, 0, 0, 1]``.  This array is read only.
"""
IDENTITY_QUATERNION.flags.writeable = False

DEFAULT_NORMALIZE_TOLERANCE: float = 1e-8
"""
Squared length at or below which :func:`quaternion_normalize` gives up and returns the identity.
"""

SLERP_COLINEAR_THRESHOLD: float = 0.9999
"""
Cosine of the angle between two quaternions above which :func:`slerp` falls back to a linear blend.
"""


def quaternion_normalize(quaternion: ARRAY_LIKE, tolerance: float = DEFAULT_NORMALIZE_TOLERANCE) -> SINGLE_ARRAY:
    """
    Scales the quaternion(s) to unit length.

    Any quaternion whose squared length is less than or equal to `tolerance` cannot be meaningfully normalized and is
    replaced with the identity quaternion ``[0, 0, 0, 1]`` instead.  This keeps NaNs from leaking out of degenerate
    inputs.

    The sign of the quaternion is not changed.

    This function is vectorized, therefore you can input multiple quaternions as a 4xn array where each column is an
    independent quaternion.

    :param quaternion: the quaternion(s) to normalize
    :param tolerance: the squared length at or below which the identity is returned
    :returns: The normalized quaternion(s)
    """

    work_quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    size_squared = quaternion_size_squared(work_quaternion)

    if work_quaternion.ndim > 1:

        degenerate = size_squared <= tolerance

        with np.errstate(divide='ignore', invalid='ignore'):
            work_quaternion /= np.sqrt(size_squared)

        work_quaternion[:, degenerate] = IDENTITY_QUATERNION.reshape(4, 1)

    elif size_squared > tolerance:

        work_quaternion /= np.sqrt(size_squared)

    else:

        work_quaternion = IDENTITY_QUATERNION.copy()

    return work_quaternion


def quaternion_inverse(quaternion: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    This function provides the inverse of a rotation quaternion.

    The inverse of a rotation quaternion is defined such that
    :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I` where
    :math:`\mathbf{q}_I=\left[\begin{array}{cccc}0&0&0&1\end{array}\right]^T` is the identity quaternion which
    corresponds to the identity matrix (or no rotation) and :math:`\otimes` indicates quaternion multiplication.
    For a unit quaternion this corresponds to negating the vector portion of the quaternion (the conjugate):

    .. math::
        \mathbf{q}=\left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
        \text{cos}(\frac{\theta}{2})\end{array}\right]\\
        \mathbf{q}^{-1}=\left[\begin{array}{c}-\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    The conjugate is returned regardless of the length of the input, so for a non-unit quaternion this is not the true
    multiplicative inverse.

    This function is also vectorized, meaning that you can specify multiple rotation quaternions to be inversed by
    specifying each quaternion as a column.

    :param quaternion: The rotation quaternion(s) to be inverted
    :return: a numpy array representing the inverse quaternion corresponding to the input quaternion
    """

    # ensure the value is an array and break mutability
    quaternion = _check_quaternion_array_and_shape(quaternion, return_copy=True)

    # negate the vector portion
    quaternion[:3] *= -1

    return quaternion


def quaternion_multiplication(quaternion_1_in: ARRAY_LIKE,
                              quaternion_2_in: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    The hamiltonian multiplication is defined such that
    `q_from_A_to_C = quaternion_multiplication(q_from_B_to_C, q_from_A_to_B)`, that is, the product applies the second
    rotation first and then the first rotation.

    Mathematically this is given by:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} +
        \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
        q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

    The product is not renormalized.  If you are chaining many multiplications you should renormalize periodically
    with :func:`quaternion_normalize`.

    This function is vectorized, therefore you can input multiple quaternions as a 4xn array where each column is an
    independent quaternion.  A single quaternion may be multiplied against a 4xn array.

    :param quaternion_1_in: The first quaternion to multiply
    :param quaternion_2_in: The second quaternion to multiply
    :return: The hamiltonian product of quaternion_1 and quaternion_2
    """

    x1, y1, z1, w1 = _check_quaternion_array_and_shape(quaternion_1_in)
    x2, y2, z2, w2 = _check_quaternion_array_and_shape(quaternion_2_in)

    return np.array([w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
                     w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
                     w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
                     w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2], dtype=np.float32)


def quaternion_dot(quaternion_1_in: ARRAY_LIKE, quaternion_2_in: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the 4 element inner product of two quaternions.

    For unit quaternions this is the cosine of half of the angle between the rotations they represent.

    This function is vectorized over the columns of 4xn inputs.

    :param quaternion_1_in: The first quaternion(s)
    :param quaternion_2_in: The second quaternion(s)
    :return: The dot product(s)
    """

    quaternion_1 = _check_quaternion_array_and_shape(quaternion_1_in)
    quaternion_2 = _check_quaternion_array_and_shape(quaternion_2_in)

    return (quaternion_1.T * quaternion_2.T).sum(axis=-1)


def quaternion_size_squared(quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the squared length of the quaternion(s).

    :param quaternion: The quaternion(s) to measure
    :return: :math:`x^2+y^2+z^2+w^2` for each quaternion
    """

    return quaternion_dot(quaternion, quaternion)


def quaternion_size(quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    """
    Computes the length of the quaternion(s).

    :param quaternion: The quaternion(s) to measure
    :return: The length of each quaternion
    """

    return np.sqrt(quaternion_size_squared(quaternion))


def rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    Rotates the vector(s) by the rotation represented by the unit quaternion(s).

    This is equivalent to :math:`\mathbf{q}\otimes\mathbf{v}\otimes\mathbf{q}^{-1}` but is computed with the cheaper
    identity

    .. math::
        \mathbf{t} = 2\mathbf{q}_v\times\mathbf{v} \\
        \mathbf{v}' = \mathbf{v} + q_s\mathbf{t} + \mathbf{q}_v\times\mathbf{t}

    The quaternion must be of unit length for the result to be a rotation.

    Either input may hold multiple entries as columns (4xn quaternions, 3xn vectors).  The output is 1 dimensional only
    when both inputs are.

    :param quaternion: The rotation quaternion(s)
    :param vector: The vector(s) to rotate
    :return: The rotated vector(s)
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)
    vector = _check_vector_array_and_shape(vector)

    single = (quaternion.ndim == 1) and (vector.ndim == 1)

    work_quaternion = quaternion.reshape(4, -1)
    work_vector = vector.reshape(3, -1)

    q_vector = work_quaternion[:3]
    q_scalar = work_quaternion[3]

    t = 2 * np.cross(q_vector, work_vector, axis=0)

    rotated = work_vector + q_scalar * t + np.cross(q_vector, t, axis=0)

    if single:
        return rotated.ravel()

    return rotated


def unrotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> SINGLE_ARRAY:
    """
    Rotates the vector(s) by the inverse of the rotation represented by the unit quaternion(s).

    See :func:`rotate_vector` and :func:`quaternion_inverse`.

    :param quaternion: The rotation quaternion(s)
    :param vector: The vector(s) to rotate
    :return: The rotated vector(s)
    """

    return rotate_vector(quaternion_inverse(quaternion), vector)


def _short_arc(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE) -> tuple[SINGLE_ARRAY, SINGLE_ARRAY, np.float32]:
    """
    Returns the quaternions as arrays, with the second one flipped onto the same hemisphere as the first, along with
    the cosine of the angle between them.
    """

    q0 = _check_quaternion_array_and_shape(quaternion0)
    q1 = _check_quaternion_array_and_shape(quaternion1)

    if q0.ndim != 1 or q1.ndim != 1:
        raise ValueError('Interpolation is only performed between single quaternions')

    cos_angle = quaternion_dot(q0, q1)

    if cos_angle < 0:
        # q1 and -q1 are the same rotation, so negating it guarantees we travel the shorter way
        q1 = -q1
        cos_angle = -cos_angle

    return q0, q1, cos_angle


def nlerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> SINGLE_ARRAY:
    r"""
    This function performs normalized linear interpolation of rotation quaternions.

    NLERP of quaternions involves first performing a linear interpolation between the two vectors, and then normalizing
    the interpolated result to have unit length.  That is:

    .. math::
        \mathbf{q}=\frac{\mathbf{q}_0(1-p)+\mathbf{q}_1p}
        {\left\|\mathbf{q}_0(1-p)+\mathbf{q}_1p\right\|}

    where :math:`p` is the fractional percent of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we
    want to interpolate at (:math:`p\in[0, 1]`).  If the dot product of the inputs is negative, :math:`\mathbf{q}_1` is
    negated first so that the shorter arc is used.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as python datetime or pandas Timestamp
    objects.

    .. warning::
        NLERP does not perform a constant angular velocity interpolation.  If you need that use :func:`slerp`.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :return: The interpolated quaternion
    """

    alpha = _fractional_time(time, time0, time1)

    q0, q1, _ = _short_arc(quaternion0, quaternion1)

    return quaternion_normalize(q0 * (1 - alpha) + q1 * alpha)


def slerp(quaternion0: ARRAY_LIKE, quaternion1: ARRAY_LIKE,
          time: float | DatetimeLike,
          time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> SINGLE_ARRAY:
    r"""
    This function performs spherical linear interpolation of rotation quaternions.

    SLERP of quaternions involves performing a linear interpolation along the great circle arc connecting the two
    quaternions. That is:

    .. math::
        \Omega = \text{cos}^{-1}(\mathbf{q}_0^T\mathbf{q}_1)\\
        \mathbf{q}=\frac{\text{sin}((1-p)\Omega)}{\text{sin}\Omega}\mathbf{q}_0+
        \frac{\text{sin}(p\Omega)}{\text{sin}\Omega}\mathbf{q}_1

    where :math:`\Omega` is the angle between the first and second quaternion and :math:`p` is the fractional percent
    of the way between :math:`\mathbf{q}_0` and :math:`\mathbf{q}_1` that we want to interpolate at
    (:math:`p\in[0, 1]`).

    If the dot product of the inputs is negative then :math:`\mathbf{q}_1` is negated (which represents the same
    rotation) so that the interpolation follows the shorter arc.  When the cosine of the angle is at least 0.9999 the
    quaternions are nearly colinear, :math:`\text{sin}\Omega` is nearly zero, and a linear blend is used instead.
    Either way the result is normalized before it is returned.

    Both inputs should already be unit quaternions.

    When using this function you can either specify the argument `time` as the fractional percent that you want to
    interpolate at, or specify the keyword arguments `time0` and `time1` to be the times corresponding to the first and
    second quaternion respectively and the function will compute the fractional percent for you.  When using this method
    it is also possible to specify all three of `time`, `time0`, and `time1` as python datetime or pandas Timestamp
    objects.

    :param quaternion0: The starting quaternion
    :param quaternion1: The ending quaternion
    :param time: The time to interpolate the quaternions at, as a fractional percent or as the actual time between
                `time0` and `time1`
    :param time0: the time corresponding to the first quaternion. Leave at 0 if you are specifying `time` as a
                  fractional percent
    :param time1: the time corresponding to the second quaternion. Leave at 1 if you are specifying `time` as a
                  fractional percent
    :return: The interpolated quaternion
    """

    alpha = _fractional_time(time, time0, time1)

    q0, q1, cos_angle = _short_arc(quaternion0, quaternion1)

    if cos_angle < SLERP_COLINEAR_THRESHOLD:

        angle = np.arccos(cos_angle)
        inv_sin = 1 / np.sin(angle)

        scale0 = np.sin((1 - alpha) * angle) * inv_sin
        scale1 = np.sin(alpha * angle) * inv_sin

    else:
        # the quaternions are so close that sin(angle) is nearly 0, so blend linearly
        scale0 = 1 - alpha
        scale1 = alpha

    return quaternion_normalize(scale0 * q0 + scale1 * q1)
