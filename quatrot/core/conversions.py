# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Core conversion routines for rotation representations

This module contains core routines for converting between rotation quaternions, axis-angle pairs, Euler angles, and
rotation matrices. All routines are implemented purely on numpy arrays (or array like objects) in single precision.

Rotation matrices throughout this package follow the row vector convention, :math:`\\mathbf{v}'=\\mathbf{v}\\mathbf{M}`
(``v @ M`` in numpy).  This is the transpose of the column vector form :math:`\\mathbf{v}'=\\mathbf{T}\\mathbf{v}`.

Euler angles are always ``(roll, pitch, yaw)``, rotations about the x, y, and z axes applied in that order (roll
first, yaw last).
"""

import numpy as np

from quatrot._typing import ARRAY_LIKE, SCALAR_OR_ARRAY, SINGLE_ARRAY, F_SCALAR_OR_ARRAY

from quatrot.core._helpers import (_check_matrix_array_and_shape, _check_quaternion_array_and_shape,
                                   _check_vector_array_and_shape)
from quatrot.core.elementals import rot_x, rot_y, rot_z, vector_normalize
from quatrot.core.quaternion_math import quaternion_normalize


__all__ = ['axis_angle_to_quaternion', 'quaternion_to_axis_angle',
           'euler_to_quaternion', 'quaternion_to_euler', 'euler_to_rotmat',
           'quaternion_to_rotmat', 'rotmat_to_quaternion']


def axis_angle_to_quaternion(axis: ARRAY_LIKE, angle: SCALAR_OR_ARRAY) -> SINGLE_ARRAY:
    r"""
    This function converts a rotation axis and angle into a rotation quaternion.

    The quaternion is formed by:

    .. math::
        \hat{\mathbf{x}} = \frac{\mathbf{a}}{\left\|\mathbf{a}\right\|} \\
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}} \\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    so the rotation is right handed about the axis.  The axis does not need to be of unit length, but it must not be
    zero (a zero axis has no direction and the result will be non-finite).

    This function is vectorized, meaning that you can specify multiple axes as the columns of a 3xn array along with
    either a single angle or n angles.

    :param axis: The rotation axis(es)
    :param angle: The rotation angle(s) in radians
    :return: the rotation quaternion(s) corresponding to the input axis(es) and angle(s)
    """

    unit = vector_normalize(axis)

    if unit.ndim > 1:
        half = np.asarray(angle, dtype=np.float32) * 0.5
    else:
        half = np.float32(angle) * np.float32(0.5)

    q_vec = unit * np.sin(half)

    q_scal = np.broadcast_to(np.cos(half), q_vec.shape[1:])

    return np.concatenate([q_vec, q_scal[np.newaxis]], axis=0)


def quaternion_to_axis_angle(quaternion: ARRAY_LIKE) -> tuple[SINGLE_ARRAY, F_SCALAR_OR_ARRAY]:
    r"""
    This function converts a rotation quaternion into a unit rotation axis and a rotation angle.

    The axis and angle are computed by:

    .. math::
        \theta = 2\text{atan2}(\left\|\mathbf{q}_v\right\|, q_s) \\
        \hat{\mathbf{x}} = \frac{\mathbf{q}_v}{\left\|\mathbf{q}_v\right\|}

    The angle is in :math:`[0, 2\pi]`.  When the vector portion of the quaternion is exactly zero (no rotation) the
    axis is undefined and ``[1, 0, 0]`` is returned for it.

    This function is vectorized, meaning that you can specify multiple quaternions as the columns of a 4xn array, in
    which case the axes are returned as a 3xn array and the angles as a length n array.

    :param quaternion: the rotation quaternion(s) to be converted
    :return: The rotation axis(es) and angle(s)
    """

    quaternion = _check_quaternion_array_and_shape(quaternion)

    vector_norm = np.linalg.norm(quaternion[:3], axis=0)

    angle = 2 * np.arctan2(vector_norm, quaternion[-1])

    with np.errstate(divide='ignore', invalid='ignore'):
        axis = quaternion[:3] / vector_norm

    if quaternion.ndim > 1:

        no_rotation = vector_norm == 0

        axis[:, no_rotation] = np.array([[1], [0], [0]], dtype=np.float32)

    elif vector_norm == 0:

        axis = np.array([1, 0, 0], dtype=np.float32)

    return axis, angle


def euler_to_quaternion(angles: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    This function converts ``(roll, pitch, yaw)`` Euler angles into a rotation quaternion.

    The rotation is about x by roll, then about y by pitch, then about z by yaw, which is the quaternion product
    :math:`\mathbf{q}_z\otimes\mathbf{q}_y\otimes\mathbf{q}_x`.  This is evaluated directly from the half angles:

    .. math::
        q_s = c_rc_pc_y + s_rs_ps_y \\
        q_x = s_rc_pc_y - c_rs_ps_y \\
        q_y = c_rs_pc_y + s_rc_ps_y \\
        q_z = c_rc_ps_y - s_rs_pc_y

    where :math:`c_r=\text{cos}(\frac{roll}{2})`, :math:`s_r=\text{sin}(\frac{roll}{2})` and so on.

    This function is vectorized, meaning that you can specify multiple sets of angles as the columns of a 3xn array.

    :param angles: The roll, pitch, and yaw angle(s) in radians
    :return: The rotation quaternion(s)
    """

    half_roll, half_pitch, half_yaw = _check_vector_array_and_shape(angles) * np.float32(0.5)

    sr, cr = np.sin(half_roll), np.cos(half_roll)
    sp, cp = np.sin(half_pitch), np.cos(half_pitch)
    sy, cy = np.sin(half_yaw), np.cos(half_yaw)

    return np.array([sr * cp * cy - cr * sp * sy,
                     cr * sp * cy + sr * cp * sy,
                     cr * cp * sy - sr * sp * cy,
                     cr * cp * cy + sr * sp * sy], dtype=np.float32)


def quaternion_to_euler(quaternion: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    This function converts a unit rotation quaternion into ``(roll, pitch, yaw)`` Euler angles.

    The extraction uses the same order as :func:`euler_to_quaternion` so the two are inverses of each other:

    .. math::
        roll = \text{atan2}(2(q_sq_x + q_yq_z), 1 - 2(q_x^2 + q_y^2)) \\
        pitch = \text{asin}(2(q_sq_y - q_zq_x)) \\
        yaw = \text{atan2}(2(q_sq_z + q_xq_y), 1 - 2(q_y^2 + q_z^2))

    When :math:`\left|2(q_sq_y - q_zq_x)\right|\geq 1` the rotation is at gimbal lock.  The pitch is then clamped to
    exactly :math:`\pm\frac{\pi}{2}` and the roll and yaw returned by the formulas above are a consistent pair whose
    combined rotation matches the input, though they are not individually meaningful.  Do not rely on roll and yaw
    being stable near the pole.

    This function is vectorized, meaning that you can specify multiple quaternions as the columns of a 4xn array, in
    which case the angles are returned as the columns of a 3xn array.

    :param quaternion: The quaternion(s) to be converted to euler angles
    :return: The roll, pitch, and yaw angle(s) in radians
    """

    x, y, z, w = _check_quaternion_array_and_shape(quaternion)

    roll = np.arctan2(2 * (w * x + y * z), 1 - 2 * (x * x + y * y))

    sin_pitch = 2 * (w * y - z * x)

    with np.errstate(invalid='ignore'):
        pitch = np.where(np.abs(sin_pitch) >= 1,
                         np.copysign(np.float32(np.pi / 2), sin_pitch),
                         np.arcsin(sin_pitch))

    yaw = np.arctan2(2 * (w * z + x * y), 1 - 2 * (y * y + z * z))

    return np.array([roll, pitch, yaw], dtype=np.float32)


def euler_to_rotmat(angles: ARRAY_LIKE) -> SINGLE_ARRAY:
    """
    This function converts ``(roll, pitch, yaw)`` Euler angles into a row vector rotation matrix.

    The matrix is built from the elemental rotations :func:`rot_x`, :func:`rot_y`, and :func:`rot_z` so that it
    applies roll, then pitch, then yaw.  It is the same rotation as
    ``quaternion_to_rotmat(euler_to_quaternion(angles))``.

    This function is vectorized, meaning that you can specify multiple sets of angles as the columns of a 3xn array, in
    which case the matrices are stacked down the first axis.

    :param angles: The roll, pitch, and yaw angle(s) in radians
    :return: The row vector rotation matrix(ces)
    """

    roll, pitch, yaw = _check_vector_array_and_shape(angles)

    # the elementals are column vector matrices, so compose them right to left and then transpose
    column_form = rot_z(yaw) @ rot_y(pitch) @ rot_x(roll)

    return np.swapaxes(column_form, -2, -1)


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    This function converts a unit rotation quaternion into its equivalent row vector rotation matrix.

    The matrix :math:`\mathbf{M}` is formed so that :math:`\mathbf{v}'=\mathbf{v}\mathbf{M}` rotates the row vector
    :math:`\mathbf{v}`:

    .. math::
        \mathbf{M} = \left[\begin{array}{ccc}
        1-2(q_y^2+q_z^2) & 2(q_xq_y+q_zq_s) & 2(q_xq_z-q_yq_s) \\
        2(q_xq_y-q_zq_s) & 1-2(q_x^2+q_z^2) & 2(q_yq_z+q_xq_s) \\
        2(q_xq_z+q_yq_s) & 2(q_yq_z-q_xq_s) & 1-2(q_x^2+q_y^2) \end{array}\right]

    Engines that multiply column vectors (:math:`\mathbf{T}\mathbf{v}`) need the transpose of this matrix.

    This function is vectorized, meaning that you can specify multiple rotation quaternions to be converted to matrices
    by specifying each quaternion as a column.  When converting multiple quaternions, each rotation matrix is stacked
    along the first axis.  For example::

        >>> from quatrot import quaternion_to_rotmat
        >>> quaternion_to_rotmat([[0, 0], [0, 1], [0, 0], [1, 0]])
        array([[[ 1.,  0.,  0.],
                [ 0.,  1.,  0.],
                [ 0.,  0.,  1.]],
               [[-1.,  0.,  0.],
                [ 0.,  1.,  0.],
                [ 0.,  0., -1.]]], dtype=float32)

    :param quaternion: The rotation quaternion(s) to be converted to the rotation matrix(ces)
    :return: a numpy array containing the rotation matrix(ces) corresponding to the input quaternion(s)
    """

    x, y, z, w = _check_quaternion_array_and_shape(quaternion)

    xx, yy, zz = x * x, y * y, z * z
    xy, xz, yz = x * y, x * z, y * z
    xw, yw, zw = x * w, y * w, z * w

    rotation_matrix = np.array([[1 - 2 * (yy + zz), 2 * (xy + zw), 2 * (xz - yw)],
                                [2 * (xy - zw), 1 - 2 * (xx + zz), 2 * (yz + xw)],
                                [2 * (xz + yw), 2 * (yz - xw), 1 - 2 * (xx + yy)]], dtype=np.float32)

    if rotation_matrix.ndim > 2:
        # move the stacking axis to the front
        return np.moveaxis(rotation_matrix, -1, 0)

    return rotation_matrix


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE) -> SINGLE_ARRAY:
    r"""
    This function converts a row vector rotation matrix into a unit rotation quaternion.

    The conversion works on the column vector form :math:`\mathbf{T}=\mathbf{M}^T` and picks whichever of
    :math:`\text{Tr}(\mathbf{T})`, :math:`t_{11}`, :math:`t_{22}`, or :math:`t_{33}` is largest to decide which
    quaternion component to recover from the diagonal.  For instance, when the trace is largest:

    .. math::
        q_s = \frac{1}{2}\sqrt{\text{Tr}(\mathbf{T})+1}\\
        \mathbf{q}_v = \frac{1}{4q_s}\left[\begin{array}{c}t_{32}-t_{23}\\
        t_{13}-t_{31}\\
        t_{21}-t_{12}\end{array}\right]

    and the other three branches are the analogous expressions.  Always dividing by the largest component keeps the
    conversion accurate for rotations near 180 degrees.

    Rotation matrices uniquely represent a rotation while quaternions do not, so the quaternion with a non-negative
    scalar component is returned.

    This function is also vectorized, meaning that you can specify multiple rotation matrices to be converted to
    quaternions by stacking each matrix along the first axis, in which case the quaternions are returned as columns.

    :param rotation_matrix: The rotation matrix to convert to a rotation quaternion
    :return: the rotation quaternion(s) corresponding to the input rotation matrix(ces)
    """

    rotation_matrix = _check_matrix_array_and_shape(rotation_matrix)

    single = rotation_matrix.ndim == 2

    # the column vector form
    t = np.swapaxes(rotation_matrix.reshape(-1, 3, 3), -2, -1)

    t11, t12, t13 = t[:, 0, 0], t[:, 0, 1], t[:, 0, 2]
    t21, t22, t23 = t[:, 1, 0], t[:, 1, 1], t[:, 1, 2]
    t31, t32, t33 = t[:, 2, 0], t[:, 2, 1], t[:, 2, 2]

    trace = t11 + t22 + t33

    branch = np.argmax(np.stack([trace, t11, t22, t33]), axis=0)

    # every branch is evaluated and the unused ones may divide by zero or take the root of a negative number
    with np.errstate(divide='ignore', invalid='ignore'):

        s = 2 * np.sqrt(1 + trace)
        from_scalar = [(t32 - t23) / s, (t13 - t31) / s, (t21 - t12) / s, s / 4]

        s = 2 * np.sqrt(1 + t11 - t22 - t33)
        from_x = [s / 4, (t12 + t21) / s, (t13 + t31) / s, (t32 - t23) / s]

        s = 2 * np.sqrt(1 + t22 - t11 - t33)
        from_y = [(t12 + t21) / s, s / 4, (t23 + t32) / s, (t13 - t31) / s]

        s = 2 * np.sqrt(1 + t33 - t11 - t22)
        from_z = [(t13 + t31) / s, (t23 + t32) / s, s / 4, (t21 - t12) / s]

    candidates = np.array([from_scalar, from_x, from_y, from_z], dtype=np.float32)

    # pick the branch for each matrix, giving a 4xn array
    quaternion = candidates[branch, :, np.arange(branch.size)].T

    # q and -q are the same rotation, keep the one with a non-negative scalar
    quaternion *= np.where(quaternion[-1] < 0, np.float32(-1), np.float32(1))

    quaternion = quaternion_normalize(quaternion)

    if single:
        return quaternion[:, 0]

    return quaternion
