# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
Elemental vector and matrix routines.

These are the small pieces of 3D linear algebra that the quaternion routines lean on: normalizing a vector and the three
elemental axis rotations.
"""

import numpy as np

from quatrot._typing import SCALAR_OR_ARRAY, ARRAY_LIKE, SINGLE_ARRAY
from quatrot.core._helpers import _check_vector_array_and_shape


__all__ = ["vector_normalize", "rot_x", "rot_y", "rot_z"]


def vector_normalize(vector: ARRAY_LIKE) -> SINGLE_ARRAY:
    """
    Scales the vector(s) to unit length.

    This function is vectorized, therefore you can input multiple vectors as a 3xn array where each column is an
    independent vector.

    A zero length vector has no direction.  No check is made for this case and the result will be non-finite.

    :param vector: The vector(s) to normalize
    :return: The unit vector(s) pointing in the same direction(s) as the input
    """

    vector = _check_vector_array_and_shape(vector)

    with np.errstate(divide='ignore', invalid='ignore'):
        return vector / np.linalg.norm(vector, axis=0, keepdims=True)


def rot_x(theta: SCALAR_OR_ARRAY) -> SINGLE_ARRAY:
    r"""
    This function performs a right handed rotation about the x axis by angle theta.

    Mathematically this rotation is defined as:

    .. math::
        \mathbf{R}_x(\theta)=\left[\begin{array}{ccc} 1 & 0 & 0 \\
        0 & \text{cos}(\theta) & -\text{sin}(\theta) \\
        0 & \text{sin}(\theta) & \text{cos}(\theta) \end{array}\right]

    This is the column vector form (:math:`\mathbf{y}'=\mathbf{R}_x\mathbf{y}`).  The row vector form used by
    :func:`.quaternion_to_rotmat` is the transpose.

    Theta should be in units of radians and can be a scalar or a vector.  If theta is a vector then each theta value
    will have a corresponding rotation matrix down the first axis of the output.

    :param theta: The angles to form the rotation matrix(ces) for
    :return: The rotation matrix(ces) corresponding to the rotation angle(s)
    """

    # ensure we have an array of theta(s)
    theta = np.atleast_1d(np.asarray(theta, dtype=np.float32)).flatten()

    ones = np.ones(theta.shape, dtype=np.float32)
    zeros = np.zeros(theta.shape, dtype=np.float32)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    # form and return the matrix(ces)
    return np.vstack([ones, zeros, zeros, zeros, ctheta, -stheta, zeros, stheta, ctheta]).T.reshape(-1, 3, 3).squeeze()


def rot_y(theta: SCALAR_OR_ARRAY) -> SINGLE_ARRAY:
    r"""
    This function performs a right handed rotation about the y axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_y(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & 0 & \text{sin}(\theta) \\
        0 & 1 & 0 \\
        -\text{sin}(\theta) & 0 & \text{cos}(\theta) \end{array}\right]

    :param theta: The angles to form the rotation matrix(ces) for
    :return: The rotation matrix(ces) corresponding to the rotation angle(s)
    """

    theta = np.atleast_1d(np.asarray(theta, dtype=np.float32)).flatten()

    ones = np.ones(theta.shape, dtype=np.float32)
    zeros = np.zeros(theta.shape, dtype=np.float32)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.vstack([ctheta, zeros, stheta, zeros, ones, zeros, -stheta, zeros, ctheta]).T.reshape(-1, 3, 3).squeeze()


def rot_z(theta: SCALAR_OR_ARRAY) -> SINGLE_ARRAY:
    r"""
    This function performs a right handed rotation about the z axis by angle theta.

    This rotation is defined as:

    .. math::
        \mathbf{R}_z(\theta)=\left[\begin{array}{ccc} \text{cos}(\theta) & -\text{sin}(\theta) & 0 \\
        \text{sin}(\theta) & \text{cos}(\theta) & 0 \\
        0 & 0 & 1 \end{array}\right]

    :param theta: The angles to form the rotation matrix(ces) for
    :return: The rotation matrix(ces) corresponding to the rotation angle(s)
    """

    theta = np.atleast_1d(np.asarray(theta, dtype=np.float32)).flatten()

    ones = np.ones(theta.shape, dtype=np.float32)
    zeros = np.zeros(theta.shape, dtype=np.float32)

    ctheta = np.cos(theta)
    stheta = np.sin(theta)

    return np.vstack([ctheta, -stheta, zeros, stheta, ctheta, zeros, zeros, zeros, ones]).T.reshape(-1, 3, 3).squeeze()
