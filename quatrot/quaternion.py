# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

from typing import Self

import numpy as np

from quatrot.core.conversions import (axis_angle_to_quaternion, euler_to_quaternion, quaternion_to_axis_angle,
                                      quaternion_to_euler, quaternion_to_rotmat, rotmat_to_quaternion)
from quatrot.core.quaternion_math import (DEFAULT_NORMALIZE_TOLERANCE, IDENTITY_QUATERNION, nlerp,
                                          quaternion_dot, quaternion_inverse, quaternion_multiplication,
                                          quaternion_normalize, quaternion_size, quaternion_size_squared,
                                          rotate_vector, slerp, unrotate_vector)

from quatrot._typing import ARRAY_LIKE, SINGLE_ARRAY, DatetimeLike


class Quat:
    """
    A single precision rotation quaternion.

    The :class:`Quat` class is the main way that orientation is expressed in quatrot.  It stores the four components
    ``[x, y, z, w]`` (vector part first, scalar part last) as a ``numpy.float32`` array and represents the right handed
    rotation :math:`\\theta` about the unit axis :math:`\\hat{\\mathbf{n}}` as
    :math:`(\\hat{\\mathbf{n}}\\text{sin}(\\frac{\\theta}{2}), \\text{cos}(\\frac{\\theta}{2}))`.

    Rotations are usually created with one of the alternate constructors, :meth:`from_axis_angle`, :meth:`from_euler`,
    :meth:`from_rotation_matrix`, or :meth:`identity`, all of which produce unit quaternions.  Calling the class
    directly with 4 components stores them as given, without normalizing.

    Operator overloading makes chaining rotations easy.  ``a * b`` is the rotation that applies ``b`` first and then
    ``a``, and ``q * v`` rotates the 3 element vector ``v``::

        >>> from quatrot import Quat
        >>> from numpy import pi, allclose
        >>> about_x = Quat.from_axis_angle([1, 0, 0], pi/2)
        >>> about_y = Quat.from_axis_angle([0, 1, 0], pi/2)
        >>> allclose((about_x * about_y) * [0, 0, 1], [1, 0, 0], atol=1e-6)
        True

    Products are not renormalized.  If you accumulate many rotations, call :meth:`normalize` every so often (or use
    the :class:`.OrientationAccumulator`).

    :class:`Quat` objects copy their input and hand out copies of their data so two objects never share storage.  The
    only in place operations are :meth:`normalize` and ``*=``.

    The multiplication, rotation, matrix, and Euler operations assume a unit quaternion.
    """

    def __init__(self, data: ARRAY_LIKE | Self | None = None):
        """
        :param data: The 4 quaternion components ``[x, y, z, w]`` or another :class:`Quat` to copy.  The identity is
                     used if this is ``None``
        :raises ValueError: If the data does not have 4 elements
        """

        if data is None:
            data = IDENTITY_QUATERNION

        elif isinstance(data, Quat):
            data = data._quaternion

        quaternion = np.array(data, dtype=np.float32).ravel()

        if quaternion.size != 4:
            raise ValueError('The quaternion must be length 4')

        self._quaternion: SINGLE_ARRAY = quaternion

    @classmethod
    def identity(cls) -> Self:
        """
        Returns the identity rotation ``[0, 0, 0, 1]``.
        """

        return cls(IDENTITY_QUATERNION)

    @classmethod
    def from_axis_angle(cls, axis: ARRAY_LIKE, angle: float) -> Self:
        """
        Creates the right handed rotation of `angle` radians about `axis`.

        The axis is normalized internally and must not be zero.

        See :func:`.axis_angle_to_quaternion`.

        :param axis: The 3 element rotation axis
        :param angle: The rotation angle in radians
        :return: The unit rotation quaternion
        """

        return cls(axis_angle_to_quaternion(axis, angle))

    @classmethod
    def from_euler(cls, angles: ARRAY_LIKE) -> Self:
        """
        Creates the rotation described by ``(roll, pitch, yaw)`` Euler angles in radians.

        The rotations are applied about x, then y, then z.  See :func:`.euler_to_quaternion`.

        :param angles: The roll, pitch, and yaw angles
        :return: The unit rotation quaternion
        """

        return cls(euler_to_quaternion(angles))

    @classmethod
    def from_rotation_matrix(cls, matrix: ARRAY_LIKE) -> Self:
        """
        Creates the rotation described by a row vector (``v @ M``) rotation matrix.

        See :func:`.rotmat_to_quaternion`.

        :param matrix: The 3x3 rotation matrix
        :return: The unit rotation quaternion with a non-negative scalar component
        """

        return cls(rotmat_to_quaternion(matrix))

    @property
    def x(self) -> np.float32:
        return self._quaternion[0]

    @property
    def y(self) -> np.float32:
        return self._quaternion[1]

    @property
    def z(self) -> np.float32:
        return self._quaternion[2]

    @property
    def w(self) -> np.float32:
        return self._quaternion[3]

    @property
    def quaternion(self) -> SINGLE_ARRAY:
        """
        A copy of the ``[x, y, z, w]`` components as a numpy array.
        """

        return self._quaternion.copy()

    @property
    def q_vector(self) -> SINGLE_ARRAY:
        """
        A copy of the vector portion of the quaternion, ``[x, y, z]``.
        """

        return self._quaternion[:3].copy()

    @property
    def q_scalar(self) -> np.float32:
        """
        The scalar portion of the quaternion, ``w``.
        """

        return self._quaternion[3]

    def inverse(self) -> 'Quat':
        """
        Returns the conjugate ``[-x, -y, -z, w]`` as a new :class:`Quat`.

        For a unit quaternion this is the inverse rotation.  See :func:`.quaternion_inverse`.
        """

        return Quat(quaternion_inverse(self._quaternion))

    def size_squared(self) -> np.float32:
        """
        Returns :math:`x^2+y^2+z^2+w^2`.
        """

        return quaternion_size_squared(self._quaternion)

    def size(self) -> np.float32:
        """
        Returns the length of the quaternion.
        """

        return quaternion_size(self._quaternion)

    def normalize(self, tolerance: float = DEFAULT_NORMALIZE_TOLERANCE):
        """
        Scales this quaternion to unit length in place.

        If the squared length is at or below `tolerance` this quaternion is set to the identity instead.

        :param tolerance: the squared length at or below which the identity is used
        """

        self._quaternion = quaternion_normalize(self._quaternion, tolerance)

    def get_normalized(self, tolerance: float = DEFAULT_NORMALIZE_TOLERANCE) -> 'Quat':
        """
        Returns a unit length copy of this quaternion, leaving this one unchanged.

        See :meth:`normalize`.

        :param tolerance: the squared length at or below which the identity is returned
        :return: The normalized quaternion
        """

        return Quat(quaternion_normalize(self._quaternion, tolerance))

    def dot(self, other: ARRAY_LIKE | 'Quat') -> np.float32:
        """
        The 4 element inner product of this quaternion with `other`.

        This can also be called as ``Quat.dot(q1, q2)``.

        :param other: The other quaternion
        :return: The dot product
        """

        return quaternion_dot(self._quaternion, Quat(other)._quaternion)

    def rotate_vector(self, vector: ARRAY_LIKE) -> SINGLE_ARRAY:
        """
        Rotates `vector` by this rotation.

        :param vector: The 3 element vector (or 3xn array of vectors) to rotate
        :return: The rotated vector(s)
        """

        return rotate_vector(self._quaternion, vector)

    def unrotate_vector(self, vector: ARRAY_LIKE) -> SINGLE_ARRAY:
        """
        Rotates `vector` by the inverse of this rotation.

        :param vector: The 3 element vector (or 3xn array of vectors) to rotate
        :return: The rotated vector(s)
        """

        return unrotate_vector(self._quaternion, vector)

    def to_rotation_matrix(self) -> SINGLE_ARRAY:
        """
        Returns the row vector rotation matrix ``M`` for this rotation, so that ``v @ M`` rotates ``v``.

        See :func:`.quaternion_to_rotmat`.
        """

        return quaternion_to_rotmat(self._quaternion)

    def to_euler(self) -> SINGLE_ARRAY:
        """
        Returns the ``(roll, pitch, yaw)`` Euler angles in radians for this rotation.

        At gimbal lock the pitch is clamped to :math:`\\pm\\frac{\\pi}{2}`.  See :func:`.quaternion_to_euler`.
        """

        return quaternion_to_euler(self._quaternion)

    def to_axis_angle(self) -> tuple[SINGLE_ARRAY, np.float32]:
        """
        Returns the unit rotation axis and the rotation angle in radians for this rotation.

        See :func:`.quaternion_to_axis_angle`.
        """

        return quaternion_to_axis_angle(self._quaternion)

    def is_unit(self, tolerance: float = 1e-4) -> bool:
        """
        Checks whether this quaternion is of unit length.

        :param tolerance: The allowed absolute difference between the length and 1
        :return: ``True`` if the length is within `tolerance` of 1
        """

        return bool(abs(self.size() - 1) <= tolerance)

    def is_equivalent(self, other: ARRAY_LIKE | 'Quat', tolerance: float = 1e-4) -> bool:
        """
        Checks whether this quaternion and `other` represent the same rotation.

        Because ``q`` and ``-q`` are the same rotation this compares against both signs of `other`.

        :param other: The quaternion to compare against
        :param tolerance: The allowed absolute difference for each component
        :return: ``True`` if the two represent the same rotation within `tolerance`
        """

        other_quaternion = Quat(other)._quaternion

        same = np.abs(self._quaternion - other_quaternion).max() <= tolerance
        flipped = np.abs(self._quaternion + other_quaternion).max() <= tolerance

        return bool(same or flipped)

    @staticmethod
    def slerp(quaternion0: ARRAY_LIKE | 'Quat', quaternion1: ARRAY_LIKE | 'Quat',
              time: float | DatetimeLike,
              time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> 'Quat':
        """
        Spherically interpolates between two unit quaternions along the shorter arc.

        See :func:`.slerp` for details, including how to interpolate with times instead of a fraction.

        :param quaternion0: The starting rotation
        :param quaternion1: The ending rotation
        :param time: The fraction of the way from `quaternion0` to `quaternion1` (or a time between `time0` and
                     `time1`)
        :param time0: The time corresponding to `quaternion0`
        :param time1: The time corresponding to `quaternion1`
        :return: The interpolated unit quaternion
        """

        return Quat(slerp(Quat(quaternion0)._quaternion, Quat(quaternion1)._quaternion, time, time0, time1))

    @staticmethod
    def nlerp(quaternion0: ARRAY_LIKE | 'Quat', quaternion1: ARRAY_LIKE | 'Quat',
              time: float | DatetimeLike,
              time0: float | DatetimeLike = 0, time1: float | DatetimeLike = 1) -> 'Quat':
        """
        Linearly interpolates between two unit quaternions along the shorter arc and normalizes the result.

        See :func:`.nlerp`.
        """

        return Quat(nlerp(Quat(quaternion0)._quaternion, Quat(quaternion1)._quaternion, time, time0, time1))

    def copy(self) -> 'Quat':
        """
        Returns a copy of self.
        """

        return Quat(self)

    def __eq__(self, other) -> bool:

        # check that other is a quaternion, if not make it into one
        if not isinstance(other, Quat):
            try:
                other = Quat(other)
            except (ValueError, TypeError):
                # if we're here then other isn't something we can interpret as a quaternion
                return False

        return bool((self._quaternion == other._quaternion).all())

    __hash__ = None

    def __mul__(self, other):

        if isinstance(other, Quat):

            return Quat(quaternion_multiplication(self._quaternion, other._quaternion))

        elif isinstance(other, (np.ndarray, list, tuple)) and np.shape(other)[:1] == (3,):

            return rotate_vector(self._quaternion, other)

        else:

            return NotImplemented

    def __imul__(self, other: 'Quat') -> Self:

        if not isinstance(other, Quat):
            raise TypeError('A Quat can only be composed in place with another Quat')

        self._quaternion = quaternion_multiplication(self._quaternion, other._quaternion)

        return self

    def __neg__(self) -> 'Quat':

        return Quat(-self._quaternion)

    def __repr__(self) -> str:
        return 'Quat({0!r})'.format(self._quaternion)

    def __str__(self) -> str:
        return str(self._quaternion)
