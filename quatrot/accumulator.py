# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
This module provides the :class:`OrientationAccumulator`, which keeps track of an orientation that is updated by many
small rotations, for instance once per frame in response to user input.

Rebuilding an orientation from accumulated Euler angles every frame does not avoid gimbal lock; the increments have to
be composed as quaternions.  Composing thousands of quaternion products slowly walks the result away from unit length
though, so the accumulator renormalizes every :attr:`~OrientationAccumulatorOptions.renormalize_interval` updates and
warns if the drift got larger than expected.

Example::

    >>> from numpy import pi
    >>> from quatrot import OrientationAccumulator, OrientationAccumulatorOptions
    >>> accumulator = OrientationAccumulator(OrientationAccumulatorOptions(renormalize_interval=64))
    >>> for _ in range(90):
    ...     accumulator.rotate([1, 0, 0], pi/180)
    >>> matrix = accumulator.rotation_matrix  # hand this to the renderer
"""

import warnings

from dataclasses import dataclass

from typing import Sequence

from quatrot.quaternion import Quat
from quatrot.core.quaternion_math import DEFAULT_NORMALIZE_TOLERANCE
from quatrot.utilities.options import UserOptions
from quatrot.utilities.mixin_classes import AttributeEqualityComparison, AttributePrinting, UserOptionConfigured

from quatrot._typing import ARRAY_LIKE, SINGLE_ARRAY


@dataclass
class OrientationAccumulatorOptions(UserOptions):
    """
    The options for the :class:`OrientationAccumulator`.
    """

    initial_orientation: Sequence[float] = (0.0, 0.0, 0.0, 1.0)
    """
    The ``[x, y, z, w]`` quaternion the accumulator starts from and returns to on :meth:`~OrientationAccumulator.reset`.

    It is normalized before it is used.
    """

    renormalize_interval: int = 32
    """
    How many updates to accumulate between renormalizations.

    Set to 0 to only renormalize when :meth:`~OrientationAccumulator.renormalize` is called.
    """

    normalize_tolerance: float = DEFAULT_NORMALIZE_TOLERANCE
    """
    The squared length at or below which renormalizing gives up and resets the orientation to the identity.
    """

    drift_warning_tolerance: float = 1e-3
    """
    How far from unit length the orientation may drift before renormalizing issues a warning.
    """


class OrientationAccumulator(UserOptionConfigured[OrientationAccumulatorOptions], AttributeEqualityComparison,
                             AttributePrinting, OrientationAccumulatorOptions):
    """
    Accumulates incremental rotations into a single orientation quaternion.

    Increments are applied with :meth:`apply` (about the fixed world axes, ``orientation = rotation * orientation``) or
    :meth:`apply_local` (about the current body axes, ``orientation = orientation * rotation``).  :meth:`rotate` is a
    shortcut that builds the increment from an axis and angle.

    The current orientation is available as a :class:`.Quat` through :attr:`orientation`, as a row vector rotation
    matrix through :attr:`rotation_matrix`, and as Euler angles through :attr:`euler_angles`.

    The settings are controlled by :class:`OrientationAccumulatorOptions` and can be restored to their initial values
    with :meth:`reset_settings`.  :meth:`reset` returns the orientation itself to the initial orientation.
    """

    def __init__(self, options: OrientationAccumulatorOptions | None = None):
        """
        :param options: The options to configure the accumulator with.  The defaults are used if this is ``None``
        """

        super().__init__(OrientationAccumulatorOptions, options=options)

        self._orientation: Quat = self._initial_quaternion()

        self._steps_since_renormalize: int = 0

    def _initial_quaternion(self) -> Quat:

        return Quat(self.initial_orientation).get_normalized(self.normalize_tolerance)

    @property
    def orientation(self) -> Quat:
        """
        A copy of the current orientation.
        """

        return self._orientation.copy()

    @property
    def rotation_matrix(self) -> SINGLE_ARRAY:
        """
        The current orientation as a row vector rotation matrix (``v @ M``).
        """

        return self._orientation.to_rotation_matrix()

    @property
    def euler_angles(self) -> SINGLE_ARRAY:
        """
        The current orientation as ``(roll, pitch, yaw)`` Euler angles in radians.
        """

        return self._orientation.to_euler()

    @property
    def steps_since_renormalize(self) -> int:
        """
        The number of updates applied since the orientation was last renormalized.
        """

        return self._steps_since_renormalize

    def apply(self, rotation: Quat | ARRAY_LIKE):
        """
        Applies `rotation` about the world axes after the current orientation.

        :param rotation: The incremental rotation quaternion
        """

        self._orientation = Quat(rotation) * self._orientation

        self._step()

    def apply_local(self, rotation: Quat | ARRAY_LIKE):
        """
        Applies `rotation` about the body axes of the current orientation.

        :param rotation: The incremental rotation quaternion
        """

        self._orientation = self._orientation * Quat(rotation)

        self._step()

    def rotate(self, axis: ARRAY_LIKE, angle: float, local: bool = False):
        """
        Applies a rotation of `angle` radians about `axis`.

        :param axis: The rotation axis.  It does not need to be unit length but must not be zero
        :param angle: The rotation angle in radians
        :param local: Whether the axis is expressed in the body frame (``True``) or the world frame (``False``)
        """

        increment = Quat.from_axis_angle(axis, angle)

        if local:
            self.apply_local(increment)
        else:
            self.apply(increment)

    def renormalize(self):
        """
        Scales the orientation back to unit length and resets the update counter.

        A warning is issued if the orientation had drifted further than
        :attr:`~OrientationAccumulatorOptions.drift_warning_tolerance` from unit length, or if it had collapsed so far
        that it had to be replaced with the identity.
        """

        if self._orientation.size_squared() <= self.normalize_tolerance:
            warnings.warn('The accumulated orientation collapsed to zero length and has been reset to the identity',
                          RuntimeWarning)

        else:
            drift = abs(float(self._orientation.size()) - 1)

            if drift > self.drift_warning_tolerance:
                warnings.warn(f'The accumulated orientation drifted {drift:.3g} from unit length before it was '
                              'renormalized', RuntimeWarning)

        self._orientation.normalize(self.normalize_tolerance)

        self._steps_since_renormalize = 0

    def reset(self):
        """
        Returns the orientation to the initial orientation and clears the update counter.
        """

        self._orientation = self._initial_quaternion()

        self._steps_since_renormalize = 0

    def slerp_to(self, target: Quat | ARRAY_LIKE, alpha: float) -> Quat:
        """
        Interpolates from the current orientation toward `target` without changing the accumulator.

        :param target: The orientation to interpolate toward
        :param alpha: The fraction of the way to `target`, in [0, 1]
        :return: The interpolated orientation
        """

        return Quat.slerp(self._orientation.get_normalized(self.normalize_tolerance), target, alpha)

    def _step(self):

        self._steps_since_renormalize += 1

        if 0 < self.renormalize_interval <= self._steps_since_renormalize:
            self.renormalize()
