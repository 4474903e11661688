# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
quatrot: single precision unit quaternion rotations for 3D graphics.

This package defines a number of routines for building, composing, applying, converting, and interpolating rotation
quaternions, as well as the :class:`.Quat` class which is the primary way to work with them.

There are a few different rotation representations that are used in this package and their format is described as
follows:

.. _rotation-representation-table:

=================  =====================================================================================================
Representation     Description
=================  =====================================================================================================
quaternion         A 4 element rotation quaternion of the form
                   :math:`\mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_s\end{array}\right]=
                   \left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
                   \text{cos}(\frac{\theta}{2})\end{array}\right]`
                   where :math:`\hat{\mathbf{x}}` is a 3 element unit vector representing the axis of rotation and
                   :math:`\theta` is the right handed angle to rotate about that vector.  Note that quaternions are not
                   unique in that the rotation represented by :math:`\mathbf{q}` is the same rotation represented by
                   :math:`-\mathbf{q}`.
axis-angle         A 3 element axis (not necessarily unit length) and a scalar angle in radians.
rotation matrix    A :math:`3\times 3` orthonormal matrix :math:`\mathbf{M}` in the row vector convention, that is
                   :math:`\mathbf{v}'=\mathbf{v}\mathbf{M}` (``v @ M``) rotates the row vector :math:`\mathbf{v}`.
                   This is the transpose of the column vector form used by many math texts.
euler angles       ``(roll, pitch, yaw)``, rotations about the x, y, and z axes applied in that order.  Mathematically
                   they relate to the column vector form of the rotation matrix as
                   :math:`\mathbf{T}=\mathbf{R}_z(yaw)\mathbf{R}_y(pitch)\mathbf{R}_x(roll)`.
=================  =====================================================================================================

All values are stored and computed as ``numpy.float32``.

The :class:`.Quat` object offers alternate constructors for each representation, operator overloading so that a
sequence of rotations can be composed with ``*``, and methods to apply the rotation to vectors and to convert it to
the other representations.  The :class:`.OrientationAccumulator` keeps an orientation that is updated by many small
rotations and keeps it normalized.
"""

import quatrot.core
import quatrot.quaternion
import quatrot.accumulator

from quatrot.core import *
from quatrot.quaternion import Quat
from quatrot.accumulator import OrientationAccumulator, OrientationAccumulatorOptions

__all__ = ['axis_angle_to_quaternion', 'quaternion_to_axis_angle',
           'euler_to_quaternion', 'quaternion_to_euler', 'euler_to_rotmat',
           'quaternion_to_rotmat', 'rotmat_to_quaternion',
           'vector_normalize', 'rot_x', 'rot_y', 'rot_z',
           'IDENTITY_QUATERNION', 'quaternion_normalize', 'quaternion_inverse', 'quaternion_multiplication',
           'quaternion_dot', 'quaternion_size', 'quaternion_size_squared', 'rotate_vector', 'unrotate_vector',
           'nlerp', 'slerp',
           'Quat', 'OrientationAccumulator', 'OrientationAccumulatorOptions']
