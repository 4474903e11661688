# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

"""
This module contains fundamental mathematical operations and utilities for rotation
calculations. It does not depend on the object layer of quatrot, which avoids circular imports.
All functions here are pure mathematical operations on numpy arrays that can be used as building blocks
for the :class:`.Quat` object.
"""

import quatrot.core.conversions
import quatrot.core.elementals
import quatrot.core.quaternion_math

from quatrot.core.conversions import (axis_angle_to_quaternion, quaternion_to_axis_angle,
                                      euler_to_quaternion, quaternion_to_euler, euler_to_rotmat,
                                      quaternion_to_rotmat, rotmat_to_quaternion)

from quatrot.core.elementals import vector_normalize, rot_x, rot_y, rot_z

from quatrot.core.quaternion_math import (IDENTITY_QUATERNION, quaternion_normalize, quaternion_inverse,
                                          quaternion_multiplication, quaternion_dot, quaternion_size,
                                          quaternion_size_squared, rotate_vector, unrotate_vector, nlerp, slerp)

__all__ = ['axis_angle_to_quaternion', 'quaternion_to_axis_angle',
           'euler_to_quaternion', 'quaternion_to_euler', 'euler_to_rotmat',
           'quaternion_to_rotmat', 'rotmat_to_quaternion',
           'vector_normalize', 'rot_x', 'rot_y', 'rot_z',
           'IDENTITY_QUATERNION', 'quaternion_normalize', 'quaternion_inverse', 'quaternion_multiplication',
           'quaternion_dot', 'quaternion_size', 'quaternion_size_squared', 'rotate_vector', 'unrotate_vector',
           'nlerp', 'slerp']
