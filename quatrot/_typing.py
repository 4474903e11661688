# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


from typing import Union
from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

SINGLE_ARRAY = npt.NDArray[np.float32]
ARRAY_LIKE = npt.ArrayLike
SCALAR_OR_ARRAY = Union[float, npt.ArrayLike]
F_SCALAR_OR_ARRAY = Union[float, np.float32, SINGLE_ARRAY]

DatetimeLike = Union[datetime, Timestamp]
