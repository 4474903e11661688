# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.

from dataclasses import fields, is_dataclass

from typing import Self, Any

import numpy as np


class AttributeEqualityComparison:
    """
    A mixin class that implements equality comparison based on instance attributes.

    Two objects compare equal when they are of the same class, have the same attributes, and every attribute compares
    equal.  Numeric array-like attributes are compared with numpy's allclose and dataclass attributes (such as
    :class:`.UserOptions`) are compared field by field.

    For example::

        class MyClass(AttributeEqualityComparison):
            def __init__(self, x, y):
                self.x = x
                self.y = y

        MyClass(1, [2, 3]) == MyClass(1, [2, 3])  # True
        MyClass(1, [2, 3]) == MyClass(1, [2, 4])  # False

    Objects using this mixin are mutable and therefore unhashable.
    """

    def __eq__(self, other: Any) -> bool:
        """
        Compare this object with another for equality by checking equality of all attributes.

        :param other: The object to compare with
        :return: True if the objects are equal, False otherwise
        """

        if not isinstance(other, self.__class__):
            return False

        if not set(self.__dict__.keys()) == set(other.__dict__.keys()):
            return False

        return all(self.comparison_dictionary(other).values())

    @classmethod
    def _value_comparison(cls, val1: Any, val2: Any) -> bool:
        """
        Compare two values, handling array-like objects and dataclasses.

        This can be overridden if need be.

        :param val1: First value to compare
        :param val2: Second value to compare
        :return: True if values are equal, False otherwise
        """

        if isinstance(val1, (np.ndarray, list, tuple)) and isinstance(val2, (np.ndarray, list, tuple)):
            try:
                return bool(np.allclose(val1, val2))
            except (TypeError, ValueError):
                # non-numeric or mismatched arrays
                return bool(np.array_equal(val1, val2))

        if is_dataclass(val1) and not isinstance(val1, type) and type(val1) is type(val2):
            return all(cls._value_comparison(getattr(val1, field.name), getattr(val2, field.name))
                       for field in fields(val1))

        return bool(val1 == val2)

    def comparison_dictionary(self, other: Self) -> dict[str, bool]:
        """
        Compares each attribute of self to other and stores the result in a dict mapping the attribute to the
        comparison result.

        This assumes that other and self are the same type and have the same attributes.

        :param other: The other instance to compare with
        :return: A dictionary mapping attribute names to comparison results
        """

        return {key: self._value_comparison(getattr(self, key), getattr(other, key))
                for key in self.__dict__.keys()}
