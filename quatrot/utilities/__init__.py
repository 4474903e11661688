"""
Support utilities for quatrot: the dataclass based options used to configure classes and the mixins that consume
them.
"""

from quatrot.utilities.options import UserOptions
from quatrot.utilities.mixin_classes import AttributeEqualityComparison, AttributePrinting, UserOptionConfigured

__all__ = ["UserOptions", "AttributeEqualityComparison", "AttributePrinting", "UserOptionConfigured"]
