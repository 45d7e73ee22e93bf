"""Utility helpers"""

from .float_utils import previous_representable, clamp
from .enum_helper import EnumHelper

__all__ = ['previous_representable', 'clamp', 'EnumHelper']
