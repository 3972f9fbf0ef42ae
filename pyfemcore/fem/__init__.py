from .reference import ShapeFamily, get_shapes, FAMILY_NAMES
from .transform import InvertedElementError
__all__ = ['ShapeFamily', 'get_shapes', 'FAMILY_NAMES', 'InvertedElementError']
