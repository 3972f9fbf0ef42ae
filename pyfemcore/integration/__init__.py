from .quadrature import (gauss_point, gauss_weight, gauss2d_point, gauss2d_weight,
                         hughes_point, hughes_weight, QuadratureRule, GaussRule1d,
                         GaussRule1dv, GaussRule2d, HughesRule2d)
from .mapped import MappedRule, IsoMappedRule

__all__ = ["gauss_point", "gauss_weight", "gauss2d_point", "gauss2d_weight",
           "hughes_point", "hughes_weight", "QuadratureRule", "GaussRule1d",
           "GaussRule1dv", "GaussRule2d", "HughesRule2d", "MappedRule", "IsoMappedRule"]
