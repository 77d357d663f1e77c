"""Analytic relations between the Frenet and Cartesian frames.

Given a reference point (heading theta_r, curvature kappa_r and its rate
dkappa_r) and a lateral profile l(s) with derivatives dl = l', ddl = l'',
the path heading and curvature follow from the Frenet-Serret formulas.

Reference:
Werling et al., "Optimal Trajectory Generation for Dynamic Street Scenarios 
in a Frenet Frame" (2010)
"""

import math
from typing import Union

import numpy as np
from loguru import logger

from .exceptions import DegenerateGeometryError


# Below this |1 - kappa_r * l| the path point sits on the reference line's
# center of curvature.
SINGULARITY_EPSILON = 1.0e-6


class SLAnalyticTransformation:
    """Pure functions mapping (l, dl, ddl) on a reference line to (theta, kappa)."""
    
    @staticmethod
    def one_minus_kappa_r_l(
        rkappa: float,
        l: float,
        epsilon: float = SINGULARITY_EPSILON
    ) -> float:
        """Return 1 - kappa_r * l, rejecting the singular configuration.
        
        Raises:
            DegenerateGeometryError: If |1 - kappa_r * l| < epsilon
        """
        value = 1.0 - rkappa * l
        if not math.isfinite(value) or abs(value) < epsilon:
            logger.error(
                f"Singular Frenet configuration: kappa_r={rkappa:.6f}, l={l:.6f}, "
                f"1 - kappa_r * l = {value:.3e}"
            )
            raise DegenerateGeometryError(
                f"1 - kappa_r * l = {value:.3e} is below {epsilon:.1e} "
                f"(kappa_r={rkappa}, l={l})"
            )
        return value
    
    @staticmethod
    def calculate_theta(
        rtheta: float,
        rkappa: float,
        l: float,
        dl: float,
        epsilon: float = SINGULARITY_EPSILON
    ) -> float:
        """Heading of the path point.
        
        Args:
            rtheta: Reference point heading [rad]
            rkappa: Reference point curvature [1/m]
            l: Lateral offset [m]
            dl: dl/ds
            epsilon: Singularity threshold on 1 - kappa_r * l
            
        Returns:
            Heading normalized to [-pi, pi]
        """
        one_minus_kappa_r_l = SLAnalyticTransformation.one_minus_kappa_r_l(rkappa, l, epsilon)
        return float(normalize_angle(rtheta + math.atan2(dl, one_minus_kappa_r_l)))
    
    @staticmethod
    def calculate_kappa(
        rkappa: float,
        rdkappa: float,
        l: float,
        dl: float,
        ddl: float,
        epsilon: float = SINGULARITY_EPSILON
    ) -> float:
        """Curvature of the path point.
        
        Args:
            rkappa: Reference point curvature [1/m]
            rdkappa: Reference point curvature rate [1/m²]
            l: Lateral offset [m]
            dl: dl/ds
            ddl: d²l/ds² [1/m]
            epsilon: Singularity threshold on 1 - kappa_r * l
            
        Returns:
            Signed curvature [1/m]
        """
        one_minus_kappa_r_l = SLAnalyticTransformation.one_minus_kappa_r_l(rkappa, l, epsilon)
        
        denominator = (dl * dl + one_minus_kappa_r_l * one_minus_kappa_r_l) ** 1.5
        numerator = (rkappa + ddl
                     - 2.0 * l * rkappa * rkappa
                     - l * ddl * rkappa
                     + l * l * rkappa * rkappa * rkappa
                     + l * dl * rdkappa
                     + 2.0 * dl * dl * rkappa)
        kappa = numerator / denominator
        
        if not math.isfinite(kappa):
            raise DegenerateGeometryError(
                f"Non-finite curvature for kappa_r={rkappa}, l={l}, dl={dl}, ddl={ddl}"
            )
        return kappa


def normalize_angle(angle: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Normalize angle to [-pi, pi] range.
    
    Args:
        angle: Input angle in radians
        
    Returns:
        Normalized angle in [-pi, pi]
    """
    two_pi = 2.0 * np.pi
    
    # x - n*y with n the nearest integer, as math.remainder
    n = np.round(angle / two_pi)
    a = angle - n * two_pi
    
    # Odd multiples of pi from above map to -pi
    if np.isscalar(a):
        if abs(a + np.pi) < 1e-9 and angle > 0:
            return -np.pi
        return a
    
    mask = (np.abs(a + np.pi) < 1e-9) & (np.asarray(angle) > 0)
    if np.any(mask):
        a[mask] = -np.pi
    
    return a
