"""
Copyright 2026 refraction-sandbox authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

===============================================================================
OPTICS UTILITIES
===============================================================================
Closed-form results used to check traced paths:
- Critical angle and the TIR predicate
- Prism minimum deviation and the incidence that produces it
- Deviation at arbitrary incidence
===============================================================================
"""

from __future__ import annotations

import math

from ..core.constants import AIR_INDEX


def critical_angle(n_dense: float, n_rare: float = AIR_INDEX) -> float:
    """
    Critical angle in degrees for light going from n_dense into n_rare.

    Args:
        n_dense: Refractive index on the incident side.
        n_rare: Refractive index on the far side (default: air).

    Returns:
        Critical angle in degrees.

    Raises:
        ValueError: If n_dense <= n_rare (TIR impossible).

    Example:
        >>> critical_angle(1.5)
        41.81...
    """
    if n_dense <= n_rare:
        raise ValueError(
            f"TIR impossible: n_dense ({n_dense}) must be > n_rare ({n_rare})"
        )
    return math.degrees(math.asin(n_rare / n_dense))


def is_total_internal_reflection(incidence_deg: float, n1: float, n2: float) -> bool:
    """
    True if a ray meeting the n1 -> n2 interface at this incidence is totally
    reflected, i.e. sin(incidence) > n2 / n1.
    """
    return math.sin(math.radians(incidence_deg)) > n2 / n1


def minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Minimum deviation angle (degrees) for a prism in air.

    Formula: D_min = 2 * arcsin(n * sin(A/2)) - A

    Raises:
        ValueError: If n * sin(A/2) > 1.

    Example:
        >>> minimum_deviation(60.0, 1.5)
        37.18...
    """
    a = math.radians(apex_angle_deg)
    arg = n * math.sin(a / 2)
    if arg > 1.0:
        raise ValueError(
            f"Minimum deviation impossible: n * sin(A/2) = {arg:.4f} > 1"
        )
    return math.degrees(2 * math.asin(arg) - a)


def incidence_for_minimum_deviation(apex_angle_deg: float, n: float) -> float:
    """
    Incidence angle (degrees) giving minimum deviation: (A + D_min) / 2.

    Example:
        >>> incidence_for_minimum_deviation(60.0, 1.5)
        48.59...
    """
    return (apex_angle_deg + minimum_deviation(apex_angle_deg, n)) / 2


def deviation_at_incidence(apex_angle_deg: float, n: float, incidence_deg: float) -> float:
    """
    Total deviation (degrees) of a ray crossing a prism in air.

    Returns:
        theta_i + theta_t - A, or nan if the ray is totally reflected at the
        second face.
    """
    a = math.radians(apex_angle_deg)
    theta_i = math.radians(incidence_deg)

    r1 = math.asin(math.sin(theta_i) / n)
    sin_theta_t = n * math.sin(a - r1)
    if abs(sin_theta_t) > 1.0:
        return float('nan')

    return math.degrees(theta_i + math.asin(sin_theta_t) - a)
