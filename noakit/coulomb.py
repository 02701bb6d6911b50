"""Elastic Coulomb scattering of a charged particle on an atom.

Screening is described by nine factors: the atomic screening ``s0``, the two
nuclear screenings ``s1`` and ``s2``, then the pole-reduction coefficients of
the simple poles (indices 3 to 5) and of the double poles (indices 6 to 8).
"""

from __future__ import annotations

import math
from typing import Sequence

from noakit.dcs import AtomicElement

SCREENING_FACTORS = 9


def coulomb_spin_factor(kinetic_energy: float, mass: float) -> float:
    """Spin correction factor, beta squared, of the projectile."""
    energy = kinetic_energy + mass
    return kinetic_energy * (energy + mass) / (energy * energy)


def coulomb_wentzel_path(
    screening: float, kinetic_energy: float, element: AtomicElement, mass: float
) -> float:
    """Elastic mean free path of the Wentzel model for the given atomic screening."""
    d = (
        kinetic_energy
        * (kinetic_energy + 2.0 * mass)
        / (element.charge * (kinetic_energy + mass))
    )
    return element.atomic_mass * 2.54910918e08 * screening * (1.0 + screening) * d * d


def _moliere_coulomb_correction(zeta2: float, charge: int) -> float:
    if zeta2 > 1.0:
        terms = 10 + charge
        series = sum(zeta2 / (i * (i * i + zeta2)) for i in range(1, terms + 1))
        return math.exp(series)
    return math.exp(
        1.0 - 1.0 / (1.0 + zeta2) + zeta2 * (0.2021 + zeta2 * (0.0083 * zeta2 - 0.0369))
    )


def coulomb_screening_parameters(
    kinetic_energy: float, element: AtomicElement, mass: float
) -> tuple[tuple[float, ...], float]:
    """Screening factors and inverse elastic mean free path.

    Returns the nine screening factors and the inverse of the Wentzel path
    computed from the atomic screening.
    """
    if kinetic_energy <= 0.0:
        raise ValueError(f"Kinetic energy must be positive, got {kinetic_energy}")

    # Nuclear screening.
    a13 = element.atomic_mass ** (1.0 / 3.0)
    r1 = 1.02934 * a13 + 0.435
    r2 = 2.0
    p2 = kinetic_energy * (kinetic_energy + 2.0 * mass)
    d = 5.8406e-02 / p2
    s1 = d / (r1 * r1)
    s2 = d / (r2 * r2)

    # Atomic Moliere screening with the Coulomb correction of Kuraev et al.,
    # valid for ultra-relativistic particles only.
    charge = element.charge
    etot = kinetic_energy + mass
    ze = charge * etot
    zeta2 = 5.3251346e-05 * (ze * ze) / p2
    c_kuraev = _moliere_coulomb_correction(zeta2, charge)
    # Original Moliere screening, the reference at low energies.
    c_moliere = 1.0 + 3.34 * zeta2

    r = (kinetic_energy / etot) ** 2
    c = r * c_kuraev + (1.0 - r) * c_moliere
    s0 = 5.179587126e-12 * charge ** (2.0 / 3.0) * c / p2

    d01 = 1.0 / (s0 - s1)
    d02 = 1.0 / (s0 - s2)
    d12 = 1.0 / (s1 - s2)
    s6 = d01 * d01 * d02 * d02
    s7 = d01 * d01 * d12 * d12
    s8 = d12 * d12 * d02 * d02
    s3 = 2.0 * s6 * (d01 + d02)
    s4 = 2.0 * s7 * (d12 - d01)
    s5 = -2.0 * s8 * (d12 + d02)

    screening = (s0, s1, s2, s3, s4, s5, s6, s7, s8)
    invlambda = 1.0 / coulomb_wentzel_path(s0, kinetic_energy, element, mass)
    return screening, invlambda


def _check_screening(screening: Sequence[float]) -> Sequence[float]:
    if len(screening) != SCREENING_FACTORS:
        raise ValueError(
            f"Expected {SCREENING_FACTORS} screening factors, got {len(screening)}"
        )
    return screening


def coulomb_transport_coefficients(
    screening: Sequence[float], fspin: float, mu: float
) -> tuple[float, float]:
    """First and second transport coefficients restricted to angles below ``mu``."""
    s = _check_screening(screening)
    nuclear_screening = min(s[1], s[2])
    if mu < 1e-08 * nuclear_screening:
        # The finite size of the nucleus is neglected.
        log_term = math.log(1.0 + mu / s[0])
        r = mu / (mu + s[0])
        k = s[0] * (1.0 + s[0])
        first = k * (r / s[0] - fspin * (log_term - r))
        i2 = mu - s[0] * (r - 2.0 * log_term)
        second = 2.0 * k * (log_term - r - fspin * i2)
        return first, second

    # All factors are accounted for using a pole reduction.
    half_mu2 = 0.5 * mu * mu
    first = second = 0.0
    for i in range(3):
        si = s[i]
        r = mu / (mu + si)
        log_term = math.log(1.0 + mu / si)
        i0 = r / si
        j0 = log_term
        i1 = log_term - r
        r *= si
        log_term *= si
        j1 = mu - log_term
        i2 = mu - 2.0 * log_term + r
        log_term *= si
        j2 = half_mu2 + log_term - mu * si
        first += s[3 + i] * (j0 - fspin * j1) + s[6 + i] * (i0 - fspin * i1)
        second += s[3 + i] * (j1 - fspin * j2) + s[6 + i] * (i1 - fspin * i2)

    k = s[0] * (1.0 + s[0]) * s[1] * s[1] * s[2] * s[2]
    return first * k, second * 2.0 * k


def coulomb_restricted_cs(mu: float, fspin: float, screening: Sequence[float]) -> float:
    """Normalised elastic cross-section restricted to angles above ``mu``."""
    s = _check_screening(screening)
    if mu >= 1.0:
        return 0.0

    nuclear_screening = min(s[1], s[2])
    if mu < 1e-08 * nuclear_screening:
        # The finite size of the nucleus is neglected.
        log_term = math.log((s[0] + 1.0) / (s[0] + mu))
        r = (1.0 - mu) / ((s[0] + mu) * (s[0] + 1.0))
        k = s[0] * (1.0 + s[0])
        return k * (r - fspin * (log_term - s[0] * r))

    # All factors are accounted for using a pole reduction.
    cs = 0.0
    for i in range(3):
        si = s[i]
        log_term = math.log((si + 1.0) / (si + mu))
        r = (1.0 - mu) / ((si + mu) * (si + 1.0))
        i0 = r
        j0 = log_term
        i1 = log_term - si * r
        j1 = mu - si * log_term
        cs += s[3 + i] * (j0 - fspin * j1) + s[6 + i] * (i0 - fspin * i1)

    k = s[0] * (1.0 + s[0]) * s[1] * s[1] * s[2] * s[2]
    return k * cs