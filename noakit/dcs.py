"""Differential cross-section building blocks for muon energy-loss processes."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class AtomicElement:
    """A target element.

    ``atomic_mass`` is in g/mol, ``mean_excitation`` (the mean excitation
    energy) in GeV and ``charge`` is the atomic number.
    """

    atomic_mass: float
    mean_excitation: float
    charge: int

    def __post_init__(self) -> None:
        if self.atomic_mass <= 0:
            raise ValueError(f"Atomic mass must be positive, got {self.atomic_mass}")
        if self.mean_excitation <= 0:
            raise ValueError(
                f"Mean excitation energy must be positive, got {self.mean_excitation}"
            )
        if self.charge < 1:
            raise ValueError(f"Atomic number must be at least 1, got {self.charge}")


def del_integrand(dcs_calc: float, recoil_energy: float) -> float:
    """Integrand of the discrete energy loss over the recoil energy."""
    return dcs_calc * recoil_energy


def cel_integrand(dcs_calc: float, recoil_energy: float) -> float:
    """Integrand of the continuous energy loss over the recoil energy."""
    return dcs_calc * recoil_energy * recoil_energy


def photonuclear_f2_allm(x: float, q2: float) -> float:
    """Proton structure function F2 from the ALLM97 parametrisation."""
    if not 0.0 < x < 1.0:
        raise ValueError(f"Bjorken x must lie in (0, 1), got {x}")
    if q2 <= 0.0:
        raise ValueError(f"Q2 must be positive, got {q2}")

    m02 = 0.31985
    mp2 = 49.457
    mr2 = 0.15052
    q02 = 0.52544
    lambda2 = 0.06527

    cp1, cp2, cp3 = 0.28067, 0.22291, 2.1979
    ap1, ap2, ap3 = -0.0808, -0.44812, 1.1709
    bp1, bp2, bp3 = 0.36292, 1.8917, 1.8439

    cr1, cr2, cr3 = 0.80107, 0.97307, 3.4942
    ar1, ar2, ar3 = 0.58400, 0.37888, 2.6063
    br1, br2, br3 = 0.01147, 3.7582, 0.49338

    m2 = 0.8803505929
    w2 = m2 + q2 * (1.0 / x - 1.0)
    t = math.log(math.log((q2 + q02) / lambda2) / math.log(q02 / lambda2))
    xp = (q2 + mp2) / (q2 + mp2 + w2 - m2)
    xr = (q2 + mr2) / (q2 + mr2 + w2 - m2)
    lnt = math.log(t)
    cp = cp1 + (cp1 - cp2) * (1.0 / (1.0 + math.exp(cp3 * lnt)) - 1.0)
    ap = ap1 + (ap1 - ap2) * (1.0 / (1.0 + math.exp(ap3 * lnt)) - 1.0)
    bp = bp1 + bp2 * math.exp(bp3 * lnt)
    cr = cr1 + cr2 * math.exp(cr3 * lnt)
    ar = ar1 + ar2 * math.exp(ar3 * lnt)
    br = br1 + br2 * math.exp(br3 * lnt)

    f2p = cp * math.exp(ap * math.log(xp) + bp * math.log(1.0 - x))
    f2r = cr * math.exp(ar * math.log(xr) + br * math.log(1.0 - x))

    return q2 / (q2 + m02) * (f2p + f2r)


def photonuclear_f2a_drss(x: float, f2p: float, a: float) -> float:
    """Nuclear structure function from the proton one, with DRSS shadowing."""
    shadowing = 1.0
    if x < 0.0014:
        shadowing = math.exp(-0.1 * math.log(a))
    elif x < 0.04:
        shadowing = math.exp((0.069 * math.log10(x) + 0.097) * math.log(a))

    return (
        0.5
        * a
        * shadowing
        * (2.0 + x * (-1.85 + x * (2.45 + x * (-2.35 + x))))
        * f2p
    )


def photonuclear_r_whitlow(x: float, q2: float) -> float:
    """Ratio R of longitudinal to transverse cross-sections (Whitlow et al.)."""
    q2 = max(q2, 0.3)
    theta = 1.0 + 12.0 * q2 / (1.0 + q2) * 0.015625 / (0.015625 + x * x)
    return (
        0.635 / math.log(q2 / 0.04) * theta
        + 0.5747 / q2
        - 0.3534 / (0.09 + q2 * q2)
    )


def photonuclear_d2(
    a: float, mass: float, kinetic_energy: float, recoil_energy: float, q2: float
) -> float:
    """Doubly differential photonuclear cross-section in recoil energy and Q2."""
    cf = 2.603096e-35
    nucleon_mass = 0.931494
    energy = kinetic_energy + mass

    y = recoil_energy / energy
    x = 0.5 * q2 / (nucleon_mass * recoil_energy)
    f2p = photonuclear_f2_allm(x, q2)
    f2a = photonuclear_f2a_drss(x, f2p, a)
    r = photonuclear_r_whitlow(x, q2)

    dds = (
        1.0
        - y
        + 0.5 * (1.0 - 2.0 * mass * mass / q2) * (y * y + q2 / (energy * energy)) / (1.0 + r)
    ) / (q2 * q2) - 0.25 / (energy * energy * q2)

    return cf * f2a * dds / recoil_energy


def photonuclear_check(kinetic_energy: float, recoil_energy: float) -> bool:
    """True when the recoil energy is too small for the photonuclear model."""
    return recoil_energy < 1.0 or recoil_energy < 2e-3 * kinetic_energy


def analytic_del_ionisation_interactions(
    a0: float, a1: float, a2: float, wmax: float, wmin: float
) -> float:
    """Integral of q * (a0 + a1/q + a2/q^2) / q over [wmin, wmax] for close collisions."""
    return a0 * (wmax - wmin) + a1 * math.log(wmax / wmin) + a2 * (1.0 / wmin - 1.0 / wmax)


def analytic_cel_ionisation_interactions(
    a0: float, a1: float, a2: float, wmax: float, wmin: float
) -> float:
    """Integral of q * (a0 + a1/q + a2/q^2) over [wmin, wmax] for close collisions."""
    return (
        0.5 * a0 * (wmax * wmax - wmin * wmin)
        + a1 * (wmax - wmin)
        + a2 * math.log(wmax / wmin)
    )